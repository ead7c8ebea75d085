# src/rental_calculator/config.py
from typing import Any

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from rental_calculator.data.assumptions import (
    RATING_EXCELLENT_PERCENT,
    RATING_FAIR_PERCENT,
    RATING_GOOD_PERCENT,
)
from rental_calculator.scoring import RatingBands


class AppConfig(BaseSettings):
    # Logging
    LOG_LEVEL: str = Field(default="WARNING")

    # Rating bands for the overall score (percent of max score)
    RATING_EXCELLENT_PCT: float = Field(default=RATING_EXCELLENT_PERCENT)
    RATING_GOOD_PCT: float = Field(default=RATING_GOOD_PERCENT)
    RATING_FAIR_PCT: float = Field(default=RATING_FAIR_PERCENT)

    # Export defaults
    REPORT_PATH: str = Field(default="rental_analysis.txt")
    CHART_PATH: str = Field(default="rental_projection.png")
    PROJECTION_YEARS: int = Field(default=30)

    model_config = SettingsConfigDict(
        env_prefix="RENTAL_CALC_",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("LOG_LEVEL", mode="before")
    @classmethod
    def _upper_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("PROJECTION_YEARS")
    @classmethod
    def _years_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("PROJECTION_YEARS must be > 0")
        return v

    @model_validator(mode="after")
    def _bands_ordered(self) -> "AppConfig":
        self.rating_bands()
        return self

    def rating_bands(self) -> RatingBands:
        return RatingBands(
            excellent=self.RATING_EXCELLENT_PCT,
            good=self.RATING_GOOD_PCT,
            fair=self.RATING_FAIR_PCT,
        )


config = AppConfig()
