"""
Overall 0-10 investment score and its qualitative rating.

  Cap rate      : >= 10% -> 3, >= 8% -> 2, >= 6% -> 1
  Cash-on-cash  : >= 12% -> 3, >= 8% -> 2, >= 5% -> 1
  1% rule pass  : 2
  Debt coverage : 2

Rating bands are applied to score / max_score * 100 and can be overridden.
"""

from pydantic import BaseModel, model_validator

from rental_calculator.data.assumptions import (
    CAP_RATE_POINTS,
    CASH_ON_CASH_POINTS,
    DEBT_COVERAGE_POINTS,
    ONE_PERCENT_RULE_POINTS,
    RATING_EXCELLENT_PERCENT,
    RATING_FAIR_PERCENT,
    RATING_GOOD_PERCENT,
)
from rental_calculator.models import ReturnsResult, RulesResult, ScoreSummary

MAX_SCORE = (
    CAP_RATE_POINTS[0][1]
    + CASH_ON_CASH_POINTS[0][1]
    + ONE_PERCENT_RULE_POINTS
    + DEBT_COVERAGE_POINTS
)


class RatingBands(BaseModel):
    excellent: float = RATING_EXCELLENT_PERCENT
    good: float = RATING_GOOD_PERCENT
    fair: float = RATING_FAIR_PERCENT

    @model_validator(mode="after")
    def validate_order(self) -> "RatingBands":
        if not self.excellent >= self.good >= self.fair >= 0:
            raise ValueError(
                "rating bands must satisfy excellent >= good >= fair >= 0, "
                f"got {self.excellent}/{self.good}/{self.fair}"
            )
        return self

    def rate(self, percentage: float) -> str:
        if percentage >= self.excellent:
            return "Excellent"
        if percentage >= self.good:
            return "Good"
        if percentage >= self.fair:
            return "Fair"
        return "Poor"


def tier_points(value: float, table: list[tuple[float, int]]) -> int:
    """Points for the highest threshold `value` reaches, 0 if none."""
    for threshold, points in table:
        if value >= threshold:
            return points
    return 0


def compute_overall_score(
    returns: ReturnsResult,
    rules: RulesResult,
    bands: RatingBands | None = None,
) -> ScoreSummary:
    bands = bands or RatingBands()

    score = tier_points(returns.cap_rate, CAP_RATE_POINTS)
    score += tier_points(returns.cash_on_cash_return, CASH_ON_CASH_POINTS)
    if rules.one_percent.passes:
        score += ONE_PERCENT_RULE_POINTS
    if rules.debt_coverage.passes:
        score += DEBT_COVERAGE_POINTS

    percentage = score / MAX_SCORE * 100

    return ScoreSummary(
        score=score,
        max_score=MAX_SCORE,
        percentage=percentage,
        rating=bands.rate(percentage),
    )
