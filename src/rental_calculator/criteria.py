"""
Investor targets: check a calculation against minimum return targets and
compute a weighted 0-100 profile score for one of the scoring presets.
"""

from dataclasses import dataclass, field

from pydantic import BaseModel, field_validator

from rental_calculator.data.assumptions import DEFAULT_PRESET, SCORING_PRESETS
from rental_calculator.models import CalculationResult


class InvestmentTargets(BaseModel):
    min_cap_rate: float = 6.0              # percent
    min_cash_on_cash: float = 8.0          # percent
    min_monthly_cash_flow: float = 200.0
    min_dscr: float = 1.25

    @field_validator("min_cap_rate", "min_cash_on_cash", "min_monthly_cash_flow", "min_dscr")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("targets cannot be negative")
        return v

    @classmethod
    def from_preset(cls, name: str) -> "InvestmentTargets":
        if name not in SCORING_PRESETS:
            raise ValueError(f"preset must be one of {list(SCORING_PRESETS)}, got {name!r}")
        return cls(**SCORING_PRESETS[name]["thresholds"])


@dataclass
class CriteriaCheck:
    meets: bool
    reasons: list[str] = field(default_factory=list)


def meets_investment_criteria(
    result: CalculationResult,
    targets: InvestmentTargets | None = None,
) -> CriteriaCheck:
    """A target of 0 is treated as "no requirement"."""
    targets = targets or InvestmentTargets()
    returns = result.returns
    cash_flow = result.cash_flow.monthly_cash_flow
    reasons: list[str] = []

    if targets.min_cap_rate > 0 and returns.cap_rate < targets.min_cap_rate:
        reasons.append(
            f"Cap rate ({returns.cap_rate:.1f}%) below target ({targets.min_cap_rate:g}%)"
        )
    if targets.min_cash_on_cash > 0 and returns.cash_on_cash_return < targets.min_cash_on_cash:
        reasons.append(
            f"Cash-on-cash ({returns.cash_on_cash_return:.1f}%) below target "
            f"({targets.min_cash_on_cash:g}%)"
        )
    if targets.min_monthly_cash_flow > 0 and cash_flow < targets.min_monthly_cash_flow:
        reasons.append(
            f"Cash flow (${cash_flow:,.0f}) below target (${targets.min_monthly_cash_flow:,.0f})"
        )
    if targets.min_dscr > 0 and returns.debt_coverage_ratio < targets.min_dscr:
        reasons.append(
            f"DSCR ({returns.debt_coverage_ratio:.2f}) below target ({targets.min_dscr:g})"
        )

    return CriteriaCheck(meets=not reasons, reasons=reasons)


def _tier(value: float, excellent: float, good: float, fair: float, penalty: int) -> int:
    if value >= excellent:
        return 25
    if value >= good:
        return 15
    if value >= fair:
        return 5
    return penalty


def profile_score(result: CalculationResult, preset: str = DEFAULT_PRESET) -> int:
    """
    Weighted 0-100 score against a preset, starting from a neutral 50.

    Cap rate / cash-on-cash : 1.5x target -> +25, target -> +15, 0.75x -> +5, else -10
    Cash flow               : 2x target   -> +25, target -> +15, >= 0 -> +5, else -15
    DSCR                    : 1.5x target -> +25, target -> +15, >= 1.0 -> +5, else -15
    Each adjustment is multiplied by the preset's weight for that metric.
    """
    if preset not in SCORING_PRESETS:
        raise ValueError(f"preset must be one of {list(SCORING_PRESETS)}, got {preset!r}")
    weights = SCORING_PRESETS[preset]["weights"]
    t = InvestmentTargets.from_preset(preset)

    returns = result.returns
    cash_flow = result.cash_flow.monthly_cash_flow
    score = 50.0

    points = _tier(returns.cap_rate, t.min_cap_rate * 1.5, t.min_cap_rate, t.min_cap_rate * 0.75, -10)
    score += points * weights["cap_rate"]

    points = _tier(
        returns.cash_on_cash_return,
        t.min_cash_on_cash * 1.5,
        t.min_cash_on_cash,
        t.min_cash_on_cash * 0.75,
        -10,
    )
    score += points * weights["cash_on_cash"]

    points = _tier(cash_flow, t.min_monthly_cash_flow * 2, t.min_monthly_cash_flow, 0.0, -15)
    score += points * weights["cash_flow"]

    points = _tier(returns.debt_coverage_ratio, t.min_dscr * 1.5, t.min_dscr, 1.0, -15)
    score += points * weights["dscr"]

    return max(0, min(100, round(score)))
