"""
Scenario comparison: run analyze_property over named input variants and rank
them by cash-on-cash return.
"""

from dataclasses import dataclass
from typing import Any

from rental_calculator.calculator import analyze_property
from rental_calculator.models import CalculationResult, PropertyFinancialInputs
from rental_calculator.scoring import RatingBands

DEFAULT_DOWN_PAYMENT_OPTIONS: list[float] = [5.0, 10.0, 20.0, 25.0]


@dataclass
class RankedScenario:
    rank: int
    name: str
    monthly_cash_flow: float
    cash_on_cash_return: float
    cap_rate: float
    debt_coverage_ratio: float
    total_cash_invested: float
    rating: str
    result: CalculationResult


def compare_scenarios(
    base: PropertyFinancialInputs,
    variants: dict[str, dict[str, Any]],
    bands: RatingBands | None = None,
) -> list[RankedScenario]:
    """
    Apply each variant's field overrides to `base` and analyze it.
    Returns results sorted by cash-on-cash return, best first.
    Ties keep the order the variants were given in.
    """
    results: list[RankedScenario] = []

    for name, changes in variants.items():
        inputs = PropertyFinancialInputs(**{**base.model_dump(), **changes})
        result = analyze_property(inputs, bands)

        results.append(
            RankedScenario(
                rank=0,  # assigned after sorting
                name=name,
                monthly_cash_flow=result.cash_flow.monthly_cash_flow,
                cash_on_cash_return=result.returns.cash_on_cash_return,
                cap_rate=result.returns.cap_rate,
                debt_coverage_ratio=result.returns.debt_coverage_ratio,
                total_cash_invested=result.returns.total_cash_invested,
                rating=result.summary.rating,
                result=result,
            )
        )

    results.sort(key=lambda r: r.cash_on_cash_return, reverse=True)
    for i, r in enumerate(results):
        r.rank = i + 1

    return results


def compare_down_payments(
    base: PropertyFinancialInputs,
    down_payment_percents: list[float] | None = None,
    bands: RatingBands | None = None,
) -> list[RankedScenario]:
    """Rank the same property financed with different down payments."""
    if down_payment_percents is None:
        down_payment_percents = DEFAULT_DOWN_PAYMENT_OPTIONS
    variants = {f"{p:g}% down": {"down_payment_percent": p} for p in down_payment_percents}
    return compare_scenarios(base, variants, bands)
