"""
Quick score for listing cards: the full analysis with every assumption
defaulted, condensed to a label and a few rounded headline numbers.
"""

from rental_calculator.calculator import analyze_property
from rental_calculator.data.assumptions import (
    QUICK_GOOD_MIN_CAP_RATE,
    QUICK_GOOD_MIN_CASH_FLOW,
    QUICK_GOOD_MIN_COC,
    QUICK_OKAY_MIN_CAP_RATE,
)
from rental_calculator.estimates import resolve_inputs
from rental_calculator.models import MarketData, QuickScore
from rental_calculator.rules import check_one_percent_rule


def quick_score(
    purchase_price: float,
    market: MarketData | None = None,
) -> QuickScore:
    """
    Label a listing "good", "okay" or "poor" from its price and whatever
    market data is known. Without a rent figure the label is "unknown".

      good : passes the 1% rule, cash flow > $200/month and cap rate > 8%
      okay : cash flow > 0 and cap rate > 5%
      poor : anything else
    """
    inputs, sources = resolve_inputs(purchase_price, market)
    one_percent = check_one_percent_rule(inputs.purchase_price, inputs.monthly_rent)

    if inputs.monthly_rent <= 0:
        return QuickScore(
            label="unknown",
            reasons=["Rent data unavailable"],
            monthly_cash_flow=0.0,
            annual_cash_flow=0.0,
            cap_rate=0.0,
            cash_on_cash_return=0.0,
            passes_one_percent=False,
            one_percent_target=round(one_percent.target),
            monthly_rent=0.0,
            monthly_expenses=0.0,
            monthly_mortgage=0.0,
            sources=sources,
        )

    result = analyze_property(inputs)
    cash_flow = result.cash_flow.monthly_cash_flow
    cap_rate = result.returns.cap_rate
    coc = result.returns.cash_on_cash_return

    reasons: list[str] = []
    if one_percent.passes:
        reasons.append("Passes 1% rule")
    if cash_flow > QUICK_GOOD_MIN_CASH_FLOW:
        reasons.append("Positive cash flow")
    if cap_rate > QUICK_GOOD_MIN_CAP_RATE:
        reasons.append("High cap rate")
    if coc > QUICK_GOOD_MIN_COC:
        reasons.append("Good CoC return")

    if one_percent.passes and cash_flow > QUICK_GOOD_MIN_CASH_FLOW and cap_rate > QUICK_GOOD_MIN_CAP_RATE:
        label = "good"
    elif cash_flow > 0 and cap_rate > QUICK_OKAY_MIN_CAP_RATE:
        label = "okay"
    else:
        label = "poor"
        reasons = ["Low returns", "May not cash flow"]

    return QuickScore(
        label=label,
        reasons=reasons,
        monthly_cash_flow=round(cash_flow),
        annual_cash_flow=round(result.cash_flow.annual_cash_flow),
        cap_rate=round(cap_rate, 1),
        cash_on_cash_return=round(coc, 1),
        passes_one_percent=one_percent.passes,
        one_percent_target=round(one_percent.target),
        monthly_rent=inputs.monthly_rent,
        # Operating expenses plus the vacancy allowance
        monthly_expenses=round(result.expenses.total_monthly + result.income.vacancy_loss),
        monthly_mortgage=round(result.mortgage.monthly_payment),
        sources=sources,
    )
