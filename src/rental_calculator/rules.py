"""
Rule-of-thumb screening checks.

Every check is a state-free predicate returning a RuleCheck with the number it
tested (`actual`), the threshold (`target`) and a display message.

  1% / 2% rule : monthly rent >= purchase price * 1% (2%)
  50% rule     : operating expenses <= 50% of gross income (debt service excluded)
  Debt coverage: annual NOI / annual debt service >= 1.25
  70% rule     : purchase price <= ARV * 70% - repair costs (flip scenario)
"""

from rental_calculator.data.assumptions import (
    FIFTY_PERCENT_RULE_PERCENT,
    MIN_DEBT_COVERAGE_RATIO,
    ONE_PERCENT_RULE_PERCENT,
    SEVENTY_PERCENT_RULE_PERCENT,
    TWO_PERCENT_RULE_PERCENT,
)
from rental_calculator.models import (
    ExpenseResult,
    IncomeResult,
    PropertyFinancialInputs,
    ReturnsResult,
    RuleCheck,
    RulesResult,
)
from rental_calculator.ratios import safe_ratio


def _money(amount: float) -> str:
    return f"${amount:,.0f}"


def _rent_to_price_rule(
    name: str,
    percent: float,
    purchase_price: float,
    monthly_rent: float,
) -> RuleCheck:
    target = purchase_price * percent / 100
    passes = monthly_rent >= target
    verdict = "Passes" if passes else "Fails"
    op = ">=" if passes else "<"
    return RuleCheck(
        name=name,
        passes=passes,
        actual=monthly_rent,
        target=target,
        message=f"{verdict} {name} ({_money(monthly_rent)} {op} {_money(target)})",
    )


def check_one_percent_rule(purchase_price: float, monthly_rent: float) -> RuleCheck:
    return _rent_to_price_rule("1% rule", ONE_PERCENT_RULE_PERCENT, purchase_price, monthly_rent)


def check_two_percent_rule(purchase_price: float, monthly_rent: float) -> RuleCheck:
    return _rent_to_price_rule("2% rule", TWO_PERCENT_RULE_PERCENT, purchase_price, monthly_rent)


def check_fifty_percent_rule(
    total_monthly_expenses: float,
    gross_monthly_income: float,
) -> RuleCheck:
    """
    Operating expenses against half of gross income.
    The mortgage payment is deliberately not part of `total_monthly_expenses`.
    """
    target = gross_monthly_income * FIFTY_PERCENT_RULE_PERCENT / 100
    passes = total_monthly_expenses <= target
    expense_ratio = safe_ratio(total_monthly_expenses, gross_monthly_income) * 100
    if passes:
        message = f"Expenses are {expense_ratio:.1f}% of income (<= {FIFTY_PERCENT_RULE_PERCENT:.0f}%)"
    else:
        message = f"Expenses are {expense_ratio:.1f}% of income (> {FIFTY_PERCENT_RULE_PERCENT:.0f}%)"
    return RuleCheck(
        name="50% rule",
        passes=passes,
        actual=total_monthly_expenses,
        target=target,
        message=message,
    )


def check_debt_coverage(debt_coverage_ratio: float) -> RuleCheck:
    passes = debt_coverage_ratio >= MIN_DEBT_COVERAGE_RATIO
    if passes:
        message = (
            f"Strong debt coverage ({debt_coverage_ratio:.2f}x, "
            f">= {MIN_DEBT_COVERAGE_RATIO:.2f}x recommended)"
        )
    else:
        message = (
            f"Weak debt coverage ({debt_coverage_ratio:.2f}x, "
            f"< {MIN_DEBT_COVERAGE_RATIO:.2f}x recommended)"
        )
    return RuleCheck(
        name="Debt coverage",
        passes=passes,
        actual=debt_coverage_ratio,
        target=MIN_DEBT_COVERAGE_RATIO,
        message=message,
    )


def check_seventy_percent_rule(
    purchase_price: float,
    after_repair_value: float,
    repair_costs: float,
) -> RuleCheck:
    """Flip screen: max offer = ARV * 70% - repairs; pass if the price is at or below it."""
    max_offer = after_repair_value * SEVENTY_PERCENT_RULE_PERCENT / 100 - repair_costs
    passes = purchase_price <= max_offer
    verdict = "Passes" if passes else "Fails"
    op = "<=" if passes else ">"
    return RuleCheck(
        name="70% rule",
        passes=passes,
        actual=purchase_price,
        target=max_offer,
        message=f"{verdict} 70% rule (price {_money(purchase_price)} {op} max offer {_money(max_offer)})",
    )


def evaluate_rules(
    inputs: PropertyFinancialInputs,
    income: IncomeResult,
    expenses: ExpenseResult,
    returns: ReturnsResult,
) -> RulesResult:
    seventy = None
    if inputs.after_repair_value is not None:
        seventy = check_seventy_percent_rule(
            inputs.purchase_price, inputs.after_repair_value, inputs.rehab_costs
        )

    return RulesResult(
        one_percent=check_one_percent_rule(inputs.purchase_price, inputs.monthly_rent),
        two_percent=check_two_percent_rule(inputs.purchase_price, inputs.monthly_rent),
        fifty_percent=check_fifty_percent_rule(
            expenses.total_monthly, income.gross_monthly_income
        ),
        debt_coverage=check_debt_coverage(returns.debt_coverage_ratio),
        seventy_percent=seventy,
    )
