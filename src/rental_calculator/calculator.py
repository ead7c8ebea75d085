"""
Core rental math: amortization, income, expenses, cash flow, returns.

Key conventions:
- Percentages are plain numbers scaled 0-100, money is in the listing currency.
- NOI never includes debt service.
- Management, repairs and capEx are charged on monthly RENT, vacancy on GROSS income.
- Any ratio with a zero denominator is 0, never NaN or Infinity.
"""

from loguru import logger

from rental_calculator.models import (
    AmortizationRow,
    CalculationResult,
    CashFlowResult,
    ExpenseResult,
    IncomeResult,
    MortgageResult,
    PropertyFinancialInputs,
    ReturnsResult,
)
from rental_calculator.ratios import safe_ratio
from rental_calculator.rules import evaluate_rules
from rental_calculator.scoring import RatingBands, compute_overall_score


def monthly_payment(
    principal: float,
    annual_rate_percent: float,
    term_years: int,
) -> float:
    """
    Fixed monthly principal + interest payment.

        r = rate / 100 / 12,  n = years * 12
        payment = P * r * (1+r)^n / ((1+r)^n - 1)

    Returns 0 for a non-positive principal and P / n at a zero rate.
    """
    if term_years <= 0:
        raise ValueError(f"term_years must be positive, got {term_years}")
    if principal <= 0:
        return 0.0
    n = term_years * 12
    r = annual_rate_percent / 100 / 12
    if 1 + r == 1:  # zero or negligible rate
        return principal / n
    growth = (1 + r) ** n
    return principal * r * growth / (growth - 1)


def remaining_balance(
    principal: float,
    annual_rate_percent: float,
    term_years: int,
    months_paid: int,
) -> float:
    """Outstanding balance after `months_paid` scheduled payments."""
    if principal <= 0:
        return 0.0
    n = term_years * 12
    months_paid = max(0, min(months_paid, n))
    payment = monthly_payment(principal, annual_rate_percent, term_years)
    r = annual_rate_percent / 100 / 12
    if 1 + r == 1:  # zero or negligible rate
        balance = principal - payment * months_paid
    else:
        growth = (1 + r) ** months_paid
        balance = principal * growth - payment * (growth - 1) / r
    return max(0.0, balance)


def build_amortization_schedule(
    principal: float,
    annual_rate_percent: float,
    term_years: int,
) -> list[AmortizationRow]:
    """
    Build a month-by-month amortization schedule.
    Returns an empty list when there is nothing to borrow.
    """
    payment = monthly_payment(principal, annual_rate_percent, term_years)
    if principal <= 0:
        return []

    r = annual_rate_percent / 100 / 12
    balance = principal
    schedule: list[AmortizationRow] = []

    for month in range(1, term_years * 12 + 1):
        interest = balance * r
        principal_part = payment - interest
        # Guard against floating-point overshoot on the last payment
        principal_part = min(principal_part, balance)

        schedule.append(
            AmortizationRow(
                month=month,
                balance=balance,
                interest=interest,
                principal=principal_part,
                payment=interest + principal_part,
            )
        )
        balance -= principal_part

    return schedule


def analyze_mortgage(inputs: PropertyFinancialInputs) -> MortgageResult:
    loan_amount = inputs.loan_amount
    payment = monthly_payment(loan_amount, inputs.interest_rate, inputs.loan_term_years)
    n = inputs.loan_term_years * 12

    first_month_interest = loan_amount * inputs.interest_rate / 100 / 12
    total_payments = payment * n

    return MortgageResult(
        loan_amount=loan_amount,
        down_payment_amount=inputs.down_payment_amount,
        monthly_payment=payment,
        annual_payment=payment * 12,
        total_payments=total_payments,
        total_interest=total_payments - loan_amount,
        first_month_interest=first_month_interest,
        first_month_principal=payment - first_month_interest,
    )


def compute_income(inputs: PropertyFinancialInputs) -> IncomeResult:
    gross = inputs.monthly_rent + inputs.other_monthly_income
    vacancy_loss = gross * inputs.vacancy_rate_percent / 100
    effective = gross - vacancy_loss

    return IncomeResult(
        gross_monthly_income=gross,
        gross_annual_income=gross * 12,
        vacancy_loss=vacancy_loss,
        effective_monthly_income=effective,
        effective_annual_income=effective * 12,
    )


def compute_expenses(inputs: PropertyFinancialInputs) -> ExpenseResult:
    """Monthly operating expenses by category. Debt service is not an expense here."""
    rent = inputs.monthly_rent

    property_tax = inputs.property_tax_annual / 12
    insurance = inputs.insurance_annual / 12
    management = rent * inputs.management_rate_percent / 100
    repairs = rent * inputs.repairs_rate_percent / 100
    capex = rent * inputs.capex_rate_percent / 100

    total = (
        property_tax
        + insurance
        + inputs.hoa_monthly
        + inputs.utilities_monthly
        + management
        + repairs
        + capex
    )

    return ExpenseResult(
        property_tax=property_tax,
        insurance=insurance,
        hoa=inputs.hoa_monthly,
        utilities=inputs.utilities_monthly,
        management=management,
        repairs=repairs,
        capex=capex,
        total_monthly=total,
        total_annual=total * 12,
    )


def compute_cash_flow(
    income: IncomeResult,
    expenses: ExpenseResult,
    mortgage: MortgageResult,
) -> CashFlowResult:
    monthly_noi = income.effective_monthly_income - expenses.total_monthly
    monthly_cash_flow = monthly_noi - mortgage.monthly_payment

    return CashFlowResult(
        monthly_noi=monthly_noi,
        annual_noi=monthly_noi * 12,
        monthly_cash_flow=monthly_cash_flow,
        annual_cash_flow=monthly_cash_flow * 12,
    )


def compute_returns(
    inputs: PropertyFinancialInputs,
    mortgage: MortgageResult,
    income: IncomeResult,
    expenses: ExpenseResult,
    cash_flow: CashFlowResult,
) -> ReturnsResult:
    """
    Return metrics. Cap rate depends only on NOI and price, never on financing.
    Total ROI adds the first year's principal paydown to the annual cash flow.
    Break-even and operating expense ratios use effective (post-vacancy) income.
    """
    price = inputs.purchase_price
    total_cash_invested = mortgage.down_payment_amount + inputs.closing_costs + inputs.rehab_costs

    first_year_principal = mortgage.loan_amount - remaining_balance(
        mortgage.loan_amount, inputs.interest_rate, inputs.loan_term_years, 12
    )

    return ReturnsResult(
        cap_rate=safe_ratio(cash_flow.annual_noi, price) * 100,
        cash_on_cash_return=safe_ratio(cash_flow.annual_cash_flow, total_cash_invested) * 100,
        gross_rent_multiplier=safe_ratio(price, income.gross_annual_income),
        debt_coverage_ratio=safe_ratio(cash_flow.annual_noi, mortgage.annual_payment),
        total_roi=safe_ratio(
            cash_flow.annual_cash_flow + max(first_year_principal, 0.0), total_cash_invested
        ) * 100,
        total_cash_invested=total_cash_invested,
        monthly_roi=safe_ratio(cash_flow.monthly_cash_flow, total_cash_invested) * 100,
        break_even_ratio=safe_ratio(
            expenses.total_annual + mortgage.annual_payment, income.effective_annual_income
        ) * 100,
        gross_yield=safe_ratio(income.gross_annual_income, price) * 100,
        operating_expense_ratio=safe_ratio(
            expenses.total_annual, income.effective_annual_income
        ) * 100,
        expense_to_income_ratio=safe_ratio(expenses.total_annual, income.gross_annual_income) * 100,
        debt_yield=safe_ratio(cash_flow.annual_noi, mortgage.loan_amount) * 100,
        loan_to_purchase_price=safe_ratio(mortgage.loan_amount, price) * 100,
    )


def analyze_property(
    inputs: PropertyFinancialInputs,
    bands: RatingBands | None = None,
) -> CalculationResult:
    """
    Full analysis: mortgage, income, expenses, cash flow, returns, rules, score.
    Pure function of `inputs` (and `bands`).
    """
    mortgage = analyze_mortgage(inputs)
    income = compute_income(inputs)
    expenses = compute_expenses(inputs)
    cash_flow = compute_cash_flow(income, expenses, mortgage)
    returns = compute_returns(inputs, mortgage, income, expenses, cash_flow)
    rules = evaluate_rules(inputs, income, expenses, returns)
    summary = compute_overall_score(returns, rules, bands)

    logger.debug(
        "Analyzed property",
        purchase_price=inputs.purchase_price,
        cap_rate=returns.cap_rate,
        cash_on_cash=returns.cash_on_cash_return,
        rating=summary.rating,
    )

    return CalculationResult(
        inputs=inputs,
        mortgage=mortgage,
        income=income,
        expenses=expenses,
        cash_flow=cash_flow,
        returns=returns,
        rules=rules,
        summary=summary,
    )
