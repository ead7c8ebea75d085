"""
Multi-year buy-and-hold projection.

Year-by-year conventions:
- Property value appreciates at each year end (year 1 value = price * (1 + a)).
- Rent and other income grow from year 2 onward; rent-based expenses
  (management, repairs, capEx) follow rent.
- Fixed expenses (tax, insurance, HOA, utilities) grow at the expense rate.
- The loan amortizes monthly; debt service stops once the term is over.
- Sale figures assume a sale at the end of that year.
- Depreciation is straight-line on the building share of the purchase price.
  Taxable income is NOI - interest - depreciation; a loss is a tax saving.
"""

from loguru import logger

from rental_calculator.calculator import monthly_payment
from rental_calculator.data.assumptions import (
    DEFAULT_APPRECIATION_RATE_PERCENT,
    DEFAULT_EXPENSE_GROWTH_RATE_PERCENT,
    DEFAULT_RENT_GROWTH_RATE_PERCENT,
    DEFAULT_TAX_RATE_PERCENT,
    DEPRECIABLE_SHARE_PERCENT,
    DEPRECIATION_YEARS,
)
from rental_calculator.models import PropertyFinancialInputs, YearProjection
from rental_calculator.ratios import safe_ratio


def _rate_or_default(value: float | None, default: float) -> float:
    return (default if value is None else value) / 100


def _depreciation(purchase_price: float, year: int) -> float:
    """Annual allowance; the final partial year gets its fraction."""
    annual = purchase_price * DEPRECIABLE_SHARE_PERCENT / 100 / DEPRECIATION_YEARS
    share = min(1.0, max(0.0, DEPRECIATION_YEARS - (year - 1)))
    return annual * share


def _annualized_return(multiple: float, years: int) -> float:
    if multiple <= 0:
        return 0.0
    return (multiple ** (1 / years) - 1) * 100


def project_buy_and_hold(
    inputs: PropertyFinancialInputs,
    years: int = 30,
    tax_rate_percent: float = DEFAULT_TAX_RATE_PERCENT,
) -> list[YearProjection]:
    """Return one YearProjection per year for `years` years of ownership."""
    if years <= 0:
        raise ValueError(f"years must be positive, got {years}")
    if not 0 <= tax_rate_percent <= 100:
        raise ValueError(f"tax_rate_percent must be between 0 and 100, got {tax_rate_percent}")

    appreciation = _rate_or_default(inputs.appreciation_rate_percent, DEFAULT_APPRECIATION_RATE_PERCENT)
    rent_growth = _rate_or_default(inputs.rent_growth_rate_percent, DEFAULT_RENT_GROWTH_RATE_PERCENT)
    expense_growth = _rate_or_default(
        inputs.expense_growth_rate_percent, DEFAULT_EXPENSE_GROWTH_RATE_PERCENT
    )

    price = inputs.purchase_price
    total_cash_invested = inputs.down_payment_amount + inputs.closing_costs + inputs.rehab_costs

    balance = inputs.loan_amount
    payment = monthly_payment(balance, inputs.interest_rate, inputs.loan_term_years)
    monthly_rate = inputs.interest_rate / 100 / 12
    term_months = inputs.loan_term_years * 12

    rent_based_rate = (
        inputs.management_rate_percent
        + inputs.repairs_rate_percent
        + inputs.capex_rate_percent
    ) / 100
    fixed_annual = (
        inputs.property_tax_annual
        + inputs.insurance_annual
        + (inputs.hoa_monthly + inputs.utilities_monthly) * 12
    )

    cumulative_cash_flow = 0.0
    projections: list[YearProjection] = []

    for year in range(1, years + 1):
        rent_factor = (1 + rent_growth) ** (year - 1)
        expense_factor = (1 + expense_growth) ** (year - 1)

        annual_rent = inputs.monthly_rent * 12 * rent_factor
        gross_income = annual_rent + inputs.other_monthly_income * 12 * rent_factor
        vacancy_loss = gross_income * inputs.vacancy_rate_percent / 100
        effective_income = gross_income - vacancy_loss
        operating_expenses = fixed_annual * expense_factor + annual_rent * rent_based_rate
        noi = effective_income - operating_expenses

        starting_balance = balance
        principal_paid = 0.0
        interest_paid = 0.0
        for month in range((year - 1) * 12 + 1, year * 12 + 1):
            if month > term_months or balance <= 0:
                break
            interest = balance * monthly_rate
            principal_part = min(payment - interest, balance)
            interest_paid += interest
            principal_paid += principal_part
            balance -= principal_part
        balance = max(balance, 0.0)
        debt_service = principal_paid + interest_paid

        cash_flow = noi - debt_service
        cumulative_cash_flow += cash_flow

        depreciation = _depreciation(price, year)
        taxable_income = noi - interest_paid - depreciation
        income_tax = taxable_income * tax_rate_percent / 100

        property_value = price * (1 + appreciation) ** year
        equity = property_value - balance
        selling_costs = property_value * inputs.selling_costs_percent / 100
        sale_proceeds = property_value - selling_costs - balance
        total_return = sale_proceeds + cumulative_cash_flow
        equity_multiple = safe_ratio(total_return, total_cash_invested)

        projections.append(
            YearProjection(
                year=year,
                gross_income=gross_income,
                vacancy_loss=vacancy_loss,
                effective_income=effective_income,
                operating_expenses=operating_expenses,
                noi=noi,
                debt_service=debt_service,
                cash_flow=cash_flow,
                cumulative_cash_flow=cumulative_cash_flow,
                principal_paid=principal_paid,
                interest_paid=interest_paid,
                loan_balance=balance,
                property_value=property_value,
                equity=equity,
                ltv_ratio=safe_ratio(balance, property_value) * 100,
                selling_costs=selling_costs,
                sale_proceeds=sale_proceeds,
                total_profit=total_return - total_cash_invested,
                cap_rate=safe_ratio(noi, price) * 100,
                cap_rate_market=safe_ratio(noi, property_value) * 100,
                cash_on_cash=safe_ratio(cash_flow, total_cash_invested) * 100,
                return_on_equity=safe_ratio(cash_flow, equity) * 100 if equity > 0 else 0.0,
                roi=safe_ratio(cash_flow + principal_paid, total_cash_invested) * 100,
                annualized_return=_annualized_return(equity_multiple, year),
                equity_multiple=equity_multiple,
                debt_coverage_ratio=safe_ratio(noi, debt_service),
                debt_yield=safe_ratio(noi, starting_balance) * 100,
                break_even_ratio=safe_ratio(operating_expenses + debt_service, effective_income) * 100,
                rent_to_value=safe_ratio(gross_income / 12, property_value) * 100,
                gross_rent_multiplier=safe_ratio(property_value, gross_income),
                depreciation=depreciation,
                taxable_income=taxable_income,
                income_tax=income_tax,
                post_tax_cash_flow=cash_flow - income_tax,
            )
        )

    logger.debug("Projected buy-and-hold", years=years, final_equity=projections[-1].equity)
    return projections
