"""Pydantic v2 models for the rental property calculator."""

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from rental_calculator.data.assumptions import DEFAULT_SELLING_COSTS_PERCENT

_PERCENT_FIELDS = (
    "down_payment_percent",
    "vacancy_rate_percent",
    "management_rate_percent",
    "repairs_rate_percent",
    "capex_rate_percent",
    "selling_costs_percent",
)

_NON_NEGATIVE_FIELDS = (
    "closing_costs",
    "rehab_costs",
    "interest_rate",
    "monthly_rent",
    "other_monthly_income",
    "property_tax_annual",
    "insurance_annual",
    "hoa_monthly",
    "utilities_monthly",
)


class PropertyFinancialInputs(BaseModel):
    model_config = ConfigDict(frozen=True)

    purchase_price: float              # Contract price, >= 0
    closing_costs: float = 0.0         # Closing costs paid in cash
    rehab_costs: float = 0.0           # Rehab / repair budget paid in cash

    down_payment_percent: float        # 0-100
    interest_rate: float               # Annual rate in percent (7.0 = 7%)
    loan_term_years: int               # Amortization term

    monthly_rent: float
    other_monthly_income: float = 0.0  # Laundry, parking, storage ...

    property_tax_annual: float
    insurance_annual: float
    hoa_monthly: float = 0.0
    utilities_monthly: float = 0.0

    vacancy_rate_percent: float        # Against gross monthly income
    management_rate_percent: float     # Against monthly rent
    repairs_rate_percent: float        # Against monthly rent
    capex_rate_percent: float          # Against monthly rent

    appreciation_rate_percent: float | None = None
    rent_growth_rate_percent: float | None = None
    expense_growth_rate_percent: float | None = None
    selling_costs_percent: float = DEFAULT_SELLING_COSTS_PERCENT

    after_repair_value: float | None = None   # Flip scenario, enables the 70% rule

    @field_validator("purchase_price")
    @classmethod
    def validate_price(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"purchase_price cannot be negative, got {v}")
        return v

    @field_validator("loan_term_years")
    @classmethod
    def validate_term(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("loan_term_years must be positive")
        return v

    @field_validator(*_PERCENT_FIELDS)
    @classmethod
    def validate_percent(cls, v: float) -> float:
        if not 0 <= v <= 100:
            raise ValueError(f"percentage must be between 0 and 100, got {v}")
        return v

    @field_validator(*_NON_NEGATIVE_FIELDS)
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError(f"value cannot be negative, got {v}")
        return v

    @model_validator(mode="after")
    def validate_after_repair_value(self) -> "PropertyFinancialInputs":
        if self.after_repair_value is not None and self.after_repair_value < 0:
            raise ValueError("after_repair_value cannot be negative")
        return self

    @property
    def down_payment_amount(self) -> float:
        return self.purchase_price * self.down_payment_percent / 100

    @property
    def loan_amount(self) -> float:
        return self.purchase_price - self.down_payment_amount


class MarketData(BaseModel):
    """Values supplied by listing, rent and rate services. None = unknown."""

    model_config = ConfigDict(frozen=True)

    monthly_rent: float | None = None
    property_tax_annual: float | None = None
    insurance_annual: float | None = None
    vacancy_rate_percent: float | None = None
    hoa_monthly: float | None = None
    interest_rate: float | None = None     # Current 30-year fixed rate, percent


class AmortizationRow(BaseModel):
    month: int
    balance: float       # Outstanding principal at start of month
    interest: float
    principal: float
    payment: float


class MortgageResult(BaseModel):
    loan_amount: float
    down_payment_amount: float
    monthly_payment: float
    annual_payment: float
    total_payments: float
    total_interest: float
    first_month_interest: float
    first_month_principal: float


class IncomeResult(BaseModel):
    gross_monthly_income: float
    gross_annual_income: float
    vacancy_loss: float
    effective_monthly_income: float
    effective_annual_income: float


class ExpenseResult(BaseModel):
    property_tax: float      # Monthly amounts throughout
    insurance: float
    hoa: float
    utilities: float
    management: float
    repairs: float
    capex: float
    total_monthly: float
    total_annual: float

    def breakdown(self) -> dict[str, float]:
        return {
            "property_tax": self.property_tax,
            "insurance": self.insurance,
            "hoa": self.hoa,
            "utilities": self.utilities,
            "management": self.management,
            "repairs": self.repairs,
            "capex": self.capex,
        }


class CashFlowResult(BaseModel):
    monthly_noi: float
    annual_noi: float
    monthly_cash_flow: float
    annual_cash_flow: float


class ReturnsResult(BaseModel):
    cap_rate: float
    cash_on_cash_return: float
    gross_rent_multiplier: float
    debt_coverage_ratio: float
    total_roi: float                 # First-year cash flow + principal paydown
    total_cash_invested: float
    monthly_roi: float
    break_even_ratio: float          # (opex + debt service) / effective income, %
    gross_yield: float
    operating_expense_ratio: float   # opex / effective income, %
    expense_to_income_ratio: float   # opex / gross income, %
    debt_yield: float                # annual NOI / loan amount, %
    loan_to_purchase_price: float    # loan / price, %


class RuleCheck(BaseModel):
    name: str
    passes: bool
    actual: float
    target: float
    message: str


class RulesResult(BaseModel):
    one_percent: RuleCheck
    two_percent: RuleCheck
    fifty_percent: RuleCheck
    debt_coverage: RuleCheck
    seventy_percent: RuleCheck | None = None


class ScoreSummary(BaseModel):
    score: int
    max_score: int
    percentage: float
    rating: str              # "Poor" | "Fair" | "Good" | "Excellent"


class CalculationResult(BaseModel):
    inputs: PropertyFinancialInputs
    mortgage: MortgageResult
    income: IncomeResult
    expenses: ExpenseResult
    cash_flow: CashFlowResult
    returns: ReturnsResult
    rules: RulesResult
    summary: ScoreSummary


class QuickScore(BaseModel):
    label: str                       # "good" | "okay" | "poor" | "unknown"
    reasons: list[str]
    monthly_cash_flow: float
    annual_cash_flow: float
    cap_rate: float
    cash_on_cash_return: float
    passes_one_percent: bool
    one_percent_target: float
    monthly_rent: float
    monthly_expenses: float
    monthly_mortgage: float
    sources: dict[str, str]          # field -> "override" | "market" | "estimate" | "default"


class YearProjection(BaseModel):
    year: int
    gross_income: float
    vacancy_loss: float
    effective_income: float
    operating_expenses: float
    noi: float
    debt_service: float
    cash_flow: float
    cumulative_cash_flow: float
    principal_paid: float
    interest_paid: float
    loan_balance: float
    property_value: float
    equity: float
    ltv_ratio: float             # loan balance / current value, %
    selling_costs: float
    sale_proceeds: float
    total_profit: float
    cap_rate: float              # NOI over purchase price, %
    cap_rate_market: float       # NOI over current value, %
    cash_on_cash: float
    return_on_equity: float      # cash flow / equity, %
    roi: float                   # (cash flow + principal paid) / cash invested, %
    annualized_return: float     # compound yearly return if sold this year, %
    equity_multiple: float
    debt_coverage_ratio: float
    debt_yield: float            # NOI / loan balance at year start, %
    break_even_ratio: float      # (opex + debt service) / effective income, %
    rent_to_value: float         # monthly gross income / current value, %
    gross_rent_multiplier: float  # current value / gross income
    depreciation: float
    taxable_income: float        # NOI - interest - depreciation
    income_tax: float            # negative = tax saved against other income
    post_tax_cash_flow: float
