"""
Input resolution: turn a listing price, optional market data and user overrides
into a complete PropertyFinancialInputs.

Priority for every field:
  1. caller override
  2. market data (actual tax bill, market rent, live mortgage rate, ...)
  3. formula estimate (property tax, insurance, closing costs from a percent)
  4. fixed default from data.assumptions

None always means "not supplied"; an explicit 0 is kept as a real value.
"""

from typing import Any

from loguru import logger

from rental_calculator.data.assumptions import (
    DEFAULT_APPRECIATION_RATE_PERCENT,
    DEFAULT_CAPEX_RATE_PERCENT,
    DEFAULT_DOWN_PAYMENT_PERCENT,
    DEFAULT_EXPENSE_GROWTH_RATE_PERCENT,
    DEFAULT_INTEREST_RATE,
    DEFAULT_LOAN_TERM_YEARS,
    DEFAULT_MANAGEMENT_RATE_PERCENT,
    DEFAULT_RENT_GROWTH_RATE_PERCENT,
    DEFAULT_REPAIRS_RATE_PERCENT,
    DEFAULT_SELLING_COSTS_PERCENT,
    DEFAULT_VACANCY_RATE_PERCENT,
    INSURANCE_BASE_ANNUAL,
    INSURANCE_PER_THOUSAND,
    PROPERTY_TAX_RATE_PERCENT,
)
from rental_calculator.models import MarketData, PropertyFinancialInputs

SOURCE_OVERRIDE = "override"
SOURCE_MARKET = "market"
SOURCE_ESTIMATE = "estimate"
SOURCE_DEFAULT = "default"

# Fields that fall straight through to a constant when not overridden
_CONSTANT_DEFAULTS: dict[str, Any] = {
    "rehab_costs": 0.0,
    "down_payment_percent": DEFAULT_DOWN_PAYMENT_PERCENT,
    "loan_term_years": DEFAULT_LOAN_TERM_YEARS,
    "other_monthly_income": 0.0,
    "utilities_monthly": 0.0,
    "management_rate_percent": DEFAULT_MANAGEMENT_RATE_PERCENT,
    "repairs_rate_percent": DEFAULT_REPAIRS_RATE_PERCENT,
    "capex_rate_percent": DEFAULT_CAPEX_RATE_PERCENT,
    "appreciation_rate_percent": DEFAULT_APPRECIATION_RATE_PERCENT,
    "rent_growth_rate_percent": DEFAULT_RENT_GROWTH_RATE_PERCENT,
    "expense_growth_rate_percent": DEFAULT_EXPENSE_GROWTH_RATE_PERCENT,
    "selling_costs_percent": DEFAULT_SELLING_COSTS_PERCENT,
    "after_repair_value": None,
}

# Fields market data can supply, with the constant used when it cannot
_MARKET_DEFAULTS: dict[str, float] = {
    "monthly_rent": 0.0,
    "vacancy_rate_percent": DEFAULT_VACANCY_RATE_PERCENT,
    "hoa_monthly": 0.0,
    "interest_rate": DEFAULT_INTEREST_RATE,
}


def estimate_property_tax(purchase_price: float) -> float:
    """Annual property tax: 1.1% of price (national average)."""
    return purchase_price * PROPERTY_TAX_RATE_PERCENT / 100


def estimate_insurance(purchase_price: float) -> float:
    """Annual insurance: $1,200 base + $3.50 per $1,000 of price."""
    return INSURANCE_BASE_ANNUAL + purchase_price / 1_000 * INSURANCE_PER_THOUSAND


def resolve_inputs(
    purchase_price: float,
    market: MarketData | None = None,
    closing_costs_percent: float | None = None,
    **overrides: Any,
) -> tuple[PropertyFinancialInputs, dict[str, str]]:
    """
    Build calculator inputs for a listing.

    Args:
        purchase_price:        Listing or offer price, >= 0.
        market:                Values from external data sources, if any.
        closing_costs_percent: Closing costs as % of price, used when no
                               `closing_costs` amount is overridden.
        **overrides:           Any PropertyFinancialInputs field.

    Returns:
        inputs:   Validated PropertyFinancialInputs.
        sources:  Dict mapping each field -> where its value came from.
    """
    if purchase_price is None or purchase_price < 0:
        raise ValueError(f"purchase_price is required and cannot be negative, got {purchase_price}")

    known = set(PropertyFinancialInputs.model_fields) - {"purchase_price"}
    unknown = set(overrides) - known
    if unknown:
        raise ValueError(f"unknown input fields: {sorted(unknown)}")

    market = market or MarketData()
    values: dict[str, Any] = {"purchase_price": purchase_price}
    sources: dict[str, str] = {"purchase_price": SOURCE_OVERRIDE}

    def pick(field: str, market_value: Any, fallback: Any, fallback_source: str) -> None:
        if overrides.get(field) is not None:
            values[field] = overrides[field]
            sources[field] = SOURCE_OVERRIDE
        elif market_value is not None:
            values[field] = market_value
            sources[field] = SOURCE_MARKET
        else:
            values[field] = fallback
            sources[field] = fallback_source

    for field, fallback in _MARKET_DEFAULTS.items():
        pick(field, getattr(market, field), fallback, SOURCE_DEFAULT)

    pick(
        "property_tax_annual",
        market.property_tax_annual,
        estimate_property_tax(purchase_price),
        SOURCE_ESTIMATE,
    )
    pick(
        "insurance_annual",
        market.insurance_annual,
        estimate_insurance(purchase_price),
        SOURCE_ESTIMATE,
    )

    if closing_costs_percent is not None:
        pick("closing_costs", None, purchase_price * closing_costs_percent / 100, SOURCE_ESTIMATE)
    else:
        pick("closing_costs", None, 0.0, SOURCE_DEFAULT)

    for field, fallback in _CONSTANT_DEFAULTS.items():
        pick(field, None, fallback, SOURCE_DEFAULT)

    inputs = PropertyFinancialInputs(**values)
    logger.debug(
        "Resolved calculator inputs",
        purchase_price=purchase_price,
        from_market=sorted(f for f, s in sources.items() if s == SOURCE_MARKET),
    )
    return inputs, sources
