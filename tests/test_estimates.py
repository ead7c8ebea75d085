"""
Input resolution: override > market > estimate > default.
"""

import pytest

from rental_calculator.data.assumptions import (
    DEFAULT_DOWN_PAYMENT_PERCENT,
    DEFAULT_INTEREST_RATE,
    DEFAULT_LOAN_TERM_YEARS,
    DEFAULT_VACANCY_RATE_PERCENT,
)
from rental_calculator.estimates import (
    SOURCE_DEFAULT,
    SOURCE_ESTIMATE,
    SOURCE_MARKET,
    SOURCE_OVERRIDE,
    estimate_insurance,
    estimate_property_tax,
    resolve_inputs,
)
from rental_calculator.models import MarketData


# ── Formula estimates ─────────────────────────────────────────────────────────

def test_property_tax_estimate():
    """1.1% of price per year."""
    assert estimate_property_tax(300_000) == pytest.approx(3_300)


def test_insurance_estimate():
    """$1,200 base + $3.50 per $1,000 of price."""
    assert estimate_insurance(300_000) == pytest.approx(2_250)
    assert estimate_insurance(0) == pytest.approx(1_200)


# ── Resolution priority ───────────────────────────────────────────────────────

class TestResolveInputs:
    def test_defaults_and_estimates(self):
        inputs, sources = resolve_inputs(300_000)

        assert inputs.down_payment_percent == DEFAULT_DOWN_PAYMENT_PERCENT
        assert inputs.interest_rate == DEFAULT_INTEREST_RATE
        assert inputs.loan_term_years == DEFAULT_LOAN_TERM_YEARS
        assert inputs.vacancy_rate_percent == DEFAULT_VACANCY_RATE_PERCENT
        assert inputs.monthly_rent == 0.0
        assert inputs.property_tax_annual == pytest.approx(3_300)
        assert inputs.insurance_annual == pytest.approx(2_250)
        assert inputs.closing_costs == 0.0
        assert inputs.after_repair_value is None

        assert sources["purchase_price"] == SOURCE_OVERRIDE
        assert sources["property_tax_annual"] == SOURCE_ESTIMATE
        assert sources["insurance_annual"] == SOURCE_ESTIMATE
        assert sources["interest_rate"] == SOURCE_DEFAULT
        assert sources["monthly_rent"] == SOURCE_DEFAULT

    def test_every_field_has_a_source(self):
        inputs, sources = resolve_inputs(250_000)
        assert set(sources) == set(type(inputs).model_fields)

    def test_market_beats_estimate(self):
        market = MarketData(monthly_rent=2_400, property_tax_annual=4_100, interest_rate=6.5)
        inputs, sources = resolve_inputs(300_000, market)

        assert inputs.monthly_rent == 2_400
        assert inputs.property_tax_annual == 4_100
        assert inputs.interest_rate == 6.5
        assert sources["monthly_rent"] == SOURCE_MARKET
        assert sources["property_tax_annual"] == SOURCE_MARKET
        assert sources["interest_rate"] == SOURCE_MARKET
        assert sources["insurance_annual"] == SOURCE_ESTIMATE

    def test_override_beats_market(self):
        market = MarketData(monthly_rent=2_400, interest_rate=6.5)
        inputs, sources = resolve_inputs(300_000, market, monthly_rent=2_700)
        assert inputs.monthly_rent == 2_700
        assert sources["monthly_rent"] == SOURCE_OVERRIDE
        assert sources["interest_rate"] == SOURCE_MARKET

    def test_explicit_zero_is_kept(self):
        """0 is a real value; only None means missing."""
        market = MarketData(hoa_monthly=150, vacancy_rate_percent=8)
        inputs, sources = resolve_inputs(
            300_000, market, hoa_monthly=0, vacancy_rate_percent=0, property_tax_annual=0
        )
        assert inputs.hoa_monthly == 0
        assert inputs.vacancy_rate_percent == 0
        assert inputs.property_tax_annual == 0
        assert sources["hoa_monthly"] == SOURCE_OVERRIDE
        assert sources["property_tax_annual"] == SOURCE_OVERRIDE

    def test_none_override_falls_through(self):
        inputs, sources = resolve_inputs(300_000, insurance_annual=None)
        assert inputs.insurance_annual == pytest.approx(2_250)
        assert sources["insurance_annual"] == SOURCE_ESTIMATE

    def test_closing_costs_from_percent(self):
        inputs, sources = resolve_inputs(300_000, closing_costs_percent=3)
        assert inputs.closing_costs == pytest.approx(9_000)
        assert sources["closing_costs"] == SOURCE_ESTIMATE

    def test_closing_costs_amount_beats_percent(self):
        inputs, sources = resolve_inputs(300_000, closing_costs_percent=3, closing_costs=5_000)
        assert inputs.closing_costs == 5_000
        assert sources["closing_costs"] == SOURCE_OVERRIDE


# ── Caller errors ─────────────────────────────────────────────────────────────

def test_zero_price_resolves():
    inputs, sources = resolve_inputs(0, monthly_rent=1_000)
    assert inputs.purchase_price == 0
    assert inputs.property_tax_annual == 0.0
    assert inputs.insurance_annual == pytest.approx(1_200)
    assert inputs.loan_amount == 0.0
    assert sources["purchase_price"] == SOURCE_OVERRIDE


@pytest.mark.parametrize("price", [-100_000, -0.01, None])
def test_missing_or_negative_price_rejected(price):
    with pytest.raises(ValueError, match="purchase_price"):
        resolve_inputs(price)


def test_unknown_override_rejected():
    with pytest.raises(ValueError, match="unknown input fields"):
        resolve_inputs(300_000, monthly_rnet=2_000)


def test_invalid_override_rejected():
    with pytest.raises(ValueError):
        resolve_inputs(300_000, down_payment_percent=120)
