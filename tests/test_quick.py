"""
Quick score labels for listing cards.
"""

import pytest

from rental_calculator.models import MarketData
from rental_calculator.quick import quick_score


def test_no_rent_is_unknown():
    score = quick_score(300_000)
    assert score.label == "unknown"
    assert score.reasons == ["Rent data unavailable"]
    assert score.monthly_cash_flow == 0
    assert score.cap_rate == 0
    assert not score.passes_one_percent
    assert score.one_percent_target == 3_000


def test_good_listing():
    """$100k at $1,500 rent: ~$372/mo cash flow, ~10.9% cap rate, passes 1%."""
    score = quick_score(100_000, MarketData(monthly_rent=1_500))

    assert score.label == "good"
    assert score.reasons == [
        "Passes 1% rule",
        "Positive cash flow",
        "High cap rate",
        "Good CoC return",
    ]
    assert score.passes_one_percent
    assert score.one_percent_target == 1_000
    assert score.monthly_cash_flow == 372
    assert score.annual_cash_flow == pytest.approx(4_463, abs=1)
    assert score.cap_rate == pytest.approx(10.85, abs=0.051)
    assert score.monthly_mortgage == 532
    assert score.monthly_expenses == 596
    assert score.monthly_rent == 1_500


def test_okay_listing():
    """Small positive cash flow and a mid cap rate, fails the 1% rule."""
    score = quick_score(200_000, MarketData(monthly_rent=1_900))
    assert score.label == "okay"
    assert not score.passes_one_percent
    assert 0 < score.monthly_cash_flow < 200
    assert score.cap_rate == pytest.approx(6.5)


def test_poor_listing():
    score = quick_score(300_000, MarketData(monthly_rent=2_500))
    assert score.label == "poor"
    assert score.reasons == ["Low returns", "May not cash flow"]
    assert score.monthly_cash_flow < 0


def test_sources_reported():
    score = quick_score(300_000, MarketData(monthly_rent=2_500, interest_rate=6.0))
    assert score.sources["monthly_rent"] == "market"
    assert score.sources["interest_rate"] == "market"
    assert score.sources["property_tax_annual"] == "estimate"
    assert score.sources["vacancy_rate_percent"] == "default"


def test_lower_rate_improves_cash_flow():
    dear = quick_score(300_000, MarketData(monthly_rent=2_500, interest_rate=8.0))
    cheap = quick_score(300_000, MarketData(monthly_rent=2_500, interest_rate=5.0))
    assert cheap.monthly_cash_flow > dear.monthly_cash_flow
    assert cheap.cap_rate == dear.cap_rate


def test_zero_price_scores_without_error():
    """No loan, no price-based returns: cap rate 0 keeps the label at poor."""
    score = quick_score(0, MarketData(monthly_rent=1_000))
    assert score.label == "poor"
    assert score.cap_rate == 0
    assert score.monthly_mortgage == 0
    assert score.one_percent_target == 0
    assert score.passes_one_percent
    assert score.monthly_cash_flow > 0


@pytest.mark.parametrize("price", [-1, -250_000])
def test_negative_price_rejected(price):
    with pytest.raises(ValueError):
        quick_score(price, MarketData(monthly_rent=1_000))
