"""
Overall score: point tiers, rating bands and band overrides.
"""

import pytest
from pydantic import ValidationError

from rental_calculator.data.assumptions import CAP_RATE_POINTS, CASH_ON_CASH_POINTS
from rental_calculator.models import ReturnsResult, RulesResult
from rental_calculator.rules import (
    check_debt_coverage,
    check_fifty_percent_rule,
    check_one_percent_rule,
    check_two_percent_rule,
)
from rental_calculator.scoring import MAX_SCORE, RatingBands, compute_overall_score, tier_points


# ── Helpers ───────────────────────────────────────────────────────────────────

def make_returns(cap_rate: float = 0.0, coc: float = 0.0, dcr: float = 0.0) -> ReturnsResult:
    return ReturnsResult(
        cap_rate=cap_rate,
        cash_on_cash_return=coc,
        gross_rent_multiplier=0.0,
        debt_coverage_ratio=dcr,
        total_roi=0.0,
        total_cash_invested=0.0,
        monthly_roi=0.0,
        break_even_ratio=0.0,
        gross_yield=0.0,
        operating_expense_ratio=0.0,
        expense_to_income_ratio=0.0,
        debt_yield=0.0,
        loan_to_purchase_price=0.0,
    )


def make_rules(one_percent: bool = False, dcr: float = 0.0) -> RulesResult:
    rent = 2_000 if one_percent else 1_000
    return RulesResult(
        one_percent=check_one_percent_rule(200_000, rent),
        two_percent=check_two_percent_rule(200_000, rent),
        fifty_percent=check_fifty_percent_rule(0, rent),
        debt_coverage=check_debt_coverage(dcr),
    )


def score_for(cap_rate=0.0, coc=0.0, one_percent=False, dcr=0.0, bands=None):
    return compute_overall_score(
        make_returns(cap_rate, coc, dcr), make_rules(one_percent, dcr), bands
    )


# ── Tier points ───────────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "value, expected",
    [(12.0, 3), (10.0, 3), (9.99, 2), (8.0, 2), (6.0, 1), (5.99, 0), (-4.0, 0)],
)
def test_cap_rate_tiers(value, expected):
    assert tier_points(value, CAP_RATE_POINTS) == expected


@pytest.mark.parametrize(
    "value, expected",
    [(12.0, 3), (11.9, 2), (8.0, 2), (5.0, 1), (4.99, 0)],
)
def test_cash_on_cash_tiers(value, expected):
    assert tier_points(value, CASH_ON_CASH_POINTS) == expected


# ── Overall score ─────────────────────────────────────────────────────────────

def test_max_score_is_ten():
    assert MAX_SCORE == 10


def test_perfect_score():
    summary = score_for(cap_rate=10, coc=12, one_percent=True, dcr=1.25)
    assert summary.score == 10
    assert summary.percentage == pytest.approx(100.0)
    assert summary.rating == "Excellent"


def test_nothing_scores_poor():
    summary = score_for()
    assert summary.score == 0
    assert summary.rating == "Poor"


@pytest.mark.parametrize(
    "kwargs, score, rating",
    [
        (dict(cap_rate=8, coc=8, one_percent=True, dcr=1.3), 8, "Excellent"),   # 80%
        (dict(cap_rate=8, coc=8, one_percent=True), 6, "Good"),                # 60%
        (dict(cap_rate=8, coc=8), 4, "Fair"),                                  # 40%
        (dict(cap_rate=10), 3, "Poor"),                                        # 30%
    ],
)
def test_rating_band_boundaries(kwargs, score, rating):
    summary = score_for(**kwargs)
    assert summary.score == score
    assert summary.rating == rating


# ── Rating bands ──────────────────────────────────────────────────────────────

class TestRatingBands:
    def test_defaults(self):
        bands = RatingBands()
        assert (bands.excellent, bands.good, bands.fair) == (80.0, 60.0, 40.0)

    def test_custom_bands_change_rating(self):
        strict = RatingBands(excellent=95, good=85, fair=70)
        summary = score_for(cap_rate=8, coc=8, one_percent=True, dcr=1.3, bands=strict)
        assert summary.score == 8
        assert summary.rating == "Fair"

    def test_out_of_order_rejected(self):
        with pytest.raises(ValidationError):
            RatingBands(excellent=50, good=60, fair=40)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            RatingBands(excellent=80, good=60, fair=-1)

    @pytest.mark.parametrize(
        "pct, rating",
        [(100, "Excellent"), (80, "Excellent"), (79.9, "Good"), (40, "Fair"), (39.9, "Poor")],
    )
    def test_rate(self, pct, rating):
        assert RatingBands().rate(pct) == rating
