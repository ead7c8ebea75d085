"""
Investor targets and preset profile scores.
"""

import pytest

from rental_calculator.calculator import analyze_property
from rental_calculator.criteria import (
    InvestmentTargets,
    meets_investment_criteria,
    profile_score,
)
from rental_calculator.data.assumptions import PRESET_NAMES
from rental_calculator.estimates import resolve_inputs


# ── Fixtures ──────────────────────────────────────────────────────────────────

@pytest.fixture
def strong_result():
    """$100k at $1,500: ~10.9% cap, ~22% CoC, ~$372/mo, DCR ~1.70."""
    inputs, _ = resolve_inputs(100_000, monthly_rent=1_500)
    return analyze_property(inputs)


@pytest.fixture
def weak_result():
    """$300k at $2,500: 5.65% cap, negative cash flow, DCR ~0.88."""
    inputs, _ = resolve_inputs(300_000, monthly_rent=2_500)
    return analyze_property(inputs)


# ── Target checks ─────────────────────────────────────────────────────────────

class TestMeetsInvestmentCriteria:
    def test_strong_property_meets_defaults(self, strong_result):
        check = meets_investment_criteria(strong_result)
        assert check.meets
        assert check.reasons == []

    def test_weak_property_fails_every_target(self, weak_result):
        check = meets_investment_criteria(weak_result)
        assert not check.meets
        assert len(check.reasons) == 4
        assert check.reasons[0].startswith("Cap rate (5.")
        assert check.reasons[0].endswith("below target (6%)")
        assert check.reasons[3].startswith("DSCR (0.88)")

    def test_zero_targets_mean_no_requirement(self, weak_result):
        targets = InvestmentTargets(
            min_cap_rate=0, min_cash_on_cash=0, min_monthly_cash_flow=0, min_dscr=0
        )
        assert meets_investment_criteria(weak_result, targets).meets

    def test_single_target(self, weak_result):
        targets = InvestmentTargets(
            min_cap_rate=5, min_cash_on_cash=0, min_monthly_cash_flow=0, min_dscr=0
        )
        assert meets_investment_criteria(weak_result, targets).meets

    def test_negative_target_rejected(self):
        with pytest.raises(ValueError):
            InvestmentTargets(min_cap_rate=-1)


# ── Presets ───────────────────────────────────────────────────────────────────

class TestPresets:
    def test_moderate_matches_defaults(self):
        assert InvestmentTargets.from_preset("moderate") == InvestmentTargets()

    def test_conservative_is_stricter(self):
        conservative = InvestmentTargets.from_preset("conservative")
        aggressive = InvestmentTargets.from_preset("aggressive")
        assert conservative.min_cap_rate > aggressive.min_cap_rate
        assert conservative.min_dscr > aggressive.min_dscr

    def test_unknown_preset_rejected(self):
        with pytest.raises(ValueError, match="preset"):
            InvestmentTargets.from_preset("reckless")


# ── Profile score ─────────────────────────────────────────────────────────────

def test_profile_score_strong(strong_result):
    """50 + 25*.25 + 25*.25 + 15*.30 + 15*.20 = 70."""
    assert profile_score(strong_result, "moderate") == 70


def test_profile_score_weak(weak_result):
    """50 + 5*.25 - 10*.25 - 15*.30 - 15*.20 = 41.25."""
    assert profile_score(weak_result, "moderate") == 41


@pytest.mark.parametrize("preset", PRESET_NAMES)
def test_profile_score_in_range(preset, strong_result, weak_result):
    for result in (strong_result, weak_result):
        assert 0 <= profile_score(result, preset) <= 100
    assert profile_score(strong_result, preset) > profile_score(weak_result, preset)


def test_profile_score_unknown_preset(strong_result):
    with pytest.raises(ValueError):
        profile_score(strong_result, "reckless")
