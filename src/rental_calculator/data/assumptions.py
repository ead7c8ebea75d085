"""
Default assumption table for rental property analysis.
Update these values when market conventions change.

All percentages are plain numbers scaled 0-100 (5.0 means 5%).
"""

from typing import TypedDict

ASSUMPTIONS_DATE = "2026-01-01"

# ── Financing ─────────────────────────────────────────────────────────────────
DEFAULT_DOWN_PAYMENT_PERCENT = 20.0
DEFAULT_LOAN_TERM_YEARS = 30
DEFAULT_INTEREST_RATE = 7.0            # annual %, used when no live rate is known

# ── Operating expense rates (% of rent) ───────────────────────────────────────
DEFAULT_VACANCY_RATE_PERCENT = 5.0     # applied to gross income, not rent alone
DEFAULT_MANAGEMENT_RATE_PERCENT = 10.0
DEFAULT_REPAIRS_RATE_PERCENT = 5.0
DEFAULT_CAPEX_RATE_PERCENT = 5.0

# ── Growth (multi-year projections) ───────────────────────────────────────────
DEFAULT_APPRECIATION_RATE_PERCENT = 3.0
DEFAULT_RENT_GROWTH_RATE_PERCENT = 2.0
DEFAULT_EXPENSE_GROWTH_RATE_PERCENT = 2.0
DEFAULT_SELLING_COSTS_PERCENT = 6.0

# ── Tax (post-tax projection figures) ─────────────────────────────────────────
DEFAULT_TAX_RATE_PERCENT = 25.0
DEPRECIATION_YEARS = 27.5              # residential straight-line schedule
DEPRECIABLE_SHARE_PERCENT = 85.0       # building share of the purchase price; land excluded

# ── Formula estimates ─────────────────────────────────────────────────────────
# Property tax: national average share of price, per year
PROPERTY_TAX_RATE_PERCENT = 1.1
# Insurance: flat base plus a rate per $1,000 of price, per year
INSURANCE_BASE_ANNUAL = 1_200.0
INSURANCE_PER_THOUSAND = 3.50

# ── Rule-of-thumb thresholds ──────────────────────────────────────────────────
ONE_PERCENT_RULE_PERCENT = 1.0
TWO_PERCENT_RULE_PERCENT = 2.0
FIFTY_PERCENT_RULE_PERCENT = 50.0
MIN_DEBT_COVERAGE_RATIO = 1.25
SEVENTY_PERCENT_RULE_PERCENT = 70.0

# ── Overall score ─────────────────────────────────────────────────────────────
# (threshold, points) pairs, highest threshold first
CAP_RATE_POINTS: list[tuple[float, int]] = [(10.0, 3), (8.0, 2), (6.0, 1)]
CASH_ON_CASH_POINTS: list[tuple[float, int]] = [(12.0, 3), (8.0, 2), (5.0, 1)]
ONE_PERCENT_RULE_POINTS = 2
DEBT_COVERAGE_POINTS = 2

# Rating bands: minimum score percentage for each rating
RATING_EXCELLENT_PERCENT = 80.0
RATING_GOOD_PERCENT = 60.0
RATING_FAIR_PERCENT = 40.0

# ── Quick score (listing cards) ───────────────────────────────────────────────
QUICK_GOOD_MIN_CASH_FLOW = 200.0
QUICK_GOOD_MIN_CAP_RATE = 8.0
QUICK_OKAY_MIN_CAP_RATE = 5.0
QUICK_GOOD_MIN_COC = 8.0

# ── Investor target presets ───────────────────────────────────────────────────

class PresetWeights(TypedDict):
    cap_rate: float
    cash_on_cash: float
    cash_flow: float
    dscr: float


class PresetThresholds(TypedDict):
    min_cap_rate: float
    min_cash_on_cash: float
    min_monthly_cash_flow: float
    min_dscr: float


class ScoringPreset(TypedDict):
    name: str
    description: str
    weights: PresetWeights
    thresholds: PresetThresholds


SCORING_PRESETS: dict[str, ScoringPreset] = {
    "conservative": {
        "name": "Conservative",
        "description": "Focus on stable, lower-risk investments",
        "weights": {"cap_rate": 0.30, "cash_on_cash": 0.30, "cash_flow": 0.25, "dscr": 0.15},
        "thresholds": {
            "min_cap_rate": 8.0,
            "min_cash_on_cash": 10.0,
            "min_monthly_cash_flow": 300.0,
            "min_dscr": 1.5,
        },
    },
    "moderate": {
        "name": "Moderate",
        "description": "Balanced approach to risk and returns",
        "weights": {"cap_rate": 0.25, "cash_on_cash": 0.25, "cash_flow": 0.30, "dscr": 0.20},
        "thresholds": {
            "min_cap_rate": 6.0,
            "min_cash_on_cash": 8.0,
            "min_monthly_cash_flow": 200.0,
            "min_dscr": 1.25,
        },
    },
    "aggressive": {
        "name": "Aggressive",
        "description": "Prioritize higher returns, accept more risk",
        "weights": {"cap_rate": 0.20, "cash_on_cash": 0.20, "cash_flow": 0.40, "dscr": 0.20},
        "thresholds": {
            "min_cap_rate": 4.0,
            "min_cash_on_cash": 6.0,
            "min_monthly_cash_flow": 100.0,
            "min_dscr": 1.0,
        },
    },
}

PRESET_NAMES: list[str] = list(SCORING_PRESETS.keys())
DEFAULT_PRESET = "moderate"
