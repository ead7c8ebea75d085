"""
Matplotlib charts rendered straight to image files (Agg canvas, no GUI toolkit).

  render_projection_chart : cash flow over time (left) + equity build-up (right)
  render_expense_breakdown: monthly outflow pie, mortgage included
"""

from pathlib import Path

from matplotlib.backends.backend_agg import FigureCanvasAgg
from matplotlib.figure import Figure
from matplotlib.ticker import FuncFormatter

from rental_calculator.models import CalculationResult, YearProjection

_EXPENSE_LABELS = {
    "property_tax": "Property tax",
    "insurance": "Insurance",
    "hoa": "HOA",
    "utilities": "Utilities",
    "management": "Management",
    "repairs": "Repairs",
    "capex": "CapEx",
}


def _usd_fmt(x: float, _: object) -> str:
    """Compact axis label: 1,500,000 -> '$1.5M', 50,000 -> '$50k'."""
    if abs(x) >= 1_000_000:
        return f"${x / 1_000_000:.1f}M"
    return f"${x / 1_000:.0f}k"


def _save(fig: Figure, path: Path | str) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    FigureCanvasAgg(fig)
    fig.savefig(path, dpi=110)
    return path


def render_projection_chart(
    projections: list[YearProjection],
    path: Path | str,
) -> Path:
    """Write the two-panel projection chart and return its path."""
    if not projections:
        raise ValueError("no projection rows to chart")

    fig = Figure(figsize=(12, 5), constrained_layout=True)
    ax_cf, ax_eq = fig.subplots(1, 2)
    years = [p.year for p in projections]

    ax_cf.plot(years, [p.effective_income for p in projections], color="#3b82f6", label="Operating income")
    ax_cf.plot(years, [p.operating_expenses for p in projections], color="#ef4444", label="Operating expenses")
    ax_cf.plot(years, [p.cash_flow for p in projections], color="#10b981", linewidth=2, label="Cash flow")
    ax_cf.axhline(0, color="grey", linewidth=0.8)
    ax_cf.set_xlabel("Year")
    ax_cf.set_ylabel("Annual amount")
    ax_cf.set_title("Cash Flow Over Time")
    ax_cf.yaxis.set_major_formatter(FuncFormatter(_usd_fmt))
    ax_cf.legend(loc="upper left", fontsize=9)

    ax_eq.plot(years, [p.property_value for p in projections], color="#3b82f6", label="Property value")
    ax_eq.plot(years, [p.loan_balance for p in projections], color="#ef4444", label="Loan balance")
    ax_eq.fill_between(
        years,
        [p.loan_balance for p in projections],
        [p.property_value for p in projections],
        color="#10b981",
        alpha=0.2,
        label="Equity",
    )
    ax_eq.set_xlabel("Year")
    ax_eq.set_title("Equity Over Time")
    ax_eq.yaxis.set_major_formatter(FuncFormatter(_usd_fmt))
    ax_eq.legend(loc="upper left", fontsize=9)

    return _save(fig, path)


def render_expense_breakdown(result: CalculationResult, path: Path | str) -> Path:
    """Pie of the monthly outflow; empty categories are left out."""
    slices = {"Mortgage": result.mortgage.monthly_payment}
    for key, amount in result.expenses.breakdown().items():
        slices[_EXPENSE_LABELS[key]] = amount
    slices = {label: amount for label, amount in slices.items() if amount > 0}
    if not slices:
        raise ValueError("no monthly outflow to chart")

    fig = Figure(figsize=(6, 6), constrained_layout=True)
    ax = fig.add_subplot(111)
    ax.pie(
        list(slices.values()),
        labels=list(slices.keys()),
        autopct="%1.1f%%",
        startangle=140,
    )
    ax.set_title("Monthly Outflow Breakdown")

    return _save(fig, path)
