"""
Interactive Rich CLI for the Rental Property Calculator.

8-step flow:
  1. Banner (assumptions date + staleness warning)
  2. Property & financing prompts
  3. Mortgage, income and expense breakdown
  4. Returns, rule checks and overall score
  5. Down payment comparison
  6. Buy-and-hold projection
  7. Investor target check
  8. Optional plain-text report and chart export
"""

import sys
from datetime import date, datetime
from pathlib import Path

from loguru import logger
from rich.console import Console
from rich.panel import Panel
from rich.prompt import Confirm, FloatPrompt, IntPrompt, Prompt
from rich.table import Table
from rich.text import Text

from rental_calculator.calculator import analyze_property
from rental_calculator.charts import render_expense_breakdown, render_projection_chart
from rental_calculator.comparison import RankedScenario, compare_down_payments
from rental_calculator.config import config
from rental_calculator.criteria import (
    CriteriaCheck,
    InvestmentTargets,
    meets_investment_criteria,
    profile_score,
)
from rental_calculator.data.assumptions import (
    ASSUMPTIONS_DATE,
    DEFAULT_CAPEX_RATE_PERCENT,
    DEFAULT_DOWN_PAYMENT_PERCENT,
    DEFAULT_INTEREST_RATE,
    DEFAULT_LOAN_TERM_YEARS,
    DEFAULT_MANAGEMENT_RATE_PERCENT,
    DEFAULT_PRESET,
    DEFAULT_REPAIRS_RATE_PERCENT,
    DEFAULT_VACANCY_RATE_PERCENT,
    PRESET_NAMES,
)
from rental_calculator.estimates import resolve_inputs
from rental_calculator.logging_utils import configure_logging
from rental_calculator.models import CalculationResult, PropertyFinancialInputs, YearProjection
from rental_calculator.projections import project_buy_and_hold

console = Console()

PROJECTION_SNAPSHOT_YEARS = [1, 2, 3, 5, 10, 20, 30]


def _fmt_usd(amount: float) -> str:
    sign = "-" if amount < 0 else ""
    return f"{sign}${abs(amount):,.0f}"


def _fmt_pct(value: float) -> str:
    return f"{value:.2f}%"


def _pass_fail(passes: bool) -> str:
    return "[green]PASS[/green]" if passes else "[red]FAIL[/red]"


# ── Step 1: Banner ────────────────────────────────────────────────────────────

def show_banner() -> None:
    assumptions_date = datetime.strptime(ASSUMPTIONS_DATE, "%Y-%m-%d").date()
    age_days = (date.today() - assumptions_date).days

    title = Text("Rental Property Investment Calculator", style="bold cyan")
    subtitle = Text(f"Default assumptions as of {ASSUMPTIONS_DATE}", style="dim")

    staleness = ""
    if age_days > 365:
        staleness = (
            f"\n[yellow]Note:[/yellow] Default assumptions are {age_days} days old. "
            "Check the interest rate and expense rates against the current market."
        )

    body = f"[bold]{title}[/bold]\n{subtitle}{staleness}"
    console.print(Panel(body, expand=False, border_style="cyan"))
    console.print()


# ── Step 2: Inputs ────────────────────────────────────────────────────────────

def _ask_optional_float(label: str) -> float | None:
    """Blank answer -> None (let the estimator fill it in)."""
    while True:
        raw = Prompt.ask(f"  {label} [dim](blank = estimate)[/dim]", default="").strip()
        if not raw:
            return None
        try:
            return float(raw.replace(",", "").replace("$", ""))
        except ValueError:
            console.print("[red]Invalid amount.[/red]")


def _ask_closing_costs() -> tuple[float | None, float | None]:
    """Returns (amount, percent); exactly one of them is set."""
    while True:
        console.print("  Closing costs: enter a dollar amount OR a percent of price (e.g. '3%')")
        raw = Prompt.ask("  Closing costs", default="3%").strip()
        try:
            if raw.endswith("%"):
                return None, float(raw[:-1])
            return float(raw.replace(",", "").replace("$", "")), None
        except ValueError:
            console.print("[red]Invalid closing costs.[/red]")


def _ask_answers() -> tuple[float, float | None, dict]:
    while True:
        purchase_price = FloatPrompt.ask("  Purchase price ($)", default=300_000.0)
        if purchase_price >= 0:
            break
        console.print("[red]Purchase price cannot be negative.[/red]")

    answers: dict = {}
    answers["monthly_rent"] = FloatPrompt.ask(
        "  Monthly rent ($)", default=float(round(purchase_price * 0.008))
    )
    answers["other_monthly_income"] = FloatPrompt.ask("  Other monthly income ($)", default=0.0)
    answers["property_tax_annual"] = _ask_optional_float("Annual property tax ($)")
    answers["insurance_annual"] = _ask_optional_float("Annual insurance ($)")
    answers["hoa_monthly"] = FloatPrompt.ask("  HOA per month ($)", default=0.0)
    answers["utilities_monthly"] = FloatPrompt.ask("  Owner-paid utilities per month ($)", default=0.0)

    console.print()
    answers["down_payment_percent"] = FloatPrompt.ask(
        "  Down payment (%)", default=DEFAULT_DOWN_PAYMENT_PERCENT
    )
    answers["interest_rate"] = FloatPrompt.ask("  Interest rate (annual %)", default=DEFAULT_INTEREST_RATE)
    answers["loan_term_years"] = IntPrompt.ask("  Loan term (years)", default=DEFAULT_LOAN_TERM_YEARS)
    answers["closing_costs"], closing_costs_percent = _ask_closing_costs()
    answers["rehab_costs"] = FloatPrompt.ask("  Rehab / repair costs ($)", default=0.0)
    answers["after_repair_value"] = _ask_optional_float("After-repair value for the 70% rule ($)")

    console.print()
    answers["vacancy_rate_percent"] = FloatPrompt.ask(
        "  Vacancy (% of gross income)", default=DEFAULT_VACANCY_RATE_PERCENT
    )
    answers["management_rate_percent"] = FloatPrompt.ask(
        "  Management (% of rent)", default=DEFAULT_MANAGEMENT_RATE_PERCENT
    )
    answers["repairs_rate_percent"] = FloatPrompt.ask(
        "  Repairs (% of rent)", default=DEFAULT_REPAIRS_RATE_PERCENT
    )
    answers["capex_rate_percent"] = FloatPrompt.ask("  CapEx (% of rent)", default=DEFAULT_CAPEX_RATE_PERCENT)
    console.print()

    return purchase_price, closing_costs_percent, answers


def prompt_inputs() -> tuple[PropertyFinancialInputs, dict[str, str]]:
    console.print("[bold]Step 1: Property & Financing[/bold]\n")

    while True:
        purchase_price, closing_costs_percent, answers = _ask_answers()
        try:
            return resolve_inputs(
                purchase_price,
                closing_costs_percent=closing_costs_percent,
                **answers,
            )
        except ValueError as e:
            console.print(f"[red]Invalid input: {e}[/red]")
            console.print("Please re-enter the property details.\n")


# ── Step 3: Breakdown ─────────────────────────────────────────────────────────

def show_breakdown(result: CalculationResult, sources: dict[str, str]) -> None:
    console.print("[bold]Step 2: Monthly Breakdown[/bold]\n")

    m = result.mortgage
    mortgage_text = (
        f"  Down payment:            {_fmt_usd(m.down_payment_amount)}\n"
        f"  Loan amount:             {_fmt_usd(m.loan_amount)}\n"
        f"  Monthly payment (P&I):   [bold]{_fmt_usd(m.monthly_payment)}[/bold]\n"
        f"  First month interest:    {_fmt_usd(m.first_month_interest)}\n"
        f"  First month principal:   {_fmt_usd(m.first_month_principal)}\n"
        f"  Total interest:          {_fmt_usd(m.total_interest)}"
    )
    console.print(Panel(mortgage_text, title="Mortgage", border_style="blue"))

    table = Table(title="Income & Operating Expenses (monthly)", border_style="blue")
    table.add_column("Item", min_width=22)
    table.add_column("Amount", justify="right")
    table.add_column("Source", style="dim")

    inc = result.income
    table.add_row("Gross income", _fmt_usd(inc.gross_monthly_income), "")
    table.add_row("Vacancy loss", f"-{_fmt_usd(inc.vacancy_loss)}", "")
    table.add_row("[bold]Effective income[/bold]", f"[bold]{_fmt_usd(inc.effective_monthly_income)}[/bold]", "")

    source_keys = {"property_tax": "property_tax_annual", "insurance": "insurance_annual"}
    for key, amount in result.expenses.breakdown().items():
        source = sources.get(source_keys.get(key, ""), "")
        table.add_row(key.replace("_", " ").capitalize(), _fmt_usd(amount), source)
    table.add_row(
        "[bold]Total expenses[/bold]", f"[bold]{_fmt_usd(result.expenses.total_monthly)}[/bold]", ""
    )

    cf = result.cash_flow
    style = "green" if cf.monthly_cash_flow >= 0 else "red"
    table.add_row("Net operating income", _fmt_usd(cf.monthly_noi), "")
    table.add_row("Mortgage payment", f"-{_fmt_usd(m.monthly_payment)}", "")
    table.add_row(
        "[bold]Cash flow[/bold]", f"[bold {style}]{_fmt_usd(cf.monthly_cash_flow)}[/bold {style}]", ""
    )
    console.print(table)
    console.print()


# ── Step 4: Returns, rules, score ─────────────────────────────────────────────

def show_returns(result: CalculationResult) -> None:
    console.print("[bold]Step 3: Returns & Rules of Thumb[/bold]\n")

    r = result.returns
    returns_text = (
        f"  Cap rate:                {_fmt_pct(r.cap_rate)}\n"
        f"  Cash-on-cash return:     {_fmt_pct(r.cash_on_cash_return)}\n"
        f"  Total ROI (year 1):      {_fmt_pct(r.total_roi)}\n"
        f"  Gross rent multiplier:   {r.gross_rent_multiplier:.2f}\n"
        f"  Debt coverage ratio:     {r.debt_coverage_ratio:.2f}x\n"
        f"  Break-even ratio:        {_fmt_pct(r.break_even_ratio)}\n"
        f"  Operating expense ratio: {_fmt_pct(r.operating_expense_ratio)}\n"
        f"  Debt yield:              {_fmt_pct(r.debt_yield)}\n"
        f"  Loan to purchase price:  {_fmt_pct(r.loan_to_purchase_price)}\n"
        f"  Total cash invested:     {_fmt_usd(r.total_cash_invested)}"
    )
    console.print(Panel(returns_text, title="Returns", border_style="green"))

    table = Table(border_style="blue", show_lines=True)
    table.add_column("Rule", min_width=14)
    table.add_column("Result", justify="center")
    table.add_column("Detail")
    rules = result.rules
    checks = [rules.one_percent, rules.two_percent, rules.fifty_percent, rules.debt_coverage]
    if rules.seventy_percent is not None:
        checks.append(rules.seventy_percent)
    for check in checks:
        table.add_row(check.name, _pass_fail(check.passes), check.message)
    console.print(table)

    s = result.summary
    colour = {"Excellent": "green", "Good": "cyan", "Fair": "yellow"}.get(s.rating, "red")
    console.print(
        Panel(
            f"[bold {colour}]{s.rating}[/bold {colour}]  "
            f"{s.score}/{s.max_score} points ({s.percentage:.0f}%)",
            title="Overall Score",
            border_style=colour,
            expand=False,
        )
    )
    console.print()


# ── Step 5: Down payment comparison ───────────────────────────────────────────

def show_comparison_table(ranked: list[RankedScenario], chosen_percent: float) -> None:
    console.print("[bold]Step 4: Down Payment Comparison[/bold]\n")

    table = Table(
        title="Financing Scenarios, Ranked by Cash-on-Cash Return",
        border_style="blue",
        show_lines=True,
    )
    table.add_column("Rank", justify="center", style="bold")
    table.add_column("Scenario", min_width=12)
    table.add_column("Cash Invested", justify="right")
    table.add_column("Monthly Cash Flow", justify="right")
    table.add_column("Cash-on-Cash", justify="right")
    table.add_column("DCR", justify="right")
    table.add_column("Rating")

    for r in ranked:
        is_chosen = r.result.inputs.down_payment_percent == chosen_percent
        style = "bold cyan" if is_chosen else ""
        rank_str = f"#{r.rank}" + (" ★" if r.rank == 1 else "")
        table.add_row(
            rank_str,
            r.name,
            _fmt_usd(r.total_cash_invested),
            _fmt_usd(r.monthly_cash_flow),
            _fmt_pct(r.cash_on_cash_return),
            f"{r.debt_coverage_ratio:.2f}x",
            r.rating,
            style=style,
        )

    console.print(table)
    console.print("  [dim]★ = best cash-on-cash  |  cyan = your down payment[/dim]")
    console.print()


# ── Step 6: Projection ────────────────────────────────────────────────────────

def show_projection(projections: list[YearProjection]) -> None:
    console.print("[bold]Step 5: Buy & Hold Projection[/bold]\n")

    snapshot = [p for p in projections if p.year in PROJECTION_SNAPSHOT_YEARS]
    table = Table(border_style="magenta")
    table.add_column("Year", justify="center")
    table.add_column("NOI", justify="right")
    table.add_column("Cash Flow", justify="right")
    table.add_column("Property Value", justify="right")
    table.add_column("Loan Balance", justify="right")
    table.add_column("Equity", justify="right")
    table.add_column("Total Profit", justify="right")
    table.add_column("Cash-on-Cash", justify="right")

    for p in snapshot:
        table.add_row(
            str(p.year),
            _fmt_usd(p.noi),
            _fmt_usd(p.cash_flow),
            _fmt_usd(p.property_value),
            _fmt_usd(p.loan_balance),
            _fmt_usd(p.equity),
            _fmt_usd(p.total_profit),
            _fmt_pct(p.cash_on_cash),
        )
    console.print(table)
    console.print("  [dim]Total profit assumes a sale at the end of that year.[/dim]")
    console.print()


# ── Step 7: Investor targets ──────────────────────────────────────────────────

def show_criteria(result: CalculationResult) -> tuple[str, CriteriaCheck]:
    console.print("[bold]Step 6: Investor Targets[/bold]\n")
    preset = Prompt.ask("  Investor profile", choices=PRESET_NAMES, default=DEFAULT_PRESET)

    check = meets_investment_criteria(result, InvestmentTargets.from_preset(preset))
    score = profile_score(result, preset)

    if check.meets:
        body = f"[green]Meets all {preset} targets.[/green]"
    else:
        body = "\n".join(f"[red]•[/red] {reason}" for reason in check.reasons)
    body += f"\n\n  Profile score: [bold]{score}/100[/bold]"
    console.print(Panel(body, title=f"{preset.capitalize()} Targets", border_style="yellow"))
    console.print()
    return preset, check


# ── Step 8: Export ────────────────────────────────────────────────────────────

def generate_report_text(
    result: CalculationResult,
    ranked: list[RankedScenario],
    projections: list[YearProjection],
    criteria: CriteriaCheck | None = None,
    preset: str = DEFAULT_PRESET,
) -> str:
    """Plain-text report of a full analysis."""
    inputs = result.inputs
    m, r, cf = result.mortgage, result.returns, result.cash_flow

    lines = [
        "Rental Property Analysis Report",
        f"Generated: {date.today().isoformat()}",
        f"Assumptions: {ASSUMPTIONS_DATE}",
        "=" * 60,
        "",
        "PURCHASE & FINANCING",
        f"  Purchase price:      {_fmt_usd(inputs.purchase_price)}",
        f"  Down payment:        {_fmt_usd(m.down_payment_amount)} ({inputs.down_payment_percent:g}%)",
        f"  Loan amount:         {_fmt_usd(m.loan_amount)}",
        f"  Rate / term:         {inputs.interest_rate:g}% / {inputs.loan_term_years} years",
        f"  Monthly payment:     {_fmt_usd(m.monthly_payment)}",
        f"  Closing costs:       {_fmt_usd(inputs.closing_costs)}",
        f"  Rehab costs:         {_fmt_usd(inputs.rehab_costs)}",
        "",
        "MONTHLY CASH FLOW",
        f"  Gross income:        {_fmt_usd(result.income.gross_monthly_income)}",
        f"  Vacancy loss:        {_fmt_usd(result.income.vacancy_loss)}",
    ]
    for key, amount in result.expenses.breakdown().items():
        lines.append(f"  {key.replace('_', ' ').capitalize() + ':':<21}{_fmt_usd(amount)}")
    lines += [
        f"  Total expenses:      {_fmt_usd(result.expenses.total_monthly)}",
        f"  NOI:                 {_fmt_usd(cf.monthly_noi)}",
        f"  Cash flow:           {_fmt_usd(cf.monthly_cash_flow)}",
        "",
        "RETURNS",
        f"  Cap rate:            {_fmt_pct(r.cap_rate)}",
        f"  Cash-on-cash:        {_fmt_pct(r.cash_on_cash_return)}",
        f"  Total ROI (year 1):  {_fmt_pct(r.total_roi)}",
        f"  GRM:                 {r.gross_rent_multiplier:.2f}",
        f"  DCR:                 {r.debt_coverage_ratio:.2f}",
        f"  Break-even ratio:    {_fmt_pct(r.break_even_ratio)}",
        f"  Expense ratio:       {_fmt_pct(r.operating_expense_ratio)}",
        f"  Debt yield:          {_fmt_pct(r.debt_yield)}",
        f"  Cash invested:       {_fmt_usd(r.total_cash_invested)}",
        "",
        "RULES OF THUMB",
    ]
    rules = result.rules
    for check in (rules.one_percent, rules.two_percent, rules.fifty_percent, rules.debt_coverage,
                  rules.seventy_percent):
        if check is not None:
            lines.append(f"  [{'PASS' if check.passes else 'FAIL'}] {check.message}")

    s = result.summary
    lines += [
        "",
        f"OVERALL SCORE: {s.score}/{s.max_score} ({s.percentage:.0f}%) - {s.rating}",
        "",
        "DOWN PAYMENT COMPARISON",
    ]
    for sc in ranked:
        lines.append(
            f"  #{sc.rank} {sc.name:<10} Cash flow: {_fmt_usd(sc.monthly_cash_flow)}/mo  "
            f"CoC: {_fmt_pct(sc.cash_on_cash_return)}"
        )

    lines += ["", "PROJECTION"]
    for p in projections:
        if p.year in PROJECTION_SNAPSHOT_YEARS:
            lines.append(
                f"  Year {p.year:>2}: cash flow {_fmt_usd(p.cash_flow)}  "
                f"equity {_fmt_usd(p.equity)}  total profit {_fmt_usd(p.total_profit)}  "
                f"after tax {_fmt_usd(p.post_tax_cash_flow)}"
            )

    if criteria is not None:
        lines += ["", f"INVESTOR TARGETS ({preset})"]
        if criteria.meets:
            lines.append("  Meets all targets")
        else:
            lines += [f"  - {reason}" for reason in criteria.reasons]

    return "\n".join(lines)


def export_report(report_text: str) -> None:
    path = Path(Prompt.ask("  Output file path", default=config.REPORT_PATH))
    path.write_text(report_text, encoding="utf-8")
    console.print(f"  [green]Report saved to {path.resolve()}[/green]")


def export_charts(result: CalculationResult, projections: list[YearProjection]) -> None:
    path = Path(Prompt.ask("  Chart file path", default=config.CHART_PATH))
    chart = render_projection_chart(projections, path)
    pie = render_expense_breakdown(result, path.with_name(f"{path.stem}_expenses{path.suffix}"))
    console.print(f"  [green]Charts saved to {chart.resolve()} and {pie.resolve()}[/green]")


# ── Main entry point ──────────────────────────────────────────────────────────

def main() -> None:
    configure_logging()
    try:
        # Step 1: Banner
        show_banner()

        # Step 2: Inputs
        inputs, sources = prompt_inputs()

        # Step 3-4: Analysis
        bands = config.rating_bands()
        result = analyze_property(inputs, bands)
        show_breakdown(result, sources)
        show_returns(result)

        # Step 5: Comparison
        ranked = compare_down_payments(inputs, bands=bands)
        show_comparison_table(ranked, inputs.down_payment_percent)

        # Step 6: Projection
        projections = project_buy_and_hold(inputs, years=config.PROJECTION_YEARS)
        show_projection(projections)

        # Step 7: Targets
        preset, criteria = show_criteria(result)

        # Step 8: Export
        if Confirm.ask("  Export plain-text report?", default=False):
            export_report(generate_report_text(result, ranked, projections, criteria, preset))
        if Confirm.ask("  Export charts (PNG)?", default=False):
            try:
                export_charts(result, projections)
            except (OSError, ValueError) as e:
                logger.warning("Chart export failed", error=str(e))
                console.print(f"[red]Chart export failed: {e}[/red]")

        console.print("\n[bold cyan]Done.[/bold cyan]")

    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        sys.exit(0)


if __name__ == "__main__":
    main()
