"""Rich renderer for federal withholding results."""

from rich import box
from rich.console import Console
from rich.table import Table

from carepay.sdk.schemas import AnnualTaxEstimate, W4Information, WithholdingResult

from .paystub_renderer import fmt_money


def render_withholding(console: Console, result: WithholdingResult, w4: W4Information, pay_frequency: str) -> None:
    """Render per-paycheck withholding with the percentage-method steps."""
    breakdown = result.breakdown

    steps = Table(title=f"Percentage Method ({w4.filing_status}, {pay_frequency})", box=box.ROUNDED)
    steps.add_column("Step", style="bold", min_width=28)
    steps.add_column("Amount", justify="right", min_width=12)
    steps.add_row("Annualized wages", fmt_money(breakdown.annualized_wages))
    steps.add_row("+ Other income - deductions", fmt_money(breakdown.adjusted_annual_wages))
    steps.add_row("- Standard deduction", fmt_money(breakdown.standard_deduction))
    steps.add_row("- Dependents (Step 3)", fmt_money(w4.dependents_amount))
    steps.add_row("Taxable income", fmt_money(breakdown.taxable_income))
    steps.add_row("Annual tax", fmt_money(breakdown.annual_tax))
    steps.add_row("Per paycheck", fmt_money(breakdown.per_paycheck_tax))
    if w4.extra_withholding:
        steps.add_row("+ Extra (Step 4c)", fmt_money(w4.extra_withholding))
    console.print(steps)

    paycheck = Table(box=box.ROUNDED)
    paycheck.add_column("", style="bold", min_width=28)
    paycheck.add_column("Amount", justify="right", min_width=12)
    paycheck.add_row("Gross Pay", fmt_money(result.gross_pay))
    paycheck.add_row("Federal Income Tax", fmt_money(result.federal_withholding))
    paycheck.add_row("Social Security", fmt_money(result.social_security_withholding))
    paycheck.add_row("Medicare", fmt_money(result.medicare_withholding))
    paycheck.add_row("[dim]Total Deductions[/dim]", f"[dim]{fmt_money(result.total_deductions)}[/dim]")
    paycheck.add_row("[bold green]NET PAY[/bold green]", f"[bold green]{fmt_money(result.net_pay)}[/bold green]")
    console.print(paycheck)


def render_annual_estimate(console: Console, estimate: AnnualTaxEstimate) -> None:
    """Render a year-end tax estimate."""
    table = Table(title="Annual Tax Estimate", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=24)
    table.add_column("Amount", justify="right", min_width=12)
    table.add_row("Gross Wages", fmt_money(estimate.gross_wages))
    table.add_row("Standard Deduction", fmt_money(estimate.standard_deduction))
    table.add_row("Taxable Income", fmt_money(estimate.taxable_income))
    table.add_row("Federal Income Tax", fmt_money(estimate.federal_income_tax))
    table.add_row("Social Security", fmt_money(estimate.social_security_tax))
    table.add_row("Medicare", fmt_money(estimate.medicare_tax))
    table.add_row("[bold]Total Tax[/bold]", f"[bold]{fmt_money(estimate.total_tax)}[/bold]")
    table.add_row("Effective Rate", f"{estimate.effective_tax_rate:.2%}")
    console.print(table)
