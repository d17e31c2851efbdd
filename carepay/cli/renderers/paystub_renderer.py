"""Rich renderer for payroll results.

Transforms SDK results into formatted Rich tables.
"""

from typing import List, Optional

from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from carepay.sdk.schemas import PayrollResult, SimplePayrollResult


def render_paystub(
    console: Console,
    result: PayrollResult,
    caregiver_name: Optional[str] = None,
    sources: Optional[dict] = None,
) -> None:
    """Render one caregiver's payroll as a paystub.

    Args:
        console: Rich Console instance
        result: PayrollResult from calculate_payroll()
        caregiver_name: Display name (falls back to the caregiver id)
        sources: Optional provenance info (e.g., {"tax_rules": "2025.1", "w4": {...}})
    """
    if not result.is_minimum_wage_compliant:
        console.print(Panel(
            "[yellow]Effective hourly rate is below the minimum wage[/yellow]",
            title="Compliance",
            border_style="yellow"
        ))

    if sources:
        _render_sources(console, sources)

    _render_earnings_table(console, result, caregiver_name)
    _render_taxes_table(console, result)


def _render_sources(console: Console, sources: dict) -> None:
    """Render sources panel."""
    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("key", style="dim")
    table.add_column("value")

    for key, info in sources.items():
        label = key.replace("_", " ").title()
        table.add_row(label, _format_source(info))

    console.print(Panel(table, title="Sources", border_style="dim"))


def _format_source(info) -> str:
    """Format source info with color coding."""
    if not isinstance(info, dict):
        return str(info)

    source_type = info.get("type", "unknown")
    if source_type == "profile":
        return f"profile ({info.get('note', '')})"
    elif source_type == "override":
        return f"[magenta]override[/magenta] {info.get('path', '')}"
    elif source_type == "estimated":
        return f"[cyan]estimated[/cyan] ({info.get('note', '')})"
    elif source_type == "default":
        return f"[dim]default ({info.get('note', '')})[/dim]"
    else:
        return info.get("note") or info.get("path") or str(info)


def _render_earnings_table(console: Console, result: PayrollResult, caregiver_name: Optional[str]) -> None:
    wages = result.wages_by_type

    table = Table(
        title=f"Paystub: {caregiver_name or result.caregiver_id}",
        box=box.ROUNDED,
    )
    table.add_column("Earnings", style="bold", min_width=12)
    table.add_column("Hours", justify="right")
    table.add_column("Rate", justify="right")
    table.add_column("Amount", justify="right", min_width=10)

    for label, line in (
        ("Regular", wages.regular),
        ("Weekend", wages.weekend),
        ("Holiday", wages.holiday),
        ("Overtime", wages.overtime),
    ):
        if line.hours:
            table.add_row(label, _hours(line.hours), fmt_money(line.rate), fmt_money(line.subtotal))

    table.add_row(
        "[bold]Gross[/bold]",
        _hours(result.total_hours),
        "",
        f"[bold]{fmt_money(result.gross_wages)}[/bold]",
    )
    console.print(table)


def _render_taxes_table(console: Console, result: PayrollResult) -> None:
    taxes = result.taxes

    table = Table(box=box.ROUNDED)
    table.add_column("", style="bold", min_width=22)
    table.add_column("Employee", justify="right", min_width=10)
    table.add_column("Employer", justify="right", min_width=10)

    table.add_row("Federal Income Tax", fmt_money(result.federal_withholding), "")
    table.add_row("Social Security", fmt_money(taxes.social_security_employee), fmt_money(taxes.social_security_employer))
    table.add_row("Medicare", fmt_money(taxes.medicare_employee), fmt_money(taxes.medicare_employer))
    table.add_row("FAMLI", fmt_money(taxes.famli_employee), fmt_money(taxes.famli_employer))
    table.add_row("State Income Tax", fmt_money(taxes.state_income_tax), "")
    table.add_row("FUTA", "", fmt_money(taxes.futa))
    table.add_row("SUTA", "", fmt_money(taxes.suta))
    table.add_row(
        "[dim]Total[/dim]",
        f"[dim]{fmt_money(taxes.total_employee_withholdings + result.federal_withholding)}[/dim]",
        f"[dim]{fmt_money(taxes.total_employer_taxes)}[/dim]",
    )
    table.add_row("", "", "")
    table.add_row(
        "[bold green]NET PAY[/bold green]",
        f"[bold green]{fmt_money(result.net_pay)}[/bold green]",
        "",
    )

    console.print(table)
    console.print(
        f"[dim]calculation {result.calculation_version}, tax tables {result.tax_version}[/dim]"
    )


def render_payroll_summary(console: Console, results: List[PayrollResult]) -> None:
    """Render a batch payroll run, one row per caregiver."""
    table = Table(title="Payroll Summary", box=box.ROUNDED)
    table.add_column("Caregiver", style="bold")
    table.add_column("Hours", justify="right")
    table.add_column("OT", justify="right")
    table.add_column("Gross", justify="right")
    table.add_column("Withheld", justify="right")
    table.add_column("Net", justify="right")
    table.add_column("Employer Tax", justify="right")
    table.add_column("Min Wage", justify="center")

    for result in results:
        table.add_row(
            str(result.caregiver_id),
            _hours(result.total_hours),
            _hours(result.hours_by_type.overtime),
            fmt_money(result.gross_wages),
            fmt_money(result.taxes.total_employee_withholdings + result.federal_withholding),
            fmt_money(result.net_pay),
            fmt_money(result.taxes.total_employer_taxes),
            "[green]ok[/green]" if result.is_minimum_wage_compliant else "[red]below[/red]",
        )

    table.add_row(
        "[bold]Total[/bold]",
        _hours(sum(r.total_hours for r in results)),
        _hours(sum(r.hours_by_type.overtime for r in results)),
        fmt_money(sum(r.gross_wages for r in results)),
        fmt_money(sum(r.taxes.total_employee_withholdings + r.federal_withholding for r in results)),
        fmt_money(sum(r.net_pay for r in results)),
        fmt_money(sum(r.taxes.total_employer_taxes for r in results)),
        "",
    )
    console.print(table)


def render_simple_paystub(console: Console, result: SimplePayrollResult) -> None:
    """Render a flat-rate payroll result."""
    table = Table(title=f"Paystub: {result.caregiver_id}", box=box.ROUNDED)
    table.add_column("", style="bold", min_width=22)
    table.add_column("Amount", justify="right", min_width=10)

    table.add_row("Hours", _hours(result.hours_worked))
    table.add_row("Gross", fmt_money(result.gross_wages))
    table.add_row("Federal Income Tax", fmt_money(result.federal_withholding))
    table.add_row("Employee Taxes", fmt_money(result.taxes.total_employee_withholdings))
    table.add_row("[bold green]NET PAY[/bold green]", f"[bold green]{fmt_money(result.net_pay)}[/bold green]")
    console.print(table)


def _hours(hours: float) -> str:
    return f"{hours:g}"


def fmt_money(amount: float | None) -> str:
    """Format currency amount."""
    if amount is None:
        return "-"
    return f"${amount:,.2f}"
