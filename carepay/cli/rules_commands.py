"""Tax rules inspection commands."""

import json

import click
from rich import box
from rich.console import Console
from rich.table import Table

from carepay.sdk import get_available_years, load_tax_rules

from . import USER_ERRORS


@click.group()
def rules():
    """Inspect the shipped tax rules (tax_rules/{year}.yaml)."""
    pass


@rules.command("list")
def rules_list():
    """List tax years with rules available."""
    for year in get_available_years():
        tax_rules = load_tax_rules(year)
        click.echo(f"{year}  version {tax_rules.version}  minimum wage ${tax_rules.minimum_wage:.2f}")


@rules.command("show")
@click.argument("year", type=int)
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format")
def rules_show(year, output_format):
    """Show statutory rates and withholding brackets for YEAR."""
    try:
        tax_rules = load_tax_rules(year)
    except USER_ERRORS as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(tax_rules.model_dump(), indent=2))
        return

    console = Console()
    statutory = tax_rules.statutory

    rates = Table(title=f"{year} Statutory Rates ({tax_rules.version})", box=box.ROUNDED)
    rates.add_column("Tax", style="bold")
    rates.add_column("Employee", justify="right")
    rates.add_column("Employer", justify="right")
    rates.add_column("Wage Base", justify="right")
    rates.add_row("Social Security", _pct(statutory.ss_rate_employee), _pct(statutory.ss_rate_employer),
                  f"${statutory.ss_wage_base:,.0f}")
    rates.add_row("Medicare", _pct(statutory.medicare_rate_employee), _pct(statutory.medicare_rate_employer), "-")
    rates.add_row("FUTA", "", _pct(statutory.futa_rate), f"${statutory.futa_wage_base:,.0f}")
    rates.add_row("SUTA", "", _pct(statutory.suta_rate), f"${statutory.suta_wage_base:,.0f}")
    rates.add_row("FAMLI", _pct(statutory.famli_rate_employee), _pct(statutory.famli_rate_employer), "-")
    rates.add_row("State Income Tax", _pct(statutory.state_income_tax_rate), "", "-")
    console.print(rates)
    console.print(f"Minimum wage: ${tax_rules.minimum_wage:.2f}")

    for status, brackets in tax_rules.federal.brackets.items():
        table = Table(
            title=f"{status} (standard deduction ${tax_rules.federal.standard_deductions[status]:,.0f})",
            box=box.SIMPLE,
        )
        table.add_column("Taxable income", justify="right")
        table.add_column("Rate", justify="right")
        for bracket in brackets:
            if bracket.up_to is not None:
                table.add_row(f"up to ${bracket.up_to:,.0f}", _pct(bracket.rate))
            else:
                table.add_row(f"over ${bracket.over or 0:,.0f}", _pct(bracket.rate))
        console.print(table)


def _pct(rate: float) -> str:
    return f"{rate * 100:.2f}%"
