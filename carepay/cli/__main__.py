"""Care Pay CLI - Command-line interface for caregiver payroll."""

import click

from carepay import __version__

from .calendar_commands import calendar as calendar_group
from .payroll_commands import payroll as payroll_group
from .rules_commands import rules as rules_group
from .settings_commands import settings as settings_group
from .withhold_commands import withhold as withhold_group


@click.group()
@click.version_option(version=__version__, prog_name="care-pay")
def cli():
    """Care Pay - Household caregiver payroll and tax calculations.

    Computes differential wages, overtime, statutory payroll taxes
    (FICA, FUTA, SUTA, FAMLI, state income tax) and federal withholding.

    Configuration is loaded from (in order):

    \b
    1. CARE_PAY_CONFIG_PATH environment variable
    2. settings.json 'profile' key (if set via CLI)
    3. ~/.config/care-pay/profile.yaml (XDG default)

    Run 'care-pay settings show' to see effective settings.
    """
    pass


# Add subcommand groups
cli.add_command(payroll_group)
cli.add_command(withhold_group)
cli.add_command(rules_group)
cli.add_command(calendar_group)
cli.add_command(settings_group)


def main():
    """Entry point for the CLI."""
    cli()


if __name__ == "__main__":
    main()
