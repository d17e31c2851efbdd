"""Settings CLI commands for Care Pay.

Manages settings.json - tax year, calculation policies, profile path.
"""

import click

from carepay.sdk import (
    coerce_setting,
    get_setting,
    get_settings_path,
    load_settings,
    save_settings,
    set_setting,
)
from carepay.sdk.config import SETTINGS_SCHEMA

from . import USER_ERRORS


@click.group()
def settings():
    """Manage settings (settings.json).

    Available settings:
    - tax_year: default tax year
    - calculation_version: audit tag on payroll results
    - multiple_jobs_policy: single_schedule or none
    - minimum_wage_basis: exclude_overtime or include_overtime
    - profile: path to profile.yaml
    """
    pass


@settings.command("show")
def settings_show():
    """Show current settings and their effective values."""
    settings_path = get_settings_path()
    current = load_settings()

    click.echo(f"Settings file: {settings_path}")
    click.echo(f"File exists: {settings_path.exists()}")
    click.echo()

    click.echo("Effective settings:")
    for key in SETTINGS_SCHEMA:
        value = get_setting(key)
        marker = "" if key in current else " (default)"
        click.echo(f"  {key}: {value if value is not None else '-'}{marker}")


@settings.command("set")
@click.argument("key")
@click.argument("value")
def settings_set(key, value):
    """Set KEY to VALUE in settings.json.

    Examples:
        care-pay settings set tax_year 2025
        care-pay settings set minimum_wage_basis include_overtime
    """
    try:
        path = set_setting(key, value)
    except USER_ERRORS as e:
        raise click.ClickException(str(e))

    click.echo(f"Set {key}: {coerce_setting(key, value)}")
    click.echo(f"Saved to: {path}")


@settings.command("unset")
@click.argument("key")
def settings_unset(key):
    """Remove KEY from settings.json, reverting to its default."""
    current = load_settings()
    if key not in current:
        click.echo(f"{key} was not set.")
        return

    del current[key]
    save_settings(current)
    click.echo(f"Cleared {key} setting.")
