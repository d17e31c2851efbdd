"""Holiday calendar commands."""

import click

from carepay.sdk import load_profile, resolve_calendar
from carepay.sdk.calendar import parse_date

from . import USER_ERRORS


@click.group()
def calendar():
    """Holidays and day types used for differential pay."""
    pass


@calendar.command("holidays")
@click.argument("year", type=int)
def calendar_holidays(year):
    """List paid holidays in YEAR (federal plus profile.yaml holidays)."""
    try:
        holidays = resolve_calendar(load_profile(require_exists=False)).holidays(year)
    except USER_ERRORS as e:
        raise click.ClickException(str(e))

    for day, name in holidays.items():
        click.echo(f"{day.isoformat()}  {day.strftime('%a')}  {name}")


@calendar.command("day-type")
@click.argument("day")
def calendar_day_type(day):
    """Show whether DAY (YYYY-MM-DD) pays as regular, weekend or holiday."""
    try:
        lookup = resolve_calendar(load_profile(require_exists=False))
        click.echo(lookup(parse_date(day)))
    except USER_ERRORS as e:
        raise click.ClickException(str(e))
