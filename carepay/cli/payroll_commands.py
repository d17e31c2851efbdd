"""Payroll commands: run payroll from time entry files."""

import json
from pathlib import Path
from typing import Any, Dict

import click
import yaml
from rich.console import Console

from carepay.sdk import (
    calculate_multi_caregiver_payroll,
    calculate_payroll,
    calculate_simple_payroll,
    calculate_withholding,
    get_caregiver,
    get_default_year,
    get_setting,
    load_profile,
    load_tax_rules,
    resolve_calendar,
    resolve_payroll_policy,
    resolve_tax_rates,
    resolve_w4,
)
from carepay.sdk.schemas import InvalidInputError

from . import USER_ERRORS
from .renderers.paystub_renderer import render_paystub, render_payroll_summary, render_simple_paystub


def load_entries_file(path: Path) -> Any:
    """Load a YAML or JSON time entries file."""
    with open(path) as f:
        try:
            data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise InvalidInputError(f"{path} is not valid YAML or JSON: {e}") from e
    if data is None:
        raise InvalidInputError(f"{path} is empty")
    return data


def caregiver_defaults(caregiver_id, profile: dict) -> Dict[str, Any]:
    """PayrollInput fields taken from the caregiver's profile entry."""
    caregiver = get_caregiver(caregiver_id, profile)
    return {
        "caregiver_id": caregiver.id,
        "base_hourly_rate": caregiver.base_hourly_rate,
        "holiday_multiplier": caregiver.holiday_multiplier,
        "weekend_multiplier": caregiver.weekend_multiplier,
        "disable_overtime": caregiver.disable_overtime,
    }


def estimate_federal_withholding(payroll_input: dict, gross_wages: float, year: int, profile: dict) -> tuple:
    """Federal withholding for a paycheck from the caregiver's W-4.

    Returns:
        (amount, source info)
    """
    caregiver = get_caregiver(payroll_input["caregiver_id"], profile)
    w4 = resolve_w4(caregiver.id, profile=profile)
    result = calculate_withholding(
        gross_wages,
        caregiver.pay_frequency,
        w4["w4"],
        payroll_input.get("ytd_wages_before") or 0,
        rules=load_tax_rules(year),
        multiple_jobs_policy=get_setting("multiple_jobs_policy"),
    )
    source = {"type": "estimated", "note": f"{caregiver.pay_frequency}, W-4 from {w4['source']['type']}"}
    return result.federal_withholding, source


@click.group()
def payroll():
    """Run payroll for caregivers."""
    pass


@payroll.command("calc")
@click.argument("entries_file", type=click.Path(exists=True, path_type=Path))
@click.option("--caregiver", "-c", "caregiver_id", help="Caregiver id; rates and multipliers come from profile.yaml")
@click.option("--rate", "base_hourly_rate", type=float, help="Base hourly rate")
@click.option("--weekend-multiplier", type=float, help="Weekend rate multiplier (e.g., 1.5)")
@click.option("--holiday-multiplier", type=float, help="Holiday rate multiplier (e.g., 2.0)")
@click.option("--ytd", "ytd_wages_before", type=float, help="YTD wages before this pay period")
@click.option("--fit", "federal_withholding_amount", type=float, help="Federal withholding amount to deduct")
@click.option("--estimate-fit", is_flag=True, help="Compute federal withholding from the caregiver's W-4")
@click.option("--no-overtime", "disable_overtime", is_flag=True, default=None, help="Disable overtime rules")
@click.option("--year", type=int, help="Tax year (default: settings.json or newest)")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format")
def payroll_calc(entries_file, caregiver_id, base_hourly_rate, weekend_multiplier, holiday_multiplier,
                 ytd_wages_before, federal_withholding_amount, estimate_fit, disable_overtime, year,
                 output_format):
    """Calculate one pay period of payroll from ENTRIES_FILE.

    ENTRIES_FILE is YAML or JSON: either a list of time entries or a mapping
    with time_entries plus any PayrollInput fields.

    \b
        - date: 2025-03-03
          hours: 8
        - date: 2025-03-08
          hours: 6
        - date: 2025-03-10
          hours: 8
          day_type_override: holiday

    Command-line options override the file, which overrides the profile.
    """
    if estimate_fit and federal_withholding_amount is not None:
        raise click.UsageError("--fit and --estimate-fit are mutually exclusive")
    if estimate_fit and caregiver_id is None:
        raise click.UsageError("--estimate-fit requires --caregiver")

    try:
        data = load_entries_file(entries_file)
        if isinstance(data, list):
            data = {"time_entries": data}
        if not isinstance(data, dict):
            raise InvalidInputError(f"{entries_file} must contain a list of entries or a mapping")

        profile = load_profile(require_exists=False)
        year = year or get_default_year()

        defaults = caregiver_defaults(caregiver_id, profile) if caregiver_id is not None else {}
        payroll_input: Dict[str, Any] = {**defaults, **data}
        if defaults:
            payroll_input["caregiver_id"] = defaults["caregiver_id"]

        options = {
            "base_hourly_rate": base_hourly_rate,
            "weekend_multiplier": weekend_multiplier,
            "holiday_multiplier": holiday_multiplier,
            "ytd_wages_before": ytd_wages_before,
            "federal_withholding_amount": federal_withholding_amount,
            "disable_overtime": disable_overtime,
        }
        payroll_input.update({k: v for k, v in options.items() if v is not None})
        payroll_input.setdefault("caregiver_id", "caregiver")

        rates = resolve_tax_rates(year, profile)
        policy = resolve_payroll_policy(year)
        calendar = resolve_calendar(profile)

        sources = {"tax_rules": rates.version}
        result = calculate_payroll(payroll_input, rates, policy=policy, day_type_lookup=calendar)

        if estimate_fit:
            amount, sources["federal_withholding"] = estimate_federal_withholding(
                payroll_input, result.gross_wages, year, profile
            )
            payroll_input["federal_withholding_amount"] = amount
            result = calculate_payroll(payroll_input, rates, policy=policy, day_type_lookup=calendar)
    except USER_ERRORS as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    name = get_caregiver(caregiver_id, profile).name if caregiver_id is not None else None
    render_paystub(Console(), result, caregiver_name=name, sources=sources)


@payroll.command("batch")
@click.argument("batch_file", type=click.Path(exists=True, path_type=Path))
@click.option("--year", type=int, help="Tax year (default: file's year, settings.json, or newest)")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format")
def payroll_batch(batch_file, year, output_format):
    """Calculate payroll for several caregivers from BATCH_FILE.

    BATCH_FILE is YAML or JSON with a 'payrolls' list (or a bare list). Each
    item is a PayrollInput; missing rates are filled from the caregiver's
    profile entry.
    """
    try:
        data = load_entries_file(batch_file)
        if isinstance(data, list):
            data = {"payrolls": data}
        if not isinstance(data, dict) or not isinstance(data.get("payrolls"), list):
            raise InvalidInputError(f"{batch_file} must contain a 'payrolls' list")

        profile = load_profile(require_exists=False)
        year = year or data.get("year") or get_default_year()

        inputs = []
        for item in data["payrolls"]:
            if isinstance(item, dict) and "base_hourly_rate" not in item and "caregiver_id" in item:
                item = {**caregiver_defaults(item["caregiver_id"], profile), **item}
            inputs.append(item)

        results = calculate_multi_caregiver_payroll(
            inputs,
            resolve_tax_rates(year, profile),
            policy=resolve_payroll_policy(year),
            day_type_lookup=resolve_calendar(profile),
        )
    except USER_ERRORS as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps([r.model_dump(mode="json") for r in results], indent=2))
        return

    render_payroll_summary(Console(), results)


@payroll.command("quick")
@click.argument("hours", type=float)
@click.option("--rate", "hourly_rate", type=float, required=True, help="Hourly rate")
@click.option("--caregiver", "-c", "caregiver_id", default="caregiver", help="Caregiver id for the stub")
@click.option("--ytd", "ytd_wages_before", type=float, default=0, help="YTD wages before this pay period")
@click.option("--fit", "federal_withholding_amount", type=float, help="Federal withholding amount to deduct")
@click.option("--year", type=int, help="Tax year (default: settings.json or newest)")
@click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
              help="Output format")
def payroll_quick(hours, hourly_rate, caregiver_id, ytd_wages_before, federal_withholding_amount, year,
                  output_format):
    """Flat-rate payroll for HOURS at --rate (no differentials or overtime)."""
    try:
        rates = resolve_tax_rates(year, load_profile(require_exists=False))
        result = calculate_simple_payroll(
            caregiver_id, hours, hourly_rate, rates,
            federal_withholding_amount=federal_withholding_amount,
            ytd_wages_before=ytd_wages_before,
        )
    except USER_ERRORS as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps(result.model_dump(mode="json"), indent=2))
        return

    render_simple_paystub(Console(), result)
