"""Federal withholding commands."""

import json
from pathlib import Path
from typing import Optional

import click
from rich.console import Console

from carepay.sdk import (
    W4Information,
    calculate_withholding,
    estimate_annual_tax,
    get_caregiver,
    get_default_year,
    get_setting,
    load_profile,
    load_settings,
    load_tax_rules,
    resolve_w4,
)
from carepay.sdk.employee.w4 import merge_w4_with_defaults
from carepay.sdk.schemas import FILING_STATUSES
from carepay.sdk.taxes.withholding import ESTIMATE_MULTIPLE_JOBS_POLICY, MULTIPLE_JOBS_POLICIES, PAY_PERIODS

from . import USER_ERRORS
from .renderers.withholding_renderer import render_annual_estimate, render_withholding


def w4_options(f):
    """W-4 election options shared by the withholding commands."""
    options = [
        click.option("--caregiver", "-c", "caregiver_id", help="Use this caregiver's W-4 from profile.yaml"),
        click.option("--w4-file", type=click.Path(exists=True, path_type=Path),
                     help="YAML/JSON file with W-4 elections (overrides the profile)"),
        click.option("--filing-status", type=click.Choice(FILING_STATUSES), help="W-4 Step 1(c)"),
        click.option("--multiple-jobs/--no-multiple-jobs", default=None, help="W-4 Step 2(c) checkbox"),
        click.option("--dependents", type=float, help="W-4 Step 3 dependents amount (annual)"),
        click.option("--other-income", type=float, help="W-4 Step 4(a) other income (annual)"),
        click.option("--deductions", type=float, help="W-4 Step 4(b) deductions (annual)"),
        click.option("--extra", "extra_withholding", type=float, help="W-4 Step 4(c) extra per paycheck"),
        click.option("--policy", "multiple_jobs_policy", type=click.Choice(tuple(MULTIPLE_JOBS_POLICIES)),
                     help="Multiple jobs policy (default: settings.json or single_schedule)"),
        click.option("--year", type=int, help="Tax year (default: settings.json or newest)"),
        click.option("--format", "output_format", type=click.Choice(["table", "json"]), default="table",
                     help="Output format"),
    ]
    for option in reversed(options):
        f = option(f)
    return f


def build_w4(
    caregiver_id: Optional[str],
    w4_file: Optional[Path],
    profile: dict,
    **overrides,
) -> tuple[W4Information, dict]:
    """Resolve the W-4 from file/profile/defaults, then apply command-line overrides.

    Returns:
        (W4Information, source info)
    """
    resolved = resolve_w4(caregiver_id, override_path=w4_file, profile=profile)
    w4, source = resolved["w4"], resolved["source"]

    given = {k: v for k, v in overrides.items() if v is not None}
    if given:
        w4 = merge_w4_with_defaults({**w4.model_dump(), **given})
        source = {**source, "cli_overrides": sorted(given)}
    return w4, source


@click.group()
def withhold():
    """Federal income tax withholding (IRS Pub 15-T percentage method)."""
    pass


@withhold.command("calc")
@click.argument("gross", type=float)
@click.option("--frequency", type=click.Choice(tuple(PAY_PERIODS)),
              help="Pay frequency (default: caregiver's, else biweekly)")
@click.option("--ytd", "ytd_wages_before", type=float, default=0, help="YTD wages before this paycheck")
@w4_options
def withhold_calc(gross, frequency, ytd_wages_before, caregiver_id, w4_file, filing_status, multiple_jobs,
                  dependents, other_income, deductions, extra_withholding, multiple_jobs_policy, year,
                  output_format):
    """Calculate federal withholding and FICA for one paycheck of GROSS.

    Examples:

    \b
        care-pay withhold calc 949.90
        care-pay withhold calc 1200 --caregiver 1 --year 2025
        care-pay withhold calc 1200 --filing-status married --extra 25
    """
    try:
        profile = load_profile(require_exists=False)
        w4, source = build_w4(
            caregiver_id, w4_file, profile,
            filing_status=filing_status,
            multiple_jobs=multiple_jobs,
            dependents_amount=dependents,
            other_income=other_income,
            deductions=deductions,
            extra_withholding=extra_withholding,
        )
        if frequency is None:
            frequency = get_caregiver(caregiver_id, profile).pay_frequency if caregiver_id else "biweekly"

        rules = load_tax_rules(year or get_default_year())
        result = calculate_withholding(
            gross,
            frequency,
            w4,
            ytd_wages_before,
            rules=rules,
            multiple_jobs_policy=multiple_jobs_policy or get_setting("multiple_jobs_policy"),
        )
    except USER_ERRORS as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        output = {
            "year": rules.year,
            "pay_frequency": frequency,
            "w4": w4.model_dump(),
            "w4_source": source,
            **result.model_dump(mode="json"),
        }
        click.echo(json.dumps(output, indent=2))
        return

    render_withholding(Console(), result, w4, frequency)


@withhold.command("estimate")
@click.argument("annual", type=float)
@w4_options
def withhold_estimate(annual, caregiver_id, w4_file, filing_status, multiple_jobs, dependents, other_income,
                      deductions, extra_withholding, multiple_jobs_policy, year, output_format):
    """Estimate a full year's federal income tax and FICA on ANNUAL wages.

    Step 2(c) is ignored unless --policy or the multiple_jobs_policy setting
    is given.
    """
    try:
        profile = load_profile(require_exists=False)
        w4, source = build_w4(
            caregiver_id, w4_file, profile,
            filing_status=filing_status,
            multiple_jobs=multiple_jobs,
            dependents_amount=dependents,
            other_income=other_income,
            deductions=deductions,
            extra_withholding=extra_withholding,
        )
        rules = load_tax_rules(year or get_default_year())
        if multiple_jobs_policy is None:
            multiple_jobs_policy = load_settings().get("multiple_jobs_policy", ESTIMATE_MULTIPLE_JOBS_POLICY)
        estimate = estimate_annual_tax(annual, w4, rules=rules, multiple_jobs_policy=multiple_jobs_policy)
    except USER_ERRORS as e:
        raise click.ClickException(str(e))

    if output_format == "json":
        click.echo(json.dumps({"year": rules.year, "w4_source": source, **estimate.model_dump()}, indent=2))
        return

    render_annual_estimate(Console(), estimate)
