"""Configuration management for Care Pay.

Configuration is split into two files:

1. settings.json - Machine-specific settings
   - tax_year: default tax year for commands that take --year
   - calculation_version: audit tag stamped on payroll results
   - multiple_jobs_policy: how W-4 Step 2(c) affects withholding
   - minimum_wage_basis: hours used for the minimum-wage check
   - profile: path to profile.yaml (optional, if not colocated)

2. profile.yaml - The household's payroll configuration
   - employer: overrides for the year's tax rates (e.g., assigned SUTA rate)
   - holidays: extra paid holidays beyond the federal ones
   - caregivers: id, name, rates, pay frequency and W-4 per caregiver

Config directory resolution:
1. CARE_PAY_CONFIG_PATH environment variable (if set)
2. ~/.config/care-pay/ (XDG_CONFIG_HOME fallback)
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml

from .calendar import HolidayCalendar
from .payroll import DEFAULT_CALCULATION_VERSION, MINIMUM_WAGE_BASES, PayrollPolicy
from .schemas import InvalidInputError, parse_input
from .taxes.rules import get_available_years, load_tax_rules
from .taxes.schemas import TaxRates
from .taxes.withholding import DEFAULT_MULTIPLE_JOBS_POLICY, MULTIPLE_JOBS_POLICIES

logger = logging.getLogger(__name__)

APP_NAME = "care-pay"
SETTINGS_FILENAME = "settings.json"
PROFILE_FILENAME = "profile.yaml"

# Known settings: key -> (default, allowed values or None for free-form)
SETTINGS_SCHEMA = {
    "tax_year": (None, None),
    "calculation_version": (DEFAULT_CALCULATION_VERSION, None),
    "multiple_jobs_policy": (DEFAULT_MULTIPLE_JOBS_POLICY, tuple(MULTIPLE_JOBS_POLICIES)),
    "minimum_wage_basis": ("exclude_overtime", MINIMUM_WAGE_BASES),
    "profile": (None, None),
}


class ProfileNotFoundError(Exception):
    """Raised when no profile is found."""
    pass


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Resolution order:
    1. CARE_PAY_CONFIG_PATH environment variable
    2. ~/.config/care-pay/ (XDG_CONFIG_HOME)
    """
    env_path = os.environ.get("CARE_PAY_CONFIG_PATH")
    if env_path:
        return Path(env_path)

    xdg_config_home = os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config")
    return Path(xdg_config_home) / APP_NAME


def get_settings_path() -> Path:
    """Get the path to settings.json (may not exist yet)."""
    return get_config_dir() / SETTINGS_FILENAME


def load_settings() -> dict:
    """Load machine-specific settings from settings.json.

    Returns:
        Settings dictionary (empty dict if file doesn't exist)
    """
    settings_file = get_settings_path()

    if not settings_file.exists():
        return {}

    with open(settings_file, "r") as f:
        return json.load(f)


def save_settings(settings: dict) -> Path:
    """Save machine-specific settings to settings.json.

    Returns:
        Path to the saved settings file
    """
    config_dir = get_config_dir()
    config_dir.mkdir(parents=True, exist_ok=True)

    settings_file = config_dir / SETTINGS_FILENAME

    with open(settings_file, "w") as f:
        json.dump(settings, f, indent=2)

    return settings_file


def get_setting(key: str, default: Any = None) -> Any:
    """Get a setting value, falling back to the known default for the key."""
    settings = load_settings()
    if key in settings:
        return settings[key]
    if default is None and key in SETTINGS_SCHEMA:
        return SETTINGS_SCHEMA[key][0]
    return default


def coerce_setting(key: str, value: Any) -> Any:
    """Validate a setting value (e.g., from the command line) and convert its type.

    Raises:
        InvalidInputError: If the key is unknown or the value is not allowed
    """
    if key not in SETTINGS_SCHEMA:
        raise InvalidInputError(f"Unknown setting: {key}. Known settings: {', '.join(SETTINGS_SCHEMA)}")

    _, allowed = SETTINGS_SCHEMA[key]
    if key == "tax_year":
        try:
            return int(value)
        except (TypeError, ValueError) as e:
            raise InvalidInputError(f"tax_year must be a year, got: {value}") from e
    if allowed is not None and value not in allowed:
        raise InvalidInputError(f"Invalid {key}: {value}. Must be one of {allowed}")
    return value


def set_setting(key: str, value: Any) -> Path:
    """Validate and set a setting value in settings.json.

    Returns:
        Path to the saved settings file
    """
    settings = load_settings()
    settings[key] = coerce_setting(key, value)
    return save_settings(settings)


def get_profile_path(require_exists: bool = False) -> Path:
    """Get the path to the profile.yaml file.

    Resolution order:
    1. settings.json "profile" key (if set)
    2. profile.yaml in config directory

    Raises:
        ProfileNotFoundError: If require_exists=True and no profile found
    """
    custom_profile = load_settings().get("profile")
    if custom_profile:
        profile_path = Path(custom_profile)
        if require_exists and not profile_path.exists():
            raise ProfileNotFoundError(
                f"Profile not found at configured path: {profile_path}\n\n"
                f"Update with: care-pay settings set profile /path/to/profile.yaml"
            )
        return profile_path

    profile_path = get_config_dir() / PROFILE_FILENAME
    if require_exists and not profile_path.exists():
        raise ProfileNotFoundError(
            f"No profile found. Checked:\n"
            f"  1. settings.json 'profile' key (not set)\n"
            f"  2. {profile_path} (not found)\n\n"
            f"Or set a custom path: care-pay settings set profile /path/to/profile.yaml"
        )
    return profile_path


def load_profile(require_exists: bool = True) -> dict:
    """Load the household profile from profile.yaml.

    Args:
        require_exists: If True, raises ProfileNotFoundError if not found

    Returns:
        Profile dictionary (empty dict if not required and not found)
    """
    profile_path = get_profile_path(require_exists=require_exists)

    if not profile_path.exists():
        return {}

    with open(profile_path, "r") as f:
        return yaml.safe_load(f) or {}


def save_profile(profile: dict, path: Optional[Path] = None) -> Path:
    """Save the household profile to profile.yaml."""
    if path is None:
        path = get_profile_path(require_exists=False)

    path.parent.mkdir(parents=True, exist_ok=True)

    with open(path, "w") as f:
        yaml.dump(profile, f, default_flow_style=False, sort_keys=False)

    return path


# =============================================================================
# Resolution of calculation inputs
# =============================================================================


def get_default_year() -> int:
    """Tax year from settings.json, else the newest year with shipped rules."""
    year = get_setting("tax_year")
    if year:
        return int(year)
    return get_available_years()[0]


def resolve_tax_rates(year: Optional[Union[int, str]] = None, profile: Optional[dict] = None) -> TaxRates:
    """Statutory rates for a year with the employer's profile overrides applied.

    Args:
        year: Tax year (default: get_default_year())
        profile: Household profile (default: loaded from profile.yaml if present)

    Returns:
        TaxRates; version is suffixed with '+employer' when overrides apply

    Raises:
        TaxRulesNotFoundError: If no rules exist for the year
        InvalidInputError: If an override key or value is invalid
    """
    year = year or get_default_year()
    if profile is None:
        profile = load_profile(require_exists=False)

    rates = load_tax_rules(year).statutory
    overrides = profile.get("employer") or {}
    if not overrides:
        return rates

    merged = {**rates.model_dump(), **overrides}
    if "version" not in overrides:
        merged["version"] = f"{rates.version}+employer"
    logger.debug(f"Employer rate overrides for {year}: {sorted(overrides)}")
    return parse_input(TaxRates, merged)


def resolve_payroll_policy(year: Optional[Union[int, str]] = None, settings: Optional[dict] = None) -> PayrollPolicy:
    """Minimum wage for the year plus the policy switches from settings.json."""
    year = year or get_default_year()
    if settings is None:
        settings = load_settings()

    return PayrollPolicy(
        minimum_wage=load_tax_rules(year).minimum_wage,
        minimum_wage_basis=settings.get("minimum_wage_basis", "exclude_overtime"),
        calculation_version=settings.get("calculation_version", DEFAULT_CALCULATION_VERSION),
    )


def resolve_calendar(profile: Optional[dict] = None) -> HolidayCalendar:
    """Holiday calendar with the profile's extra household holidays."""
    if profile is None:
        profile = load_profile(require_exists=False)
    return HolidayCalendar(profile.get("holidays") or [])
