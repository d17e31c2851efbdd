"""Tax rules loading from versioned YAML files.

One file per tax year under carepay/tax_rules/YYYY.yaml. Calculation code
never hardcodes a year's numbers; it receives TaxRates / TaxRules loaded here.
"""

import logging
from functools import lru_cache
from pathlib import Path
from typing import Union

import yaml
from pydantic import ValidationError

from .schemas import TaxRates, TaxRules

logger = logging.getLogger(__name__)


class TaxRulesNotFoundError(Exception):
    """Raised when no tax rules file exists for a year."""

    def __init__(self, year: Union[int, str], rules_dir: Path):
        self.year = year
        self.rules_dir = rules_dir
        super().__init__(
            f"Tax rules not found for year {year} in {rules_dir}. "
            f"Available years: {', '.join(str(y) for y in get_available_years()) or 'none'}"
        )


def _get_tax_rules_dir() -> Path:
    """Get the tax_rules directory path."""
    return Path(__file__).parent.parent.parent / "tax_rules"  # taxes -> sdk -> carepay


def get_available_years() -> list[int]:
    """Get sorted list of available tax rule years (descending)."""
    rules_dir = _get_tax_rules_dir()
    years = [int(p.stem) for p in rules_dir.glob("*.yaml") if p.stem.isdigit()]
    return sorted(years, reverse=True)


@lru_cache(maxsize=16)
def load_tax_rules(year: Union[int, str]) -> TaxRules:
    """Load and validate tax rules for a specific year.

    Args:
        year: Tax year (e.g., 2026 or "2026")

    Returns:
        Validated, immutable TaxRules

    Raises:
        TaxRulesNotFoundError: If tax_rules/{year}.yaml doesn't exist
        ValueError: If the file fails schema validation
    """
    rules_dir = _get_tax_rules_dir()
    config_file = rules_dir / f"{year}.yaml"
    if not config_file.exists():
        raise TaxRulesNotFoundError(year, rules_dir)

    with open(config_file, "r") as f:
        data = yaml.safe_load(f) or {}

    # Statutory rates inherit the file's version tag unless they set their own
    statutory = data.get("statutory")
    if isinstance(statutory, dict):
        statutory.setdefault("version", data.get("version", str(year)))

    try:
        rules = TaxRules.model_validate(data)
    except ValidationError as e:
        raise ValueError(f"Invalid tax rules in {config_file}:\n{e}") from e

    logger.debug(f"Loaded tax rules {rules.version} from {config_file}")
    return rules


def get_tax_rates(year: Union[int, str]) -> TaxRates:
    """Get the statutory payroll tax rates for a year."""
    return load_tax_rules(year).statutory
