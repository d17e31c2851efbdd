"""W-4 configuration resolution.

Resolves a caregiver's W-4 elections from an override file, the caregiver's
profile entry, or the defaults (single, no adjustments). Accepts either the
field names of W4Information or the Form W-4 step names.
"""

from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from ..schemas import FILING_STATUSES, InvalidInputError, W4Information, parse_input
from .caregivers import get_caregiver

# Form W-4 step names -> W4Information fields
STEP_KEYS = {
    "step2_checkbox": "multiple_jobs",
    "step3_dependents": "dependents_amount",
    "dependents": "dependents_amount",
    "step4a_other_income": "other_income",
    "step4b_deductions": "deductions",
    "step4c_extra_withholding": "extra_withholding",
}

FILING_STATUS_ALIASES = {
    "mfj": "married",
    "married_filing_jointly": "married",
    "hoh": "head_of_household",
}


def get_default_w4() -> Dict[str, Any]:
    """Get default W-4 settings (single, no adjustments)."""
    return W4Information.default().model_dump()


def _normalize(w4: Dict[str, Any]) -> Dict[str, Any]:
    normalized = {}
    for key, value in w4.items():
        key = STEP_KEYS.get(key, key)
        if key == "filing_status":
            value = FILING_STATUS_ALIASES.get(value, value)
        normalized[key] = value
    return normalized


def validate_w4(w4: Dict[str, Any]) -> None:
    """Validate W-4 settings dict.

    Raises:
        InvalidInputError: If validation fails
    """
    normalized = _normalize(w4)

    filing = normalized.get("filing_status")
    if filing is not None and filing not in FILING_STATUSES:
        raise InvalidInputError(f"Invalid filing_status: {filing}. Must be one of {FILING_STATUSES}")

    for field in ("dependents_amount", "other_income", "deductions", "extra_withholding"):
        value = normalized.get(field)
        if value is not None and (isinstance(value, bool) or not isinstance(value, (int, float)) or value < 0):
            raise InvalidInputError(f"{field} must be a non-negative number, got: {value}")

    # Unknown keys and remaining type errors
    parse_input(W4Information, normalized)


def merge_w4_with_defaults(w4: Optional[Dict[str, Any]]) -> W4Information:
    """Merge partial W-4 settings with defaults for any missing fields.

    Maps Form W-4 step names to W4Information fields:
    - step2_checkbox -> multiple_jobs
    - step3_dependents / dependents -> dependents_amount
    - step4a_other_income -> other_income
    - step4b_deductions -> deductions
    - step4c_extra_withholding -> extra_withholding
    - filing_status: mfj -> married, hoh -> head_of_household

    Args:
        w4: Partial W-4 settings (either naming)

    Returns:
        Complete, validated W4Information
    """
    w4 = w4 or {}
    validate_w4(w4)
    return parse_input(W4Information, {**get_default_w4(), **_normalize(w4)})


def load_w4_file(path: Path) -> Dict[str, Any]:
    """Load W-4 settings from a YAML or JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        InvalidInputError: If the settings are invalid
    """
    if not path.exists():
        raise FileNotFoundError(f"W-4 file not found: {path}")

    with open(path) as f:
        try:
            data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise InvalidInputError(f"W-4 file {path} is not valid YAML or JSON: {e}") from e

    if not isinstance(data, dict):
        raise InvalidInputError(f"W-4 file {path} must contain a mapping of W-4 fields")
    validate_w4(data)
    return data


def resolve_w4(
    caregiver_id: Optional[Union[int, str]] = None,
    override_path: Optional[Path] = None,
    profile: Optional[dict] = None,
) -> Dict[str, Any]:
    """Resolve the W-4 elections to withhold on.

    Resolution order:
    1. Override file (if provided)
    2. The caregiver's w4 block in profile.yaml
    3. Defaults

    Returns:
        Dict with:
            - w4: W4Information
            - source: Source metadata for provenance tracking

    Raises:
        CaregiverNotFoundError: If caregiver_id is given but not in the profile
    """
    if override_path:
        return {
            "w4": merge_w4_with_defaults(load_w4_file(override_path)),
            "source": {"type": "override", "path": str(override_path)},
        }

    if caregiver_id is not None:
        caregiver = get_caregiver(caregiver_id, profile)
        if caregiver.w4:
            return {
                "w4": merge_w4_with_defaults(caregiver.w4),
                "source": {"type": "profile", "note": f"caregivers[{caregiver.id}].w4"},
            }

    return {
        "w4": W4Information.default(),
        "source": {"type": "default", "note": "No W-4 on file; using single with no adjustments"},
    }
