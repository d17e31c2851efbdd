"""Caregiver definitions from profile.yaml.

Example profile section:

    caregivers:
      - id: 1
        name: Maria
        base_hourly_rate: 22.00
        weekend_multiplier: 1.5
        holiday_multiplier: 2.0
        pay_frequency: biweekly
        w4:
          filing_status: single
          extra_withholding: 10
"""

from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

from ..config import load_profile
from ..schemas import PayFrequency, parse_input


class CaregiverNotFoundError(Exception):
    """Raised when a caregiver id is not in the profile."""

    def __init__(self, caregiver_id: Union[int, str], known_ids: List[str]):
        self.caregiver_id = caregiver_id
        super().__init__(
            f"Caregiver '{caregiver_id}' not found in profile. "
            f"Known caregivers: {', '.join(known_ids) or 'none'}"
        )


class CaregiverProfile(BaseModel):
    """One caregiver's pay settings."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    id: Union[int, str]
    name: Optional[str] = None
    base_hourly_rate: float = Field(..., ge=0, allow_inf_nan=False)
    holiday_multiplier: float = Field(default=1.0, ge=0, allow_inf_nan=False)
    weekend_multiplier: float = Field(default=1.0, ge=0, allow_inf_nan=False)
    disable_overtime: bool = False
    pay_frequency: PayFrequency = "biweekly"
    w4: Optional[dict] = Field(default=None, description="W-4 elections, see employee.w4")


def list_caregivers(profile: Optional[dict] = None) -> List[CaregiverProfile]:
    """All caregivers defined in the profile.

    Raises:
        InvalidInputError: If a caregiver entry is malformed
    """
    if profile is None:
        profile = load_profile(require_exists=False)
    return [parse_input(CaregiverProfile, c) for c in profile.get("caregivers") or []]


def get_caregiver(caregiver_id: Union[int, str], profile: Optional[dict] = None) -> CaregiverProfile:
    """Look up a caregiver by id (compared as text, so 1 and "1" match).

    Raises:
        CaregiverNotFoundError: If no caregiver has that id
    """
    caregivers = list_caregivers(profile)
    for caregiver in caregivers:
        if str(caregiver.id) == str(caregiver_id):
            return caregiver
    raise CaregiverNotFoundError(caregiver_id, [str(c.id) for c in caregivers])
