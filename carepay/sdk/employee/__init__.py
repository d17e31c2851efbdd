"""employee - Caregiver configuration.

Scope:
- Caregiver pay settings from profile.yaml (caregivers.py)
- W-4 resolution with defaults and Form W-4 step names (w4.py)

Usage:
    from carepay.sdk.employee import get_caregiver, resolve_w4

    caregiver = get_caregiver(1)
    w4 = resolve_w4(1)["w4"]
"""

from .caregivers import CaregiverNotFoundError, CaregiverProfile, get_caregiver, list_caregivers
from .w4 import get_default_w4, merge_w4_with_defaults, resolve_w4, validate_w4

__all__ = [
    # Caregivers
    "CaregiverNotFoundError",
    "CaregiverProfile",
    "get_caregiver",
    "list_caregivers",
    # W-4
    "get_default_w4",
    "merge_w4_with_defaults",
    "resolve_w4",
    "validate_w4",
]
