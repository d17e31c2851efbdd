"""Care Pay CLI - click command groups and rich renderers."""

from carepay.sdk import (
    CaregiverNotFoundError,
    InvalidInputError,
    ProfileNotFoundError,
    TaxRulesNotFoundError,
)

# SDK errors that are the user's to fix; commands turn them into ClickException
USER_ERRORS = (
    InvalidInputError,
    TaxRulesNotFoundError,
    ProfileNotFoundError,
    CaregiverNotFoundError,
    FileNotFoundError,
)
