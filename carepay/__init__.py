"""Care Pay - household caregiver payroll and tax calculations."""

__version__ = "0.3.0"
