"""Billing and consumption services."""

__all__ = [
    "advance_income_tax",
    "calculate_bill",
    "calculate_bill_breakdown",
    "compute_consumption",
    "get_schedule",
]

from meterbill.services.billing import (
    advance_income_tax,
    calculate_bill,
    calculate_bill_breakdown,
    get_schedule,
)
from meterbill.services.consumption import compute_consumption
