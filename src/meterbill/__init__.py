"""Meter profiles, readings and tariff bill estimates."""

__all__ = [
    "BillBreakdown",
    "TariffClass",
    "calculate_bill",
    "calculate_bill_breakdown",
    "compute_consumption",
]

from meterbill.models.bill import BillBreakdown
from meterbill.models.tariff import TariffClass
from meterbill.services.billing import calculate_bill, calculate_bill_breakdown
from meterbill.services.consumption import compute_consumption
