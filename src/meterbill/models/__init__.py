"""Domain models for tariffs and bills."""

__all__ = ["BillBreakdown", "Slab", "SlabCharge", "TariffClass", "TariffSchedule", "TariffTier"]

from meterbill.models.bill import BillBreakdown, SlabCharge
from meterbill.models.tariff import Slab, TariffClass, TariffSchedule, TariffTier
