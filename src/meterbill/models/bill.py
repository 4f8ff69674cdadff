"""Bill breakdown models returned by the calculator."""

from dataclasses import dataclass
from decimal import Decimal

from meterbill.models.tariff import TariffClass


@dataclass(frozen=True)
class SlabCharge:
    """Energy charged within one slab.

    Attributes
    ----------
    tier : int
        1-based slab position in the schedule
    lower_bound : Decimal
        Exclusive lower bound of the slab
    upper_bound : Decimal
        Inclusive upper bound of the slab
    rate : Decimal
        Price per unit
    units : Decimal
        Units billed within the slab
    amount : Decimal
        ``units * rate``
    """

    tier: int
    lower_bound: Decimal
    upper_bound: Decimal
    rate: Decimal
    units: Decimal
    amount: Decimal


@dataclass(frozen=True)
class BillBreakdown:
    """Every component of a bill.

    Components are kept unrounded; only ``total`` is rounded to the
    currency's minor unit. ``pre_tax_total`` is the sum of the
    components before advance income tax.
    """

    units: Decimal
    tariff_class: TariffClass
    slabs: tuple[SlabCharge, ...]
    unbilled_units: Decimal
    energy_charge: Decimal
    fixed_charge: Decimal
    meter_rent: Decimal
    electricity_duty: Decimal
    gst: Decimal
    fuel_price_adjustment: Decimal
    tr_surcharge: Decimal
    qtr_adjustment: Decimal
    muct: Decimal
    pre_tax_total: Decimal
    advance_income_tax: Decimal
    total: Decimal
