"""Tariff schedule and charge constants (single-phase residential, PKR)."""

from decimal import Decimal

from meterbill.models.tariff import UNBOUNDED, Slab, TariffClass, TariffSchedule

CURRENCY = "PKR"
UNIT = "kWh"

PROTECTED_TARIFF = TariffSchedule(
    tariff_class=TariffClass.PROTECTED,
    slabs=(
        Slab(upper_bound=Decimal("100"), rate=Decimal("14.00")),
        Slab(upper_bound=Decimal("200"), rate=Decimal("25.00")),
    ),
)

# The rate falls back to 43.00 above 700 units.
STANDARD_TARIFF = TariffSchedule(
    tariff_class=TariffClass.STANDARD,
    slabs=(
        Slab(upper_bound=Decimal("100"), rate=Decimal("14.00")),
        Slab(upper_bound=Decimal("200"), rate=Decimal("25.00")),
        Slab(upper_bound=Decimal("300"), rate=Decimal("43.00")),
        Slab(upper_bound=Decimal("400"), rate=Decimal("65.00")),
        Slab(upper_bound=Decimal("700"), rate=Decimal("65.00")),
        Slab(upper_bound=UNBOUNDED, rate=Decimal("43.00")),
    ),
)

TARIFF_SCHEDULES: dict[TariffClass, TariffSchedule] = {
    TariffClass.STANDARD: STANDARD_TARIFF,
    TariffClass.PROTECTED: PROTECTED_TARIFF,
}

# Fixed charge
FIXED_CHARGE_THRESHOLD = Decimal("200")  # units, inclusive
FIXED_CHARGE_LOW = Decimal("500")
FIXED_CHARGE_HIGH = Decimal("1000")

METER_RENT = Decimal("7.08")  # 6.00 + 18% GST

# Percentages of the energy charge
ELECTRICITY_DUTY_RATE = Decimal("0.015")
GST_RATE = Decimal("0.17")

# Per-unit surcharges
FUEL_PRICE_ADJUSTMENT_RATE = Decimal("2.00")
TR_SURCHARGE_RATE = Decimal("1.00")
QTR_ADJUSTMENT_RATE = Decimal("0.50")

MUNICIPAL_UTILITY_CHARGE = Decimal("50")

# Applied to the whole bill once the pre-tax total reaches the threshold
ADVANCE_INCOME_TAX_THRESHOLD = Decimal("25000")
ADVANCE_INCOME_TAX_RATE = Decimal("0.075")

MINOR_UNIT = Decimal("0.01")
