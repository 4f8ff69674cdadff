"""Tariff bill calculator.

Converts a period's consumption into the payable amount using progressive
slab pricing, fixed charges, per-unit surcharges and the advance income tax
cliff. All arithmetic is done in ``Decimal`` and rounded once at the end.
"""

import logging
from decimal import MAX_EMAX, MIN_EMIN, ROUND_HALF_UP, Context, Decimal, getcontext, localcontext
from numbers import Real

from meterbill.config.constants import (
    ADVANCE_INCOME_TAX_RATE,
    ADVANCE_INCOME_TAX_THRESHOLD,
    ELECTRICITY_DUTY_RATE,
    FIXED_CHARGE_HIGH,
    FIXED_CHARGE_LOW,
    FIXED_CHARGE_THRESHOLD,
    FUEL_PRICE_ADJUSTMENT_RATE,
    GST_RATE,
    METER_RENT,
    MINOR_UNIT,
    MUNICIPAL_UTILITY_CHARGE,
    QTR_ADJUSTMENT_RATE,
    TARIFF_SCHEDULES,
    TR_SURCHARGE_RATE,
)
from meterbill.exceptions.errors import InvalidConsumptionError
from meterbill.models.bill import BillBreakdown, SlabCharge
from meterbill.models.tariff import TariffClass, TariffSchedule

logger = logging.getLogger(__name__)

ZERO = Decimal(0)


def to_units(units: Decimal | float | int) -> Decimal:
    """Validate a consumption value and convert it to ``Decimal``.

    Parameters
    ----------
    units : Decimal | float | int
        Consumption for the billing period

    Returns
    -------
    Decimal
        The same quantity as a finite, non-negative ``Decimal``

    Raises
    ------
    InvalidConsumptionError
        If units is not a real number, is NaN or infinite, or is negative

    Notes
    -----
    Floats go through ``str`` so ``50.5`` becomes ``Decimal("50.5")`` rather
    than its binary expansion.
    """
    if isinstance(units, bool) or not isinstance(units, (Decimal, Real)):
        raise InvalidConsumptionError(
            f"Consumption must be a real number, got {type(units).__name__}"
        )

    if isinstance(units, Decimal):
        value = units
    elif isinstance(units, int):
        value = Decimal(units)
    else:
        value = Decimal(str(float(units)))

    if not value.is_finite():
        raise InvalidConsumptionError(f"Consumption must be finite, got {units}")
    if value < 0:
        raise InvalidConsumptionError(f"Consumption cannot be negative, got {units}")
    return value


def exact_context(*values: Decimal) -> Context:
    """Decimal context wide enough that sums and products of ``values`` stay exact.

    The default 28 digits cannot hold the total for very large consumption,
    which makes ``quantize`` fail.
    """
    context = getcontext().copy()
    digits = max(
        (max(value.adjusted(), 0) + max(-value.as_tuple().exponent, 0) + 1 for value in values),
        default=0,
    )
    context.prec = max(context.prec, digits + 40)
    context.Emax = MAX_EMAX
    context.Emin = MIN_EMIN
    return context


def get_schedule(tariff_class: TariffClass | str) -> TariffSchedule:
    """Return the slab schedule for a tariff class."""
    return TARIFF_SCHEDULES[TariffClass.parse(tariff_class)]


def energy_charge(
    units: Decimal, schedule: TariffSchedule
) -> tuple[Decimal, tuple[SlabCharge, ...], Decimal]:
    """Walk the schedule and price each slab.

    Parameters
    ----------
    units : Decimal
        Validated consumption
    schedule : TariffSchedule
        Slabs to apply, in ascending order

    Returns
    -------
    tuple[Decimal, tuple[SlabCharge, ...], Decimal]
        Energy charge, per-slab lines, and units left unbilled because the
        schedule ran out of slabs
    """
    total = ZERO
    lines = []
    remaining = units

    for tier in schedule.tiers:
        if remaining <= 0:
            break
        billed = min(remaining, tier.upper_bound - tier.lower_bound)
        amount = billed * tier.rate
        lines.append(
            SlabCharge(
                tier=len(lines) + 1,
                lower_bound=tier.lower_bound,
                upper_bound=tier.upper_bound,
                rate=tier.rate,
                units=billed,
                amount=amount,
            )
        )
        total += amount
        remaining -= billed

    if remaining > 0:
        logger.warning(
            f"{remaining} units above {schedule.max_billed_units} left unbilled "
            f"by the {schedule.tariff_class.value} schedule"
        )

    return total, tuple(lines), remaining


def advance_income_tax(pre_tax_total: Decimal) -> Decimal:
    """Advance income tax owed on a pre-tax total.

    The rate applies to the whole bill once the total reaches the threshold,
    so 24999.99 owes nothing and 25000.00 owes 1875.00.
    """
    if pre_tax_total >= ADVANCE_INCOME_TAX_THRESHOLD:
        return pre_tax_total * ADVANCE_INCOME_TAX_RATE
    return ZERO


def calculate_bill_breakdown(
    units: Decimal | float | int,
    tariff_class: TariffClass | str = TariffClass.STANDARD,
) -> BillBreakdown:
    """Compute every component of the bill for a consumption.

    Parameters
    ----------
    units : Decimal | float | int
        Non-negative consumption for the billing period
    tariff_class : TariffClass | str, optional
        Schedule to apply, by default ``TariffClass.STANDARD``

    Returns
    -------
    BillBreakdown
        Itemised bill with the rounded ``total``

    Raises
    ------
    InvalidConsumptionError
        If units is negative, non-finite, or not a number
    InvalidTariffClassError
        If tariff_class is not a known schedule
    """
    quantity = to_units(units)
    schedule = get_schedule(tariff_class)

    with localcontext(exact_context(quantity)):
        energy, lines, unbilled = energy_charge(quantity, schedule)

        fixed_charge = FIXED_CHARGE_LOW if quantity <= FIXED_CHARGE_THRESHOLD else FIXED_CHARGE_HIGH
        components = {
            "energy_charge": energy,
            "fixed_charge": fixed_charge,
            "meter_rent": METER_RENT,
            "electricity_duty": energy * ELECTRICITY_DUTY_RATE,
            "gst": energy * GST_RATE,
            "fuel_price_adjustment": quantity * FUEL_PRICE_ADJUSTMENT_RATE,
            "tr_surcharge": quantity * TR_SURCHARGE_RATE,
            "qtr_adjustment": quantity * QTR_ADJUSTMENT_RATE,
            "muct": MUNICIPAL_UTILITY_CHARGE,
        }
        pre_tax_total = sum(components.values(), ZERO)
        income_tax = advance_income_tax(pre_tax_total)
        total = (pre_tax_total + income_tax).quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)

    logger.debug(
        f"Bill for {quantity} units ({schedule.tariff_class.value}): "
        f"energy={energy}, pre-tax={pre_tax_total}, total={total}"
    )

    return BillBreakdown(
        units=quantity,
        tariff_class=schedule.tariff_class,
        slabs=lines,
        unbilled_units=unbilled,
        pre_tax_total=pre_tax_total,
        advance_income_tax=income_tax,
        total=total,
        **components,
    )


def calculate_bill(
    units: Decimal | float | int,
    tariff_class: TariffClass | str = TariffClass.STANDARD,
) -> Decimal:
    """Total payable amount for a consumption, rounded to 2 decimals.

    Examples
    --------
    >>> calculate_bill(0)
    Decimal('557.08')
    >>> calculate_bill(100)
    Decimal('2566.08')
    """
    return calculate_bill_breakdown(units, tariff_class).total
