"""Consumption between two meter readings."""

from decimal import Decimal, localcontext

from meterbill.exceptions.errors import InvalidConsumptionError, InvalidReadingError
from meterbill.services.billing import exact_context, to_units


def compute_consumption(previous: Decimal | float | int, current: Decimal | float | int) -> Decimal:
    """Units consumed between a previous and a current meter reading.

    Parameters
    ----------
    previous : Decimal | float | int
        Earlier meter reading
    current : Decimal | float | int
        Later meter reading

    Returns
    -------
    Decimal
        ``current - previous``, computed exactly

    Raises
    ------
    InvalidReadingError
        If either reading is not a finite non-negative number, or the
        current reading is below the previous one
    """
    try:
        previous_value = to_units(previous)
        current_value = to_units(current)
    except InvalidConsumptionError as e:
        raise InvalidReadingError(f"Invalid meter reading: {e}") from e

    if current_value < previous_value:
        raise InvalidReadingError("Current reading must be greater than previous")
    with localcontext(exact_context(previous_value, current_value)):
        return current_value - previous_value
