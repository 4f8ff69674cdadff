"""Tariff information and bill calculation routes."""

from fastapi import APIRouter

from meterbill.api.models.billing import BillRequest, BillResponse, TariffResponse
from meterbill.config.constants import (
    ADVANCE_INCOME_TAX_RATE,
    ADVANCE_INCOME_TAX_THRESHOLD,
    CURRENCY,
    ELECTRICITY_DUTY_RATE,
    FIXED_CHARGE_HIGH,
    FIXED_CHARGE_LOW,
    FIXED_CHARGE_THRESHOLD,
    FUEL_PRICE_ADJUSTMENT_RATE,
    GST_RATE,
    METER_RENT,
    MUNICIPAL_UTILITY_CHARGE,
    QTR_ADJUSTMENT_RATE,
    TR_SURCHARGE_RATE,
    UNIT,
)
from meterbill.services.billing import calculate_bill_breakdown, get_schedule

router = APIRouter(prefix="/tariffs", tags=["Tariffs"])

CHARGES = {
    "fixed_charge_threshold": float(FIXED_CHARGE_THRESHOLD),
    "fixed_charge_low": float(FIXED_CHARGE_LOW),
    "fixed_charge_high": float(FIXED_CHARGE_HIGH),
    "meter_rent": float(METER_RENT),
    "electricity_duty_rate": float(ELECTRICITY_DUTY_RATE),
    "gst_rate": float(GST_RATE),
    "fuel_price_adjustment_rate": float(FUEL_PRICE_ADJUSTMENT_RATE),
    "tr_surcharge_rate": float(TR_SURCHARGE_RATE),
    "qtr_adjustment_rate": float(QTR_ADJUSTMENT_RATE),
    "muct": float(MUNICIPAL_UTILITY_CHARGE),
    "advance_income_tax_threshold": float(ADVANCE_INCOME_TAX_THRESHOLD),
    "advance_income_tax_rate": float(ADVANCE_INCOME_TAX_RATE),
}


@router.get("/{tariff_class}", response_model=TariffResponse)
async def get_tariff(tariff_class: str) -> TariffResponse:
    """Get a tariff schedule's slabs and the charges applied on top.

    Parameters
    ----------
    tariff_class : str
        ``standard`` or ``protected``

    Returns
    -------
    TariffResponse
        Slab bounds and rates with the surcharge table

    Raises
    ------
    InvalidTariffClassError
        400 for an unknown tariff class

    Examples
    --------
    ```bash
    curl -X GET "http://localhost:8000/tariffs/standard"
    ```
    """
    schedule = get_schedule(tariff_class)
    return TariffResponse.from_schedule(schedule, UNIT, CURRENCY, CHARGES)


@router.post("/bill", response_model=BillResponse)
async def calculate(request: BillRequest) -> BillResponse:
    """Calculate an itemised bill for a consumption figure.

    Examples
    --------
    ```bash
    curl -X POST "http://localhost:8000/tariffs/bill" \\
        -H "Content-Type: application/json" \\
        -d '{"units": 250, "tariff_class": "standard"}'
    ```
    """
    bill = calculate_bill_breakdown(request.units, request.tariff_class)
    return BillResponse.from_breakdown(bill, CURRENCY)
