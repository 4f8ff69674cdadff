"""Pydantic models for tariff and bill responses."""

from pydantic import BaseModel, Field

from meterbill.models.bill import BillBreakdown
from meterbill.models.tariff import TariffClass, TariffSchedule


def _bound(value) -> float | str:
    return float(value) if value.is_finite() else "inf"


class BillRequest(BaseModel):
    """Request for a bill calculation.

    Attributes
    ----------
    units : float
        Consumption for the billing period
    tariff_class : TariffClass
        Schedule to apply
    """

    units: float = Field(..., description="Consumption in kWh", ge=0, allow_inf_nan=False)
    tariff_class: TariffClass = Field(..., description="Tariff schedule (standard/protected)")

    model_config = {"json_schema_extra": {"example": {"units": 250, "tariff_class": "standard"}}}


class TierBreakdown(BaseModel):
    """Tariff tier breakdown.

    Attributes
    ----------
    tier : int
        Tier number
    range : str
        Consumption range for this tier
    rate : float
        Rate per unit
    consumption : float
        Consumption in this tier
    cost : float
        Cost for this tier
    """

    tier: int
    range: str
    rate: float
    consumption: float
    cost: float


class BillResponse(BaseModel):
    """Itemised bill.

    Component amounts are unrounded; ``total`` is rounded to 2 decimals.
    """

    units: float
    tariff_class: TariffClass
    currency: str
    breakdown: list[TierBreakdown]
    unbilled_units: float
    energy_charge: float
    fixed_charge: float
    meter_rent: float
    electricity_duty: float
    gst: float
    fuel_price_adjustment: float
    tr_surcharge: float
    qtr_adjustment: float
    muct: float
    pre_tax_total: float
    advance_income_tax: float
    total: float

    @classmethod
    def from_breakdown(cls, bill: BillBreakdown, currency: str) -> "BillResponse":
        """Build the response from a calculator breakdown."""
        return cls(
            units=float(bill.units),
            tariff_class=bill.tariff_class,
            currency=currency,
            breakdown=[
                TierBreakdown(
                    tier=slab.tier,
                    range=f"{slab.lower_bound}-{slab.upper_bound if slab.upper_bound.is_finite() else 'inf'}",
                    rate=float(slab.rate),
                    consumption=float(slab.units),
                    cost=float(slab.amount),
                )
                for slab in bill.slabs
            ],
            unbilled_units=float(bill.unbilled_units),
            energy_charge=float(bill.energy_charge),
            fixed_charge=float(bill.fixed_charge),
            meter_rent=float(bill.meter_rent),
            electricity_duty=float(bill.electricity_duty),
            gst=float(bill.gst),
            fuel_price_adjustment=float(bill.fuel_price_adjustment),
            tr_surcharge=float(bill.tr_surcharge),
            qtr_adjustment=float(bill.qtr_adjustment),
            muct=float(bill.muct),
            pre_tax_total=float(bill.pre_tax_total),
            advance_income_tax=float(bill.advance_income_tax),
            total=float(bill.total),
        )


class TariffTier(BaseModel):
    """Tariff tier information.

    Attributes
    ----------
    lower_bound : float
        Lower consumption bound (exclusive)
    upper_bound : float | str
        Upper consumption bound ("inf" for infinity)
    rate : float
        Rate per unit
    """

    lower_bound: float
    upper_bound: float | str
    rate: float


class TariffResponse(BaseModel):
    """Tariff information response.

    Attributes
    ----------
    tariff_class : TariffClass
        Schedule described
    unit : str
        Unit of measurement
    currency : str
        Currency of the rates
    tiers : list[TariffTier]
        List of tariff tiers
    charges : dict[str, float]
        Fixed amounts and rates applied on top of the energy charge
    """

    tariff_class: TariffClass
    unit: str
    currency: str
    tiers: list[TariffTier]
    charges: dict[str, float]

    @classmethod
    def from_schedule(
        cls, schedule: TariffSchedule, unit: str, currency: str, charges: dict[str, float]
    ) -> "TariffResponse":
        """Build the response from a slab schedule."""
        return cls(
            tariff_class=schedule.tariff_class,
            unit=unit,
            currency=currency,
            tiers=[
                TariffTier(
                    lower_bound=float(tier.lower_bound),
                    upper_bound=_bound(tier.upper_bound),
                    rate=float(tier.rate),
                )
                for tier in schedule.tiers
            ],
            charges=charges,
        )
