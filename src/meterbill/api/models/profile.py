"""Pydantic models for profile requests and responses."""

from datetime import date

from pydantic import BaseModel, Field

from meterbill.models.tariff import TariffClass


class ProfileCreate(BaseModel):
    """Request model for creating or replacing a profile.

    Attributes
    ----------
    tenant_name : str
        Name of the tenant billed for the meter
    meter_number : str
        Meter number as printed on the meter
    initial_reading : float | None
        Reading when the profile was set up
    tariff_class : TariffClass
        Schedule used for this profile's bill estimates
    """

    tenant_name: str = Field(..., description="Tenant name", min_length=1, max_length=200)
    meter_number: str = Field(..., description="Meter number", min_length=1, max_length=64)
    initial_reading: float | None = Field(
        None, description="Initial meter reading", ge=0, allow_inf_nan=False
    )
    tariff_class: TariffClass = Field(
        TariffClass.STANDARD, description="Tariff schedule (standard/protected)"
    )

    model_config = {
        "json_schema_extra": {
            "example": {
                "tenant_name": "Ground floor",
                "meter_number": "04-12345-6789012",
                "initial_reading": 1520.0,
                "tariff_class": "standard",
            }
        }
    }


class InitialReadingUpdate(BaseModel):
    """Request model for setting a profile's initial reading."""

    initial_reading: float = Field(..., ge=0, allow_inf_nan=False)


class ProfileResponse(BaseModel):
    """Response model for a profile.

    Attributes
    ----------
    id : int
        Profile id
    user_id : int
        Owner's user id
    tenant_name : str
        Tenant name
    meter_number : str
        Meter number
    tariff_class : TariffClass
        Tariff schedule of the profile
    initial_reading : float | None
        Initial meter reading
    last_consumption : float | None
        Consumption of the most recent reading
    last_reading_date : date | None
        Date of the most recent reading
    expected_bill : float | None
        Bill for the most recent consumption
    """

    id: int
    user_id: int
    tenant_name: str
    meter_number: str
    tariff_class: TariffClass
    initial_reading: float | None = None
    last_consumption: float | None = None
    last_reading_date: date | None = None
    expected_bill: float | None = None
