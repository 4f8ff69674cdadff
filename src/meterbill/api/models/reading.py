"""Pydantic models for meter readings."""

import datetime

from pydantic import BaseModel, Field


class ReadingCreate(BaseModel):
    """Request model for recording a reading.

    Attributes
    ----------
    profile_id : int
        Profile the reading belongs to
    date : date
        Reading date (YYYY-MM-DD)
    previous : float
        Previous meter reading
    current : float
        Current meter reading
    """

    profile_id: int = Field(..., gt=0)
    date: datetime.date
    previous: float = Field(..., ge=0, allow_inf_nan=False)
    current: float = Field(..., ge=0, allow_inf_nan=False)

    model_config = {
        "json_schema_extra": {
            "example": {
                "profile_id": 1,
                "date": "2025-06-01",
                "previous": 1520.0,
                "current": 1768.5,
            }
        }
    }


class ReadingResponse(BaseModel):
    """Response model for a stored reading.

    ``bill`` prices the reading's consumption on its profile's tariff class.
    """

    id: int
    profile_id: int
    date: datetime.date
    previous: float
    current: float
    consumption: float
    bill: float
