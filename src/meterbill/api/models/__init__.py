"""Pydantic models for API request/response validation."""

__all__ = [
    "BillResponse",
    "LoginRequest",
    "ProfileResponse",
    "ReadingResponse",
    "TariffResponse",
    "TokenResponse",
]

from meterbill.api.models.auth import LoginRequest, TokenResponse
from meterbill.api.models.billing import BillResponse, TariffResponse
from meterbill.api.models.profile import ProfileResponse
from meterbill.api.models.reading import ReadingResponse
