"""Exceptions raised by meterbill."""

__all__ = [
    "InvalidConsumptionError",
    "InvalidReadingError",
    "InvalidTariffClassError",
    "LoginError",
    "MeterbillError",
    "ProfileNotFoundError",
    "ReadingNotFoundError",
    "UserExistsError",
]

from meterbill.exceptions.errors import (
    InvalidConsumptionError,
    InvalidReadingError,
    InvalidTariffClassError,
    LoginError,
    MeterbillError,
    ProfileNotFoundError,
    ReadingNotFoundError,
    UserExistsError,
)
