"""Exception hierarchy for billing, readings and account operations."""


class MeterbillError(Exception):
    """Base class for all meterbill errors."""


class InvalidConsumptionError(MeterbillError, ValueError):
    """Consumption is negative, non-finite, or not a real number."""


class InvalidTariffClassError(MeterbillError, ValueError):
    """Tariff class is not one of the supported schedules."""


class InvalidReadingError(MeterbillError, ValueError):
    """A pair of meter readings does not yield a valid consumption."""


class ProfileNotFoundError(MeterbillError):
    """Profile does not exist or belongs to another user."""

    def __init__(self, profile_id: int):
        self.profile_id = profile_id
        super().__init__(f"Profile {profile_id} not found")


class ReadingNotFoundError(MeterbillError):
    """Reading does not exist or belongs to another user."""

    def __init__(self, reading_id: int):
        self.reading_id = reading_id
        super().__init__(f"Reading {reading_id} not found")


class UserExistsError(MeterbillError):
    """Username is already registered."""

    def __init__(self, username: str):
        self.username = username
        super().__init__(f"Username {username!r} is already registered")


class LoginError(MeterbillError):
    """Username or password is incorrect."""
