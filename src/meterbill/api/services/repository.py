"""Data access for users, profiles and readings.

Every profile and reading query is scoped to the owning user; rows that
belong to someone else are reported as not found.
"""

import logging
import sqlite3
from decimal import Decimal

import aiosqlite

from meterbill.api.database import Database
from meterbill.api.models.profile import ProfileCreate, ProfileResponse
from meterbill.api.models.reading import ReadingCreate, ReadingResponse
from meterbill.exceptions.errors import (
    ProfileNotFoundError,
    ReadingNotFoundError,
    UserExistsError,
)
from meterbill.models.tariff import TariffClass
from meterbill.services.billing import calculate_bill
from meterbill.services.consumption import compute_consumption

logger = logging.getLogger(__name__)

PROFILE_QUERY = """
    SELECT p.id, p.user_id, p.tenant_name, p.meter_number, p.initial_reading,
           p.tariff_class, r.consumption AS last_consumption, r.date AS last_reading_date
    FROM profiles p
    LEFT JOIN readings r ON r.id = (
        SELECT id FROM readings WHERE profile_id = p.id ORDER BY date DESC, id DESC LIMIT 1
    )
    WHERE p.user_id = ?
"""


def _profile_from_row(row: aiosqlite.Row) -> ProfileResponse:
    tariff_class = TariffClass(row["tariff_class"])
    last_consumption = row["last_consumption"]
    expected_bill = None
    if last_consumption is not None:
        expected_bill = float(calculate_bill(Decimal(str(last_consumption)), tariff_class))

    return ProfileResponse(
        id=row["id"],
        user_id=row["user_id"],
        tenant_name=row["tenant_name"],
        meter_number=row["meter_number"],
        tariff_class=tariff_class,
        initial_reading=row["initial_reading"],
        last_consumption=last_consumption,
        last_reading_date=row["last_reading_date"],
        expected_bill=expected_bill,
    )


def _reading_from_row(row: aiosqlite.Row, tariff_class: TariffClass) -> ReadingResponse:
    return ReadingResponse(
        id=row["id"],
        profile_id=row["profile_id"],
        date=row["date"],
        previous=row["previous"],
        current=row["current"],
        consumption=row["consumption"],
        bill=float(calculate_bill(Decimal(str(row["consumption"])), tariff_class)),
    )


class Repository:
    """Queries over the meterbill SQLite database.

    Attributes
    ----------
    db : Database
        Database the queries run against
    """

    def __init__(self, db: Database):
        self.db = db

    # Users

    async def create_user(self, username: str, password_hash: str) -> int:
        """Insert a user and return its id.

        Raises
        ------
        UserExistsError
            If the username is taken
        """
        try:
            user_id = await self.db.insert(
                "INSERT INTO users (username, password_hash) VALUES (?, ?)",
                (username, password_hash),
            )
        except sqlite3.IntegrityError as e:
            raise UserExistsError(username) from e

        logger.info(f"Registered user {username} (id={user_id})")
        return user_id

    async def get_user_by_username(self, username: str) -> aiosqlite.Row | None:
        return await self.db.fetchone(
            "SELECT id, username, password_hash FROM users WHERE username = ?", (username,)
        )

    # Profiles

    async def list_profiles(self, user_id: int) -> list[ProfileResponse]:
        rows = await self.db.fetchall(PROFILE_QUERY + " ORDER BY p.id", (user_id,))
        return [_profile_from_row(row) for row in rows]

    async def get_profile(self, user_id: int, profile_id: int) -> ProfileResponse:
        """Fetch one of the user's profiles.

        Raises
        ------
        ProfileNotFoundError
            If no such profile belongs to the user
        """
        row = await self.db.fetchone(PROFILE_QUERY + " AND p.id = ?", (user_id, profile_id))
        if row is None:
            raise ProfileNotFoundError(profile_id)
        return _profile_from_row(row)

    async def create_profile(self, user_id: int, data: ProfileCreate) -> ProfileResponse:
        profile_id = await self.db.insert(
            """
            INSERT INTO profiles (user_id, tenant_name, meter_number, initial_reading, tariff_class)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                user_id,
                data.tenant_name,
                data.meter_number,
                data.initial_reading,
                data.tariff_class.value,
            ),
        )
        logger.info(f"Created profile {profile_id} for user {user_id}")
        return await self.get_profile(user_id, profile_id)

    async def update_profile(
        self, user_id: int, profile_id: int, data: ProfileCreate
    ) -> ProfileResponse:
        updated = await self.db.execute(
            """
            UPDATE profiles
            SET tenant_name = ?, meter_number = ?, initial_reading = ?, tariff_class = ?
            WHERE id = ? AND user_id = ?
            """,
            (
                data.tenant_name,
                data.meter_number,
                data.initial_reading,
                data.tariff_class.value,
                profile_id,
                user_id,
            ),
        )
        if not updated:
            raise ProfileNotFoundError(profile_id)
        return await self.get_profile(user_id, profile_id)

    async def set_initial_reading(
        self, user_id: int, profile_id: int, initial_reading: float
    ) -> ProfileResponse:
        updated = await self.db.execute(
            "UPDATE profiles SET initial_reading = ? WHERE id = ? AND user_id = ?",
            (initial_reading, profile_id, user_id),
        )
        if not updated:
            raise ProfileNotFoundError(profile_id)
        return await self.get_profile(user_id, profile_id)

    async def delete_profile(self, user_id: int, profile_id: int) -> None:
        """Delete a profile together with its readings."""
        deleted = await self.db.execute(
            "DELETE FROM profiles WHERE id = ? AND user_id = ?", (profile_id, user_id)
        )
        if not deleted:
            raise ProfileNotFoundError(profile_id)
        logger.info(f"Deleted profile {profile_id} of user {user_id}")

    # Readings

    async def list_readings(
        self, user_id: int, profile_id: int, limit: int
    ) -> list[ReadingResponse]:
        """Most recent readings of a profile, newest first."""
        profile = await self.get_profile(user_id, profile_id)
        rows = await self.db.fetchall(
            """
            SELECT id, profile_id, date, previous, current, consumption
            FROM readings WHERE profile_id = ?
            ORDER BY date DESC, id DESC LIMIT ?
            """,
            (profile_id, limit),
        )
        return [_reading_from_row(row, profile.tariff_class) for row in rows]

    async def latest_reading(self, user_id: int, profile_id: int) -> ReadingResponse | None:
        readings = await self.list_readings(user_id, profile_id, limit=1)
        return readings[0] if readings else None

    async def add_reading(self, user_id: int, data: ReadingCreate) -> ReadingResponse:
        """Store a reading with its computed consumption.

        Raises
        ------
        ProfileNotFoundError
            If the profile does not belong to the user
        InvalidReadingError
            If the current reading is below the previous one
        """
        profile = await self.get_profile(user_id, data.profile_id)
        consumption = compute_consumption(data.previous, data.current)

        reading_id = await self.db.insert(
            """
            INSERT INTO readings (profile_id, date, previous, current, consumption)
            VALUES (?, ?, ?, ?, ?)
            """,
            (
                data.profile_id,
                data.date.isoformat(),
                data.previous,
                data.current,
                float(consumption),
            ),
        )
        logger.info(f"Recorded reading {reading_id} ({consumption} units) on profile {data.profile_id}")

        return ReadingResponse(
            id=reading_id,
            profile_id=data.profile_id,
            date=data.date,
            previous=data.previous,
            current=data.current,
            consumption=float(consumption),
            bill=float(calculate_bill(consumption, profile.tariff_class)),
        )

    async def delete_reading(self, user_id: int, reading_id: int) -> int:
        """Delete a reading and return the id of its profile.

        Raises
        ------
        ReadingNotFoundError
            If the reading does not exist or belongs to another user
        """
        row = await self.db.fetchone(
            """
            SELECT r.profile_id FROM readings r
            JOIN profiles p ON p.id = r.profile_id
            WHERE r.id = ? AND p.user_id = ?
            """,
            (reading_id, user_id),
        )
        if row is None:
            raise ReadingNotFoundError(reading_id)

        await self.db.execute("DELETE FROM readings WHERE id = ?", (reading_id,))
        logger.info(f"Deleted reading {reading_id} from profile {row['profile_id']}")
        return row["profile_id"]
