"""Database management for API (SQLite for users, profiles and readings)."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiosqlite

from meterbill.api.config import get_settings

logger = logging.getLogger(__name__)

SCHEMA = (
    """
    CREATE TABLE IF NOT EXISTS users (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        username TEXT NOT NULL UNIQUE,
        password_hash TEXT NOT NULL,
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS profiles (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        user_id INTEGER NOT NULL REFERENCES users(id) ON DELETE CASCADE,
        tenant_name TEXT NOT NULL,
        meter_number TEXT NOT NULL,
        initial_reading REAL,
        tariff_class TEXT NOT NULL DEFAULT 'standard',
        created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    )
    """,
    """
    CREATE TABLE IF NOT EXISTS readings (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        profile_id INTEGER NOT NULL REFERENCES profiles(id) ON DELETE CASCADE,
        date TEXT NOT NULL,
        previous REAL NOT NULL,
        current REAL NOT NULL,
        consumption REAL NOT NULL
    )
    """,
    "CREATE INDEX IF NOT EXISTS idx_profiles_user ON profiles(user_id)",
    "CREATE INDEX IF NOT EXISTS idx_readings_profile_date ON readings(profile_id, date)",
)


class Database:
    """SQLite database manager for API data.

    Attributes
    ----------
    db_path : str
        Path to SQLite database file
    """

    def __init__(self, db_path: str | None = None):
        """Initialize database manager.

        Parameters
        ----------
        db_path : str | None, optional
            Path to database file, by default None (uses config)
        """
        settings = get_settings()
        self.db_path = db_path or settings.DB_PATH

        # Ensure parent directory exists
        Path(self.db_path).parent.mkdir(parents=True, exist_ok=True)

    async def init_db(self) -> None:
        """Initialize database schema.

        Creates tables and indexes if they don't exist.
        """
        async with self.connect() as db:
            for statement in SCHEMA:
                await db.execute(statement)
            await db.commit()

        logger.info(f"Database initialized at {self.db_path}")

    @asynccontextmanager
    async def connect(self) -> AsyncIterator[aiosqlite.Connection]:
        """Open a connection with foreign keys enforced and rows as mappings.

        Yields
        ------
        aiosqlite.Connection
            Open database connection, closed on exit
        """
        async with aiosqlite.connect(self.db_path) as db:
            db.row_factory = aiosqlite.Row
            await db.execute("PRAGMA foreign_keys = ON")
            yield db

    async def execute(self, query: str, parameters: tuple = ()) -> int:
        """Execute a write query and commit.

        Parameters
        ----------
        query : str
            SQL query
        parameters : tuple, optional
            Query parameters, by default ()

        Returns
        -------
        int
            Number of rows affected
        """
        async with self.connect() as db:
            cursor = await db.execute(query, parameters)
            await db.commit()
            return cursor.rowcount

    async def insert(self, query: str, parameters: tuple = ()) -> int:
        """Execute an INSERT and return the new row id.

        Parameters
        ----------
        query : str
            SQL INSERT statement
        parameters : tuple, optional
            Query parameters, by default ()

        Returns
        -------
        int
            Row id of the inserted row
        """
        async with self.connect() as db:
            cursor = await db.execute(query, parameters)
            await db.commit()
            return cursor.lastrowid

    async def fetchone(self, query: str, parameters: tuple = ()) -> aiosqlite.Row | None:
        """Execute query and fetch one result.

        Parameters
        ----------
        query : str
            SQL query
        parameters : tuple, optional
            Query parameters, by default ()

        Returns
        -------
        aiosqlite.Row | None
            Query result or None
        """
        async with self.connect() as db:
            cursor = await db.execute(query, parameters)
            return await cursor.fetchone()

    async def fetchall(self, query: str, parameters: tuple = ()) -> list[aiosqlite.Row]:
        """Execute query and fetch all results.

        Parameters
        ----------
        query : str
            SQL query
        parameters : tuple, optional
            Query parameters, by default ()

        Returns
        -------
        list[aiosqlite.Row]
            Query results
        """
        async with self.connect() as db:
            cursor = await db.execute(query, parameters)
            return list(await cursor.fetchall())

    async def optimize(self) -> None:
        """Let SQLite refresh query planner statistics."""
        async with self.connect() as db:
            await db.execute("PRAGMA optimize")


# Global database instance
_db_instance: Database | None = None


def get_database() -> Database:
    """Get or create global database instance.

    Returns
    -------
    Database
        Global database instance
    """
    global _db_instance
    if _db_instance is None:
        _db_instance = Database()
    return _db_instance
