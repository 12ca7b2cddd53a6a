"""
Cost Manager - Database Management

PURPOSE: Database schema, versioning, and connection management
SCOPE: SQLite operations, schema versioning, and data persistence
DEPENDENCIES: aiosqlite
"""

import sqlite3
import aiosqlite
import logging
from pathlib import Path

from .exceptions import StorageOpenError

logger = logging.getLogger(__name__)


class DatabaseManager:
    """Opens the costs database and keeps its schema current."""

    def __init__(self, db_file: str):
        self.db_file = str(db_file)

    async def open(self, version: int) -> int:
        """Create or open the database at the requested schema version.

        Returns the schema version now in effect. Opening an existing database
        at a lower version than it already has fails, as does any engine error.
        """
        if isinstance(version, bool) or not isinstance(version, int) or version <= 0:
            raise StorageOpenError(f"Invalid database version: {version!r}")

        try:
            parent = Path(self.db_file).parent
            parent.mkdir(parents=True, exist_ok=True)

            async with aiosqlite.connect(self.db_file) as conn:
                await self._setup_schema_versioning(conn)
                current_version = await self._get_current_schema_version(conn)
                logger.info(f"Current database schema version: {current_version}")

                if version < current_version:
                    raise StorageOpenError(
                        f"Requested version {version} is less than the existing version {current_version}"
                    )

                if current_version < version:
                    await self._upgrade(conn, current_version, version)

                await conn.commit()
        except (aiosqlite.Error, sqlite3.Error, OSError) as e:
            logger.error(f"Could not open database {self.db_file}: {e}")
            raise StorageOpenError(f"Could not open database {self.db_file}") from e

        return version

    async def _setup_schema_versioning(self, conn: aiosqlite.Connection) -> None:
        """Set up schema version tracking table."""
        await conn.execute('''
            CREATE TABLE IF NOT EXISTS schema_version (
                version INTEGER PRIMARY KEY,
                applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
            )
        ''')

    async def _get_current_schema_version(self, conn: aiosqlite.Connection) -> int:
        """Get the current database schema version."""
        cursor = await conn.execute('SELECT MAX(version) FROM schema_version')
        result = await cursor.fetchone()
        return result[0] or 0

    async def _upgrade(self, conn: aiosqlite.Connection, old_version: int, new_version: int) -> None:
        """Runs on first open or version bump; only the costs table is required."""
        logger.info(f"Upgrading database schema from version {old_version} to {new_version}")
        await self._create_costs_table(conn)
        await conn.execute('INSERT OR REPLACE INTO schema_version (version) VALUES (?)', (new_version,))

    async def _create_costs_table(self, conn: aiosqlite.Connection) -> None:
        """Create the append-only costs table."""
        await conn.execute('''
            CREATE TABLE IF NOT EXISTS costs (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                amount REAL NOT NULL,
                currency TEXT NOT NULL,
                category TEXT NOT NULL,
                description TEXT NOT NULL,
                timestamp INTEGER NOT NULL,
                day INTEGER NOT NULL,
                month INTEGER NOT NULL,
                year INTEGER NOT NULL
            )
        ''')
