"""
Cost Manager - Data Managers

PURPOSE: Data access layer for cost records
SCOPE: Append-only inserts and full scans of the costs table
DEPENDENCIES: aiosqlite, validators.py
"""

import sqlite3
import aiosqlite
import logging
from datetime import datetime
from typing import Any, Callable, Dict, List

from .exceptions import InvalidInputError, StorageReadError, StorageWriteError
from .validators import parse_sum, validate_cost_data

logger = logging.getLogger(__name__)


class CostManager:
    """Handles cost inserts and reads. Costs are never updated or deleted."""

    def __init__(self, db_file: str, clock: Callable[[], datetime] = None):
        self.db_file = str(db_file)
        self.clock = clock or datetime.now

    async def add_cost(self, cost_data: Dict[str, Any]) -> Dict[str, Any]:
        """Validate and store a new cost; the insertion date is captured here."""
        is_valid, errors = validate_cost_data(cost_data)
        if not is_valid:
            raise InvalidInputError(errors)

        values = self._prepare_cost_values(cost_data)

        try:
            async with aiosqlite.connect(self.db_file) as conn:
                try:
                    cursor = await conn.execute('''
                        INSERT INTO costs (amount, currency, category, description,
                                           timestamp, day, month, year)
                        VALUES (?, ?, ?, ?, ?, ?, ?, ?)
                    ''', (
                        values['sum'], values['currency'], values['category'],
                        values['description'], values['timestamp'], values['Date']['day'],
                        values['Date']['month'], values['Date']['year']
                    ))
                    await conn.commit()
                except (aiosqlite.Error, sqlite3.Error):
                    await conn.rollback()
                    raise
        except (aiosqlite.Error, sqlite3.Error) as e:
            logger.error(f"Failed to insert cost: {e}")
            raise StorageWriteError("Failed to insert cost") from e

        values['id'] = cursor.lastrowid
        logger.info(f"Cost stored: id={values['id']}, sum={values['sum']} {values['currency']}")
        return values

    async def get_all_costs(self) -> List[Dict[str, Any]]:
        """Get every stored cost in insertion order."""
        try:
            async with aiosqlite.connect(self.db_file) as conn:
                conn.row_factory = aiosqlite.Row
                cursor = await conn.execute('''
                    SELECT id, amount, currency, category, description, timestamp, day, month, year
                    FROM costs
                    ORDER BY id
                ''')
                rows = await cursor.fetchall()
        except (aiosqlite.Error, sqlite3.Error) as e:
            logger.error(f"Failed to read costs: {e}")
            raise StorageReadError("Failed to read costs") from e

        return [self._sanitize_cost_data(dict(row)) for row in rows]

    def _prepare_cost_values(self, cost_data: Dict[str, Any]) -> Dict[str, Any]:
        """Build the record to store; one clock reading feeds timestamp and Date."""
        now = self.clock()
        return {
            'sum': parse_sum(cost_data['sum']),
            'currency': str(cost_data['currency']),
            'category': str(cost_data['category']),
            'description': str(cost_data['description']),
            'timestamp': int(now.timestamp() * 1000),
            'Date': {'day': now.day, 'month': now.month, 'year': now.year},
        }

    def _sanitize_cost_data(self, row_data: Dict[str, Any]) -> Dict[str, Any]:
        """Map a database row to the stored cost record shape."""
        return {
            'id': int(row_data['id']),
            'sum': float(row_data['amount']),
            'currency': str(row_data['currency']),
            'category': str(row_data['category']),
            'description': str(row_data['description']),
            'timestamp': int(row_data['timestamp']),
            'Date': {
                'day': int(row_data['day']),
                'month': int(row_data['month']),
                'year': int(row_data['year']),
            },
        }
