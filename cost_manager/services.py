"""
Cost Manager - Business Logic Services

PURPOSE: Monthly reports and the opened-database facade
SCOPE: Report building over the cost store, rates wiring, and opening a costs database
DEPENDENCIES: database.py, managers.py, rates.py

SERVICES INCLUDED:
- ReportService: Monthly itemized report with totals in one currency
- CostsDB: What callers get back from open_costs_db (add_cost, get_report, set_rates)
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any, Callable, Dict, List

from .config import config
from .database import DatabaseManager
from .exceptions import InvalidRangeError, StorageOpenError, UnsupportedCurrencyError
from .managers import CostManager
from .rates import RateTable, RatesClient
from .validators import parse_int, validate_report_period

logger = logging.getLogger(__name__)


class ReportService:
    """Builds month reports from the cost store in a requested currency."""

    def __init__(self, cost_manager: CostManager, rate_table: RateTable):
        self.cost_manager = cost_manager
        self.rate_table = rate_table

    async def get_report(self, year: Any, month: Any, currency: str) -> Dict[str, Any]:
        """
        Build the report for one month.

        Costs keep their original sum and currency and gain sumInCurrency.
        They are ordered by day of month, then by insertion order.
        """
        is_valid, errors = validate_report_period(year, month)
        if not is_valid:
            raise InvalidRangeError("; ".join(errors))
        y, m = parse_int(year), parse_int(month)

        if not isinstance(currency, str) or currency not in config.SUPPORTED_CURRENCIES:
            raise UnsupportedCurrencyError(f"Unsupported currency: {currency!r}")

        all_costs = await self.cost_manager.get_all_costs()

        # Filtering by insertion month/year
        filtered = [
            item for item in all_costs
            if item['Date']['month'] == m and item['Date']['year'] == y
        ]
        filtered.sort(key=lambda item: (item['Date']['day'], item['id']))

        costs_for_report = [self._to_item_view(item, currency) for item in filtered]

        # Total from the original sums and currencies
        total = 0
        for item in filtered:
            total += self.rate_table.convert(item['sum'], item['currency'], currency)

        return {
            'year': y,
            'month': m,
            'costs': costs_for_report,
            'total': {'currency': currency, 'total': total},
        }

    def _to_item_view(self, item: Dict[str, Any], currency: str) -> Dict[str, Any]:
        """Strip internal fields (id, timestamp, month/year) from a stored cost."""
        return {
            'sum': item['sum'],
            'currency': item['currency'],
            'category': item['category'],
            'description': item['description'],
            'Date': {'day': item['Date']['day']},
            'sumInCurrency': self.rate_table.convert(item['sum'], item['currency'], currency),
        }


class CostsDB:
    """An opened costs database."""

    def __init__(self, db_file: str, rate_table: RateTable = None,
                 clock: Callable[[], datetime] = None):
        self.db_file = str(db_file)
        self.rate_table = rate_table or RateTable()
        self.cost_manager = CostManager(self.db_file, clock=clock)
        self.report_service = ReportService(self.cost_manager, self.rate_table)

    async def add_cost(self, cost: Dict[str, Any]) -> Dict[str, Any]:
        return await self.cost_manager.add_cost(cost)

    async def get_all_costs(self) -> List[Dict[str, Any]]:
        return await self.cost_manager.get_all_costs()

    async def get_report(self, year: Any, month: Any, currency: str) -> Dict[str, Any]:
        return await self.report_service.get_report(year, month, currency)

    def set_rates(self, rates: Any) -> None:
        self.rate_table.set_rates(rates)

    def get_rates(self) -> Dict[str, Any]:
        return self.rate_table.get_rates()

    async def load_rates(self, client: RatesClient, url: str = None) -> Dict[str, float]:
        """Fetch a validated rates document and make it the current table."""
        rates = await client.fetch_rates(url)
        self.set_rates(rates)
        return rates


async def open_costs_db(database_name: str, database_version: int, data_dir: str = None,
                        rate_table: RateTable = None,
                        clock: Callable[[], datetime] = None) -> CostsDB:
    """Open (creating if needed) the named costs database and return its API."""
    if not isinstance(database_name, str) or not database_name.strip():
        raise StorageOpenError("Invalid database name: must be a non-empty string")

    db_file = Path(data_dir or config.DATA_DIR) / f"{database_name.strip()}.db"
    await DatabaseManager(db_file).open(database_version)
    logger.info(f"Opened costs database {db_file} (version {database_version})")

    return CostsDB(db_file, rate_table=rate_table, clock=clock)
