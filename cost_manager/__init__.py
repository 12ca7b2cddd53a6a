"""
Cost Manager Package

PURPOSE: Package initialization for the cost manager
SCOPE: Module imports and package configuration
"""

__version__ = "1.0.0"
__author__ = "Cost Manager Team"
__description__ = "Personal cost ledger with monthly reports in a chosen currency"

# Package imports for easier access
from .config import config
from .database import DatabaseManager
from .managers import CostManager
from .rates import RateTable, RatesClient, convert
from .services import CostsDB, ReportService, open_costs_db
from .aggregations import get_category_totals, get_year_monthly_totals, to_chart_series
from .exceptions import (
    CostManagerError,
    StorageError,
    StorageOpenError,
    StorageWriteError,
    StorageReadError,
    InvalidInputError,
    InvalidRangeError,
    UnsupportedCurrencyError,
    RatesDocumentError,
)

__all__ = [
    "config",
    "DatabaseManager",
    "CostManager",
    "RateTable",
    "RatesClient",
    "convert",
    "CostsDB",
    "ReportService",
    "open_costs_db",
    "get_category_totals",
    "get_year_monthly_totals",
    "to_chart_series",
    "CostManagerError",
    "StorageError",
    "StorageOpenError",
    "StorageWriteError",
    "StorageReadError",
    "InvalidInputError",
    "InvalidRangeError",
    "UnsupportedCurrencyError",
    "RatesDocumentError",
]
