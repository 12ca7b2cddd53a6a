"""
Cost Manager - Error Taxonomy

PURPOSE: Domain-specific exceptions raised by the store, reports and rates
SCOPE: Every failure the core surfaces to its callers
DEPENDENCIES: None
"""

from typing import List


class CostManagerError(Exception):
    """Base class for all cost manager errors."""


class StorageError(CostManagerError):
    """The storage engine failed."""


class StorageOpenError(StorageError):
    """The database could not be created or opened."""


class StorageWriteError(StorageError):
    """A cost could not be inserted. Nothing was written."""


class StorageReadError(StorageError):
    """Stored costs could not be read."""


class InvalidInputError(CostManagerError, ValueError):
    """A cost is missing fields or carries an invalid sum."""

    def __init__(self, errors: List[str]):
        self.errors = list(errors)
        super().__init__("Invalid cost object: " + "; ".join(self.errors))


class InvalidRangeError(CostManagerError, ValueError):
    """Year or month is outside its domain."""


class UnsupportedCurrencyError(CostManagerError, ValueError):
    """Currency is not one of the supported codes."""


class RatesDocumentError(CostManagerError):
    """A rates document could not be fetched or is incomplete."""
