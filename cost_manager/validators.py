"""
Cost Manager - Data Validation

PURPOSE: Data validation and business rule enforcement
SCOPE: Cost input, report parameters and rates documents
DEPENDENCIES: config.py
"""

import math
from collections.abc import Mapping
from typing import Any, List, Optional, Tuple

from .config import config

REQUIRED_COST_FIELDS = ('sum', 'currency', 'category', 'description')


def parse_sum(value: Any) -> Optional[float]:
    """Coerce a sum to a float, or None when it is not numeric."""
    if isinstance(value, bool):
        return None
    try:
        return float(value)
    except (TypeError, ValueError, OverflowError):
        return None


def validate_cost_data(cost_data: Any) -> Tuple[bool, List[str]]:
    """Validate cost data and return validation result with error messages."""
    if not isinstance(cost_data, Mapping):
        return False, ["Cost must be an object with sum, currency, category and description"]

    errors = []
    missing = set()

    # Check required fields
    for field in REQUIRED_COST_FIELDS:
        value = cost_data.get(field)
        if value is None or (isinstance(value, str) and not value.strip()):
            errors.append(f"{field.capitalize()} is required")
            missing.add(field)

    if 'sum' not in missing:
        amount = parse_sum(cost_data['sum'])
        if amount is None or not math.isfinite(amount) or amount < 0:
            errors.append("Sum must be a finite number greater than or equal to 0")

    currency = cost_data.get('currency')
    if currency is not None and str(currency).strip() and str(currency) not in config.SUPPORTED_CURRENCIES:
        errors.append(f"Currency must be one of {', '.join(config.SUPPORTED_CURRENCIES)}")

    return len(errors) == 0, errors


def parse_int(value: Any) -> Optional[int]:
    """Return value as an int when it holds an integral number, else None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            return None
    return None


def validate_report_period(year: Any, month: Any) -> Tuple[bool, List[str]]:
    """Validate the year/month pair of a report request."""
    errors = []

    if parse_int(year) is None:
        errors.append("Year must be an integer")

    m = parse_int(month)
    if m is None or m < 1 or m > 12:
        errors.append("Month must be an integer between 1 and 12")

    return len(errors) == 0, errors


def _is_finite(value: Any) -> bool:
    # ints too large for a float overflow in math.isfinite
    try:
        return math.isfinite(value)
    except OverflowError:
        return False


def validate_rates_document(document: Any) -> Tuple[bool, List[str]]:
    """Check a rates document carries a positive finite rate for every supported currency."""
    if not isinstance(document, Mapping):
        return False, ["Rates document must be a JSON object"]

    errors = []
    for code in config.SUPPORTED_CURRENCIES:
        rate = document.get(code)
        if isinstance(rate, bool) or not isinstance(rate, (int, float)):
            errors.append(f"Missing or non-numeric rate for {code}")
        elif not _is_finite(rate) or rate <= 0:
            errors.append(f"Rate for {code} must be a positive finite number")

    return len(errors) == 0, errors

