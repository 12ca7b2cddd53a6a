"""
Cost Manager - Exchange Rates

PURPOSE: Rate table, USD-pivot currency conversion and rates document fetching
SCOPE: In-memory rates snapshot plus the HTTP collaborator that refreshes it
DEPENDENCIES: httpx, config.py, validators.py
"""

import logging
from collections.abc import Mapping
from typing import Any, Dict, Optional

import httpx

from .config import config
from .exceptions import RatesDocumentError
from .validators import validate_rates_document

logger = logging.getLogger(__name__)


def convert(amount: float, from_currency: str, to_currency: str, rates: Mapping) -> float:
    """Convert using USD as the pivot: amount / from_rate * to_rate.

    Rates are units of a currency per 1 USD. A missing or zero rate on either
    side leaves the amount unconverted.
    """
    if from_currency == to_currency:
        return amount

    from_rate = rates.get(from_currency)
    to_rate = rates.get(to_currency)
    if not from_rate or not to_rate:
        return amount
    return amount / from_rate * to_rate


class RateTable:
    """Current exchange rates snapshot, replaced wholesale by set_rates."""

    def __init__(self, rates: Optional[Mapping] = None):
        self._rates: Dict[str, Any] = dict(config.DEFAULT_RATES if rates is None else rates)

    def set_rates(self, rates: Any) -> None:
        """Replace the whole table. Anything that is not a mapping is ignored."""
        if not isinstance(rates, Mapping):
            logger.warning(f"Ignoring invalid rates update of type {type(rates).__name__}")
            return
        self._rates = dict(rates)
        logger.info(f"Exchange rates replaced: {self._rates}")

    def get_rates(self) -> Dict[str, Any]:
        return dict(self._rates)

    def rate(self, currency: str) -> Optional[float]:
        return self._rates.get(currency)

    def convert(self, amount: float, from_currency: str, to_currency: str) -> float:
        return convert(amount, from_currency, to_currency, self._rates)


class RatesClient:
    """Fetches and validates a JSON rates document."""

    def __init__(self, url: str = None, timeout: float = None,
                 transport: httpx.AsyncBaseTransport = None):
        self.url = url or config.RATES_URL
        self.timeout = timeout or config.RATES_TIMEOUT
        self.transport = transport

    async def fetch_rates(self, url: str = None) -> Dict[str, float]:
        """Fetch a rates document and return it once it covers every supported currency."""
        target_url = (url or '').strip() or self.url

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self.transport) as client:
                response = await client.get(target_url)
                response.raise_for_status()
                document = response.json()
        except httpx.HTTPError as e:
            logger.error(f"Failed fetching rates from {target_url}: {e}")
            raise RatesDocumentError(f"Failed fetching rates from {target_url}") from e
        except ValueError as e:
            logger.error(f"Rates document at {target_url} is not valid JSON: {e}")
            raise RatesDocumentError(f"Rates document at {target_url} is not valid JSON") from e

        is_valid, errors = validate_rates_document(document)
        if not is_valid:
            logger.warning(f"Rejected rates document from {target_url}: {'; '.join(errors)}")
            raise RatesDocumentError("; ".join(errors))

        logger.info(f"Fetched rates from {target_url}")
        return dict(document)
