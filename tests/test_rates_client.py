from __future__ import annotations

import httpx
import pytest

from cost_manager.exceptions import RatesDocumentError
from cost_manager.rates import RatesClient

GOOD_DOCUMENT = {"USD": 1, "ILS": 3.7, "GBP": 0.79, "EURO": 0.92}


def make_client(handler) -> RatesClient:
    return RatesClient(url="http://rates.test/rates.json", transport=httpx.MockTransport(handler))


async def test_fetch_rates_returns_validated_document() -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=GOOD_DOCUMENT)

    rates = await make_client(handler).fetch_rates()

    assert rates == GOOD_DOCUMENT
    assert seen == ["http://rates.test/rates.json"]


async def test_fetch_rates_uses_explicit_url() -> None:
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(str(request.url))
        return httpx.Response(200, json=GOOD_DOCUMENT)

    await make_client(handler).fetch_rates("http://other.test/r.json")
    assert seen == ["http://other.test/r.json"]


async def test_http_error_status_raises() -> None:
    client = make_client(lambda request: httpx.Response(404))
    with pytest.raises(RatesDocumentError):
        await client.fetch_rates()


async def test_invalid_json_raises() -> None:
    client = make_client(lambda request: httpx.Response(200, text="<html>"))
    with pytest.raises(RatesDocumentError):
        await client.fetch_rates()


async def test_incomplete_document_raises() -> None:
    client = make_client(lambda request: httpx.Response(200, json={"USD": 1, "ILS": 3.7}))
    with pytest.raises(RatesDocumentError, match="EURO"):
        await client.fetch_rates()


async def test_connection_error_raises() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    with pytest.raises(RatesDocumentError):
        await make_client(handler).fetch_rates()


async def test_load_rates_applies_fetched_table(costs_db) -> None:
    client = make_client(lambda request: httpx.Response(200, json=GOOD_DOCUMENT))
    await costs_db.load_rates(client)
    assert costs_db.get_rates() == GOOD_DOCUMENT


async def test_failed_load_keeps_current_table(costs_db) -> None:
    before = costs_db.get_rates()
    client = make_client(lambda request: httpx.Response(500))
    with pytest.raises(RatesDocumentError):
        await costs_db.load_rates(client)
    assert costs_db.get_rates() == before


async def test_rate_too_large_for_a_float_raises() -> None:
    document = dict(GOOD_DOCUMENT, GBP=10 ** 400)
    client = make_client(lambda request: httpx.Response(200, json=document))
    with pytest.raises(RatesDocumentError, match="GBP"):
        await client.fetch_rates()
