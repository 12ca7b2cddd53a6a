from __future__ import annotations

import math

import pytest

from cost_manager.config import config
from cost_manager.rates import RateTable, convert


def test_default_table_covers_supported_currencies() -> None:
    table = RateTable()
    assert set(table.get_rates()) == set(config.SUPPORTED_CURRENCIES)
    assert table.rate("USD") == 1


def test_convert_pivots_through_usd(rate_table) -> None:
    assert rate_table.convert(10, "USD", "ILS") == pytest.approx(40)
    assert rate_table.convert(40, "ILS", "USD") == pytest.approx(10)
    # 8 ILS -> 2 USD -> 1 GBP
    assert rate_table.convert(8, "ILS", "GBP") == pytest.approx(1)


@pytest.mark.parametrize("currency", ["USD", "ILS", "GBP", "EURO"])
def test_identity_conversion_for_any_table(currency) -> None:
    odd_table = RateTable({"USD": 3, "ILS": 0.1, "GBP": 7.3, "EURO": 0})
    assert odd_table.convert(12.34, currency, currency) == 12.34
    assert RateTable().convert(0.1, currency, currency) == 0.1


def test_round_trip_conversion(rate_table) -> None:
    amount = 123.45
    there = rate_table.convert(amount, "EURO", "ILS")
    back = rate_table.convert(there, "ILS", "EURO")
    assert math.isclose(back, amount, rel_tol=1e-12)


def test_missing_or_zero_rate_returns_amount_unchanged() -> None:
    rates = {"USD": 1, "ILS": 0, "GBP": None}
    assert convert(50, "ILS", "USD", rates) == 50
    assert convert(50, "USD", "GBP", rates) == 50
    assert convert(50, "USD", "EURO", rates) == 50


@pytest.mark.parametrize("candidate", [None, "not an object", 42, ["USD", 1]])
def test_set_rates_ignores_non_mappings(rate_table, candidate) -> None:
    before = rate_table.get_rates()
    rate_table.set_rates(candidate)
    assert rate_table.get_rates() == before


def test_set_rates_replaces_whole_table(rate_table) -> None:
    rate_table.set_rates({"USD": 1, "ILS": 3})
    assert rate_table.get_rates() == {"USD": 1, "ILS": 3}
    # GBP is gone, so conversions to it fall back to the input amount
    assert rate_table.convert(10, "USD", "GBP") == 10


def test_set_rates_copies_the_candidate(rate_table) -> None:
    candidate = {"USD": 1, "ILS": 3, "GBP": 0.7, "EURO": 0.9}
    rate_table.set_rates(candidate)
    candidate["ILS"] = 100
    assert rate_table.rate("ILS") == 3


def test_tables_are_independent() -> None:
    first = RateTable()
    second = RateTable()
    first.set_rates({"USD": 2})
    assert second.rate("USD") == 1
