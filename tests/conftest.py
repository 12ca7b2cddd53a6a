from __future__ import annotations

from datetime import datetime

import pytest

from cost_manager.rates import RateTable
from cost_manager.services import open_costs_db


class FixedClock:
    """Clock whose reading tests can move."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(datetime(2024, 3, 15, 12, 30))


@pytest.fixture
def rate_table() -> RateTable:
    return RateTable({"USD": 1, "ILS": 4, "GBP": 0.5, "EURO": 0.8})


@pytest.fixture
async def costs_db(tmp_path, rate_table, clock):
    return await open_costs_db("costsdb", 1, data_dir=str(tmp_path), rate_table=rate_table, clock=clock)
