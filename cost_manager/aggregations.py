"""Helpers that reshape reports into chart series."""

import logging
from typing import Any, Dict, Iterable, List

logger = logging.getLogger(__name__)


def get_category_totals(costs: Iterable[Dict[str, Any]]) -> Dict[str, float]:
    """Sum costs per category, using sumInCurrency when present and sum otherwise.

    Only categories that occur in costs appear in the result.
    """
    totals: Dict[str, float] = {}
    for cost in costs:
        amount = cost.get('sumInCurrency')
        if amount is None:
            amount = cost.get('sum', 0)
        category = cost['category']
        totals[category] = totals.get(category, 0) + float(amount)
    return totals


def to_chart_series(totals: Dict[str, float]) -> List[Dict[str, Any]]:
    """[{name, value}] rows for a pie chart."""
    return [{'name': name, 'value': value} for name, value in totals.items()]


async def get_year_monthly_totals(report_source, year: int, currency: str) -> List[Dict[str, Any]]:
    """Total per month for a whole year, one report per month in order."""
    result = []
    for month in range(1, 13):
        report = await report_source.get_report(year, month, currency)
        result.append({'month': month, 'total': report['total']['total']})
    logger.debug(f"Built monthly totals for {year} in {currency}")
    return result
