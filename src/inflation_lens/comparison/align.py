from __future__ import annotations

from typing import Sequence

from inflation_lens.comparison.models import ComparisonPoint
from inflation_lens.inflation.models import IndexPoint
from inflation_lens.portfolio.models import SeriesPoint
from inflation_lens.utils.dates import sort_key


def align(portfolio: Sequence[SeriesPoint], inflation_index: Sequence[IndexPoint]) -> list[ComparisonPoint]:
    """
    Join a dense portfolio series with an inflation index on period key.

    The portfolio is walked in date order. The most recent inflation value
    carries forward over periods with no exact key match. Leading portfolio
    periods before any inflation value exists are skipped. The first inflation
    value used becomes the base, so the output always starts at index 100.

    Returns [] when the series never overlap ("no comparable data").
    """
    if not portfolio or not inflation_index:
        return []

    inflation_by_period = {p.date: p.value for p in inflation_index}
    ordered = sorted(portfolio, key=lambda p: sort_key(p.date))

    base_inflation: float | None = None
    last_inflation: float | None = None
    out: list[ComparisonPoint] = []

    for point in ordered:
        if point.date in inflation_by_period:
            last_inflation = inflation_by_period[point.date]
        if last_inflation is None:
            continue
        if base_inflation is None:
            base_inflation = last_inflation

        index = (last_inflation / base_inflation) * 100 if base_inflation else 100.0
        deflator = index / 100
        real = point.total_value / deflator if deflator else point.total_value
        out.append(
            ComparisonPoint(
                period=point.date,
                nominal=point.total_value,
                real=real,
                inflation_index=index,
                net_contribution=point.net_contribution,
            )
        )
    return out
