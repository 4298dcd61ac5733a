"""
End-to-end comparison: provider observations + portfolio valuations -> comparison run.

    observations -> normalize -> build_index -> expand (monthly | daily) ─┐
                                                                          ├─> align -> metrics
    valuations   -> range filter -> build_daily (-> build_monthly) ───────┘

Only `run_comparison` performs I/O (two independent fetches, run
concurrently and joined before the pure stages execute).
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Iterable, Literal, Sequence

from inflation_lens.comparison.align import align
from inflation_lens.comparison.metrics import build_excess_series, build_interest_series, summarize
from inflation_lens.comparison.models import ComparisonResult
from inflation_lens.comparison.ranges import RangeSpec
from inflation_lens.inflation.expand import expand_to_daily, expand_to_monthly
from inflation_lens.inflation.index import build_index
from inflation_lens.inflation.models import FetchRequest, Granularity, IndexPoint, MetricDefinition, Observation
from inflation_lens.inflation.periods import normalize_series
from inflation_lens.inflation.sources.base import InflationProvider
from inflation_lens.portfolio.models import SeriesPoint, ValuationSnapshot
from inflation_lens.portfolio.series import build_daily, build_monthly, filter_range

logger = logging.getLogger(__name__)

Resolution = Literal["monthly", "daily"]
RESOLUTIONS: tuple[str, ...] = ("monthly", "daily")


def build_inflation_index(
    observations: Iterable[Observation],
    metric: MetricDefinition,
    granularity: Granularity,
    resolution: Resolution = "monthly",
) -> list[IndexPoint]:
    normalized = normalize_series(observations, granularity)
    index = build_index(normalized, metric.kind)
    monthly = expand_to_monthly(index)
    if resolution == "daily":
        return expand_to_daily(monthly)
    return monthly


def build_portfolio_series(
    valuations: Iterable[ValuationSnapshot],
    resolution: Resolution = "monthly",
    range_spec: RangeSpec | None = None,
) -> list[SeriesPoint]:
    if range_spec is not None:
        valuations = filter_range(valuations, range_spec.start_date, range_spec.end_date)
    daily = build_daily(valuations)
    if resolution == "daily":
        return daily
    return build_monthly(daily)


def compare(
    portfolio: Sequence[SeriesPoint],
    inflation_index: Sequence[IndexPoint],
    *,
    metric: MetricDefinition,
    granularity: Granularity,
    resolution: Resolution = "monthly",
) -> ComparisonResult:
    points = align(portfolio, inflation_index)
    if not points:
        logger.info("No overlap between %d portfolio and %d inflation periods", len(portfolio), len(inflation_index))
    return ComparisonResult(
        metric=metric,
        granularity=granularity,
        resolution=resolution,
        inflation_index=list(inflation_index),
        points=points,
        excess=build_excess_series(points),
        interest=build_interest_series(points),
        summary=summarize(points),
    )


def run_comparison(
    *,
    provider: InflationProvider,
    request: FetchRequest,
    metric: MetricDefinition,
    granularity: Granularity,
    load_valuations: Callable[[], list[ValuationSnapshot]],
    resolution: Resolution = "monthly",
    range_spec: RangeSpec | None = None,
) -> ComparisonResult:
    """
    Fetch inflation observations and portfolio valuations concurrently, then
    run the pure comparison stages. Provider errors propagate to the caller.
    """
    with ThreadPoolExecutor(max_workers=2, thread_name_prefix="fetch") as pool:
        inflation_f = pool.submit(provider.fetch, request)
        valuations_f = pool.submit(load_valuations)
        observations = inflation_f.result()
        valuations = valuations_f.result()

    logger.info("Fetched %d observations and %d valuations", len(observations), len(valuations))
    portfolio = build_portfolio_series(valuations, resolution, range_spec)
    index = build_inflation_index(observations, metric, granularity, resolution)
    return compare(portfolio, index, metric=metric, granularity=granularity, resolution=resolution)
