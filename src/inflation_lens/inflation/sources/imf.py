"""
IMF DataMapper adapter.

DataMapper only publishes annual figures. For the two CPI inflation
indicators (average and end-of-period) we fetch both and reconcile them into
a monthly % change series; every other indicator comes back annual.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from inflation_lens.config import FetchConfig
from inflation_lens.inflation.curvature import reconcile_dual_rates
from inflation_lens.inflation.models import (
    FetchRequest,
    InflationSource,
    MetricDefinition,
    Observation,
    ValueKind,
)
from inflation_lens.inflation.periods import sort_observations
from inflation_lens.inflation.sources.base import get_json, to_float, with_query

logger = logging.getLogger(__name__)

BASE_URL = "https://www.imf.org/external/datamapper/api/v1"

AVERAGE_INDICATOR = "PCPIPCH"
END_OF_PERIOD_INDICATOR = "PCPIEPCH"
DUAL_RATE_INDICATORS = {AVERAGE_INDICATOR, END_OF_PERIOD_INDICATOR}

IMF_METRICS: list[MetricDefinition] = [
    MetricDefinition(
        AVERAGE_INDICATOR,
        "Inflation rate, average consumer prices (annual %)",
        ValueKind.PERCENT,
        InflationSource.IMF,
        frequency="M",
        notes="Interpolated monthly using average and end-of-period inflation.",
    ),
    MetricDefinition(
        END_OF_PERIOD_INDICATOR,
        "Inflation rate, end of period consumer prices (annual %)",
        ValueKind.PERCENT,
        InflationSource.IMF,
        frequency="M",
        notes="Interpolated monthly using average and end-of-period inflation.",
    ),
]


def periods_param(start_year: int | None, end_year: int | None) -> str | None:
    """Comma-separated year list for the `periods` query parameter."""
    if not start_year or not end_year or end_year < start_year:
        return None
    return ",".join(str(y) for y in range(start_year, end_year + 1))


def extract_imf_values(payload: object, indicator: str, country: str) -> dict[int, float]:
    """Pull `values[indicator][country]` as {year: value}, skipping junk entries."""
    if not isinstance(payload, dict):
        return {}
    raw = ((payload.get("values") or {}).get(indicator) or {}).get(country)
    if not isinstance(raw, dict):
        return {}
    out: dict[int, float] = {}
    for year, value in raw.items():
        try:
            y = int(year)
        except (TypeError, ValueError):
            continue
        v = to_float(value)
        if v is None:
            continue
        out[y] = v
    return out


def is_dual_rate(indicator: str) -> bool:
    return indicator in DUAL_RATE_INDICATORS


class ImfClient:
    name = InflationSource.IMF.value
    metrics = IMF_METRICS

    def __init__(self, config: FetchConfig | None = None):
        self.config = config or FetchConfig()

    def fetch_indicator(self, indicator: str, country: str, start_year: int | None = None, end_year: int | None = None) -> dict[int, float]:
        params = {}
        periods = periods_param(start_year, end_year)
        if periods:
            params["periods"] = periods
        url = with_query(f"{BASE_URL}/{indicator}/{country}", params)
        payload = get_json("IMF", url, config=self.config)
        return extract_imf_values(payload, indicator, country)

    def fetch(self, request: FetchRequest) -> list[Observation]:
        country = request.country.strip().upper()

        if is_dual_rate(request.indicator):
            with ThreadPoolExecutor(max_workers=2, thread_name_prefix="imf") as pool:
                avg_f = pool.submit(self.fetch_indicator, AVERAGE_INDICATOR, country, request.start_year, request.end_year)
                end_f = pool.submit(self.fetch_indicator, END_OF_PERIOD_INDICATOR, country, request.start_year, request.end_year)
                average_values = avg_f.result()
                end_values = end_f.result()
            monthly = reconcile_dual_rates(average_values, end_values)
            if monthly:
                logger.info("IMF %s: %d reconciled monthly observations", country, len(monthly))
                return sort_observations(monthly)
            logger.info("IMF %s: no overlapping dual-rate years, falling back to annual %s", country, request.indicator)

        values = self.fetch_indicator(request.indicator, country, request.start_year, request.end_year)
        return sort_observations(Observation(date=str(year), value=v) for year, v in values.items())
