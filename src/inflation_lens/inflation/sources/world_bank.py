from __future__ import annotations

import logging

from inflation_lens.config import FetchConfig
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

BASE_URL = "https://api.worldbank.org/v2/country"

WORLD_BANK_METRICS: list[MetricDefinition] = [
    MetricDefinition("FP.CPI.TOTL.ZG", "Inflation, consumer prices (annual %)", ValueKind.PERCENT, InflationSource.WORLD_BANK),
    MetricDefinition("FP.CPI.TOTL", "Consumer price index (2010 = 100)", ValueKind.INDEX, InflationSource.WORLD_BANK),
    MetricDefinition("NY.GDP.DEFL.KD.ZG", "Inflation, GDP deflator (annual %)", ValueKind.PERCENT, InflationSource.WORLD_BANK),
    MetricDefinition("FP.WPI.TOTL", "Wholesale price index (2010 = 100)", ValueKind.INDEX, InflationSource.WORLD_BANK),
]


def parse_world_bank_payload(payload: object) -> list[Observation]:
    """World Bank returns `[meta, rows]`; rows carry `date` and a nullable `value`."""
    if not isinstance(payload, list) or len(payload) < 2 or not isinstance(payload[1], list):
        return []
    points: list[Observation] = []
    for row in payload[1]:
        if not isinstance(row, dict):
            continue
        v = to_float(row.get("value"))
        if v is None:
            continue
        points.append(Observation(date=str(row.get("date")), value=v))
    return sort_observations(points)


class WorldBankClient:
    name = InflationSource.WORLD_BANK.value
    metrics = WORLD_BANK_METRICS

    def __init__(self, config: FetchConfig | None = None):
        self.config = config or FetchConfig()

    def fetch(self, request: FetchRequest) -> list[Observation]:
        country = request.country.strip().lower()
        params: dict[str, object] = {"format": "json", "per_page": 20000}
        if request.start_year and request.end_year:
            params["date"] = f"{request.start_year}:{request.end_year}"
        url = with_query(f"{BASE_URL}/{country}/indicator/{request.indicator}", params)
        payload = get_json("World Bank", url, config=self.config)
        points = parse_world_bank_payload(payload)
        logger.info("World Bank %s/%s: %d observations", country, request.indicator, len(points))
        return points
