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

BASE_URL = "https://api.db.nomics.world/v22/series/IMF/IFS"

DBNOMICS_METRICS: list[MetricDefinition] = [
    MetricDefinition("PCPI_IX", "Consumer price index (index)", ValueKind.INDEX, InflationSource.DBNOMICS),
    MetricDefinition(
        "PCPI_PC_CP_A_PT",
        "Consumer price inflation (annual %)",
        ValueKind.PERCENT,
        InflationSource.DBNOMICS,
        frequency="A",
    ),
    MetricDefinition("PPPI_IX", "Producer price index (index)", ValueKind.INDEX, InflationSource.DBNOMICS),
]


def parse_dbnomics_payload(
    payload: object,
    start_year: int | None = None,
    end_year: int | None = None,
) -> list[Observation]:
    """
    Read `series.docs[0]`: parallel `period_start_day` (or `period`) and `value`
    arrays. Points outside [start_year, end_year] and non-numeric values are
    dropped.
    """
    if not isinstance(payload, dict):
        return []
    docs = (payload.get("series") or {}).get("docs") or []
    if not docs or not isinstance(docs[0], dict):
        return []
    doc = docs[0]

    periods = doc.get("period_start_day")
    if not isinstance(periods, list):
        periods = doc.get("period") if isinstance(doc.get("period"), list) else []
    values = doc.get("value") if isinstance(doc.get("value"), list) else []

    points: list[Observation] = []
    for period, raw in zip(periods, values):
        period = str(period)
        try:
            year = int(period[:4])
        except ValueError:
            year = None
        if year is not None:
            if start_year and year < start_year:
                continue
            if end_year and year > end_year:
                continue
        v = to_float(raw)
        if v is None:
            continue
        points.append(Observation(date=period, value=v))
    return sort_observations(points)


class DbnomicsClient:
    name = InflationSource.DBNOMICS.value
    metrics = DBNOMICS_METRICS

    def __init__(self, config: FetchConfig | None = None):
        self.config = config or FetchConfig()

    def fetch(self, request: FetchRequest) -> list[Observation]:
        country = request.country.strip().upper()
        series_key = f"{request.frequency}.{country}.{request.indicator}"
        url = with_query(f"{BASE_URL}/{series_key}", {"observations": 1})
        payload = get_json("DBnomics", url, config=self.config)
        points = parse_dbnomics_payload(payload, request.start_year, request.end_year)
        logger.info("DBnomics %s: %d observations", series_key, len(points))
        return points
