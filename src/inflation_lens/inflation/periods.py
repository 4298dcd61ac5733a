"""
Period keys: canonical strings used to bucket and join dated series.

Malformed dates are never rejected here. They pass through unchanged as opaque
keys, so a bad provider row can land in its own bucket but cannot abort a run.
"""
from __future__ import annotations

import math
from typing import Iterable

from inflation_lens.inflation.models import Granularity, Observation
from inflation_lens.utils.dates import month_key, parse_date_any, sort_key


def to_period_key(raw: str, granularity: Granularity | str) -> str:
    """
    Bucket a raw date string to a year, month or day key.

    - year: first 4 chars (raw string when shorter)
    - month: first 7 chars when present, else parse and rebuild "YYYY-MM",
      else the raw string
    - day: see `to_day_key`
    """
    granularity = Granularity(granularity)
    if granularity == Granularity.DAY:
        return to_day_key(raw)
    if granularity == Granularity.YEAR:
        return raw[:4] if len(raw) >= 4 else raw

    if len(raw) >= 7:
        return raw[:7]

    parsed = parse_date_any(raw)
    if parsed is None:
        return raw
    return month_key(parsed.year, parsed.month)


def to_month_key(raw: str) -> str:
    return to_period_key(raw, Granularity.MONTH)


def to_day_key(raw: str) -> str:
    """First 10 chars of an ISO date, else parse and format, else raw."""
    if len(raw) >= 10:
        return raw[:10]
    parsed = parse_date_any(raw)
    if parsed is None:
        return raw
    return parsed.isoformat()


def sort_observations(points: Iterable[Observation]) -> list[Observation]:
    """Drop non-finite values and order chronologically (stable for ties)."""
    kept = [p for p in points if isinstance(p.value, (int, float)) and math.isfinite(p.value)]
    return sorted(kept, key=lambda p: sort_key(p.date))


def normalize_series(points: Iterable[Observation], granularity: Granularity | str) -> list[Observation]:
    """
    Collapse observations onto period keys.

    Later observations on the same key replace earlier ones (input order, not
    date order). Output is ascending by key.
    """
    by_period: dict[str, Observation] = {}
    for p in points:
        key = to_period_key(p.date, granularity)
        by_period[key] = Observation(date=key, value=p.value)
    return sorted(by_period.values(), key=lambda p: sort_key(p.date))
