from __future__ import annotations

from typing import Iterable, Sequence

from inflation_lens.inflation.periods import to_day_key, to_month_key
from inflation_lens.portfolio.models import SeriesPoint, ValuationSnapshot
from inflation_lens.utils.dates import iter_days, parse_iso_date, sort_key


def build_daily(valuations: Iterable[ValuationSnapshot]) -> list[SeriesPoint]:
    """
    Dense daily series from sparse snapshots.

    - several snapshots on one day: the last one in input order wins
    - every day from the first to the last snapshot day is emitted, carrying
      the previous {total_value, net_contribution} forward across gaps
    - nothing is emitted before the first snapshot
    - a missing net_contribution counts as 0

    If the first or last day key is not a real date, the collapsed snapshots
    are returned in key order without filling.
    """
    by_day: dict[str, SeriesPoint] = {}
    for v in valuations:
        key = to_day_key(str(v.date))
        by_day[key] = SeriesPoint(
            date=key,
            total_value=float(v.total_value),
            net_contribution=float(v.net_contribution or 0.0),
        )
    if not by_day:
        return []

    keys = sorted(by_day, key=sort_key)
    start = parse_iso_date(keys[0]) if len(keys[0]) == 10 else None
    end = parse_iso_date(keys[-1]) if len(keys[-1]) == 10 else None
    if start is None or end is None:
        return [by_day[k] for k in keys]

    out: list[SeriesPoint] = []
    last: SeriesPoint | None = None
    for day in iter_days(start, end):
        key = day.isoformat()
        known = by_day.get(key)
        if known is not None:
            last = known
        if last is not None:
            out.append(SeriesPoint(date=key, total_value=last.total_value, net_contribution=last.net_contribution))
    return out


def build_monthly(daily: Sequence[SeriesPoint]) -> list[SeriesPoint]:
    """Month-end view: the last point seen for each month key, ascending."""
    by_month: dict[str, SeriesPoint] = {}
    for p in daily:
        key = to_month_key(p.date)
        by_month[key] = SeriesPoint(date=key, total_value=p.total_value, net_contribution=p.net_contribution)
    return sorted(by_month.values(), key=lambda p: sort_key(p.date))


def filter_range(
    valuations: Iterable[ValuationSnapshot],
    start_date: str | None = None,
    end_date: str | None = None,
) -> list[ValuationSnapshot]:
    """Keep snapshots whose day key falls inside [start_date, end_date]; open ends allowed."""
    out: list[ValuationSnapshot] = []
    for v in valuations:
        key = to_day_key(str(v.date))
        if start_date and sort_key(key) < sort_key(start_date):
            continue
        if end_date and sort_key(key) > sort_key(end_date):
            continue
        out.append(v)
    return out
