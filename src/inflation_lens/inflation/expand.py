from __future__ import annotations

from datetime import date, timedelta
from typing import Sequence

from inflation_lens.inflation.models import IndexPoint
from inflation_lens.utils.dates import days_in_month, month_key, parse_month_key, sort_key


def _is_annual(series: Sequence[IndexPoint]) -> bool:
    return all(len(p.date) <= 4 for p in series)


def expand_to_monthly(series: Sequence[IndexPoint]) -> list[IndexPoint]:
    """
    Upsample an annual index to 12 monthly points per year.

    Month m of a year ramps linearly toward the next year's value:
    cur + (next - cur) * (m - 1) / 12. The last year has no successor and is
    held flat. Input that is not purely annual is returned as-is.
    """
    if not series:
        return []
    if not _is_annual(series):
        return list(series)

    ordered = sorted(series, key=lambda p: sort_key(p.date))
    out: list[IndexPoint] = []
    for i, current in enumerate(ordered):
        nxt = ordered[i + 1] if i + 1 < len(ordered) else None
        try:
            year = int(current.date)
        except ValueError:
            continue
        for month in range(1, 13):
            if nxt is not None:
                value = current.value + (nxt.value - current.value) * (month - 1) / 12
            else:
                value = current.value
            out.append(IndexPoint(date=month_key(year, month), value=value))
    return out


def expand_to_daily(series: Sequence[IndexPoint]) -> list[IndexPoint]:
    """
    Upsample to one point per calendar day.

    Annual input is expanded to monthly first. Day d (0-indexed) of a month is
    cur + (next - cur) * d / days_in_month; the final month is held flat.
    Month keys that do not parse are skipped; input that is already daily is
    returned as-is.
    """
    if not series:
        return []
    if all(len(p.date) >= 10 for p in series):
        return list(series)
    monthly = expand_to_monthly(series)
    ordered = sorted(monthly, key=lambda p: sort_key(p.date))

    out: list[IndexPoint] = []
    for i, current in enumerate(ordered):
        nxt = ordered[i + 1] if i + 1 < len(ordered) else None
        ym = parse_month_key(current.date)
        if ym is None:
            continue
        year, month = ym
        n_days = days_in_month(year, month)
        next_value = nxt.value if nxt is not None else current.value
        start = date(year, month, 1)
        for day in range(n_days):
            ratio = day / n_days if nxt is not None else 0.0
            value = current.value + (next_value - current.value) * ratio
            out.append(IndexPoint(date=(start + timedelta(days=day)).isoformat(), value=value))
    return out
