"""
Date helpers shared by the period-key, expansion and portfolio modules.

Period keys travel through the pipeline as plain strings ("YYYY", "YYYY-MM",
"YYYY-MM-DD"); these helpers convert between those strings and `date` objects
without ever raising on malformed input.
"""
from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterator


def parse_iso_date(s: str | None) -> date | None:
    """Parse ISO date string (YYYY-MM-DD) to date."""
    if not s:
        return None
    try:
        return date.fromisoformat(s[:10])
    except (ValueError, TypeError):
        return None


def parse_date_any(value: str | None) -> date | None:
    """
    Parse the loose date strings providers and valuation exports emit.

    Handles:
    - ISO dates and timestamps (with/without timezone)
    - "YYYY-MM", "YYYY-M" and bare "YYYY" strings (first of period)
    - US-style "MM/DD/YYYY"
    """
    if value is None:
        return None
    s = str(value).strip()
    if not s:
        return None

    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00")).date()
    except ValueError:
        pass

    for fmt in [
        "%Y-%m-%d",
        "%Y-%m",
        "%Y",
        "%Y/%m/%d",
        "%m/%d/%Y",
        "%m/%d/%Y %H:%M:%S",
    ]:
        try:
            return datetime.strptime(s, fmt).date()
        except ValueError:
            continue
    return None


def parse_month_key(key: str) -> tuple[int, int] | None:
    """Split a "YYYY-MM" key into (year, month); None when not numeric."""
    parts = str(key).split("-")
    if len(parts) < 2:
        return None
    try:
        year = int(parts[0])
        month = int(parts[1])
    except ValueError:
        return None
    if not 1 <= month <= 12:
        return None
    return year, month


def days_in_month(year: int, month: int) -> int:
    """Gregorian days in the given month (28-31)."""
    return calendar.monthrange(year, month)[1]


def month_key(year: int, month: int) -> str:
    return f"{year:04d}-{month:02d}"


def iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every calendar day from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def sort_key(key: str) -> tuple[int, tuple[int, ...], str]:
    """
    Chronological sort key for period strings.

    Parsed keys order by (year, month, day); unparseable keys sort after all
    parsed ones, by raw string. For zero-padded ISO keys this agrees with
    plain string comparison.
    """
    parts = str(key)[:10].split("-")
    try:
        nums = tuple(int(p) for p in parts)
    except ValueError:
        return (1, (), str(key))
    return (0, nums, str(key))


def years_before(d: date, years: int) -> date:
    """Same calendar day `years` earlier; Feb 29 clamps to Feb 28."""
    try:
        return d.replace(year=d.year - years)
    except ValueError:
        return d.replace(year=d.year - years, day=28)
