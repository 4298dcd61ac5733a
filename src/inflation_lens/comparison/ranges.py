from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from inflation_lens.utils.dates import years_before

RANGE_OPTIONS: dict[str, str] = {
    "1Y": "1 year",
    "3Y": "3 years",
    "5Y": "5 years",
    "10Y": "10 years",
    "ALL": "All history",
}


@dataclass(frozen=True)
class RangeSpec:
    start_date: str | None = None
    end_date: str | None = None
    start_year: int | None = None
    end_year: int | None = None


def resolve_range(option: str, today: date | None = None) -> RangeSpec:
    """Turn "5Y"-style options into concrete date/year bounds; ALL is unbounded."""
    key = option.strip().upper()
    if key not in RANGE_OPTIONS:
        raise ValueError(f"Unknown range '{option}' (expected one of {', '.join(RANGE_OPTIONS)})")
    if key == "ALL":
        return RangeSpec()

    today = today or date.today()
    start = years_before(today, int(key[:-1]))
    return RangeSpec(
        start_date=start.isoformat(),
        end_date=today.isoformat(),
        start_year=start.year,
        end_year=today.year,
    )
