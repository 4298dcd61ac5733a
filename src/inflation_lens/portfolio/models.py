from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ValuationSnapshot:
    date: str
    total_value: float
    net_contribution: float | None = None  # cumulative net capital in/out, not a delta


@dataclass(frozen=True)
class SeriesPoint:
    date: str  # day key "YYYY-MM-DD" or month key "YYYY-MM"
    total_value: float
    net_contribution: float
