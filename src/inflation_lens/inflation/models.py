from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ValueKind(str, Enum):
    """How raw observation values must be read."""
    INDEX = "index"      # price level (any base)
    PERCENT = "percent"  # year-over-year (or period-over-period) % change


class Granularity(str, Enum):
    """Period bucket size used for keys and joins."""
    YEAR = "year"
    MONTH = "month"
    DAY = "day"


class InflationSource(str, Enum):
    """Supported economic-data providers."""
    WORLD_BANK = "worldBank"
    IMF = "imf"
    DBNOMICS = "dbnomics"


@dataclass(frozen=True)
class Observation:
    date: str  # "YYYY", "YYYY-MM" or "YYYY-MM-DD"
    value: float


@dataclass(frozen=True)
class IndexPoint:
    date: str
    value: float  # rebased-to-100 scale


@dataclass(frozen=True)
class MetricDefinition:
    id: str
    label: str
    kind: ValueKind
    source: InflationSource
    frequency: str | None = None  # "A" (annual) | "M" (monthly)
    notes: str = ""


@dataclass(frozen=True)
class FetchRequest:
    country: str
    indicator: str
    frequency: str = "A"
    start_year: int | None = None
    end_year: int | None = None
