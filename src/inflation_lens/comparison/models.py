from __future__ import annotations

from dataclasses import dataclass, field

from inflation_lens.inflation.models import Granularity, IndexPoint, MetricDefinition


@dataclass(frozen=True)
class ComparisonPoint:
    period: str
    nominal: float
    real: float
    inflation_index: float  # 100 at the first point of a comparison run
    net_contribution: float


@dataclass(frozen=True)
class ExcessPoint:
    period: str
    outperformance: float  # profit % minus inflation %


@dataclass(frozen=True)
class InterestPoint:
    period: str
    interest: float   # profit % on contributed capital
    inflation: float  # inflation % since the first point


@dataclass(frozen=True)
class ComparisonSummary:
    nominal_change: float
    real_change: float
    inflation_change: float
    latest_nominal: float
    latest_real: float
    latest_inflation_index: float


@dataclass(frozen=True)
class ComparisonResult:
    metric: MetricDefinition
    granularity: Granularity
    resolution: str  # "monthly" | "daily"
    inflation_index: list[IndexPoint] = field(default_factory=list)
    points: list[ComparisonPoint] = field(default_factory=list)
    excess: list[ExcessPoint] = field(default_factory=list)
    interest: list[InterestPoint] = field(default_factory=list)
    summary: ComparisonSummary | None = None  # None -> insufficient data

    @property
    def has_data(self) -> bool:
        return bool(self.points)
