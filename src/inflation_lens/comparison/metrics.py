"""
Derived views over a comparison run.

All functions are pure over the comparison sequence; the first point supplies
the base nominal value and base inflation index.
"""
from __future__ import annotations

from typing import Sequence

from inflation_lens.comparison.models import ComparisonPoint, ComparisonSummary, ExcessPoint, InterestPoint


def _percent_point(point: ComparisonPoint, base_nominal: float, base_inflation: float) -> tuple[float, float]:
    """(profit %, inflation %) for one point."""
    capital = point.net_contribution or base_nominal or 1
    profit_pct = ((point.nominal - point.net_contribution) / capital) * 100 if capital != 0 else 0.0
    inflation_pct = ((point.inflation_index - base_inflation) / base_inflation) * 100 if base_inflation else 0.0
    return profit_pct, inflation_pct


def build_excess_series(points: Sequence[ComparisonPoint]) -> list[ExcessPoint]:
    """Excess return over inflation: profit % on capital minus inflation % since start."""
    if not points:
        return []
    base_nominal = points[0].nominal
    base_inflation = points[0].inflation_index
    out: list[ExcessPoint] = []
    for p in points:
        profit_pct, inflation_pct = _percent_point(p, base_nominal, base_inflation)
        out.append(ExcessPoint(period=p.period, outperformance=profit_pct - inflation_pct))
    return out


def build_interest_series(points: Sequence[ComparisonPoint]) -> list[InterestPoint]:
    if not points:
        return []
    base_nominal = points[0].nominal
    base_inflation = points[0].inflation_index
    out: list[InterestPoint] = []
    for p in points:
        profit_pct, inflation_pct = _percent_point(p, base_nominal, base_inflation)
        out.append(InterestPoint(period=p.period, interest=profit_pct, inflation=inflation_pct))
    return out


def _change(first: float, last: float) -> float:
    return ((last - first) / first) * 100 if first else 0.0


def summarize(points: Sequence[ComparisonPoint]) -> ComparisonSummary | None:
    """First-to-last % changes; None when fewer than two points (insufficient data)."""
    if len(points) < 2:
        return None
    first = points[0]
    last = points[-1]
    return ComparisonSummary(
        nominal_change=_change(first.nominal, last.nominal),
        real_change=_change(first.real, last.real),
        inflation_change=_change(first.inflation_index, last.inflation_index),
        latest_nominal=last.nominal,
        latest_real=last.real,
        latest_inflation_index=last.inflation_index,
    )
