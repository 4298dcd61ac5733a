"""
Monthly reconciliation of two annual inflation rates.

Providers such as the IMF publish both "average consumer prices" and
"end of period consumer prices" inflation for a year. The end-of-period rate
pins the index at each December; the average rate says where the mean of the
twelve monthly levels should sit. We bend a straight-line path between the
two Decembers with a single quadratic term so its mean moves toward that
target while both endpoints stay fixed.

This is a heuristic, not a published methodology. What it guarantees:
- month 12 lands exactly on the year's end-of-period index
- values stay inside [min(start, end), max(start, end)]
- the monthly mean moves toward the average-rate index (exactly onto it
  unless the bend had to be clipped to stay inside the range)
"""
from __future__ import annotations

import logging
import math
from typing import Mapping

import numpy as np

from inflation_lens.inflation.models import Observation
from inflation_lens.utils.dates import month_key

logger = logging.getLogger(__name__)

MONTH_STEPS = 12
MONTHLY_T = np.arange(1, MONTH_STEPS + 1, dtype=float) / MONTH_STEPS
MONTHLY_T_MEAN = float(MONTHLY_T.mean())
MONTHLY_T_VARIANCE = float((MONTHLY_T * (1 - MONTHLY_T)).mean())


def _finite(x: float | None) -> bool:
    return isinstance(x, (int, float)) and math.isfinite(x)


def interpolate_monthly_indexes(start_index: float, end_index: float, average_index: float) -> list[float]:
    """
    Twelve monthly index levels between two end-of-period levels.

    `average_index` is the level implied by the average-rate chain; it sets the
    curvature. Flat output (12 x start) when the bounds are equal or not finite.
    """
    if not _finite(start_index) or not _finite(end_index):
        return [start_index] * MONTH_STEPS

    delta = end_index - start_index
    if delta == 0:
        return [start_index] * MONTH_STEPS

    target_mean = (average_index - start_index) / delta if _finite(average_index) else float("nan")
    if math.isfinite(target_mean) and MONTHLY_T_VARIANCE:
        curvature = (target_mean - MONTHLY_T_MEAN) / MONTHLY_T_VARIANCE
    else:
        curvature = 0.0

    adjusted = MONTHLY_T + curvature * MONTHLY_T * (1 - MONTHLY_T)
    # |curvature| > 1 would push interior months past the bounds
    adjusted = np.clip(adjusted, 0.0, 1.0)
    return [float(v) for v in start_index + delta * adjusted]


def reconcile_dual_rates(
    average_rates: Mapping[int, float],
    end_rates: Mapping[int, float],
) -> list[Observation]:
    """
    Build monthly % change observations ("YYYY-MM") from annual rate pairs.

    Both chains start at 100. Years are walked in ascending order; a year
    missing either rate (or holding a non-finite one) emits nothing and does
    not advance the carried indexes. Each month's value is the % change from
    the previous month's level, 0 when that level is 0.
    """
    years = sorted(y for y in average_rates if y in end_rates)
    if not years:
        return []

    average_index_prev = 100.0
    end_index_prev = 100.0
    last_index = end_index_prev
    out: list[Observation] = []

    for year in years:
        average_rate = average_rates.get(year)
        end_rate = end_rates.get(year)
        if not _finite(average_rate) or not _finite(end_rate):
            logger.debug("Skipping %s: average=%r end=%r", year, average_rate, end_rate)
            continue

        average_index = average_index_prev * (1 + average_rate / 100)
        end_index = end_index_prev * (1 + end_rate / 100)
        monthly = interpolate_monthly_indexes(end_index_prev, end_index, average_index)

        for month, index_value in enumerate(monthly, start=1):
            change = ((index_value - last_index) / last_index) * 100 if last_index != 0 else 0.0
            out.append(Observation(date=month_key(year, month), value=change))
            last_index = index_value

        average_index_prev = average_index
        end_index_prev = end_index

    return out
