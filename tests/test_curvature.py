from __future__ import annotations

import math

import pytest

from inflation_lens.inflation.curvature import (
    MONTH_STEPS,
    MONTHLY_T_MEAN,
    MONTHLY_T_VARIANCE,
    interpolate_monthly_indexes,
    reconcile_dual_rates,
)


def _compound(changes: list[float]) -> float:
    out = 1.0
    for c in changes:
        out *= 1 + c / 100
    return out


def test_sample_constants():
    assert MONTH_STEPS == 12
    assert math.isclose(MONTHLY_T_MEAN, 78 / 144)
    assert math.isclose(MONTHLY_T_VARIANCE, 78 / 144 - 650 / (144 * 12))


def test_flat_when_bounds_equal():
    assert interpolate_monthly_indexes(104.0, 104.0, 110.0) == [104.0] * 12


def test_flat_when_bound_not_finite():
    assert interpolate_monthly_indexes(100.0, float("inf"), 101.0) == [100.0] * 12
    assert interpolate_monthly_indexes(100.0, float("nan"), 101.0) == [100.0] * 12


def test_linear_when_average_matches_sample_mean():
    average = 100.0 + 12.0 * MONTHLY_T_MEAN
    out = interpolate_monthly_indexes(100.0, 112.0, average)
    assert out == pytest.approx([101.0 + k for k in range(12)])


def test_linear_when_average_not_finite():
    out = interpolate_monthly_indexes(100.0, 112.0, float("nan"))
    assert out == pytest.approx([101.0 + k for k in range(12)])


def test_mean_matches_target_and_endpoint_preserved():
    out = interpolate_monthly_indexes(100.0, 110.0, 105.0)
    assert len(out) == 12
    assert out[-1] == pytest.approx(110.0)
    assert sum(out) / 12 == pytest.approx(105.0)
    assert all(100.0 <= v <= 110.0 for v in out)


def test_values_stay_in_bounds_for_extreme_targets():
    out = interpolate_monthly_indexes(100.0, 101.0, 150.0)
    assert all(100.0 <= v <= 101.0 for v in out)
    assert out[-1] == pytest.approx(101.0)

    falling = interpolate_monthly_indexes(120.0, 100.0, 60.0)
    assert all(100.0 <= v <= 120.0 for v in falling)
    assert falling[-1] == pytest.approx(100.0)


def test_clipped_months_pull_mean_below_target():
    # curvature ~1.9: months 7-12 saturate at the year-end level
    out = interpolate_monthly_indexes(100.0, 101.4, 101.2)
    assert out[6:] == pytest.approx([101.4] * 6)
    assert out[5] < 101.4
    assert sum(out) / 12 == pytest.approx(101.153, abs=1e-3)
    assert sum(out) / 12 < 101.2


def test_reconcile_emits_twelve_months_per_shared_year():
    avg = {2021: 3.0, 2020: 2.0}
    end = {2020: 2.0, 2021: 3.5, 2022: 1.0}
    out = reconcile_dual_rates(avg, end)
    assert len(out) == 24
    assert out[0].date == "2020-01"
    assert out[11].date == "2020-12"
    assert out[-1].date == "2021-12"
    # monthly changes chain back to the end-of-period levels
    assert _compound([p.value for p in out[:12]]) == pytest.approx(1.02)
    assert _compound([p.value for p in out]) == pytest.approx(1.02 * 1.035)


def test_reconcile_skips_years_with_missing_rate_without_advancing():
    avg = {2020: float("nan"), 2021: 3.0}
    end = {2020: 5.0, 2021: 3.0}
    out = reconcile_dual_rates(avg, end)
    assert [p.date for p in out] == [f"2021-{m:02d}" for m in range(1, 13)]
    assert _compound([p.value for p in out]) == pytest.approx(1.03)


def test_reconcile_no_shared_years():
    assert reconcile_dual_rates({2020: 1.0}, {2021: 1.0}) == []
    assert reconcile_dual_rates({}, {}) == []


def test_reconcile_zero_previous_level_yields_zero_change():
    out = reconcile_dual_rates({2020: 2.0, 2021: 3.0}, {2020: -100.0, 2021: 5.0})
    assert len(out) == 24
    assert out[11].date == "2020-12"
    assert out[11].value == pytest.approx(-100.0)
    assert [p.value for p in out[12:]] == [0.0] * 12
    assert all(math.isfinite(p.value) for p in out)
