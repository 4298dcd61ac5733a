from __future__ import annotations

import pytest

from conftest import FakeProvider
from inflation_lens.comparison.pipeline import build_inflation_index, build_portfolio_series, run_comparison
from inflation_lens.comparison.ranges import RangeSpec
from inflation_lens.inflation.models import FetchRequest, Granularity, Observation
from inflation_lens.inflation.sources import resolve_metric
from inflation_lens.portfolio.models import ValuationSnapshot

CPI_PCT = resolve_metric("worldBank", "FP.CPI.TOTL.ZG")
CPI_IDX = resolve_metric("worldBank", "FP.CPI.TOTL")


def _valuations():
    return [
        ValuationSnapshot("2020-01-15", 1000.0, 1000.0),
        ValuationSnapshot("2020-06-30", 1100.0, 1000.0),
        ValuationSnapshot("2021-03-31", 1200.0, 1100.0),
    ]


def test_inflation_index_annual_percent_to_monthly(annual_percent_observations):
    out = build_inflation_index(annual_percent_observations, CPI_PCT, Granularity.YEAR)
    assert len(out) == 4 * 12
    assert out[0].date == "2020-01"
    assert out[0].value == pytest.approx(101.2)
    assert out[12].value == pytest.approx(101.2 * 1.047)
    assert out[-1].date == "2023-12"


def test_inflation_index_daily_resolution():
    obs = [Observation("2020-01-31", 100.0), Observation("2020-02-29", 110.0)]
    out = build_inflation_index(obs, CPI_IDX, Granularity.MONTH, "daily")
    assert out[0].date == "2020-01-01"
    assert out[0].value == pytest.approx(100.0)
    assert out[-1].date == "2020-02-29"
    assert len(out) == 31 + 29


def test_portfolio_series_range_filter():
    rng = RangeSpec(start_date="2020-06-01", end_date="2020-12-31")
    assert [p.date for p in build_portfolio_series(_valuations(), "monthly", rng)] == ["2020-06"]


def test_run_comparison_monthly(annual_percent_observations):
    provider = FakeProvider(annual_percent_observations)
    request = FetchRequest(country="US", indicator=CPI_PCT.id)
    result = run_comparison(
        provider=provider,
        request=request,
        metric=CPI_PCT,
        granularity=Granularity.YEAR,
        load_valuations=_valuations,
    )
    assert provider.requests == [request]
    assert result.has_data
    assert len(result.points) == 15
    assert result.points[0].period == "2020-01"
    assert result.points[0].inflation_index == 100.0
    assert result.points[12].period == "2021-01"
    assert result.points[12].inflation_index == pytest.approx(104.7)
    assert len(result.excess) == len(result.interest) == 15
    assert result.summary is not None
    assert result.summary.latest_nominal == 1200.0


def test_run_comparison_daily_starts_at_first_valuation(annual_percent_observations):
    result = run_comparison(
        provider=FakeProvider(annual_percent_observations),
        request=FetchRequest(country="US", indicator=CPI_PCT.id),
        metric=CPI_PCT,
        granularity=Granularity.YEAR,
        load_valuations=_valuations,
        resolution="daily",
    )
    assert result.points[0].period == "2020-01-15"
    assert result.points[0].inflation_index == 100.0
    assert result.points[-1].period == "2021-03-31"


def test_run_comparison_without_overlap_is_empty(annual_percent_observations):
    result = run_comparison(
        provider=FakeProvider(annual_percent_observations),
        request=FetchRequest(country="US", indicator=CPI_PCT.id),
        metric=CPI_PCT,
        granularity=Granularity.YEAR,
        load_valuations=lambda: [ValuationSnapshot("2019-05-01", 1.0, 1.0)],
    )
    assert not result.has_data
    assert result.summary is None
    assert result.excess == []
    assert len(result.inflation_index) == 48


def test_run_comparison_propagates_loader_errors(annual_percent_observations):
    def boom():
        raise FileNotFoundError("valuations.csv")

    with pytest.raises(FileNotFoundError):
        run_comparison(
            provider=FakeProvider(annual_percent_observations),
            request=FetchRequest(country="US", indicator=CPI_PCT.id),
            metric=CPI_PCT,
            granularity=Granularity.YEAR,
            load_valuations=boom,
        )
