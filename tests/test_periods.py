from __future__ import annotations

from inflation_lens.inflation.models import Granularity, Observation
from inflation_lens.inflation.periods import (
    normalize_series,
    sort_observations,
    to_day_key,
    to_month_key,
    to_period_key,
)


def test_year_key_takes_first_four_chars():
    assert to_period_key("2021-07-15", Granularity.YEAR) == "2021"
    assert to_period_key("2021", "year") == "2021"


def test_year_key_passes_short_strings_through():
    assert to_period_key("99", Granularity.YEAR) == "99"


def test_month_key_slices_long_strings():
    assert to_period_key("2021-07-15", Granularity.MONTH) == "2021-07"
    assert to_month_key("2021-07") == "2021-07"


def test_month_key_parses_short_dates():
    assert to_month_key("2021-7") == "2021-07"
    assert to_month_key("2021") == "2021-01"


def test_malformed_dates_pass_through_as_opaque_keys():
    assert to_month_key("bogus") == "bogus"
    assert to_day_key("n/a") == "n/a"


def test_day_key():
    assert to_day_key("2023-01-05T13:45:00Z") == "2023-01-05"
    assert to_day_key("1/5/2023") == "2023-01-05"


def test_day_granularity_builds_day_keys():
    assert to_period_key("2023-01-05T13:45:00Z", Granularity.DAY) == "2023-01-05"
    assert to_period_key("1/5/2023", "day") == "2023-01-05"
    assert to_period_key("bogus", Granularity.DAY) == "bogus"


def test_normalize_series_last_write_wins_in_input_order():
    pts = [
        Observation("2021-03-01", 1.0),
        Observation("2020-12", 9.0),
        Observation("2021-03-31", 2.0),
    ]
    out = normalize_series(pts, Granularity.MONTH)
    assert [(p.date, p.value) for p in out] == [("2020-12", 9.0), ("2021-03", 2.0)]


def test_sort_observations_drops_non_finite_and_orders_by_date():
    pts = [
        Observation("2021", 1.0),
        Observation("2020", float("nan")),
        Observation("2019", 3.0),
        Observation("2022", float("inf")),
    ]
    out = sort_observations(pts)
    assert [p.date for p in out] == ["2019", "2021"]


def test_sort_observations_uses_parsed_dates_for_unpadded_months():
    pts = [Observation("2020-10", 1.0), Observation("2020-9", 2.0)]
    assert [p.date for p in sort_observations(pts)] == ["2020-9", "2020-10"]
