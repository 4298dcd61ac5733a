from __future__ import annotations

import pandas as pd
import pytest

from inflation_lens.portfolio.models import ValuationSnapshot
from inflation_lens.portfolio.valuations import read_valuations, valuations_from_frame


def test_read_camel_case_export(tmp_path):
    p = tmp_path / "valuations.csv"
    p.write_text(
        "valuationDate,totalValue,netContribution\n"
        "2023-01-31,\"1,000.50\",1000\n"
        "2023-02-28,1050,\n"
    )
    out = read_valuations(p)
    assert out == [
        ValuationSnapshot("2023-01-31", 1000.5, 1000.0),
        ValuationSnapshot("2023-02-28", 1050.0, None),
    ]


def test_snake_case_columns_and_bad_rows_skipped():
    df = pd.DataFrame(
        {
            "date": ["2023-01-01", "", "2023-01-03", "2023-01-04"],
            "total_value": ["10", "11", "n/a", "$12"],
        }
    )
    out = valuations_from_frame(df)
    assert [(v.date, v.total_value, v.net_contribution) for v in out] == [
        ("2023-01-01", 10.0, None),
        ("2023-01-04", 12.0, None),
    ]


def test_missing_value_column_rejected():
    with pytest.raises(ValueError):
        valuations_from_frame(pd.DataFrame({"date": ["2023-01-01"], "balance": ["1"]}))


def test_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_valuations(tmp_path / "nope.csv")
