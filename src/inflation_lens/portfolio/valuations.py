"""
Portfolio valuation source: spreadsheet-friendly CSV export.

Expected columns (camelCase as exported by portfolio trackers, snake_case also
accepted):
- valuationDate / date
- totalValue / total_value
- netContribution / net_contribution (optional, cumulative)
"""
from __future__ import annotations

import logging
import math
from pathlib import Path

import pandas as pd

from inflation_lens.portfolio.models import ValuationSnapshot

logger = logging.getLogger(__name__)

_DATE_COLUMNS = ("valuationDate", "valuation_date", "date")
_VALUE_COLUMNS = ("totalValue", "total_value")
_CONTRIB_COLUMNS = ("netContribution", "net_contribution")


def _pick(columns: list[str], candidates: tuple[str, ...]) -> str | None:
    for c in candidates:
        if c in columns:
            return c
    return None


def _num(x: object) -> float | None:
    if x is None:
        return None
    s = str(x).strip().replace(",", "").replace("$", "")
    if not s or s.lower() == "nan":
        return None
    try:
        v = float(s)
    except ValueError:
        return None
    return v if math.isfinite(v) else None


def valuations_from_frame(df: pd.DataFrame) -> list[ValuationSnapshot]:
    """Convert a valuation table to snapshots, keeping row order."""
    cols = [str(c) for c in df.columns]
    date_col = _pick(cols, _DATE_COLUMNS)
    value_col = _pick(cols, _VALUE_COLUMNS)
    contrib_col = _pick(cols, _CONTRIB_COLUMNS)
    if date_col is None or value_col is None:
        raise ValueError(f"Valuation table needs a date and totalValue column (got {cols})")

    out: list[ValuationSnapshot] = []
    for i, row in enumerate(df.to_dict(orient="records")):
        total = _num(row.get(value_col))
        raw_date = row.get(date_col)
        if total is None or raw_date is None or str(raw_date).strip() in ("", "nan"):
            logger.debug("Skipping valuation row %d: %r", i, row)
            continue
        contrib = _num(row.get(contrib_col)) if contrib_col else None
        out.append(ValuationSnapshot(date=str(raw_date).strip(), total_value=total, net_contribution=contrib))
    return out


def read_valuations(path: str | Path) -> list[ValuationSnapshot]:
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(str(path))
    df = pd.read_csv(path, dtype=str, keep_default_na=False)
    snaps = valuations_from_frame(df)
    logger.info("Read %d valuation snapshots from %s", len(snaps), path)
    return snaps
