"""
Display formatting utilities for CLI output.

Provides consistent formatting for:
- Numbers and percentages
- Currency values
- Period labels ("2024-03" -> "Mar 24")
"""
from __future__ import annotations

from typing import Optional

from inflation_lens.utils.dates import parse_iso_date, parse_month_key


# ============================================================================
# Number Formatting
# ============================================================================

def fmt_float(x: Optional[float], decimals: int = 2) -> str:
    """Format float with specified decimals, or 'n/a'."""
    if x is None or not isinstance(x, (int, float)):
        return "n/a"
    return f"{float(x):.{decimals}f}"


def fmt_signed_pct(x: Optional[float], decimals: int = 1) -> str:
    """Format as signed percentage with + prefix for positives."""
    if x is None or not isinstance(x, (int, float)):
        return "n/a"
    return f"{float(x):+.{decimals}f}%"


def fmt_index(x: Optional[float]) -> str:
    return fmt_float(x, decimals=1)


# ============================================================================
# Currency Formatting
# ============================================================================

def fmt_money(x: Optional[float], show_cents: bool = False) -> str:
    """Format a currency amount with separators (currency-agnostic)."""
    if x is None or not isinstance(x, (int, float)):
        return "n/a"
    if show_cents:
        return f"{float(x):,.2f}"
    return f"{float(x):,.0f}"


# ============================================================================
# Period Labels
# ============================================================================

def fmt_period_label(value: str) -> str:
    """
    Human label for a period key.

    Day keys render as "Mar 5, 24", month keys as "Mar 24"; anything else is
    returned unchanged.
    """
    if len(value) == 10:
        d = parse_iso_date(value)
        if d is not None:
            return f"{d.strftime('%b')} {d.day}, {d.strftime('%y')}"

    if len(value) == 7:
        ym = parse_month_key(value)
        if ym is not None:
            year, month = ym
            return f"{_MONTH_ABBR[month - 1]} {year % 100:02d}"

    return value


_MONTH_ABBR = ["Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec"]
