from __future__ import annotations

from typing import Iterable

from inflation_lens.inflation.models import IndexPoint, Observation, ValueKind
from inflation_lens.utils.dates import sort_key


def build_index(points: Iterable[Observation], kind: ValueKind | str) -> list[IndexPoint]:
    """
    Turn raw observations into a single index rebased to 100.

    - index kind: every value divided by the first (chronological) value, x100.
      A zero first value is treated as 1.
    - percent kind: each value is a % change compounded onto a chain that
      starts at 100; the first output already includes the first change.

    One output point per input point, ascending by date.
    """
    kind = ValueKind(kind)
    ordered = sorted(points, key=lambda p: sort_key(p.date))
    if not ordered:
        return []

    if kind == ValueKind.INDEX:
        base = ordered[0].value or 1
        return [IndexPoint(date=p.date, value=p.value * 100 / base) for p in ordered]

    out: list[IndexPoint] = []
    index = 100.0
    for p in ordered:
        index *= 1 + p.value / 100
        out.append(IndexPoint(date=p.date, value=index))
    return out
