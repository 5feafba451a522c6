"""Row comparison for header-click sorting.

Policy, in order:

1. both cells are dates -> compare instants
2. both cells are numeric -> compare floats
3. neither cell is a date -> compare lower-cased strings
4. one date and one non-date -> no ordering preference (``None``)

Case 4 is a known gap: such a pair is never swapped, so a column mixing tee
times with other text may keep isolated unordered pairs after a sort.
"""

from __future__ import annotations

from typing import Optional

from config import settings
from scoregrid.models import Row, SortDirection
from scoregrid.services.value_classifier import ClassifiedValue, ValueKind, classify

__all__ = ["compare_classified", "compare_values", "swap_needed", "should_swap"]


def _cmp(a, b) -> int:
    return (a > b) - (a < b)


def compare_classified(x: ClassifiedValue, y: ClassifiedValue) -> Optional[int]:
    if x.kind is ValueKind.DATE and y.kind is ValueKind.DATE:
        return _cmp(x.value, y.value)
    if x.kind is ValueKind.NUMERIC and y.kind is ValueKind.NUMERIC:
        return _cmp(x.value, y.value)
    if x.kind is not ValueKind.DATE and y.kind is not ValueKind.DATE:
        return _cmp(x.folded, y.folded)
    return None


def compare_values(x: str, y: str, *, year: Optional[int] = None) -> Optional[int]:
    return compare_classified(classify(x, year=year), classify(y, year=year))


def swap_needed(order: Optional[int], direction: SortDirection) -> bool:
    if order is None:
        return False
    if direction is SortDirection.ASCENDING:
        return order > 0
    return order < 0


def should_swap(
    row_a: Row,
    row_b: Row,
    column: int,
    direction: SortDirection,
    *,
    year: Optional[int] = None,
) -> bool:
    """Return True when ``row_a`` must move below ``row_b`` for ``column``."""
    index = column + settings.LEADING_COLUMN_OFFSET
    order = compare_values(row_a.cells[index].text, row_b.cells[index].text, year=year)
    return swap_needed(order, direction)
