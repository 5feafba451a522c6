"""Header-click sort engine.

The default ``restart`` strategy is a bubble sort that swaps the first
out-of-order adjacent pair it finds and then rescans from the top. It is
O(n^2) swaps with an O(n) scan each, which is fine for scoreboard sized
tables, and its tie behaviour (equal rows never move) is what the rendered
grid shows.

Auto-flip: when the very first full pass finds nothing to swap while sorting
ascending (the column is already ascending), the direction flips to
descending and scanning continues. Clicking an already sorted column
therefore reverses it instead of doing nothing.

The ``stable`` strategy produces the same order with ``sorted`` for columns
whose values share one kind. With dates mixed among other values the
comparator is not a total order and the two strategies may disagree.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from functools import cmp_to_key
from typing import Callable, Dict, List, Optional, Sequence

from config import settings
from scoregrid.models import Row, SortDirection, SortState, Table
from scoregrid.services.row_comparator import compare_classified, swap_needed
from scoregrid.services.value_classifier import ClassifiedValue, classify

__all__ = [
    "SortOutcome",
    "next_direction",
    "bubble_sort_rows",
    "stable_sort_rows",
    "TableSorter",
    "STRATEGIES",
]

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class SortOutcome:
    rows: List[Row]
    direction: SortDirection
    swaps: int
    scans: int
    flipped: bool = False


def next_direction(previous: Optional[SortDirection]) -> SortDirection:
    if previous is SortDirection.ASCENDING:
        return SortDirection.DESCENDING
    return SortDirection.ASCENDING


def _keys(rows: Sequence[Row], column: int, year: Optional[int]) -> List[ClassifiedValue]:
    index = column + settings.LEADING_COLUMN_OFFSET
    return [classify(r.cells[index].text, year=year) for r in rows]


def _first_swap(keys: List[ClassifiedValue], direction: SortDirection) -> Optional[int]:
    for i in range(len(keys) - 1):
        if swap_needed(compare_classified(keys[i], keys[i + 1]), direction):
            return i
    return None


def bubble_sort_rows(
    rows: Sequence[Row],
    column: int,
    direction: SortDirection,
    *,
    year: Optional[int] = None,
) -> SortOutcome:
    ordered = list(rows)
    keys = _keys(ordered, column, year)
    swaps = 0
    scans = 0
    flipped = False
    while True:
        scans += 1
        i = _first_swap(keys, direction)
        if i is not None:
            ordered[i], ordered[i + 1] = ordered[i + 1], ordered[i]
            keys[i], keys[i + 1] = keys[i + 1], keys[i]
            swaps += 1
            continue
        if swaps == 0 and direction is SortDirection.ASCENDING:
            direction = SortDirection.DESCENDING
            flipped = True
            continue
        break
    return SortOutcome(rows=ordered, direction=direction, swaps=swaps, scans=scans, flipped=flipped)


def stable_sort_rows(
    rows: Sequence[Row],
    column: int,
    direction: SortDirection,
    *,
    year: Optional[int] = None,
) -> SortOutcome:
    keys = _keys(rows, column, year)
    flipped = False
    if direction is SortDirection.ASCENDING and _first_swap(keys, direction) is None:
        direction = SortDirection.DESCENDING
        flipped = True
    sign = 1 if direction is SortDirection.ASCENDING else -1

    def _order(a, b) -> int:
        return sign * (compare_classified(a[1], b[1]) or 0)

    pairs = sorted(zip(rows, keys), key=cmp_to_key(_order))
    ordered = [row for row, _ in pairs]
    moved = sum(1 for before, after in zip(rows, ordered) if before is not after)
    return SortOutcome(rows=ordered, direction=direction, swaps=moved, scans=1, flipped=flipped)


STRATEGIES: Dict[str, Callable[..., SortOutcome]] = {
    "restart": bubble_sort_rows,
    "stable": stable_sort_rows,
}


class TableSorter:
    """Applies a header click to a table and its sort indicator state.

    The indicator records the direction chosen from the previous click, set
    before scanning. An auto-flip changes the row order but not the
    indicator, so a second click on an already ascending column resolves to
    descending and leaves the rows as they are.
    """

    def __init__(self, strategy: str = "restart", *, year: Optional[int] = None):
        if strategy not in STRATEGIES:
            raise ValueError(f"Unknown sort strategy '{strategy}'")
        self.strategy = strategy
        self.year = year

    def sort_column(self, table: Table, sort_state: SortState, column: int) -> SortOutcome:
        table.check_column(column)
        direction = next_direction(sort_state.direction_for(column))
        year = table.year if table.year is not None else self.year
        outcome = STRATEGIES[self.strategy](table.rows, column, direction, year=year)
        table.rows[:] = outcome.rows
        sort_state.activate(column, direction)
        _log.debug(
            "sorted %s column %d %s (%d swaps, %d scans)",
            table.table_id,
            column,
            outcome.direction.value,
            outcome.swaps,
            outcome.scans,
        )
        return outcome
