"""Engine-facing models for the scores grid.

Tables, rows and cells are read views supplied by the rendering layer. The
state objects (sort, selection, collapse) are owned by a single
`ScoreboardState` and mutated only through the dispatcher.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional

from config import settings
from scoregrid.errors import ColumnOutOfRangeError, TableShapeError

__all__ = [
    "SortDirection",
    "ElementKind",
    "Cell",
    "Row",
    "HeaderCell",
    "Table",
    "TaggedElement",
    "SortState",
    "SelectionState",
    "CollapseState",
    "ScoreboardState",
]


class SortDirection(str, Enum):
    ASCENDING = "asc"
    DESCENDING = "desc"

    def flipped(self) -> "SortDirection":
        if self is SortDirection.ASCENDING:
            return SortDirection.DESCENDING
        return SortDirection.ASCENDING


class ElementKind(str, Enum):
    ROW = "row"
    CELL = "cell"
    HEADER = "header"
    GROUP_HEADER = "group_header"
    GROUP_LABEL = "group_label"
    CHART = "chart"
    LINESCORE = "linescore"
    LINESCORE_ROW = "linescore_row"
    TEE_TIME = "tee_time"
    PLAYER_BUTTON = "player_button"
    ROUND_BUTTON = "round_button"


@dataclass(frozen=True)
class Cell:
    text: str
    round: Optional[str] = None
    player: Optional[str] = None
    hideable: bool = False


@dataclass
class Row:
    row_id: str
    cells: List[Cell] = field(default_factory=list)
    player: Optional[str] = None

    def cell_id(self, table_id: str, index: int) -> str:
        return f"{table_id}/{self.row_id}/{index}"


@dataclass(frozen=True)
class HeaderCell:
    """A header element.

    ``group`` headers are the top row round headers (``colspan`` 3 when
    expanded). Sortable headers carry the ``column`` number they sort by.
    """

    element_id: str
    label: str
    round: Optional[str] = None
    hideable: bool = False
    sortable: bool = False
    column: Optional[int] = None
    colspan: int = 1
    group: bool = False


@dataclass
class Table:
    table_id: str
    rows: List[Row] = field(default_factory=list)
    headers: List[HeaderCell] = field(default_factory=list)
    year: Optional[int] = None

    def __post_init__(self) -> None:
        widths = {len(r.cells) for r in self.rows}
        if len(widths) > 1:
            raise TableShapeError(
                f"Table '{self.table_id}' has rows of unequal width",
                context={"table_id": self.table_id, "widths": sorted(widths)},
            )

    @property
    def width(self) -> int:
        return len(self.rows[0].cells) if self.rows else 0

    def row_order(self) -> List[str]:
        return [r.row_id for r in self.rows]

    def check_column(self, column: int) -> int:
        """Return the body cell index compared for sort ``column``."""
        index = column + settings.LEADING_COLUMN_OFFSET
        if column < 0 or index >= self.width:
            raise ColumnOutOfRangeError(
                f"Column {column} is outside table '{self.table_id}'",
                context={"table_id": self.table_id, "column": column, "width": self.width},
            )
        return index


@dataclass(frozen=True)
class TaggedElement:
    """Participant/round tagged element living outside the tables (charts, buttons)."""

    element_id: str
    kind: ElementKind
    player: Optional[str] = None
    round: Optional[str] = None
    hideable: bool = False


@dataclass
class SortState:
    """Per-table sort indicator. Only one column is active at a time."""

    directions: Dict[int, SortDirection] = field(default_factory=dict)

    def direction_for(self, column: int) -> Optional[SortDirection]:
        return self.directions.get(column)

    def activate(self, column: int, direction: SortDirection) -> None:
        self.directions.clear()
        self.directions[column] = direction

    @property
    def active_column(self) -> Optional[int]:
        return next(iter(self.directions), None)

    def clear(self) -> None:
        self.directions.clear()


@dataclass
class SelectionState:
    active_participant: Optional[str] = None
    active_round: Optional[str] = None

    def participant_allows(self, player: Optional[str]) -> bool:
        if player is None or self.active_participant is None:
            return True
        return player == self.active_participant

    def round_allows(self, round_id: Optional[str]) -> bool:
        if round_id is None or self.active_round is None:
            return True
        return round_id == self.active_round


@dataclass
class CollapseState:
    collapsed: Dict[str, bool] = field(default_factory=dict)

    def is_collapsed(self, round_id: Optional[str]) -> bool:
        if round_id is None:
            return False
        return self.collapsed.get(round_id, False)

    def colspan(self, round_id: str) -> int:
        if self.is_collapsed(round_id):
            return settings.COLLAPSED_COLSPAN
        return settings.EXPANDED_COLSPAN

    def label(self, round_id: str) -> str:
        return settings.LABEL_SHRINK if self.is_collapsed(round_id) else settings.LABEL_EXPAND


@dataclass
class ScoreboardState:
    tables: Dict[str, Table] = field(default_factory=dict)
    sort_states: Dict[str, SortState] = field(default_factory=dict)
    selection: SelectionState = field(default_factory=SelectionState)
    collapse: CollapseState = field(default_factory=CollapseState)
    elements: List[TaggedElement] = field(default_factory=list)

    def add_table(self, table: Table) -> None:
        self.tables[table.table_id] = table
        self.sort_states.setdefault(table.table_id, SortState())

    def copy(self) -> "ScoreboardState":
        return copy.deepcopy(self)

    def rounds(self) -> List[str]:
        seen: List[str] = []
        for table in self.tables.values():
            for header in table.headers:
                if header.group and header.round and header.round not in seen:
                    seen.append(header.round)
        return seen
