"""ScoresTableView

QTableWidget-based host for one scores table. The view translates header
clicks, player buttons and round buttons into viewmodel events, and applies
the returned `RenderInstructions` (row order, hidden rows/columns, sort
indicator, collapse labels). It holds no table state of its own.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Optional

from PyQt6.QtWidgets import (
    QHBoxLayout,
    QHeaderView,
    QLabel,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from config import settings
from scoregrid.models import Table, TaggedElement
from scoregrid.services.round_collapse import label_id
from scoregrid.services.visibility_filter import row_element_id
from scoregrid.viewmodels.scoreboard_viewmodel import RenderInstructions, ScoreboardViewModel

__all__ = ["ScoresTableView"]

_ARROWS = {"asc": " ▲", "desc": " ▼"}


class ScoresTableView(QWidget):
    def __init__(self, viewmodel: ScoreboardViewModel | None = None, parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.viewmodel = viewmodel or ScoreboardViewModel()
        self._table_id: Optional[str] = None
        self._labels: List[str] = []
        self._sort_columns: Dict[int, int] = {}
        self.player_buttons: Dict[str, QPushButton] = {}
        self.round_buttons: Dict[str, QPushButton] = {}
        self.last_instructions = RenderInstructions()
        self._build_ui()

    def _build_ui(self):
        root = QVBoxLayout(self)
        self.title_label = QLabel("Scores")
        self.title_label.setObjectName("viewTitleLabel")
        root.addWidget(self.title_label)
        self.player_bar = QHBoxLayout()
        root.addLayout(self.player_bar)
        self.round_bar = QHBoxLayout()
        root.addLayout(self.round_bar)
        self.table = QTableWidget(0, 0)
        self.table.setEditTriggers(QTableWidget.EditTrigger.NoEditTriggers)
        self.table.verticalHeader().setVisible(False)
        header = self.table.horizontalHeader()
        header.setSectionResizeMode(QHeaderView.ResizeMode.ResizeToContents)
        header.sectionClicked.connect(self._on_header_clicked)  # type: ignore
        root.addWidget(self.table)

    # Loading -------------------------------------------------------
    def set_table(self, table: Table, elements: Iterable[TaggedElement] = ()):
        self._table_id = table.table_id
        self._sort_columns = self._sortable_columns(table)
        self._labels = self._column_labels(table)
        self.table.setColumnCount(table.width)
        self._build_buttons(table)
        self.apply(self.viewmodel.load([table], elements))

    @staticmethod
    def _sortable_columns(table: Table) -> Dict[int, int]:
        """Map logical table column -> sort column for sortable headers only."""
        return {
            h.column + settings.LEADING_COLUMN_OFFSET: h.column
            for h in table.headers
            if h.sortable and h.column is not None
        }

    @staticmethod
    def _column_labels(table: Table) -> List[str]:
        by_column = {
            h.column + settings.LEADING_COLUMN_OFFSET: h.label
            for h in table.headers
            if h.sortable and h.column is not None
        }
        plain = iter(h.label for h in table.headers if not h.sortable and not h.group)
        return [by_column.get(i) or next(plain, "") for i in range(table.width)]

    def _clear_bar(self, bar: QHBoxLayout):
        while bar.count():
            item = bar.takeAt(0)
            widget = item.widget() if item is not None else None
            if widget is not None:
                widget.deleteLater()

    def _build_buttons(self, table: Table):
        self._clear_bar(self.player_bar)
        self._clear_bar(self.round_bar)
        self.player_buttons.clear()
        self.round_buttons.clear()
        all_btn = QPushButton("All")
        all_btn.clicked.connect(lambda _checked=False: self.apply(self.viewmodel.reset_participant()))  # type: ignore
        self.player_bar.addWidget(all_btn)
        for player in dict.fromkeys(r.player for r in table.rows if r.player):
            btn = QPushButton(player)
            btn.setCheckable(True)
            btn.clicked.connect(  # type: ignore
                lambda _checked=False, p=player: self.apply(self.viewmodel.select_participant(p))
            )
            self.player_bar.addWidget(btn)
            self.player_buttons[player] = btn
        for header in table.headers:
            if not header.group or header.round is None:
                continue
            btn = QPushButton(header.label)
            btn.clicked.connect(  # type: ignore
                lambda _checked=False, r=header.round: self.apply(self.viewmodel.toggle_round(r))
            )
            self.round_bar.addWidget(btn)
            self.round_buttons[header.round] = btn

    # Interaction ---------------------------------------------------
    def _on_header_clicked(self, logical_index: int):
        column = self._sort_columns.get(logical_index)
        if self._table_id is None or column is None:
            return
        self.apply(self.viewmodel.sort(self._table_id, column))

    # Rendering -----------------------------------------------------
    def apply(self, instructions: RenderInstructions):
        """Apply render instructions; empty instructions (ignored events) change nothing."""
        if instructions.is_empty() or self._table_id is None:
            return
        self.last_instructions = instructions
        table = self.viewmodel.state.tables[self._table_id]
        vis = instructions.visibility
        self.table.setRowCount(len(table.rows))
        for r, row in enumerate(table.rows):
            for c, cell in enumerate(row.cells):
                self.table.setItem(r, c, QTableWidgetItem(cell.text))
            self.table.setRowHidden(r, not vis.get(row_element_id(table.table_id, row.row_id), True))
        for c in range(table.width):
            cell_ids = [row.cell_id(table.table_id, c) for row in table.rows]
            hidden = bool(cell_ids) and all(not vis.get(cid, True) for cid in cell_ids)
            self.table.setColumnHidden(c, hidden)
        indicators = instructions.sort_indicators.get(table.table_id, {})
        headers = []
        for c, text in enumerate(self._labels):
            direction = indicators.get(c - settings.LEADING_COLUMN_OFFSET)
            headers.append(text + _ARROWS.get(direction, "") if direction else text)
        self.table.setHorizontalHeaderLabels(headers)
        active = self.viewmodel.state.selection.active_participant
        for player, btn in self.player_buttons.items():
            btn.setChecked(player == active)
        for header in table.headers:
            btn = self.round_buttons.get(header.round or "")
            if header.group and btn is not None:
                label = instructions.labels.get(label_id(header.element_id), "")
                btn.setText(f"{header.label} ({label})" if label else header.label)

    def column_texts(self, column: int) -> List[str]:
        return [self.table.item(r, column).text() for r in range(self.table.rowCount())]
