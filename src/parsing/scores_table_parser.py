"""Read server-rendered scoreboard markup into engine tables (BeautifulSoup).

Recognised markup:

- ``table[id^=scores-table]`` with ``thead`` headers and ``tr.playerrow`` body
  rows tagged ``data-player``
- ``td.cells[data-round]`` round cells, ``.hideable`` when they disappear on
  collapse
- ``th.topheader.shrinkable[data-round]`` round group headers and
  ``th.sortable`` headers whose ``onclick`` names the sort column
- outside the tables: ``.chart``, ``.linescore-container`` and
  ``.player-button`` tagged by player; ``tr.linescore-row``,
  ``tr.linescore-total``, ``.linescore-round-button`` and the line-score
  tee-time blocks (``div.topheader``) tagged by round
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from bs4 import BeautifulSoup  # type: ignore

from config import settings
from parsing.errors import ColumnMismatchError, InvalidAttributeError, MissingSectionError
from scoregrid.models import Cell, ElementKind, HeaderCell, Row, Table, TaggedElement
from utils import html_utils

__all__ = ["ScoresPage", "parse_scores_page", "parse_scores_table"]

SORT_CALL_RE = re.compile(r"sortTable\(\s*['\"][^'\"]*['\"]\s*,\s*(\d+)\s*\)")

# (css selector, kind, tag attribute)
_TAGGED_SELECTORS = [
    (".chart[data-player]", ElementKind.CHART, "data-player"),
    (".linescore-container[data-player]", ElementKind.LINESCORE, "data-player"),
    (".player-button[data-player]", ElementKind.PLAYER_BUTTON, "data-player"),
    ("tr.linescore-row[data-round]", ElementKind.LINESCORE_ROW, "data-round"),
    ("tr.linescore-total[data-round]", ElementKind.LINESCORE_ROW, "data-round"),
    (".linescore-round-button[data-round]", ElementKind.ROUND_BUTTON, "data-round"),
    (".linescore-container div.topheader[data-round]", ElementKind.TEE_TIME, "data-round"),
]


@dataclass
class ScoresPage:
    tables: List[Table] = field(default_factory=list)
    elements: List[TaggedElement] = field(default_factory=list)

    def table(self, table_id: str) -> Optional[Table]:
        return next((t for t in self.tables if t.table_id == table_id), None)


def _text(tag) -> str:
    return html_utils.clean_cell(tag.get_text(" ", strip=True)) if tag else ""


def _attr(tag, name: str) -> Optional[str]:
    value = tag.get(name)
    if value is None:
        return None
    return str(value).strip() or None


def _colspan(th, default: int, table_id: str) -> int:
    raw = th.get("colspan")
    if raw is None:
        return default
    try:
        return int(str(raw).strip())
    except ValueError as exc:
        raise InvalidAttributeError(
            f"Header of '{table_id}' has a non-numeric colspan",
            context={"table_id": table_id, "colspan": raw},
        ) from exc


def _headers(table_tag, table_id: str) -> List[HeaderCell]:
    thead = table_tag.find("thead")
    if thead is None:
        return []
    headers: List[HeaderCell] = []
    sortable_seen = 0
    for i, th in enumerate(thead.find_all("th")):
        classes = html_utils.class_list(th)
        round_id = _attr(th, "data-round")
        if "shrinkable" in classes and round_id:
            toggle = th.find(class_="toggle")
            headers.append(
                HeaderCell(
                    element_id=f"{table_id}/round-{round_id}",
                    label=_text(toggle) if toggle else _text(th),
                    round=round_id,
                    colspan=_colspan(th, settings.EXPANDED_COLSPAN, table_id),
                    group=True,
                )
            )
            continue
        column: Optional[int] = None
        if "sortable" in classes:
            sortable_seen += 1
            m = SORT_CALL_RE.search(th.get("onclick", ""))
            column = int(m.group(1)) if m else sortable_seen
        headers.append(
            HeaderCell(
                element_id=f"{table_id}/h{i}",
                label=_text(th),
                round=round_id,
                hideable="hideable" in classes,
                sortable="sortable" in classes,
                column=column,
                colspan=_colspan(th, 1, table_id),
            )
        )
    return headers


def _body_rows(table_tag) -> List:
    body = table_tag.find("tbody") or table_tag
    return [tr for tr in body.find_all("tr") if tr.find("td") is not None]


def parse_scores_table(table_tag, *, year: Optional[int] = None) -> Table:
    table_id = table_tag.get("id") or settings.TABLE_ID_PREFIX
    rows: List[Row] = []
    for n, tr in enumerate(_body_rows(table_tag)):
        cells = [
            Cell(
                text=_text(td),
                round=_attr(td, "data-round"),
                player=_attr(td, "data-player"),
                hideable="hideable" in html_utils.class_list(td),
            )
            for td in tr.find_all("td")
        ]
        rows.append(Row(row_id=_attr(tr, "id") or f"r{n}", cells=cells, player=_attr(tr, "data-player")))
    widths = sorted({len(r.cells) for r in rows})
    if len(widths) > 1:
        raise ColumnMismatchError(
            f"Rows of '{table_id}' have differing cell counts",
            context={"table_id": table_id, "widths": widths},
        )
    return Table(table_id=table_id, rows=rows, headers=_headers(table_tag, table_id), year=year)


def _tagged_elements(soup) -> List[TaggedElement]:
    elements: List[TaggedElement] = []
    counters: Dict[ElementKind, int] = {}
    for selector, kind, attr in _TAGGED_SELECTORS:
        for tag in soup.select(selector):
            n = counters.get(kind, 0)
            counters[kind] = n + 1
            value = _attr(tag, attr)
            elements.append(
                TaggedElement(
                    element_id=_attr(tag, "id") or f"{kind.value}-{n}",
                    kind=kind,
                    player=value if attr == "data-player" else None,
                    round=value if attr == "data-round" else None,
                )
            )
    return elements


def parse_scores_page(html: str, *, year: Optional[int] = None) -> ScoresPage:
    """Parse every scores table and tagged element of a rendered page.

    Raises `MissingSectionError` when the page has no scores table.
    """
    soup = BeautifulSoup(html, "html.parser")
    table_tags = soup.find_all("table", id=re.compile(rf"^{re.escape(settings.TABLE_ID_PREFIX)}"))
    if not table_tags:
        raise MissingSectionError("No scores table found", context={"prefix": settings.TABLE_ID_PREFIX})
    return ScoresPage(
        tables=[parse_scores_table(t, year=year) for t in table_tags],
        elements=_tagged_elements(soup),
    )
