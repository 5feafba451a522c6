"""Round group collapse / expand.

Collapsing a round hides its ``hideable`` cells and secondary headers, shrinks
the round's group header to a single column and flips its label between
the two fixed strings ("tap to expand" while expanded, "tap to shrink" while
collapsed). Expanding reverses all three.
"""

from __future__ import annotations

from typing import Dict, Tuple, Union

from scoregrid.errors import EngineError
from scoregrid.models import CollapseState, ScoreboardState
from scoregrid.services.selection_state import normalize_round

__all__ = ["toggle_round_collapse", "group_header_updates", "label_id"]


def label_id(group_header_id: str) -> str:
    return f"{group_header_id}/label"


def toggle_round_collapse(collapse: CollapseState, round_id: Union[int, str]) -> bool:
    """Flip the round's collapsed flag and return the new value."""
    key = normalize_round(round_id)
    if key is None:
        raise EngineError("round id must not be empty", context={"round_id": round_id})
    collapse.collapsed[key] = not collapse.is_collapsed(key)
    return collapse.collapsed[key]


def group_header_updates(state: ScoreboardState) -> Tuple[Dict[str, int], Dict[str, str]]:
    """Return (colspans, labels) for every round group header of every table."""
    colspans: Dict[str, int] = {}
    labels: Dict[str, str] = {}
    for table in state.tables.values():
        for header in table.headers:
            if not header.group or header.round is None:
                continue
            colspans[header.element_id] = state.collapse.colspan(header.round)
            labels[label_id(header.element_id)] = state.collapse.label(header.round)
    return colspans, labels
