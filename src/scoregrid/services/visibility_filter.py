"""Visibility computation for rows, cells, headers and tagged elements.

An element is visible when all of these hold:

- participant axis: no active participant, no player tag, or tag matches
- round axis: no active round, no round tag, or tag matches
- collapse: the element is not ``hideable`` inside a collapsed round

Player buttons ignore the participant axis and round buttons ignore the
round axis; they are the selectors, so they report ``selected`` instead.
"""

from __future__ import annotations

from typing import Dict, Optional

from scoregrid.models import ElementKind, ScoreboardState

__all__ = ["is_visible", "compute_visibility", "compute_selected", "row_element_id"]


def row_element_id(table_id: str, row_id: str) -> str:
    return f"{table_id}/{row_id}"


def is_visible(
    state: ScoreboardState,
    *,
    player: Optional[str] = None,
    round_id: Optional[str] = None,
    hideable: bool = False,
) -> bool:
    if not state.selection.participant_allows(player):
        return False
    if not state.selection.round_allows(round_id):
        return False
    if hideable and state.collapse.is_collapsed(round_id):
        return False
    return True


def compute_visibility(state: ScoreboardState) -> Dict[str, bool]:
    out: Dict[str, bool] = {}
    for table in state.tables.values():
        for header in table.headers:
            out[header.element_id] = is_visible(
                state, round_id=header.round, hideable=header.hideable
            )
        for row in table.rows:
            out[row_element_id(table.table_id, row.row_id)] = is_visible(state, player=row.player)
            for index, cell in enumerate(row.cells):
                out[row.cell_id(table.table_id, index)] = is_visible(
                    state, player=cell.player, round_id=cell.round, hideable=cell.hideable
                )
    for element in state.elements:
        player = None if element.kind is ElementKind.PLAYER_BUTTON else element.player
        round_id = None if element.kind is ElementKind.ROUND_BUTTON else element.round
        out[element.element_id] = is_visible(
            state, player=player, round_id=round_id, hideable=element.hideable
        )
    return out


def compute_selected(state: ScoreboardState) -> Dict[str, bool]:
    out: Dict[str, bool] = {}
    for element in state.elements:
        if element.kind is ElementKind.PLAYER_BUTTON:
            out[element.element_id] = (
                state.selection.active_participant is not None
                and element.player == state.selection.active_participant
            )
        elif element.kind is ElementKind.ROUND_BUTTON:
            out[element.element_id] = (
                state.selection.active_round is not None
                and element.round == state.selection.active_round
            )
    return out
