"""Participant / round selection updates.

At most one participant and one round are active. ``None`` on an axis means
that axis does not filter anything. Each update returns whether the state
changed so callers can skip redundant re-renders.
"""

from __future__ import annotations

from typing import Optional, Union

from scoregrid.models import SelectionState

__all__ = [
    "select_participant",
    "reset_participant",
    "select_round",
    "reset_round",
    "normalize_round",
]


def normalize_round(round_id: Union[int, str, None]) -> Optional[str]:
    if round_id is None:
        return None
    return str(round_id).strip() or None


def select_participant(selection: SelectionState, participant_id: str) -> bool:
    changed = selection.active_participant != participant_id
    selection.active_participant = participant_id
    return changed


def reset_participant(selection: SelectionState) -> bool:
    changed = selection.active_participant is not None
    selection.active_participant = None
    return changed


def select_round(selection: SelectionState, round_id: Union[int, str]) -> bool:
    normalized = normalize_round(round_id)
    changed = selection.active_round != normalized
    selection.active_round = normalized
    return changed


def reset_round(selection: SelectionState) -> bool:
    changed = selection.active_round is not None
    selection.active_round = None
    return changed
