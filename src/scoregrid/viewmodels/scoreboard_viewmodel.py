"""Scoreboard dispatcher and store.

`handle(event, state)` is the whole interaction model: it copies the state,
applies one user event (header click, participant or round selection, round
collapse) and returns the new state together with the `RenderInstructions`
the host must apply. The input state is never mutated, so a rejected event
(unknown table, column out of range) leaves nothing half-applied.

`ScoreboardViewModel` owns the current state for a view. It serializes
dispatches with a lock, logs rejected events and publishes a notification on
the EventBus for each handled event.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from threading import RLock
from typing import Any, ClassVar, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from scoregrid.errors import EngineError, TableNotFoundError, UnknownEventError
from scoregrid.models import ScoreboardState, SortState, Table, TaggedElement
from scoregrid.services import selection_state
from scoregrid.services.event_bus import EventBus, ScoreboardEvent
from scoregrid.services.round_collapse import group_header_updates, toggle_round_collapse
from scoregrid.services.table_sort import TableSorter
from scoregrid.services.visibility_filter import compute_selected, compute_visibility

__all__ = [
    "HeaderClick",
    "ParticipantClick",
    "ParticipantReset",
    "RoundSelect",
    "RoundReset",
    "RoundToggle",
    "InteractionEvent",
    "RenderInstructions",
    "event_from_dict",
    "render",
    "handle",
    "ScoreboardViewModel",
]

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class HeaderClick:
    table_id: str
    column: int
    kind: ClassVar[str] = "headerClick"


@dataclass(frozen=True)
class ParticipantClick:
    participant_id: str
    kind: ClassVar[str] = "participantClick"


@dataclass(frozen=True)
class ParticipantReset:
    kind: ClassVar[str] = "participantReset"


@dataclass(frozen=True)
class RoundSelect:
    round_id: str
    kind: ClassVar[str] = "roundSelect"


@dataclass(frozen=True)
class RoundReset:
    kind: ClassVar[str] = "roundReset"


@dataclass(frozen=True)
class RoundToggle:
    round_id: str
    kind: ClassVar[str] = "roundToggle"


InteractionEvent = Union[
    HeaderClick, ParticipantClick, ParticipantReset, RoundSelect, RoundReset, RoundToggle
]


def event_from_dict(data: Mapping[str, Any]) -> InteractionEvent:
    """Build an event from a host payload such as ``{"kind": "headerClick", "column": 3}``."""
    kind = data.get("kind")
    try:
        if kind == HeaderClick.kind:
            table_id = data.get("table_id", data.get("tableId"))
            return HeaderClick(table_id=str(table_id), column=int(data["column"]))
        if kind == ParticipantClick.kind:
            return ParticipantClick(participant_id=str(data["participantId"]))
        if kind == ParticipantReset.kind:
            return ParticipantReset()
        if kind == RoundSelect.kind:
            return RoundSelect(round_id=str(data["roundId"]))
        if kind == RoundReset.kind:
            return RoundReset()
        if kind == RoundToggle.kind:
            return RoundToggle(round_id=str(data["roundId"]))
    except (KeyError, TypeError, ValueError) as exc:
        raise UnknownEventError(f"Malformed '{kind}' event", context={"event": dict(data)}) from exc
    raise UnknownEventError(f"Unknown event kind '{kind}'", context={"event": dict(data)})


@dataclass
class RenderInstructions:
    row_order: Dict[str, List[str]] = field(default_factory=dict)
    visibility: Dict[str, bool] = field(default_factory=dict)
    labels: Dict[str, str] = field(default_factory=dict)
    colspans: Dict[str, int] = field(default_factory=dict)
    sort_indicators: Dict[str, Dict[int, str]] = field(default_factory=dict)
    selected: Dict[str, bool] = field(default_factory=dict)

    def is_empty(self) -> bool:
        return not any(
            (
                self.row_order,
                self.visibility,
                self.labels,
                self.colspans,
                self.sort_indicators,
                self.selected,
            )
        )

    def hidden(self) -> List[str]:
        return [key for key, visible in self.visibility.items() if not visible]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "row_order": self.row_order,
            "visibility": self.visibility,
            "labels": self.labels,
            "colspans": self.colspans,
            "sort_indicators": {
                table_id: {str(col): d for col, d in cols.items()}
                for table_id, cols in self.sort_indicators.items()
            },
            "selected": self.selected,
        }


def render(state: ScoreboardState) -> RenderInstructions:
    colspans, labels = group_header_updates(state)
    return RenderInstructions(
        row_order={tid: t.row_order() for tid, t in state.tables.items()},
        visibility=compute_visibility(state),
        labels=labels,
        colspans=colspans,
        sort_indicators={
            tid: {col: d.value for col, d in st.directions.items()}
            for tid, st in state.sort_states.items()
        },
        selected=compute_selected(state),
    )


def _apply(event: InteractionEvent, state: ScoreboardState, sorter: TableSorter) -> None:
    if isinstance(event, HeaderClick):
        table = state.tables.get(event.table_id)
        if table is None:
            raise TableNotFoundError(
                f"Table '{event.table_id}' not found", context={"table_id": event.table_id}
            )
        sort_state = state.sort_states.setdefault(table.table_id, SortState())
        sorter.sort_column(table, sort_state, event.column)
    elif isinstance(event, ParticipantClick):
        selection_state.select_participant(state.selection, event.participant_id)
    elif isinstance(event, ParticipantReset):
        selection_state.reset_participant(state.selection)
    elif isinstance(event, RoundSelect):
        selection_state.select_round(state.selection, event.round_id)
    elif isinstance(event, RoundReset):
        selection_state.reset_round(state.selection)
    elif isinstance(event, RoundToggle):
        toggle_round_collapse(state.collapse, event.round_id)
    else:
        raise UnknownEventError(f"Cannot handle {event!r}", context={"event": repr(event)})


def handle(
    event: InteractionEvent,
    state: ScoreboardState,
    *,
    sorter: Optional[TableSorter] = None,
) -> Tuple[ScoreboardState, RenderInstructions]:
    """Apply ``event`` to a copy of ``state``.

    Returns ``(new_state, instructions)``. A rejected event is logged and
    returns the *same* state object with empty instructions.
    """
    new_state = state.copy()
    try:
        _apply(event, new_state, sorter or TableSorter())
    except EngineError as exc:
        _log.warning("ignored %s: %s", type(event).__name__, exc)
        return state, RenderInstructions()
    return new_state, render(new_state)


class ScoreboardViewModel:
    """Stateful wrapper around `handle` for one page / view."""

    def __init__(
        self,
        *,
        sorter: Optional[TableSorter] = None,
        event_bus: Optional[EventBus] = None,
    ):
        self._lock = RLock()
        self._state = ScoreboardState()
        self._sorter = sorter or TableSorter()
        self._bus = event_bus

    @property
    def state(self) -> ScoreboardState:
        return self._state

    def load(self, tables: Iterable[Table], elements: Iterable[TaggedElement] = ()) -> RenderInstructions:
        state = ScoreboardState()
        for table in tables:
            state.add_table(table)
        state.elements.extend(elements)
        with self._lock:
            self._state = state
        self._publish(ScoreboardEvent.TABLE_LOADED, {"tables": list(state.tables)})
        return render(state)

    def render(self) -> RenderInstructions:
        with self._lock:
            return render(self._state)

    def dispatch(self, event: InteractionEvent) -> RenderInstructions:
        with self._lock:
            previous = self._state
            self._state, instructions = handle(event, previous, sorter=self._sorter)
            rejected = self._state is previous
        if rejected:
            self._publish(ScoreboardEvent.ENGINE_WARNING, {"event": event.kind})
        else:
            self._publish(*self._notification(event))
        return instructions

    def _notification(self, event: InteractionEvent) -> Tuple[ScoreboardEvent, Dict[str, Any]]:
        if isinstance(event, HeaderClick):
            direction = self._state.sort_states[event.table_id].direction_for(event.column)
            return ScoreboardEvent.SORT_APPLIED, {
                "table_id": event.table_id,
                "column": event.column,
                "direction": direction.value if direction else None,
            }
        if isinstance(event, RoundToggle):
            return ScoreboardEvent.ROUND_TOGGLED, {
                "round": event.round_id,
                "collapsed": self._state.collapse.is_collapsed(
                    selection_state.normalize_round(event.round_id)
                ),
            }
        return ScoreboardEvent.SELECTION_CHANGED, {
            "participant": self._state.selection.active_participant,
            "round": self._state.selection.active_round,
        }

    def _publish(self, name: ScoreboardEvent, payload: Dict[str, Any]) -> None:
        if self._bus is not None:
            self._bus.publish(name, payload)

    # Convenience wrappers used by views and the CLI
    def sort(self, table_id: str, column: int) -> RenderInstructions:
        return self.dispatch(HeaderClick(table_id=table_id, column=column))

    def select_participant(self, participant_id: str) -> RenderInstructions:
        return self.dispatch(ParticipantClick(participant_id=participant_id))

    def reset_participant(self) -> RenderInstructions:
        return self.dispatch(ParticipantReset())

    def select_round(self, round_id: Union[int, str]) -> RenderInstructions:
        return self.dispatch(RoundSelect(round_id=str(round_id)))

    def reset_round(self) -> RenderInstructions:
        return self.dispatch(RoundReset())

    def toggle_round(self, round_id: Union[int, str]) -> RenderInstructions:
        return self.dispatch(RoundToggle(round_id=str(round_id)))
