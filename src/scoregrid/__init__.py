"""Scoreboard grid table state engine.

Public surface: models, the `handle` dispatcher and the viewmodel store.
Qt views live in `scoregrid.views` and are not imported here.
"""

from __future__ import annotations

from .models import (  # noqa: F401
    Cell,
    Row,
    HeaderCell,
    Table,
    TaggedElement,
    SortDirection,
    ScoreboardState,
)
from .viewmodels.scoreboard_viewmodel import (  # noqa: F401
    HeaderClick,
    ParticipantClick,
    ParticipantReset,
    RoundSelect,
    RoundReset,
    RoundToggle,
    RenderInstructions,
    ScoreboardViewModel,
    handle,
)

__version__ = "0.1.0"

__all__ = [
    "Cell",
    "Row",
    "HeaderCell",
    "Table",
    "TaggedElement",
    "SortDirection",
    "ScoreboardState",
    "HeaderClick",
    "ParticipantClick",
    "ParticipantReset",
    "RoundSelect",
    "RoundReset",
    "RoundToggle",
    "RenderInstructions",
    "ScoreboardViewModel",
    "handle",
]
