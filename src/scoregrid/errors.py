"""Structured engine errors.

Raised inside the engine and caught by the dispatcher, which logs them and
turns the operation into a no-op.
"""

from __future__ import annotations
from typing import Any


class EngineError(Exception):
    """Base class for table engine issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class TableNotFoundError(EngineError):
    """Raised when an event names a table that is not loaded."""


class ColumnOutOfRangeError(EngineError):
    """Raised when a sort column does not exist in the target table."""


class TableShapeError(EngineError):
    """Raised when body rows do not share a common cell count."""


class UnknownEventError(EngineError):
    """Raised when the dispatcher receives an event it cannot route."""
