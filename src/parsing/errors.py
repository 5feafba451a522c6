"""Structured errors raised while reading server-rendered scoreboard markup."""

from __future__ import annotations
from typing import Any


class ParsingError(Exception):
    """Base class for markup reading issues."""

    def __init__(self, message: str, *, context: dict[str, Any] | None = None):
        super().__init__(message)
        self.context = context or {}


class MissingSectionError(ParsingError):
    """Raised when the page contains no scores table."""


class ColumnMismatchError(ParsingError):
    """Raised when body rows of a scores table differ in cell count."""


class InvalidAttributeError(ParsingError):
    """Raised when a markup attribute (e.g. ``colspan``) has an unusable value."""
