"""Global configuration and constants for the scoreboard table engine."""

from __future__ import annotations

import os
from typing import Final, Optional


def _env_int(name: str) -> Optional[int]:
    raw = os.environ.get(name, "").strip()
    return int(raw) if raw.isdigit() else None


# Sort column n compares body cell n + offset (the leading player column is skipped)
LEADING_COLUMN_OFFSET: Final = 1

# Round group header geometry / copy
EXPANDED_COLSPAN: Final = 3
COLLAPSED_COLSPAN: Final = 1
LABEL_EXPAND: Final = "tap to expand"
LABEL_SHRINK: Final = "tap to shrink"

TABLE_ID_PREFIX: Final = "scores-table"

# Date cells carry no year ("3/4 10:30am"); None means "current calendar year"
EVENT_YEAR: Final = _env_int("SCOREGRID_EVENT_YEAR")

SORT_STRATEGIES: Final = ("restart", "stable")
SORT_STRATEGY: Final = os.environ.get("SCOREGRID_SORT_STRATEGY", "restart")

DEFAULT_LOG_CAPACITY: Final = 500
