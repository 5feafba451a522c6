"""Engine configuration persistence.

Stores the handful of engine settings a deployment may want to pin: the
event year used for tee-time cells, the sort strategy and the log buffer
capacity. Only configuration lives here; sort/selection/collapse state is
never written to disk.

Corrupt, unreadable or version-mismatched files produce defaults instead of
raising.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
import json
from pathlib import Path
from typing import Any, Dict, Optional

from config import settings

__all__ = ["EngineConfig", "load_config", "save_config", "CONFIG_VERSION", "DEFAULT_FILENAME"]

CONFIG_VERSION = 1

DEFAULT_FILENAME = "scoregrid.json"


@dataclass(slots=True)
class EngineConfig:
    """Serializable engine configuration.

    Attributes
    ----------
    version: Schema version for migration handling.
    event_year: Year applied to ``M/D H:MMam`` cells (None: current year).
    sort_strategy: ``restart`` (default) or ``stable``.
    log_capacity: Ring buffer size of the logging service.
    """

    version: int = CONFIG_VERSION
    event_year: Optional[int] = settings.EVENT_YEAR
    sort_strategy: str = settings.SORT_STRATEGY
    log_capacity: int = settings.DEFAULT_LOG_CAPACITY

    def __post_init__(self) -> None:
        if self.sort_strategy not in settings.SORT_STRATEGIES:
            self.sort_strategy = "restart"
        if self.log_capacity < 1:
            self.log_capacity = settings.DEFAULT_LOG_CAPACITY

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EngineConfig":
        year = data.get("event_year")
        return cls(
            version=int(data.get("version", CONFIG_VERSION)),
            event_year=int(year) if year is not None else None,
            sort_strategy=str(data.get("sort_strategy", "restart")),
            log_capacity=int(data.get("log_capacity", settings.DEFAULT_LOG_CAPACITY)),
        )


def _resolve_path(base_dir: str | Path | None) -> Path:
    base = Path(base_dir) if base_dir else Path.cwd()
    return base / DEFAULT_FILENAME


def load_config(base_dir: str | Path | None = None) -> EngineConfig:
    path = _resolve_path(base_dir)
    if not path.exists():
        return EngineConfig()
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
        cfg = EngineConfig.from_dict(data)
    except (OSError, ValueError, TypeError, AttributeError):
        return EngineConfig()
    if cfg.version != CONFIG_VERSION:
        return EngineConfig()
    return cfg


def save_config(cfg: EngineConfig, base_dir: str | Path | None = None) -> Path:
    """Persist config atomically (write temp file then replace); returns the path."""
    path = _resolve_path(base_dir)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(cfg.to_dict(), indent=2, ensure_ascii=False), encoding="utf-8")
    tmp.replace(path)
    return path
