"""Application bootstrap for the scoreboard grid.

Responsibilities:
 - Load engine configuration
 - Register core services (config, event bus, logging service, viewmodel)
 - Optionally create the QApplication (skipped when headless)

PyQt6 is imported lazily so the engine and its tests run without a display.
"""

from __future__ import annotations

from dataclasses import dataclass
import logging
import sys
import time
from pathlib import Path
from typing import Any, Optional

from scoregrid.app.config_store import EngineConfig, load_config
from scoregrid.services.event_bus import EventBus
from scoregrid.services.logging_service import LoggingService
from scoregrid.services.service_locator import ServiceLocator, services
from scoregrid.services.table_sort import TableSorter
from scoregrid.viewmodels.scoreboard_viewmodel import ScoreboardViewModel

__all__ = ["AppContext", "create_app"]

_log = logging.getLogger(__name__)


@dataclass
class AppContext:
    """References created during bootstrap.

    Attributes
    ----------
    qt_app: QApplication instance (None when headless)
    headless: Whether headless bootstrap was used
    config: Loaded engine configuration
    services: Service locator after registration
    duration_s: Elapsed bootstrap seconds
    """

    qt_app: Optional[Any]
    headless: bool
    config: EngineConfig
    services: ServiceLocator
    duration_s: float

    @property
    def viewmodel(self) -> ScoreboardViewModel:
        return self.services.get_typed("scoreboard_viewmodel", ScoreboardViewModel)


def create_app(
    *,
    headless: bool = True,
    config_dir: str | Path | None = None,
    config: EngineConfig | None = None,
    capture_logs: bool = True,
) -> AppContext:
    """Create the application context.

    Each call registers a fresh event bus and viewmodel so repeated bootstraps
    (tests) do not share state.
    """
    started = time.perf_counter()
    cfg = config or load_config(config_dir)

    qt_app = None
    if not headless:
        from PyQt6.QtWidgets import QApplication  # type: ignore

        qt_app = QApplication.instance() or QApplication(sys.argv[:1])

    bus = EventBus()
    previous_logging = services.try_get("logging_service")
    if isinstance(previous_logging, LoggingService):
        previous_logging.detach_root()
    logging_service = LoggingService(capacity=cfg.log_capacity)
    services.register("app_config", cfg, allow_override=True)
    services.register("event_bus", bus, allow_override=True)
    services.register("logging_service", logging_service, allow_override=True)
    if capture_logs:
        logging_service.attach_root()
    viewmodel = ScoreboardViewModel(
        sorter=TableSorter(cfg.sort_strategy, year=cfg.event_year), event_bus=bus
    )
    services.register("scoreboard_viewmodel", viewmodel, allow_override=True)

    duration = time.perf_counter() - started
    _log.debug("bootstrap complete in %.3fs (strategy=%s)", duration, cfg.sort_strategy)
    return AppContext(
        qt_app=qt_app,
        headless=headless,
        config=cfg,
        services=services,
        duration_s=duration,
    )
