"""Service layer exports.

Engine services (classification, comparison, sorting, visibility) are imported
from their modules directly; only the shared infrastructure is re-exported.
"""

from .service_locator import services, ServiceLocator  # noqa: F401
from .event_bus import EventBus, ScoreboardEvent, Event  # noqa: F401

__all__ = ["services", "ServiceLocator", "EventBus", "ScoreboardEvent", "Event"]
