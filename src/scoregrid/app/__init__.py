"""Application layer: bootstrap and configuration persistence."""

from .bootstrap import create_app, AppContext  # noqa: F401
from .config_store import EngineConfig, load_config, save_config, CONFIG_VERSION  # noqa: F401

__all__ = [
    "create_app",
    "AppContext",
    "EngineConfig",
    "load_config",
    "save_config",
    "CONFIG_VERSION",
]
