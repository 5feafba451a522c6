# Headless Qt for view tests, plus a fallback 'qtbot' fixture when pytest-qt is
# not installed. If pytest-qt is present its fixture wins.

import os
import sys

import pytest

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:  # If pytest-qt present, do nothing (its fixture will be used)
    import pytestqt  # type: ignore  # noqa: F401
except ImportError:  # pragma: no cover
    try:
        from PyQt6.QtWidgets import QApplication
    except ImportError:  # pragma: no cover
        QApplication = None  # type: ignore

    @pytest.fixture
    def qtbot():  # type: ignore
        if QApplication is None:
            pytest.skip("PyQt6 not available")
        QApplication.instance() or QApplication(sys.argv)  # type: ignore
        widgets = []

        class Bot:
            def addWidget(self, w):  # mimic pytest-qt API subset
                widgets.append(w)

        return Bot()


@pytest.fixture()
def fresh_services():
    """Snapshot and restore the global service registry around a test."""
    from scoregrid.services.service_locator import services
    from scoregrid.services.logging_service import LoggingService

    saved = {key: services.get(key) for key in services.list_keys()}
    yield services
    current = services.try_get("logging_service")
    if isinstance(current, LoggingService):
        current.detach_root()
    services.clear()
    for key, value in saved.items():
        services.register(key, value)
