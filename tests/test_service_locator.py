import pytest

from scoregrid.services.service_locator import (
    ServiceAlreadyRegisteredError,
    ServiceLocator,
    ServiceNotFoundError,
)


def test_register_and_get():
    loc = ServiceLocator()
    loc.register("config", {"year": 2024})
    assert loc.get("config") == {"year": 2024}
    assert loc.try_get("missing", "dflt") == "dflt"


def test_double_registration_needs_override():
    loc = ServiceLocator()
    loc.register("bus", 1)
    with pytest.raises(ServiceAlreadyRegisteredError):
        loc.register("bus", 2)
    loc.register("bus", 2, allow_override=True)
    assert loc.get("bus") == 2


def test_get_typed_checks_type():
    loc = ServiceLocator()
    loc.register("capacity", "500")
    with pytest.raises(TypeError):
        loc.get_typed("capacity", int)


def test_override_context_restores_previous_values():
    loc = ServiceLocator()
    loc.register("bus", "real")
    with loc.override_context(bus="fake", extra="temp"):
        assert loc.get("bus") == "fake"
        assert loc.get("extra") == "temp"
    assert loc.get("bus") == "real"
    assert "extra" not in loc.list_keys()


def test_unregister_and_clear():
    loc = ServiceLocator()
    loc.register("a", 1)
    loc.register("b", 2)
    loc.unregister("a")
    with pytest.raises(ServiceNotFoundError):
        loc.get("a")
    loc.clear()
    assert loc.list_keys() == []
