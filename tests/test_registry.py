import pytest

from scheme_handshake.environment import InMemoryEnvironment
from scheme_handshake.errors import InvalidSchemeError
from scheme_handshake.registry import SchemeRegistry


def _noop(target):
    pass


@pytest.mark.parametrize("scheme", ["app2", "app1", "x", "com.example.viewer"])
def test_unregistered_scheme_is_not_available(scheme):
    registry = SchemeRegistry(InMemoryEnvironment())
    assert registry.is_available(scheme) is False


def test_registered_scheme_is_available():
    env = InMemoryEnvironment()
    env.register("app2", _noop)
    assert SchemeRegistry(env).is_available("app2") is True


def test_probe_uses_bare_scheme_url():
    env = InMemoryEnvironment()
    SchemeRegistry(env).is_available("app2")
    assert env.queries == ["app2://"]


@pytest.mark.parametrize("scheme", ["", "app2://", "app 2", "app2\n"])
def test_malformed_scheme_raises_without_querying(scheme):
    env = InMemoryEnvironment()
    with pytest.raises(InvalidSchemeError):
        SchemeRegistry(env).is_available(scheme)
    assert env.queries == []


def test_answer_is_not_cached():
    env = InMemoryEnvironment()
    registry = SchemeRegistry(env)
    assert registry.is_available("app2") is False
    env.register("app2", _noop)
    assert registry.is_available("app2") is True
    env.unregister("app2")
    assert registry.is_available("app2") is False
