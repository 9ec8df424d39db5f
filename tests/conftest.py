"""Pytest configuration and fixtures for protoforge tests."""

import pytest

from protoforge.builtin_products import notification_factory, theme_factory
from protoforge.config import reset_settings
from protoforge.factory.keyed import KeyedFactory
from protoforge.factory.prototype import PrototypeRegistry


@pytest.fixture(autouse=True)
def reset_state(monkeypatch):
    """Reset shared registries and settings around each test."""
    monkeypatch.delenv("PROTOFORGE_STRICT_BUILDERS", raising=False)
    monkeypatch.delenv("PROTOFORGE_LOG_LEVEL", raising=False)
    KeyedFactory.reset_instance()
    PrototypeRegistry.reset_instance()
    reset_settings()

    yield

    KeyedFactory.reset_instance()
    PrototypeRegistry.reset_instance()
    reset_settings()


@pytest.fixture
def notifications():
    """Keyed factory with the built-in notification channels."""
    return notification_factory()


@pytest.fixture
def themes():
    """Family factory with the light and dark themes."""
    return theme_factory()


@pytest.fixture
def registry():
    """Fresh prototype registry."""
    return PrototypeRegistry(name="test prototypes")
