"""Testing utilities for gratopod."""

from .doubles import FlakyStateStore, GatedStateStore
from .factory import CatalogEntryFactory, ScriptedRandom
from .fixtures import app_fixture, memory_app
from .test_client import TestClient

__all__ = [
    "CatalogEntryFactory",
    "FlakyStateStore",
    "GatedStateStore",
    "ScriptedRandom",
    "app_fixture",
    "memory_app",
    "TestClient",
]
