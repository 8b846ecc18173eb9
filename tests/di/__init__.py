"""Mock providers for testing."""

from .live import MockLiveProvider
from .persistence import MockPersistenceProvider
from .container import build_test_container

__all__ = [
    "MockLiveProvider",
    "MockPersistenceProvider",
    "build_test_container",
]
