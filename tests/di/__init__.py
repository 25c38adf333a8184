"""Mock providers for testing."""

from .container import build_test_container
from .store import MockStoreProvider
from .visits import MockVisitsProvider

__all__ = [
    "MockStoreProvider",
    "MockVisitsProvider",
    "build_test_container",
]
