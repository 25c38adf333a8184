"""Infrastructure providers."""

# Import bases
from .store import StoreProvider
from .visits import VisitsProvider

# Import implementations (needed for __subclasses__())
from .store import ProdStoreProvider  # noqa: F401
from .visits import ProdVisitsProvider  # noqa: F401

__all__ = [
    "ProdStoreProvider",
    "ProdVisitsProvider",
    "StoreProvider",
    "VisitsProvider",
]
