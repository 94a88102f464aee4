"""
The store module provides a local, type-safe cache of the cluster objects a
controller reconciles, so queries do not need to reach the API server.

- Uses NamedResource as the key for all objects.
- Stores values as dataclass instances from manifest.py for type safety.
- Decides which ingresses are managed by this controller via IngressClasses.

This abstract interface allows for various implementations.
"""

from .store import Store
from .in_memory import InMemoryStore
from .indexer import Indexer
from .ownership import OwnershipResolver

__all__ = [
    "Store",
    "InMemoryStore",
    "Indexer",
    "OwnershipResolver",
]
