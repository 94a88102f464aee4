"""Module for the generic keyed object index backing a store."""

from collections import defaultdict
import logging
import threading
from typing import DefaultDict, Generic, TypeVar

from ingress_store.manifest import BaseManifest, NamedResource

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseManifest)


def resource_key(obj: BaseManifest) -> NamedResource:
    """Return the key an object is indexed under."""
    if not hasattr(obj, "kind") or not hasattr(obj, "name"):
        raise ValueError("Object must have kind and name attributes")
    return obj.resource_id


class Indexer(Generic[T]):
    """Holds the latest version of every object keyed by NamedResource.

    Objects are partitioned by kind so listing a single kind does not scan the
    whole index. Mutations are serialized by a lock, and readers receive
    copies of the partitions so they may iterate while writes continue.
    """

    def __init__(self) -> None:
        """Initialize the Indexer."""
        self._lock = threading.Lock()
        self._objects: DefaultDict[str, dict[NamedResource, T]] = defaultdict(dict)

    def add(self, obj: T) -> None:
        """Insert an object, replacing any object with the same key."""
        key = resource_key(obj)
        with self._lock:
            partition = self._objects[key.kind]
            if key in partition:
                _LOGGER.debug("Replacing object %s in index", key)
            else:
                _LOGGER.debug("Adding object %s to index", key)
            partition[key] = obj

    def update(self, obj: T) -> None:
        """Update an object, inserting it if it was not yet known."""
        self.add(obj)

    def delete(self, key: NamedResource) -> None:
        """Remove the object with the key if present."""
        with self._lock:
            partition = self._objects.get(key.kind)
            if partition is None or partition.pop(key, None) is None:
                return
            _LOGGER.debug("Deleted object %s from index", key)
            if not partition:
                del self._objects[key.kind]

    def get(self, key: NamedResource) -> T | None:
        """Return the object with the key or None if absent."""
        with self._lock:
            return self._objects.get(key.kind, {}).get(key)

    def list(self, kind: str) -> list[T]:
        """Return a snapshot of all objects of a kind in insertion order."""
        with self._lock:
            return list(self._objects.get(kind, {}).values())

    def __len__(self) -> int:
        with self._lock:
            return sum(len(partition) for partition in self._objects.values())
