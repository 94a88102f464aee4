"""Test fixtures for the store."""

import pytest

from ingress_store.config import StoreConfig
from ingress_store.store import InMemoryStore

from . import CONTROLLER_NAME


@pytest.fixture
def store() -> InMemoryStore:
    """Create an in-memory store for testing."""
    return InMemoryStore(StoreConfig(controller_name=CONTROLLER_NAME))
