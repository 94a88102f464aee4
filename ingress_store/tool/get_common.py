"""Common utilities for get commands."""

import logging
import pathlib
from argparse import ArgumentParser
from typing import Any

from ingress_store import loader
from ingress_store.config import DEFAULT_CONTROLLER_NAME, StoreConfig
from ingress_store.manifest import BaseManifest
from ingress_store.store import InMemoryStore

_LOGGER = logging.getLogger(__name__)


def add_common_flags(args: ArgumentParser, namespaced: bool = True) -> None:
    """Add common flags to the arguments object."""
    args.add_argument(
        "--path",
        type=pathlib.Path,
        default=pathlib.Path("."),
        help="Path to a yaml file or directory of kubernetes objects",
    )
    args.add_argument(
        "--controller-name",
        type=str,
        default=DEFAULT_CONTROLLER_NAME,
        help="Name of the controller used to decide which objects are managed",
    )
    if namespaced:
        args.add_argument(
            "--namespace",
            "-n",
            type=str,
            default=None,
            help="Only show objects in this namespace",
        )
        args.add_argument(
            "--all-namespaces",
            "-A",
            action="store_true",
            help="Show objects in all namespaces (the default)",
        )
    args.add_argument(
        "--output",
        "-o",
        choices=["yaml", "json"],
        default=None,
        help="Output format of the command",
    )


async def build_store(path: pathlib.Path, controller_name: str) -> InMemoryStore:
    """Create a store populated with the objects found at the path."""
    store = InMemoryStore(StoreConfig(controller_name=controller_name))
    count = await loader.load_store(store, path)
    _LOGGER.info("Loaded %d objects from %s", count, path)
    return store


def filter_namespace(
    objects: list[Any], namespace: str | None, all_namespaces: bool = False
) -> list[Any]:
    """Return the objects in the namespace, or all objects if not specified."""
    if namespace is None or all_namespaces:
        return objects
    return [obj for obj in objects if getattr(obj, "namespace", None) == namespace]


def not_found(kind: str, namespace: str | None) -> str:
    """Return a message for when no objects were found."""
    if namespace:
        return f"{kind} objects not found in namespace {namespace}"
    return f"{kind} objects not found"


def struct_output(objects: list[BaseManifest]) -> list[dict[str, Any]]:
    """Return the structured output for the objects."""
    return [obj.compact_dict() for obj in objects]
