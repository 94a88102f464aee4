"""Library for reading kubernetes objects from disk into a store.

This stands in for a cluster watch when inspecting a set of local manifests,
for example the output of `kubectl get ingress,ingressclass -A -o yaml`.
Documents of kinds the store does not hold are skipped.
"""

import logging
from pathlib import Path
from typing import Any

import aiofiles
import yaml

from .exceptions import InputException
from .manifest import BaseManifest, Kind, parse_raw_obj
from .store import Store

__all__ = [
    "read_objects",
    "load_store",
]

_LOGGER = logging.getLogger(__name__)

YAML_SUFFIXES = {".yaml", ".yml"}
LIST_KIND_SUFFIX = "List"
SUPPORTED_KINDS = {str(kind) for kind in Kind}


def _find_files(path: Path) -> list[Path]:
    """Return the yaml files at the path, sorted for stable ordering."""
    if not path.exists():
        raise InputException(f"Path does not exist: {path}")
    if path.is_file():
        return [path]
    return sorted(
        child
        for child in path.rglob("*")
        if child.is_file() and child.suffix in YAML_SUFFIXES
    )


def _expand_docs(doc: Any) -> list[dict[str, Any]]:
    """Flatten a kubernetes List object into its items."""
    if not isinstance(doc, dict):
        return []
    if str(doc.get("kind", "")).endswith(LIST_KIND_SUFFIX) and "items" in doc:
        return [item for item in doc["items"] or () if isinstance(item, dict)]
    return [doc]


async def read_objects(path: Path) -> list[BaseManifest]:
    """Read every supported object from the yaml files at the path."""
    objects: list[BaseManifest] = []
    for file in _find_files(path):
        try:
            async with aiofiles.open(str(file), encoding="utf-8") as yaml_file:
                content = await yaml_file.read()
        except UnicodeDecodeError as err:
            raise InputException(f"Unable to decode yaml file {file}: {err}") from err
        try:
            docs = list(yaml.safe_load_all(content))
        except yaml.YAMLError as err:
            raise InputException(f"Unable to parse yaml file {file}: {err}") from err
        for doc in docs:
            for raw_obj in _expand_docs(doc):
                if raw_obj.get("kind") not in SUPPORTED_KINDS:
                    _LOGGER.debug(
                        "Skipping unsupported object kind %s in %s",
                        raw_obj.get("kind"),
                        file,
                    )
                    continue
                objects.append(parse_raw_obj(raw_obj))
    _LOGGER.debug("Read %d objects from %s", len(objects), path)
    return objects


async def load_store(store: Store, path: Path) -> int:
    """Add every supported object at the path to the store.

    Returns the number of objects added.
    """
    objects = await read_objects(path)
    for obj in objects:
        store.add(obj)
    return len(objects)
