"""Module for in memory object store."""

import logging
from typing import TypeVar

from ingress_store.config import StoreConfig
from ingress_store.exceptions import ObjectNotFoundError
from ingress_store.manifest import (
    BaseManifest,
    CLUSTER_SCOPED_KINDS,
    Ingress,
    IngressClass,
    Kind,
    NamedResource,
    NgrokModuleSet,
    ReservedDomain,
    Service,
)

from .indexer import Indexer
from .ownership import OwnershipResolver
from .store import Store

_LOGGER = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseManifest)


class InMemoryStore(Store):
    """In-memory implementation of the Store interface.

    Objects are held in an Indexer keyed by NamedResource. Each instance is
    independent, so a controller process creates one and passes it to every
    worker that needs it.
    """

    def __init__(self, config: StoreConfig | None = None) -> None:
        """Initialize the InMemoryStore."""
        self._config = config or StoreConfig()
        self._indexer: Indexer[BaseManifest] = Indexer()
        self._resolver = OwnershipResolver(self._config.controller_name)

    @property
    def controller_name(self) -> str:
        """The name of the controller used to decide ownership."""
        return self._config.controller_name

    def add(self, obj: BaseManifest) -> None:
        """Add an object to the store, replacing an object with the same key."""
        self._indexer.add(obj)

    def update(self, obj: BaseManifest) -> None:
        """Update an object in the store."""
        self._indexer.update(obj)

    def delete(self, kind: str, namespace: str | None, name: str) -> None:
        """Delete an object from the store if present."""
        if kind in CLUSTER_SCOPED_KINDS:
            namespace = None
        self._indexer.delete(NamedResource(kind, namespace or "", name))

    def _get(self, kind: Kind, namespace: str, name: str, cls: type[T]) -> T:
        resource_id = NamedResource(kind, namespace, name)
        obj = self._indexer.get(resource_id)
        if obj is None:
            raise ObjectNotFoundError(kind, namespace, name)
        if not isinstance(obj, cls):
            raise ValueError(
                f"Object {resource_id} is not of type {cls.__name__} (was {obj.__class__.__name__})"
            )
        return obj

    def _list(self, kind: Kind, cls: type[T]) -> list[T]:
        return [obj for obj in self._indexer.list(kind) if isinstance(obj, cls)]

    def get_ingress_class(self, name: str) -> IngressClass:
        """Return the IngressClass with the name."""
        return self._get(Kind.INGRESS_CLASS, "", name, IngressClass)

    def get_ingress(self, name: str, namespace: str) -> Ingress:
        """Return the Ingress with the name and namespace."""
        return self._get(Kind.INGRESS, namespace, name, Ingress)

    def get_service(self, name: str, namespace: str) -> Service:
        """Return the Service with the name and namespace."""
        return self._get(Kind.SERVICE, namespace, name, Service)

    def get_module_set(self, name: str, namespace: str) -> NgrokModuleSet:
        """Return the NgrokModuleSet with the name and namespace."""
        return self._get(Kind.MODULE_SET, namespace, name, NgrokModuleSet)

    def get_reserved_domain(self, name: str, namespace: str) -> ReservedDomain:
        """Return the ReservedDomain with the name and namespace."""
        return self._get(Kind.RESERVED_DOMAIN, namespace, name, ReservedDomain)

    def get_owned_ingress(self, name: str, namespace: str) -> Ingress:
        """Return the Ingress with the name and namespace if managed by this controller."""
        ingress = self.get_ingress(name, namespace)
        if not self._resolver.is_owned(self.list_ingress_classes(), ingress):
            _LOGGER.debug(
                "Ingress %s is not managed by %s",
                ingress.namespaced_name,
                self.controller_name,
            )
            raise ObjectNotFoundError(Kind.INGRESS, namespace, name)
        return ingress

    def list_ingress_classes(self) -> list[IngressClass]:
        """List all IngressClasses regardless of controller."""
        return self._list(Kind.INGRESS_CLASS, IngressClass)

    def list_owned_ingress_classes(self) -> list[IngressClass]:
        """List the IngressClasses implemented by this controller."""
        return self._resolver.filter_classes(self.list_ingress_classes())

    def list_ingresses(self) -> list[Ingress]:
        """List all Ingresses regardless of class."""
        return self._list(Kind.INGRESS, Ingress)

    def list_owned_ingresses(self) -> list[Ingress]:
        """List the Ingresses managed by this controller."""
        return self._resolver.filter_ingresses(
            self.list_ingress_classes(), self.list_ingresses()
        )

    def list_services(self) -> list[Service]:
        """List all Services."""
        return self._list(Kind.SERVICE, Service)

    def list_module_sets(self) -> list[NgrokModuleSet]:
        """List all NgrokModuleSets."""
        return self._list(Kind.MODULE_SET, NgrokModuleSet)

    def list_reserved_domains(self) -> list[ReservedDomain]:
        """List all ReservedDomains."""
        return self._list(Kind.RESERVED_DOMAIN, ReservedDomain)
