"""Store module for answering queries about cached cluster objects."""

from abc import ABC, abstractmethod

from ingress_store.manifest import (
    BaseManifest,
    Ingress,
    IngressClass,
    NgrokModuleSet,
    ReservedDomain,
    Service,
)


class Store(ABC):
    """Abstract base class for the typed cache of cluster objects.

    Objects are pushed into the store by an external watch as they are added,
    updated or deleted in the cluster. All queries are synchronous and read
    the latest version of each object. Queries for a single object raise
    ObjectNotFoundError when the object is absent.
    """

    @property
    @abstractmethod
    def controller_name(self) -> str:
        """The name of the controller used to decide ownership."""

    @abstractmethod
    def add(self, obj: BaseManifest) -> None:
        """Add an object to the store, replacing an object with the same key."""

    @abstractmethod
    def update(self, obj: BaseManifest) -> None:
        """Update an object in the store."""

    @abstractmethod
    def delete(self, kind: str, namespace: str | None, name: str) -> None:
        """Delete an object from the store if present."""

    @abstractmethod
    def get_ingress_class(self, name: str) -> IngressClass:
        """Return the IngressClass with the name."""

    @abstractmethod
    def get_ingress(self, name: str, namespace: str) -> Ingress:
        """Return the Ingress with the name and namespace."""

    @abstractmethod
    def get_service(self, name: str, namespace: str) -> Service:
        """Return the Service with the name and namespace."""

    @abstractmethod
    def get_module_set(self, name: str, namespace: str) -> NgrokModuleSet:
        """Return the NgrokModuleSet with the name and namespace."""

    @abstractmethod
    def get_reserved_domain(self, name: str, namespace: str) -> ReservedDomain:
        """Return the ReservedDomain with the name and namespace."""

    @abstractmethod
    def get_owned_ingress(self, name: str, namespace: str) -> Ingress:
        """Return the Ingress with the name and namespace if managed by this controller.

        Raises:
            ObjectNotFoundError: If the Ingress does not exist or is managed
                by a different controller.
        """

    @abstractmethod
    def list_ingress_classes(self) -> list[IngressClass]:
        """List all IngressClasses regardless of controller."""

    @abstractmethod
    def list_owned_ingress_classes(self) -> list[IngressClass]:
        """List the IngressClasses implemented by this controller."""

    @abstractmethod
    def list_ingresses(self) -> list[Ingress]:
        """List all Ingresses regardless of class."""

    @abstractmethod
    def list_owned_ingresses(self) -> list[Ingress]:
        """List the Ingresses managed by this controller."""

    @abstractmethod
    def list_services(self) -> list[Service]:
        """List all Services."""

    @abstractmethod
    def list_module_sets(self) -> list[NgrokModuleSet]:
        """List all NgrokModuleSets."""

    @abstractmethod
    def list_reserved_domains(self) -> list[ReservedDomain]:
        """List all ReservedDomains."""
