"""Exceptions related to ingress-store."""

__all__ = [
    "IngressStoreException",
    "InputException",
    "ObjectNotFoundError",
]


class IngressStoreException(Exception):
    """Generic base exception used for this library."""


class InputException(IngressStoreException):
    """Raised when the input files or values are not formatted as expected."""


class ObjectNotFoundError(IngressStoreException):
    """Raised when an object is not found in the store.

    This is also raised for ingresses that exist in the cache but are not
    managed by this controller.
    """

    def __init__(self, kind: str, namespace: str | None, name: str) -> None:
        self.kind = kind
        self.namespace = namespace
        self.name = name
        super().__init__(f"{kind} {self.namespaced_name} not found")

    @property
    def namespaced_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}/{self.name}"
        return self.name
