"""Decide which ingresses are managed by this controller.

An ingress is owned when it names an IngressClass implemented by this
controller. An ingress without a class uses the cluster default class, and is
owned when a class flagged as default belongs to this controller. A cluster
may misconfigure more than one default class; in that case the ingress is
owned as long as any of the default classes belong to this controller, which
does not depend on the order classes were observed in.
"""

from collections.abc import Iterable
from dataclasses import dataclass

from ingress_store.manifest import Ingress, IngressClass

__all__ = [
    "OwnershipResolver",
]


@dataclass(frozen=True)
class OwnedClasses:
    """A snapshot of the IngressClasses implemented by this controller."""

    names: frozenset[str]
    """Names of every class implemented by this controller."""

    default: bool
    """True if any default class is implemented by this controller."""

    def owns(self, ingress: Ingress) -> bool:
        """Return True if the ingress is managed by this controller."""
        if ingress.ingress_class_name:
            return ingress.ingress_class_name in self.names
        return self.default


class OwnershipResolver:
    """Filters objects down to those managed by a single controller."""

    def __init__(self, controller_name: str) -> None:
        """Initialize OwnershipResolver."""
        self._controller_name = controller_name

    @property
    def controller_name(self) -> str:
        """The controller name IngressClasses are matched against."""
        return self._controller_name

    def is_owned_class(self, ingress_class: IngressClass) -> bool:
        """Return True if the IngressClass is implemented by this controller."""
        return ingress_class.controller == self._controller_name

    def owned_classes(self, ingress_classes: Iterable[IngressClass]) -> OwnedClasses:
        """Resolve the owned classes from every known IngressClass."""
        names: set[str] = set()
        default = False
        for ingress_class in ingress_classes:
            if not self.is_owned_class(ingress_class):
                continue
            names.add(ingress_class.name)
            default = default or ingress_class.is_default
        return OwnedClasses(names=frozenset(names), default=default)

    def filter_classes(
        self, ingress_classes: Iterable[IngressClass]
    ) -> list[IngressClass]:
        """Return the IngressClasses implemented by this controller."""
        return [ic for ic in ingress_classes if self.is_owned_class(ic)]

    def filter_ingresses(
        self, ingress_classes: Iterable[IngressClass], ingresses: Iterable[Ingress]
    ) -> list[Ingress]:
        """Return the ingresses managed by this controller."""
        owned = self.owned_classes(ingress_classes)
        return [ingress for ingress in ingresses if owned.owns(ingress)]

    def is_owned(
        self, ingress_classes: Iterable[IngressClass], ingress: Ingress
    ) -> bool:
        """Return True if the ingress is managed by this controller."""
        return self.owned_classes(ingress_classes).owns(ingress)
