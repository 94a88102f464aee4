"""Configuration objects for ingress-store."""

from dataclasses import dataclass

DEFAULT_CONTROLLER_NAME = "k8s.ngrok.com/ingress-controller"


@dataclass
class StoreConfig:
    """Configuration for the Store."""

    controller_name: str = DEFAULT_CONTROLLER_NAME
    """Name of this controller as it appears in IngressClass spec.controller."""
