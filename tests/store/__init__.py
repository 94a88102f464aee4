"""Test helpers for the store."""

from ingress_store.manifest import (
    EndpointCompression,
    Ingress,
    IngressClass,
    NgrokModules,
    NgrokModuleSet,
    Service,
)

CONTROLLER_NAME = "k8s.ngrok.com/ingress-controller"
OTHER_CONTROLLER_NAME = "k8s.io/some-other-controller"
NGROK_INGRESS_CLASS = "ngrok"


def new_ingress_class(name: str, is_default: bool, is_ours: bool) -> IngressClass:
    """Create an IngressClass owned by us or a different controller."""
    return IngressClass(
        name=name,
        controller=CONTROLLER_NAME if is_ours else OTHER_CONTROLLER_NAME,
        is_default=is_default,
    )


def new_ingress(
    name: str, namespace: str, ingress_class_name: str | None = None
) -> Ingress:
    """Create an Ingress with an optional class."""
    return Ingress(name=name, namespace=namespace, ingress_class_name=ingress_class_name)


def new_service(name: str, namespace: str) -> Service:
    """Create a Service."""
    return Service(name=name, namespace=namespace)


def new_module_set(name: str, namespace: str, compression: bool) -> NgrokModuleSet:
    """Create an NgrokModuleSet with the compression module."""
    return NgrokModuleSet(
        name=name,
        namespace=namespace,
        modules=NgrokModules(compression=EndpointCompression(enabled=compression)),
    )
