"""Representation of the cluster objects held in the cache.

Objects are typically built from the raw kubernetes documents delivered by a
watch, or read from disk, and are treated as immutable snapshots once added
to a store: a newer version of an object replaces the old one entirely.
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Any, ClassVar

from mashumaro import DataClassDictMixin, field_options
from mashumaro.codecs.yaml import yaml_decode, yaml_encode
from mashumaro.config import BaseConfig

from .exceptions import InputException

__all__ = [
    "Kind",
    "NamedResource",
    "IngressClass",
    "Ingress",
    "Service",
    "NgrokModuleSet",
    "ReservedDomain",
    "parse_raw_obj",
]

# Match a prefix of apiVersion to ensure we have the right type of object.
NETWORKING_DOMAIN = "networking.k8s.io"
NGROK_DOMAIN = "ingress.k8s.ngrok.com"
CORE_VERSION = "v1"
DEFAULT_NAMESPACE = "default"

# Annotation set on the IngressClass used for ingresses without a class
DEFAULT_CLASS_ANNOTATION = "ingressclass.kubernetes.io/is-default-class"

DEFAULT_DOMAIN_DESCRIPTION = "Created by ngrok-ingress-controller"
DEFAULT_DOMAIN_METADATA = '{"owned-by":"ngrok-ingress-controller"}'


class Kind(StrEnum):
    """Tag for each kind of object that can be held in the cache."""

    INGRESS = "Ingress"
    INGRESS_CLASS = "IngressClass"
    SERVICE = "Service"
    MODULE_SET = "NgrokModuleSet"
    RESERVED_DOMAIN = "ReservedDomain"


CLUSTER_SCOPED_KINDS: set[str] = {Kind.INGRESS_CLASS}


def _check_version(doc: dict[str, Any], version: str) -> None:
    """Assert that the resource has the specified version."""
    if not (api_version := doc.get("apiVersion")):
        raise InputException(f"Invalid object missing apiVersion: {doc}")
    if not api_version.startswith(version):
        raise InputException(f"Invalid object expected '{version}': {doc}")


def _metadata(cls: type, doc: dict[str, Any]) -> tuple[dict[str, Any], str]:
    """Return the metadata and name of a kubernetes object."""
    if not (metadata := doc.get("metadata")):
        raise InputException(f"Invalid {cls} missing metadata: {doc}")
    if not (name := metadata.get("name")):
        raise InputException(f"Invalid {cls} missing metadata.name: {doc}")
    return metadata, name


@dataclass(frozen=True, order=True)
class NamedResource:
    """Identifier for an object in the cache."""

    kind: str
    namespace: str
    name: str

    @property
    def namespaced_name(self) -> str:
        if self.namespace:
            return f"{self.namespace}/{self.name}"
        return self.name

    def __str__(self) -> str:
        """Return the kind and namespaced name concatenated as an id."""
        return f"{self.kind}/{self.namespaced_name}"


@dataclass
class BaseManifest(DataClassDictMixin):
    """Base class for all cached objects."""

    kind: ClassVar[Kind]

    def compact_dict(self) -> dict[str, Any]:
        """Return a compact dictionary representation of the object."""
        return self.to_dict()

    @classmethod
    def parse_yaml(cls, content: str) -> "BaseManifest":
        """Parse a serialized object."""
        return yaml_decode(content, cls)

    def yaml(self) -> str:
        """Return a YAML string representation of the object."""
        return yaml_encode(self, self.__class__)  # type: ignore[return-value]

    @property
    def resource_id(self) -> NamedResource:
        """Return the cache key of the object."""
        namespace = getattr(self, "namespace", None) or ""
        if self.kind in CLUSTER_SCOPED_KINDS:
            namespace = ""
        return NamedResource(
            self.kind,
            namespace,
            self.name,  # type: ignore[attr-defined]
        )

    class Config(BaseConfig):
        omit_none = True
        serialize_by_alias = True


@dataclass
class IngressClass(BaseManifest):
    """A cluster scoped IngressClass and the controller that implements it."""

    kind: ClassVar[Kind] = Kind.INGRESS_CLASS
    """The kind of the object."""

    name: str
    """The name of the IngressClass."""

    controller: str
    """The name of the controller that should handle this class."""

    is_default: bool = False
    """True if ingresses without a class should use this class."""

    resource_version: str | None = field(
        metadata={"serialize": "omit"}, default=None
    )
    """The last observed resourceVersion of the object."""

    @classmethod
    def parse_doc(cls, doc: dict[str, Any]) -> "IngressClass":
        """Parse an IngressClass from a kubernetes resource object."""
        _check_version(doc, NETWORKING_DOMAIN)
        metadata, name = _metadata(cls, doc)
        if not (spec := doc.get("spec")):
            raise InputException(f"Invalid {cls} missing spec: {doc}")
        if not (controller := spec.get("controller")):
            raise InputException(f"Invalid {cls} missing spec.controller: {doc}")
        annotations = metadata.get("annotations") or {}
        return cls(
            name=name,
            controller=controller,
            is_default=str(annotations.get(DEFAULT_CLASS_ANNOTATION, "")).lower()
            == "true",
            resource_version=metadata.get("resourceVersion"),
        )


@dataclass
class IngressPath(BaseManifest):
    """A path of an ingress rule routed to a backend service."""

    path: str | None = None
    """The path matched against the request."""

    path_type: str | None = field(
        metadata=field_options(alias="pathType"), default=None
    )
    """How the path is matched e.g. Prefix or Exact."""

    service_name: str | None = None
    """The name of the backend Service."""

    service_port: int | str | None = None
    """The port number or name on the backend Service."""

    @classmethod
    def parse_doc(cls, doc: dict[str, Any]) -> "IngressPath":
        """Parse an IngressPath from an HTTPIngressPath object."""
        service = (doc.get("backend") or {}).get("service") or {}
        port = service.get("port") or {}
        return cls(
            path=doc.get("path"),
            path_type=doc.get("pathType"),
            service_name=service.get("name"),
            service_port=port.get("number", port.get("name")),
        )


@dataclass
class IngressRule(BaseManifest):
    """A host and the paths routed for that host."""

    host: str | None = None
    """The host matched by the rule, or None to match all hosts."""

    paths: list[IngressPath] = field(default_factory=list)
    """The http paths for the host."""


@dataclass
class Ingress(BaseManifest):
    """A representation of a kubernetes Ingress."""

    kind: ClassVar[Kind] = Kind.INGRESS
    """The kind of the object."""

    name: str
    """The name of the Ingress."""

    namespace: str
    """The namespace that owns the Ingress."""

    ingress_class_name: str | None = None
    """The IngressClass for the Ingress, or None to use the cluster default."""

    rules: list[IngressRule] = field(default_factory=list)
    """The routing rules of the Ingress."""

    resource_version: str | None = field(
        metadata={"serialize": "omit"}, default=None
    )
    """The last observed resourceVersion of the object."""

    @classmethod
    def parse_doc(cls, doc: dict[str, Any]) -> "Ingress":
        """Parse an Ingress from a kubernetes resource object."""
        _check_version(doc, NETWORKING_DOMAIN)
        metadata, name = _metadata(cls, doc)
        spec = doc.get("spec") or {}
        rules = [
            IngressRule(
                host=rule.get("host"),
                paths=[
                    IngressPath.parse_doc(path)
                    for path in (rule.get("http") or {}).get("paths", ())
                ],
            )
            for rule in spec.get("rules") or ()
        ]
        return cls(
            name=name,
            namespace=metadata.get("namespace", DEFAULT_NAMESPACE),
            ingress_class_name=spec.get("ingressClassName") or None,
            rules=rules,
            resource_version=metadata.get("resourceVersion"),
        )

    @property
    def namespaced_name(self) -> str:
        """Return the namespace and name concatenated as an id."""
        return f"{self.namespace}/{self.name}"

    @property
    def hosts(self) -> list[str]:
        """Return the hosts referenced by the rules of the Ingress."""
        return [rule.host for rule in self.rules if rule.host]


@dataclass
class ServicePort(BaseManifest):
    """A port exposed by a Service."""

    port: int
    """The port exposed by the Service."""

    name: str | None = None
    """The name of the port within the Service."""

    protocol: str | None = None
    """The IP protocol of the port."""

    target_port: int | str | None = field(
        metadata=field_options(alias="targetPort"), default=None
    )
    """The port number or name on the pods targeted by the Service."""


@dataclass
class Service(BaseManifest):
    """A representation of a kubernetes Service."""

    kind: ClassVar[Kind] = Kind.SERVICE
    """The kind of the object."""

    name: str
    """The name of the Service."""

    namespace: str
    """The namespace that owns the Service."""

    type: str = "ClusterIP"
    """The type of the Service."""

    ports: list[ServicePort] = field(default_factory=list)
    """The ports exposed by the Service."""

    resource_version: str | None = field(
        metadata={"serialize": "omit"}, default=None
    )
    """The last observed resourceVersion of the object."""

    @classmethod
    def parse_doc(cls, doc: dict[str, Any]) -> "Service":
        """Parse a Service from a kubernetes resource object."""
        _check_version(doc, CORE_VERSION)
        metadata, name = _metadata(cls, doc)
        spec = doc.get("spec") or {}
        return cls(
            name=name,
            namespace=metadata.get("namespace", DEFAULT_NAMESPACE),
            type=spec.get("type", "ClusterIP"),
            ports=[ServicePort.from_dict(port) for port in spec.get("ports") or ()],
            resource_version=metadata.get("resourceVersion"),
        )


@dataclass
class EndpointCompression(BaseManifest):
    """Compression module settings."""

    enabled: bool = False
    """True if responses should be gzip compressed."""


@dataclass
class NgrokModules(BaseManifest):
    """The traffic policy modules of an NgrokModuleSet."""

    compression: EndpointCompression | None = None
    headers: dict[str, Any] | None = None
    ip_restriction: dict[str, Any] | None = field(
        metadata=field_options(alias="ipRestriction"), default=None
    )
    oauth: dict[str, Any] | None = None
    oidc: dict[str, Any] | None = None
    saml: dict[str, Any] | None = None
    tls_termination: dict[str, Any] | None = field(
        metadata=field_options(alias="tlsTermination"), default=None
    )
    webhook_verification: dict[str, Any] | None = field(
        metadata=field_options(alias="webhookVerification"), default=None
    )


@dataclass
class NgrokModuleSet(BaseManifest):
    """A named bundle of traffic policy modules that ingresses may attach."""

    kind: ClassVar[Kind] = Kind.MODULE_SET
    """The kind of the object."""

    name: str
    """The name of the NgrokModuleSet."""

    namespace: str
    """The namespace that owns the NgrokModuleSet."""

    modules: NgrokModules = field(default_factory=NgrokModules)
    """The modules configured by the set."""

    resource_version: str | None = field(
        metadata={"serialize": "omit"}, default=None
    )
    """The last observed resourceVersion of the object."""

    @classmethod
    def parse_doc(cls, doc: dict[str, Any]) -> "NgrokModuleSet":
        """Parse an NgrokModuleSet from a kubernetes resource object."""
        _check_version(doc, NGROK_DOMAIN)
        metadata, name = _metadata(cls, doc)
        return cls(
            name=name,
            namespace=metadata.get("namespace", DEFAULT_NAMESPACE),
            modules=NgrokModules.from_dict(doc.get("modules") or {}),
            resource_version=metadata.get("resourceVersion"),
        )


@dataclass
class ReservedDomainSpec(BaseManifest):
    """The desired state of a ReservedDomain."""

    domain: str
    """The domain name to reserve."""

    region: str = ""
    """The region in which to reserve the domain."""

    description: str = DEFAULT_DOMAIN_DESCRIPTION
    """A human-readable description of the reserved domain."""

    metadata: str = DEFAULT_DOMAIN_METADATA
    """A string of arbitrary data associated with the reserved domain."""


@dataclass
class ReservedDomainStatus(BaseManifest):
    """The observed state of a ReservedDomain."""

    id: str = ""
    """The unique identifier of the reserved domain."""

    domain: str = ""
    """The domain that was reserved."""

    region: str = ""
    """The region in which the reserved domain was created."""

    uri: str = ""
    """URI of the reserved domain API resource."""

    cname_target: str | None = None
    """The CNAME target for the reserved domain."""


@dataclass
class ReservedDomain(BaseManifest):
    """A pre-registered external hostname."""

    kind: ClassVar[Kind] = Kind.RESERVED_DOMAIN
    """The kind of the object."""

    name: str
    """The name of the ReservedDomain."""

    namespace: str
    """The namespace that owns the ReservedDomain."""

    spec: ReservedDomainSpec
    """The desired state of the reserved domain."""

    status: ReservedDomainStatus = field(default_factory=ReservedDomainStatus)
    """The observed state of the reserved domain."""

    resource_version: str | None = field(
        metadata={"serialize": "omit"}, default=None
    )
    """The last observed resourceVersion of the object."""

    @classmethod
    def parse_doc(cls, doc: dict[str, Any]) -> "ReservedDomain":
        """Parse a ReservedDomain from a kubernetes resource object."""
        _check_version(doc, NGROK_DOMAIN)
        metadata, name = _metadata(cls, doc)
        if not (spec := doc.get("spec")):
            raise InputException(f"Invalid {cls} missing spec: {doc}")
        if not spec.get("domain"):
            raise InputException(f"Invalid {cls} missing spec.domain: {doc}")
        return cls(
            name=name,
            namespace=metadata.get("namespace", DEFAULT_NAMESPACE),
            spec=ReservedDomainSpec.from_dict(spec),
            status=ReservedDomainStatus.from_dict(doc.get("status") or {}),
            resource_version=metadata.get("resourceVersion"),
        )


def parse_raw_obj(obj: dict[str, Any]) -> BaseManifest:
    """Parse a raw kubernetes object into a cached object."""
    if not (kind := obj.get("kind")):
        raise InputException(f"Invalid object missing kind: {obj}")
    if kind == Kind.INGRESS:
        return Ingress.parse_doc(obj)
    if kind == Kind.INGRESS_CLASS:
        return IngressClass.parse_doc(obj)
    if kind == Kind.SERVICE:
        return Service.parse_doc(obj)
    if kind == Kind.MODULE_SET:
        return NgrokModuleSet.parse_doc(obj)
    if kind == Kind.RESERVED_DOMAIN:
        return ReservedDomain.parse_doc(obj)
    raise InputException(f"Unsupported object kind '{kind}': {obj}")
