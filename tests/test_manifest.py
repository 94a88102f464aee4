"""Tests for manifest library."""

from pathlib import Path
from typing import Any

import pytest
import yaml

from ingress_store.exceptions import InputException
from ingress_store.manifest import (
    Ingress,
    IngressClass,
    IngressPath,
    IngressRule,
    Kind,
    NamedResource,
    NgrokModules,
    NgrokModuleSet,
    ReservedDomain,
    ReservedDomainSpec,
    Service,
    ServicePort,
    parse_raw_obj,
)

TESTDATA_DIR = Path("tests/testdata/cluster")


def _load(path: Path) -> list[dict[str, Any]]:
    return list(yaml.safe_load_all(path.read_text()))


def test_parse_ingress_class() -> None:
    """Test parsing an ingress class doc."""
    docs = _load(TESTDATA_DIR / "ingress-classes.yaml")
    ngrok = IngressClass.parse_doc(docs[0])
    assert ngrok.name == "ngrok"
    assert ngrok.controller == "k8s.ngrok.com/ingress-controller"
    assert ngrok.is_default
    assert ngrok.resource_version == "1001"
    assert ngrok.resource_id == NamedResource(Kind.INGRESS_CLASS, "", "ngrok")

    nginx = IngressClass.parse_doc(docs[1])
    assert nginx.name == "nginx"
    assert not nginx.is_default


def test_parse_ingress_class_missing_controller() -> None:
    """Test parsing an ingress class without a controller."""
    with pytest.raises(InputException, match="missing spec"):
        IngressClass.parse_doc(
            {
                "apiVersion": "networking.k8s.io/v1",
                "kind": "IngressClass",
                "metadata": {"name": "ngrok"},
            }
        )


def test_parse_ingress() -> None:
    """Test parsing ingress docs."""
    docs = _load(TESTDATA_DIR / "apps/ingresses.yaml")
    ingress = Ingress.parse_doc(docs[0])
    assert ingress.name == "podinfo"
    assert ingress.namespace == "podinfo"
    assert ingress.ingress_class_name == "ngrok"
    assert ingress.hosts == ["podinfo.ngrok.app"]
    path = ingress.rules[0].paths[0]
    assert path.path == "/"
    assert path.path_type == "Prefix"
    assert path.service_name == "podinfo"
    assert path.service_port == 9898

    no_class = Ingress.parse_doc(docs[1])
    assert no_class.ingress_class_name is None
    assert no_class.rules[0].paths[0].service_port == "http"

    no_paths = Ingress.parse_doc(docs[2])
    assert no_paths.rules[0].paths == []


def test_compact_ingress() -> None:
    """Test the compact representation of an ingress."""
    ingress = Ingress.parse_doc(_load(TESTDATA_DIR / "apps/ingresses.yaml")[2])
    assert ingress.compact_dict() == {
        "name": "legacy",
        "namespace": "podinfo",
        "ingress_class_name": "nginx",
        "rules": [{"host": "legacy.example.com", "paths": []}],
    }


def test_parse_ingress_wrong_version() -> None:
    """Test parsing an ingress with an unexpected apiVersion."""
    with pytest.raises(InputException, match="expected 'networking.k8s.io'"):
        Ingress.parse_doc(
            {
                "apiVersion": "extensions/v1beta1",
                "kind": "Ingress",
                "metadata": {"name": "example", "namespace": "default"},
            }
        )


def test_parse_service() -> None:
    """Test parsing a service doc."""
    doc = _load(TESTDATA_DIR / "apps/services.yaml")[0]["items"][0]
    service = Service.parse_doc(doc)
    assert service.name == "podinfo"
    assert service.type == "ClusterIP"
    assert len(service.ports) == 1
    assert service.ports[0].port == 9898
    assert service.ports[0].name == "http"
    assert service.ports[0].target_port == 9898


def test_parse_module_set() -> None:
    """Test parsing an NgrokModuleSet doc."""
    doc = _load(TESTDATA_DIR / "apps/ngrok.yaml")[0]
    module_set = NgrokModuleSet.parse_doc(doc)
    assert module_set.name == "compressed"
    assert module_set.modules.compression
    assert module_set.modules.compression.enabled
    assert module_set.modules.ip_restriction == {"policies": ["policy-1"]}
    assert module_set.modules.headers is None


def test_parse_reserved_domain() -> None:
    """Test parsing a ReservedDomain doc with status."""
    doc = _load(TESTDATA_DIR / "apps/ngrok.yaml")[1]
    domain = ReservedDomain.parse_doc(doc)
    assert domain.spec.domain == "podinfo.ngrok.app"
    assert domain.spec.region == "us"
    assert domain.spec.description == "Created by ngrok-ingress-controller"
    assert domain.spec.metadata == '{"owned-by":"ngrok-ingress-controller"}'
    assert domain.status.id == "rd_123"
    assert domain.status.uri == "https://api.ngrok.com/reserved_domains/rd_123"
    assert domain.status.cname_target == "abc.cname.ngrok.app"


def test_reserved_domain_wire_format() -> None:
    """Test the serialized field names of a ReservedDomain."""
    domain = ReservedDomain(
        name="example",
        namespace="default",
        spec=ReservedDomainSpec(domain="example.ngrok.app", region="eu"),
    )
    assert domain.compact_dict() == {
        "name": "example",
        "namespace": "default",
        "spec": {
            "domain": "example.ngrok.app",
            "region": "eu",
            "description": "Created by ngrok-ingress-controller",
            "metadata": '{"owned-by":"ngrok-ingress-controller"}',
        },
        "status": {
            "id": "",
            "domain": "",
            "region": "",
            "uri": "",
        },
    }
    assert ReservedDomain.parse_yaml(domain.yaml()) == domain


def test_ingress_yaml_round_trip() -> None:
    """Test an ingress with aliased fields can be serialized and read back."""
    ingress = Ingress(
        name="example",
        namespace="default",
        ingress_class_name="ngrok",
        rules=[
            IngressRule(
                host="example.ngrok.app",
                paths=[
                    IngressPath(
                        path="/",
                        path_type="Prefix",
                        service_name="example",
                        service_port=80,
                    )
                ],
            )
        ],
    )
    assert ingress.compact_dict()["rules"][0]["paths"][0]["pathType"] == "Prefix"
    assert Ingress.parse_yaml(ingress.yaml()) == ingress


def test_service_yaml_round_trip() -> None:
    """Test a service port target is kept when serialized and read back."""
    service = Service(
        name="example",
        namespace="default",
        ports=[ServicePort(port=80, name="http", target_port=8080)],
    )
    assert service.compact_dict()["ports"] == [
        {"port": 80, "name": "http", "targetPort": 8080}
    ]
    assert Service.parse_yaml(service.yaml()) == service


def test_module_set_yaml_round_trip() -> None:
    """Test camelCase module names are kept when serialized and read back."""
    module_set = NgrokModuleSet(
        name="example",
        namespace="default",
        modules=NgrokModules(
            ip_restriction={"policies": ["policy-1"]},
            tls_termination={"minVersion": "1.3"},
            webhook_verification={"provider": "github"},
        ),
    )
    assert list(module_set.compact_dict()["modules"]) == [
        "ipRestriction",
        "tlsTermination",
        "webhookVerification",
    ]
    assert NgrokModuleSet.parse_yaml(module_set.yaml()) == module_set


def test_parse_reserved_domain_missing_domain() -> None:
    """Test parsing a ReservedDomain without the required domain."""
    with pytest.raises(InputException, match="missing spec.domain"):
        ReservedDomain.parse_doc(
            {
                "apiVersion": "ingress.k8s.ngrok.com/v1alpha1",
                "kind": "ReservedDomain",
                "metadata": {"name": "example", "namespace": "default"},
                "spec": {"region": "us"},
            }
        )


def test_parse_raw_obj() -> None:
    """Test parsing raw objects of each supported kind."""
    docs = [
        *_load(TESTDATA_DIR / "ingress-classes.yaml"),
        *_load(TESTDATA_DIR / "apps/ingresses.yaml"),
        *_load(TESTDATA_DIR / "apps/ngrok.yaml"),
    ]
    kinds = [parse_raw_obj(doc).kind for doc in docs]
    assert kinds == [
        Kind.INGRESS_CLASS,
        Kind.INGRESS_CLASS,
        Kind.INGRESS,
        Kind.INGRESS,
        Kind.INGRESS,
        Kind.MODULE_SET,
        Kind.RESERVED_DOMAIN,
    ]


@pytest.mark.parametrize(
    ("doc", "match"),
    [
        ({"apiVersion": "v1"}, "missing kind"),
        ({"apiVersion": "apps/v1", "kind": "Deployment"}, "Unsupported object kind"),
        ({"kind": "Service", "metadata": {"name": "a"}}, "missing apiVersion"),
        ({"apiVersion": "v1", "kind": "Service"}, "missing metadata"),
        ({"apiVersion": "v1", "kind": "Service", "metadata": {}}, "missing metadata"),
    ],
)
def test_parse_raw_obj_invalid(doc: dict[str, Any], match: str) -> None:
    """Test parsing invalid raw objects."""
    with pytest.raises(InputException, match=match):
        parse_raw_obj(doc)


def test_named_resource() -> None:
    """Test the string representation of a NamedResource."""
    assert str(NamedResource(Kind.INGRESS, "ns", "name")) == "Ingress/ns/name"
    assert str(NamedResource(Kind.INGRESS_CLASS, "", "ngrok")) == "IngressClass/ngrok"
