"""Ingress-store get action."""

import logging
import pathlib
from argparse import (
    ArgumentParser,
    _SubParsersAction as SubParsersAction,
)
from typing import Any, cast

from ingress_store.exceptions import ObjectNotFoundError
from ingress_store.manifest import Kind

from .format import PrintFormatter, formatter
from . import get_common


_LOGGER = logging.getLogger(__name__)


class GetIngressAction:
    """Get details about the ingresses managed by the controller."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "ingresses",
                aliases=["ing", "ingress"],
                help="Get Ingress objects managed by the controller",
                description="Print information about Ingress objects managed by the controller",
            ),
        )
        args.add_argument(
            "name",
            nargs="?",
            help="Only show the Ingress with this name",
        )
        get_common.add_common_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        path: pathlib.Path,
        controller_name: str,
        namespace: str | None,
        all_namespaces: bool,
        output: str | None,
        name: str | None = None,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        store = await get_common.build_store(path, controller_name)
        if name is not None:
            ingress_namespace = namespace or "default"
            try:
                ingresses = [store.get_owned_ingress(name, ingress_namespace)]
            except ObjectNotFoundError as err:
                print(err)
                return
        else:
            ingresses = get_common.filter_namespace(
                store.list_owned_ingresses(), namespace, all_namespaces
            )

        if not ingresses:
            print(get_common.not_found(Kind.INGRESS, namespace))
            return
        if output:
            formatter(output).print(get_common.struct_output(ingresses))
            return

        cols = ["namespace", "name", "class", "hosts"]
        results: list[dict[str, Any]] = []
        for ingress in ingresses:
            results.append(
                {
                    "namespace": ingress.namespace,
                    "name": ingress.name,
                    "class": ingress.ingress_class_name or "<default>",
                    "hosts": ",".join(ingress.hosts) or "*",
                }
            )
        PrintFormatter(cols).print(results)


class GetIngressClassAction:
    """Get details about the IngressClasses implemented by the controller."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "ingressclasses",
                aliases=["ic", "ingressclass"],
                help="Get IngressClass objects implemented by the controller",
                description="Print information about IngressClass objects implemented by the controller",
            ),
        )
        get_common.add_common_flags(args, namespaced=False)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        path: pathlib.Path,
        controller_name: str,
        output: str | None,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        store = await get_common.build_store(path, controller_name)
        ingress_classes = store.list_owned_ingress_classes()
        if not ingress_classes:
            print(get_common.not_found(Kind.INGRESS_CLASS, None))
            return
        if output:
            formatter(output).print(get_common.struct_output(ingress_classes))
            return

        cols = ["name", "controller", "default"]
        results = [
            {
                "name": ingress_class.name,
                "controller": ingress_class.controller,
                "default": str(ingress_class.is_default).lower(),
            }
            for ingress_class in ingress_classes
        ]
        PrintFormatter(cols).print(results)


class GetModuleSetAction:
    """Get details about NgrokModuleSets."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "modulesets",
                aliases=["nms", "moduleset"],
                help="Get NgrokModuleSet objects",
                description="Print information about NgrokModuleSet objects",
            ),
        )
        get_common.add_common_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        path: pathlib.Path,
        controller_name: str,
        namespace: str | None,
        all_namespaces: bool,
        output: str | None,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        store = await get_common.build_store(path, controller_name)
        module_sets = get_common.filter_namespace(
            store.list_module_sets(), namespace, all_namespaces
        )
        if not module_sets:
            print(get_common.not_found(Kind.MODULE_SET, namespace))
            return
        if output:
            formatter(output).print(get_common.struct_output(module_sets))
            return

        cols = ["namespace", "name", "modules"]
        results = [
            {
                "namespace": module_set.namespace,
                "name": module_set.name,
                "modules": ",".join(module_set.modules.to_dict()) or "<none>",
            }
            for module_set in module_sets
        ]
        PrintFormatter(cols).print(results)


class GetServiceAction:
    """Get details about Services."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "services",
                aliases=["svc", "service"],
                help="Get Service objects",
                description="Print information about Service objects",
            ),
        )
        get_common.add_common_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        path: pathlib.Path,
        controller_name: str,
        namespace: str | None,
        all_namespaces: bool,
        output: str | None,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        store = await get_common.build_store(path, controller_name)
        services = get_common.filter_namespace(
            store.list_services(), namespace, all_namespaces
        )
        if not services:
            print(get_common.not_found(Kind.SERVICE, namespace))
            return
        if output:
            formatter(output).print(get_common.struct_output(services))
            return

        cols = ["namespace", "name", "type", "ports"]
        results = [
            {
                "namespace": service.namespace,
                "name": service.name,
                "type": service.type,
                "ports": ",".join(str(port.port) for port in service.ports),
            }
            for service in services
        ]
        PrintFormatter(cols).print(results)


class GetReservedDomainAction:
    """Get details about ReservedDomains."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "reserveddomains",
                aliases=["domains", "reserveddomain"],
                help="Get ReservedDomain objects",
                description="Print information about ReservedDomain objects",
            ),
        )
        get_common.add_common_flags(args)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        path: pathlib.Path,
        controller_name: str,
        namespace: str | None,
        all_namespaces: bool,
        output: str | None,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        store = await get_common.build_store(path, controller_name)
        domains = get_common.filter_namespace(
            store.list_reserved_domains(), namespace, all_namespaces
        )
        if not domains:
            print(get_common.not_found(Kind.RESERVED_DOMAIN, namespace))
            return
        if output:
            formatter(output).print(get_common.struct_output(domains))
            return

        cols = ["namespace", "name", "domain", "region", "cname_target"]
        results = [
            {
                "namespace": domain.namespace,
                "name": domain.name,
                "domain": domain.spec.domain,
                "region": domain.status.region or domain.spec.region,
                "cname_target": domain.status.cname_target or "",
            }
            for domain in domains
        ]
        PrintFormatter(cols).print(results)


class GetAction:
    """Ingress-store get action."""

    @classmethod
    def register(
        cls, subparsers: SubParsersAction  # type: ignore[type-arg]
    ) -> ArgumentParser:
        """Register the subparser commands."""
        args = cast(
            ArgumentParser,
            subparsers.add_parser(
                "get",
                help="Print information about cached cluster objects",
                description="Print information about supported cluster objects",
            ),
        )
        subcmds = args.add_subparsers(
            title="Available commands",
            required=True,
        )
        GetIngressAction.register(subcmds)
        GetIngressClassAction.register(subcmds)
        GetModuleSetAction.register(subcmds)
        GetServiceAction.register(subcmds)
        GetReservedDomainAction.register(subcmds)
        args.set_defaults(cls=cls)
        return args

    async def run(  # type: ignore[no-untyped-def]
        self,
        **kwargs,  # pylint: disable=unused-argument
    ) -> None:
        """Async Action implementation."""
        # No-op given subcommands are always the dispatch target
