"""Daemon: the schema registry for one RPC daemon.

Built once from a :class:`DaemonDescriptor`. Owns the namespace to
:class:`Package` mapping and answers the cross-namespace queries:
type resolution, closures, experimental services, REST endpoints, and
repository links. Field type references are resolved on demand, so
packages may refer to each other regardless of file order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from protodocs.config.models import DisplayConfig, ResolutionConfig
from protodocs.domain.descriptor import DaemonDescriptor, ProtoFileDescriptor
from protodocs.domain.errors import DuplicateDeclarationError
from protodocs.domain.lookup import Lookup
from protodocs.domain.rest_types import RestTypes
from protodocs.domain.schema import Message, Package, ProtoEnum, Service, split_full_type
from protodocs.domain.text import locale_key, pascal_case, snake_case
from protodocs.domain.types import DuplicatePolicy, ErrorKind
from protodocs.registry.closure import collect_enums, collect_messages

PROTO_SUFFIX = ".proto"


@dataclass(frozen=True)
class FileRepoUrl:
    """Links to one proto file and its swagger twin at the pinned commit."""

    name: str
    grpc_url: str
    rest_url: str


@dataclass(frozen=True)
class ExperimentalService:
    name: str
    lower_name: str
    file: str


@dataclass(frozen=True)
class RestEndpoint:
    rest_path: str
    rest_method: str
    link_url: str
    method_name: str


class Daemon:
    """Registry of packages for one daemon, with resolution queries.

    Args:
        name: Daemon identifier (``lnd``, ``loop``, ...).
        descriptor: The fully loaded input descriptor.
        resolution: Duplicate policy and closure depth bound.
        display: Proper-noun overrides for :attr:`pascal_name`.
        logger: Diagnostic sink. Defaults to this module's logger.
    """

    def __init__(
        self,
        name: str,
        descriptor: DaemonDescriptor,
        *,
        resolution: ResolutionConfig | None = None,
        display: DisplayConfig | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._log = logger if logger is not None else logging.getLogger(__name__)
        self._resolution = resolution or ResolutionConfig()
        self._display = display or DisplayConfig()

        self.name = name
        self.packages: dict[str, Package] = {}
        self.rest_types = RestTypes(descriptor.rest_types)

        self.repo_url = descriptor.repo_url
        self.commit = descriptor.commit
        self.proto_src_dir = descriptor.proto_src_dir
        self.experimental_packages = list(descriptor.experimental_packages)
        self.grpc_port = descriptor.grpc_port
        self.rest_port = descriptor.rest_port
        self.cli_cmd = descriptor.cli_cmd
        self.daemon_cmd = descriptor.daemon_cmd

        self._log.info(
            "Creating daemon %s with %d proto files",
            name,
            len(descriptor.files),
            extra={"proto_files": len(descriptor.files)},
        )

        links: list[FileRepoUrl] = []
        for proto_file in descriptor.files:
            pkg = self.packages.get(proto_file.package)
            if pkg is None:
                pkg = Package(proto_file.package)
                self.packages[proto_file.package] = pkg
            self._add_proto_file(pkg, proto_file)

            if pkg.name in self.experimental_packages:
                pkg.experimental = True

            links.append(self._file_repo_url(proto_file.name))

        self.file_repo_urls: list[FileRepoUrl] = sorted(links, key=lambda u: locale_key(u.name))

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    def _add_proto_file(self, pkg: Package, proto_file: ProtoFileDescriptor) -> None:
        """Merge one file record's declarations into *pkg*."""
        file_name = proto_file.name
        pkg.file_names.append(file_name)

        for msg_desc in proto_file.messages:
            msg = Message.from_descriptor(msg_desc, pkg.name, file_name)
            if msg.long_name in pkg.messages:
                self._duplicate(pkg, "message", msg.long_name, file_name)
            pkg.messages[msg.long_name] = msg

        for enum_desc in proto_file.enums:
            enum = ProtoEnum.from_descriptor(enum_desc, pkg.name, file_name)
            if enum.long_name in pkg.enums:
                self._duplicate(pkg, "enum", enum.long_name, file_name)
            pkg.enums[enum.long_name] = enum

        for svc_desc in proto_file.services:
            service = Service.from_descriptor(svc_desc, pkg.name, file_name)
            existing = pkg.service(service.name)
            if existing is not None:
                self._duplicate(pkg, "service", service.name, file_name)
                pkg.services.remove(existing)
            pkg.services.append(service)

        self._log.debug(
            "Added %s to package %s (%d messages, %d enums, %d services)",
            file_name,
            pkg.name,
            len(proto_file.messages),
            len(proto_file.enums),
            len(proto_file.services),
        )

    def _duplicate(self, pkg: Package, kind: str, name: str, file_name: str) -> None:
        if self._resolution.duplicate_policy is DuplicatePolicy.REJECT:
            raise DuplicateDeclarationError(pkg.name, kind, name, file_name)
        self._log.warning(
            "Duplicate %s %s in package %s replaced by %s",
            kind,
            name,
            pkg.name,
            file_name,
            extra={"package": pkg.name, "kind": kind, "declaration": name, "file": file_name},
        )

    def _file_repo_url(self, file_name: str) -> FileRepoUrl:
        base_name = file_name.removesuffix(PROTO_SUFFIX)
        prefix = f"{self.repo_url}/blob/{self.commit}/{self.proto_src_dir}/{base_name}"
        return FileRepoUrl(
            name=base_name,
            grpc_url=f"{prefix}.proto",
            rest_url=f"{prefix}.swagger.json",
        )

    # ------------------------------------------------------------------
    # Display
    # ------------------------------------------------------------------

    @property
    def pascal_name(self) -> str:
        proper = self._display.proper_names.get(self.name)
        if proper:
            return proper
        return pascal_case(self.name)

    # ------------------------------------------------------------------
    # Single-hop resolution
    # ------------------------------------------------------------------

    def lookup_message(self, full_type: str) -> Lookup[Message]:
        """Resolve ``lnrpc.Invoice`` to a message without raising."""
        namespace, name = split_full_type(full_type)
        pkg = self.packages.get(namespace)
        if pkg is None:
            return Lookup(full_type, error=ErrorKind.UNKNOWN_NAMESPACE)
        msg = pkg.messages.get(name)
        if msg is None:
            return Lookup(full_type, error=ErrorKind.UNKNOWN_MESSAGE)
        return Lookup(full_type, value=msg)

    def lookup_enum(self, full_type: str) -> Lookup[ProtoEnum]:
        """Resolve ``lnrpc.Invoice.InvoiceState`` to an enum without raising."""
        namespace, name = split_full_type(full_type)
        pkg = self.packages.get(namespace)
        if pkg is None:
            return Lookup(full_type, error=ErrorKind.UNKNOWN_NAMESPACE)
        enum = pkg.enums.get(name)
        if enum is None:
            return Lookup(full_type, error=ErrorKind.UNKNOWN_ENUM)
        return Lookup(full_type, value=enum)

    def get_message(
        self, full_type: str, *, strict: bool = True, rest: bool = False
    ) -> Message | None:
        """Return the message for *full_type*.

        Args:
            strict: Raise :class:`UnknownNamespaceError` /
                :class:`UnknownMessageError` when missing. Otherwise return None.
            rest: Return the REST view with field type overrides applied.
        """
        result = self.lookup_message(full_type)
        msg = result.unwrap() if strict else result.get()
        if msg is not None and rest:
            return self.rest_types.view(msg)
        return msg

    def get_enum(self, full_type: str, *, strict: bool = True) -> ProtoEnum | None:
        """Return the enum for *full_type*; see :meth:`get_message` for *strict*."""
        result = self.lookup_enum(full_type)
        return result.unwrap() if strict else result.get()

    # ------------------------------------------------------------------
    # Closures
    # ------------------------------------------------------------------

    def nested_messages(
        self,
        message: Message,
        all_messages: dict[str, Message] | None = None,
        *,
        rest: bool = False,
    ) -> dict[str, Message]:
        """All messages transitively referenced by *message*, keyed by full type."""
        return collect_messages(
            message,
            lambda t: self.get_message(t, strict=False, rest=rest),
            {} if all_messages is None else all_messages,
            max_depth=self._resolution.max_closure_depth,
        )

    def nested_enums(
        self,
        message: Message,
        all_enums: dict[str, ProtoEnum] | None = None,
    ) -> dict[str, ProtoEnum]:
        """All enums transitively referenced by *message*, keyed by full type."""
        return collect_enums(
            message,
            lambda t: self.get_enum(t, strict=False),
            lambda t: self.get_message(t, strict=False),
            {} if all_enums is None else all_enums,
            max_depth=self._resolution.max_closure_depth,
        )

    # ------------------------------------------------------------------
    # Aggregations
    # ------------------------------------------------------------------

    @property
    def experimental_services(self) -> list[ExperimentalService]:
        services = [
            ExperimentalService(name=s.name, lower_name=s.name.lower(), file=s.file_name)
            for pkg in self.packages.values()
            if pkg.experimental
            for s in pkg.services
        ]
        return sorted(services, key=lambda s: locale_key(s.name))

    @property
    def rest_endpoints(self) -> list[RestEndpoint]:
        endpoints: list[RestEndpoint] = []
        for pkg in self.packages.values():
            for service in pkg.services:
                for method in service.methods:
                    mapping = method.rest_mapping
                    if mapping is None or not mapping.path:
                        continue
                    endpoints.append(
                        RestEndpoint(
                            rest_path=mapping.path,
                            rest_method=mapping.method,
                            link_url=f"{snake_case(service.name)}/{snake_case(method.name)}",
                            method_name=f"{pkg.name}.{method.name}",
                        )
                    )
        return sorted(endpoints, key=lambda e: locale_key(e.rest_path))
