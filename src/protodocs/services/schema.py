"""SchemaService: registry queries exposed as ServiceResult operations.

Wraps a :class:`Daemon` for interface layers: resolution (strict),
closures, method descriptions with related types, and the aggregated
views (REST endpoints, experimental services, repository links).
"""

from __future__ import annotations

from dataclasses import asdict
from typing import Any

from protodocs.domain.errors import ResolutionError
from protodocs.domain.schema import Message, Method, ProtoEnum, split_full_type
from protodocs.domain.types import EntityKind
from protodocs.services.base import BaseService
from protodocs.services.result import ErrorCode, ServiceResult


def message_data(msg: Message) -> dict[str, Any]:
    return {
        "kind": EntityKind.MESSAGE.value,
        "name": msg.name,
        "long_name": msg.long_name,
        "full_name": msg.full_name,
        "package": msg.package,
        "file": msg.file_name,
        "description": msg.description,
        "fields": [
            {
                "name": f.name,
                "type": f.type,
                "full_type": f.full_type,
                "label": f.label,
                "repeated": f.repeated,
                "optional": f.optional,
                "description": f.description,
            }
            for f in msg.fields
        ],
    }


def enum_data(enum: ProtoEnum) -> dict[str, Any]:
    return {
        "kind": EntityKind.ENUM.value,
        "name": enum.name,
        "long_name": enum.long_name,
        "full_name": enum.full_name,
        "package": enum.package,
        "file": enum.file_name,
        "description": enum.description,
        "values": [asdict(v) for v in enum.values],
    }


def method_data(method: Method) -> dict[str, Any]:
    mapping = method.rest_mapping
    return {
        "name": method.name,
        "full_name": method.full_name,
        "service": method.service,
        "package": method.package,
        "description": method.description,
        "request_full_type": method.request_full_type,
        "response_full_type": method.response_full_type,
        "streaming": method.streaming_direction.value,
        "deprecated": method.is_deprecated,
        "rest_method": mapping.method if mapping else None,
        "rest_path": mapping.path if mapping else None,
        "command_line": method.command_line,
    }


def _parse_kind(kind: str | EntityKind) -> EntityKind | None:
    try:
        return EntityKind(kind)
    except ValueError:
        return None


class SchemaService(BaseService):
    """Read-only queries over one daemon's schema."""

    def _invalid_kind(self, op: str, kind: str | EntityKind) -> ServiceResult:
        return self._error(op, ErrorCode.INVALID_KIND, f"Unknown kind '{kind}'", kind=str(kind))

    def summary(self) -> ServiceResult:
        d = self._daemon
        packages = [
            {
                "name": pkg.name,
                "messages": len(pkg.messages),
                "enums": len(pkg.enums),
                "services": len(pkg.services),
                "experimental": pkg.experimental,
                "files": list(pkg.file_names),
            }
            for pkg in d.packages.values()
        ]
        return self._ok(
            "summary",
            {
                "name": d.name,
                "display_name": d.pascal_name,
                "repo_url": d.repo_url,
                "commit": d.commit,
                "grpc_port": d.grpc_port,
                "rest_port": d.rest_port,
                "cli_cmd": d.cli_cmd,
                "daemon_cmd": d.daemon_cmd,
                "rest_overrides": len(d.rest_types),
                "count": len(packages),
                "packages": packages,
            },
        )

    def resolve(
        self, full_type: str, *, kind: str | EntityKind = EntityKind.MESSAGE, rest: bool = False
    ) -> ServiceResult:
        """Strictly resolve *full_type* as a message or enum."""
        parsed = _parse_kind(kind)
        if parsed is None:
            return self._invalid_kind("resolve", kind)
        try:
            if parsed is EntityKind.ENUM:
                enum = self._daemon.get_enum(full_type)
                assert enum is not None
                data = enum_data(enum)
            else:
                msg = self._daemon.get_message(full_type, rest=rest)
                assert msg is not None
                data = message_data(msg)
        except ResolutionError as exc:
            return self._resolution_error("resolve", exc)
        return self._ok("resolve", data)

    def closure(
        self, full_type: str, *, kind: str | EntityKind = EntityKind.MESSAGE
    ) -> ServiceResult:
        """List the messages or enums transitively reachable from a root message."""
        parsed = _parse_kind(kind)
        if parsed is None:
            return self._invalid_kind("closure", kind)
        try:
            root = self._daemon.get_message(full_type)
            assert root is not None
            if parsed is EntityKind.ENUM:
                found: dict[str, Message] | dict[str, ProtoEnum] = self._daemon.nested_enums(root)
            else:
                found = self._daemon.nested_messages(root)
        except ResolutionError as exc:
            return self._resolution_error("closure", exc)

        items = [
            {"full_type": key, "name": entity.name, "package": entity.package}
            for key, entity in found.items()
        ]
        return self._listing("closure", items, root=full_type, kind=parsed.value)

    def describe_method(self, full_name: str) -> ServiceResult:
        """Describe ``package.Service.Method`` with its related message and enum types."""
        package, rest = split_full_type(full_name)
        service_name, _, method_name = rest.rpartition(".")
        pkg = self._daemon.packages.get(package)
        service = pkg.service(service_name) if pkg else None
        method = service.method(method_name) if service else None
        if method is None:
            return self._error(
                "describe_method",
                ErrorCode.NOT_FOUND,
                f"Method '{full_name}' not found",
                full_name=full_name,
            )

        warnings: list[str] = []
        messages: dict[str, Message] = {}
        enums: dict[str, ProtoEnum] = {}
        try:
            for io_type in (method.request_full_type, method.response_full_type):
                msg = self._daemon.get_message(io_type, strict=False)
                if msg is None:
                    warnings.append(f"Cannot resolve {io_type} for {full_name}")
                    continue
                self._daemon.nested_messages(msg, messages)
                self._daemon.nested_enums(msg, enums)
        except ResolutionError as exc:
            return self._resolution_error("describe_method", exc)

        data = method_data(method)
        data["related_messages"] = list(messages)
        data["related_enums"] = list(enums)
        return self._ok("describe_method", data, warnings=warnings)

    def rest_endpoints(self) -> ServiceResult:
        items = [asdict(e) for e in self._daemon.rest_endpoints]
        return self._listing("rest_endpoints", items)

    def experimental_services(self) -> ServiceResult:
        items = [asdict(s) for s in self._daemon.experimental_services]
        return self._listing("experimental_services", items)

    def repository_links(self) -> ServiceResult:
        items = [asdict(u) for u in self._daemon.file_repo_urls]
        return self._listing("repository_links", items)
