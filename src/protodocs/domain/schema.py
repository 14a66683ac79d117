"""Schema entities: enums, messages, services, methods, and packages.

Entities are built once from descriptor records and never change after
construction. A field's ``full_type`` is a weak reference: a name the
registry resolves on demand, never an owning pointer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from protodocs.domain.types import StreamingDirection

if TYPE_CHECKING:
    from protodocs.domain.descriptor import (
        EnumDescriptor,
        FieldDescriptor,
        MessageDescriptor,
        MethodDescriptor,
        ServiceDescriptor,
    )

REPEATED_LABEL = "repeated"
OPTIONAL_LABEL = "optional"


def is_reference(full_type: str) -> bool:
    """True when *full_type* names another type (``lnrpc.OutPoint``), not a scalar."""
    return "." in full_type


def split_full_type(full_type: str) -> tuple[str, str]:
    """Split ``lnrpc.Invoice.InvoiceState`` into ``("lnrpc", "Invoice.InvoiceState")``.

    A string with no period has an empty namespace.
    """
    namespace, sep, remainder = full_type.partition(".")
    if not sep:
        return "", full_type
    return namespace, remainder


def _long_name(name: str, long_name: str) -> str:
    return long_name or name


def _full_name(package: str, long_name: str, full_name: str) -> str:
    return full_name or f"{package}.{long_name}"


@dataclass(frozen=True)
class Field:
    """One field of a message, in declaration order."""

    name: str
    type: str
    full_type: str
    long_type: str = ""
    label: str = ""
    description: str = ""
    is_map: bool = False
    is_oneof: bool = False
    oneof_decl: str = ""
    default_value: str = ""

    @property
    def repeated(self) -> bool:
        return self.label == REPEATED_LABEL

    @property
    def optional(self) -> bool:
        return self.label == OPTIONAL_LABEL

    @property
    def is_reference(self) -> bool:
        return is_reference(self.full_type)

    @classmethod
    def from_descriptor(cls, desc: FieldDescriptor) -> Field:
        return cls(
            name=desc.name,
            type=desc.type,
            full_type=desc.full_type or desc.type,
            long_type=desc.long_type or desc.type,
            label=desc.label,
            description=desc.description,
            is_map=desc.is_map,
            is_oneof=desc.is_oneof,
            oneof_decl=desc.oneof_decl,
            default_value=desc.default_value,
        )


@dataclass(frozen=True)
class EnumValue:
    name: str
    number: int = 0
    description: str = ""


@dataclass(frozen=True)
class ProtoEnum:
    """A named set of symbolic values. Always a leaf of the type graph."""

    name: str
    long_name: str
    full_name: str
    package: str
    values: tuple[EnumValue, ...] = ()
    description: str = ""
    file_name: str = ""

    @classmethod
    def from_descriptor(cls, desc: EnumDescriptor, package: str, file_name: str) -> ProtoEnum:
        long_name = _long_name(desc.name, desc.long_name)
        return cls(
            name=desc.name,
            long_name=long_name,
            full_name=_full_name(package, long_name, desc.full_name),
            package=package,
            values=tuple(
                EnumValue(name=v.name, number=v.number, description=v.description)
                for v in desc.values
            ),
            description=desc.description,
            file_name=file_name,
        )


@dataclass(frozen=True)
class Message:
    """A record type. Field order is the rendering order."""

    name: str
    long_name: str
    full_name: str
    package: str
    fields: tuple[Field, ...] = ()
    description: str = ""
    file_name: str = ""

    @property
    def reference_types(self) -> list[str]:
        """Full types of fields that point at other messages or enums."""
        return [f.full_type for f in self.fields if f.is_reference]

    @classmethod
    def from_descriptor(cls, desc: MessageDescriptor, package: str, file_name: str) -> Message:
        long_name = _long_name(desc.name, desc.long_name)
        return cls(
            name=desc.name,
            long_name=long_name,
            full_name=_full_name(package, long_name, desc.full_name),
            package=package,
            fields=tuple(Field.from_descriptor(f) for f in desc.fields),
            description=desc.description,
            file_name=file_name,
        )


@dataclass(frozen=True)
class RestMapping:
    method: str
    path: str


def parse_description(description: str) -> str:
    """Drop a leading CLI marker line such as ``lncli: `closechannel```."""
    if not description:
        return ""
    lines = description.split("\n")
    if ": `" in lines[0]:
        return "\n".join(lines[1:])
    return description


@dataclass(frozen=True)
class Method:
    """An RPC method with optional REST binding."""

    name: str
    service: str
    package: str
    request_type: str = ""
    request_full_type: str = ""
    request_streaming: bool = False
    response_type: str = ""
    response_full_type: str = ""
    response_streaming: bool = False
    rest_mapping: RestMapping | None = None
    description: str = ""
    source: str = ""
    command_line: str = ""
    command_line_help: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.package}.{self.service}.{self.name}"

    @property
    def is_deprecated(self) -> bool:
        return "deprecated" in self.description.lower()

    @property
    def streaming_direction(self) -> StreamingDirection:
        if self.request_streaming and self.response_streaming:
            return StreamingDirection.BIDIRECTIONAL
        if self.response_streaming:
            return StreamingDirection.SERVER
        if self.request_streaming:
            return StreamingDirection.CLIENT
        return StreamingDirection.NONE

    @classmethod
    def from_descriptor(cls, desc: MethodDescriptor, service: str, package: str) -> Method:
        binding = desc.http_binding()
        return cls(
            name=desc.name,
            service=service,
            package=package,
            request_type=desc.request_type,
            request_full_type=desc.request_full_type,
            request_streaming=desc.request_streaming,
            response_type=desc.response_type,
            response_full_type=desc.response_full_type,
            response_streaming=desc.response_streaming,
            rest_mapping=RestMapping(binding.method, binding.path) if binding else None,
            description=parse_description(desc.description),
            source=desc.source,
            command_line=desc.command_line,
            command_line_help=desc.command_line_help.strip(),
        )


@dataclass(frozen=True)
class Service:
    name: str
    package: str
    file_name: str
    methods: tuple[Method, ...] = ()
    description: str = ""

    @property
    def full_name(self) -> str:
        return f"{self.package}.{self.name}"

    def method(self, name: str) -> Method | None:
        for m in self.methods:
            if m.name == name:
                return m
        return None

    @classmethod
    def from_descriptor(cls, desc: ServiceDescriptor, package: str, file_name: str) -> Service:
        return cls(
            name=desc.name,
            package=package,
            file_name=file_name,
            methods=tuple(Method.from_descriptor(m, desc.name, package) for m in desc.methods),
            description=desc.description,
        )


@dataclass
class Package:
    """A namespace aggregated from every file record that declares it.

    Messages and enums are keyed by long name (``Invoice.InvoiceState``),
    which is the remainder of a full type after the package segment.
    """

    name: str
    messages: dict[str, Message] = field(default_factory=dict)
    enums: dict[str, ProtoEnum] = field(default_factory=dict)
    services: list[Service] = field(default_factory=list)
    file_names: list[str] = field(default_factory=list)
    experimental: bool = False

    def service(self, name: str) -> Service | None:
        for s in self.services:
            if s.name == name:
                return s
        return None
