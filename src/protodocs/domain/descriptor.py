"""Pydantic models for the pre-parsed protocol descriptor.

The descriptor is the JSON document emitted by the upstream proto
documentation generator (camelCase keys). Unknown keys are ignored so
newer generator output keeps loading.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.alias_generators import to_camel

_DESCRIPTOR_CONFIG: Any = {
    "frozen": True,
    "alias_generator": to_camel,
    "populate_by_name": True,
}

HTTP_OPTION = "google.api.http"
_HTTP_VERBS = ("get", "put", "post", "delete", "patch")


class RestMappingDescriptor(BaseModel):
    """HTTP binding of a method: verb plus path template."""

    model_config = _DESCRIPTOR_CONFIG

    method: str = ""
    path: str = ""


class FieldDescriptor(BaseModel):
    model_config = _DESCRIPTOR_CONFIG

    name: str
    description: str = ""
    label: str = ""
    type: str = ""
    long_type: str = ""
    full_type: str = ""
    is_map: bool = Field(default=False, alias="ismap")
    is_oneof: bool = Field(default=False, alias="isoneof")
    oneof_decl: str = Field(default="", alias="oneofdecl")
    default_value: str = ""


class MessageDescriptor(BaseModel):
    model_config = _DESCRIPTOR_CONFIG

    name: str
    long_name: str = ""
    full_name: str = ""
    description: str = ""
    fields: list[FieldDescriptor] = Field(default_factory=list)


class EnumValueDescriptor(BaseModel):
    model_config = _DESCRIPTOR_CONFIG

    name: str
    number: int = 0
    description: str = ""


class EnumDescriptor(BaseModel):
    model_config = _DESCRIPTOR_CONFIG

    name: str
    long_name: str = ""
    full_name: str = ""
    description: str = ""
    values: list[EnumValueDescriptor] = Field(default_factory=list)


class MethodDescriptor(BaseModel):
    model_config = _DESCRIPTOR_CONFIG

    name: str
    description: str = ""
    source: str = ""
    command_line: str = ""
    command_line_help: str = ""
    request_type: str = ""
    request_full_type: str = ""
    request_type_source: str = ""
    request_streaming: bool = False
    response_type: str = ""
    response_full_type: str = ""
    response_type_source: str = ""
    response_streaming: bool = False
    rest_mapping: RestMappingDescriptor | None = None
    options: dict[str, Any] = Field(default_factory=dict)

    def http_binding(self) -> RestMappingDescriptor | None:
        """Return the REST mapping, falling back to the ``google.api.http`` option.

        The option shape is ``{"rules": [{"method": "GET", "pattern": "/v1/x"}]}``
        or the raw annotation ``{"get": "/v1/x"}``. Only the first rule counts.
        """
        if self.rest_mapping is not None and self.rest_mapping.path:
            return self.rest_mapping
        http = self.options.get(HTTP_OPTION)
        if not isinstance(http, dict):
            return None
        rules = http.get("rules")
        if isinstance(rules, list) and rules:
            rule = rules[0]
            path = rule.get("pattern") or rule.get("path") or ""
            if path:
                return RestMappingDescriptor(method=str(rule.get("method", "")).upper(), path=path)
            return None
        for verb in _HTTP_VERBS:
            if http.get(verb):
                return RestMappingDescriptor(method=verb.upper(), path=http[verb])
        return None


class ServiceDescriptor(BaseModel):
    model_config = _DESCRIPTOR_CONFIG

    name: str
    long_name: str = ""
    full_name: str = ""
    description: str = ""
    methods: list[MethodDescriptor] = Field(default_factory=list)


class ProtoFileDescriptor(BaseModel):
    """One ``.proto`` file record."""

    model_config = _DESCRIPTOR_CONFIG

    name: str
    package: str
    description: str = ""
    messages: list[MessageDescriptor] = Field(default_factory=list)
    enums: list[EnumDescriptor] = Field(default_factory=list)
    services: list[ServiceDescriptor] = Field(default_factory=list)


class RestTypeOverride(BaseModel):
    """Replace one field's type in the REST rendering of a message."""

    model_config = _DESCRIPTOR_CONFIG

    message: str
    field: str
    type: str
    full_type: str = ""


class DaemonDescriptor(BaseModel):
    """Root of the descriptor document for one daemon."""

    model_config = _DESCRIPTOR_CONFIG

    files: list[ProtoFileDescriptor] = Field(default_factory=list)
    rest_types: list[RestTypeOverride] = Field(default_factory=list)
    repo_url: str = Field(default="", alias="repoURL")
    commit: str = ""
    proto_src_dir: str = ""
    experimental_packages: list[str] = Field(default_factory=list)
    grpc_port: int = 0
    rest_port: int = 0
    cli_cmd: str = ""
    daemon_cmd: str = ""
