"""Classification enums shared across the registry and service layers."""

from __future__ import annotations

from enum import StrEnum


class EntityKind(StrEnum):
    """Kinds of named types a full-type string can resolve to."""

    MESSAGE = "message"
    ENUM = "enum"


class ErrorKind(StrEnum):
    """Failure kinds produced by type resolution."""

    UNKNOWN_NAMESPACE = "unknown_namespace"
    UNKNOWN_MESSAGE = "unknown_message"
    UNKNOWN_ENUM = "unknown_enum"
    CLOSURE_DEPTH = "closure_depth"


class DuplicatePolicy(StrEnum):
    """What happens when two files declare the same name in one package."""

    REPLACE = "replace"
    REJECT = "reject"


class StreamingDirection(StrEnum):
    """Streaming shape of an RPC method."""

    NONE = ""
    CLIENT = "client"
    SERVER = "server"
    BIDIRECTIONAL = "bidirectional"
