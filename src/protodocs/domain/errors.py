"""Typed errors raised by descriptor loading and type resolution.

Resolution errors subclass :class:`LookupError` so callers can treat a
missing type like any other failed lookup.
"""

from __future__ import annotations

from protodocs.domain.types import ErrorKind


class ResolutionError(LookupError):
    """A full-type string could not be resolved to an entity."""

    kind: ErrorKind

    def __init__(self, full_type: str, namespace: str, name: str, message: str) -> None:
        super().__init__(message)
        self.full_type = full_type
        self.namespace = namespace
        self.name = name


class UnknownNamespaceError(ResolutionError):
    kind = ErrorKind.UNKNOWN_NAMESPACE

    def __init__(self, full_type: str, namespace: str, name: str) -> None:
        super().__init__(
            full_type, namespace, name, f"Cannot find package {namespace} for {full_type}"
        )


class UnknownMessageError(ResolutionError):
    kind = ErrorKind.UNKNOWN_MESSAGE

    def __init__(self, full_type: str, namespace: str, name: str) -> None:
        super().__init__(
            full_type,
            namespace,
            name,
            f"Cannot find message {name} for {full_type} in the {namespace} package",
        )


class UnknownEnumError(ResolutionError):
    kind = ErrorKind.UNKNOWN_ENUM

    def __init__(self, full_type: str, namespace: str, name: str) -> None:
        super().__init__(
            full_type,
            namespace,
            name,
            f"Cannot find enum {name} for {full_type} in the {namespace} package",
        )


class ClosureDepthError(ResolutionError):
    """The closure walk went deeper than the configured bound."""

    kind = ErrorKind.CLOSURE_DEPTH

    def __init__(self, full_type: str, max_depth: int) -> None:
        namespace, _, name = full_type.partition(".")
        super().__init__(
            full_type,
            namespace,
            name,
            f"Type closure exceeded max depth {max_depth} at {full_type}",
        )
        self.max_depth = max_depth


ERRORS_BY_KIND: dict[ErrorKind, type[ResolutionError]] = {
    ErrorKind.UNKNOWN_NAMESPACE: UnknownNamespaceError,
    ErrorKind.UNKNOWN_MESSAGE: UnknownMessageError,
    ErrorKind.UNKNOWN_ENUM: UnknownEnumError,
}


class DuplicateDeclarationError(ValueError):
    """Two file records declared the same name in one package."""

    def __init__(self, package: str, kind: str, name: str, file_name: str) -> None:
        super().__init__(f"Duplicate {kind} {name} in package {package} (from {file_name})")
        self.package = package
        self.kind = kind
        self.name = name
        self.file_name = file_name


class DescriptorError(ValueError):
    """The input descriptor could not be read or failed validation."""
