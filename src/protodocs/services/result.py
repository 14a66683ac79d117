"""Result envelope returned by every protodocs service operation.

Services never raise for an expected failure. A missing type, a bad kind
or an exceeded closure bound comes back as a failed :class:`ServiceResult`
whose :class:`ServiceError` carries an :class:`ErrorCode`.
"""

from __future__ import annotations

from enum import StrEnum
from typing import TYPE_CHECKING, Any

from pydantic import BaseModel, Field

if TYPE_CHECKING:
    from protodocs.domain.errors import ResolutionError
    from protodocs.domain.types import ErrorKind


class ErrorCode(StrEnum):
    """Stable machine-readable failure codes (the ``--json`` ``error.code``)."""

    NOT_FOUND = "NOT_FOUND"
    INVALID_KIND = "INVALID_KIND"
    UNKNOWN_NAMESPACE = "UNKNOWN_NAMESPACE"
    UNKNOWN_MESSAGE = "UNKNOWN_MESSAGE"
    UNKNOWN_ENUM = "UNKNOWN_ENUM"
    CLOSURE_DEPTH = "CLOSURE_DEPTH"

    @classmethod
    def for_kind(cls, kind: ErrorKind) -> ErrorCode:
        """The code a resolution failure of *kind* is reported under."""
        return cls(kind.value.upper())


class ServiceError(BaseModel):
    """Why an operation failed, plus the inputs needed to explain it."""

    model_config = {"frozen": True}

    code: ErrorCode
    message: str
    detail: dict[str, Any] = Field(default_factory=dict)

    @classmethod
    def from_resolution(cls, exc: ResolutionError) -> ServiceError:
        detail: dict[str, Any] = {
            "full_type": exc.full_type,
            "namespace": exc.namespace,
            "name": exc.name,
        }
        max_depth = getattr(exc, "max_depth", None)
        if max_depth is not None:
            detail["max_depth"] = max_depth
        return cls(code=ErrorCode.for_kind(exc.kind), message=str(exc), detail=detail)


class ServiceResult(BaseModel):
    """Outcome of one service operation.

    Attributes:
        ok: Whether the operation succeeded.
        op: Name of the operation (e.g. ``"resolve"``).
        data: Operation-specific payload on success. Listing operations
            put their rows under ``items`` with a matching ``count``.
        warnings: Non-fatal issues, such as an unresolvable method type.
        error: Structured error if ``ok`` is False.
        meta: The daemon the operation ran against, when known.
    """

    model_config = {"frozen": True}

    ok: bool
    op: str
    data: dict[str, Any] = Field(default_factory=dict)
    warnings: list[str] = Field(default_factory=list)
    error: ServiceError | None = None
    meta: dict[str, Any] | None = None

    @classmethod
    def listing(
        cls,
        op: str,
        items: list[Any],
        *,
        meta: dict[str, Any] | None = None,
        **data: Any,
    ) -> ServiceResult:
        """A successful listing: *items* with their ``count`` and extra *data* keys."""
        return cls(ok=True, op=op, data={**data, "count": len(items), "items": items}, meta=meta)

    @classmethod
    def failure(
        cls, op: str, error: ServiceError, *, meta: dict[str, Any] | None = None
    ) -> ServiceResult:
        return cls(ok=False, op=op, error=error, meta=meta)

    @property
    def items(self) -> list[Any]:
        """Rows of a listing result; empty for any other payload."""
        items = self.data.get("items")
        return items if isinstance(items, list) else []
