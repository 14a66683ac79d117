"""BaseService: shared foundation for protodocs services.

Every service receives a constructed :class:`Daemon` registry. Services
translate registry errors into failed :class:`ServiceResult` values so
callers never see a raw exception. Every result is stamped with the
daemon it ran against.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from protodocs.services.result import ErrorCode, ServiceError, ServiceResult

if TYPE_CHECKING:
    from protodocs.domain.errors import ResolutionError
    from protodocs.registry.daemon import Daemon

logger = logging.getLogger(__name__)


class BaseService:
    """Base for service-layer classes.

    Usage::

        class SchemaService(BaseService):
            def resolve(self, full_type: str) -> ServiceResult:
                msg = self._daemon.get_message(full_type)
                ...
                return self._ok("resolve", message_data(msg))
    """

    def __init__(self, daemon: Daemon) -> None:
        self._daemon = daemon

    @property
    def _meta(self) -> dict[str, Any]:
        return {"daemon": self._daemon.name}

    def _ok(
        self, op: str, data: dict[str, Any], *, warnings: list[str] | None = None
    ) -> ServiceResult:
        return ServiceResult(ok=True, op=op, data=data, warnings=warnings or [], meta=self._meta)

    def _listing(self, op: str, items: list[Any], **data: Any) -> ServiceResult:
        return ServiceResult.listing(op, items, meta=self._meta, **data)

    def _error(self, op: str, code: ErrorCode, message: str, **detail: object) -> ServiceResult:
        error = ServiceError(code=code, message=message, detail=dict(detail))
        return self._fail(op, error)

    def _resolution_error(self, op: str, exc: ResolutionError) -> ServiceResult:
        """Report a typed resolution failure under its matching error code."""
        return self._fail(op, ServiceError.from_resolution(exc))

    def _fail(self, op: str, error: ServiceError) -> ServiceResult:
        logger.debug(
            "%s failed: %s",
            op,
            error.message,
            extra={"op": op, "code": str(error.code), "daemon": self._daemon.name},
        )
        return ServiceResult.failure(op, error, meta=self._meta)
