"""Tagged result of a single-hop type resolution.

A lookup never raises. Callers either unwrap it (strict mode, raising the
typed error) or branch on ``ok`` (soft mode, used by closure walks to test
whether a reference is a message or an enum).
"""

from __future__ import annotations

from dataclasses import dataclass

from protodocs.domain.errors import ERRORS_BY_KIND, ResolutionError
from protodocs.domain.schema import split_full_type
from protodocs.domain.types import ErrorKind


@dataclass(frozen=True)
class Lookup[T]:
    full_type: str
    value: T | None = None
    error: ErrorKind | None = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.value is not None

    @property
    def namespace(self) -> str:
        return split_full_type(self.full_type)[0]

    @property
    def name(self) -> str:
        return split_full_type(self.full_type)[1]

    def exception(self) -> ResolutionError | None:
        """Build the typed error for a failed lookup, or None on success."""
        if self.error is None:
            return None
        return ERRORS_BY_KIND[self.error](self.full_type, self.namespace, self.name)

    def unwrap(self) -> T:
        """Return the entity or raise the typed resolution error."""
        exc = self.exception()
        if exc is not None:
            raise exc
        assert self.value is not None
        return self.value

    def get(self) -> T | None:
        """Return the entity, or None when resolution failed."""
        return self.value if self.error is None else None
