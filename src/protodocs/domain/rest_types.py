"""Field type substitutions for REST renderings.

The REST gateway serializes some fields differently from gRPC (for example
``bytes`` as base64 strings). Overrides never mutate the shared message;
:meth:`RestTypes.view` returns a separate, memoized copy.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from protodocs.domain.descriptor import RestTypeOverride
from protodocs.domain.schema import Field, Message


def apply_overrides(message: Message, overrides: dict[str, RestTypeOverride]) -> Message:
    """Return *message* with overridden field types. Idempotent."""
    if not overrides:
        return message
    fields: list[Field] = []
    changed = False
    for f in message.fields:
        override = overrides.get(f.name)
        if override is None:
            fields.append(f)
            continue
        full_type = override.full_type or override.type
        if f.type == override.type and f.full_type == full_type:
            fields.append(f)
            continue
        fields.append(replace(f, type=override.type, full_type=full_type, long_type=override.type))
        changed = True
    if not changed:
        return message
    return replace(message, fields=tuple(fields))


class RestTypes:
    """Override table keyed by message full type, then field name."""

    def __init__(self, overrides: Iterable[RestTypeOverride] = ()) -> None:
        self._overrides: dict[str, dict[str, RestTypeOverride]] = {}
        for o in overrides:
            self._overrides.setdefault(o.message, {})[o.field] = o
        self._views: dict[str, Message] = {}

    def __len__(self) -> int:
        """Number of overridden fields across all messages."""
        return sum(len(fields) for fields in self._overrides.values())

    def view(self, message: Message) -> Message:
        """Return the REST view of *message*, computing it at most once."""
        cached = self._views.get(message.full_name)
        if cached is not None:
            return cached
        rest_view = apply_overrides(message, self._overrides.get(message.full_name, {}))
        self._views[message.full_name] = rest_view
        return rest_view
