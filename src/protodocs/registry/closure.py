"""Transitive closure walks over field type references.

Both walks check the accumulator before descending, so cyclic schemas
(A embeds B, B embeds A) terminate. For acyclic schemas the accumulator
ends up with the same keys, in the same order, as a naive depth-first walk.

The walks keep an explicit stack of reference iterators rather than
recursing, so a long reference chain is limited only by ``max_depth``
and never by the interpreter's recursion limit.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator

from protodocs.domain.errors import ClosureDepthError
from protodocs.domain.schema import Message, ProtoEnum

type MessageResolver = Callable[[str], Message | None]
type EnumResolver = Callable[[str], ProtoEnum | None]


def collect_messages(
    message: Message,
    resolve_message: MessageResolver,
    all_messages: dict[str, Message],
    *,
    max_depth: int,
) -> dict[str, Message]:
    """Add every message reachable from *message* to *all_messages*.

    The root is only added when one of its descendants refers back to it.

    Raises:
        ClosureDepthError: A reference chain is longer than *max_depth*.
    """
    # Each frame is (remaining references of a message, that message's depth).
    stack: list[tuple[Iterator[str], int]] = [(iter(message.reference_types), 0)]
    while stack:
        references, depth = stack[-1]
        for full_type in references:
            if full_type in all_messages:
                continue
            nested = resolve_message(full_type)
            if nested is None:
                continue
            if depth >= max_depth:
                raise ClosureDepthError(full_type, max_depth)
            all_messages[full_type] = nested
            stack.append((iter(nested.reference_types), depth + 1))
            break
        else:
            stack.pop()
    return all_messages


def collect_enums(
    message: Message,
    resolve_enum: EnumResolver,
    resolve_message: MessageResolver,
    all_enums: dict[str, ProtoEnum],
    *,
    max_depth: int,
) -> dict[str, ProtoEnum]:
    """Add every enum reachable from *message* to *all_enums*.

    References that are not enums are retried as messages and walked for
    further enums. Enums have no fields, so they are always leaves.

    Raises:
        ClosureDepthError: A reference chain is longer than *max_depth*.
    """
    visited: set[str] = {message.full_name}
    stack: list[tuple[Iterator[str], int]] = [(iter(message.reference_types), 0)]
    while stack:
        references, depth = stack[-1]
        for full_type in references:
            if full_type in all_enums:
                continue
            enum = resolve_enum(full_type)
            if enum is not None:
                all_enums[full_type] = enum
                continue
            if full_type in visited:
                continue
            nested = resolve_message(full_type)
            if nested is None:
                continue
            if depth >= max_depth:
                raise ClosureDepthError(full_type, max_depth)
            visited.add(full_type)
            stack.append((iter(nested.reference_types), depth + 1))
            break
        else:
            stack.pop()
    return all_enums
