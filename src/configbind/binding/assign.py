from typing import Any

from .binder import Binder
from .kinds import Kind, kind_of
from .trace import BindTrace
from .slots import resolve

NOT_FOUND = -1
"""Returned by the store when no source value exists for a key. The binder
itself only ever returns zero or a positive count."""


def assign_struct(
    dest: Any, data: Any, tag: str = "json", *, trace: BindTrace | None = None
) -> int:
    """Assign struct fields' values by their tags.

    Args:
        dest: A dataclass instance (bound in place) or a `Ref` to a dataclass
            type (filled with a new instance on success).
        data: The mapping that holds the fields' tag/value pairs.
        tag: The tag namespace used to look up each field's key.
        trace: Collects per-field outcomes if given.

    Returns:
        The count of leaves that have been assigned.
    """
    return _assign(dest, data, tag, Kind.STRUCT, Any, trace)


def assign_slice(
    dest: Any,
    data: Any,
    tag: str = "json",
    *,
    of: Any = Any,
    trace: BindTrace | None = None,
) -> int:
    """Append slice elements.

    Source elements that bind nothing are dropped, so the destination may
    grow by fewer elements than the source holds.

    Args:
        dest: A list (appended to in place) or a `Ref` to a `list[T]` type.
        data: The sequence that holds the elements' values.
        tag: If the element type is a dataclass, the tag namespace used to
            look up its fields.
        of: The element type of a plain list destination.
        trace: Collects per-element outcomes if given.

    Returns:
        The count of elements that have been appended.
    """
    return _assign(dest, data, tag, Kind.SLICE, of, trace)


def _assign(
    dest: Any, data: Any, tag: str, expect: Kind, of: Any, trace: BindTrace | None
) -> int:
    resolved = resolve(dest, of=of)
    if resolved is None or kind_of(resolved.slot.tp) is not expect:
        return 0

    count = Binder(tag, trace=trace).bind(resolved.slot, data)

    if count > 0:
        resolved.commit()

    return count
