"""Writable locations the binder assigns into, and the indirection resolver."""

import dataclasses
from dataclasses import dataclass
from typing import Any, Protocol

from .kinds import Kind, kind_of, pointee, zero_value


class Slot(Protocol):
    """A typed, possibly writable location."""

    tp: Any

    @property
    def settable(self) -> bool: ...

    def get(self) -> Any: ...

    def set(self, value: Any) -> None: ...


class CellSlot:
    """A temporary location owned by the binder.

    Fresh allocations are built here and only moved into their parent once
    something has actually been bound into them.
    """

    settable = True

    def __init__(self, tp: Any, value: Any = dataclasses.MISSING):
        self.tp = tp
        self.value = zero_value(tp) if value is dataclasses.MISSING else value

    def get(self) -> Any:
        return self.value

    def set(self, value: Any) -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"CellSlot({self.tp!r}, {self.value!r})"


class AttrSlot:
    """A dataclass field of a live instance."""

    def __init__(self, obj: Any, name: str, tp: Any):
        self.obj = obj
        self.name = name
        self.tp = tp

    @property
    def settable(self) -> bool:
        params = getattr(type(self.obj), "__dataclass_params__", None)
        return params is None or not params.frozen

    def get(self) -> Any:
        return getattr(self.obj, self.name, None)

    def set(self, value: Any) -> None:
        setattr(self.obj, self.name, value)


class ViewSlot:
    """Another slot seen through a different static type.

    Used to bind through a non-empty optional into the value it holds.
    """

    def __init__(self, inner: Slot, tp: Any):
        self.inner = inner
        self.tp = tp

    @property
    def settable(self) -> bool:
        return self.inner.settable

    def get(self) -> Any:
        return self.inner.get()

    def set(self, value: Any) -> None:
        self.inner.set(value)


class Ref[T]:
    """A pointer cell the caller hands to the entry points.

    `Ref(User)` starts out empty; a successful bind stores a freshly built
    `User` in `value`, a failed one leaves it as None. A `Ref` may hold
    another `Ref`, which makes a pointer to a pointer.

    Example usage:

    ```python
    user = Ref(User)
    if assign_struct(user, {"name": "Milad Rahimi"}) > 0:
        print(user.value.name)
    ```
    """

    settable = True

    def __init__(self, tp: type[T] | Any, value: "T | Ref[T] | None" = None):
        self.tp = tp
        self.value = value

    def get(self) -> "T | Ref[T] | None":
        return self.value

    def set(self, value: "T | Ref[T] | None") -> None:
        self.value = value

    def __repr__(self) -> str:
        return f"Ref({self.tp!r}, {self.value!r})"


@dataclass
class Resolved:
    """Outcome of resolving a destination handle.

    Attributes:
        slot: The final location with indirections removed.
        outer: The `Ref` one level up, if the handle went through one.
        is_pointer: Whether `slot` holds a fresh allocation that must be
            committed into `outer` for the caller to see it.
    """

    slot: CellSlot
    outer: Ref | None
    is_pointer: bool

    def commit(self) -> None:
        if self.is_pointer and self.outer is not None:
            self.outer.set(self.slot.get())


def _target(ref: Ref) -> Any:
    return pointee(ref.tp) if kind_of(ref.tp) is Kind.POINTER else ref.tp


def resolve(handle: Any, *, of: Any = Any) -> Resolved | None:
    """Follow a destination handle down to a writable location.

    Non-empty `Ref` chains are followed. The walk stops at the first empty
    `Ref`, for which exactly one zero value of its type is allocated; the
    allocation is not visible to the caller until `Resolved.commit`.
    Dataclass instances and lists are bound in place.

    Args:
        handle: A `Ref`, a dataclass instance or a list.
        of: Element type to assume for a bare list handle.

    Returns:
        None if the handle is invalid or not writable.
    """
    outer: Ref | None = None
    while isinstance(handle, Ref) and handle.value is not None:
        outer, handle = handle, handle.value

    if isinstance(handle, Ref):
        return Resolved(CellSlot(_target(handle)), handle, True)

    if handle is None or isinstance(handle, type):
        return None
    if dataclasses.is_dataclass(handle):
        return Resolved(CellSlot(type(handle), handle), outer, False)
    if isinstance(handle, list):
        tp = list[of]
        if outer is not None and kind_of(_target(outer)) is Kind.SLICE:
            tp = _target(outer)
        return Resolved(CellSlot(tp, handle), outer, False)
    return None
