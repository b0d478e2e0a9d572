"""Shapes of binding destinations.

A destination is described by an ordinary type annotation. This module maps
annotations to a small set of kinds the binder dispatches on, builds the
per-class field descriptors, and produces zero values for fresh allocations.
"""

import asyncio
import dataclasses
import queue
import sys
import types
import typing
from collections.abc import Callable, Mapping, MutableMapping
from enum import Enum
from functools import cache
from typing import Any, NamedTuple

EMBEDDED = "configbind.embedded"


class Kind(Enum):
    POINTER = "pointer"
    STRUCT = "struct"
    SLICE = "slice"
    MAP = "map"
    ARRAY = "array"
    INTERFACE = "interface"
    FUNC = "func"
    CHAN = "chan"
    SCALAR = "scalar"


_CHANNELS = (queue.Queue, queue.SimpleQueue, asyncio.Queue)
_MAPPINGS = (Mapping, MutableMapping)


def _base(tp: Any) -> Any:
    origin = typing.get_origin(tp)
    return tp if origin is None else origin


def _optional_arms(tp: Any) -> tuple[Any, ...] | None:
    if typing.get_origin(tp) not in (typing.Union, types.UnionType):
        return None
    return tuple(arm for arm in typing.get_args(tp) if arm is not type(None))


def kind_of(tp: Any) -> Kind:
    """Classify a destination annotation."""
    if tp is Any or tp is object:
        return Kind.INTERFACE
    arms = _optional_arms(tp)
    if arms is not None:
        if len(arms) == 1 and len(typing.get_args(tp)) == 2:
            return Kind.POINTER
        return Kind.INTERFACE
    base = _base(tp)
    if base is Callable or base is types.FunctionType:
        return Kind.FUNC
    if not isinstance(base, type):
        # TypeVars, Literals and other special forms carry no concrete type
        return Kind.INTERFACE
    if issubclass(base, _CHANNELS):
        return Kind.CHAN
    if dataclasses.is_dataclass(base):
        return Kind.STRUCT
    if issubclass(base, list):
        return Kind.SLICE
    if issubclass(base, tuple):
        return Kind.ARRAY
    if issubclass(base, dict) or base in _MAPPINGS:
        return Kind.MAP
    return Kind.SCALAR


def pointee(tp: Any) -> Any:
    arms = _optional_arms(tp)
    assert arms is not None and len(arms) == 1, f"{tp} is not an optional type"
    return arms[0]


def element_type(tp: Any) -> Any:
    args = typing.get_args(tp)
    return args[0] if args else Any


def map_types(tp: Any) -> tuple[Any, Any]:
    args = typing.get_args(tp)
    if len(args) == 2:
        return args[0], args[1]
    return Any, Any


def struct_type(tp: Any) -> type:
    return _base(tp)


def is_mapping(value: Any) -> bool:
    """Whether a source value is a string-keyed mapping."""
    return isinstance(value, Mapping) and all(isinstance(k, str) for k in value)


def is_sequence(value: Any) -> bool:
    """Whether a source value is an ordered sequence.

    Strings and bytes are scalars here even though Python treats them as
    sequences.
    """
    return isinstance(value, (list, tuple))


class FieldInfo(NamedTuple):
    name: str
    tp: Any
    tags: Mapping[str, Any]
    embedded: bool

    @property
    def private(self) -> bool:
        return self.name.startswith("_")

    def key(self, namespace: str) -> str | None:
        """Resolve the source key for this field under a tag namespace.

        Only the first comma-separated segment of the tag counts. An empty
        segment falls back to the lower-cased field name and `-` returns
        None, meaning the field is never bound.
        """
        raw = self.tags.get(namespace, "")
        name = raw.split(",")[0] if isinstance(raw, str) else ""
        if not name:
            return self.name.lower()
        if name == "-":
            return None
        return name


def _field_types(cls: type) -> dict[str, Any]:
    try:
        return typing.get_type_hints(cls)
    except (NameError, AttributeError, TypeError):
        pass
    # Some annotation names a class the module cannot see. Resolve the
    # fields one by one; the unresolvable ones keep their annotation
    # string, which classifies as an interface and is never bound.
    module = sys.modules.get(cls.__module__)
    namespace = dict(vars(module)) if module is not None else {}
    types_ = {}
    for f in dataclasses.fields(cls):
        tp = f.type
        if isinstance(tp, str):
            try:
                tp = eval(tp, namespace)
            except (NameError, AttributeError, TypeError, SyntaxError):
                pass
        types_[f.name] = type(None) if tp is None else tp
    return types_


@cache
def describe(cls: type) -> tuple[FieldInfo, ...]:
    """Build the field descriptor of a dataclass, in declaration order."""
    hints = _field_types(cls)
    return tuple(
        FieldInfo(
            name=f.name,
            tp=hints.get(f.name, Any),
            tags=f.metadata,
            embedded=bool(f.metadata.get(EMBEDDED, False)),
        )
        for f in dataclasses.fields(cls)
    )


NO_ZERO = object()
"""Zero value of a dataclass whose constructor rejects zeros."""


def zero_value(tp: Any) -> Any:
    """Return a fresh zero value of a destination type.

    Types without a natural zero (enums, abstract classes) get None as a
    placeholder; the binder overwrites or discards it. Dataclasses that
    refuse to be built from zeros get `NO_ZERO`.
    """
    match kind_of(tp):
        case Kind.POINTER | Kind.INTERFACE | Kind.FUNC | Kind.CHAN:
            return None
        case Kind.SLICE:
            return []
        case Kind.MAP:
            return {}
        case Kind.ARRAY:
            return ()
        case Kind.STRUCT:
            return _zero_struct(struct_type(tp))
    try:
        return tp()
    except Exception:
        return None


def _zero_struct(cls: type) -> Any:
    types_ = {info.name: info.tp for info in describe(cls)}
    kwargs = {}
    for f in dataclasses.fields(cls):
        if not f.init:
            continue
        if f.default is dataclasses.MISSING and f.default_factory is dataclasses.MISSING:
            zero = zero_value(types_[f.name])
            if zero is NO_ZERO:
                return NO_ZERO
            kwargs[f.name] = zero
    try:
        return cls(**kwargs)
    except Exception:
        # __post_init__ validation and the like
        return NO_ZERO


def draft_struct(cls: type) -> Any:
    """An instance of `cls` with every field at its default or zero.

    The constructor is not run, so validation in `__post_init__` is
    deferred to `build_struct`.
    """
    types_ = {info.name: info.tp for info in describe(cls)}
    obj = object.__new__(cls)
    for f in dataclasses.fields(cls):
        if f.default is not dataclasses.MISSING:
            value = f.default
        elif f.default_factory is not dataclasses.MISSING:
            value = f.default_factory()
        else:
            value = zero_value(types_[f.name])
        object.__setattr__(obj, f.name, None if value is NO_ZERO else value)
    return obj


def build_struct(draft: Any) -> Any:
    """Run the constructor of a drafted instance on its current field values."""
    cls = type(draft)
    return cls(
        **{f.name: getattr(draft, f.name) for f in dataclasses.fields(cls) if f.init}
    )
