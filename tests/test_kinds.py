"""Tests for destination kinds, descriptors, zero values and handle resolution."""

import asyncio
import queue
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Literal, Optional, Union

import pytest

from configbind import Ref, field
from configbind.binding import NO_ZERO, Kind, describe, kind_of, resolve, zero_value


class Mode(Enum):
    FAST = "fast"


@dataclass
class Inner:
    value: int = field(default=0, json="value")


@dataclass
class Outer:
    name: str
    inner: Inner
    tags: list[str]
    maybe: Inner | None
    count: int = field(default=7, json="total")
    base: Inner = field(default_factory=Inner, embedded=True)


@dataclass
class Positive:
    value: int

    def __post_init__(self):
        if self.value <= 0:
            raise ValueError("value must be positive")


@dataclass
class Wrapper:
    inner: Positive


class TestKindOf:
    """Classifying annotations into destination kinds."""

    @pytest.mark.parametrize(
        "tp, kind",
        [
            (int, Kind.SCALAR),
            (str, Kind.SCALAR),
            (bytes, Kind.SCALAR),
            (Mode, Kind.SCALAR),
            (Inner, Kind.STRUCT),
            (Inner | None, Kind.POINTER),
            (Optional[int], Kind.POINTER),
            (list[int], Kind.SLICE),
            (List[Inner], Kind.SLICE),
            (list, Kind.SLICE),
            (dict[str, int], Kind.MAP),
            (Dict[str, Any], Kind.MAP),
            (Mapping[str, int], Kind.MAP),
            (tuple[int, int], Kind.ARRAY),
            (tuple, Kind.ARRAY),
            (Any, Kind.INTERFACE),
            (object, Kind.INTERFACE),
            (int | str, Kind.INTERFACE),
            (Union[int, str, None], Kind.INTERFACE),
            (Literal["a"], Kind.INTERFACE),
            (Callable[[int], int], Kind.FUNC),
            (queue.Queue, Kind.CHAN),
            (asyncio.Queue, Kind.CHAN),
        ],
    )
    def test_kinds(self, tp, kind):
        """Test that each annotation maps to its kind."""
        assert kind_of(tp) is kind


class TestDescribe:
    """Per-class field descriptors."""

    def test_declaration_order_and_keys(self):
        """Test that fields keep declaration order and resolve their keys."""
        fields = describe(Outer)

        assert [f.name for f in fields] == ["name", "inner", "tags", "maybe", "count", "base"]
        assert [f.key("json") for f in fields] == [
            "name",
            "inner",
            "tags",
            "maybe",
            "total",
            "base",
        ]
        assert [f.embedded for f in fields] == [False] * 5 + [True]

    def test_descriptor_is_cached(self):
        """Test that descriptors are built once per class."""
        assert describe(Outer) is describe(Outer)


class TestZeroValue:
    """Zero values for fresh allocations."""

    def test_scalars(self):
        """Test scalar and optional zero values."""
        assert zero_value(int) == 0
        assert zero_value(str) == ""
        assert zero_value(bool) is False
        assert zero_value(Mode) is None
        assert zero_value(Inner | None) is None

    def test_containers(self):
        """Test that containers start out empty."""
        assert zero_value(list[int]) == []
        assert zero_value(dict[str, int]) == {}
        assert zero_value(tuple[int, int]) == ()

    def test_struct_without_defaults(self):
        """Test that required fields of a dataclass are filled with zeros."""
        assert zero_value(Outer) == Outer(
            name="", inner=Inner(), tags=[], maybe=None, count=7, base=Inner()
        )

    def test_struct_rejecting_zeros(self):
        """Test that dataclasses refusing zeros get the NO_ZERO marker."""
        assert zero_value(Positive) is NO_ZERO
        assert zero_value(Wrapper) is NO_ZERO
        assert zero_value(Wrapper | None) is None


class TestResolve:
    """Following destination handles to a writable location."""

    def test_invalid_handles(self):
        """Test that None, classes and scalars are not destinations."""
        assert resolve(None) is None
        assert resolve(Inner) is None
        assert resolve("text") is None

    def test_instance_is_bound_in_place(self):
        """Test that a dataclass instance resolves to itself."""
        inner = Inner()
        resolved = resolve(inner)

        assert resolved is not None
        assert resolved.slot.get() is inner
        assert resolved.is_pointer is False

    def test_empty_ref_allocates_without_committing(self):
        """Test that an empty Ref is filled only on commit."""
        ref = Ref(Inner)
        resolved = resolve(ref)

        assert resolved is not None
        assert resolved.slot.get() == Inner()
        assert resolved.is_pointer is True
        assert ref.value is None

        resolved.commit()
        assert ref.value is resolved.slot.get()

    def test_ref_chain_stops_at_first_empty_ref(self):
        """Test that resolution stops at the first empty Ref."""
        inner = Ref(Inner)
        resolved = resolve(Ref(Inner, inner))

        assert resolved is not None
        assert resolved.outer is inner

    def test_full_ref_chain_reaches_value(self):
        """Test that a full Ref chain resolves to the held value."""
        value = Inner(value=3)
        resolved = resolve(Ref(Inner, Ref(Inner, value)))

        assert resolved is not None
        assert resolved.slot.get() is value
        assert resolved.is_pointer is False

    def test_list_element_type(self):
        """Test that list handles take their element type from `of` or the Ref."""
        assert resolve([], of=int).slot.tp == list[int]
        assert resolve(Ref(list[str], [])).slot.tp == list[str]
