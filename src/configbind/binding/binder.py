"""The recursive value binder.

A `Binder` walks a loosely typed source tree (scalars, lists and string-keyed
mappings, as any decoder produces them) alongside the static type of a
destination and writes whatever fits. Every bind returns the number of
leaves written; a mismatch anywhere only costs that node its contribution,
siblings carry on. Nothing here raises on bad data.

Dispatch on the destination kind:

- optional (`T | None`): bind through an existing value, or build a fresh
  `T` in a temporary slot and store it only if something was bound;
- dataclass: bind each field from the mapping entry named by its tag;
- list: bind each source element into a fresh element, append the ones
  that bound;
- `dict[str, V]`: bind each source entry into a fresh `V`, merge the ones
  that bound;
- tuples, `Any`, callables and queues: never bound;
- anything else: scalar assignment through `coerce`.
"""

from typing import Any

from ..log import LogLevel, get_logger
from .coerce import coerce
from .kinds import (
    NO_ZERO,
    FieldInfo,
    Kind,
    build_struct,
    describe,
    draft_struct,
    element_type,
    is_mapping,
    is_sequence,
    kind_of,
    map_types,
    pointee,
    struct_type,
)
from .slots import AttrSlot, CellSlot, Slot, ViewSlot
from .trace import BindTrace, Outcome

logger = get_logger(__name__)

_UNSUPPORTED = (Kind.CHAN, Kind.FUNC, Kind.INTERFACE, Kind.ARRAY)


def _join(path: str, name: str) -> str:
    return f"{path}.{name}" if path else name


class Binder:
    """Binds dynamic values into typed slots for one tag namespace.

    A binder holds no state beyond its tag and optional trace, so a fresh
    one is cheap and one per top-level call is the norm.
    """

    def __init__(self, tag: str, *, trace: BindTrace | None = None):
        self.tag = tag
        self.trace = trace

    def bind(self, slot: Slot, value: Any, path: str = "") -> int:
        if value is None:
            self._note(path, Outcome.NOT_FOUND)
            return 0
        if not slot.settable:
            self._note(path, Outcome.SKIPPED)
            return 0

        kind = kind_of(slot.tp)
        if kind in _UNSUPPORTED:
            self._note(path, Outcome.KIND_UNSUPPORTED)
            return 0

        match kind:
            case Kind.POINTER:
                return self.bind_pointer(slot, value, path)
            case Kind.SLICE:
                return self.bind_slice(slot, value, path)
            case Kind.MAP:
                return self.bind_map(slot, value, path)
            case Kind.STRUCT:
                return self.bind_struct(slot, value, path)

        count = coerce(slot, value)
        self._note(path, Outcome.ASSIGNED if count else Outcome.TYPE_MISMATCH)
        return count

    def bind_pointer(self, slot: Slot, value: Any, path: str = "") -> int:
        target = pointee(slot.tp)
        if slot.get() is not None:
            return self.bind(ViewSlot(slot, target), value, path)
        return self.bind_fresh(slot, target, value, path)

    def bind_fresh(self, slot: Slot, tp: Any, value: Any, path: str = "") -> int:
        """Bind into a new `tp` and move it into `slot` only on success."""
        cell = CellSlot(tp)
        if cell.get() is NO_ZERO:
            return self.bind_draft(slot, struct_type(tp), value, path)
        count = self.bind(cell, value, path)
        if count > 0:
            slot.set(cell.get())
        return count

    def bind_draft(self, slot: Slot, cls: type, value: Any, path: str = "") -> int:
        """Bind into a dataclass that cannot be built from zeros.

        Fields are bound into a draft first and the constructor runs once on
        the bound values. If it still rejects them the node counts as a
        mismatch and `slot` is left alone.
        """
        draft = draft_struct(cls)
        count = self.bind(CellSlot(cls, draft), value, path)
        if count == 0:
            return 0
        try:
            built = build_struct(draft)
        except Exception as e:
            if logger.enabled_for(LogLevel.DEBUG):
                logger.debug("construct", f"{cls.__name__}: {e}")
            self._note(path, Outcome.TYPE_MISMATCH)
            return 0
        slot.set(built)
        return count

    def bind_struct(self, slot: Slot, value: Any, path: str = "") -> int:
        if not is_mapping(value):
            self._note(path, Outcome.TYPE_MISMATCH)
            return 0
        cls = struct_type(slot.tp)
        obj = slot.get()
        if not isinstance(obj, cls):
            return self.bind_fresh(slot, slot.tp, value, path)

        count = 0
        for info in describe(cls):
            count += self._bind_field(obj, info, value, path)
        return count

    def _bind_field(self, obj: Any, info: FieldInfo, data: Any, path: str) -> int:
        field_path = _join(path, info.name)
        if info.private:
            self._note(field_path, Outcome.SKIPPED)
            return 0
        key = info.key(self.tag)
        if key is None:
            self._note(field_path, Outcome.SKIPPED)
            return 0

        slot = AttrSlot(obj, info.name, info.tp)
        if key in data:
            return self.bind(slot, data[key], field_path)
        if info.embedded:
            # Promotion: the embedded fields share the enclosing namespace
            return self.bind(slot, data, path)
        self._note(field_path, Outcome.NOT_FOUND)
        return 0

    def bind_slice(self, slot: Slot, value: Any, path: str = "") -> int:
        if not is_sequence(value):
            self._note(path, Outcome.TYPE_MISMATCH)
            return 0
        if not value:
            return 0

        tp = element_type(slot.tp)
        appended = []
        for i, item in enumerate(value):
            cell = CellSlot(tp)
            if self.bind(cell, item, f"{path}[{i}]") > 0:
                appended.append(cell.get())

        if appended:
            current = slot.get()
            if isinstance(current, list):
                current.extend(appended)
                slot.set(current)
            else:
                slot.set(appended)
        return len(appended)

    def bind_map(self, slot: Slot, value: Any, path: str = "") -> int:
        key_tp, value_tp = map_types(slot.tp)
        if key_tp is not str and key_tp is not Any:
            self._note(path, Outcome.KIND_UNSUPPORTED)
            return 0
        if not is_mapping(value):
            self._note(path, Outcome.TYPE_MISMATCH)
            return 0

        merged = {}
        for key, item in value.items():
            cell = CellSlot(value_tp)
            if self.bind(cell, item, _join(path, key)) > 0:
                merged[key] = cell.get()

        if merged:
            current = slot.get()
            if isinstance(current, dict):
                current.update(merged)
                slot.set(current)
            else:
                slot.set(merged)
        return len(merged)

    def _note(self, path: str, outcome: Outcome) -> None:
        if self.trace is not None:
            self.trace.record(path, outcome)
        if outcome is not Outcome.ASSIGNED and logger.enabled_for(LogLevel.DEBUG):
            logger.debug("bind", f"{path or '<root>'} {outcome.value}")
