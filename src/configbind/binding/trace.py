from enum import Enum
from typing import Iterator


class Outcome(Enum):
    """Why a destination node was or was not written."""

    SKIPPED = "skipped"
    NOT_FOUND = "not_found"
    KIND_UNSUPPORTED = "kind_unsupported"
    TYPE_MISMATCH = "type_mismatch"
    ASSIGNED = "assigned"


class BindTrace:
    """Per-node outcomes of one bind call.

    Paths use dots for struct fields and map entries and brackets for
    list elements, e.g. `users[1].address.city`. Fields promoted from an
    embedded struct are recorded under the enclosing struct's path.
    """

    def __init__(self):
        self.records: list[tuple[str, Outcome]] = []

    def record(self, path: str, outcome: Outcome) -> None:
        self.records.append((path, outcome))

    def outcome(self, path: str) -> Outcome | None:
        """The last outcome recorded for `path`."""
        for recorded, outcome in reversed(self.records):
            if recorded == path:
                return outcome
        return None

    def paths(self, outcome: Outcome) -> list[str]:
        return [path for path, o in self.records if o is outcome]

    def __iter__(self) -> Iterator[tuple[str, Outcome]]:
        return iter(self.records)

    def __len__(self) -> int:
        return len(self.records)
