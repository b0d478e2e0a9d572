"""Binding loosely typed configuration values into typed objects.

Destinations are dataclasses, lists and dicts described by their type
annotations. Field keys come from per-namespace tags:

```python
from dataclasses import dataclass
from configbind.binding import Ref, assign_struct, field

@dataclass
class User:
    name: str = field(json="name")
    year: int = field(default=0, json="year")

user = Ref(User)
assign_struct(user, {"name": "Milad Rahimi", "year": 1993}, "json")  # 2
```
"""

from .assign import NOT_FOUND, assign_slice, assign_struct
from .binder import Binder
from .fields import field
from .kinds import NO_ZERO, Kind, describe, kind_of, zero_value
from .slots import CellSlot, Ref, resolve
from .trace import BindTrace, Outcome

__all__ = [
    "NOT_FOUND",
    "assign_slice",
    "assign_struct",
    "Binder",
    "field",
    "Kind",
    "describe",
    "kind_of",
    "zero_value",
    "NO_ZERO",
    "CellSlot",
    "Ref",
    "resolve",
    "BindTrace",
    "Outcome",
]
