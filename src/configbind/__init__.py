"""Loading configuration values into typed Python objects.

A `Config` store collects key/value items from feeders (in-memory maps, OS
variables, or any loader callable) and serves them by dotted key. Sub-trees
of the store are bound into dataclasses, lists and dicts by the binder,
which reads each field's source key from a tag namespace such as `json`.

Binding is best-effort: fields whose key is missing or whose value does not
fit are left alone, and every bind returns the number of leaves written.

Example usage:

```python
from dataclasses import dataclass
from configbind import Config, MapFeeder, Ref, field

@dataclass
class Address:
    city: str = field(default="", json="city")

@dataclass
class User:
    name: str = field(default="", json="name")
    year: int = field(default=0, json="year")
    address: Address | None = field(default=None, json="address")

config = Config(MapFeeder({"user": {"name": "Milad Rahimi", "year": 1993}}))
user = Ref(User)
config.assign_struct(user, "user")  # 2, user.value.address stays None
```

Attributes:
    NOT_FOUND: What the store's assign methods return for a missing key.
"""

from .binding import (
    NOT_FOUND,
    BindTrace,
    Outcome,
    Ref,
    assign_slice,
    assign_struct,
    field,
)
from .store import CallableFeeder, Config, Feeder, MapFeeder, OsFeeder

__all__ = [
    "NOT_FOUND",
    "BindTrace",
    "Outcome",
    "Ref",
    "assign_slice",
    "assign_struct",
    "field",
    "CallableFeeder",
    "Config",
    "Feeder",
    "MapFeeder",
    "OsFeeder",
]
