import os
from typing import Any, Callable, Mapping, Protocol


class Feeder(Protocol):
    """Anything that can provide the items of a `Config`."""

    def feed(self) -> dict[str, Any]: ...


class MapFeeder:
    """Feeds from an in-memory mapping."""

    def __init__(self, items: Mapping[str, Any]):
        self.items = items

    def feed(self) -> dict[str, Any]:
        return dict(self.items)


class CallableFeeder:
    """Feeds from a loader callable, re-invoked on every feed.

    This is the seam for file formats: any function returning a dictionary
    works, e.g. `CallableFeeder(lambda: json.load(open("app.json")))`.
    """

    def __init__(self, loader: Callable[[], Mapping[str, Any]]):
        self.loader = loader

    def feed(self) -> dict[str, Any]:
        items = self.loader()
        if not isinstance(items, Mapping):
            raise TypeError(
                f"Loader {self.loader!r} returned {type(items).__name__}, expected a mapping"
            )
        return dict(items)


class OsFeeder:
    """Feeds from the named OS environment variables.

    Names are standardised into dotted keys, so `APP_NAME` becomes
    `app.name`. Unset or empty variables are left out unless `strict` is
    set, in which case they are fed as empty strings.
    """

    def __init__(self, variables: list[str], *, strict: bool = False):
        self.variables = variables
        self.strict = strict

    def feed(self) -> dict[str, Any]:
        items: dict[str, Any] = {}
        for name in self.variables:
            value = os.environ.get(name, "")
            if value or self.strict:
                items[standardize(name)] = value
        return items


def standardize(name: str) -> str:
    return name.lower().replace("_", ".")
