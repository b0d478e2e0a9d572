from threading import RLock
from typing import Any

from ..binding import NOT_FOUND, BindTrace, assign_slice, assign_struct
from ..log import get_logger
from .feeder import Feeder
from .lookup import lookup

logger = get_logger(__name__)


class _Unset:
    __instance = None

    def __new__(cls) -> "_Unset":
        if cls.__instance is None:
            cls.__instance = super().__new__(cls)
        return cls.__instance

    def __repr__(self) -> str:
        return "Unset"


Unset = _Unset()


class Config:
    """A key/value configuration store.

    Items come from feeders and from `set`. Keys are looked up verbatim
    first; a key containing dots is then searched through nested mappings
    and lists, so `database.hosts.0` reaches into
    `{"database": {"hosts": ["a", "b"]}}`.

    Example usage:

    ```python
    config = Config(MapFeeder({"app": {"name": "demo", "port": 8080}}))
    config.get_str("app.name")  # "demo"

    server = Ref(Server)
    config.assign_struct(server, "app")  # 2
    ```

    Args:
        feeders: Feeders applied in order, later ones overriding earlier keys.
        tag: The default tag namespace for `assign_struct` and `assign_slice`.
    """

    def __init__(self, *feeders: Feeder, tag: str = "json"):
        if not tag:
            raise ValueError("The tag namespace must not be empty")
        self.tag = tag
        self._items: dict[str, Any] = {}
        self._feeders: list[Feeder] = []
        self._lock = RLock()
        for feeder in feeders:
            self.feed(feeder)

    def feed(self, feeder: Feeder):
        """Feed the store and remember the feeder for `reload`."""
        self._apply(feeder)
        with self._lock:
            self._feeders.append(feeder)
        logger.info("feed", type(feeder).__name__)

    def _apply(self, feeder: Feeder):
        items = feeder.feed()
        for key, value in items.items():
            self.set(key, value)

    def reload(self):
        """Feed again from every feeder added so far, in order.

        The first feeder error is raised and the remaining feeders are not
        applied.
        """
        with self._lock:
            feeders = list(self._feeders)
        for feeder in feeders:
            self._apply(feeder)
        logger.info("reload", f"{len(feeders)} feeder(s)")

    def set(self, key: str, value: Any):
        """Store a value in memory. Feeders' sources are never written."""
        with self._lock:
            self._items[key] = value

    def lookup(self, key: str) -> tuple[Any, bool]:
        with self._lock:
            if key in self._items:
                return self._items[key], True
            if "." not in key:
                return None, False
            return lookup(self._items, key)

    def get(self, key: str, default: Any = Unset) -> Any:
        """Return the value of a key.

        Raises:
            KeyError: If there is no value for the key and no default.
        """
        value, found = self.lookup(key)
        if found:
            return value
        if default is not Unset:
            return default
        raise KeyError(f"Value not found for the key {key}")

    def __getitem__(self, key: str) -> Any:
        return self.get(key)

    def __contains__(self, key: str) -> bool:
        return self.lookup(key)[1]

    def get_all(self) -> dict[str, Any]:
        with self._lock:
            return dict(self._items)

    def get_str(self, key: str) -> str:
        value = self.get(key)
        if isinstance(value, str):
            return value
        raise TypeError(f"Value for {key} is not str")

    def get_int(self, key: str) -> int:
        value = self.get(key)
        if isinstance(value, int) and not isinstance(value, bool):
            return value
        raise TypeError(f"Value for {key} is not int")

    def get_float(self, key: str) -> float:
        value = self.get(key)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return float(value)
        raise TypeError(f"Value for {key} is not float")

    def get_bool(self, key: str) -> bool:
        """Return a boolean, reading the strings "true" and "false" as well."""
        value = self.get(key)
        if isinstance(value, bool):
            return value
        if value == "true":
            return True
        if value == "false":
            return False
        raise TypeError(f"Value for {key} is not bool")

    def get_strict_bool(self, key: str) -> bool:
        value = self.get(key)
        if isinstance(value, bool):
            return value
        raise TypeError(f"Value for {key} is not bool")

    def assign_struct(
        self,
        dest: Any,
        key: str,
        tag: str | None = None,
        *,
        trace: BindTrace | None = None,
    ) -> int:
        """Assign struct fields from the value stored under `key`.

        Returns:
            The count of leaves assigned, or NOT_FOUND (-1) if the key has
            no value.
        """
        with self._lock:
            data, found = self.lookup(key)
            if not found:
                return NOT_FOUND
            return assign_struct(dest, data, tag or self.tag, trace=trace)

    def assign_slice(
        self,
        dest: Any,
        key: str,
        tag: str | None = None,
        *,
        of: Any = Any,
        trace: BindTrace | None = None,
    ) -> int:
        """Append slice elements from the sequence stored under `key`.

        Returns:
            The count of elements appended, or NOT_FOUND (-1) if the key has
            no value.
        """
        with self._lock:
            data, found = self.lookup(key)
            if not found:
                return NOT_FOUND
            return assign_slice(dest, data, tag or self.tag, of=of, trace=trace)
