from collections.abc import Mapping
from typing import Any


def split_key(key: str) -> list[str]:
    """Split a dotted key, ignoring empty segments (`a..b` is `a.b`)."""
    return [segment for segment in key.split(".") if segment]


def lookup(collection: Any, key: str) -> tuple[Any, bool]:
    """Search a nested collection for a dotted key.

    Mapping levels are indexed by the segment itself and list levels by the
    segment read as a non-negative integer.

    Returns:
        The value and True, or None and False if any segment is missing.
    """
    segments = split_key(key)
    if not segments:
        return None, False

    current = collection
    for segment in segments:
        current, found = find(current, segment)
        if not found:
            return None, False
    return current, True


def find(collection: Any, key: str) -> tuple[Any, bool]:
    if isinstance(collection, Mapping):
        if key in collection:
            return collection[key], True
    elif isinstance(collection, (list, tuple)):
        if key.isascii() and key.isdigit() and int(key) < len(collection):
            return collection[int(key)], True
    return None, False
