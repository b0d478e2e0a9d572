import dataclasses
from typing import Any, Callable

from .kinds import EMBEDDED


def field(
    *,
    embedded: bool = False,
    default: Any = dataclasses.MISSING,
    default_factory: Callable[[], Any] | Any = dataclasses.MISSING,
    init: bool = True,
    repr: bool = True,
    hash: bool | None = None,
    compare: bool = True,
    metadata: dict[str, Any] | None = None,
    kw_only: bool | Any = dataclasses.MISSING,
    **tags: str,
) -> Any:
    """A `dataclasses.field` carrying binding tags.

    Each keyword in `tags` names a tag namespace and its value follows the
    usual tag syntax: the first comma-separated segment is the source key,
    an empty segment means the lower-cased field name, and `-` excludes the
    field from binding.

    Example usage:

    ```python
    @dataclass
    class Server:
        host: str = field(json="host", yaml="hostname")
        secret: str = field(default="", json="-")
        base: Base = field(default_factory=Base, embedded=True)
    ```

    Args:
        embedded: Bind the field from the enclosing mapping when it has no
            key of its own, promoting its fields to the enclosing struct.
        metadata: Extra metadata merged with the tags.
    """
    meta = dict(metadata or {})
    meta.update(tags)
    if embedded:
        meta[EMBEDDED] = True
    return dataclasses.field(
        default=default,
        default_factory=default_factory,
        init=init,
        repr=repr,
        hash=hash,
        compare=compare,
        metadata=meta,
        kw_only=kw_only,
    )
