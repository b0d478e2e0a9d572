"""Logging for configbind.

Every module logs through a child of the `configbind` logger. Nothing is
printed unless an output is attached:

```python
from configbind.log import Logger, LogOutput, LogLevel

Logger("configbind", outputs=(LogOutput.stderr(level=LogLevel.DEBUG),))
```

Setting the `CONFIGBIND_DEBUG` environment variable to `1`, `true`, `yes` or
`on` attaches a rich console output at debug level when the package is
imported.
"""

import os

from .logger import Logger, LogLevel, LogOutput, LogOutputKind

ROOT = "configbind"


def get_logger(name: str) -> Logger:
    """Return the library logger for a dotted module path."""
    return Logger(name if name.startswith(ROOT) else f"{ROOT}.{name}")


def debug_enabled() -> bool:
    return os.environ.get("CONFIGBIND_DEBUG", "0").lower() in [
        "1",
        "true",
        "yes",
        "on",
    ]


if debug_enabled():
    Logger(ROOT, outputs=(LogOutput.rich("debug", level=LogLevel.DEBUG),))

__all__ = ["Logger", "LogLevel", "LogOutput", "LogOutputKind", "get_logger", "debug_enabled"]
