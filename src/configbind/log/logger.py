import json
import logging
import sys
from datetime import datetime
from enum import Enum
from typing import Literal, TextIO, override

from rich.console import Console
from rich.logging import RichHandler


class LogLevel(Enum):
    DEBUG = logging.DEBUG
    INFO = logging.INFO
    WARNING = logging.WARNING
    ERROR = logging.ERROR
    CRITICAL = logging.CRITICAL


class LogOutputKind(Enum):
    CONSOLE = "stream"
    FILE = "file"
    RICH = "rich"


class _HeaderFormatter(logging.Formatter):
    """Renders `header: message` records as plain text or JSON lines."""

    def __init__(self, format: Literal["plain", "jsonl"], auto_timestamp: bool):
        super().__init__()
        self.__format = format
        self.__auto_timestamp = auto_timestamp

    @override
    def format(self, record: logging.LogRecord) -> str:
        header = getattr(record, "header", record.name)
        payload = getattr(record, "payload", record.getMessage())
        timestamp = datetime.fromtimestamp(record.created).isoformat()
        match self.__format:
            case "plain":
                if self.__auto_timestamp:
                    return f"[{record.name}:{record.levelname}] {header}@{timestamp}: {payload}"
                return f"[{record.name}:{record.levelname}] {header}: {payload}"
            case "jsonl":
                entry = {"header": header, "message": payload}
                if self.__auto_timestamp:
                    entry = {"timestamp": timestamp, **entry}
                return json.dumps(entry, default=str)
            case _:
                raise ValueError(f"Invalid format: {self.__format}")


class LogOutput:
    def __init__(
        self,
        id: str | None = None,
        *,
        kind: LogOutputKind,
        file: str | None = None,
        stream: TextIO | None = None,
        level: LogLevel = LogLevel.INFO,
        format: Literal["plain", "jsonl"] = "plain",
        auto_timestamp: bool = True,
    ):
        self.__id = id
        self.__kind = kind
        if format not in ("plain", "jsonl"):
            raise ValueError(f"Invalid format: {format}")
        self.__format: Literal["plain", "jsonl"] = format
        self.__auto_timestamp: bool = auto_timestamp
        assert file is None or stream is None, "Cannot specify both file and stream"
        assert (
            (kind == LogOutputKind.FILE and file is not None)
            or (kind == LogOutputKind.CONSOLE and stream is not None)
            or kind == LogOutputKind.RICH
        ), "File or stream must be specified"
        self.__level = level
        self.__handler: logging.Handler
        match kind:
            case LogOutputKind.FILE:
                assert file is not None
                self.__handler = logging.FileHandler(file)
            case LogOutputKind.CONSOLE:
                self.__handler = logging.StreamHandler(stream)
            case LogOutputKind.RICH:
                console = Console(file=stream) if stream is not None else Console(stderr=True)
                self.__handler = RichHandler(console=console, show_path=False)
        self.__handler.setLevel(level.value)
        self.__handler.setFormatter(_HeaderFormatter(format, auto_timestamp))

    @property
    def level(self) -> LogLevel:
        return self.__level

    @property
    def id(self) -> str | None:
        return self.__id

    @property
    def kind(self) -> LogOutputKind:
        return self.__kind

    @property
    def format(self) -> Literal["plain", "jsonl"]:
        return self.__format

    @property
    def auto_timestamp(self) -> bool:
        return self.__auto_timestamp

    @property
    def handler(self) -> logging.Handler:
        return self.__handler

    def flush(self):
        self.__handler.flush()

    def close(self):
        self.__handler.close()

    @staticmethod
    def stdout(id: str | None = None, *, level: LogLevel = LogLevel.INFO) -> "LogOutput":
        return LogOutput(id, kind=LogOutputKind.CONSOLE, stream=sys.stdout, level=level)

    @staticmethod
    def stderr(id: str | None = None, *, level: LogLevel = LogLevel.INFO) -> "LogOutput":
        return LogOutput(id, kind=LogOutputKind.CONSOLE, stream=sys.stderr, level=level)

    @staticmethod
    def file(file: str, *, id: str | None = None, level: LogLevel = LogLevel.INFO) -> "LogOutput":
        return LogOutput(id, kind=LogOutputKind.FILE, file=file, level=level)

    @staticmethod
    def rich(id: str | None = None, *, level: LogLevel = LogLevel.INFO) -> "LogOutput":
        # rich prints its own time column
        return LogOutput(id, kind=LogOutputKind.RICH, level=level, auto_timestamp=False)


class Logger:
    """A `header: message` facade over a stdlib logger.

    Outputs attached to a logger also receive the records of its child
    loggers, so attaching one output to `configbind` covers the whole
    library.
    """

    def __init__(
        self,
        name: str,
        *,
        outputs: tuple[LogOutput, ...] = (),
    ):
        self.__underlying_logger: logging.Logger = logging.getLogger(name)
        self.__outputs: dict[str, LogOutput] = {}
        for output in outputs:
            self.add_output(output)

    @property
    def name(self) -> str:
        return self.__underlying_logger.name

    def add_output(self, output: LogOutput):
        self.__underlying_logger.addHandler(output.handler)
        current = self.__underlying_logger.level
        if current == logging.NOTSET or current > output.level.value:
            self.__underlying_logger.setLevel(output.level.value)
        if output.id is not None:
            self.__outputs[output.id] = output

    def remove_output(self, output: str | LogOutput):
        if isinstance(output, str):
            output = self.__outputs[output]
        assert isinstance(output, LogOutput)
        self.__underlying_logger.removeHandler(output.handler)
        if output.id is not None:
            del self.__outputs[output.id]

    def enabled_for(self, level: LogLevel) -> bool:
        return self.__underlying_logger.isEnabledFor(level.value)

    def log(
        self,
        level: Literal["debug", "info", "warning", "error", "critical"] | LogLevel,
        header: str,
        message: object,
    ):
        if isinstance(level, LogLevel):
            level_number = level.value
        else:
            level_number = getattr(logging, level.upper())
        if not self.__underlying_logger.isEnabledFor(level_number):
            return
        self.__underlying_logger.log(
            level_number,
            "%s: %s",
            header,
            message,
            extra={"header": header, "payload": message},
        )

    def debug(self, header: str, message: object):
        self.log("debug", header, message)

    def info(self, header: str, message: object):
        self.log("info", header, message)

    def warning(self, header: str, message: object):
        self.log("warning", header, message)

    def error(self, header: str, message: object):
        self.log("error", header, message)

    def critical(self, header: str, message: object):
        self.log("critical", header, message)
