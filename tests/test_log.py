"""Tests for the logging facade."""

import io
import json
import logging
from dataclasses import dataclass

import pytest

from configbind import assign_struct
from configbind.log import Logger, LogLevel, LogOutput, LogOutputKind, debug_enabled


@dataclass
class Numbered:
    number: int = 0


@pytest.fixture
def stream():
    return io.StringIO()


class TestLogOutput:
    """Formatting of each output kind."""

    def test_plain_without_timestamp(self, stream):
        """Test the plain line format without a timestamp."""
        output = LogOutput(
            kind=LogOutputKind.CONSOLE, stream=stream, auto_timestamp=False
        )
        logger = Logger("configbind.tests.plain", outputs=(output,))

        logger.info("feed", "MapFeeder")

        assert stream.getvalue() == "[configbind.tests.plain:INFO] feed: MapFeeder\n"
        logger.remove_output(output)

    def test_plain_with_timestamp(self, stream):
        """Test that the timestamp is appended to the header."""
        output = LogOutput(kind=LogOutputKind.CONSOLE, stream=stream)
        logger = Logger("configbind.tests.stamped", outputs=(output,))

        logger.warning("reload", "2 feeder(s)")

        line = stream.getvalue()
        assert line.startswith("[configbind.tests.stamped:WARNING] reload@")
        assert line.endswith(": 2 feeder(s)\n")
        logger.remove_output(output)

    def test_jsonl(self, stream):
        """Test that jsonl outputs write one JSON object per record."""
        output = LogOutput(
            kind=LogOutputKind.CONSOLE,
            stream=stream,
            format="jsonl",
            auto_timestamp=False,
        )
        logger = Logger("configbind.tests.jsonl", outputs=(output,))

        logger.error("bind", {"path": "users[0]", "count": 0})

        entry = json.loads(stream.getvalue())
        assert entry == {"header": "bind", "message": {"path": "users[0]", "count": 0}}
        logger.remove_output(output)

    def test_invalid_format(self, stream):
        """Test that unknown formats are rejected."""
        with pytest.raises(ValueError, match="Invalid format"):
            LogOutput(kind=LogOutputKind.CONSOLE, stream=stream, format="xml")  # type: ignore[arg-type]

    def test_rich_output(self, stream):
        """Test that the rich output renders the header and message."""
        output = LogOutput(kind=LogOutputKind.RICH, stream=stream, auto_timestamp=False)
        logger = Logger("configbind.tests.rich", outputs=(output,))

        logger.info("feed", "OsFeeder")

        assert "feed: OsFeeder" in stream.getvalue()
        logger.remove_output(output)


class TestLogger:
    """Levels and output management of the facade."""

    def test_level_filtering(self, stream):
        """Test that records below an output's level are dropped."""
        output = LogOutput(
            "console",
            kind=LogOutputKind.CONSOLE,
            stream=stream,
            level=LogLevel.WARNING,
            auto_timestamp=False,
        )
        logger = Logger("configbind.tests.levels", outputs=(output,))

        logger.info("hidden", "x")
        logger.log(LogLevel.ERROR, "shown", "y")

        assert stream.getvalue() == "[configbind.tests.levels:ERROR] shown: y\n"
        assert not logger.enabled_for(LogLevel.DEBUG)
        logger.remove_output("console")

    def test_remove_output(self, stream):
        """Test that removed outputs receive nothing."""
        output = LogOutput(
            "console", kind=LogOutputKind.CONSOLE, stream=stream, auto_timestamp=False
        )
        logger = Logger("configbind.tests.removed", outputs=(output,))
        logger.remove_output("console")

        logger.critical("gone", "x")

        assert stream.getvalue() == ""

    def test_binder_reports_failures_at_debug(self, stream):
        """Test that binder mismatches are logged at debug level."""
        output = LogOutput(
            kind=LogOutputKind.CONSOLE,
            stream=stream,
            level=LogLevel.DEBUG,
            auto_timestamp=False,
        )
        library = Logger("configbind", outputs=(output,))
        try:
            assign_struct(Numbered(), {"number": "x"})
        finally:
            library.remove_output(output)
            logging.getLogger("configbind").setLevel(logging.NOTSET)

        assert "[configbind.binding.binder:DEBUG] bind: number type_mismatch" in stream.getvalue()


def test_debug_toggle(monkeypatch):
    """Test that CONFIGBIND_DEBUG switches binder diagnostics."""
    monkeypatch.setenv("CONFIGBIND_DEBUG", "yes")
    assert debug_enabled()

    monkeypatch.setenv("CONFIGBIND_DEBUG", "0")
    assert not debug_enabled()
