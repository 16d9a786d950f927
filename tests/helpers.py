"""Shared helpers for the test suite."""

from __future__ import annotations

import collections.abc as cabc
import io
import threading
import time
import typing as typ
from datetime import datetime

import pytest

from skylog import Router

RouterFactory = cabc.Callable[..., Router]

FIXED_TIME: typ.Final[datetime] = datetime(2026, 1, 2, 3, 4, 5)
FIXED_STAMP: typ.Final[str] = "20260102:030405"

# Polling interval for sink content verification (seconds).
_POLL_INTERVAL_SECONDS: float = 0.01


class RecordingSink(io.BytesIO):
    """In-memory byte sink that counts ``flush`` calls."""

    def __init__(self) -> None:
        super().__init__()
        self._count_lock = threading.Lock()
        self.flush_count = 0

    def flush(self) -> None:
        with self._count_lock:
            self.flush_count += 1
        super().flush()

    def text(self) -> str:
        return self.getvalue().decode("utf-8")


class FailingSink:
    """Sink whose writes always fail with a numbered ``OSError``."""

    def __init__(self) -> None:
        self.attempts = 0

    def write(self, _data: bytes) -> int:
        self.attempts += 1
        msg = f"write failure {self.attempts}"
        raise OSError(msg)

    def flush(self) -> None:
        return


class FlushFailingSink(io.BytesIO):
    """Sink that accepts writes but fails every ``flush``."""

    def __init__(self) -> None:
        super().__init__()
        self.flush_attempts = 0

    def flush(self) -> None:
        self.flush_attempts += 1
        msg = "flush failure"
        raise OSError(msg)


class RaisingSink:
    """Sink whose writes raise a fixed, arbitrary exception."""

    def __init__(self, error: Exception) -> None:
        self.error = error

    def write(self, _data: bytes) -> int:
        raise self.error

    def flush(self) -> None:
        return


class BlockingFlushSink(io.BytesIO):
    """Byte sink whose ``flush`` waits until ``release`` is set."""

    def __init__(self) -> None:
        super().__init__()
        self.entered = threading.Event()
        self.release = threading.Event()

    def flush(self) -> None:
        self.entered.set()
        self.release.wait(5.0)
        super().flush()


def sink_text(sink: object) -> str:
    """Return the contents of an in-memory text or byte sink."""
    value = typ.cast("typ.Any", sink).getvalue()
    return value.decode("utf-8") if isinstance(value, bytes) else value


def message_bodies(text: str) -> list[str]:
    """Strip the ``[stamp|identity] <LEVEL> `` prefix from every record."""
    return [line.split("> ", 1)[1] for line in text.splitlines()]


def record_levels(text: str) -> list[str]:
    """Return the level name of every record in ``text``."""
    return [line.split("<", 1)[1].split(">", 1)[0] for line in text.splitlines()]


def poll_sink_for_text(sink: object, expected: str, timeout: float = 1.0) -> str:
    """Poll a sink until it contains expected text or timeout expires.

    Parameters
    ----------
    sink : object
        ``io.BytesIO`` or ``io.StringIO`` style sink.
    expected : str
        Text substring that must appear in the sink contents.
    timeout : float, optional
        Maximum time to wait in seconds (default: 1.0).

    Returns
    -------
    str
        The sink contents once the expected text is found.

    """
    deadline = time.time() + timeout
    while time.time() < deadline:
        contents = sink_text(sink)
        if expected in contents:
            return contents
        time.sleep(_POLL_INTERVAL_SECONDS)
    pytest.fail(f"sink did not contain {expected!r} within {timeout}s")


def wait_until(
    predicate: typ.Callable[[], bool], timeout: float = 1.0, what: str = "condition"
) -> None:
    deadline = time.time() + timeout
    while time.time() < deadline:
        if predicate():
            return
        time.sleep(_POLL_INTERVAL_SECONDS)
    pytest.fail(f"{what} not met within {timeout}s")
