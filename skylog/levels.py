"""Severity levels understood by skylog.

Levels are ordered by declaration position. A channel accepts a record when
``record.level >= channel.threshold``; because :class:`Level` is an
``IntEnum`` the comparison uses the rank directly.

String names are case-insensitive. ``WARN`` is accepted as an alias for
``WARNING`` and ``CRITICAL`` for ``FATAL`` so that names used with the
standard :mod:`logging` module parse without translation.

Examples
--------
>>> Level.parse("warn") is Level.WARNING
True
>>> Level.DEBUG < Level.INFO
True

"""

from __future__ import annotations

import enum
import logging
import typing as typ

LevelArg = typ.Union["Level", str, int]

_ALIASES: typ.Final[dict[str, str]] = {
    "WARN": "WARNING",
    "CRITICAL": "FATAL",
}


class Level(enum.IntEnum):
    """Importance of a log record, least to most severe."""

    STACKTRACE = 0
    TRACE = 1
    DEBUG = 2
    INFO = 3
    WARNING = 4
    ERROR = 5
    FATAL = 6

    def __str__(self) -> str:
        return self.name

    @property
    def rank(self) -> int:
        """Return the ordinal position of the level."""
        return int(self)

    @classmethod
    def parse(cls, value: LevelArg) -> Level:
        """Coerce ``value`` into a :class:`Level`.

        Parameters
        ----------
        value
            A ``Level``, a rank between 0 and 6, or a case-insensitive level
            name.

        Raises
        ------
        ValueError
            If ``value`` names no level or is out of range.
        TypeError
            If ``value`` is of an unsupported type.

        """
        if isinstance(value, Level):
            return value
        if isinstance(value, bool):
            msg = f"level must be a Level, str or int, got {type(value).__name__}"
            raise TypeError(msg)
        if isinstance(value, int):
            try:
                return cls(value)
            except ValueError:
                msg = f"level rank out of range: {value}"
                raise ValueError(msg) from None
        if isinstance(value, str):
            name = value.strip().upper()
            name = _ALIASES.get(name, name)
            try:
                return cls[name]
            except KeyError:
                msg = f"unknown level: {value!r}"
                raise ValueError(msg) from None
        msg = f"level must be a Level, str or int, got {type(value).__name__}"
        raise TypeError(msg)

    @classmethod
    def from_stdlib(cls, levelno: int) -> Level:
        """Map a standard :mod:`logging` numeric level onto a :class:`Level`.

        Values at or below the ``STACKTRACE`` number (1) become
        ``STACKTRACE`` and the rest below ``logging.DEBUG`` become ``TRACE``;
        values between the stdlib constants round down to the nearest one, so
        ``from_stdlib(level.to_stdlib())`` returns ``level`` for every level.
        """
        if levelno >= logging.CRITICAL:
            return cls.FATAL
        if levelno >= logging.ERROR:
            return cls.ERROR
        if levelno >= logging.WARNING:
            return cls.WARNING
        if levelno >= logging.INFO:
            return cls.INFO
        if levelno >= logging.DEBUG:
            return cls.DEBUG
        if levelno > STACKTRACE_LEVEL_NUM:
            return cls.TRACE
        return cls.STACKTRACE

    def to_stdlib(self) -> int:
        """Return the closest standard :mod:`logging` numeric level."""
        return _TO_STDLIB[self]


TRACE_LEVEL_NUM = 5
STACKTRACE_LEVEL_NUM = 1
logging.addLevelName(TRACE_LEVEL_NUM, "TRACE")
logging.addLevelName(STACKTRACE_LEVEL_NUM, "STACKTRACE")

_TO_STDLIB: typ.Final[dict[Level, int]] = {
    Level.STACKTRACE: STACKTRACE_LEVEL_NUM,
    Level.TRACE: TRACE_LEVEL_NUM,
    Level.DEBUG: logging.DEBUG,
    Level.INFO: logging.INFO,
    Level.WARNING: logging.WARNING,
    Level.ERROR: logging.ERROR,
    Level.FATAL: logging.CRITICAL,
}

__all__ = ["Level", "LevelArg"]
