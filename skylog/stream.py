"""File-like adapter that turns written text into log records.

:class:`LogStream` lets code that only knows how to write to a file (a
third-party library, ``print``, ``traceback.print_exception``) produce
records on a :class:`~skylog.router.Router`. Written data is accumulated
until a newline arrives; the completed line, without its terminator, is
logged at the stream's level. Lines reaching :data:`MAX_LINE_LENGTH`
characters are emitted early so a writer that never sends a newline cannot
grow the buffer without bound.

Examples
--------
>>> import contextlib
>>> with contextlib.redirect_stdout(router.info_stream):  # doctest: +SKIP
...     print("captured as an INFO record")

"""

from __future__ import annotations

import codecs
import io
import threading
import typing as typ

from .levels import Level, LevelArg

if typ.TYPE_CHECKING:
    from .router import Router

MAX_LINE_LENGTH: typ.Final[int] = 1023


class LogStream(io.TextIOBase):
    """Writable text stream logging one record per line.

    ``bytes`` are accepted as well as ``str``; they are decoded as UTF-8
    incrementally, so a multi-byte character split across writes is
    reassembled. Empty lines produce no record.
    """

    def __init__(self, router: Router, level: LevelArg = Level.INFO) -> None:
        super().__init__()
        self._router = router
        self._level = Level.parse(level)
        self._lock = threading.RLock()
        self._line = ""
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    def __repr__(self) -> str:
        return f"<LogStream level={self._level.name}>"

    @property
    def level(self) -> Level:
        return self._level

    @property
    def pending(self) -> str:
        """The partial line accumulated so far."""
        return self._line

    def writable(self) -> bool:
        return True

    def write(self, data: str | bytes | bytearray) -> int:  # type: ignore[override]
        if self.closed:
            msg = "I/O operation on closed LogStream"
            raise ValueError(msg)
        with self._lock:
            if isinstance(data, (bytes, bytearray)):
                text = self._decoder.decode(bytes(data))
            else:
                text = data
            *complete, tail = text.split("\n")
            for part in complete:
                self._append(part)
                self._emit()
            self._append(tail)
        return len(data)

    def close(self) -> None:
        """Emit any partial line, then close the stream."""
        if self.closed:
            return
        with self._lock:
            self._append(self._decoder.decode(b"", final=True))
            self._emit()
        super().close()

    def _append(self, text: str) -> None:
        while text:
            room = MAX_LINE_LENGTH - len(self._line)
            self._line += text[:room]
            text = text[room:]
            if len(self._line) >= MAX_LINE_LENGTH:
                self._emit()

    def _emit(self) -> None:
        if not self._line:
            return
        line, self._line = self._line, ""
        self._router.log(self._level, line)


__all__ = ["MAX_LINE_LENGTH", "LogStream"]
