"""Buffered output slot used by :class:`skylog.Router`.

A :class:`Channel` pairs an optional sink with a minimum level. Records are
appended to a private byte buffer and only reach the sink when the buffer
outgrows ``buffer_size`` or the channel is flushed. Every mutation of the
buffer, and every write or flush of the sink, happens under the channel's
lock, so concurrent callers never interleave bytes within a record and a
flush never overlaps a write.
"""

from __future__ import annotations

import io
import threading
import typing as typ

from .levels import Level


class Sink(typ.Protocol):
    """Destination accepted by a channel.

    Text sinks receive ``str``; everything else receives ``bytes``. See
    :func:`is_text_sink`.
    """

    def write(self, data: typ.Any, /) -> object: ...

    def flush(self) -> object: ...


def is_text_sink(sink: object) -> bool:
    """Return whether ``sink`` expects ``str`` rather than ``bytes``.

    ``io`` text and binary streams are classified by type. Other objects,
    such as ``tempfile.SpooledTemporaryFile``, are text when their ``mode``
    lacks ``"b"``; without a ``mode`` an ``encoding`` attribute marks a text
    sink.
    """
    if isinstance(sink, io.TextIOBase):
        return True
    if isinstance(sink, (io.BufferedIOBase, io.RawIOBase)):
        return False
    mode = getattr(sink, "mode", None)
    if isinstance(mode, str):
        return "b" not in mode
    return isinstance(getattr(sink, "encoding", None), str)


class Channel:
    """A sink binding with its threshold, buffer and dirty flag."""

    def __init__(
        self, index: int, *, buffer_size: int = 8192, encoding: str = "utf-8"
    ) -> None:
        self.index = index
        self._buffer_size = buffer_size
        self._encoding = encoding
        self._lock = threading.Lock()
        self._sink: Sink | None = None
        self._text = False
        self._threshold = Level.INFO
        self._dirty = False
        self._buffer = bytearray()

    def __repr__(self) -> str:
        return (
            f"Channel(index={self.index}, sink={self._sink!r}, "
            f"threshold={self._threshold.name}, dirty={self._dirty})"
        )

    @property
    def sink(self) -> Sink | None:
        return self._sink

    @property
    def threshold(self) -> Level:
        return self._threshold

    @threshold.setter
    def threshold(self, level: Level) -> None:
        with self._lock:
            self._threshold = level

    @property
    def dirty(self) -> bool:
        return self._dirty

    @property
    def pending(self) -> int:
        """Number of buffered bytes not yet written to the sink."""
        return len(self._buffer)

    def is_bound_to(self, sink: object) -> bool:
        return self._sink is sink

    def bind(self, sink: Sink, threshold: Level) -> None:
        """Attach ``sink`` to this channel with an empty buffer."""
        with self._lock:
            self._sink = sink
            self._text = is_text_sink(sink)
            self._threshold = threshold
            self._dirty = False
            self._buffer.clear()

    def unbind(self) -> Sink | None:
        """Detach and return the sink without closing it.

        Pending output is written and flushed to the sink first. The sink is
        detached even when that fails; the failure propagates to the caller.
        """
        with self._lock:
            sink = self._sink
            try:
                if sink is not None and self._dirty:
                    if self._buffer:
                        self._drain(sink)
                    sink.flush()
            finally:
                self._sink = None
                self._dirty = False
                self._buffer.clear()
            return sink

    def deliver(self, level: Level, data: bytes) -> bool:
        """Buffer ``data`` when ``level`` meets the threshold.

        Returns ``True`` when the record was accepted. Sink errors raised by
        an overflowing buffer propagate to the caller.
        """
        with self._lock:
            sink = self._sink
            if sink is None or level < self._threshold:
                return False
            self._buffer.extend(data)
            self._dirty = True
            if len(self._buffer) > self._buffer_size:
                self._drain(sink)
            return True

    def flush(self) -> bool:
        """Write and flush buffered output if the channel is dirty.

        Returns ``True`` if the sink was flushed. Clean or unbound channels
        are left alone.
        """
        with self._lock:
            sink = self._sink
            if sink is None or not self._dirty:
                return False
            self._dirty = False
            if self._buffer:
                self._drain(sink)
            sink.flush()
            return True

    def _drain(self, sink: Sink) -> None:
        # Caller holds the lock. The buffer is cleared before writing so a
        # failing sink loses the chunk instead of receiving it twice.
        data = bytes(self._buffer)
        self._buffer.clear()
        if self._text:
            sink.write(data.decode(self._encoding, errors="replace"))
        else:
            sink.write(data)


__all__ = ["Channel", "Sink", "is_text_sink"]
