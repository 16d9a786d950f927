"""Multi-sink logger.

A :class:`Router` owns a fixed set of :class:`~skylog.channel.Channel`
slots. Each call to :meth:`Router.log` renders one record line and offers it
to every slot; a slot accepts it when it has a sink bound and the record's
level meets the slot's threshold. Accepted records are buffered and a
background :class:`~skylog.flusher.Flusher` writes them out.

Logging never raises because of a sink. A failed write is kept as the
router's last error, replacing any earlier one, until
:meth:`Router.pull_last_error` collects it.

Examples
--------
>>> import io
>>> sink = io.StringIO()
>>> with Router() as router:
...     router.link_channel(sink, "DEBUG")
...     router.info("{0} and {1}", "x", 7)
True
>>> sink.getvalue().endswith("<INFO> x and 7\\n")
True

"""

from __future__ import annotations

import logging
import threading
import traceback
import typing as typ

from .channel import Channel
from .config import RouterConfig
from .errors import ChannelArgumentError
from .flusher import Flusher
from .formatting import format_record
from .levels import Level, LevelArg
from .stream import LogStream

if typ.TYPE_CHECKING:
    import types

    from .channel import Sink

logger = logging.getLogger(__name__)


class Router:
    """Fan formatted records out to up to ``capacity`` sinks.

    Parameters
    ----------
    config : RouterConfig, optional
        Complete configuration. Mutually exclusive with keyword overrides.
    **overrides
        Individual :class:`~skylog.config.RouterConfig` fields, e.g.
        ``Router(capacity=2, flush_interval=0.5)``.

    """

    def __init__(self, config: RouterConfig | None = None, **overrides: typ.Any) -> None:
        if config is not None and overrides:
            msg = "pass either a RouterConfig or keyword overrides, not both"
            raise TypeError(msg)
        self._config = config if config is not None else RouterConfig(**overrides)
        self._identity = self._config.resolve_identity()
        self._clock = self._config.resolve_clock()
        self._channels: tuple[Channel, ...] = tuple(
            Channel(
                i,
                buffer_size=self._config.buffer_size,
                encoding=self._config.encoding,
            )
            for i in range(self._config.capacity)
        )
        self._link_lock = threading.Lock()
        self._error_lock = threading.Lock()
        self._last_error: Exception | None = None
        self._closed = False
        self._info_stream = LogStream(self, Level.INFO)
        self._error_stream = LogStream(self, Level.ERROR)
        self._flusher = Flusher(
            self._channels,
            interval=self._config.flush_interval,
            on_error=self._record_error if self._config.report_flush_errors else None,
        )
        self._flusher.start()

    def __repr__(self) -> str:
        bound = sum(1 for c in self._channels if c.sink is not None)
        return f"<Router channels={bound}/{len(self._channels)}>"

    def __enter__(self) -> Router:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        self.close()

    # -- properties ----------------------------------------------------------

    @property
    def config(self) -> RouterConfig:
        return self._config

    @property
    def capacity(self) -> int:
        return len(self._channels)

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def channels(self) -> list[tuple[Sink, Level]]:
        """Snapshot of the bound ``(sink, threshold)`` pairs in slot order."""
        return [
            (c.sink, c.threshold) for c in self._channels if c.sink is not None
        ]

    @property
    def info_stream(self) -> LogStream:
        """Stream whose lines are logged at ``INFO``."""
        return self._info_stream

    @property
    def error_stream(self) -> LogStream:
        """Stream whose lines are logged at ``ERROR``."""
        return self._error_stream

    def stream(self, level: LevelArg) -> LogStream:
        """Return a new :class:`LogStream` logging at ``level``."""
        return LogStream(self, level)

    # -- channel management --------------------------------------------------

    def link_channel(self, sink: Sink, threshold: LevelArg = Level.INFO) -> bool:
        """Bind ``sink`` to the first free channel.

        Linking a sink that is already bound changes nothing. When every
        channel is occupied the sink is not bound and a warning is logged.

        Returns
        -------
        bool
            Whether ``sink`` is bound once the call returns.

        Raises
        ------
        ChannelArgumentError
            If ``sink`` or ``threshold`` is ``None``.

        """
        if sink is None:
            msg = "Cannot link a None sink"
            raise ChannelArgumentError(msg)
        level = _require_level(threshold)
        with self._link_lock:
            if self._find(sink) is not None:
                return True
            for channel in self._channels:
                if channel.sink is None:
                    channel.bind(sink, level)
                    logger.debug(
                        "linked %r to channel %d at %s", sink, channel.index, level.name
                    )
                    return True
        logger.warning(
            "all %d channels are in use; %r was not linked", len(self._channels), sink
        )
        return False

    def unlink_channel(self, sink: Sink) -> None:
        """Detach ``sink`` from every channel bound to it.

        Buffered output is written to the sink first. The sink is not
        closed. Unlinking a sink that is not bound is a no-op.
        """
        if sink is None:
            msg = "Cannot unlink a None sink"
            raise ChannelArgumentError(msg)
        with self._link_lock:
            for channel in self._channels:
                if not channel.is_bound_to(sink):
                    continue
                try:
                    channel.unbind()
                except Exception as exc:  # noqa: BLE001
                    self._record_error(exc)
                logger.debug("unlinked %r from channel %d", sink, channel.index)

    def set_threshold(self, sink: Sink, threshold: LevelArg) -> bool:
        """Change the threshold of the channel bound to ``sink``.

        Returns ``False`` when ``sink`` is not bound.
        """
        if sink is None:
            msg = "Cannot index a None sink"
            raise ChannelArgumentError(msg)
        level = _require_level(threshold)
        with self._link_lock:
            channel = self._find(sink)
            if channel is None:
                return False
            channel.threshold = level
            return True

    def is_enabled_for(self, level: LevelArg) -> bool:
        """Return whether any bound channel would accept ``level``."""
        lvl = Level.parse(level)
        return any(
            c.sink is not None and lvl >= c.threshold for c in self._channels
        )

    # -- errors ----------------------------------------------------------------

    def pull_last_error(self) -> Exception | None:
        """Return and clear the most recent delivery error."""
        with self._error_lock:
            error, self._last_error = self._last_error, None
            return error

    def _record_error(self, exc: Exception) -> None:
        with self._error_lock:
            self._last_error = exc

    # -- logging ---------------------------------------------------------------

    def log(self, level: LevelArg, template: str, *args: object) -> None:
        """Format a record and deliver it to every qualifying channel.

        ``{i}`` in ``template`` is replaced with ``str(args[i])``.
        """
        lvl = Level.parse(level)
        record = format_record(
            lvl,
            str(template),
            args,
            timestamp=self._clock(),
            identity=self._identity(),
        )
        data = record.encode(self._config.encoding, errors="replace")
        delivered = False
        for channel in self._channels:
            try:
                if channel.deliver(lvl, data):
                    delivered = True
            except Exception as exc:  # noqa: BLE001
                delivered = True
                self._record_error(exc)
        if delivered:
            self._flusher.wake()

    def log_exception(
        self, exc: BaseException, level: LevelArg = Level.ERROR
    ) -> None:
        """Log a summary of ``exc`` at ``level`` followed by its traceback.

        The traceback is written through a :class:`LogStream` at the
        configured ``trace_level``, one record per line.
        """
        summary = "".join(traceback.format_exception_only(type(exc), exc)).strip()
        self.log(level, summary)
        with LogStream(self, self._config.trace_level) as trace_stream:
            traceback.print_exception(
                type(exc), exc, exc.__traceback__, file=trace_stream
            )

    def stacktrace(self, template: str, *args: object) -> None:
        self.log(Level.STACKTRACE, template, *args)

    def trace(self, template: str, *args: object) -> None:
        self.log(Level.TRACE, template, *args)

    def debug(self, template: str, *args: object) -> None:
        self.log(Level.DEBUG, template, *args)

    def info(self, template: str, *args: object) -> None:
        self.log(Level.INFO, template, *args)

    def warning(self, template: str, *args: object) -> None:
        self.log(Level.WARNING, template, *args)

    warn = warning

    def error(self, template: str, *args: object) -> None:
        self.log(Level.ERROR, template, *args)

    def fatal(self, template: str, *args: object) -> None:
        self.log(Level.FATAL, template, *args)

    def exception(self, exc: BaseException) -> None:
        """Log ``exc`` and its traceback at ``ERROR``."""
        self.log_exception(exc, Level.ERROR)

    # -- lifecycle -------------------------------------------------------------

    def flush(self) -> int:
        """Flush dirty channels now and return how many were flushed.

        Failures are stored as the last error.
        """
        return self._flusher.flush_dirty(on_error=self._record_error)

    def close(self, timeout: float | None = 1.0) -> None:
        """Stop the flusher and flush remaining output. Sinks stay open."""
        if self._closed:
            return
        self._closed = True
        self._info_stream.close()
        self._error_stream.close()
        self._flusher.stop(timeout)

    def _find(self, sink: object) -> Channel | None:
        for channel in self._channels:
            if channel.is_bound_to(sink):
                return channel
        return None


def _require_level(threshold: LevelArg | None) -> Level:
    if threshold is None:
        msg = "Cannot use a None log level"
        raise ChannelArgumentError(msg)
    return Level.parse(threshold)


__all__ = ["Router"]
