"""Background flushing for router channels.

The flusher is a daemon thread that sleeps on an event for at most
``interval`` seconds. Each delivered record sets the event, so buffered
output normally reaches its sink shortly after it is logged and at the
latest one interval later. An ``atexit`` hook performs a last pass so
buffered output is not lost on a normal interpreter exit.
"""

from __future__ import annotations

import atexit
import logging
import threading
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from .channel import Channel

logger = logging.getLogger(__name__)

DEFAULT_FLUSH_INTERVAL: typ.Final[float] = 3.0
FLUSHER_THREAD_NAME: typ.Final[str] = "skylog-flush"

ErrorCallback = typ.Callable[[Exception], None]


class Flusher:
    """Periodically flush dirty channels on a daemon thread.

    Parameters
    ----------
    channels
        The channels to watch. The sequence itself is never modified.
    interval
        Maximum number of seconds between passes.
    on_error
        Called with each flush failure. When ``None`` failures are dropped.

    """

    def __init__(
        self,
        channels: cabc.Sequence[Channel],
        *,
        interval: float = DEFAULT_FLUSH_INTERVAL,
        on_error: ErrorCallback | None = None,
    ) -> None:
        self._channels = channels
        self._interval = interval
        self._on_error = on_error
        self._wake = threading.Event()
        self._stopped = threading.Event()
        self._thread = threading.Thread(
            target=self._run, name=FLUSHER_THREAD_NAME, daemon=True
        )

    @property
    def interval(self) -> float:
        return self._interval

    @property
    def running(self) -> bool:
        return self._thread.is_alive() and not self._stopped.is_set()

    def start(self) -> None:
        atexit.register(self.final_flush)
        self._thread.start()
        logger.debug("flusher started with a %.3fs interval", self._interval)

    def wake(self) -> None:
        """Ask the flusher to run a pass without waiting for the interval."""
        self._wake.set()

    def flush_dirty(self, on_error: ErrorCallback | None = None) -> int:
        """Flush every dirty channel and return how many were flushed."""
        report = on_error if on_error is not None else self._on_error
        flushed = 0
        for channel in self._channels:
            try:
                if channel.flush():
                    flushed += 1
            except Exception as exc:  # noqa: BLE001
                if report is not None:
                    report(exc)
        return flushed

    def final_flush(self) -> None:
        """Best-effort pass used at interpreter exit; errors are ignored."""
        self.flush_dirty(on_error=_ignore)

    def stop(self, timeout: float | None = None) -> None:
        """Stop the thread, run a final pass and drop the exit hook.

        When the thread is still inside a sink call after ``timeout``
        seconds the final pass is skipped, since it would wait on the same
        channel lock. The thread finishes its current pass and exits.
        """
        if self._stopped.is_set():
            return
        self._stopped.set()
        self._wake.set()
        if self._thread.is_alive():
            self._thread.join(timeout)
        atexit.unregister(self.final_flush)
        if self._thread.is_alive():
            logger.warning(
                "flusher did not stop within %ss; skipping the final flush", timeout
            )
            return
        self.final_flush()
        logger.debug("flusher stopped")

    def _run(self) -> None:
        while not self._stopped.is_set():
            self._wake.wait(self._interval)
            # Clear before the pass so a record delivered during it wakes
            # the next one.
            self._wake.clear()
            if self._stopped.is_set():
                return
            try:
                self.flush_dirty()
            except Exception:  # noqa: BLE001
                logger.exception("flush pass failed")


def _ignore(_exc: Exception) -> None:
    return


__all__ = ["DEFAULT_FLUSH_INTERVAL", "FLUSHER_THREAD_NAME", "Flusher"]
