"""Bridge from the standard :mod:`logging` module to a skylog router.

Third-party libraries log through ``logging``. Attaching a
:class:`RouterHandler` to a stdlib logger forwards those records to a
:class:`~skylog.router.Router`, so they reach the same channels, with the
same record layout, as messages logged on the router directly.

Examples
--------
>>> import logging
>>> handler = install(router, logging.getLogger("urllib3"))  # doctest: +SKIP

"""

from __future__ import annotations

import logging
import typing as typ
import warnings

from .levels import Level

if typ.TYPE_CHECKING:
    from .router import Router


class RouterHandler(logging.Handler):
    """Forward stdlib ``LogRecord`` objects to a :class:`Router`.

    The record level is mapped with :meth:`Level.from_stdlib`. The message
    is the handler's formatted output, ``%(message)s`` unless a formatter is
    set, so placeholders in the formatted text are never substituted again.
    Exception information attached to the record is logged through the
    router's traceback output rather than folded into the message.

    Parameters
    ----------
    router
        Destination router.
    level
        Minimum stdlib level handled, as for ``logging.Handler``.

    Raises
    ------
    TypeError
        If ``router`` has no ``log`` method.

    """

    def __init__(self, router: Router, level: int = logging.NOTSET) -> None:
        if not callable(getattr(router, "log", None)):
            msg = f"expected a Router instance, got {type(router).__name__}"
            raise TypeError(msg)
        super().__init__(level)
        self._router = router

    @property
    def router(self) -> Router:
        return self._router

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = Level.from_stdlib(record.levelno)
            message = self._format_message(record)
            # Route through the router's template path with the message as
            # the sole argument so braces in the text stay literal.
            self._router.log(level, "{0}", message)
            exc = record.exc_info[1] if record.exc_info else None
            if exc is not None:
                self._router.log_exception(exc, level)
        except RecursionError:
            raise
        except Exception:  # noqa: BLE001
            self.handleError(record)

    def _format_message(self, record: logging.LogRecord) -> str:
        if self.formatter is None:
            return record.getMessage()
        # Formatters append exc_text; the traceback is logged separately.
        saved = record.exc_info, record.exc_text
        record.exc_info, record.exc_text = None, None
        try:
            return self.format(record)
        finally:
            record.exc_info, record.exc_text = saved

    def flush(self) -> None:
        """Flush the router's dirty channels."""
        self._router.flush()


def install(
    router: Router,
    target: logging.Logger | None = None,
    level: int = logging.NOTSET,
) -> RouterHandler:
    """Attach a :class:`RouterHandler` for ``router`` to ``target``.

    ``target`` defaults to the root logger. Installing twice for the same
    router on the same logger returns the existing handler and emits a
    ``RuntimeWarning``.
    """
    target = target if target is not None else logging.getLogger()
    for existing in target.handlers:
        if isinstance(existing, RouterHandler) and existing.router is router:
            warnings.warn(
                f"a RouterHandler for this router is already installed on "
                f"{target.name!r}",
                RuntimeWarning,
                stacklevel=2,
            )
            return existing
    handler = RouterHandler(router, level)
    target.addHandler(handler)
    return handler


__all__ = ["RouterHandler", "install"]
