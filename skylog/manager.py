"""Process-wide default router and ``basic_config``.

Most applications need a single router. :func:`get_router` creates it on
first use; :func:`basic_config` binds a console stream or a log file to it in
one call, mirroring ``logging.basicConfig``. Files opened here belong to the
manager and are closed by :func:`reset_router`; sinks supplied by the caller
are never closed.
"""

from __future__ import annotations

import dataclasses
import logging
import os
import sys
import threading
import typing as typ

from .errors import RouterConfigError
from .levels import Level, LevelArg
from .router import Router

if typ.TYPE_CHECKING:
    from .channel import Sink

logger = logging.getLogger(__name__)

_lock = threading.RLock()
_router: Router | None = None
_owned_sinks: list[typ.IO[bytes]] = []


@dataclasses.dataclass
class BasicConfig:
    """Configuration parameters for :func:`basic_config`."""

    level: LevelArg | None = None
    filename: str | os.PathLike[str] | None = None
    stream: Sink | None = None
    force: bool = False


def get_router() -> Router:
    """Return the default router, creating it on first use."""
    global _router  # noqa: PLW0603
    with _lock:
        if _router is None or _router.closed:
            _router = Router()
        return _router


def reset_router() -> None:
    """Close the default router and any files :func:`basic_config` opened."""
    global _router  # noqa: PLW0603
    with _lock:
        if _router is not None:
            _router.close()
            _router = None
        _close_owned()


@typ.overload
def basic_config(config: BasicConfig, /) -> Router: ...


@typ.overload
def basic_config(**kwargs: object) -> Router: ...


def basic_config(config: BasicConfig | None = None, /, **kwargs: object) -> Router:
    """Bind a single console or file channel to the default router.

    Parameters
    ----------
    config : BasicConfig, optional
        Aggregated settings. When provided, keyword arguments are rejected.
    **kwargs : object
        ``level``, ``filename``, ``stream`` and ``force``, as on
        :class:`BasicConfig`.

    Returns
    -------
    Router
        The default router.

    Notes
    -----
    As with ``logging.basicConfig``, nothing happens when the default router
    already has a channel bound, unless ``force`` is true, in which case
    existing channels are unlinked first.

    """
    if config is not None and kwargs:
        msg = "basic_config() accepts a BasicConfig or keyword arguments, not both"
        raise TypeError(msg)
    if config is None:
        allowed = {field.name for field in dataclasses.fields(BasicConfig)}
        unknown = set(kwargs) - allowed
        if unknown:
            name = sorted(unknown)[0]
            msg = f"basic_config() got an unexpected keyword argument {name!r}"
            raise TypeError(msg)
        config = BasicConfig(**typ.cast("dict[str, typ.Any]", kwargs))

    if config.filename is not None and config.stream is not None:
        msg = "Cannot specify both `filename` and `stream`"
        raise RouterConfigError(msg)
    level = Level.parse(config.level) if config.level is not None else Level.INFO

    with _lock:
        router = get_router()
        if router.channels:
            if not config.force:
                return router
            for sink, _ in router.channels:
                router.unlink_channel(sink)
            _close_owned()
        router.link_channel(_open_sink(config), level)
        return router


def _open_sink(config: BasicConfig) -> Sink:
    if config.filename is None:
        return config.stream if config.stream is not None else sys.stderr
    handle = open(config.filename, "ab")  # noqa: SIM115
    _owned_sinks.append(handle)
    logger.debug("opened log file %s", os.fspath(config.filename))
    return handle


def _close_owned() -> None:
    while _owned_sinks:
        _owned_sinks.pop().close()


__all__ = ["BasicConfig", "basic_config", "get_router", "reset_router"]
