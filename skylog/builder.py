"""Fluent construction of routers.

Examples
--------
>>> import sys
>>> router = (
...     RouterBuilder()
...     .with_capacity(2)
...     .with_flush_interval(0.5)
...     .with_channel(sys.stderr, "WARNING")
...     .build()
... )

"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from .config import RouterConfig
from .errors import ChannelArgumentError, RouterConfigError
from .levels import Level, LevelArg
from .router import Router

if typ.TYPE_CHECKING:
    from datetime import datetime

    from .channel import Sink

Callable = cabc.Callable
Self = typ.Self


class RouterBuilder:
    """Collect router settings and initial channel bindings."""

    def __init__(self) -> None:
        self._settings: dict[str, object] = {}
        self._channels: list[tuple[Sink, Level]] = []

    def with_capacity(self, capacity: int) -> Self:
        self._settings["capacity"] = capacity
        return self

    def with_flush_interval(self, seconds: float) -> Self:
        self._settings["flush_interval"] = seconds
        return self

    def with_buffer_size(self, size: int) -> Self:
        self._settings["buffer_size"] = size
        return self

    def with_encoding(self, encoding: str) -> Self:
        self._settings["encoding"] = encoding
        return self

    def with_trace_level(self, level: LevelArg) -> Self:
        self._settings["trace_level"] = Level.parse(level)
        return self

    def with_flush_errors_reported(self, enabled: bool = True) -> Self:  # noqa: FBT001, FBT002
        self._settings["report_flush_errors"] = enabled
        return self

    def with_identity(self, identity: Callable[[], str]) -> Self:
        self._settings["identity"] = identity
        return self

    def with_clock(self, clock: Callable[[], datetime]) -> Self:
        self._settings["clock"] = clock
        return self

    def with_channel(self, sink: Sink, threshold: LevelArg = Level.INFO) -> Self:
        """Queue ``sink`` to be linked at ``threshold`` when built."""
        if sink is None:
            msg = "Cannot link a None sink"
            raise ChannelArgumentError(msg)
        if threshold is None:
            msg = "Cannot use a None log level"
            raise ChannelArgumentError(msg)
        self._channels.append((sink, Level.parse(threshold)))
        return self

    def config(self) -> RouterConfig:
        """Return the :class:`RouterConfig` described so far."""
        return RouterConfig(**typ.cast("dict[str, typ.Any]", self._settings))

    def as_dict(self) -> dict[str, object]:
        data = self.config().as_dict()
        data["channels"] = [
            {"sink": repr(sink), "threshold": level.name}
            for sink, level in self._channels
        ]
        return data

    def build(self) -> Router:
        """Create the router and link the queued channels.

        Raises
        ------
        RouterConfigError
            If more channels were queued than the capacity allows.

        """
        config = self.config()
        distinct = {id(sink) for sink, _ in self._channels}
        if len(distinct) > config.capacity:
            msg = (
                f"{len(distinct)} channels requested but capacity is "
                f"{config.capacity}"
            )
            raise RouterConfigError(msg)
        router = Router(config)
        for sink, level in self._channels:
            router.link_channel(sink, level)
        return router


__all__ = ["RouterBuilder"]
