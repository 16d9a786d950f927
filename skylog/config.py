"""Router configuration values.

:class:`RouterConfig` gathers the knobs a :class:`~skylog.router.Router`
accepts. Configuration is programmatic only; build a config directly, pass
keyword arguments to the router, or use
:class:`~skylog.builder.RouterBuilder`.
"""

from __future__ import annotations

import dataclasses
import typing as typ
from datetime import datetime

from .context import current_identity
from .errors import RouterConfigError
from .flusher import DEFAULT_FLUSH_INTERVAL
from .levels import Level

if typ.TYPE_CHECKING:
    import collections.abc as cabc

DEFAULT_CAPACITY: typ.Final[int] = 4
DEFAULT_BUFFER_SIZE: typ.Final[int] = 8192


@dataclasses.dataclass(frozen=True)
class RouterConfig:
    """Configuration parameters for a :class:`~skylog.router.Router`.

    Attributes
    ----------
    capacity : int
        Number of channel slots allocated at construction.
    flush_interval : float
        Maximum seconds the flusher sleeps between passes.
    buffer_size : int
        Bytes a channel buffers before writing through to its sink. ``0``
        writes every record immediately (the sink is still only flushed by
        the flusher).
    encoding : str
        Encoding used for byte sinks.
    trace_level : Level
        Level of the per-line records produced from exception tracebacks.
    report_flush_errors : bool
        Store flush failures in the last-error slot instead of dropping them.
    identity : Callable[[], str] or None
        Supplies the caller identity; defaults to
        :func:`~skylog.context.current_identity`.
    clock : Callable[[], datetime] or None
        Supplies the record timestamp; defaults to ``datetime.now``.

    """

    capacity: int = DEFAULT_CAPACITY
    flush_interval: float = DEFAULT_FLUSH_INTERVAL
    buffer_size: int = DEFAULT_BUFFER_SIZE
    encoding: str = "utf-8"
    trace_level: Level = Level.STACKTRACE
    report_flush_errors: bool = False
    identity: cabc.Callable[[], str] | None = None
    clock: cabc.Callable[[], datetime] | None = None

    def __post_init__(self) -> None:
        _validate(self)

    def resolve_identity(self) -> cabc.Callable[[], str]:
        return self.identity if self.identity is not None else current_identity

    def resolve_clock(self) -> cabc.Callable[[], datetime]:
        return self.clock if self.clock is not None else datetime.now

    def as_dict(self) -> dict[str, object]:
        """Return the plain values, omitting callables that are unset."""
        data = {f.name: getattr(self, f.name) for f in dataclasses.fields(self)}
        data["trace_level"] = self.trace_level.name
        return {key: value for key, value in data.items() if value is not None}


def _validate(config: RouterConfig) -> None:
    if isinstance(config.capacity, bool) or not isinstance(config.capacity, int):
        msg = f"capacity must be an int, got {type(config.capacity).__name__}"
        raise RouterConfigError(msg)
    if config.capacity < 0:
        msg = f"capacity must not be negative, got {config.capacity}"
        raise RouterConfigError(msg)
    if config.flush_interval <= 0:
        msg = f"flush_interval must be greater than zero, got {config.flush_interval}"
        raise RouterConfigError(msg)
    if config.buffer_size < 0:
        msg = f"buffer_size must not be negative, got {config.buffer_size}"
        raise RouterConfigError(msg)
    if not isinstance(config.trace_level, Level):
        object.__setattr__(config, "trace_level", _parse_level(config.trace_level))
    try:
        "".encode(config.encoding)
    except LookupError as exc:
        msg = f"unknown encoding: {config.encoding!r}"
        raise RouterConfigError(msg) from exc


def _parse_level(value: object) -> Level:
    try:
        return Level.parse(typ.cast("typ.Any", value))
    except (TypeError, ValueError) as exc:
        msg = f"invalid trace_level: {value!r}"
        raise RouterConfigError(msg) from exc


__all__ = ["DEFAULT_BUFFER_SIZE", "DEFAULT_CAPACITY", "RouterConfig"]
