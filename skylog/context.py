"""Caller identity embedded in each record.

By default a record names the thread that logged it. Code running several
logical units on one thread (asyncio tasks, worker pools) can name the unit
explicitly with :func:`execution_unit`, which takes precedence inside its
block and in tasks spawned from it.
"""

from __future__ import annotations

import contextlib
import contextvars
import threading
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

_EXECUTION_UNIT: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "skylog_execution_unit", default=None
)


def current_identity() -> str:
    """Return the active execution unit name or the current thread's name."""
    name = _EXECUTION_UNIT.get()
    if name is not None:
        return name
    return threading.current_thread().name


@contextlib.contextmanager
def execution_unit(name: str) -> cabc.Iterator[None]:
    """Report ``name`` as the caller identity within the block."""
    token = _EXECUTION_UNIT.set(name)
    try:
        yield
    finally:
        _EXECUTION_UNIT.reset(token)


__all__ = ["current_identity", "execution_unit"]
