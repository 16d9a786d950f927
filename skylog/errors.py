"""Exception types raised by skylog.

Only argument and configuration problems are raised to callers. Sink
failures met while delivering records are stored on the router and handed
out by :meth:`skylog.Router.pull_last_error` instead.
"""

from __future__ import annotations


class SkylogError(Exception):
    """Base class for errors raised by skylog."""


class ChannelArgumentError(SkylogError, ValueError):
    """A channel operation received a missing sink or threshold."""


class RouterConfigError(SkylogError, ValueError):
    """Router configuration values are invalid or conflict."""


__all__ = [
    "ChannelArgumentError",
    "RouterConfigError",
    "SkylogError",
]
