"""skylog package."""

from __future__ import annotations

import logging

from .adapter import RouterHandler, install
from .builder import RouterBuilder
from .channel import Channel, Sink
from .config import RouterConfig
from .context import current_identity, execution_unit
from .errors import ChannelArgumentError, RouterConfigError, SkylogError
from .formatting import TIMESTAMP_FORMAT, escape_controls, format_record, substitute
from .levels import Level, LevelArg
from .manager import BasicConfig, basic_config, get_router, reset_router
from .router import Router
from .stream import MAX_LINE_LENGTH, LogStream

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "MAX_LINE_LENGTH",
    "TIMESTAMP_FORMAT",
    "BasicConfig",
    "Channel",
    "ChannelArgumentError",
    "Level",
    "LevelArg",
    "LogStream",
    "Router",
    "RouterBuilder",
    "RouterConfig",
    "RouterConfigError",
    "RouterHandler",
    "Sink",
    "SkylogError",
    "basic_config",
    "current_identity",
    "escape_controls",
    "execution_unit",
    "format_record",
    "get_router",
    "install",
    "reset_router",
    "substitute",
]
