from __future__ import annotations

import collections.abc as cabc
import typing as typ
from datetime import datetime

import pytest

import skylog
from skylog import Router

from .helpers import FIXED_TIME, RouterFactory


@pytest.fixture
def router_factory() -> cabc.Iterator[RouterFactory]:
    """Return a factory creating routers that are closed after the test.

    Routers use a fixed clock so record timestamps are predictable; any
    :class:`skylog.RouterConfig` field may be overridden by keyword.
    """
    created: list[Router] = []

    def factory(**overrides: typ.Any) -> Router:
        overrides.setdefault("clock", _fixed_clock)
        router = Router(**overrides)
        created.append(router)
        return router

    try:
        yield factory
    finally:
        for router in created:
            router.close()


@pytest.fixture
def router(router_factory: RouterFactory) -> Router:
    """A router with the default configuration and a fixed clock."""
    return router_factory()


@pytest.fixture(autouse=True)
def _clean_default_router() -> cabc.Iterator[None]:
    """Reset the process-wide router before and after each test."""
    skylog.reset_router()
    try:
        yield
    finally:
        skylog.reset_router()


def _fixed_clock() -> datetime:
    return FIXED_TIME
