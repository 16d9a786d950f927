"""Tests for :class:`skylog.RouterHandler`, the stdlib ``logging`` bridge."""

from __future__ import annotations

import io
import logging
import typing as typ

import pytest

from skylog import Level, Router, RouterHandler, install

from .helpers import message_bodies, record_levels

if typ.TYPE_CHECKING:
    import collections.abc as cabc


@pytest.fixture
def sink(router: Router) -> io.StringIO:
    out = io.StringIO()
    router.link_channel(out, Level.STACKTRACE)
    return out


@pytest.fixture
def std_logger(router: Router) -> cabc.Iterator[logging.Logger]:
    logger = logging.getLogger("skylog.tests.bridge")
    logger.setLevel(1)
    logger.propagate = False
    handler = RouterHandler(router)
    logger.addHandler(handler)
    try:
        yield logger
    finally:
        logger.removeHandler(handler)
        handler.close()


@pytest.mark.parametrize(
    ("levelno", "expected"),
    [
        (logging.CRITICAL, "FATAL"),
        (logging.ERROR, "ERROR"),
        (logging.WARNING, "WARNING"),
        (logging.INFO, "INFO"),
        (logging.DEBUG, "DEBUG"),
        (5, "TRACE"),
        (1, "STACKTRACE"),
        (25, "INFO"),
    ],
)
def test_stdlib_levels_are_mapped(
    router: Router,
    sink: io.StringIO,
    std_logger: logging.Logger,
    levelno: int,
    expected: str,
) -> None:
    std_logger.log(levelno, "mapped")
    router.flush()
    assert record_levels(sink.getvalue()) == [expected]


def test_stdlib_arguments_are_applied_once(
    router: Router, sink: io.StringIO, std_logger: logging.Logger
) -> None:
    std_logger.info("user %s has {0} items", "alice")
    router.flush()
    assert message_bodies(sink.getvalue()) == ["user alice has {0} items"]


def test_formatter_is_used_when_set(
    router: Router, sink: io.StringIO, std_logger: logging.Logger
) -> None:
    handler = std_logger.handlers[0]
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    std_logger.warning("formatted")
    router.flush()
    assert message_bodies(sink.getvalue()) == ["skylog.tests.bridge: formatted"]


def test_exc_info_is_logged_as_traceback(
    router: Router, sink: io.StringIO, std_logger: logging.Logger
) -> None:
    handler = std_logger.handlers[0]
    handler.setFormatter(logging.Formatter("%(message)s"))
    try:
        {}["missing"]  # noqa: B018
    except KeyError:
        std_logger.exception("lookup failed")
    router.flush()
    levels = record_levels(sink.getvalue())
    bodies = message_bodies(sink.getvalue())
    assert bodies[:2] == ["lookup failed", "KeyError: 'missing'"]
    assert levels[:2] == ["ERROR", "ERROR"]
    assert set(levels[2:]) == {"STACKTRACE"}
    assert bodies[2] == "Traceback (most recent call last):"


def test_handler_level_filters_records(
    router: Router, sink: io.StringIO, std_logger: logging.Logger
) -> None:
    std_logger.handlers[0].setLevel(logging.WARNING)
    std_logger.info("dropped")
    std_logger.error("kept")
    router.flush()
    assert message_bodies(sink.getvalue()) == ["kept"]


def test_handler_flush_flushes_router(router: Router) -> None:
    out = io.StringIO()
    router.link_channel(out)
    handler = RouterHandler(router)
    router.info("pending")
    handler.flush()
    assert message_bodies(out.getvalue()) == ["pending"]


def test_handler_requires_router() -> None:
    with pytest.raises(TypeError, match="expected a Router instance"):
        RouterHandler(object())  # type: ignore[arg-type]


def test_install_attaches_once(router: Router) -> None:
    target = logging.getLogger("skylog.tests.install")
    try:
        handler = install(router, target)
        assert handler in target.handlers
        with pytest.warns(RuntimeWarning, match="already installed"):
            again = install(router, target)
        assert again is handler
        assert target.handlers.count(handler) == 1
    finally:
        for h in list(target.handlers):
            target.removeHandler(h)
