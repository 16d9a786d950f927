"""Tests for the default router and ``basic_config``."""

from __future__ import annotations

import io
import sys
import typing as typ

import pytest

from skylog import (
    BasicConfig,
    Level,
    RouterConfigError,
    basic_config,
    get_router,
    reset_router,
)

from .helpers import message_bodies

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_get_router_returns_same_instance() -> None:
    assert get_router() is get_router()


def test_reset_router_closes_and_replaces() -> None:
    first = get_router()
    reset_router()
    assert first.closed
    assert get_router() is not first


def test_basic_config_defaults_to_stderr_at_info() -> None:
    router = basic_config()
    assert router is get_router()
    assert router.channels == [(sys.stderr, Level.INFO)]


def test_basic_config_with_stream() -> None:
    sink = io.StringIO()
    router = basic_config(stream=sink, level="debug")
    router.debug("configured")
    router.flush()
    assert message_bodies(sink.getvalue()) == ["configured"]


def test_basic_config_accepts_dataclass() -> None:
    sink = io.StringIO()
    router = basic_config(BasicConfig(level=Level.ERROR, stream=sink))
    assert router.channels == [(sink, Level.ERROR)]


def test_basic_config_is_noop_when_already_configured() -> None:
    first, second = io.StringIO(), io.StringIO()
    basic_config(stream=first)
    router = basic_config(stream=second)
    assert router.channels == [(first, Level.INFO)]


def test_basic_config_force_replaces_channels() -> None:
    first, second = io.StringIO(), io.StringIO()
    basic_config(stream=first)
    router = basic_config(stream=second, level="warning", force=True)
    assert router.channels == [(second, Level.WARNING)]
    assert not first.closed


def test_basic_config_writes_file(tmp_path: Path) -> None:
    path = tmp_path / "app.log"
    router = basic_config(filename=path)
    router.info("to disk")
    reset_router()
    assert message_bodies(path.read_text()) == ["to disk"]


def test_basic_config_appends_to_existing_file(tmp_path: Path) -> None:
    path = tmp_path / "app.log"
    path.write_text("existing\n")
    basic_config(filename=str(path)).info("appended")
    reset_router()
    lines = path.read_text().splitlines()
    assert lines[0] == "existing"
    assert message_bodies("\n".join(lines[1:])) == ["appended"]


def test_basic_config_rejects_filename_and_stream(tmp_path: Path) -> None:
    with pytest.raises(RouterConfigError, match="both `filename` and `stream`"):
        basic_config(filename=tmp_path / "x.log", stream=io.StringIO())


def test_basic_config_rejects_unknown_keyword() -> None:
    with pytest.raises(TypeError, match="unexpected keyword argument 'format'"):
        basic_config(format="%(message)s")


def test_basic_config_rejects_mixed_arguments() -> None:
    with pytest.raises(TypeError, match="not both"):
        basic_config(BasicConfig(), level="INFO")  # type: ignore[call-overload]
