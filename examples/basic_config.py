#!/usr/bin/env python3
# /// script
# requires-python = ">=3.12"
# dependencies = [
#     "skylog @ {path = \"..\"}",
# ]
# ///
"""Demonstrate ``basic_config`` and console plus file channels."""

from __future__ import annotations

from pathlib import Path

from skylog import Level, basic_config, reset_router


def main() -> None:
    """Configure the default router and emit records at common levels.

    ``basic_config(level="INFO")`` binds standard error at ``INFO``, so the
    debug record is suppressed there. A second channel sends only errors to a
    log file next to this script.
    """
    router = basic_config(level="INFO")
    log_path = Path(__file__).with_suffix(".log")
    with log_path.open("ab") as errors_only:
        router.link_channel(errors_only, Level.ERROR)

        router.debug("debug suppressed")
        router.info("{0} reaches stderr", "info")
        router.warning("multi-line\nmessages stay on one line")
        router.error("errors reach {0} and {1}", "stderr", log_path.name)

        router.unlink_channel(errors_only)
    print("example finished", file=router.info_stream)
    reset_router()


if __name__ == "__main__":
    main()
