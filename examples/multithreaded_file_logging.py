#!/usr/bin/env python3
# /// script
# requires-python = ">=3.12"
# dependencies = [
#     "skylog @ {path = \"..\"}",
# ]
# ///
"""Demonstrate skylog's builder API with a file channel in many threads."""

from __future__ import annotations

import logging
from pathlib import Path
from random import randint
from threading import Thread

from skylog import Router, RouterBuilder, install


def configure(log_file: object) -> Router:
    """Build a router writing ``DEBUG`` and above to ``log_file``.

    Parameters
    ----------
    log_file : object
        Open binary file receiving the records.

    Notes
    -----
    Records from the standard :mod:`logging` module are forwarded too, so
    library output lands in the same file with the same layout.

    """
    router = (
        RouterBuilder()
        .with_flush_interval(0.5)
        .with_channel(log_file, "DEBUG")
        .build()
    )
    install(router, logging.getLogger("example.stdlib"))
    logging.getLogger("example.stdlib").setLevel(logging.INFO)
    return router


def worker(router: Router, thread_id: int) -> None:
    """Generate and log a random range of integers."""
    start = randint(0, 1000)
    stop = start + randint(10, 100)
    for value in range(start, stop):
        router.debug("thread {0} produced {1}", thread_id, value)
    logging.getLogger("example.stdlib").info("thread %d done", thread_id)


def main() -> None:
    """Configure logging and spawn worker threads."""
    log_path = Path(__file__).with_suffix(".log")
    with log_path.open("ab") as log_file, configure(log_file) as router:
        threads = [
            Thread(target=worker, args=(router, i), name=f"worker-{i}")
            for i in range(64)
        ]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()


if __name__ == "__main__":
    main()
