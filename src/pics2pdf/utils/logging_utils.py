"""
Logging utilities: generation progress for a UI, and plain CLI output.

A UI that runs PhotoSession.generate() on a worker thread passes a queue
and reads ProgressMessage items from it on its own thread. Only records
logged by the generating thread are forwarded, so two sessions sharing
the package logger do not see each other's progress.
"""
from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from queue import Queue
from typing import Iterator

PACKAGE_LOGGER = "pics2pdf"


@dataclass(frozen=True)
class ProgressMessage:
    """
    One progress line for display.

    Attributes:
        text: Formatted message, e.g. "Generated 2 pages with 5 images in 0.41s"
        level: "INFO", "WARNING" or "ERROR" (DEBUG is reported as INFO)
        source: Logger that produced it, e.g. "pics2pdf.builder.controller"
    """

    text: str
    level: str
    source: str


class ProgressLogHandler(logging.Handler):
    """Forward one thread's pipeline log records to a queue as ProgressMessage."""

    def __init__(self, progress_queue: Queue, thread_id: int, level: int = logging.INFO):
        super().__init__(level)
        self.progress_queue = progress_queue
        self.thread_id = thread_id
        self.setFormatter(logging.Formatter("%(message)s"))

    def filter(self, record: logging.LogRecord) -> bool:
        return record.thread == self.thread_id and super().filter(record)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = "INFO" if record.levelno < logging.INFO else record.levelname
            self.progress_queue.put(ProgressMessage(self.format(record), level, record.name))
        except Exception:
            self.handleError(record)


@contextmanager
def progress_to_queue(
    progress_queue: Queue,
    level: int = logging.INFO,
    logger_name: str = PACKAGE_LOGGER,
) -> Iterator[ProgressLogHandler]:
    """
    Forward the current thread's pics2pdf log records to progress_queue.

    The handler is removed when the block exits, including on error.

    Example:
        >>> with progress_to_queue(ui_queue):
        ...     generate_document(entries, geometry)
    """
    logger = logging.getLogger(logger_name)
    handler = ProgressLogHandler(progress_queue, threading.get_ident(), level)
    logger.addHandler(handler)
    # A logger left at NOTSET inherits WARNING from root; progress needs INFO
    previous_level = logger.level
    if logger.getEffectiveLevel() > level:
        logger.setLevel(level)
    try:
        yield handler
    finally:
        logger.removeHandler(handler)
        logger.setLevel(previous_level)


def configure_cli_logging(verbose: bool = False) -> None:
    """Plain message output on stderr; DEBUG with verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        force=True,
    )
