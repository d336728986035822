"""Shared helpers (logging)."""

from .logging_utils import (
    ProgressLogHandler,
    ProgressMessage,
    configure_cli_logging,
    progress_to_queue,
)

__all__ = [
    "ProgressLogHandler",
    "ProgressMessage",
    "configure_cli_logging",
    "progress_to_queue",
]
