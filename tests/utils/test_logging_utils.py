"""
Tests for the progress bridge that feeds pipeline log records to a UI queue.
"""

import logging
import threading
from queue import Queue

import pytest

from pics2pdf.utils.logging_utils import (
    PACKAGE_LOGGER,
    ProgressLogHandler,
    ProgressMessage,
    progress_to_queue,
)


def _drain(queue: Queue) -> list:
    items = []
    while not queue.empty():
        items.append(queue.get_nowait())
    return items


@pytest.fixture
def package_logger():
    logger = logging.getLogger(PACKAGE_LOGGER)
    previous = logger.level
    yield logger
    logger.setLevel(previous)


class TestProgressLogHandler:
    """Tests for ProgressLogHandler."""

    def _record(self, level, msg, args=None, name="pics2pdf.builder.controller"):
        return logging.LogRecord(name, level, __file__, 1, msg, args, None)

    def test_handle_when_warning_then_progress_message_queued(self):
        queue = Queue()
        handler = ProgressLogHandler(queue, threading.get_ident())

        handler.handle(self._record(logging.WARNING, "No images selected!"))

        assert _drain(queue) == [
            ProgressMessage("No images selected!", "WARNING", "pics2pdf.builder.controller")
        ]

    def test_handle_when_debug_then_reported_as_info(self):
        queue = Queue()
        handler = ProgressLogHandler(queue, threading.get_ident(), level=logging.DEBUG)

        handler.handle(self._record(logging.DEBUG, "Started page %d", (2,)))

        (message,) = _drain(queue)
        assert message.text == "Started page 2"
        assert message.level == "INFO"

    def test_handle_when_record_from_other_thread_then_dropped(self):
        queue = Queue()
        handler = ProgressLogHandler(queue, thread_id=threading.get_ident() + 1)

        handler.handle(self._record(logging.INFO, "someone else's run"))

        assert queue.empty()


class TestProgressToQueue:
    """Tests for the progress_to_queue() context manager."""

    def test_progress_when_pipeline_logs_info_then_queued(self, package_logger):
        # Arrange
        queue = Queue()

        # Act
        with progress_to_queue(queue):
            logging.getLogger("pics2pdf.builder.controller").info("Generated 2 pages")

        # Assert
        (message,) = _drain(queue)
        assert message.text == "Generated 2 pages"
        assert message.source == "pics2pdf.builder.controller"

    def test_progress_when_debug_below_level_then_not_queued(self, package_logger):
        queue = Queue()

        with progress_to_queue(queue):
            logging.getLogger("pics2pdf.builder").debug("noise")

        assert queue.empty()

    def test_progress_when_block_exits_then_handler_removed_and_level_restored(self, package_logger):
        queue = Queue()
        package_logger.setLevel(logging.NOTSET)

        with progress_to_queue(queue) as handler:
            assert handler in package_logger.handlers
        package_logger.warning("after the block")

        assert handler not in package_logger.handlers
        assert package_logger.level == logging.NOTSET
        assert queue.empty()

    def test_progress_when_block_raises_then_handler_removed(self, package_logger):
        queue = Queue()

        with pytest.raises(RuntimeError):
            with progress_to_queue(queue) as handler:
                raise RuntimeError("generation failed")

        assert handler not in package_logger.handlers

    def test_progress_when_other_thread_logs_then_not_queued(self, package_logger):
        queue = Queue()

        with progress_to_queue(queue):
            worker = threading.Thread(
                target=lambda: logging.getLogger("pics2pdf.builder").warning("other run")
            )
            worker.start()
            worker.join()

        assert queue.empty()
