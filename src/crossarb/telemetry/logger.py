"""
Queue-based logging setup.

Log records are queued by the event loop and written by a background
listener thread, so slow console or file I/O never stalls a pass.
"""

import logging
import sys
from logging.handlers import QueueHandler, QueueListener
from pathlib import Path
from queue import Queue

from crossarb.config.constants import LOG_DATE_FORMAT, LOG_FORMAT, MAX_LOG_QUEUE_SIZE


class MillisecondFormatter(logging.Formatter):
    """Formatter with millisecond precision timestamps."""

    def formatTime(self, record: logging.LogRecord, datefmt: str | None = None) -> str:
        s = super().formatTime(record, datefmt or LOG_DATE_FORMAT)
        return f"{s}.{int(record.msecs):03d}"


class AsyncLogger:
    """
    Queue-backed root logging.

    All logging calls are non-blocking - messages are queued
    and written by a background thread.
    """

    def __init__(
        self,
        level: int = logging.INFO,
        log_file: Path | None = None,
    ) -> None:
        """
        Initialize async logger.

        Args:
            level: Logging level.
            log_file: Optional file path for logging.
        """
        self._level = level
        self._log_file = log_file
        self._queue: Queue[logging.LogRecord] = Queue(maxsize=MAX_LOG_QUEUE_SIZE)
        self._listener: QueueListener | None = None
        self._queue_handler: QueueHandler | None = None

    def start(self) -> None:
        """Attach the queue handler to the root logger and start the listener."""
        formatter = MillisecondFormatter(LOG_FORMAT, LOG_DATE_FORMAT)

        handlers: list[logging.Handler] = []

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        console_handler.setLevel(self._level)
        handlers.append(console_handler)

        if self._log_file:
            self._log_file.parent.mkdir(parents=True, exist_ok=True)
            file_handler = logging.FileHandler(self._log_file)
            file_handler.setFormatter(formatter)
            file_handler.setLevel(logging.DEBUG)  # Log everything to file
            handlers.append(file_handler)

        self._queue_handler = QueueHandler(self._queue)
        logging.getLogger().addHandler(self._queue_handler)

        self._listener = QueueListener(
            self._queue,
            *handlers,
            respect_handler_level=True,
        )
        self._listener.start()

    def stop(self) -> None:
        """Flush and stop the listener."""
        if self._listener:
            self._listener.stop()
            for handler in self._listener.handlers:
                handler.close()
            self._listener = None

        if self._queue_handler:
            logging.getLogger().removeHandler(self._queue_handler)
            self._queue_handler = None

    def __enter__(self) -> "AsyncLogger":
        self.start()
        return self

    def __exit__(self, *args: object) -> None:
        self.stop()


def setup_logging(
    level: str = "INFO",
    log_file: Path | None = None,
) -> AsyncLogger:
    """
    Set up application-wide logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR).
        log_file: Optional log file path.

    Returns:
        Started AsyncLogger; call `stop()` on shutdown.
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)

    root_logger = logging.getLogger()
    # File output is always DEBUG, so the root must let everything through
    root_logger.setLevel(logging.DEBUG if log_file else numeric_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    async_logger = AsyncLogger(level=numeric_level, log_file=log_file)
    async_logger.start()

    # Suppress noisy third-party loggers
    logging.getLogger("aiohttp").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)

    return async_logger
