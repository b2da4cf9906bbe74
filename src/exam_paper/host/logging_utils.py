"""
Logging utilities for showing export progress in a GUI console.

Records from the exam_paper loggers are formatted and pushed to a queue
as (message, level) tuples; the GUI drains the queue on its own thread.
"""
from __future__ import annotations

import logging
from queue import Queue
from typing import Optional

CONSOLE_FORMAT = "%(asctime)s %(message)s"
CONSOLE_DATEFMT = "%H:%M:%S"

# Console levels: DEBUG chatter is shown as plain progress
CONSOLE_LEVELS = {
    "DEBUG": "INFO",
    "INFO": "INFO",
    "WARNING": "WARNING",
    "ERROR": "ERROR",
    "CRITICAL": "ERROR",
}


class QueueLogHandler(logging.Handler):
    """
    Logging handler that forwards formatted records to a queue.

    Example:
        >>> handler = QueueLogHandler(log_queue)
        >>> logging.getLogger("exam_paper").addHandler(handler)
        >>> log_queue.get()
        ('12:00:01 Export completed in 0.42s', 'INFO')
    """

    def __init__(self, log_queue: Queue, level: int = logging.INFO):
        super().__init__(level)
        self.log_queue = log_queue
        self.setFormatter(logging.Formatter(CONSOLE_FORMAT, datefmt=CONSOLE_DATEFMT))

    def emit(self, record: logging.LogRecord) -> None:
        try:
            console_level = CONSOLE_LEVELS.get(record.levelname, "INFO")
            self.log_queue.put((self.format(record), console_level))
        except Exception:
            self.handleError(record)


def attach_queue_handler(
    log_queue: Queue,
    logger_name: Optional[str] = "exam_paper",
    level: int = logging.INFO,
) -> QueueLogHandler:
    """
    Forward records of a logger (the package logger by default) to a queue.

    Lowers the logger's level to `level` if it would otherwise drop them.

    Returns:
        The attached handler, for detach_queue_handler()
    """
    logger = logging.getLogger(logger_name)
    handler = QueueLogHandler(log_queue, level)
    logger.addHandler(handler)
    if logger.getEffectiveLevel() > level:
        logger.setLevel(level)
    return handler


def detach_queue_handler(handler: QueueLogHandler, logger_name: Optional[str] = "exam_paper") -> None:
    """Stop forwarding records to the handler's queue."""
    logging.getLogger(logger_name).removeHandler(handler)
    handler.close()
