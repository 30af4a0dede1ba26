"""Console and file logging for scripts that run face calculations.

Library modules only create ``logging.getLogger(__name__)`` loggers under
the ``tunnelface`` namespace and never attach handlers.  Scripts opt in::

    from tunnelface.logging_config import setup_logging
    setup_logging(logging.DEBUG, "face.log")
"""

from __future__ import annotations

import logging
import sys

#: Namespace logger shared by all tunnelface modules.
LOGGER_NAME = "tunnelface"

#: Record layout: time, module, level, message.
LOG_FORMAT = "%(asctime)s %(levelname)-7s [%(name)s] %(message)s"
DATE_FORMAT = "%H:%M:%S"


def _attach(logger: logging.Logger, handler: logging.Handler, level: int) -> None:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt=DATE_FORMAT))
    logger.addHandler(handler)


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """Route tunnelface log records to stdout and optionally a file.

    Calling it again replaces the handlers installed previously.

    Args:
        level: Threshold for the namespace logger and its handlers.
        log_file: Path of a log file, overwritten on each call.

    Returns:
        The ``tunnelface`` logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    _attach(logger, logging.StreamHandler(sys.stdout), level)
    if log_file is not None:
        _attach(logger, logging.FileHandler(log_file, mode="w", encoding="utf-8"), level)
    return logger
