"""Logging setup for the ``tactilebrush`` namespace.

Library modules only create module-level loggers; handlers are attached here,
by the CLI or by an application embedding the library.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

LOGGER_NAME = "tactilebrush"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO, log_file: Optional[str] = None) -> logging.Logger:
    """Configure the ``tactilebrush`` logger.

    Args:
        level: Logging level (e.g. ``logging.DEBUG``).
        log_file: Optional path of a file receiving the same records.

    Returns:
        The configured package logger.
    """
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    # Reconfiguring must not duplicate records
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug("Logging initialized.")
    return logger
