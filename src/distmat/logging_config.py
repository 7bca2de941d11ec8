"""
Logging Configuration
Sets up the package logger for scripts and notebooks.
"""

from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.INFO, log_file: str | None = None) -> logging.Logger:
    """
    Configure the ``distmat`` namespace logger.

    Importing distmat never installs handlers; call this from an application
    or script to see the package's records.

    Parameters
    ----------
    level : int, default=logging.INFO
        Logging level for the logger and its handlers.
    log_file : str | None, default=None
        Optional path to also write records to (overwritten).

    Returns
    -------
    logging.Logger
        The configured ``distmat`` logger.
    """
    logger = logging.getLogger("distmat")
    logger.setLevel(level)

    # Avoid duplicate records when called more than once
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S")

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger
