"""
Logging configuration for the command-line tools.
"""
from __future__ import annotations

import logging
import sys
from typing import Optional, Sequence

LOGGER_NAMESPACES = ("bounce_core", "bounce_io", "analysis", "plots", "scenarios", "scripts")


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    namespaces: Sequence[str] = LOGGER_NAMESPACES,
) -> None:
    """
    Configures console (and optional file) output for the project loggers.

    Args:
        level: Logging level (e.g. logging.DEBUG, logging.INFO)
        log_file: Optional path to save logs to a file.
        namespaces: Top-level logger names to configure.
    """
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%H:%M:%S'
    )

    handlers: list[logging.Handler] = []
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    handlers.append(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w', encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    for name in namespaces:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        # Avoid duplicate output when called twice in one process
        for old in list(logger.handlers):
            logger.removeHandler(old)
            old.close()
        for handler in handlers:
            logger.addHandler(handler)
        logger.propagate = False

    logging.getLogger("bounce_core").debug("Logging initialized.")
