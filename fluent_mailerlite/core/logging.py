"""
Shared logging configuration for fluent-mailerlite.

Every component logs under the ``mailerlite`` logger (``mailerlite.http``,
``mailerlite.resources.groups``, ...). ``configure_logging`` attaches its
handlers to that logger only, so an application embedding the package keeps
control of its own root logger.
"""

from __future__ import annotations

import logging
import os
from typing import Optional

from .config import LoggingConfig


PACKAGE_LOGGER = "mailerlite"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s [%(message)s]"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Silent until configure_logging() runs or the host configures logging.
logging.getLogger(PACKAGE_LOGGER).addHandler(logging.NullHandler())


def _file_handler(path: str, level: int, formatter: logging.Formatter) -> logging.Handler:
    handler = logging.FileHandler(path)
    handler.setLevel(level)
    handler.setFormatter(formatter)
    return handler


def configure_logging(config: Optional[LoggingConfig] = None) -> None:
    """
    Configure file and console logging for the ``mailerlite`` logger.

    Writes ``error.log``, ``warning.log`` and ``debug.log`` under
    ``config.log_dir`` plus a console stream. Records stop at the package
    logger instead of propagating to the root logger.

    This function is idempotent: calling it multiple times will not
    re-add handlers if they already exist.
    """

    if config is None:
        config = LoggingConfig()

    package_logger = logging.getLogger(PACKAGE_LOGGER)

    if getattr(package_logger, "_mailerlite_logging_configured", False):
        return

    log_dir = config.log_dir
    os.makedirs(log_dir, exist_ok=True)

    level = config.log_level.upper()
    package_logger.setLevel(level)
    package_logger.propagate = False

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)

    for handler in (
        _file_handler(os.path.join(log_dir, "error.log"), logging.ERROR, formatter),
        _file_handler(os.path.join(log_dir, "warning.log"), logging.WARNING, formatter),
        _file_handler(os.path.join(log_dir, "debug.log"), logging.DEBUG, formatter),
        console_handler,
    ):
        package_logger.addHandler(handler)

    package_logger._mailerlite_logging_configured = True  # type: ignore[attr-defined]


def get_logger(name: str) -> logging.Logger:
    """
    Logger for a module or subsystem; ``name`` should sit under ``mailerlite``.
    """

    return logging.getLogger(name)
