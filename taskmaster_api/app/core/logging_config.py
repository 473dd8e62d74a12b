"""
Logging configuration for the TaskMaster API.

``setup_logging`` configures the ``taskmaster_api`` package logger from
the application settings instead of the root logger, so uvicorn and
test runners keep control of their own handlers.  Records still
propagate upwards.  The function is called by every ``create_app``; a
console handler is attached once, and a file handler once per log file.
"""

import logging
from pathlib import Path

from .config import Settings


PACKAGE_LOGGER = "taskmaster_api"

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _has_handler(logger: logging.Logger, kind: type, path: str = "") -> bool:
    for handler in logger.handlers:
        if type(handler) is not kind:
            continue
        if not path or getattr(handler, "baseFilename", "") == path:
            return True
    return False


def setup_logging(app_settings: Settings) -> logging.Logger:
    """Configure and return the package logger.

    The level comes from ``app_settings.log_level`` (case insensitive,
    unknown names fall back to INFO).  When ``app_settings.log_file`` is
    set, records are also appended to that file.
    """
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(getattr(logging, app_settings.log_level.upper(), logging.INFO))
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)

    if not _has_handler(logger, logging.StreamHandler):
        console_handler = logging.StreamHandler()
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

    if app_settings.log_file:
        log_path = str(Path(app_settings.log_file).resolve())
        if not _has_handler(logger, logging.FileHandler, log_path):
            file_handler = logging.FileHandler(log_path, encoding="utf-8")
            file_handler.setFormatter(formatter)
            logger.addHandler(file_handler)

    return logger
