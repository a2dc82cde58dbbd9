"""
Logger configuration.

Host scripts call configure_logging() once at start-up; library modules
only ever use logging.getLogger(__name__).

Dependencies: logging (stdlib), recordaccess.configs
System role: Centralized logging configuration
"""

import logging
import sys
from typing import TextIO

from recordaccess.configs import get_settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Loggers of the HTTP stack; per-request lines only at DEBUG
HTTP_LOGGERS = ("httpx", "httpcore")


def configure_logging(level: str | None = None, stream: TextIO | None = None) -> None:
    """
    Replace root handlers with a single stream handler.

    Args:
        level: Root log level name; defaults to the LOG_LEVEL setting
        stream: Output stream (stdout if None)
    """
    level_name = (level or get_settings().log_level).upper()

    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))

    root_logger = logging.getLogger()
    for existing in root_logger.handlers[:]:
        root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(level_name)

    http_level = logging.DEBUG if level_name == "DEBUG" else logging.WARNING
    for name in HTTP_LOGGERS:
        logging.getLogger(name).setLevel(http_level)


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)
