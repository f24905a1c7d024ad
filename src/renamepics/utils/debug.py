"""Logging setup for renamepics.

Provides setup_logger() plus debug(), info(), warn(), error() helpers for
consistent logging. Console verbosity is controlled by the RENAMEPICS_DEBUG
environment variable; the optional log file always receives every record.
"""

import logging
import os
import sys
from pathlib import Path
from typing import Optional

DEBUG_ON = os.getenv("RENAMEPICS_DEBUG", "0") == "1"
LOG_FORMAT = "[%(levelname)s] %(asctime)s %(message)s"
FILE_LOG_FORMAT = "%(levelname)s: %(message)s"

_stream_handler: Optional[logging.StreamHandler] = None  # type: ignore[type-arg]
_file_handler: Optional[logging.FileHandler] = None


def setup_logger(log_file: Optional[Path] = None) -> logging.Logger:
    """Configure and return the ``renamepics`` package logger.

    Module loggers (``logging.getLogger(__name__)``) propagate to it. The
    console handler shows warnings and errors (everything when debugging);
    calling again rebinds it to the current ``sys.stderr``.

    Args:
        log_file: Optional file that receives every record. Replaces the file
            handler of a previous call and is truncated on setup.
    """
    global _stream_handler, _file_handler
    logger = logging.getLogger("renamepics")
    logger.setLevel(logging.DEBUG)

    if _stream_handler is None:
        _stream_handler = logging.StreamHandler(sys.stderr)
        _stream_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        _stream_handler.setLevel(logging.DEBUG if DEBUG_ON else logging.WARNING)
        logger.addHandler(_stream_handler)
    else:
        # setStream() would flush the previous stream, which may be closed.
        _stream_handler.stream = sys.stderr

    if log_file is not None:
        if _file_handler is not None:
            logger.removeHandler(_file_handler)
            _file_handler.close()
        _file_handler = logging.FileHandler(log_file, mode="w", encoding="utf-8")
        _file_handler.setFormatter(logging.Formatter(FILE_LOG_FORMAT))
        _file_handler.setLevel(logging.DEBUG)
        logger.addHandler(_file_handler)
    return logger


def close_log_file() -> None:
    """Detach and close the log file handler, if one is attached."""
    global _file_handler
    if _file_handler is not None:
        logging.getLogger("renamepics").removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None


def debug(msg: str) -> None:
    """Log a debug message if debugging is enabled."""
    if DEBUG_ON:
        setup_logger().debug(msg)


def info(msg: str) -> None:
    """Log an info message."""
    setup_logger().info(msg)


def warn(msg: str) -> None:
    """Log a warning message."""
    setup_logger().warning(msg)


def error(msg: str) -> None:
    """Log an error message."""
    setup_logger().error(msg)
