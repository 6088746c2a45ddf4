"""Centralized logging setup for the QuickHelp OCR service.

Provides a structured logging configuration with consistent formatting
across all modules, and routes the uvicorn server's own loggers through
the same root handler.
"""

import logging
import sys

SERVER_LOGGERS = ("uvicorn", "uvicorn.error", "uvicorn.access")


def align_server_loggers(level: int) -> None:
    """Make uvicorn's loggers propagate to the root handler at ``level``.

    Args:
        level: Numeric logging level applied to every server logger.
    """
    for name in SERVER_LOGGERS:
        server_logger = logging.getLogger(name)
        server_logger.handlers.clear()
        server_logger.propagate = True
        server_logger.setLevel(level)


def setup_logging(level: str = "INFO") -> None:
    """Configure the root logger with a standard format.

    Server loggers are aligned with ``level`` on every call; the root
    handler is only installed once.

    Args:
        level: Logging level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
    """
    numeric_level = getattr(logging, level.upper(), logging.INFO)
    align_server_loggers(numeric_level)
    root = logging.getLogger()

    if root.handlers:
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
    root.setLevel(numeric_level)


def get_logger(name: str) -> logging.Logger:
    """Get a named logger instance.

    Args:
        name: Logger name, typically ``__name__`` of the calling module.

    Returns:
        Configured logger instance.
    """
    return logging.getLogger(name)
