"""Logging configuration for the application.

This module provides centralized logging configuration.
Import `get_logger` to create loggers in other modules.
"""

import logging
import sys
from functools import lru_cache
from typing import TextIO


def configure_logging(debug: bool = False, stream: TextIO = sys.stdout) -> None:
    """Configure logging for the application.

    This should be called once at startup (the CLI does it before running
    the pipeline). Output is diagnostic only and goes to stdout by default.

    Args:
        debug: Lower the package log level to DEBUG
        stream: Where records are written (the CLI passes stderr so its
            report on stdout stays clean)
    """
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(stream)],
        force=True,  # Override any existing configuration
    )

    logging.getLogger("phishpane").setLevel(logging.DEBUG if debug else logging.INFO)

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


@lru_cache(maxsize=None)
def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for the given module name.

    Uses caching to return the same logger instance for repeated calls.

    Args:
        name: The module name, typically __name__

    Returns:
        Configured logger instance

    Example:
        from phishpane.utils.logging import get_logger
        logger = get_logger(__name__)
        logger.info("This is an info message")
    """
    return logging.getLogger(name)
