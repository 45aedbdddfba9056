"""Logging setup for ghkit.

Every module logs through a child of the ``ghkit`` logger
(``logging.getLogger(__name__)``). The library itself only attaches a
``NullHandler``; applications decide where records go.

What gets logged:
    DEBUG: each request and its status, each fetched page
    WARNING: transport failures and rate-limit retries

Example:
    >>> import logging
    >>> logging.getLogger("ghkit").setLevel(logging.DEBUG)

"""

from __future__ import annotations

import logging
import sys
from typing import TextIO

LOGGER_NAME = "ghkit"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(LOGGER_NAME)
logger.setLevel(logging.WARNING)
logger.addHandler(logging.NullHandler())


def configure_logging(
    level: int = logging.INFO,
    format_string: str | None = None,
    stream: TextIO | None = None,
) -> logging.Handler:
    """Send ghkit's log records to a stream.

    A convenience for scripts and the CLI. Applications with their own
    logging setup should configure the ``ghkit`` logger there instead.

    Args:
        level: Logging level (e.g., logging.DEBUG, logging.INFO).
        format_string: Custom format string for log messages.
        stream: Output stream (defaults to sys.stderr).

    Returns:
        The handler that was attached, so callers can remove it again.

    Example:
        >>> from ghkit.utils.logger import configure_logging
        >>> configure_logging(level=logging.DEBUG)

    """
    handler = logging.StreamHandler(stream or sys.stderr)
    handler.setFormatter(logging.Formatter(format_string or DEFAULT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
