"""Logging configuration for the document repository browser.

Navigation and session code logs through loguru; the HTTP client keeps a
stdlib ``logging`` logger named "api", configured here at the same level.
"""

import logging
import sys

from loguru import logger


def configure_logging(*, verbose: bool = False) -> None:
    """Configure loguru and the HTTP client's logger with one verbosity."""
    level = "DEBUG" if verbose else "INFO"

    logger.remove()
    logger.add(sys.stderr, level=level, format="{level.icon} {message}")

    logging.basicConfig(
        level=logging.WARNING,
        format="[%(levelname).1s] %(name)s: %(message)s",
        stream=sys.stderr,
        force=True,
    )
    logging.getLogger("api").setLevel(level)
