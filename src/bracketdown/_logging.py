"""Logging configuration for bracketdown.

This module provides consistent logging across the codebase.

Usage in other modules:
    import logging
    log = logging.getLogger(__name__)

    log.debug("Detailed info for debugging")
    log.info("General operational info")
    log.warning("Unexpected but handled situation")

The log level can be configured via the BRACKETDOWN_LOG_LEVEL environment variable:
    - DEBUG: Parser fallbacks and per-file conversion detail
    - INFO: General operational messages
    - WARNING: Skipped files and other handled problems (default)
    - ERROR: Errors that prevented an operation
"""

import logging
import os
import sys

PACKAGE_LOGGER = "bracketdown"


def configure_logging(level: int | None = None) -> None:
    """Configure logging for the bracketdown package.

    Call this once at application startup (e.g., in cli.py).
    Subsequent calls only adjust the level.

    Args:
        level: Explicit level; overrides BRACKETDOWN_LOG_LEVEL when given.
    """
    root_logger = logging.getLogger(PACKAGE_LOGGER)

    if level is None:
        level_name = os.environ.get("BRACKETDOWN_LOG_LEVEL", "WARNING").upper()
        level = getattr(logging, level_name, logging.WARNING)

    if root_logger.handlers:
        root_logger.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stderr)

    # Use a clean format: [level] logger: message
    formatter = logging.Formatter(fmt="[%(levelname)s] %(name)s: %(message)s")
    handler.setFormatter(formatter)

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    # Prevent propagation to root logger (avoids duplicate messages)
    root_logger.propagate = False


def set_quiet_mode(quiet: bool) -> None:
    """Suppress everything below ERROR when quiet is set."""
    if quiet:
        logging.getLogger(PACKAGE_LOGGER).setLevel(logging.ERROR)
