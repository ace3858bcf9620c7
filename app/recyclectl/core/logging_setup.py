"""Logging configuration for the recyclectl command line.

Library modules only create module-level loggers; the CLI entry point
calls setup_logging() once to decide where records go.
"""

import logging
import sys

LOGGER_NAME = "recyclectl"

_FORMAT = "%(levelname)s %(name)s: %(message)s"
_VERBOSE_FORMAT = "%(asctime)s - %(levelname)s - %(name)s - %(message)s"


def setup_logging(verbose: bool = False, quiet: bool = False) -> logging.Logger:
    """Attach a stderr handler to the package logger.

    Handlers from an earlier call are replaced, never flushed or stacked:
    repeated CLI invocations in one process (tests) may have closed the
    stderr the old handler was bound to.

    Args:
        verbose: Log debug records with timestamps.
        quiet: Only log errors.

    Returns:
        The configured package logger.
    """
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)

    for old in list(logger.handlers):
        logger.removeHandler(old)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter(_VERBOSE_FORMAT if verbose else _FORMAT))
    logger.addHandler(handler)
    logger.propagate = False

    return logger
