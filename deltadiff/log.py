"""Logging setup for deltadiff.

Events go to stdout; everything logged here goes to stderr.
"""

from __future__ import annotations

import logging
import sys

CONSOLE_FORMAT = "%(levelname)s: %(message)s"
DEBUG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: int = logging.WARNING) -> None:
    """Configure the 'deltadiff' logger namespace.

    The root logger is left at WARNING. Calling this twice replaces the
    handler instead of stacking a second one.
    """
    logging.getLogger().setLevel(logging.WARNING)

    app_logger = logging.getLogger("deltadiff")
    app_logger.setLevel(level)
    for h in list(app_logger.handlers):
        app_logger.removeHandler(h)

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(level)
    fmt = DEBUG_FORMAT if level <= logging.DEBUG else CONSOLE_FORMAT
    console.setFormatter(logging.Formatter(fmt))
    app_logger.addHandler(console)

    app_logger.propagate = False


def verbosity_to_level(verbose: int) -> int:
    """Map a ``-v`` count to a logging level."""
    if verbose >= 2:
        return logging.DEBUG
    if verbose == 1:
        return logging.INFO
    return logging.WARNING


def get_logger(name: str) -> logging.Logger:
    """Return a logger under the 'deltadiff' namespace."""
    return logging.getLogger("deltadiff").getChild(name)
