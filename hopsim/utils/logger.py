"""Logging setup shared by all simulator components."""

import logging
import sys
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
ROOT_LOGGER_NAME = "hopsim"


def _package_logger() -> logging.Logger:
    """The ``hopsim`` logger that owns the single stream handler."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    if not root.handlers:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        root.setLevel(logging.INFO)
        root.propagate = False
    return root


def setup_logger(
    name: str,
    level: Optional[Union[str, int]] = None,
    verbose: bool = False,
) -> logging.Logger:
    """Create or fetch a named logger under the ``hopsim`` hierarchy.

    Named loggers carry no level of their own and propagate to the
    ``hopsim`` logger, so a level set once (e.g. by ``--verbose``) applies
    to every component.

    Args:
        name: Logger name (usually the class name)
        level: Logging level name or number for the whole hierarchy;
            left unchanged when None
        verbose: Set DEBUG for the whole hierarchy regardless of ``level``

    Returns:
        Configured logger
    """
    root = _package_logger()

    if verbose:
        level = logging.DEBUG
    elif isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)
    if level is not None:
        root.setLevel(level)

    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
