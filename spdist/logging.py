"""Logging setup for spdist.

Modules log through children of the ``spdist`` package logger obtained with
`get_logger`. The package logger gets one stdout handler the first time a
module asks for a logger; `configure_logging` replaces it, `set_log_level`
tunes it. Records still propagate to the root logger.
"""

import logging
import sys
from typing import Optional, TextIO

PACKAGE_LOGGER = "spdist"
DEFAULT_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


class _PackageHandler(logging.StreamHandler):
    """Stream handler owned by spdist; at most one is attached at a time."""


def _package_handler(logger: logging.Logger) -> Optional[_PackageHandler]:
    for handler in logger.handlers:
        if isinstance(handler, _PackageHandler):
            return handler
    return None


def configure_logging(
    level: int = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """Attach a fresh package handler, replacing any previous one.

    Handlers added by the application are left alone.

    Args:
        level: Level of the package logger.
        fmt: Format string for the handler.
        stream: Output stream, stdout when omitted.

    Returns:
        The ``spdist`` package logger.
    """
    package = logging.getLogger(PACKAGE_LOGGER)
    previous = _package_handler(package)
    if previous is not None:
        package.removeHandler(previous)

    handler = _PackageHandler(sys.stdout if stream is None else stream)
    handler.setFormatter(logging.Formatter(fmt))
    package.addHandler(handler)
    package.setLevel(level)
    return package


def get_logger(name: str) -> logging.Logger:
    """Return the logger for ``name``, a module under the spdist package."""
    if _package_handler(logging.getLogger(PACKAGE_LOGGER)) is None:
        configure_logging()
    return logging.getLogger(name)


def set_log_level(level: int) -> int:
    """Set the level of the package logger and its handler.

    Returns:
        The level the package logger had before the call.
    """
    package = logging.getLogger(PACKAGE_LOGGER)
    previous = package.level
    handler = _package_handler(package)
    if handler is None:
        configure_logging(level)
        handler = _package_handler(package)
    package.setLevel(level)
    handler.setLevel(level)
    return previous


def enable_debug_logging() -> int:
    """Log index creation, bound hits and cache resets.

    Returns:
        The previous level, for passing back to `set_log_level`.
    """
    return set_log_level(logging.DEBUG)
