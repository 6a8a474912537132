"""Logging utilities for Channel Conduit.

Every module obtains its logger through :func:`get_logger` so that all
channel-filter messages live under the ``chanconduit`` namespace and
share one handler configuration.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional, TextIO

NAMESPACE = "chanconduit"

_DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
_default_level = logging.WARNING

_loggers: dict[str, logging.Logger] = {}


def _coerce_level(level: int | str) -> int:
    if isinstance(level, str):
        return getattr(logging, level.upper(), logging.WARNING)
    return level


def _make_handler(level: int, stream: Optional[TextIO], fmt: str) -> logging.Handler:
    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """Return the cached logger for a module.

    Args:
        name: Module name, typically ``__name__``. Names outside the
            ``chanconduit`` namespace are nested under it. ``None`` gives
            the package logger.

    Returns:
        A logger writing ``[LEVEL] name: message`` lines to stderr.

    Example:
        >>> from chanconduit.logging import get_logger
        >>> logger = get_logger(__name__)
        >>> logger.debug("channel %d: 2 sticky ranges", 118)
    """
    if name is None:
        full_name = NAMESPACE
    elif name == NAMESPACE or name.startswith(NAMESPACE + "."):
        full_name = name
    else:
        full_name = f"{NAMESPACE}.{name}"

    logger = _loggers.get(full_name)
    if logger is not None:
        return logger

    logger = logging.getLogger(full_name)
    if not logger.handlers:
        logger.setLevel(_default_level)
        logger.addHandler(_make_handler(_default_level, None, _DEFAULT_FORMAT))
        logger.propagate = False

    _loggers[full_name] = logger
    return logger


def set_log_level(level: int | str) -> None:
    """Set the level of every Channel Conduit logger, present and future.

    Args:
        level: A ``logging`` level constant or its name (``"DEBUG"`` ...).
    """
    global _default_level
    level = _coerce_level(level)
    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in logger.handlers:
            handler.setLevel(level)
    _default_level = level


def configure_logging(
    level: int | str = logging.WARNING,
    format_string: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Replace the handlers of all existing loggers.

    Call once at application start-up, e.g. to route channel diagnostics
    into a pipeline's own log stream.

    Args:
        level: Logging level (default: WARNING).
        format_string: Format for the new handlers. ``None`` keeps the
            default ``[LEVEL] name: message`` layout.
        stream: Destination stream (default: ``sys.stderr``).
    """
    global _default_level
    level = _coerce_level(level)
    fmt = format_string or _DEFAULT_FORMAT

    for logger in _loggers.values():
        logger.setLevel(level)
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
        logger.addHandler(_make_handler(level, stream, fmt))

    _default_level = level
