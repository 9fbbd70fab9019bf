"""
Logging bootstrap for switchboard entry points.

The library logs through module-level loggers under the "switchboard" namespace
and stays silent until a host calls configure_logging(). Records go to stderr
through rich so they share the console with fault rendering.
"""
import logging
import os

from rich.console import Console
from rich.logging import RichHandler

from .utils import Unset

ENVIRON = "SWITCHBOARD_LOG_LEVEL"


def _resolve_level(level):
    if level is Unset:
        level = os.environ.get(ENVIRON, "").strip().upper() or logging.WARNING
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"configure_logging() unknown level {level!r}")
        return resolved
    if not isinstance(level, int):
        raise TypeError("configure_logging() level must be an integer or a level name")
    return level


def configure_logging(level=Unset, /):
    """
    Attach a rich handler to the "switchboard" logger.

    Parameters
    - level: int | str | Unset
      Explicit level (number or name). When Unset, SWITCHBOARD_LOG_LEVEL is read,
      falling back to WARNING.

    Calling it again only updates the level; the handler is installed once.

    Returns
    - logging.Logger: the package logger.
    """
    logger = logging.getLogger("switchboard")
    logger.setLevel(_resolve_level(level))
    if not any(isinstance(handler, RichHandler) for handler in logger.handlers):
        logger.addHandler(RichHandler(console=Console(stderr=True), show_path=False))
        logger.propagate = False
    return logger


__all__ = (
    "configure_logging",
)
