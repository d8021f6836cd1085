"""Levelled logging to standard error.

Levels run from 0 (critical) to 12 (debug). A logger emits a message only
when the message level does not exceed its own level.
"""

from __future__ import annotations

import inspect
import sys
import time

_LEVEL_NAMES = (
    "CRITICAL(0)",
    "ERROR(1)",
    "ERROR(2)",
    "ERROR(3)",
    "WARNING(4)",
    "WARNING(5)",
    "WARNING(6)",
    "INFO(7)",
    "INFO(8)",
    "INFO(9)",
    "DEBUG(10)",
    "DEBUG(11)",
    "DEBUG(12)",
)


def level_name(level: int) -> str | None:
    """Return the display name of a message level, or None above 12."""
    if level < 0:
        raise ValueError(f"negative log level: {level}")
    if level >= len(_LEVEL_NAMES):
        return None
    return _LEVEL_NAMES[level]


def _caller() -> tuple[str, int]:
    """Locate the first frame outside this module."""
    frame = inspect.currentframe()
    try:
        while frame is not None and frame.f_code.co_filename == __file__:
            frame = frame.f_back
        if frame is None:
            return "<unknown>", 0
        return frame.f_code.co_filename, frame.f_lineno
    finally:
        del frame


def _format(fmt: str, args: tuple) -> str:
    return fmt % args if args else fmt


class Logger:
    """A logger that writes messages up to a given level to standard error."""

    def __init__(self, level: int) -> None:
        if level < 0:
            raise ValueError(f"negative log level: {level}")
        self.level = level

    def emit(self, level: int, fmt: str, *args) -> None:
        """Write a message unconditionally."""
        name = level_name(level) or f"LEVEL({level})"
        stamp = time.strftime("%Y-%m-%d %H:%M:%S", time.localtime())
        filename, line = _caller()
        sys.stderr.write(f"{name}:{stamp}:{filename}:{line}: {_format(fmt, args)}\n")

    def log(self, level: int, fmt: str, *args) -> bool:
        """Write a message if its level is within this logger's level.

        Returns True when the message was written.
        """
        if level > self.level:
            return False
        self.emit(level, fmt, *args)
        return True


_default = Logger(0)


def default_logger() -> Logger:
    """Return the package-wide logger."""
    return _default


def set_level(level: int) -> None:
    """Set the level of the package-wide logger."""
    if level < 0:
        raise ValueError(f"negative log level: {level}")
    _default.level = level


def log(level: int, fmt: str, *args) -> bool:
    """Log through the package-wide logger."""
    return _default.log(level, fmt, *args)