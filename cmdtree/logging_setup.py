"""Logging setup for cmdtree programs.

Log records go to stderr so they never mix with the usage text written to
stdout, which may be captured by a parent process.
"""

import logging
import os
import sys
from collections.abc import Mapping
from typing import TextIO

from .config import coerce_to_bool
from .constants import ENV_DEBUG

__all__ = [
    "ROOT_LOGGER",
    "debug_from_env",
    "get_logger",
    "init_logger",
    "is_debug",
    "set_debug",
    "should_colorize",
]

ROOT_LOGGER = "cmdtree"

_ESC = "\x1b["
_RESET = f"{_ESC}0m"

# (prefix, suffix) around the record, by level
_LEVEL_STYLES = {
    logging.WARNING: (f"{_ESC}33;2m", _RESET),
    logging.ERROR: (f"{_ESC}31;2m", _RESET),
    logging.CRITICAL: (f"{_ESC}31;1m", _RESET),
}


def debug_from_env(environ: Mapping[str, str] | None = None) -> bool:
    """Tell whether CMDLINE_DEBUG enables debug output; "0", "false" or "off" don't."""
    return coerce_to_bool((os.environ if environ is None else environ).get(ENV_DEBUG))


class _DebugState:
    """Container for mutable debug state to avoid global statement."""

    value: bool = debug_from_env()


_debug_state = _DebugState()


def is_debug() -> bool:
    """Return the current debug state."""
    return _debug_state.value


def set_debug(value: bool) -> None:
    """Set the debug state."""
    _debug_state.value = value


def should_colorize(stream: TextIO | None = None) -> bool:
    """Determine if ANSI colors should be used for the given stream.

    NO_COLOR wins over FORCE_COLOR, which wins over TTY detection.

    Args:
        stream: The output stream to check. Defaults to sys.stderr.
    """
    if os.environ.get("NO_COLOR"):
        return False
    if os.environ.get("FORCE_COLOR"):
        return True
    if stream is None:
        stream = sys.stderr
    return hasattr(stream, "isatty") and stream.isatty()


class ScreenLogFormatter(logging.Formatter):
    """A formatter adding colors based on the log level."""

    def __init__(self, use_colors: bool) -> None:
        super().__init__()
        log_format = r"%(name)20s - %(message)s // %(filename)s:%(lineno)d" if is_debug() else r"%(message)s"
        self._formatters: dict[int, logging.Formatter] = {}
        for level in (logging.DEBUG, logging.INFO, logging.WARNING, logging.ERROR, logging.CRITICAL):
            prefix, suffix = _LEVEL_STYLES.get(level, ("", "")) if use_colors else ("", "")
            self._formatters[level] = logging.Formatter(prefix + log_format + suffix)

    def format(self, record: logging.LogRecord) -> str:
        formatter = self._formatters.get(record.levelno, self._formatters[logging.INFO])
        return formatter.format(record)


def init_logger(filename: str | None = None, force_debug: bool = False) -> None:
    """Initialize the logging system.

    Every cmdtree logger is a child of the "cmdtree" logger, which gets
    the handlers configured here.

    Args:
        filename: Optional filename to log to
        force_debug: If True, force debug level
    """
    if force_debug:
        set_debug(True)

    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    if filename:
        file_handler = logging.FileHandler(filename)
        file_handler.setFormatter(logging.Formatter(fmt=r"%(asctime)s [%(levelname)s] %(name)s :: %(message)s :: %(filename)s:%(lineno)d"))
        root.addHandler(file_handler)
    stream_handler = logging.StreamHandler(sys.stderr)
    stream_handler.setFormatter(ScreenLogFormatter(should_colorize(sys.stderr)))
    root.addHandler(stream_handler)
    root.setLevel(logging.DEBUG if is_debug() else logging.WARNING)
    root.propagate = False


def get_logger(name: str = ROOT_LOGGER, level: int | None = None) -> logging.Logger:
    """Return a named logger below the "cmdtree" logger.

    Args:
        name: logger's name, "cmdtree." is prepended when missing
        level: logger's level (inherited from "cmdtree" if not set)
    """
    if name != ROOT_LOGGER and not name.startswith(f"{ROOT_LOGGER}."):
        name = f"{ROOT_LOGGER}.{name}"
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
