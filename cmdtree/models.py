"""Shared enums and exceptions."""

from enum import IntEnum, StrEnum

__all__ = [
    "CmdlineError",
    "ExitCode",
    "ExitCodeError",
    "FlagError",
    "HelpRequested",
    "Style",
    "UsageError",
]


class Style(StrEnum):
    """Formatting styles for usage output."""

    COMPACT = "compact"  # hides most global flags
    FULL = "full"  # shows every global flag
    GODOC = "godoc"  # section headers recognized by documentation generators
    SHORT = "short"  # only the one-line description

    @classmethod
    def parse(cls, text: str) -> "Style":
        """Return the style named `text`, ignoring case.

        Raises:
            ValueError: if `text` names no style
        """
        try:
            return cls(text.strip().lower())
        except ValueError:
            choices = ", ".join(style.value for style in cls)
            msg = f"unknown style {text!r} (expected one of {choices})"
            raise ValueError(msg) from None


class ExitCode(IntEnum):
    """Process exit codes."""

    SUCCESS = 0
    FAILURE = 1
    USAGE_ERROR = 2


class CmdlineError(Exception):
    """Base class for errors raised by cmdtree."""


class UsageError(CmdlineError):
    """The command line is invalid.

    The message and usage are already written to stderr when this is raised.
    """


class FlagError(UsageError):
    """A flag is unknown, lacks a value or has an invalid one."""


class HelpRequested(CmdlineError):
    """Raised while parsing flags when -help or -h is given."""


class ExitCodeError(CmdlineError):
    """A runner or an external binary exited with a non-zero status."""

    def __init__(self, code: int, message: str = "") -> None:
        super().__init__(message or f"exit code {code}")
        self.code = code
