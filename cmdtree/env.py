"""The environment a command runs in."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, TextIO

from .config import EnvVars
from .constants import DEFAULT_WIDTH, ENV_FIRST_CALL, ENV_PREFIX, ENV_STYLE, ENV_TIMEOUT, ENV_WIDTH
from .flags import GlobalFlags, global_flags
from .logging_setup import get_logger
from .models import Style, UsageError

if TYPE_CHECKING:
    from collections.abc import Callable

__all__ = ["Env"]

_log = get_logger("env")


def _empty_vars() -> EnvVars:
    return EnvVars(logger=_log)


@dataclass
class Env:
    """Streams, variables and usage callback of a command invocation.

    `usage` is set while parsing the command line to the usage function of
    the selected command.
    """

    stdin: TextIO = field(default_factory=lambda: sys.stdin)
    stdout: TextIO = field(default_factory=lambda: sys.stdout)
    stderr: TextIO = field(default_factory=lambda: sys.stderr)
    vars: EnvVars = field(default_factory=_empty_vars)
    usage: Callable[[TextIO], None] | None = None
    global_flags: GlobalFlags = field(default_factory=lambda: global_flags)

    def __post_init__(self) -> None:
        if not isinstance(self.vars, EnvVars):
            self.vars = EnvVars(self.vars, logger=_log)

    @classmethod
    def from_os(cls) -> Env:
        """Return an environment bound to the process streams and variables."""
        return cls(vars=EnvVars.from_mapping(os.environ, logger=_log))

    def clone(self) -> Env:
        """Return a copy with its own variables, safe to modify."""
        return replace(self, vars=self.vars.copy())

    def style(self) -> Style:
        """Style requested through the environment, compact by default."""
        text = self.vars.get_str(ENV_STYLE)
        if text:
            try:
                return Style.parse(text)
            except ValueError:
                _log.debug("Ignoring %s=%s", ENV_STYLE, text)
        return Style.COMPACT

    def width(self) -> int:
        """Target width: from the environment, else the terminal, else 80."""
        width = self.vars.get_int(ENV_WIDTH)
        if width != 0:
            return width
        try:
            columns = os.get_terminal_size(self.stdout.fileno()).columns
        except (AttributeError, OSError, ValueError):
            columns = 0
        return columns or DEFAULT_WIDTH

    def first_call(self) -> bool:
        """False when this process renders a section of a parent's dump."""
        return not self.vars.get_str(ENV_FIRST_CALL)

    def prefix(self) -> str:
        """Command path of the parent which delegated to this process."""
        return self.vars.get_str(ENV_PREFIX)

    def timeout(self) -> float | None:
        """Timeout in seconds for external binaries, None if unbounded."""
        timeout = self.vars.get_float(ENV_TIMEOUT)
        return timeout if timeout > 0 else None

    def path_dirs(self) -> list[str]:
        """Directories of the search path, in order."""
        return [path for path in self.vars.get_str("PATH").split(os.pathsep) if path]

    def usage_errorf(self, usage: Callable[[TextIO], None] | None, fmt: str, *args: object) -> UsageError:
        """Report a usage error and return the exception to raise.

        Writes "ERROR: <message>", a blank line and the usage to stderr.

        Args:
            usage: usage function of the command at fault (defaults to self.usage)
            fmt: %-style message format
            args: format arguments
        """
        message = fmt % args if args else fmt
        self.stderr.write(f"ERROR: {message}\n\n")
        usage = usage or self.usage
        if usage is not None:
            usage(self.stderr)
        return UsageError(message)
