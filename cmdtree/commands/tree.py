"""Path naming and tree queries."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..constants import HELP_NAME

if TYPE_CHECKING:
    from .models import Command, Path

__all__ = ["binary_name", "needs_help_child", "path_has_flags", "path_name", "strip_binary_prefix"]


def path_name(prefix: str, path: Path) -> str:
    """Return the displayed command path, e.g. "tool build".

    Args:
        prefix: command path of the parent process, when delegated to
        path: commands from the root to the target
    """
    return " ".join([prefix, *(cmd.name for cmd in path)] if prefix else [cmd.name for cmd in path])


def needs_help_child(cmd: Command) -> bool:
    """Return True if `cmd` gets a synthesized help command.

    Every command with children or external sub-commands that doesn't
    declare its own "help" child needs one.
    """
    if cmd.child(HELP_NAME) is not None:
        return False
    return bool(cmd.children) or cmd.look_path


def path_has_flags(path: Path) -> bool:
    """Return True if any command of `path` has flags."""
    return any(len(cmd.flags) > 0 for cmd in path)


def binary_name(cmd: Command, sub_name: str) -> str:
    """Return the executable name extending `cmd` with `sub_name`."""
    return f"{cmd.name}-{sub_name}"


def strip_binary_prefix(cmd: Command, binary: str) -> str:
    """Return the sub-command name of an executable extending `cmd`."""
    return binary.removeprefix(f"{cmd.name}-")
