"""Data models for the command tree."""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol

from ..flags import FlagSet

if TYPE_CHECKING:
    from collections.abc import Callable

    from ..env import Env

__all__ = ["Command", "Path", "Runner", "RunnerFunc", "Topic"]


class Runner(Protocol):
    """Executes a command with the arguments left after parsing."""

    def run(self, env: Env, args: list[str]) -> None:
        """Run the command, raising ExitCodeError for a non-zero status."""


class RunnerFunc:
    """Adapts a plain function `fn(env, args)` to the Runner protocol."""

    def __init__(self, fn: Callable[[Env, list[str]], None]) -> None:
        self.fn = fn

    def run(self, env: Env, args: list[str]) -> None:
        self.fn(env, args)


@dataclass(frozen=True)
class Topic:
    """A help topic attached to a command."""

    name: str
    short: str
    long: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "short", self.short.strip())
        object.__setattr__(self, "long", inspect.cleandoc(self.long))


@dataclass(eq=False)
class Command:
    """A node of the command tree.

    Commands are built once by the application and never modified by
    cmdtree; only the values of their flags change while parsing.
    """

    name: str
    short: str = ""
    long: str = ""
    children: list[Command] = field(default_factory=list)
    topics: list[Topic] = field(default_factory=list)
    flags: FlagSet = field(default_factory=FlagSet)
    args_name: str = ""  # e.g. "<file> [file ...]"
    args_long: str = ""
    look_path: bool = False  # also offer <name>-<sub> executables from PATH
    runner: Runner | None = None

    def __post_init__(self) -> None:
        self.short = self.short.strip()
        self.long = inspect.cleandoc(self.long)
        self.args_long = inspect.cleandoc(self.args_long)
        names = [child.name for child in self.children]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            msg = f"{self.name}: duplicate sub-commands {', '.join(duplicates)}"
            raise ValueError(msg)

    def child(self, name: str) -> Command | None:
        """Return the child called `name`, if any."""
        return next((child for child in self.children if child.name == name), None)

    def topic(self, name: str) -> Topic | None:
        """Return the topic called `name`, if any."""
        return next((topic for topic in self.topics if topic.name == name), None)

    def sub_names(self) -> set[str]:
        """Names of the built-in children."""
        return {child.name for child in self.children}


Path = tuple[Command, ...]
"""Commands from the root of the tree to a target command."""
