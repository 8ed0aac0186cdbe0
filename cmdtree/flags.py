"""Flag registry: named flags with usage, current value and default.

Flags are written `-name=value`, `-name value` or `--name`; boolean flags
don't consume the next argument. Parsing stops at the first non-flag
argument or after `--`.
"""

from __future__ import annotations

import inspect
import re
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol

from .config import BOOL_FALSE_STRINGS
from .models import FlagError, HelpRequested

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator

__all__ = [
    "AttrValue",
    "Flag",
    "FlagSet",
    "FlagValue",
    "GlobalFlags",
    "TypedValue",
    "global_flags",
    "parse_bool",
]

_TRUE_STRINGS = frozenset({"true", "yes", "on", "1", "t"})


def parse_bool(text: str) -> bool:
    """Convert a flag value to boolean.

    Raises:
        ValueError: if the text is not a boolean literal
    """
    lowered = text.strip().lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in BOOL_FALSE_STRINGS or lowered == "f":
        return False
    msg = f"invalid boolean {text!r}"
    raise ValueError(msg)


class FlagValue(Protocol):
    """The value of a flag, settable from its command-line text."""

    def set(self, text: str) -> None:
        """Update the value from `text`, raising ValueError when invalid."""

    def __str__(self) -> str: ...


class TypedValue:
    """A value converted from text with `convert`."""

    def __init__(self, convert: Callable[[str], Any], value: Any) -> None:  # noqa: ANN401
        self.convert = convert
        self.value = value

    @property
    def is_bool(self) -> bool:
        """True for flags which don't take a separate argument."""
        return self.convert is parse_bool

    def set(self, text: str) -> None:
        self.value = self.convert(text)

    def get(self) -> Any:  # noqa: ANN401
        return self.value

    def __str__(self) -> str:
        if isinstance(self.value, bool):
            return "true" if self.value else "false"
        return str(self.value)


class AttrValue:
    """A value stored as an attribute of another object."""

    def __init__(self, obj: object, attr: str, convert: Callable[[str], Any]) -> None:
        self.obj = obj
        self.attr = attr
        self.convert = convert

    is_bool = False

    def set(self, text: str) -> None:
        setattr(self.obj, self.attr, self.convert(text))

    def get(self) -> Any:  # noqa: ANN401
        return getattr(self.obj, self.attr)

    def __str__(self) -> str:
        return str(self.get())


@dataclass
class Flag:
    """A registered flag."""

    name: str
    usage: str
    value: FlagValue
    default: str  # displayed instead of the live value in godoc style


class FlagSet:
    """An ordered-by-name collection of flags."""

    def __init__(self, flags: Iterable[Flag] = ()) -> None:
        self._flags: dict[str, Flag] = {}
        for flag in flags:
            self.add(flag)

    def add(self, flag: Flag) -> Flag:
        """Register `flag`.

        Raises:
            ValueError: if a flag with the same name exists
        """
        if flag.name in self._flags:
            msg = f"flag redefined: {flag.name}"
            raise ValueError(msg)
        flag.usage = inspect.cleandoc(flag.usage)
        self._flags[flag.name] = flag
        return flag

    def var(self, value: FlagValue, name: str, usage: str, default: str | None = None) -> Flag:
        """Register a flag backed by an arbitrary value object."""
        return self.add(Flag(name, usage, value, str(value) if default is None else default))

    def add_string(self, name: str, default: str, usage: str) -> Flag:
        return self.var(TypedValue(str, default), name, usage)

    def add_int(self, name: str, default: int, usage: str) -> Flag:
        return self.var(TypedValue(int, default), name, usage)

    def add_bool(self, name: str, default: bool, usage: str) -> Flag:
        value = TypedValue(parse_bool, default)
        return self.var(value, name, usage, str(value))

    def lookup(self, name: str) -> Flag | None:
        return self._flags.get(name)

    def __getitem__(self, name: str) -> Any:  # noqa: ANN401
        """Return the current (typed) value of flag `name`."""
        value = self._flags[name].value
        getter = getattr(value, "get", None)
        return getter() if getter else str(value)

    def __contains__(self, name: object) -> bool:
        return name in self._flags

    def __iter__(self) -> Iterator[Flag]:
        return iter(sorted(self._flags.values(), key=lambda flag: flag.name))

    def __len__(self) -> int:
        return len(self._flags)

    def merged(self, *others: FlagSet) -> FlagSet:
        """Return a new set holding these flags and the flags of `others`.

        Earlier sets win when names collide.
        """
        result = FlagSet()
        for flag_set in (self, *others):
            for flag in flag_set._flags.values():
                if flag.name not in result._flags:
                    result._flags[flag.name] = flag
        return result

    def parse(self, args: Iterable[str]) -> list[str]:
        """Consume the leading flags of `args` and return the remaining arguments.

        Raises:
            HelpRequested: on -help or -h, unless defined as flags
            FlagError: on unknown flags, missing or invalid values
        """
        args = list(args)
        index = 0
        while index < len(args):
            arg = args[index]
            if arg == "--":
                return args[index + 1 :]
            if len(arg) < 2 or not arg.startswith("-"):  # noqa: PLR2004
                break
            body = arg[2:] if arg.startswith("--") else arg[1:]
            if not body or body.startswith(("-", "=")):
                msg = f"bad flag syntax: {arg}"
                raise FlagError(msg)
            name, has_value, text = body.partition("=")
            flag = self._flags.get(name)
            if flag is None:
                if name in {"help", "h"}:
                    raise HelpRequested
                msg = f"flag provided but not defined: -{name}"
                raise FlagError(msg)
            if not has_value:
                if getattr(flag.value, "is_bool", False):
                    text = "true"
                else:
                    index += 1
                    if index >= len(args):
                        msg = f"flag needs an argument: -{name}"
                        raise FlagError(msg)
                    text = args[index]
            try:
                flag.value.set(text)
            except ValueError as e:
                msg = f'invalid value "{text}" for flag -{name}: {e}'
                raise FlagError(msg) from e
            index += 1
        return args[index:]


class GlobalFlags:
    """Flags accepted by every command, and which of them compact usage shows.

    `visible` holds the patterns of the non-hidden flags: None means every
    flag is visible, an empty list means none is.
    """

    def __init__(self, flags: FlagSet | None = None) -> None:
        self.flags = flags if flags is not None else FlagSet()
        self.visible: list[re.Pattern[str]] | None = None

    def hide_except(self, *patterns: str | re.Pattern[str]) -> None:
        """Hide global flags from compact usage, except those matching `patterns`.

        Multiple calls behave as if all patterns were given in a single call.
        All global flags are always shown by the full and godoc styles.
        """
        if self.visible is None:
            self.visible = []
        self.visible.extend(re.compile(pattern) for pattern in patterns)

    def is_visible(self, name: str) -> bool:
        """Return True if flag `name` is shown in compact usage."""
        if self.visible is None:
            return True
        return any(pattern.search(name) for pattern in self.visible)

    def select(self, visible: bool) -> list[Flag]:
        """Return the flags whose visibility is `visible`, sorted by name."""
        return [flag for flag in self.flags if self.is_visible(flag.name) == visible]


global_flags = GlobalFlags()
"""Process-wide global flags, registered by the application before parsing."""
