"""Typed access to environment variables."""

from __future__ import annotations

from typing import TYPE_CHECKING, TypeVar

if TYPE_CHECKING:
    import logging
    from collections.abc import Callable, Mapping

__all__ = ["BOOL_FALSE_STRINGS", "EnvVars", "coerce_to_bool"]

BOOL_FALSE_STRINGS = frozenset({"false", "no", "off", "0", "disabled"})

_T = TypeVar("_T", int, float)


def coerce_to_bool(value: str | None, default: bool = False) -> bool:
    """Interpret an environment value as a boolean.

    Unset gives `default`, blank gives False, and any non-blank value is
    true unless it is one of BOOL_FALSE_STRINGS (case-insensitive).
    """
    if value is None:
        return default
    text = value.strip().lower()
    return bool(text) and text not in BOOL_FALSE_STRINGS


class EnvVars(dict[str, str]):
    """Variables of a command invocation, with typed getters.

    Unset and empty variables read as the default; so do malformed
    numbers, after a warning on `log`.
    """

    def __init__(self, *args: Mapping[str, str], logger: logging.Logger, **kwargs: str) -> None:
        super().__init__(*args, **kwargs)
        self.log = logger

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, str], logger: logging.Logger) -> EnvVars:
        """Snapshot `mapping`, typically os.environ."""
        return cls(dict(mapping), logger=logger)

    def copy(self) -> EnvVars:  # type: ignore[override]
        """Return an independent copy sharing the logger."""
        return EnvVars(self, logger=self.log)

    def get_str(self, name: str, default: str = "") -> str:
        value = self.get(name)
        return default if value is None else value

    def _get_number(self, name: str, convert: Callable[[str], _T], default: _T) -> _T:
        text = self.get(name)
        if not text:
            return default
        try:
            return convert(text)
        except ValueError:
            self.log.warning("Ignoring %s=%r: not a valid %s", name, text, convert.__name__)
            return default

    def get_int(self, name: str, default: int = 0) -> int:
        return self._get_number(name, int, default)

    def get_float(self, name: str, default: float = 0.0) -> float:
        return self._get_number(name, float, default)

    def get_bool(self, name: str, default: bool = False) -> bool:
        """Read `name` with `coerce_to_bool`."""
        return coerce_to_bool(self.get(name), default)
