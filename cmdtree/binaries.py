"""External binary sub-commands.

A command with `look_path` set is extended by every executable named
`<command>-<sub>` found in the directories of the search path. Such
binaries are looked up again on every call since the PATH content may
change between calls.
"""

from __future__ import annotations

import os
import shutil
import stat
import subprocess
from typing import TYPE_CHECKING

from .constants import ENV_PREFIX
from .logging_setup import get_logger
from .models import ExitCodeError

if TYPE_CHECKING:
    from collections.abc import Collection, Iterable

    from .env import Env

__all__ = ["BinaryRunner", "look_path", "look_path_all"]

log = get_logger("binaries")


def _is_executable(entry: os.DirEntry[str]) -> bool:
    try:
        mode = entry.stat().st_mode
    except OSError:
        return False
    return stat.S_ISREG(mode) and bool(mode & 0o111)


def look_path(name: str, dirs: Iterable[str]) -> bool:
    """Return True if an executable called `name` is in one of `dirs`."""
    dirs = list(dirs)
    if not dirs:
        return False
    return shutil.which(name, path=os.pathsep.join(dirs)) is not None


def look_path_all(parent: str, dirs: Iterable[str], exclude: Collection[str] = ()) -> list[str]:
    """Return the executables extending command `parent`, sorted by name.

    Args:
        parent: name of the extended command
        dirs: directories to search
        exclude: sub-command names to skip (the built-in children)

    Returns:
        Executable names (`<parent>-<sub>`), without duplicates
    """
    prefix = f"{parent}-"
    found: set[str] = set()
    for directory in dirs:
        try:
            entries = list(os.scandir(directory))
        except OSError:
            continue
        for entry in entries:
            if not entry.name.startswith(prefix) or entry.name in found:
                continue
            if entry.name.removeprefix(prefix) in exclude or not _is_executable(entry):
                continue
            found.add(entry.name)
    return sorted(found)


class BinaryRunner:
    """Runs an external binary sub-command.

    The child gets `CMDLINE_PREFIX` set to the command path of its parent so
    its own usage shows the full path. Its output is captured, then written
    to the streams of the environment.
    """

    def __init__(self, name: str, cmd_path: str) -> None:
        self.name = name
        self.cmd_path = cmd_path

    def __repr__(self) -> str:
        return f"BinaryRunner({self.name!r}, {self.cmd_path!r})"

    def run(self, env: Env, args: list[str]) -> None:
        """Run the binary with `args`.

        Raises:
            ExitCodeError: the binary exited with a non-zero status or timed out
            OSError: the binary could not be started
        """
        child_vars = dict(env.vars)
        child_vars[ENV_PREFIX] = self.cmd_path
        executable = shutil.which(self.name, path=child_vars.get("PATH", "")) or self.name
        log.debug("Running %s %s", executable, " ".join(args))
        try:
            result = subprocess.run(  # noqa: S603
                [executable, *args],
                env=child_vars,
                capture_output=True,
                text=True,
                timeout=env.timeout(),
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            log.warning("%s timed out after %ss", self.name, e.timeout)
            raise ExitCodeError(1, f"{self.name}: timed out") from e
        env.stdout.write(result.stdout)
        if result.stderr:
            env.stderr.write(result.stderr)
        if result.returncode != 0:
            log.debug("%s exited with status %d", self.name, result.returncode)
            raise ExitCodeError(result.returncode)
