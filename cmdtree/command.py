"""Command-line parsing and program entry point.

`main(root)` parses `sys.argv` against the command tree and runs the
selected command:

    tool [flags] <command> [flags] ... [args]

Every command accepts the global flags and the flags of the commands
above it. `-help` (or `-h`) prints the usage of the current command, the
synthesized `help` sub-command offers the full help machinery, and
commands with `look_path` hand over to `<command>-<sub>` executables.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from .binaries import BinaryRunner, look_path
from .commands.tree import binary_name, needs_help_child, path_name
from .constants import HELP_NAME
from .env import Env
from .help.dispatch import HelpConfig, HelpRunner
from .logging_setup import get_logger, init_logger
from .models import CmdlineError, ExitCode, ExitCodeError, FlagError, HelpRequested, UsageError

if TYPE_CHECKING:
    from collections.abc import Sequence

    from .commands.models import Command, Path, Runner
    from .flags import FlagSet

__all__ = ["main", "parse", "run"]

log = get_logger("command")


def _path_flags(path: Path, env: Env) -> FlagSet:
    """Flags accepted at the end of `path`: its own, its ancestors', global ones."""
    own, *ancestors = reversed([cmd.flags for cmd in path])
    return own.merged(*ancestors, env.global_flags.flags)


def _parse_flags(flags: FlagSet, args: list[str], help_runner: HelpRunner, env: Env) -> list[str]:
    try:
        return flags.parse(args)
    except FlagError as e:
        raise env.usage_errorf(help_runner.usage_func, "%s", e) from e


def parse(root: Command, env: Env, args: Sequence[str]) -> tuple[Runner, list[str]]:
    """Select the runner for `args` and return it with its arguments.

    Sets `env.usage` to the usage function of the selected command.

    Raises:
        UsageError: the arguments don't match the tree (already reported)
    """
    config = HelpConfig.from_env(env)
    path: Path = (root,)
    args = list(args)
    while True:
        cmd = path[-1]
        help_runner = HelpRunner(path, config)
        env.usage = help_runner.usage_func
        try:
            args = _parse_flags(_path_flags(path, env), args, help_runner, env)
        except HelpRequested:
            return help_runner, []

        if not args:
            if cmd.runner is not None:
                return cmd.runner, []
            raise env.usage_errorf(None, "%s: no command specified", path_name(env.prefix(), path))

        sub_name, sub_args = args[0], args[1:]
        child = cmd.child(sub_name)
        if child is not None:
            path, args = (*path, child), sub_args
            continue
        if sub_name == HELP_NAME and needs_help_child(cmd):
            help_cmd = help_runner.new_command()
            help_help = HelpRunner((*path, help_cmd), config)
            env.usage = help_help.usage_func
            try:
                sub_args = _parse_flags(help_cmd.flags, sub_args, help_help, env)
            except HelpRequested:
                return help_help, []
            return help_runner, sub_args
        if cmd.look_path:
            binary = binary_name(cmd, sub_name)
            if look_path(binary, env.path_dirs()):
                log.debug("Using external sub-command %s", binary)
                return BinaryRunner(binary, path_name(env.prefix(), path)), sub_args
        if cmd.runner is not None:
            return cmd.runner, args
        raise env.usage_errorf(None, '%s: unknown command "%s"', path_name(env.prefix(), path), sub_name)


def run(root: Command, env: Env, args: Sequence[str]) -> int:
    """Parse `args`, run the selected command and return the exit code."""
    try:
        runner, runner_args = parse(root, env, args)
        runner.run(env, runner_args)
    except UsageError:
        return ExitCode.USAGE_ERROR
    except ExitCodeError as e:
        return e.code
    except CmdlineError as e:
        env.stderr.write(f"ERROR: {e}\n")
        return ExitCode.FAILURE
    except Exception as e:  # noqa: BLE001  # pylint: disable=broad-exception-caught
        log.critical("Unhandled exception:", exc_info=True)
        env.stderr.write(f"ERROR: {e}\n")
        return ExitCode.FAILURE
    return ExitCode.SUCCESS


def main(root: Command, argv: Sequence[str] | None = None) -> None:
    """Run the command tree `root` as a program and exit."""
    init_logger()
    env = Env.from_os()
    sys.exit(run(root, env, sys.argv[1:] if argv is None else argv))
