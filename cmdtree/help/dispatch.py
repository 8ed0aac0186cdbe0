"""The help command.

`help` is synthesized for every command with sub-commands which doesn't
declare its own. Help for the last command of a path is rendered by a
`HelpRunner`; its arguments are resolved against the command tree:

    help                  usage of the current command
    help ...              usage of everything below the current command
    help <child> [...]    continue with the child
    help help [...]       continue with the help command itself
    help <binary> [...]   ask the <command>-<binary> executable
    help <topic>          print the topic
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, TextIO

from ..binaries import BinaryRunner, look_path
from ..commands.models import Command
from ..commands.tree import binary_name, path_name
from ..constants import ENV_STYLE, ENV_WIDTH, HELP_NAME, HELP_SHORT
from ..flags import AttrValue
from ..logging_setup import get_logger
from ..models import Style
from ..textwriter import LineWriter
from .usage import usage
from .walker import usage_all

if TYPE_CHECKING:
    from ..commands.models import Path
    from ..env import Env
    from ..flags import GlobalFlags

__all__ = ["HelpConfig", "HelpRunner", "run_help"]

log = get_logger("help")

_HELP_LONG = """
Help with no args displays the usage of the parent command.

Help with args displays the usage of the specified sub-command or help topic.

"help ..." recursively displays help for all commands and topics.
"""

_HELP_ARGS_LONG = """
[command/topic ...] optionally identifies a specific sub-command or help topic.
"""

_STYLE_USAGE = f"""
The formatting style for help output:
   compact - Good for compact cmdline output.
   full    - Good for cmdline output, shows all global flags.
   godoc   - Good for godoc processing.
   short   - One line description of the command.
Override the default by setting the {ENV_STYLE} environment variable.
"""

_WIDTH_USAGE = f"""
Format output to this target width in runes, or unlimited if width < 0.
Defaults to the terminal width if available.  Override the default by setting
the {ENV_WIDTH} environment variable.
"""


@dataclass
class HelpConfig:
    """Settings of one help invocation.

    Style and width come from the environment and may be overridden by the
    flags of the help command.
    """

    env: Env
    style: Style
    width: int
    global_flags: GlobalFlags

    @classmethod
    def from_env(cls, env: Env) -> HelpConfig:
        return cls(env=env, style=env.style(), width=env.width(), global_flags=env.global_flags)


class HelpRunner:
    """Runner of the help command for the last command of `path`."""

    def __init__(self, path: Path, config: HelpConfig) -> None:
        self.path = path
        self.config = config

    @classmethod
    def for_env(cls, path: Path, env: Env) -> HelpRunner:
        return cls(path, HelpConfig.from_env(env))

    def run(self, env: Env, args: list[str]) -> None:
        writer = LineWriter(env.stdout, self.config.width)
        try:
            run_help(writer, args, self.path, self.config)
        finally:
            writer.flush()

    def usage_func(self, out: TextIO) -> None:
        """Write the usage of the last command of the path to `out`."""
        writer = LineWriter(out, self.config.width)
        usage(writer, self.path, self.config, self.config.env.first_call())
        writer.flush()

    def new_command(self) -> Command:
        """Return a help command using this runner.

        Its -style and -width flags update the shared configuration.
        """
        help_cmd = Command(
            name=HELP_NAME,
            short=HELP_SHORT,
            long=_HELP_LONG,
            args_name="[command/topic ...]",
            args_long=_HELP_ARGS_LONG,
            runner=self,
        )
        # godoc shows these defaults rather than values of the current environment
        help_cmd.flags.var(AttrValue(self.config, "style", Style.parse), "style", _STYLE_USAGE, default=Style.COMPACT.value)
        help_cmd.flags.var(AttrValue(self.config, "width", int), "width", _WIDTH_USAGE, default="<terminal width>")
        return help_cmd


def _delegate(cmd_path: str, binary: str, args: list[str], config: HelpConfig) -> None:
    """Ask an external binary for its help, in the requested style."""
    env = config.env.clone()
    env.vars[ENV_STYLE] = config.style.value
    runner = BinaryRunner(binary, cmd_path)
    log.debug("Delegating help to %s", binary)
    runner.run(env, [HELP_NAME, *args] if args else ["-help"])


def run_help(writer: LineWriter, args: list[str], path: Path, config: HelpConfig) -> None:
    """Resolve the help arguments from the last command of `path` and print the result.

    Raises:
        UsageError: an argument matches no sub-command or topic
        ExitCodeError: a delegated binary failed
    """
    if not args:
        usage(writer, path, config, config.env.first_call())
        return
    if args[0] == "...":
        usage_all(writer, path, config, config.env.first_call())
        return

    cmd, sub_name, sub_args = path[-1], args[0], args[1:]
    child = cmd.child(sub_name)
    if child is not None:
        run_help(writer, sub_args, (*path, child), config)
        return
    if sub_name == HELP_NAME:
        help_cmd = HelpRunner(path, config).new_command()
        run_help(writer, sub_args, (*path, help_cmd), config)
        return
    if cmd.look_path:
        binary = binary_name(cmd, sub_name)
        if look_path(binary, config.env.path_dirs()):
            writer.flush()
            _delegate(path_name(config.env.prefix(), path), binary, sub_args, config)
            return
    topic = cmd.topic(sub_name)
    if topic is not None:
        writer.write(f"{topic.long}\n")
        return

    usage_fn = HelpRunner(path, config).usage_func
    raise config.env.usage_errorf(usage_fn, '%s: unknown command or topic "%s"', path_name(config.env.prefix(), path), sub_name)
