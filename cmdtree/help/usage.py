"""Usage text of a single command."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

from ..binaries import BinaryRunner, look_path_all
from ..commands.tree import needs_help_child, path_has_flags, path_name, strip_binary_prefix
from ..constants import ENV_STYLE, ENV_WIDTH, HELP_NAME, HELP_SHORT, MIN_NAME_WIDTH, MISSING_DESCRIPTION
from ..logging_setup import get_logger
from ..models import ExitCodeError, Style
from .layout import godoc_header, line_break

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..commands.models import Command, Path
    from ..flags import Flag
    from ..textwriter import LineWriter
    from .dispatch import HelpConfig

__all__ = ["discover_binaries", "flags_usage", "name_width", "print_flags", "print_table", "usage"]

log = get_logger("help")

_INDENT = " " * 3


def name_width(names: Iterable[str]) -> int:
    """Width of the name column of a table."""
    return max([MIN_NAME_WIDTH, *(len(name) for name in names)])


def print_table(writer: LineWriter, rows: list[tuple[str, str]]) -> None:
    """Print (name, description) rows as two aligned columns.

    Wrapped descriptions are aligned under the description column.
    """
    width = name_width(name for name, _ in rows)
    writer.set_indents(_INDENT, " " * (len(_INDENT) + width + 1))
    for name, short in rows:
        writer.write(f"{name:<{width}} {short}")
        writer.flush()
    writer.set_indents()


def print_flags(writer: LineWriter, flags: Iterable[Flag], style: Style) -> None:
    """Print each flag as ` -name=value` followed by its indented usage.

    The godoc style shows default values so the output doesn't depend on
    the environment it was generated in.
    """
    for flag in flags:
        value = flag.default if style == Style.GODOC else str(flag.value)
        writer.write(f" -{flag.name}={value}\n")
        if flag.usage:
            writer.set_indents(_INDENT)
            writer.write(f"{flag.usage}\n")
            writer.set_indents()


def discover_binaries(cmd: Command, config: HelpConfig) -> list[str]:
    """Executables extending `cmd`, empty unless `cmd.look_path` is set."""
    if not cmd.look_path:
        return []
    return look_path_all(cmd.name, config.env.path_dirs(), cmd.sub_names())


def _binary_short(binary: str, cmd_path: str, config: HelpConfig) -> str:
    """Ask `binary` for its short description."""
    buffer = io.StringIO()
    env = config.env.clone()
    env.stdout = env.stderr = buffer
    env.vars[ENV_STYLE] = Style.SHORT.value
    env.vars[ENV_WIDTH] = "-1"  # the first line must hold the whole description
    try:
        BinaryRunner(binary, cmd_path).run(env, ["-help"])
    except (ExitCodeError, OSError) as e:
        log.debug("%s can't describe itself: %s", binary, e)
        return MISSING_DESCRIPTION
    lines = buffer.getvalue().strip().splitlines()
    return lines[0].strip() if lines else MISSING_DESCRIPTION


def usage(writer: LineWriter, path: Path, config: HelpConfig, first_call: bool) -> None:
    """Print the usage of the last command of `path`.

    `first_call` is False for every command but the first one of a
    documentation dump; it avoids repeating the help command and the
    global flags, and adds a separator and a header instead.
    """
    cmd = path[-1]
    cmd_path = path_name(config.env.prefix(), path)
    if config.style == Style.SHORT:
        writer.write_line(cmd.short)
        return
    if not first_call:
        line_break(writer, config.style)
        writer.force_verbatim(True)
        writer.write(godoc_header(cmd_path, cmd.short) + "\n")
        writer.force_verbatim(False)
        writer.write("\n")
    writer.write(f"{cmd.long}\n\n")

    # Usage lines
    writer.write("Usage:\n")
    invocation = f"{_INDENT}{cmd_path}"
    if path_has_flags(path):
        invocation += " [flags]"
    if cmd.runner is not None:
        writer.write(f"{invocation} {cmd.args_name}\n" if cmd.args_name else f"{invocation}\n")
    binaries = discover_binaries(cmd, config)
    has_subcommands = bool(cmd.children or binaries)
    if has_subcommands:
        writer.write(f"{invocation} <command>\n")

        rows = [(child.name, child.short) for child in cmd.children]
        rows.extend((strip_binary_prefix(cmd, binary), _binary_short(binary, cmd_path, config)) for binary in binaries)
        if first_call and needs_help_child(cmd):
            rows.append((HELP_NAME, HELP_SHORT))
        writer.write(f"\nThe {cmd_path} commands are:\n")
        print_table(writer, rows)
        if first_call and config.style != Style.GODOC:
            writer.write(f'Run "{cmd_path} help [command]" for command usage.\n')

    if cmd.runner is not None and cmd.args_long:
        writer.write(f"\n{cmd.args_long}\n")

    if cmd.topics:
        writer.write(f"\nThe {cmd_path} additional help topics are:\n")
        print_table(writer, [(topic.name, topic.short) for topic in cmd.topics])
        if first_call and config.style != Style.GODOC:
            writer.write(f'Run "{cmd_path} help [topic]" for topic details.\n')

    flags_usage(writer, path, config, first_call)


def _full_style_hint(path: Path, cmd_path: str, config: HelpConfig) -> str:
    cmd = path[-1]
    if cmd.children:
        return f'Run "{cmd_path} help -style=full" to show all global flags.'
    if len(path) > 1:
        parent_path = path_name(config.env.prefix(), path[:-1])
        return f'Run "{parent_path} help -style=full {cmd.name}" to show all global flags.'
    return f'Run "{ENV_STYLE}=full {cmd_path} -help" to show all global flags.'


def flags_usage(writer: LineWriter, path: Path, config: HelpConfig, first_call: bool) -> None:
    """Print the flags of the last command of `path`, then the global flags.

    Global flags are only shown on the first call. The compact style only
    shows the non-hidden ones, with a hint when some are hidden.
    """
    cmd = path[-1]
    cmd_path = path_name(config.env.prefix(), path)
    if len(cmd.flags) > 0:
        writer.write(f"\nThe {cmd_path} flags are:\n")
        print_flags(writer, cmd.flags, config.style)
    if not first_call:
        return

    visible = config.global_flags.select(visible=True)
    hidden = config.global_flags.select(visible=False)
    if config.style != Style.COMPACT:
        if visible or hidden:
            writer.write("\nThe global flags are:\n")
            print_flags(writer, visible, config.style)
            if visible and hidden:
                writer.write("\n")
            print_flags(writer, hidden, config.style)
        return

    if visible:
        writer.write("\nThe global flags are:\n")
        print_flags(writer, visible, config.style)
    if hidden:
        writer.write(f"\n{_full_style_hint(path, cmd_path, config)}\n")
