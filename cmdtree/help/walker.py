"""Recursive documentation of a command tree ("help ...")."""

from __future__ import annotations

import io
from typing import TYPE_CHECKING

from ..binaries import BinaryRunner
from ..commands.tree import needs_help_child, path_name, strip_binary_prefix
from ..constants import ENV_FIRST_CALL, ENV_STYLE, ENV_WIDTH, HELP_NAME, MISSING_DESCRIPTION
from ..logging_setup import get_logger
from ..models import ExitCodeError, Style
from .layout import godoc_header, line_break
from .usage import discover_binaries, usage

if TYPE_CHECKING:
    from ..commands.models import Path
    from ..textwriter import LineWriter
    from .dispatch import HelpConfig

__all__ = ["BINARY_PROBES", "probe_binary", "usage_all"]

log = get_logger("help")

# Arguments tried in turn to get the documentation of a binary sub-command
BINARY_PROBES: tuple[tuple[str, ...], ...] = (
    (HELP_NAME, "..."),
    ("-help",),
)


def probe_binary(binary: str, cmd_path: str, config: HelpConfig) -> str | None:
    """Return the full documentation of an external binary.

    Each probe runs with its own capture buffer; the output of the first
    successful one is returned, None if they all fail.
    """
    runner = BinaryRunner(binary, cmd_path)
    for args in BINARY_PROBES:
        buffer = io.StringIO()
        env = config.env.clone()
        env.stdout = env.stderr = buffer
        env.vars[ENV_FIRST_CALL] = "1"
        env.vars[ENV_STYLE] = config.style.value
        env.vars[ENV_WIDTH] = str(config.width)
        try:
            runner.run(env, list(args))
        except (ExitCodeError, OSError) as e:
            log.debug("%s %s failed: %s", binary, " ".join(args), e)
            continue
        return buffer.getvalue()
    return None


def _write_verbatim(writer: LineWriter, text: str) -> None:
    writer.force_verbatim(True)
    writer.write(text)
    writer.force_verbatim(False)


def usage_all(writer: LineWriter, path: Path, config: HelpConfig, first_call: bool) -> None:
    """Print the usage of the last command of `path` and of everything below it.

    Depth-first, in declaration order: the command itself, its children,
    its external binaries, the help command (first call only), then its
    topics.
    """
    cmd = path[-1]
    cmd_path = path_name(config.env.prefix(), path)
    usage(writer, path, config, first_call)
    for child in cmd.children:
        usage_all(writer, (*path, child), config, False)

    for binary in discover_binaries(cmd, config):
        output = probe_binary(binary, cmd_path, config)
        if output is not None:
            if config.style == Style.GODOC:
                # the child's writer dropped its leading blank line
                writer.write("\n")
            _write_verbatim(writer, output)
            continue
        line_break(writer, config.style)
        sub_path = f"{cmd_path} {strip_binary_prefix(cmd, binary)}"
        _write_verbatim(writer, godoc_header(sub_path, MISSING_DESCRIPTION) + "\n")

    if first_call and needs_help_child(cmd):
        from .dispatch import HelpRunner  # noqa: PLC0415  # pylint: disable=import-outside-toplevel

        help_cmd = HelpRunner(path, config).new_command()
        usage_all(writer, (*path, help_cmd), config, False)

    for topic in cmd.topics:
        line_break(writer, config.style)
        _write_verbatim(writer, godoc_header(f"{cmd_path} {topic.name}", topic.short) + "\n")
        writer.write("\n")
        _write_verbatim(writer, f"{topic.long}\n")
