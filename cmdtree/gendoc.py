"""Generate the documentation module of a cmdtree based tool.

Runs the tool (by default `<tool> help ...`) in godoc style and stores its
output as the docstring of a generated Python module:

    cmdtree-gendoc [--env E] [--out FILE] <executable> [args]

The generator doesn't use cmdtree itself to stay usable on tools whose
help output is broken.
"""

from __future__ import annotations

import argparse
import os
import subprocess
import sys
from pathlib import Path
from typing import TYPE_CHECKING

from .constants import ENV_STYLE
from .logging_setup import get_logger, init_logger
from .models import CmdlineError, ExitCode, Style

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

__all__ = ["generate", "get_parser", "main", "post_process", "render_module", "run_environ"]

log = get_logger("gendoc")

DEFAULT_ARGS = ("help", "...")

_HEADER = """\
# This file was auto-generated by cmdtree-gendoc.
# DO NOT UPDATE MANUALLY
"""


class GendocError(CmdlineError):
    """The documentation could not be generated."""


def get_parser() -> argparse.ArgumentParser:
    """Return the command line parser of cmdtree-gendoc."""
    parser = argparse.ArgumentParser(
        prog="cmdtree-gendoc",
        description="Generate the documentation module of a cmdtree based tool.",
        allow_abbrev=False,
    )
    parser.add_argument(
        "--env",
        default="os",
        help=(
            'Environment variables to set before running the tool. If "os", grabs the variables of the current process.'
            " If empty, doesn't set any. Otherwise comma-separated KEY1=VALUE1,KEY2=VALUE2,... entries."
        ),
    )
    parser.add_argument("--out", default="./doc.py", help="Path to the output file.")
    parser.add_argument(
        "--use-stderr",
        action="store_true",
        help="Read the usage output from stderr rather than stdout, and ignore the exit status of the tool.",
    )
    parser.add_argument(
        "--postprocess-output",
        action="store_true",
        help="Remove the absolute directory of the executable from the output.",
    )
    parser.add_argument(
        "--copyright-notice",
        default="",
        help="File containing the notice to prepend to the generated module. No notice when empty.",
    )
    parser.add_argument("executable", help="The tool to document")
    parser.add_argument("args", nargs=argparse.REMAINDER, help='Arguments producing the usage output, "help ..." by default')
    return parser


def run_environ(env_spec: str, bin_dir: str, base: Mapping[str, str] | None = None) -> dict[str, str]:
    """Return the environment variables of the documented tool.

    The directory of the tool is prepended to PATH and the godoc style is
    requested.

    Args:
        env_spec: "os", empty, or comma-separated KEY=VALUE entries
        bin_dir: directory of the executable
        base: variables used for "os", defaults to os.environ
    """
    if env_spec == "os":
        result = dict(os.environ if base is None else base)
    else:
        result = {}
        for entry in env_spec.split(","):
            if not entry:
                continue
            key, _, value = entry.partition("=")
            result[key] = value
    path = result.get("PATH")
    result["PATH"] = f"{bin_dir}{os.pathsep}{path}" if path else bin_dir
    result[ENV_STYLE] = Style.GODOC.value
    return result


def post_process(body: str, bin_dir: str, strip_dir: bool) -> str:
    """Remove absolute references to the executable's directory from `body`."""
    if not strip_dir:
        return body
    return body.replace(bin_dir + os.sep, "")


def _docstring(body: str) -> str:
    escaped = body.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if escaped.endswith('"'):
        escaped = escaped[:-1] + '\\"'
    return f'"""\n{escaped}"""\n'


def render_module(body: str, copyright_notice: str = "") -> str:
    """Return the source of the generated module."""
    parts = []
    if copyright_notice:
        parts.append(copyright_notice.rstrip("\n") + "\n\n")
    parts.extend((_HEADER, "\n", _docstring(body)))
    return "".join(parts)


def generate(options: argparse.Namespace) -> Path:
    """Run the tool and write its documentation module.

    Returns:
        The path of the written module

    Raises:
        GendocError: the tool failed or a file could not be read or written
    """
    executable = Path(options.executable).resolve()
    bin_dir = str(executable.parent)
    args = options.args or list(DEFAULT_ARGS)
    command = [str(executable), *args]
    log.debug("Running %s", " ".join(command))
    try:
        result = subprocess.run(  # noqa: S603
            command,
            cwd=bin_dir,
            env=run_environ(options.env, bin_dir),
            capture_output=True,
            text=True,
            check=False,
        )
    except OSError as e:
        msg = f"{' '.join(command)!r} failed: {e}"
        raise GendocError(msg) from e
    output = result.stderr if options.use_stderr else result.stdout
    if result.returncode != 0:
        if not options.use_stderr:
            msg = f"{' '.join(command)!r} failed: exit status {result.returncode}\n{output}"
            raise GendocError(msg)
        print(f"ignoring exit status {result.returncode}")  # noqa: T201

    notice = ""
    if options.copyright_notice:
        try:
            notice = Path(options.copyright_notice).read_text(encoding="utf-8")
        except OSError as e:
            msg = f"failed to read copyright notice file: {options.copyright_notice}: {e}"
            raise GendocError(msg) from e

    out = Path(options.out)
    try:
        out.write_text(render_module(post_process(output, bin_dir, options.postprocess_output), notice), encoding="utf-8")
    except OSError as e:
        msg = f"failed to write {out}: {e}"
        raise GendocError(msg) from e
    return out


def main(argv: Sequence[str] | None = None) -> None:
    """Entry point of cmdtree-gendoc."""
    init_logger()
    options = get_parser().parse_args(argv)
    try:
        out = generate(options)
    except GendocError as e:
        print(e, file=sys.stderr)  # noqa: T201
        sys.exit(ExitCode.FAILURE)
    log.info("Wrote %s", out)


if __name__ == "__main__":
    main()
