"generic fixtures"

import io
import stat
import sys
import textwrap
from dataclasses import dataclass, field

import pytest

from cmdtree.commands.models import Command, RunnerFunc, Topic
from cmdtree.constants import ENV_WIDTH
from cmdtree.env import Env
from cmdtree.flags import GlobalFlags


def pytest_configure():
    "Runs once before all"
    from cmdtree.logging_setup import init_logger

    init_logger("/dev/null", force_debug=True)


@pytest.fixture
def bin_dir(tmp_path):
    "Directory holding the fake external sub-commands"
    path = tmp_path / "bin"
    path.mkdir()
    return path


@pytest.fixture
def make_script(bin_dir):
    "Factory writing an executable Python script in `bin_dir`"

    def _make(name, body, directory=None, executable=True):
        path = (directory or bin_dir) / name
        path.write_text(f"#!{sys.executable}\n{textwrap.dedent(body)}")
        if executable:
            path.chmod(path.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
        return path

    return _make


@pytest.fixture
def env(bin_dir):
    "An environment with captured streams, a 80 columns width and `bin_dir` as PATH"
    return Env(
        stdin=io.StringIO(),
        stdout=io.StringIO(),
        stderr=io.StringIO(),
        vars={"PATH": str(bin_dir), ENV_WIDTH: "80"},
        global_flags=GlobalFlags(),
    )


@dataclass
class Calls:
    "Records the runs of a command"

    args: list[list[str]] = field(default_factory=list)

    def __call__(self, env, args):
        self.args.append(args)
        env.stdout.write(f"echo: {' '.join(args)}\n")


@pytest.fixture
def calls():
    return Calls()


@pytest.fixture
def tree(calls):
    "tool > build (runnable, with a -v flag), plus a topic"
    build = Command(
        name="build",
        short="Build things",
        long="""
            Build compiles the things.
        """,
        args_name="<target>",
        args_long="<target> is the thing to build.",
        runner=RunnerFunc(calls),
    )
    build.flags.add_bool("v", False, "Verbose output.")
    return Command(
        name="tool",
        short="Does tool things",
        long="Tool manages things.",
        children=[build],
        topics=[Topic("topic", "A topic", "Topic body text.")],
    )
