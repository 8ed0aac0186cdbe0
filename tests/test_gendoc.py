import ast
import os

import pytest

from cmdtree.gendoc import GendocError, generate, get_parser, main, post_process, render_module, run_environ

GODOC_SCRIPT = """
import os
import sys

print("Tool - " + os.environ["CMDLINE_STYLE"] + " style")
print()
print("args=" + " ".join(sys.argv[1:]))
print("self=" + os.path.abspath(sys.argv[0]))
"""

STDERR_SCRIPT = """
import sys

print("usage on stderr", file=sys.stderr)
sys.exit(2)
"""


def test_run_environ_entries():
    assert run_environ("A=1,,B=x=y", "/bin/dir") == {"A": "1", "B": "x=y", "PATH": "/bin/dir", "CMDLINE_STYLE": "godoc"}


def test_run_environ_empty():
    assert run_environ("", "/d") == {"PATH": "/d", "CMDLINE_STYLE": "godoc"}


def test_run_environ_os():
    result = run_environ("os", "/d", base={"PATH": "/usr/bin", "X": "y", "CMDLINE_STYLE": "full"})
    assert result == {"PATH": f"/d{os.pathsep}/usr/bin", "X": "y", "CMDLINE_STYLE": "godoc"}


def test_post_process():
    body = f"/build/dir{os.sep}tool runs\n"
    assert post_process(body, "/build/dir", strip_dir=True) == "tool runs\n"
    assert post_process(body, "/build/dir", strip_dir=False) == body


def test_render_module():
    body = 'Tool - does things\n\nsays """ and \\ here\n'
    source = render_module(body, "# Copyright notice\n")
    assert source.startswith("# Copyright notice\n\n# This file was auto-generated by cmdtree-gendoc.\n# DO NOT UPDATE MANUALLY\n")
    assert ast.get_docstring(ast.parse(source), clean=False) == "\n" + body


def test_render_module_without_notice():
    assert render_module("x\n").startswith("# This file was auto-generated")


def test_parser_defaults():
    options = get_parser().parse_args(["tool", "help", "build"])
    assert options.env == "os"
    assert options.out == "./doc.py"
    assert options.executable == "tool"
    assert options.args == ["help", "build"]
    assert not options.use_stderr
    assert not options.postprocess_output


class TestGenerate:
    @pytest.fixture
    def out(self, tmp_path):
        return tmp_path / "doc.py"

    def options(self, *args):
        return get_parser().parse_args([str(arg) for arg in args])

    def test_generate(self, bin_dir, make_script, out):
        script = make_script("tool", GODOC_SCRIPT)
        assert generate(self.options("--env", f"PATH={bin_dir}", "--out", out, script)) == out
        doc = ast.get_docstring(ast.parse(out.read_text()), clean=False)
        assert doc.startswith("\nTool - godoc style\n\nargs=help ...\nself=/")

    def test_postprocess(self, bin_dir, make_script, out):
        script = make_script("tool", GODOC_SCRIPT)
        generate(self.options("--env", "", "--postprocess-output", "--out", out, script, "help"))
        doc = ast.get_docstring(ast.parse(out.read_text()), clean=False)
        assert "args=help\nself=tool\n" in doc
        assert str(bin_dir) not in doc

    def test_copyright_notice(self, tmp_path, make_script, out):
        notice = tmp_path / "notice.txt"
        notice.write_text("# Copyright 2026 The Authors.\n")
        script = make_script("tool", GODOC_SCRIPT)
        generate(self.options("--copyright-notice", notice, "--out", out, script))
        assert out.read_text().startswith("# Copyright 2026 The Authors.\n\n# This file was auto-generated")

    def test_missing_copyright_notice(self, tmp_path, make_script, out):
        script = make_script("tool", GODOC_SCRIPT)
        with pytest.raises(GendocError, match="failed to read copyright notice file"):
            generate(self.options("--copyright-notice", tmp_path / "missing", "--out", out, script))

    def test_failing_tool(self, make_script, out):
        script = make_script("tool", STDERR_SCRIPT)
        with pytest.raises(GendocError, match="exit status 2"):
            generate(self.options("--out", out, script))
        assert not out.exists()

    def test_use_stderr(self, make_script, out):
        script = make_script("tool", STDERR_SCRIPT)
        generate(self.options("--use-stderr", "--out", out, script))
        assert ast.get_docstring(ast.parse(out.read_text()), clean=False) == "\nusage on stderr\n"

    def test_main_reports_errors(self, tmp_path, out, capsys):
        with pytest.raises(SystemExit) as excinfo:
            main(["--out", str(out), str(tmp_path / "missing-tool")])
        assert excinfo.value.code == 1
        assert "failed" in capsys.readouterr().err
