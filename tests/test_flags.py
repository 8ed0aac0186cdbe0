import pytest

from cmdtree.flags import AttrValue, FlagSet, GlobalFlags, TypedValue, parse_bool
from cmdtree.models import FlagError, HelpRequested


@pytest.fixture
def flags():
    fs = FlagSet()
    fs.add_string("name", "x", "The name.")
    fs.add_int("n", 1, "A number.")
    fs.add_bool("v", False, "Verbose.")
    return fs


def test_parse(flags):
    rest = flags.parse(["-name=foo", "--n", "3", "-v", "rest", "-x"])
    assert rest == ["rest", "-x"]
    assert flags["name"] == "foo"
    assert flags["n"] == 3
    assert flags["v"] is True


def test_parse_defaults(flags):
    assert flags.parse([]) == []
    assert flags["name"] == "x"
    assert flags["n"] == 1
    assert flags["v"] is False


def test_explicit_bool_value(flags):
    flags.parse(["-v=true"])
    flags.parse(["-v=false"])
    assert flags["v"] is False


def test_double_dash_ends_flags(flags):
    assert flags.parse(["-v", "--", "-n"]) == ["-n"]


def test_single_dash_is_an_argument(flags):
    assert flags.parse(["-", "-v"]) == ["-", "-v"]


def test_unknown_flag(flags):
    with pytest.raises(FlagError, match="flag provided but not defined: -x"):
        flags.parse(["-x"])


def test_missing_value(flags):
    with pytest.raises(FlagError, match="flag needs an argument: -n"):
        flags.parse(["-n"])


def test_invalid_value(flags):
    with pytest.raises(FlagError, match='invalid value "abc" for flag -n'):
        flags.parse(["-n=abc"])


def test_bad_syntax(flags):
    with pytest.raises(FlagError, match="bad flag syntax"):
        flags.parse(["---v"])
    with pytest.raises(FlagError, match="bad flag syntax"):
        flags.parse(["-=3"])


@pytest.mark.parametrize("arg", ["-h", "-help", "--help"])
def test_help_requested(flags, arg):
    with pytest.raises(HelpRequested):
        flags.parse(["-v", arg])


def test_help_can_be_defined():
    fs = FlagSet()
    fs.add_bool("h", False, "Human readable.")
    assert fs.parse(["-h", "x"]) == ["x"]
    assert fs["h"] is True


def test_duplicate_flag(flags):
    with pytest.raises(ValueError, match="flag redefined: n"):
        flags.add_int("n", 2, "")


def test_iteration_is_sorted(flags):
    assert [flag.name for flag in flags] == ["n", "name", "v"]
    assert len(flags) == 3
    assert "name" in flags
    assert "other" not in flags


def test_usage_is_dedented():
    fs = FlagSet()
    flag = fs.add_string(
        "s",
        "",
        """
        First line.
          Indented line.
        """,
    )
    assert flag.usage == "First line.\n  Indented line."


def test_default_display(flags):
    flags.parse(["-name=other", "-v"])
    assert flags.lookup("name").default == "x"
    assert flags.lookup("v").default == "false"
    assert str(flags.lookup("v").value) == "true"


def test_merged_earlier_wins():
    first, second = FlagSet(), FlagSet()
    first.add_string("a", "first", "")
    second.add_string("a", "second", "")
    second.add_string("b", "second", "")
    merged = first.merged(second)
    assert [flag.name for flag in merged] == ["a", "b"]
    assert merged["a"] == "first"
    merged.parse(["-b=changed"])
    assert second["b"] == "changed"


def test_attr_value():
    class Target:
        width = 80

    target = Target()
    fs = FlagSet()
    fs.var(AttrValue(target, "width", int), "width", "Width.", default="<terminal width>")
    fs.parse(["-width", "-1"])
    assert target.width == -1
    assert fs["width"] == -1
    assert fs.lookup("width").default == "<terminal width>"


def test_typed_value():
    value = TypedValue(parse_bool, True)
    assert value.is_bool
    assert str(value) == "true"
    assert not TypedValue(str, "x").is_bool


@pytest.mark.parametrize(("text", "expected"), [("1", True), ("t", True), ("TRUE", True), ("0", False), ("f", False), ("no", False)])
def test_parse_bool(text, expected):
    assert parse_bool(text) is expected


def test_parse_bool_invalid():
    with pytest.raises(ValueError, match="invalid boolean"):
        parse_bool("maybe")


class TestGlobalFlags:
    @pytest.fixture
    def global_flags(self):
        gf = GlobalFlags()
        gf.flags.add_string("alpha", "a", "Alpha flag.")
        gf.flags.add_string("beta", "b", "Beta flag.")
        gf.flags.add_string("alpine", "c", "Alpine flag.")
        return gf

    def test_all_visible_by_default(self, global_flags):
        assert [flag.name for flag in global_flags.select(visible=True)] == ["alpha", "alpine", "beta"]
        assert global_flags.select(visible=False) == []

    def test_hide_except(self, global_flags):
        global_flags.hide_except("^al")
        assert [flag.name for flag in global_flags.select(visible=True)] == ["alpha", "alpine"]
        assert [flag.name for flag in global_flags.select(visible=False)] == ["beta"]

    def test_hide_except_accumulates(self, global_flags):
        global_flags.hide_except("^alpha$")
        global_flags.hide_except("beta")
        assert [flag.name for flag in global_flags.select(visible=False)] == ["alpine"]

    def test_hide_all(self, global_flags):
        global_flags.hide_except()
        assert global_flags.select(visible=True) == []
        assert not global_flags.is_visible("alpha")
