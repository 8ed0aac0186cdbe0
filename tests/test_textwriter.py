import io

from cmdtree.textwriter import LineWriter


def render(text, width=80, indents=()):
    out = io.StringIO()
    writer = LineWriter(out, width)
    if indents:
        writer.set_indents(*indents)
    writer.write(text)
    writer.flush()
    return out.getvalue()


def test_wraps_paragraphs():
    assert render("one two three four five six\n", width=20) == "one two three four\nfive six\n"


def test_joins_consecutive_lines():
    assert render("a b\nc d\n") == "a b c d\n"


def test_indented_lines_are_verbatim():
    text = "para\n  code   here\nnext\n"
    assert render(text, width=5) == text


def test_blank_lines_collapse():
    assert render("\n\na\n\n\n\nb\n\n") == "a\n\nb\n"


def test_indents():
    assert render("aaa bbb ccc ddd", width=12, indents=("  ", "    ")) == "  aaa bbb\n    ccc ddd\n"


def test_single_indent_applies_to_all_lines():
    assert render("aaa bbb ccc", width=8, indents=("> ",)) == "> aaa\n> bbb\n> ccc\n"


def test_negative_width_never_wraps():
    text = " ".join(["word"] * 50)
    assert render(text + "\n", width=-1) == text + "\n"


def test_long_words_are_not_broken():
    assert render("https://example.com/a-very-long-path\n", width=10) == "https://example.com/a-very-long-path\n"


def test_force_verbatim():
    out = io.StringIO()
    writer = LineWriter(out, 80)
    writer.write("joined\n")
    writer.force_verbatim(True)
    writer.write("Not joined\nlines\n")
    writer.force_verbatim(False)
    writer.write("joined\nagain\n")
    writer.flush()
    assert out.getvalue() == "joined\nNot joined\nlines\njoined again\n"


def test_trailing_spaces_are_stripped():
    assert render("a   \n   \n  b  \n") == "a\n\n  b\n"


def test_partial_lines_are_kept_until_flush():
    out = io.StringIO()
    writer = LineWriter(out, 80)
    writer.write("hello ")
    writer.write("world")
    assert out.getvalue() == ""
    writer.flush()
    assert out.getvalue() == "hello world\n"
    assert writer.width == 80


def test_write_line_keeps_blank_lines():
    out = io.StringIO()
    writer = LineWriter(out, 10)
    writer.write_line("")
    writer.write_line("a long line that is never wrapped")
    writer.flush()
    assert out.getvalue() == "\na long line that is never wrapped\n"
