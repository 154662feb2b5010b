"""Unit tests for documentation header discovery.

``find_headers`` recognizes ``/*!`` comments and ``\"\"\"!`` doc strings,
strips comment decoration and keeps each line's file position so warnings can
point back into the source.
"""

from __future__ import annotations

from srcdoc.headers import HeaderKind, find_headers, source_lines


def test_comment_header_strips_star_gutter() -> None:
    """A `` * `` gutter is removed and columns account for it."""
    text = (
        "int a;\n"
        "/*!\n"
        " * @defgroup net  Networking\n"
        " *\n"
        " * Sends packets.\n"
        " */\n"
        "int b;\n"
    )
    headers = list(find_headers(text))
    assert len(headers) == 1
    header = headers[0]
    assert header.kind is HeaderKind.COMMENT
    assert [line.text for line in header.lines] == [
        "@defgroup net  Networking",
        "",
        "Sends packets.",
    ]
    assert (header.lines[0].line, header.lines[0].column) == (3, 4)
    assert header.start == 1
    assert header.end == 6


def test_single_line_comment_header() -> None:
    """Opener and closer on one line yield the text between them."""
    headers = list(find_headers("/*! Adds two numbers */\nint add(int a, int b);\n"))
    assert [line.text for line in headers[0].lines] == ["Adds two numbers"]
    assert headers[0].end == 1


def test_docstring_header_is_dedented() -> None:
    """Doc string headers drop their common indentation."""
    text = (
        "def area(r):\n"
        '    """!\n'
        "    Area of a circle.\n"
        "\n"
        "    @param r radius\n"
        '    """\n'
        "    return 3.14 * r * r\n"
    )
    header = next(find_headers(text))
    assert header.kind is HeaderKind.DOCSTRING
    assert [line.text for line in header.lines] == [
        "Area of a circle.",
        "",
        "@param r radius",
    ]
    assert header.lines[2].column == 5
    assert header.start == 1


def test_plain_comments_are_ignored() -> None:
    """Ordinary comments and doc strings are not headers."""
    text = '/* plain */\ndef f():\n    """Plain doc string."""\n'
    assert list(find_headers(text)) == []


def test_unterminated_header_runs_to_end_of_file() -> None:
    """A missing closer ends the header at end of file."""
    header = next(find_headers("/*!\n@mainpage Demo\nbody\n"))
    assert [line.text for line in header.lines] == ["@mainpage Demo", "body"]
    assert header.end == 3


def test_source_lines_numbers_from_one() -> None:
    """Markdown files are wrapped line by line starting at line 1."""
    lines = source_lines("a\nb\n")
    assert [(line.text, line.line, line.column) for line in lines] == [
        ("a", 1, 1),
        ("b", 2, 1),
    ]
