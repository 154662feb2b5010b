r"""Locate documentation headers inside source files.

Two header conventions are recognized:

* ``/*! ... */`` comment blocks, which precede the code they document.
* ``'''! ... '''`` doc strings, with either quote character, which follow the code
  they document.

Each header is returned as a :class:`DocHeader` whose lines have been
stripped of comment decoration while remembering their original line and
column, so diagnostics can point back into the file.

Example
-------
>>> from srcdoc.headers import find_headers
>>> text = "/*!\n  @defgroup net  Networking\n*/\nint x;\n"
>>> header = next(find_headers(text))
>>> [line.text for line in header.lines]
['@defgroup net  Networking']
>>> header.lines[0].line, header.lines[0].column
(2, 3)
"""

from __future__ import annotations

import dataclasses as dc
import enum
import typing as typ

if typ.TYPE_CHECKING:
    import collections.abc as cabc

COMMENT_OPEN = "/*!"
COMMENT_CLOSE = "*/"
DOCSTRING_OPENERS = ('"""!', "'''!")
DECORATION_CHARS = "-*=#/ \t"


class HeaderKind(enum.Enum):
    """Placement of a header relative to the code it documents."""

    COMMENT = "comment"
    DOCSTRING = "docstring"


@dc.dataclass(slots=True, frozen=True)
class SourceLine:
    """One line of header text plus its 1-based location in the file."""

    text: str
    line: int
    column: int = 1


@dc.dataclass(slots=True)
class DocHeader:
    """A documentation header found in a source file.

    Attributes
    ----------
    kind : HeaderKind
        Whether the header precedes (comment) or follows (doc string) code.
    lines : list[SourceLine]
        Cleaned header lines.
    start : int
        0-based index of the line holding the opening marker.
    end : int
        0-based index of the first line after the closing marker.
    """

    kind: HeaderKind
    lines: list[SourceLine]
    start: int
    end: int


def source_lines(text: str, first_line: int = 1) -> list[SourceLine]:
    """Wrap every line of ``text`` as a :class:`SourceLine` in column 1."""
    return [
        SourceLine(text=line, line=first_line + idx)
        for idx, line in enumerate(text.splitlines())
    ]


def _is_decoration(text: str) -> bool:
    return not text.strip(DECORATION_CHARS)


def _open_marker(line: str) -> tuple[HeaderKind, str, int] | None:
    """Return kind, closing marker and marker end column for an opener line."""
    stripped = line.lstrip()
    indent = len(line) - len(stripped)
    if stripped.startswith(COMMENT_OPEN):
        return HeaderKind.COMMENT, COMMENT_CLOSE, indent + len(COMMENT_OPEN)
    for opener in DOCSTRING_OPENERS:
        if stripped.startswith(opener):
            return HeaderKind.DOCSTRING, opener[:3], indent + len(opener)
    return None


def _strip_star_prefix(raw: list[tuple[str, int, int]]) -> list[tuple[str, int, int]] | None:
    """Remove a `` * `` gutter when every non-blank line carries one."""
    body = [entry for entry in raw if entry[0].strip()]
    if not body or not all(text.lstrip().startswith("*") for text, _, _ in body):
        return None
    stripped: list[tuple[str, int, int]] = []
    for text, line, column in raw:
        if not text.strip():
            stripped.append(("", line, column))
            continue
        lead = len(text) - len(text.lstrip())
        cut = lead + 1
        if text[cut : cut + 1] == " ":
            cut += 1
        stripped.append((text[cut:], line, column + cut))
    return stripped


def _dedent(raw: list[tuple[str, int, int]]) -> list[tuple[str, int, int]]:
    indents = [len(text) - len(text.lstrip()) for text, _, _ in raw if text.strip()]
    common = min(indents, default=0)
    dedented: list[tuple[str, int, int]] = []
    for text, line, column in raw:
        if text.strip():
            dedented.append((text[common:], line, column + common))
        else:
            dedented.append(("", line, column))
    return dedented


def _clean(
    first: tuple[str, int, int], middle: list[tuple[str, int, int]]
) -> list[SourceLine]:
    """Drop decoration on the opening line and strip the comment gutter."""
    raw: list[tuple[str, int, int]] = []
    if not _is_decoration(first[0]):
        lead = len(first[0]) - len(first[0].lstrip())
        raw.append((first[0].lstrip(), first[1], first[2] + lead))
    body = _strip_star_prefix(middle)
    raw.extend(_dedent(middle) if body is None else body)
    return [
        SourceLine(text=text.rstrip(), line=line, column=column)
        for text, line, column in raw
    ]


def find_headers(text: str) -> cabc.Iterator[DocHeader]:
    """Yield every documentation header in ``text`` in file order.

    Parameters
    ----------
    text : str
        Entire contents of a source file.

    Yields
    ------
    DocHeader
        One per ``/*!`` comment or ``'''!`` doc string. An unterminated
        header runs to the end of the file.
    """
    file_lines = text.splitlines()
    index = 0
    while index < len(file_lines):
        opener = _open_marker(file_lines[index])
        if opener is None:
            index += 1
            continue
        kind, closer, content_col = opener
        start = index
        head = file_lines[index][content_col:]
        close_at = head.find(closer)
        if close_at >= 0:
            first = (head[:close_at], index + 1, content_col + 1)
            yield DocHeader(kind=kind, lines=_clean(first, []), start=start, end=index + 1)
            index += 1
            continue

        first = (head, index + 1, content_col + 1)
        middle: list[tuple[str, int, int]] = []
        index += 1
        while index < len(file_lines):
            line = file_lines[index]
            close_at = line.find(closer)
            index += 1
            if close_at < 0:
                middle.append((line, index, 1))
                continue
            if not _is_decoration(line[:close_at]):
                middle.append((line[:close_at], index, 1))
            break
        yield DocHeader(kind=kind, lines=_clean(first, middle), start=start, end=index)


__all__ = ["DocHeader", "HeaderKind", "SourceLine", "find_headers", "source_lines"]
