r"""Line-level Markdown helpers shared by the parser and renderers.

The parser works on lists of lines rather than a Markdown AST, so these
helpers answer narrow questions: does a code block start here and where does
it end, is this line a heading, which image links appear on a line, and how
should an argument string be split into tokens.

Example
-------
>>> from srcdoc.markdown_syntax import heading, slugify
>>> heading("## Install  ##")
(2, 'Install')
>>> slugify("  This $%@! Long Title  ")
'This-Long-Title'
"""

from __future__ import annotations

import re
import string
import typing as typ

from ._constants import HARD_BREAK

if typ.TYPE_CHECKING:
    import collections.abc as cabc

FENCE_PATTERN = re.compile(r"^[ ]{0,3}(`{3,}|~{3,})")
HEADING_PATTERN = re.compile(r"^(#{1,6})(?:[ \t]+(.*?))?[ \t]*#*[ \t]*$")
IMAGE_PATTERN = re.compile(r'!\[([^\]]*)\]\(\s*([^)\s]+)(?:\s+"[^"]*")?\s*\)')
ARGUMENT_PATTERN = re.compile(r'"([^"]*)"|(\S+)')
IDENTIFIER_PATTERN = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")
SLUG_SEPARATOR_PATTERN = re.compile(r"[\W_]+")

_ASCII_FOLD = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


def is_blank(line: str) -> bool:
    """Return True when ``line`` holds only whitespace."""
    return not line.strip()


def is_indented_code(line: str) -> bool:
    """Return True when ``line`` is a non-blank, four-space indented code line."""
    return (line.startswith("    ") or line.startswith("\t")) and not is_blank(line)


def code_block_end(lines: cabc.Sequence[str], index: int) -> int | None:
    """Return the index just past the code block starting at ``index``.

    Fenced blocks (backticks or tildes) end after the matching closing fence,
    or at the end of ``lines`` when the fence is never closed. Indented blocks
    end after the last indented line, so trailing blank lines are not part of
    the block.

    Parameters
    ----------
    lines : Sequence[str]
        The lines being scanned.
    index : int
        Position of the candidate opening line.

    Returns
    -------
    int or None
        ``None`` when ``lines[index]`` does not start a code block.
    """
    if index >= len(lines):
        return None
    line = lines[index]
    fence = FENCE_PATTERN.match(line)
    if fence:
        marker = fence.group(1)
        for pos in range(index + 1, len(lines)):
            closing = FENCE_PATTERN.match(lines[pos])
            if (
                closing
                and closing.group(1)[0] == marker[0]
                and len(closing.group(1)) >= len(marker)
                and is_blank(lines[pos][closing.end() :])
            ):
                return pos + 1
        return len(lines)
    if is_indented_code(line):
        end = index + 1
        last = end
        while end < len(lines) and (is_indented_code(lines[end]) or is_blank(lines[end])):
            end += 1
            if not is_blank(lines[end - 1]):
                last = end
        return last
    return None


def code_block_content(lines: cabc.Sequence[str], start: int, end: int) -> list[str]:
    """Return the content lines of the block ``lines[start:end]`` without fences."""
    block = list(lines[start:end])
    if block and FENCE_PATTERN.match(block[0]):
        block = block[1:]
        closing = FENCE_PATTERN.match(block[-1]) if block else None
        if closing and is_blank(block[-1][closing.end() :]):
            block = block[:-1]
    return block


def heading(line: str) -> tuple[int, str] | None:
    """Return ``(level, text)`` for an ATX heading line, else ``None``."""
    match = HEADING_PATTERN.match(line)
    if not match:
        return None
    text = (match.group(2) or "").strip()
    return len(match.group(1)), text


def image_links(line: str) -> list[tuple[str, int]]:
    """Return ``(link, column_offset)`` for every inline image on ``line``."""
    return [(match.group(2), match.start()) for match in IMAGE_PATTERN.finditer(line)]


def is_image_reference(text: str) -> bool:
    """Return True when ``text`` is exactly one markdown image reference."""
    return IMAGE_PATTERN.fullmatch(text.strip()) is not None


def split_arguments(text: str) -> list[str]:
    """Split keyword arguments on whitespace, honouring double quotes.

    Examples
    --------
    >>> split_arguments('w3-red "w3-pale-red" extra')
    ['w3-red', 'w3-pale-red', 'extra']
    """
    return [quoted if quoted is not None else bare for quoted, bare in _tokens(text)]


def _tokens(text: str) -> cabc.Iterator[tuple[str | None, str]]:
    for match in ARGUMENT_PATTERN.finditer(text):
        yield match.group(1), match.group(2)


def split_name(text: str) -> tuple[str, str, int]:
    """Split ``text`` into a leading name token and the remaining description.

    Returns the name, the description (leading whitespace removed) and the
    column offset of the description within ``text``.
    """
    start = len(text) - len(text.lstrip())
    name_end = start
    while name_end < len(text) and not text[name_end].isspace():
        name_end += 1
    offset = name_end
    while offset < len(text) and text[offset].isspace():
        offset += 1
    return text[start:name_end], text[offset:].rstrip(), offset


def is_identifier(name: str) -> bool:
    """Return True when ``name`` is a C-like identifier."""
    return IDENTIFIER_PATTERN.fullmatch(name) is not None


def pad_line(line: str) -> str:
    """Append a markdown hard break to non-blank lines that lack one."""
    if is_blank(line) or line.endswith(HARD_BREAK):
        return line
    return line + HARD_BREAK


def trim_blank_lines(lines: cabc.Sequence[str]) -> list[str]:
    """Drop leading and trailing blank lines."""
    start = 0
    end = len(lines)
    while start < end and is_blank(lines[start]):
        start += 1
    while end > start and is_blank(lines[end - 1]):
        end -= 1
    return list(lines[start:end])


def ascii_fold(text: str) -> str:
    """Lower-case ASCII letters only, leaving other characters untouched."""
    return text.translate(_ASCII_FOLD)


def same_title(left: str, right: str) -> bool:
    """Compare two titles with ASCII-only case folding."""
    return ascii_fold(left) == ascii_fold(right)


def strip_extension(name: str) -> str:
    """Remove a trailing ``.ext`` from ``name`` when one is present."""
    stem, dot, ext = name.rpartition(".")
    if dot and stem and ext and "/" not in ext:
        return stem
    return name


def slugify(title: str) -> str:
    """Return a URL-safe slug that keeps letters and digits in any script.

    Examples
    --------
    >>> slugify("Über Größe 2")
    'Über-Größe-2'
    """
    return SLUG_SEPARATOR_PATTERN.sub("-", title).strip("-")


__all__ = [
    "ascii_fold",
    "code_block_content",
    "code_block_end",
    "heading",
    "image_links",
    "is_blank",
    "is_identifier",
    "is_image_reference",
    "pad_line",
    "same_title",
    "slugify",
    "split_arguments",
    "split_name",
    "strip_extension",
    "trim_blank_lines",
]
