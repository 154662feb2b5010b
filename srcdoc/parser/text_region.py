r"""Process a span of documentation text for its owning section.

Three passes run over the span:

1. Keyword pass: ``@example`` registers an :class:`~srcdoc.model.Example`
   and style keywords (``@color``, ``@font``, ``@logo``, ``@version``) set
   the section's style fields.
2. Reflow pass: keyword lines other than ``@example`` and unknown ``@words``
   are dropped, leading and trailing blank lines are trimmed, and every
   remaining line receives a markdown hard break.
3. Image pass: inline image links are recorded on the document and bare
   filenames are resolved against the pre-scanned image files.

Code blocks are opaque to all three passes.

Example
-------
>>> from srcdoc.headers import source_lines
>>> from srcdoc.model import Section
>>> from srcdoc.parser.state import ParseState
>>> from srcdoc.config import ParseOptions
>>> state = ParseState.for_options(ParseOptions())
>>> section = Section(title="net")
>>> text = process_text(state, section, source_lines("@version 1.2\n\nHello\n"))
>>> text, section.version
('Hello  \n', '1.2')
"""

from __future__ import annotations

import logging
import typing as typ

from ..diagnostics import WarningCode
from ..keywords import Keyword, KeywordMatch, scan_keyword
from ..markdown_syntax import (
    code_block_content,
    code_block_end,
    image_links,
    is_blank,
    is_image_reference,
    pad_line,
    split_arguments,
    trim_blank_lines,
)
from ..model import Example, ImageReference

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ..headers import SourceLine
    from ..model import Section
    from .state import ParseState

logger = logging.getLogger(__name__)

_KEPT_KEYWORDS = (Keyword.EXAMPLE, Keyword.UNKNOWN)


def heading_color_for(bar_color: str) -> str:
    """Derive a text color class from a bar color class.

    Examples
    --------
    >>> heading_color_for("w3-red")
    'w3-text-red'
    """
    return f"w3-text-{bar_color.removeprefix('w3-')}"


def _texts(lines: cabc.Sequence[SourceLine]) -> list[str]:
    return [line.text for line in lines]


def parse_example(
    state: ParseState,
    section: Section,
    lines: cabc.Sequence[SourceLine],
    index: int,
    match: KeywordMatch,
) -> int:
    """Register the ``@example`` at ``lines[index]`` and return the next index.

    Parameters
    ----------
    state : ParseState
        Current parse context, used for warnings.
    section : Section
        Section receiving the example.
    lines : Sequence[SourceLine]
        Span being processed.
    index : int
        Position of the ``@example`` line.
    match : KeywordMatch
        Scanner result for that line.

    Returns
    -------
    int
        Index just past the example's code block, or past the keyword line
        when no block follows.
    """
    line = lines[index]
    if is_blank(match.argument):
        state.warn(WarningCode.SYNTAX, line=line, offset=match.argument_offset)
        return index + 1

    texts = _texts(lines)
    start = index + 1
    while start < len(texts) and is_blank(texts[start]):
        start += 1
    end = code_block_end(texts, start)
    content = code_block_content(texts, start, end) if end is not None else []
    if not any(not is_blank(text) for text in content):
        anchor = lines[start] if start < len(lines) else line
        state.warn(WarningCode.EMPTY_EXAMPLE, line=anchor)

    section.examples.append(Example.from_heading(match.argument))
    logger.debug("example %r in %s", match.argument, section.title)
    return end if end is not None else index + 1


def _parse_color(
    state: ParseState, section: Section, line: SourceLine, match: KeywordMatch
) -> None:
    args = split_arguments(match.argument)
    if not args:
        state.warn(WarningCode.SYNTAX, line=line, offset=match.argument_offset)
        return
    section.bar_color = args[0]
    if len(args) > 1:
        section.title_color = args[1]
    section.heading_color = args[2] if len(args) > 2 else heading_color_for(args[0])


def _parse_font(
    state: ParseState, section: Section, line: SourceLine, match: KeywordMatch
) -> None:
    args = split_arguments(match.argument)
    if not args:
        state.warn(WarningCode.SYNTAX, line=line, offset=match.argument_offset)
        return
    section.font_body = args[0]
    if len(args) > 1:
        section.font_headings = args[1]


def _parse_logo(
    state: ParseState, section: Section, line: SourceLine, match: KeywordMatch
) -> None:
    if not is_image_reference(match.argument):
        state.warn(WarningCode.SYNTAX, line=line, offset=match.argument_offset)
        return
    section.logo = match.argument
    for link, column in image_links(match.argument):
        record_image(state, link, line, match.argument_offset + column)


def apply_style_keyword(
    state: ParseState, section: Section, line: SourceLine, found: KeywordMatch
) -> bool:
    """Apply a style keyword to ``section``; return False for other keywords."""
    match found.keyword:
        case Keyword.COLOR:
            _parse_color(state, section, line, found)
        case Keyword.FONT:
            _parse_font(state, section, line, found)
        case Keyword.LOGO:
            _parse_logo(state, section, line, found)
        case Keyword.VERSION:
            section.version = found.argument
        case _:
            return False
    return True


def scan_keywords(
    state: ParseState, section: Section, lines: cabc.Sequence[SourceLine]
) -> None:
    """Run the keyword pass: examples and style keywords, skipping code blocks."""
    texts = _texts(lines)
    index = 0
    while index < len(lines):
        match = scan_keyword(texts[index])
        if match is None:
            end = code_block_end(texts, index)
            index = end if end is not None else index + 1
            continue
        if match.keyword is Keyword.EXAMPLE:
            index = parse_example(state, section, lines, index, match)
            continue
        apply_style_keyword(state, section, lines[index], match)
        index += 1


def iter_prose_lines(
    lines: cabc.Sequence[SourceLine],
) -> cabc.Iterator[tuple[SourceLine, bool]]:
    """Yield each line with a flag telling whether it is inside a code block."""
    texts = _texts(lines)
    index = 0
    while index < len(lines):
        end = code_block_end(texts, index) if scan_keyword(texts[index]) is None else None
        if end is None:
            yield lines[index], False
            index += 1
            continue
        for inner in range(index, end):
            yield lines[inner], True
        index = end


def reflow(lines: cabc.Sequence[SourceLine]) -> str | None:
    """Drop handled keyword lines, trim blank edges and pad with hard breaks.

    Returns ``None`` when nothing but blank lines remains.
    """
    kept: list[str] = []
    for line, in_code in iter_prose_lines(lines):
        match = None if in_code else scan_keyword(line.text)
        if match is not None and match.keyword not in _KEPT_KEYWORDS:
            continue
        kept.append(line.text)
    trimmed = trim_blank_lines(kept)
    if not trimmed:
        return None
    return "\n".join(pad_line(text) for text in trimmed) + "\n"


def record_image(
    state: ParseState, link: str, line: SourceLine | None, offset: int = 0
) -> None:
    """Record an image link and resolve bare filenames against input images."""
    document = state.document
    document.images.append(ImageReference(link=link))
    if "/" in link or "\\" in link:
        return
    for image in document.input_images:
        if image.name == link:
            image.referenced = True
            return
    state.warn(WarningCode.IMAGE_NOT_FOUND, link, line=line, offset=offset)


def scan_images(state: ParseState, lines: cabc.Sequence[SourceLine]) -> None:
    """Record every inline image outside code blocks and keyword lines."""
    for line, in_code in iter_prose_lines(lines):
        if in_code or scan_keyword(line.text) is not None:
            continue
        for link, column in image_links(line.text):
            record_image(state, link, line, column)


def process_text(
    state: ParseState, section: Section, lines: cabc.Sequence[SourceLine]
) -> str | None:
    """Run all passes over ``lines`` on behalf of ``section``.

    Parameters
    ----------
    state : ParseState
        Current parse context.
    section : Section
        Section that receives examples and style overrides. For function
        notes this is the owning module or class.
    lines : Sequence[SourceLine]
        Span of header or file lines.

    Returns
    -------
    str or None
        Reflowed markdown, or ``None`` when the span holds no text.
    """
    scan_keywords(state, section, lines)
    text = reflow(lines)
    scan_images(state, lines)
    return text


__all__ = [
    "apply_style_keyword",
    "heading_color_for",
    "iter_prose_lines",
    "parse_example",
    "process_text",
    "record_image",
    "reflow",
    "scan_images",
    "scan_keywords",
]
