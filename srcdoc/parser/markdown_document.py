r"""Parse a standalone Markdown file into a document page.

A file whose first line is a section keyword (``@mainpage``, ``@defgroup``,
``@class``) is treated as front matter and parsed like a source header.
Any other file becomes a :class:`~srcdoc.model.MarkdownDocument` titled by
its filename, with its first heading as the subtitle and its level 2 to 6
headings as sidebar navigation.

Example
-------
>>> from pathlib import Path
>>> from srcdoc.config import ParseOptions
>>> from srcdoc.parser.state import ParseState
>>> state = ParseState.for_options(ParseOptions())
>>> text = "# Guide\n\n## Install\n\n```\n## not a heading\n```\n"
>>> state.begin_file(Path("guide.md"), text)
>>> doc = parse_markdown_document(state, text)
>>> doc.title, doc.subtitle, [h.title for h in doc.headings]
('guide', 'Guide', ['Install'])
"""

from __future__ import annotations

import logging
import typing as typ

from ..headers import source_lines
from ..keywords import scan_keyword
from ..markdown_syntax import code_block_end, heading
from ..model import MarkdownDocument, MdHeading
from .duplicates import is_duplicate
from .sections import parse_header
from .text_region import scan_images, scan_keywords

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ..headers import SourceLine
    from .state import ParseState

logger = logging.getLogger(__name__)


def _collect_headings(lines: cabc.Sequence[SourceLine]) -> list[tuple[int, str]]:
    """Return ``(level, text)`` for every heading outside code blocks."""
    texts = [line.text for line in lines]
    found: list[tuple[int, str]] = []
    index = 0
    while index < len(texts):
        end = code_block_end(texts, index)
        if end is not None:
            index = end
            continue
        parsed = heading(texts[index])
        if parsed is not None and parsed[1]:
            found.append(parsed)
        index += 1
    return found


def parse_markdown_document(state: ParseState, text: str) -> MarkdownDocument | None:
    """Parse Markdown ``text`` read from ``state.path``.

    Parameters
    ----------
    state : ParseState
        Current parse context; ``state.path`` names the file.
    text : str
        Entire file content.

    Returns
    -------
    MarkdownDocument or None
        ``None`` when the file was front matter or its title is taken.
    """
    lines = source_lines(text)
    first = scan_keyword(lines[0].text) if lines else None
    if first is not None and first.keyword.is_section:
        parse_header(state, lines)
        return None

    title = state.path.stem if state.path is not None else ""
    if is_duplicate(state, title):
        return None

    headings = _collect_headings(lines)
    subtitle = next((words for level, words in headings if level == 1), None)
    if subtitle is None and headings:
        subtitle = headings[0][1]
    document = MarkdownDocument(
        title=title,
        subtitle=subtitle,
        text=text,
        content=text,
        path=state.path,
        headings=[
            MdHeading(title=heading_text, level=level)
            for level, heading_text in headings
            if level >= 2
        ],
    )
    scan_keywords(state, document, lines)
    scan_images(state, lines)
    state.document.insert(state.document.documents, document)
    logger.debug("document %s with %d headings", title, len(document.headings))
    return document


__all__ = ["parse_markdown_document"]
