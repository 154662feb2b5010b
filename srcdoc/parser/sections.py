"""Split a documentation header into sections and dispatch each one.

``@class``, ``@defgroup``, ``@fn`` and ``@mainpage`` open a section that runs
to the next section keyword, so one header may define several entities.
``@ingroup``/``@inclass`` outside a section only change the current module. A
source header with text but no section keyword documents the function next to
it.
"""

from __future__ import annotations

import logging
import typing as typ

from ..diagnostics import WarningCode
from ..keywords import Keyword, scan_keyword
from ..markdown_syntax import code_block_end, is_blank
from ..model import MainPage
from .functions import extract_function
from .registry import parse_membership, parse_module
from .text_region import apply_style_keyword, process_text

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ..headers import DocHeader, SourceLine
    from .state import ParseState

logger = logging.getLogger(__name__)


def section_end(lines: cabc.Sequence[SourceLine], start: int) -> int:
    """Return the index of the next section keyword at or after ``start``."""
    texts = [line.text for line in lines]
    index = start
    while index < len(lines):
        found = scan_keyword(texts[index])
        if found is not None and found.keyword.is_section:
            return index
        end = code_block_end(texts, index) if found is None else None
        index = end if end is not None else index + 1
    return len(lines)


def parse_mainpage(state: ParseState, lines: cabc.Sequence[SourceLine]) -> MainPage | None:
    """Handle a ``@mainpage`` section.

    The title is the rest of the keyword line. The first descriptive line is
    the subtitle when a blank line (or the end of the section) follows it;
    style keywords above the subtitle still apply to the page.

    Returns
    -------
    MainPage or None
        ``None`` when a main page already exists.
    """
    first = lines[0]
    document = state.document
    if document.mainpage is not None:
        state.warn(WarningCode.DUPLICATE, "mainpage", line=first)
        return None

    found = scan_keyword(first.text)
    page = MainPage(title=found.argument if found is not None else "")
    document.mainpage = page

    body_start = 1
    for index in range(1, len(lines)):
        text = lines[index].text
        if is_blank(text) or scan_keyword(text) is not None:
            continue
        if index + 1 >= len(lines) or is_blank(lines[index + 1].text):
            page.subtitle = text.strip()
            for styled in lines[1:index]:
                keyword = scan_keyword(styled.text)
                if keyword is not None:
                    apply_style_keyword(state, page, styled, keyword)
            body_start = index + 1
        break

    page.text = process_text(state, page, lines[body_start:])
    logger.debug("mainpage %r", page.title)
    return page


def _dispatch(state: ParseState, lines: cabc.Sequence[SourceLine], keyword: Keyword) -> None:
    match keyword:
        case Keyword.CLASS:
            parse_module(state, lines, is_class=True)
        case Keyword.DEFGROUP:
            parse_module(state, lines, is_class=False)
        case Keyword.MAINPAGE:
            parse_mainpage(state, lines)
        case Keyword.FN:
            if state.header is not None:
                found = scan_keyword(lines[0].text)
                extract_function(state, lines, found.argument if found else "")
        case _:
            msg = f"{keyword} does not open a section"
            raise ValueError(msg)


def parse_header(
    state: ParseState,
    lines: cabc.Sequence[SourceLine],
    header: DocHeader | None = None,
) -> None:
    """Parse one documentation header into the document.

    Parameters
    ----------
    state : ParseState
        Current parse context.
    lines : Sequence[SourceLine]
        Cleaned header lines, or a whole Markdown file with front matter.
    header : DocHeader, optional
        The source header the lines came from. ``None`` for Markdown front
        matter, where ``@fn`` and implicit functions are ignored.
    """
    state.header = header
    state.document.stats.doc_comments += 1
    found_text = False
    index = 0
    while index < len(lines):
        found = scan_keyword(lines[index].text)
        if found is not None and found.keyword.is_membership:
            parse_membership(state, lines[index], found)
            index += 1
            continue
        if found is not None and found.keyword.is_section:
            found_text = False
            end = section_end(lines, index + 1)
            _dispatch(state, lines[index:end], found.keyword)
            index = end
            continue
        if not is_blank(lines[index].text):
            found_text = True
        index += 1

    if found_text and header is not None:
        extract_function(state, lines, membership=False)
    state.header = None


__all__ = ["parse_header", "parse_mainpage", "section_end"]
