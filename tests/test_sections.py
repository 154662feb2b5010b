"""Unit tests for header segmentation and the main page handler."""

from __future__ import annotations

from pathlib import Path

from srcdoc.config import ParseOptions
from srcdoc.diagnostics import WarningCode
from srcdoc.headers import source_lines
from srcdoc.parser import parse_header
from srcdoc.parser.sections import section_end
from srcdoc.parser.state import ParseState


def _state() -> ParseState:
    state = ParseState.for_options(ParseOptions())
    state.begin_file(Path("intro.md"), "")
    return state


def test_mainpage_title_subtitle_and_style() -> None:
    """Style keywords above the subtitle still apply to the main page."""
    state = _state()
    lines = source_lines(
        "@mainpage My Project\n@color w3-teal\nA subtitle line\n\nBody paragraph.\n"
    )
    parse_header(state, lines)
    page = state.document.mainpage
    assert page is not None
    assert page.title == "My Project"
    assert page.subtitle == "A subtitle line"
    assert page.bar_color == "w3-teal"
    assert page.text == "Body paragraph.  \n"


def test_mainpage_without_blank_after_first_line_has_no_subtitle() -> None:
    """The first line is only a subtitle when a blank line follows it."""
    state = _state()
    parse_header(state, source_lines("@mainpage P\nLine one\nLine two\n"))
    page = state.document.mainpage
    assert page is not None
    assert page.subtitle is None
    assert page.text == "Line one  \nLine two  \n"


def test_second_mainpage_is_rejected() -> None:
    """Only the first main page is kept."""
    state = _state()
    parse_header(state, source_lines("@mainpage First\n"))
    parse_header(state, source_lines("@mainpage Second\n"))
    assert state.document.mainpage is not None
    assert state.document.mainpage.title == "First"
    [entry] = state.diagnostics.entries
    assert entry.code is WarningCode.DUPLICATE
    assert entry.message == "W002 - duplicate: mainpage"


def test_header_with_several_sections() -> None:
    """Each section keyword starts a new section running to the next one."""
    state = _state()
    lines = source_lines("@defgroup a  A\ntext a\n@defgroup b  B\ntext b\n")
    parse_header(state, lines)
    texts = {module.title: module.text for module in state.document.modules}
    assert texts == {"a": "text a  \n", "b": "text b  \n"}


def test_section_end_ignores_keywords_in_code() -> None:
    """Section keywords inside fenced code do not split the section."""
    lines = source_lines("@defgroup a  A\n```\n@class Nope\n```\n@class Real\n")
    assert section_end(lines, 1) == 4


def test_markdown_front_matter_ignores_implicit_functions() -> None:
    """Loose text without a source header never becomes a function."""
    state = _state()
    parse_header(state, source_lines("Just text.\n"))
    assert state.diagnostics.count == 0
    assert state.document.stats.doc_comments == 1
    assert state.header is None


def test_fn_outside_source_header_is_ignored() -> None:
    """``@fn`` only applies inside source headers."""
    state = _state()
    parse_header(state, source_lines("@defgroup m  M\n@fn int f(void)\nBrief.\n"))
    assert state.document.modules[0].functions == []
    assert state.diagnostics.codes() == []
