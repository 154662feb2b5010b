"""Unit tests for the text-region passes: keywords, reflow and images."""

from __future__ import annotations

from pathlib import Path

import pytest

from srcdoc.config import ParseOptions
from srcdoc.diagnostics import WarningCode
from srcdoc.headers import source_lines
from srcdoc.model import InputImageFile, Section
from srcdoc.parser.state import ParseState
from srcdoc.parser.text_region import heading_color_for, process_text, reflow


@pytest.fixture
def state() -> ParseState:
    """Return a fresh parse state positioned in ``notes.c``."""
    parse_state = ParseState.for_options(ParseOptions())
    parse_state.begin_file(Path("notes.c"), "")
    return parse_state


def test_reflow_drops_handled_keywords_and_pads() -> None:
    """Style and parameter lines vanish; examples and unknown words stay."""
    lines = source_lines(
        "\n@color w3-red\nFirst line\n@param x dropped\n@todo keep me\n\n@example Demo\n\n"
    )
    assert reflow(lines) == "First line  \n@todo keep me  \n\n@example Demo  \n"


def test_reflow_returns_none_for_blank_text() -> None:
    """A span with nothing but keywords and blanks has no text."""
    assert reflow(source_lines("\n@version 2\n\n")) is None


def test_reflow_leaves_code_block_keywords_alone() -> None:
    """Keyword-looking lines inside fences are code, not directives."""
    lines = source_lines("```\n@param inside\n```\n")
    assert reflow(lines) == "```  \n@param inside  \n```  \n"


def test_reflow_padding_is_idempotent() -> None:
    """Reflowing already padded text does not add more trailing spaces."""
    once = reflow(source_lines("alpha\nbeta\n"))
    assert once is not None
    assert reflow(source_lines(once)) == once


def test_color_sets_bar_title_and_derived_heading(state: ParseState) -> None:
    """Two colors set bar and title; the heading color is derived from the bar."""
    section = Section(title="net")
    process_text(state, section, source_lines("@color w3-red w3-white\n"))
    assert (section.bar_color, section.title_color, section.heading_color) == (
        "w3-red",
        "w3-white",
        "w3-text-red",
    )


def test_color_accepts_explicit_heading(state: ParseState) -> None:
    """A third color overrides the derived heading color."""
    section = Section(title="net")
    process_text(state, section, source_lines("@color w3-red w3-white w3-text-black\n"))
    assert section.heading_color == "w3-text-black"
    assert heading_color_for("w3-indigo") == "w3-text-indigo"


def test_font_version_and_logo(state: ParseState) -> None:
    """Font pairs, free-text versions and image logos are applied."""
    state.document.input_images.append(InputImageFile(path=Path("img/logo.png")))
    section = Section(title="net")
    lines = source_lines(
        '@font "Open Sans" Georgia\n@version 1.2 beta\n@logo ![Logo](logo.png)\n'
    )
    process_text(state, section, lines)
    assert section.font_body == "Open Sans"
    assert section.font_headings == "Georgia"
    assert section.version == "1.2 beta"
    assert section.logo == "![Logo](logo.png)"
    assert state.document.input_images[0].referenced
    assert state.diagnostics.count == 0


def test_bad_logo_and_empty_color_warn(state: ParseState) -> None:
    """A logo that is not an image reference and an empty color are syntax errors."""
    section = Section(title="net")
    process_text(state, section, source_lines("@logo logo.png\n@color\n"))
    assert section.logo is None
    assert section.bar_color is None
    assert state.diagnostics.codes() == [WarningCode.SYNTAX, WarningCode.SYNTAX]


def test_example_with_code_block(state: ParseState) -> None:
    """An example followed by a code block registers without warnings."""
    section = Section(title="net")
    text = process_text(
        state, section, source_lines("@example  Send   a packet\n\n    send(p);\n")
    )
    assert [example.title for example in section.examples] == ["Example: Send a packet"]
    assert state.diagnostics.count == 0
    assert text is not None
    assert "    send(p);  " in text.splitlines()


def test_example_without_title_is_a_syntax_error(state: ParseState) -> None:
    """``@example`` alone is rejected."""
    section = Section(title="net")
    process_text(state, section, source_lines("@example\n\n    code();\n"))
    assert section.examples == []
    assert state.diagnostics.codes() == [WarningCode.SYNTAX]


def test_example_with_empty_fence_warns_but_registers(state: ParseState) -> None:
    """An empty fenced block still yields the example plus a warning."""
    section = Section(title="net")
    process_text(state, section, source_lines("@example Demo\n```\n```\n"))
    assert [example.title for example in section.examples] == ["Example: Demo"]
    assert state.diagnostics.codes() == [WarningCode.EMPTY_EXAMPLE]


def test_image_resolution(state: ParseState) -> None:
    """Bare names resolve against input images; paths and URLs are not checked."""
    state.document.input_images.append(InputImageFile(path=Path("docs/lake.png")))
    section = Section(title="net")
    lines = source_lines(
        "![a](lake.png)\n![b](https://example.invalid/x.png)\n"
        "```\n![c](in-code.png)\n```\n![d](missing.png)\n"
    )
    process_text(state, section, lines)
    links = [image.link for image in state.document.images]
    assert links == ["lake.png", "https://example.invalid/x.png", "missing.png"]
    assert state.document.input_images[0].referenced
    [entry] = state.diagnostics.entries
    assert entry.message == "W012 - image not found: missing.png"
    assert entry.position is not None
    assert (entry.position.path, entry.position.line) == ("notes.c", 6)
