"""Unit tests for standalone Markdown documents and Markdown front matter."""

from __future__ import annotations

from pathlib import Path

from srcdoc.config import ParseOptions
from srcdoc.diagnostics import WarningCode
from srcdoc.model import MarkdownDocument, Module
from srcdoc.parser import parse_markdown_document
from srcdoc.parser.state import ParseState


def _parse(
    text: str, name: str, state: ParseState | None = None
) -> tuple[ParseState, MarkdownDocument | None]:
    state = state or ParseState.for_options(ParseOptions())
    state.begin_file(Path(name), text)
    return state, parse_markdown_document(state, text)


def test_document_title_subtitle_and_headings() -> None:
    """The filename is the title and the first level 1 heading the subtitle."""
    text = "## Before\n\n# Guide\n\nIntro.\n\n### Details\n\n```\n# not a heading\n```\n"
    state, doc = _parse(text, "docs/guide.md")
    assert doc is not None
    assert doc.title == "guide"
    assert doc.subtitle == "Guide"
    assert [(h.title, h.level) for h in doc.headings] == [("Before", 2), ("Details", 3)]
    assert doc.content == text
    assert state.document.documents == [doc]


def test_subtitle_falls_back_to_first_heading() -> None:
    """Without a level 1 heading the first heading is used."""
    _, doc = _parse("## Start\n\nText.\n", "notes.markdown")
    assert doc is not None
    assert doc.subtitle == "Start"


def test_document_examples_and_style_keywords() -> None:
    """Examples and style keywords in the file apply to the document."""
    text = "@color w3-green\n\n# Recipes\n\n@example Boil\n\n    boil(egg)\n"
    _, doc = _parse(text, "recipes.md")
    assert doc is not None
    assert doc.bar_color == "w3-green"
    assert [example.title for example in doc.examples] == ["Example: Boil"]


def test_front_matter_is_parsed_as_header() -> None:
    """A file opening with a section keyword defines entities instead."""
    state, doc = _parse("@defgroup net  Networking\n\nMore about nets.\n", "net.md")
    assert doc is None
    assert state.document.documents == []
    [module] = state.document.modules
    assert (module.title, module.text) == ("net", "More about nets.  \n")


def test_document_colliding_with_module_is_rejected() -> None:
    """A document named like an existing module is dropped."""
    state = ParseState.for_options(ParseOptions())
    state.document.modules.append(Module(title="Foo", subtitle="Foo Module"))
    _, doc = _parse("# Foo\n", "foo.md", state)
    assert doc is None
    assert state.document.documents == []
    [entry] = state.diagnostics.entries
    assert entry.code is WarningCode.DUPLICATE
    assert entry.extra == "foo"
