"""Unit tests for the title collision check."""

from __future__ import annotations

from srcdoc.config import ParseOptions
from srcdoc.diagnostics import WarningCode
from srcdoc.model import MainPage, MarkdownDocument, Module
from srcdoc.parser import is_duplicate
from srcdoc.parser.state import ParseState


def _state() -> ParseState:
    return ParseState.for_options(ParseOptions())


def test_free_title_is_not_duplicate() -> None:
    """An unused title passes without warnings."""
    state = _state()
    state.document.modules.append(Module(title="net"))
    assert not is_duplicate(state, "io")
    assert state.diagnostics.count == 0


def test_document_titles_compare_without_extension() -> None:
    """``Guide.md`` collides with a document titled ``guide``."""
    state = _state()
    state.document.documents.append(MarkdownDocument(title="guide"))
    assert is_duplicate(state, "Guide.md")
    [entry] = state.diagnostics.entries
    assert entry.code is WarningCode.DUPLICATE
    assert entry.extra == "Guide.md"


def test_class_and_module_share_namespace() -> None:
    """Modules and classes may not share a title."""
    state = _state()
    state.document.classes.append(Module(title="Point", is_class=True))
    assert is_duplicate(state, "point")


def test_index_reserved_only_when_index_page_is_generated() -> None:
    """``index`` collides once a main page or two pages exist."""
    state = _state()
    assert not is_duplicate(state, "index")
    state.document.modules.append(Module(title="a"))
    assert not is_duplicate(state, "INDEX")
    state.document.modules.append(Module(title="b"))
    assert is_duplicate(state, "index.md")

    other = _state()
    other.document.mainpage = MainPage(title="Home")
    assert is_duplicate(other, "Index")
