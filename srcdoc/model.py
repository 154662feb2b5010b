r"""Document model assembled by the parser and consumed by the renderers.

A :class:`Document` owns the optional main page, the ordered modules, classes
and Markdown documents, the discovered image references, and the candidate
image files found before parsing started. Ordering is either encounter order
or case-insensitive alphabetical order, fixed for the whole run.

Example
-------
>>> from srcdoc.model import Document, Module
>>> doc = Document(sort=True)
>>> doc.insert(doc.modules, Module(title="zeta"))
>>> doc.insert(doc.modules, Module(title="Alpha"))
>>> [module.title for module in doc.modules]
['Alpha', 'zeta']
"""

from __future__ import annotations

import bisect
import dataclasses as dc
import typing as typ
from pathlib import Path

from ._constants import (
    DEFAULT_BAR_COLOR,
    DEFAULT_HEADING_COLOR,
    DEFAULT_LOGO,
    DEFAULT_TITLE_COLOR,
    EXAMPLE_PREFIX,
)
from .markdown_syntax import ascii_fold

_T = typ.TypeVar("_T", bound="Titled")


class Titled(typ.Protocol):
    """Anything ordered by title."""

    title: str


@dc.dataclass(slots=True)
class Example:
    """Cross-reference to an example whose code stays in the section text."""

    title: str

    @classmethod
    def from_heading(cls, heading: str) -> Example:
        """Build an example from the text following ``@example``."""
        return cls(title=f"{EXAMPLE_PREFIX}{' '.join(heading.split())}")


@dc.dataclass(slots=True)
class Section:
    """Title, body and style shared by every page-like entity.

    Attributes
    ----------
    title : str
        Unique page title.
    subtitle : str or None
        One-line description; ``None`` for stubs.
    text : str or None
        Keyword-stripped, hard-break padded Markdown body.
    bar_color, title_color, heading_color : str or None
        W3.CSS color classes overriding the defaults.
    font_body, font_headings : str or None
        Font family overrides.
    logo : str or None
        Markdown image reference shown in the page bar.
    version : str or None
        Free-form version string.
    examples : list[Example]
        Examples found in this section's text, in text order.
    """

    title: str
    subtitle: str | None = None
    text: str | None = None
    bar_color: str | None = None
    title_color: str | None = None
    heading_color: str | None = None
    font_body: str | None = None
    font_headings: str | None = None
    logo: str | None = None
    version: str | None = None
    examples: list[Example] = dc.field(default_factory=list)

    @property
    def is_stub(self) -> bool:
        """Return True when no definition has filled this section yet."""
        return self.subtitle is None and self.text is None


@dc.dataclass(slots=True)
class MainPage(Section):
    """The single project landing page."""


@dc.dataclass(slots=True)
class Function:
    """A documented function or method.

    Attributes
    ----------
    name : str
        Identifier extracted from the prototype.
    brief : str
        First descriptive line of the header.
    prototype : str
        Prototype text, a blank line, then padded parameter lines.
    notes : str or None
        Remaining header text rendered after the prototype.
    language : str
        Syntax-highlighting hint derived from the file extension.
    """

    name: str
    brief: str
    prototype: str
    notes: str | None = None
    language: str = ""

    @property
    def title(self) -> str:
        """Return the name, used for ordering."""
        return self.name


@dc.dataclass(slots=True)
class Module(Section):
    """A ``@defgroup`` module or an ``@class`` class and its functions."""

    is_class: bool = False
    functions: list[Function] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class MdHeading:
    """Heading used for sidebar navigation of a Markdown document."""

    title: str
    level: int = 2


@dc.dataclass(slots=True)
class MarkdownDocument(Section):
    """A standalone Markdown file rendered as its own page."""

    content: str = ""
    path: Path | None = None
    headings: list[MdHeading] = dc.field(default_factory=list)


@dc.dataclass(slots=True)
class ImageReference:
    """A markdown image link as written in the input."""

    link: str


@dc.dataclass(slots=True)
class InputImageFile:
    """A candidate image discovered before parsing."""

    path: Path
    referenced: bool = False

    @property
    def name(self) -> str:
        """Return the bare filename used when resolving references."""
        return self.path.name


@dc.dataclass(slots=True)
class Statistics:
    """Aggregate counts reported after a run."""

    modules: int = 0
    functions: int = 0
    classes: int = 0
    methods: int = 0
    examples: int = 0
    documents: int = 0
    images: int = 0
    files: int = 0
    doc_comments: int = 0
    warnings: int = 0
    has_mainpage: bool = False

    def total_objects(self) -> int:
        """Return the number of rendered entities, main page included."""
        return (
            int(self.has_mainpage)
            + self.modules
            + self.functions
            + self.classes
            + self.methods
            + self.examples
            + self.documents
        )

    def as_dict(self) -> dict[str, int]:
        """Return the counters in display order."""
        return {
            "modules": self.modules,
            "functions": self.functions,
            "classes": self.classes,
            "methods": self.methods,
            "examples": self.examples,
            "documents": self.documents,
            "images": self.images,
            "files": self.files,
            "doc comments": self.doc_comments,
            "warnings": self.warnings,
        }


@dc.dataclass(slots=True, frozen=True)
class ResolvedStyle:
    """Style values after section, main page and default fallback."""

    bar_color: str
    title_color: str
    heading_color: str
    font_body: str | None
    font_headings: str | None
    logo: str
    version: str


@dc.dataclass(slots=True)
class Document:
    """The parse session: every entity discovered across all inputs."""

    sort: bool = True
    mainpage: MainPage | None = None
    modules: list[Module] = dc.field(default_factory=list)
    classes: list[Module] = dc.field(default_factory=list)
    documents: list[MarkdownDocument] = dc.field(default_factory=list)
    images: list[ImageReference] = dc.field(default_factory=list)
    input_images: list[InputImageFile] = dc.field(default_factory=list)
    stats: Statistics = dc.field(default_factory=Statistics)
    needs_home_image: bool = False

    def insert(self, items: list[_T], item: _T) -> None:
        """Add ``item`` using the run's ordering policy."""
        if self.sort:
            bisect.insort_right(items, item, key=lambda entry: ascii_fold(entry.title))
        else:
            items.append(item)

    def collection(self, *, is_class: bool) -> list[Module]:
        """Return the class list or the module list."""
        return self.classes if is_class else self.modules

    def page_count(self) -> int:
        """Return the number of module, class and document pages."""
        return len(self.modules) + len(self.classes) + len(self.documents)

    def sections(self) -> list[Section]:
        """Return every section in render order, main page first."""
        ordered: list[Section] = []
        if self.mainpage is not None:
            ordered.append(self.mainpage)
        ordered.extend(self.modules)
        ordered.extend(self.classes)
        ordered.extend(self.documents)
        return ordered

    def update_statistics(self, warnings: int) -> Statistics:
        """Recount entities once parsing has finished."""
        stats = self.stats
        stats.has_mainpage = self.mainpage is not None
        stats.modules = len(self.modules)
        stats.classes = len(self.classes)
        stats.functions = sum(len(module.functions) for module in self.modules)
        stats.methods = sum(len(cls.functions) for cls in self.classes)
        stats.documents = len(self.documents)
        stats.examples = sum(len(section.examples) for section in self.sections())
        stats.images = len(self.images)
        stats.warnings = warnings
        return stats

    def resolve_style(self, section: Section | None = None) -> ResolvedStyle:
        """Resolve style for ``section`` falling back to the main page, then defaults.

        Parameters
        ----------
        section : Section, optional
            The page being rendered; ``None`` resolves the project-wide style.

        Returns
        -------
        ResolvedStyle
            Fully populated style. Falling back to the default logo marks the
            document as needing the bundled home image.
        """
        layers = [layer for layer in (section, self.mainpage) if layer is not None]

        def pick(attr: str) -> str | None:
            for layer in layers:
                value = getattr(layer, attr)
                if value is not None:
                    return value
            return None

        logo = pick("logo")
        if logo is None:
            logo = DEFAULT_LOGO
            self.needs_home_image = True
        return ResolvedStyle(
            bar_color=pick("bar_color") or DEFAULT_BAR_COLOR,
            title_color=pick("title_color") or DEFAULT_TITLE_COLOR,
            heading_color=pick("heading_color") or DEFAULT_HEADING_COLOR,
            font_body=pick("font_body"),
            font_headings=pick("font_headings"),
            logo=logo,
            version=pick("version") or "",
        )


__all__ = [
    "Document",
    "Example",
    "Function",
    "ImageReference",
    "InputImageFile",
    "MainPage",
    "MarkdownDocument",
    "MdHeading",
    "Module",
    "ResolvedStyle",
    "Section",
    "Statistics",
]
