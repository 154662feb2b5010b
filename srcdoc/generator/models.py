"""Shared dataclasses used by the site generation pipeline."""

from __future__ import annotations

import dataclasses as dc

from ..model import ResolvedStyle  # noqa: TC001 - used for runtime type metadata


@dc.dataclass(slots=True)
class NavLink:
    """Sidebar link to another page or to an anchor within the page."""

    label: str
    href: str
    active: bool = False


@dc.dataclass(slots=True)
class FunctionModel:
    """Rendered function block.

    Attributes
    ----------
    name : str
        Function identifier, also used as the anchor.
    brief_html : str
        Inline HTML for the brief line.
    prototype_html : str
        Highlighted prototype block.
    notes_html : str
        Rendered notes; empty when the function has none.
    """

    name: str
    brief_html: str
    prototype_html: str
    notes_html: str


@dc.dataclass(slots=True)
class PageModel:
    """Structured data passed to the page template.

    Attributes
    ----------
    title : str
        Page heading.
    subtitle_html : str
        Inline HTML of the one-line subtitle.
    filename : str
        Output filename, relative to the output folder.
    style : ResolvedStyle
        Colors, fonts, logo and version after fallback.
    logo_html : str
        Inline HTML of the logo image.
    body_html : str
        Rendered section text.
    functions : list[FunctionModel]
        Functions or methods documented on this page.
    toc_items : list[NavLink]
        In-page anchors shown in the sidebar.
    """

    title: str
    subtitle_html: str
    filename: str
    style: ResolvedStyle
    logo_html: str
    body_html: str
    functions: list[FunctionModel] = dc.field(default_factory=list)
    toc_items: list[NavLink] = dc.field(default_factory=list)


__all__ = ["FunctionModel", "NavLink", "PageModel"]
