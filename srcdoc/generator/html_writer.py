"""Write the parsed document as a static W3.CSS site.

Each module, class and Markdown document becomes one page. ``index.html``
holds the main page, or a generated table of contents when there is no main
page and at least two pages exist. Referenced input images, and the home
logo when a page falls back to it, are copied next to the pages.

Example
-------
>>> from srcdoc.config import BuildConfig
>>> from srcdoc.diagnostics import Diagnostics
>>> from srcdoc.generator import HtmlSiteWriter
>>> from srcdoc.parser import parse_inputs
>>> state = parse_inputs(["src"])  # doctest: +SKIP
>>> writer = HtmlSiteWriter(state.document, BuildConfig(), state.diagnostics)  # doctest: +SKIP
>>> writer.run()  # doctest: +SKIP
[PosixPath('site/index.html'), PosixPath('site/net.html')]
"""

from __future__ import annotations

import logging
import shutil
import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markdown.extensions.toc import slugify as anchor_slug

from .._constants import HOME_IMAGE_NAME, RESERVED_INDEX_NAME, TABLE_OF_CONTENTS_TITLE
from ..diagnostics import WarningCode
from ..model import MainPage, MarkdownDocument, Module
from .models import FunctionModel, NavLink, PageModel
from .renderer import HtmlContentRenderer

if typ.TYPE_CHECKING:
    from ..config import BuildConfig
    from ..diagnostics import Diagnostics
    from ..model import Document, Section

logger = logging.getLogger(__name__)

W3_CSS_URL = "https://www.w3schools.com/w3css/4/w3.css"
LOCAL_CSS_NAME = "srcdoc.css"


def page_filename(section: Section) -> str:
    """Return the output filename for a section's page."""
    if isinstance(section, MainPage):
        return f"{RESERVED_INDEX_NAME}.html"
    return f"{section.title}.html"


def anchor(text: str) -> str:
    """Return the heading id Python-Markdown's ``toc`` extension assigns to ``text``."""
    return anchor_slug(text, "-")


class HtmlSiteWriter:
    """Render a :class:`~srcdoc.model.Document` into HTML files."""

    def __init__(
        self,
        document: Document,
        config: BuildConfig,
        diagnostics: Diagnostics,
        *,
        templates_dir: Path | None = None,
    ) -> None:
        """Initialize the writer with the parsed document and build settings.

        Parameters
        ----------
        document : Document
            Finished document model.
        config : BuildConfig
            Output folder, index and stylesheet options.
        diagnostics : Diagnostics
            Receives folder and file creation warnings.
        templates_dir : Path, optional
            Directory containing Jinja templates; defaults to the package templates.
        """
        self.document = document
        self.config = config
        self.diagnostics = diagnostics
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.renderer = HtmlContentRenderer(config.pygments_style)
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )
        self.template = self.env.get_template("page.jinja")

    @property
    def wants_index(self) -> bool:
        """Return True when ``index.html`` should be written."""
        if self.config.no_index:
            return False
        return self.document.mainpage is not None or self.document.page_count() >= 2

    def run(self) -> list[Path]:
        """Write every page and copy images.

        Returns
        -------
        list[Path]
            Paths of the written HTML pages; empty when the output folder could
            not be created.
        """
        out_dir = self.config.output_dir
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            self.diagnostics.warn(WarningCode.FOLDER_CREATE, str(out_dir))
            return []

        pages = self._build_pages()
        nav = self._site_nav()
        stylesheet_href = self._write_stylesheet(out_dir)
        written: list[Path] = []
        for page in pages:
            html = self.template.render(
                page=page,
                nav=[
                    NavLink(label=link.label, href=link.href, active=link.href == page.filename)
                    for link in nav
                ],
                w3_css_url=W3_CSS_URL,
                stylesheet_href=stylesheet_href,
                pygments_css=None if stylesheet_href else self.renderer.stylesheet,
            )
            output_path = out_dir / page.filename
            try:
                output_path.write_text(html, encoding="utf-8")
            except OSError:
                self.diagnostics.warn(WarningCode.FILE_CREATE, str(output_path))
                continue
            logger.info("  %s", output_path)
            written.append(output_path)
        self._copy_images(out_dir)
        return written

    def _site_nav(self) -> list[NavLink]:
        links: list[NavLink] = []
        if self.wants_index:
            label = (
                self.document.mainpage.title
                if self.document.mainpage is not None and self.document.mainpage.title
                else TABLE_OF_CONTENTS_TITLE
            )
            links.append(NavLink(label=label, href=f"{RESERVED_INDEX_NAME}.html"))
        for section in self._content_sections():
            links.append(NavLink(label=section.title, href=page_filename(section)))
        return links

    def _content_sections(self) -> list[Section]:
        document = self.document
        return [*document.modules, *document.classes, *document.documents]

    def _build_pages(self) -> list[PageModel]:
        pages: list[PageModel] = []
        if self.wants_index:
            pages.append(self._index_page())
        pages.extend(self._section_page(section) for section in self._content_sections())
        return pages

    def _index_page(self) -> PageModel:
        """Build the main page, or a table of contents when none was defined."""
        document = self.document
        mainpage = document.mainpage
        section: Section = mainpage or MainPage(title=TABLE_OF_CONTENTS_TITLE)
        page = self._section_page(section)
        page.body_html += self._contents_html()
        return page

    def _contents_html(self) -> str:
        """Render the list of pages and examples shown on the index."""
        document = self.document
        lines: list[str] = []
        groups: list[tuple[str, list[Section]]] = [
            ("Modules", list(document.modules)),
            ("Classes", list(document.classes)),
            ("Documents", list(document.documents)),
        ]
        for heading, sections in groups:
            if not sections:
                continue
            lines.append(f"## {heading}")
            lines.append("")
            lines.extend(
                f"[{section.title}]({page_filename(section)})"
                + (f" - {section.subtitle}" if section.subtitle else "")
                + "  "
                for section in sections
            )
            lines.append("")
        examples = [
            (example, section)
            for section in document.sections()
            for example in section.examples
        ]
        if examples:
            lines.append("## Examples")
            lines.append("")
            lines.extend(
                f"[{example.title}]({page_filename(section)}#{anchor(example.title)})  "
                for example, section in examples
            )
        return self.renderer.markdown("\n".join(lines)) if lines else ""

    def _section_page(self, section: Section) -> PageModel:
        style = self.document.resolve_style(section)
        functions: list[FunctionModel] = []
        toc: list[NavLink] = []
        if isinstance(section, Module):
            for function in section.functions:
                functions.append(
                    FunctionModel(
                        name=function.name,
                        brief_html=self.renderer.inline(function.brief),
                        prototype_html=self.renderer.prototype(
                            function.prototype, function.language
                        ),
                        notes_html=self.renderer.markdown(function.notes),
                    )
                )
                toc.append(NavLink(label=function.name, href=f"#{function.name}"))
        if isinstance(section, MarkdownDocument):
            toc.extend(
                NavLink(label=heading.title, href=f"#{anchor(heading.title)}")
                for heading in section.headings
            )
        toc.extend(
            NavLink(label=example.title, href=f"#{anchor(example.title)}")
            for example in section.examples
        )
        title = section.title
        if isinstance(section, Module) and section.is_class:
            title = f"Class {title}"
        return PageModel(
            title=title,
            subtitle_html=self.renderer.inline(section.subtitle),
            filename=page_filename(section),
            style=style,
            logo_html=self.renderer.inline(style.logo),
            body_html=self.renderer.markdown(section.text),
            functions=functions,
            toc_items=toc,
        )

    def _write_stylesheet(self, out_dir: Path) -> str | None:
        """Write highlight CSS next to the pages when ``local_css`` is set."""
        if not self.config.local_css:
            return None
        css_path = out_dir / LOCAL_CSS_NAME
        try:
            css_path.write_text(self.renderer.stylesheet, encoding="utf-8")
        except OSError:
            self.diagnostics.warn(WarningCode.FILE_CREATE, str(css_path))
            return None
        return LOCAL_CSS_NAME

    def _copy_images(self, out_dir: Path) -> None:
        """Copy referenced input images, and the home logo when it is used."""
        sources = [image.path for image in self.document.input_images if image.referenced]
        if self.document.needs_home_image:
            sources.append(self.templates_dir / HOME_IMAGE_NAME)
        for source in sources:
            target = out_dir / source.name
            try:
                shutil.copyfile(source, target)
            except OSError:
                self.diagnostics.warn(WarningCode.FILE_CREATE, str(target))


__all__ = ["HtmlSiteWriter", "anchor", "page_filename"]
