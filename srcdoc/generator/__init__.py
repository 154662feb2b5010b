"""Renderers that turn the parsed document into output files.

The :class:`HtmlSiteWriter` writes one W3.CSS page per module, class and
Markdown document using Jinja2, Python-Markdown and Pygments. The
:class:`MarkdownWriter` writes everything into a single Markdown file.
"""

from .html_writer import HtmlSiteWriter, page_filename
from .markdown_writer import MarkdownWriter
from .models import FunctionModel, NavLink, PageModel
from .renderer import HtmlContentRenderer, rewrite_keywords

__all__ = [
    "FunctionModel",
    "HtmlContentRenderer",
    "HtmlSiteWriter",
    "MarkdownWriter",
    "NavLink",
    "PageModel",
    "page_filename",
    "rewrite_keywords",
]
