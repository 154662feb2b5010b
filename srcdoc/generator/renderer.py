"""Render section Markdown and function prototypes to HTML.

Every highlighted block carries a ``data-language`` attribute: the fence label
for Markdown code, the source file's language hint for prototypes, and
``text`` otherwise.
"""

from __future__ import annotations

import re
import typing as typ
from html import escape

from markdown import Markdown
from pygments import highlight
from pygments.formatters.html import HtmlFormatter
from pygments.lexers import get_lexer_by_name
from pygments.util import ClassNotFound

from .._constants import EXAMPLE_PREFIX
from ..keywords import Keyword, scan_keyword
from ..markdown_syntax import code_block_end, is_blank

if typ.TYPE_CHECKING:
    from markdown.extensions import Extension
else:  # pragma: no cover - type-checking fallback
    Extension = typ.Any

PLAIN_LANGUAGE = "text"
FENCE_INDENT_PATTERN = re.compile(r"^[ ]{1,3}([`~]{3,})", re.MULTILINE)
FENCE_LABEL_PATTERN = re.compile(r"^[ ]{0,3}(?:`{3,}|~{3,})[ \t]*([A-Za-z0-9_+#.-]+)?")
CODEHILITE_OPEN_TAG = re.compile(r'<div class="codehilite">')


def rewrite_keywords(text: str, example_format: str = "#### {title}") -> str:
    """Replace ``@example`` lines with headings and drop other keyword lines.

    Lines inside code blocks are left untouched.

    Examples
    --------
    >>> rewrite_keywords("@example Demo\\n\\n    x = 1\\n@param x ignored\\n")
    '#### Example: Demo\\n\\n    x = 1\\n'
    """
    lines = text.splitlines()
    output: list[str] = []
    index = 0
    while index < len(lines):
        found = scan_keyword(lines[index])
        if found is None:
            end = code_block_end(lines, index) or index + 1
            output.extend(lines[index:end])
            index = end
            continue
        if found.keyword is Keyword.EXAMPLE:
            title = " ".join(found.argument.split())
            output.append(example_format.format(title=f"{EXAMPLE_PREFIX}{title}"))
        index += 1
    rewritten = "\n".join(output)
    return f"{rewritten}\n" if rewritten else ""


def block_languages(text: str) -> list[str]:
    """Return the language of each code block in ``text``, in document order.

    Indented blocks only start after a blank line, as in Markdown, and are
    plain text like unlabelled fences.

    Examples
    --------
    >>> block_languages("```c\\nint x;\\n```\\n\\n    plain\\n~~~\\nraw\\n~~~\\n")
    ['c', 'text', 'text']
    """
    lines = text.splitlines()
    languages: list[str] = []
    index = 0
    while index < len(lines):
        label = FENCE_LABEL_PATTERN.match(lines[index])
        after_blank = index == 0 or is_blank(lines[index - 1])
        end = code_block_end(lines, index) if label or after_blank else None
        if end is None:
            index += 1
            continue
        languages.append(label.group(1) if label and label.group(1) else PLAIN_LANGUAGE)
        index = end
    return languages


class HtmlContentRenderer:
    """Render documentation text and prototypes with one Pygments style."""

    def __init__(self, pygments_style: str = "monokai") -> None:
        self.pygments_style = pygments_style
        self._formatter = HtmlFormatter(style=pygments_style, cssclass="codehilite")

    @property
    def stylesheet(self) -> str:
        """Return the CSS used for highlighted code blocks."""
        return self._formatter.get_style_defs(".codehilite")

    def markdown(self, text: str | None) -> str:
        """Render section text, with keyword lines rewritten, into HTML."""
        if not text:
            return ""
        normalized = FENCE_INDENT_PATTERN.sub(r"\1", rewrite_keywords(text))
        if not normalized.strip():
            return ""
        extensions: list[Extension | str] = [
            "fenced_code",
            "codehilite",
            "tables",
            "sane_lists",
            "toc",
        ]
        md = Markdown(
            extensions=extensions,
            extension_configs={
                "codehilite": {
                    "linenums": False,
                    "guess_lang": False,
                    "css_class": "codehilite",
                    "pygments_style": self.pygments_style,
                }
            },
        )
        return self._tag_languages(md.convert(normalized), block_languages(normalized))

    def inline(self, text: str | None) -> str:
        """Render a single line of markdown without the surrounding paragraph."""
        if not text:
            return ""
        html = Markdown().convert(text.strip())
        if html.startswith("<p>") and html.endswith("</p>"):
            html = html[3:-4]
        return html

    def prototype(self, code: str, language: str) -> str:
        """Highlight a function prototype block.

        Parameters
        ----------
        code : str
            Prototype line followed by its parameter lines.
        language : str
            Hint derived from the source file extension. An empty or unknown
            hint renders the block as plain text.

        Returns
        -------
        str
            A ``codehilite`` block tagged with the language actually used.
        """
        try:
            lexer = get_lexer_by_name(language or PLAIN_LANGUAGE)
        except ClassNotFound:
            language = PLAIN_LANGUAGE
            lexer = get_lexer_by_name(language)
        html = highlight(code, lexer, self._formatter)
        return self._tag_languages(html, [language or PLAIN_LANGUAGE])

    @staticmethod
    def _tag_languages(html: str, languages: list[str]) -> str:
        """Add ``data-language`` to the first ``len(languages)`` code blocks."""
        tags = iter(languages)

        def _repl(match: re.Match[str]) -> str:
            language = escape(next(tags, PLAIN_LANGUAGE), quote=True)
            return f'<div class="codehilite" data-language="{language}">'

        return CODEHILITE_OPEN_TAG.sub(_repl, html, len(languages))


__all__ = ["HtmlContentRenderer", "block_languages", "rewrite_keywords"]
