"""Write the parsed document as one combined Markdown file.

The file is named after the output folder (``docs/`` produces
``docs/docs.md``). The main page, or a project summary when there is no main
page and not exactly one page, is the level 1 heading; modules, classes and
Markdown documents follow one level down.
"""

from __future__ import annotations

import logging
import typing as typ

from .._constants import MARKDOWN_EXTS
from ..diagnostics import WarningCode
from ..markdown_syntax import code_block_end, heading
from .renderer import rewrite_keywords

if typ.TYPE_CHECKING:
    from pathlib import Path

    from ..config import BuildConfig
    from ..diagnostics import Diagnostics
    from ..model import Document, MarkdownDocument, Module

logger = logging.getLogger(__name__)

MAX_HEADING_LEVEL = 6
EXAMPLE_FORMAT = "**{title}**"


def _hashes(level: int) -> str:
    return "#" * min(level, MAX_HEADING_LEVEL)


def render_text(text: str) -> str:
    """Render section text, turning ``@example`` lines into bold titles.

    Other keyword lines are dropped; code blocks are copied unchanged.

    Examples
    --------
    >>> render_text("Intro  \\n@example Demo  \\n@color w3-red\\n")
    'Intro  \\n**Example: Demo**\\n'
    """
    return rewrite_keywords(text, EXAMPLE_FORMAT)


def shift_headings(text: str, levels: int) -> str:
    """Push every heading outside code blocks down by ``levels``, capped at 6."""
    if levels <= 0:
        return text
    lines = text.splitlines()
    output: list[str] = []
    index = 0
    while index < len(lines):
        end = code_block_end(lines, index)
        if end is not None:
            output.extend(lines[index:end])
            index = end
            continue
        parsed = heading(lines[index])
        if parsed is not None:
            level, words = parsed
            output.append(f"{_hashes(level + levels)} {words}".rstrip())
        else:
            output.append(lines[index])
        index += 1
    return "\n".join(output) + ("\n" if text.endswith("\n") else "")


class MarkdownWriter:
    """Render a :class:`~srcdoc.model.Document` into a single Markdown file."""

    def __init__(
        self, document: Document, config: BuildConfig, diagnostics: Diagnostics
    ) -> None:
        self.document = document
        self.config = config
        self.diagnostics = diagnostics

    @property
    def output_path(self) -> Path:
        """Return ``<output>/<output folder name>.md``."""
        out_dir = self.config.output_dir
        name = out_dir.resolve().name or "srcdoc"
        return out_dir / f"{name}{MARKDOWN_EXTS[0]}"

    def render(self) -> str:
        """Return the combined Markdown text."""
        document = self.document
        stats = document.stats
        parts: list[str] = []
        level = 0
        mainpage = document.mainpage
        if mainpage is not None:
            parts.append(f"# {mainpage.title}\n\n")
            if mainpage.subtitle:
                parts.append(f"{mainpage.subtitle}\n\n")
            if mainpage.version:
                parts.append(f"version {mainpage.version}\n\n")
            if mainpage.text:
                parts.append(f"{render_text(mainpage.text)}\n")
            level += 1
        elif document.page_count() != 1:
            parts.append(f"# Project {self.output_path.stem}\n\n")
            parts.append(f"{len(document.modules)} Modules\n")
            parts.append(f"{len(document.classes)} Classes\n")
            parts.append(f"{len(document.documents)} Markdown Documents\n")
            parts.append(f"{stats.examples} Examples\n\n")
            level += 1

        parts.extend(self._modules(document.modules, "", level))
        parts.extend(self._modules(document.classes, "Class ", level))
        parts.extend(self._documents(document.documents, level))
        return "".join(parts)

    def _modules(self, modules: list[Module], prefix: str, level: int) -> list[str]:
        parts: list[str] = []
        level += 1
        for module in modules:
            parts.append(f"{_hashes(level)} {prefix}{module.title}\n\n")
            if module.subtitle:
                parts.append(f"{module.subtitle}\n\n")
            if module.text:
                parts.append(f"{render_text(module.text)}\n")
            for function in module.functions:
                parts.append(f"{_hashes(level + 1)} {function.name}\n\n")
                if function.brief:
                    parts.append(f"{function.brief}\n\n")
                parts.append(f"{_hashes(level + 2)} Prototype\n\n")
                parts.append(f"```{function.language}\n{function.prototype}\n```\n\n")
                if function.notes:
                    parts.append(f"{_hashes(level + 2)} Notes\n\n")
                    parts.append(f"{render_text(function.notes)}\n")
        return parts

    def _documents(self, documents: list[MarkdownDocument], level: int) -> list[str]:
        parts: list[str] = []
        for index, document in enumerate(documents):
            content = shift_headings(render_text(document.content), level)
            parts.append(content)
            is_last = index == len(documents) - 1
            if not is_last and not content.endswith("\n\n"):
                parts.append("\n")
        return parts

    def run(self) -> list[Path]:
        """Write the combined file and return its path, or nothing on failure."""
        out_dir = self.config.output_dir
        try:
            out_dir.mkdir(parents=True, exist_ok=True)
        except OSError:
            self.diagnostics.warn(WarningCode.FOLDER_CREATE, str(out_dir))
            return []
        path = self.output_path
        try:
            path.write_text(self.render(), encoding="utf-8")
        except OSError:
            self.diagnostics.warn(WarningCode.FILE_CREATE, str(path))
            return []
        logger.info("  %s", path)
        return [path]


__all__ = ["MarkdownWriter", "render_text", "shift_headings"]
