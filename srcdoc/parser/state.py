"""Mutable context threaded through one parsing run."""

from __future__ import annotations

import dataclasses as dc
import typing as typ

from .._constants import LANGUAGE_BY_EXT
from ..config import ParseOptions
from ..diagnostics import Diagnostics, SourcePosition, WarningCode
from ..model import Document

if typ.TYPE_CHECKING:
    from pathlib import Path

    from ..headers import DocHeader, SourceLine
    from ..model import Module


@dc.dataclass(slots=True)
class ParseState:
    """Document under construction plus the per-file parsing context.

    Attributes
    ----------
    document : Document
        Model mutated by every parser stage.
    diagnostics : Diagnostics
        Warning sink for the run.
    options : ParseOptions
        Recognized source extensions and ordering policy.
    path : Path or None
        File currently being parsed.
    file_lines : list[str]
        Raw lines of ``path``; used for prototype search and diagnostics.
    header : DocHeader or None
        Source header being parsed; ``None`` for Markdown front matter.
    current_module : Module or None
        Module or class that new functions attach to.
    """

    document: Document
    diagnostics: Diagnostics = dc.field(default_factory=Diagnostics)
    options: ParseOptions = dc.field(default_factory=ParseOptions)
    path: Path | None = None
    file_lines: list[str] = dc.field(default_factory=list)
    header: DocHeader | None = None
    current_module: Module | None = None

    @classmethod
    def for_options(cls, options: ParseOptions) -> ParseState:
        """Create a fresh state with an empty document using ``options``."""
        return cls(document=Document(sort=options.sort), options=options)

    def begin_file(self, path: Path, text: str) -> None:
        """Reset per-file context before parsing ``path``."""
        self.path = path
        self.file_lines = text.splitlines()
        self.header = None
        self.current_module = None

    @property
    def language(self) -> str:
        """Return the highlighting hint for the current file."""
        if self.path is None:
            return ""
        return LANGUAGE_BY_EXT.get(self.path.suffix.lower(), "")

    def position(self, line: SourceLine | None, offset: int = 0) -> SourcePosition | None:
        """Translate a header line and column offset into a file position."""
        if line is None or self.path is None:
            return None
        source = line.text
        if 0 < line.line <= len(self.file_lines):
            source = self.file_lines[line.line - 1]
        return SourcePosition(
            path=str(self.path),
            line=line.line,
            column=line.column + offset,
            source_line=source,
        )

    def warn(
        self,
        code: WarningCode,
        extra: str | None = None,
        line: SourceLine | None = None,
        offset: int = 0,
    ) -> None:
        """Emit a warning positioned at ``line`` when one is given."""
        self.diagnostics.warn(code, extra, self.position(line, offset))


__all__ = ["ParseState"]
