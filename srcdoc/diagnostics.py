"""Warning stream shared by the parser, driver and renderers.

Every recoverable problem is reported as a :class:`Diagnostic` carrying a
stable :class:`WarningCode`, optional extra text, and an optional source
position. Diagnostics are counted, kept for inspection, and logged through the
``srcdoc`` logger at WARNING level.

Example
-------
>>> from srcdoc.diagnostics import Diagnostics, SourcePosition, WarningCode
>>> sink = Diagnostics()
>>> pos = SourcePosition("notes.md", 3, 7, "See ![alt](lake.png)")
>>> print(sink.warn(WarningCode.IMAGE_NOT_FOUND, "lake.png", pos).render())
notes.md:3:7: W012 - image not found: lake.png
See ![alt](lake.png)
      ^
>>> sink.count
1
"""

from __future__ import annotations

import dataclasses as dc
import enum
import logging

logger = logging.getLogger("srcdoc")


class WarningCode(enum.Enum):
    """Stable warning identifiers and their message text."""

    NO_MODULE = ("W001", "no module or class defined")
    DUPLICATE = ("W002", "duplicate")
    NO_FUNCTION = ("W003", "function does not follow comment")
    BAD_DOC_STRING = ("W004", "function does not precede doc string")
    SYNTAX = ("W005", "invalid syntax")
    EMPTY_EXAMPLE = ("W006", "empty content in example")
    MISSING_INPUT = ("W007", "file or folder doesn't exist")
    FOLDER_CREATE = ("W009", "couldn't create folder")
    FILE_CREATE = ("W010", "couldn't create file")
    NO_OBJECTS = ("W011", "no objects or documents defined")
    IMAGE_NOT_FOUND = ("W012", "image not found")
    UNREADABLE = ("W014", "could not read possibly empty file")

    @property
    def code(self) -> str:
        """Return the ``W0nn`` identifier."""
        return self.value[0]

    @property
    def text(self) -> str:
        """Return the human-readable message."""
        return self.value[1]


@dc.dataclass(slots=True, frozen=True)
class SourcePosition:
    """A 1-based ``path:line:column`` location with the offending line."""

    path: str
    line: int
    column: int = 1
    source_line: str | None = None


@dc.dataclass(slots=True, frozen=True)
class Diagnostic:
    """A single warning emitted while building documentation."""

    code: WarningCode
    extra: str | None = None
    position: SourcePosition | None = None

    @property
    def message(self) -> str:
        """Return ``W0nn - text: extra`` without location."""
        message = f"{self.code.code} - {self.code.text}"
        if self.extra:
            message = f"{message}: {self.extra}"
        return message

    def render(self) -> str:
        """Format the warning with its location and a caret marker if known."""
        if self.position is None:
            return self.message
        pos = self.position
        rendered = f"{pos.path}:{pos.line}:{pos.column}: {self.message}"
        if pos.source_line is not None:
            caret = " " * max(pos.column - 1, 0) + "^"
            rendered = f"{rendered}\n{pos.source_line}\n{caret}"
        return rendered


@dc.dataclass(slots=True)
class Diagnostics:
    """Collect, count and log warnings for one run."""

    entries: list[Diagnostic] = dc.field(default_factory=list)

    @property
    def count(self) -> int:
        """Return the number of warnings emitted so far."""
        return len(self.entries)

    def warn(
        self,
        code: WarningCode,
        extra: str | None = None,
        position: SourcePosition | None = None,
    ) -> Diagnostic:
        """Record and log a warning.

        Parameters
        ----------
        code : WarningCode
            Stable warning identifier.
        extra : str, optional
            Additional context appended to the message (a name or link).
        position : SourcePosition, optional
            Location in an input file when one can be derived.

        Returns
        -------
        Diagnostic
            The recorded entry.
        """
        diagnostic = Diagnostic(code=code, extra=extra, position=position)
        self.entries.append(diagnostic)
        logger.warning(diagnostic.render())
        return diagnostic

    def codes(self) -> list[WarningCode]:
        """Return the codes of every recorded warning in emission order."""
        return [entry.code for entry in self.entries]


__all__ = ["Diagnostic", "Diagnostics", "SourcePosition", "WarningCode", "logger"]
