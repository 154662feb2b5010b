r"""Build function records from documentation headers.

A function header documents the code next to it: ``/*!`` comments precede
the prototype, ``'''!`` doc strings follow it. The prototype may also be
given explicitly with ``@fn``. Parameter lines (``@param``, ``@return``,
``@returns`` and unknown ``@words``) are moved under the prototype, the first
descriptive line becomes the brief, and the rest becomes the notes.

Example
-------
>>> parse_prototype(["int doit(int x)", "{"]).name
'doit'
>>> parse_prototype(["def area(r: float) -> float:"]).text
'def area(r: float) -> float'
>>> parse_prototype(["static int counter;"]) is None
True
"""

from __future__ import annotations

import dataclasses as dc
import logging
import re
import typing as typ

from ..diagnostics import WarningCode
from ..headers import HeaderKind
from ..keywords import scan_keyword
from ..markdown_syntax import is_blank, pad_line, trim_blank_lines
from ..model import Function
from .registry import parse_membership
from .text_region import iter_prose_lines, process_text

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ..headers import SourceLine
    from .state import ParseState

logger = logging.getLogger(__name__)

NAME_BEFORE_PAREN = re.compile(r"([A-Za-z_][A-Za-z0-9_]*)\s*$")
PROTOTYPE_TAIL = " \t{;:"
MAX_PROTOTYPE_LINES = 32


@dc.dataclass(slots=True, frozen=True)
class Prototype:
    """Prototype text and the identifier it declares."""

    text: str
    name: str


def parse_prototype(lines: cabc.Sequence[str]) -> Prototype | None:
    """Parse a prototype starting at ``lines[0]``.

    The identifier is the name immediately before the first ``(``. Lines are
    consumed until parentheses balance, and trailing ``{``, ``;`` or ``:``
    are trimmed.

    Parameters
    ----------
    lines : Sequence[str]
        Candidate prototype line followed by any continuation lines.

    Returns
    -------
    Prototype or None
        ``None`` when no ``name(`` pattern is present.
    """
    if not lines or "(" not in lines[0]:
        return None
    name_match = NAME_BEFORE_PAREN.search(lines[0][: lines[0].index("(")])
    if name_match is None:
        return None

    indent = len(lines[0]) - len(lines[0].lstrip())
    taken: list[str] = []
    depth = 0
    for line in lines[:MAX_PROTOTYPE_LINES]:
        lead = len(line) - len(line.lstrip())
        taken.append(line[min(lead, indent) :])
        depth += line.count("(") - line.count(")")
        if depth <= 0:
            break
    text = "\n".join(taken).rstrip(PROTOTYPE_TAIL)
    return Prototype(text=text, name=name_match.group(1))


def _docstring_prototype_lines(file_lines: list[str], before: int) -> list[str]:
    """Return the lines of the prototype ending just above a doc string."""
    end = before - 1
    while end >= 0 and is_blank(file_lines[end]):
        end -= 1
    if end < 0:
        return []
    start = end
    depth = file_lines[end].count(")") - file_lines[end].count("(")
    while depth > 0 and start > 0 and end - start < MAX_PROTOTYPE_LINES:
        start -= 1
        depth += file_lines[start].count(")") - file_lines[start].count("(")
    return file_lines[start : end + 1]


def find_prototype(state: ParseState) -> Prototype | None:
    """Locate the prototype next to the current source header."""
    header = state.header
    if header is None:
        return None
    file_lines = state.file_lines
    if header.kind is HeaderKind.DOCSTRING:
        return parse_prototype(_docstring_prototype_lines(file_lines, header.start))
    start = header.end
    while start < len(file_lines) and is_blank(file_lines[start]):
        start += 1
    return parse_prototype(file_lines[start:])


def _brief_index(lines: cabc.Sequence[SourceLine]) -> int | None:
    for index, line in enumerate(lines):
        if scan_keyword(line.text) is None and not is_blank(line.text):
            return index
    return None


def _prototype_block(prototype: Prototype, lines: cabc.Sequence[SourceLine]) -> str:
    """Combine the prototype with padded parameter lines."""
    block = [prototype.text, ""]
    for line, in_code in iter_prose_lines(lines):
        found = None if in_code else scan_keyword(line.text)
        if found is not None and found.keyword.is_prototype:
            block.append(pad_line(line.text))
    return "\n".join(trim_blank_lines(block))


def extract_function(
    state: ParseState,
    lines: cabc.Sequence[SourceLine],
    explicit: str | None = None,
    *,
    membership: bool = True,
) -> Function | None:
    """Create a function from a header section and attach it to the current module.

    Parameters
    ----------
    state : ParseState
        Current parse context; supplies the current module and file lines.
    lines : Sequence[SourceLine]
        The function's section (or the whole header for implicit functions).
    explicit : str, optional
        Prototype given by ``@fn``; skips the search around the header.
    membership : bool, optional
        Apply ``@ingroup``/``@inclass`` lines inside ``lines`` first. Off for
        implicit functions whose header was already scanned for them.

    Returns
    -------
    Function or None
        ``None`` when the function was dropped with a warning.
    """
    if membership:
        for line in lines:
            found = scan_keyword(line.text)
            if found is not None and found.keyword.is_membership:
                parse_membership(state, line, found)

    anchor = lines[0] if lines else None
    module = state.current_module
    if module is None:
        state.warn(WarningCode.NO_MODULE, line=anchor)
        return None

    prototype = parse_prototype([explicit]) if explicit is not None else find_prototype(state)
    if prototype is None:
        is_docstring = state.header is not None and state.header.kind is HeaderKind.DOCSTRING
        code = WarningCode.BAD_DOC_STRING if is_docstring else WarningCode.NO_FUNCTION
        state.warn(code, line=anchor)
        return None

    brief_at = _brief_index(lines)
    rest = lines[brief_at + 1 :] if brief_at is not None else lines
    function = Function(
        name=prototype.name,
        brief=lines[brief_at].text.strip() if brief_at is not None else "",
        prototype=_prototype_block(prototype, rest),
        language=state.language,
    )
    function.notes = process_text(state, module, rest)
    state.document.insert(module.functions, function)
    logger.debug("function %s in %s", function.name, module.title)
    return function


__all__ = ["Prototype", "extract_function", "find_prototype", "parse_prototype"]
