r"""Recognize ``@keyword`` directives at the start of documentation lines.

Keywords must begin in column zero and be followed by whitespace (or the end
of the line). Anything else that starts with ``@`` is classified as
:attr:`Keyword.UNKNOWN` so newer directives never break older parsers.

Example
-------
>>> from srcdoc.keywords import Keyword, scan_keyword
>>> match = scan_keyword("@defgroup net  Networking helpers")
>>> match.keyword is Keyword.DEFGROUP, match.argument
(True, 'net  Networking helpers')
>>> scan_keyword("  @param x indented lines are plain text") is None
True
"""

from __future__ import annotations

import dataclasses as dc
import enum


class Keyword(enum.Enum):
    """Closed set of directives understood by the parser."""

    CLASS = "@class"
    COLOR = "@color"
    DEFGROUP = "@defgroup"
    EXAMPLE = "@example"
    FN = "@fn"
    FONT = "@font"
    INCLASS = "@inclass"
    INGROUP = "@ingroup"
    LOGO = "@logo"
    MAINPAGE = "@mainpage"
    PARAM = "@param"
    RETURN = "@return"
    RETURNS = "@returns"
    VERSION = "@version"
    UNKNOWN = "@"

    @property
    def is_section(self) -> bool:
        """Return True when the keyword opens a new section."""
        match self:
            case Keyword.CLASS | Keyword.DEFGROUP | Keyword.FN | Keyword.MAINPAGE:
                return True
            case _:
                return False

    @property
    def is_prototype(self) -> bool:
        """Return True when the line is relocated into a function prototype."""
        match self:
            case Keyword.PARAM | Keyword.RETURN | Keyword.RETURNS | Keyword.UNKNOWN:
                return True
            case _:
                return False

    @property
    def is_style(self) -> bool:
        """Return True when the keyword sets a section style field."""
        match self:
            case Keyword.COLOR | Keyword.FONT | Keyword.LOGO | Keyword.VERSION:
                return True
            case _:
                return False

    @property
    def is_membership(self) -> bool:
        """Return True for ``@ingroup``/``@inclass``."""
        return self in (Keyword.INGROUP, Keyword.INCLASS)


_KNOWN = tuple(kw for kw in Keyword if kw is not Keyword.UNKNOWN)


@dc.dataclass(slots=True, frozen=True)
class KeywordMatch:
    """Result of scanning a line that starts with ``@``.

    Attributes
    ----------
    keyword : Keyword
        Classification of the directive.
    argument : str
        Text following the directive token, leading whitespace removed.
    argument_offset : int
        Column offset (0-based) of ``argument`` within the scanned line.
    """

    keyword: Keyword
    argument: str
    argument_offset: int


def scan_keyword(line: str) -> KeywordMatch | None:
    """Classify ``line`` if it begins with an ``@`` directive.

    Parameters
    ----------
    line : str
        A single line without its line terminator.

    Returns
    -------
    KeywordMatch or None
        ``None`` when the line does not start with ``@`` in column zero.
    """
    if not line.startswith("@"):
        return None
    keyword = Keyword.UNKNOWN
    for candidate in _KNOWN:
        token = candidate.value
        if line.startswith(token) and (
            len(line) == len(token) or line[len(token)].isspace()
        ):
            keyword = candidate
            break

    token_end = 0
    while token_end < len(line) and not line[token_end].isspace():
        token_end += 1
    offset = token_end
    while offset < len(line) and line[offset].isspace():
        offset += 1
    return KeywordMatch(keyword=keyword, argument=line[offset:].rstrip(), argument_offset=offset)


__all__ = ["Keyword", "KeywordMatch", "scan_keyword"]
