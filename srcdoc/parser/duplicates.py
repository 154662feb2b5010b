"""Reject titles that would collide with an existing page."""

from __future__ import annotations

import typing as typ

from .._constants import RESERVED_INDEX_NAME
from ..diagnostics import WarningCode
from ..markdown_syntax import same_title, strip_extension

if typ.TYPE_CHECKING:
    from ..headers import SourceLine
    from .state import ParseState


def is_duplicate(
    state: ParseState,
    title: str,
    line: SourceLine | None = None,
    offset: int = 0,
) -> bool:
    """Return True and warn when ``title`` is already taken.

    The candidate and every Markdown document title are compared without a
    trailing extension, using ASCII-only case folding. The reserved ``index``
    name collides only when a main page exists or more than one page has
    been created, because a table of contents page is generated then.

    Parameters
    ----------
    state : ParseState
        Current parse context holding the document.
    title : str
        Proposed module, class or document title.
    line : SourceLine, optional
        Header line responsible, used to position the warning.
    offset : int, optional
        Column offset of the title within ``line``.

    Returns
    -------
    bool
        ``True`` when the caller must not create the entity.
    """
    document = state.document
    candidate = strip_extension(title)
    taken = any(same_title(candidate, module.title) for module in document.modules)
    taken = taken or any(same_title(candidate, cls.title) for cls in document.classes)
    taken = taken or any(
        same_title(candidate, strip_extension(doc.title)) for doc in document.documents
    )
    if (
        not taken
        and same_title(candidate, RESERVED_INDEX_NAME)
        and (document.mainpage is not None or document.page_count() > 1)
    ):
        taken = True
    if taken:
        state.warn(WarningCode.DUPLICATE, title, line=line, offset=offset)
    return taken


__all__ = ["is_duplicate"]
