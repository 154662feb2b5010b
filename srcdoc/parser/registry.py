"""Create and look up modules and classes by name.

``@defgroup``/``@class`` define a module or class; ``@ingroup``/``@inclass``
select one as the current module, creating an empty stub when the definition
has not been seen yet. A later definition fills a stub in place.
"""

from __future__ import annotations

import logging
import typing as typ

from ..diagnostics import WarningCode
from ..keywords import Keyword, scan_keyword
from ..markdown_syntax import is_identifier, same_title, split_name
from ..model import Module
from .duplicates import is_duplicate
from .text_region import process_text

if typ.TYPE_CHECKING:
    import collections.abc as cabc

    from ..headers import SourceLine
    from ..keywords import KeywordMatch
    from ..model import Document
    from .state import ParseState

logger = logging.getLogger(__name__)


def find_module(document: Document, name: str, *, is_class: bool) -> Module | None:
    """Return the module or class titled ``name``, compared ASCII case-insensitively."""
    for module in document.collection(is_class=is_class):
        if same_title(module.title, name):
            return module
    return None


def _create(
    state: ParseState,
    name: str,
    line: SourceLine,
    offset: int,
    *,
    is_class: bool,
) -> Module | None:
    """Insert a new, empty module unless its title is already taken."""
    if is_duplicate(state, name, line, offset):
        return None
    module = Module(title=name, is_class=is_class)
    state.document.insert(state.document.collection(is_class=is_class), module)
    return module


def parse_module(
    state: ParseState, lines: cabc.Sequence[SourceLine], *, is_class: bool
) -> Module | None:
    """Handle a ``@defgroup`` or ``@class`` section.

    The section's first line is ``@defgroup name  description``. The name
    must be an identifier. A name that already has a filled definition is a
    duplicate: the new definition is discarded and the existing entry becomes
    the current module. A stub left by ``@ingroup``/``@inclass`` is filled in
    place.

    Parameters
    ----------
    state : ParseState
        Current parse context.
    lines : Sequence[SourceLine]
        The section, keyword line first.
    is_class : bool
        ``True`` for ``@class``.

    Returns
    -------
    Module or None
        The module that is now current, or ``None`` when rejected.
    """
    first = lines[0]
    found = scan_keyword(first.text)
    argument = found.argument if found is not None else ""
    arg_offset = found.argument_offset if found is not None else 0
    name, description, _ = split_name(argument)
    if not is_identifier(name):
        state.warn(WarningCode.SYNTAX, line=first, offset=arg_offset)
        return None

    module = find_module(state.document, name, is_class=is_class)
    if module is not None and not module.is_stub:
        state.warn(WarningCode.DUPLICATE, name, line=first, offset=arg_offset)
        state.current_module = module
        return module
    if module is None:
        module = _create(state, name, first, arg_offset, is_class=is_class)
        if module is None:
            state.current_module = None
            return None

    module.subtitle = description
    state.current_module = module
    module.text = process_text(state, module, lines[1:])
    logger.debug("%s %s defined", "class" if is_class else "module", module.title)
    return module


def parse_membership(
    state: ParseState, line: SourceLine, found: KeywordMatch
) -> Module | None:
    """Handle ``@ingroup``/``@inclass``: select, or stub-create, the current module."""
    is_class = found.keyword is Keyword.INCLASS
    name, _, _ = split_name(found.argument)
    if not is_identifier(name):
        state.warn(WarningCode.SYNTAX, line=line, offset=found.argument_offset)
        return None

    module = find_module(state.document, name, is_class=is_class)
    if module is None:
        module = _create(state, name, line, found.argument_offset, is_class=is_class)
        if module is not None:
            logger.debug("stub %s created", name)
    state.current_module = module
    return module


__all__ = ["find_module", "parse_membership", "parse_module"]
