"""Drive parsing across every input file, folder and glob pattern.

The driver expands inputs once, registers candidate images before any text is
parsed (so image references resolve regardless of file order), then parses
each file in order: source files header by header, Markdown files as
documents or front matter. Statistics are recomputed once at the end.
"""

from __future__ import annotations

import glob
import logging
import typing as typ
from pathlib import Path

from .._constants import IMAGE_EXTS, MARKDOWN_EXTS, MAX_FOLDER_DEPTH
from ..config import ParseOptions
from ..diagnostics import Diagnostics, WarningCode
from ..headers import find_headers
from ..model import InputImageFile
from .markdown_document import parse_markdown_document
from .sections import parse_header
from .state import ParseState

if typ.TYPE_CHECKING:
    import collections.abc as cabc

logger = logging.getLogger(__name__)

GLOB_CHARS = frozenset("*?[")


def is_markdown(path: Path) -> bool:
    """Return True for ``.md``, ``.mdown`` and ``.markdown`` files."""
    return path.suffix.lower() in MARKDOWN_EXTS


def is_image(path: Path) -> bool:
    """Return True for the image types copied into generated output."""
    return path.suffix.lower() in IMAGE_EXTS


def _walk_folder(folder: Path, depth: int = 1) -> cabc.Iterator[Path]:
    """Yield files depth-first in sorted order, at most ``MAX_FOLDER_DEPTH`` deep."""
    for entry in sorted(folder.iterdir()):
        if entry.is_dir():
            if depth < MAX_FOLDER_DEPTH:
                yield from _walk_folder(entry, depth + 1)
        elif entry.is_file():
            yield entry


def expand_inputs(inputs: cabc.Iterable[str], diagnostics: Diagnostics) -> list[Path]:
    """Expand files, folders and glob patterns into an ordered list of files.

    Parameters
    ----------
    inputs : Iterable[str]
        Paths or patterns as given on the command line.
    diagnostics : Diagnostics
        Receives a missing-input warning for each input matching nothing.

    Returns
    -------
    list[Path]
        Files in argument order, folders expanded depth-first.
    """
    paths: list[Path] = []
    for raw in inputs:
        if GLOB_CHARS.intersection(raw):
            matches = sorted(glob.glob(raw))
            if not matches:
                diagnostics.warn(WarningCode.MISSING_INPUT, raw)
            for match in matches:
                candidate = Path(match)
                paths.extend(_walk_folder(candidate) if candidate.is_dir() else [candidate])
            continue
        path = Path(raw)
        if path.is_dir():
            paths.extend(_walk_folder(path))
        elif path.is_file():
            paths.append(path)
        else:
            diagnostics.warn(WarningCode.MISSING_INPUT, raw)
    return paths


def prescan_images(state: ParseState, paths: cabc.Iterable[Path]) -> None:
    """Register every image file among ``paths`` as a reference candidate."""
    for path in paths:
        if is_image(path):
            state.document.input_images.append(InputImageFile(path=path))


def parse_source_text(state: ParseState, text: str) -> None:
    """Parse each documentation header found in a source file."""
    for header in find_headers(text):
        if header.lines:
            parse_header(state, header.lines, header)


def parse_file(state: ParseState, path: Path) -> None:
    """Parse one file by extension; unknown extensions are ignored."""
    source = state.options.is_source(path)
    if not source and not is_markdown(path):
        return
    state.document.stats.files += 1
    logger.info("%s", path)
    try:
        text = path.read_text(encoding="utf-8-sig", errors="replace")
    except OSError:
        text = ""
    if not text:
        state.diagnostics.warn(WarningCode.UNREADABLE, str(path))
        return

    state.begin_file(path, text)
    if source:
        parse_source_text(state, text)
    else:
        parse_markdown_document(state, text)
    state.path = None
    state.current_module = None


def parse_inputs(
    inputs: cabc.Iterable[str],
    options: ParseOptions | None = None,
    diagnostics: Diagnostics | None = None,
) -> ParseState:
    """Parse every input into a fresh document.

    Parameters
    ----------
    inputs : Iterable[str]
        Files, folders or glob patterns.
    options : ParseOptions, optional
        Source extensions and ordering; defaults apply when omitted.
    diagnostics : Diagnostics, optional
        Warning sink; a new one is created when omitted.

    Returns
    -------
    ParseState
        Final state holding the finished document, its statistics and the
        diagnostics emitted along the way.

    Examples
    --------
    >>> state = parse_inputs(["does-not-exist"])  # doctest: +SKIP
    >>> [entry.code.code for entry in state.diagnostics.entries]  # doctest: +SKIP
    ['W007', 'W011']
    """
    state = ParseState.for_options(options or ParseOptions())
    if diagnostics is not None:
        state.diagnostics = diagnostics
    paths = expand_inputs(inputs, state.diagnostics)
    prescan_images(state, paths)
    for path in paths:
        parse_file(state, path)

    stats = state.document.update_statistics(state.diagnostics.count)
    if stats.total_objects() == 0:
        state.diagnostics.warn(WarningCode.NO_OBJECTS)
    stats.warnings = state.diagnostics.count
    return state


__all__ = [
    "expand_inputs",
    "is_image",
    "is_markdown",
    "parse_file",
    "parse_inputs",
    "parse_source_text",
    "prescan_images",
]
