"""Typed dataclasses describing a srcdoc build."""

from __future__ import annotations

import dataclasses as dc
from pathlib import Path

from .._constants import DEFAULT_SOURCE_EXTS


class BuildConfigError(ValueError):
    """Raised when the build configuration is invalid or incomplete."""


def split_extensions(compact: str) -> tuple[str, ...]:
    """Split a compact ``.c.py.rs`` extension string into lowercase suffixes.

    Examples
    --------
    >>> split_extensions(".C.c++.py")
    ('.c', '.c++', '.py')
    """
    return tuple(f".{part.lower()}" for part in compact.split(".") if part)


@dc.dataclass(slots=True, frozen=True)
class ParseOptions:
    """Settings the parser needs: recognized source suffixes and ordering."""

    extensions: tuple[str, ...] = split_extensions(DEFAULT_SOURCE_EXTS)
    sort: bool = True

    def is_source(self, path: Path) -> bool:
        """Return True when ``path`` carries a configured source extension."""
        return path.suffix.lower() in self.extensions


@dc.dataclass(slots=True)
class BuildConfig:
    """Everything one ``srcdoc build`` run needs.

    Attributes
    ----------
    inputs : list[str]
        Files, folders or glob patterns to document.
    output_dir : Path
        Folder receiving the generated site or Markdown file.
    extensions : tuple[str, ...]
        Source suffixes scanned for documentation headers.
    sort : bool
        Order modules, classes, functions and documents alphabetically.
    markdown : bool
        Write a single combined Markdown file instead of HTML pages.
    no_index : bool
        Skip writing ``index.html``.
    local_css : bool
        Write the highlight stylesheet to ``srcdoc.css`` instead of inlining it.
    check_only : bool
        Parse and report warnings without writing any output.
    pygments_style : str
        Pygments style used for highlighted code blocks.
    verbose : int
        0 for warnings only, 1 adds progress and statistics, 2 adds tracing.
    """

    inputs: list[str] = dc.field(default_factory=list)
    output_dir: Path = Path("site")
    extensions: tuple[str, ...] = split_extensions(DEFAULT_SOURCE_EXTS)
    sort: bool = True
    markdown: bool = False
    no_index: bool = False
    local_css: bool = False
    check_only: bool = False
    pygments_style: str = "monokai"
    verbose: int = 0

    @property
    def parse_options(self) -> ParseOptions:
        """Return the parser subset of this configuration."""
        return ParseOptions(extensions=self.extensions, sort=self.sort)
