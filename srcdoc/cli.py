"""Cyclopts CLI entrypoint for generating documentation from source comments.

The ``srcdoc`` console script defined here parses ``/*!`` comment headers,
``'''!`` doc strings and Markdown files, then writes either a static HTML site
or one combined Markdown file. Warnings go to stderr; the exit status is 1
when any warning was emitted.

Examples
--------
Build an HTML site from a source tree and a docs folder:

>>> from srcdoc.cli import app
>>> app(["build", "src", "docs", "--output-dir", "site"])  # doctest: +SKIP

Check the documentation comments without writing anything:

>>> app(["build", "src", "--check"])  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import sys
import typing as typ
from pathlib import Path

from cyclopts import App, Parameter

from .config import BuildConfigError, load_build_config
from .diagnostics import logger
from .generator import HtmlSiteWriter, MarkdownWriter
from .markdown_syntax import slugify
from .parser import parse_inputs

if typ.TYPE_CHECKING:
    from .model import Statistics

app = App(name="srcdoc", help="Generate documentation from source comments and Markdown.")

_VERBOSITY_LEVELS = (logging.WARNING, logging.INFO, logging.DEBUG)


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


_STDERR_HANDLER = logging.StreamHandler()
_STDERR_HANDLER.setFormatter(logging.Formatter("%(message)s"))


def configure_logging(verbose: int) -> None:
    """Send ``srcdoc`` log records to the current stderr as bare messages."""
    _STDERR_HANDLER.setStream(sys.stderr)
    if _STDERR_HANDLER not in logger.handlers:
        logger.addHandler(_STDERR_HANDLER)
    logger.setLevel(_VERBOSITY_LEVELS[max(0, min(verbose, 2))])


def format_statistics(stats: Statistics) -> str:
    """Return the end-of-run statistics as aligned lines."""
    return "\n".join(f"  {count:>5} {label}" for label, count in stats.as_dict().items())


@app.command(help="Build documentation from source files, folders or globs.")
def build(
    inputs: typ.Annotated[
        list[str] | None,
        Parameter(help="Source files, folders or glob patterns to document"),
    ] = None,
    *,
    output_dir: typ.Annotated[
        Path | None,
        Parameter(name=["--output-dir", "-o"], help="Folder for generated output"),
    ] = None,
    config: typ.Annotated[
        Path | None,
        Parameter(help="Path to a srcdoc.yaml build config", env_var="SRCDOC_CONFIG"),
    ] = None,
    exts: typ.Annotated[
        str | None,
        Parameter(help="Source extensions in compact form, e.g. .c.py.rs"),
    ] = None,
    sort: typ.Annotated[
        bool | None,
        Parameter(help="Sort modules, classes, functions and documents alphabetically"),
    ] = None,
    markdown: typ.Annotated[
        bool | None,
        Parameter(help="Write one combined Markdown file instead of HTML", negative=()),
    ] = None,
    no_index: typ.Annotated[
        bool | None,
        Parameter(help="Do not write index.html", negative=()),
    ] = None,
    local_css: typ.Annotated[
        bool | None,
        Parameter(help="Write highlight CSS to a local stylesheet", negative=()),
    ] = None,
    check: typ.Annotated[
        bool | None,
        Parameter(help="Parse and report warnings without writing output", negative=()),
    ] = None,
    verbose: typ.Annotated[
        int | None,
        Parameter(name=["--verbose", "-v"], help="Verbosity: 0 none, 1 some, 2 more"),
    ] = None,
) -> int:
    """Parse the inputs and write the requested output.

    Parameters
    ----------
    inputs : list[str] or None, optional
        Files, folders (recursed three levels deep) and glob patterns; may
        instead come from the config file.
    output_dir : Path or None, optional
        Output folder; defaults to ``site``.
    config : Path or None, optional
        Explicit ``srcdoc.yaml``; ``./srcdoc.yaml`` is used when present.
    exts : str or None, optional
        Compact source extension list overriding the defaults.
    sort, markdown, no_index, local_css, check : bool or None, optional
        Override the matching configuration switches.
    verbose : int or None, optional
        1 prints progress and statistics, 2 adds parser tracing.

    Returns
    -------
    int
        ``1`` when any warning was emitted, otherwise ``0``.

    Raises
    ------
    BuildConfigError
        If no inputs are given or configuration values are invalid.

    Notes
    -----
    ``MemoryError`` is never caught: running out of memory aborts the run
    with the interpreter's traceback.
    """
    build_config = load_build_config(
        config,
        overrides={
            "inputs": inputs or None,
            "output_dir": output_dir,
            "extensions": exts,
            "sort": sort,
            "markdown": markdown,
            "no_index": no_index,
            "local_css": local_css,
            "check_only": check,
            "verbose": verbose,
        },
    )
    if not build_config.inputs:
        msg = "No inputs given on the command line or in the config file."
        raise BuildConfigError(msg)
    configure_logging(build_config.verbose)

    state = parse_inputs(build_config.inputs, build_config.parse_options)
    diagnostics = state.diagnostics
    if not build_config.check_only:
        writer_cls = MarkdownWriter if build_config.markdown else HtmlSiteWriter
        writer = writer_cls(state.document, build_config, diagnostics)
        for path in writer.run():
            print(f"wrote {_format_path(path)}")

    stats = state.document.stats
    stats.warnings = diagnostics.count
    if build_config.verbose >= 1:
        print(format_statistics(stats))
    return 1 if diagnostics.count else 0


@app.command(help="Print the URL slug srcdoc derives from a title.")
def slug(text: str) -> None:
    """Print ``text`` converted to a slug.

    Parameters
    ----------
    text : str
        Title to convert; letters and digits in any script are kept.
    """
    print(slugify(text))


def main() -> None:
    """Invoke the Cyclopts application that powers the ``srcdoc`` console command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    result = app()
    sys.exit(result if isinstance(result, int) else 0)


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
