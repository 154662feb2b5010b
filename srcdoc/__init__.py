"""Generate HTML or Markdown documentation from source comments.

This package collects ``/*!`` comment headers, ``'''!`` doc strings and
Markdown files into a document model and renders it as a static W3.CSS site
or one combined Markdown file.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from srcdoc import main
>>> main()  # doctest: +SKIP
>>> from srcdoc import app
>>> callable(app)
True
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
