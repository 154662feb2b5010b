"""Parse source comments and Markdown files into a documentation model.

The stages build on each other: :mod:`.text_region` handles examples, style
keywords, reflow and images for any span of text; :mod:`.registry` and
:mod:`.functions` create modules, classes and functions; :mod:`.sections`
splits a header into sections; :mod:`.markdown_document` handles standalone
Markdown files; and :mod:`.walker` drives all of them over the inputs.

Examples
--------
>>> from srcdoc.parser import parse_inputs
>>> state = parse_inputs(["src", "docs"])  # doctest: +SKIP
>>> state.document.stats.modules  # doctest: +SKIP
3
"""

from .duplicates import is_duplicate
from .functions import extract_function, parse_prototype
from .markdown_document import parse_markdown_document
from .registry import find_module, parse_membership, parse_module
from .sections import parse_header, parse_mainpage
from .state import ParseState
from .text_region import process_text, reflow
from .walker import expand_inputs, parse_file, parse_inputs, parse_source_text

__all__ = [
    "ParseState",
    "expand_inputs",
    "extract_function",
    "find_module",
    "is_duplicate",
    "parse_file",
    "parse_header",
    "parse_inputs",
    "parse_mainpage",
    "parse_markdown_document",
    "parse_membership",
    "parse_module",
    "parse_prototype",
    "parse_source_text",
    "process_text",
    "reflow",
]
