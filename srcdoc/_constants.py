"""Common literal values used across srcdoc.

These constants keep file extensions, default colors, and reserved names
centralized so the parser, renderers, and tests import the same values without
drifting. Intended for internal use within the srcdoc package.

Examples
--------
>>> from srcdoc import _constants
>>> ".py" in _constants.DEFAULT_SOURCE_EXTS
True
>>> _constants.RESERVED_INDEX_NAME
'index'
"""

DEFAULT_SOURCE_EXTS = ".c.c++.cc.cpp.cxx.cs.go.java.js.py.rs.swift.ts"
MARKDOWN_EXTS = (".md", ".mdown", ".markdown")
IMAGE_EXTS = (".jpg", ".jpeg", ".png", ".gif")

MAX_FOLDER_DEPTH = 3

DEFAULT_BAR_COLOR = "w3-blue"
DEFAULT_TITLE_COLOR = "w3-black"
DEFAULT_HEADING_COLOR = "w3-text-blue"
HOME_IMAGE_NAME = "srcdoc_home.svg"
DEFAULT_LOGO = f'![Home]({HOME_IMAGE_NAME} "w3-round")'

RESERVED_INDEX_NAME = "index"
TABLE_OF_CONTENTS_TITLE = "Table of Contents"
EXAMPLE_PREFIX = "Example: "
HARD_BREAK = "  "

LANGUAGE_BY_EXT: dict[str, str] = {
    ".c": "c",
    ".c++": "cpp",
    ".cc": "cpp",
    ".cpp": "cpp",
    ".cxx": "cpp",
    ".cs": "csharp",
    ".go": "go",
    ".java": "java",
    ".js": "javascript",
    ".py": "python",
    ".rs": "rust",
    ".swift": "swift",
    ".ts": "typescript",
}
