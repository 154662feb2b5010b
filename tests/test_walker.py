"""Tests for input expansion and the end-to-end parse driver.

These tests build small source trees under ``tmp_path`` and run
``parse_inputs`` over them, checking folder traversal, glob handling, image
pre-scanning, unreadable files and the run statistics.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from srcdoc.config import ParseOptions
from srcdoc.diagnostics import Diagnostics, WarningCode
from srcdoc.parser import expand_inputs, parse_inputs


def _write(path: Path, text: str) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


def test_folders_recurse_three_levels_in_sorted_order(tmp_path: Path) -> None:
    """Folder listings are sorted and depth limited."""
    _write(tmp_path / "b.c", "")
    _write(tmp_path / "a" / "z.c", "")
    _write(tmp_path / "a" / "deep" / "y.c", "")
    _write(tmp_path / "a" / "deep" / "deeper" / "x.c", "")
    diagnostics = Diagnostics()
    paths = expand_inputs([str(tmp_path)], diagnostics)
    relative = [path.relative_to(tmp_path).as_posix() for path in paths]
    assert relative == ["a/deep/y.c", "a/z.c", "b.c"]
    assert diagnostics.count == 0


def test_glob_and_missing_inputs(tmp_path: Path) -> None:
    """Glob patterns expand; inputs matching nothing are reported."""
    _write(tmp_path / "one.c", "")
    _write(tmp_path / "two.c", "")
    _write(tmp_path / "three.h", "")
    diagnostics = Diagnostics()
    paths = expand_inputs(
        [str(tmp_path / "*.c"), str(tmp_path / "nope"), str(tmp_path / "*.zz")],
        diagnostics,
    )
    assert [path.name for path in paths] == ["one.c", "two.c"]
    assert diagnostics.codes() == [WarningCode.MISSING_INPUT, WarningCode.MISSING_INPUT]


def test_images_are_prescanned_before_parsing(tmp_path: Path) -> None:
    """An image listed after the document referencing it still resolves."""
    _write(tmp_path / "a.md", "# Lake\n\n![alt](lake.png)\n")
    (tmp_path / "lake.png").write_bytes(b"\x89PNG")
    state = parse_inputs([str(tmp_path)])
    assert state.diagnostics.count == 0
    [image] = state.document.input_images
    assert image.referenced
    assert state.document.stats.images == 1


def test_unreadable_and_unknown_files(tmp_path: Path) -> None:
    """Empty files warn; unrecognized extensions are skipped silently."""
    _write(tmp_path / "empty.c", "")
    _write(tmp_path / "notes.txt", "@mainpage Ignored\n")
    _write(tmp_path / "page.md", "# Page\n")
    state = parse_inputs([str(tmp_path)])
    assert state.diagnostics.codes() == [WarningCode.UNREADABLE]
    assert state.document.stats.files == 2
    assert state.document.mainpage is None


def test_undecodable_bytes_do_not_drop_the_file(tmp_path: Path) -> None:
    """A stray Latin-1 byte is replaced and the rest of the file is parsed."""
    path = tmp_path / "legacy.c"
    path.write_bytes(
        b"/*!\n  @defgroup Foo  Foo \xa9 Module\n*/\n"
        b"/*!\n  Does it.\n*/\nint doit(int x);\n"
    )
    state = parse_inputs([str(path)])
    assert state.diagnostics.codes() == []
    [module] = state.document.modules
    assert module.title == "Foo"
    assert module.subtitle == "Foo \ufffd Module"
    assert [function.name for function in module.functions] == ["doit"]


def test_byte_order_mark_is_removed(tmp_path: Path) -> None:
    """A UTF-8 BOM hides neither the first header nor Markdown front matter."""
    source = tmp_path / "foo.c"
    source.write_bytes(b"\xef\xbb\xbf/*!\n  @defgroup Foo  Foo Module\n*/\n")
    notes = tmp_path / "notes.md"
    notes.write_bytes(b"\xef\xbb\xbf@defgroup Tools  Tool notes\n")
    state = parse_inputs([str(source), str(notes)])
    assert state.diagnostics.codes() == []
    modules = [(module.title, module.subtitle) for module in state.document.modules]
    assert modules == [("Foo", "Foo Module"), ("Tools", "Tool notes")]
    assert state.document.documents == []


def test_no_objects_warning(tmp_path: Path) -> None:
    """A run that documents nothing says so."""
    _write(tmp_path / "plain.c", "int x;\n")
    state = parse_inputs([str(tmp_path / "plain.c")])
    assert state.diagnostics.codes() == [WarningCode.NO_OBJECTS]
    assert state.document.stats.warnings == 1


def test_statistics_count_entities(tmp_path: Path) -> None:
    """Statistics are recomputed once parsing has finished."""
    _write(
        tmp_path / "src" / "shape.c",
        "/*!\n@mainpage Shapes\n*/\n"
        "/*!\n@defgroup geo  Geometry\n\n@example Area\n\n    area(1);\n*/\n"
        "/*!\nArea.\n*/\ndouble area(double r);\n"
        "/*!\n@class Circle  A circle\n*/\n"
        "/*!\nRadius.\n*/\ndouble radius(void);\n",
    )
    _write(tmp_path / "docs" / "guide.md", "# Guide\n")
    state = parse_inputs([str(tmp_path / "src"), str(tmp_path / "docs")])
    stats = state.document.stats
    assert state.diagnostics.count == 0
    assert stats.as_dict() == {
        "modules": 1,
        "functions": 1,
        "classes": 1,
        "methods": 1,
        "examples": 1,
        "documents": 1,
        "images": 0,
        "files": 2,
        "doc comments": 5,
        "warnings": 0,
    }
    assert stats.has_mainpage
    assert stats.total_objects() == 7


@pytest.mark.parametrize("sort", [True, False])
def test_sort_option_keeps_membership(tmp_path: Path, sort: bool) -> None:
    """Sorting changes order, never the set of parsed entities."""
    _write(tmp_path / "z.c", "/*!\n@defgroup zed  Z\n*/\n")
    _write(tmp_path / "a.c", "/*!\n@defgroup Alpha  A\n*/\n")
    _write(tmp_path / "m.md", "# M\n")
    state = parse_inputs(
        [str(tmp_path / "z.c"), str(tmp_path / "a.c"), str(tmp_path / "m.md")],
        ParseOptions(sort=sort),
    )
    titles = [module.title for module in state.document.modules]
    assert sorted(titles, key=str.lower) == ["Alpha", "zed"]
    assert titles == (["Alpha", "zed"] if sort else ["zed", "Alpha"])
    assert len(state.document.documents) == 1
