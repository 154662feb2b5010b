"""Tests for loading ``srcdoc.yaml`` and merging command-line overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from srcdoc.config import (
    BuildConfig,
    BuildConfigError,
    ParseOptions,
    load_build_config,
    split_extensions,
)


def _write_config(tmp_path: Path, body: str) -> Path:
    path = tmp_path / "srcdoc.yaml"
    path.write_text(body, encoding="utf-8")
    return path


def test_defaults_without_config_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """With no file and no overrides the dataclass defaults apply."""
    monkeypatch.chdir(tmp_path)
    config = load_build_config()
    assert config == BuildConfig()
    assert ".rs" in config.extensions
    assert config.parse_options == ParseOptions()


def test_file_values_and_overrides(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """CLI overrides win over file values; ``None`` overrides are ignored."""
    monkeypatch.chdir(tmp_path)
    path = _write_config(
        tmp_path,
        "defaults:\n"
        "  inputs: [src, docs]\n"
        "  output_dir: public\n"
        "  extensions: [c, .H]\n"
        "  sort: false\n"
        "  verbose: 5\n",
    )
    config = load_build_config(path, overrides={"sort": None, "output_dir": Path("out")})
    assert config.inputs == ["src", "docs"]
    assert config.output_dir == Path("out")
    assert config.extensions == (".c", ".h")
    assert config.sort is False
    assert config.verbose == 2


def test_config_in_working_directory_is_picked_up(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    """``./srcdoc.yaml`` is read when no path is given."""
    monkeypatch.chdir(tmp_path)
    _write_config(tmp_path, "defaults:\n  extensions: .py.rs\n  markdown: true\n")
    config = load_build_config()
    assert config.extensions == (".py", ".rs")
    assert config.markdown is True


def test_missing_explicit_file(tmp_path: Path) -> None:
    """An explicit path that does not exist is an error."""
    with pytest.raises(FileNotFoundError):
        load_build_config(tmp_path / "absent.yaml")


@pytest.mark.parametrize(
    ("body", "error"),
    [
        ("- just\n- a list\n", TypeError),
        ("defaults:\n  colour: red\n", BuildConfigError),
        ("defaults:\n  sort: maybe\n", BuildConfigError),
        ("defaults:\n  extensions: ''\n", BuildConfigError),
        ("defaults: [1, 2]\n", BuildConfigError),
    ],
)
def test_invalid_config(tmp_path: Path, body: str, error: type[Exception]) -> None:
    """Malformed files raise descriptive errors."""
    path = _write_config(tmp_path, body)
    with pytest.raises(error):
        load_build_config(path)


def test_split_extensions_and_is_source() -> None:
    """Compact extension lists are split and matched case-insensitively."""
    assert split_extensions(".C.c++..py") == (".c", ".c++", ".py")
    options = ParseOptions(extensions=(".c",))
    assert options.is_source(Path("MAIN.C"))
    assert not options.is_source(Path("main.md"))
