"""Load build configuration YAML into typed dataclasses."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _as_bool,
    _as_inputs,
    _as_verbosity,
    _merge,
    _normalize_extensions,
    _optional_str,
)
from .models import BuildConfig, BuildConfigError

DEFAULT_CONFIG_NAME = "srcdoc.yaml"
_BOOL_KEYS = ("sort", "markdown", "no_index", "local_css", "check_only")
_KNOWN_KEYS = {
    "inputs",
    "output_dir",
    "extensions",
    "pygments_style",
    "verbose",
    *_BOOL_KEYS,
}


def _read_defaults(path: Path) -> dict[str, typ.Any]:
    """Return the ``defaults`` mapping from a YAML configuration file."""
    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    defaults = loaded.get("defaults", {}) or {}
    if not isinstance(defaults, dict):
        msg = "'defaults' must be a mapping."
        raise BuildConfigError(msg)
    unknown = sorted(set(defaults) - _KNOWN_KEYS)
    if unknown:
        msg = f"Unknown configuration keys: {', '.join(unknown)}."
        raise BuildConfigError(msg)
    return dict(defaults)


def load_build_config(
    path: Path | None = None,
    overrides: typ.Mapping[str, typ.Any] | None = None,
) -> BuildConfig:
    """Build a :class:`BuildConfig` from an optional YAML file and CLI overrides.

    Parameters
    ----------
    path : Path, optional
        Explicit configuration file. When ``None``, ``srcdoc.yaml`` in the
        current directory is used if it exists.
    overrides : Mapping[str, Any], optional
        Values supplied on the command line. ``None`` values are ignored so
        they never mask file settings.

    Returns
    -------
    BuildConfig
        Merged configuration with defaults applied.

    Raises
    ------
    FileNotFoundError
        If ``path`` is given but does not exist.
    TypeError
        If the top-level YAML structure is not a mapping.
    BuildConfigError
        If a value has the wrong type or an unknown key is present.

    Examples
    --------
    >>> from srcdoc.config import load_build_config
    >>> config = load_build_config(overrides={"inputs": ["src"], "sort": False})
    >>> config.sort, config.inputs
    (False, ['src'])
    """
    file_defaults: dict[str, typ.Any] = {}
    if path is not None:
        if not path.exists():
            msg = f"Configuration file '{path}' not found."
            raise FileNotFoundError(msg)
        file_defaults = _read_defaults(path)
    elif Path(DEFAULT_CONFIG_NAME).is_file():
        file_defaults = _read_defaults(Path(DEFAULT_CONFIG_NAME))

    raw = _merge(file_defaults, overrides or {})
    base = BuildConfig()
    config = BuildConfig(
        inputs=_as_inputs(raw.get("inputs", [])),
        output_dir=Path(raw.get("output_dir", base.output_dir)),
        extensions=_normalize_extensions(raw.get("extensions")) or base.extensions,
        pygments_style=_optional_str(raw.get("pygments_style")) or base.pygments_style,
        verbose=_as_verbosity(raw.get("verbose", base.verbose)),
    )
    for key in _BOOL_KEYS:
        if key in raw:
            setattr(config, key, _as_bool(key, raw[key]))
    return config


__all__ = ["DEFAULT_CONFIG_NAME", "load_build_config"]
