"""Load and validate srcdoc build configuration.

This subpackage merges an optional ``srcdoc.yaml`` file with command-line
overrides and produces a :class:`BuildConfig` for the driver and renderers,
plus the :class:`ParseOptions` subset the parser consumes. The primary entry
point is :func:`load_build_config`.

Examples
--------
>>> from pathlib import Path
>>> from srcdoc.config import load_build_config
>>> config = load_build_config(Path("srcdoc.yaml"))  # doctest: +SKIP
>>> config.extensions  # doctest: +SKIP
('.c', '.py')
"""

from .loader import DEFAULT_CONFIG_NAME, load_build_config
from .models import BuildConfig, BuildConfigError, ParseOptions, split_extensions

__all__ = [
    "DEFAULT_CONFIG_NAME",
    "BuildConfig",
    "BuildConfigError",
    "ParseOptions",
    "load_build_config",
    "split_extensions",
]
