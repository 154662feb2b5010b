"""Utility helpers shared by the srcdoc configuration loader."""

from __future__ import annotations

import typing as typ

from .models import BuildConfigError, split_extensions


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _normalize_extensions(value: str | list[object] | None) -> tuple[str, ...] | None:
    """Normalize a compact string or a YAML list into lowercase suffixes."""
    match value:
        case None:
            return None
        case str():
            extensions = split_extensions(value)
        case list():
            extensions = tuple(
                f".{str(item).strip().lstrip('.').lower()}"
                for item in value
                if str(item).strip().lstrip(".")
            )
        case _:
            msg = f"extensions must be a string or list, got {type(value).__name__}."
            raise BuildConfigError(msg)
    if not extensions:
        msg = "At least one source extension is required."
        raise BuildConfigError(msg)
    return extensions


def _as_bool(key: str, value: object) -> bool:
    """Return ``value`` when it is a real boolean, else raise."""
    if isinstance(value, bool):
        return value
    msg = f"'{key}' must be true or false, got {value!r}."
    raise BuildConfigError(msg)


def _as_verbosity(value: object) -> int:
    """Return a verbosity level clamped to the supported range."""
    if isinstance(value, bool) or not isinstance(value, int):
        msg = f"'verbose' must be an integer, got {value!r}."
        raise BuildConfigError(msg)
    return max(0, min(value, 2))


def _as_inputs(value: object) -> list[str]:
    """Return the configured inputs as a list of strings."""
    match value:
        case str():
            return [value]
        case list():
            return [str(item) for item in value if _optional_str(item)]
        case _:
            msg = f"'inputs' must be a string or list, got {value!r}."
            raise BuildConfigError(msg)


def _merge(
    defaults: typ.Mapping[str, typ.Any], overrides: typ.Mapping[str, typ.Any]
) -> dict[str, typ.Any]:
    """Overlay non-``None`` overrides on top of file defaults."""
    merged = dict(defaults)
    merged.update({key: value for key, value in overrides.items() if value is not None})
    return merged
