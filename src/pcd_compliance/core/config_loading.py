"""Load and validate declarative predicate-shape configuration files.

Predicate authors can describe a compliance predicate's shape in a JSON or
YAML mapping instead of constructing it in code. The loader enforces a mapping
root; key-level validation helpers live here so every config consumer reports
unknown and missing keys the same way.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
import json
from pathlib import Path
from typing import Any

import yaml

SUPPORTED_CONFIG_SUFFIXES: tuple[str, ...] = (".json", ".yaml", ".yml")


def load_config_mapping(path: str | Path) -> dict[str, Any]:
    """Load one JSON/YAML config file whose root is an object mapping.

    Parameters
    ----------
    path : str | pathlib.Path
        Config file path. Supported suffixes are `.json`, `.yaml`, and `.yml`.

    Returns
    -------
    dict[str, Any]
        Parsed config mapping.

    Raises
    ------
    ValueError
        If suffix is unsupported or config root is not an object mapping.
    """

    config_path = Path(path)
    suffix = config_path.suffix.lower()
    if suffix not in SUPPORTED_CONFIG_SUFFIXES:
        supported = ", ".join(SUPPORTED_CONFIG_SUFFIXES)
        raise ValueError(
            f"unsupported config file extension {suffix!r}; expected one of {supported}"
        )

    text = config_path.read_text(encoding="utf-8")
    raw = json.loads(text) if suffix == ".json" else yaml.safe_load(text)

    if not isinstance(raw, dict):
        raise ValueError("config root must be a JSON/YAML object")
    return raw


def validate_allowed_keys(
    mapping: Mapping[str, Any],
    *,
    field_name: str,
    allowed_keys: Iterable[str],
) -> None:
    """Reject keys that are not part of a config section.

    Parameters
    ----------
    mapping : Mapping[str, Any]
        Configuration mapping to validate.
    field_name : str
        Human-readable path used in error messages.
    allowed_keys : Iterable[str]
        Allowed key names for ``mapping``.

    Raises
    ------
    ValueError
        If unknown keys are present.
    """

    allowed = {str(key) for key in allowed_keys}
    unknown = sorted(str(key) for key in mapping if str(key) not in allowed)
    if unknown:
        raise ValueError(f"{field_name} has unknown keys: {unknown}")


def validate_required_keys(
    mapping: Mapping[str, Any],
    *,
    field_name: str,
    required_keys: Iterable[str],
) -> None:
    """Reject config sections that omit required keys."""

    missing = sorted(str(key) for key in required_keys if key not in mapping)
    if missing:
        raise ValueError(f"{field_name} is missing required keys: {missing}")


def coerce_non_negative_int(value: Any, *, field_name: str) -> int:
    """Return ``value`` as a non-negative ``int``.

    Booleans and floats are rejected even when integral.

    Raises
    ------
    ValueError
        If ``value`` is not a non-negative integer.
    """

    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{field_name} must be an integer, got {value!r}")
    if value < 0:
        raise ValueError(f"{field_name} must be >= 0, got {value}")
    return value


__all__ = [
    "SUPPORTED_CONFIG_SUFFIXES",
    "coerce_non_negative_int",
    "load_config_mapping",
    "validate_allowed_keys",
    "validate_required_keys",
]
