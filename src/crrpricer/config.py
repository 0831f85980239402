"""Layered configuration: built-in defaults, then a YAML file, then CLI flags."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Mapping

import yaml

from .core import DEFAULT_STEPS
from .logging_config import DEFAULT_FORMAT

DEFAULT_CONFIG: dict[str, Any] = {
    "pricing": {
        "steps": DEFAULT_STEPS,
    },
    "logging": {
        "level": "WARNING",
        "format": DEFAULT_FORMAT,
        "file": None,
    },
}


def load_yaml_config(path: str | Path | None) -> dict[str, Any]:
    if path is None:
        return {}

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {p}")

    with p.open("r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError("Config file must contain a YAML mapping at the top level.")

    return data


def deep_merge(
    base: Mapping[str, Any],
    updates: Mapping[str, Any],
) -> dict[str, Any]:
    """Recursively merge ``updates`` over ``base``; neither input is mutated."""
    merged: dict[str, Any] = {}

    for key, value in base.items():
        if isinstance(value, Mapping):
            merged[key] = deep_merge(value, {})
        else:
            merged[key] = value

    for key, value in updates.items():
        if isinstance(value, Mapping) and isinstance(merged.get(key), Mapping):
            merged[key] = deep_merge(merged[key], value)
        else:
            merged[key] = value

    return merged


def _drop_none(overrides: Mapping[str, Any]) -> dict[str, Any]:
    out: dict[str, Any] = {}
    for key, value in overrides.items():
        if isinstance(value, Mapping):
            nested = _drop_none(value)
            if nested:
                out[key] = nested
        elif value is not None:
            out[key] = value
    return out


def build_config(
    defaults: Mapping[str, Any],
    yaml_path: str | Path | None,
    overrides: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    """Merge defaults, the YAML file and non-None ``overrides``, in that order."""
    config = deep_merge(defaults, load_yaml_config(yaml_path))
    if overrides:
        config = deep_merge(config, _drop_none(overrides))
    return config
