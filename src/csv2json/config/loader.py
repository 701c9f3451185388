"""Utilities for loading csv2json configuration files."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict

import yaml

from ..models import ConverterConfig
from .schema import AppConfig


def load_config(path: str | Path) -> AppConfig:
    """Load configuration from a YAML file."""

    config_path = Path(path).expanduser().resolve()
    with config_path.open("r", encoding="utf-8") as handle:
        try:
            raw_data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {config_path}: {e}") from e

    return parse_config(raw_data)


def parse_config(raw_data: Any) -> AppConfig:
    """Build an ``AppConfig`` from already-decoded YAML data."""

    if not isinstance(raw_data, dict):
        raise ValueError("Configuration root must be a mapping.")

    defaults = ConverterConfig.from_dict(_coerce_mapping(raw_data.get("defaults"), "defaults"))
    profiles = _parse_profiles(raw_data.get("profiles"), defaults)

    return AppConfig(
        defaults=defaults,
        profiles=profiles,
        encoding=str(raw_data.get("encoding") or "utf-8"),
    )


def _coerce_mapping(values: Any, name: str) -> Dict[str, Any]:
    if not values:
        return {}
    if not isinstance(values, dict):
        raise ValueError(f"Expected a mapping for {name}.")
    return {str(key): value for key, value in values.items()}


def _parse_profiles(data: Any, defaults: ConverterConfig) -> Dict[str, Dict[str, Any]]:
    profiles: Dict[str, Dict[str, Any]] = {}
    for name, overrides in _coerce_mapping(data, "profiles").items():
        overrides = _coerce_mapping(overrides, f"profile '{name}'")
        # Validate eagerly so a bad profile fails at load time.
        try:
            defaults.with_overrides(overrides)
        except ValueError as e:
            raise ValueError(f"Invalid profile '{name}': {e}") from e
        profiles[name] = overrides
    return profiles


__all__ = ["load_config", "parse_config"]
