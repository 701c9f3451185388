"""Configuration models for csv2json."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ..models import ConverterConfig


@dataclass(slots=True)
class AppConfig:
    """Top-level configuration: converter defaults plus named profiles."""

    defaults: ConverterConfig = field(default_factory=ConverterConfig)
    profiles: Dict[str, Dict[str, Any]] = field(default_factory=dict)
    encoding: str = "utf-8"

    def profile_names(self) -> List[str]:
        return sorted(self.profiles)

    def converter_config(self, profile: Optional[str] = None) -> ConverterConfig:
        """Return the defaults with the named profile's overrides applied."""

        if not profile:
            return self.defaults
        if profile not in self.profiles:
            known = ", ".join(self.profile_names()) or "none defined"
            raise ValueError(f"Unknown profile '{profile}' (available: {known})")
        return self.defaults.with_overrides(self.profiles[profile])


__all__ = ["AppConfig"]
