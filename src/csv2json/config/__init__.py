"""Configuration management helpers."""

from .loader import load_config, parse_config
from .schema import AppConfig

__all__ = ["AppConfig", "load_config", "parse_config"]
