"""Command line interface for csv2json."""

from .app import app

__all__ = ["app"]
