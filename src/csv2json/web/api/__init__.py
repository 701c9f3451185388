"""HTTP API for csv2json."""

from .routes import router

__all__ = ["router"]
