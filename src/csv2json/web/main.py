"""FastAPI application entry point."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..version import __version__
from .api.routes import router

logger = logging.getLogger(__name__)

app = FastAPI(
    title="CSV to JSON Converter",
    description="Convert delimited text into JSON with type inference and validation",
    version=__version__,
)

# CORS middleware for browser clients
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(router)

logger.info("csv2json API %s ready", __version__)


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "ok"}


@app.get("/api/version")
async def get_version():
    """Get application version."""
    return {"version": __version__}
