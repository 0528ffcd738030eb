"""
CORS middleware configuration for the Transcriptorator web service.

Configures Cross-Origin Resource Sharing headers so embedding sites and
external clients can call the read-only JSON API.
"""

from __future__ import annotations

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware


def add_cors(app: FastAPI, origins: list[str]) -> None:
    """Attach CORS middleware allowing *origins* to issue GET and POST requests."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
