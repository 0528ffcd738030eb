"""
archive-common: Shared library for Transcriptorator.

Provides configuration management, structured logging, database access,
domain models, and display helpers used by the Transcriptorator web
service.
"""

from archive_common.config import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
