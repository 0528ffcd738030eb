"""
Shared Pydantic data models for Transcriptorator.

This package contains the session, transcript segment, and search
result models exchanged between the store queries and the web service.
"""

from archive_common.models.session import Chamber, Session
from archive_common.models.transcript import SearchResult, TranscriptSegment

__all__ = [
    "Chamber",
    "SearchResult",
    "Session",
    "TranscriptSegment",
]
