"""
Search API schemas for Transcriptorator.

Pydantic request/response models for full-text transcript search.
"""

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from archive_common.models import Chamber, SearchResult


class SearchRequest(BaseModel):
    query: str = Field(..., max_length=500)
    match_count: int | None = Field(default=None, ge=1, le=500)
    chamber: Chamber | None = None
    date_from: date | None = None
    date_to: date | None = None


class SearchResponse(BaseModel):
    query: str
    searched: bool
    results: list[SearchResult]
    total: int
