"""
Prometheus metrics helpers for Transcriptorator.

Shared metric definitions for store queries and the player follow
channel. HTTP request metrics live with the web service middleware.
"""

from __future__ import annotations

from prometheus_client import Counter, Histogram

store_queries_total = Counter(
    "archive_store_queries_total",
    "Queries issued against the managed store",
    ["operation", "outcome"],
)
store_query_duration_seconds = Histogram(
    "archive_store_query_duration_seconds",
    "Wall time spent in a store operation, all pages included",
    ["operation"],
)
store_pages_fetched_total = Counter(
    "archive_store_pages_fetched_total",
    "Result pages requested while draining a paged query",
    ["operation"],
)
follow_messages_total = Counter(
    "archive_follow_messages_total",
    "Messages received on the player follow channel",
    ["type"],
)
