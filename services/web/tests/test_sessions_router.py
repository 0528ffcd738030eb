"""
Tests for the session catalog and transcript API routes.

The store is mocked at the ``AsyncSession.execute`` level so the real
query functions, filters, and response models run end to end.
"""

from __future__ import annotations

from datetime import date
from unittest.mock import AsyncMock, MagicMock

from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from web_factories import (
    SESSION_ID,
    make_segment_rows,
    make_session_row,
    scalars_result,
)


def _catalog() -> list:
    return [
        make_session_row(id="s-3", slug="senate-floor-2025-03-02", chamber="senate",
                         title="Senate Floor Session", session_date=date(2025, 3, 2)),
        make_session_row(id="s-2", slug="house-education-2025-02-10", chamber="house",
                         title="House Education Finance", session_date=date(2025, 2, 10)),
        make_session_row(id="s-1", slug="house-taxes-2025-01-14", chamber="house",
                         title="House Taxes Committee", session_date=date(2025, 1, 14)),
    ]


def _count_result(n: int) -> MagicMock:
    result = MagicMock()
    result.scalar_one.return_value = n
    return result


# ─── GET /api/v1/sessions ─────────────────────────────────────


class TestListSessions:
    def test_lists_all_published(self, client: TestClient, mock_db: AsyncMock):
        mock_db.execute = AsyncMock(return_value=scalars_result(_catalog()))

        resp = client.get("/api/v1/sessions")

        assert resp.status_code == 200
        body = resp.json()
        assert body["total"] == 3
        assert body["matched"] == 3
        assert [s["slug"] for s in body["sessions"]] == [
            "senate-floor-2025-03-02",
            "house-education-2025-02-10",
            "house-taxes-2025-01-14",
        ]

    def test_chamber_filter(self, client: TestClient, mock_db: AsyncMock):
        mock_db.execute = AsyncMock(return_value=scalars_result(_catalog()))

        body = client.get("/api/v1/sessions", params={"chamber": "house"}).json()

        assert body["total"] == 3
        assert body["matched"] == 2
        assert {s["chamber"] for s in body["sessions"]} == {"house"}

    def test_date_range_is_inclusive(self, client: TestClient, mock_db: AsyncMock):
        mock_db.execute = AsyncMock(return_value=scalars_result(_catalog()))

        body = client.get(
            "/api/v1/sessions",
            params={"date_from": "2025-01-14", "date_to": "2025-02-10"},
        ).json()

        assert [s["session_date"] for s in body["sessions"]] == ["2025-02-10", "2025-01-14"]

    def test_blank_dates_ignored(self, client: TestClient, mock_db: AsyncMock):
        mock_db.execute = AsyncMock(return_value=scalars_result(_catalog()))

        body = client.get("/api/v1/sessions", params={"date_from": "", "date_to": ""}).json()

        assert body["matched"] == 3

    def test_invalid_chamber_rejected(self, client: TestClient, mock_db: AsyncMock):
        resp = client.get("/api/v1/sessions", params={"chamber": "assembly"})
        assert resp.status_code == 422
        mock_db.execute.assert_not_called()

    def test_invalid_date_rejected(self, client: TestClient):
        resp = client.get("/api/v1/sessions", params={"date_from": "last tuesday"})
        assert resp.status_code == 422

    def test_drains_capped_pages(self, client: TestClient, mock_db: AsyncMock, settings):
        settings.page_size = 2
        rows = _catalog()
        mock_db.execute = AsyncMock(
            side_effect=[scalars_result(rows[:2]), scalars_result(rows[2:])],
        )

        body = client.get("/api/v1/sessions").json()

        assert body["total"] == 3
        assert mock_db.execute.await_count == 2

    def test_store_error_is_bad_gateway(self, client: TestClient, mock_db: AsyncMock):
        mock_db.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("connection refused")),
        )

        resp = client.get("/api/v1/sessions")

        assert resp.status_code == 502
        assert resp.json()["operation"] == "list_sessions"
        assert "connection refused" in resp.json()["detail"]

    def test_unconfigured_database_is_empty(self, unconfigured_client: TestClient):
        body = unconfigured_client.get("/api/v1/sessions").json()
        assert body == {"sessions": [], "total": 0, "matched": 0}


# ─── GET /api/v1/sessions/{slug} ──────────────────────────────


class TestGetSession:
    def test_returns_metadata_and_count(self, client: TestClient, mock_db: AsyncMock):
        mock_db.execute = AsyncMock(
            side_effect=[scalars_result([make_session_row()]), _count_result(412)],
        )

        resp = client.get("/api/v1/sessions/house-ways-and-means-2025-01-14")

        assert resp.status_code == 200
        body = resp.json()
        assert body["session"]["id"] == SESSION_ID
        assert body["session"]["youtube_video_id"] == "dQw4w9WgXcQ"
        assert body["segment_count"] == 412

    def test_unknown_slug(self, client: TestClient, mock_db: AsyncMock):
        mock_db.execute = AsyncMock(return_value=scalars_result([]))

        resp = client.get("/api/v1/sessions/no-such-session")

        assert resp.status_code == 404
        assert resp.json()["detail"] == "Session not found"

    def test_unconfigured_database(self, unconfigured_client: TestClient):
        assert unconfigured_client.get("/api/v1/sessions/anything").status_code == 404


# ─── GET /api/v1/sessions/{slug}/transcript ───────────────────


class TestGetTranscript:
    def test_returns_segments_in_order(self, client: TestClient, mock_db: AsyncMock):
        segments = make_segment_rows([(0.0, 4.0), (4.0, 9.5), (9.5, 15.0)])
        mock_db.execute = AsyncMock(
            side_effect=[scalars_result([make_session_row()]), scalars_result(segments)],
        )

        resp = client.get("/api/v1/sessions/house-ways-and-means-2025-01-14/transcript")

        assert resp.status_code == 200
        body = resp.json()
        assert body["session_id"] == SESSION_ID
        assert body["total"] == 3
        assert [s["seq"] for s in body["segments"]] == [0, 1, 2]
        assert body["segments"][1]["start_seconds"] == 4.0

    def test_transcript_longer_than_one_page(
        self, client: TestClient, mock_db: AsyncMock, settings,
    ):
        settings.page_size = 1000
        spans = [(i * 3.0, i * 3.0 + 3.0) for i in range(2500)]
        rows = make_segment_rows(spans)
        mock_db.execute = AsyncMock(
            side_effect=[
                scalars_result([make_session_row()]),
                scalars_result(rows[:1000]),
                scalars_result(rows[1000:2000]),
                scalars_result(rows[2000:]),
            ],
        )

        body = client.get("/api/v1/sessions/house-ways-and-means-2025-01-14/transcript").json()

        assert body["total"] == 2500
        assert body["segments"][-1]["seq"] == 2499

    def test_reversed_interval_row_is_returned(self, client: TestClient, mock_db: AsyncMock):
        mock_db.execute = AsyncMock(side_effect=[
            scalars_result([make_session_row()]),
            scalars_result(make_segment_rows([(0.0, 5.0), (5.0, 4.99), (6.0, 9.0)])),
        ])

        resp = client.get("/api/v1/sessions/house-ways-and-means-2025-01-14/transcript")

        assert resp.status_code == 200
        assert resp.json()["segments"][1]["end_seconds"] == 4.99

    def test_unconvertible_row_is_bad_gateway(self, client: TestClient, mock_db: AsyncMock):
        rows = make_segment_rows([(0.0, 5.0)])
        rows[0].start_seconds = None
        mock_db.execute = AsyncMock(side_effect=[
            scalars_result([make_session_row()]),
            scalars_result(rows),
        ])

        resp = client.get("/api/v1/sessions/house-ways-and-means-2025-01-14/transcript")

        assert resp.status_code == 502
        assert resp.json()["operation"] == "fetch_segments"

    def test_session_without_transcript(self, client: TestClient, mock_db: AsyncMock):
        mock_db.execute = AsyncMock(
            side_effect=[scalars_result([make_session_row()]), scalars_result([])],
        )

        body = client.get("/api/v1/sessions/house-ways-and-means-2025-01-14/transcript").json()

        assert body["segments"] == []
        assert body["total"] == 0


# ─── GET /api/v1/sessions/{slug}/segments/at ──────────────────


class TestSegmentAt:
    def _mock(self, mock_db: AsyncMock) -> None:
        segments = make_segment_rows([(0.0, 5.0), (5.0, 10.0), (20.0, 30.0)])
        mock_db.execute = AsyncMock(
            side_effect=[scalars_result([make_session_row()]), scalars_result(segments)],
        )

    def test_finds_covering_segment(self, client: TestClient, mock_db: AsyncMock):
        self._mock(mock_db)

        resp = client.get(
            "/api/v1/sessions/house-ways-and-means-2025-01-14/segments/at",
            params={"t": 7.25},
        )

        assert resp.status_code == 200
        assert resp.json()["seconds"] == 7.25
        assert resp.json()["segment"]["seq"] == 1

    def test_boundary_belongs_to_next_segment(self, client: TestClient, mock_db: AsyncMock):
        self._mock(mock_db)

        resp = client.get(
            "/api/v1/sessions/house-ways-and-means-2025-01-14/segments/at",
            params={"t": 5},
        )

        assert resp.json()["segment"]["seq"] == 1

    def test_gap_is_not_found(self, client: TestClient, mock_db: AsyncMock):
        self._mock(mock_db)

        resp = client.get(
            "/api/v1/sessions/house-ways-and-means-2025-01-14/segments/at",
            params={"t": 15},
        )

        assert resp.status_code == 404

    def test_nested_segment_resolves_to_outer(self, client: TestClient, mock_db: AsyncMock):
        mock_db.execute = AsyncMock(side_effect=[
            scalars_result([make_session_row()]),
            scalars_result(make_segment_rows([(0.0, 10.0), (2.0, 4.0)])),
        ])

        resp = client.get(
            "/api/v1/sessions/house-ways-and-means-2025-01-14/segments/at",
            params={"t": 5},
        )

        assert resp.status_code == 200
        assert resp.json()["segment"]["seq"] == 0

    def test_negative_offset_rejected(self, client: TestClient):
        resp = client.get(
            "/api/v1/sessions/house-ways-and-means-2025-01-14/segments/at",
            params={"t": -1},
        )
        assert resp.status_code == 422
