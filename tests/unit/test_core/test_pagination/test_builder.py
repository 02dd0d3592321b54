"""Unit tests for connection assembly."""
from __future__ import annotations

import logging
from datetime import UTC, date, datetime, timedelta, timezone

import pytest

from connection_service.core.pagination.builder import (
    build_connection,
    build_page_info,
    convert_timestamps,
    cursor_position,
    map_fields,
)
from connection_service.core.pagination.cursor import CursorCodec
from connection_service.core.pagination.schemas import Edge, QueryResult
from tests.fixtures.assets import make_rows

FIELD_MAP = {"id": "id", "name": "display_name"}

# 2024-01-01T00:00:00Z
NEW_YEAR_MS = 1704067200000


def _positions(connection) -> list[int]:
    return [CursorCodec.decode(edge.cursor) for edge in connection.edges]


# ──────────────────────────────────────────────────────────────
# Row mapping
# ──────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestMapFields:
    """Tests for map_fields."""

    def test_renames_and_drops_columns(self):
        rows = [{"id": 1, "display_name": "Bitcoin", "internal": "x"}]

        assert map_fields(rows, FIELD_MAP) == [{"id": 1, "name": "Bitcoin"}]

    def test_missing_column_maps_to_none(self):
        assert map_fields([{"id": 1}], FIELD_MAP) == [{"id": 1, "name": None}]


@pytest.mark.unit
class TestConvertTimestamps:
    """Tests for convert_timestamps."""

    def test_datetime_values(self):
        rows = [
            {
                "createdAt": datetime(2024, 1, 1, tzinfo=UTC),
                "updatedAt": datetime(2024, 1, 1),
                "deletedAt": datetime(2024, 1, 1, 2, tzinfo=timezone(timedelta(hours=2))),
            }
        ]

        converted = convert_timestamps(rows, ["createdAt", "updatedAt", "deletedAt"])

        assert converted == [
            {"createdAt": NEW_YEAR_MS, "updatedAt": NEW_YEAR_MS, "deletedAt": NEW_YEAR_MS}
        ]

    def test_date_and_iso_string_values(self):
        rows = [{"createdAt": date(2024, 1, 1), "updatedAt": "2024-01-01T00:00:00+00:00"}]

        converted = convert_timestamps(rows, ["createdAt", "updatedAt"])

        assert converted[0] == {"createdAt": NEW_YEAR_MS, "updatedAt": NEW_YEAR_MS}

    def test_none_and_other_fields_untouched(self):
        rows = [{"createdAt": None, "name": "2024-01-01", "rank": 3}]

        assert convert_timestamps(rows, ["createdAt"]) == [
            {"createdAt": None, "name": "2024-01-01", "rank": 3}
        ]

    def test_input_rows_are_not_mutated(self):
        rows = [{"createdAt": datetime(2024, 1, 1, tzinfo=UTC), "id": 1}]

        converted = convert_timestamps(rows, ["createdAt"])

        assert converted == [{"createdAt": NEW_YEAR_MS, "id": 1}]
        assert rows == [{"createdAt": datetime(2024, 1, 1, tzinfo=UTC), "id": 1}]
        assert converted[0] is not rows[0]

    def test_numbers_pass_through(self):
        assert convert_timestamps([{"createdAt": 5}], ["createdAt"]) == [{"createdAt": 5}]

    def test_unparseable_value_is_logged_and_kept(self, caplog: pytest.LogCaptureFixture):
        rows = [{"createdAt": "yesterday"}]

        with caplog.at_level(logging.WARNING):
            converted = convert_timestamps(rows, ["createdAt"])

        assert converted == [{"createdAt": "yesterday"}]
        assert "Error parsing date" in caplog.text


# ──────────────────────────────────────────────────────────────
# Cursors and page info
# ──────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestCursorPosition:
    """Tests for cursor_position."""

    def test_forward(self):
        assert cursor_position(0, flip=False, offset=4, count=12, result_count=5) == 5
        assert cursor_position(4, flip=False, offset=4, count=12, result_count=5) == 9

    def test_backward(self):
        # 12 rows, last=3 before position 10: rows 7..9
        assert cursor_position(0, flip=True, offset=3, count=12, result_count=3) == 7
        assert cursor_position(2, flip=True, offset=3, count=12, result_count=3) == 9


@pytest.mark.unit
class TestBuildPageInfo:
    """Tests for build_page_info."""

    def test_empty_page(self):
        page_info = build_page_info([], has_more=False, flip=False)

        assert page_info.start_cursor is None
        assert page_info.end_cursor is None
        assert page_info.has_next_page is False
        assert page_info.has_previous_page is False

    def test_forward_reports_next_only(self):
        edges = [Edge(node={}, cursor="MQ=="), Edge(node={}, cursor="Mg==")]

        page_info = build_page_info(edges, has_more=True, flip=False)

        assert page_info.start_cursor == "MQ=="
        assert page_info.end_cursor == "Mg=="
        assert page_info.has_next_page is True
        assert page_info.has_previous_page is False

    def test_backward_reports_previous_only(self):
        edges = [Edge(node={}, cursor="Mw==")]

        page_info = build_page_info(edges, has_more=True, flip=True)

        assert page_info.has_next_page is False
        assert page_info.has_previous_page is True


# ──────────────────────────────────────────────────────────────
# Connection assembly
# ──────────────────────────────────────────────────────────────


@pytest.mark.unit
class TestBuildConnection:
    """Tests for build_connection."""

    def test_first_page_trims_peek_row(self):
        """11 rows for a page of 10: the extra row only sets hasNextPage."""
        result = QueryResult(rows=make_rows(11), count=12)

        connection = build_connection(result, 10, FIELD_MAP, flip=False, offset=0)

        assert _positions(connection) == list(range(1, 11))
        assert [node["id"] for node in connection.nodes] == list(range(1, 11))
        assert connection.total_count == 10
        assert connection.page_info.has_next_page is True
        assert connection.page_info.has_previous_page is False

    def test_last_forward_page(self):
        """A short page has no next page."""
        result = QueryResult(rows=make_rows(2, start=11), count=12)

        connection = build_connection(result, 5, FIELD_MAP, flip=False, offset=10)

        assert _positions(connection) == [11, 12]
        assert connection.page_info.has_next_page is False

    def test_backward_page_is_reversed_before_cursors(self):
        """Rows fetched in reverse come back in client order with forward positions."""
        # Positions 9, 8, 7, 6 in reversed query order; 6 is the peek row
        rows = list(reversed(make_rows(4, start=6)))
        result = QueryResult(rows=rows, count=12)

        connection = build_connection(result, 3, FIELD_MAP, flip=True, offset=3)

        assert [node["id"] for node in connection.nodes] == [7, 8, 9]
        assert _positions(connection) == [7, 8, 9]
        assert connection.page_info.has_previous_page is True
        assert connection.page_info.has_next_page is False

    def test_empty_result(self):
        connection = build_connection(QueryResult(), 10, FIELD_MAP, flip=False, offset=0)

        assert connection.edges == []
        assert connection.total_count == 0
        assert connection.page_info.start_cursor is None

    def test_without_field_map_rows_are_kept(self):
        rows = [{"id": 1, "display_name": "Bitcoin"}]

        connection = build_connection(QueryResult(rows=rows, count=1), 5, None, flip=False, offset=0)

        assert connection.nodes == [{"id": 1, "display_name": "Bitcoin"}]
        assert connection.nodes[0] is not rows[0]

    def test_timestamp_fields_are_converted(self):
        rows = [{"id": 1, "created_at": datetime(2024, 1, 1, tzinfo=UTC)}]

        connection = build_connection(
            QueryResult(rows=rows, count=1),
            5,
            {"id": "id", "createdAt": "created_at"},
            flip=False,
            offset=0,
            timestamp_fields=("createdAt",),
        )

        assert connection.nodes == [{"id": 1, "createdAt": NEW_YEAR_MS}]

    def test_serializes_in_camel_case(self):
        connection = build_connection(
            QueryResult(rows=make_rows(1), count=1), 5, FIELD_MAP, flip=False, offset=0
        )

        data = connection.model_dump(by_alias=True)

        assert data["totalCount"] == 1
        assert data["pageInfo"] == {
            "hasPreviousPage": False,
            "hasNextPage": False,
            "startCursor": "MQ==",
            "endCursor": "MQ==",
        }
        assert data["edges"] == [{"node": {"id": 1, "name": "Asset 1"}, "cursor": "MQ=="}]
