"""Assemble a Relay connection from a row-source result.

The row source returns up to ``page_size + 1`` rows in query order. The
extra row only proves that another page exists in the queried direction and
is never returned. For backward pages the rows arrive reversed and are put
back into client order before cursors are assigned, so a row gets the same
cursor whichever direction it was fetched in.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping, Sequence
from datetime import UTC, date, datetime, time
from typing import Any

from connection_service.core.pagination.cursor import CursorCodec
from connection_service.core.pagination.schemas import (
    Connection,
    Edge,
    PageInfo,
    QueryResult,
)

logger = logging.getLogger(__name__)

Row = dict[str, Any]


def map_fields(rows: Iterable[Mapping[str, Any]], field_map: Mapping[str, str]) -> list[Row]:
    """Rename store columns to client field names.

    Columns that are not a value of ``field_map`` are dropped; mapped columns
    missing from a row come back as ``None``.

    Example:
        map_fields([{"display_name": "Bitcoin", "internal": 1}], {"name": "display_name"})
        # [{"name": "Bitcoin"}]
    """
    return [{field: row.get(column) for field, column in field_map.items()} for row in rows]


def _to_epoch_millis(value: Any) -> Any:
    if isinstance(value, datetime):
        moment = value
    elif isinstance(value, date):
        moment = datetime.combine(value, time.min)
    elif isinstance(value, str):
        moment = datetime.fromisoformat(value)
    else:
        return value

    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=UTC)
    return int(moment.timestamp() * 1000)


def convert_timestamps(rows: Iterable[Mapping[str, Any]], fields: Sequence[str]) -> list[Row]:
    """Return copies of ``rows`` with timestamp fields in epoch milliseconds.

    ``datetime``/``date`` values and ISO-8601 strings are converted; naive
    values are taken as UTC. A value that cannot be parsed is logged and left
    untouched.
    """
    converted: list[Row] = []
    for original in rows:
        row = dict(original)
        for field in fields:
            if row.get(field) is None:
                continue
            try:
                row[field] = _to_epoch_millis(row[field])
            except (ValueError, OverflowError, OSError):
                logger.warning(
                    "Error parsing date",
                    extra={"field": field, "value": repr(row[field])},
                )
        converted.append(row)
    return converted


def cursor_position(index: int, *, flip: bool, offset: int, count: int, result_count: int) -> int:
    """Forward-order 1-based position of the row at ``index`` in a page.

    Args:
        index: 0-based index of the row within the client-ordered page
        flip: Whether the page was fetched in reversed order
        offset: Offset the page was fetched at
        count: Total rows matching the filter
        result_count: Rows in the page after trimming the peek row
    """
    if flip:
        return count - offset - result_count + index + 1
    return offset + index + 1


def build_page_info(edges: Sequence[Edge[Any]], *, has_more: bool, flip: bool) -> PageInfo:
    """Build the Relay ``pageInfo`` for a page.

    One peek row can only prove that more rows exist in the direction that
    was queried, so the flag for the other direction is always ``False``.
    """
    return PageInfo(
        start_cursor=edges[0].cursor if edges else None,
        end_cursor=edges[-1].cursor if edges else None,
        has_next_page=False if flip else has_more,
        has_previous_page=has_more if flip else False,
    )


def build_connection(
    result: QueryResult,
    page_size: int,
    field_map: Mapping[str, str] | None,
    *,
    flip: bool,
    offset: int,
    timestamp_fields: Sequence[str] = (),
) -> Connection[Row]:
    """Turn a row-source result into a connection.

    Args:
        result: Rows (up to ``page_size + 1``) and the total matching count
        page_size: Requested page length
        field_map: Client field name to store column mapping, or None to keep rows as-is
        flip: Whether rows were fetched in reversed order
        offset: Offset the rows were fetched at
        timestamp_fields: Client fields to normalize to epoch milliseconds

    Returns:
        Connection whose ``total_count`` is the number of edges in the page
    """
    has_more = len(result.rows) == page_size + 1
    rows = result.rows[:-1] if has_more else list(result.rows)
    if flip:
        rows.reverse()
    if field_map is not None:
        rows = map_fields(rows, field_map)
    rows = convert_timestamps(rows, timestamp_fields)

    edges = [
        Edge[Row](
            cursor=CursorCodec.encode(
                cursor_position(
                    index,
                    flip=flip,
                    offset=offset,
                    count=result.count,
                    result_count=len(rows),
                )
            ),
            node=row,
        )
        for index, row in enumerate(rows)
    ]

    return Connection[Row](
        edges=edges,
        page_info=build_page_info(edges, has_more=has_more, flip=flip),
        total_count=len(rows),
    )


__all__ = [
    "build_connection",
    "build_page_info",
    "convert_timestamps",
    "cursor_position",
    "map_fields",
]
