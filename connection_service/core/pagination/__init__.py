"""Relay-style cursor pagination over offset-capable row sources.

A cursor is the base64 encoded 1-based position of a row in the full ordered
result set. Pages are fetched with plain LIMIT/OFFSET/ORDER BY; backward pages
are fetched in reversed order and flipped back before cursors are assigned.

    connection = await create_connection(
        ConnectionArgs(sort="name", direction="ASC", last=5, before=cursor),
        source,
        {"name": "display_name"},
    )
    connection.model_dump(by_alias=True)
"""

from connection_service.core.pagination.args import enrich_args
from connection_service.core.pagination.builder import (
    build_connection,
    build_page_info,
    convert_timestamps,
    map_fields,
)
from connection_service.core.pagination.connection import create_connection, parse_connection_args
from connection_service.core.pagination.cursor import CursorCodec
from connection_service.core.pagination.offset import resolve_offset
from connection_service.core.pagination.ordering import flip_sort_direction, resolve_order
from connection_service.core.pagination.schemas import (
    Connection,
    ConnectionArgs,
    Edge,
    OrderResolution,
    PageInfo,
    QueryResult,
    SearchSpec,
    SortDirection,
)
from connection_service.core.pagination.search import add_search_expression
from connection_service.core.pagination.validation import validate_connection_args

__all__ = [
    "Connection",
    "ConnectionArgs",
    "CursorCodec",
    "Edge",
    "OrderResolution",
    "PageInfo",
    "QueryResult",
    "SearchSpec",
    "SortDirection",
    "add_search_expression",
    "build_connection",
    "build_page_info",
    "convert_timestamps",
    "create_connection",
    "enrich_args",
    "flip_sort_direction",
    "map_fields",
    "parse_connection_args",
    "resolve_offset",
    "resolve_order",
    "validate_connection_args",
]
