"""Relay-style cursor pagination over an offset-capable row source.

``create_connection`` validates the arguments, resolves the store order and
offset, fetches ``page_size + 1`` rows and assembles the connection.

Example:
    from connection_service.core.database import ModelRowSource
    from connection_service.core.pagination import ConnectionArgs, create_connection

    ASSET_FIELDS = {"id": "id", "name": "display_name", "marketCapUsd": "market_cap"}

    connection = await create_connection(
        ConnectionArgs(sort="marketCapUsd", direction="DESC", first=10),
        ModelRowSource(session, Asset),
        ASSET_FIELDS,
    )
    next_page = await create_connection(
        ConnectionArgs(
            sort="marketCapUsd",
            direction="DESC",
            first=10,
            after=connection.page_info.end_cursor,
        ),
        ModelRowSource(session, Asset),
        ASSET_FIELDS,
    )
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from connection_service.core.exceptions import ValidationException
from connection_service.core.pagination.builder import Row, build_connection
from connection_service.core.pagination.offset import resolve_offset
from connection_service.core.pagination.ordering import resolve_order
from connection_service.core.pagination.schemas import Connection, ConnectionArgs
from connection_service.core.pagination.search import add_search_expression
from connection_service.core.pagination.validation import validate_connection_args
from connection_service.core.settings import PaginationSettings, get_pagination_settings
from connection_service.infra.logging import get_lazy_logger

if TYPE_CHECKING:
    from connection_service.core.database.sources import RowSource

logger = get_lazy_logger(__name__)


def parse_connection_args(data: Mapping[str, Any]) -> ConnectionArgs:
    """Validate a resolver or query-string mapping into ``ConnectionArgs``.

    Raises:
        ValidationException: "Invalid connection arguments", carrying the
            pydantic error list in ``extra["errors"]``
    """
    try:
        return ConnectionArgs.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationException(
            "Invalid connection arguments",
            extra={"errors": e.errors(include_url=False, include_context=False)},
        ) from e


async def create_connection(
    args: ConnectionArgs | Mapping[str, Any],
    source: RowSource,
    field_map: Mapping[str, str],
    *,
    settings: PaginationSettings | None = None,
) -> Connection[Row]:
    """Fetch one page of a connection.

    Args:
        args: Connection arguments (a mapping is validated into ``ConnectionArgs``)
        source: Row source to query, structured or raw
        field_map: Client field name to store column mapping
        settings: Pagination settings; defaults to the cached process settings

    Returns:
        Connection with edges, page info and the page's ``total_count``

    Raises:
        ValidationException: For malformed arguments or invalid cursors. No
            store query is issued in that case.
    """
    settings = settings or get_pagination_settings()
    if not isinstance(args, ConnectionArgs):
        args = parse_connection_args(args)

    validate_connection_args(args, field_map, settings)

    order, flip = resolve_order(args.direction, args.sort, field_map, backward=args.backward)
    where = args.where
    if args.search is not None:
        where = add_search_expression(where, args.search, field_map)

    offset = await resolve_offset(args.cursor, flip, where, source)
    page_size = args.page_size or settings.default_limit

    logger.debug(
        "Resolved page window order=%s flip=%s offset=%s limit=%s",
        lambda: order,
        flip,
        offset,
        page_size + 1,
    )

    result = await source.fetch_page(
        limit=page_size + 1,
        offset=offset,
        order=order,
        where=where,
    )
    return build_connection(
        result,
        page_size,
        field_map,
        flip=flip,
        offset=offset,
        timestamp_fields=settings.timestamp_fields,
    )


__all__ = ["create_connection", "parse_connection_args"]
