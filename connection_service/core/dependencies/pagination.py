"""Connection pagination dependencies for FastAPI routes.

Usage:
    from connection_service.core.dependencies.pagination import ConnectionArgsDep

    @router.get("/assets")
    async def list_assets(args: ConnectionArgsDep) -> dict:
        connection = await create_connection(args, source, ASSET_FIELDS)
        return connection.model_dump(by_alias=True)

Bounds on ``first``/``last`` are checked by the connection validator, not by
``Query`` constraints.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Query

from connection_service.core.pagination.connection import parse_connection_args
from connection_service.core.pagination.schemas import ConnectionArgs


def get_connection_args(
    first: Annotated[int | None, Query(description="Number of items to return from the start")] = None,
    after: Annotated[str | None, Query(description="Cursor to start pagination from (exclusive)")] = None,
    last: Annotated[int | None, Query(description="Number of items to return from the end")] = None,
    before: Annotated[str | None, Query(description="Cursor to end pagination at (exclusive)")] = None,
    sort: Annotated[str | None, Query(description="Field to sort by")] = None,
    direction: Annotated[str | None, Query(description="ASC or DESC, case-insensitive")] = None,
    search: Annotated[str | None, Query(description="Prefix to search for")] = None,
    search_columns: Annotated[
        list[str] | None,
        Query(alias="searchColumns", description="Fields the search prefix applies to"),
    ] = None,
) -> ConnectionArgs:
    """Build connection arguments from query parameters.

    Returns:
        ConnectionArgs; ``search`` is only set when both a term and columns are given.

    Raises:
        ValidationException: If a parameter (e.g. ``direction``) has an invalid value
    """
    return parse_connection_args(
        {
            "first": first,
            "after": after,
            "last": last,
            "before": before,
            "sort": sort,
            "direction": direction,
            "search": {"search_term": search, "columns": search_columns}
            if search and search_columns
            else None,
        }
    )


ConnectionArgsDep = Annotated[ConnectionArgs, Depends(get_connection_args)]
