"""Defaults for connection arguments coming straight from a resolver."""

from __future__ import annotations

import warnings
from typing import Any

from connection_service.core.pagination.schemas import SortDirection


def enrich_args(
    args: dict[str, Any],
    search_columns: list[str],
    default_direction: SortDirection | str,
    default_sort: str,
    custom_where: dict[str, Any] | None = None,
) -> dict[str, Any]:
    """Fill in sort defaults and expand a plain search string.

    .. deprecated::
        Build ``ConnectionArgs`` with explicit ``sort``, ``direction`` and
        ``search`` instead.

    Args:
        args: Raw resolver arguments, e.g. ``{"last": 5, "search": "bitcoin"}``
        search_columns: Client fields a search term applies to
        default_direction: Direction used when ``args`` has none
        default_sort: Sort field used when ``args`` has none
        custom_where: Extra filter, e.g. ``{"exchange_id": "binance"}``

    Returns:
        A new argument mapping ready for ``create_connection``
    """
    warnings.warn(
        "enrich_args is deprecated; build ConnectionArgs explicitly",
        DeprecationWarning,
        stacklevel=2,
    )
    search = args.get("search")
    return {
        **args,
        "direction": args.get("direction") or default_direction,
        "search": {"columns": search_columns, "search_term": search} if search else None,
        "sort": args.get("sort") or default_sort,
        "where": custom_where or {},
    }


__all__ = ["enrich_args"]
