"""Prefix search injection into the row-store filter."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from collections.abc import Mapping

    from connection_service.core.pagination.schemas import SearchSpec

OR_KEY = "$or"
ILIKE_KEY = "$ilike"


def add_search_expression(
    where: Mapping[str, Any],
    search: SearchSpec,
    field_map: Mapping[str, str],
) -> dict[str, Any]:
    """Add a case-insensitive starts-with disjunction to a filter.

    Every existing key is kept except ``$or``, which is replaced by the
    search disjunction.

    Example:
        add_search_expression(
            {"rank": 1},
            SearchSpec(search_term="bitcoi", columns=["symbol", "name"]),
            {"symbol": "symbol", "name": "display_name"},
        )
        # {"rank": 1, "$or": [{"symbol": {"$ilike": "bitcoi%"}},
        #                     {"display_name": {"$ilike": "bitcoi%"}}]}
    """
    return {
        **where,
        OR_KEY: [
            {field_map[column]: {ILIKE_KEY: f"{search.search_term}%"}}
            for column in search.columns
        ],
    }


__all__ = ["ILIKE_KEY", "OR_KEY", "add_search_expression"]
