"""Store-level ordering for connection queries.

Backward pagination ("the last N rows before X") is fetched as "the first N
rows after X in reversed order", so the sort direction handed to the row
source is inverted and the builder later reverses the rows back.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from connection_service.core.pagination.schemas import OrderResolution, SortDirection

if TYPE_CHECKING:
    from collections.abc import Mapping

ASC_NULLS_LAST = f"{SortDirection.ASC} NULLS LAST"
DESC_NULLS_LAST = f"{SortDirection.DESC} NULLS LAST"


def flip_sort_direction(sort_direction: str) -> str:
    """Reverse an ``ASC NULLS LAST``/``DESC NULLS LAST`` direction."""
    return DESC_NULLS_LAST if sort_direction == ASC_NULLS_LAST else ASC_NULLS_LAST


def resolve_order(
    direction: SortDirection | str,
    sort: str,
    field_map: Mapping[str, str],
    *,
    backward: bool,
) -> OrderResolution:
    """Derive the order clause and flip flag for a connection query.

    Args:
        direction: Client-requested direction
        sort: Client-facing field name to sort by
        field_map: Client field name to store column mapping
        backward: Whether ``last`` was requested

    Returns:
        OrderResolution with a single ``(column, direction)`` pair

    Example:
        resolve_order("DESC", "marketCapUsd", {"marketCapUsd": "market_cap"}, backward=True)
        # OrderResolution(order=[("market_cap", "ASC NULLS LAST")], flip=True)
    """
    sql_direction = f"{SortDirection(direction)} NULLS LAST"
    column = field_map[sort]

    if backward:
        return OrderResolution(order=[(column, flip_sort_direction(sql_direction))], flip=True)
    return OrderResolution(order=[(column, sql_direction)], flip=False)


__all__ = ["ASC_NULLS_LAST", "DESC_NULLS_LAST", "flip_sort_direction", "resolve_order"]
