"""Translate a cursor into a row offset.

Forward pages start right after the cursor's position. Backward pages are
queried in reverse order, so the cursor's forward position is converted to an
offset from the tail of the filtered set, which needs a count of the rows
matching the filter.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from connection_service.core.exceptions import ValidationException
from connection_service.core.pagination.cursor import INVALID_CURSOR, CursorCodec

if TYPE_CHECKING:
    from connection_service.core.database.sources import RowSource

logger = logging.getLogger(__name__)


async def resolve_offset(
    cursor: str | None,
    flip: bool,
    where: dict[str, Any],
    source: RowSource,
) -> int:
    """Resolve the offset for a connection query.

    Args:
        cursor: ``after`` for forward paging, ``before`` for backward paging
        flip: Whether the query runs in reversed order
        where: Filter the count query must honor
        source: Row source providing ``count``

    Returns:
        Non-negative offset into the (possibly reversed) ordered result set

    Raises:
        ValidationException: If the cursor cannot be decoded, or points past
            the tail of the filtered set
    """
    if cursor is None:
        return 0

    position = CursorCodec.decode(cursor)
    if not flip:
        return position

    count = await source.count(where)
    offset = count - position + 1
    if offset < 0:
        logger.info(
            "Cursor points past the end of the result set",
            extra={"position": position, "count": count},
        )
        raise ValidationException(INVALID_CURSOR, extra={"cursor": cursor})
    return offset


__all__ = ["resolve_offset"]
