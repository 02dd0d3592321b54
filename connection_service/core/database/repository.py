"""Repository helpers that work on filter mappings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from sqlalchemy import delete, select

from connection_service.core.database.filters import build_where
from connection_service.core.exceptions import ValidationException

if TYPE_CHECKING:
    from collections.abc import Mapping

    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


async def delete_and_return(
    session: AsyncSession,
    model: Any,
    where: Mapping[str, Any],
) -> dict[str, Any]:
    """Delete the rows matching a filter and return the first of them.

    The row is read before the delete is issued. The caller owns the
    transaction and commits it.

    Args:
        session: Database session
        model: Declarative model class or ``Table``
        where: Filter mapping understood by ``build_where``

    Returns:
        The deleted row as a column-name keyed dict

    Raises:
        ValidationException: If nothing matched the filter
    """
    table = getattr(model, "__table__", model)
    clause = build_where(table, where)

    found = (await session.execute(select(table).where(clause).limit(1))).mappings().first()
    result = await session.execute(delete(table).where(clause))

    if not result.rowcount or found is None:
        logger.warning("Delete matched no rows", extra={"where": dict(where)})
        raise ValidationException("Delete failed!", extra={"where": dict(where)})
    return dict(found)
