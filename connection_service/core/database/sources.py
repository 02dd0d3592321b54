"""Row sources backing connection queries.

A row source runs one page query (``LIMIT``/``OFFSET``/``ORDER BY`` plus the
filter) and reports how many rows match the filter regardless of the page
window. Two shapes are provided:

- ``ModelRowSource`` queries a SQLAlchemy model or table and translates the
  filter mapping with ``build_where``.
- ``RawQuerySource`` layers pagination over a hand-written SQL fragment that
  already embeds its own filter and selects a ``full_count`` window column,
  e.g. ``SELECT *, count(*) OVER() AS full_count FROM ... WHERE base = ?``.

Example:
    source = ModelRowSource(session, Asset)
    result = await source.fetch_page(
        limit=11, offset=0, order=[("market_cap", "DESC NULLS LAST")], where={}
    )
    print(result.count, len(result.rows))
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping, Sequence
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

from sqlalchemy import func, select, text

from connection_service.core.database.filters import build_where
from connection_service.core.pagination.schemas import QueryResult

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, FromClause
    from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

FULL_COUNT = "full_count"
_WINDOW_COUNT = "__connection_full_count"
_PLACEHOLDER_TOKENS = re.compile(
    r"'(?:[^']|'')*'|\"(?:[^\"]|\"\")*\"|--[^\n]*|/\*.*?\*/|\?",
    re.DOTALL,
)


@runtime_checkable
class RowSource(Protocol):
    """Protocol for stores a connection can be paginated over."""

    async def fetch_page(
        self,
        *,
        limit: int,
        offset: int,
        order: Sequence[tuple[str, str]],
        where: Mapping[str, Any],
    ) -> QueryResult:
        """Fetch one window of rows plus the total matching ``where``."""
        ...

    async def count(self, where: Mapping[str, Any]) -> int:
        """Count rows matching ``where``."""
        ...


class RawQueryExecutor(Protocol):
    """Executes a SQL string with positional ``?`` replacements."""

    async def query(self, sql: str, replacements: Sequence[Any]) -> Sequence[Mapping[str, Any]]:
        ...


def _order_clause(table: FromClause, column_name: str, direction: str) -> ColumnElement[Any]:
    column = table.c[column_name]
    tokens = direction.upper().split()
    clause = column.desc() if tokens and tokens[0] == "DESC" else column.asc()
    if "NULLS" in tokens:
        clause = clause.nulls_first() if "FIRST" in tokens else clause.nulls_last()
    return clause


class ModelRowSource:
    """Row source over a SQLAlchemy model or table.

    The page and its total count come back from a single statement using a
    ``count(*) OVER()`` window column, so a page query is one round trip. An
    empty page therefore reports a count of 0.

    Attributes:
        session: Async session queries are executed with
        table: Table the filter and order columns refer to
    """

    def __init__(self, session: AsyncSession, model: Any) -> None:
        """Initialize the row source.

        Args:
            session: Async database session
            model: Declarative model class or ``Table``
        """
        self.session = session
        self.table: FromClause = getattr(model, "__table__", model)

    async def fetch_page(
        self,
        *,
        limit: int,
        offset: int,
        order: Sequence[tuple[str, str]],
        where: Mapping[str, Any],
    ) -> QueryResult:
        stmt = (
            select(self.table, func.count().over().label(_WINDOW_COUNT))
            .where(build_where(self.table, where))
            .order_by(*(_order_clause(self.table, column, direction) for column, direction in order))
            .limit(limit)
            .offset(offset)
        )
        result = await self.session.execute(stmt)

        rows: list[dict[str, Any]] = []
        count = 0
        for mapping in result.mappings().all():
            row = dict(mapping)
            count = row.pop(_WINDOW_COUNT)
            rows.append(row)

        logger.debug(
            "Fetched page",
            extra={"table": getattr(self.table, "name", None), "limit": limit, "offset": offset, "rows": len(rows)},
        )
        return QueryResult(rows=rows, count=count)

    async def count(self, where: Mapping[str, Any]) -> int:
        stmt = select(func.count()).select_from(self.table).where(build_where(self.table, where))
        return (await self.session.execute(stmt)).scalar_one()


def _read_full_count(rows: Sequence[Mapping[str, Any]]) -> int:
    if not rows:
        return 0
    return int(rows[0][FULL_COUNT])


class RawQuerySource:
    """Row source over a parameterized SQL fragment.

    The fragment must select a ``full_count`` column holding the number of
    rows its own filter matches. This source appends
    ``ORDER BY <col> <dir> LIMIT ? OFFSET ?`` and the two matching
    replacements. Its filter lives in the fragment, so ``where`` is ignored.

    Example:
        source = RawQuerySource(
            SQLAlchemyQueryExecutor(session),
            "SELECT *, count(*) OVER() AS full_count FROM markets WHERE base = ?",
            ["bitcoin"],
        )
    """

    def __init__(
        self,
        executor: RawQueryExecutor,
        query_string: str,
        replacements: Sequence[Any] = (),
    ) -> None:
        self.executor = executor
        self.query_string = query_string
        self.replacements = list(replacements)

    async def fetch_page(
        self,
        *,
        limit: int,
        offset: int,
        order: Sequence[tuple[str, str]],
        where: Mapping[str, Any],
    ) -> QueryResult:
        order_sql = ", ".join(f"{column} {direction}" for column, direction in order)
        sql = f"{self.query_string} ORDER BY {order_sql} LIMIT ? OFFSET ?"
        rows = await self.executor.query(sql, [*self.replacements, limit, offset])
        return QueryResult(rows=[dict(row) for row in rows], count=_read_full_count(rows))

    async def count(self, where: Mapping[str, Any]) -> int:
        rows = await self.executor.query(self.query_string, list(self.replacements))
        return _read_full_count(rows)


def bind_positional(sql: str, replacements: Sequence[Any]) -> tuple[str, dict[str, Any]]:
    """Rewrite ``?`` placeholders as named binds for ``sqlalchemy.text``.

    Question marks inside single-quoted literals, double-quoted identifiers,
    ``--`` line comments and ``/* */`` block comments are left alone.

    Raises:
        ValueError: If the number of placeholders and replacements differ
    """
    index = 0

    def _bind(match: re.Match[str]) -> str:
        nonlocal index
        if match.group() != "?":
            return match.group()
        index += 1
        return f":p{index - 1}"

    statement = _PLACEHOLDER_TOKENS.sub(_bind, sql)
    if index != len(replacements):
        msg = f"Query has {index} placeholder(s) but {len(replacements)} replacement(s)"
        raise ValueError(msg)
    return statement, {f"p{i}": value for i, value in enumerate(replacements)}


class SQLAlchemyQueryExecutor:
    """Run ``?``-style SQL fragments on an async SQLAlchemy session."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def query(self, sql: str, replacements: Sequence[Any]) -> list[dict[str, Any]]:
        statement, params = bind_positional(sql, replacements)
        result = await self.session.execute(text(statement), params)
        return [dict(row) for row in result.mappings().all()]


__all__ = [
    "FULL_COUNT",
    "ModelRowSource",
    "RawQueryExecutor",
    "RawQuerySource",
    "RowSource",
    "SQLAlchemyQueryExecutor",
    "bind_positional",
]
