"""Translate filter mappings into SQLAlchemy WHERE clauses.

Connection arguments carry their filter as a plain mapping so that it can be
merged with search expressions and passed across layers without touching
SQLAlchemy. ``build_where`` turns that mapping into a clause for a table.

Usage:
    from sqlalchemy import select
    from connection_service.core.database.filters import build_where

    where = {"rank": 1, "$or": [{"symbol": {"$ilike": "bit%"}}]}
    stmt = select(assets).where(build_where(assets, where))

Supported keys:
    column: value          equality (None -> IS NULL)
    column: {"$op": value}  $eq $ne $gt $gte $lt $lte $in $like $ilike
    "$or" / "$and": [mapping, ...]
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from sqlalchemy import and_, false, or_, true

from connection_service.core.exceptions import ValidationException

if TYPE_CHECKING:
    from sqlalchemy import ColumnElement, FromClause

_OPERATORS = {
    "$eq": lambda column, value: column.is_(None) if value is None else column == value,
    "$ne": lambda column, value: column.is_not(None) if value is None else column != value,
    "$gt": lambda column, value: column > value,
    "$gte": lambda column, value: column >= value,
    "$lt": lambda column, value: column < value,
    "$lte": lambda column, value: column <= value,
    "$in": lambda column, value: column.in_(list(value)),
    "$like": lambda column, value: column.like(value),
    "$ilike": lambda column, value: column.ilike(value),
}


def _column_condition(table: FromClause, key: str, value: Any) -> ColumnElement[bool]:
    if key not in table.c:
        raise ValidationException(f"Unknown filter column: {key}", extra={"column": key})
    column = table.c[key]

    if not isinstance(value, Mapping):
        return _OPERATORS["$eq"](column, value)

    conditions = []
    for operator, operand in value.items():
        if operator not in _OPERATORS:
            raise ValidationException(
                f"Unsupported filter operator: {operator}",
                extra={"column": key, "operator": operator},
            )
        conditions.append(_OPERATORS[operator](column, operand))
    return and_(true(), *conditions)


def build_where(table: FromClause, where: Mapping[str, Any] | None) -> ColumnElement[bool]:
    """Build a WHERE clause from a filter mapping.

    Args:
        table: Table (or other selectable) whose columns the keys name
        where: Filter mapping; empty or None matches every row

    Returns:
        SQLAlchemy boolean clause

    Raises:
        ValidationException: For unknown columns or operators
    """
    conditions: list[ColumnElement[bool]] = []
    for key, value in (where or {}).items():
        if key == "$or":
            # An empty disjunction matches nothing
            branches = [build_where(table, branch) for branch in value]
            conditions.append(or_(false(), *branches))
        elif key == "$and":
            conditions.append(and_(true(), *(build_where(table, branch) for branch in value)))
        else:
            conditions.append(_column_condition(table, key, value))
    return and_(true(), *conditions)


__all__ = ["build_where"]
