"""Database access for connection queries.

Row sources execute paged queries against SQLAlchemy models, tables or raw
SQL fragments; ``build_where`` translates filter mappings into clauses.
"""

from connection_service.core.database.filters import build_where
from connection_service.core.database.repository import delete_and_return
from connection_service.core.database.sources import (
    FULL_COUNT,
    ModelRowSource,
    RawQueryExecutor,
    RawQuerySource,
    RowSource,
    SQLAlchemyQueryExecutor,
    bind_positional,
)

__all__ = [
    "FULL_COUNT",
    "ModelRowSource",
    "RawQueryExecutor",
    "RawQuerySource",
    "RowSource",
    "SQLAlchemyQueryExecutor",
    "bind_positional",
    "build_where",
    "delete_and_return",
]
