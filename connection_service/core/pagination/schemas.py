"""Pagination argument and response schemas (Relay connection pattern).

Responses serialize in camelCase so they can be returned as-is from a
GraphQL resolver or JSON endpoint:

    connection.model_dump(by_alias=True)
    # {"edges": [...], "pageInfo": {"hasNextPage": ...}, "totalCount": 10}
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any, Generic, NamedTuple, TypeVar

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

T = TypeVar("T")


class SortDirection(StrEnum):
    """Client-requested sort direction."""

    ASC = "ASC"
    DESC = "DESC"


class SearchSpec(BaseModel):
    """Prefix search over one or more client-facing fields.

    Attributes:
        search_term: Text every matching row must start with (case-insensitive)
        columns: Client-facing field names to search in
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    search_term: str
    columns: list[str] = Field(default_factory=list)


class ConnectionArgs(BaseModel):
    """Relay connection query arguments.

    ``sort`` and ``direction`` are optional here so that the validator,
    not pydantic, reports their absence.

    Attributes:
        sort: Client-facing field name to sort by
        direction: ASC or DESC
        first: Page length for forward pagination
        after: Cursor to page forward from (exclusive)
        last: Page length for backward pagination
        before: Cursor to page backward from (exclusive)
        search: Optional prefix search
        where: Opaque row-store filter
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    sort: str | None = None
    direction: SortDirection | None = None
    first: int | None = None
    last: int | None = None
    after: str | None = None
    before: str | None = None
    search: SearchSpec | None = None
    where: dict[str, Any] = Field(default_factory=dict)

    @field_validator("direction", mode="before")
    @classmethod
    def _normalize_direction(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.upper()
        return value

    @property
    def backward(self) -> bool:
        """Whether backward pagination (``last``/``before``) was requested."""
        return self.last is not None

    @property
    def page_size(self) -> int | None:
        """Requested page length for the active direction."""
        return self.last if self.backward else self.first

    @property
    def cursor(self) -> str | None:
        """Cursor relevant to the active direction."""
        return self.before if self.backward else self.after


class OrderResolution(NamedTuple):
    """Store-level ordering for a connection query.

    Attributes:
        order: ``[(column, "ASC NULLS LAST")]`` style pairs handed to the row source
        flip: True when the store is queried in reverse of the client order
    """

    order: list[tuple[str, str]]
    flip: bool


class QueryResult(BaseModel):
    """Rows returned by a row source plus the total matching its filter.

    ``count`` ignores limit and offset.
    """

    rows: list[dict[str, Any]] = Field(default_factory=list)
    count: int = 0


class PageInfo(BaseModel):
    """Pagination metadata following GraphQL Relay specification.

    Attributes:
        has_previous_page: Whether there are items before the current page
        has_next_page: Whether there are items after the current page
        start_cursor: Cursor of the first item in this page
        end_cursor: Cursor of the last item in this page
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    has_previous_page: bool = Field(
        description="Whether previous items exist"
    )
    has_next_page: bool = Field(
        description="Whether more items exist"
    )
    start_cursor: str | None = Field(
        default=None,
        description="Cursor of the first item",
    )
    end_cursor: str | None = Field(
        default=None,
        description="Cursor of the last item",
    )


class Edge(BaseModel, Generic[T]):
    """Edge wrapper for paginated items (Relay pattern).

    Attributes:
        node: The actual data item
        cursor: Cursor for this specific item
    """

    node: T = Field(description="The data item")
    cursor: str = Field(description="Cursor for this item")


class Connection(BaseModel, Generic[T]):
    """GraphQL Connection pattern for cursor pagination.

    Client navigation:
        # First page
        first=10

        # Next page (using end_cursor from previous response)
        first=10, after=<page_info.end_cursor>

        # Previous page (using start_cursor)
        last=10, before=<page_info.start_cursor>

    Attributes:
        edges: List of Edge objects containing nodes and cursors
        page_info: Navigation metadata
        total_count: Number of edges in this page, not the size of the full
            result set
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    edges: list[Edge[T]] = Field(
        default_factory=list,
        description="List of edges (items with cursors)",
    )
    page_info: PageInfo = Field(
        description="Pagination metadata",
    )
    total_count: int = Field(
        default=0,
        description="Number of items returned in this page",
    )

    @property
    def nodes(self) -> list[T]:
        """Get just the nodes without edge wrappers."""
        return [edge.node for edge in self.edges]


__all__ = [
    "Connection",
    "ConnectionArgs",
    "Edge",
    "OrderResolution",
    "PageInfo",
    "QueryResult",
    "SearchSpec",
    "SortDirection",
]
