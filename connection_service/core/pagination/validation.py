"""Argument validation for connection queries.

Runs before any row-store round trip. The order of the checks only decides
which message a caller sees first when several arguments are wrong.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from connection_service.core.exceptions import ValidationException

if TYPE_CHECKING:
    from connection_service.core.pagination.schemas import ConnectionArgs
    from connection_service.core.settings import PaginationSettings


def validate_connection_args(
    args: ConnectionArgs,
    field_map: Any,
    settings: PaginationSettings,
) -> None:
    """Reject malformed pagination arguments.

    Args:
        args: Parsed connection arguments
        field_map: Client field name to store column mapping
        settings: Pagination settings providing ``max_limit``

    Raises:
        ValidationException: With a human-readable reason for the first failed check
    """
    if args.first is None and args.last is None:
        raise ValidationException(
            "Arguments `first` or `last` are required to properly paginate the connection."
        )
    if args.first is not None and args.last is not None:
        raise ValidationException("Arguments first and last must not be together")
    if args.after is not None and args.before is not None:
        raise ValidationException("Arguments after and before must not be together")
    if not args.sort or args.direction is None:
        raise ValidationException("Arguments sort and direction are required")
    if not isinstance(field_map, Mapping):
        raise ValidationException("Argument fieldMap is required")

    page_size = args.page_size
    if page_size is not None and page_size > settings.max_limit:
        raise ValidationException(
            f"Max limit for first and last is {settings.max_limit}",
            extra={"max_limit": settings.max_limit},
        )
    if page_size is not None and page_size < 1:
        raise ValidationException("First and last must be greater than 0")

    if args.sort not in field_map:
        raise ValidationException(
            f"Unknown sort field: {args.sort}",
            extra={"sort": args.sort},
        )
    if args.search is not None:
        unknown = [column for column in args.search.columns if column not in field_map]
        if unknown:
            raise ValidationException(
                f"Unknown search field(s): {', '.join(unknown)}",
                extra={"columns": unknown},
            )


__all__ = ["validate_connection_args"]
