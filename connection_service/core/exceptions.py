"""Custom exception classes for the application.

Errors are tagged by type rather than by message text. Callers and the
error boundary decide what to surface by checking the exception class:
``ValidationException`` reaches the client verbatim, everything else is
replaced with an ``InternalServerException``.
"""

from __future__ import annotations

import functools
import logging
from typing import TYPE_CHECKING, Any, NoReturn, ParamSpec, TypeVar

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

logger = logging.getLogger(__name__)

P = ParamSpec("P")
R = TypeVar("R")

UNEXPECTED_ERROR_DETAIL = "An unexpected error has occurred. Please try back again later."


class AppException(Exception):
    """Base application exception.

    All custom exceptions should inherit from this class.
    Follows RFC 7807 Problem Details for HTTP APIs.

    Attributes:
        status_code: HTTP status code for the error.
        detail: Human-readable error message.
        type: Error type identifier (used in RFC 7807 problem details).
        title: Short, human-readable summary of the problem type.
        instance: URI reference that identifies the specific occurrence of the problem.
        extra: Additional context-specific information about the error.

    Example:
            raise AppException(
            status_code=422,
            detail="Invalid cursor",
            type="validation-error",
            extra={"argument": "after"}
        )
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        type: str = "about:blank",
        title: str | None = None,
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize application exception.

        Args:
            status_code: HTTP status code.
            detail: Human-readable error message.
            type: Error type identifier.
            title: Short summary of the problem type.
            instance: URI reference identifying this specific occurrence.
            extra: Additional context about the error.
        """
        self.status_code = status_code
        self.detail = detail
        self.type = type
        self.title = title or self._default_title(status_code)
        self.instance = instance
        self.extra = extra or {}
        super().__init__(detail)

    @staticmethod
    def _default_title(status_code: int) -> str:
        """Get default title for HTTP status code."""
        titles = {
            400: "Bad Request",
            422: "Unprocessable Entity",
            500: "Internal Server Error",
        }
        return titles.get(status_code, "Error")


class ValidationException(AppException):
    """Exception raised for caller misuse or stale/tampered input.

    Covers missing or conflicting pagination arguments, out of range page
    sizes and cursors that cannot be decoded or resolved.

    Example:
            raise ValidationException(
            detail="Invalid cursor",
            extra={"cursor": "Zm9v"}
        )
    """

    def __init__(
        self,
        detail: str,
        type: str = "validation-error",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        """Initialize validation exception.

        Args:
            detail: Human-readable error message.
            type: Error type identifier.
            instance: URI reference identifying this specific occurrence.
            extra: Additional context about the error.
        """
        super().__init__(
            status_code=422,
            detail=detail,
            type=type,
            title="Validation Error",
            instance=instance,
            extra=extra,
        )


class InternalServerException(AppException):
    """Exception raised for internal server errors.

    The detail is intentionally generic so that row-store failures and
    other internals never leak to the client.
    """

    def __init__(
        self,
        detail: str = UNEXPECTED_ERROR_DETAIL,
        type: str = "internal-error",
        instance: str | None = None,
        extra: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            status_code=500,
            detail=detail,
            type=type,
            title="Internal Server Error",
            instance=instance,
            extra=extra,
        )


def handle_error(exc: BaseException) -> NoReturn:
    """Classify an error at the boundary and re-raise it.

    Validation errors pass through unchanged. Anything else is logged with
    its traceback and replaced with a generic ``InternalServerException``.

    Args:
        exc: The exception caught by the caller.

    Raises:
        ValidationException: When ``exc`` is a validation error.
        InternalServerException: For every other exception.
    """
    if isinstance(exc, ValidationException):
        raise exc

    logger.error(
        "Unexpected error while resolving request",
        extra={
            "exception_type": type(exc).__name__,
            "exception_message": str(exc),
        },
        exc_info=exc,
    )
    raise InternalServerException() from exc


def translate_errors(
    func: Callable[P, Awaitable[R]],
) -> Callable[P, Awaitable[R]]:
    """Decorate an async resolver so its failures go through ``handle_error``.

    Example:
            @translate_errors
        async def assets(args: ConnectionArgs) -> Connection:
            return await create_connection(args, source, ASSET_FIELDS)
    """

    @functools.wraps(func)
    async def wrapper(*args: P.args, **kwargs: P.kwargs) -> R:
        try:
            return await func(*args, **kwargs)
        except Exception as exc:
            handle_error(exc)

    return wrapper


ValidationError = ValidationException


__all__ = [
    "UNEXPECTED_ERROR_DETAIL",
    "AppException",
    "InternalServerException",
    "ValidationError",
    "ValidationException",
    "handle_error",
    "translate_errors",
]
