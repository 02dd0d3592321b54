"""Caller identity helpers."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

BEARER_PREFIX = "Bearer "


def get_user_id(request: Request) -> str | None:
    """Return the bearer token of the request as the caller's user id.

    Returns:
        The ``Authorization`` header without its ``Bearer `` prefix, or None
        when the header is missing or empty.
    """
    authorization = request.headers.get("Authorization")
    if not authorization:
        return None
    user_id = authorization.replace(BEARER_PREFIX, "", 1)
    return user_id or None


UserIdDep = Annotated[str | None, Depends(get_user_id)]
