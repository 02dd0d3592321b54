"""FastAPI dependencies for route handlers.

Usage:
    from connection_service.core.dependencies import ConnectionArgsDep, UserIdDep

    @router.get("/assets")
    async def list_assets(args: ConnectionArgsDep, user_id: UserIdDep):
        ...
"""

from connection_service.core.dependencies.auth import UserIdDep, get_user_id
from connection_service.core.dependencies.pagination import (
    ConnectionArgsDep,
    get_connection_args,
)

__all__ = [
    "ConnectionArgsDep",
    "UserIdDep",
    "get_connection_args",
    "get_user_id",
]
