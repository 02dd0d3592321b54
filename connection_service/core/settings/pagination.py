"""Pagination settings for connection queries.

Default and maximum page sizes are explicit configuration passed into every
pagination call rather than module-level globals.

Environment variables use PAGINATION_ prefix.
Example: PAGINATION_DEFAULT_LIMIT=100, PAGINATION_MAX_LIMIT=2000
"""

from __future__ import annotations

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class PaginationSettings(BaseSettings):
    """Pagination configuration settings.

    Attributes:
        default_limit: Page size used when neither ``first`` nor ``last`` gives one.
        max_limit: Upper bound for ``first``/``last`` enforced by the validator.
        timestamp_fields: Client-facing fields normalized to epoch milliseconds.

    Example:
        settings = PaginationSettings(max_limit=500)
        connection = await create_connection(args, source, field_map, settings=settings)
    """

    default_limit: int = Field(
        default=100,
        ge=1,
        le=10000,
        description="Page size when neither first nor last is given",
    )
    max_limit: int = Field(
        default=2000,
        ge=1,
        le=100000,
        description="Maximum allowed value for first/last (hard limit)",
    )
    timestamp_fields: tuple[str, ...] = Field(
        default=("createdAt", "updatedAt", "deletedAt"),
        description="Fields converted to epoch milliseconds in connection nodes",
    )

    model_config = SettingsConfigDict(
        env_prefix="PAGINATION_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        frozen=True,
        extra="ignore",
    )

    @model_validator(mode="after")
    def _check_default_within_max(self) -> PaginationSettings:
        if self.default_limit > self.max_limit:
            msg = "default_limit must not exceed max_limit"
            raise ValueError(msg)
        return self
