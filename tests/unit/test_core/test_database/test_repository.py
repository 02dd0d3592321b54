"""Tests for repository helpers."""
from __future__ import annotations

import pytest
from sqlalchemy.ext.asyncio import AsyncSession

from connection_service.core.database.repository import delete_and_return
from connection_service.core.database.sources import ModelRowSource
from connection_service.core.exceptions import ValidationException
from tests.fixtures.assets import Asset


@pytest.mark.integration
class TestDeleteAndReturn:
    """Tests for delete_and_return."""

    async def test_returns_deleted_row(self, seeded_session: AsyncSession):
        deleted = await delete_and_return(seeded_session, Asset, {"symbol": "ETH"})

        assert deleted["id"] == 2
        assert deleted["display_name"] == "Ethereum"
        assert await ModelRowSource(seeded_session, Asset).count({"symbol": "ETH"}) == 0
        assert await ModelRowSource(seeded_session, Asset).count({}) == 7

    async def test_deletes_every_match(self, seeded_session: AsyncSession):
        deleted = await delete_and_return(
            seeded_session, Asset.__table__, {"symbol": {"$ilike": "b%"}}
        )

        assert deleted["symbol"] in {"BTC", "BNB", "BCH"}
        assert await ModelRowSource(seeded_session, Asset).count({}) == 5

    async def test_no_match_fails(self, seeded_session: AsyncSession):
        with pytest.raises(ValidationException, match="Delete failed!") as exc_info:
            await delete_and_return(seeded_session, Asset, {"symbol": "DOGE"})

        assert exc_info.value.extra == {"where": {"symbol": "DOGE"}}
