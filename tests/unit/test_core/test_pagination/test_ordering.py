"""Unit tests for store-level ordering."""
from __future__ import annotations

import pytest

from connection_service.core.pagination.ordering import (
    ASC_NULLS_LAST,
    DESC_NULLS_LAST,
    flip_sort_direction,
    resolve_order,
)
from connection_service.core.pagination.schemas import SortDirection

FIELD_MAP = {"marketCapUsd": "market_cap", "name": "display_name"}


@pytest.mark.unit
class TestFlipSortDirection:
    """Tests for flip_sort_direction."""

    def test_flips_both_ways(self):
        assert flip_sort_direction(ASC_NULLS_LAST) == DESC_NULLS_LAST
        assert flip_sort_direction(DESC_NULLS_LAST) == ASC_NULLS_LAST

    def test_constants(self):
        assert ASC_NULLS_LAST == "ASC NULLS LAST"
        assert DESC_NULLS_LAST == "DESC NULLS LAST"


@pytest.mark.unit
class TestResolveOrder:
    """Tests for resolve_order."""

    @pytest.mark.parametrize(
        ("direction", "expected"),
        [(SortDirection.ASC, ASC_NULLS_LAST), ("DESC", DESC_NULLS_LAST)],
    )
    def test_forward_keeps_direction(self, direction: str, expected: str):
        """Forward pages query the store in the client's order."""
        resolution = resolve_order(direction, "marketCapUsd", FIELD_MAP, backward=False)

        assert resolution.order == [("market_cap", expected)]
        assert resolution.flip is False

    @pytest.mark.parametrize(
        ("direction", "expected"),
        [(SortDirection.ASC, DESC_NULLS_LAST), ("DESC", ASC_NULLS_LAST)],
    )
    def test_backward_flips_direction(self, direction: str, expected: str):
        """Backward pages query the store in reverse and report the flip."""
        order, flip = resolve_order(direction, "name", FIELD_MAP, backward=True)

        assert order == [("display_name", expected)]
        assert flip is True
