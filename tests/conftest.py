"""Shared test fixtures."""

from collections.abc import Callable
from typing import Any

import pytest
from httpx import ASGITransport, AsyncClient

from src.fm_amm.domain.models import Market
from src.main import app


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client for testing FastAPI endpoints."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def build_market(**kwargs: Any) -> Market:
    defaults: dict[str, Any] = {
        "id": "amm-pass",
        "base_mint": "pBASE",
        "quote_mint": "USDC",
        "base_decimals": 6,
        "quote_decimals": 6,
        "created_at_slot": 0,
        "v_base_reserves": 1_000_000,
        "v_quote_reserves": 1_000_000,
        "base_reserves": 1_000_000,
        "quote_reserves": 1_000_000,
        "trading_mode": "ACTIVE",
    }
    defaults.update(kwargs)
    return Market(**defaults)


@pytest.fixture
def make_market() -> Callable[..., Market]:
    return build_market
