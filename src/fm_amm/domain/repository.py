# src/fm_amm/domain/repository.py
"""Repository Protocol - dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_amm.domain.models import Market


class MarketRepositoryProtocol(Protocol):
    async def insert(self, db: AsyncSession, market: Market) -> None: ...

    async def get_by_id(self, db: AsyncSession, market_id: str) -> Market | None: ...

    async def get_for_update(self, db: AsyncSession, market_id: str) -> Market | None: ...

    async def update_state(self, db: AsyncSession, market: Market) -> None: ...
