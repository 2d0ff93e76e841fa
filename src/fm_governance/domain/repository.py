# src/fm_governance/domain/repository.py
from collections.abc import Sequence
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_governance.domain.models import Proposal


class ProposalRepositoryProtocol(Protocol):
    async def next_number(self, db: AsyncSession) -> int: ...

    async def insert(self, db: AsyncSession, proposal: Proposal) -> None: ...

    async def get_by_id(self, db: AsyncSession, proposal_id: str) -> Proposal | None: ...

    async def get_for_update(self, db: AsyncSession, proposal_id: str) -> Proposal | None: ...

    async def update_state(self, db: AsyncSession, proposal: Proposal) -> None: ...

    async def find_bound_market_ids(
        self, db: AsyncSession, market_ids: Sequence[str]
    ) -> set[str]: ...
