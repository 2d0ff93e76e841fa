"""GovernanceApplicationService - enqueue and finalize decision proposals.

Finalization writes three rows (the proposal and both markets) in one
transaction, under both markets' engine locks.
"""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from config.settings import settings
from src.fm_amm.domain.models import Market
from src.fm_amm.domain.repository import MarketRepositoryProtocol
from src.fm_amm.engine.engine import AmmEngine, get_amm_engine
from src.fm_amm.infrastructure.persistence import MarketRepository
from src.fm_common.clock import SlotClock, SlotClockProtocol
from src.fm_common.errors import MarketNotFoundError, ProposalNotFoundError
from src.fm_governance.application.schemas import (
    EnqueueProposalRequest,
    FinalizeResponse,
    ProposalResponse,
)
from src.fm_governance.domain.models import DecisionConfig, Proposal
from src.fm_governance.domain.repository import ProposalRepositoryProtocol
from src.fm_governance.domain.resolver import enqueue_proposal, finalize
from src.fm_governance.infrastructure.persistence import ProposalRepository

logger = logging.getLogger(__name__)


def _new_proposal_id() -> str:
    return f"prop_{uuid.uuid4().hex[:20]}"


class GovernanceApplicationService:
    def __init__(
        self,
        proposal_repo: ProposalRepositoryProtocol | None = None,
        market_repo: MarketRepositoryProtocol | None = None,
        clock: SlotClockProtocol | None = None,
        engine: AmmEngine | None = None,
        config: DecisionConfig | None = None,
    ) -> None:
        self._proposals: ProposalRepositoryProtocol = proposal_repo or ProposalRepository()
        self._markets: MarketRepositoryProtocol = market_repo or MarketRepository()
        self._clock: SlotClockProtocol = clock or SlotClock()
        self._engine = engine or get_amm_engine()
        self._config = config or DecisionConfig.from_settings()

    async def _load_market(self, db: AsyncSession, market_id: str, for_update: bool) -> Market:
        if for_update:
            market = await self._markets.get_for_update(db, market_id)
        else:
            market = await self._markets.get_by_id(db, market_id)
        if market is None:
            raise MarketNotFoundError(market_id)
        return market

    async def _load_pair(
        self, db: AsyncSession, pass_market_id: str, fail_market_id: str, for_update: bool
    ) -> tuple[Market, Market]:
        # Row locks follow the same sorted order as the engine locks
        loaded: dict[str, Market] = {}
        for market_id in sorted({pass_market_id, fail_market_id}):
            loaded[market_id] = await self._load_market(db, market_id, for_update)
        return loaded[pass_market_id], loaded[fail_market_id]

    async def enqueue(self, db: AsyncSession, req: EnqueueProposalRequest) -> ProposalResponse:
        try:
            pass_market, fail_market = await self._load_pair(
                db, req.pass_market_id, req.fail_market_id, for_update=False
            )
            # next_number locks the proposals table, so the binding lookup below
            # cannot race another enqueue
            number = await self._proposals.next_number(db)
            bound = await self._proposals.find_bound_market_ids(
                db, [req.pass_market_id, req.fail_market_id]
            )
            proposal = enqueue_proposal(
                proposal_id=_new_proposal_id(),
                number=number,
                pass_market=pass_market,
                fail_market=fail_market,
                description_url=req.description_url,
                config=self._config,
                current_slot=self._clock.current_slot(),
                max_amm_age_slots=settings.MAX_AMM_AGE_SLOTS,
                bound_market_ids=bound,
            )
            await self._proposals.insert(db, proposal)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "Proposal enqueued: id=%s number=%d pass=%s fail=%s slot=%d finalizable_at=%d",
            proposal.id, proposal.number, proposal.pass_market_id, proposal.fail_market_id,
            proposal.slot_enqueued, proposal.finalizable_at_slot,
        )
        return ProposalResponse.from_domain(proposal)

    async def get_proposal(self, db: AsyncSession, proposal_id: str) -> ProposalResponse:
        proposal = await self._proposals.get_by_id(db, proposal_id)
        if proposal is None:
            raise ProposalNotFoundError(proposal_id)
        return ProposalResponse.from_domain(proposal)

    async def finalize(self, db: AsyncSession, proposal_id: str) -> FinalizeResponse:
        header = await self._proposals.get_by_id(db, proposal_id)
        if header is None:
            raise ProposalNotFoundError(proposal_id)

        async with self._engine.lock_markets(header.pass_market_id, header.fail_market_id):
            try:
                proposal: Proposal | None = await self._proposals.get_for_update(db, proposal_id)
                if proposal is None:
                    raise ProposalNotFoundError(proposal_id)
                pass_market, fail_market = await self._load_pair(
                    db, proposal.pass_market_id, proposal.fail_market_id, for_update=True
                )
                result = finalize(
                    proposal, pass_market, fail_market, proposal.config, self._clock.current_slot()
                )
                await self._markets.update_state(db, pass_market)
                await self._markets.update_state(db, fail_market)
                await self._proposals.update_state(db, proposal)
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        return FinalizeResponse.from_result(result)
