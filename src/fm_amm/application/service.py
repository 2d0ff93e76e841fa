"""AmmApplicationService - composes domain operations with persistence.

Mutations run under the market's engine lock, re-read the row FOR UPDATE,
apply the domain operation in memory and flush it back, then commit. Any
error rolls the transaction back, so a rejected operation changes nothing.
"""

import logging
import uuid

from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_amm.application.schemas import (
    AmmResponse,
    CreateAmmRequest,
    ProvideLiquidityRequest,
    QuoteRequest,
    QuoteResponse,
    SwapRequest,
    SwapResponse,
)
from src.fm_amm.domain.creation import create_market
from src.fm_amm.domain.liquidity import provide_liquidity
from src.fm_amm.domain.models import Market
from src.fm_amm.domain.repository import MarketRepositoryProtocol
from src.fm_amm.domain.swap import execute_swap, simulate_swap
from src.fm_amm.engine.engine import AmmEngine, get_amm_engine
from src.fm_amm.infrastructure.persistence import MarketRepository
from src.fm_common.clock import SlotClock, SlotClockProtocol
from src.fm_common.errors import MarketNotFoundError
from src.fm_common.intmath import MAX_BPS, scale_bps

logger = logging.getLogger(__name__)


def _new_market_id() -> str:
    return f"amm_{uuid.uuid4().hex[:20]}"


class AmmApplicationService:
    def __init__(
        self,
        repo: MarketRepositoryProtocol | None = None,
        clock: SlotClockProtocol | None = None,
        engine: AmmEngine | None = None,
    ) -> None:
        self._repo: MarketRepositoryProtocol = repo or MarketRepository()
        self._clock: SlotClockProtocol = clock or SlotClock()
        self._engine = engine or get_amm_engine()

    async def _load(self, db: AsyncSession, market_id: str, for_update: bool = False) -> Market:
        if for_update:
            market = await self._repo.get_for_update(db, market_id)
        else:
            market = await self._repo.get_by_id(db, market_id)
        if market is None:
            raise MarketNotFoundError(market_id)
        return market

    async def create_market(self, db: AsyncSession, req: CreateAmmRequest) -> AmmResponse:
        market = create_market(
            market_id=_new_market_id(),
            base_mint=req.base_mint,
            quote_mint=req.quote_mint,
            base_decimals=req.base_decimals,
            quote_decimals=req.quote_decimals,
            current_slot=self._clock.current_slot(),
            base_supply=req.base_supply,
        )
        try:
            await self._repo.insert(db, market)
            await db.commit()
        except Exception:
            await db.rollback()
            raise
        logger.info(
            "AMM created: id=%s base=%s quote=%s slot=%d v_base=%d v_quote=%d",
            market.id, market.base_mint, market.quote_mint, market.created_at_slot,
            market.v_base_reserves, market.v_quote_reserves,
        )
        return AmmResponse.from_domain(market)

    async def get_market(self, db: AsyncSession, market_id: str) -> AmmResponse:
        return AmmResponse.from_domain(await self._load(db, market_id))

    async def provide_liquidity(
        self, db: AsyncSession, market_id: str, req: ProvideLiquidityRequest
    ) -> AmmResponse:
        async with self._engine.lock_market(market_id):
            try:
                market = await self._load(db, market_id, for_update=True)
                provide_liquidity(market, req.base_amount, req.quote_amount)
                await self._repo.update_state(db, market)
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        logger.info(
            "Liquidity added: market=%s base=+%d quote=+%d",
            market_id, req.base_amount, req.quote_amount,
        )
        return AmmResponse.from_domain(market)

    async def swap(self, db: AsyncSession, market_id: str, req: SwapRequest) -> SwapResponse:
        async with self._engine.lock_market(market_id):
            try:
                market = await self._load(db, market_id, for_update=True)
                result = execute_swap(
                    market, req.input_amount, req.direction, req.min_output_amount
                )
                await self._repo.update_state(db, market)
                await db.commit()
            except Exception:
                await db.rollback()
                raise
        return SwapResponse.from_result(market, result)

    async def quote(self, db: AsyncSession, market_id: str, req: QuoteRequest) -> QuoteResponse:
        """Dry-run a swap against the current state; nothing is written."""
        market = await self._load(db, market_id)
        result = simulate_swap(market, req.input_amount, req.direction)
        return QuoteResponse(
            market_id=market.id,
            direction=result.direction,
            input_amount=result.input_amount,
            expected_output=result.output_amount,
            min_expected_output=scale_bps(result.output_amount, MAX_BPS - req.slippage_bps),
            slippage_bps=req.slippage_bps,
            new_base_reserves=result.base_reserves,
            new_quote_reserves=result.quote_reserves,
        )
