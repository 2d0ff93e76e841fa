"""MarketRepository - concrete implementation of MarketRepositoryProtocol.

All queries use raw text() SQL (no ORM).
Reserve columns are NUMERIC(20, 0) so the full u64 range round-trips; asyncpg
hands them back as Decimal, hence the int() in the row mapper.
"""

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_amm.domain.models import Market

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_COLUMNS = """
    id, base_mint, quote_mint, base_decimals, quote_decimals, created_at_slot,
    v_base_reserves, v_quote_reserves, base_reserves, quote_reserves,
    trading_mode, created_at, updated_at
"""

_INSERT_MARKET_SQL = text("""
    INSERT INTO amms (
        id, base_mint, quote_mint, base_decimals, quote_decimals, created_at_slot,
        v_base_reserves, v_quote_reserves, base_reserves, quote_reserves,
        trading_mode
    ) VALUES (
        :id, :base_mint, :quote_mint, :base_decimals, :quote_decimals, :created_at_slot,
        :v_base_reserves, :v_quote_reserves, :base_reserves, :quote_reserves,
        :trading_mode
    )
    RETURNING created_at, updated_at
""")

_GET_MARKET_SQL = text(f"SELECT {_COLUMNS} FROM amms WHERE id = :market_id")

_GET_MARKET_FOR_UPDATE_SQL = text(
    f"SELECT {_COLUMNS} FROM amms WHERE id = :market_id FOR UPDATE"
)

_UPDATE_MARKET_SQL = text("""
    UPDATE amms
    SET v_base_reserves  = :v_base_reserves,
        v_quote_reserves = :v_quote_reserves,
        base_reserves    = :base_reserves,
        quote_reserves   = :quote_reserves,
        trading_mode     = :trading_mode,
        updated_at       = NOW()
    WHERE id = :id
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------


def _row_to_market(row: object) -> Market:
    return Market(
        id=row.id,  # type: ignore[attr-defined]
        base_mint=row.base_mint,  # type: ignore[attr-defined]
        quote_mint=row.quote_mint,  # type: ignore[attr-defined]
        base_decimals=row.base_decimals,  # type: ignore[attr-defined]
        quote_decimals=row.quote_decimals,  # type: ignore[attr-defined]
        created_at_slot=int(row.created_at_slot),  # type: ignore[attr-defined]
        v_base_reserves=int(row.v_base_reserves),  # type: ignore[attr-defined]
        v_quote_reserves=int(row.v_quote_reserves),  # type: ignore[attr-defined]
        base_reserves=int(row.base_reserves),  # type: ignore[attr-defined]
        quote_reserves=int(row.quote_reserves),  # type: ignore[attr-defined]
        trading_mode=row.trading_mode,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


def _state_params(market: Market) -> dict[str, object]:
    return {
        "id": market.id,
        "v_base_reserves": market.v_base_reserves,
        "v_quote_reserves": market.v_quote_reserves,
        "base_reserves": market.base_reserves,
        "quote_reserves": market.quote_reserves,
        "trading_mode": market.trading_mode,
    }


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class MarketRepository:
    async def insert(self, db: AsyncSession, market: Market) -> None:
        params = _state_params(market)
        params.update(
            base_mint=market.base_mint,
            quote_mint=market.quote_mint,
            base_decimals=market.base_decimals,
            quote_decimals=market.quote_decimals,
            created_at_slot=market.created_at_slot,
        )
        result = await db.execute(_INSERT_MARKET_SQL, params)
        row = result.fetchone()
        if row is not None:
            market.created_at = row.created_at
            market.updated_at = row.updated_at

    async def get_by_id(self, db: AsyncSession, market_id: str) -> Market | None:
        result = await db.execute(_GET_MARKET_SQL, {"market_id": market_id})
        row = result.fetchone()
        return _row_to_market(row) if row is not None else None

    async def get_for_update(self, db: AsyncSession, market_id: str) -> Market | None:
        result = await db.execute(_GET_MARKET_FOR_UPDATE_SQL, {"market_id": market_id})
        row = result.fetchone()
        return _row_to_market(row) if row is not None else None

    async def update_state(self, db: AsyncSession, market: Market) -> None:
        await db.execute(_UPDATE_MARKET_SQL, _state_params(market))
