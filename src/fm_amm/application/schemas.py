"""Pydantic schemas for fm_amm API requests and responses.

Amounts are raw integer token units (no decimal scaling); a u64 can exceed
2**53, so clients that cannot hold such numbers may send them as strings.
"""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

from src.fm_amm.domain.bonding_curve import BondingCurve
from src.fm_amm.domain.models import Market, SwapResult

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreateAmmRequest(BaseModel):
    base_mint: str = Field(..., min_length=1, max_length=64)
    quote_mint: str = Field(..., min_length=1, max_length=64)
    base_decimals: int
    quote_decimals: int
    base_supply: int = Field(0, description="Outstanding supply of the base mint; must be 0")


class ProvideLiquidityRequest(BaseModel):
    base_amount: int
    quote_amount: int


class SwapRequest(BaseModel):
    direction: Literal["BUY", "SELL"]
    input_amount: int
    min_output_amount: int = Field(0, ge=0)


class QuoteRequest(BaseModel):
    direction: Literal["BUY", "SELL"]
    input_amount: int
    slippage_bps: int = Field(0, ge=0, le=10_000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class AmmResponse(BaseModel):
    id: str
    base_mint: str
    quote_mint: str
    base_decimals: int
    quote_decimals: int
    created_at_slot: int
    v_base_reserves: int
    v_quote_reserves: int
    base_reserves: int
    quote_reserves: int
    trading_mode: str
    instant_price: int | None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, market: Market) -> "AmmResponse":
        price = None
        if market.v_base_reserves > 0:
            price = BondingCurve(market.v_base_reserves, market.v_quote_reserves).instant_price()
        return cls(
            id=market.id,
            base_mint=market.base_mint,
            quote_mint=market.quote_mint,
            base_decimals=market.base_decimals,
            quote_decimals=market.quote_decimals,
            created_at_slot=market.created_at_slot,
            v_base_reserves=market.v_base_reserves,
            v_quote_reserves=market.v_quote_reserves,
            base_reserves=market.base_reserves,
            quote_reserves=market.quote_reserves,
            trading_mode=market.trading_mode,
            instant_price=price,
            created_at=market.created_at,
            updated_at=market.updated_at,
        )


class SwapResponse(BaseModel):
    market_id: str
    direction: str
    input_amount: int
    output_amount: int
    curve_quote: int
    curve_reseeded: bool
    base_reserves: int
    quote_reserves: int
    trading_mode: str

    @classmethod
    def from_result(cls, market: Market, result: SwapResult) -> "SwapResponse":
        return cls(
            market_id=market.id,
            direction=result.direction,
            input_amount=result.input_amount,
            output_amount=result.output_amount,
            curve_quote=result.curve_quote,
            curve_reseeded=result.curve_reseeded,
            base_reserves=result.base_reserves,
            quote_reserves=result.quote_reserves,
            trading_mode=market.trading_mode,
        )


class QuoteResponse(BaseModel):
    market_id: str
    direction: str
    input_amount: int
    expected_output: int
    min_expected_output: int
    slippage_bps: int
    new_base_reserves: int
    new_quote_reserves: int
