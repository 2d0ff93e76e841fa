"""Market construction.

A new market prices off a freshly seeded virtual curve and holds no real
reserves; its implied opening price is fixed by the two mints' decimals.
"""

from src.fm_amm.domain.bonding_curve import BondingCurve
from src.fm_amm.domain.models import Market
from src.fm_common.enums import TradingMode
from src.fm_common.errors import InvalidDecimalsError, InvalidSupplyError, SameTokenMintsError

MAX_DECIMALS = 18


def validate_market_params(
    base_mint: str, quote_mint: str, base_decimals: int, quote_decimals: int, base_supply: int
) -> None:
    if base_mint == quote_mint:
        raise SameTokenMintsError()
    if base_supply != 0:
        raise InvalidSupplyError(base_supply)
    for decimals in (base_decimals, quote_decimals):
        if not (0 <= decimals <= MAX_DECIMALS):
            raise InvalidDecimalsError(decimals)


def create_market(
    market_id: str,
    base_mint: str,
    quote_mint: str,
    base_decimals: int,
    quote_decimals: int,
    current_slot: int,
    base_supply: int = 0,
) -> Market:
    validate_market_params(base_mint, quote_mint, base_decimals, quote_decimals, base_supply)
    curve = BondingCurve.seeded(base_decimals, quote_decimals)
    return Market(
        id=market_id,
        base_mint=base_mint,
        quote_mint=quote_mint,
        base_decimals=base_decimals,
        quote_decimals=quote_decimals,
        created_at_slot=current_slot,
        v_base_reserves=curve.v_base_reserves,
        v_quote_reserves=curve.v_quote_reserves,
        base_reserves=0,
        quote_reserves=0,
        trading_mode=TradingMode.ACTIVE.value,
    )
