"""Real-reserve seeding.

Accounting half of a custody deposit: the host moves the tokens into the
market's vaults, then records them here. Only ACTIVE markets accept liquidity.
"""

from src.fm_amm.domain.models import Market
from src.fm_common.enums import TradingMode
from src.fm_common.errors import TradingDisabledError, ZeroLiquidityError
from src.fm_common.intmath import checked_add_u64


def provide_liquidity(market: Market, base_amount: int, quote_amount: int) -> None:
    if base_amount <= 0 or quote_amount <= 0:
        raise ZeroLiquidityError()
    if market.trading_mode != TradingMode.ACTIVE:
        raise TradingDisabledError(market.id, market.trading_mode)

    new_base = checked_add_u64(market.base_reserves, base_amount, "base reserves")
    new_quote = checked_add_u64(market.quote_reserves, quote_amount, "quote reserves")
    market.base_reserves = new_base
    market.quote_reserves = new_quote
