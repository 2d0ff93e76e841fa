"""Trading-mode gate.

    mode       | BUY              | SELL
    -----------+------------------+---------------------------
    ACTIVE     | normal           | normal
    BOOSTED    | TradingDisabled  | output x 1.10, truncated
    PENALIZED  | TradingDisabled  | output x 0.90, truncated

ACTIVE -> BOOSTED | PENALIZED happens once, at finalization; both are terminal.
"""

from src.fm_amm.domain.models import Market
from src.fm_common.enums import SwapDirection, TradingMode
from src.fm_common.errors import InvalidModeTransitionError, TradingDisabledError
from src.fm_common.intmath import scale_bps, to_u64

BOOSTED_SELL_BPS = 11_000
PENALIZED_SELL_BPS = 9_000

_SELL_MULTIPLIER_BPS = {
    TradingMode.BOOSTED: BOOSTED_SELL_BPS,
    TradingMode.PENALIZED: PENALIZED_SELL_BPS,
}


def check_direction_allowed(market: Market, direction: str) -> None:
    if direction == SwapDirection.BUY and market.trading_mode != TradingMode.ACTIVE:
        raise TradingDisabledError(market.id, market.trading_mode)


def adjust_output(trading_mode: str, direction: str, output_amount: int) -> int:
    if trading_mode == TradingMode.ACTIVE or direction != SwapDirection.SELL:
        return output_amount
    multiplier = _SELL_MULTIPLIER_BPS[TradingMode(trading_mode)]
    return to_u64(scale_bps(output_amount, multiplier))


def transition(market: Market, new_mode: str) -> None:
    if market.trading_mode != TradingMode.ACTIVE or new_mode == TradingMode.ACTIVE:
        raise InvalidModeTransitionError(str(market.trading_mode), str(new_mode))
    market.trading_mode = TradingMode(new_mode).value
