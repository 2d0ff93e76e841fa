"""Swap engine: bonding-curve pricing + fused fee/constant-product output.

Pricing is read off the virtual curve; the resulting curve quote is then run
through a uniswap-v1 style output formula against the *real* reserves with a
1% fee folded into the same numerator/denominator pair:

    fee_input   = curve_quote * 99
    output      = fee_input * output_reserve // (input_reserve * 100 + fee_input)

Everything is staged first and committed only after the trading-mode gate,
the k check and the slippage check pass, so a failed swap leaves the market
exactly as it was.
"""

import logging

from src.fm_amm.domain.bonding_curve import BondingCurve
from src.fm_amm.domain.models import Market, SwapResult
from src.fm_amm.domain.trading_mode import adjust_output, check_direction_allowed
from src.fm_common.enums import SwapDirection
from src.fm_common.errors import (
    ExhaustedReserveError,
    InputAmountOverflowError,
    InvariantViolationError,
    NoReservesError,
    SlippageExceededError,
    ZeroSwapAmountError,
)
from src.fm_common.intmath import U64_MAX, checked_add_u64, checked_mul_u128, to_u64

logger = logging.getLogger(__name__)

FEE_NUMERATOR = 99
FEE_DENOMINATOR = 100


def _price_on_curve(
    market: Market, curve: BondingCurve, input_amount: int, direction: str
) -> tuple[int, BondingCurve, bool]:
    """Return (curve_quote, next_curve, reseeded)."""
    if direction == SwapDirection.SELL:
        proceeds = curve.quote_for_sell(input_amount)
        return proceeds, curve.after_sell(input_amount, proceeds), False

    reseeded = False
    if curve.is_exhausted_by(input_amount):
        # Virtual liquidity is used up: restart the curve from its seed before pricing
        curve = BondingCurve.seeded(market.base_decimals, market.quote_decimals)
        reseeded = True
        if curve.is_exhausted_by(input_amount):
            raise ExhaustedReserveError(
                f"buy of {input_amount} exceeds a freshly seeded curve ({curve.v_base_reserves})"
            )
    cost = curve.quote_for_buy(input_amount)
    return cost, curve.after_buy(input_amount, cost), reseeded


def compute_output_amount(curve_quote: int, input_reserve: int, output_reserve: int) -> int:
    if input_reserve == 0 or output_reserve == 0:
        raise NoReservesError()
    fee_input = curve_quote * FEE_NUMERATOR
    numerator = checked_mul_u128(fee_input, output_reserve, "fee-adjusted input x output reserve")
    denominator = input_reserve * FEE_DENOMINATOR + fee_input
    return to_u64(numerator // denominator)


def simulate_swap(
    market: Market, input_amount: int, direction: str, min_output_amount: int = 0
) -> SwapResult:
    """Run every check and stage the post-swap state without touching `market`."""
    if input_amount <= 0:
        raise ZeroSwapAmountError()
    if input_amount > U64_MAX:
        raise InputAmountOverflowError("input amount exceeds 64 bits")
    direction = SwapDirection(direction).value

    check_direction_allowed(market, direction)

    if direction == SwapDirection.BUY:
        input_reserve, output_reserve = market.quote_reserves, market.base_reserves
    else:
        input_reserve, output_reserve = market.base_reserves, market.quote_reserves
    if input_reserve == 0 or output_reserve == 0:
        raise NoReservesError()

    k_before = market.k

    curve = BondingCurve(market.v_base_reserves, market.v_quote_reserves)
    curve_quote, next_curve, reseeded = _price_on_curve(market, curve, input_amount, direction)

    raw_output = compute_output_amount(curve_quote, input_reserve, output_reserve)
    output_amount = adjust_output(market.trading_mode, direction, raw_output)

    if output_amount > output_reserve:
        raise ExhaustedReserveError(
            f"output {output_amount} exceeds real reserve {output_reserve}"
        )
    if direction == SwapDirection.BUY:
        new_quote = checked_add_u64(market.quote_reserves, input_amount, "quote reserves")
        new_base = market.base_reserves - output_amount
    else:
        new_base = checked_add_u64(market.base_reserves, input_amount, "base reserves")
        new_quote = market.quote_reserves - output_amount

    k_after = new_base * new_quote
    if k_after < k_before:
        logger.error(
            "k decreased on market=%s %s input=%d output=%d: %d -> %d",
            market.id, direction, input_amount, output_amount, k_before, k_after,
        )
        raise InvariantViolationError(k_before, k_after)

    if output_amount < min_output_amount:
        raise SlippageExceededError(output_amount, min_output_amount)

    return SwapResult(
        direction=direction,
        input_amount=input_amount,
        output_amount=output_amount,
        curve_quote=curve_quote,
        curve_reseeded=reseeded,
        k_before=k_before,
        k_after=k_after,
        base_reserves=new_base,
        quote_reserves=new_quote,
        v_base_reserves=next_curve.v_base_reserves,
        v_quote_reserves=next_curve.v_quote_reserves,
    )


def apply_swap_result(market: Market, result: SwapResult) -> None:
    market.base_reserves = result.base_reserves
    market.quote_reserves = result.quote_reserves
    market.v_base_reserves = result.v_base_reserves
    market.v_quote_reserves = result.v_quote_reserves


def execute_swap(
    market: Market, input_amount: int, direction: str, min_output_amount: int = 0
) -> SwapResult:
    """Swap `input_amount` and return the amount the caller must pay out.

    The market is mutated only if every check passes.
    """
    result = simulate_swap(market, input_amount, direction, min_output_amount)
    if result.curve_reseeded:
        logger.info(
            "Bonding curve reseeded: market=%s v_base=%d v_quote=%d",
            market.id, result.v_base_reserves, result.v_quote_reserves,
        )
    apply_swap_result(market, result)
    logger.debug(
        "Swap OK: market=%s %s in=%d out=%d k=%d",
        market.id, result.direction, result.input_amount, result.output_amount, result.k_after,
    )
    return result
