"""Tests for swap pricing, fee application, gating and atomicity."""

import dataclasses

import pytest

from src.fm_amm.domain.swap import compute_output_amount, execute_swap, simulate_swap
from src.fm_common.errors import (
    CastingOverflowError,
    ExhaustedReserveError,
    InputAmountOverflowError,
    InvariantViolationError,
    NoReservesError,
    SlippageExceededError,
    TradingDisabledError,
    ZeroSwapAmountError,
)
from src.fm_common.intmath import U64_MAX


def _state(market) -> dict:
    return dataclasses.asdict(market)


class TestComputeOutputAmount:
    def test_fused_fee_formula(self) -> None:
        # 1002*99*1e6 // (1e6*100 + 1002*99)
        assert compute_output_amount(1002, 1_000_000, 1_000_000) == 990

    def test_output_is_strictly_below_output_reserve(self) -> None:
        assert compute_output_amount(10**12, 1, 1_000) < 1_000

    def test_zero_reserve_raises(self) -> None:
        with pytest.raises(NoReservesError):
            compute_output_amount(10, 0, 100)


class TestBuy:
    def test_buy_updates_real_and_virtual_reserves(self, make_market) -> None:
        market = make_market()
        result = execute_swap(market, 1000, "BUY")

        assert result.curve_quote == 1002
        assert result.output_amount == 990
        assert market.quote_reserves == 1_001_000
        assert market.base_reserves == 999_010
        assert market.v_base_reserves == 999_000
        assert market.v_quote_reserves == 1_001_002
        assert result.k_after == 1_000_009_010_000
        assert result.k_after >= result.k_before

    def test_round_trip_never_returns_more_than_spent(self, make_market) -> None:
        market = make_market()
        bought = execute_swap(market, 1000, "BUY").output_amount
        sold = execute_swap(market, bought, "SELL")

        assert sold.curve_quote == 991
        assert sold.output_amount == 982
        assert sold.output_amount <= 1000
        assert market.base_reserves == 1_000_000
        assert market.quote_reserves == 1_000_018

    def test_exhausted_curve_is_reseeded_before_pricing(self, make_market) -> None:
        market = make_market(v_base_reserves=1000, v_quote_reserves=1000)
        result = execute_swap(market, 1000, "BUY")

        assert result.curve_reseeded is True
        assert result.curve_quote == 1
        assert market.v_base_reserves == 10**15 - 1000
        assert market.v_quote_reserves == 10**7 + 1
        assert market.quote_reserves == 1_001_000


class TestSellAndTradingModes:
    @pytest.mark.parametrize(
        ("mode", "expected"),
        [("ACTIVE", 988), ("BOOSTED", 1086), ("PENALIZED", 889)],
    )
    def test_mode_multiplier_on_sell(self, make_market, mode: str, expected: int) -> None:
        market = make_market(v_base_reserves=10_000_000, trading_mode=mode)
        result = execute_swap(market, 10_000, "SELL")

        assert result.curve_quote == 999
        assert result.output_amount == expected
        assert market.base_reserves == 1_010_000
        assert market.quote_reserves == 1_000_000 - expected

    @pytest.mark.parametrize("mode", ["BOOSTED", "PENALIZED"])
    def test_buy_on_finalized_market_rejected(self, make_market, mode: str) -> None:
        market = make_market(trading_mode=mode)
        before = _state(market)
        with pytest.raises(TradingDisabledError):
            execute_swap(market, 1000, "BUY")
        assert _state(market) == before

    def test_gate_is_checked_before_reserves(self, make_market) -> None:
        market = make_market(trading_mode="PENALIZED", base_reserves=0, quote_reserves=0)
        with pytest.raises(TradingDisabledError):
            execute_swap(market, 1000, "BUY")

    def test_boost_that_would_shrink_k_is_rejected(self, make_market) -> None:
        market = make_market(trading_mode="BOOSTED")
        before = _state(market)
        with pytest.raises(InvariantViolationError) as exc_info:
            execute_swap(market, 1000, "SELL")
        assert exc_info.value.http_status == 500
        assert _state(market) == before

    def test_boost_past_real_reserve_is_rejected(self, make_market) -> None:
        market = make_market(trading_mode="BOOSTED", base_reserves=1, quote_reserves=100)
        before = _state(market)
        with pytest.raises(ExhaustedReserveError):
            execute_swap(market, 1_000_000, "SELL")
        assert _state(market) == before


class TestValidation:
    @pytest.mark.parametrize("direction", ["BUY", "SELL"])
    @pytest.mark.parametrize("mode", ["ACTIVE", "BOOSTED", "PENALIZED"])
    def test_zero_input_rejected_before_gate(self, make_market, direction, mode) -> None:
        # A zero BUY on a finalized market reports the amount, not the gate
        market = make_market(trading_mode=mode)
        before = _state(market)
        with pytest.raises(ZeroSwapAmountError):
            execute_swap(market, 0, direction)
        assert _state(market) == before

    def test_input_wider_than_u64_rejected(self, make_market) -> None:
        with pytest.raises(InputAmountOverflowError):
            execute_swap(make_market(), U64_MAX + 1, "SELL")

    def test_unknown_direction_rejected(self, make_market) -> None:
        with pytest.raises(ValueError):
            execute_swap(make_market(), 10, "HOLD")

    @pytest.mark.parametrize(
        ("base", "quote"), [(0, 1_000_000), (1_000_000, 0), (0, 0)]
    )
    def test_empty_reserves_rejected(self, make_market, base: int, quote: int) -> None:
        market = make_market(base_reserves=base, quote_reserves=quote)
        with pytest.raises(NoReservesError):
            execute_swap(market, 1000, "BUY")


class TestArithmeticLimits:
    def test_curve_cost_beyond_u64_is_casting_overflow(self, make_market) -> None:
        market = make_market(
            v_base_reserves=10**15, v_quote_reserves=10**7, base_reserves=1, quote_reserves=1
        )
        before = _state(market)
        with pytest.raises(CastingOverflowError):
            execute_swap(market, 10**15 - 1, "BUY")
        assert _state(market) == before

    def test_product_beyond_u128_is_overflow(self, make_market) -> None:
        market = make_market(
            v_base_reserves=10**15,
            v_quote_reserves=10**7,
            base_reserves=10**18,
            quote_reserves=1,
        )
        before = _state(market)
        with pytest.raises(InputAmountOverflowError):
            execute_swap(market, 10**15 - 1000, "BUY")
        assert _state(market) == before


class TestSlippageAndSimulation:
    def test_min_output_not_met_leaves_market_untouched(self, make_market) -> None:
        market = make_market()
        before = _state(market)
        with pytest.raises(SlippageExceededError) as exc_info:
            execute_swap(market, 1000, "BUY", min_output_amount=991)
        assert "990" in exc_info.value.message
        assert _state(market) == before

    def test_min_output_exactly_met_succeeds(self, make_market) -> None:
        result = execute_swap(make_market(), 1000, "BUY", min_output_amount=990)
        assert result.output_amount == 990

    def test_simulate_does_not_mutate(self, make_market) -> None:
        market = make_market()
        before = _state(market)
        result = simulate_swap(market, 1000, "BUY")
        assert result.output_amount == 990
        assert result.base_reserves == 999_010
        assert _state(market) == before
