"""Tests for market construction and real-reserve seeding."""

import pytest

from src.fm_amm.domain.creation import create_market
from src.fm_amm.domain.liquidity import provide_liquidity
from src.fm_common.errors import (
    InputAmountOverflowError,
    InvalidDecimalsError,
    InvalidSupplyError,
    SameTokenMintsError,
    TradingDisabledError,
    ZeroLiquidityError,
)
from src.fm_common.intmath import U64_MAX


class TestCreateMarket:
    def test_new_market_is_seeded_and_active(self) -> None:
        market = create_market("amm-1", "pMETA", "USDC", 6, 6, current_slot=42)

        assert market.v_base_reserves == 1_000_000_000_000_000
        assert market.v_quote_reserves == 10_000_000
        assert market.base_reserves == 0
        assert market.quote_reserves == 0
        assert market.trading_mode == "ACTIVE"
        assert market.created_at_slot == 42

    def test_identical_mints_rejected(self) -> None:
        with pytest.raises(SameTokenMintsError) as exc_info:
            create_market("amm-1", "USDC", "USDC", 6, 6, current_slot=0)
        assert exc_info.value.code == 3102

    def test_nonzero_base_supply_rejected(self) -> None:
        with pytest.raises(InvalidSupplyError):
            create_market("amm-1", "pMETA", "USDC", 6, 6, current_slot=0, base_supply=1)

    @pytest.mark.parametrize("decimals", [-1, 19])
    def test_out_of_range_decimals_rejected(self, decimals: int) -> None:
        with pytest.raises(InvalidDecimalsError):
            create_market("amm-1", "pMETA", "USDC", decimals, 6, current_slot=0)

    def test_new_market_cannot_swap_until_funded(self) -> None:
        from src.fm_amm.domain.swap import execute_swap
        from src.fm_common.errors import NoReservesError

        market = create_market("amm-1", "pMETA", "USDC", 6, 6, current_slot=0)
        with pytest.raises(NoReservesError):
            execute_swap(market, 1_000, "SELL")


class TestProvideLiquidity:
    def test_adds_to_real_reserves_only(self, make_market) -> None:
        market = make_market(base_reserves=0, quote_reserves=0)
        provide_liquidity(market, 5_000, 7_000)
        provide_liquidity(market, 1, 1)

        assert market.base_reserves == 5_001
        assert market.quote_reserves == 7_001
        assert market.v_base_reserves == 1_000_000

    @pytest.mark.parametrize(("base", "quote"), [(0, 10), (10, 0), (-5, 10)])
    def test_zero_side_rejected(self, make_market, base: int, quote: int) -> None:
        market = make_market()
        with pytest.raises(ZeroLiquidityError):
            provide_liquidity(market, base, quote)
        assert market.base_reserves == 1_000_000

    def test_finalized_market_rejects_liquidity(self, make_market) -> None:
        with pytest.raises(TradingDisabledError):
            provide_liquidity(make_market(trading_mode="BOOSTED"), 10, 10)

    def test_overflowing_deposit_changes_nothing(self, make_market) -> None:
        market = make_market()
        with pytest.raises(InputAmountOverflowError):
            provide_liquidity(market, 10, U64_MAX)
        assert market.base_reserves == 1_000_000
        assert market.quote_reserves == 1_000_000
