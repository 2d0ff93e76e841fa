"""Tests for the virtual-reserve bonding curve."""

import pytest

from src.fm_amm.domain.bonding_curve import BondingCurve
from src.fm_common.errors import CastingOverflowError, ExhaustedReserveError


class TestSeeding:
    def test_seed_scales_by_decimals(self) -> None:
        curve = BondingCurve.seeded(base_decimals=6, quote_decimals=6)
        assert curve.v_base_reserves == 1_000_000_000_000_000
        assert curve.v_quote_reserves == 10_000_000

    def test_seed_with_zero_decimals(self) -> None:
        curve = BondingCurve.seeded(base_decimals=0, quote_decimals=0)
        assert curve.v_base_reserves == 1_000_000_000
        assert curve.v_quote_reserves == 10

    def test_seed_mixed_decimals(self) -> None:
        curve = BondingCurve.seeded(base_decimals=9, quote_decimals=6)
        assert curve.v_base_reserves == 10**18
        assert curve.v_quote_reserves == 10**7

    def test_seed_that_overflows_u64_is_rejected(self) -> None:
        # 1e9 * 10**18 does not fit 64 bits
        with pytest.raises(CastingOverflowError):
            BondingCurve.seeded(base_decimals=18, quote_decimals=6)


class TestQuotes:
    def test_buy_cost_rounds_up_by_one(self) -> None:
        curve = BondingCurve(1_000_000, 1_000_000)
        # 1000 * 1e6 // 999000 = 1001, +1
        assert curve.quote_for_buy(1000) == 1002

    def test_buy_cost_is_never_zero(self) -> None:
        curve = BondingCurve(10**15, 10**7)
        assert curve.quote_for_buy(1) == 1

    def test_sell_proceeds_round_down(self) -> None:
        curve = BondingCurve(1_000_000, 1_000_000)
        # 1000 * 1e6 // 1001000 = 999
        assert curve.quote_for_sell(1000) == 999

    def test_buy_exhausting_curve_raises(self) -> None:
        curve = BondingCurve(1000, 1000)
        assert curve.is_exhausted_by(1000)
        with pytest.raises(ExhaustedReserveError):
            curve.quote_for_buy(1000)

    def test_buy_cost_beyond_u64_raises_casting_overflow(self) -> None:
        curve = BondingCurve.seeded(6, 6)
        with pytest.raises(CastingOverflowError):
            curve.quote_for_buy(curve.v_base_reserves - 1)


class TestInstantPrice:
    def test_price_is_quote_over_base_times_100(self) -> None:
        assert BondingCurve(100, 1000).instant_price() == 1000
        assert BondingCurve(100, 500).instant_price() == 500

    def test_price_truncates(self) -> None:
        # seeded 6/6 curve: 1e7 * 100 // 1e15 == 0
        assert BondingCurve.seeded(6, 6).instant_price() == 0
        assert BondingCurve(3, 1).instant_price() == 33

    def test_price_on_empty_curve_raises(self) -> None:
        with pytest.raises(ExhaustedReserveError):
            BondingCurve(0, 100).instant_price()


class TestCurveMovement:
    def test_after_buy_moves_along_curve(self) -> None:
        curve = BondingCurve(1_000_000, 1_000_000).after_buy(1000, 1002)
        assert curve == BondingCurve(999_000, 1_001_002)

    def test_after_sell_moves_along_curve(self) -> None:
        curve = BondingCurve(1_000_000, 1_000_000).after_sell(1000, 999)
        assert curve == BondingCurve(1_001_000, 999_001)

    def test_curve_is_immutable(self) -> None:
        curve = BondingCurve(10, 10)
        with pytest.raises(AttributeError):
            curve.v_base_reserves = 5  # type: ignore[misc]
