"""Tests for fm_common.enums - values must match the migrations' CHECK constraints."""

import pytest

from src.fm_common.enums import ProposalState, SwapDirection, TradingMode


class TestEnums:
    def test_trading_modes(self) -> None:
        assert [m.value for m in TradingMode] == ["ACTIVE", "BOOSTED", "PENALIZED"]

    def test_swap_directions(self) -> None:
        assert {d.value for d in SwapDirection} == {"BUY", "SELL"}

    def test_proposal_states(self) -> None:
        assert [s.value for s in ProposalState] == ["PENDING", "PASSED", "FAILED"]

    def test_enums_compare_as_strings(self) -> None:
        assert TradingMode.BOOSTED == "BOOSTED"
        assert isinstance(SwapDirection.SELL, str)

    def test_unknown_value_rejected(self) -> None:
        with pytest.raises(ValueError):
            TradingMode("HALTED")
