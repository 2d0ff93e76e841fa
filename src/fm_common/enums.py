"""Global enums - must match DB CHECK constraints exactly."""

from enum import Enum


class TradingMode(str, Enum):
    """AMM trading state. Leaves ACTIVE exactly once, at proposal finalization."""
    ACTIVE = "ACTIVE"
    BOOSTED = "BOOSTED"
    PENALIZED = "PENALIZED"


class SwapDirection(str, Enum):
    BUY = "BUY"    # quote in, base out
    SELL = "SELL"  # base in, quote out


class ProposalState(str, Enum):
    PENDING = "PENDING"
    PASSED = "PASSED"
    FAILED = "FAILED"
