"""Domain models for fm_amm - pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime


@dataclass
class Market:
    id: str
    base_mint: str
    quote_mint: str
    base_decimals: int
    quote_decimals: int
    created_at_slot: int
    # Pricing-only curve, never deposited into
    v_base_reserves: int
    v_quote_reserves: int
    # Custodied, tradable balances
    base_reserves: int
    quote_reserves: int
    trading_mode: str  # ACTIVE / BOOSTED / PENALIZED
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def k(self) -> int:
        return self.base_reserves * self.quote_reserves


@dataclass(frozen=True)
class SwapResult:
    """Outcome of a swap - what the custody layer must move, plus the staged state."""

    direction: str
    input_amount: int
    output_amount: int
    curve_quote: int
    curve_reseeded: bool
    k_before: int
    k_after: int
    base_reserves: int
    quote_reserves: int
    v_base_reserves: int
    v_quote_reserves: int
