"""Virtual-reserve bonding curve.

Pure math over a (v_base, v_quote) snapshot. The curve prices trades; it never
holds tokens. Seeded at a fixed 1e8:1 base:quote ratio scaled by each mint's
decimals, so early trades see almost no slippage.
"""

from dataclasses import dataclass

from src.fm_common.errors import ExhaustedReserveError
from src.fm_common.intmath import checked_add_u64, to_u64

SEED_BASE_UNITS = 1_000_000_000
SEED_QUOTE_UNITS = 10
PRICE_SCALE = 100


@dataclass(frozen=True)
class BondingCurve:
    v_base_reserves: int
    v_quote_reserves: int

    @classmethod
    def seeded(cls, base_decimals: int, quote_decimals: int) -> "BondingCurve":
        return cls(
            v_base_reserves=to_u64(SEED_BASE_UNITS * 10**base_decimals),
            v_quote_reserves=to_u64(SEED_QUOTE_UNITS * 10**quote_decimals),
        )

    def is_exhausted_by(self, amount: int) -> bool:
        return self.v_base_reserves - amount <= 0

    def quote_for_buy(self, amount: int) -> int:
        """Cost to take `amount` off the curve, always rounded up by one unit."""
        if self.is_exhausted_by(amount):
            raise ExhaustedReserveError(
                f"buy of {amount} exceeds virtual base reserves {self.v_base_reserves}"
            )
        cost = amount * self.v_quote_reserves // (self.v_base_reserves - amount)
        return to_u64(cost + 1)

    def quote_for_sell(self, amount: int) -> int:
        """Proceeds for putting `amount` onto the curve, rounded down."""
        return to_u64(amount * self.v_quote_reserves // (self.v_base_reserves + amount))

    def instant_price(self) -> int:
        """Spot price x100 of this single snapshot.

        Not time-weighted: one trade right before a read moves it.
        """
        if self.v_base_reserves <= 0:
            raise ExhaustedReserveError("virtual base reserves are empty")
        return self.v_quote_reserves * PRICE_SCALE // self.v_base_reserves

    def after_buy(self, amount: int, cost: int) -> "BondingCurve":
        return BondingCurve(
            v_base_reserves=self.v_base_reserves - amount,
            v_quote_reserves=checked_add_u64(self.v_quote_reserves, cost, "virtual quote"),
        )

    def after_sell(self, amount: int, proceeds: int) -> "BondingCurve":
        return BondingCurve(
            v_base_reserves=checked_add_u64(self.v_base_reserves, amount, "virtual base"),
            v_quote_reserves=self.v_quote_reserves - proceeds,
        )
