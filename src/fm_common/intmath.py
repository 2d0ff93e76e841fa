"""Fixed-width integer helpers for on-chain style token math.

All amounts are int. No float, no Decimal. Python ints are unbounded, so the
64/128-bit limits the pricing math is specified against are enforced here.
"""

from src.fm_common.errors import CastingOverflowError, InputAmountOverflowError

U64_MAX = (1 << 64) - 1
U128_MAX = (1 << 128) - 1

MAX_BPS = 10_000


def to_u64(value: int) -> int:
    """Narrow to 64 bits, raising CastingOverflowError if the value does not fit."""
    if not (0 <= value <= U64_MAX):
        raise CastingOverflowError(value)
    return value


def checked_mul_u128(a: int, b: int, detail: str = "multiplication") -> int:
    product = a * b
    if product > U128_MAX:
        raise InputAmountOverflowError(detail)
    return product


def checked_add_u64(a: int, b: int, detail: str = "addition") -> int:
    total = a + b
    if total > U64_MAX:
        raise InputAmountOverflowError(detail)
    return total


def saturating_mul_u128(a: int, b: int) -> int:
    return min(a * b, U128_MAX)


def scale_bps(amount: int, bps: int) -> int:
    """amount x bps / 10000, truncating toward zero (e.g. 11000 bps = x1.10)."""
    return amount * bps // MAX_BPS
