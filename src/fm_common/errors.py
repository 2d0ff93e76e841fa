"""Unified error codes and custom exceptions.

Error code ranges:
  3xxx: AMM market
    30xx lookup, 31xx validation, 32xx arithmetic,
    33xx invariant, 34xx trading gate / slippage
  4xxx: Governance proposal
  9xxx: System
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 30xx: Market lookup ---

class MarketNotFoundError(AppError):
    def __init__(self, market_id: str) -> None:
        super().__init__(3001, f"Market not found: {market_id}", 404)


# --- 31xx: Validation (checked before any state mutation) ---

class AmmValidationError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 422)


class ZeroSwapAmountError(AmmValidationError):
    def __init__(self) -> None:
        super().__init__(3101, "Users must swap a non-zero amount")


class SameTokenMintsError(AmmValidationError):
    def __init__(self) -> None:
        super().__init__(3102, "Base and quote mints must differ")


class InvalidSupplyError(AmmValidationError):
    def __init__(self, supply: int) -> None:
        super().__init__(3103, f"Base mint must have zero supply at creation, got {supply}")


class ZeroLiquidityError(AmmValidationError):
    def __init__(self) -> None:
        super().__init__(3104, "Cannot add liquidity with 0 tokens on either side")


class InvalidDecimalsError(AmmValidationError):
    def __init__(self, decimals: int) -> None:
        super().__init__(3105, f"Mint decimals must be between 0 and 18, got {decimals}")


# --- 32xx: Arithmetic (fatal to the call, state untouched) ---

class AmmArithmeticError(AppError):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(code, message, 422)


class NoReservesError(AmmArithmeticError):
    def __init__(self) -> None:
        super().__init__(3201, "Can't swap through a pool without token reserves on either side")


class InputAmountOverflowError(AmmArithmeticError):
    def __init__(self, detail: str = "swap") -> None:
        super().__init__(3202, f"Input token amount is too large, causes overflow: {detail}")


class CastingOverflowError(AmmArithmeticError):
    def __init__(self, value: int) -> None:
        super().__init__(3203, f"Casting has caused an overflow: {value} does not fit 64 bits")


class ExhaustedReserveError(AmmArithmeticError):
    def __init__(self, detail: str) -> None:
        super().__init__(3204, f"Reserve exhausted: {detail}")


# --- 33xx: Invariant ---

class InvariantViolationError(AppError):
    def __init__(self, k_before: int, k_after: int) -> None:
        super().__init__(
            3301,
            f"Constant product decreased: k_before={k_before} > k_after={k_after}",
            500,
        )


# --- 34xx: Trading gate / slippage ---

class TradingDisabledError(AppError):
    def __init__(self, market_id: str, trading_mode: str) -> None:
        super().__init__(
            3401, f"Buying is disabled on market {market_id} (mode={trading_mode})", 422
        )


class SlippageExceededError(AppError):
    def __init__(self, output_amount: int, min_output_amount: int) -> None:
        super().__init__(
            3402,
            f"Swap output {output_amount} is below the requested minimum {min_output_amount}",
            422,
        )


class InvalidModeTransitionError(AppError):
    """Raised on a trading-mode change other than ACTIVE -> BOOSTED/PENALIZED (a defect)."""

    def __init__(self, current: str, requested: str) -> None:
        super().__init__(9003, f"Invalid trading mode transition {current} -> {requested}", 500)


# --- 4xxx: Governance ---

class ProposalNotFoundError(AppError):
    def __init__(self, proposal_id: str) -> None:
        super().__init__(4001, f"Proposal not found: {proposal_id}", 404)


class ProposalTooYoungError(AppError):
    def __init__(self, current_slot: int, finalizable_at_slot: int) -> None:
        super().__init__(
            4002,
            f"Proposal cannot be finalized before slot {finalizable_at_slot} "
            f"(current slot {current_slot})",
            422,
        )


class ProposalAlreadyFinalizedError(AppError):
    def __init__(self, proposal_id: str, state: str) -> None:
        super().__init__(4003, f"Proposal {proposal_id} already finalized (state={state})", 409)


class AmmTooOldError(AppError):
    def __init__(self, market_id: str) -> None:
        super().__init__(4004, f"Market {market_id} is too old to back a new proposal", 422)


class InvalidMarketPairError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(4005, f"Invalid pass/fail market pair: {detail}", 422)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
