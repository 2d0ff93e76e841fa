"""OutcomeResolver - the only path that moves a market out of ACTIVE.

    threshold = fail_price * (10_000 + pass_threshold_bps) // 10_000   (saturating)
    pass_price >  threshold  -> PASSED: pass BOOSTED,   fail PENALIZED
    pass_price <= threshold  -> FAILED: pass PENALIZED, fail BOOSTED

Prices are the instantaneous virtual-curve ratio read once at the moment of
finalization, not a time-weighted average.
"""

import logging
from collections.abc import Collection

from src.fm_amm.domain.bonding_curve import BondingCurve
from src.fm_amm.domain.models import Market
from src.fm_amm.domain.trading_mode import transition
from src.fm_common.enums import ProposalState, TradingMode
from src.fm_common.errors import (
    AmmTooOldError,
    InvalidMarketPairError,
    InvalidModeTransitionError,
    ProposalAlreadyFinalizedError,
    ProposalTooYoungError,
)
from src.fm_common.intmath import MAX_BPS, saturating_mul_u128
from src.fm_governance.domain.models import DecisionConfig, FinalizeResult, Proposal

logger = logging.getLogger(__name__)


def pass_threshold(fail_price: int, pass_threshold_bps: int) -> int:
    return saturating_mul_u128(fail_price, MAX_BPS + pass_threshold_bps) // MAX_BPS


def decide(pass_price: int, fail_price: int, pass_threshold_bps: int) -> str:
    if pass_price > pass_threshold(fail_price, pass_threshold_bps):
        return ProposalState.PASSED.value
    return ProposalState.FAILED.value


def _instant_price(market: Market) -> int:
    return BondingCurve(market.v_base_reserves, market.v_quote_reserves).instant_price()


def _check_pair(proposal: Proposal, pass_market: Market, fail_market: Market) -> None:
    if pass_market.id != proposal.pass_market_id or fail_market.id != proposal.fail_market_id:
        raise InvalidMarketPairError(
            f"proposal {proposal.id} governs"
            f" ({proposal.pass_market_id}, {proposal.fail_market_id}),"
            f" got ({pass_market.id}, {fail_market.id})"
        )
    # A PENDING proposal never governs a market that already left ACTIVE
    for market in (pass_market, fail_market):
        if market.trading_mode != TradingMode.ACTIVE:
            raise InvalidModeTransitionError(str(market.trading_mode), "finalized")


def finalize(
    proposal: Proposal,
    pass_market: Market,
    fail_market: Market,
    config: DecisionConfig,
    current_slot: int,
) -> FinalizeResult:
    """Decide the proposal and flip both markets into their terminal modes.

    Nothing is mutated unless every precondition holds.
    """
    finalizable_at = proposal.slot_enqueued + config.observation_delay_slots
    if current_slot < finalizable_at:
        raise ProposalTooYoungError(current_slot, finalizable_at)
    if proposal.state != ProposalState.PENDING:
        raise ProposalAlreadyFinalizedError(proposal.id, proposal.state)
    _check_pair(proposal, pass_market, fail_market)

    pass_price = _instant_price(pass_market)
    fail_price = _instant_price(fail_market)
    threshold = pass_threshold(fail_price, config.pass_threshold_bps)
    outcome = decide(pass_price, fail_price, config.pass_threshold_bps)

    if outcome == ProposalState.PASSED:
        transition(pass_market, TradingMode.BOOSTED.value)
        transition(fail_market, TradingMode.PENALIZED.value)
    else:
        transition(pass_market, TradingMode.PENALIZED.value)
        transition(fail_market, TradingMode.BOOSTED.value)
    proposal.state = outcome

    assert {pass_market.trading_mode, fail_market.trading_mode} == {
        TradingMode.BOOSTED.value,
        TradingMode.PENALIZED.value,
    }, "finalized markets must hold complementary modes"

    logger.info(
        "Proposal finalized: id=%s outcome=%s pass_price=%d fail_price=%d threshold=%d",
        proposal.id, outcome, pass_price, fail_price, threshold,
    )
    return FinalizeResult(
        proposal_id=proposal.id,
        state=outcome,
        pass_price=pass_price,
        fail_price=fail_price,
        threshold=threshold,
        pass_trading_mode=pass_market.trading_mode,
        fail_trading_mode=fail_market.trading_mode,
    )


def enqueue_proposal(
    proposal_id: str,
    number: int,
    pass_market: Market,
    fail_market: Market,
    description_url: str,
    config: DecisionConfig,
    current_slot: int,
    max_amm_age_slots: int,
    bound_market_ids: Collection[str] = (),
) -> Proposal:
    """Build a PENDING proposal over a pass/fail market pair.

    `bound_market_ids` holds the ids already governed by another proposal; a
    market belongs to at most one proposal for good.
    """
    if pass_market.id == fail_market.id:
        raise InvalidMarketPairError("pass and fail markets must be distinct")
    if pass_market.quote_mint != fail_market.quote_mint:
        raise InvalidMarketPairError("pass and fail markets must share a quote mint")
    for market in (pass_market, fail_market):
        if market.trading_mode != TradingMode.ACTIVE:
            raise InvalidMarketPairError(f"market {market.id} is already {market.trading_mode}")
        if market.id in bound_market_ids:
            raise InvalidMarketPairError(f"market {market.id} already backs a proposal")
        if current_slot >= market.created_at_slot + max_amm_age_slots:
            raise AmmTooOldError(market.id)

    return Proposal(
        id=proposal_id,
        number=number,
        pass_market_id=pass_market.id,
        fail_market_id=fail_market.id,
        description_url=description_url,
        slot_enqueued=current_slot,
        state=ProposalState.PENDING.value,
        pass_threshold_bps=config.pass_threshold_bps,
        observation_delay_slots=config.observation_delay_slots,
    )
