"""Pydantic schemas for fm_governance API."""

from datetime import datetime

from pydantic import BaseModel, Field

from src.fm_governance.domain.models import FinalizeResult, Proposal


class EnqueueProposalRequest(BaseModel):
    pass_market_id: str = Field(..., min_length=1)
    fail_market_id: str = Field(..., min_length=1)
    description_url: str = Field(..., min_length=1, max_length=512)


class ProposalResponse(BaseModel):
    id: str
    number: int
    pass_market_id: str
    fail_market_id: str
    description_url: str
    slot_enqueued: int
    finalizable_at_slot: int
    state: str
    pass_threshold_bps: int
    observation_delay_slots: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_domain(cls, proposal: Proposal) -> "ProposalResponse":
        return cls(
            id=proposal.id,
            number=proposal.number,
            pass_market_id=proposal.pass_market_id,
            fail_market_id=proposal.fail_market_id,
            description_url=proposal.description_url,
            slot_enqueued=proposal.slot_enqueued,
            finalizable_at_slot=proposal.finalizable_at_slot,
            state=proposal.state,
            pass_threshold_bps=proposal.pass_threshold_bps,
            observation_delay_slots=proposal.observation_delay_slots,
            created_at=proposal.created_at,
            updated_at=proposal.updated_at,
        )


class FinalizeResponse(BaseModel):
    proposal_id: str
    state: str
    pass_price: int
    fail_price: int
    threshold: int
    pass_trading_mode: str
    fail_trading_mode: str

    @classmethod
    def from_result(cls, result: FinalizeResult) -> "FinalizeResponse":
        return cls(
            proposal_id=result.proposal_id,
            state=result.state,
            pass_price=result.pass_price,
            fail_price=result.fail_price,
            threshold=result.threshold,
            pass_trading_mode=result.pass_trading_mode,
            fail_trading_mode=result.fail_trading_mode,
        )
