"""Domain models for fm_governance - pure dataclasses, no business logic."""

from dataclasses import dataclass
from datetime import datetime

from config.settings import settings


@dataclass(frozen=True)
class DecisionConfig:
    pass_threshold_bps: int
    observation_delay_slots: int

    @classmethod
    def from_settings(cls) -> "DecisionConfig":
        return cls(
            pass_threshold_bps=settings.PASS_THRESHOLD_BPS,
            observation_delay_slots=settings.SLOTS_PER_PROPOSAL,
        )


@dataclass
class Proposal:
    id: str
    number: int
    pass_market_id: str
    fail_market_id: str
    description_url: str
    slot_enqueued: int
    state: str  # PENDING / PASSED / FAILED
    # Snapshotted from the DecisionConfig at enqueue time
    pass_threshold_bps: int
    observation_delay_slots: int
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def config(self) -> DecisionConfig:
        return DecisionConfig(self.pass_threshold_bps, self.observation_delay_slots)

    @property
    def finalizable_at_slot(self) -> int:
        return self.slot_enqueued + self.observation_delay_slots


@dataclass(frozen=True)
class FinalizeResult:
    proposal_id: str
    state: str
    pass_price: int
    fail_price: int
    threshold: int
    pass_trading_mode: str
    fail_trading_mode: str
