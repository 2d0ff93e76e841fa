"""ProposalRepository - raw text() SQL over the proposals table."""

from collections.abc import Sequence

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession

from src.fm_governance.domain.models import Proposal

_COLUMNS = """
    id, number, pass_market_id, fail_market_id, description_url,
    slot_enqueued, state, pass_threshold_bps, observation_delay_slots,
    created_at, updated_at
"""

# Serialised by the table lock taken in the same transaction as the INSERT
_NEXT_NUMBER_SQL = text("""
    SELECT COALESCE(MAX(number), 0) + 1 AS next_number FROM proposals
""")

_LOCK_TABLE_SQL = text("LOCK TABLE proposals IN SHARE ROW EXCLUSIVE MODE")

_INSERT_PROPOSAL_SQL = text("""
    INSERT INTO proposals (
        id, number, pass_market_id, fail_market_id, description_url,
        slot_enqueued, state, pass_threshold_bps, observation_delay_slots
    ) VALUES (
        :id, :number, :pass_market_id, :fail_market_id, :description_url,
        :slot_enqueued, :state, :pass_threshold_bps, :observation_delay_slots
    )
    RETURNING created_at, updated_at
""")

_GET_PROPOSAL_SQL = text(f"SELECT {_COLUMNS} FROM proposals WHERE id = :proposal_id")

_GET_PROPOSAL_FOR_UPDATE_SQL = text(
    f"SELECT {_COLUMNS} FROM proposals WHERE id = :proposal_id FOR UPDATE"
)

_UPDATE_STATE_SQL = text("""
    UPDATE proposals
    SET state = :state,
        updated_at = NOW()
    WHERE id = :id
""")

_BOUND_MARKETS_SQL = text("""
    SELECT pass_market_id AS market_id FROM proposals WHERE pass_market_id = ANY(:ids)
    UNION
    SELECT fail_market_id AS market_id FROM proposals WHERE fail_market_id = ANY(:ids)
""")


def _row_to_proposal(row: object) -> Proposal:
    return Proposal(
        id=row.id,  # type: ignore[attr-defined]
        number=row.number,  # type: ignore[attr-defined]
        pass_market_id=row.pass_market_id,  # type: ignore[attr-defined]
        fail_market_id=row.fail_market_id,  # type: ignore[attr-defined]
        description_url=row.description_url,  # type: ignore[attr-defined]
        slot_enqueued=int(row.slot_enqueued),  # type: ignore[attr-defined]
        state=row.state,  # type: ignore[attr-defined]
        pass_threshold_bps=row.pass_threshold_bps,  # type: ignore[attr-defined]
        observation_delay_slots=int(row.observation_delay_slots),  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
        updated_at=row.updated_at,  # type: ignore[attr-defined]
    )


class ProposalRepository:
    async def next_number(self, db: AsyncSession) -> int:
        await db.execute(_LOCK_TABLE_SQL)
        result = await db.execute(_NEXT_NUMBER_SQL)
        return int(result.scalar_one())

    async def insert(self, db: AsyncSession, proposal: Proposal) -> None:
        result = await db.execute(
            _INSERT_PROPOSAL_SQL,
            {
                "id": proposal.id,
                "number": proposal.number,
                "pass_market_id": proposal.pass_market_id,
                "fail_market_id": proposal.fail_market_id,
                "description_url": proposal.description_url,
                "slot_enqueued": proposal.slot_enqueued,
                "state": proposal.state,
                "pass_threshold_bps": proposal.pass_threshold_bps,
                "observation_delay_slots": proposal.observation_delay_slots,
            },
        )
        row = result.fetchone()
        if row is not None:
            proposal.created_at = row.created_at
            proposal.updated_at = row.updated_at

    async def get_by_id(self, db: AsyncSession, proposal_id: str) -> Proposal | None:
        result = await db.execute(_GET_PROPOSAL_SQL, {"proposal_id": proposal_id})
        row = result.fetchone()
        return _row_to_proposal(row) if row is not None else None

    async def get_for_update(self, db: AsyncSession, proposal_id: str) -> Proposal | None:
        result = await db.execute(_GET_PROPOSAL_FOR_UPDATE_SQL, {"proposal_id": proposal_id})
        row = result.fetchone()
        return _row_to_proposal(row) if row is not None else None

    async def update_state(self, db: AsyncSession, proposal: Proposal) -> None:
        await db.execute(_UPDATE_STATE_SQL, {"id": proposal.id, "state": proposal.state})

    async def find_bound_market_ids(
        self, db: AsyncSession, market_ids: Sequence[str]
    ) -> set[str]:
        """Ids among `market_ids` already referenced by any proposal, in either role."""
        result = await db.execute(_BOUND_MARKETS_SQL, {"ids": list(market_ids)})
        return {row.market_id for row in result.fetchall()}
