"""002: create proposals table

Revision ID: 002
Revises: 001
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE proposals (
            id                      VARCHAR(64)     PRIMARY KEY,
            number                  BIGINT          NOT NULL UNIQUE,
            pass_market_id          VARCHAR(64)     NOT NULL REFERENCES amms(id),
            fail_market_id          VARCHAR(64)     NOT NULL REFERENCES amms(id),
            description_url         VARCHAR(512)    NOT NULL,
            slot_enqueued           BIGINT          NOT NULL,
            state                   VARCHAR(16)     NOT NULL DEFAULT 'PENDING',
            pass_threshold_bps      INT             NOT NULL,
            observation_delay_slots BIGINT          NOT NULL,
            created_at              TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at              TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_proposals_distinct_markets CHECK (pass_market_id <> fail_market_id),
            CONSTRAINT ck_proposals_state CHECK (state IN ('PENDING', 'PASSED', 'FAILED')),
            CONSTRAINT ck_proposals_threshold CHECK (pass_threshold_bps >= 0),
            CONSTRAINT ck_proposals_delay CHECK (observation_delay_slots >= 0)
        );
    """)
    op.execute("CREATE INDEX idx_proposals_state ON proposals (state);")
    op.execute("CREATE INDEX idx_proposals_pass_market ON proposals (pass_market_id);")
    op.execute("CREATE INDEX idx_proposals_fail_market ON proposals (fail_market_id);")
    op.execute("""
        CREATE TRIGGER trg_proposals_updated_at
            BEFORE UPDATE ON proposals
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS proposals CASCADE;")
