"""003: bind each market to at most one proposal

Revision ID: 003
Revises: 002
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("DROP INDEX IF EXISTS idx_proposals_pass_market;")
    op.execute("DROP INDEX IF EXISTS idx_proposals_fail_market;")
    op.execute("""
        ALTER TABLE proposals
            ADD CONSTRAINT uq_proposals_pass_market UNIQUE (pass_market_id),
            ADD CONSTRAINT uq_proposals_fail_market UNIQUE (fail_market_id);
    """)
    # UNIQUE covers each column alone; a market may not switch roles either
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_proposals_market_unbound()
        RETURNS TRIGGER AS $$
        BEGIN
            IF EXISTS (
                SELECT 1 FROM proposals
                WHERE id <> NEW.id
                  AND (pass_market_id = NEW.fail_market_id
                       OR fail_market_id = NEW.pass_market_id)
            ) THEN
                RAISE EXCEPTION 'market already backs a proposal'
                    USING ERRCODE = 'unique_violation';
            END IF;
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    op.execute("""
        CREATE TRIGGER trg_proposals_market_unbound
            BEFORE INSERT OR UPDATE OF pass_market_id, fail_market_id ON proposals
            FOR EACH ROW EXECUTE FUNCTION fn_proposals_market_unbound();
    """)


def downgrade() -> None:
    op.execute("DROP TRIGGER IF EXISTS trg_proposals_market_unbound ON proposals;")
    op.execute("DROP FUNCTION IF EXISTS fn_proposals_market_unbound();")
    op.execute("""
        ALTER TABLE proposals
            DROP CONSTRAINT IF EXISTS uq_proposals_pass_market,
            DROP CONSTRAINT IF EXISTS uq_proposals_fail_market;
    """)
    op.execute("CREATE INDEX idx_proposals_pass_market ON proposals (pass_market_id);")
    op.execute("CREATE INDEX idx_proposals_fail_market ON proposals (fail_market_id);")
