"""001: create amms table

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# u64 token amounts exceed BIGINT (signed 64-bit)
_U64 = "NUMERIC(20, 0)"
_U64_MAX = "18446744073709551615"


def upgrade() -> None:
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_touch_updated_at()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    op.execute(f"""
        CREATE TABLE amms (
            id                  VARCHAR(64)     PRIMARY KEY,
            base_mint           VARCHAR(64)     NOT NULL,
            quote_mint          VARCHAR(64)     NOT NULL,
            base_decimals       SMALLINT        NOT NULL,
            quote_decimals      SMALLINT        NOT NULL,
            created_at_slot     BIGINT          NOT NULL,
            v_base_reserves     {_U64}          NOT NULL,
            v_quote_reserves    {_U64}          NOT NULL,
            base_reserves       {_U64}          NOT NULL DEFAULT 0,
            quote_reserves      {_U64}          NOT NULL DEFAULT 0,
            trading_mode        VARCHAR(16)     NOT NULL DEFAULT 'ACTIVE',
            created_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at          TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_amms_distinct_mints   CHECK (base_mint <> quote_mint),
            CONSTRAINT ck_amms_decimals         CHECK (
                base_decimals BETWEEN 0 AND 18 AND quote_decimals BETWEEN 0 AND 18
            ),
            CONSTRAINT ck_amms_slot_gte_0       CHECK (created_at_slot >= 0),
            CONSTRAINT ck_amms_virtual_range    CHECK (
                v_base_reserves > 0 AND v_base_reserves <= {_U64_MAX}
                AND v_quote_reserves >= 0 AND v_quote_reserves <= {_U64_MAX}
            ),
            CONSTRAINT ck_amms_real_range       CHECK (
                base_reserves >= 0 AND base_reserves <= {_U64_MAX}
                AND quote_reserves >= 0 AND quote_reserves <= {_U64_MAX}
            ),
            CONSTRAINT ck_amms_trading_mode     CHECK (
                trading_mode IN ('ACTIVE', 'BOOSTED', 'PENALIZED')
            )
        );
    """)
    op.execute("CREATE INDEX idx_amms_quote_mint ON amms (quote_mint);")
    op.execute("""
        CREATE TRIGGER trg_amms_updated_at
            BEFORE UPDATE ON amms
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)
    op.execute(
        "COMMENT ON TABLE amms IS "
        "'Conditional-token AMMs: virtual pricing curve, real reserves, trading mode';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS amms CASCADE;")
    op.execute("DROP FUNCTION IF EXISTS fn_touch_updated_at();")
