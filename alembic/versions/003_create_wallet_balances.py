"""003: create wallet_balances table

Revision ID: 003
Revises: 002
Create Date: 2026-10-05
"""
from typing import Sequence, Union
from alembic import op

revision: str = "003"
down_revision: Union[str, None] = "002"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE wallet_balances (
            user_id     VARCHAR(64)     NOT NULL REFERENCES wallets (user_id) ON DELETE CASCADE,
            currency    VARCHAR(16)     NOT NULL,
            balance     NUMERIC(38, 18) NOT NULL DEFAULT 0,
            version     BIGINT          NOT NULL DEFAULT 0,
            updated_at  TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT pk_wallet_balances PRIMARY KEY (user_id, currency),
            CONSTRAINT ck_wallet_balances_gte_0 CHECK (balance >= 0)
        );
    """)
    op.execute("""
        CREATE TRIGGER trg_wallet_balances_updated_at
            BEFORE UPDATE ON wallet_balances
            FOR EACH ROW EXECUTE FUNCTION fn_touch_updated_at();
    """)
    op.execute(
        "COMMENT ON TABLE wallet_balances IS 'Per-currency balances; a missing row means zero';"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS wallet_balances CASCADE;")
