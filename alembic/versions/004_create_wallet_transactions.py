"""004: create wallet_transactions table

Revision ID: 004
Revises: 003
Create Date: 2026-10-05
"""
from typing import Sequence, Union
from alembic import op

revision: str = "004"
down_revision: Union[str, None] = "003"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE wallet_transactions (
            id              BIGSERIAL       PRIMARY KEY,
            owner_id        VARCHAR(64)     NOT NULL,
            counterparty_id VARCHAR(64),
            tx_type         VARCHAR(16)     NOT NULL,
            pair            VARCHAR(33),
            side            VARCHAR(4),
            currency        VARCHAR(16),
            quantity        NUMERIC(38, 18) NOT NULL,
            price           NUMERIC(38, 18),
            status          VARCHAR(16)     NOT NULL,
            executed_at     TIMESTAMPTZ     NOT NULL,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_wallet_tx_type   CHECK (tx_type IN ('TRADE', 'SWAP', 'DEPOSIT')),
            CONSTRAINT ck_wallet_tx_side   CHECK (side IS NULL OR side IN ('BUY', 'SELL')),
            CONSTRAINT ck_wallet_tx_status CHECK (status IN ('PENDING', 'COMPLETED', 'FAILED')),
            CONSTRAINT ck_wallet_tx_qty_gt_0 CHECK (quantity > 0)
        );
    """)
    op.execute(
        "CREATE INDEX idx_wallet_tx_owner_time ON wallet_transactions (owner_id, executed_at DESC);"
    )
    op.execute(
        "CREATE INDEX idx_wallet_tx_pair_time ON wallet_transactions (pair, executed_at) "
        "WHERE tx_type = 'TRADE';"
    )
    op.execute("COMMENT ON TABLE wallet_transactions IS 'Append-only, never updated or deleted';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS wallet_transactions CASCADE;")
