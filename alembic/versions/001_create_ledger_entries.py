"""001: create ledger_entries table

Revision ID: 001
Revises:
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE ledger_entries (
            id              BIGSERIAL       PRIMARY KEY,
            match_id        VARCHAR(64)     NOT NULL,
            from_user_id    VARCHAR(64)     NOT NULL,
            to_user_id      VARCHAR(64)     NOT NULL,
            amount          BIGINT          NOT NULL,
            bet_type        VARCHAR(30)     NOT NULL,
            bet_id          VARCHAR(128)    NOT NULL,
            description     VARCHAR(500),
            settled         BOOLEAN         NOT NULL DEFAULT FALSE,
            settled_at      TIMESTAMPTZ,
            settled_by      VARCHAR(64),
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            calculated_by   VARCHAR(64)     NOT NULL DEFAULT 'system',
            CONSTRAINT ck_ledger_bet_type CHECK (
                bet_type IN (
                    'nassau', 'skins', 'match_play', 'stroke_play',
                    'greenie', 'sandy', 'bingo_bango_bongo'
                )
            ),
            CONSTRAINT ck_ledger_amount_gt_0 CHECK (amount > 0),
            CONSTRAINT ck_ledger_distinct_parties CHECK (from_user_id <> to_user_id),
            CONSTRAINT ck_ledger_settled_at CHECK (settled = (settled_at IS NOT NULL))
        );
    """)
    op.execute("CREATE INDEX idx_ledger_match_bet ON ledger_entries (match_id, bet_id);")
    op.execute("CREATE INDEX idx_ledger_from_time ON ledger_entries (from_user_id, created_at);")
    op.execute("CREATE INDEX idx_ledger_to_time ON ledger_entries (to_user_id, created_at);")
    op.execute("""
        CREATE INDEX idx_ledger_unsettled
        ON ledger_entries (match_id)
        WHERE settled = FALSE;
    """)
    op.execute("COMMENT ON TABLE ledger_entries IS 'Directional debts: from_user_id owes to_user_id. Amounts in cents.';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS ledger_entries CASCADE;")
