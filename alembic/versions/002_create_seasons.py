"""002: create seasons table

Revision ID: 002
Revises: 001
Create Date: 2026-10-17
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE OR REPLACE FUNCTION fn_update_timestamp()
        RETURNS TRIGGER AS $$
        BEGIN
            NEW.updated_at = NOW();
            RETURN NEW;
        END;
        $$ LANGUAGE plpgsql;
    """)
    op.execute("""
        CREATE TABLE seasons (
            id              VARCHAR(64)     PRIMARY KEY,
            group_id        VARCHAR(64)     NOT NULL,
            name            VARCHAR(100)    NOT NULL,
            period          VARCHAR(20)     NOT NULL,
            start_date      TIMESTAMPTZ     NOT NULL,
            end_date        TIMESTAMPTZ     NOT NULL,
            status          VARCHAR(20)     NOT NULL DEFAULT 'active',
            standings       JSONB           NOT NULL DEFAULT '[]'::jsonb,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            updated_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT ck_seasons_period CHECK (
                period IN ('monthly', 'quarterly', 'yearly', 'custom')
            ),
            CONSTRAINT ck_seasons_status CHECK (status IN ('active', 'completed')),
            CONSTRAINT ck_seasons_range CHECK (end_date > start_date)
        );
    """)
    op.execute("CREATE INDEX idx_seasons_group_start ON seasons (group_id, start_date DESC);")
    op.execute("""
        CREATE UNIQUE INDEX uq_seasons_one_active_per_group
        ON seasons (group_id)
        WHERE status = 'active';
    """)
    op.execute("""
        CREATE TRIGGER trg_seasons_updated_at
        BEFORE UPDATE ON seasons
        FOR EACH ROW EXECUTE FUNCTION fn_update_timestamp();
    """)


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS seasons CASCADE;")
    op.execute("DROP FUNCTION IF EXISTS fn_update_timestamp();")
