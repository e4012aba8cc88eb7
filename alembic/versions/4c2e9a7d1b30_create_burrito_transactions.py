"""Create burrito_transactions ledger

Revision ID: 4c2e9a7d1b30
Revises:
Create Date: 2026-10-19 12:00:00.000000

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = "4c2e9a7d1b30"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "burrito_transactions",
        sa.Column("id", sa.Integer(), autoincrement=True, primary_key=True),
        sa.Column("giver_id", sa.String(32), nullable=False),
        sa.Column("recipient_id", sa.String(32), nullable=False),
        sa.Column("value", sa.SmallInteger(), nullable=False),
        sa.Column("given_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index(
        "ix_burrito_tx_giver_given_at",
        "burrito_transactions",
        ["giver_id", "given_at"],
    )
    op.create_index(
        "ix_burrito_tx_recipient",
        "burrito_transactions",
        ["recipient_id"],
    )


def downgrade() -> None:
    op.drop_index("ix_burrito_tx_recipient", table_name="burrito_transactions")
    op.drop_index("ix_burrito_tx_giver_given_at", table_name="burrito_transactions")
    op.drop_table("burrito_transactions")
