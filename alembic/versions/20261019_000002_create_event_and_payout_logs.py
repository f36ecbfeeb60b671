"""Create user_updated_events and payouts tables

Revision ID: 20261019_000002
Revises: 20261019_000001
Create Date: 2026-10-19

Append-only logs for usage-right grants and value sent out of the registry.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "20261019_000002"
down_revision: Union[str, None] = "20261019_000001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "user_updated_events",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("unit_id", sa.BigInteger(), nullable=False),
        sa.Column("user", sa.String(42), nullable=False),
        sa.Column("expires_at", sa.BigInteger(), nullable=False),
        sa.Column("emitted_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_user_updated_events"),
    )
    op.create_index("ix_user_updated_events_unit_id", "user_updated_events", ["unit_id"])

    op.create_table(
        "payouts",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("recipient", sa.String(42), nullable=False),
        sa.Column("amount", sa.Numeric(precision=30, scale=8), nullable=False),
        sa.Column(
            "kind",
            sa.Enum("RENTAL_REVENUE", "TOKEN_REVENUE", name="payout_kind", create_constraint=True),
            nullable=False,
        ),
        sa.Column("created_at", sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint("id", name="pk_payouts"),
    )
    op.create_index("ix_payouts_recipient", "payouts", ["recipient"])


def downgrade() -> None:
    op.drop_index("ix_payouts_recipient", table_name="payouts")
    op.drop_table("payouts")
    op.drop_index("ix_user_updated_events_unit_id", table_name="user_updated_events")
    op.drop_table("user_updated_events")
