"""Create ownership ledger and rental registry tables

Revision ID: 20261019_000001
Revises: None
Create Date: 2026-10-19

Units and operator approvals, rental specs/records/permissions and the
singleton treasury row.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261019_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'units',
        sa.Column('id', sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column('owner', sa.String(42), nullable=False),
        sa.Column('approved', sa.String(42), nullable=True),
        sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_units'),
    )
    op.create_index('ix_units_owner', 'units', ['owner'])

    op.create_table(
        'operator_approvals',
        sa.Column('owner', sa.String(42), nullable=False),
        sa.Column('operator', sa.String(42), nullable=False),
        sa.Column('approved', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('owner', 'operator', name='pk_operator_approvals'),
    )

    op.create_table(
        'rental_specs',
        sa.Column('address', sa.String(42), nullable=False),
        sa.Column('price_per_day', sa.Numeric(precision=30, scale=8), nullable=False),
        sa.Column('max_days_per_rental', sa.Integer(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('address', name='pk_rental_specs'),
    )

    op.create_table(
        'rental_records',
        sa.Column('unit_id', sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column('paid_price', sa.Numeric(precision=30, scale=8), nullable=False),
        sa.Column('current_user', sa.String(42), nullable=False),
        sa.Column('expires_at', sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint('unit_id', name='pk_rental_records'),
    )

    op.create_table(
        'rental_permissions',
        sa.Column('unit_id', sa.BigInteger(), autoincrement=False, nullable=False),
        sa.Column('permissioned', sa.Boolean(), nullable=False),
        sa.PrimaryKeyConstraint('unit_id', name='pk_rental_permissions'),
    )

    registry_treasury = op.create_table(
        'registry_treasury',
        sa.Column('id', sa.Integer(), autoincrement=False, nullable=False),
        sa.Column('held_balance', sa.Numeric(precision=30, scale=8), nullable=False),
        sa.Column('unclaimed_rental_revenue', sa.Numeric(precision=30, scale=8), nullable=False),
        sa.Column('total_minted', sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint('id', name='pk_registry_treasury'),
    )
    op.bulk_insert(
        registry_treasury,
        [{'id': 1, 'held_balance': 0, 'unclaimed_rental_revenue': 0, 'total_minted': 0}],
    )


def downgrade() -> None:
    op.drop_table('registry_treasury')
    op.drop_table('rental_permissions')
    op.drop_table('rental_records')
    op.drop_table('rental_specs')
    op.drop_table('operator_approvals')
    op.drop_index('ix_units_owner', table_name='units')
    op.drop_table('units')
