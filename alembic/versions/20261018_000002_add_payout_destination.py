"""Add payout destination to saved payout methods

Revision ID: 20261018_000002
Revises: 20260301_000001
Create Date: 2026-10-18

Stores the Connect external account that cash-outs are sent to.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20261018_000002'
down_revision: Union[str, None] = '20260301_000001'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    with op.batch_alter_table('saved_payout_methods') as batch_op:
        batch_op.add_column(sa.Column('stripe_external_account_id', sa.String(100), nullable=True))


def downgrade() -> None:
    with op.batch_alter_table('saved_payout_methods') as batch_op:
        batch_op.drop_column('stripe_external_account_id')
