"""Launch records.

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'launches',
        sa.Column('id', sa.String(36), nullable=False),
        sa.Column('creator_id', sa.String(255), nullable=False),
        sa.Column('name', sa.String(50), nullable=False),
        sa.Column('symbol', sa.String(10), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('image', sa.String(2048), nullable=True),
        sa.Column('curve_preset', sa.String(20), nullable=False),
        sa.Column('charity_wallet', sa.String(44), nullable=False),
        sa.Column('charity_name', sa.String(100), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='pending'),
        sa.Column('pool_address', sa.String(44), nullable=True),
        sa.Column('token_mint', sa.String(44), nullable=True),
        sa.Column('deploy_signature', sa.String(128), nullable=True),
        sa.Column('last_valid_block_height', sa.BigInteger(), nullable=True),
        sa.Column('error_message', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('prepared_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('deployed_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_launches_creator_created', 'launches', ['creator_id', 'created_at'])
    op.create_index('ix_launches_status', 'launches', ['status'])
    op.create_index('ix_launches_pool_address', 'launches', ['pool_address'])
    op.create_index('ix_launches_token_mint', 'launches', ['token_mint'])


def downgrade() -> None:
    op.drop_index('ix_launches_token_mint', table_name='launches')
    op.drop_index('ix_launches_pool_address', table_name='launches')
    op.drop_index('ix_launches_status', table_name='launches')
    op.drop_index('ix_launches_creator_created', table_name='launches')
    op.drop_table('launches')
