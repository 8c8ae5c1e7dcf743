"""create bout and bout_event tables

Revision ID: 3c7a9e1f0b42
Revises:
Create Date: 2026-10-19 00:00:00
"""

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c7a9e1f0b42'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    existing_tables = set(insp.get_table_names())

    if 'bout' not in existing_tables:
        op.create_table(
            'bout',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('bout_code', sa.String(length=4), nullable=True),
            sa.Column('session_id', sa.String(length=64), nullable=True),
            sa.Column('status', sa.String(length=16), nullable=True),
            sa.Column('default_time', sa.Float(), nullable=False),
            sa.Column('remaining_time', sa.Float(), nullable=True),
            sa.Column('period', sa.Integer(), nullable=True),
            sa.Column('left_score', sa.Integer(), nullable=True),
            sa.Column('right_score', sa.Integer(), nullable=True),
            sa.Column('left_card', sa.String(length=16), nullable=True),
            sa.Column('right_card', sa.String(length=16), nullable=True),
            sa.Column('created_at', sa.Float(), nullable=True),
        )
        op.create_index('ix_bout_bout_code', 'bout', ['bout_code'], unique=True)
        op.create_index('ix_bout_session_id', 'bout', ['session_id'], unique=False)

    if 'bout_event' not in existing_tables:
        op.create_table(
            'bout_event',
            sa.Column('id', sa.Integer(), primary_key=True),
            sa.Column('bout_id', sa.Integer(), sa.ForeignKey('bout.id'), nullable=False),
            sa.Column('seq', sa.Integer(), nullable=False),
            sa.Column('timestamp', sa.Float(), nullable=False),
            sa.Column('left_score', sa.Integer(), nullable=False),
            sa.Column('right_score', sa.Integer(), nullable=False),
            sa.Column('message', sa.String(length=64), nullable=False),
        )


def downgrade():
    op.drop_table('bout_event')
    op.drop_index('ix_bout_session_id', table_name='bout')
    op.drop_index('ix_bout_bout_code', table_name='bout')
    op.drop_table('bout')
