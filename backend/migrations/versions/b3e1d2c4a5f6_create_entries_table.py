"""create entries table

Revision ID: b3e1d2c4a5f6
Revises:
Create Date: 2026-10-16 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = 'b3e1d2c4a5f6'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('entries',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('date_time', sa.DateTime(), nullable=False),
        sa.Column('systolic', sa.Integer(), nullable=False),
        sa.Column('diastolic', sa.Integer(), nullable=False),
        sa.Column('heart_rate', sa.Integer(), nullable=False),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index('ix_entries_date_time', 'entries', ['date_time'])


def downgrade():
    op.drop_index('ix_entries_date_time', table_name='entries')
    op.drop_table('entries')
