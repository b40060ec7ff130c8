"""Initial migration - create tracker tables

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
    # Create goals table
    op.create_table(
        'goals',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('distance', sa.Float(), nullable=False),
        sa.Column('heart_rate', sa.Integer(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
    )

    # Create workouts table
    op.create_table(
        'workouts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('date', sa.String(10), nullable=False),
        sa.Column('time', sa.String(8), nullable=False),
        sa.Column('distance', sa.Float(), nullable=False),
        sa.Column('heart_rate', sa.Integer(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('calories', sa.Integer(), nullable=False),
        sa.Column('source', sa.String(20), nullable=True),
        sa.Column('external_id', sa.String(64), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.UniqueConstraint('source', 'external_id', name='uq_workouts_source_external_id'),
    )
    op.create_index('ix_workouts_date', 'workouts', ['date'])

    # Create habit_data table
    op.create_table(
        'habit_data',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('date', sa.String(10), nullable=False, unique=True),
        sa.Column('distance_achieved', sa.Boolean(), nullable=True),
        sa.Column('heart_rate_achieved', sa.Boolean(), nullable=True),
        sa.Column('duration_achieved', sa.Boolean(), nullable=True),
        sa.Column('workout_id', sa.Integer(), sa.ForeignKey('workouts.id'), nullable=True),
    )


def downgrade() -> None:
    op.drop_table('habit_data')
    op.drop_index('ix_workouts_date', table_name='workouts')
    op.drop_table('workouts')
    op.drop_table('goals')
