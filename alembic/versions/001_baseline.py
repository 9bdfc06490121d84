"""baseline schema - users, sauna days and sessions

Revision ID: 001_baseline
Revises:
Create Date: 2026-10-19
"""
from alembic import op
import sqlalchemy as sa

revision = '001_baseline'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Users table (profiles of external principals)
    op.create_table('users',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('name', sa.String(255), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )

    # Sauna days table (one row per user and day, holds day metadata)
    op.create_table('sauna_days',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.String(64), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('facility_name', sa.String(255), nullable=True),
        sa.Column('condition_rating', sa.Integer(), nullable=True),
        sa.Column('satisfaction_rating', sa.Integer(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'date', name='uq_sauna_days_user_date'),
        sa.CheckConstraint(
            'condition_rating IS NULL OR condition_rating BETWEEN 1 AND 5',
            name='ck_sauna_days_condition_rating'
        ),
        sa.CheckConstraint(
            'satisfaction_rating IS NULL OR satisfaction_rating BETWEEN 1 AND 5',
            name='ck_sauna_days_satisfaction_rating'
        )
    )
    op.create_index('ix_sauna_days_user_id', 'sauna_days', ['user_id'])
    op.create_index('ix_sauna_days_facility_name', 'sauna_days', ['facility_name'])

    # Sauna sessions table
    op.create_table('sauna_sessions',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('day_id', sa.Integer(), nullable=False),
        sa.Column('session_order', sa.Integer(), nullable=False),
        sa.Column('minutes', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.ForeignKeyConstraint(['day_id'], ['sauna_days.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('day_id', 'session_order', name='uq_sauna_sessions_day_order'),
        sa.CheckConstraint('minutes > 0', name='ck_sauna_sessions_minutes_positive')
    )
    op.create_index('ix_sauna_sessions_day_id', 'sauna_sessions', ['day_id'])


def downgrade():
    op.drop_index('ix_sauna_sessions_day_id', table_name='sauna_sessions')
    op.drop_table('sauna_sessions')
    op.drop_index('ix_sauna_days_facility_name', table_name='sauna_days')
    op.drop_index('ix_sauna_days_user_id', table_name='sauna_days')
    op.drop_table('sauna_days')
    op.drop_table('users')
