"""Initial schema - users, exposure sessions, supportive content

Revision ID: 001_initial_schema
Revises:
Create Date: 2024-01-01 00:00:00.000000

Creates the core Bravely database schema:
- users: Accounts with the embedded goal/streak snapshot
- exposure_sessions: Exposure attempts with before/after ratings
- motivational_quotes: Quote corpus
- cbt_tips: CBT technique corpus
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers
revision: str = '001_initial_schema'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # Users with goal/streak snapshot
    op.create_table(
        'users',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('timezone', sa.String(64), nullable=False, server_default='UTC'),
        sa.Column('progressive_goals_enabled', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('goal_growth_rate', sa.Float(), nullable=False, server_default='5.0'),
        sa.Column('goal_growth_period', sa.String(16), nullable=False, server_default='weekly'),
        sa.Column('current_distance_goal', sa.Float(), nullable=False, server_default='1.0'),
        sa.Column('current_duration_goal', sa.Integer(), nullable=False, server_default='15'),
        sa.Column('distance_goal_ceiling', sa.Float(), nullable=True),
        sa.Column('duration_goal_ceiling', sa.Integer(), nullable=True),
        sa.Column('destination_goals', postgresql.JSONB(), nullable=False, server_default='[]'),
        sa.Column('last_goal_update', sa.DateTime(timezone=True), nullable=True),
        sa.Column('monthly_session_goal', sa.Integer(), nullable=False, server_default='10'),
        sa.Column('current_streak', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('longest_streak', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('last_session_date', sa.Date(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.CheckConstraint('goal_growth_rate > 0', name='ck_users_growth_rate_positive'),
        sa.CheckConstraint('current_streak <= longest_streak', name='ck_users_streak_le_longest'),
    )

    # Exposure sessions
    op.create_table(
        'exposure_sessions',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column('session_type', sa.String(50), nullable=False, server_default='walk'),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=True),
        sa.Column('duration_minutes', sa.Integer(), nullable=True),
        sa.Column('distance_miles', sa.Float(), nullable=True),
        sa.Column('fear_level_before', sa.Integer(), nullable=False),
        sa.Column('fear_level_after', sa.Integer(), nullable=True),
        sa.Column('mood_before', sa.Integer(), nullable=False),
        sa.Column('mood_after', sa.Integer(), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('mood_tag', sa.String(20), nullable=True),
        sa.Column('daily_intention', sa.Text(), nullable=True),
        sa.Column('tools_used', postgresql.ARRAY(sa.Text()), nullable=False, server_default='{}'),
        sa.Column('reflection', sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='CASCADE'),
        sa.CheckConstraint(
            'end_time IS NULL OR end_time >= start_time',
            name='ck_exposure_sessions_end_after_start',
        ),
        sa.CheckConstraint(
            'duration_minutes IS NULL OR duration_minutes >= 0',
            name='ck_exposure_sessions_duration',
        ),
        sa.CheckConstraint(
            'distance_miles IS NULL OR distance_miles >= 0',
            name='ck_exposure_sessions_distance',
        ),
    )
    op.create_index('ix_exposure_sessions_user_start', 'exposure_sessions', ['user_id', 'start_time'])
    # Range reads only touch completed sessions
    op.create_index(
        'ix_exposure_sessions_user_completed',
        'exposure_sessions',
        ['user_id', 'start_time'],
        postgresql_where=sa.text('end_time IS NOT NULL'),
    )

    # Supportive content
    quotes = op.create_table(
        'motivational_quotes',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('quote', sa.Text(), nullable=False),
        sa.Column('author', sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    tips = op.create_table(
        'cbt_tips',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('title', sa.String(255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('category', sa.String(50), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_cbt_tips_category', 'cbt_tips', ['category'])

    op.bulk_insert(quotes, [
        {'quote': 'Every step forward is progress.', 'author': 'Bravely'},
        {'quote': 'Courage is not the absence of fear, it is walking with it.', 'author': None},
        {'quote': 'You have survived every hard day so far.', 'author': None},
        {'quote': 'Small steps every day add up to big results.', 'author': None},
    ])
    op.bulk_insert(tips, [
        {'title': 'Breathing', 'description': 'Take slow, deep breaths', 'category': 'grounding'},
        {
            'title': '5-4-3-2-1',
            'description': 'Name five things you see, four you hear, three you can touch, '
                           'two you smell and one you taste',
            'category': 'grounding',
        },
        {
            'title': 'Check the evidence',
            'description': 'Ask what actually happened the last time you felt this way',
            'category': 'reframing',
        },
        {
            'title': 'Ride the wave',
            'description': 'Anxiety peaks and passes; notice it rise and fall without fighting it',
            'category': 'acceptance',
        },
    ])


def downgrade() -> None:
    op.drop_table('cbt_tips')
    op.drop_table('motivational_quotes')
    op.drop_table('exposure_sessions')
    op.drop_table('users')
