"""create_skillsphere_tables

Revision ID: 4c1e9a7d2b30
Revises:
Create Date: 2026-10-19 09:12:44.318201

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '4c1e9a7d2b30'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create users, skill_profiles, service_requests, service_request_responses and exchanges."""
    op.create_table('users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('name', sa.String(length=100), server_default='', nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )

    # Reviews and portfolio items are embedded JSONB arrays.
    # owner_id is deliberately not unique: readers take the newest row.
    op.create_table('skill_profiles',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('owner_id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('primary_skill', sa.String(length=50), nullable=False),
        sa.Column('description', sa.String(length=500), nullable=False),
        sa.Column('looking_for', postgresql.JSONB(), server_default='[]', nullable=False),
        sa.Column('portfolio', postgresql.JSONB(), server_default='[]', nullable=False),
        sa.Column('reviews', postgresql.JSONB(), server_default='[]', nullable=False),
        sa.Column('credits', sa.Integer(), server_default='0', nullable=False),
        sa.Column('rating', sa.Float(), server_default='0', nullable=False),
        sa.Column('featured', sa.Boolean(), server_default=sa.false(), nullable=False),
        sa.Column('avatar_url', sa.String(length=500), nullable=True),
        sa.Column('location', postgresql.JSONB(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint('rating >= 0 AND rating <= 5', name='ck_skill_profiles_rating_range'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_skill_profiles_owner_created', 'skill_profiles', ['owner_id', 'created_at'], unique=False)
    op.create_index('ix_skill_profiles_primary_skill', 'skill_profiles', ['primary_skill'], unique=False)

    op.create_table('service_requests',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('requester_id', sa.UUID(), nullable=False),
        sa.Column('requester_name', sa.String(length=100), server_default='', nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('skill_needed', sa.String(length=100), nullable=False),
        sa.Column('skill_offered', sa.String(length=100), nullable=False),
        sa.Column('status', sa.String(length=20), server_default='open', nullable=False),
        sa.Column('views', sa.Integer(), server_default='0', nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("status IN ('open', 'in-progress', 'completed')", name='ck_service_requests_status'),
        sa.ForeignKeyConstraint(['requester_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_service_requests_requester_id', 'service_requests', ['requester_id'], unique=False)

    op.create_table('service_request_responses',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('request_id', sa.UUID(), nullable=False),
        sa.Column('responder_id', sa.UUID(), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['request_id'], ['service_requests.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_service_request_responses_request_id', 'service_request_responses', ['request_id'], unique=False)
    op.create_index('ix_service_request_responses_responder_id', 'service_request_responses', ['responder_id'], unique=False)

    op.create_table('exchanges',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('sender_id', sa.UUID(), nullable=False),
        sa.Column('recipient_id', sa.UUID(), nullable=False),
        sa.Column('sender_skill', sa.String(length=100), nullable=False),
        sa.Column('recipient_skill', sa.String(length=100), nullable=False),
        sa.Column('status', sa.String(length=20), server_default='pending', nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.CheckConstraint("status IN ('pending', 'accepted', 'rejected')", name='ck_exchanges_status'),
        sa.ForeignKeyConstraint(['recipient_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_exchanges_sender_id', 'exchanges', ['sender_id'], unique=False)
    op.create_index('ix_exchanges_recipient_id', 'exchanges', ['recipient_id'], unique=False)


def downgrade() -> None:
    """Drop all SkillSphere tables."""
    op.drop_index('ix_exchanges_recipient_id', table_name='exchanges')
    op.drop_index('ix_exchanges_sender_id', table_name='exchanges')
    op.drop_table('exchanges')
    op.drop_index('ix_service_request_responses_responder_id', table_name='service_request_responses')
    op.drop_index('ix_service_request_responses_request_id', table_name='service_request_responses')
    op.drop_table('service_request_responses')
    op.drop_index('ix_service_requests_requester_id', table_name='service_requests')
    op.drop_table('service_requests')
    op.drop_index('ix_skill_profiles_primary_skill', table_name='skill_profiles')
    op.drop_index('ix_skill_profiles_owner_created', table_name='skill_profiles')
    op.drop_table('skill_profiles')
    op.drop_table('users')
