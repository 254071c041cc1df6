"""Initial schema

Revision ID: 001
Revises: 
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("CREATE TYPE leadstatus AS ENUM ('OPEN', 'CLOSED', 'LOST')")
    
    # Create profiles table
    op.create_table(
        'profiles',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('email', sa.String(255), nullable=False, unique=True),
        sa.Column('password_hash', sa.String(255), nullable=False),
        sa.Column('business_name', sa.String(255), nullable=False),
        sa.Column('contact_phone', sa.String(50)),
        sa.Column('address', sa.String(500)),
        sa.Column('abn', sa.String(50)),
        sa.Column('last_login_at', sa.DateTime(timezone=True)),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(),
                  onupdate=sa.func.now(), nullable=False),
    )
    op.create_index('ix_profiles_email', 'profiles', ['email'])
    
    # Create websites table
    op.create_table(
        'websites',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('profile_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('path', sa.String(100), nullable=False, unique=True),
        sa.Column('content', postgresql.JSONB, nullable=False, server_default='{}'),
        sa.Column('published', sa.Boolean, nullable=False, server_default='false'),
        sa.Column('published_at', sa.DateTime(timezone=True)),
        sa.Column('version', sa.Integer, nullable=False, server_default='1'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(),
                  onupdate=sa.func.now(), nullable=False),
    )
    op.create_index('ix_websites_path', 'websites', ['path'])
    op.create_index('ix_websites_profile_id', 'websites', ['profile_id'])
    
    # Create leads table
    op.create_table(
        'leads',
        sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True),
        sa.Column('profile_id', postgresql.UUID(as_uuid=True),
                  sa.ForeignKey('profiles.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(255)),
        sa.Column('email', sa.String(255)),
        sa.Column('phone', sa.String(50)),
        sa.Column('notes', sa.Text),
        sa.Column('source', sa.String(50)),
        sa.Column('status', postgresql.ENUM('OPEN', 'CLOSED', 'LOST', name='leadstatus', create_type=False),
                  nullable=False, server_default='OPEN'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(),
                  onupdate=sa.func.now(), nullable=False),
    )
    op.create_index('ix_leads_profile_id', 'leads', ['profile_id'])


def downgrade() -> None:
    op.drop_table('leads')
    op.drop_table('websites')
    op.drop_table('profiles')
    op.execute("DROP TYPE IF EXISTS leadstatus")
