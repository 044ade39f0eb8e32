"""create auth and todo tables

Revision ID: 9c1e2f3a4b5d
Revises:
Create Date: 2026-10-19 10:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


revision = '9c1e2f3a4b5d'
down_revision = None
branch_labels = None
depends_on = None


def _timestamps():
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    ]


def upgrade():
    op.create_table(
        'user',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('email_verified', sa.Boolean(), nullable=False),
        sa.Column('image', sa.String(length=512), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_email'), 'user', ['email'], unique=True)

    op.create_table(
        'account',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('account_id', sa.String(length=255), nullable=False),
        sa.Column('provider_id', sa.String(length=64), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('access_token', sa.String(length=2048), nullable=True),
        sa.Column('refresh_token', sa.String(length=2048), nullable=True),
        sa.Column('id_token', sa.String(length=4096), nullable=True),
        sa.Column('access_token_expires_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('scope', sa.String(length=512), nullable=True),
        sa.Column('password', sa.String(length=255), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_account_userId', 'account', ['user_id'])
    op.create_index('idx_account_provider', 'account', ['provider_id', 'account_id'], unique=True)

    op.create_table(
        'session',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('token', sa.String(length=255), nullable=False),
        sa.Column('ip_address', sa.String(length=128), nullable=True),
        sa.Column('user_agent', sa.String(length=512), nullable=True),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('token'),
    )
    op.create_index('idx_session_userId', 'session', ['user_id'])

    op.create_table(
        'verification',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('identifier', sa.String(length=255), nullable=False),
        sa.Column('value', sa.String(length=255), nullable=False),
        sa.Column('expires_at', sa.DateTime(timezone=True), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_verification_identifier', 'verification', ['identifier'])
    op.create_index('idx_verification_expires_at', 'verification', ['expires_at'])

    op.create_table(
        'todos',
        sa.Column('id', sa.String(length=64), nullable=False),
        sa.Column('user_id', sa.String(length=64), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('completed', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(['user_id'], ['user.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('idx_todos_user_id_created_at', 'todos', ['user_id', sa.text('created_at DESC')])


def downgrade():
    op.drop_index('idx_todos_user_id_created_at', table_name='todos')
    op.drop_table('todos')
    op.drop_index('idx_verification_expires_at', table_name='verification')
    op.drop_index('idx_verification_identifier', table_name='verification')
    op.drop_table('verification')
    op.drop_index('idx_session_userId', table_name='session')
    op.drop_table('session')
    op.drop_index('idx_account_provider', table_name='account')
    op.drop_index('idx_account_userId', table_name='account')
    op.drop_table('account')
    op.drop_index(op.f('ix_user_email'), table_name='user')
    op.drop_table('user')
