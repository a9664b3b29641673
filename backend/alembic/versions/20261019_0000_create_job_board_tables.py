"""
Create accounts, posts, applications and messages tables

Revision ID: 20261019_0000
Revises:
Create Date: 2026-10-19 00:00:00.000000+00:00
"""
from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision = '20261019_0000'
down_revision = None
branch_labels = None
depends_on = None

json_blob = sa.JSON().with_variant(postgresql.JSONB(), "postgresql")


def upgrade():
    op.create_table(
        'accounts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('unique_id', sa.String(length=36), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password_hash', sa.String(), nullable=False),
        sa.Column(
            'account_type',
            sa.Enum('student', 'employer', 'administrator', name='account_type'),
            nullable=False,
        ),
        sa.Column(
            'status',
            sa.Enum('active', 'inactive', 'suspended', name='account_status'),
            nullable=False,
            server_default='active',
        ),
        sa.Column('first_name', sa.String(length=255), nullable=True),
        sa.Column('last_name', sa.String(length=255), nullable=True),
        sa.Column('profile', json_blob, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('last_login', sa.DateTime(), nullable=True),
    )
    op.create_index('ix_accounts_unique_id', 'accounts', ['unique_id'], unique=True)
    op.create_index('ix_accounts_email', 'accounts', ['email'], unique=True)
    op.create_index('ix_accounts_account_type', 'accounts', ['account_type'])

    op.create_table(
        'posts',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('employer_id', sa.String(length=36), sa.ForeignKey('accounts.unique_id'), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=False, server_default=''),
        sa.Column('company_name', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('tags', sa.Text(), nullable=False, server_default=''),
        sa.Column('documents', sa.Text(), nullable=False, server_default=''),
        sa.Column('tips', sa.Text(), nullable=False, server_default=''),
        sa.Column('skills', sa.Text(), nullable=False, server_default=''),
        sa.Column('experience', sa.String(length=50), nullable=False, server_default=''),
        sa.Column('jobtype', sa.String(length=50), nullable=False, server_default=''),
        sa.Column('location', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('questions', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='Pending'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_posts_employer_id', 'posts', ['employer_id'])
    op.create_index('idx_posts_status_created', 'posts', ['status', 'created_at'])

    op.create_table(
        'applications',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('post_id', sa.Integer(), sa.ForeignKey('posts.id'), nullable=False),
        sa.Column('applicant_id', sa.String(length=36), sa.ForeignKey('accounts.unique_id'), nullable=False),
        sa.Column('employer_id', sa.String(length=36), sa.ForeignKey('accounts.unique_id'), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('answers', json_blob, nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('post_id', 'applicant_id', name='uq_post_applicant'),
    )
    op.create_index('ix_applications_post_id', 'applications', ['post_id'])
    op.create_index('ix_applications_applicant_id', 'applications', ['applicant_id'])
    op.create_index('ix_applications_employer_id', 'applications', ['employer_id'])

    op.create_table(
        'messages',
        sa.Column('id', sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column('sender_id', sa.String(length=36), sa.ForeignKey('accounts.unique_id'), nullable=False),
        sa.Column('receiver_id', sa.String(length=36), sa.ForeignKey('accounts.unique_id'), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('message_type', sa.String(length=20), nullable=False, server_default='text'),
        sa.Column('file_url', sa.String(length=500), nullable=True),
        sa.Column('read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('timestamp', sa.DateTime(), nullable=False, server_default=sa.func.now()),
    )
    op.create_index('ix_messages_sender_id', 'messages', ['sender_id'])
    op.create_index('ix_messages_receiver_id', 'messages', ['receiver_id'])
    op.create_index('idx_messages_pair', 'messages', ['sender_id', 'receiver_id', 'timestamp'])


def downgrade():
    op.drop_table('messages')
    op.drop_table('applications')
    op.drop_table('posts')
    op.drop_table('accounts')
    # Enum types only exist as real types on PostgreSQL
    bind = op.get_bind()
    if bind.dialect.name == 'postgresql':
        sa.Enum(name='account_status').drop(bind, checkfirst=True)
        sa.Enum(name='account_type').drop(bind, checkfirst=True)
