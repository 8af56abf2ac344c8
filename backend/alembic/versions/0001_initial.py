"""initial schema: users

Revision ID: 0001_initial
Revises: 
Create Date: 2026-10-17
"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial'
down_revision = None
branch_labels = None
depends_on = None

def upgrade():
    op.create_table('users',
        sa.Column('id', sa.Integer(), primary_key=True),
        sa.Column('first_name', sa.String(length=255), nullable=False),
        sa.Column('last_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('password', sa.String(length=255), nullable=False),
        sa.Column('type', sa.String(length=16), nullable=False),
        sa.Column('company_id', sa.String(length=64), nullable=True),
        sa.Column('subscription', sa.String(length=32), nullable=False, server_default='Basic'),
        sa.Column('plan', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('lang', sa.String(length=16), nullable=False, server_default='en'),
        sa.Column('avatar', sa.String(length=512), nullable=False, server_default=''),
        sa.Column('created_by', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('is_login_enable', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('dark_mode', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('messenger_color', sa.String(length=16), nullable=False, server_default='#2180f3'),
        sa.Column('is_disable', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        sa.Column('last_login', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.func.now()),
        sa.UniqueConstraint('email'),
        sa.UniqueConstraint('company_id'),
    )
    op.create_index('ix_users_email', 'users', ['email'])
    op.create_index('ix_users_id', 'users', ['id'])

def downgrade():
    op.drop_index('ix_users_id', table_name='users')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
