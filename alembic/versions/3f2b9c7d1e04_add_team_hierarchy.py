"""add_team_hierarchy

Revision ID: 3f2b9c7d1e04
Revises:
Create Date: 2026-10-18 10:12:41.518204

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '3f2b9c7d1e04'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """
    Create the team hierarchy schema.

    Creates:
    - users table (identities from the upstream auth service)
    - tenants table
    - team_members table with self-referencing manager_id

    Hierarchy rules (no cycles, manager outranks member, one CEO per
    tenant) are enforced by the application, not by constraints.
    """
    # 1. Create users table
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('auth_user_id', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_auth_user_id', 'users', ['auth_user_id'], unique=True)

    # 2. Create tenants table
    op.create_table(
        'tenants',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    # 3. Create team_members table
    op.create_table(
        'team_members',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('tenant_id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=True),
        sa.Column('full_name', sa.String(length=255), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('role', sa.String(length=9), nullable=False),
        sa.Column('department', sa.String(length=16), nullable=False),
        sa.Column('manager_id', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=10), nullable=False),
        sa.Column('permissions', sa.JSON(), nullable=False),
        sa.Column('hire_date', sa.Date(), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['tenant_id'], ['tenants.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['manager_id'], ['team_members.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('tenant_id', 'user_id', name='uq_team_member_tenant_user'),
    )

    # 4. Add indexes for snapshot and child lookups
    op.create_index('ix_team_members_tenant_id', 'team_members', ['tenant_id'])
    op.create_index('ix_team_members_user_id', 'team_members', ['user_id'])
    op.create_index('ix_team_members_manager_id', 'team_members', ['manager_id'])
    op.create_index('ix_team_members_tenant_manager', 'team_members', ['tenant_id', 'manager_id'])


def downgrade() -> None:
    """
    Drop the team hierarchy schema.

    WARNING: This deletes all tenants, users and team members.
    """
    op.drop_index('ix_team_members_tenant_manager', table_name='team_members')
    op.drop_index('ix_team_members_manager_id', table_name='team_members')
    op.drop_index('ix_team_members_user_id', table_name='team_members')
    op.drop_index('ix_team_members_tenant_id', table_name='team_members')
    op.drop_table('team_members')
    op.drop_table('tenants')
    op.drop_index('ix_users_auth_user_id', table_name='users')
    op.drop_table('users')
