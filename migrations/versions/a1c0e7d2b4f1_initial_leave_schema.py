"""Initial leave management schema

Revision ID: a1c0e7d2b4f1
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = 'a1c0e7d2b4f1'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'staff',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('department', sa.String(255), nullable=False),
        sa.Column('position', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('password', sa.String(255), nullable=True),
        sa.Column('totalLeave', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('usedLeave', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('pendingLeave', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('annualLeave', sa.Integer(), nullable=True),
        sa.Column('sickLeave', sa.Integer(), nullable=True),
        sa.Column('maternityLeave', sa.Integer(), nullable=True),
        sa.Column('paternityLeave', sa.Integer(), nullable=True),
        sa.Column('emergencyLeave', sa.Integer(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_staff_email', 'staff', ['email'], unique=True)
    op.create_index('ix_staff_department', 'staff', ['department'])

    op.create_table(
        'leave_requests',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('staffId', sa.String(64), nullable=False),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('startDate', sa.Date(), nullable=False),
        sa.Column('endDate', sa.Date(), nullable=False),
        sa.Column('days', sa.Integer(), nullable=False),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('status', sa.String(20), nullable=False, server_default='Pending'),
        sa.Column('appliedDate', sa.Date(), nullable=False),
        sa.Column('approvedBy', sa.String(64), nullable=True),
        sa.Column('approvedDate', sa.Date(), nullable=True),
        sa.Column('rejectedReason', sa.Text(), nullable=True),
        sa.ForeignKeyConstraint(['staffId'], ['staff.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_leave_requests_staffId', 'leave_requests', ['staffId'])
    op.create_index('ix_leave_requests_status', 'leave_requests', ['status'])

    op.create_table(
        'notifications',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('staffId', sa.String(64), nullable=False),
        sa.Column('type', sa.String(20), nullable=False, server_default='system'),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('createdAt', sa.DateTime(), nullable=False),
        sa.Column('read', sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column('relatedRequestId', sa.Integer(), nullable=True),
        sa.ForeignKeyConstraint(['staffId'], ['staff.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_notifications_staffId', 'notifications', ['staffId'])

    op.create_table(
        'settings',
        sa.Column('staffId', sa.String(64), nullable=False),
        sa.Column('emailNotifications', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('pushNotifications', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('leaveUpdates', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column('systemAlerts', sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.ForeignKeyConstraint(['staffId'], ['staff.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('staffId'),
    )

    op.create_table(
        'admin_settings',
        sa.Column('key', sa.String(100), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint('key'),
    )


def downgrade() -> None:
    op.drop_table('admin_settings')
    op.drop_table('settings')
    op.drop_index('ix_notifications_staffId', table_name='notifications')
    op.drop_table('notifications')
    op.drop_index('ix_leave_requests_status', table_name='leave_requests')
    op.drop_index('ix_leave_requests_staffId', table_name='leave_requests')
    op.drop_table('leave_requests')
    op.drop_index('ix_staff_department', table_name='staff')
    op.drop_index('ix_staff_email', table_name='staff')
    op.drop_table('staff')
