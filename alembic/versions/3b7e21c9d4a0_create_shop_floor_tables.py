"""create orders, work_orders and downtime_logs tables

Revision ID: 3b7e21c9d4a0
Revises:
Create Date: 2026-10-19 09:12:40.218734

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '3b7e21c9d4a0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    op.create_table('orders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('customer', sa.String(length=255), nullable=False),
        sa.Column('delivery_date', sa.Date(), nullable=True),
        sa.Column('status', sa.Enum('new', 'production', 'ready', name='orderstatus'), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_orders_id'), 'orders', ['id'], unique=False)

    op.create_table('work_orders',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('order_id', sa.Integer(), nullable=False),
        sa.Column('product', sa.String(length=255), nullable=False),
        sa.Column('quantity', sa.Integer(), nullable=False),
        sa.Column('station', sa.Enum('cutting', 'coating', 'assembly', name='station'), nullable=False),
        sa.Column('status', sa.Enum('pending', 'in_progress', 'completed', name='workorderstatus'), nullable=False),
        sa.Column('progress', sa.Integer(), nullable=False),
        sa.Column('operator_id', sa.Integer(), nullable=True),
        sa.Column('completed_at', sa.DateTime(), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.ForeignKeyConstraint(['order_id'], ['orders.id'], ),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_work_orders_id'), 'work_orders', ['id'], unique=False)
    op.create_index(op.f('ix_work_orders_order_id'), 'work_orders', ['order_id'], unique=False)
    op.create_index(op.f('ix_work_orders_status'), 'work_orders', ['status'], unique=False)
    op.create_index(op.f('ix_work_orders_updated_at'), 'work_orders', ['updated_at'], unique=False)

    op.create_table('downtime_logs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('machine', sa.String(length=255), nullable=False),
        sa.Column('active_machine', sa.String(length=255), nullable=True),
        sa.Column('reason', sa.String(length=500), nullable=False),
        sa.Column('reported_by', sa.String(length=255), nullable=True),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        sa.Column('start_time', sa.DateTime(), nullable=False),
        sa.Column('end_time', sa.DateTime(), nullable=True),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('active_machine', name='uq_downtime_logs_active_machine')
    )
    op.create_index(op.f('ix_downtime_logs_id'), 'downtime_logs', ['id'], unique=False)
    op.create_index(op.f('ix_downtime_logs_machine'), 'downtime_logs', ['machine'], unique=False)
    op.create_index(op.f('ix_downtime_logs_is_active'), 'downtime_logs', ['is_active'], unique=False)


def downgrade():
    op.drop_table('downtime_logs')
    op.drop_table('work_orders')
    op.drop_table('orders')
