"""initial schema: users, expenses, bills, bills_paid, user_settings

Revision ID: 0001_initial_schema
Revises:
Create Date: 2024-03-01

"""
from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision = '0001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None

CATEGORY_ENUM = sa.Enum('food', 'transport', 'groceries', 'bills', 'personal', 'others', name='expensecategory')
PAYMENT_MODE_ENUM = sa.Enum('cash', 'upi', 'card', name='paymentmode')


def upgrade():
    op.create_table(
        'users',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('email', sa.String, nullable=False),
        sa.Column('hashed_password', sa.String, nullable=False),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('is_superuser', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('is_verified', sa.Boolean, nullable=False, server_default=sa.false()),
        sa.Column('full_name', sa.String, nullable=True),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'expenses',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('item', sa.String(150), nullable=False),
        sa.Column('amount', sa.Float, nullable=False),
        sa.Column('category', CATEGORY_ENUM, nullable=False),
        sa.Column('payment_mode', PAYMENT_MODE_ENUM, nullable=False),
        sa.Column('date', sa.DateTime, nullable=False),
        sa.Column('notes', sa.String(500), nullable=True),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime, server_default=sa.func.now()),
        sa.CheckConstraint('amount > 0', name='ck_expenses_amount_positive'),
    )
    op.create_index('ix_expenses_user_id', 'expenses', ['user_id'])
    op.create_index('ix_expenses_date', 'expenses', ['date'])

    op.create_table(
        'bills',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(150), nullable=False),
        sa.Column('amount', sa.Float, nullable=False),
        sa.Column('due_date', sa.Integer, nullable=False),
        sa.Column('category', sa.String(32), nullable=True),
        sa.Column('is_active', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime, server_default=sa.func.now()),
        sa.CheckConstraint('amount > 0', name='ck_bills_amount_positive'),
        sa.CheckConstraint('due_date BETWEEN 1 AND 31', name='ck_bills_due_date_range'),
    )
    op.create_index('ix_bills_user_id', 'bills', ['user_id'])

    op.create_table(
        'bills_paid',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False),
        sa.Column('bill_id', sa.Uuid(), sa.ForeignKey('bills.id', ondelete='SET NULL'), nullable=True),
        sa.Column('bill_name', sa.String(150), nullable=False),
        sa.Column('amount', sa.Float, nullable=False),
        sa.Column('payment_mode', sa.String(16), nullable=False),
        sa.Column('paid_date', sa.DateTime, nullable=False),
        sa.Column('month_year', sa.String(7), nullable=False),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now()),
        sa.UniqueConstraint('user_id', 'bill_id', 'month_year', name='uq_bills_paid_user_bill_period'),
    )
    op.create_index('ix_bills_paid_user_id', 'bills_paid', ['user_id'])
    op.create_index('ix_bills_paid_month_year', 'bills_paid', ['month_year'])

    op.create_table(
        'user_settings',
        sa.Column('id', sa.Uuid(), primary_key=True),
        sa.Column('user_id', sa.Uuid(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('monthly_budget', sa.Float, nullable=False, server_default='0'),
        sa.Column('currency', sa.String(8), nullable=False, server_default='₹'),
        sa.Column('start_of_week', sa.Integer, nullable=False, server_default='1'),
        sa.Column('notifications_enabled', sa.Boolean, nullable=False, server_default=sa.true()),
        sa.Column('last_seen_period', sa.String(7), nullable=True),
        sa.Column('month_end_report_period', sa.String(7), nullable=True),
        sa.Column('created_at', sa.DateTime, server_default=sa.func.now()),
        sa.Column('updated_at', sa.DateTime, server_default=sa.func.now()),
        sa.CheckConstraint('monthly_budget >= 0', name='ck_user_settings_budget_non_negative'),
    )


def downgrade():
    op.drop_table('user_settings')
    op.drop_index('ix_bills_paid_month_year', table_name='bills_paid')
    op.drop_index('ix_bills_paid_user_id', table_name='bills_paid')
    op.drop_table('bills_paid')
    op.drop_index('ix_bills_user_id', table_name='bills')
    op.drop_table('bills')
    op.drop_index('ix_expenses_date', table_name='expenses')
    op.drop_index('ix_expenses_user_id', table_name='expenses')
    op.drop_table('expenses')
    op.drop_index('ix_users_email', table_name='users')
    op.drop_table('users')
    CATEGORY_ENUM.drop(op.get_bind(), checkfirst=True)
    PAYMENT_MODE_ENUM.drop(op.get_bind(), checkfirst=True)
