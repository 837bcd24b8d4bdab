"""Create receivables, payables, payment history and wallet summary.

Revision ID: 001_initial_schema
Revises: None
Create Date: 2026-10-18 00:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '001_initial_schema'
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    """Create wallet and billing tables."""
    op.create_table(
        'receivables',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('partner_id', sa.String(64), nullable=False),
        sa.Column('partner_name', sa.String(255), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('customer_name', sa.String(255), nullable=True),
        sa.Column('customer_email', sa.String(255), nullable=True),
        sa.Column('customer_phone', sa.String(32), nullable=True),
        sa.Column('description', sa.String(500), nullable=True),
        sa.Column('seller_id', sa.String(64), nullable=True),
        sa.Column('total_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('pending_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column(
            'status',
            sa.Enum('Pending', 'Received', name='receivable_status', native_enum=False, length=20),
            nullable=False,
        ),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.CheckConstraint('pending_amount >= 0', name='ck_receivables_pending_non_negative'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_receivables_partner_id', 'receivables', ['partner_id'])
    op.create_index('idx_receivable_partner_status', 'receivables', ['partner_id', 'status'])

    op.create_table(
        'payables',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('recipient_id', sa.String(64), nullable=False),
        sa.Column('recipient_name', sa.String(255), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('description', sa.String(500), nullable=True),
        sa.Column('seller_id', sa.String(64), nullable=True),
        sa.Column('payable_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column(
            'status',
            sa.Enum('Pending', 'Paid', name='payable_status', native_enum=False, length=20),
            nullable=False,
        ),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.CheckConstraint('payable_amount > 0', name='ck_payables_amount_positive'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_payables_recipient_id', 'payables', ['recipient_id'])
    op.create_index('idx_payable_status', 'payables', ['status'])

    op.create_table(
        'payment_history',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('transaction_id', sa.String(32), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('payment_method', sa.String(50), nullable=False),
        sa.Column(
            'type',
            sa.Enum('Credit', 'Debit', name='payment_direction', native_enum=False, length=10),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('transaction_id'),
    )
    op.create_index('ix_payment_history_date', 'payment_history', ['date'])

    op.create_table(
        'wallet_summary',
        sa.Column('id', sa.String(64), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('total_balance', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('revenue', sa.Numeric(precision=14, scale=2), nullable=False),
        sa.Column('version', sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )


def downgrade() -> None:
    """Drop wallet and billing tables."""
    op.drop_table('wallet_summary')
    op.drop_index('ix_payment_history_date', table_name='payment_history')
    op.drop_table('payment_history')
    op.drop_index('idx_payable_status', table_name='payables')
    op.drop_index('ix_payables_recipient_id', table_name='payables')
    op.drop_table('payables')
    op.drop_index('idx_receivable_partner_status', table_name='receivables')
    op.drop_index('ix_receivables_partner_id', table_name='receivables')
    op.drop_table('receivables')
