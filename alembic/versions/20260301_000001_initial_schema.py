"""Initial schema

Revision ID: 20260301_000001
Revises: None
Create Date: 2026-03-01

Creates the landlord portfolio, rent, fee, automation, payout, team,
payroll, hiring, contractor and maintenance tables.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '20260301_000001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _enum(name: str, *values: str) -> sa.Enum:
    # Enums are stored as VARCHAR with a CHECK constraint (no native types on SQL Server)
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True)


def _timestamps(updated: bool = True) -> list:
    columns = [sa.Column('created_at', sa.DateTime(), server_default=sa.func.now(), nullable=False)]
    if updated:
        columns.append(sa.Column('updated_at', sa.DateTime(), nullable=True))
    return columns


def _landlord_fk(unique: bool = False) -> sa.Column:
    return sa.Column(
        'landlord_id',
        sa.Integer(),
        sa.ForeignKey('landlords.id', ondelete='CASCADE'),
        nullable=False,
        unique=unique,
    )


def upgrade() -> None:
    """Create all tables."""
    op.create_table(
        'users',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('password', sa.String(255), nullable=False),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('role', _enum('user_role', 'admin', 'landlord', 'tenant', 'team_member'), nullable=False),
        sa.Column('is_active', sa.Boolean(), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_users_email', 'users', ['email'], unique=True)

    op.create_table(
        'landlords',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('company_name', sa.String(200), nullable=True),
        sa.Column('subscription_tier', _enum('subscription_tier', 'free', 'pro', 'enterprise'), nullable=False),
        sa.Column('stripe_customer_id', sa.String(100), nullable=True),
        sa.Column('stripe_connect_account_id', sa.String(100), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'properties',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _landlord_fk(),
        sa.Column('name', sa.String(255), nullable=False),
        sa.Column('property_type', sa.String(50), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('street', sa.String(255), nullable=True),
        sa.Column('city', sa.String(100), nullable=True),
        sa.Column('state', sa.String(100), nullable=True),
        sa.Column('zip_code', sa.String(20), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_properties_landlord_id', 'properties', ['landlord_id'])

    op.create_table(
        'property_units',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), sa.ForeignKey('properties.id', ondelete='CASCADE'), nullable=False),
        sa.Column('unit_number', sa.String(50), nullable=False),
        sa.Column('bedrooms', sa.Integer(), nullable=True),
        sa.Column('bathrooms', sa.Numeric(precision=3, scale=1), nullable=True),
        sa.Column('rent_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('status', sa.String(50), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_property_units_property_id', 'property_units', ['property_id'])

    op.create_table(
        'tenants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _landlord_fk(),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('first_name', sa.String(100), nullable=False),
        sa.Column('last_name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=True),
        sa.Column('phone', sa.String(50), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_tenants_landlord_id', 'tenants', ['landlord_id'])

    op.create_table(
        'leases',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('unit_id', sa.Integer(), sa.ForeignKey('property_units.id'), nullable=False),
        sa.Column('tenant_id', sa.Integer(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('rent_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('rent_due_day', sa.Integer(), nullable=False),
        sa.Column('has_pets', sa.Boolean(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('status', _enum('lease_status', 'active', 'ended', 'terminated'), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_leases_unit_id', 'leases', ['unit_id'])
    op.create_index('ix_leases_tenant_id', 'leases', ['tenant_id'])
    op.create_index('ix_leases_status', 'leases', ['status'])

    op.create_table(
        'saved_payout_methods',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _landlord_fk(),
        sa.Column('stripe_payment_method_id', sa.String(100), nullable=False, unique=True),
        sa.Column('type', sa.String(50), nullable=False),
        sa.Column('account_holder_name', sa.String(200), nullable=False),
        sa.Column('last4', sa.String(4), nullable=False),
        sa.Column('bank_name', sa.String(200), nullable=True),
        sa.Column('account_type', sa.String(20), nullable=True),
        sa.Column('routing_number', sa.String(9), nullable=True),
        sa.Column('is_default', sa.Boolean(), nullable=False),
        sa.Column('is_verified', sa.Boolean(), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_saved_payout_methods_landlord_id', 'saved_payout_methods', ['landlord_id'])

    op.create_table(
        'payouts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _landlord_fk(),
        sa.Column('payout_method_id', sa.Integer(), sa.ForeignKey('saved_payout_methods.id'), nullable=True),
        sa.Column('payout_type', _enum('payout_type', 'standard', 'instant'), nullable=False),
        sa.Column('status', _enum('payout_status', 'processing', 'paid', 'failed'), nullable=False),
        sa.Column('gross_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('platform_fee', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('instant_fee', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('net_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('stripe_payout_id', sa.String(100), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_payouts_landlord_id', 'payouts', ['landlord_id'])

    op.create_table(
        'landlord_wallets',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _landlord_fk(unique=True),
        sa.Column('available_balance', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('pending_balance', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('last_payout_at', sa.DateTime(), nullable=True),
        sa.Column('updated_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'rent_payments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('lease_id', sa.Integer(), sa.ForeignKey('leases.id', ondelete='CASCADE'), nullable=False),
        sa.Column('tenant_id', sa.Integer(), sa.ForeignKey('tenants.id'), nullable=False),
        sa.Column('payout_id', sa.Integer(), sa.ForeignKey('payouts.id'), nullable=True),
        sa.Column('parent_payment_id', sa.Integer(), sa.ForeignKey('rent_payments.id'), nullable=True),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('due_date', sa.Date(), nullable=False),
        sa.Column('paid_at', sa.DateTime(), nullable=True),
        sa.Column(
            'status',
            _enum('rent_payment_status', 'pending', 'paid', 'overdue', 'cancelled'),
            nullable=False
        ),
        sa.Column(
            'payment_type',
            _enum(
                'rent_payment_type',
                'rent', 'first_month_rent', 'last_month_rent', 'security_deposit', 'pet_deposit_annual',
                'cleaning_fee', 'pet_rent', 'application_fee', 'late_fee',
            ),
            nullable=False
        ),
        sa.Column('metadata', sa.JSON(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_rent_payments_lease_id', 'rent_payments', ['lease_id'])
    op.create_index('ix_rent_payments_tenant_id', 'rent_payments', ['tenant_id'])
    op.create_index('ix_rent_payments_payout_id', 'rent_payments', ['payout_id'])
    op.create_index('ix_rent_payments_due_date', 'rent_payments', ['due_date'])
    op.create_index('ix_rent_payments_status', 'rent_payments', ['status'])
    op.create_index('ix_rent_payments_payment_type', 'rent_payments', ['payment_type'])

    fee_types = (
        'pet_deposit', 'pet_rent', 'cleaning_fee', 'application_fee', 'security_deposit', 'last_month_rent',
    )
    op.create_table(
        'fee_settings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _landlord_fk(),
        sa.Column('fee_type', _enum('fee_setting_type', *fee_types), nullable=False),
        sa.Column('enabled', sa.Boolean(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('apply_to_all', sa.Boolean(), nullable=False),
        sa.Column('selected_property_ids', sa.JSON(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('landlord_id', 'fee_type', name='uq_fee_settings_landlord_fee_type'),
    )
    op.create_index('ix_fee_settings_landlord_id', 'fee_settings', ['landlord_id'])

    op.create_table(
        'property_fee_overrides',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), sa.ForeignKey('properties.id', ondelete='CASCADE'), nullable=False),
        sa.Column('fee_type', _enum('fee_override_type', *fee_types), nullable=False),
        sa.Column('no_fee', sa.Boolean(), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('property_id', 'fee_type', name='uq_property_fee_overrides_property_fee_type'),
    )
    op.create_index('ix_property_fee_overrides_property_id', 'property_fee_overrides', ['property_id'])

    op.create_table(
        'rent_reminder_settings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _landlord_fk(unique=True),
        sa.Column('enabled', sa.Boolean(), nullable=False),
        sa.Column('reminder_days_before', sa.JSON(), nullable=False),
        sa.Column('reminder_channels', sa.JSON(), nullable=False),
        sa.Column('custom_message', sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'late_fee_settings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _landlord_fk(unique=True),
        sa.Column('enabled', sa.Boolean(), nullable=False),
        sa.Column('grace_period_days', sa.Integer(), nullable=False),
        sa.Column('fee_type', _enum('late_fee_type', 'flat', 'percentage'), nullable=False),
        sa.Column('fee_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('max_fee', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('recurring_fee', sa.Boolean(), nullable=False),
        sa.Column('recurring_interval', _enum('late_fee_interval', 'daily', 'weekly'), nullable=True),
        sa.Column('notify_tenant', sa.Boolean(), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'team_members',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _landlord_fk(),
        sa.Column('user_id', sa.Integer(), sa.ForeignKey('users.id'), nullable=True),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('role', sa.String(50), nullable=False),
        sa.Column('status', _enum('team_member_status', 'active', 'inactive'), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_team_members_landlord_id', 'team_members', ['landlord_id'])
    op.create_index('ix_team_members_user_id', 'team_members', ['user_id'])

    op.create_table(
        'team_member_compensations',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column(
            'team_member_id',
            sa.Integer(),
            sa.ForeignKey('team_members.id', ondelete='CASCADE'),
            nullable=False,
            unique=True
        ),
        sa.Column('pay_type', _enum('compensation_pay_type', 'hourly', 'salary'), nullable=False),
        sa.Column('hourly_rate', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('salary_amount', sa.Numeric(precision=12, scale=2), nullable=True),
        sa.Column('overtime_rate', sa.Numeric(precision=10, scale=2), nullable=True),
        sa.Column('commission_rate', sa.Numeric(precision=5, scale=2), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'shifts',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _landlord_fk(),
        sa.Column('team_member_id', sa.Integer(), sa.ForeignKey('team_members.id'), nullable=False),
        sa.Column('property_id', sa.Integer(), sa.ForeignKey('properties.id'), nullable=True),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('start_time', sa.String(5), nullable=False),
        sa.Column('end_time', sa.String(5), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('status', _enum('shift_status', 'scheduled', 'completed', 'missed', 'cancelled'), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_shifts_landlord_id', 'shifts', ['landlord_id'])
    op.create_index('ix_shifts_team_member_id', 'shifts', ['team_member_id'])
    op.create_index('ix_shifts_date', 'shifts', ['date'])

    op.create_table(
        'payroll_settings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _landlord_fk(unique=True),
        sa.Column(
            'pay_period_type',
            _enum('pay_period_type', 'weekly', 'biweekly', 'semimonthly', 'monthly'),
            nullable=False
        ),
        sa.Column('pay_period_start_day', sa.Integer(), nullable=False),
        sa.Column('overtime_threshold', sa.Numeric(precision=5, scale=2), nullable=False),
        sa.Column('daily_overtime_threshold', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('overtime_multiplier', sa.Numeric(precision=4, scale=2), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table(
        'timesheets',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _landlord_fk(),
        sa.Column('team_member_id', sa.Integer(), sa.ForeignKey('team_members.id'), nullable=False),
        sa.Column('period_start', sa.Date(), nullable=False),
        sa.Column('period_end', sa.Date(), nullable=False),
        sa.Column('total_hours', sa.Numeric(precision=7, scale=2), nullable=False),
        sa.Column('regular_hours', sa.Numeric(precision=7, scale=2), nullable=False),
        sa.Column('overtime_hours', sa.Numeric(precision=7, scale=2), nullable=False),
        sa.Column(
            'status',
            _enum('timesheet_status', 'draft', 'submitted', 'approved', 'rejected', 'paid'),
            nullable=False
        ),
        sa.Column('submitted_at', sa.DateTime(), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
        sa.Column('review_notes', sa.Text(), nullable=True),
        sa.Column('paid_at', sa.DateTime(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('team_member_id', 'period_start', 'period_end', name='uq_timesheets_member_period'),
    )
    op.create_index('ix_timesheets_landlord_id', 'timesheets', ['landlord_id'])
    op.create_index('ix_timesheets_team_member_id', 'timesheets', ['team_member_id'])
    op.create_index('ix_timesheets_status', 'timesheets', ['status'])

    op.create_table(
        'time_entries',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('team_member_id', sa.Integer(), sa.ForeignKey('team_members.id'), nullable=False),
        sa.Column('property_id', sa.Integer(), sa.ForeignKey('properties.id'), nullable=True),
        sa.Column('shift_id', sa.Integer(), sa.ForeignKey('shifts.id'), nullable=True),
        sa.Column('timesheet_id', sa.Integer(), sa.ForeignKey('timesheets.id'), nullable=True),
        sa.Column('clock_in', sa.DateTime(), nullable=False),
        sa.Column('clock_out', sa.DateTime(), nullable=True),
        sa.Column('break_minutes', sa.Integer(), nullable=False),
        sa.Column('total_minutes', sa.Integer(), nullable=True),
        sa.Column('clock_in_location', sa.String(255), nullable=True),
        sa.Column('clock_out_location', sa.String(255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('is_manual', sa.Boolean(), nullable=False),
        sa.Column('status', _enum('time_entry_status', 'active', 'completed'), nullable=False),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_time_entries_team_member_id', 'time_entries', ['team_member_id'])
    op.create_index('ix_time_entries_timesheet_id', 'time_entries', ['timesheet_id'])
    op.create_index('ix_time_entries_status', 'time_entries', ['status'])

    op.create_table(
        'team_payments',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _landlord_fk(),
        sa.Column('team_member_id', sa.Integer(), sa.ForeignKey('team_members.id'), nullable=False),
        sa.Column('timesheet_id', sa.Integer(), sa.ForeignKey('timesheets.id'), nullable=True),
        sa.Column('payment_type', _enum('team_payment_type', 'payroll', 'bonus'), nullable=False),
        sa.Column('amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('platform_fee', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('description', sa.String(200), nullable=True),
        sa.Column('status', sa.String(20), nullable=False),
        sa.Column('period_start', sa.Date(), nullable=True),
        sa.Column('period_end', sa.Date(), nullable=True),
        sa.Column('paid_at', sa.DateTime(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_team_payments_landlord_id', 'team_payments', ['landlord_id'])
    op.create_index('ix_team_payments_team_member_id', 'team_payments', ['team_member_id'])

    op.create_table(
        'time_off_requests',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('team_member_id', sa.Integer(), sa.ForeignKey('team_members.id'), nullable=False),
        _landlord_fk(),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('request_type', sa.String(20), nullable=False),
        sa.Column('reason', sa.Text(), nullable=True),
        sa.Column('status', _enum('time_off_status', 'pending', 'approved', 'denied'), nullable=False),
        sa.Column('review_notes', sa.Text(), nullable=True),
        sa.Column('reviewed_at', sa.DateTime(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_time_off_requests_team_member_id', 'time_off_requests', ['team_member_id'])
    op.create_index('ix_time_off_requests_landlord_id', 'time_off_requests', ['landlord_id'])

    op.create_table(
        'job_postings',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _landlord_fk(),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=False),
        sa.Column('job_type', sa.String(20), nullable=False),
        sa.Column('location', sa.String(255), nullable=True),
        sa.Column('salary', sa.String(100), nullable=True),
        sa.Column('requirements', sa.Text(), nullable=True),
        sa.Column('benefits', sa.Text(), nullable=True),
        sa.Column('status', _enum('job_status', 'draft', 'active', 'closed'), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_job_postings_landlord_id', 'job_postings', ['landlord_id'])
    op.create_index('ix_job_postings_status', 'job_postings', ['status'])

    op.create_table(
        'applicants',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('job_id', sa.Integer(), sa.ForeignKey('job_postings.id', ondelete='CASCADE'), nullable=False),
        sa.Column('name', sa.String(200), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('resume_url', sa.String(500), nullable=True),
        sa.Column('cover_letter', sa.Text(), nullable=True),
        sa.Column(
            'status',
            _enum('applicant_status', 'new', 'reviewing', 'interview', 'hired', 'rejected'),
            nullable=False
        ),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('applied_at', sa.DateTime(), server_default=sa.func.now(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_applicants_job_id', 'applicants', ['job_id'])

    op.create_table(
        'contractors',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        _landlord_fk(),
        sa.Column('name', sa.String(100), nullable=False),
        sa.Column('email', sa.String(255), nullable=False),
        sa.Column('phone', sa.String(50), nullable=True),
        sa.Column('specialties', sa.JSON(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('rating', sa.Numeric(precision=2, scale=1), nullable=True),
        sa.Column('is_payment_ready', sa.Boolean(), nullable=False),
        sa.Column('stripe_onboarding_status', sa.String(20), nullable=False),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_contractors_landlord_id', 'contractors', ['landlord_id'])

    op.create_table(
        'maintenance_tickets',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('property_id', sa.Integer(), sa.ForeignKey('properties.id', ondelete='CASCADE'), nullable=False),
        sa.Column('unit_id', sa.Integer(), sa.ForeignKey('property_units.id'), nullable=True),
        sa.Column('tenant_id', sa.Integer(), sa.ForeignKey('tenants.id'), nullable=True),
        sa.Column('contractor_id', sa.Integer(), sa.ForeignKey('contractors.id'), nullable=True),
        sa.Column('title', sa.String(200), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('category', sa.String(50), nullable=False),
        sa.Column('priority', _enum('ticket_priority', 'low', 'medium', 'high', 'urgent'), nullable=False),
        sa.Column('status', _enum('ticket_status', 'open', 'in_progress', 'resolved', 'closed'), nullable=False),
        *_timestamps(),
        sa.Column('resolved_at', sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_maintenance_tickets_property_id', 'maintenance_tickets', ['property_id'])
    op.create_index('ix_maintenance_tickets_contractor_id', 'maintenance_tickets', ['contractor_id'])
    op.create_index('ix_maintenance_tickets_status', 'maintenance_tickets', ['status'])


def downgrade() -> None:
    """Drop all tables in reverse dependency order."""
    for table in (
        'maintenance_tickets',
        'contractors',
        'applicants',
        'job_postings',
        'time_off_requests',
        'team_payments',
        'time_entries',
        'timesheets',
        'payroll_settings',
        'shifts',
        'team_member_compensations',
        'team_members',
        'late_fee_settings',
        'rent_reminder_settings',
        'property_fee_overrides',
        'fee_settings',
        'rent_payments',
        'landlord_wallets',
        'payouts',
        'saved_payout_methods',
        'leases',
        'tenants',
        'property_units',
        'properties',
        'landlords',
        'users',
    ):
        op.drop_table(table)
