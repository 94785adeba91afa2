"""Initial schema: agencies, contacts, trips, itineraries, activities, finance, notifications

Revision ID: 001_initial
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = '001_initial'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list[sa.Column]:
    cols = [sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False)]
    if updated:
        cols.append(sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False))
    return cols


def upgrade() -> None:
    # --- Tenancy ---
    op.create_table('agencies',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('default_currency', sa.String(length=3), nullable=False, server_default='CAD'),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table('users',
        sa.Column('id', sa.UUID(), nullable=False),
        sa.Column('agency_id', sa.UUID(), nullable=False),
        sa.Column('email', sa.String(length=255), nullable=False),
        sa.Column('first_name', sa.String(length=100), nullable=False),
        sa.Column('last_name', sa.String(length=100), nullable=False),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='agent'),
        sa.Column('is_active', sa.Boolean(), nullable=False, server_default=sa.text('true')),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(['agency_id'], ['agencies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('email'),
    )
    op.create_index('ix_users_agency_id', 'users', ['agency_id'])

    # --- Contacts ---
    op.create_table('contacts',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('agency_id', sa.UUID(), nullable=False),
        sa.Column('contact_type', sa.String(length=20), nullable=False, server_default='client'),
        sa.Column('first_name', sa.String(length=100), nullable=True),
        sa.Column('last_name', sa.String(length=100), nullable=True),
        sa.Column('legal_first_name', sa.String(length=100), nullable=True),
        sa.Column('legal_last_name', sa.String(length=100), nullable=True),
        sa.Column('middle_name', sa.String(length=100), nullable=True),
        sa.Column('preferred_name', sa.String(length=100), nullable=True),
        sa.Column('prefix', sa.String(length=20), nullable=True),
        sa.Column('suffix', sa.String(length=20), nullable=True),
        sa.Column('gender', sa.String(length=30), nullable=True),
        sa.Column('pronouns', sa.String(length=30), nullable=True),
        sa.Column('email', sa.String(length=255), nullable=True),
        sa.Column('phone', sa.String(length=50), nullable=True),
        sa.Column('date_of_birth', sa.Date(), nullable=True),
        sa.Column('passport_number', sa.String(length=50), nullable=True),
        sa.Column('passport_expiry', sa.Date(), nullable=True),
        sa.Column('passport_country', sa.String(length=3), nullable=True),
        sa.Column('passport_issue_date', sa.Date(), nullable=True),
        sa.Column('nationality', sa.String(length=3), nullable=True),
        sa.Column('redress_number', sa.String(length=50), nullable=True),
        sa.Column('known_traveler_number', sa.String(length=50), nullable=True),
        sa.Column('dietary_requirements', sa.Text(), nullable=True),
        sa.Column('mobility_requirements', sa.Text(), nullable=True),
        sa.Column('seat_preference', sa.String(length=30), nullable=True),
        sa.Column('cabin_preference', sa.String(length=30), nullable=True),
        sa.Column('floor_preference', sa.String(length=30), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['agency_id'], ['agencies.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_contacts_agency_id', 'contacts', ['agency_id'])

    # --- Trips ---
    op.create_table('trips',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('agency_id', sa.UUID(), nullable=False),
        sa.Column('owner_id', sa.UUID(), nullable=True),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('reference_number', sa.String(length=20), nullable=True),
        sa.Column('trip_type', sa.String(length=20), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='draft'),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='CAD'),
        sa.Column('primary_contact_id', sa.UUID(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['agency_id'], ['agencies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['owner_id'], ['users.id']),
        sa.ForeignKeyConstraint(['primary_contact_id'], ['contacts.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('reference_number'),
    )
    op.create_index('ix_trips_agency_id', 'trips', ['agency_id'])

    op.create_table('trip_reference_sequences',
        sa.Column('prefix', sa.String(length=10), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('last_value', sa.Integer(), nullable=False, server_default='0'),
        sa.PrimaryKeyConstraint('prefix', 'year'),
    )

    op.create_table('trip_travelers',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('trip_id', sa.UUID(), nullable=False),
        sa.Column('contact_id', sa.UUID(), nullable=True),
        sa.Column('role', sa.String(length=20), nullable=False, server_default='limited_access'),
        sa.Column('is_primary_traveler', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('traveler_type', sa.String(length=10), nullable=False, server_default='adult'),
        sa.Column('sequence_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('contact_snapshot', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('snapshot_updated_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['trip_id'], ['trips.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['contact_id'], ['contacts.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_trip_travelers_trip_id', 'trip_travelers', ['trip_id'])

    # --- Itineraries ---
    op.create_table('itineraries',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('trip_id', sa.UUID(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='draft'),
        sa.Column('is_selected', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('sequence_order', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(),
        sa.ForeignKeyConstraint(['trip_id'], ['trips.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_itineraries_trip_id', 'itineraries', ['trip_id'])

    op.create_table('itinerary_days',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('itinerary_id', sa.UUID(), nullable=False),
        sa.Column('day_number', sa.Integer(), nullable=True),
        sa.Column('date', sa.Date(), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        sa.Column('sequence_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('start_location_name', sa.String(length=255), nullable=True),
        sa.Column('start_location_lat', sa.Numeric(precision=9, scale=6), nullable=True),
        sa.Column('start_location_lng', sa.Numeric(precision=9, scale=6), nullable=True),
        sa.Column('start_location_override', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('end_location_name', sa.String(length=255), nullable=True),
        sa.Column('end_location_lat', sa.Numeric(precision=9, scale=6), nullable=True),
        sa.Column('end_location_lng', sa.Numeric(precision=9, scale=6), nullable=True),
        sa.Column('end_location_override', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        *_timestamps(),
        sa.ForeignKeyConstraint(['itinerary_id'], ['itineraries.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_itinerary_days_itinerary_id', 'itinerary_days', ['itinerary_id'])

    # --- Activities ---
    op.create_table('activities',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('trip_id', sa.UUID(), nullable=False),
        sa.Column('itinerary_id', sa.UUID(), nullable=False),
        sa.Column('itinerary_day_id', sa.UUID(), nullable=True),
        sa.Column('parent_activity_id', sa.UUID(), nullable=True),
        sa.Column('activity_type', sa.String(length=30), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('sequence_order', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('start_datetime', sa.DateTime(timezone=True), nullable=True),
        sa.Column('end_datetime', sa.DateTime(timezone=True), nullable=True),
        sa.Column('location', sa.String(length=255), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='proposed'),
        sa.Column('is_booked', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('details', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['trip_id'], ['trips.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['itinerary_id'], ['itineraries.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['itinerary_day_id'], ['itinerary_days.id'], ondelete='SET NULL'),
        sa.ForeignKeyConstraint(['parent_activity_id'], ['activities.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_activities_trip_id', 'activities', ['trip_id'])
    op.create_index('ix_activities_itinerary_id', 'activities', ['itinerary_id'])
    op.create_index('ix_activities_itinerary_day_id', 'activities', ['itinerary_day_id'])

    op.create_table('activity_pricing',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('activity_id', sa.UUID(), nullable=False),
        sa.Column('pricing_type', sa.String(length=20), nullable=False, server_default='per_person'),
        sa.Column('currency', sa.String(length=3), nullable=False, server_default='CAD'),
        sa.Column('total_price_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('taxes_and_fees_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('commission_total_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('commission_split_percentage', sa.Numeric(precision=5, scale=2), nullable=False, server_default='100'),
        sa.Column('commission_expected_date', sa.Date(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['activity_id'], ['activities.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('activity_id'),
    )

    op.create_table('payment_schedule_configs',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('activity_id', sa.UUID(), nullable=False),
        sa.Column('schedule_type', sa.String(length=20), nullable=False, server_default='full'),
        sa.Column('deposit_type', sa.String(length=20), nullable=True),
        sa.Column('deposit_percentage', sa.Numeric(precision=5, scale=2), nullable=True),
        sa.Column('deposit_amount_cents', sa.Integer(), nullable=True),
        sa.Column('guarantee_card_holder', sa.String(length=255), nullable=True),
        sa.Column('guarantee_card_last4', sa.String(length=4), nullable=True),
        sa.Column('guarantee_authorization_code', sa.String(length=50), nullable=True),
        sa.Column('guarantee_authorization_amount_cents', sa.Integer(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['activity_id'], ['activities.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('activity_id'),
    )

    op.create_table('expected_payment_items',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('activity_id', sa.UUID(), nullable=False),
        sa.Column('payment_name', sa.String(length=100), nullable=False),
        sa.Column('expected_amount_cents', sa.Integer(), nullable=False),
        sa.Column('paid_amount_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='pending'),
        sa.Column('sequence_order', sa.Integer(), nullable=False, server_default='0'),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(['activity_id'], ['activities.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_expected_payment_items_activity_id', 'expected_payment_items', ['activity_id'])

    op.create_table('payment_transactions',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('expected_payment_item_id', sa.UUID(), nullable=False),
        sa.Column('transaction_type', sa.String(length=10), nullable=False, server_default='payment'),
        sa.Column('amount_cents', sa.Integer(), nullable=False),
        sa.Column('transaction_date', sa.Date(), nullable=False),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(['expected_payment_item_id'], ['expected_payment_items.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(
        'ix_payment_transactions_expected_payment_item_id', 'payment_transactions', ['expected_payment_item_id']
    )

    op.create_table('commission_tracking',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('agency_id', sa.UUID(), nullable=False),
        sa.Column('activity_id', sa.UUID(), nullable=False),
        sa.Column('commission_amount', sa.Numeric(precision=12, scale=2), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='expected'),
        sa.Column('received_date', sa.Date(), nullable=True),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(['agency_id'], ['agencies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['activity_id'], ['activities.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_commission_tracking_activity_id', 'commission_tracking', ['activity_id'])

    # --- Finance ---
    op.create_table('traveler_splits',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('trip_id', sa.UUID(), nullable=False),
        sa.Column('activity_id', sa.UUID(), nullable=False),
        sa.Column('traveler_id', sa.UUID(), nullable=False),
        sa.Column('split_type', sa.String(length=10), nullable=False, server_default='equal'),
        sa.Column('amount_cents', sa.Integer(), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('exchange_rate_to_trip_currency', sa.Numeric(precision=18, scale=8), nullable=True),
        sa.Column('exchange_rate_snapshot_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('notes', sa.Text(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['trip_id'], ['trips.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['activity_id'], ['activities.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['traveler_id'], ['trip_travelers.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_traveler_splits_trip_id', 'traveler_splits', ['trip_id'])
    op.create_index('ix_traveler_splits_activity_id', 'traveler_splits', ['activity_id'])
    op.create_index('ix_traveler_splits_traveler_id', 'traveler_splits', ['traveler_id'])

    op.create_table('service_fees',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('agency_id', sa.UUID(), nullable=False),
        sa.Column('trip_id', sa.UUID(), nullable=False),
        sa.Column('recipient_type', sa.String(length=20), nullable=False, server_default='primary_traveller'),
        sa.Column('recipient_traveler_id', sa.UUID(), nullable=True),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('description', sa.Text(), nullable=True),
        sa.Column('amount_cents', sa.Integer(), nullable=False),
        sa.Column('currency', sa.String(length=3), nullable=False),
        sa.Column('exchange_rate_to_trip_currency', sa.Numeric(precision=18, scale=8), nullable=True),
        sa.Column('amount_in_trip_currency_cents', sa.Integer(), nullable=True),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='draft'),
        sa.Column('due_date', sa.Date(), nullable=True),
        sa.Column('sent_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('paid_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('refunded_amount_cents', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('refund_reason', sa.Text(), nullable=True),
        sa.Column('refunded_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('cancelled_at', sa.DateTime(timezone=True), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(['agency_id'], ['agencies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['trip_id'], ['trips.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['recipient_traveler_id'], ['trip_travelers.id'], ondelete='SET NULL'),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_service_fees_trip_id', 'service_fees', ['trip_id'])

    op.create_table('exchange_rates',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('from_currency', sa.String(length=3), nullable=False),
        sa.Column('to_currency', sa.String(length=3), nullable=False),
        sa.Column('rate', sa.Numeric(precision=18, scale=8), nullable=False),
        sa.Column('rate_date', sa.Date(), nullable=False),
        sa.Column('source', sa.String(length=20), nullable=False, server_default='api'),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('from_currency', 'to_currency', 'rate_date'),
    )

    # --- Notifications ---
    op.create_table('notifications',
        sa.Column('id', sa.UUID(), nullable=False, server_default=sa.text('gen_random_uuid()')),
        sa.Column('agency_id', sa.UUID(), nullable=False),
        sa.Column('trip_id', sa.UUID(), nullable=True),
        sa.Column('user_id', sa.UUID(), nullable=True),
        sa.Column('type', sa.String(length=50), nullable=False),
        sa.Column('title', sa.String(length=255), nullable=False),
        sa.Column('message', sa.Text(), nullable=False),
        sa.Column('reference_type', sa.String(length=50), nullable=True),
        sa.Column('reference_id', sa.UUID(), nullable=True),
        sa.Column('is_read', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        *_timestamps(updated=False),
        sa.ForeignKeyConstraint(['agency_id'], ['agencies.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['trip_id'], ['trips.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['user_id'], ['users.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index('ix_notifications_agency_id', 'notifications', ['agency_id'])


def downgrade() -> None:
    op.drop_table('notifications')
    op.drop_table('exchange_rates')
    op.drop_table('service_fees')
    op.drop_table('traveler_splits')
    op.drop_table('commission_tracking')
    op.drop_table('payment_transactions')
    op.drop_table('expected_payment_items')
    op.drop_table('payment_schedule_configs')
    op.drop_table('activity_pricing')
    op.drop_table('activities')
    op.drop_table('itinerary_days')
    op.drop_table('itineraries')
    op.drop_table('trip_travelers')
    op.drop_table('trip_reference_sequences')
    op.drop_table('trips')
    op.drop_table('contacts')
    op.drop_table('users')
    op.drop_table('agencies')
