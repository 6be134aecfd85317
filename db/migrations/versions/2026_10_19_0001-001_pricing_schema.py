"""Pricing schema - halls, pricing rules, overrides, discounts, calendar days, bookings, services.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list:
    return [
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False),
        sa.Column('updated_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
    ]


def _hall_fk(table: str) -> sa.ForeignKeyConstraint:
    return sa.ForeignKeyConstraint(
        ['hall_id'], ['halls.id'],
        name=op.f(f'fk_{table}_hall_id_halls'),
        ondelete='CASCADE',
    )


def upgrade() -> None:
    """Create pricing tables."""
    op.create_table(
        'halls',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('slug', sa.String(length=255), nullable=False),
        sa.Column('base_price', sa.Numeric(12, 2), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_halls')),
        sa.UniqueConstraint('slug', name=op.f('uq_halls_slug')),
    )
    op.create_index(op.f('ix_halls_created_at'), 'halls', ['created_at'], unique=False)

    op.create_table(
        'pricing_rules',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('hall_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('rule_level', sa.Integer(), nullable=False),
        sa.Column('start_date', sa.Date(), nullable=True),
        sa.Column('end_date', sa.Date(), nullable=True),
        sa.Column('days_of_week', sa.JSON(), nullable=True),
        sa.Column('adjustment_type', sa.String(length=10), nullable=False),
        sa.Column('adjustment_value', sa.Numeric(12, 2), nullable=False),
        *_timestamps(),
        _hall_fk('pricing_rules'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_pricing_rules')),
    )
    op.create_index(op.f('ix_pricing_rules_hall_id'), 'pricing_rules', ['hall_id'], unique=False)
    op.create_index(op.f('ix_pricing_rules_created_at'), 'pricing_rules', ['created_at'], unique=False)
    op.create_index('ix_pricing_rules_hall_level', 'pricing_rules', ['hall_id', 'rule_level'], unique=False)

    op.create_table(
        'calendar_overrides',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('hall_id', sa.String(length=36), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        *_timestamps(),
        _hall_fk('calendar_overrides'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_calendar_overrides')),
        sa.UniqueConstraint('hall_id', 'date', name='uq_calendar_overrides_hall_date'),
    )
    op.create_index(op.f('ix_calendar_overrides_created_at'), 'calendar_overrides', ['created_at'], unique=False)

    op.create_table(
        'discounts',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('hall_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False, server_default=''),
        sa.Column('type', sa.String(length=10), nullable=False),
        sa.Column('value', sa.Numeric(12, 2), nullable=False),
        sa.Column('min_advance_booking_days', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('active', sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        _hall_fk('discounts'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_discounts')),
    )
    op.create_index(op.f('ix_discounts_created_at'), 'discounts', ['created_at'], unique=False)
    op.create_index('ix_discounts_hall_active', 'discounts', ['hall_id', 'active'], unique=False)

    op.create_table(
        'calendar_days',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('hall_id', sa.String(length=36), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='available'),
        sa.Column('manual_price', sa.Numeric(12, 2), nullable=True),
        *_timestamps(),
        _hall_fk('calendar_days'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_calendar_days')),
        sa.UniqueConstraint('hall_id', 'date', name='uq_calendar_days_hall_date'),
    )
    op.create_index(op.f('ix_calendar_days_created_at'), 'calendar_days', ['created_at'], unique=False)

    op.create_table(
        'bookings',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('hall_id', sa.String(length=36), nullable=False),
        sa.Column('event_date', sa.Date(), nullable=False),
        sa.Column('total_price', sa.Numeric(12, 2), nullable=False, server_default='0'),
        sa.Column('status', sa.String(length=20), nullable=False, server_default='tentative'),
        *_timestamps(),
        _hall_fk('bookings'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_bookings')),
    )
    op.create_index(op.f('ix_bookings_status'), 'bookings', ['status'], unique=False)
    op.create_index(op.f('ix_bookings_created_at'), 'bookings', ['created_at'], unique=False)
    op.create_index('ix_bookings_hall_event_date', 'bookings', ['hall_id', 'event_date'], unique=False)

    op.create_table(
        'hall_services',
        sa.Column('id', sa.String(length=36), nullable=False),
        sa.Column('hall_id', sa.String(length=36), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('price', sa.Numeric(12, 2), nullable=False),
        *_timestamps(),
        _hall_fk('hall_services'),
        sa.PrimaryKeyConstraint('id', name=op.f('pk_hall_services')),
    )
    op.create_index(op.f('ix_hall_services_hall_id'), 'hall_services', ['hall_id'], unique=False)
    op.create_index(op.f('ix_hall_services_created_at'), 'hall_services', ['created_at'], unique=False)


def downgrade() -> None:
    """Drop pricing tables."""
    for table in (
        'hall_services',
        'bookings',
        'calendar_days',
        'discounts',
        'calendar_overrides',
        'pricing_rules',
    ):
        op.drop_table(table)
    op.drop_table('halls')
