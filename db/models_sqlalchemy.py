"""SQLAlchemy models for the hall pricing tables."""

import datetime
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from sqlalchemy import (
    JSON,
    Boolean,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin
from domain.enums import BookingStatus, DayStatus


def new_id() -> str:
    return str(uuid4())


class Hall(Base, TimestampMixin):
    """Hall table model."""

    __tablename__ = "halls"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    slug: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    base_price: Mapped[Optional[Decimal]] = mapped_column(nullable=True)

    def __repr__(self) -> str:
        return f"<Hall(id={self.id}, slug='{self.slug}', base_price={self.base_price})>"


class PricingRule(Base, TimestampMixin):
    """Pricing rule table model."""

    __tablename__ = "pricing_rules"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    hall_id: Mapped[str] = mapped_column(
        ForeignKey("halls.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    rule_level: Mapped[int] = mapped_column(Integer, nullable=False)

    start_date: Mapped[Optional[datetime.date]] = mapped_column(nullable=True)

    end_date: Mapped[Optional[datetime.date]] = mapped_column(nullable=True)

    # Weekday numbers, 0 = Sunday
    days_of_week: Mapped[Optional[list]] = mapped_column(JSON, nullable=True, default=list)

    adjustment_type: Mapped[str] = mapped_column(String(10), nullable=False)

    adjustment_value: Mapped[Decimal] = mapped_column(nullable=False)

    __table_args__ = (
        Index("ix_pricing_rules_hall_level", "hall_id", "rule_level"),
    )

    def __repr__(self) -> str:
        return (
            f"<PricingRule(id={self.id}, hall_id={self.hall_id}, level={self.rule_level}, "
            f"{self.adjustment_type}={self.adjustment_value})>"
        )


class CalendarOverride(Base, TimestampMixin):
    """Manual per-date price pin."""

    __tablename__ = "calendar_overrides"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    hall_id: Mapped[str] = mapped_column(
        ForeignKey("halls.id", ondelete="CASCADE"),
        nullable=False,
    )

    date: Mapped[datetime.date] = mapped_column(nullable=False)

    price: Mapped[Decimal] = mapped_column(nullable=False)

    __table_args__ = (
        UniqueConstraint("hall_id", "date", name="uq_calendar_overrides_hall_date"),
    )


class Discount(Base, TimestampMixin):
    """Lead-time discount table model."""

    __tablename__ = "discounts"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    hall_id: Mapped[str] = mapped_column(
        ForeignKey("halls.id", ondelete="CASCADE"),
        nullable=False,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")

    type: Mapped[str] = mapped_column(String(10), nullable=False)

    value: Mapped[Decimal] = mapped_column(nullable=False)

    min_advance_booking_days: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    __table_args__ = (
        Index("ix_discounts_hall_active", "hall_id", "active"),
    )


class CalendarDay(Base, TimestampMixin):
    """Tracked status and manual price of a hall's calendar day."""

    __tablename__ = "calendar_days"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    hall_id: Mapped[str] = mapped_column(
        ForeignKey("halls.id", ondelete="CASCADE"),
        nullable=False,
    )

    date: Mapped[datetime.date] = mapped_column(nullable=False)

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=DayStatus.AVAILABLE.value,
    )

    manual_price: Mapped[Optional[Decimal]] = mapped_column(nullable=True)

    __table_args__ = (
        UniqueConstraint("hall_id", "date", name="uq_calendar_days_hall_date"),
    )


class Booking(Base, TimestampMixin):
    """Booking table model. Only the fields availability needs."""

    __tablename__ = "bookings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    hall_id: Mapped[str] = mapped_column(
        ForeignKey("halls.id", ondelete="CASCADE"),
        nullable=False,
    )

    event_date: Mapped[datetime.date] = mapped_column(nullable=False)

    total_price: Mapped[Decimal] = mapped_column(nullable=False, default=Decimal("0"))

    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=BookingStatus.TENTATIVE.value,
        index=True,
    )

    __table_args__ = (
        Index("ix_bookings_hall_event_date", "hall_id", "event_date"),
    )

    def __repr__(self) -> str:
        return (
            f"<Booking(id={self.id}, hall_id={self.hall_id}, "
            f"event_date={self.event_date}, status='{self.status}')>"
        )


class HallService(Base, TimestampMixin):
    """Add-on service priced per hall."""

    __tablename__ = "hall_services"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=new_id)

    hall_id: Mapped[str] = mapped_column(
        ForeignKey("halls.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)

    price: Mapped[Decimal] = mapped_column(nullable=False)
