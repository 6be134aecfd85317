"""SQLAlchemy implementation of the PricingGateway."""

import logging
from datetime import date
from typing import Any, Callable, Optional, TypeVar

from pydantic import ValidationError
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from domain.enums import BookingStatus, DayStatus
from domain.errors import PricingDataFetchError
from domain.models import (
    CalendarDay,
    CalendarOverride,
    Discount,
    Hall,
    HallService,
    PricingRule,
)
from services.gateway import PricingGateway

from . import models_sqlalchemy as orm


logger = logging.getLogger(__name__)

T = TypeVar("T")


class SqlAlchemyPricingGateway(PricingGateway):
    """
    Reads pricing rows with async SQLAlchemy.

    Every read opens its own session, so reads can run concurrently.
    Driver failures and rows that do not map onto the domain models both
    surface as PricingDataFetchError.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self.session_factory = session_factory

    async def _scalars(self, resource: str, statement) -> list[Any]:
        try:
            async with self.session_factory() as session:
                result = await session.execute(statement)
                return list(result.scalars().all())
        except SQLAlchemyError as e:
            logger.error(f"Failed to fetch {resource}: {e}")
            raise PricingDataFetchError(resource, e) from e

    @staticmethod
    def _map(resource: str, rows: list[Any], build: Callable[[Any], T]) -> list[T]:
        """Convert rows to domain models, rejecting the whole read on a malformed row."""
        mapped = []
        for row in rows:
            try:
                mapped.append(build(row))
            except (ValidationError, ValueError) as e:
                logger.error(
                    f"Malformed {resource} row",
                    extra={"row_id": getattr(row, "id", None), "error": str(e)},
                )
                raise PricingDataFetchError(resource, e) from e
        return mapped

    async def get_hall(self, hall_id: str) -> Optional[Hall]:
        rows = await self._scalars(
            "hall", select(orm.Hall).where(orm.Hall.id == hall_id)
        )
        halls = self._map(
            "hall",
            rows[:1],
            lambda row: Hall(id=row.id, name=row.name, slug=row.slug, base_price=row.base_price),
        )
        return halls[0] if halls else None

    async def list_pricing_rules(self, hall_id: str) -> list[PricingRule]:
        rows = await self._scalars(
            "pricing rules",
            select(orm.PricingRule)
            .where(orm.PricingRule.hall_id == hall_id)
            .order_by(orm.PricingRule.rule_level.desc(), orm.PricingRule.created_at, orm.PricingRule.id),
        )
        return self._map("pricing rules", rows, lambda row: PricingRule(
            id=row.id,
            hall_id=row.hall_id,
            name=row.name,
            tier=row.rule_level,
            start_date=row.start_date,
            end_date=row.end_date,
            days_of_week=row.days_of_week or [],
            adjustment_kind=row.adjustment_type,
            adjustment_value=row.adjustment_value,
        ))

    async def list_overrides(
        self, hall_id: str, start: date, end: date
    ) -> list[CalendarOverride]:
        rows = await self._scalars(
            "calendar overrides",
            select(orm.CalendarOverride)
            .where(
                orm.CalendarOverride.hall_id == hall_id,
                orm.CalendarOverride.date >= start,
                orm.CalendarOverride.date <= end,
            )
            .order_by(orm.CalendarOverride.date),
        )
        return self._map("calendar overrides", rows, lambda row: CalendarOverride(
            id=row.id, hall_id=row.hall_id, date=row.date, price=row.price,
        ))

    async def list_active_discounts(self, hall_id: str) -> list[Discount]:
        rows = await self._scalars(
            "discounts",
            select(orm.Discount)
            .where(orm.Discount.hall_id == hall_id, orm.Discount.active.is_(True))
            .order_by(orm.Discount.created_at, orm.Discount.id),
        )
        return self._map("discounts", rows, lambda row: Discount(
            id=row.id,
            hall_id=row.hall_id,
            name=row.name,
            kind=row.type,
            value=row.value,
            min_advance_days=row.min_advance_booking_days,
            active=row.active,
        ))

    async def list_calendar_days(
        self, hall_id: str, start: date, end: date
    ) -> list[CalendarDay]:
        rows = await self._scalars(
            "calendar days",
            select(orm.CalendarDay).where(
                orm.CalendarDay.hall_id == hall_id,
                orm.CalendarDay.date >= start,
                orm.CalendarDay.date <= end,
            ),
        )
        return self._map("calendar days", rows, lambda row: CalendarDay(
            hall_id=row.hall_id,
            date=row.date,
            status=DayStatus(row.status),
            manual_price=row.manual_price,
        ))

    async def list_booked_dates(self, hall_id: str, start: date, end: date) -> set[date]:
        dates = await self._scalars(
            "bookings",
            select(orm.Booking.event_date)
            .where(
                orm.Booking.hall_id == hall_id,
                orm.Booking.event_date >= start,
                orm.Booking.event_date <= end,
                orm.Booking.status != BookingStatus.CANCELLED.value,
            )
            .distinct(),
        )
        return set(dates)

    async def list_hall_services(self, hall_id: str) -> list[HallService]:
        rows = await self._scalars(
            "hall services",
            select(orm.HallService)
            .where(orm.HallService.hall_id == hall_id)
            .order_by(orm.HallService.name),
        )
        return self._map("hall services", rows, lambda row: HallService(
            id=row.id, hall_id=row.hall_id, name=row.name, price=row.price,
        ))
