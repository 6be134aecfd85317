"""
Pricing service: fetches a hall's pricing configuration and runs the resolver.

Reads are issued concurrently through the gateway; the resolver runs once
all inputs are in memory. Availability (booked, maintenance) is layered on
top of the resolved price here, never inside the resolver.
"""
import asyncio
import logging
from datetime import date
from decimal import Decimal
from typing import Callable, Dict, Iterable, Optional, Set

from core.settings import settings
from core.utils_datetime import DateLike, get_current_date, iter_days, to_calendar_date
from domain.enums import DayStatus
from domain.errors import HallNotFoundError, InvalidDateRangeError, UnknownServiceError
from domain.models import (
    CalendarDay,
    DayDisplayState,
    PriceBreakdown,
    PricingInputs,
    QuoteEstimate,
    QuoteLine,
)
from services.gateway import PricingGateway
from services.pricing_resolver import resolve_price


logger = logging.getLogger(__name__)


async def gather_or_cancel(*aws):
    """
    Await reads concurrently; if one fails, cancel the rest before re-raising.

    Cancelled reads are awaited so their sessions are closed by the time the
    error reaches the caller.
    """
    tasks = [asyncio.ensure_future(aw) for aw in aws]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


class PricingService:
    """Service for hall price quotes, availability calendars and estimates."""

    def __init__(
        self,
        gateway: PricingGateway,
        today_provider: Optional[Callable[[], date]] = None,
        max_calendar_days: Optional[int] = None,
        currency: Optional[str] = None,
    ):
        """
        Initialize the pricing service.

        Args:
            gateway: Data gateway returning hall-scoped pricing rows
            today_provider: Returns the current date; defaults to today in the
                hall timezone
            max_calendar_days: Longest range accepted by calendar()
            currency: Currency code stamped on estimates
        """
        self.gateway = gateway
        self.today_provider = today_provider or get_current_date
        self.max_calendar_days = max_calendar_days or settings.calendar_max_days
        self.currency = currency or settings.currency

    async def get_inputs(self, hall_id: str, start: date, end: date) -> PricingInputs:
        """
        Fetch the hall and its rules, overrides and discounts concurrently.

        Raises:
            HallNotFoundError: If the hall does not exist
        """
        hall, rules, overrides, discounts = await gather_or_cancel(
            self.gateway.get_hall(hall_id),
            self.gateway.list_pricing_rules(hall_id),
            self.gateway.list_overrides(hall_id, start, end),
            self.gateway.list_active_discounts(hall_id),
        )

        if hall is None:
            raise HallNotFoundError(hall_id)

        logger.info(
            f"Loaded pricing inputs for hall {hall_id}",
            extra={
                "rules": len(rules),
                "overrides": len(overrides),
                "discounts": len(discounts),
            },
        )

        return PricingInputs(
            hall=hall,
            rules=tuple(rules),
            overrides=tuple(overrides),
            discounts=tuple(discounts),
        )

    async def quote(self, hall_id: str, target_date: DateLike) -> PriceBreakdown:
        """Resolve the price of a hall on one date."""
        day = to_calendar_date(target_date)
        inputs = await self.get_inputs(hall_id, day, day)
        return self._resolve(inputs, day, self.today_provider())

    async def calendar(
        self, hall_id: str, start: DateLike, end: DateLike
    ) -> Dict[str, DayDisplayState]:
        """
        Build the availability calendar for a date range.

        Each day carries the resolved price, replaced by the day's manual
        price when one is set, and hidden when the day is booked or under
        maintenance.

        Args:
            hall_id: Hall to price
            start: First day (inclusive)
            end: Last day (inclusive)

        Returns:
            Mapping of ISO date string to DayDisplayState

        Raises:
            InvalidDateRangeError: If end is before start or the range is too long
            HallNotFoundError: If the hall does not exist
        """
        first = to_calendar_date(start)
        last = to_calendar_date(end)
        self._check_range(first, last)

        inputs, calendar_days, booked_dates = await gather_or_cancel(
            self.get_inputs(hall_id, first, last),
            self.gateway.list_calendar_days(hall_id, first, last),
            self.gateway.list_booked_dates(hall_id, first, last),
        )

        today = self.today_provider()
        day_records = {record.date: record for record in calendar_days}

        return {
            day.isoformat(): self._day_state(
                inputs, day, today, day_records.get(day), booked_dates
            )
            for day in iter_days(first, last)
        }

    async def estimate(
        self, hall_id: str, target_date: DateLike, service_ids: Iterable[str] = ()
    ) -> QuoteEstimate:
        """
        Estimate the total for a date plus selected add-on services.

        The venue line uses the price the calendar shows for that day, which
        is zero when the day is not available.

        Raises:
            UnknownServiceError: If a service id is not offered by the hall
        """
        day = to_calendar_date(target_date)
        wanted = list(dict.fromkeys(service_ids))

        days, services = await gather_or_cancel(
            self.calendar(hall_id, day, day),
            self.gateway.list_hall_services(hall_id),
        )
        state = days[day.isoformat()]

        offered = {service.id: service for service in services}
        missing = [service_id for service_id in wanted if service_id not in offered]
        if missing:
            raise UnknownServiceError(missing)

        venue_price = state.price if state.price is not None else Decimal("0")
        lines = [QuoteLine(label="Venue Rental", amount=venue_price)]
        lines.extend(
            QuoteLine(label=offered[service_id].name, amount=offered[service_id].price)
            for service_id in wanted
        )
        services_total = sum((offered[s].price for s in wanted), Decimal("0"))

        return QuoteEstimate(
            hall_id=hall_id,
            date=day,
            status=state.status,
            venue_price=venue_price,
            lines=tuple(lines),
            services_total=services_total,
            grand_total=venue_price + services_total,
            currency=self.currency,
        )

    def _check_range(self, first: date, last: date) -> None:
        if last < first:
            raise InvalidDateRangeError("End date is before start date")
        span = (last - first).days + 1
        if span > self.max_calendar_days:
            raise InvalidDateRangeError(
                f"Date range of {span} days exceeds the limit of {self.max_calendar_days}"
            )

    @staticmethod
    def _resolve(inputs: PricingInputs, day: date, today: date) -> PriceBreakdown:
        return resolve_price(
            day,
            inputs.hall.base_price,
            inputs.rules,
            inputs.overrides,
            inputs.discounts,
            today=today,
        )

    def _day_state(
        self,
        inputs: PricingInputs,
        day: date,
        today: date,
        record: Optional[CalendarDay],
        booked_dates: Set[date],
    ) -> DayDisplayState:
        breakdown = self._resolve(inputs, day, today)

        if day in booked_dates:
            status = DayStatus.BOOKED
        elif record is not None and record.status == DayStatus.MAINTENANCE:
            status = DayStatus.MAINTENANCE
        else:
            status = DayStatus.AVAILABLE

        price: Optional[Decimal] = breakdown.final_price
        if record is not None and record.manual_price is not None:
            price = record.manual_price

        if status != DayStatus.AVAILABLE:
            price = None

        return DayDisplayState(date=day, status=status, price=price, is_past=day < today)

