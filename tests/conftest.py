"""Pytest configuration and fixtures for hall pricing tests."""
from datetime import date
from decimal import Decimal
from typing import Optional

import pytest
import pytest_asyncio

from db.session import create_session_factory, create_test_engine, init_db
from domain.enums import AdjustmentKind, DayStatus, DiscountKind, RuleTier
from domain.models import (
    CalendarDay,
    CalendarOverride,
    Discount,
    Hall,
    HallService,
    PricingRule,
)
from services.gateway import PricingGateway
from services.pricing_service import PricingService


HALL_ID = "hall-123"

# Fixed clock for every test: 54 days before Christmas 2025
TODAY = date(2025, 11, 1)


class InMemoryPricingGateway(PricingGateway):
    """Gateway over plain lists, filtered the way the database gateway filters."""

    def __init__(self):
        self.halls: dict[str, Hall] = {}
        self.rules: list[PricingRule] = []
        self.overrides: list[CalendarOverride] = []
        self.discounts: list[Discount] = []
        self.calendar_days: list[CalendarDay] = []
        self.bookings: list[tuple[str, date, str]] = []
        self.services: list[HallService] = []
        self.calls: list[str] = []

    async def get_hall(self, hall_id: str) -> Optional[Hall]:
        self.calls.append("get_hall")
        return self.halls.get(hall_id)

    async def list_pricing_rules(self, hall_id: str) -> list[PricingRule]:
        self.calls.append("list_pricing_rules")
        return [r for r in self.rules if r.hall_id == hall_id]

    async def list_overrides(self, hall_id: str, start: date, end: date) -> list[CalendarOverride]:
        self.calls.append("list_overrides")
        return [o for o in self.overrides if o.hall_id == hall_id and start <= o.date <= end]

    async def list_active_discounts(self, hall_id: str) -> list[Discount]:
        self.calls.append("list_active_discounts")
        return [d for d in self.discounts if d.hall_id == hall_id and d.active]

    async def list_calendar_days(self, hall_id: str, start: date, end: date) -> list[CalendarDay]:
        self.calls.append("list_calendar_days")
        return [c for c in self.calendar_days if c.hall_id == hall_id and start <= c.date <= end]

    async def list_booked_dates(self, hall_id: str, start: date, end: date) -> set[date]:
        self.calls.append("list_booked_dates")
        return {
            event_date
            for booking_hall, event_date, status in self.bookings
            if booking_hall == hall_id and start <= event_date <= end and status != "cancelled"
        }

    async def list_hall_services(self, hall_id: str) -> list[HallService]:
        self.calls.append("list_hall_services")
        return [s for s in self.services if s.hall_id == hall_id]


@pytest.fixture(scope="function")
def christmas():
    """Thursday, 25 December 2025."""
    return date(2025, 12, 25)


@pytest.fixture(scope="function")
def today():
    return TODAY


@pytest.fixture(scope="function")
def make_rule():
    """Factory fixture for pricing rules."""
    counter = {"n": 0}

    def _make(
        tier=RuleTier.DAY_OF_WEEK,
        kind=AdjustmentKind.FIXED,
        value=1200,
        start_date=None,
        end_date=None,
        days_of_week=(),
        hall_id=HALL_ID,
        **kwargs,
    ):
        counter["n"] += 1
        return PricingRule(
            id=kwargs.pop("id", f"r{counter['n']}"),
            hall_id=hall_id,
            name=kwargs.pop("name", f"Rule {counter['n']}"),
            tier=tier,
            start_date=start_date,
            end_date=end_date,
            days_of_week=days_of_week,
            adjustment_kind=kind,
            adjustment_value=Decimal(str(value)),
        )
    return _make


@pytest.fixture(scope="function")
def make_discount():
    """Factory fixture for discounts."""
    counter = {"n": 0}

    def _make(kind=DiscountKind.PERCENT, value=10, min_advance_days=0, active=True, hall_id=HALL_ID, **kwargs):
        counter["n"] += 1
        return Discount(
            id=kwargs.pop("id", f"d{counter['n']}"),
            hall_id=hall_id,
            name=kwargs.pop("name", f"Discount {counter['n']}"),
            kind=kind,
            value=Decimal(str(value)),
            min_advance_days=min_advance_days,
            active=active,
        )
    return _make


@pytest.fixture(scope="function")
def make_override():
    """Factory fixture for calendar overrides."""
    def _make(on: date, price, hall_id=HALL_ID, id="o1"):
        return CalendarOverride(id=id, hall_id=hall_id, date=on, price=Decimal(str(price)))
    return _make


@pytest.fixture(scope="function")
def gateway():
    """In-memory gateway holding one hall priced at 1000."""
    fake = InMemoryPricingGateway()
    fake.halls[HALL_ID] = Hall(id=HALL_ID, name="Crystal Hall", slug="crystal", base_price=Decimal("1000"))
    return fake


@pytest.fixture(scope="function")
def pricing_service(gateway):
    """Pricing service over the in-memory gateway with a fixed clock."""
    return PricingService(gateway, today_provider=lambda: TODAY, max_calendar_days=93, currency="SAR")


@pytest.fixture(scope="function")
def maintenance_day():
    def _make(on: date, manual_price=None, status=DayStatus.MAINTENANCE):
        return CalendarDay(
            hall_id=HALL_ID,
            date=on,
            status=status,
            manual_price=None if manual_price is None else Decimal(str(manual_price)),
        )
    return _make


@pytest_asyncio.fixture(scope="function")
async def session_factory(tmp_path):
    """Session factory over a fresh SQLite database file."""
    engine = create_test_engine(f"sqlite+aiosqlite:///{tmp_path / 'pricing.db'}")
    await init_db(engine)
    yield create_session_factory(engine)
    await engine.dispose()
