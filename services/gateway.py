"""
Data gateway interface (repository pattern).

Gateways return domain models already scoped to one hall. Implementations
must be safe to call concurrently: the pricing service issues independent
reads at the same time.
"""
from abc import ABC, abstractmethod
from datetime import date
from typing import Optional

from domain.models import (
    CalendarDay,
    CalendarOverride,
    Discount,
    Hall,
    HallService,
    PricingRule,
)


class PricingGateway(ABC):
    """Read access to the pricing configuration of halls."""

    @abstractmethod
    async def get_hall(self, hall_id: str) -> Optional[Hall]:
        """Return a hall by ID, or None if not found."""
        ...

    @abstractmethod
    async def list_pricing_rules(self, hall_id: str) -> list[PricingRule]:
        """Return all pricing rules of a hall, in no particular order."""
        ...

    @abstractmethod
    async def list_overrides(
        self, hall_id: str, start: date, end: date
    ) -> list[CalendarOverride]:
        """Return overrides dated between start and end inclusive."""
        ...

    @abstractmethod
    async def list_active_discounts(self, hall_id: str) -> list[Discount]:
        """Return active discounts in a stable order."""
        ...

    @abstractmethod
    async def list_calendar_days(
        self, hall_id: str, start: date, end: date
    ) -> list[CalendarDay]:
        """Return tracked day records between start and end inclusive."""
        ...

    @abstractmethod
    async def list_booked_dates(self, hall_id: str, start: date, end: date) -> set[date]:
        """Return event dates holding a non-cancelled booking."""
        ...

    @abstractmethod
    async def list_hall_services(self, hall_id: str) -> list[HallService]:
        """Return add-on services offered by a hall."""
        ...
