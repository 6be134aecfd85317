"""Database layer for the hall pricing service."""

from .base import Base, TimestampMixin
from .models_sqlalchemy import (
    Hall,
    PricingRule,
    CalendarOverride,
    Discount,
    CalendarDay,
    Booking,
    HallService,
)
from .session import (
    create_engine,
    create_test_engine,
    create_session_factory,
    get_engine,
    get_session_factory,
    init_db,
    close_db,
    DatabaseConfig,
)
from .gateway import SqlAlchemyPricingGateway

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Models
    "Hall",
    "PricingRule",
    "CalendarOverride",
    "Discount",
    "CalendarDay",
    "Booking",
    "HallService",
    # Session
    "create_engine",
    "create_test_engine",
    "create_session_factory",
    "get_engine",
    "get_session_factory",
    "init_db",
    "close_db",
    "DatabaseConfig",
    # Gateway
    "SqlAlchemyPricingGateway",
]
