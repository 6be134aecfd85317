"""SQLAlchemy declarative base for the hall pricing tables."""

import datetime
from decimal import Decimal

from sqlalchemy import Date, DateTime, MetaData, Numeric
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


# Naming convention for constraints
NAMING_CONVENTION = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_name)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
    "pk": "pk_%(table_name)s",
}

# Prices are stored with two decimal places, whatever the currency
MONEY = Numeric(12, 2)


class Base(DeclarativeBase):
    """Base class for the pricing tables. Decimal columns are money."""

    metadata = MetaData(naming_convention=NAMING_CONVENTION)

    type_annotation_map = {
        Decimal: MONEY,
        datetime.date: Date,
        datetime.datetime: DateTime(timezone=True),
    }


class TimestampMixin:
    """Creation and update times, used to order rules and discounts."""

    created_at: Mapped[datetime.datetime] = mapped_column(
        server_default=func.now(),
        nullable=False,
        index=True,
    )

    updated_at: Mapped[datetime.datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
        nullable=True,
    )
