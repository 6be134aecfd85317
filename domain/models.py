"""Domain models using Pydantic v2 for the hall pricing service."""

from datetime import date
from decimal import Decimal
from typing import Optional, Any

from pydantic import AliasChoices, BaseModel, Field, ConfigDict, field_validator

from .enums import RuleTier, AdjustmentKind, DiscountKind, DayStatus


class DomainModel(BaseModel):
    """Immutable snapshot shared by every pricing model."""

    model_config = ConfigDict(
        frozen=True,
        from_attributes=True,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class Hall(DomainModel):
    """Bookable hall with its undiscounted daily rate."""

    id: str
    name: str = ""
    slug: str = ""
    base_price: Decimal = Field(default=Decimal("0"), ge=0)

    @field_validator("base_price", mode="before")
    @classmethod
    def default_missing_base_price(cls, v: Any) -> Any:
        """Halls without a configured rate are priced at zero."""
        return Decimal("0") if v is None else v


class PricingRule(DomainModel):
    """Hall-scoped pricing rule with a tier, optional date range and weekdays."""

    id: str
    hall_id: str
    name: str = ""
    tier: RuleTier = Field(validation_alias=AliasChoices("tier", "rule_level"))
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    days_of_week: frozenset[int] = Field(default_factory=frozenset)
    adjustment_kind: AdjustmentKind = Field(
        validation_alias=AliasChoices("adjustment_kind", "adjustment_type")
    )
    adjustment_value: Decimal

    @field_validator("days_of_week", mode="before")
    @classmethod
    def normalize_days_of_week(cls, v: Any) -> Any:
        """Treat a missing weekday list as unconstrained."""
        if v is None:
            return frozenset()
        return v

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def blank_date_is_none(cls, v: Any) -> Any:
        """Admin forms submit empty strings for unset dates."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @property
    def has_date_range(self) -> bool:
        return self.start_date is not None and self.end_date is not None

    @property
    def has_partial_range(self) -> bool:
        return (self.start_date is None) != (self.end_date is None)


class CalendarOverride(DomainModel):
    """Manual price pin for one hall on one calendar day."""

    id: str
    hall_id: str
    date: date
    price: Decimal


class Discount(DomainModel):
    """Lead-time discount. Discounts stack in list order."""

    id: str
    hall_id: str
    name: str = ""
    kind: DiscountKind = Field(validation_alias=AliasChoices("kind", "type"))
    value: Decimal
    min_advance_days: int = Field(
        default=0,
        validation_alias=AliasChoices("min_advance_days", "min_advance_booking_days"),
    )
    active: bool = True


class PriceBreakdown(DomainModel):
    """Result of resolving the price of one hall on one date."""

    base_price: Decimal
    final_price: Decimal
    applied_rule: Optional[PricingRule] = None
    applied_override: Optional[CalendarOverride] = None
    applied_discounts: tuple[Discount, ...] = ()


class PricingInputs(DomainModel):
    """Everything the resolver needs for a hall, fetched in one round."""

    hall: Hall
    rules: tuple[PricingRule, ...] = ()
    overrides: tuple[CalendarOverride, ...] = ()
    discounts: tuple[Discount, ...] = ()


class CalendarDay(DomainModel):
    """Independently tracked day record (maintenance, manual price)."""

    hall_id: str
    date: date
    status: DayStatus = DayStatus.AVAILABLE
    manual_price: Optional[Decimal] = None


class DayDisplayState(DomainModel):
    """What the availability calendar shows for a single day."""

    date: date
    status: DayStatus
    price: Optional[Decimal] = None
    is_past: bool = False


class HallService(DomainModel):
    """Optional add-on service offered by a hall."""

    id: str
    hall_id: str
    name: str
    price: Decimal = Field(..., ge=0)


class QuoteLine(DomainModel):
    """Single priced line of a quote."""

    label: str
    amount: Decimal


class QuoteEstimate(DomainModel):
    """Non-binding estimate for a date plus selected services."""

    hall_id: str
    date: date
    status: DayStatus
    venue_price: Decimal
    lines: tuple[QuoteLine, ...] = ()
    services_total: Decimal = Decimal("0")
    grand_total: Decimal
    currency: str
