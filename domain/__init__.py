"""Domain layer for the hall pricing service."""

from .enums import (
    RuleTier,
    AdjustmentKind,
    DiscountKind,
    DayStatus,
    BookingStatus,
    ValidationSeverity,
)
from .models import (
    Hall,
    PricingRule,
    CalendarOverride,
    Discount,
    PriceBreakdown,
    PricingInputs,
    CalendarDay,
    DayDisplayState,
    HallService,
    QuoteLine,
    QuoteEstimate,
)
from .errors import (
    PricingError,
    HallNotFoundError,
    PricingDataFetchError,
    InvalidDateRangeError,
    UnknownServiceError,
)

__all__ = [
    # Enums
    "RuleTier",
    "AdjustmentKind",
    "DiscountKind",
    "DayStatus",
    "BookingStatus",
    "ValidationSeverity",
    # Models
    "Hall",
    "PricingRule",
    "CalendarOverride",
    "Discount",
    "PriceBreakdown",
    "PricingInputs",
    "CalendarDay",
    "DayDisplayState",
    "HallService",
    "QuoteLine",
    "QuoteEstimate",
    # Errors
    "PricingError",
    "HallNotFoundError",
    "PricingDataFetchError",
    "InvalidDateRangeError",
    "UnknownServiceError",
]
