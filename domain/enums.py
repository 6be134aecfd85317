"""Domain enums for the hall pricing service."""

from enum import Enum, IntEnum


class RuleTier(IntEnum):
    """Priority class of a pricing rule. Higher tiers win."""

    DAY_OF_WEEK = 1
    SEASON = 2
    SPECIAL = 3


class AdjustmentKind(str, Enum):
    """Arithmetic mode of a pricing rule."""

    FIXED = "fixed"      # replaces the base price
    FLAT = "flat"        # adds a constant
    PERCENT = "percent"  # adds a share of the base price


class DiscountKind(str, Enum):
    """Discount types."""

    PERCENT = "percent"
    FLAT = "flat"


class DayStatus(str, Enum):
    """Calendar day availability."""

    AVAILABLE = "available"
    BOOKED = "booked"
    MAINTENANCE = "maintenance"


class BookingStatus(str, Enum):
    """Booking status enumeration."""

    TENTATIVE = "tentative"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"


class ValidationSeverity(str, Enum):
    """Rule validation severity levels."""

    ERROR = "error"      # rule should not be saved
    WARNING = "warning"  # allowed but probably unintended
    INFO = "info"
