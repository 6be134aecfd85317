"""
Pricing resolution for a single hall and calendar date.

Precedence, highest first:
1. Manual calendar override for the exact date (rules are skipped).
2. The first matching pricing rule, searching SPECIAL -> SEASON -> DAY_OF_WEEK.
   Adjustments are always computed against the hall's base price.
3. Lead-time discounts, applied in list order, each on the running price.
Finally the price is floored at zero.

Everything here is pure: no I/O and no clock reads unless ``today`` is omitted.
"""
import logging
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence, Tuple

from core.utils_datetime import (
    DateLike,
    days_between,
    get_current_date,
    to_calendar_date,
    weekday_index,
)
from domain.enums import AdjustmentKind, DiscountKind
from domain.models import CalendarOverride, Discount, PriceBreakdown, PricingRule


logger = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def rule_matches(rule: PricingRule, target_date: date) -> bool:
    """
    Check whether a rule applies to a calendar date.

    - Full date range: the date must fall inside it (inclusive) and, when the
      rule lists weekdays, on one of them.
    - Weekdays only: weekday membership decides.
    - Neither: the rule is a catch-all and always matches.
    - Only one bound of the range: never matches.
    """
    if rule.has_partial_range:
        return False

    weekday_ok = not rule.days_of_week or weekday_index(target_date) in rule.days_of_week

    if rule.has_date_range:
        return rule.start_date <= target_date <= rule.end_date and weekday_ok

    return weekday_ok


def order_rules(rules: Iterable[PricingRule]) -> list[PricingRule]:
    """Sort rules by tier, highest first. Ties keep their input order."""
    return sorted(rules, key=lambda rule: rule.tier, reverse=True)


def select_rule(rules: Iterable[PricingRule], target_date: date) -> Optional[PricingRule]:
    """Return the highest-priority rule matching the date, if any."""
    return next(
        (rule for rule in order_rules(rules) if rule_matches(rule, target_date)),
        None,
    )


def apply_adjustment(rule: PricingRule, base_price: Decimal) -> Decimal:
    """Price produced by a rule, always relative to the unmodified base price."""
    value = rule.adjustment_value

    if rule.adjustment_kind == AdjustmentKind.FIXED:
        return value
    if rule.adjustment_kind == AdjustmentKind.FLAT:
        return base_price + value
    return base_price + base_price * (value / HUNDRED)


def days_in_advance(target_date: date, today: date) -> int:
    """Lead time in whole days. Negative for dates in the past."""
    return days_between(today, target_date)


def apply_discounts(
    price: Decimal,
    discounts: Iterable[Discount],
    lead_days: int,
) -> Tuple[Decimal, Tuple[Discount, ...]]:
    """
    Apply eligible discounts in order, each against the running price.

    Inactive discounts and those whose minimum lead time is not met are
    skipped.

    Returns:
        Tuple of (discounted price, applied discounts in order)
    """
    applied = []
    current = price

    for discount in discounts:
        if not discount.active:
            continue
        if lead_days < discount.min_advance_days:
            continue

        value = discount.value
        if discount.kind == DiscountKind.FLAT:
            amount = value
        else:
            amount = current * (value / HUNDRED)

        current -= amount
        applied.append(discount)

    return current, tuple(applied)


def find_override(
    overrides: Iterable[CalendarOverride], target_date: date
) -> Optional[CalendarOverride]:
    """Return the override pinned to exactly this date."""
    return next((o for o in overrides if o.date == target_date), None)


def resolve_price(
    target_date: DateLike,
    base_price: Decimal,
    rules: Sequence[PricingRule],
    overrides: Sequence[CalendarOverride],
    discounts: Sequence[Discount],
    today: Optional[date] = None,
) -> PriceBreakdown:
    """
    Compute the final bookable price of a hall on a date.

    Args:
        target_date: Day being priced; any time-of-day component is ignored
        base_price: Hall's undiscounted rate
        rules: Hall pricing rules in any order
        overrides: Hall calendar overrides, possibly spanning many dates
        discounts: Hall discounts; order is significant
        today: Current date used for discount lead time. Defaults to today in
            the hall timezone.

    Returns:
        PriceBreakdown for the date
    """
    day = to_calendar_date(target_date)
    base = base_price if isinstance(base_price, Decimal) else Decimal(str(base_price))
    if today is None:
        today = get_current_date()

    applied_rule = None
    applied_override = find_override(overrides, day)

    if applied_override is not None:
        price = applied_override.price
    else:
        applied_rule = select_rule(rules, day)
        price = apply_adjustment(applied_rule, base) if applied_rule else base

    price, applied_discounts = apply_discounts(
        price, discounts, days_in_advance(day, today)
    )
    final_price = max(ZERO, price)

    logger.debug(
        "Resolved price",
        extra={
            "date": day.isoformat(),
            "base_price": str(base),
            "final_price": str(final_price),
            "override_id": applied_override.id if applied_override else None,
            "rule_id": applied_rule.id if applied_rule else None,
            "discount_ids": [d.id for d in applied_discounts],
        },
    )

    return PriceBreakdown(
        base_price=base,
        final_price=final_price,
        applied_rule=applied_rule,
        applied_override=applied_override,
        applied_discounts=applied_discounts,
    )
