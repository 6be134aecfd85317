"""
Pricing rule and discount validation.

Flags rules that are legal for the resolver but almost certainly not what the
author meant (catch-alls, half-open ranges), and rejects rows that can never
be correct. Run at rule-creation time; the resolver itself never consults it.
"""

import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from domain.enums import AdjustmentKind, DiscountKind, RuleTier, ValidationSeverity
from domain.models import Discount, PricingRule


logger = logging.getLogger(__name__)

VALID_WEEKDAYS = frozenset(range(7))


@dataclass
class ValidationIssue:
    """Represents a validation error, warning or note."""
    code: str
    severity: ValidationSeverity
    message: str
    field: Optional[str] = None
    details: Optional[Dict[str, Any]] = None


@dataclass
class RuleValidationResult:
    """Result of validation with all errors and warnings."""
    is_valid: bool = True
    errors: List[ValidationIssue] = field(default_factory=list)
    warnings: List[ValidationIssue] = field(default_factory=list)
    notes: List[ValidationIssue] = field(default_factory=list)

    def add(self, issue: ValidationIssue):
        """Add an issue; errors mark the result invalid."""
        if issue.severity == ValidationSeverity.ERROR:
            self.errors.append(issue)
            self.is_valid = False
        elif issue.severity == ValidationSeverity.WARNING:
            self.warnings.append(issue)
        else:
            self.notes.append(issue)

    @property
    def codes(self) -> List[str]:
        """Codes of every issue, errors first."""
        return [i.code for i in self.errors + self.warnings + self.notes]

    def get_error_messages(self) -> List[str]:
        return [e.message for e in self.errors]

    def get_warning_messages(self) -> List[str]:
        return [w.message for w in self.warnings]


def validate_pricing_rule(rule: PricingRule) -> RuleValidationResult:
    """
    Check a pricing rule for authoring mistakes.

    Args:
        rule: Rule about to be saved

    Returns:
        RuleValidationResult with errors, warnings and notes
    """
    result = RuleValidationResult()

    if rule.has_partial_range:
        result.add(ValidationIssue(
            code="HALF_OPEN_RANGE",
            severity=ValidationSeverity.WARNING,
            message="Rule has only one end of its date range and will never match",
            field="start_date" if rule.start_date is None else "end_date",
        ))
    elif not rule.has_date_range and not rule.days_of_week:
        result.add(ValidationIssue(
            code="CATCH_ALL",
            severity=ValidationSeverity.WARNING,
            message="Rule has no date range and no weekdays, so it matches every day",
        ))

    if rule.has_date_range and rule.start_date > rule.end_date:
        result.add(ValidationIssue(
            code="INVERTED_RANGE",
            severity=ValidationSeverity.ERROR,
            message="Start date is after end date",
            field="end_date",
            details={"start_date": rule.start_date.isoformat(), "end_date": rule.end_date.isoformat()},
        ))

    invalid_days = sorted(set(rule.days_of_week) - VALID_WEEKDAYS)
    if invalid_days:
        result.add(ValidationIssue(
            code="INVALID_WEEKDAY",
            severity=ValidationSeverity.ERROR,
            message="Weekdays must be between 0 (Sunday) and 6 (Saturday)",
            field="days_of_week",
            details={"invalid": invalid_days},
        ))

    if rule.adjustment_kind == AdjustmentKind.FIXED and rule.adjustment_value < 0:
        result.add(ValidationIssue(
            code="NEGATIVE_FIXED",
            severity=ValidationSeverity.WARNING,
            message="Fixed price is negative and will be floored at zero",
            field="adjustment_value",
        ))

    if rule.adjustment_kind == AdjustmentKind.PERCENT and rule.adjustment_value < -100:
        result.add(ValidationIssue(
            code="PERCENT_BELOW_FLOOR",
            severity=ValidationSeverity.WARNING,
            message="Percent adjustment below -100% drives the price under zero",
            field="adjustment_value",
        ))

    if rule.tier in (RuleTier.SEASON, RuleTier.SPECIAL) and not rule.has_date_range:
        result.add(ValidationIssue(
            code="TIER_MISMATCH",
            severity=ValidationSeverity.INFO,
            message=f"{rule.tier.name.title()} rules usually carry a date range",
            field="tier",
        ))
    elif rule.tier == RuleTier.DAY_OF_WEEK and not rule.days_of_week:
        result.add(ValidationIssue(
            code="TIER_MISMATCH",
            severity=ValidationSeverity.INFO,
            message="Day-of-week rules usually list at least one weekday",
            field="tier",
        ))

    if result.errors or result.warnings:
        logger.warning(
            f"Pricing rule {rule.id} has validation issues",
            extra={"hall_id": rule.hall_id, "codes": result.codes},
        )

    return result


def validate_discount(discount: Discount) -> RuleValidationResult:
    """Check a discount for impossible or suspicious values."""
    result = RuleValidationResult()

    if discount.min_advance_days < 0:
        result.add(ValidationIssue(
            code="NEGATIVE_LEAD_TIME",
            severity=ValidationSeverity.ERROR,
            message="Minimum advance days cannot be negative",
            field="min_advance_days",
        ))

    if discount.value <= 0:
        result.add(ValidationIssue(
            code="NON_POSITIVE_VALUE",
            severity=ValidationSeverity.WARNING,
            message="Discount value should be greater than zero",
            field="value",
        ))
    elif discount.kind == DiscountKind.PERCENT and discount.value > 100:
        result.add(ValidationIssue(
            code="PERCENT_OVER_100",
            severity=ValidationSeverity.WARNING,
            message="Percent discount above 100% drives the price under zero",
            field="value",
        ))

    if result.errors or result.warnings:
        logger.warning(
            f"Discount {discount.id} has validation issues",
            extra={"hall_id": discount.hall_id, "codes": result.codes},
        )

    return result
