"""Unit tests for pricing rule and discount validation."""
import pytest
from datetime import date

from domain.enums import AdjustmentKind, DiscountKind, RuleTier, ValidationSeverity
from services.rule_validation import validate_discount, validate_pricing_rule


@pytest.mark.unit
class TestRuleValidation:
    """Test pricing rule validation."""

    def test_well_formed_season_rule_is_clean(self, make_rule):
        """Test that a season rule with a proper range raises nothing."""
        rule = make_rule(
            tier=RuleTier.SEASON,
            kind=AdjustmentKind.PERCENT,
            value=20,
            start_date=date(2025, 12, 1),
            end_date=date(2025, 12, 31),
        )

        result = validate_pricing_rule(rule)

        assert result.is_valid is True
        assert result.codes == []

    def test_weekday_rule_is_clean(self, make_rule):
        result = validate_pricing_rule(make_rule(days_of_week=[5, 6]))

        assert result.is_valid is True
        assert result.codes == []

    def test_catch_all_rule_warns(self, make_rule):
        """Test that a rule with no criteria is flagged but still valid."""
        result = validate_pricing_rule(make_rule(tier=RuleTier.SEASON))

        assert result.is_valid is True
        assert "CATCH_ALL" in [w.code for w in result.warnings]
        assert "TIER_MISMATCH" in [n.code for n in result.notes]

    @pytest.mark.parametrize("start,end,field", [
        (date(2025, 12, 1), None, "end_date"),
        (None, date(2025, 12, 31), "start_date"),
    ])
    def test_half_open_range_warns(self, make_rule, start, end, field):
        """Test that a range with one missing end is reported on the missing field."""
        result = validate_pricing_rule(make_rule(start_date=start, end_date=end, days_of_week=[4]))

        assert result.is_valid is True
        [issue] = result.warnings
        assert issue.code == "HALF_OPEN_RANGE"
        assert issue.field == field
        assert "CATCH_ALL" not in result.codes

    def test_inverted_range_is_error(self, make_rule):
        rule = make_rule(
            tier=RuleTier.SEASON,
            start_date=date(2025, 12, 31),
            end_date=date(2025, 12, 1),
        )

        result = validate_pricing_rule(rule)

        assert result.is_valid is False
        assert result.errors[0].code == "INVERTED_RANGE"
        assert result.errors[0].details == {"start_date": "2025-12-31", "end_date": "2025-12-01"}
        assert result.get_error_messages() == ["Start date is after end date"]

    def test_invalid_weekday_is_error(self, make_rule):
        result = validate_pricing_rule(make_rule(days_of_week=[0, 7, -1]))

        assert result.is_valid is False
        assert result.errors[0].code == "INVALID_WEEKDAY"
        assert result.errors[0].details == {"invalid": [-1, 7]}

    def test_negative_fixed_price_warns(self, make_rule):
        result = validate_pricing_rule(make_rule(kind=AdjustmentKind.FIXED, value=-10, days_of_week=[1]))

        assert result.is_valid is True
        assert [w.code for w in result.warnings] == ["NEGATIVE_FIXED"]

    def test_percent_below_floor_warns(self, make_rule):
        result = validate_pricing_rule(make_rule(kind=AdjustmentKind.PERCENT, value=-150, days_of_week=[1]))

        assert [w.code for w in result.warnings] == ["PERCENT_BELOW_FLOOR"]
        assert result.get_warning_messages()

    def test_minus_hundred_percent_is_allowed(self, make_rule):
        result = validate_pricing_rule(make_rule(kind=AdjustmentKind.PERCENT, value=-100, days_of_week=[1]))

        assert result.codes == []

    def test_special_rule_without_range_gets_note(self, make_rule):
        """Test that tier hints are informational only."""
        result = validate_pricing_rule(make_rule(tier=RuleTier.SPECIAL, days_of_week=[5]))

        assert result.is_valid is True
        assert result.warnings == []
        assert [n.code for n in result.notes] == ["TIER_MISMATCH"]
        assert result.notes[0].severity == ValidationSeverity.INFO

    def test_errors_are_listed_first(self, make_rule):
        rule = make_rule(
            kind=AdjustmentKind.FIXED,
            value=-5,
            start_date=date(2025, 12, 31),
            end_date=date(2025, 12, 1),
        )

        result = validate_pricing_rule(rule)

        assert result.codes[0] == "INVERTED_RANGE"
        assert "NEGATIVE_FIXED" in result.codes


@pytest.mark.unit
class TestDiscountValidation:
    """Test discount validation."""

    def test_valid_discount(self, make_discount):
        result = validate_discount(make_discount(kind=DiscountKind.PERCENT, value=15, min_advance_days=30))

        assert result.is_valid is True
        assert result.codes == []

    def test_negative_lead_time_is_error(self, make_discount):
        result = validate_discount(make_discount(min_advance_days=-1))

        assert result.is_valid is False
        assert result.codes == ["NEGATIVE_LEAD_TIME"]

    @pytest.mark.parametrize("value", [0, -5])
    def test_non_positive_value_warns(self, make_discount, value):
        result = validate_discount(make_discount(kind=DiscountKind.FLAT, value=value))

        assert result.codes == ["NON_POSITIVE_VALUE"]

    def test_percent_over_hundred_warns(self, make_discount):
        result = validate_discount(make_discount(kind=DiscountKind.PERCENT, value=120))

        assert result.codes == ["PERCENT_OVER_100"]

    def test_large_flat_discount_is_fine(self, make_discount):
        result = validate_discount(make_discount(kind=DiscountKind.FLAT, value=5000))

        assert result.codes == []
