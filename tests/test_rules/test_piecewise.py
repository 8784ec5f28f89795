"""Tests for ordered piecewise rule evaluation."""

import pytest

from thesis_lens.rules.piecewise import (
    condition_met,
    describe_condition,
    first_match,
    format_number,
)
from thesis_lens.types import ConditionOp, PiecewiseRule, RuleCondition, SignalLabel


def _rule(op, threshold, label=SignalLabel.NEUTRAL, score=0, upper=None):
    return PiecewiseRule(RuleCondition(op, threshold, upper), label, score)


class TestConditionMet:
    def test_strict_operators(self):
        assert condition_met(RuleCondition(ConditionOp.ABOVE, 5), 5.1)
        assert not condition_met(RuleCondition(ConditionOp.ABOVE, 5), 5)
        assert condition_met(RuleCondition(ConditionOp.BELOW, 5), 4.9)
        assert not condition_met(RuleCondition(ConditionOp.BELOW, 5), 5)

    def test_inclusive_operators(self):
        assert condition_met(RuleCondition(ConditionOp.AT_OR_ABOVE, 5), 5)
        assert condition_met(RuleCondition(ConditionOp.AT_OR_BELOW, 5), 5)
        assert not condition_met(RuleCondition(ConditionOp.AT_OR_BELOW, 5), 5.01)

    @pytest.mark.parametrize(
        "value,expected",
        [(0.0, True), (9.99, True), (10.0, False), (-0.01, False)],
    )
    def test_between_is_half_open(self, value, expected):
        assert condition_met(RuleCondition(ConditionOp.BETWEEN, 0, 10), value) is expected

    def test_between_without_upper_never_matches(self):
        assert not condition_met(RuleCondition(ConditionOp.BETWEEN, 0), 5)


class TestFirstMatch:
    def test_declaration_order_wins(self):
        """A broad early rule shadows a narrower later rule."""
        rules = [
            _rule(ConditionOp.ABOVE, 5, SignalLabel.STRONG_CONFIRM, 2),
            _rule(ConditionOp.BETWEEN, 0, SignalLabel.MILD_CONTRADICT, -1, upper=10),
        ]
        matched = first_match(rules, 7)
        assert matched is rules[0]
        assert matched.score == 2

    def test_falls_through_to_later_rule(self):
        rules = [
            _rule(ConditionOp.ABOVE, 5, SignalLabel.STRONG_CONFIRM, 2),
            _rule(ConditionOp.BETWEEN, 0, SignalLabel.MILD_CONTRADICT, -1, upper=10),
        ]
        assert first_match(rules, 3) is rules[1]

    def test_no_match(self):
        rules = [_rule(ConditionOp.ABOVE, 5)]
        assert first_match(rules, 1) is None

    def test_empty_rules(self):
        assert first_match([], 1) is None


class TestDescribeCondition:
    def test_comparison(self):
        text = describe_condition(RuleCondition(ConditionOp.ABOVE, 5), 7)
        assert text == "value (7.00) > 5"

    def test_inclusive_comparison(self):
        text = describe_condition(RuleCondition(ConditionOp.AT_OR_BELOW, 2.5), 2.5)
        assert text == "value (2.50) <= 2.5"

    def test_between(self):
        text = describe_condition(RuleCondition(ConditionOp.BETWEEN, 0, 1.5), 1.2)
        assert text == "value (1.20) >= 0 AND value < 1.5"


class TestFormatNumber:
    def test_whole_numbers_drop_decimal(self):
        assert format_number(400000.0) == "400000"
        assert format_number(25) == "25"

    def test_fractional(self):
        assert format_number(4.5) == "4.5"

    def test_none(self):
        assert format_number(None) == "N/A"
