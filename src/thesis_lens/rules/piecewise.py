"""
THESIS LENS - Ordered Piecewise Rule Evaluation

A metric's rules are an ordered list. The first rule whose condition
holds governs the outcome, even when a later rule would match more
narrowly. No async. No side effects.
"""

from __future__ import annotations

import operator
from typing import Iterable, Optional

from thesis_lens.types import ConditionOp, PiecewiseRule, RuleCondition

_COMPARISONS = {
    ConditionOp.ABOVE: (operator.gt, ">"),
    ConditionOp.BELOW: (operator.lt, "<"),
    ConditionOp.AT_OR_ABOVE: (operator.ge, ">="),
    ConditionOp.AT_OR_BELOW: (operator.le, "<="),
}


def condition_met(condition: RuleCondition, value: float) -> bool:
    """Evaluate one condition. BETWEEN is [threshold, upper)."""
    if condition.op is ConditionOp.BETWEEN:
        if condition.upper is None:
            return False
        return condition.threshold <= value < condition.upper
    compare, _ = _COMPARISONS[condition.op]
    return compare(value, condition.threshold)


def describe_condition(condition: RuleCondition, value: float) -> str:
    """Audit text of a condition evaluated against a value."""
    if condition.op is ConditionOp.BETWEEN:
        return (
            f"value ({value:.2f}) >= {format_number(condition.threshold)} "
            f"AND value < {format_number(condition.upper)}"
        )
    _, symbol = _COMPARISONS[condition.op]
    return f"value ({value:.2f}) {symbol} {format_number(condition.threshold)}"


def first_match(rules: Iterable[PiecewiseRule], value: float) -> Optional[PiecewiseRule]:
    """Return the earliest-declared rule matching `value`, or None."""
    for rule in rules:
        if condition_met(rule.condition, value):
            return rule
    return None


def format_number(x: Optional[float]) -> str:
    """Render a threshold without a trailing '.0' for whole numbers."""
    if x is None:
        return "N/A"
    if float(x).is_integer():
        return str(int(x))
    return str(x)
