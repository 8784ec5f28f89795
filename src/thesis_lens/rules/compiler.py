"""
THESIS LENS - Rule Compiler

Lowers legacy two-threshold rules into ordered piecewise rule lists,
once, at load time. Market-indicator polarity is resolved here from an
explicit per-thesis table so the evidence scorer and the signal
classifier evaluate the same compiled rules.

Ladders produced:
- Economic: +2 / +1 / -1 / -2 with the threshold midpoint as the
  internal neutral boundary.
- Directional market indicator: +2 / 0 / -2 around the midpoint.
- Banded market indicator: +1 / -1 per outer band, 0 in between.
"""

from __future__ import annotations

from typing import Mapping, Optional

from thesis_lens.metrics import DOLLAR_INDEX, GOLD, SP500, VIX
from thesis_lens.types import (
    CompiledRule,
    ConditionOp,
    PiecewiseRule,
    Polarity,
    PolarityKind,
    RuleCategory,
    RuleCondition,
    Signal,
    SignalLabel,
    ThresholdRule,
)

PolarityTable = Mapping[str, Mapping[str, Polarity]]

# The literal ladder: confirm at or below the positive threshold.
LOWER_IS_BETTER = Polarity(PolarityKind.LOWER_CONFIRMS, boundary="positive")

# Market polarity for any thesis not listed in the table: stress theses,
# where volatility, safe-haven demand and equity weakness confirm.
STRESS_MARKET_POLARITY: dict[str, Polarity] = {
    VIX: Polarity(PolarityKind.HIGHER_CONFIRMS, boundary="positive"),
    SP500: Polarity(PolarityKind.LOWER_CONFIRMS, boundary="negative"),
    DOLLAR_INDEX: Polarity(
        PolarityKind.BANDED, above_signal=Signal.CONTRADICT, below_signal=Signal.CONTRADICT
    ),
    GOLD: Polarity(PolarityKind.HIGHER_CONFIRMS, boundary="positive"),
}

DEFAULT_POLARITY: dict[str, dict[str, Polarity]] = {
    "soft-landing": {
        VIX: Polarity(PolarityKind.LOWER_CONFIRMS, boundary="positive"),
        SP500: Polarity(PolarityKind.HIGHER_CONFIRMS, boundary="positive"),
        DOLLAR_INDEX: Polarity(
            PolarityKind.BANDED, above_signal=Signal.CONTRADICT, below_signal=Signal.CONFIRM
        ),
        GOLD: Polarity(PolarityKind.LOWER_CONFIRMS, boundary="negative"),
    },
    "economic-transition": {
        DOLLAR_INDEX: Polarity(
            PolarityKind.BANDED, above_signal=Signal.CONFIRM, below_signal=Signal.CONTRADICT
        ),
    },
}


def resolve_polarity(
    thesis_id: str,
    metric: str,
    category: RuleCategory,
    table: Optional[PolarityTable] = None,
) -> Polarity:
    """Table entry first, then the stress default for market indicators."""
    table = DEFAULT_POLARITY if table is None else table
    explicit = table.get(thesis_id, {}).get(metric)
    if explicit is not None:
        return explicit
    if category is RuleCategory.MARKET and metric in STRESS_MARKET_POLARITY:
        return STRESS_MARKET_POLARITY[metric]
    return LOWER_IS_BETTER


def lower_threshold_rule(
    metric: str,
    category: RuleCategory,
    rule: ThresholdRule,
    polarity: Polarity,
) -> CompiledRule:
    """Compile one legacy rule into ordered score and signal lists."""
    if polarity.kind is PolarityKind.BANDED:
        score_rules = _banded(rule, polarity)
        signal_rules = score_rules
    else:
        confirm_at, contradict_at = _boundaries(rule, polarity)
        if category is RuleCategory.ECONOMIC:
            score_rules = _four_level(rule, polarity, confirm_at, contradict_at)
        else:
            score_rules = _three_level(rule, polarity, confirm_at)
        signal_rules = _signal_boundaries(polarity, confirm_at, contradict_at)

    return CompiledRule(
        metric=metric,
        category=category,
        weight=rule.weight,
        threshold=rule,
        polarity=polarity,
        score_rules=score_rules,
        signal_rules=signal_rules,
    )


def _boundaries(rule: ThresholdRule, polarity: Polarity) -> tuple[float, float]:
    if polarity.boundary == "negative":
        return rule.negative, rule.positive
    return rule.positive, rule.negative


def _ops(polarity: Polarity) -> tuple[ConditionOp, ConditionOp, ConditionOp]:
    """(confirm side inclusive, contradict side inclusive, contradict side strict)."""
    if polarity.kind is PolarityKind.HIGHER_CONFIRMS:
        return ConditionOp.AT_OR_ABOVE, ConditionOp.AT_OR_BELOW, ConditionOp.BELOW
    return ConditionOp.AT_OR_BELOW, ConditionOp.AT_OR_ABOVE, ConditionOp.ABOVE


def _rule(op: ConditionOp, threshold: float, label: SignalLabel, score: int) -> PiecewiseRule:
    return PiecewiseRule(RuleCondition(op, threshold), label, score)


def _four_level(
    rule: ThresholdRule, polarity: Polarity, confirm_at: float, contradict_at: float
) -> tuple[PiecewiseRule, ...]:
    toward, _, beyond = _ops(polarity)
    return (
        _rule(toward, confirm_at, SignalLabel.STRONG_CONFIRM, 2),
        _rule(toward, rule.midpoint, SignalLabel.MILD_CONFIRM, 1),
        _rule(toward, contradict_at, SignalLabel.MILD_CONTRADICT, -1),
        _rule(beyond, contradict_at, SignalLabel.STRONG_CONTRADICT, -2),
    )


def _three_level(
    rule: ThresholdRule, polarity: Polarity, confirm_at: float
) -> tuple[PiecewiseRule, ...]:
    toward, _, beyond = _ops(polarity)
    return (
        _rule(toward, confirm_at, SignalLabel.STRONG_CONFIRM, 2),
        _rule(toward, rule.midpoint, SignalLabel.NEUTRAL, 0),
        _rule(beyond, rule.midpoint, SignalLabel.STRONG_CONTRADICT, -2),
    )


def _signal_boundaries(
    polarity: Polarity, confirm_at: float, contradict_at: float
) -> tuple[PiecewiseRule, ...]:
    toward, away, _ = _ops(polarity)
    return (
        _rule(toward, confirm_at, SignalLabel.STRONG_CONFIRM, 2),
        _rule(away, contradict_at, SignalLabel.STRONG_CONTRADICT, -2),
    )


def _band_label(signal: Optional[Signal]) -> tuple[SignalLabel, int]:
    if signal is Signal.CONFIRM:
        return SignalLabel.MILD_CONFIRM, 1
    if signal is Signal.CONTRADICT:
        return SignalLabel.MILD_CONTRADICT, -1
    return SignalLabel.NEUTRAL, 0


def _banded(rule: ThresholdRule, polarity: Polarity) -> tuple[PiecewiseRule, ...]:
    above_label, above_score = _band_label(polarity.above_signal)
    below_label, below_score = _band_label(polarity.below_signal)
    return (
        _rule(ConditionOp.AT_OR_ABOVE, rule.positive, above_label, above_score),
        _rule(ConditionOp.AT_OR_BELOW, rule.negative, below_label, below_score),
    )
