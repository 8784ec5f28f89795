"""
THESIS LENS - Reasoning Generator

Produces the plain reasoning strings attached to signals, plus the
small display transforms they need. Statements are factual: the value,
the direction, and the threshold crossed. No predictions.
"""

from __future__ import annotations

from typing import Optional

from thesis_lens.metrics import DOLLAR_INDEX, GOLD, SP500, THOUSANDS_DISPLAY, VIX
from thesis_lens.rules.piecewise import format_number
from thesis_lens.types import (
    ConditionOp,
    PiecewiseRule,
    Polarity,
    PolarityKind,
    RuleCategory,
    Signal,
)

NO_DATA = "No data available"

_SYMBOLS = {
    ConditionOp.AT_OR_BELOW: "≤",
    ConditionOp.BELOW: "<",
    ConditionOp.AT_OR_ABOVE: "≥",
    ConditionOp.ABOVE: ">",
}

_LABELS = {VIX: "VIX", SP500: "S&P 500", DOLLAR_INDEX: "Dollar Index", GOLD: "Gold"}

_PREFIXES = {GOLD: "$"}

# Fallback precision when the provider supplies no formatted string
_PRECISION = {VIX: 1, SP500: 0, DOLLAR_INDEX: 2, GOLD: 0}

_DIRECTIONAL_PHRASES = {
    (VIX, PolarityKind.LOWER_CONFIRMS): {
        Signal.CONFIRM: "suggests low volatility",
        Signal.CONTRADICT: "indicates high volatility",
    },
    (VIX, PolarityKind.HIGHER_CONFIRMS): {
        Signal.CONFIRM: "confirms market stress",
        Signal.CONTRADICT: "suggests market complacency",
    },
    (SP500, PolarityKind.HIGHER_CONFIRMS): {
        Signal.CONFIRM: "shows market confidence",
        Signal.CONTRADICT: "indicates market stress",
    },
    (SP500, PolarityKind.LOWER_CONFIRMS): {
        Signal.CONFIRM: "confirms market decline",
        Signal.CONTRADICT: "shows resilience",
    },
    (GOLD, PolarityKind.LOWER_CONFIRMS): {
        Signal.CONFIRM: "suggests economic confidence",
        Signal.CONTRADICT: "indicates safe-haven demand",
    },
    (GOLD, PolarityKind.HIGHER_CONFIRMS): {
        Signal.CONFIRM: "confirms safe-haven demand",
        Signal.CONTRADICT: "suggests risk appetite",
    },
}

_BANDED_PHRASES = {
    ("above", Signal.CONFIRM): "shows dollar strength",
    ("above", Signal.CONTRADICT): "shows potential stress",
    ("below", Signal.CONFIRM): "shows balanced strength",
    ("below", Signal.CONTRADICT): "shows weakness",
}

_GENERIC_PHRASES = {
    Signal.CONFIRM: "supports thesis",
    Signal.CONTRADICT: "contradicts thesis",
}


def format_change(change: Optional[float]) -> str:
    """Arrow-prefixed change since the prior reading."""
    if change is None:
        return "→"
    if change > 0:
        return f"↑ +{abs(change):.2f}"
    if change < 0:
        return f"↓ -{abs(change):.2f}"
    return "→ 0.00"


def threshold_display(metric: str, threshold: float) -> str:
    """Threshold as shown in reasoning. Large count metrics render in thousands."""
    if metric in THOUSANDS_DISPLAY and abs(threshold) >= 1000:
        return f"{threshold / 1000:.0f}K"
    return f"{_PREFIXES.get(metric, '')}{format_number(threshold)}"


def value_display(metric: str, value: float, formatted: str = "") -> str:
    """Reading as shown in reasoning: provider formatting first."""
    if formatted:
        return formatted
    if metric in THOUSANDS_DISPLAY and abs(value) >= 1000:
        return f"{value / 1000:.0f}K"
    precision = _PRECISION.get(metric, 2)
    return f"{_PREFIXES.get(metric, '')}{value:.{precision}f}"


def generate_reasoning(
    metric: str,
    category: RuleCategory,
    polarity: Polarity,
    signal: Signal,
    matched: Optional[PiecewiseRule],
    display: Optional[str],
) -> str:
    """
    Reasoning string for one classified metric.

    Args:
        metric: Metric name.
        category: Rule category (economic or market).
        polarity: Resolved polarity of the metric under the thesis.
        signal: Classified signal.
        matched: Signal rule that fired (None for neutral).
        display: Rendered value, None when the metric has no reading.

    Returns:
        Templated reasoning embedding the value and threshold crossed.
    """
    if display is None:
        return NO_DATA

    if category is RuleCategory.ECONOMIC or metric not in _LABELS:
        if signal is Signal.NEUTRAL or matched is None:
            return f"Value {display} is neutral"
        return f"Value {display} {_GENERIC_PHRASES[signal]} ({_crossed(metric, matched)})"

    label = _LABELS[metric]
    if signal is Signal.NEUTRAL or matched is None:
        return f"{label} at {display} is in neutral range"

    if polarity.kind is PolarityKind.BANDED:
        side = "above" if matched.condition.op is ConditionOp.AT_OR_ABOVE else "below"
        phrase = _BANDED_PHRASES[(side, signal)]
    else:
        phrases = _DIRECTIONAL_PHRASES.get((metric, polarity.kind), _GENERIC_PHRASES)
        phrase = phrases[signal]
    return f"{label} at {display} {phrase} ({_crossed(metric, matched)})"


def _crossed(metric: str, rule: PiecewiseRule) -> str:
    symbol = _SYMBOLS.get(rule.condition.op, "")
    return f"{symbol}{threshold_display(metric, rule.condition.threshold)}"
