"""
THESIS LENS - Conflict Detector

Fixed catalog of two-sided divergence checks. Each check reads exactly
two readings and fires only when BOTH threshold predicates hold. No
partial credit, no default substitution: a missing reading on either
side means no alert.

Severity is a fixed tag per check. determine_conflict_severity() is an
alternate, magnitude-based grading for callers that want it.
"""

from __future__ import annotations

import logging
import operator
from dataclasses import dataclass
from typing import Optional

from thesis_lens.config import ConflictSeverityConfig, ConflictThresholds, EngineConfig
from thesis_lens.ingest.snapshot import LiveValueProvider, present
from thesis_lens.metrics import (
    CORE_PCE,
    DOLLAR_INDEX,
    GDP_GROWTH,
    GOLD,
    SP500,
    TEN_YEAR_YIELD,
    UNEMPLOYMENT,
    VIX,
)
from thesis_lens.types import AlertSeverity, ConflictAlert, MetricReading

logger = logging.getLogger(__name__)

_OPERATORS = {">": operator.gt, "<": operator.lt}


@dataclass(frozen=True)
class Predicate:
    """One side of a check: `metric <op> threshold`, rendered with `precision`."""

    metric: str
    op: str
    threshold: float
    precision: int = 1
    prefix: str = ""

    def holds(self, value: float) -> bool:
        return _OPERATORS[self.op](value, self.threshold)

    def render(self, reading: MetricReading) -> str:
        if reading.formatted:
            return reading.formatted
        return f"{self.prefix}{reading.value:.{self.precision}f}"


@dataclass(frozen=True)
class ConflictCheck:
    key: str
    title: str
    severity: AlertSeverity
    left: Predicate
    right: Predicate
    template: str  # formatted with {left} and {right}
    market_based: bool = True


def conflict_catalog(thresholds: Optional[ConflictThresholds] = None) -> tuple[ConflictCheck, ...]:
    """The canonical divergence checks, parameterized by thresholds."""
    t = thresholds or ConflictThresholds()
    equity_strong = Predicate(SP500, ">", t.equity_strength, precision=0)
    return (
        ConflictCheck(
            key="gdp_market",
            title="GDP vs Market Divergence",
            severity=AlertSeverity.HIGH,
            left=Predicate(GDP_GROWTH, "<", t.gdp_contraction),
            right=equity_strong,
            template=(
                "GDP contracting ({left}%) while S&P 500 remains strong at {right}"
                " - unusual divergence."
            ),
        ),
        ConflictCheck(
            key="vix_equity",
            title="VIX-Equity Divergence",
            severity=AlertSeverity.MEDIUM,
            left=Predicate(VIX, ">", t.volatility_elevated),
            right=equity_strong,
            template=(
                "VIX elevated at {left} while S&P 500 remains strong at {right}"
                " - suggests hidden market stress."
            ),
        ),
        ConflictCheck(
            key="dollar_gold",
            title="Dollar-Gold Conflict",
            severity=AlertSeverity.MEDIUM,
            left=Predicate(DOLLAR_INDEX, ">", t.currency_strong),
            right=Predicate(GOLD, ">", t.haven_elevated, precision=0, prefix="$"),
            template=(
                "Strong dollar ({left}) typically pressures gold, but gold remains elevated"
                " at {right} - suggests underlying uncertainty."
            ),
        ),
        ConflictCheck(
            key="unemployment_market",
            title="Unemployment-Market Divergence",
            severity=AlertSeverity.HIGH,
            left=Predicate(UNEMPLOYMENT, ">", t.unemployment_elevated),
            right=equity_strong,
            template=(
                "Unemployment elevated at {left}% while S&P 500 remains strong at {right}"
                " - markets may be disconnected from employment reality."
            ),
        ),
        ConflictCheck(
            key="inflation_yield",
            title="Inflation-Bond Yield Divergence",
            severity=AlertSeverity.MEDIUM,
            left=Predicate(CORE_PCE, ">", t.inflation_elevated),
            right=Predicate(TEN_YEAR_YIELD, "<", t.long_yield_low),
            template=(
                "Core PCE inflation at {left}% while 10-year yield only {right}%"
                " - bond markets may be pricing different inflation expectations."
            ),
            market_based=False,
        ),
    )


def detect_conflicts(
    provider: LiveValueProvider,
    config: Optional[EngineConfig] = None,
    log: Optional[logging.Logger] = None,
) -> list[ConflictAlert]:
    """Run every catalog check. Returns alerts in catalog order."""
    config = config or EngineConfig()
    alerts = []
    for check in conflict_catalog(config.conflicts):
        alert = run_check(check, provider, log)
        if alert is not None:
            alerts.append(alert)
    return alerts


def check_conflict(
    key: str,
    provider: LiveValueProvider,
    thresholds: Optional[ConflictThresholds] = None,
    log: Optional[logging.Logger] = None,
) -> Optional[ConflictAlert]:
    """Run one catalog check by key, e.g. 'gdp_market'."""
    for check in conflict_catalog(thresholds):
        if check.key == key:
            return run_check(check, provider, log)
    raise KeyError(f"Unknown conflict check: {key}")


def run_check(
    check: ConflictCheck,
    provider: LiveValueProvider,
    log: Optional[logging.Logger] = None,
) -> Optional[ConflictAlert]:
    log = log or logger
    left = provider.lookup(check.left.metric)
    right = provider.lookup(check.right.metric)

    if any(r is None or present(r.value) is None for r in (left, right)):
        log.debug(f"{check.title}: missing reading, check skipped")
        return None

    if not (check.left.holds(left.value) and check.right.holds(right.value)):
        return None

    return ConflictAlert(
        title=check.title,
        severity=check.severity,
        description=check.template.format(
            left=check.left.render(left), right=check.right.render(right)
        ),
        active=True,
        market_based=check.market_based,
    )


def determine_conflict_severity(
    value1: float,
    value2: float,
    threshold1: float,
    threshold2: float,
    config: Optional[ConflictSeverityConfig] = None,
) -> AlertSeverity:
    """
    Graded severity from the mean relative distance past both thresholds.

    HIGH above high_factor * multiplier (0.3 by default), MEDIUM above
    medium_factor * multiplier (0.15), LOW otherwise. A zero threshold
    falls back to the absolute distance.
    """
    config = config or ConflictSeverityConfig()
    divergence = (_relative(value1, threshold1) + _relative(value2, threshold2)) / 2

    if divergence > config.multiplier * config.high_factor:
        return AlertSeverity.HIGH
    if divergence > config.multiplier * config.medium_factor:
        return AlertSeverity.MEDIUM
    return AlertSeverity.LOW


def _relative(value: float, threshold: float) -> float:
    if threshold == 0:
        return abs(value)
    return abs(value - threshold) / abs(threshold)
