"""
THESIS LENS - Signal Classifier

Per-metric confirm / contradict / neutral classification:
1. CONFIRM if the value is at or beyond the confirm boundary
2. CONTRADICT if the value is at or beyond the contradict boundary
3. NEUTRAL otherwise, or when the metric has no reading

Boundaries and market-indicator polarity come from the compiled rule
set, the same one the evidence scorer evaluates.
"""

from __future__ import annotations

import logging
from typing import Optional

from thesis_lens.config import EngineConfig, ImpactTiers
from thesis_lens.explain.generator import (
    format_change,
    generate_reasoning,
    value_display,
)
from thesis_lens.ingest.snapshot import (
    LiveValueProvider,
    current_value,
    indicator_value,
    market_snapshot_from,
)
from thesis_lens.metrics import next_update_estimate
from thesis_lens.rules.loader import RuleRepository
from thesis_lens.rules.piecewise import first_match
from thesis_lens.types import (
    CompiledRule,
    ImpactTier,
    MarketSnapshot,
    RuleCategory,
    Signal,
    SignalRecord,
)

logger = logging.getLogger(__name__)

_SOURCES = {
    RuleCategory.ECONOMIC: "Economic Data",
    RuleCategory.MARKET: "Market Data",
}


def classify_signals(
    thesis_id: str,
    repository: RuleRepository,
    provider: LiveValueProvider,
    market: Optional[MarketSnapshot] = None,
    config: Optional[EngineConfig] = None,
    log: Optional[logging.Logger] = None,
) -> list[SignalRecord]:
    """
    Classify every metric in a thesis's rule set.

    Returns:
        Economic metrics in rule order, then market indicators.
        Empty when the thesis has no rules.
    """
    config = config or EngineConfig()
    log = log or logger

    rule_set = repository.lookup(thesis_id)
    if rule_set is None:
        log.warning(f"No scoring rules found for thesis: {thesis_id}")
        return []

    if market is None:
        market = market_snapshot_from(provider)

    return [
        _classify(rule, provider, market, config.impact, thesis_id, log)
        for rule in rule_set.economic + rule_set.market
    ]


def classify_metric(
    thesis_id: str,
    metric: str,
    repository: RuleRepository,
    provider: LiveValueProvider,
    market: Optional[MarketSnapshot] = None,
    config: Optional[EngineConfig] = None,
    log: Optional[logging.Logger] = None,
) -> Optional[SignalRecord]:
    """Classify a single metric. None if the thesis or metric has no rule."""
    config = config or EngineConfig()
    log = log or logger

    rule_set = repository.lookup(thesis_id)
    if rule_set is None:
        log.warning(f"No scoring rules found for thesis: {thesis_id}")
        return None

    for rule in rule_set.economic + rule_set.market:
        if rule.metric == metric:
            if market is None:
                market = market_snapshot_from(provider)
            return _classify(rule, provider, market, config.impact, thesis_id, log)

    log.warning(f"Metric '{metric}' has no rule in thesis: {thesis_id}")
    return None


def determine_impact_tier(weight: float, tiers: Optional[ImpactTiers] = None) -> ImpactTier:
    tiers = tiers or ImpactTiers()
    if weight >= tiers.high:
        return ImpactTier.HIGH
    if weight >= tiers.medium:
        return ImpactTier.MEDIUM
    return ImpactTier.LOW


def _classify(
    rule: CompiledRule,
    provider: LiveValueProvider,
    market: MarketSnapshot,
    tiers: ImpactTiers,
    thesis_id: str,
    log: logging.Logger,
) -> SignalRecord:
    reading = provider.lookup(rule.metric)
    if rule.category is RuleCategory.MARKET:
        value = indicator_value(rule.metric, provider, market)
    else:
        value = current_value(provider, rule.metric)

    signal = Signal.NEUTRAL
    matched = None
    display = None
    if value is None:
        log.warning(f"No current reading for '{rule.metric}' ({thesis_id})")
    else:
        # Provider formatting only describes the provider's own value
        formatted = reading.formatted if reading is not None and reading.value == value else ""
        display = value_display(rule.metric, value, formatted)
        matched = first_match(rule.signal_rules, value)
        if matched is not None:
            signal = matched.label.signal

    return SignalRecord(
        metric=rule.metric,
        signal=signal,
        impact=determine_impact_tier(rule.weight, tiers),
        change=format_change(reading.change if reading is not None else None),
        reasoning=generate_reasoning(
            rule.metric, rule.category, rule.polarity, signal, matched, display
        ),
        next_update=next_update_estimate(rule.metric),
        source=_SOURCES[rule.category],
        value=value,
        formatted=display or "",
    )
