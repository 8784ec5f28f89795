"""
THESIS LENS - Evidence Scorer

Weighted "weight of evidence" score per category and overall.

Per-category score = sum(score * weight) / sum(weight), restricted to
metrics with a present reading. Metrics without data are excluded from
both numerator and denominator; a category with no data scores 0.

Political and social are NOT independently evidenced. They are derived
arithmetically from the economic score (see ProxyFactors) and carried
as derived CategoryScores so that nothing downstream mistakes them for
measured signals.
"""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Optional

from thesis_lens.config import EngineConfig
from thesis_lens.ingest.snapshot import (
    LiveValueProvider,
    current_value,
    indicator_value,
    market_snapshot_from,
)
from thesis_lens.rules.compiler import lower_threshold_rule
from thesis_lens.rules.loader import RuleRepository
from thesis_lens.rules.piecewise import first_match
from thesis_lens.types import (
    CategoryScore,
    CompiledRule,
    EvidenceScore,
    MarketSnapshot,
    Polarity,
    PolarityKind,
    RuleCategory,
    ThresholdRule,
)

logger = logging.getLogger(__name__)


def score_evidence(
    thesis_id: str,
    repository: RuleRepository,
    provider: LiveValueProvider,
    market: Optional[MarketSnapshot] = None,
    config: Optional[EngineConfig] = None,
    log: Optional[logging.Logger] = None,
) -> EvidenceScore:
    """
    Compute the evidence score of a thesis over one readings snapshot.

    Args:
        thesis_id: Selected thesis.
        repository: Rule repository (unknown ids are allowed).
        provider: Live value provider.
        market: Market indicator snapshot (default: taken from provider).
        config: Engine configuration.
        log: Logger receiving degenerate-input warnings.

    Returns:
        EvidenceScore. All-zero when the thesis has no rules.
    """
    config = config or EngineConfig()
    log = log or logger

    rule_set = repository.lookup(thesis_id)
    if rule_set is None:
        log.warning(f"No scoring rules found for thesis: {thesis_id}")
        return zero_evidence(thesis_id, config)

    if market is None:
        market = market_snapshot_from(provider)

    economic = _score_category(
        "economic",
        rule_set.economic,
        lambda metric: current_value(provider, metric),
        thesis_id,
        log,
    )
    market_score = _score_category(
        "market",
        rule_set.market,
        lambda metric: indicator_value(metric, provider, market),
        thesis_id,
        log,
    )
    political = derive_proxy("political", economic, config.proxies.political)
    social = derive_proxy("social", economic, config.proxies.social)

    weights = config.composite
    if market_score.weight > 0:
        blend = "enhanced"
        overall = (
            economic.score * weights.economic
            + market_score.score * weights.market
            + political.score * weights.political
            + social.score * weights.social
        )
    else:
        blend = "basic"
        overall = (
            economic.score * weights.basic_economic
            + political.score * weights.basic_political
            + social.score * weights.basic_social
        )

    return EvidenceScore(
        thesis_id=thesis_id,
        economic=economic,
        market=market_score,
        political=political,
        social=social,
        overall=overall,
        blend=blend,
    )


def zero_evidence(thesis_id: str, config: Optional[EngineConfig] = None) -> EvidenceScore:
    proxies = (config or EngineConfig()).proxies
    economic = CategoryScore(name="economic")
    return EvidenceScore(
        thesis_id=thesis_id,
        economic=economic,
        market=CategoryScore(name="market"),
        political=derive_proxy("political", economic, proxies.political),
        social=derive_proxy("social", economic, proxies.social),
    )


def derive_proxy(name: str, source: CategoryScore, factor: float) -> CategoryScore:
    """A proxy category: `factor` times the source category score."""
    return CategoryScore(
        name=name,
        score=source.score * factor,
        derived=True,
        source=source.name,
        factor=factor,
    )


def threshold_score(
    value: float,
    positive: float,
    negative: float,
    higher_is_better: bool = False,
) -> int:
    """
    Four-level ladder with the threshold midpoint as neutral boundary.

    Default (lower is better): +2 at or below positive, +1 at or below
    the midpoint, -1 at or below negative, -2 otherwise. Evaluated through
    the same compiled ladder the scorer uses.
    """
    polarity = Polarity(
        PolarityKind.HIGHER_CONFIRMS if higher_is_better else PolarityKind.LOWER_CONFIRMS
    )
    compiled = lower_threshold_rule(
        "", RuleCategory.ECONOMIC, ThresholdRule(0.0, positive, negative), polarity
    )
    return first_match(compiled.score_rules, value).score


def normalize_weighted_score(score: float, total_weight: float) -> float:
    return score / total_weight if total_weight > 0 else 0.0


def _score_category(
    name: str,
    rules: Iterable[CompiledRule],
    value_of: Callable[[str], Optional[float]],
    thesis_id: str,
    log: logging.Logger,
) -> CategoryScore:
    weighted_sum = 0.0
    total_weight = 0.0
    scored = 0

    for rule in rules:
        value = value_of(rule.metric)
        if value is None:
            log.warning(f"No current reading for {name} metric '{rule.metric}' ({thesis_id})")
            continue
        matched = first_match(rule.score_rules, value)
        score = matched.score if matched is not None else 0
        weighted_sum += score * rule.weight
        total_weight += rule.weight
        scored += 1

    return CategoryScore(
        name=name,
        score=normalize_weighted_score(weighted_sum, total_weight),
        weight=total_weight,
        metrics_scored=scored,
    )
