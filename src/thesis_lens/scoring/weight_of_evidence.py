"""
THESIS LENS - Weight-of-Evidence Aggregator

Ordered-rule scoring. For each metric the first rule whose condition
matches the current value supplies the signal label and score:
- no reading            -> NO_DATA, excluded from all weight totals
- reading, no rule hit  -> NEUTRAL_NO_MATCH, score 0, weight counted

Totals are kept globally and per bucket ("market" is a static name
list, everything else is "economic").
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Iterable, Optional

from thesis_lens.ingest.snapshot import LiveValueProvider, current_value
from thesis_lens.metrics import metric_bucket
from thesis_lens.rules.piecewise import describe_condition, first_match
from thesis_lens.types import (
    CategoryBreakdown,
    EvidenceStatistics,
    EvidenceSummary,
    MetricDetail,
    MetricOutcome,
    Signal,
    WeightedRules,
    WeightOfEvidence,
    WeightOfEvidenceRules,
)

logger = logging.getLogger(__name__)

NO_DATA_REASON = "N/A (No Live Data)"


def aggregate_weight_of_evidence(
    thesis_id: str,
    rules: Mapping[str, WeightOfEvidenceRules],
    provider: LiveValueProvider,
    metric_names: Optional[Iterable[str]] = None,
    log: Optional[logging.Logger] = None,
) -> WeightOfEvidence:
    """
    Aggregate ordered-rule evidence for one thesis.

    Args:
        thesis_id: Selected thesis.
        rules: Ordered-rule configuration by thesis id.
        provider: Live value provider.
        metric_names: Optional filter; totals cover only retained metrics.
        log: Logger receiving degenerate-input warnings.

    Returns:
        WeightOfEvidence with totals, bucket breakdown, details and summary.
    """
    log = log or logger
    result = WeightOfEvidence(thesis_id=thesis_id)

    thesis_rules = rules.get(thesis_id)
    if thesis_rules is None:
        log.warning(f"No weight-of-evidence rules found for thesis: {thesis_id}")
        return result

    selected = set(metric_names) if metric_names else None

    for entry in thesis_rules.metrics:
        if selected is not None and entry.metric not in selected:
            continue
        detail = _evaluate_metric(entry, provider, thesis_id, log)
        if detail is not None:
            _accumulate(result, detail)

    return result


def summarize(analysis: WeightOfEvidence) -> EvidenceStatistics:
    """
    Secondary statistics of an aggregation.

    confidence = data_quality * |confirm_ratio - contradict_ratio|
    It is informational and not part of the primary score.
    """
    summary = analysis.summary
    score = analysis.overall_score / analysis.total_weight if analysis.total_weight > 0 else 0.0
    data_quality = summary.data_availability

    total_signals = summary.confirming + summary.contradicting + summary.neutral
    if total_signals > 0:
        distribution = {
            "confirming": summary.confirming / total_signals,
            "contradicting": summary.contradicting / total_signals,
            "neutral": summary.neutral / total_signals,
        }
    else:
        distribution = {"confirming": 0.0, "contradicting": 0.0, "neutral": 0.0}

    clarity = abs(distribution["confirming"] - distribution["contradicting"])
    return EvidenceStatistics(
        score=score,
        confidence=data_quality * clarity,
        data_quality=data_quality,
        distribution=distribution,
    )


def _evaluate_metric(
    entry: WeightedRules,
    provider: LiveValueProvider,
    thesis_id: str,
    log: logging.Logger,
) -> Optional[MetricDetail]:
    if not isinstance(entry.rules, Sequence):
        log.warning(f"Rules for metric '{entry.metric}' ({thesis_id}) are not a list; skipping")
        return None

    value = current_value(provider, entry.metric)
    if value is None:
        log.warning(f"No current reading for '{entry.metric}' ({thesis_id})")
        return MetricDetail(
            metric=entry.metric,
            value=None,
            signal=MetricOutcome.NO_DATA,
            individual_score=0,
            weight=entry.weight,
            weighted_contribution=0.0,
            reasoning=NO_DATA_REASON,
        )

    matched = first_match(entry.rules, value)
    if matched is None:
        return MetricDetail(
            metric=entry.metric,
            value=value,
            signal=MetricOutcome.NEUTRAL_NO_MATCH,
            individual_score=0,
            weight=entry.weight,
            weighted_contribution=0.0,
            reasoning=f"No rule matched for value: {value:.2f}",
        )

    return MetricDetail(
        metric=entry.metric,
        value=value,
        signal=MetricOutcome.from_label(matched.label),
        individual_score=matched.score,
        weight=entry.weight,
        weighted_contribution=matched.score * entry.weight,
        reasoning=describe_condition(matched.condition, value),
    )


def _accumulate(result: WeightOfEvidence, detail: MetricDetail) -> None:
    summary = result.summary
    summary.total_metrics += 1
    result.details.append(detail)

    if detail.signal is MetricOutcome.NO_DATA:
        summary.neutral += 1
        return

    summary.data_available += 1
    result.overall_score += detail.weighted_contribution
    result.total_weight += detail.weight

    bucket = result.categories.setdefault(metric_bucket(detail.metric), CategoryBreakdown())
    bucket.score += detail.weighted_contribution
    bucket.weight += detail.weight
    bucket.count += 1

    direction = _direction(detail.signal)
    if direction is Signal.CONFIRM:
        summary.confirming += 1
    elif direction is Signal.CONTRADICT:
        summary.contradicting += 1
    else:
        summary.neutral += 1


def _direction(outcome: MetricOutcome) -> Signal:
    if outcome in (MetricOutcome.STRONG_CONFIRM, MetricOutcome.MILD_CONFIRM):
        return Signal.CONFIRM
    if outcome in (MetricOutcome.STRONG_CONTRADICT, MetricOutcome.MILD_CONTRADICT):
        return Signal.CONTRADICT
    return Signal.NEUTRAL
