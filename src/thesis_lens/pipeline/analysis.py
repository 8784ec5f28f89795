"""
THESIS LENS - Analysis Pipeline Orchestration

Flow: snapshot -> evidence -> signals -> conflicts -> triggers
      [-> weight of evidence]

Every step is a pure function of (thesis id, rules, snapshot). The
pipeline holds configuration only; nothing is cached between calls.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Optional

import pandas as pd

from thesis_lens.alerts.conflicts import detect_conflicts
from thesis_lens.alerts.triggers import evaluate_triggers
from thesis_lens.classifier.engine import classify_signals
from thesis_lens.config import EngineConfig
from thesis_lens.ingest.snapshot import LiveValueProvider, market_snapshot_from
from thesis_lens.rules.loader import (
    RuleRepository,
    default_repository,
    default_weight_of_evidence_rules,
)
from thesis_lens.scoring.evidence import score_evidence
from thesis_lens.scoring.weight_of_evidence import aggregate_weight_of_evidence
from thesis_lens.types import (
    AnalysisResult,
    MarketSnapshot,
    SignalRecord,
    TriggerZone,
    WeightOfEvidence,
    WeightOfEvidenceRules,
)

logger = logging.getLogger(__name__)


class AnalysisPipeline:
    """
    THESIS LENS analysis pipeline.

    Orchestrates: evidence -> signals -> conflicts -> triggers [-> weight of evidence]
    """

    def __init__(
        self,
        config: EngineConfig | None = None,
        repository: RuleRepository | None = None,
        weight_of_evidence_rules: Mapping[str, WeightOfEvidenceRules] | None = None,
        log: logging.Logger | None = None,
    ) -> None:
        self.config = config or EngineConfig()
        self.log = log or logger
        self.repository = repository or default_repository(log=self.log)
        if weight_of_evidence_rules is None:
            weight_of_evidence_rules = default_weight_of_evidence_rules(log=self.log)
        self.weight_of_evidence_rules = weight_of_evidence_rules

    def process(
        self,
        thesis_id: str,
        provider: LiveValueProvider,
        market: Optional[MarketSnapshot] = None,
        include_weight_of_evidence: bool = False,
    ) -> AnalysisResult:
        """
        Run the full analysis for one thesis over one snapshot.

        Args:
            thesis_id: Selected thesis.
            provider: Live value provider (already materialized).
            market: Market indicator snapshot (default: taken from provider).
            include_weight_of_evidence: Also run the ordered-rule aggregator.

        Returns:
            AnalysisResult with evidence, signals, conflicts and triggers.
        """
        self.log.info(f"THESIS LENS analysis starting for {thesis_id}")
        if thesis_id not in self.repository:
            self.log.warning(f"Thesis '{thesis_id}' is not in the rule repository")

        if market is None:
            market = market_snapshot_from(provider)

        evidence = score_evidence(
            thesis_id, self.repository, provider, market, self.config, self.log
        )
        signals = classify_signals(
            thesis_id, self.repository, provider, market, self.config, self.log
        )
        conflicts = detect_conflicts(provider, self.config, self.log)
        triggers = evaluate_triggers(provider, config=self.config, log=self.log)

        weight_of_evidence = None
        if include_weight_of_evidence:
            weight_of_evidence = aggregate_weight_of_evidence(
                thesis_id, self.weight_of_evidence_rules, provider, log=self.log
            )

        result = AnalysisResult(
            thesis_id=thesis_id,
            evidence=evidence,
            signals=signals,
            conflicts=conflicts,
            triggers=triggers,
            weight_of_evidence=weight_of_evidence,
        )

        self.log.info(
            f"THESIS LENS {thesis_id}: overall={evidence.overall:+.3f} [{evidence.blend}] "
            f"signals={len(signals)} conflicts={len(conflicts)} "
            f"alert_zones={sum(1 for t in triggers if t.status is TriggerZone.ALERT)}"
        )
        return result

    def process_basic(self, thesis_id: str, provider: LiveValueProvider) -> AnalysisResult:
        """
        Economic-only analysis: market indicators are withheld, so the
        evidence score uses the basic blend.
        """
        return self.process(thesis_id, provider, market=MarketSnapshot())


def signals_frame(signals: list[SignalRecord]) -> pd.DataFrame:
    """Tabular view of signal records, one row per metric."""
    columns = [
        "name",
        "signal",
        "impact",
        "change",
        "reasoning",
        "next_update",
        "source",
        "value",
        "formatted",
    ]
    return pd.DataFrame([s.to_dict() for s in signals], columns=columns)


def metric_details_frame(analysis: WeightOfEvidence) -> pd.DataFrame:
    """Tabular view of weight-of-evidence metric details."""
    columns = [
        "name",
        "value",
        "signal",
        "individual_score",
        "weight",
        "weighted_contribution",
        "reasoning",
    ]
    return pd.DataFrame(analysis.to_dict()["metric_details"], columns=columns)
