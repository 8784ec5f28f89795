"""
THESIS LENS - Core Type Definitions

All dataclasses and enums used across the system.
No scoring logic, only data structures and serialization.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Signal(Enum):
    """Per-metric classification relative to a thesis."""

    CONFIRM = "confirm"
    CONTRADICT = "contradict"
    NEUTRAL = "neutral"


class SignalLabel(Enum):
    """Label carried by an ordered piecewise rule."""

    STRONG_CONFIRM = "strong_confirm"
    MILD_CONFIRM = "mild_confirm"
    NEUTRAL = "neutral"
    MILD_CONTRADICT = "mild_contradict"
    STRONG_CONTRADICT = "strong_contradict"

    @property
    def signal(self) -> Signal:
        if self in (SignalLabel.STRONG_CONFIRM, SignalLabel.MILD_CONFIRM):
            return Signal.CONFIRM
        if self in (SignalLabel.STRONG_CONTRADICT, SignalLabel.MILD_CONTRADICT):
            return Signal.CONTRADICT
        return Signal.NEUTRAL


class MetricOutcome(Enum):
    """Outcome of one metric in the weight-of-evidence aggregation."""

    STRONG_CONFIRM = "strong_confirm"
    MILD_CONFIRM = "mild_confirm"
    NEUTRAL = "neutral"
    MILD_CONTRADICT = "mild_contradict"
    STRONG_CONTRADICT = "strong_contradict"
    NEUTRAL_NO_MATCH = "neutral_no_match"  # reading present, no rule matched
    NO_DATA = "no_data"  # no current reading

    @classmethod
    def from_label(cls, label: SignalLabel) -> MetricOutcome:
        return cls(label.value)


class ImpactTier(Enum):
    """Impact of a signal, looked up from its rule weight."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class AlertSeverity(Enum):
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class TriggerZone(Enum):
    """Risk zone selected by the fraction of satisfied conditions."""

    SAFE = "Safe Zone"
    MONITOR = "Monitor Zone"
    ALERT = "Alert Zone"


class TriggerCategory(Enum):
    ECONOMIC = "economic"
    MARKET = "market"
    GEOPOLITICAL = "geopolitical"


class RuleCategory(Enum):
    ECONOMIC = "economic"
    MARKET = "market"


class ConditionOp(Enum):
    """Comparison of a piecewise rule condition."""

    ABOVE = "above"  # value > threshold
    BELOW = "below"  # value < threshold
    AT_OR_ABOVE = "at_or_above"  # value >= threshold
    AT_OR_BELOW = "at_or_below"  # value <= threshold
    BETWEEN = "between"  # threshold <= value < upper


class PolarityKind(Enum):
    """Which side of a metric's thresholds supports the thesis."""

    LOWER_CONFIRMS = "lower_confirms"
    HIGHER_CONFIRMS = "higher_confirms"
    BANDED = "banded"  # each outer band carries its own signal


# --- Inputs ---


@dataclass(frozen=True)
class MetricReading:
    """Current reading of one metric. Owned by the live value provider."""

    metric: str
    value: Optional[float] = None
    formatted: str = ""
    change: Optional[float] = None
    date: Optional[str] = None
    last_updated: Optional[str] = None
    source: str = ""
    is_fallback: bool = False


@dataclass(frozen=True)
class MarketSnapshot:
    """The four market indicators used by the polarity branches."""

    volatility_index: Optional[float] = None
    broad_equity_index: Optional[float] = None
    currency_strength_index: Optional[float] = None
    precious_metal_price: Optional[float] = None


# --- Rules ---


@dataclass(frozen=True)
class ThresholdRule:
    """Legacy two-sided rule: the 'good' and 'bad' boundary values."""

    weight: float
    positive: float
    negative: float

    @property
    def midpoint(self) -> float:
        return (self.positive + self.negative) / 2


@dataclass(frozen=True)
class RuleCondition:
    op: ConditionOp
    threshold: float
    upper: Optional[float] = None  # exclusive upper bound for BETWEEN


@dataclass(frozen=True)
class PiecewiseRule:
    condition: RuleCondition
    label: SignalLabel
    score: int


@dataclass(frozen=True)
class Polarity:
    """
    Directionality of a metric under one thesis.

    Directional kinds use `boundary` ("positive" or "negative") as the
    confirm boundary; the other threshold is the contradict boundary.
    BANDED uses `above_signal` at or above the positive threshold and
    `below_signal` at or below the negative threshold.
    """

    kind: PolarityKind
    boundary: str = "positive"
    above_signal: Optional[Signal] = None
    below_signal: Optional[Signal] = None


@dataclass(frozen=True)
class WeightedRules:
    """Ordered rule list for one metric. First matching rule wins."""

    metric: str
    weight: float
    rules: tuple[PiecewiseRule, ...]


@dataclass(frozen=True)
class CompiledRule:
    """A legacy threshold rule lowered into ordered piecewise lists."""

    metric: str
    category: RuleCategory
    weight: float
    threshold: ThresholdRule
    polarity: Polarity
    score_rules: tuple[PiecewiseRule, ...]
    signal_rules: tuple[PiecewiseRule, ...]

    def weighted(self) -> WeightedRules:
        return WeightedRules(metric=self.metric, weight=self.weight, rules=self.score_rules)


@dataclass(frozen=True)
class ThesisRuleSet:
    """Compiled rules of one thesis, partitioned by category."""

    thesis_id: str
    economic: tuple[CompiledRule, ...] = ()
    market: tuple[CompiledRule, ...] = ()

    @property
    def has_market(self) -> bool:
        return bool(self.market)


@dataclass(frozen=True)
class WeightOfEvidenceRules:
    """Ordered-rule configuration of one thesis."""

    thesis_id: str
    metrics: tuple[WeightedRules, ...] = ()


# --- Evidence score ---


@dataclass(frozen=True)
class CategoryScore:
    """
    Normalized score of one category.

    Derived categories are NOT independently evidenced: their score is
    `factor` times the score of the `source` category.
    """

    name: str
    score: float = 0.0
    weight: float = 0.0
    metrics_scored: int = 0
    derived: bool = False
    source: Optional[str] = None
    factor: Optional[float] = None

    def to_dict(self) -> dict:
        d: dict = {"score": self.score, "derived": self.derived}
        if self.derived:
            d["source"] = self.source
            d["factor"] = self.factor
        else:
            d["weight"] = self.weight
            d["metrics_scored"] = self.metrics_scored
        return d


@dataclass(frozen=True)
class EvidenceScore:
    thesis_id: str
    economic: CategoryScore
    market: CategoryScore
    political: CategoryScore
    social: CategoryScore
    overall: float = 0.0
    blend: str = "basic"  # "enhanced" when market readings contributed

    def to_dict(self) -> dict:
        return {
            "thesis": self.thesis_id,
            "economic": self.economic.to_dict(),
            "market": self.market.to_dict(),
            "political": self.political.to_dict(),
            "social": self.social.to_dict(),
            "overall": self.overall,
            "blend": self.blend,
        }


# --- Signals & alerts ---


@dataclass(frozen=True)
class SignalRecord:
    metric: str
    signal: Signal
    impact: ImpactTier
    change: str
    reasoning: str
    next_update: str
    source: str
    value: Optional[float] = None
    formatted: str = ""

    def to_dict(self) -> dict:
        return {
            "name": self.metric,
            "signal": self.signal.value,
            "impact": self.impact.value,
            "change": self.change,
            "reasoning": self.reasoning,
            "next_update": self.next_update,
            "source": self.source,
            "value": self.value,
            "formatted": self.formatted,
        }


@dataclass(frozen=True)
class ConflictAlert:
    title: str
    severity: AlertSeverity
    description: str
    active: bool = True
    market_based: bool = True

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "severity": self.severity.value,
            "description": self.description,
            "active": self.active,
            "market_based": self.market_based,
        }


@dataclass(frozen=True)
class ThresholdTrigger:
    title: str
    conditions: list[str]
    conditions_met: int
    total_conditions: int
    status: TriggerZone
    category: TriggerCategory

    @property
    def triggered(self) -> str:
        return f"{self.conditions_met} of {self.total_conditions} triggered"

    def to_dict(self) -> dict:
        return {
            "title": self.title,
            "conditions": list(self.conditions),
            "conditions_met": self.conditions_met,
            "total_conditions": self.total_conditions,
            "triggered": self.triggered,
            "status": self.status.value,
            "category": self.category.value,
        }


# --- Weight of evidence ---


@dataclass
class CategoryBreakdown:
    score: float = 0.0
    weight: float = 0.0
    count: int = 0


@dataclass(frozen=True)
class MetricDetail:
    metric: str
    value: Optional[float]
    signal: MetricOutcome
    individual_score: int
    weight: float
    weighted_contribution: float
    reasoning: str


@dataclass
class EvidenceSummary:
    confirming: int = 0
    contradicting: int = 0
    neutral: int = 0  # neutral, no rule matched, or no data
    data_available: int = 0
    total_metrics: int = 0

    @property
    def data_availability(self) -> float:
        if self.total_metrics == 0:
            return 0.0
        return self.data_available / self.total_metrics


@dataclass
class WeightOfEvidence:
    thesis_id: str
    overall_score: float = 0.0
    total_weight: float = 0.0
    categories: dict[str, CategoryBreakdown] = field(
        default_factory=lambda: {"economic": CategoryBreakdown(), "market": CategoryBreakdown()}
    )
    details: list[MetricDetail] = field(default_factory=list)
    summary: EvidenceSummary = field(default_factory=EvidenceSummary)

    def to_dict(self) -> dict:
        return {
            "thesis": self.thesis_id,
            "overall_score": self.overall_score,
            "total_weight": self.total_weight,
            "category_breakdown": {
                name: {"score": c.score, "weight": c.weight, "count": c.count}
                for name, c in self.categories.items()
            },
            "metric_details": [
                {
                    "name": d.metric,
                    "value": d.value,
                    "signal": d.signal.value,
                    "individual_score": d.individual_score,
                    "weight": d.weight,
                    "weighted_contribution": d.weighted_contribution,
                    "reasoning": d.reasoning,
                }
                for d in self.details
            ],
            "summary": {
                "confirming": self.summary.confirming,
                "contradicting": self.summary.contradicting,
                "neutral": self.summary.neutral,
                "data_available": self.summary.data_available,
                "total_metrics": self.summary.total_metrics,
                "data_availability": self.summary.data_availability,
            },
        }


@dataclass(frozen=True)
class EvidenceStatistics:
    """Secondary statistics derived from a weight-of-evidence result."""

    score: float
    confidence: float
    data_quality: float
    distribution: dict[str, float]


# --- Pipeline output ---


@dataclass(frozen=True)
class AnalysisResult:
    """Final THESIS LENS output for one thesis and one snapshot."""

    thesis_id: str
    evidence: EvidenceScore
    signals: list[SignalRecord]
    conflicts: list[ConflictAlert]
    triggers: list[ThresholdTrigger]
    weight_of_evidence: Optional[WeightOfEvidence] = None

    def to_dict(self) -> dict:
        """Serialize to output JSON format."""
        return {
            "thesis": self.thesis_id,
            "evidence": self.evidence.to_dict(),
            "signals": [s.to_dict() for s in self.signals],
            "conflicts": [c.to_dict() for c in self.conflicts],
            "triggers": [t.to_dict() for t in self.triggers],
            "weight_of_evidence": (
                self.weight_of_evidence.to_dict() if self.weight_of_evidence else None
            ),
        }

    def to_json(self) -> str:
        """Serialize to JSON string."""
        return json.dumps(self.to_dict(), indent=2)
