"""
THESIS LENS - Configuration & Thresholds

Single source of truth for all numerical constants used by the engine.
All values are named, documented, and centralized.
"""

from dataclasses import dataclass
from fractions import Fraction


@dataclass(frozen=True)
class CompositeWeights:
    """Blend weights for the overall evidence score."""

    # Enhanced blend: used when at least one market indicator had a reading
    economic: float = 0.4
    market: float = 0.3
    political: float = 0.2
    social: float = 0.1
    # Basic blend: economic-dominant, no market category
    basic_economic: float = 0.6
    basic_political: float = 0.3
    basic_social: float = 0.1


@dataclass(frozen=True)
class ProxyFactors:
    """
    Derivation factors for the proxy categories.

    Political and social are NOT independently measured: they are the
    economic score scaled by these factors.
    """

    political: float = 0.3
    social: float = 0.2


@dataclass(frozen=True)
class ImpactTiers:
    """Rule weight cut points for the impact tier of a signal."""

    high: float = 0.25
    medium: float = 0.15


@dataclass(frozen=True)
class ConflictThresholds:
    """Predicates for the two-sided divergence checks."""

    gdp_contraction: float = 0.0  # GDP growth < 0
    equity_strength: float = 4400.0  # S&P 500 > 4400
    volatility_elevated: float = 25.0  # VIX > 25
    currency_strong: float = 105.0  # Dollar Index > 105
    haven_elevated: float = 2000.0  # Gold > $2000
    unemployment_elevated: float = 5.0  # U-3 > 5%
    inflation_elevated: float = 3.0  # Core PCE > 3%
    long_yield_low: float = 4.0  # 10Y < 4%


@dataclass(frozen=True)
class ConflictSeverityConfig:
    """Graded severity from divergence magnitude (alternate path)."""

    multiplier: float = 1.5
    high_factor: float = 0.2  # divergence > 0.3 with default multiplier
    medium_factor: float = 0.1  # divergence > 0.15 with default multiplier


@dataclass(frozen=True)
class TriggerThresholds:
    """Conditions of the canonical threshold trigger groups."""

    # Market stress
    vix_spike: float = 25.0
    equity_correction: float = 4000.0
    dollar_strength: float = 105.0
    # Economic recession
    gdp_negative: float = 0.0
    unemployment_change: float = 0.5  # percentage-point change since prior
    initial_claims: float = 400000.0
    # Inflation pressure
    core_pce: float = 3.0
    fed_funds: float = 5.0
    ten_year_yield: float = 4.5
    # Geopolitical stress
    gold_safe_haven: float = 2000.0
    vix_crisis: float = 30.0
    dollar_flight: float = 110.0


@dataclass(frozen=True)
class ZoneThresholds:
    """Fraction of satisfied conditions that selects a trigger zone."""

    alert_ratio: Fraction = Fraction(2, 3)
    monitor_ratio: Fraction = Fraction(1, 3)


@dataclass(frozen=True)
class EngineConfig:
    """Master configuration for THESIS LENS."""

    composite: CompositeWeights = CompositeWeights()
    proxies: ProxyFactors = ProxyFactors()
    impact: ImpactTiers = ImpactTiers()
    conflicts: ConflictThresholds = ConflictThresholds()
    severity: ConflictSeverityConfig = ConflictSeverityConfig()
    triggers: TriggerThresholds = TriggerThresholds()
    zones: ZoneThresholds = ZoneThresholds()
