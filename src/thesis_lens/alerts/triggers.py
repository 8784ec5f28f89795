"""
THESIS LENS - Threshold Trigger Evaluator

A trigger group is a named set of boolean conditions. The fraction of
satisfied conditions selects the zone:
- ALERT if ratio >= 2/3
- MONITOR if ratio >= 1/3
- SAFE otherwise

Ratios are exact fractions, so the cut points hold for any group size.
A missing reading counts as condition-not-met and renders as '?'.
"""

from __future__ import annotations

import logging
import operator
from collections.abc import Mapping
from dataclasses import dataclass
from fractions import Fraction
from typing import Any, Iterable, Optional, Sequence

from thesis_lens.config import EngineConfig, TriggerThresholds, ZoneThresholds
from thesis_lens.ingest.snapshot import LiveValueProvider, present
from thesis_lens.metrics import (
    CORE_PCE,
    DOLLAR_INDEX,
    FED_FUNDS,
    GDP_GROWTH,
    GOLD,
    INITIAL_CLAIMS,
    SP500,
    TEN_YEAR_YIELD,
    UNEMPLOYMENT,
    VIX,
)
from thesis_lens.rules.piecewise import format_number
from thesis_lens.types import ThresholdTrigger, TriggerCategory, TriggerZone

logger = logging.getLogger(__name__)

OPERATORS = {
    ">": operator.gt,
    "<": operator.lt,
    ">=": operator.ge,
    "<=": operator.le,
    "≥": operator.ge,
    "≤": operator.le,
    "=": operator.eq,
}

MET = "✓"
NOT_MET = "✗"
UNKNOWN = "?"


@dataclass(frozen=True)
class TriggerCondition:
    """`metric.<field> <operator> threshold`; field is 'value' or 'change'."""

    metric: str
    threshold: float
    operator: str
    description: str
    field: str = "value"

    def __post_init__(self) -> None:
        if self.operator not in OPERATORS:
            raise ValueError(f"Unsupported operator: {self.operator!r}")
        if self.field not in ("value", "change"):
            raise ValueError(f"Unsupported reading field: {self.field!r}")


@dataclass(frozen=True)
class TriggerGroup:
    title: str
    category: TriggerCategory
    conditions: tuple[TriggerCondition, ...]


def determine_zone(
    conditions_met: int,
    total_conditions: int,
    zones: Optional[ZoneThresholds] = None,
) -> TriggerZone:
    zones = zones or ZoneThresholds()
    if total_conditions <= 0:
        return TriggerZone.SAFE
    ratio = Fraction(conditions_met, total_conditions)
    if ratio >= zones.alert_ratio:
        return TriggerZone.ALERT
    if ratio >= zones.monitor_ratio:
        return TriggerZone.MONITOR
    return TriggerZone.SAFE


def evaluate_condition(
    condition: TriggerCondition, provider: LiveValueProvider
) -> Optional[bool]:
    """True/False, or None when the reading (or its change) is missing."""
    reading = provider.lookup(condition.metric)
    if reading is None:
        return None
    observed = present(reading.change if condition.field == "change" else reading.value)
    if observed is None:
        return None
    return OPERATORS[condition.operator](observed, condition.threshold)


def evaluate_trigger(
    group: TriggerGroup,
    provider: LiveValueProvider,
    zones: Optional[ZoneThresholds] = None,
    log: Optional[logging.Logger] = None,
) -> ThresholdTrigger:
    log = log or logger
    rendered = []
    met = 0
    for condition in group.conditions:
        outcome = evaluate_condition(condition, provider)
        if outcome is None:
            log.debug(f"{group.title}: no reading for '{condition.metric}', counted as not met")
            mark = UNKNOWN
        elif outcome:
            met += 1
            mark = MET
        else:
            mark = NOT_MET
        rendered.append(f"{condition.description}: {mark}")

    total = len(group.conditions)
    return ThresholdTrigger(
        title=group.title,
        conditions=rendered,
        conditions_met=met,
        total_conditions=total,
        status=determine_zone(met, total, zones),
        category=group.category,
    )


def evaluate_triggers(
    provider: LiveValueProvider,
    groups: Optional[Iterable[TriggerGroup]] = None,
    config: Optional[EngineConfig] = None,
    log: Optional[logging.Logger] = None,
) -> list[ThresholdTrigger]:
    """Evaluate trigger groups (default: the four canonical groups)."""
    config = config or EngineConfig()
    if groups is None:
        groups = canonical_groups(config.triggers)
    return [evaluate_trigger(g, provider, config.zones, log) for g in groups]


def build_trigger(
    title: str,
    conditions: Sequence[Mapping[str, Any]],
    provider: LiveValueProvider,
    category: TriggerCategory = TriggerCategory.ECONOMIC,
    zones: Optional[ZoneThresholds] = None,
    log: Optional[logging.Logger] = None,
) -> ThresholdTrigger:
    """
    Generic builder over {metric, threshold, operator, description} records.

    Raises:
        ValueError: for an unsupported operator or field.
    """
    group = TriggerGroup(
        title=title,
        category=category,
        conditions=tuple(
            TriggerCondition(
                metric=c["metric"],
                threshold=c["threshold"],
                operator=c["operator"],
                description=c["description"],
                field=c.get("field", "value"),
            )
            for c in conditions
        ),
    )
    return evaluate_trigger(group, provider, zones, log)


# --- Canonical groups ---


def market_stress_group(t: Optional[TriggerThresholds] = None) -> TriggerGroup:
    t = t or TriggerThresholds()
    vix, spx, dxy = (
        format_number(x) for x in (t.vix_spike, t.equity_correction, t.dollar_strength)
    )
    return TriggerGroup(
        title="Market Stress Triggers",
        category=TriggerCategory.MARKET,
        conditions=(
            TriggerCondition(VIX, t.vix_spike, ">", f"VIX Spike >{vix}"),
            TriggerCondition(SP500, t.equity_correction, "<", f"S&P 500 Correction <{spx}"),
            TriggerCondition(DOLLAR_INDEX, t.dollar_strength, ">", f"Dollar Strength >{dxy}"),
        ),
    )


def recession_group(t: Optional[TriggerThresholds] = None) -> TriggerGroup:
    t = t or TriggerThresholds()
    change = format_number(t.unemployment_change)
    claims = format_number(t.initial_claims / 1000)
    return TriggerGroup(
        title="Economic Recession Triggers",
        category=TriggerCategory.ECONOMIC,
        conditions=(
            TriggerCondition(GDP_GROWTH, t.gdp_negative, "<", "GDP growth negative"),
            TriggerCondition(
                UNEMPLOYMENT,
                t.unemployment_change,
                ">",
                f"Unemployment rising >{change}% (change)",
                field="change",
            ),
            TriggerCondition(INITIAL_CLAIMS, t.initial_claims, ">", f"Initial claims >{claims}K"),
        ),
    )


def inflation_group(t: Optional[TriggerThresholds] = None) -> TriggerGroup:
    t = t or TriggerThresholds()
    pce, ffr, tnx = (format_number(x) for x in (t.core_pce, t.fed_funds, t.ten_year_yield))
    return TriggerGroup(
        title="Inflation Pressure Triggers",
        category=TriggerCategory.ECONOMIC,
        conditions=(
            TriggerCondition(CORE_PCE, t.core_pce, ">", f"Core PCE >{pce}%"),
            TriggerCondition(FED_FUNDS, t.fed_funds, ">", f"Fed Funds Rate >{ffr}%"),
            TriggerCondition(TEN_YEAR_YIELD, t.ten_year_yield, ">", f"10-Year Yield >{tnx}%"),
        ),
    )


def geopolitical_group(t: Optional[TriggerThresholds] = None) -> TriggerGroup:
    t = t or TriggerThresholds()
    gold, vix, dxy = (
        format_number(x) for x in (t.gold_safe_haven, t.vix_crisis, t.dollar_flight)
    )
    return TriggerGroup(
        title="Geopolitical Stress Triggers",
        category=TriggerCategory.GEOPOLITICAL,
        conditions=(
            TriggerCondition(GOLD, t.gold_safe_haven, ">", f"Gold Safe Haven >${gold}"),
            TriggerCondition(VIX, t.vix_crisis, ">", f"VIX Crisis Mode >{vix}"),
            TriggerCondition(
                DOLLAR_INDEX, t.dollar_flight, ">", f"Dollar Flight-to-Quality >{dxy}"
            ),
        ),
    )


def canonical_groups(t: Optional[TriggerThresholds] = None) -> list[TriggerGroup]:
    return [market_stress_group(t), recession_group(t), inflation_group(t), geopolitical_group(t)]
