"""
THESIS LENS - Rule Repository & Configuration Loading

Validates rule configuration once, before any scoring call:
- A structurally invalid configuration (not a mapping of thesis ->
  mapping, missing category or metrics mapping) raises RuleConfigError.
- A single malformed metric entry is logged and skipped; the rest of
  the configuration still loads.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any, Iterator, Optional

from thesis_lens.rules.compiler import PolarityTable, lower_threshold_rule, resolve_polarity
from thesis_lens.rules.defaults import THESIS_SCORING_RULES, WEIGHT_OF_EVIDENCE_RULES
from thesis_lens.types import (
    CompiledRule,
    ConditionOp,
    PiecewiseRule,
    RuleCategory,
    RuleCondition,
    SignalLabel,
    ThesisRuleSet,
    ThresholdRule,
    WeightedRules,
    WeightOfEvidenceRules,
)

logger = logging.getLogger(__name__)

_CONDITION_KEYS = {
    "if_above": ConditionOp.ABOVE,
    "if_below": ConditionOp.BELOW,
    "if_at_or_above": ConditionOp.AT_OR_ABOVE,
    "if_at_or_below": ConditionOp.AT_OR_BELOW,
    "if_between": ConditionOp.BETWEEN,
}


class RuleConfigError(ValueError):
    """Raised when a rule configuration has the wrong shape entirely."""


class MalformedRuleError(ValueError):
    """A single metric entry could not be parsed. Caught and logged by the loader."""


class RuleRepository:
    """
    Static mapping of thesis id -> compiled ThesisRuleSet.

    Unknown thesis ids are a valid, degenerate input: lookup() returns None.
    """

    def __init__(self, rule_sets: Mapping[str, ThesisRuleSet] | None = None) -> None:
        self._rule_sets: dict[str, ThesisRuleSet] = dict(rule_sets or {})

    @classmethod
    def from_config(
        cls,
        config: Any,
        polarity: Optional[PolarityTable] = None,
        log: Optional[logging.Logger] = None,
    ) -> RuleRepository:
        """
        Validate and compile a two-threshold rule configuration.

        Args:
            config: {thesis: {"economic": {...}, "market": {...}}}
            polarity: Per-thesis polarity table (default: DEFAULT_POLARITY).
            log: Logger receiving skip warnings (default: module logger).

        Raises:
            RuleConfigError: if the configuration is not record-of-records.
        """
        log = log or logger
        if not isinstance(config, Mapping):
            raise RuleConfigError(
                "Rule configuration must be a mapping of thesis -> rules, "
                f"got {type(config).__name__}"
            )

        rule_sets = {}
        for thesis_id, thesis_config in config.items():
            if not isinstance(thesis_config, Mapping):
                raise RuleConfigError(f"Rules for thesis '{thesis_id}' must be a mapping")
            if not isinstance(thesis_config.get("economic"), Mapping):
                raise RuleConfigError(f"Thesis '{thesis_id}' has no 'economic' rule mapping")
            market = thesis_config.get("market")
            if market is not None and not isinstance(market, Mapping):
                raise RuleConfigError(f"'market' rules of thesis '{thesis_id}' must be a mapping")

            rule_sets[thesis_id] = ThesisRuleSet(
                thesis_id=thesis_id,
                economic=_compile_category(
                    thesis_id, RuleCategory.ECONOMIC, thesis_config["economic"], polarity, log
                ),
                market=_compile_category(
                    thesis_id, RuleCategory.MARKET, market or {}, polarity, log
                ),
            )
        return cls(rule_sets)

    def lookup(self, thesis_id: str) -> Optional[ThesisRuleSet]:
        return self._rule_sets.get(thesis_id)

    def thesis_ids(self) -> list[str]:
        return list(self._rule_sets)

    def as_weight_of_evidence(self) -> dict[str, WeightOfEvidenceRules]:
        """Lowered score ladders in the ordered-rule shape."""
        return {
            thesis_id: WeightOfEvidenceRules(
                thesis_id=thesis_id,
                metrics=tuple(r.weighted() for r in rule_set.economic + rule_set.market),
            )
            for thesis_id, rule_set in self._rule_sets.items()
        }

    def __contains__(self, thesis_id: object) -> bool:
        return thesis_id in self._rule_sets

    def __iter__(self) -> Iterator[str]:
        return iter(self._rule_sets)

    def __len__(self) -> int:
        return len(self._rule_sets)


def default_repository(log: Optional[logging.Logger] = None) -> RuleRepository:
    """Repository over the reference two-threshold configuration."""
    return RuleRepository.from_config(THESIS_SCORING_RULES, log=log)


def load_weight_of_evidence_rules(
    config: Any,
    log: Optional[logging.Logger] = None,
) -> dict[str, WeightOfEvidenceRules]:
    """
    Validate an ordered-rule configuration.

    Args:
        config: {thesis: {"metrics": {metric: {"weight": w, "rules": [...]}}}}
        log: Logger receiving skip warnings (default: module logger).

    Raises:
        RuleConfigError: if the configuration is not record-of-records.
    """
    log = log or logger
    if not isinstance(config, Mapping):
        raise RuleConfigError(
            "Rule configuration must be a mapping of thesis -> rules, "
            f"got {type(config).__name__}"
        )

    loaded = {}
    for thesis_id, thesis_config in config.items():
        if not isinstance(thesis_config, Mapping) or not isinstance(
            thesis_config.get("metrics"), Mapping
        ):
            raise RuleConfigError(f"Thesis '{thesis_id}' has no 'metrics' mapping")

        metrics = []
        for metric, entry in thesis_config["metrics"].items():
            try:
                metrics.append(_parse_weighted_rules(metric, entry))
            except MalformedRuleError as exc:
                log.warning(f"Skipping metric '{metric}' in thesis '{thesis_id}': {exc}")
        loaded[thesis_id] = WeightOfEvidenceRules(thesis_id=thesis_id, metrics=tuple(metrics))
    return loaded


def default_weight_of_evidence_rules(
    log: Optional[logging.Logger] = None,
) -> dict[str, WeightOfEvidenceRules]:
    return load_weight_of_evidence_rules(WEIGHT_OF_EVIDENCE_RULES, log=log)


def _compile_category(
    thesis_id: str,
    category: RuleCategory,
    entries: Mapping,
    polarity: Optional[PolarityTable],
    log: logging.Logger,
) -> tuple[CompiledRule, ...]:
    compiled = []
    for metric, entry in entries.items():
        try:
            rule = _parse_threshold_rule(entry)
        except MalformedRuleError as exc:
            log.warning(
                f"Skipping {category.value} metric '{metric}' in thesis '{thesis_id}': {exc}"
            )
            continue
        direction = resolve_polarity(thesis_id, metric, category, polarity)
        compiled.append(lower_threshold_rule(metric, category, rule, direction))
    return tuple(compiled)


def _parse_threshold_rule(entry: Any) -> ThresholdRule:
    if isinstance(entry, ThresholdRule):
        return entry
    if not isinstance(entry, Mapping):
        raise MalformedRuleError("rule is not a mapping")
    threshold = entry.get("threshold")
    if not isinstance(threshold, Mapping):
        raise MalformedRuleError("missing 'threshold' mapping")
    return ThresholdRule(
        weight=_number(entry.get("weight"), "weight"),
        positive=_number(threshold.get("positive"), "threshold.positive"),
        negative=_number(threshold.get("negative"), "threshold.negative"),
    )


def _parse_weighted_rules(metric: str, entry: Any) -> WeightedRules:
    if not isinstance(entry, Mapping):
        raise MalformedRuleError("entry is not a mapping")
    weight = _number(entry.get("weight"), "weight")
    rules = entry.get("rules")
    if not isinstance(rules, (list, tuple)):
        raise MalformedRuleError("'rules' is not a list")
    return WeightedRules(
        metric=metric,
        weight=weight,
        rules=tuple(_parse_piecewise_rule(r) for r in rules),
    )


def _parse_piecewise_rule(raw: Any) -> PiecewiseRule:
    if isinstance(raw, PiecewiseRule):
        return raw
    if not isinstance(raw, Mapping):
        raise MalformedRuleError("rule is not a mapping")

    keys = [k for k in _CONDITION_KEYS if k in raw]
    if len(keys) != 1:
        raise MalformedRuleError(f"rule needs exactly one condition, found {keys or 'none'}")
    op = _CONDITION_KEYS[keys[0]]

    if op is ConditionOp.BETWEEN:
        bounds = raw[keys[0]]
        if not isinstance(bounds, (list, tuple)) or len(bounds) != 2:
            raise MalformedRuleError("'if_between' needs [low, high]")
        condition = RuleCondition(
            op, _number(bounds[0], "if_between[0]"), _number(bounds[1], "if_between[1]")
        )
    else:
        condition = RuleCondition(op, _number(raw[keys[0]], keys[0]))

    try:
        label = SignalLabel(raw.get("signal"))
    except ValueError:
        raise MalformedRuleError(f"unknown signal label {raw.get('signal')!r}") from None

    score = _number(raw.get("score"), "score")
    if not float(score).is_integer():
        raise MalformedRuleError(f"score must be an integer, got {score}")
    return PiecewiseRule(condition=condition, label=label, score=int(score))


def _number(value: Any, name: str) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise MalformedRuleError(f"'{name}' must be a number, got {value!r}")
    return value
