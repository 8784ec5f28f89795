"""Tests for polarity resolution and legacy rule lowering."""

import pytest

from thesis_lens.metrics import DOLLAR_INDEX, GDP_GROWTH, SP500, UNEMPLOYMENT, VIX
from thesis_lens.rules.compiler import (
    LOWER_IS_BETTER,
    STRESS_MARKET_POLARITY,
    lower_threshold_rule,
    resolve_polarity,
)
from thesis_lens.rules.piecewise import first_match
from thesis_lens.types import (
    Polarity,
    PolarityKind,
    RuleCategory,
    Signal,
    SignalLabel,
    ThresholdRule,
)


def _score(compiled, value):
    matched = first_match(compiled.score_rules, value)
    return matched.score if matched is not None else None


def _signal(compiled, value):
    matched = first_match(compiled.signal_rules, value)
    return matched.label.signal if matched is not None else Signal.NEUTRAL


class TestResolvePolarity:
    def test_table_entry(self):
        p = resolve_polarity("soft-landing", VIX, RuleCategory.MARKET)
        assert p.kind is PolarityKind.LOWER_CONFIRMS

    def test_unlisted_thesis_uses_stress_default(self):
        p = resolve_polarity("mild-recession", VIX, RuleCategory.MARKET)
        assert p == STRESS_MARKET_POLARITY[VIX]
        assert p.kind is PolarityKind.HIGHER_CONFIRMS

    def test_partial_table_falls_back(self):
        """economic-transition only overrides the dollar."""
        assert resolve_polarity("economic-transition", SP500, RuleCategory.MARKET) == (
            STRESS_MARKET_POLARITY[SP500]
        )
        dollar = resolve_polarity("economic-transition", DOLLAR_INDEX, RuleCategory.MARKET)
        assert dollar.kind is PolarityKind.BANDED
        assert dollar.above_signal is Signal.CONFIRM

    def test_economic_metric_is_literal_ladder(self):
        assert resolve_polarity("soft-landing", GDP_GROWTH, RuleCategory.ECONOMIC) == (
            LOWER_IS_BETTER
        )

    def test_custom_table_overrides_economic(self):
        table = {"custom": {GDP_GROWTH: Polarity(PolarityKind.HIGHER_CONFIRMS)}}
        p = resolve_polarity("custom", GDP_GROWTH, RuleCategory.ECONOMIC, table)
        assert p.kind is PolarityKind.HIGHER_CONFIRMS


class TestEconomicLadder:
    @pytest.fixture
    def compiled(self):
        rule = ThresholdRule(weight=0.2, positive=3.5, negative=4.5)
        return lower_threshold_rule(UNEMPLOYMENT, RuleCategory.ECONOMIC, rule, LOWER_IS_BETTER)

    @pytest.mark.parametrize(
        "value,score",
        [(3.0, 2), (3.5, 2), (3.8, 1), (4.0, 1), (4.2, -1), (4.5, -1), (4.6, -2)],
    )
    def test_four_levels(self, compiled, value, score):
        assert _score(compiled, value) == score

    def test_confirm_boundary_is_inclusive(self, compiled):
        assert _signal(compiled, 3.5) is Signal.CONFIRM

    def test_contradict_boundary_is_inclusive(self, compiled):
        assert _signal(compiled, 4.5) is Signal.CONTRADICT

    def test_between_boundaries_is_neutral(self, compiled):
        assert _signal(compiled, 4.0) is Signal.NEUTRAL

    def test_labels(self, compiled):
        labels = [r.label for r in compiled.score_rules]
        assert labels == [
            SignalLabel.STRONG_CONFIRM,
            SignalLabel.MILD_CONFIRM,
            SignalLabel.MILD_CONTRADICT,
            SignalLabel.STRONG_CONTRADICT,
        ]

    def test_weighted_view(self, compiled):
        weighted = compiled.weighted()
        assert weighted.metric == UNEMPLOYMENT
        assert weighted.weight == 0.2
        assert weighted.rules == compiled.score_rules

    def test_higher_confirms_mirrors(self):
        rule = ThresholdRule(weight=0.3, positive=3.0, negative=0.0)
        compiled = lower_threshold_rule(
            GDP_GROWTH, RuleCategory.ECONOMIC, rule, Polarity(PolarityKind.HIGHER_CONFIRMS)
        )
        assert [_score(compiled, v) for v in (3.0, 1.5, 0.0, -0.1)] == [2, 1, -1, -2]
        assert _signal(compiled, 3.0) is Signal.CONFIRM
        assert _signal(compiled, 0.0) is Signal.CONTRADICT


class TestMarketLadder:
    def test_three_levels_higher_confirms(self):
        rule = ThresholdRule(weight=0.35, positive=40, negative=20)
        compiled = lower_threshold_rule(
            VIX, RuleCategory.MARKET, rule, STRESS_MARKET_POLARITY[VIX]
        )
        assert _score(compiled, 40) == 2
        assert _score(compiled, 30) == 0
        assert _score(compiled, 29.9) == -2
        assert _signal(compiled, 40) is Signal.CONFIRM
        assert _signal(compiled, 20) is Signal.CONTRADICT
        assert _signal(compiled, 30) is Signal.NEUTRAL

    def test_negative_boundary_confirms(self):
        """Stress theses confirm on equity weakness at the negative threshold."""
        rule = ThresholdRule(weight=0.25, positive=4500, negative=3800)
        compiled = lower_threshold_rule(
            SP500, RuleCategory.MARKET, rule, STRESS_MARKET_POLARITY[SP500]
        )
        assert _score(compiled, 3800) == 2
        assert _score(compiled, 4100) == 0
        assert _score(compiled, 4200) == -2
        assert _signal(compiled, 3800) is Signal.CONFIRM
        assert _signal(compiled, 4500) is Signal.CONTRADICT

    def test_banded(self):
        rule = ThresholdRule(weight=0.25, positive=105, negative=95)
        polarity = resolve_polarity("economic-transition", DOLLAR_INDEX, RuleCategory.MARKET)
        compiled = lower_threshold_rule(DOLLAR_INDEX, RuleCategory.MARKET, rule, polarity)
        assert _score(compiled, 105) == 1
        assert _score(compiled, 95) == -1
        assert _score(compiled, 100) is None
        assert _signal(compiled, 106) is Signal.CONFIRM
        assert _signal(compiled, 90) is Signal.CONTRADICT
        assert _signal(compiled, 100) is Signal.NEUTRAL
