"""Tests for the signal classifier."""

import logging

import pytest

from thesis_lens.classifier.engine import (
    classify_metric,
    classify_signals,
    determine_impact_tier,
)
from thesis_lens.types import ImpactTier, MarketSnapshot, MetricReading, Signal


def _by_metric(records):
    return {r.metric: r for r in records}


class TestClassifySignals:
    @pytest.fixture
    def calm_signals(self, repository, calm_provider):
        return _by_metric(classify_signals("soft-landing", repository, calm_provider))

    def test_economic_then_market_order(self, repository, calm_provider):
        records = classify_signals("soft-landing", repository, calm_provider)
        assert len(records) == 9
        assert records[0].metric == "Real GDP Growth Rate"
        assert [r.source for r in records[-4:]] == ["Market Data"] * 4

    def test_economic_confirm(self, calm_signals):
        gdp = calm_signals["Real GDP Growth Rate"]
        assert gdp.signal is Signal.CONFIRM
        assert gdp.reasoning == "Value 2.80 supports thesis (≤3)"
        assert gdp.impact is ImpactTier.HIGH
        assert gdp.next_update == "Quarterly"
        assert gdp.source == "Economic Data"

    def test_economic_contradict(self, calm_signals):
        cci = calm_signals["Consumer Confidence Index"]
        assert cci.signal is Signal.CONTRADICT
        assert cci.reasoning == "Value 108.00 contradicts thesis (≥85)"
        assert cci.impact is ImpactTier.LOW

    def test_economic_neutral(self, calm_signals):
        u3 = calm_signals["Unemployment Rate (U-3)"]
        assert u3.signal is Signal.NEUTRAL
        assert u3.reasoning == "Value 3.70 is neutral"
        assert u3.next_update == "Monthly"

    def test_market_directional(self, calm_signals):
        spx = calm_signals["S&P 500"]
        assert spx.signal is Signal.CONFIRM
        assert spx.reasoning == "S&P 500 at 5100 shows market confidence (≥4800)"
        assert spx.next_update == "Real-time"

    def test_market_neutral(self, calm_signals):
        assert calm_signals["VIX Index"].reasoning == "VIX at 13.5 is in neutral range"

    def test_market_banded(self, calm_signals):
        dxy = calm_signals["Dollar Index"]
        assert dxy.signal is Signal.CONTRADICT
        assert dxy.reasoning == "Dollar Index at 101.00 shows potential stress (≥95)"

    def test_gold_negative_boundary(self, calm_signals):
        gold = calm_signals["Gold Price"]
        assert gold.signal is Signal.CONFIRM
        assert gold.reasoning == "Gold at $1950 suggests economic confidence (≤$2000)"

    def test_claims_render_in_thousands(self, repository, stressed_provider):
        records = _by_metric(classify_signals("mild-recession", repository, stressed_provider))
        claims = records["Initial Jobless Claims"]
        assert claims.signal is Signal.CONFIRM
        assert claims.reasoning == "Value 430K supports thesis (≤450K)"
        assert claims.next_update == "Weekly"

    def test_stress_thesis_market_polarity(self, repository, stressed_provider):
        records = _by_metric(classify_signals("mild-recession", repository, stressed_provider))
        # VIX 34 sits between 20 and 40: neither boundary crossed
        assert records["VIX Index"].signal is Signal.NEUTRAL
        # S&P 3700 at or below 4200 confirms the recession thesis
        assert records["S&P 500"].signal is Signal.CONFIRM
        assert records["S&P 500"].reasoning == "S&P 500 at 3700 confirms market decline (≤4200)"

    def test_inclusive_boundaries(self, repository, make_provider):
        provider = make_provider({"Real GDP Growth Rate": 3.0, "Core PCE": 4.0})
        records = _by_metric(classify_signals("soft-landing", repository, provider))
        assert records["Real GDP Growth Rate"].signal is Signal.CONFIRM
        assert records["Core PCE"].signal is Signal.CONTRADICT

    def test_missing_reading(self, repository, make_provider, caplog):
        with caplog.at_level(logging.WARNING):
            records = _by_metric(classify_signals("soft-landing", repository, make_provider()))
        gdp = records["Real GDP Growth Rate"]
        assert gdp.signal is Signal.NEUTRAL
        assert gdp.reasoning == "No data available"
        assert gdp.change == "→"
        assert gdp.value is None
        assert "Real GDP Growth Rate" in caplog.text

    def test_provider_formatting_and_change(self, repository, make_provider):
        provider = make_provider(
            {"S&P 500": MetricReading("S&P 500", 5100.0, formatted="5,100.00", change=12.5)}
        )
        spx = _by_metric(classify_signals("soft-landing", repository, provider))["S&P 500"]
        assert spx.formatted == "5,100.00"
        assert spx.reasoning.startswith("S&P 500 at 5,100.00")
        assert spx.change == "↑ +12.50"

    def test_snapshot_value_overrides_provider_formatting(self, repository, make_provider):
        provider = make_provider(
            {"S&P 500": MetricReading("S&P 500", 5100.0, formatted="5,100.00")}
        )
        market = MarketSnapshot(broad_equity_index=3400.0)
        records = classify_signals("soft-landing", repository, provider, market=market)
        spx = _by_metric(records)["S&P 500"]
        assert spx.value == 3400.0
        assert spx.signal is Signal.CONTRADICT
        assert spx.formatted == "3400"

    def test_unknown_thesis(self, repository, calm_provider, caplog):
        with caplog.at_level(logging.WARNING):
            assert classify_signals("stagflation", repository, calm_provider) == []
        assert "stagflation" in caplog.text

    def test_to_dict(self, calm_signals):
        d = calm_signals["Real GDP Growth Rate"].to_dict()
        assert d["name"] == "Real GDP Growth Rate"
        assert d["signal"] == "confirm"
        assert d["impact"] == "high"


class TestClassifyMetric:
    def test_single_metric(self, repository, calm_provider):
        record = classify_metric("soft-landing", "Core PCE", repository, calm_provider)
        assert record.metric == "Core PCE"
        assert record.signal is Signal.NEUTRAL

    def test_unknown_metric(self, repository, calm_provider, caplog):
        with caplog.at_level(logging.WARNING):
            assert classify_metric("soft-landing", "Bitcoin", repository, calm_provider) is None
        assert "Bitcoin" in caplog.text

    def test_unknown_thesis(self, repository, calm_provider):
        assert classify_metric("stagflation", "Core PCE", repository, calm_provider) is None


class TestImpactTier:
    @pytest.mark.parametrize(
        "weight,tier",
        [
            (0.35, ImpactTier.HIGH),
            (0.25, ImpactTier.HIGH),
            (0.2, ImpactTier.MEDIUM),
            (0.15, ImpactTier.MEDIUM),
            (0.1, ImpactTier.LOW),
        ],
    )
    def test_tiers(self, weight, tier):
        assert determine_impact_tier(weight) is tier
