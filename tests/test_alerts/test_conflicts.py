"""Tests for the conflict detector."""

import math

import pytest

from thesis_lens.alerts.conflicts import (
    check_conflict,
    conflict_catalog,
    detect_conflicts,
    determine_conflict_severity,
)
from thesis_lens.config import ConflictThresholds
from thesis_lens.types import AlertSeverity, MetricReading


class TestDetectConflicts:
    def test_gdp_market_divergence(self, make_provider):
        provider = make_provider({"Real GDP Growth Rate": -1.0, "S&P 500": 4500.0})
        alerts = detect_conflicts(provider)
        assert [a.title for a in alerts] == ["GDP vs Market Divergence"]
        alert = alerts[0]
        assert alert.severity is AlertSeverity.HIGH
        assert alert.active and alert.market_based
        assert alert.description == (
            "GDP contracting (-1.0%) while S&P 500 remains strong at 4500 - unusual divergence."
        )

    def test_both_predicates_required(self, make_provider):
        provider = make_provider({"Real GDP Growth Rate": -1.0, "S&P 500": 4000.0})
        assert detect_conflicts(provider) == []

    def test_missing_side_means_no_alert(self, make_provider):
        assert detect_conflicts(make_provider({"Real GDP Growth Rate": -1.0})) == []
        provider = make_provider({"Real GDP Growth Rate": None, "S&P 500": 4500.0})
        assert detect_conflicts(provider) == []

    def test_nan_side_means_no_alert(self, make_provider):
        provider = make_provider(
            {
                "Real GDP Growth Rate": MetricReading("Real GDP Growth Rate", math.nan),
                "S&P 500": 4500.0,
            }
        )
        assert detect_conflicts(provider) == []
        assert check_conflict("gdp_market", provider) is None

    def test_strict_thresholds(self, make_provider):
        provider = make_provider({"Real GDP Growth Rate": 0.0, "S&P 500": 4400.0})
        assert detect_conflicts(provider) == []

    def test_stressed_snapshot(self, stressed_provider):
        alerts = detect_conflicts(stressed_provider)
        assert [a.title for a in alerts] == [
            "Dollar-Gold Conflict",
            "Inflation-Bond Yield Divergence",
        ]
        assert alerts[0].description == (
            "Strong dollar (111.0) typically pressures gold, but gold remains elevated"
            " at $2300 - suggests underlying uncertainty."
        )
        assert not alerts[1].market_based

    def test_calm_snapshot(self, calm_provider):
        assert detect_conflicts(calm_provider) == []

    def test_catalog_order(self, make_provider):
        provider = make_provider(
            {
                "Real GDP Growth Rate": -0.5,
                "VIX Index": 28.0,
                "S&P 500": 4600.0,
                "Unemployment Rate (U-3)": 5.5,
            }
        )
        titles = [a.title for a in detect_conflicts(provider)]
        assert titles == [
            "GDP vs Market Divergence",
            "VIX-Equity Divergence",
            "Unemployment-Market Divergence",
        ]

    def test_provider_formatting_in_description(self, make_provider):
        provider = make_provider(
            {
                "VIX Index": MetricReading("VIX Index", 27.4),
                "S&P 500": MetricReading("S&P 500", 4612.3, formatted="4,612.30"),
            }
        )
        alert = detect_conflicts(provider)[0]
        assert "at 4,612.30" in alert.description
        assert "VIX elevated at 27.4" in alert.description


class TestCheckConflict:
    def test_by_key(self, make_provider):
        provider = make_provider({"Core PCE": 3.4, "10-Year Treasury Yield": 3.8})
        alert = check_conflict("inflation_yield", provider)
        assert alert.title == "Inflation-Bond Yield Divergence"
        assert alert.severity is AlertSeverity.MEDIUM

    def test_overridden_thresholds(self, make_provider):
        provider = make_provider({"Real GDP Growth Rate": -1.0, "S&P 500": 4000.0})
        thresholds = ConflictThresholds(equity_strength=3900.0)
        assert check_conflict("gdp_market", provider, thresholds) is not None

    def test_unknown_key(self, make_provider):
        with pytest.raises(KeyError):
            check_conflict("oil_gold", make_provider())

    def test_catalog_keys(self):
        keys = [c.key for c in conflict_catalog()]
        assert keys == [
            "gdp_market",
            "vix_equity",
            "dollar_gold",
            "unemployment_market",
            "inflation_yield",
        ]


class TestConflictSeverity:
    def test_high(self):
        # Zero threshold falls back to the absolute distance
        assert determine_conflict_severity(-1.0, 4500.0, 0.0, 4400.0) is AlertSeverity.HIGH

    def test_medium(self):
        assert determine_conflict_severity(35.0, 4400.0, 25.0, 4400.0) is AlertSeverity.MEDIUM

    def test_low(self):
        assert determine_conflict_severity(26.0, 4410.0, 25.0, 4400.0) is AlertSeverity.LOW
