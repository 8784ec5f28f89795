"""Shared fixtures for THESIS LENS tests."""

import sys
from pathlib import Path

import pytest

# Ensure thesis_lens is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from thesis_lens.config import EngineConfig
from thesis_lens.ingest.snapshot import SnapshotProvider
from thesis_lens.rules.loader import default_repository, default_weight_of_evidence_rules
from thesis_lens.types import MetricReading


@pytest.fixture
def config() -> EngineConfig:
    return EngineConfig()


@pytest.fixture
def repository():
    return default_repository()


@pytest.fixture
def woe_rules():
    return default_weight_of_evidence_rules()


@pytest.fixture
def make_provider():
    """Build a provider from metric -> value (or metric -> MetricReading)."""

    def _make(values=None):
        data = {}
        for metric, v in (values or {}).items():
            data[metric] = v if isinstance(v, MetricReading) else MetricReading(metric, v)
        return SnapshotProvider(data)

    return _make


@pytest.fixture
def calm_readings() -> dict:
    """Expansionary, low-stress readings."""
    return {
        "Real GDP Growth Rate": 2.8,
        "Unemployment Rate (U-3)": 3.7,
        "Core PCE": 2.3,
        "Fed Funds Rate": 4.25,
        "Consumer Confidence Index": 108.0,
        "Initial Jobless Claims": 215000.0,
        "10-Year Treasury Yield": 4.1,
        "VIX Index": 13.5,
        "S&P 500": 5100.0,
        "Dollar Index": 101.0,
        "Gold Price": 1950.0,
    }


@pytest.fixture
def stressed_readings() -> dict:
    """Contracting economy with market stress."""
    return {
        "Real GDP Growth Rate": -1.2,
        "Unemployment Rate (U-3)": 5.8,
        "Core PCE": 3.4,
        "Fed Funds Rate": 5.25,
        "Consumer Confidence Index": 76.0,
        "Initial Jobless Claims": 430000.0,
        "10-Year Treasury Yield": 3.8,
        "VIX Index": 34.0,
        "S&P 500": 3700.0,
        "Dollar Index": 111.0,
        "Gold Price": 2300.0,
    }


@pytest.fixture
def calm_provider(calm_readings) -> SnapshotProvider:
    return SnapshotProvider.from_values(calm_readings)


@pytest.fixture
def stressed_provider(stressed_readings) -> SnapshotProvider:
    return SnapshotProvider.from_values(stressed_readings)
