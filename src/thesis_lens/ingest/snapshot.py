"""
THESIS LENS - Live Value Snapshots

The engine never fetches. It consumes an already-materialized snapshot
of readings through the LiveValueProvider interface:

    lookup(metric) -> MetricReading | None

None means "metric unknown or currently without data" and is never
interpreted as zero. A reading whose value is None is equally missing.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable, Mapping
from typing import Any, Optional, Protocol

import pandas as pd

from thesis_lens.metrics import MARKET_INDICATORS
from thesis_lens.types import MarketSnapshot, MetricReading

logger = logging.getLogger(__name__)

FRAME_COLUMNS = [
    "metric",
    "value",
    "formatted",
    "change",
    "date",
    "last_updated",
    "source",
    "is_fallback",
]


class LiveValueProvider(Protocol):
    def lookup(self, metric: str) -> Optional[MetricReading]: ...


class SnapshotProvider:
    """In-memory LiveValueProvider over a fixed set of readings."""

    def __init__(self, readings: Mapping[str, MetricReading] | None = None) -> None:
        self._readings: dict[str, MetricReading] = dict(readings or {})

    def lookup(self, metric: str) -> Optional[MetricReading]:
        return self._readings.get(metric)

    def metrics(self) -> list[str]:
        return list(self._readings)

    def __len__(self) -> int:
        return len(self._readings)

    @classmethod
    def from_values(cls, values: Mapping[str, Optional[float]]) -> SnapshotProvider:
        """Bare metric -> value mapping, no display metadata."""
        return cls({m: MetricReading(metric=m, value=_clean(v)) for m, v in values.items()})

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, Any]]) -> SnapshotProvider:
        """
        Build from dict records (one per metric).

        Records without a 'metric' key are skipped with a warning.
        A later record for the same metric replaces an earlier one.
        """
        readings: dict[str, MetricReading] = {}
        for record in records:
            metric = record.get("metric")
            if not metric:
                logger.warning(f"Skipping reading without metric name: {dict(record)}")
                continue
            readings[metric] = MetricReading(
                metric=metric,
                value=_clean(record.get("value")),
                formatted=_text(record.get("formatted")),
                change=_clean(record.get("change")),
                date=_text(record.get("date")) or None,
                last_updated=_text(record.get("last_updated")) or None,
                source=_text(record.get("source")),
                is_fallback=bool(record.get("is_fallback") or False),
            )
        return cls(readings)

    @classmethod
    def from_frame(cls, df: pd.DataFrame) -> SnapshotProvider:
        """
        Build from a readings table.

        Requires a 'metric' column; the other FRAME_COLUMNS are optional.
        NaN values are treated as missing readings.
        """
        if "metric" not in df.columns:
            raise ValueError("Readings table needs a 'metric' column")
        frame = df.reindex(columns=FRAME_COLUMNS)
        frame = frame.astype(object).where(pd.notna(frame), None)
        return cls.from_records(frame.to_dict(orient="records"))


def current_value(provider: LiveValueProvider, metric: str) -> Optional[float]:
    """Numeric reading of a metric, or None when there is no data."""
    reading = provider.lookup(metric)
    if reading is None:
        return None
    return present(reading.value)


def present(value: Optional[float]) -> Optional[float]:
    """None for a missing or NaN number. Providers may hand either through."""
    if value is None or math.isnan(value):
        return None
    return value


def market_snapshot_from(provider: LiveValueProvider) -> MarketSnapshot:
    """Extract the four market indicators from a provider."""
    return MarketSnapshot(
        **{field: current_value(provider, metric) for metric, field in MARKET_INDICATORS.items()}
    )


def indicator_value(
    metric: str,
    provider: LiveValueProvider,
    market: Optional[MarketSnapshot] = None,
) -> Optional[float]:
    """Market indicators come from the explicit snapshot when one is given."""
    if market is not None and metric in MARKET_INDICATORS:
        return present(getattr(market, MARKET_INDICATORS[metric]))
    return current_value(provider, metric)


def _clean(value: Any) -> Optional[float]:
    """Numeric value or None. NaN and unparseable input are missing data."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)
