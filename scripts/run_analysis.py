#!/usr/bin/env python3
"""
THESIS LENS analysis over a readings snapshot.

Usage:
    python scripts/run_analysis.py --readings readings.csv
    python scripts/run_analysis.py --readings readings.json --thesis soft-landing
    python scripts/run_analysis.py --readings readings.csv --woe --json
    python scripts/run_analysis.py --readings readings.csv -v

The readings file holds one row per metric with columns
metric, value, formatted, change, date, last_updated, source, is_fallback
(only metric and value are required).
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import pandas as pd

# Ensure thesis_lens is importable
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from thesis_lens.ingest.snapshot import SnapshotProvider
from thesis_lens.pipeline.analysis import AnalysisPipeline
from thesis_lens.rules.loader import RuleConfigError


def load_readings(path: Path) -> pd.DataFrame:
    if path.suffix.lower() == ".json":
        return pd.read_json(path, orient="records")
    return pd.read_csv(path)


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Score a macro thesis against a readings snapshot",
    )
    parser.add_argument(
        "--readings", "-r", type=Path, required=True, help="Readings file (.csv or .json)"
    )
    parser.add_argument(
        "--thesis", "-t", type=str, default="economic-transition", help="Thesis id"
    )
    parser.add_argument(
        "--woe", action="store_true", help="Include the weight-of-evidence aggregation"
    )
    parser.add_argument("--json", "-j", action="store_true", help="Output JSON only")
    parser.add_argument("--verbose", "-v", action="store_true", help="Verbose logging")
    args = parser.parse_args()

    level = logging.DEBUG if args.verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
    )

    if not args.readings.exists():
        print(f"Error: Readings file '{args.readings}' not found.")
        return 1

    try:
        provider = SnapshotProvider.from_frame(load_readings(args.readings))
    except ValueError as exc:
        print(f"Error: Could not load readings: {exc}")
        return 1

    try:
        pipeline = AnalysisPipeline()
    except RuleConfigError as exc:
        print(f"Error: Invalid rule configuration: {exc}")
        return 1

    result = pipeline.process(args.thesis, provider, include_weight_of_evidence=args.woe)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2))
        return 0

    evidence = result.evidence
    print()
    print("=" * 60)
    print("THESIS LENS ANALYSIS")
    print("=" * 60)
    print(f"Thesis:     {result.thesis_id}")
    print(f"Overall:    {evidence.overall:+.3f} ({evidence.blend} blend)")
    print(f"Economic:   {evidence.economic.score:+.3f}")
    print(f"Market:     {evidence.market.score:+.3f}")
    print(f"Political:  {evidence.political.score:+.3f} (derived)")
    print(f"Social:     {evidence.social.score:+.3f} (derived)")
    print("-" * 60)
    print("Signals:")
    for s in result.signals:
        print(f"  [{s.signal.value:>10}] {s.metric}: {s.reasoning}")
    print("-" * 60)
    print("Conflicts:")
    for c in result.conflicts:
        print(f"  [{c.severity.value}] {c.title}: {c.description}")
    if not result.conflicts:
        print("  none")
    print("-" * 60)
    print("Triggers:")
    for t in result.triggers:
        print(f"  {t.title}: {t.status.value} ({t.triggered})")
    if result.weight_of_evidence is not None:
        woe = result.weight_of_evidence
        summary = woe.summary
        print("-" * 60)
        print(f"Weight of Evidence: {woe.overall_score:+.3f} over weight {woe.total_weight:.2f}")
        print(
            f"  confirming={summary.confirming} contradicting={summary.contradicting} "
            f"neutral={summary.neutral}"
        )
        print(f"  Data Availability: {summary.data_availability:.0%}")
    print("=" * 60)

    return 0


if __name__ == "__main__":
    sys.exit(main())
