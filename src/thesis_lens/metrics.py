"""
THESIS LENS - Metric Catalog

Metric names as published by the live value provider, the market
indicator mapping, and the static update-frequency table.
"""

GDP_GROWTH = "Real GDP Growth Rate"
UNEMPLOYMENT = "Unemployment Rate (U-3)"
CORE_PCE = "Core PCE"
FED_FUNDS = "Fed Funds Rate"
CONSUMER_CONFIDENCE = "Consumer Confidence Index"
INITIAL_CLAIMS = "Initial Jobless Claims"
TEN_YEAR_YIELD = "10-Year Treasury Yield"

VIX = "VIX Index"
SP500 = "S&P 500"
DOLLAR_INDEX = "Dollar Index"
GOLD = "Gold Price"

# Metric name -> MarketSnapshot field
MARKET_INDICATORS = {
    VIX: "volatility_index",
    SP500: "broad_equity_index",
    DOLLAR_INDEX: "currency_strength_index",
    GOLD: "precious_metal_price",
}

# Weight-of-evidence "market" bucket; everything else is "economic"
MARKET_BUCKET = frozenset([VIX, SP500, DOLLAR_INDEX, GOLD, TEN_YEAR_YIELD])

# Count metrics rendered in thousands in reasoning strings
THOUSANDS_DISPLAY = frozenset([INITIAL_CLAIMS])

DAILY_METRICS = frozenset([FED_FUNDS, TEN_YEAR_YIELD, VIX, SP500, DOLLAR_INDEX, GOLD])
WEEKLY_METRICS = frozenset([INITIAL_CLAIMS])
MONTHLY_METRICS = frozenset([UNEMPLOYMENT, CORE_PCE, CONSUMER_CONFIDENCE])


def metric_bucket(metric: str) -> str:
    """Weight-of-evidence bucket of a metric."""
    return "market" if metric in MARKET_BUCKET else "economic"


def next_update_estimate(metric: str) -> str:
    """Expected refresh cadence of a metric. Unlisted metrics are quarterly."""
    if metric in DAILY_METRICS:
        return "Real-time"
    if metric in WEEKLY_METRICS:
        return "Weekly"
    if metric in MONTHLY_METRICS:
        return "Monthly"
    return "Quarterly"
