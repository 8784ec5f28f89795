"""
THESIS LENS - Reference Rule Configurations

Static, externally-shaped configuration. Loaded and validated through
thesis_lens.rules.loader; nothing here is evaluated directly.
"""

# Two-threshold rules: {thesis: {category: {metric: {weight, threshold}}}}
THESIS_SCORING_RULES = {
    "economic-transition": {
        "economic": {
            "Real GDP Growth Rate": {"weight": 0.25, "threshold": {"negative": -1, "positive": 2}},
            "Unemployment Rate (U-3)": {"weight": 0.2, "threshold": {"negative": 4.5, "positive": 3.5}},
            "Core PCE": {"weight": 0.15, "threshold": {"negative": 3.5, "positive": 2.0}},
            "Fed Funds Rate": {"weight": 0.15, "threshold": {"negative": 3.0, "positive": 5.5}},
            "Consumer Confidence Index": {"weight": 0.1, "threshold": {"negative": 90, "positive": 110}},
            "Initial Jobless Claims": {"weight": 0.15, "threshold": {"negative": 300000, "positive": 450000}},
        },
        "market": {
            "VIX Index": {"weight": 0.3, "threshold": {"negative": 15, "positive": 30}},
            "S&P 500": {"weight": 0.25, "threshold": {"negative": 3800, "positive": 4500}},
            "Dollar Index": {"weight": 0.25, "threshold": {"negative": 95, "positive": 105}},
            "Gold Price": {"weight": 0.2, "threshold": {"negative": 1800, "positive": 2100}},
        },
    },
    "soft-landing": {
        "economic": {
            "Real GDP Growth Rate": {"weight": 0.25, "threshold": {"negative": 0, "positive": 3}},
            "Unemployment Rate (U-3)": {"weight": 0.25, "threshold": {"negative": 5, "positive": 3}},
            "Core PCE": {"weight": 0.25, "threshold": {"negative": 4, "positive": 1.5}},
            "Fed Funds Rate": {"weight": 0.15, "threshold": {"negative": 6, "positive": 2}},
            "Consumer Confidence Index": {"weight": 0.1, "threshold": {"negative": 85, "positive": 105}},
        },
        "market": {
            "VIX Index": {"weight": 0.3, "threshold": {"negative": 25, "positive": 12}},
            "S&P 500": {"weight": 0.3, "threshold": {"negative": 3500, "positive": 4800}},
            "Dollar Index": {"weight": 0.2, "threshold": {"negative": 110, "positive": 95}},
            "Gold Price": {"weight": 0.2, "threshold": {"negative": 2000, "positive": 1700}},
        },
    },
    "mild-recession": {
        "economic": {
            "Real GDP Growth Rate": {"weight": 0.3, "threshold": {"negative": 1, "positive": -2}},
            "Unemployment Rate (U-3)": {"weight": 0.25, "threshold": {"negative": 3.5, "positive": 6}},
            "Core PCE": {"weight": 0.2, "threshold": {"negative": 2, "positive": 4}},
            "Initial Jobless Claims": {"weight": 0.15, "threshold": {"negative": 300000, "positive": 450000}},
            "Consumer Confidence Index": {"weight": 0.1, "threshold": {"negative": 100, "positive": 70}},
        },
        "market": {
            "VIX Index": {"weight": 0.35, "threshold": {"negative": 20, "positive": 40}},
            "S&P 500": {"weight": 0.25, "threshold": {"negative": 4200, "positive": 3200}},
            "Dollar Index": {"weight": 0.2, "threshold": {"negative": 90, "positive": 110}},
            "Gold Price": {"weight": 0.2, "threshold": {"negative": 1700, "positive": 2200}},
        },
    },
}

# Ordered rules: {thesis: {"metrics": {metric: {weight, rules: [...]}}}}
# Each rule carries one condition key: if_above, if_below, if_at_or_above,
# if_at_or_below, or if_between ([low, high) ).
WEIGHT_OF_EVIDENCE_RULES = {
    "soft-landing": {
        "metrics": {
            "Real GDP Growth Rate": {
                "weight": 0.2,
                "rules": [
                    {"if_above": 3.5, "signal": "mild_contradict", "score": -1},
                    {"if_between": [1.5, 3.5], "signal": "strong_confirm", "score": 2},
                    {"if_between": [0, 1.5], "signal": "mild_confirm", "score": 1},
                    {"if_below": 0, "signal": "strong_contradict", "score": -2},
                ],
            },
            "Unemployment Rate (U-3)": {
                "weight": 0.2,
                "rules": [
                    {"if_below": 3.5, "signal": "mild_confirm", "score": 1},
                    {"if_between": [3.5, 4.5], "signal": "strong_confirm", "score": 2},
                    {"if_between": [4.5, 5.5], "signal": "mild_contradict", "score": -1},
                    {"if_at_or_above": 5.5, "signal": "strong_contradict", "score": -2},
                ],
            },
            "Core PCE": {
                "weight": 0.2,
                "rules": [
                    {"if_below": 2.5, "signal": "strong_confirm", "score": 2},
                    {"if_between": [2.5, 3.0], "signal": "mild_confirm", "score": 1},
                    {"if_between": [3.0, 4.0], "signal": "mild_contradict", "score": -1},
                    {"if_at_or_above": 4.0, "signal": "strong_contradict", "score": -2},
                ],
            },
            "Fed Funds Rate": {
                "weight": 0.1,
                "rules": [
                    {"if_below": 4.0, "signal": "mild_confirm", "score": 1},
                    {"if_between": [4.0, 5.5], "signal": "neutral", "score": 0},
                    {"if_at_or_above": 5.5, "signal": "mild_contradict", "score": -1},
                ],
            },
            "Consumer Confidence Index": {
                "weight": 0.1,
                "rules": [
                    {"if_at_or_above": 105, "signal": "strong_confirm", "score": 2},
                    {"if_between": [90, 105], "signal": "mild_confirm", "score": 1},
                    {"if_below": 90, "signal": "mild_contradict", "score": -1},
                ],
            },
            "VIX Index": {
                "weight": 0.1,
                "rules": [
                    {"if_below": 15, "signal": "strong_confirm", "score": 2},
                    {"if_between": [15, 25], "signal": "neutral", "score": 0},
                    {"if_at_or_above": 25, "signal": "strong_contradict", "score": -2},
                ],
            },
            "S&P 500": {
                "weight": 0.05,
                "rules": [
                    {"if_at_or_above": 4800, "signal": "mild_confirm", "score": 1},
                    {"if_below": 3800, "signal": "strong_contradict", "score": -2},
                ],
            },
            "10-Year Treasury Yield": {
                "weight": 0.05,
                "rules": [
                    {"if_between": [3.5, 4.5], "signal": "mild_confirm", "score": 1},
                    {"if_at_or_above": 5.0, "signal": "mild_contradict", "score": -1},
                ],
            },
        },
    },
    "mild-recession": {
        "metrics": {
            "Real GDP Growth Rate": {
                "weight": 0.3,
                "rules": [
                    {"if_below": 0, "signal": "strong_confirm", "score": 2},
                    {"if_between": [0, 1.0], "signal": "mild_confirm", "score": 1},
                    {"if_between": [1.0, 2.5], "signal": "mild_contradict", "score": -1},
                    {"if_at_or_above": 2.5, "signal": "strong_contradict", "score": -2},
                ],
            },
            "Unemployment Rate (U-3)": {
                "weight": 0.2,
                "rules": [
                    {"if_at_or_above": 5.5, "signal": "strong_confirm", "score": 2},
                    {"if_between": [4.5, 5.5], "signal": "mild_confirm", "score": 1},
                    {"if_between": [4.0, 4.5], "signal": "neutral", "score": 0},
                    {"if_below": 4.0, "signal": "strong_contradict", "score": -2},
                ],
            },
            "Initial Jobless Claims": {
                "weight": 0.15,
                "rules": [
                    {"if_at_or_above": 400000, "signal": "strong_confirm", "score": 2},
                    {"if_between": [300000, 400000], "signal": "mild_confirm", "score": 1},
                    {"if_below": 300000, "signal": "mild_contradict", "score": -1},
                ],
            },
            "Consumer Confidence Index": {
                "weight": 0.1,
                "rules": [
                    {"if_below": 80, "signal": "strong_confirm", "score": 2},
                    {"if_between": [80, 95], "signal": "mild_confirm", "score": 1},
                    {"if_at_or_above": 95, "signal": "mild_contradict", "score": -1},
                ],
            },
            "VIX Index": {
                "weight": 0.1,
                "rules": [
                    {"if_at_or_above": 30, "signal": "strong_confirm", "score": 2},
                    {"if_between": [20, 30], "signal": "mild_confirm", "score": 1},
                    {"if_below": 20, "signal": "mild_contradict", "score": -1},
                ],
            },
            "S&P 500": {
                "weight": 0.1,
                "rules": [
                    {"if_below": 3800, "signal": "strong_confirm", "score": 2},
                    {"if_at_or_above": 4800, "signal": "strong_contradict", "score": -2},
                ],
            },
            "Gold Price": {
                "weight": 0.05,
                "rules": [
                    {"if_above": 2200, "signal": "mild_confirm", "score": 1},
                    {"if_below": 1800, "signal": "mild_contradict", "score": -1},
                ],
            },
        },
    },
    "economic-transition": {
        "metrics": {
            "Fed Funds Rate": {
                "weight": 0.2,
                "rules": [
                    {"if_at_or_above": 5.0, "signal": "strong_confirm", "score": 2},
                    {"if_between": [3.0, 5.0], "signal": "mild_confirm", "score": 1},
                    {"if_below": 3.0, "signal": "mild_contradict", "score": -1},
                ],
            },
            "10-Year Treasury Yield": {
                "weight": 0.2,
                "rules": [
                    {"if_at_or_above": 4.5, "signal": "strong_confirm", "score": 2},
                    {"if_between": [3.5, 4.5], "signal": "neutral", "score": 0},
                    {"if_below": 3.5, "signal": "mild_contradict", "score": -1},
                ],
            },
            "Core PCE": {
                "weight": 0.15,
                "rules": [
                    {"if_at_or_above": 3.0, "signal": "mild_confirm", "score": 1},
                    {"if_below": 2.0, "signal": "mild_contradict", "score": -1},
                ],
            },
            "Dollar Index": {
                "weight": 0.15,
                "rules": [
                    {"if_at_or_above": 105, "signal": "strong_confirm", "score": 2},
                    {"if_between": [95, 105], "signal": "neutral", "score": 0},
                    {"if_below": 95, "signal": "mild_contradict", "score": -1},
                ],
            },
            "Gold Price": {
                "weight": 0.15,
                "rules": [
                    {"if_at_or_above": 2100, "signal": "strong_confirm", "score": 2},
                    {"if_below": 1800, "signal": "strong_contradict", "score": -2},
                ],
            },
            "Real GDP Growth Rate": {
                "weight": 0.15,
                "rules": [
                    {"if_between": [0, 2.0], "signal": "mild_confirm", "score": 1},
                    {"if_at_or_above": 3.0, "signal": "mild_contradict", "score": -1},
                    {"if_below": 0, "signal": "strong_contradict", "score": -2},
                ],
            },
        },
    },
}
