"""
THESIS LENS - Rule-Based Evidence Engine for Macro Theses

THESIS LENS answers one question only:
"How much does the current snapshot of economic and market readings
support or contradict a selected macro thesis?"

Design Principles:
- Deterministic, rule-based, pure over (thesis, rules, snapshot)
- A missing reading is missing, never zero
- Ordered rules: the first matching rule governs
- Proxy categories are derived and labeled as such
- No fetching, no persistence, no forecasting
"""

__version__ = "1.0.0"
