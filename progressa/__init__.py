"""
Progressa - Personal learning progress tracker.

Sequential stages of lessons, a streak ledger and rule-driven achievements,
persisted as a single JSON snapshot.
"""

__version__ = "0.1.0"
