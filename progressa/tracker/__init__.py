"""
Progressa Tracker - Runtime components for tracking learning progress.

This module provides:
- LearningStore: the progress engine owning path, ledger and achievements
- ProgressPersistence: JSON snapshot storage
- Streak and achievement rule evaluation
- Summary helpers for display
"""

from .persistence import (
    ProgressPersistence,
    PersistenceStatus,
    LoadResult,
    SaveResult,
    DEFAULT_PROGRESS_DIR,
    PROGRESS_FILE_NAME,
)

from .streak import (
    StreakUpdate,
    compute_streak,
    local_day,
)

from .rules import (
    ProgressMetrics,
    rule_satisfied,
    evaluate_achievements,
)

from .store import (
    LearningStore,
    CompletionStatus,
    CompletionResult,
    StoreEvent,
    StoreEventKind,
)

from .summary import (
    get_progress_summary,
    greeting,
    motivational_message,
    filter_achievements,
    share_text,
)

__all__ = [
    # Persistence
    "ProgressPersistence",
    "PersistenceStatus",
    "LoadResult",
    "SaveResult",
    "DEFAULT_PROGRESS_DIR",
    "PROGRESS_FILE_NAME",
    # Streak
    "StreakUpdate",
    "compute_streak",
    "local_day",
    # Rules
    "ProgressMetrics",
    "rule_satisfied",
    "evaluate_achievements",
    # Store
    "LearningStore",
    "CompletionStatus",
    "CompletionResult",
    "StoreEvent",
    "StoreEventKind",
    # Summary
    "get_progress_summary",
    "greeting",
    "motivational_message",
    "filter_achievements",
    "share_text",
]
