"""
Progressa Schemas - Pydantic models for the learning progress tracker.

This module exports all schema classes for:
- Curriculum: lessons, stages, learning path
- Achievement: badges, categories, unlock rules
- Progress: user progress ledger, snapshot, today lesson
"""

# Curriculum schemas
from .curriculum import (
    CamelModel,
    StageState,
    Lesson,
    Stage,
    LearningPath,
)

# Achievement schemas
from .achievement import (
    BadgeState,
    AchievementCategory,
    CountThresholdRule,
    FractionThresholdRule,
    FullPathRule,
    StreakThresholdRule,
    StageMasteryRule,
    UnlockRule,
    Achievement,
)

# Progress schemas
from .progress import (
    UserProgress,
    ProgressSnapshot,
    TodayLesson,
)

__all__ = [
    # Curriculum
    'CamelModel',
    'StageState',
    'Lesson',
    'Stage',
    'LearningPath',
    # Achievement
    'BadgeState',
    'AchievementCategory',
    'CountThresholdRule',
    'FractionThresholdRule',
    'FullPathRule',
    'StreakThresholdRule',
    'StageMasteryRule',
    'UnlockRule',
    'Achievement',
    # Progress
    'UserProgress',
    'ProgressSnapshot',
    'TodayLesson',
]
