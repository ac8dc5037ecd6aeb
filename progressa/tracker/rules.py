"""
Achievement rule engine - evaluate unlock rules against a progress snapshot.

Provides:
- ProgressMetrics: the single snapshot every rule sees during one evaluation
- rule_satisfied: dispatch over the closed set of rule kinds
- evaluate_achievements: unlock every locked achievement whose rule holds
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

from progressa.schemas import (
    Achievement,
    BadgeState,
    CountThresholdRule,
    FractionThresholdRule,
    FullPathRule,
    LearningPath,
    StageMasteryRule,
    StageState,
    StreakThresholdRule,
    UserProgress,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProgressMetrics:
    """Counters taken once per evaluation pass."""
    total_completed: int
    total_lessons: int
    completed_stages: int
    total_stages: int
    current_streak: int
    stage_states: dict[str, StageState] = field(default_factory=dict)  # keyed by stage title

    @classmethod
    def capture(cls, path: LearningPath, progress: UserProgress) -> "ProgressMetrics":
        stage_states: dict[str, StageState] = {}
        for stage in path.stages:
            # First stage wins on duplicate titles
            stage_states.setdefault(stage.title, stage.state)
        return cls(
            total_completed=progress.total_lessons_completed,
            total_lessons=path.total_lessons,
            completed_stages=path.completed_stages,
            total_stages=len(path.stages),
            current_streak=progress.current_streak,
            stage_states=stage_states,
        )


def rule_satisfied(rule, metrics: ProgressMetrics) -> bool:
    """Return whether an unlock rule holds for the given metrics."""
    if isinstance(rule, CountThresholdRule):
        return metrics.total_completed >= rule.minimum
    if isinstance(rule, FractionThresholdRule):
        if metrics.total_lessons <= 0:
            return False
        return metrics.total_completed / metrics.total_lessons >= rule.fraction
    if isinstance(rule, FullPathRule):
        return metrics.completed_stages == metrics.total_stages
    if isinstance(rule, StreakThresholdRule):
        return metrics.current_streak >= rule.days
    if isinstance(rule, StageMasteryRule):
        return metrics.stage_states.get(rule.stage_title) == StageState.COMPLETED
    raise TypeError(f"Unknown unlock rule: {type(rule).__name__}")


def evaluate_achievements(
    achievements: list[Achievement],
    metrics: ProgressMetrics,
    earned_at: datetime,
) -> list[Achievement]:
    """
    Unlock achievements whose rule is satisfied.

    Every locked achievement is tested against the same metrics, in list
    order, so one unlock never influences another within a pass.
    Achievements are updated in place.

    Args:
        achievements: Achievement list owned by the caller
        metrics: Snapshot captured before the pass
        earned_at: Timestamp recorded on newly earned achievements

    Returns:
        Achievements newly earned in this pass
    """
    unlocked = []
    for index, achievement in enumerate(achievements):
        if achievement.state != BadgeState.LOCKED or achievement.rule is None:
            continue
        if not rule_satisfied(achievement.rule, metrics):
            continue

        earned = achievement.model_copy(update={
            "state": BadgeState.EARNED,
            "earned_date": earned_at,
        })
        achievements[index] = earned
        unlocked.append(earned)
        logger.info(f"Achievement unlocked: {earned.title}")

    return unlocked
