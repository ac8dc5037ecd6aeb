"""Shared fixtures for Progressa tests."""

from datetime import datetime, timedelta

import pytest

from progressa.schemas import (
    Achievement,
    AchievementCategory,
    CountThresholdRule,
    FractionThresholdRule,
    FullPathRule,
    LearningPath,
    Lesson,
    ProgressSnapshot,
    Stage,
    StageMasteryRule,
    StageState,
    StreakThresholdRule,
    UserProgress,
)
from progressa.tracker import LearningStore, ProgressPersistence


START = datetime(2026, 3, 10, 9, 0)


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, days: int = 0, hours: int = 0):
        self.now += timedelta(days=days, hours=hours)


def make_lessons(prefix: str, count: int) -> list[Lesson]:
    return [
        Lesson(id=f"{prefix}-{i}", title=f"{prefix.title()} lesson {i}", duration_minutes=10 * i)
        for i in range(1, count + 1)
    ]


def make_snapshot(
    stage_sizes: list[int],
    current_streak: int = 1,
    last_active: datetime = START,
) -> ProgressSnapshot:
    """Path with one stage per size (first current, rest locked) and the standard rule set."""
    stages = []
    for number, size in enumerate(stage_sizes, start=1):
        stages.append(Stage(
            id=f"stage-{number}",
            title=f"Stage {number}",
            state=StageState.CURRENT if number == 1 else StageState.LOCKED,
            lessons=make_lessons(f"s{number}", size),
            stage_number=number,
        ))
    path = LearningPath(id="test-path", title="Test path", stages=stages)

    achievements = [
        Achievement(id="first-steps", title="First Steps", category=AchievementCategory.MILESTONE,
                    rule=CountThresholdRule(minimum=1)),
        Achievement(id="halfway-hero", title="Halfway Hero", category=AchievementCategory.MILESTONE,
                    rule=FractionThresholdRule(fraction=0.5)),
        Achievement(id="stage-one", title="Stage One Master", category=AchievementCategory.MASTERY,
                    rule=StageMasteryRule(stage_title="Stage 1")),
        Achievement(id="dedicated", title="Dedicated", category=AchievementCategory.STREAK,
                    rule=StreakThresholdRule(days=3)),
        Achievement(id="grand-master", title="Grand Master", category=AchievementCategory.MILESTONE,
                    rule=FullPathRule()),
    ]

    progress = UserProgress(
        current_streak=current_streak,
        longest_streak=current_streak,
        total_lessons=path.total_lessons,
        total_achievements=len(achievements),
        last_active_date=last_active,
    )
    return ProgressSnapshot(learning_path=path, user_progress=progress, achievements=achievements)


@pytest.fixture
def clock():
    return FakeClock(START)


@pytest.fixture
def persistence(tmp_path):
    return ProgressPersistence(tmp_path / "progressa")


@pytest.fixture
def make_store(persistence, clock):
    """Factory building a store over a synthetic path."""

    def factory(stage_sizes=(3,), **kwargs) -> LearningStore:
        return LearningStore(
            persistence=persistence,
            clock=clock,
            seed=make_snapshot(list(stage_sizes), **kwargs),
        )

    return factory
