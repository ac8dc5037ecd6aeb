"""Achievement rule engine tests."""

from datetime import datetime

import pytest

from progressa.schemas import (
    Achievement,
    AchievementCategory,
    BadgeState,
    CountThresholdRule,
    FractionThresholdRule,
    FullPathRule,
    StageMasteryRule,
    StageState,
    StreakThresholdRule,
)
from progressa.tracker import ProgressMetrics, evaluate_achievements, rule_satisfied

from conftest import make_snapshot


EARNED_AT = datetime(2026, 3, 10, 9, 0)


def metrics(**overrides) -> ProgressMetrics:
    values = dict(
        total_completed=0,
        total_lessons=10,
        completed_stages=0,
        total_stages=3,
        current_streak=1,
        stage_states={"Basics": StageState.CURRENT},
    )
    values.update(overrides)
    return ProgressMetrics(**values)


class TestRuleSatisfied:

    def test_count_threshold(self):
        rule = CountThresholdRule(minimum=8)
        assert not rule_satisfied(rule, metrics(total_completed=7))
        assert rule_satisfied(rule, metrics(total_completed=8))

    def test_fraction_threshold(self):
        rule = FractionThresholdRule(fraction=0.5)
        assert not rule_satisfied(rule, metrics(total_completed=4, total_lessons=9))
        assert rule_satisfied(rule, metrics(total_completed=5, total_lessons=10))

    def test_fraction_threshold_empty_path(self):
        rule = FractionThresholdRule(fraction=0.5)
        assert not rule_satisfied(rule, metrics(total_completed=3, total_lessons=0))

    def test_full_path(self):
        rule = FullPathRule()
        assert not rule_satisfied(rule, metrics(completed_stages=2, total_stages=3))
        assert rule_satisfied(rule, metrics(completed_stages=3, total_stages=3))

    @pytest.mark.parametrize("days", [3, 7, 30])
    def test_streak_threshold(self, days):
        rule = StreakThresholdRule(days=days)
        assert not rule_satisfied(rule, metrics(current_streak=days - 1))
        assert rule_satisfied(rule, metrics(current_streak=days))

    def test_stage_mastery(self):
        rule = StageMasteryRule(stage_title="Basics")
        assert not rule_satisfied(rule, metrics())
        assert rule_satisfied(rule, metrics(stage_states={"Basics": StageState.COMPLETED}))

    def test_stage_mastery_unknown_stage(self):
        rule = StageMasteryRule(stage_title="Nope")
        assert not rule_satisfied(rule, metrics())

    def test_unknown_rule_type(self):
        with pytest.raises(TypeError):
            rule_satisfied(object(), metrics())


class TestEvaluateAchievements:

    def test_unlocks_and_sets_date(self):
        achievements = [
            Achievement(id="a", title="A", category=AchievementCategory.MILESTONE,
                        rule=CountThresholdRule(minimum=1)),
            Achievement(id="b", title="B", category=AchievementCategory.SPECIAL,
                        rule=CountThresholdRule(minimum=8)),
        ]
        unlocked = evaluate_achievements(achievements, metrics(total_completed=1), EARNED_AT)

        assert [a.id for a in unlocked] == ["a"]
        assert achievements[0].state == BadgeState.EARNED
        assert achievements[0].earned_date == EARNED_AT
        assert achievements[1].state == BadgeState.LOCKED

    def test_earned_achievements_not_reevaluated(self):
        first_date = datetime(2026, 1, 1)
        achievements = [
            Achievement(id="a", title="A", category=AchievementCategory.MILESTONE,
                        state=BadgeState.EARNED, earned_date=first_date,
                        rule=CountThresholdRule(minimum=1)),
        ]
        unlocked = evaluate_achievements(achievements, metrics(total_completed=5), EARNED_AT)
        assert unlocked == []
        assert achievements[0].earned_date == first_date

    def test_achievement_without_rule_stays_locked(self):
        achievements = [Achievement(id="x", title="X", category=AchievementCategory.SPECIAL)]
        assert evaluate_achievements(achievements, metrics(total_completed=100), EARNED_AT) == []
        assert achievements[0].state == BadgeState.LOCKED

    def test_list_order_preserved(self):
        achievements = [
            Achievement(id=f"a{i}", title=f"A{i}", category=AchievementCategory.MILESTONE,
                        rule=CountThresholdRule(minimum=1))
            for i in range(4)
        ]
        unlocked = evaluate_achievements(achievements, metrics(total_completed=1), EARNED_AT)
        assert [a.id for a in unlocked] == ["a0", "a1", "a2", "a3"]


class TestProgressMetrics:

    def test_capture(self):
        snapshot = make_snapshot([2, 3], current_streak=4)
        snapshot.learning_path.stages[0].lessons[0].is_completed = True
        snapshot.user_progress.total_lessons_completed = 1

        captured = ProgressMetrics.capture(snapshot.learning_path, snapshot.user_progress)
        assert captured.total_completed == 1
        assert captured.total_lessons == 5
        assert captured.completed_stages == 0
        assert captured.total_stages == 2
        assert captured.current_streak == 4
        assert captured.stage_states == {"Stage 1": StageState.CURRENT, "Stage 2": StageState.LOCKED}
