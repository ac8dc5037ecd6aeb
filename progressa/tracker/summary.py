"""
Progress summary helpers - Read-only views derived from the store.

Provides:
- Progress summary dict for dashboards
- Greeting and motivational message selection
- Achievement filtering and share text
"""

from typing import Optional

from progressa.schemas import Achievement, AchievementCategory, UserProgress

from .store import LearningStore


def greeting(hour: int) -> str:
    """Time-of-day greeting. Morning 5-11, afternoon 12-16, evening 17-20, night otherwise."""
    if 5 <= hour < 12:
        return "Good morning"
    if 12 <= hour < 17:
        return "Good afternoon"
    if 17 <= hour < 21:
        return "Good evening"
    return "Good night"


def motivational_message(progress: UserProgress) -> str:
    """
    Pick an encouragement line for the learner.

    Priority: long streak, short streak, past halfway, started, fresh start.
    """
    if progress.current_streak >= 7:
        return "Amazing streak! You're on fire! 🔥"
    if progress.current_streak >= 3:
        return "Great momentum! Keep it going! 💪"
    if progress.lessons_progress_fraction > 0.5:
        return "Over halfway there! You've got this! 🚀"
    if progress.total_lessons_completed > 0:
        return "You're closer than you think 💪"
    return "Let's start your learning journey! 🎯"


def filter_achievements(
    achievements: list[Achievement],
    category: Optional[AchievementCategory] = None,
) -> list[Achievement]:
    """Achievements in a category, or all of them when category is None."""
    if category is None:
        return list(achievements)
    return [a for a in achievements if a.category == category]


def share_text(achievement: Achievement) -> str:
    return (
        f'I just earned the "{achievement.title}" badge on Learning Progress! 🎉 '
        f"{achievement.description}"
    )


def get_progress_summary(store: LearningStore) -> dict:
    """Get progress summary for display."""
    path = store.learning_path
    progress = store.user_progress
    today = store.today_lesson

    stage_stats = []
    for stage in path.stages:
        stage_stats.append({
            "id": stage.id,
            "number": stage.stage_number,
            "title": stage.title,
            "state": stage.state.value,
            "completed": stage.completed_lessons_count,
            "total": len(stage.lessons),
        })

    current_stage = store.current_stage
    return {
        "user_name": progress.user_name,
        "total_lessons": path.total_lessons,
        "completed": progress.total_lessons_completed,
        "completion_percent": round(path.overall_progress * 100, 1),
        "completed_stages": path.completed_stages,
        "total_stages": len(path.stages),
        "current_stage": current_stage.title if current_stage else None,
        "current_streak": progress.current_streak,
        "longest_streak": progress.longest_streak,
        "achievements_earned": progress.achievements_earned,
        "total_achievements": progress.total_achievements,
        "today_lesson_id": today.lesson.id if today else None,
        "stages": stage_stats,
    }
