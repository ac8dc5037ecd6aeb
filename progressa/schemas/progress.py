"""
Progress tracking schemas for Progressa.

Defines Pydantic models for learner progress including:
- The user progress ledger
- The persisted snapshot (path + ledger + achievements)
- The derived "today" lesson
"""

from datetime import datetime

from pydantic import Field, model_validator

from .achievement import Achievement
from .curriculum import CamelModel, LearningPath, Lesson


class UserProgress(CamelModel):
    current_streak: int = Field(0, ge=0)
    longest_streak: int = Field(0, ge=0)
    total_lessons_completed: int = Field(0, ge=0)
    total_lessons: int = Field(0, ge=0)
    achievements_earned: int = Field(0, ge=0)
    total_achievements: int = Field(0, ge=0)
    last_active_date: datetime
    user_name: str = "Learner"

    @model_validator(mode="after")
    def check_streaks(self) -> "UserProgress":
        if self.longest_streak < self.current_streak:
            raise ValueError(
                f"longest_streak ({self.longest_streak}) is below current_streak ({self.current_streak})"
            )
        return self

    @property
    def lessons_progress_fraction(self) -> float:
        if self.total_lessons == 0:
            return 0.0
        return self.total_lessons_completed / self.total_lessons

    @property
    def achievements_progress_fraction(self) -> float:
        if self.total_achievements == 0:
            return 0.0
        return self.achievements_earned / self.total_achievements


class ProgressSnapshot(CamelModel):
    """Full persisted state. Serialized as the learning_progress.json document."""
    learning_path: LearningPath
    user_progress: UserProgress
    achievements: list[Achievement]


class TodayLesson(CamelModel):
    """Next lesson to study, derived from the current stage. Never persisted."""
    lesson: Lesson
    stage_name: str
    stage_number: int
    lesson_index: int  # 1-based position within the stage
    total_lessons_in_stage: int

    @property
    def id(self) -> str:
        return self.lesson.id
