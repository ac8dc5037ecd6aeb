"""
Curriculum schemas for Progressa.

Defines Pydantic models for curriculum structure including:
- Lessons (atomic completable units)
- Stages (ordered, gated groups of lessons)
- Learning path with stage-gating invariants
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys, populated by either name."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class StageState(str, Enum):
    LOCKED = "locked"
    CURRENT = "current"
    COMPLETED = "completed"


# -----------------------------------------------------------------------------
# Lessons and stages
# -----------------------------------------------------------------------------


class Lesson(CamelModel):
    id: str
    title: str
    subtitle: str = ""
    duration_minutes: int = Field(0, ge=0)
    icon_name: str = ""
    is_completed: bool = False  # incomplete -> completed only

    @property
    def formatted_duration(self) -> str:
        return f"{self.duration_minutes} min"


class Stage(CamelModel):
    """
    A stage of the learning path.
    Stages move strictly forward: locked -> current -> completed.
    """
    id: str
    title: str
    description: str = ""
    state: StageState = StageState.LOCKED
    lessons: list[Lesson] = []
    badge_icon_name: str = ""
    stage_number: int = Field(..., ge=1)

    @property
    def completed_lessons_count(self) -> int:
        return sum(1 for lesson in self.lessons if lesson.is_completed)

    @property
    def progress_fraction(self) -> float:
        if not self.lessons:
            return 0.0
        return self.completed_lessons_count / len(self.lessons)

    @property
    def is_fully_completed(self) -> bool:
        return self.state == StageState.COMPLETED


# -----------------------------------------------------------------------------
# Learning path
# -----------------------------------------------------------------------------


class LearningPath(CamelModel):
    """
    Complete learning path: ordered stages of ordered lessons.

    Validated invariants:
    - at most one stage is current
    - a current stage is preceded only by completed stages
    - lesson ids are unique across the whole path
    """
    id: str
    title: str
    description: str = ""
    stages: list[Stage] = []

    @model_validator(mode="after")
    def check_stage_gating(self) -> "LearningPath":
        current = [i for i, stage in enumerate(self.stages) if stage.state == StageState.CURRENT]
        if len(current) > 1:
            raise ValueError(f"At most one stage may be current, found {len(current)}")
        if current:
            for stage in self.stages[:current[0]]:
                if stage.state != StageState.COMPLETED:
                    raise ValueError(
                        f"Stage '{stage.title}' precedes the current stage but is {stage.state.value}"
                    )

        seen: set[str] = set()
        for stage in self.stages:
            for lesson in stage.lessons:
                if lesson.id in seen:
                    raise ValueError(f"Duplicate lesson id: {lesson.id}")
                seen.add(lesson.id)
        return self

    @property
    def current_stage_index(self) -> int:
        """Index of the current stage, 0 when no stage is current."""
        for index, stage in enumerate(self.stages):
            if stage.state == StageState.CURRENT:
                return index
        return 0

    @property
    def total_lessons(self) -> int:
        return sum(len(stage.lessons) for stage in self.stages)

    @property
    def completed_lessons(self) -> int:
        return sum(stage.completed_lessons_count for stage in self.stages)

    @property
    def overall_progress(self) -> float:
        total = self.total_lessons
        if total == 0:
            return 0.0
        return self.completed_lessons / total

    @property
    def completed_stages(self) -> int:
        return sum(1 for stage in self.stages if stage.state == StageState.COMPLETED)

    def find_lesson(self, lesson_id: str) -> Optional[tuple[int, int]]:
        """Return (stage index, lesson index) for a lesson id, or None."""
        for stage_idx, stage in enumerate(self.stages):
            for lesson_idx, lesson in enumerate(stage.lessons):
                if lesson.id == lesson_id:
                    return stage_idx, lesson_idx
        return None

    def find_stage_by_title(self, title: str) -> Optional[Stage]:
        for stage in self.stages:
            if stage.title == title:
                return stage
        return None
