"""
MockLearningService - Stand-in for the remote learning API.

Serves seed data after a simulated network delay. It never touches a
LearningStore; the store remains the single source of truth.
"""

import asyncio
import logging
from pathlib import Path
from typing import Optional

from progressa.config import Settings, load_settings
from progressa.schemas import (
    Achievement,
    LearningPath,
    ProgressSnapshot,
    StageState,
    TodayLesson,
    UserProgress,
)
from progressa.utils import load_seed

logger = logging.getLogger(__name__)

# Simulated response times in seconds
DELAYS = {
    "learning_path": 0.3,
    "user_progress": 0.2,
    "achievements": 0.25,
    "today_lesson": 0.15,
    "complete_lesson": 0.5,
    "unlock_achievement": 0.3,
}


class MockLearningService:
    """Async API mock backed by the seed curriculum."""

    def __init__(self, latency: float = 1.0, seed_file: Optional[Path] = None):
        """
        Args:
            latency: Multiplier applied to every simulated delay (0 disables delays)
            seed_file: Seed curriculum YAML (default: bundled seed)
        """
        self.latency = latency
        self._data: ProgressSnapshot = load_seed(seed_file)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "MockLearningService":
        """Build a service using PROGRESSA_MOCK_LATENCY and PROGRESSA_SEED_FILE."""
        settings = settings or load_settings()
        return cls(latency=settings.mock_latency, seed_file=settings.seed_file)

    async def _delay(self, call: str):
        seconds = DELAYS[call] * self.latency
        logger.debug(f"Mock {call} call, waiting {seconds:.2f}s")
        if seconds > 0:
            await asyncio.sleep(seconds)

    async def fetch_learning_path(self) -> LearningPath:
        await self._delay("learning_path")
        return self._data.learning_path.model_copy(deep=True)

    async def fetch_user_progress(self) -> UserProgress:
        await self._delay("user_progress")
        return self._data.user_progress.model_copy(deep=True)

    async def fetch_achievements(self) -> list[Achievement]:
        await self._delay("achievements")
        return [a.model_copy(deep=True) for a in self._data.achievements]

    async def fetch_today_lesson(self) -> Optional[TodayLesson]:
        await self._delay("today_lesson")
        for stage in self._data.learning_path.stages:
            if stage.state != StageState.CURRENT:
                continue
            for index, lesson in enumerate(stage.lessons):
                if not lesson.is_completed:
                    return TodayLesson(
                        lesson=lesson.model_copy(),
                        stage_name=stage.title,
                        stage_number=stage.stage_number,
                        lesson_index=index + 1,
                        total_lessons_in_stage=len(stage.lessons),
                    )
        return None

    async def complete_lesson(self, lesson_id: str) -> bool:
        """Acknowledge a completion. The mock accepts any id."""
        await self._delay("complete_lesson")
        return True

    async def unlock_achievement(self, achievement_id: str) -> Optional[Achievement]:
        await self._delay("unlock_achievement")
        for achievement in self._data.achievements:
            if achievement.id == achievement_id:
                return achievement.model_copy(deep=True)
        return None
