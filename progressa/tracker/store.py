"""
LearningStore - The single owner of learning path, ledger and achievements.

Provides:
- Lesson completion with stage promotion, achievement unlocks and streaks
- Derived read views (today lesson, current stage, earned achievements)
- One-shot notification fields for the UI
- Explicit change subscriptions and a version counter
- Best-effort persistence after every mutation

Mutations are synchronous and not reentrant; callers must not invoke one
while another is running.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Callable, Optional

from progressa.schemas import (
    Achievement,
    LearningPath,
    Lesson,
    ProgressSnapshot,
    Stage,
    StageState,
    TodayLesson,
    UserProgress,
)
from progressa.utils import load_seed

from .persistence import LoadResult, ProgressPersistence, SaveResult
from .rules import ProgressMetrics, evaluate_achievements
from .streak import compute_streak

logger = logging.getLogger(__name__)


class CompletionStatus(str, Enum):
    COMPLETED = "completed"
    NOT_FOUND = "not_found"
    ALREADY_COMPLETED = "already_completed"


@dataclass
class CompletionResult:
    """Outcome of a complete_lesson call."""
    status: CompletionStatus
    lesson_id: str
    unlocked: list[Achievement] = field(default_factory=list)
    completed_stage: Optional[str] = None  # title of a stage completed by this call

    @property
    def ok(self) -> bool:
        return self.status == CompletionStatus.COMPLETED


class StoreEventKind(str, Enum):
    LESSON_COMPLETED = "lesson_completed"
    NAME_UPDATED = "name_updated"
    RESET = "reset"


@dataclass(frozen=True)
class StoreEvent:
    kind: StoreEventKind
    version: int
    lesson_id: Optional[str] = None


Subscriber = Callable[[StoreEvent], None]


class LearningStore:
    """
    Learning progress engine.

    The aggregate is restored from persistence when a valid stored snapshot
    exists, otherwise created from the seed curriculum. Readers get deep
    copies; the store is the only writer.
    """

    def __init__(
        self,
        persistence: Optional[ProgressPersistence] = None,
        seed_file: Optional[Path] = None,
        clock: Callable[[], datetime] = datetime.now,
        seed: Optional[ProgressSnapshot] = None,
    ):
        """
        Initialize the store.

        Args:
            persistence: Storage adapter (default: ~/.progressa)
            seed_file: Seed curriculum YAML used when nothing is stored
            clock: Returns the current local time; injectable for tests
            seed: Explicit seed snapshot used as-is, takes precedence over seed_file
        """
        self.persistence = persistence or ProgressPersistence()
        self.seed_file = seed_file
        self.clock = clock
        self._seed = seed.model_copy(deep=True) if seed is not None else None

        self._version = 0
        self._subscribers: list[Subscriber] = []
        self.last_save_result: Optional[SaveResult] = None

        self.last_load_result: LoadResult = self.persistence.load()
        if self.last_load_result.ok:
            snapshot = self.last_load_result.snapshot
            logger.info(f"Restored progress from {self.persistence.file_path}")
        else:
            if self.last_load_result.error:
                logger.warning(
                    f"Ignoring unreadable progress file {self.persistence.file_path}: "
                    f"{self.last_load_result.error}"
                )
            snapshot = self._fresh_snapshot()
            logger.info("Starting from seed curriculum")

        self._apply_snapshot(snapshot)

    def _fresh_snapshot(self) -> ProgressSnapshot:
        if self._seed is not None:
            return self._seed.model_copy(deep=True)
        return load_seed(self.seed_file, now=self.clock())

    def _apply_snapshot(self, snapshot: ProgressSnapshot):
        self._path: LearningPath = snapshot.learning_path
        self._progress: UserProgress = snapshot.user_progress
        self._achievements: list[Achievement] = list(snapshot.achievements)
        self._reset_notifications()

    def _reset_notifications(self):
        self.recently_completed_lesson: Optional[Lesson] = None
        self.recently_unlocked_achievements: list[Achievement] = []
        self.show_milestone_alert = False
        self.milestone_message = ""

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    @property
    def version(self) -> int:
        """Incremented after every successful mutation."""
        return self._version

    @property
    def learning_path(self) -> LearningPath:
        return self._path.model_copy(deep=True)

    @property
    def user_progress(self) -> UserProgress:
        return self._progress.model_copy(deep=True)

    @property
    def achievements(self) -> list[Achievement]:
        return [a.model_copy(deep=True) for a in self._achievements]

    @property
    def earned_achievements(self) -> list[Achievement]:
        return [a.model_copy(deep=True) for a in self._achievements if a.is_earned]

    @property
    def current_stage(self) -> Optional[Stage]:
        for stage in self._path.stages:
            if stage.state == StageState.CURRENT:
                return stage.model_copy(deep=True)
        return None

    @property
    def today_lesson(self) -> Optional[TodayLesson]:
        """First incomplete lesson of the current stage, if any."""
        stage = self.current_stage
        if stage is None:
            return None
        for index, lesson in enumerate(stage.lessons):
            if not lesson.is_completed:
                return TodayLesson(
                    lesson=lesson,
                    stage_name=stage.title,
                    stage_number=stage.stage_number,
                    lesson_index=index + 1,
                    total_lessons_in_stage=len(stage.lessons),
                )
        return None

    def snapshot(self) -> ProgressSnapshot:
        """Deep copy of the full aggregate."""
        return ProgressSnapshot(
            learning_path=self._path,
            user_progress=self._progress,
            achievements=self._achievements,
        ).model_copy(deep=True)

    def can_access_stage(self, stage: Stage) -> bool:
        return stage.state in (StageState.CURRENT, StageState.COMPLETED)

    # -------------------------------------------------------------------------
    # Subscriptions
    # -------------------------------------------------------------------------

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """
        Register a callback invoked after each mutation.

        A callback that raises is logged and skipped; the remaining
        subscribers are still notified.

        Returns:
            A function that removes the subscription
        """
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _publish(self, kind: StoreEventKind, lesson_id: Optional[str] = None):
        self._version += 1
        event = StoreEvent(kind=kind, version=self._version, lesson_id=lesson_id)
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception(f"Subscriber {callback!r} failed on {kind.value} event")

    # -------------------------------------------------------------------------
    # Mutations
    # -------------------------------------------------------------------------

    def complete_lesson(self, lesson_id: str) -> CompletionResult:
        """
        Mark a lesson completed and update everything that depends on it.

        Steps: mark lesson, count it, promote stage, unlock achievements,
        update streak, refresh ledger totals, persist, notify.

        Returns:
            CompletionResult; NOT_FOUND and ALREADY_COMPLETED leave state untouched
        """
        position = self._path.find_lesson(lesson_id)
        if position is None:
            logger.info(f"Lesson not found: {lesson_id}")
            return CompletionResult(CompletionStatus.NOT_FOUND, lesson_id)

        stage_idx, lesson_idx = position
        lesson = self._path.stages[stage_idx].lessons[lesson_idx]
        if lesson.is_completed:
            return CompletionResult(CompletionStatus.ALREADY_COMPLETED, lesson_id)

        now = self.clock()

        lesson.is_completed = True
        self.recently_completed_lesson = lesson.model_copy()
        self._progress.total_lessons_completed += 1
        logger.info(f"Completed lesson: {lesson.title}")

        completed_stage = self._check_stage_completion(stage_idx)

        metrics = ProgressMetrics.capture(self._path, self._progress)
        unlocked = evaluate_achievements(self._achievements, metrics, earned_at=now)
        self.recently_unlocked_achievements = [a.model_copy() for a in unlocked]

        self._update_streak(now)
        self._refresh_totals()
        self._persist()
        self._publish(StoreEventKind.LESSON_COMPLETED, lesson_id)

        return CompletionResult(
            CompletionStatus.COMPLETED,
            lesson_id,
            unlocked=[a.model_copy() for a in unlocked],
            completed_stage=completed_stage,
        )

    def _check_stage_completion(self, stage_idx: int) -> Optional[str]:
        """Complete the stage and promote its successor; returns the stage title."""
        stage = self._path.stages[stage_idx]
        if stage.state != StageState.CURRENT:
            return None
        if not all(lesson.is_completed for lesson in stage.lessons):
            return None

        stage.state = StageState.COMPLETED

        next_idx = stage_idx + 1
        if next_idx < len(self._path.stages):
            next_stage = self._path.stages[next_idx]
            if next_stage.state == StageState.LOCKED:
                next_stage.state = StageState.CURRENT

        self.milestone_message = f'🎉 You completed "{stage.title}"!'
        self.show_milestone_alert = True
        logger.info(f"Completed stage {stage.stage_number}: {stage.title}")
        return stage.title

    def _update_streak(self, now: datetime):
        update = compute_streak(
            self._progress.last_active_date,
            now,
            self._progress.current_streak,
            self._progress.longest_streak,
        )
        if not update.changed:
            return
        self._progress.current_streak = update.current_streak
        self._progress.longest_streak = update.longest_streak
        self._progress.last_active_date = update.last_active_date

    def _refresh_totals(self):
        self._progress.total_lessons = self._path.total_lessons
        self._progress.achievements_earned = sum(1 for a in self._achievements if a.is_earned)
        self._progress.total_achievements = len(self._achievements)

    def update_user_name(self, name: str):
        """Set the display name and persist it."""
        self._progress.user_name = name
        self._persist()
        self._publish(StoreEventKind.NAME_UPDATED)

    def clear_all_data(self):
        """Delete stored progress and start over from the seed curriculum."""
        self.persistence.clear_all()
        self._apply_snapshot(self._fresh_snapshot())
        self.last_save_result = None
        logger.info("Cleared all learning progress")
        self._publish(StoreEventKind.RESET)

    # -------------------------------------------------------------------------
    # One-shot notifications
    # -------------------------------------------------------------------------

    def dismiss_milestone(self):
        self.show_milestone_alert = False
        self.milestone_message = ""

    def clear_recent_completion(self):
        self.recently_completed_lesson = None

    def clear_recent_unlocks(self):
        self.recently_unlocked_achievements = []

    # -------------------------------------------------------------------------
    # Persistence
    # -------------------------------------------------------------------------

    def _persist(self):
        result = self.persistence.save(ProgressSnapshot(
            learning_path=self._path,
            user_progress=self._progress,
            achievements=self._achievements,
        ))
        self.last_save_result = result
        if not result.ok:
            logger.warning(f"Could not save progress ({result.status.value}): {result.error}")
