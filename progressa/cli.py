"""
Command-line driver for the Progressa learning progress engine.

Usage:
  python -m progressa status                  # Ledger, streak and today's lesson
  python -m progressa path                    # Stages and lessons with status indicators
  python -m progressa achievements --category streak
  python -m progressa complete control-flow   # Complete a lesson
  python -m progressa rename "Ada"            # Change the display name
  python -m progressa reset                   # Delete stored progress
"""

import argparse
import logging
from datetime import datetime
from pathlib import Path
from typing import Optional

from progressa.config import load_settings
from progressa.schemas import AchievementCategory, StageState
from progressa.tracker import (
    CompletionStatus,
    LearningStore,
    ProgressPersistence,
    filter_achievements,
    get_progress_summary,
    greeting,
    motivational_message,
)

logger = logging.getLogger(__name__)

STAGE_INDICATORS = {
    StageState.COMPLETED: "✓",
    StageState.CURRENT: "→",
    StageState.LOCKED: "◌",
}


# -----------------------------------------------------------------------------
# Commands
# -----------------------------------------------------------------------------

def cmd_status(store: LearningStore, args: argparse.Namespace) -> int:
    summary = get_progress_summary(store)
    progress = store.user_progress

    print(f"{greeting(datetime.now().hour)}, {summary['user_name']}!")
    print(motivational_message(progress))
    print()
    print(f"Lessons:      {summary['completed']}/{summary['total_lessons']} ({summary['completion_percent']}%)")
    print(f"Stages:       {summary['completed_stages']}/{summary['total_stages']}")
    print(f"Streak:       {summary['current_streak']} days (longest {summary['longest_streak']})")
    print(f"Achievements: {summary['achievements_earned']}/{summary['total_achievements']}")

    today = store.today_lesson
    if today:
        print()
        print(f"Today: {today.lesson.title} [{today.lesson.id}]")
        print(
            f"  Stage {today.stage_number} · {today.stage_name} · "
            f"lesson {today.lesson_index} of {today.total_lessons_in_stage} · "
            f"{today.lesson.formatted_duration}"
        )
    return 0


def cmd_path(store: LearningStore, args: argparse.Namespace) -> int:
    path = store.learning_path
    print(f"{path.title} ({round(path.overall_progress * 100)}%)")
    for stage in path.stages:
        indicator = STAGE_INDICATORS[stage.state]
        print(f"{indicator} {stage.stage_number}. {stage.title} ({stage.completed_lessons_count}/{len(stage.lessons)})")
        if not store.can_access_stage(stage):
            continue
        for lesson in stage.lessons:
            mark = "✓" if lesson.is_completed else "○"
            print(f"    {mark} {lesson.title} [{lesson.id}] {lesson.formatted_duration}")
    return 0


def cmd_achievements(store: LearningStore, args: argparse.Namespace) -> int:
    category = AchievementCategory(args.category) if args.category else None
    for achievement in filter_achievements(store.achievements, category):
        mark = "★" if achievement.is_earned else "☆"
        line = f"{mark} {achievement.title} ({achievement.category.display_name}) - {achievement.description}"
        if achievement.earned_date:
            line += f" [earned {achievement.earned_date.date().isoformat()}]"
        print(line)
    return 0


def cmd_complete(store: LearningStore, args: argparse.Namespace) -> int:
    result = store.complete_lesson(args.lesson_id)

    if result.status == CompletionStatus.NOT_FOUND:
        print(f"No lesson with id '{args.lesson_id}'.")
        return 1
    if result.status == CompletionStatus.ALREADY_COMPLETED:
        print(f"Lesson '{args.lesson_id}' is already completed.")
        return 1

    lesson = store.recently_completed_lesson
    print(f"Completed: {lesson.title if lesson else args.lesson_id}")
    store.clear_recent_completion()

    if store.show_milestone_alert:
        print(store.milestone_message)
        store.dismiss_milestone()

    for achievement in store.recently_unlocked_achievements:
        print(f"Achievement unlocked: {achievement.title} - {achievement.description}")
    store.clear_recent_unlocks()

    if store.last_save_result is not None and not store.last_save_result.ok:
        logger.warning("Progress could not be saved; it will be lost when this session ends")
    return 0


def cmd_rename(store: LearningStore, args: argparse.Namespace) -> int:
    name = args.name.strip()
    if not name:
        print("Name must not be empty.")
        return 1
    store.update_user_name(name)
    print(f"Display name set to {name}.")
    return 0


def cmd_reset(store: LearningStore, args: argparse.Namespace) -> int:
    store.clear_all_data()
    print("All learning progress cleared.")
    return 0


COMMANDS = {
    "status": cmd_status,
    "path": cmd_path,
    "achievements": cmd_achievements,
    "complete": cmd_complete,
    "rename": cmd_rename,
    "reset": cmd_reset,
}


# -----------------------------------------------------------------------------
# Main
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="progressa",
        description="Track lessons, streaks and achievements on a learning path",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--data-dir",
        type=Path,
        default=None,
        help="Directory holding learning_progress.json (default: PROGRESSA_DATA_DIR or ~/.progressa)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log engine activity",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)
    subparsers.add_parser("status", help="Show progress overview")
    subparsers.add_parser("path", help="Show stages and lessons")

    achievements = subparsers.add_parser("achievements", help="List achievements")
    achievements.add_argument(
        "--category",
        choices=[c.value for c in AchievementCategory],
        default=None,
        help="Only show one category",
    )

    complete = subparsers.add_parser("complete", help="Complete a lesson")
    complete.add_argument("lesson_id", help="Lesson id (see `path`)")

    rename = subparsers.add_parser("rename", help="Change the display name")
    rename.add_argument("name")

    subparsers.add_parser("reset", help="Delete all stored progress")
    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    settings = load_settings()

    logging.basicConfig(
        level=logging.INFO if args.verbose else settings.log_level,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    store = LearningStore(
        persistence=ProgressPersistence(args.data_dir or settings.data_dir),
        seed_file=settings.seed_file,
    )
    return COMMANDS[args.command](store, args)
