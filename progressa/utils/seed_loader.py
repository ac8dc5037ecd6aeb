"""
Seed loader utility for Progressa.

Loads the initial curriculum, ledger and achievement catalogue from a
YAML file (default: the bundled data/seed_curriculum.yaml).
"""

from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import yaml

from progressa.schemas import BadgeState, ProgressSnapshot


# Bundled seed (relative to package root)
DEFAULT_SEED_FILE = Path(__file__).parent.parent / "data" / "seed_curriculum.yaml"


def read_seed_document(seed_file: Path | None = None) -> dict[str, Any]:
    """
    Read the raw seed document.

    Args:
        seed_file: Optional custom seed file

    Returns:
        Dict with keys learning_path, achievements and optional user_progress

    Raises:
        FileNotFoundError: If the seed file doesn't exist
        yaml.YAMLError: If YAML parsing fails
    """
    file_path = seed_file or DEFAULT_SEED_FILE

    if not file_path.exists():
        raise FileNotFoundError(f"Seed curriculum not found: {file_path}")

    with open(file_path, "r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_seed(seed_file: Path | None = None, now: Optional[datetime] = None) -> ProgressSnapshot:
    """
    Build a fresh progress snapshot from the seed document.

    Ledger totals are derived from the curriculum and achievement list;
    the last-active date is set to `now`.

    Args:
        seed_file: Optional custom seed file
        now: Timestamp used as the initial last-active date (default: datetime.now())

    Returns:
        Validated ProgressSnapshot

    Raises:
        pydantic.ValidationError: If the document does not match the schemas
    """
    raw = read_seed_document(seed_file)
    now = now or datetime.now()

    progress = dict(raw.get("user_progress") or {})
    progress.setdefault("current_streak", 1)
    progress.setdefault("longest_streak", progress["current_streak"])
    progress.setdefault("total_lessons_completed", 0)
    progress["last_active_date"] = now

    snapshot = ProgressSnapshot.model_validate({
        "learning_path": raw.get("learning_path"),
        "user_progress": progress,
        "achievements": raw.get("achievements") or [],
    })

    ledger = snapshot.user_progress
    ledger.total_lessons = snapshot.learning_path.total_lessons
    ledger.total_achievements = len(snapshot.achievements)
    ledger.achievements_earned = sum(
        1 for a in snapshot.achievements if a.state == BadgeState.EARNED
    )
    return snapshot
