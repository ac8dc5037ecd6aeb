"""
Streak calculation - consecutive calendar days with a lesson completion.

Days are compared in local time. Datetimes carrying a timezone are
converted to local time first; naive datetimes are taken as local.
"""

from dataclasses import dataclass
from datetime import date, datetime


@dataclass(frozen=True)
class StreakUpdate:
    """Result of a streak computation."""
    current_streak: int
    longest_streak: int
    last_active_date: datetime
    changed: bool  # False when the activity falls on the same day


def local_day(moment: datetime) -> date:
    """Truncate a datetime to its local calendar day."""
    if moment.tzinfo is not None:
        moment = moment.astimezone()
    return moment.date()


def compute_streak(
    last_active: datetime,
    now: datetime,
    current_streak: int,
    longest_streak: int,
) -> StreakUpdate:
    """
    Compute streak counters for an activity happening at `now`.

    Rules:
    - same day: nothing changes, last_active is kept
    - next day: streak extends by one
    - any later day: streak restarts at 1
    - last_active in the future (clock moved back): streak kept, last_active reset to now

    Returns:
        StreakUpdate with longest_streak >= current_streak
    """
    gap = (local_day(now) - local_day(last_active)).days

    if gap == 0:
        return StreakUpdate(current_streak, longest_streak, last_active, changed=False)

    if gap == 1:
        current_streak += 1
    elif gap > 1:
        current_streak = 1

    return StreakUpdate(
        current_streak=current_streak,
        longest_streak=max(longest_streak, current_streak),
        last_active_date=now,
        changed=True,
    )
