"""
Achievement schemas for Progressa.

Defines Pydantic models for achievements including:
- Badge state and category enums
- Unlock rule variants (tagged by `kind`)
- Achievement badges
"""

from datetime import datetime
from enum import Enum
from typing import Annotated, Literal, Optional, Union

from pydantic import Field

from .curriculum import CamelModel


class BadgeState(str, Enum):
    LOCKED = "locked"
    EARNED = "earned"


class AchievementCategory(str, Enum):
    MILESTONE = "milestone"
    STREAK = "streak"
    MASTERY = "mastery"
    SPECIAL = "special"

    @property
    def display_name(self) -> str:
        return self.value.capitalize()


# -----------------------------------------------------------------------------
# Unlock rules
# -----------------------------------------------------------------------------

class UnlockRuleBase(CamelModel):
    kind: str


class CountThresholdRule(UnlockRuleBase):
    """Earned once at least `minimum` lessons are completed."""
    kind: Literal["count_threshold"] = "count_threshold"
    minimum: int = Field(..., ge=1)


class FractionThresholdRule(UnlockRuleBase):
    """Earned once the completed share of all lessons reaches `fraction`."""
    kind: Literal["fraction_threshold"] = "fraction_threshold"
    fraction: float = Field(..., gt=0.0, le=1.0)


class FullPathRule(UnlockRuleBase):
    """Earned once every stage of the path is completed."""
    kind: Literal["full_path"] = "full_path"


class StreakThresholdRule(UnlockRuleBase):
    kind: Literal["streak_threshold"] = "streak_threshold"
    days: int = Field(..., ge=1)


class StageMasteryRule(UnlockRuleBase):
    """Earned once the stage titled `stage_title` is completed."""
    kind: Literal["stage_mastery"] = "stage_mastery"
    stage_title: str


UnlockRule = Annotated[
    Union[
        CountThresholdRule,
        FractionThresholdRule,
        FullPathRule,
        StreakThresholdRule,
        StageMasteryRule,
    ],
    Field(discriminator="kind"),
]


# -----------------------------------------------------------------------------
# Achievement
# -----------------------------------------------------------------------------

class Achievement(CamelModel):
    id: str
    title: str
    description: str = ""
    icon_name: str = ""
    category: AchievementCategory
    state: BadgeState = BadgeState.LOCKED
    earned_date: Optional[datetime] = None  # set once, on the earning transition
    rule: Optional[UnlockRule] = None  # no rule: never earned by the engine

    @property
    def is_earned(self) -> bool:
        return self.state == BadgeState.EARNED
