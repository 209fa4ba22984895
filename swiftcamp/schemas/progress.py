"""
Progress tracking schemas for SwiftCamp.

Defines Pydantic models for learner progress including:
- Completed lessons, XP, streaks
- Earned badges (and the badge registry used for display)
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_serializer, model_validator


class Badge(BaseModel):
    id: str
    name: str
    description: str


BADGES: dict[str, Badge] = {
    "first_steps": Badge(
        id="first_steps",
        name="First Steps",
        description="Completed your first lesson",
    ),
    "quick_learner": Badge(
        id="quick_learner",
        name="Quick Learner",
        description="Completed five lessons",
    ),
    "dedicated": Badge(
        id="dedicated",
        name="Dedicated",
        description="Kept a seven day streak",
    ),
}


def badge_name(badge_id: str) -> str:
    """Display name for a badge ID ("Achievement" for unknown IDs)."""
    badge = BADGES.get(badge_id)
    return badge.name if badge else "Achievement"


class UserProgress(BaseModel):
    """The single mutable learner record. Persisted after every mutation."""
    completed_lessons: set[str] = set()
    earned_badges: list[str] = []        # earn order
    total_xp: int = Field(default=0, ge=0)
    current_streak: int = Field(default=0, ge=0)
    longest_streak: int = Field(default=0, ge=0)
    last_session_date: Optional[datetime] = None

    @model_validator(mode="after")
    def check_invariants(self):
        if self.current_streak > self.longest_streak:
            raise ValueError("current_streak cannot exceed longest_streak")
        if len(set(self.earned_badges)) != len(self.earned_badges):
            raise ValueError("earned_badges must not contain duplicates")
        return self

    @field_serializer("completed_lessons")
    def serialize_completed(self, value: set[str]) -> list[str]:
        return sorted(value)

    @property
    def level(self) -> int:
        return self.total_xp // 100 + 1

    def has_badge(self, badge_id: str) -> bool:
        return badge_id in self.earned_badges
