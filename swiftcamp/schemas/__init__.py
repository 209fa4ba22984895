"""
SwiftCamp Schemas - Pydantic models for the Swift learning app.

This module exports all schema classes for:
- Lesson: lessons, challenges, test cases
- Progress: learner progress and badges
"""

# Lesson schemas
from .lesson import (
    Difficulty,
    TestCase,
    Challenge,
    Lesson,
)

# Progress schemas
from .progress import (
    Badge,
    BADGES,
    badge_name,
    UserProgress,
)

__all__ = [
    # Lesson
    'Difficulty',
    'TestCase',
    'Challenge',
    'Lesson',
    # Progress
    'Badge',
    'BADGES',
    'badge_name',
    'UserProgress',
]
