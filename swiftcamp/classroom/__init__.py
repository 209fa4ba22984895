"""
SwiftCamp Classroom - Runtime components for the lesson catalog and progress.

This module provides:
- Catalog / load_catalog: Load lessons with fallback content
- ProgressStore implementations: Persist learner progress
- ProgressEngine: Unlocking, completion rewards and navigation
"""

from .loader import (
    Catalog,
    CatalogError,
    DEFAULT_CONTENT_PATH,
    FALLBACK_LESSONS,
    load_catalog,
    read_catalog,
    parse_lessons,
    validate_lesson_graph,
)

from .progress import (
    ProgressStore,
    ProgressStoreError,
    MemoryProgressStore,
    SQLiteProgressStore,
    DEFAULT_PROGRESS_DIR,
    DEFAULT_PROGRESS_DB,
    PROGRESS_KEY,
)

from .engine import (
    ProgressEngine,
    ProgressEvent,
    EventKind,
    LessonAvailability,
    XP_BY_DIFFICULTY,
    BADGE_RULES,
    advance_streak,
    award_badges,
    xp_for,
)

__all__ = [
    # Loader
    "Catalog",
    "CatalogError",
    "DEFAULT_CONTENT_PATH",
    "FALLBACK_LESSONS",
    "load_catalog",
    "read_catalog",
    "parse_lessons",
    "validate_lesson_graph",
    # Progress
    "ProgressStore",
    "ProgressStoreError",
    "MemoryProgressStore",
    "SQLiteProgressStore",
    "DEFAULT_PROGRESS_DIR",
    "DEFAULT_PROGRESS_DB",
    "PROGRESS_KEY",
    # Engine
    "ProgressEngine",
    "ProgressEvent",
    "EventKind",
    "LessonAvailability",
    "XP_BY_DIFFICULTY",
    "BADGE_RULES",
    "advance_streak",
    "award_badges",
    "xp_for",
]
