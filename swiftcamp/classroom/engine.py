"""
ProgressEngine - Lesson unlocking, completion rewards, and navigation.

Provides:
- Prerequisite checking (locked / available / completed)
- Lesson completion with XP, streak and badge rewards
- Positional next/previous lesson navigation
- Progress summary for display

The engine is an explicitly owned session object: the catalog and the
progress store are injected, and every mutation returns a ProgressEvent
that is also delivered to subscribers.
"""

import logging
import threading
from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum
from typing import Callable, Optional

from swiftcamp.schemas import Difficulty, Lesson, UserProgress

from .loader import Catalog
from .progress import MemoryProgressStore, ProgressStore, ProgressStoreError


logger = logging.getLogger(__name__)

XP_BY_DIFFICULTY: dict[Difficulty, int] = {
    Difficulty.BEGINNER: 10,
    Difficulty.INTERMEDIATE: 25,
    Difficulty.ADVANCED: 50,
}

# Checked in order after every completion
BADGE_RULES: tuple[tuple[str, Callable[[UserProgress], bool]], ...] = (
    ("first_steps", lambda p: len(p.completed_lessons) >= 1),
    ("quick_learner", lambda p: len(p.completed_lessons) >= 5),
    ("dedicated", lambda p: p.current_streak >= 7),
)


class LessonAvailability(str, Enum):
    """Lesson availability status for UI display."""
    LOCKED = "locked"           # Prerequisites not met
    AVAILABLE = "available"     # Can start
    COMPLETED = "completed"     # Finished


class EventKind(str, Enum):
    COMPLETED = "completed"
    RESET = "reset"


@dataclass(frozen=True)
class ProgressEvent:
    """Outcome of a progress mutation."""
    kind: EventKind
    progress: UserProgress
    lesson_id: Optional[str] = None
    xp_awarded: int = 0
    new_badges: tuple[str, ...] = ()
    changed: bool = True


ProgressCallback = Callable[[ProgressEvent], None]


def xp_for(lesson: Lesson) -> int:
    """XP awarded for completing a lesson."""
    return XP_BY_DIFFICULTY[lesson.difficulty]


def advance_streak(progress: UserProgress, now: datetime):
    """
    Update the day streak for a completion at `now`.

    Only calendar days count: a second completion on the same day
    leaves the streak unchanged, a completion the day after the last
    session extends it, and any longer gap restarts it at 1.
    """
    today = now.date()
    last = progress.last_session_date

    if last is None:
        progress.current_streak = 1
    elif last.date() == today - timedelta(days=1):
        progress.current_streak += 1
    elif last.date() != today:
        progress.current_streak = 1

    progress.last_session_date = now
    progress.longest_streak = max(progress.longest_streak, progress.current_streak)


def award_badges(progress: UserProgress) -> list[str]:
    """Append newly earned badges to progress, returning their IDs."""
    earned = []
    for badge_id, rule in BADGE_RULES:
        if not progress.has_badge(badge_id) and rule(progress):
            progress.earned_badges.append(badge_id)
            earned.append(badge_id)
    return earned


class ProgressEngine:
    """
    Track lesson completion against the catalog's prerequisite graph.

    Combines the Catalog (content) with a ProgressStore (user state).
    Store failures never propagate: reads fall back to an empty record
    and failed writes keep the in-memory state.
    """

    def __init__(
        self,
        catalog: Catalog,
        store: Optional[ProgressStore] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize engine.

        Args:
            catalog: Catalog instance for content access
            store: ProgressStore for persistence (default: in memory)
            clock: Returns the current local time (default: datetime.now)
        """
        self.catalog = catalog
        self.store = store or MemoryProgressStore()
        self._clock = clock or datetime.now
        self._lock = threading.RLock()
        self._subscribers: list[ProgressCallback] = []
        self._progress = self._load_progress()

    def _load_progress(self) -> UserProgress:
        try:
            stored = self.store.load()
        except ProgressStoreError as e:
            logger.warning(f"Could not read saved progress, starting fresh: {e}")
            return UserProgress()
        return stored if stored is not None else UserProgress()

    def _persist(self):
        try:
            self.store.save(self._progress)
        except ProgressStoreError as e:
            logger.warning(f"Could not save progress, keeping it in memory only: {e}")

    # -------------------------------------------------------------------------
    # State
    # -------------------------------------------------------------------------

    @property
    def progress(self) -> UserProgress:
        """Snapshot of the current progress record."""
        with self._lock:
            return self._progress.model_copy(deep=True)

    @property
    def completed_lessons(self) -> frozenset[str]:
        with self._lock:
            return frozenset(self._progress.completed_lessons)

    def is_completed(self, lesson: Lesson) -> bool:
        return lesson.id in self.completed_lessons

    def completed_count(self) -> int:
        return len(self.completed_lessons)

    def total_count(self) -> int:
        return len(self.catalog)

    # -------------------------------------------------------------------------
    # Availability Checking
    # -------------------------------------------------------------------------

    def missing_prerequisites(self, lesson: Lesson) -> list[str]:
        """IDs of prerequisites not yet completed, in declaration order."""
        completed = self.completed_lessons
        return [prereq for prereq in lesson.dependencies if prereq not in completed]

    def is_locked(self, lesson: Lesson) -> bool:
        return bool(self.missing_prerequisites(lesson))

    def can_start(self, lesson: Lesson) -> bool:
        return not self.is_locked(lesson)

    def availability(self, lesson: Lesson) -> LessonAvailability:
        if self.is_completed(lesson):
            return LessonAvailability.COMPLETED
        if self.is_locked(lesson):
            return LessonAvailability.LOCKED
        return LessonAvailability.AVAILABLE

    def get_available_lessons(self) -> list[Lesson]:
        """All lessons that can be started (including completed ones)."""
        return [lesson for lesson in self.catalog if self.can_start(lesson)]

    # -------------------------------------------------------------------------
    # Lesson Actions
    # -------------------------------------------------------------------------

    def complete(self, lesson: Lesson) -> ProgressEvent:
        """
        Complete a lesson and apply its rewards.

        Completing an already-completed lesson is a no-op (changed=False).
        Otherwise XP, streak and badges are applied to a copy of the
        progress record, which then replaces the current one, is saved,
        and is announced to subscribers.
        """
        with self._lock:
            if lesson.id in self._progress.completed_lessons:
                logger.debug(f"Lesson already completed: {lesson.id}")
                return ProgressEvent(
                    kind=EventKind.COMPLETED,
                    progress=self._progress.model_copy(deep=True),
                    lesson_id=lesson.id,
                    changed=False,
                )

            updated = self._progress.model_copy(deep=True)
            updated.completed_lessons.add(lesson.id)
            xp = xp_for(lesson)
            updated.total_xp += xp
            advance_streak(updated, self._clock())
            new_badges = award_badges(updated)

            self._progress = updated
            self._persist()

            logger.info(f"Completed lesson: {lesson.id} (+{xp} XP)")
            for badge_id in new_badges:
                logger.info(f"Badge earned: {badge_id}")

            event = ProgressEvent(
                kind=EventKind.COMPLETED,
                progress=updated.model_copy(deep=True),
                lesson_id=lesson.id,
                xp_awarded=xp,
                new_badges=tuple(new_badges),
            )
            self._notify(event)
            return event

    def reset_progress(self) -> ProgressEvent:
        """Clear all progress and remove the saved record."""
        with self._lock:
            self._progress = UserProgress()
            try:
                self.store.delete()
            except ProgressStoreError as e:
                logger.warning(f"Could not remove saved progress: {e}")
            logger.info("Progress reset")

            event = ProgressEvent(kind=EventKind.RESET, progress=UserProgress())
            self._notify(event)
            return event

    # -------------------------------------------------------------------------
    # Subscribers
    # -------------------------------------------------------------------------

    def subscribe(self, callback: ProgressCallback) -> Callable[[], None]:
        """
        Register a callback for progress changes.

        Returns a function that removes the callback.
        """
        self._subscribers.append(callback)

        def unsubscribe():
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def _notify(self, event: ProgressEvent):
        for callback in list(self._subscribers):
            try:
                callback(event)
            except Exception:
                logger.exception(f"Progress subscriber {callback!r} failed")

    # -------------------------------------------------------------------------
    # Navigation
    # -------------------------------------------------------------------------

    def get_lesson(self, lesson_id: str) -> Optional[Lesson]:
        return self.catalog.get(lesson_id)

    def get_next_lesson(self, lesson: Lesson) -> Optional[Lesson]:
        """Next lesson in catalog order (regardless of whether it is locked)."""
        idx = self.catalog.index_of(lesson.id)
        if idx is None or idx + 1 >= len(self.catalog):
            return None
        return self.catalog.lessons[idx + 1]

    def get_previous_lesson(self, lesson: Lesson) -> Optional[Lesson]:
        """Previous lesson in catalog order."""
        idx = self.catalog.index_of(lesson.id)
        if idx is None or idx == 0:
            return None
        return self.catalog.lessons[idx - 1]

    def get_recommended_lesson(self) -> Optional[Lesson]:
        """First lesson that is available and not yet completed."""
        for lesson in self.catalog:
            if self.availability(lesson) == LessonAvailability.AVAILABLE:
                return lesson
        return None

    # -------------------------------------------------------------------------
    # Progress Summary
    # -------------------------------------------------------------------------

    def progress_percentage(self) -> float:
        """Share of catalog lessons completed, 0-100 (0 for an empty catalog)."""
        total = len(self.catalog)
        if total == 0:
            return 0.0
        completed = sum(1 for lesson_id in self.completed_lessons if lesson_id in self.catalog)
        return completed / total * 100

    def completion_stats(self) -> dict:
        """Get progress summary for display."""
        progress = self.progress
        counts = {availability: 0 for availability in LessonAvailability}
        for lesson in self.catalog:
            counts[self.availability(lesson)] += 1

        return {
            "total_lessons": len(self.catalog),
            "completed": counts[LessonAvailability.COMPLETED],
            "available": counts[LessonAvailability.AVAILABLE],
            "locked": counts[LessonAvailability.LOCKED],
            "completion_percent": round(self.progress_percentage(), 1),
            "total_xp": progress.total_xp,
            "level": progress.level,
            "current_streak": progress.current_streak,
            "longest_streak": progress.longest_streak,
            "badges": list(progress.earned_badges),
        }
