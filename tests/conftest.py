"""Shared fixtures for SwiftCamp tests."""

from datetime import datetime, timedelta

import pytest

from swiftcamp.classroom import Catalog, MemoryProgressStore, ProgressEngine
from swiftcamp.sandbox import CodeEvaluator
from swiftcamp.schemas import Challenge, Difficulty, Lesson, TestCase


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, days: int = 0, hours: int = 0):
        self.now += timedelta(days=days, hours=hours)


def _make_lesson(
    lesson_id: str,
    difficulty: Difficulty = Difficulty.BEGINNER,
    dependencies=(),
    challenge=None,
    category: str = "Swift Basics",
) -> Lesson:
    return Lesson(
        id=lesson_id,
        title=lesson_id.replace("_", " ").title(),
        description=f"About {lesson_id}",
        difficulty=difficulty,
        theory="Theory text",
        code_example="var x = 1",
        challenge=challenge,
        dependencies=list(dependencies),
        estimated_time=10,
        category=category,
    )


@pytest.fixture
def make_lesson():
    return _make_lesson


@pytest.fixture
def clock():
    return FakeClock(datetime(2024, 3, 1, 9, 0))


@pytest.fixture
def score_challenge():
    return Challenge(
        instructions="Update the score to 150",
        starter_code="var score = 100",
        solution="var score = 100\nscore = 150",
        test_cases=[
            TestCase(input="score", expected_output="150", description="Score updated"),
        ],
        hints=["Assign a new value", "Use the = operator", "150 is the target"],
    )


@pytest.fixture
def lessons(score_challenge):
    """Six lessons: basics -> (strings, loops) -> functions -> generics, plus extras."""
    return [
        _make_lesson("basics", challenge=score_challenge),
        _make_lesson("strings", dependencies=["basics"]),
        _make_lesson("loops", Difficulty.INTERMEDIATE, ["basics"], category="Control Flow"),
        _make_lesson("functions", Difficulty.INTERMEDIATE, ["strings", "loops"], category="Functions"),
        _make_lesson("generics", Difficulty.ADVANCED, ["functions"], category="Types"),
        _make_lesson("extras"),
    ]


@pytest.fixture
def catalog(lessons):
    return Catalog(lessons)


@pytest.fixture
def store():
    return MemoryProgressStore()


@pytest.fixture
def engine(catalog, store, clock):
    return ProgressEngine(catalog, store, clock=clock)


@pytest.fixture
def evaluator():
    evaluator = CodeEvaluator()
    yield evaluator
    evaluator.shutdown()
