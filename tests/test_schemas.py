"""
Schema validation tests for SwiftCamp.

Tests the Pydantic models to ensure they validate correctly.
"""

import pytest
from datetime import datetime
from pydantic import ValidationError

from swiftcamp.schemas import (
    # Lesson
    Difficulty,
    TestCase,
    Challenge,
    Lesson,
    # Progress
    BADGES,
    badge_name,
    UserProgress,
)


class TestLessonSchemas:
    """Test lesson-related schemas."""

    def test_lesson_from_camel_case_record(self):
        lesson = Lesson.model_validate({
            "id": "variables",
            "title": "Variables & Constants",
            "description": "Learn about var and let",
            "difficulty": "beginner",
            "theory": "Use var and let.",
            "codeExample": 'var name = "John"',
            "challenge": {
                "instructions": "Create a variable",
                "starterCode": "// Your code here",
                "solution": "var score = 100",
                "testCases": [
                    {"input": "score", "expectedOutput": "100", "description": "Declared"},
                ],
                "hints": ["Use var"],
            },
            "dependencies": [],
            "estimatedTime": 10,
            "category": "Swift Basics",
        })
        assert lesson.difficulty == Difficulty.BEGINNER
        assert lesson.code_example == 'var name = "John"'
        assert lesson.estimated_time == 10
        assert lesson.challenge.starter_code == "// Your code here"
        assert lesson.challenge.test_cases[0].expected_output == "100"
        assert lesson.has_challenge

    def test_lesson_from_snake_case_fields(self):
        lesson = Lesson(id="loops", title="Loops", code_example="for i in 1...3 {}", estimated_time=5)
        assert lesson.code_example == "for i in 1...3 {}"
        assert lesson.dependencies == []
        assert lesson.challenge is None
        assert not lesson.has_challenge

    def test_lesson_is_immutable(self):
        lesson = Lesson(id="loops", title="Loops")
        with pytest.raises(ValidationError):
            lesson.title = "Other"

    def test_lesson_empty_id_rejected(self):
        with pytest.raises(ValidationError):
            Lesson(id="", title="Nameless")

    def test_lesson_invalid_difficulty(self):
        with pytest.raises(ValidationError):
            Lesson(id="x", title="X", difficulty="expert")

    def test_lesson_negative_time(self):
        with pytest.raises(ValidationError):
            Lesson(id="x", title="X", estimated_time=-1)

    def test_challenge_requires_solution(self):
        with pytest.raises(ValidationError):
            Challenge(instructions="Do it")

    def test_test_case_keeps_order(self):
        challenge = Challenge(
            instructions="Do it",
            solution="var a = 1",
            test_cases=[
                TestCase(input=str(i), expected_output=str(i), description=f"case {i}")
                for i in range(3)
            ],
        )
        assert [tc.description for tc in challenge.test_cases] == ["case 0", "case 1", "case 2"]


class TestProgressSchemas:
    """Test progress-related schemas."""

    def test_zero_state(self):
        progress = UserProgress()
        assert progress.completed_lessons == set()
        assert progress.earned_badges == []
        assert progress.total_xp == 0
        assert progress.current_streak == 0
        assert progress.longest_streak == 0
        assert progress.last_session_date is None
        assert progress.level == 1

    def test_level_from_xp(self):
        assert UserProgress(total_xp=99).level == 1
        assert UserProgress(total_xp=100).level == 2
        assert UserProgress(total_xp=250).level == 3

    def test_negative_xp_rejected(self):
        with pytest.raises(ValidationError):
            UserProgress(total_xp=-5)

    def test_streak_above_longest_rejected(self):
        with pytest.raises(ValidationError):
            UserProgress(current_streak=3, longest_streak=2)

    def test_duplicate_badges_rejected(self):
        with pytest.raises(ValidationError):
            UserProgress(earned_badges=["first_steps", "first_steps"])

    def test_json_round_trip(self):
        progress = UserProgress(
            completed_lessons={"loops", "basics"},
            earned_badges=["first_steps"],
            total_xp=35,
            current_streak=2,
            longest_streak=4,
            last_session_date=datetime(2024, 3, 1, 9, 30),
        )
        payload = progress.model_dump_json()
        assert '"completed_lessons":["basics","loops"]' in payload
        assert UserProgress.model_validate_json(payload) == progress

    def test_badge_registry(self):
        assert list(BADGES) == ["first_steps", "quick_learner", "dedicated"]
        assert badge_name("first_steps") == "First Steps"
        assert badge_name("dedicated") == "Dedicated"
        assert badge_name("unknown") == "Achievement"
