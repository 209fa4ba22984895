"""
Lesson content schemas for SwiftCamp.

Defines Pydantic models for catalog content including:
- Lessons with theory, example code and prerequisites
- Coding challenges with starter code and reference solution
- Declarative test cases used to score submissions

Content documents use camelCase keys (codeExample, testCases, ...);
snake_case field names are accepted as well.
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Difficulty(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"


class TestCase(BaseModel):
    """Input / expected-output / description triple for heuristic scoring."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    __test__ = False  # not a pytest test class

    input: str
    expected_output: str = Field(..., alias="expectedOutput")
    description: str


class Challenge(BaseModel):
    """Coding exercise attached to exactly one lesson."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    instructions: str
    starter_code: str = Field(default="", alias="starterCode")
    solution: str
    test_cases: list[TestCase] = Field(default_factory=list, alias="testCases")
    hints: list[str] = []


class Lesson(BaseModel):
    """A unit of instructional content. Immutable after load."""
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1)
    title: str
    description: str = ""
    difficulty: Difficulty = Difficulty.BEGINNER
    theory: str = ""
    code_example: str = Field(default="", alias="codeExample")
    challenge: Optional[Challenge] = None
    dependencies: list[str] = []   # prerequisite lesson IDs
    estimated_time: int = Field(default=0, ge=0, alias="estimatedTime")  # minutes
    category: str = "General"

    @property
    def has_challenge(self) -> bool:
        return self.challenge is not None
