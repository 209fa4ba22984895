"""
Catalog loader - Load the lesson catalog from a YAML or JSON document.

Provides:
- Read-only, ordered lesson registry (Catalog)
- Document parsing and schema validation
- Prerequisite graph validation (unknown IDs, cycles)
- Built-in fallback catalog when the document is missing or malformed
"""

import logging
from pathlib import Path
from typing import Any, Iterator, Optional, Sequence

import networkx as nx
import yaml
from pydantic import ValidationError

from swiftcamp.schemas import Challenge, Difficulty, Lesson, TestCase
from swiftcamp.utils import load_document


logger = logging.getLogger(__name__)

DEFAULT_CONTENT_PATH = Path(__file__).parent.parent / "content" / "lessons.yaml"


class CatalogError(ValueError):
    """Content document is missing or malformed."""


# Used when the content document cannot be loaded
FALLBACK_LESSONS: tuple[Lesson, ...] = (
    Lesson(
        id="hello_swift",
        title="Hello, Swift",
        description="Print your first line of Swift",
        difficulty=Difficulty.BEGINNER,
        theory="Swift programs print text with the print function.",
        code_example='print("Hello, Swift!")',
        challenge=Challenge(
            instructions="Print a greeting of your own.",
            starter_code="// Your code here",
            solution='print("Hello, Swift!")',
            test_cases=[
                TestCase(input="print", expected_output="Hello", description="Prints a greeting"),
            ],
            hints=["Use print(...) with a string literal."],
        ),
        dependencies=[],
        estimated_time=5,
        category="Swift Basics",
    ),
)


class Catalog:
    """
    Ordered, read-only lesson registry.

    Catalog order is the order of the source document and drives
    positional navigation (next/previous lesson).
    """

    def __init__(self, lessons: Sequence[Lesson] = ()):
        self._lessons: tuple[Lesson, ...] = tuple(lessons)
        self._index: dict[str, int] = {
            lesson.id: idx for idx, lesson in enumerate(self._lessons)
        }

    def __len__(self) -> int:
        return len(self._lessons)

    def __iter__(self) -> Iterator[Lesson]:
        return iter(self._lessons)

    def __contains__(self, lesson_id: object) -> bool:
        return lesson_id in self._index

    @property
    def lessons(self) -> tuple[Lesson, ...]:
        return self._lessons

    @property
    def ids(self) -> list[str]:
        return [lesson.id for lesson in self._lessons]

    def get(self, lesson_id: str) -> Optional[Lesson]:
        """Get a lesson by ID."""
        idx = self._index.get(lesson_id)
        return self._lessons[idx] if idx is not None else None

    def index_of(self, lesson_id: str) -> Optional[int]:
        """Catalog position of a lesson, or None if not present."""
        return self._index.get(lesson_id)

    def categories(self) -> dict[str, list[Lesson]]:
        """Group lessons by category, keeping first-seen category order."""
        grouped: dict[str, list[Lesson]] = {}
        for lesson in self._lessons:
            grouped.setdefault(lesson.category, []).append(lesson)
        return grouped


# -----------------------------------------------------------------------------
# Parsing and validation
# -----------------------------------------------------------------------------

def parse_lessons(raw: Any) -> list[Lesson]:
    """
    Build lessons from a parsed content document.

    Accepts either a list of lesson records or a mapping with a
    "lessons" key.
    """
    if isinstance(raw, dict):
        raw = raw.get("lessons")
    if not isinstance(raw, list):
        raise CatalogError("Content document must contain a list of lessons")
    if not raw:
        raise CatalogError("Content document contains no lessons")

    lessons = []
    for position, record in enumerate(raw):
        try:
            lessons.append(Lesson.model_validate(record))
        except ValidationError as e:
            raise CatalogError(f"Invalid lesson record at position {position}: {e}") from e
    return lessons


def validate_lesson_graph(lessons: Sequence[Lesson]) -> None:
    """
    Validate lesson IDs and the prerequisite graph.

    Raises CatalogError on duplicate IDs, unknown prerequisites, or
    dependency cycles (a lesson in a cycle could never be unlocked).
    """
    seen: set[str] = set()
    for lesson in lessons:
        if lesson.id in seen:
            raise CatalogError(f"Duplicate lesson id: {lesson.id}")
        seen.add(lesson.id)

    graph = nx.DiGraph()
    graph.add_nodes_from(seen)
    for lesson in lessons:
        for prerequisite in lesson.dependencies:
            if prerequisite not in seen:
                raise CatalogError(
                    f"Lesson '{lesson.id}' has unknown prerequisite '{prerequisite}'"
                )
            graph.add_edge(prerequisite, lesson.id)

    try:
        cycle = nx.find_cycle(graph)
    except nx.NetworkXNoCycle:
        return
    path = [edge[0] for edge in cycle] + [cycle[-1][1]]
    raise CatalogError(f"Circular lesson dependency detected: {' -> '.join(path)}")


def read_catalog(path: str | Path) -> list[Lesson]:
    """Read and validate a content document. Raises CatalogError on any failure."""
    try:
        raw = load_document(path)
    except (OSError, yaml.YAMLError, ValueError) as e:
        raise CatalogError(str(e)) from e

    lessons = parse_lessons(raw)
    validate_lesson_graph(lessons)
    return lessons


def load_catalog(
    path: Optional[str | Path] = None,
    fallback: Optional[Sequence[Lesson]] = FALLBACK_LESSONS,
) -> Catalog:
    """
    Load the lesson catalog, falling back to built-in content on failure.

    Args:
        path: Content document (default: bundled lessons.yaml)
        fallback: Lessons to use if the document can't be loaded

    Returns:
        Catalog; empty only if both the document and fallback are absent
    """
    source = Path(path) if path else DEFAULT_CONTENT_PATH
    try:
        lessons = read_catalog(source)
    except CatalogError as e:
        logger.warning(f"Could not load lessons from {source}: {e}")
        if not fallback:
            logger.warning("No fallback lessons available, catalog is empty")
            return Catalog()
        logger.info(f"Using built-in fallback catalog ({len(fallback)} lessons)")
        return Catalog(fallback)

    logger.info(f"Loaded {len(lessons)} lessons from {source}")
    return Catalog(lessons)
