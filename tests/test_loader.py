"""
Catalog loader tests.

Covers document parsing, prerequisite graph validation and the
fallback behaviour when content is missing or malformed.
"""

import json

import pytest
import yaml

from swiftcamp.classroom import (
    Catalog,
    CatalogError,
    DEFAULT_CONTENT_PATH,
    FALLBACK_LESSONS,
    load_catalog,
    read_catalog,
    parse_lessons,
    validate_lesson_graph,
)


def _record(lesson_id, dependencies=(), category="Swift Basics"):
    return {
        "id": lesson_id,
        "title": lesson_id.title(),
        "difficulty": "beginner",
        "dependencies": list(dependencies),
        "estimatedTime": 5,
        "category": category,
    }


@pytest.fixture
def write_document(tmp_path):
    def write(name, payload):
        path = tmp_path / name
        if name.endswith(".json"):
            path.write_text(json.dumps(payload), encoding="utf-8")
        else:
            path.write_text(yaml.safe_dump(payload), encoding="utf-8")
        return path
    return write


class TestParsing:
    """Test document parsing."""

    def test_list_document(self):
        lessons = parse_lessons([_record("a"), _record("b", ["a"])])
        assert [lesson.id for lesson in lessons] == ["a", "b"]

    def test_mapping_document(self):
        lessons = parse_lessons({"lessons": [_record("a")]})
        assert lessons[0].id == "a"

    def test_non_list_rejected(self):
        with pytest.raises(CatalogError):
            parse_lessons({"units": []})

    def test_empty_list_rejected(self):
        with pytest.raises(CatalogError):
            parse_lessons([])

    def test_invalid_record_rejected(self):
        with pytest.raises(CatalogError, match="position 1"):
            parse_lessons([_record("a"), {"id": "b"}])


class TestGraphValidation:
    """Test prerequisite graph checks."""

    def test_valid_graph(self):
        lessons = parse_lessons([_record("a"), _record("b", ["a"]), _record("c", ["a", "b"])])
        validate_lesson_graph(lessons)

    def test_duplicate_id(self):
        lessons = parse_lessons([_record("a"), _record("a")])
        with pytest.raises(CatalogError, match="Duplicate lesson id"):
            validate_lesson_graph(lessons)

    def test_unknown_prerequisite(self):
        lessons = parse_lessons([_record("a", ["missing"])])
        with pytest.raises(CatalogError, match="unknown prerequisite 'missing'"):
            validate_lesson_graph(lessons)

    def test_cycle(self):
        lessons = parse_lessons([_record("a", ["c"]), _record("b", ["a"]), _record("c", ["b"])])
        with pytest.raises(CatalogError, match="Circular lesson dependency"):
            validate_lesson_graph(lessons)

    def test_self_dependency(self):
        lessons = parse_lessons([_record("a", ["a"])])
        with pytest.raises(CatalogError, match="Circular"):
            validate_lesson_graph(lessons)


class TestLoadCatalog:
    """Test catalog loading with fallback."""

    def test_load_yaml(self, write_document):
        path = write_document("lessons.yaml", {"lessons": [_record("a"), _record("b", ["a"])]})
        catalog = load_catalog(path)
        assert catalog.ids == ["a", "b"]

    def test_load_json(self, write_document):
        path = write_document("lessons.json", [_record("a"), _record("b")])
        catalog = load_catalog(path)
        assert catalog.ids == ["a", "b"]

    def test_missing_file_uses_fallback(self, tmp_path):
        catalog = load_catalog(tmp_path / "nope.json")
        assert len(catalog) >= 1
        assert catalog.ids == [lesson.id for lesson in FALLBACK_LESSONS]

    def test_malformed_json_uses_fallback(self, tmp_path):
        path = tmp_path / "lessons.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_catalog(path).ids == [lesson.id for lesson in FALLBACK_LESSONS]

    def test_malformed_yaml_uses_fallback(self, tmp_path):
        path = tmp_path / "lessons.yaml"
        path.write_text("lessons: [unclosed", encoding="utf-8")
        assert load_catalog(path).ids == [lesson.id for lesson in FALLBACK_LESSONS]

    def test_cyclic_catalog_uses_fallback(self, write_document):
        path = write_document("lessons.yaml", [_record("a", ["b"]), _record("b", ["a"])])
        assert load_catalog(path).ids == [lesson.id for lesson in FALLBACK_LESSONS]

    def test_custom_fallback(self, tmp_path):
        fallback = parse_lessons([_record("offline")])
        assert load_catalog(tmp_path / "nope.yaml", fallback=fallback).ids == ["offline"]

    def test_no_fallback_gives_empty_catalog(self, tmp_path):
        assert len(load_catalog(tmp_path / "nope.yaml", fallback=None)) == 0
        assert len(load_catalog(tmp_path / "nope.yaml", fallback=())) == 0

    def test_read_catalog_raises(self, tmp_path):
        with pytest.raises(CatalogError):
            read_catalog(tmp_path / "nope.yaml")

    def test_fallback_lessons_are_valid(self):
        validate_lesson_graph(FALLBACK_LESSONS)
        assert all(not lesson.dependencies for lesson in FALLBACK_LESSONS)


class TestBundledCatalog:
    """The catalog shipped with the package must load without fallback."""

    def test_bundled_catalog_loads(self):
        lessons = read_catalog(DEFAULT_CONTENT_PATH)
        assert len(lessons) >= 5
        assert lessons[0].id == "variables"

    def test_default_path_is_bundled_catalog(self):
        assert load_catalog().ids == [lesson.id for lesson in read_catalog(DEFAULT_CONTENT_PATH)]


class TestCatalog:
    """Test the read-only registry."""

    def test_lookup_and_order(self, lessons):
        catalog = Catalog(lessons)
        assert len(catalog) == 6
        assert catalog.get("loops").id == "loops"
        assert catalog.get("nope") is None
        assert catalog.index_of("basics") == 0
        assert catalog.index_of("nope") is None
        assert "strings" in catalog
        assert "nope" not in catalog
        assert [lesson.id for lesson in catalog] == catalog.ids

    def test_categories_keep_first_seen_order(self, lessons):
        grouped = Catalog(lessons).categories()
        assert list(grouped) == ["Swift Basics", "Control Flow", "Functions", "Types"]
        assert [lesson.id for lesson in grouped["Swift Basics"]] == ["basics", "strings", "extras"]

    def test_empty_catalog(self):
        catalog = Catalog()
        assert len(catalog) == 0
        assert catalog.ids == []
        assert catalog.categories() == {}
