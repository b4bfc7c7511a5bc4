"""Tests for the course registry."""

from __future__ import annotations

import pytest

from marks.course_trie import CourseError
from marks.registry import CourseNotFoundError, CourseRegistry, DuplicateCourseError


def test_create_and_get_course() -> None:
    registry = CourseRegistry()
    course = registry.create("algo")

    assert registry.get("algo") is course
    assert "algo" in registry
    assert len(registry) == 1


def test_create_rejects_duplicate_names() -> None:
    registry = CourseRegistry()
    registry.create("algo")
    with pytest.raises(DuplicateCourseError):
        registry.create("algo")


def test_reset_replaces_course_with_empty_trie() -> None:
    registry = CourseRegistry()
    registry.create("algo").insert("uabcd", 4)
    registry.create("swt")

    fresh = registry.reset("algo")

    assert registry.get("algo") is fresh
    assert not fresh.has_any_entries()
    assert registry.names() == ["algo", "swt"]


def test_missing_course_operations_raise() -> None:
    registry = CourseRegistry()
    for operation in (registry.get, registry.reset, registry.drop):
        with pytest.raises(CourseNotFoundError) as excinfo:
            operation("nope")
        assert isinstance(excinfo.value, CourseError)
        assert "'nope'" in str(excinfo.value)


def test_drop_and_iteration() -> None:
    registry = CourseRegistry()
    registry.create("algo")
    registry.create("swt")
    registry.drop("algo")

    assert [course.name for course in registry] == ["swt"]
    assert "algo" not in registry
