"""Explicit registry of named course tries."""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List

from .course_trie import CourseError, CourseTrie

__all__ = ["CourseNotFoundError", "CourseRegistry", "DuplicateCourseError"]

logger = logging.getLogger(__name__)


class CourseNotFoundError(CourseError, LookupError):
    """Raised when a course name is not registered."""

    def __init__(self, course: str) -> None:
        super().__init__(f"the course '{course}' does not exist.")
        self.course = course


class DuplicateCourseError(CourseError, ValueError):
    """Raised when a course name is registered twice."""

    def __init__(self, course: str) -> None:
        super().__init__(f"the course '{course}' already exists.")
        self.course = course


class CourseRegistry:
    """Mapping from course name to :class:`CourseTrie` in creation order."""

    def __init__(self) -> None:
        self._courses: Dict[str, CourseTrie] = {}

    def create(self, name: str) -> CourseTrie:
        if name in self._courses:
            raise DuplicateCourseError(name)
        course = CourseTrie(name)
        self._courses[name] = course
        logger.debug("Created course %s", name)
        return course

    def reset(self, name: str) -> CourseTrie:
        """Replace *name* with a fresh, empty course.

        The course keeps its position in :meth:`names`.
        """

        if name not in self._courses:
            raise CourseNotFoundError(name)
        course = CourseTrie(name)
        self._courses[name] = course
        logger.debug("Reset course %s", name)
        return course

    def get(self, name: str) -> CourseTrie:
        try:
            return self._courses[name]
        except KeyError:
            raise CourseNotFoundError(name) from None

    def drop(self, name: str) -> None:
        if self._courses.pop(name, None) is None:
            raise CourseNotFoundError(name)
        logger.debug("Dropped course %s", name)

    def names(self) -> List[str]:
        return list(self._courses)

    def __contains__(self, name: object) -> bool:
        return name in self._courses

    def __len__(self) -> int:
        return len(self._courses)

    def __iter__(self) -> Iterator[CourseTrie]:
        return iter(list(self._courses.values()))
