"""Course marks kept in per-course prefix trees."""

from .config import ConfigError, ShellConfig, load_shell_config
from .course_trie import (
    CourseError,
    CourseTrie,
    DuplicateStudentError,
    EmptyCourseError,
    PrefixConflictError,
    StudentNotFoundError,
    TrieNode,
)
from .registry import CourseNotFoundError, CourseRegistry, DuplicateCourseError
from .shell import Command, CommandError, MarksShell, main, parse_command

__all__ = [
    "Command",
    "CommandError",
    "ConfigError",
    "CourseError",
    "CourseNotFoundError",
    "CourseRegistry",
    "CourseTrie",
    "DuplicateCourseError",
    "DuplicateStudentError",
    "EmptyCourseError",
    "MarksShell",
    "PrefixConflictError",
    "ShellConfig",
    "StudentNotFoundError",
    "TrieNode",
    "load_shell_config",
    "main",
    "parse_command",
]
