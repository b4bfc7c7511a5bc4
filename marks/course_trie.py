"""Per-course prefix tree mapping student identifiers to points.

Each course owns one :class:`CourseTrie`.  Student identifiers are spelled out
one character per level below the root and the points are stored on the node
that terminates the identifier.  The module exposes:

* ``TrieNode`` – a ``@dataclass`` vertex whose operations all recurse by
  consuming the first character of the remaining key.  The node layer is
  permissive: it never rejects duplicates and reports missing paths through
  return values.
* ``CourseTrie`` – the named wrapper used by callers.  It enforces the
  duplicate/not-found policy, renders the bracketed serialisation and computes
  the mean and median of all stored points.

Serialisation is deterministic: children are always visited alphabetically so
``#[u[a[b[m[n(1)]x[y(2)]]]]]`` is the only rendering of ``uabmn=1, uabxy=2``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Dict, Iterator, List, Optional, Tuple

__all__ = [
    "CourseError",
    "CourseTrie",
    "DuplicateStudentError",
    "EmptyCourseError",
    "PrefixConflictError",
    "StudentNotFoundError",
    "TrieNode",
]

logger = logging.getLogger(__name__)

ROOT_MARKER = "#"


class CourseError(Exception):
    """Base class for all course and registry errors."""


class StudentNotFoundError(CourseError, LookupError):
    """Raised when an operation targets a student that is not stored."""

    def __init__(self, student: str) -> None:
        super().__init__(f"the student '{student}' does not exist.")
        self.student = student


class DuplicateStudentError(CourseError, ValueError):
    """Raised when a student is added twice to the same course."""

    def __init__(self, student: str) -> None:
        super().__init__(f"the student '{student}' already exists.")
        self.student = student


class EmptyCourseError(CourseError, ValueError):
    """Raised when statistics are requested for a course without students."""

    def __init__(self, course: str) -> None:
        super().__init__(f"there are no students in the course '{course}'.")
        self.course = course


class PrefixConflictError(CourseError, ValueError):
    """Raised when a student identifier and a stored one are prefixes of each other."""

    def __init__(self, student: str) -> None:
        super().__init__(
            f"the student '{student}' conflicts with a stored student sharing its prefix."
        )
        self.student = student


@dataclass(slots=True)
class TrieNode:
    """A vertex of the course trie."""

    children: Dict[str, "TrieNode"] = field(default_factory=dict)
    points: Optional[int] = None

    def __post_init__(self) -> None:
        for key, child in self.children.items():
            if not isinstance(key, str) or len(key) != 1:
                raise TypeError(
                    "TrieNode children must be keyed by single-character strings"
                )
            if not isinstance(child, TrieNode):
                raise TypeError("TrieNode children must be TrieNode instances")
        if self.points is not None and (
            not isinstance(self.points, int) or isinstance(self.points, bool)
        ):
            raise TypeError("TrieNode.points must be an integer or None")

    def has_children(self) -> bool:
        return bool(self.children)

    def is_prunable(self) -> bool:
        """Return ``True`` when the node carries neither children nor points."""

        return not self.children and self.points is None

    def insert(self, key: str, value: int) -> None:
        """Store *value* under *key*, creating missing nodes on the way down."""

        if not key:
            self.points = value
            return
        child = self.children.get(key[0])
        if child is None:
            child = TrieNode()
            self.children[key[0]] = child
        child.insert(key[1:], value)

    def update(self, key: str, value: int) -> bool:
        """Overwrite the points under *key* without creating nodes.

        Returns ``False`` when a character along the path has no child.
        """

        if not key:
            self.points = value
            return True
        child = self.children.get(key[0])
        if child is None:
            return False
        return child.update(key[1:], value)

    def remove(self, key: str) -> bool:
        """Clear the points under *key* and prune nodes left without purpose.

        Longer keys that share *key* as a prefix are kept.  Returns ``False``
        and leaves the tree untouched when the path does not exist.
        """

        if not key:
            self.points = None
            return True
        char = key[0]
        child = self.children.get(char)
        if child is None:
            return False
        removed = child.remove(key[1:])
        if removed and child.is_prunable():
            del self.children[char]
        return removed

    def lookup(self, key: str) -> Optional[int]:
        """Return the points stored under *key* or ``None``."""

        if not key:
            return self.points
        child = self.children.get(key[0])
        if child is None:
            return None
        return child.lookup(key[1:])

    def contains(self, key: str) -> bool:
        if not key:
            return self.points is not None
        child = self.children.get(key[0])
        if child is None:
            return False
        return child.contains(key[1:])

    def prefix_conflict(self, key: str) -> bool:
        """Return ``True`` when storing *key* would leave points on an inner node.

        That happens when *key* is a strict prefix of a stored key, or a
        stored key is a strict prefix of *key*.
        """

        if not key:
            return self.has_children()
        child = self.children.get(key[0])
        if child is None:
            return False
        if len(key) > 1 and child.points is not None:
            return True
        return child.prefix_conflict(key[1:])

    def serialize(self) -> str:
        """Render the subtree below this node in alphabetical order.

        A leaf renders as ``(points)``; an absent payload renders as ``()``.
        """

        if not self.children:
            return "(" + ("" if self.points is None else str(self.points)) + ")"
        parts: List[str] = []
        for char in sorted(self.children):
            child = self.children[char]
            if child.has_children():
                parts.append(char + "[" + child.serialize() + "]")
            else:
                parts.append(char + child.serialize())
        return "".join(parts)

    def collect_payloads(self, out: List[int]) -> None:
        """Append the points of every leaf below this node to *out*."""

        for char in sorted(self.children):
            self.children[char].collect_payloads(out)
        if not self.children and self.points is not None:
            out.append(self.points)


class CourseTrie:
    """Named trie holding the points of every student in one course."""

    __slots__ = ("_name", "root")

    def __init__(self, name: str) -> None:
        if not isinstance(name, str):
            raise TypeError("course name must be a string")
        self._name = name
        self.root = TrieNode()

    @property
    def name(self) -> str:
        return self._name

    def __repr__(self) -> str:
        return f"CourseTrie(name={self._name!r}, students={len(self)})"

    # ------------------------------------------------------------------
    # Key operations
    # ------------------------------------------------------------------
    def insert(self, student: str, points: int) -> None:
        """Add *student* with *points*.

        Raises :class:`DuplicateStudentError` when the student is already
        stored; use :meth:`update` to change existing points.  Raises
        :class:`PrefixConflictError` when *student* and a stored student are
        prefixes of each other, since only leaves are serialised and counted.
        """

        if self.root.contains(student):
            raise DuplicateStudentError(student)
        if self.root.prefix_conflict(student):
            raise PrefixConflictError(student)
        self.root.insert(student, points)
        logger.debug("%s: inserted %s=%d", self._name, student, points)

    def update(self, student: str, points: int) -> None:
        if not self.root.contains(student) or not self.root.update(student, points):
            raise StudentNotFoundError(student)
        logger.debug("%s: updated %s=%d", self._name, student, points)

    def remove(self, student: str) -> None:
        if not self.root.contains(student):
            raise StudentNotFoundError(student)
        self.root.remove(student)
        logger.debug("%s: removed %s", self._name, student)

    def lookup(self, student: str) -> int:
        points = self.root.lookup(student)
        if points is None:
            raise StudentNotFoundError(student)
        return points

    def contains(self, student: str) -> bool:
        return self.root.contains(student)

    def __contains__(self, student: object) -> bool:
        return isinstance(student, str) and self.root.contains(student)

    def has_any_entries(self) -> bool:
        return self.root.has_children()

    def __len__(self) -> int:
        return sum(1 for _ in self.items())

    def items(self) -> Iterator[Tuple[str, int]]:
        """Yield ``(student, points)`` pairs in alphabetical order."""

        def _walk(node: TrieNode, prefix: List[str]) -> Iterator[Tuple[str, int]]:
            if node.points is not None:
                yield "".join(prefix), node.points
            for char in sorted(node.children):
                prefix.append(char)
                yield from _walk(node.children[char], prefix)
                prefix.pop()

        yield from _walk(self.root, [])

    # ------------------------------------------------------------------
    # Serialisation
    # ------------------------------------------------------------------
    def serialize(self) -> str:
        return ROOT_MARKER + "[" + self.root.serialize() + "]"

    @classmethod
    def from_serialized(cls, name: str, text: str) -> "CourseTrie":
        """Rebuild a course from the output of :meth:`serialize`.

        Raises ``ValueError`` when *text* is not a well-formed rendering.
        """

        if not isinstance(text, str):
            raise TypeError("serialised course must be a string")
        prefix = ROOT_MARKER + "["
        if not text.startswith(prefix) or not text.endswith("]"):
            raise ValueError(f"serialised course must look like '{prefix}...]'")
        trie = cls(name)
        body = text[len(prefix) : -1]
        if body == "()":
            return trie
        entries: List[Tuple[str, int]] = []
        end = _parse_children(body, 0, [], entries)
        if end != len(body):
            raise ValueError(f"unexpected character {body[end]!r} at offset {end}")
        for student, points in entries:
            trie.root.insert(student, points)
        return trie

    # ------------------------------------------------------------------
    # Statistics
    # ------------------------------------------------------------------
    def _collect(self) -> List[int]:
        points: List[int] = []
        self.root.collect_payloads(points)
        if not points:
            raise EmptyCourseError(self._name)
        return points

    def mean(self) -> int:
        """Return the truncated average of all stored points."""

        points = self._collect()
        return sum(points) // len(points)

    def median(self) -> int:
        """Return the median; even counts average the middle pair, truncated."""

        points = sorted(self._collect())
        n = len(points)
        if n % 2 == 0:
            return (points[(n - 2) // 2] + points[n // 2]) // 2
        return points[(n - 1) // 2]


def _parse_children(
    text: str, index: int, prefix: List[str], out: List[Tuple[str, int]]
) -> int:
    """Parse a run of ``<char>[...]`` / ``<char>(points)`` entries.

    Returns the offset of the first character that does not start an entry.
    """

    start = index
    while index < len(text) and text[index] not in "[]()":
        char = text[index]
        index += 1
        if index >= len(text):
            raise ValueError(f"entry {char!r} at offset {index - 1} is truncated")
        prefix.append(char)
        if text[index] == "[":
            index = _parse_children(text, index + 1, prefix, out)
            if index >= len(text) or text[index] != "]":
                raise ValueError(f"missing ']' at offset {index}")
            index += 1
        elif text[index] == "(":
            close = text.find(")", index)
            if close == -1:
                raise ValueError(f"missing ')' after offset {index}")
            digits = text[index + 1 : close]
            if not digits.isdigit():
                raise ValueError(f"invalid points {digits!r} at offset {index + 1}")
            out.append(("".join(prefix), int(digits)))
            index = close + 1
        else:
            raise ValueError(f"unexpected character {text[index]!r} at offset {index}")
        prefix.pop()
    if index == start:
        raise ValueError(f"expected an entry at offset {index}")
    return index
