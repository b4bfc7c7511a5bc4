"""Line-oriented command interpreter for course marks.

Each input line has the form ``<command>[ <arg>;<arg>;...]``.  The shell
validates the arguments against :class:`~marks.config.ShellConfig`, applies
the command to its :class:`~marks.registry.CourseRegistry` and answers with
output lines: ``OK``, a value, or a single ``Error, ...`` line.  Errors never
stop the loop; only ``quit`` does.

Example session::

    create algo
    OK
    add algo;uabcd;12
    OK
    print algo
    #[u[a[b[c[d(12)]]]]]
    quit
"""

from __future__ import annotations

from dataclasses import dataclass
import argparse
import logging
from pathlib import Path
import sys
from typing import Callable, Dict, Iterable, List, Optional, Sequence, Tuple

from .config import ConfigError, ShellConfig, load_shell_config
from .course_trie import CourseError, CourseTrie
from .registry import CourseRegistry

__all__ = ["Command", "CommandError", "MarksShell", "main", "parse_command"]

logger = logging.getLogger(__name__)

# Argument names per command, in positional order.
COMMAND_ARGUMENTS: Dict[str, Tuple[str, ...]] = {
    "create": ("course",),
    "reset": ("course",),
    "add": ("course", "student", "points"),
    "modify": ("course", "student", "points"),
    "delete": ("course", "student"),
    "credits": ("course", "student"),
    "print": ("course",),
    "average": ("course",),
    "median": ("course",),
    "quit": (),
}

_ARITY_WORDS = {1: "one argument", 2: "two arguments", 3: "three arguments"}


class CommandError(Exception):
    """Raised when an input line is rejected before touching any course."""


@dataclass(frozen=True)
class Command:
    """A parsed and validated input line."""

    name: str
    course: Optional[str] = None
    student: Optional[str] = None
    points: Optional[int] = None


def parse_command(line: str, config: ShellConfig) -> Command:
    """Split and validate *line*, raising :class:`CommandError` when invalid."""

    if not line.strip():
        raise CommandError(
            "your input is invalid, please input one of the valid commands."
        )
    name, _, raw_args = line.partition(" ")
    expected = COMMAND_ARGUMENTS.get(name)
    if expected is None:
        raise CommandError(f"invalid command: {line}")

    args = raw_args.split(";") if raw_args else []
    # Trailing empty arguments are ignored, so "create algo;" names one course.
    while args and not args[-1]:
        args.pop()
    if len(args) != len(expected):
        if not expected:
            raise CommandError(f"{name} command does not require any arguments.")
        raise CommandError(f"{name} command requires {_ARITY_WORDS[len(expected)]}.")

    values = dict(zip(expected, args))
    course = values.get("course")
    if course is not None and not config.matches("course_pattern", course):
        raise CommandError(f"invalid course title: {course}")
    student = values.get("student")
    if student is not None and not config.matches("student_pattern", student):
        raise CommandError(f"invalid student name: {student}")
    points: Optional[int] = None
    if "points" in values:
        raw_points = values["points"]
        if not config.matches("points_pattern", raw_points):
            raise CommandError(f"points must be a non-negative integer: {raw_points}")
        try:
            points = int(raw_points)
        except ValueError:
            raise CommandError(
                f"points must be a non-negative integer: {raw_points}"
            ) from None
        if points < 0:
            raise CommandError(f"points must be a non-negative integer: {raw_points}")
    return Command(name=name, course=course, student=student, points=points)


class MarksShell:
    """Stateful interpreter owning one :class:`CourseRegistry`."""

    def __init__(
        self,
        config: Optional[ShellConfig] = None,
        registry: Optional[CourseRegistry] = None,
    ) -> None:
        self.config = config if config is not None else ShellConfig()
        self.registry = registry if registry is not None else CourseRegistry()
        self.running = True
        self._handlers: Dict[str, Callable[[Command], List[str]]] = {
            "create": self._create,
            "reset": self._reset,
            "add": self._add,
            "modify": self._modify,
            "delete": self._delete,
            "credits": self._credits,
            "print": self._print,
            "average": self._average,
            "median": self._median,
            "quit": self._quit,
        }

    def execute(self, line: str) -> List[str]:
        """Run a single input *line* and return the lines to print."""

        try:
            command = parse_command(line, self.config)
            logger.debug("Dispatching %s", command)
            return self._handlers[command.name](command)
        except (CommandError, CourseError) as exc:
            logger.info("Rejected %r: %s", line, exc)
            return [self.config.error_prefix + str(exc)]

    def run(
        self, lines: Iterable[str], write: Callable[[str], None] = print
    ) -> int:
        """Execute *lines* until exhausted or ``quit``; return commands seen."""

        processed = 0
        for raw in lines:
            processed += 1
            for output in self.execute(raw.rstrip("\r\n")):
                write(output)
            if not self.running:
                break
        return processed

    # ------------------------------------------------------------------
    # Command handlers
    # ------------------------------------------------------------------
    @staticmethod
    def _course_name(command: Command) -> str:
        if command.course is None:
            raise CommandError(f"{command.name} command requires a course.")
        return command.course

    @staticmethod
    def _student(command: Command) -> str:
        if command.student is None:
            raise CommandError(f"{command.name} command requires a student.")
        return command.student

    @staticmethod
    def _points(command: Command) -> int:
        if command.points is None:
            raise CommandError(f"{command.name} command requires points.")
        return command.points

    def _course(self, command: Command) -> CourseTrie:
        return self.registry.get(self._course_name(command))

    def _create(self, command: Command) -> List[str]:
        self.registry.create(self._course_name(command))
        return [self.config.ok_message]

    def _reset(self, command: Command) -> List[str]:
        self.registry.reset(self._course_name(command))
        return [self.config.ok_message]

    def _add(self, command: Command) -> List[str]:
        self._course(command).insert(self._student(command), self._points(command))
        return [self.config.ok_message]

    def _modify(self, command: Command) -> List[str]:
        student, points = self._student(command), self._points(command)
        course = self._course(command)
        if course.lookup(student) == points:
            raise CommandError(
                "the points of the student are still the same, "
                "please choose different points."
            )
        course.update(student, points)
        return [self.config.ok_message]

    def _delete(self, command: Command) -> List[str]:
        self._course(command).remove(self._student(command))
        return [self.config.ok_message]

    def _credits(self, command: Command) -> List[str]:
        return [str(self._course(command).lookup(self._student(command)))]

    def _print(self, command: Command) -> List[str]:
        course = self._course(command)
        if not course.has_any_entries():
            return [self.config.empty_course_marker]
        return [course.serialize()]

    def _average(self, command: Command) -> List[str]:
        return [str(self._course(command).mean())]

    def _median(self, command: Command) -> List[str]:
        return [str(self._course(command).median())]

    def _quit(self, command: Command) -> List[str]:
        self.running = False
        return []


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Manage per-course student points from line-based commands.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="JSON or YAML file overriding the validation patterns and messages.",
    )
    parser.add_argument(
        "--script",
        type=Path,
        default=None,
        help="Read commands from this file instead of standard input.",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"],
        help="Logging verbosity for diagnostic output.",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """CLI entry point for the marks interpreter."""

    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level))

    try:
        config = load_shell_config(args.config)
    except ConfigError as exc:
        logger.error("Failed to load configuration: %s", exc)
        return 2

    shell = MarksShell(config)
    if args.script is None:
        shell.run(sys.stdin)
    else:
        with args.script.open("r", encoding="utf-8") as handle:
            shell.run(handle)
    return 0


if __name__ == "__main__":  # pragma: no cover - CLI entry
    raise SystemExit(main())
