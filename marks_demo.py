"""Command line demonstration of a course trie.

Running the module builds two small sample courses, prints their bracketed
serialisation together with the mean and median of the stored points, and
checks each figure against the expected value.  The heavy lifting lives in
``marks.course_trie``; this script only orchestrates the demo inputs.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, List, Sequence, Tuple

from marks.course_trie import CourseTrie


@dataclass(frozen=True)
class DemoCourse:
    """Sample course together with the figures it must produce."""

    name: str
    students: Sequence[Tuple[str, int]]
    expected_serialization: str
    expected_mean: int
    expected_median: int

    def build(self) -> CourseTrie:
        course = CourseTrie(self.name)
        for student, points in self.students:
            course.insert(student, points)
        return course


def _iter_demo_courses() -> Iterator[DemoCourse]:
    yield DemoCourse(
        name="algo",
        students=(("uabmn", 1), ("uabxy", 2)),
        expected_serialization="#[u[a[b[m[n(1)]x[y(2)]]]]]",
        expected_mean=1,
        expected_median=1,
    )
    yield DemoCourse(
        name="swt",
        students=(("uxxxa", 10), ("uxxxb", 20), ("uyyyc", 30), ("uzzzd", 41)),
        expected_serialization="#[u[x[x[x[a(10)b(20)]]]y[y[y[c(30)]]]z[z[z[d(41)]]]]]",
        expected_mean=25,
        expected_median=25,
    )


def _format_report(demo: DemoCourse, course: CourseTrie) -> List[str]:
    """Return output lines for *course*, raising on unexpected figures."""

    actual = (course.serialize(), course.mean(), course.median())
    expected = (demo.expected_serialization, demo.expected_mean, demo.expected_median)
    if actual != expected:
        raise RuntimeError(
            f"Demo course mismatch for {demo.name}: expected {expected} but got {actual}"
        )
    serialization, mean, median = actual
    return [
        f"{demo.name}: {len(course)} students",
        serialization,
        f"average {mean}, median {median}",
    ]


def main() -> None:
    for demo in _iter_demo_courses():
        for line in _format_report(demo, demo.build()):
            print(line)
        print()


if __name__ == "__main__":
    main()
