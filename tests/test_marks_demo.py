"""Tests for the ``marks_demo`` demonstration script."""

from __future__ import annotations

import importlib

import pytest

import marks_demo


def test_demo_outputs_expected_lines(capsys) -> None:
    importlib.reload(marks_demo)
    marks_demo.main()
    lines = capsys.readouterr().out.splitlines()

    assert lines[0:4] == [
        "algo: 2 students",
        "#[u[a[b[m[n(1)]x[y(2)]]]]]",
        "average 1, median 1",
        "",
    ]
    assert lines[4] == "swt: 4 students"
    assert lines[6] == "average 25, median 25"


def test_demo_detects_mismatching_expectations() -> None:
    demo = marks_demo.DemoCourse(
        name="bad",
        students=(("uabcd", 10),),
        expected_serialization="#[u[a[b[c[d(10)]]]]]",
        expected_mean=11,
        expected_median=10,
    )
    with pytest.raises(RuntimeError):
        marks_demo._format_report(demo, demo.build())
