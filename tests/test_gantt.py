from rich.panel import Panel

from procsched.gantt import build_rich_gantt, render_gantt
from procsched.models import TimelineSegment


def _segments():
    return [
        TimelineSegment(1, 0, 3),
        TimelineSegment(2, 3, 6),
        TimelineSegment(1, 6, 8),
    ]


def test_render_gantt_plain():
    lines = render_gantt(_segments()).splitlines()
    assert lines[0] == "Gantt schedule"
    assert lines[1] == "|   1   |   2   |   1   |"
    assert lines[2] == "0\t3\t6\t8"


def test_render_gantt_empty():
    assert render_gantt([]) == "(no execution)"


def test_rich_gantt_time_marks():
    panel, marks = build_rich_gantt(_segments())
    assert isinstance(panel, Panel)
    assert marks.split() == ["0", "3", "6", "8"]


def test_rich_gantt_marks_idle_gap():
    _, marks = build_rich_gantt([TimelineSegment(1, 2, 4)])
    assert marks.split() == ["0", "2", "4"]
