from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import TimelineSegment

# Width of one pid block in the plain-text chart.
BLOCK_WIDTH = 8


def render_gantt(segments: List[TimelineSegment]) -> str:
    """
    Plain-text Gantt chart: one pid-labelled block per segment in emission
    order, then the start of every segment and the stop of the last one,
    tab separated.
    """
    if not segments:
        return "(no execution)"

    blocks = "|"
    for seg in segments:
        pid = str(seg.pid)
        padding = " " * max(0, (BLOCK_WIDTH - len(pid)) // 2)
        blocks += f"{padding}{pid}{padding}|"

    time_marks = "\t".join(str(seg.start_time) for seg in segments)
    time_marks += f"\t{segments[-1].end_time}"

    return "\n".join(
        [
            "Gantt schedule",
            blocks,
            time_marks,
        ]
    )


def build_rich_gantt(segments: List[TimelineSegment]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not segments:
        panel = Panel("No execution", title="Gantt schedule")
        return panel, ""

    segments = sorted(segments, key=lambda s: (s.start_time, s.end_time))

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = "0"
    last_time = 0

    for seg in segments:
        idle_gap = seg.start_time - last_time
        if idle_gap > 0:
            timeline.append(" " * idle_gap)
            labels.append(" " * idle_gap)
            last_time = seg.start_time
            time_marks += f"{last_time:>3}"

        # Overlapping segments (FCFS zero-arrival carry) are drawn from where the last one ended.
        width = max(1, seg.end_time - max(seg.start_time, last_time))
        color = pid_color(seg.pid)

        timeline.append(" " * width, style=f"on {color}")
        labels.append(str(seg.pid)[:width].ljust(width), style="bold")

        last_time = max(last_time, seg.end_time)
        time_marks += f"{last_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt schedule")
    return panel, time_marks
