from __future__ import annotations

from typing import List

from .models import Aggregates, ScheduleResult, TimelineSegment


def compute_aggregates(result: ScheduleResult) -> Aggregates:
    """
    Compute average waiting, average turnaround and throughput for a populated
    result and attach them to it.

    Averages divide by the number of report rows, so a process that was
    preempted counts once per span it ran. Throughput uses the completion time
    of the last emitted row as the elapsed time.
    """
    if not result.rows:
        aggregates = Aggregates(average_waiting=0.0, average_turnaround=0.0, throughput=0.0)
        result.aggregates = aggregates
        return aggregates

    rows = result.rows
    n = len(rows)
    last_completion = rows[-1].completion_time
    makespan = max(r.completion_time for r in rows)
    cpu_busy_time = _busy_time(result.timeline)

    aggregates = Aggregates(
        average_waiting=sum(r.waiting_time for r in rows) / n,
        average_turnaround=sum(r.turnaround_time for r in rows) / n,
        throughput=n / last_completion if last_completion > 0 else 0.0,
        row_count=n,
        process_count=len({r.pid for r in rows}),
        makespan=makespan,
        cpu_busy_time=cpu_busy_time,
        cpu_utilization=cpu_busy_time / makespan if makespan > 0 else 0.0,
    )
    result.aggregates = aggregates
    return aggregates


def _busy_time(timeline: List[TimelineSegment]) -> int:
    """
    Length of the union of all segments, so overlapping spans count once.
    """
    busy = 0
    covered_until = None
    for seg in sorted(timeline, key=lambda s: (s.start_time, s.end_time)):
        if covered_until is None or seg.start_time >= covered_until:
            busy += seg.end_time - seg.start_time
            covered_until = seg.end_time
        elif seg.end_time > covered_until:
            busy += seg.end_time - covered_until
            covered_until = seg.end_time
    return busy
