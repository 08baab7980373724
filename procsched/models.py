from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass
class TimelineSegment:
    """
    One contiguous interval during which a process holds the processor.
    """

    pid: int
    start_time: int
    end_time: int


@dataclass
class ReportRow:
    """
    Timings for one execution span of a process.

    ``burst_time`` is the burst served in this span, which is less than the
    process burst when the span ended in a preemption or a quantum expiry.
    """

    pid: int
    priority: int
    burst_time: int
    arrival_time: int
    waiting_time: int
    turnaround_time: int
    completion_time: int


@dataclass
class Aggregates:
    average_waiting: float
    average_turnaround: float
    throughput: float
    row_count: int = 0
    process_count: int = 0
    makespan: int = 0
    cpu_busy_time: int = 0
    cpu_utilization: float = 0.0


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int] = None
    rows: List[ReportRow] = field(default_factory=list)
    timeline: List[TimelineSegment] = field(default_factory=list)
    aggregates: Optional[Aggregates] = None
