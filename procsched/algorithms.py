from __future__ import annotations

import logging
from dataclasses import dataclass, field
from itertools import groupby
from typing import Callable, List, Optional

from .metrics import compute_aggregates
from .models import Process, ReportRow, ScheduleResult, TimelineSegment

logger = logging.getLogger(__name__)

# Round-robin time slice.
TIME_QUANTUM = 3


@dataclass
class _Run:
    """
    Rows and timeline built up by a single scheduling call.
    """

    rows: List[ReportRow] = field(default_factory=list)
    timeline: List[TimelineSegment] = field(default_factory=list)

    def emit(self, p: Process, start_time: int, end_time: int, waiting_time: Optional[int] = None) -> ReportRow:
        """
        Record that ``p`` held the processor over ``[start_time, end_time)``.

        Unless given, the waiting time of the row is its start time.
        """
        row = ReportRow(
            pid=p.pid,
            priority=p.priority,
            burst_time=end_time - start_time,
            arrival_time=p.arrival_time,
            waiting_time=start_time if waiting_time is None else waiting_time,
            turnaround_time=end_time - p.arrival_time,
            completion_time=end_time,
        )
        self.rows.append(row)
        self.timeline.append(TimelineSegment(pid=p.pid, start_time=start_time, end_time=end_time))
        return row

    def result(self, algorithm: str, quantum: Optional[int] = None) -> ScheduleResult:
        result = ScheduleResult(algorithm=algorithm, quantum=quantum, rows=self.rows, timeline=self.timeline)
        compute_aggregates(result)
        return result


@dataclass
class _Job:
    """
    Working copy of a process whose remaining burst shrinks as it runs.
    """

    process: Process
    remaining: int
    order: int

    @property
    def arrival_time(self) -> int:
        return self.process.arrival_time


def schedule_fcfs(
    processes: List[Process],
    quantum: Optional[int] = None,
    *,
    carry_zero_arrival_wait: bool = True,
) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive).

    Processes run in the order given; the caller is responsible for sorting
    them by arrival. The waiting time of a process that arrives at time 0 is
    carried over from the previous process unless ``carry_zero_arrival_wait``
    is false.
    """
    run = _Run()
    service_time = 0
    waiting_time = 0

    for p in processes:
        if p.arrival_time > 0 or not carry_zero_arrival_wait:
            # An idle processor means the process starts on arrival.
            waiting_time = max(0, service_time - p.arrival_time)

        start_time = p.arrival_time + waiting_time
        run.emit(p, start_time, start_time + p.burst_time, waiting_time=waiting_time)

        service_time = max(service_time, p.arrival_time) + p.burst_time

    return run.result("First-come, first-serve")


@dataclass(frozen=True)
class _PreemptionPolicy:
    """
    Ranks jobs for the preemptive engine. Lower rank runs first.

    ``rank`` receives the process and its remaining burst at the moment of
    comparison.
    """

    name: str
    rank: Callable[[Process, int], int]


_BY_REMAINING_BURST = _PreemptionPolicy(name="remaining burst", rank=lambda p, remaining: remaining)
_BY_PRIORITY = _PreemptionPolicy(name="priority", rank=lambda p, remaining: p.priority)


def _run_preemptive(processes: List[Process], policy: _PreemptionPolicy) -> _Run:
    """
    Event-driven preemptive scheduling over arrival instants.

    At each arrival the running process is preempted if the newcomer ranks
    strictly lower. Once arrivals are exhausted the running process completes
    and the processes still pending are drained in rank order without
    further preemption.
    """
    run = _Run()
    jobs = sorted(
        (_Job(process=p, remaining=p.burst_time, order=i) for i, p in enumerate(processes)),
        key=lambda j: (j.arrival_time, j.order),
    )
    if not jobs:
        return run

    def job_key(job: _Job):
        return (policy.rank(job.process, job.remaining), job.arrival_time, job.order)

    pending: List[_Job] = []
    current: Optional[_Job] = jobs[0]
    start_time = current.arrival_time

    for arrival in jobs[1:]:
        now = arrival.arrival_time

        # Retire whatever finishes before this arrival, backfilling from pending.
        while current is not None and start_time + current.remaining <= now:
            end_time = start_time + current.remaining
            run.emit(current.process, start_time, end_time)
            current.remaining = 0
            if pending:
                current = min(pending, key=job_key)
                pending.remove(current)
                start_time = end_time
            else:
                current = None

        if current is None:
            current, start_time = arrival, now
            continue

        elapsed = now - start_time
        if policy.rank(arrival.process, arrival.remaining) < policy.rank(current.process, current.remaining - elapsed):
            logger.debug(
                "pid %s preempts pid %s at t=%d (%s)",
                arrival.process.pid,
                current.process.pid,
                now,
                policy.name,
            )
            if elapsed > 0:
                run.emit(current.process, start_time, now)
                current.remaining -= elapsed
            pending.append(current)
            current, start_time = arrival, now
        else:
            pending.append(arrival)

    clock = start_time + current.remaining
    run.emit(current.process, start_time, clock)

    pending.sort(key=job_key)
    for rank, group in groupby(pending, key=lambda j: policy.rank(j.process, j.remaining)):
        group = list(group)
        logger.debug("draining %d process(es) with %s %s", len(group), policy.name, rank)
        for job in group:
            run.emit(job.process, clock, clock + job.remaining)
            clock += job.remaining

    return run


def schedule_srt(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Remaining Time (preemptive SJF).

    A newly arrived process preempts the running one when its burst is
    strictly smaller than what the running process still needs.
    """
    return _run_preemptive(processes, _BY_REMAINING_BURST).result("Shortest-job-first")


def schedule_priority(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Preemptive priority scheduling.

    Lower numeric priority value means higher priority. A newly arrived
    process preempts the running one when its priority value is strictly
    lower, however much burst either has left.
    """
    return _run_preemptive(processes, _BY_PRIORITY).result("Priority")


def schedule_rr(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes are visited cyclically in arrival order, skipping those that
    have not arrived while others are ready. Every visit emits one row whose
    waiting time is the clock at the start of the slice.
    """
    if quantum is None:
        quantum = TIME_QUANTUM
    if quantum <= 0:
        raise ValueError("Round Robin requires a positive quantum")

    jobs = sorted(
        (_Job(process=p, remaining=p.burst_time, order=i) for i, p in enumerate(processes)),
        key=lambda j: (j.arrival_time, j.order),
    )

    run = _Run()
    clock = 0

    while jobs:
        for job in list(jobs):
            if job.arrival_time > clock:
                # Jobs are in arrival order, so the rest of this pass has not arrived either.
                if any(j.arrival_time <= clock for j in jobs):
                    break
                clock = job.arrival_time

            start_time = clock
            run_time = job.remaining if job.remaining < quantum else quantum

            run.emit(job.process, start_time, start_time + run_time)
            clock = start_time + run_time
            job.remaining -= run_time

            if job.remaining == 0:
                jobs.remove(job)

    return run.result("Round-robin", quantum=quantum)


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_srt,
    "srt": schedule_srt,
    "priority": schedule_priority,
    "rr": schedule_rr,
}

# Order in which a full report runs the algorithms.
DEFAULT_ORDER = ["fcfs", "sjf", "priority", "rr"]


def run_algorithm(name: str, processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}'")

    func = ALGORITHMS[name]
    return func(processes, quantum=quantum)


def run_all(processes: List[Process]) -> List[ScheduleResult]:
    return [run_algorithm(name, processes) for name in DEFAULT_ORDER]
