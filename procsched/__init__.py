"""
Process scheduling simulator.

Runs FCFS, shortest-remaining-time, preemptive priority and round-robin
scheduling over a fixed workload and reports per-process timings, aggregate
statistics and a Gantt timeline.
"""

__all__ = ["algorithms", "cli"]
