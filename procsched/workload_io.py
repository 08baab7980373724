from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List, Sequence

from .models import Process

logger = logging.getLogger(__name__)


class WorkloadError(ValueError):
    """A workload record could not be turned into a schedulable process."""


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload into a list of Process objects.

    ``.json`` files hold a list of process objects. Anything else is read as
    headerless CSV with ``pid, burst, arrival[, priority]`` on each line.
    """
    path = Path(path)

    if path.suffix.lower() == ".json":
        processes = _load_json(path)
    else:
        processes = _load_csv(path)

    logger.info("Loaded %d process(es) from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadError(f"{path}: not valid JSON ({exc})") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry, index) for index, entry in enumerate(raw)]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        for row in reader:
            if not any(field.strip() for field in row):
                continue
            processes.append(_process_from_fields(row, reader.line_num))
    return processes


def _process_from_fields(fields: Sequence[str], line: int) -> Process:
    if len(fields) not in (3, 4):
        raise WorkloadError(f"line {line}: expected 3 or 4 fields, got {len(fields)}")

    try:
        values = [int(value) for value in fields]
    except ValueError as exc:
        raise WorkloadError(f"line {line}: non-integer field in {list(fields)!r}") from exc

    pid, burst_time, arrival_time = values[:3]
    priority = values[3] if len(values) == 4 else 0

    return _validated(
        Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time, priority=priority),
        f"line {line}",
    )


def _process_from_mapping(mapping, index: int) -> Process:
    try:
        pid = int(mapping["pid"])
        arrival_time = int(mapping["arrival_time"])
        burst_time = int(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = int(priority_val) if priority_val not in (None, "") else 0
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise WorkloadError(f"entry {index}: invalid process {mapping!r}") from exc

    return _validated(
        Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time, priority=priority),
        f"entry {index}",
    )


def _validated(p: Process, where: str) -> Process:
    if p.arrival_time < 0:
        raise WorkloadError(f"{where}: arrival time must not be negative (got {p.arrival_time})")
    if p.burst_time <= 0:
        raise WorkloadError(f"{where}: burst must be positive (got {p.burst_time})")
    return p
