from pathlib import Path

import pytest

from procsched.models import Process
from procsched.workload_io import WorkloadError, load_workload


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("1,5,0,2\n2,3,1\n")
    procs = load_workload(p)
    assert procs == [
        Process(pid=1, arrival_time=0, burst_time=5, priority=2),
        Process(pid=2, arrival_time=1, burst_time=3, priority=0),
    ]


def test_load_csv_skips_blank_lines_and_spaces(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("1, 5, 0\n\n2, 3, 1, 4\n")
    procs = load_workload(p)
    assert [proc.pid for proc in procs] == [1, 2]
    assert procs[1].priority == 4


def test_load_csv_non_integer_field(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("1,5,0\n2,three,1\n")
    with pytest.raises(WorkloadError, match="line 2"):
        load_workload(p)


def test_load_csv_wrong_field_count(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("1,5\n")
    with pytest.raises(WorkloadError, match="3 or 4 fields"):
        load_workload(p)


def test_load_csv_rejects_zero_burst(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("1,0,0\n")
    with pytest.raises(WorkloadError, match="burst"):
        load_workload(p)


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":2,"arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1


def test_load_json_invalid_entry(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"burst_time":3}]')
    with pytest.raises(WorkloadError):
        load_workload(p)


def test_missing_file(tmp_path: Path):
    with pytest.raises(OSError):
        load_workload(tmp_path / "absent.csv")
