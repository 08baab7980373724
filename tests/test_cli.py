from pathlib import Path

import pytest

from procsched.cli import build_parser, main


@pytest.fixture
def workload(tmp_path: Path) -> Path:
    p = tmp_path / "processes.csv"
    p.write_text("1,5,0,2\n2,3,1,1\n3,8,2,3\n")
    return p


def test_report_runs_all_algorithms(workload, capsys):
    assert main(["report", "-w", str(workload)]) == 0
    out = capsys.readouterr().out
    for title in ["First-come, first-serve", "Shortest-job-first", "Priority", "Round-robin"]:
        assert title in out
    assert "Schedule table" in out
    assert "Throughput" in out


def test_report_single_algorithm_plain(workload, capsys):
    assert main(["report", "-w", str(workload), "-a", "rr", "--plain"]) == 0
    out = capsys.readouterr().out
    assert "Round-robin" in out
    assert "First-come, first-serve" not in out
    assert "Gantt schedule" in out
    assert "|   1   |   2   |   3   |   1   |" in out


def test_compare(workload, capsys):
    assert main(["compare", "-w", str(workload)]) == 0
    out = capsys.readouterr().out
    assert "Algorithm comparison" in out
    for title in ["First-come, first-serve", "Shortest-job-first", "Priority", "Round-robin"]:
        assert title in out


def test_missing_workload_file(tmp_path, caplog):
    assert main(["report", "-w", str(tmp_path / "absent.csv")]) == 1
    assert "Cannot read workload" in caplog.text


def test_malformed_workload(tmp_path, capsys, caplog):
    p = tmp_path / "bad.csv"
    p.write_text("1,5,0\nx,3,1\n")
    assert main(["report", "-w", str(p)]) == 1
    assert "Invalid workload" in caplog.text
    assert "Schedule table" not in capsys.readouterr().out


def test_workload_argument_is_required():
    with pytest.raises(SystemExit) as excinfo:
        build_parser().parse_args(["report"])
    assert excinfo.value.code == 2
