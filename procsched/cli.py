from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import ALGORITHMS, DEFAULT_ORDER, run_algorithm
from .gantt import build_rich_gantt, render_gantt
from .models import Process, ScheduleResult
from .workload_io import WorkloadError, load_workload

logger = logging.getLogger(__name__)

REPORT_COLUMNS = ["ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="procsched",
        description="CPU scheduling simulator (FCFS, SJF/SRT, Priority, RR).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Log more detail to stderr (-v for info, -vv for debug).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    report_parser = subparsers.add_parser(
        "report",
        help="Print the Gantt schedule and timing table for each algorithm.",
    )
    report_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to a CSV (pid,burst,arrival[,priority]) or JSON workload file.",
    )
    report_parser.add_argument(
        "--algorithm",
        "-a",
        nargs="+",
        choices=sorted(ALGORITHMS),
        default=None,
        help="Algorithms to report (default: fcfs sjf priority rr).",
    )
    report_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print the Gantt schedule as plain text instead of a colored panel.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run every algorithm on the same workload and compare aggregate metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to a CSV (pid,burst,arrival[,priority]) or JSON workload file.",
    )

    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    package_logger = logging.getLogger("procsched")
    package_logger.setLevel(level)
    if not any(isinstance(h, RichHandler) for h in package_logger.handlers):
        package_logger.addHandler(RichHandler(console=Console(stderr=True), show_time=False, show_path=False))


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    console.rule(f"[bold]{result.algorithm}[/bold]")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()

    agg = result.aggregates
    footers = {}
    if agg is not None:
        footers = {
            "Wait": f"Average\n{agg.average_waiting:.2f}",
            "Turnaround": f"Average\n{agg.average_turnaround:.2f}",
            "Exit": f"Throughput\n{agg.throughput:.2f}/t",
        }

    table = Table(title="Schedule table", box=box.SIMPLE_HEAVY, show_footer=True)
    for h in REPORT_COLUMNS:
        justify = "center" if h in {"ID", "Priority"} else "right"
        table.add_column(h, justify=justify, footer=footers.get(h, ""))

    for row in result.rows:
        table.add_row(
            str(row.pid),
            str(row.priority),
            str(row.burst_time),
            str(row.arrival_time),
            str(row.waiting_time),
            str(row.turnaround_time),
            str(row.completion_time),
        )

    console.print(table)
    console.print()


def _print_comparison(workload_path: Path, processes: List[Process], console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", caption=str(workload_path), box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm", no_wrap=True)
    summary_table.add_column("Rows", justify="right")
    summary_table.add_column("Procs", justify="right")
    summary_table.add_column("Avg wait", justify="right")
    summary_table.add_column("Avg TAT", justify="right")
    summary_table.add_column("Thru", justify="right")
    summary_table.add_column("Util", justify="right")

    for alg in DEFAULT_ORDER:
        result = run_algorithm(alg, processes)
        agg = result.aggregates
        summary_table.add_row(
            result.algorithm,
            str(agg.row_count),
            str(agg.process_count),
            f"{agg.average_waiting:.2f}",
            f"{agg.average_turnaround:.2f}",
            f"{agg.throughput:.3f}",
            f"{agg.cpu_utilization*100:.1f}%",
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    console = Console()

    workload_path = Path(args.workload)
    try:
        processes = load_workload(workload_path)
    except OSError as exc:
        logger.error("Cannot read workload %s: %s", workload_path, exc)
        return 1
    except WorkloadError as exc:
        logger.error("Invalid workload %s: %s", workload_path, exc)
        return 1

    if not processes:
        logger.warning("Workload %s contains no processes", workload_path)

    if args.command == "report":
        for alg in args.algorithm or DEFAULT_ORDER:
            result = run_algorithm(alg, processes)
            logger.info("%s: %d row(s)", result.algorithm, len(result.rows))
            _print_result(result, console, plain=args.plain)
        return 0

    _print_comparison(workload_path, processes, console)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
