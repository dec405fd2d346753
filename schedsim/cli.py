from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .algorithms import ALGORITHMS, run_algorithm
from .config import DEFAULT_PROCESS_COUNT, DEFAULT_RESULTS_FILE, SimulatorConfig
from .driver import DEFAULT_ORDER, run_all
from .errors import SimulationError
from .gantt import build_rich_gantt, render_gantt
from .generator import generate_processes
from .models import Process, ScheduleResult
from .workload_io import load_workload, save_workload

logger = logging.getLogger(__name__)


def _add_workload_args(parser: argparse.ArgumentParser) -> None:
    source = parser.add_mutually_exclusive_group()
    source.add_argument(
        "--workload",
        "-w",
        help="Path to JSON or CSV workload file.",
    )
    source.add_argument(
        "--count",
        "-n",
        type=int,
        default=None,
        help=f"Generate this many random processes instead (default: {DEFAULT_PROCESS_COUNT}).",
    )
    parser.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Seed for the random workload generator.",
    )
    parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help="Time quantum for round-robin (default: 4; ignored by other algorithms).",
    )
    parser.add_argument(
        "--max-time",
        type=int,
        default=None,
        help="Abort a run whose timeline grows past this many time units.",
    )
    parser.add_argument(
        "--max-processes",
        type=int,
        default=None,
        help="Reject workloads with more processes than this.",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, SRTF, Priority, Preemptive Priority, RR).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase log output (-v for info, -vv for every dispatch).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one scheduling algorithm on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        choices=list(ALGORITHMS),
        help="Algorithm to use.",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Draw the Gantt chart as plain text instead of colored cells.",
    )
    _add_workload_args(run_parser)

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=list(ALGORITHMS),
        default=list(DEFAULT_ORDER),
        help="Algorithms to compare (default: all, in the standard order).",
    )
    compare_parser.add_argument(
        "--csv",
        nargs="?",
        const=DEFAULT_RESULTS_FILE,
        default=None,
        help=f"Write average metrics per algorithm to a CSV file (default name: {DEFAULT_RESULTS_FILE}).",
    )
    _add_workload_args(compare_parser)

    generate_parser = subparsers.add_parser("generate", help="Write a random workload to a JSON or CSV file.")
    generate_parser.add_argument(
        "--count",
        "-n",
        type=int,
        default=DEFAULT_PROCESS_COUNT,
        help=f"Number of processes (default: {DEFAULT_PROCESS_COUNT}).",
    )
    generate_parser.add_argument("--seed", type=int, default=None, help="Seed for the generator.")
    generate_parser.add_argument("--output", "-o", required=True, help="Destination .json or .csv file.")

    return parser


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(show_path=False)],
        force=True,
    )


def _load_processes(args: argparse.Namespace) -> List[Process]:
    if args.workload:
        return load_workload(Path(args.workload))
    count = args.count if args.count is not None else DEFAULT_PROCESS_COUNT
    return generate_processes(count, seed=args.seed)


def _print_processes(processes: List[Process], console: Console) -> None:
    table = Table(title="Workload", box=box.SIMPLE_HEAVY)
    for h in ("PID", "Arrival", "Burst", "Priority"):
        table.add_column(h, justify="right")
    for p in sorted(processes, key=lambda p: p.pid):
        table.add_row(f"P{p.pid}", str(p.arrival_time), str(p.burst_time), str(p.priority))
    console.print(table)


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    if plain:
        console.print(render_gantt(result.timeline), markup=False, highlight=False, soft_wrap=True)
    else:
        console.print(build_rich_gantt(result))

    console.print()

    headers = [
        "PID",
        "Arrive",
        "Burst",
        "Priority",
        "Start",
        "Complete",
        "Wait",
        "Turnaround",
        "Response",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "right"
        proc_table.add_column(h, justify=justify)

    for p in result.processes:
        proc_table.add_row(
            f"P{p.pid}",
            str(p.arrival_time),
            str(p.burst_time),
            str(p.priority),
            str(p.start_time),
            str(p.completion_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.response_time),
        )

    console.print(proc_table)
    console.print()

    averages = result.averages
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{averages.avg_waiting:.2f}")
    sys_table.add_row("Avg turnaround", f"{averages.avg_turnaround:.2f}")
    sys_table.add_row("Avg response", f"{averages.avg_response:.2f}")
    sys_table.add_row("Context switches", str(result.context_switches))
    if result.system:
        sys = result.system
        sys_table.add_row("Makespan", str(sys.makespan))
        sys_table.add_row("Throughput (proc/time)", f"{sys.throughput:.3f}")
        sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def _print_comparison(results: List[ScheduleResult], console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("Switches", justify="right")

    for result in results:
        averages = result.averages
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{averages.avg_waiting:.2f}",
            f"{averages.avg_turnaround:.2f}",
            f"{averages.avg_response:.2f}",
            str(result.context_switches),
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    console = Console()

    try:
        if args.command == "generate":
            processes = generate_processes(args.count, seed=args.seed)
            path = save_workload(args.output, processes)
            console.print(f"Wrote {len(processes)} processes to [green]{path}[/green]")
            return 0

        config = SimulatorConfig.from_args(args)
        processes = _load_processes(args)
        _print_processes(processes, console)

        if args.command == "run":
            result = run_algorithm(args.algorithm, processes, config=config)
            _print_result(result, console, plain=args.plain)
            return 0

        if args.command == "compare":
            results = run_all(processes, config=config, algorithms=args.algorithms)
            _print_comparison(results, console)
            if config.results_path is not None:
                console.print(f"Results written to [green]{config.results_path}[/green]")
            return 0
    except SimulationError as exc:
        logger.debug("Simulation failed", exc_info=True)
        console.print(f"[red]Error: {exc}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
