from __future__ import annotations

import argparse
import logging
import time
from pathlib import Path

from rich.console import Console

from .algorithms import ALGORITHMS, DEFAULT_ORDER, DEFAULT_QUANTUM, run_all
from .models import ScheduleResult
from .report import build_comparison_table, print_result, render_report
from .workload_io import load_workload

logger = logging.getLogger(__name__)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, SJF, Priority, Round-robin).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Log scheduling decisions to stderr.",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Options shared by every subcommand.
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "workload",
        help="Path to a CSV (id,burst,arrival[,priority]) or JSON workload file.",
    )
    common.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=list(ALGORITHMS),
        default=DEFAULT_ORDER,
        help=f"Algorithms to run (default: {' '.join(DEFAULT_ORDER)}).",
    )
    common.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=DEFAULT_QUANTUM,
        help=f"Time quantum for round-robin (default: {DEFAULT_QUANTUM}).",
    )

    run_parser = subparsers.add_parser(
        "run",
        parents=[common],
        help="Run the scheduling algorithms on a workload file and print a report for each.",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Print plain-text reports without colors.",
    )
    run_parser.add_argument(
        "--step",
        action="store_true",
        help="Play back each schedule one time unit at a time before its report.",
    )
    run_parser.add_argument(
        "--step-delay",
        type=float,
        default=0.3,
        help="Seconds to wait between steps when --step is used (default: 0.3).",
    )

    subparsers.add_parser(
        "compare",
        parents=[common],
        help="Run several algorithms on the same workload and compare average metrics.",
    )

    return parser


def _animate_result(result: ScheduleResult, delay: float, console: Console) -> None:
    """
    Simple time-stepped textual playback of a computed schedule.
    """
    timeline = result.timeline
    if not timeline:
        console.print("[red]No execution to animate.[/red]")
        return

    makespan = timeline[-1].end_time
    console.print(f"[bold]Simulating {result.algorithm}[/bold] (duration {makespan} time units)")
    console.print("[dim]Press Ctrl+C to skip animation.[/dim]")

    for t in range(makespan):
        running = next((sl for sl in timeline if sl.start_time <= t < sl.end_time), None)
        if running is None:
            console.print(f"t={t:2d}: [dim]idle[/dim]")
        else:
            bar = "#" * (t - running.start_time + 1)
            console.print(f"t={t:2d}: {running.pid} [green]{bar}[/green]")
        time.sleep(delay)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
    )


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    _configure_logging(args.verbose)
    console = Console()

    try:
        processes = load_workload(Path(args.workload))
        results = run_all(processes, args.algorithms, quantum=args.quantum)
    except ValueError as exc:
        logger.error("%s", exc)
        return 1

    if args.command == "run":
        for result in results.values():
            if args.step:
                try:
                    _animate_result(result, delay=args.step_delay, console=console)
                except KeyboardInterrupt:
                    console.print("[yellow]Animation skipped.[/yellow]")
            if args.plain:
                console.out(render_report(result))
            else:
                print_result(result, console)
        return 0

    console.print(build_comparison_table(results.values(), title=f"Algorithm comparison: {args.workload}"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
