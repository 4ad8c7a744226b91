from __future__ import annotations

import io
from typing import Iterable

from rich import box
from rich.console import Console
from rich.table import Table

from .gantt import build_rich_gantt, render_gantt
from .metrics import compute_system_metrics
from .models import ScheduleResult

SCHEDULE_HEADERS = ["ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"]


def render_title(title: str) -> str:
    rule = "-" * (len(title) * 2)
    return "\n".join([rule, " " * (len(title) // 2) + " " + title, rule])


def build_schedule_table(result: ScheduleResult, box_style: box.Box = box.SIMPLE_HEAVY) -> Table:
    """
    Per-process schedule table with averages and throughput in the footer.
    """
    system = result.system or compute_system_metrics(result)

    footers = [
        "",
        "",
        "",
        "",
        f"Average\n{system.avg_waiting:.2f}",
        f"Average\n{system.avg_turnaround:.2f}",
        f"Throughput\n{system.throughput:.2f}/t",
    ]

    table = Table(title="Schedule table", box=box_style, show_footer=True)
    for header, footer in zip(SCHEDULE_HEADERS, footers):
        table.add_column(header, footer=footer, justify="right")

    for p in result.processes:
        table.add_row(
            str(p.pid),
            "" if p.priority is None else str(p.priority),
            str(p.burst_time),
            str(p.arrival_time),
            str(p.waiting_time),
            str(p.turnaround_time),
            str(p.completion_time),
        )

    return table


def render_report(result: ScheduleResult, width: int = 100) -> str:
    """
    Plain-text report (title, Gantt schedule, schedule table) with no colors.
    """
    buffer = io.StringIO()
    console = Console(file=buffer, width=width, color_system=None, force_terminal=False)

    # Title and Gantt rows go out unwrapped so each PID stays above its start time.
    buffer.write(render_title(result.algorithm) + "\n")
    buffer.write(render_gantt(result.timeline) + "\n\n")
    console.print(build_schedule_table(result, box_style=box.ASCII))

    return buffer.getvalue()


def print_result(result: ScheduleResult, console: Console) -> None:
    console.rule(f"[bold]{result.algorithm}[/bold]")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(result.timeline)
    console.print(panel)
    if time_marks:
        console.print(time_marks, highlight=False)

    console.print()
    console.print(build_schedule_table(result))
    console.print()

    sys = result.system or compute_system_metrics(result)
    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg response", f"{sys.avg_response:.2f}")
    sys_table.add_row("Makespan", str(sys.makespan))
    sys_table.add_row("CPU utilization", f"{sys.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def build_comparison_table(results: Iterable[ScheduleResult], title: str = "Algorithm comparison") -> Table:
    summary_table = Table(title=title, box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("Throughput", justify="right")

    for result in results:
        sys = result.system or compute_system_metrics(result)
        summary_table.add_row(
            result.algorithm,
            "" if result.quantum is None else str(result.quantum),
            f"{sys.avg_waiting:.2f}",
            f"{sys.avg_turnaround:.2f}",
            f"{sys.avg_response:.2f}",
            f"{sys.throughput:.2f}/t",
        )

    return summary_table
