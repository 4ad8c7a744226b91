from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice

CELL_WIDTH = 8


def render_gantt(slices: List[ScheduledSlice]) -> str:
    """
    Plain-text Gantt chart: one padded column per slice naming the process,
    then the start time of every slice followed by the final stop time.
    """
    if not slices:
        return "Gantt schedule\n(no execution)"

    header = "|"
    for sl in slices:
        pid = str(sl.pid)
        padding = " " * max(0, (CELL_WIDTH - len(pid)) // 2)
        header += f"{padding}{pid}{padding}|"

    times = "".join(f"{sl.start_time}\t" for sl in slices) + str(slices[-1].end_time)

    return "\n".join(["Gantt schedule", header, times])


def build_rich_gantt(slices: List[ScheduledSlice]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not slices:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    colors = ["red", "green", "yellow", "blue", "magenta", "cyan"]
    pid_to_color: Dict[int, str] = {}

    def pid_color(pid: int) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(colors)
            pid_to_color[pid] = colors[idx]
        return pid_to_color[pid]

    # One column per time unit per digit of the largest mark, plus a gap; at least three.
    unit = max(3, len(str(slices[-1].end_time)) + 1)
    timeline = Text()
    labels = Text()
    time_marks = "0".ljust(unit)
    last_time = 0

    for sl in slices:
        idle_gap = sl.start_time - last_time
        if idle_gap > 0:
            timeline.append(" " * idle_gap * unit)
            labels.append(" " * idle_gap * unit)
            time_marks += " " * (idle_gap - 1) * unit + f"{sl.start_time}".ljust(unit)

        width = (sl.end_time - sl.start_time) * unit
        color = pid_color(sl.pid)

        timeline.append(" " * width, style=f"on {color}")
        labels.append(str(sl.pid)[:width].center(width), style="bold")

        time_marks += " " * (width - unit) + f"{sl.end_time}".ljust(unit)
        last_time = sl.end_time

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks.rstrip()
