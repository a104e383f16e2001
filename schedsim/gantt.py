from __future__ import annotations

from typing import Dict, List

from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import TimelineBlock

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]


def render_gantt(blocks: List[TimelineBlock]) -> str:
    """
    Plain-text Gantt chart; idle stretches are drawn with dots.
    """
    if not blocks:
        return "(no execution)"

    line = "|"
    labels = ""
    time_marks = str(blocks[0].start_time)

    for block in blocks:
        width = max(1, block.duration)
        line += ("." if block.is_idle else "=") * width
        labels += block.pid[:width].ljust(width)
        time_marks += f"{block.end_time:>3}"

    line += "|"

    return "\n".join(
        [
            "Gantt Chart:",
            line,
            labels,
            time_marks,
        ]
    )


def build_rich_gantt(blocks: List[TimelineBlock]) -> tuple[Panel, str]:
    """
    Build a Rich Panel containing a colored Gantt chart and a string with time marks.
    """
    if not blocks:
        panel = Panel("No execution", title="Gantt Chart")
        return panel, ""

    pid_to_color: Dict[str, str] = {}

    def pid_color(pid: str) -> str:
        if pid not in pid_to_color:
            idx = len(pid_to_color) % len(COLORS)
            pid_to_color[pid] = COLORS[idx]
        return pid_to_color[pid]

    timeline = Text()
    labels = Text()
    time_marks = str(blocks[0].start_time)

    for block in blocks:
        width = max(1, block.duration)
        if block.is_idle:
            timeline.append("." * width, style="dim")
            labels.append(block.pid[:width].ljust(width), style="dim")
        else:
            timeline.append(" " * width, style=f"on {pid_color(block.pid)}")
            labels.append(block.pid[:width].ljust(width), style="bold")
        time_marks += f"{block.end_time:>3}"

    table = Table.grid(padding=(0, 0))
    table.add_row(timeline)
    table.add_row(labels)

    panel = Panel.fit(table, title="Gantt Chart")
    return panel, time_marks
