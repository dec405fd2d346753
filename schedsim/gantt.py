from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from rich import box
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from .models import ScheduledSlice, ScheduleResult

COLORS = ["red", "green", "yellow", "blue", "magenta", "cyan"]

# (pid, start, end); pid is None for an idle stretch
Segment = Tuple[Optional[int], int, int]


def segments(slices: Sequence[ScheduledSlice]) -> List[Segment]:
    """
    Timeline slices with the idle stretches between them made explicit.

    The chart starts at time 0, so a late first arrival shows up as a
    leading idle segment.
    """
    out: List[Segment] = []
    clock = 0
    for sl in slices:
        if sl.start_time > clock:
            out.append((None, clock, sl.start_time))
        out.append((sl.pid, sl.start_time, sl.end_time))
        clock = sl.end_time
    return out


def _label(pid: Optional[int]) -> str:
    return "idle" if pid is None else f"P{pid}"


def render_gantt(slices: Sequence[ScheduledSlice]) -> str:
    """
    Plain-text chart: one cell per segment, boundary times underneath.
    """
    if not slices:
        return "(no execution)"

    bar = "|"
    marks = "0"
    for pid, start, end in segments(slices):
        label = _label(pid)
        width = max(len(label) + 2, end - start)
        bar += label.center(width) + "|"
        marks += str(end).rjust(width + 1)

    return "\n".join(["Gantt Chart:", bar, marks])


def build_rich_gantt(result: ScheduleResult) -> Panel:
    """
    Colored chart for one run, with its context switches and idle time in
    the subtitle.
    """
    title = f"Gantt Chart: {result.algorithm}"
    if not result.timeline:
        return Panel("No execution", title=title)

    pid_to_color: Dict[int, str] = {}
    table = Table(box=box.SQUARE, show_header=False, padding=(0, 1))
    cells: List[Text] = []
    spans: List[Text] = []
    idle = 0

    for pid, start, end in segments(result.timeline):
        table.add_column(justify="center")
        if pid is None:
            idle += end - start
            cells.append(Text("idle", style="dim"))
        else:
            color = pid_to_color.setdefault(pid, COLORS[len(pid_to_color) % len(COLORS)])
            cells.append(Text(_label(pid), style=f"bold on {color}"))
        spans.append(Text(f"{start}-{end}", style="dim"))

    table.add_row(*cells)
    table.add_row(*spans)

    subtitle = f"{result.context_switches} context switches, {idle} idle"
    return Panel.fit(table, title=title, subtitle=subtitle)
