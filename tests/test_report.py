from pathlib import Path

from schedsim.algorithms import schedule_fcfs, schedule_rr
from schedsim.gantt import build_rich_gantt, render_gantt, segments
from schedsim.models import Process, ScheduledSlice, ScheduleResult
from schedsim.report import HEADER, ResultsCsv, export_results


def _result():
    return schedule_fcfs([Process(1, 0, 5, 2), Process(2, 1, 3, 1), Process(3, 2, 8, 3)])


def test_export_results_writes_header_and_rows(tmp_path: Path):
    path = export_results(tmp_path / "results.csv", [_result()])
    lines = path.read_text().splitlines()
    assert lines[0] == ",".join(HEADER)
    assert lines[1] == "FCFS,3.33,8.67"


def test_results_csv_appends(tmp_path: Path):
    out = ResultsCsv(tmp_path / "results.csv")
    out.append(_result())
    out.append(_result())
    lines = out.path.read_text().splitlines()
    assert len(lines) == 3
    assert lines[0].startswith("Algorithm,")


def test_segments_make_idle_time_explicit():
    slices = [ScheduledSlice(1, 2, 4), ScheduledSlice(2, 4, 5), ScheduledSlice(1, 8, 9)]
    assert segments(slices) == [(None, 0, 2), (1, 2, 4), (2, 4, 5), (None, 5, 8), (1, 8, 9)]


def test_render_gantt_marks_idle_time():
    text = render_gantt([ScheduledSlice(1, 0, 2), ScheduledSlice(2, 4, 6)])
    lines = text.splitlines()
    assert lines[0] == "Gantt Chart:"
    assert lines[1] == "| P1 | idle | P2 |"
    assert lines[2] == "0    2      4    6"


def test_render_gantt_wide_slice_uses_its_duration():
    text = render_gantt([ScheduledSlice(3, 0, 8)])
    assert text.splitlines()[1:] == ["|   P3   |", "0        8"]


def test_render_gantt_empty():
    assert render_gantt([]) == "(no execution)"


def test_rich_gantt_reports_switches_and_idle_time():
    result = schedule_rr([Process(1, 2, 5), Process(2, 3, 3)], quantum=4)
    panel = build_rich_gantt(result)
    assert panel.title == "Gantt Chart: Round Robin"
    assert panel.subtitle == "2 context switches, 2 idle"


def test_rich_gantt_without_slices():
    result = ScheduleResult(algorithm="FCFS", quantum=None)
    assert build_rich_gantt(result).renderable == "No execution"
