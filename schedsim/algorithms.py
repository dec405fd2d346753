from __future__ import annotations

import logging
from collections import deque
from typing import Callable, Deque, List, Optional, Tuple

from .config import SimulatorConfig
from .errors import ConfigurationError
from .metrics import compute_averages, compute_system_metrics
from .models import Process, ProcessMetrics, ScheduleResult, reset_processes
from .timeline import Timeline
from .validation import validate_workload

logger = logging.getLogger(__name__)

SelectionKey = Callable[[Process], Tuple[int, ...]]


def _ready(processes: List[Process], time: int) -> List[Process]:
    return [p for p in processes if p.arrival_time <= time and not p.completed]


def _next_arrival(processes: List[Process], time: int) -> int:
    return min(p.arrival_time for p in processes if not p.completed and p.arrival_time > time)


def _all_done(processes: List[Process]) -> bool:
    return all(p.completed for p in processes)


def _dispatch(p: Process, time: int) -> None:
    if p.start_time is None:
        p.start_time = time


def _complete(p: Process, time: int, finished: List[ProcessMetrics]) -> None:
    assert p.remaining_time == 0, f"P{p.pid} completed with {p.remaining_time} units left"
    p.completed = True
    p.completion_time = time
    p.turnaround_time = time - p.arrival_time
    p.waiting_time = p.turnaround_time - p.burst_time
    finished.append(ProcessMetrics.from_process(p))
    logger.debug("t=%d: P%d completed (waiting=%d)", time, p.pid, p.waiting_time)


def _build_result(
    algorithm: str,
    quantum: Optional[int],
    finished: List[ProcessMetrics],
    timeline: Timeline,
) -> ScheduleResult:
    slices = timeline.all_slices()
    result = ScheduleResult(
        algorithm=algorithm,
        quantum=quantum,
        processes=finished,
        timeline=slices,
        averages=compute_averages(finished),
        system=compute_system_metrics(finished, slices),
        context_switches=timeline.context_switch_count(),
    )
    logger.info(
        "%s: avg waiting %.2f, avg turnaround %.2f, %d context switches",
        algorithm,
        result.averages.avg_waiting,
        result.averages.avg_turnaround,
        result.context_switches,
    )
    return result


def _run_non_preemptive(processes: List[Process], key: SelectionKey, timeline: Timeline) -> List[ProcessMetrics]:
    """
    At each decision point pick the best ready process by ``key`` and run it
    to completion. When nothing is ready, jump to the next arrival.
    """
    time = 0
    finished: List[ProcessMetrics] = []

    while not _all_done(processes):
        ready = _ready(processes, time)
        if not ready:
            time = _next_arrival(processes, time)
            continue

        p = min(ready, key=key)
        _dispatch(p, time)
        end_time = time + p.burst_time
        timeline.record(p.pid, time, end_time)
        logger.debug("t=%d: dispatch P%d for %d", time, p.pid, p.burst_time)

        p.remaining_time = 0
        time = end_time
        _complete(p, time, finished)

    return finished


def _run_preemptive(processes: List[Process], key: SelectionKey, timeline: Timeline) -> List[ProcessMetrics]:
    """
    Re-select the best ready process by ``key`` at every time unit.
    """
    time = 0
    finished: List[ProcessMetrics] = []

    while not _all_done(processes):
        ready = _ready(processes, time)
        if not ready:
            time = _next_arrival(processes, time)
            continue

        current = min(ready, key=key)
        _dispatch(current, time)
        timeline.record(current.pid, time, time + 1)

        current.remaining_time -= 1
        assert current.remaining_time >= 0
        time += 1

        if current.remaining_time == 0:
            _complete(current, time, finished)

    return finished


def schedule_fcfs(
    processes: List[Process], quantum: Optional[int] = None, timeline: Optional[Timeline] = None
) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.
    """
    timeline = timeline if timeline is not None else Timeline()
    processes_sorted = sorted(processes, key=lambda p: (p.arrival_time, p.pid))

    time = 0
    finished: List[ProcessMetrics] = []

    for p in processes_sorted:
        if time < p.arrival_time:
            time = p.arrival_time

        _dispatch(p, time)
        end_time = time + p.burst_time
        timeline.record(p.pid, time, end_time)

        p.remaining_time = 0
        time = end_time
        _complete(p, time, finished)

    return _build_result("FCFS", None, finished, timeline)


def schedule_sjf(
    processes: List[Process], quantum: Optional[int] = None, timeline: Optional[Timeline] = None
) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time.
    """
    timeline = timeline if timeline is not None else Timeline()
    finished = _run_non_preemptive(processes, lambda p: (p.burst_time, p.pid), timeline)
    return _build_result("Non-Preemptive SJF", None, finished, timeline)


def schedule_srtf(
    processes: List[Process], quantum: Optional[int] = None, timeline: Optional[Timeline] = None
) -> ScheduleResult:
    """
    Shortest Remaining Time First (preemptive SJF).
    """
    timeline = timeline if timeline is not None else Timeline()
    finished = _run_preemptive(processes, lambda p: (p.remaining_time, p.pid), timeline)
    return _build_result("Preemptive SJF", None, finished, timeline)


def schedule_priority(
    processes: List[Process], quantum: Optional[int] = None, timeline: Optional[Timeline] = None
) -> ScheduleResult:
    """
    Static Priority scheduling (non-preemptive).

    Higher numeric priority value means higher priority; ties go to the
    smaller pid.
    """
    timeline = timeline if timeline is not None else Timeline()
    finished = _run_non_preemptive(processes, lambda p: (-p.priority, p.pid), timeline)
    return _build_result("Non-Preemptive Priority", None, finished, timeline)


def schedule_priority_preemptive(
    processes: List[Process], quantum: Optional[int] = None, timeline: Optional[Timeline] = None
) -> ScheduleResult:
    """
    Preemptive Priority scheduling.

    Re-selects the highest priority ready process at every time unit; ties
    go to the smaller pid.
    """
    timeline = timeline if timeline is not None else Timeline()
    finished = _run_preemptive(processes, lambda p: (-p.priority, p.pid), timeline)
    return _build_result("Preemptive Priority", None, finished, timeline)


def schedule_rr(
    processes: List[Process], quantum: Optional[int] = None, timeline: Optional[Timeline] = None
) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.

    Processes that arrive while another one runs (or exactly when its slice
    ends) join the queue before the preempted process is put back.
    """
    if quantum is None or quantum <= 0:
        raise ConfigurationError("Round Robin requires a positive quantum (use --quantum)")

    timeline = timeline if timeline is not None else Timeline()
    by_arrival = sorted(processes, key=lambda p: (p.arrival_time, p.pid))

    time = 0
    finished: List[ProcessMetrics] = []
    ready: Deque[Process] = deque()
    admitted: set[int] = set()

    def enqueue_new_arrivals(current_time: int) -> None:
        for p in by_arrival:
            if p.arrival_time > current_time:
                break
            if p.pid not in admitted:
                admitted.add(p.pid)
                ready.append(p)

    enqueue_new_arrivals(time)

    while not _all_done(processes):
        if not ready:
            # CPU idle: jump to the next arrival
            time = _next_arrival(processes, time)
            enqueue_new_arrivals(time)
            continue

        p = ready.popleft()
        _dispatch(p, time)

        run_time = min(quantum, p.remaining_time)
        timeline.record(p.pid, time, time + run_time)
        logger.debug("t=%d: dispatch P%d for %d", time, p.pid, run_time)

        time += run_time
        p.remaining_time -= run_time

        enqueue_new_arrivals(time)

        if p.remaining_time > 0:
            ready.append(p)
        else:
            _complete(p, time, finished)

    return _build_result("Round Robin", quantum, finished, timeline)


ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "srtf": schedule_srtf,
    "priority": schedule_priority,
    "priority-preemptive": schedule_priority_preemptive,
    "rr": schedule_rr,
}

QUANTUM_ALGORITHMS = {"rr"}


def run_algorithm(
    name: str,
    processes: List[Process],
    quantum: Optional[int] = None,
    config: Optional[SimulatorConfig] = None,
) -> ScheduleResult:
    """
    Validate the workload, reset its simulation state and run one policy.

    ``quantum`` overrides ``config.quantum`` and is only used by Round Robin.
    """
    config = config or SimulatorConfig()
    name = name.lower()
    if name not in ALGORITHMS:
        raise ConfigurationError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    processes = validate_workload(processes, max_processes=config.max_processes)
    reset_processes(processes)

    q = None
    if name in QUANTUM_ALGORITHMS:
        q = config.quantum if quantum is None else quantum

    func = ALGORITHMS[name]
    return func(processes, quantum=q, timeline=Timeline(max_length=config.max_timeline_length))
