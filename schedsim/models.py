from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional


@dataclass
class Process:
    """
    A process descriptor: static inputs plus per-run simulation state.

    ``pid``, ``arrival_time``, ``burst_time`` and ``priority`` are inputs and
    are never touched by a policy. A larger ``priority`` value means a more
    urgent process; every priority-based policy uses this convention.

    The remaining fields are outputs of the last policy run and are cleared
    by :meth:`reset_simulation_state`.
    """

    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0
    remaining_time: Optional[int] = None
    waiting_time: int = 0
    turnaround_time: int = 0
    completion_time: int = 0
    start_time: Optional[int] = None
    completed: bool = False

    def __post_init__(self) -> None:
        if self.remaining_time is None:
            self.remaining_time = self.burst_time

    @property
    def response_time(self) -> Optional[int]:
        if self.start_time is None:
            return None
        return self.start_time - self.arrival_time

    def reset_simulation_state(self) -> None:
        self.remaining_time = self.burst_time
        self.waiting_time = 0
        self.turnaround_time = 0
        self.completion_time = 0
        self.start_time = None
        self.completed = False


def reset_processes(processes: Iterable[Process]) -> None:
    """
    Clear simulation state so the same set can be fed to the next policy.
    """
    for p in processes:
        p.reset_simulation_state()


@dataclass(frozen=True)
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time


@dataclass(frozen=True)
class ProcessMetrics:
    pid: int
    arrival_time: int
    burst_time: int
    priority: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int

    @classmethod
    def from_process(cls, p: Process) -> "ProcessMetrics":
        return cls(
            pid=p.pid,
            arrival_time=p.arrival_time,
            burst_time=p.burst_time,
            priority=p.priority,
            start_time=p.start_time,
            completion_time=p.completion_time,
            waiting_time=p.waiting_time,
            turnaround_time=p.turnaround_time,
            response_time=p.response_time,
        )


@dataclass(frozen=True)
class AverageMetrics:
    avg_waiting: float
    avg_turnaround: float
    avg_response: float


@dataclass(frozen=True)
class SystemMetrics:
    cpu_busy_time: int
    idle_time: int
    makespan: int
    throughput: float
    cpu_utilization: float


@dataclass
class ScheduleResult:
    """
    Snapshot of one policy run. Processes are listed in completion order.
    """

    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    averages: Optional[AverageMetrics] = None
    system: Optional[SystemMetrics] = None
    context_switches: int = 0
