from __future__ import annotations

from typing import Sequence, Union

from .errors import ConfigurationError
from .models import AverageMetrics, Process, ProcessMetrics, ScheduledSlice, SystemMetrics

ProcessLike = Union[Process, ProcessMetrics]


def compute_averages(processes: Sequence[ProcessLike]) -> AverageMetrics:
    """
    Average waiting, turnaround and response time over a finished run.
    """
    if not processes:
        raise ConfigurationError("Cannot average metrics over an empty process set")

    n = len(processes)
    return AverageMetrics(
        avg_waiting=sum(p.waiting_time for p in processes) / n,
        avg_turnaround=sum(p.turnaround_time for p in processes) / n,
        avg_response=sum(p.response_time or 0 for p in processes) / n,
    )


def compute_system_metrics(processes: Sequence[ProcessLike], timeline: Sequence[ScheduledSlice]) -> SystemMetrics:
    """
    Compute throughput and CPU utilization given populated per-process metrics
    and timeline slices.

    The makespan is measured from time 0, so idle time includes any gap
    before the first arrival.
    """
    if not processes:
        return SystemMetrics(cpu_busy_time=0, idle_time=0, makespan=0, throughput=0.0, cpu_utilization=0.0)

    makespan = max(p.completion_time for p in processes)
    cpu_busy_time = sum(slice_.duration for slice_ in timeline)

    throughput = len(processes) / makespan if makespan > 0 else 0.0
    cpu_utilization = cpu_busy_time / makespan if makespan > 0 else 0.0

    return SystemMetrics(
        cpu_busy_time=cpu_busy_time,
        idle_time=makespan - cpu_busy_time,
        makespan=makespan,
        throughput=throughput,
        cpu_utilization=cpu_utilization,
    )
