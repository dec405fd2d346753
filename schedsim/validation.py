from __future__ import annotations

from typing import List, Optional, Sequence

from .errors import CapacityError, ConfigurationError
from .models import Process


def validate_workload(processes: Sequence[Process], max_processes: Optional[int] = None) -> List[Process]:
    """
    Check a process set once, before any policy runs.

    Raises ConfigurationError for an empty set, a non-positive pid, a
    duplicate pid, a negative arrival or a non-positive burst, and
    CapacityError when the set is larger than ``max_processes``.
    """
    processes = list(processes)
    if not processes:
        raise ConfigurationError("At least one process is required")

    if max_processes is not None and len(processes) > max_processes:
        raise CapacityError(f"{len(processes)} processes exceeds the limit of {max_processes}")

    seen: set[int] = set()
    for p in processes:
        if p.pid <= 0:
            raise ConfigurationError(f"Process pid must be a positive integer, got {p.pid}")
        if p.pid in seen:
            raise ConfigurationError(f"Duplicate pid {p.pid}")
        seen.add(p.pid)

        if p.arrival_time < 0:
            raise ConfigurationError(f"P{p.pid}: arrival time must be >= 0, got {p.arrival_time}")
        if p.burst_time <= 0:
            raise ConfigurationError(f"P{p.pid}: burst time must be >= 1, got {p.burst_time}")

    return processes
