from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from .algorithms import ALGORITHMS, run_algorithm
from .config import SimulatorConfig
from .errors import CapacityError, ConfigurationError
from .models import Process, ScheduleResult, reset_processes
from .report import ResultsCsv
from .validation import validate_workload

logger = logging.getLogger(__name__)

DEFAULT_ORDER = ["fcfs", "sjf", "srtf", "priority", "priority-preemptive", "rr"]


def run_all(
    processes: Sequence[Process],
    config: Optional[SimulatorConfig] = None,
    algorithms: Optional[Sequence[str]] = None,
) -> List[ScheduleResult]:
    """
    Run each policy in turn over the same process set.

    The set is validated once up front, so a bad workload produces no
    results at all. A run that outgrows ``config.max_timeline_length`` is
    skipped with a warning. Simulation state is reset after every run,
    leaving the processes as they were handed in.
    """
    config = config or SimulatorConfig()
    processes = validate_workload(processes, max_processes=config.max_processes)
    algorithms = [name.lower() for name in algorithms] if algorithms else list(DEFAULT_ORDER)
    unknown = [name for name in algorithms if name not in ALGORITHMS]
    if unknown:
        raise ConfigurationError(f"Unknown algorithm(s): {', '.join(unknown)}")

    csv_out = None
    if config.results_path is not None:
        csv_out = ResultsCsv(config.results_path)
        csv_out.start()

    results: List[ScheduleResult] = []
    for name in algorithms:
        logger.info("Running %s over %d processes", name, len(processes))
        try:
            result = run_algorithm(name, processes, config=config)
        except CapacityError as exc:
            # Only this run is lost; the next policy starts from a clean set.
            logger.warning("%s aborted: %s", name, exc)
            continue
        finally:
            reset_processes(processes)
        results.append(result)
        if csv_out is not None:
            csv_out.append(result)

    return results
