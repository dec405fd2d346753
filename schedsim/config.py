from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError

DEFAULT_QUANTUM = 4
DEFAULT_PROCESS_COUNT = 5
DEFAULT_RESULTS_FILE = "scheduling_results.csv"

# Bounds used by the random workload generator (inclusive).
MAX_ARRIVAL_TIME = 9
MIN_BURST_TIME = 1
MAX_BURST_TIME = 10
MIN_PRIORITY = 1
MAX_PRIORITY = 10


@dataclass(frozen=True)
class SimulatorConfig:
    """
    Settings shared by every policy run.

    ``max_processes`` and ``max_timeline_length`` are optional capacity
    bounds; ``None`` means unbounded. When ``results_path`` is set the
    driver appends one CSV row per policy run to it.
    """

    quantum: int = DEFAULT_QUANTUM
    max_processes: Optional[int] = None
    max_timeline_length: Optional[int] = None
    results_path: Optional[Path] = None

    def __post_init__(self) -> None:
        if self.quantum <= 0:
            raise ConfigurationError(f"Quantum must be positive, got {self.quantum}")
        if self.max_processes is not None and self.max_processes <= 0:
            raise ConfigurationError("max_processes must be positive when set")
        if self.max_timeline_length is not None and self.max_timeline_length <= 0:
            raise ConfigurationError("max_timeline_length must be positive when set")

    @classmethod
    def from_args(cls, args) -> "SimulatorConfig":
        quantum = getattr(args, "quantum", None)
        results = getattr(args, "csv", None)
        return cls(
            quantum=DEFAULT_QUANTUM if quantum is None else quantum,
            max_processes=getattr(args, "max_processes", None),
            max_timeline_length=getattr(args, "max_time", None),
            results_path=Path(results) if results else None,
        )
