from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import Iterable, List

from .errors import ConfigurationError
from .models import Process

FIELDS = ["pid", "arrival_time", "burst_time", "priority"]


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a JSON or CSV file into a list of Process objects.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        return _load_json(path)
    if suffix == ".csv":
        return _load_csv(path)

    raise ConfigurationError(f"Unsupported workload format: {suffix} (use .json or .csv)")


def save_workload(path: str | Path, processes: Iterable[Process]) -> Path:
    """
    Write the static inputs of a workload so it can be replayed later.
    """
    path = Path(path)
    rows = [{name: getattr(p, name) for name in FIELDS} for p in processes]
    suffix = path.suffix.lower()

    if suffix == ".json":
        with path.open("w", encoding="utf-8") as f:
            json.dump(rows, f, indent=2)
    elif suffix == ".csv":
        with path.open("w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(f, fieldnames=FIELDS)
            writer.writeheader()
            writer.writerows(rows)
    else:
        raise ConfigurationError(f"Unsupported workload format: {suffix} (use .json or .csv)")

    return path


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, list):
        raise ConfigurationError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.DictReader(f)
        for row in reader:
            processes.append(_process_from_mapping(row))
    return processes


def _whole_number(value) -> int:
    # fractional values are rejected, never truncated
    if isinstance(value, bool):
        raise TypeError(f"expected an integer, got {value!r}")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"expected an integer, got {value!r}")
        return int(value)
    return int(value)


def _process_from_mapping(mapping) -> Process:
    try:
        pid = _whole_number(mapping["pid"])
        arrival_time = _whole_number(mapping["arrival_time"])
        burst_time = _whole_number(mapping["burst_time"])
        priority_val = mapping.get("priority")
        priority = _whole_number(priority_val) if priority_val not in (None, "") else 0
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ConfigurationError(f"Invalid process entry: {mapping!r}") from exc

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
