from __future__ import annotations

import logging
import random
from typing import List, Optional

from . import config
from .errors import ConfigurationError
from .models import Process

logger = logging.getLogger(__name__)


def generate_processes(
    count: int,
    seed: Optional[int] = None,
    max_arrival: int = config.MAX_ARRIVAL_TIME,
    max_burst: int = config.MAX_BURST_TIME,
    max_priority: int = config.MAX_PRIORITY,
) -> List[Process]:
    """
    Build a random workload with pids 1..count.

    Arrival times are drawn from 0..max_arrival, bursts from 1..max_burst and
    priorities from 1..max_priority. Passing ``seed`` makes the workload
    reproducible.
    """
    if count <= 0:
        raise ConfigurationError(f"Process count must be positive, got {count}")
    if max_arrival < 0 or max_burst < config.MIN_BURST_TIME or max_priority < config.MIN_PRIORITY:
        raise ConfigurationError("Generator bounds must allow at least one valid value")

    rng = random.Random(seed)
    processes = [
        Process(
            pid=i + 1,
            arrival_time=rng.randint(0, max_arrival),
            burst_time=rng.randint(config.MIN_BURST_TIME, max_burst),
            priority=rng.randint(config.MIN_PRIORITY, max_priority),
        )
        for i in range(count)
    ]
    logger.info("Generated %d processes (seed=%s)", count, seed)
    return processes
