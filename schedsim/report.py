from __future__ import annotations

import csv
import logging
from pathlib import Path
from typing import Iterable

from .models import ScheduleResult

logger = logging.getLogger(__name__)

HEADER = ["Algorithm", "Average Waiting Time", "Average Turnaround Time"]


class ResultsCsv:
    """
    Append-only comparison file: a header row, then one row per policy run.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def start(self) -> None:
        """Truncate the file and write the header row."""
        with self.path.open("w", encoding="utf-8", newline="") as f:
            csv.writer(f).writerow(HEADER)

    def append(self, result: ScheduleResult) -> None:
        if not self.path.exists():
            self.start()
        averages = result.averages
        with self.path.open("a", encoding="utf-8", newline="") as f:
            csv.writer(f).writerow(
                [
                    result.algorithm,
                    f"{averages.avg_waiting:.2f}",
                    f"{averages.avg_turnaround:.2f}",
                ]
            )
        logger.debug("Appended %s to %s", result.algorithm, self.path)


def export_results(path: str | Path, results: Iterable[ScheduleResult]) -> Path:
    writer = ResultsCsv(path)
    writer.start()
    for result in results:
        writer.append(result)
    logger.info("Wrote results to %s", writer.path)
    return writer.path
