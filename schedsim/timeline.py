from __future__ import annotations

from typing import Iterator, List, Optional

from .errors import CapacityError
from .models import ScheduledSlice


class Timeline:
    """
    Ordered execution slices for one policy run.

    Slices are appended in time order. A slice that continues the previous
    one for the same pid is merged into it, so tick-by-tick preemptive
    policies produce the same compact chart as non-preemptive ones.
    """

    def __init__(self, max_length: Optional[int] = None) -> None:
        self.max_length = max_length
        self._slices: List[ScheduledSlice] = []

    def record(self, pid: int, start_time: int, end_time: int) -> None:
        if end_time <= start_time:
            raise ValueError(f"Empty slice for P{pid}: [{start_time}, {end_time})")
        if self.max_length is not None and end_time > self.max_length:
            raise CapacityError(f"Timeline length {end_time} exceeds the limit of {self.max_length}")

        if self._slices:
            last = self._slices[-1]
            if start_time < last.end_time:
                raise ValueError(
                    f"Slice P{pid} [{start_time}, {end_time}) overlaps P{last.pid} "
                    f"[{last.start_time}, {last.end_time})"
                )
            if last.pid == pid and last.end_time == start_time:
                self._slices[-1] = ScheduledSlice(pid=pid, start_time=last.start_time, end_time=end_time)
                return

        self._slices.append(ScheduledSlice(pid=pid, start_time=start_time, end_time=end_time))

    def all_slices(self) -> List[ScheduledSlice]:
        return list(self._slices)

    def context_switch_count(self) -> int:
        return sum(1 for prev, cur in zip(self._slices, self._slices[1:]) if prev.pid != cur.pid)

    def __len__(self) -> int:
        return len(self._slices)

    def __iter__(self) -> Iterator[ScheduledSlice]:
        return iter(self._slices)
