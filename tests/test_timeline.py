import pytest

from schedsim.errors import CapacityError
from schedsim.timeline import Timeline


def _as_tuples(timeline):
    return [(s.pid, s.start_time, s.end_time) for s in timeline.all_slices()]


def test_contiguous_same_pid_slices_merge():
    tl = Timeline()
    for t in range(3):
        tl.record(1, t, t + 1)
    tl.record(2, 3, 5)
    assert _as_tuples(tl) == [(1, 0, 3), (2, 3, 5)]
    assert len(tl) == 2


def test_same_pid_after_idle_gap_is_not_merged():
    tl = Timeline()
    tl.record(1, 0, 2)
    tl.record(1, 4, 5)
    assert _as_tuples(tl) == [(1, 0, 2), (1, 4, 5)]
    assert tl.context_switch_count() == 0


def test_context_switch_count():
    tl = Timeline()
    tl.record(1, 0, 4)
    tl.record(2, 4, 7)
    tl.record(1, 7, 8)
    tl.record(1, 8, 9)
    assert tl.context_switch_count() == 2
    assert Timeline().context_switch_count() == 0


def test_rejects_empty_and_overlapping_slices():
    tl = Timeline()
    with pytest.raises(ValueError):
        tl.record(1, 3, 3)
    tl.record(1, 0, 4)
    with pytest.raises(ValueError, match="overlaps"):
        tl.record(2, 3, 6)


def test_capacity_bound():
    tl = Timeline(max_length=5)
    tl.record(1, 0, 5)
    with pytest.raises(CapacityError):
        tl.record(2, 5, 6)


def test_all_slices_returns_a_copy():
    tl = Timeline()
    tl.record(1, 0, 1)
    slices = tl.all_slices()
    tl.record(1, 1, 2)
    assert slices[0].end_time == 1
    assert list(tl)[0].end_time == 2
