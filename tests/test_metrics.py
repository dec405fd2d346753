import pytest

from schedsim.errors import ConfigurationError
from schedsim.metrics import compute_averages, compute_system_metrics
from schedsim.models import Process, ScheduledSlice, reset_processes


def _finished():
    procs = [Process(1, 0, 5), Process(2, 1, 3), Process(3, 2, 8)]
    for p, (start, done) in zip(procs, [(0, 5), (5, 8), (8, 16)]):
        p.start_time = start
        p.completion_time = done
        p.turnaround_time = done - p.arrival_time
        p.waiting_time = p.turnaround_time - p.burst_time
        p.remaining_time = 0
        p.completed = True
    return procs


def test_averages():
    avg = compute_averages(_finished())
    assert avg.avg_waiting == pytest.approx(10 / 3)
    assert avg.avg_turnaround == pytest.approx(26 / 3)
    assert avg.avg_response == pytest.approx(10 / 3)


def test_averages_reject_empty_set():
    with pytest.raises(ConfigurationError):
        compute_averages([])


def test_system_metrics_counts_leading_idle_time():
    procs = _finished()
    slices = [ScheduledSlice(1, 2, 7)]
    procs = procs[:1]
    procs[0].completion_time = 7
    system = compute_system_metrics(procs, slices)
    assert system.makespan == 7
    assert system.cpu_busy_time == 5
    assert system.idle_time == 2
    assert system.cpu_utilization == pytest.approx(5 / 7)
    assert system.throughput == pytest.approx(1 / 7)


def test_reset_restores_fresh_state():
    procs = _finished()
    reset_processes(procs)
    for p in procs:
        assert p.remaining_time == p.burst_time
        assert (p.waiting_time, p.turnaround_time, p.completion_time) == (0, 0, 0)
        assert p.start_time is None
        assert p.response_time is None
        assert not p.completed
