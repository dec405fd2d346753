from pathlib import Path

import pytest

from schedsim.config import SimulatorConfig
from schedsim.driver import DEFAULT_ORDER, run_all
from schedsim.errors import ConfigurationError
from schedsim.generator import generate_processes
from schedsim.models import Process


def _procs():
    return [
        Process(1, arrival_time=0, burst_time=5, priority=2),
        Process(2, arrival_time=1, burst_time=3, priority=1),
        Process(3, arrival_time=2, burst_time=8, priority=3),
    ]


def test_runs_every_policy_in_order_and_resets():
    procs = _procs()
    results = run_all(procs)
    assert [r.algorithm for r in results] == [
        "FCFS",
        "Non-Preemptive SJF",
        "Preemptive SJF",
        "Non-Preemptive Priority",
        "Preemptive Priority",
        "Round Robin",
    ]
    assert len(results) == len(DEFAULT_ORDER)
    for p in procs:
        assert not p.completed
        assert p.remaining_time == p.burst_time


def test_results_do_not_depend_on_run_order():
    procs = generate_processes(7, seed=21)
    forward = run_all(procs)
    backward = run_all(procs, algorithms=list(reversed(DEFAULT_ORDER)))
    assert forward == list(reversed(backward))


def test_writes_results_csv(tmp_path: Path):
    path = tmp_path / "scheduling_results.csv"
    run_all(_procs(), config=SimulatorConfig(results_path=path))
    lines = path.read_text().splitlines()
    assert lines[0] == "Algorithm,Average Waiting Time,Average Turnaround Time"
    assert lines[1] == "FCFS,3.33,8.67"
    assert len(lines) == 1 + len(DEFAULT_ORDER)


def test_bad_workload_produces_no_results(tmp_path: Path):
    path = tmp_path / "out.csv"
    with pytest.raises(ConfigurationError):
        run_all([Process(1, 0, 3), Process(1, 1, 2)], config=SimulatorConfig(results_path=path))
    assert not path.exists()


def test_unknown_algorithm_is_rejected_up_front():
    with pytest.raises(ConfigurationError):
        run_all(_procs(), algorithms=["fcfs", "nope"])


def test_capacity_error_skips_the_run_and_keeps_going():
    # every policy here ends at t=16, so each run is aborted in turn
    procs = _procs()
    results = run_all(procs, config=SimulatorConfig(max_timeline_length=15))
    assert results == []
    assert all(not p.completed for p in procs)

    procs = [Process(1, 0, 2), Process(2, 0, 2)]
    results = run_all(procs, config=SimulatorConfig(max_timeline_length=4))
    assert len(results) == len(DEFAULT_ORDER)


def test_invalid_quantum_config():
    with pytest.raises(ConfigurationError):
        SimulatorConfig(quantum=0)
