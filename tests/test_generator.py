import pytest

from schedsim import config
from schedsim.errors import ConfigurationError
from schedsim.generator import generate_processes


def test_generated_processes_are_within_bounds():
    procs = generate_processes(50, seed=5)
    assert [p.pid for p in procs] == list(range(1, 51))
    for p in procs:
        assert 0 <= p.arrival_time <= config.MAX_ARRIVAL_TIME
        assert config.MIN_BURST_TIME <= p.burst_time <= config.MAX_BURST_TIME
        assert config.MIN_PRIORITY <= p.priority <= config.MAX_PRIORITY
        assert p.remaining_time == p.burst_time


def test_seed_makes_workload_reproducible():
    assert generate_processes(6, seed=9) == generate_processes(6, seed=9)


def test_count_must_be_positive():
    with pytest.raises(ConfigurationError):
        generate_processes(0)
