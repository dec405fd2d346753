"""
CPU scheduling simulator.

Runs FCFS, SJF, SRTF, Priority, Preemptive Priority and Round Robin over an
in-memory workload and reports per-process times, a Gantt timeline and
average metrics.
"""

from .algorithms import ALGORITHMS, run_algorithm
from .driver import run_all
from .models import Process, ScheduleResult, reset_processes

__all__ = ["ALGORITHMS", "Process", "ScheduleResult", "reset_processes", "run_algorithm", "run_all", "cli"]
