"""
CPU scheduling simulator.

Runs classical scheduling algorithms over a list of processes and reports
per-process metrics, a compacted timeline and an event log. The `cli`
module provides the command-line front end.
"""

from .algorithms import ALGORITHMS, run_algorithm
from .models import IDLE, Process, ScheduleResult

__all__ = ["ALGORITHMS", "IDLE", "Process", "ScheduleResult", "run_algorithm", "cli"]
