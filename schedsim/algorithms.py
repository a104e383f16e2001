from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Callable, Deque, Dict, List, Optional, Sequence

from .events import EventLog
from .metrics import compute_system_metrics
from .models import Process, ProcessMetrics, ScheduleResult
from .timeline import TimelineBuilder
from .validation import validate_processes, validate_quantum

logger = logging.getLogger(__name__)


@dataclass
class _Job:
    """
    Per-run working state for one process. Never leaves this module.
    """

    proc: Process
    remaining: int
    start_time: Optional[int] = None
    completion_time: Optional[int] = None
    visited: bool = False

    @property
    def pid(self) -> str:
        return self.proc.pid

    @property
    def done(self) -> bool:
        return self.remaining == 0


class _Run:
    """
    Clock, timeline, event log and bookkeeping shared by every algorithm.
    """

    def __init__(self, processes: Sequence[Process], preemptive: bool = False) -> None:
        validate_processes(processes)
        self.jobs: List[_Job] = [_Job(proc=p, remaining=p.burst_time) for p in processes]
        self.preemptive = preemptive
        self.time = 0
        self.idle_time = 0
        self.context_switches = 0
        self.timeline = TimelineBuilder()
        self.events = EventLog()
        # Last process that held the CPU; None before the first dispatch and after idle.
        self._last: Optional[_Job] = None

    def finished(self) -> bool:
        return all(j.done for j in self.jobs)

    def eligible(self) -> List[_Job]:
        return [j for j in self.jobs if not j.done and j.proc.arrival_time <= self.time]

    def next_arrival(self) -> int:
        return min(j.proc.arrival_time for j in self.jobs if not j.done and j.proc.arrival_time > self.time)

    def idle_until(self, until: int) -> None:
        self.events.emit(self.time, f"CPU idle until t={until}")
        self.timeline.idle(self.time, until)
        self.idle_time += until - self.time
        self.time = until
        self._last = None

    def dispatch(self, job: _Job, detail: str = "") -> None:
        prev = self._last
        if prev is job:
            return

        if prev is not None:
            self.context_switches += 1
            if self.preemptive and not prev.done:
                self.events.emit(self.time, f"Preempting {prev.pid}, switching to {job.pid}")
            else:
                self.events.emit(self.time, f"Context switch {prev.pid} -> {job.pid}")

        if job.start_time is None:
            job.start_time = self.time
            self.events.emit(self.time, f"Starting process {job.pid}{detail}")
        else:
            self.events.emit(self.time, f"Resuming process {job.pid}{detail}")
        self._last = job

    def execute(self, job: _Job, units: int, on_tick: Optional[Callable[[int], None]] = None) -> None:
        """
        Run `job` for `units` time units as one timeline block.

        `on_tick` is called with the new clock value after every unit.
        """
        self.timeline.run(job.pid, self.time, self.time + units)
        if on_tick is None:
            self.time += units
            job.remaining -= units
        else:
            for _ in range(units):
                self.time += 1
                job.remaining -= 1
                on_tick(self.time)

        if job.done:
            job.completion_time = self.time
            self.events.emit(self.time, f"Process {job.pid} completed")

    def result(self, algorithm: str, quantum: Optional[int] = None) -> ScheduleResult:
        metrics: List[ProcessMetrics] = []
        for j in self.jobs:
            p = j.proc
            turnaround_time = j.completion_time - p.arrival_time
            metrics.append(
                ProcessMetrics(
                    pid=p.pid,
                    arrival_time=p.arrival_time,
                    burst_time=p.burst_time,
                    start_time=j.start_time,
                    completion_time=j.completion_time,
                    waiting_time=turnaround_time - p.burst_time,
                    turnaround_time=turnaround_time,
                    response_time=j.start_time - p.arrival_time,
                    priority=p.priority,
                )
            )

        result = ScheduleResult(
            algorithm=algorithm,
            quantum=quantum,
            processes=metrics,
            timeline=self.timeline.build(),
            idle_time=self.idle_time,
            context_switches=self.context_switches,
            events=self.events.entries,
        )
        result.system = compute_system_metrics(result)
        return result


def schedule_fcfs(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Equal arrival times keep their input order.
    """
    run = _Run(processes)

    for job in sorted(run.jobs, key=lambda j: j.proc.arrival_time):
        if job.proc.arrival_time > run.time:
            run.idle_until(job.proc.arrival_time)
        run.dispatch(job)
        run.execute(job, job.remaining)

    return run.result("FCFS")


def _run_non_preemptive(run: _Run, key: Callable[[_Job], tuple], detail: Callable[[_Job], str]) -> None:
    while not run.finished():
        ready = run.eligible()
        if not ready:
            run.idle_until(run.next_arrival())
            continue

        # min() keeps the first of equal keys, so input order breaks the last tie.
        job = min(ready, key=key)
        run.dispatch(job, detail(job))
        run.execute(job, job.remaining)


def _run_preemptive(run: _Run, key: Callable[[_Job], tuple]) -> None:
    while not run.finished():
        ready = run.eligible()
        if not ready:
            run.idle_until(run.next_arrival())
            continue

        job = min(ready, key=key)
        run.dispatch(job)
        run.execute(job, 1)


def schedule_sjf(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest burst time (tie-breaker:
    earlier arrival, then input order).
    """
    run = _Run(processes)
    _run_non_preemptive(
        run,
        key=lambda j: (j.proc.burst_time, j.proc.arrival_time),
        detail=lambda j: f" (burst {j.proc.burst_time})",
    )
    return run.result("SJF (non-preemptive)")


def schedule_srtf(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Remaining Time First (preemptive SJF).

    Re-decides every time unit; equal remaining times go to the process
    listed first.
    """
    run = _Run(processes, preemptive=True)
    _run_preemptive(run, key=lambda j: (j.remaining,))
    return run.result("SRTF")


def schedule_priority(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Static Priority scheduling (non-preemptive).

    Lower numeric priority value means higher priority. Among ready
    processes, choose the one with the smallest priority; break ties
    by earlier arrival time, then input order.
    """
    run = _Run(processes)
    _run_non_preemptive(
        run,
        key=lambda j: (j.proc.priority, j.proc.arrival_time),
        detail=lambda j: f" (priority {j.proc.priority})",
    )
    return run.result("Priority (non-preemptive)")


def schedule_priority_preemptive(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Priority scheduling (preemptive).

    Every time unit the whole eligible set is scanned: smallest priority
    wins, then earlier arrival, then input order. The running process gets
    no preference on an exact tie, so such a tie may cost a context switch.
    """
    run = _Run(processes, preemptive=True)
    _run_preemptive(run, key=lambda j: (j.proc.priority, j.proc.arrival_time))
    return run.result("Priority (preemptive)")


def schedule_rr(processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling with a fixed time quantum.
    """
    quantum = validate_quantum(quantum)
    run = _Run(processes)
    ready: Deque[_Job] = deque()

    def enqueue_new_arrivals(current_time: int) -> None:
        arrivals = [j for j in run.jobs if not j.visited and j.proc.arrival_time <= current_time]
        for j in sorted(arrivals, key=lambda j: j.proc.arrival_time):
            j.visited = True
            ready.append(j)
            run.events.emit(current_time, f"Process {j.pid} arrived and joined the ready queue")

    enqueue_new_arrivals(run.time)

    while not run.finished():
        if not ready:
            run.idle_until(min(j.proc.arrival_time for j in run.jobs if not j.visited))
            enqueue_new_arrivals(run.time)
            continue

        job = ready.popleft()
        run.dispatch(job)

        run_time = min(quantum, job.remaining)
        run.events.emit(run.time, f"Executing {job.pid} for {run_time} units")
        # Arrivals during the slice are queued before the process goes back.
        run.execute(job, run_time, on_tick=enqueue_new_arrivals)

        if not job.done:
            ready.append(job)
            run.events.emit(run.time, f"Process {job.pid} time slice expired, re-queued")

    return run.result("Round Robin", quantum=quantum)


ALGORITHMS: Dict[str, Callable[..., ScheduleResult]] = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "srtf": schedule_srtf,
    "priority": schedule_priority,
    "priority_preemptive": schedule_priority_preemptive,
    "rr": schedule_rr,
}

DESCRIPTIONS: Dict[str, str] = {
    "fcfs": "First Come First Serve: runs processes in arrival order. Simple and fair, but prone to the convoy effect.",
    "sjf": "Shortest Job First (non-preemptive): picks the shortest burst. Minimizes average waiting time, may starve long jobs.",
    "srtf": "Shortest Remaining Time First: preemptive SJF, a newcomer with less remaining work takes the CPU.",
    "priority": "Priority (non-preemptive): lower number runs first. Can starve low-priority processes.",
    "priority_preemptive": "Priority (preemptive): a more urgent arrival preempts the running process.",
    "rr": "Round Robin: each process gets a fixed time quantum in cyclic order. Good for time-sharing.",
}

DEFAULT_ALGORITHM = "fcfs"
QUANTUM_ALGORITHMS = {"rr"}


def normalize_name(name: str) -> str:
    return name.strip().lower().replace("-", "_")


def run_algorithm(name: str, processes: Sequence[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm.

    Unknown names fall back to FCFS. The quantum is only used by round robin.
    """
    key = normalize_name(name)
    if key not in ALGORITHMS:
        logger.warning("Unknown algorithm %r, falling back to %s", name, DEFAULT_ALGORITHM.upper())
        key = DEFAULT_ALGORITHM

    func = ALGORITHMS[key]
    if key in QUANTUM_ALGORITHMS:
        return func(processes, quantum=quantum)
    return func(processes)
