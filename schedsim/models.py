from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional

# Occupant name used for timeline blocks where the CPU has nothing to run.
IDLE = "IDLE"


@dataclass(frozen=True)
class Process:
    pid: str
    arrival_time: int
    burst_time: int
    priority: int = 0


@dataclass
class TimelineBlock:
    """
    One contiguous interval of the timeline, owned by a process or by IDLE.
    """

    pid: str
    start_time: int
    end_time: int

    @property
    def duration(self) -> int:
        return self.end_time - self.start_time

    @property
    def is_idle(self) -> bool:
        return self.pid == IDLE


@dataclass(frozen=True)
class LogEntry:
    time: int
    message: str


@dataclass
class ProcessMetrics:
    pid: str
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int
    priority: int = 0


@dataclass
class SystemMetrics:
    avg_turnaround: float
    avg_waiting: float
    avg_response: float
    cpu_utilization: float
    cpu_busy_time: int
    makespan: int
    throughput: float
    idle_time: int = 0
    context_switches: int = 0


@dataclass
class ScheduleResult:
    algorithm: str
    quantum: Optional[int]
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[TimelineBlock] = field(default_factory=list)
    idle_time: int = 0
    context_switches: int = 0
    events: List[LogEntry] = field(default_factory=list)
    system: Optional[SystemMetrics] = None

    @property
    def total_elapsed(self) -> int:
        return self.timeline[-1].end_time if self.timeline else 0
