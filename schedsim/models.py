from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Process:
    pid: int
    arrival_time: int
    burst_time: int
    priority: Optional[int] = None


@dataclass
class BurstState:
    """
    Mutable working copy of a process owned by a single algorithm run.

    ``start_time`` stays None until the first dispatch, so a process that
    starts at time 0 is distinguishable from one that has not started.
    """

    process: Process
    remaining: int
    start_time: Optional[int] = None
    completion_time: Optional[int] = None

    @classmethod
    def from_process(cls, process: Process) -> "BurstState":
        return cls(process=process, remaining=process.burst_time)

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def done(self) -> bool:
        return self.remaining == 0


@dataclass
class ScheduledSlice:
    """
    One contiguous slice of execution for a process in the Gantt chart.
    """

    pid: int
    start_time: int
    end_time: int


@dataclass
class ProcessMetrics:
    pid: int
    arrival_time: int
    burst_time: int
    start_time: int
    completion_time: int
    waiting_time: int
    turnaround_time: int
    response_time: int
    priority: Optional[int] = None


@dataclass
class SystemMetrics:
    avg_waiting: float
    avg_turnaround: float
    avg_response: float
    throughput: float
    makespan: int
    cpu_busy_time: int
    cpu_utilization: float


@dataclass
class ScheduleResult:
    algorithm: str
    key: str
    quantum: Optional[int] = None
    processes: List[ProcessMetrics] = field(default_factory=list)
    timeline: List[ScheduledSlice] = field(default_factory=list)
    system: Optional[SystemMetrics] = None
