from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Dict, Iterable, List, Optional

from .metrics import compute_system_metrics
from .models import BurstState, Process, ProcessMetrics, ScheduleResult, ScheduledSlice

logger = logging.getLogger(__name__)

DEFAULT_QUANTUM = 1


def validate_processes(processes: Iterable[Process]) -> List[Process]:
    """
    Reject inputs the simulators cannot handle and return them as a list.

    Raises ValueError for an empty set, duplicate PIDs, a burst time that
    is not positive or a negative arrival time.
    """
    processes = list(processes)
    if not processes:
        raise ValueError("No processes to schedule")

    seen: set[int] = set()
    for p in processes:
        if p.pid in seen:
            raise ValueError(f"Duplicate process id {p.pid}")
        seen.add(p.pid)
        if p.burst_time <= 0:
            raise ValueError(f"Process {p.pid}: burst time must be positive, got {p.burst_time}")
        if p.arrival_time < 0:
            raise ValueError(f"Process {p.pid}: arrival time must not be negative, got {p.arrival_time}")

    return processes


def _working_copy(processes: Iterable[Process]) -> List[BurstState]:
    # sorted() is stable, so equal arrivals keep their input order.
    ordered = sorted(validate_processes(processes), key=lambda p: p.arrival_time)
    return [BurstState.from_process(p) for p in ordered]


def _append_slice(timeline: List[ScheduledSlice], pid: int, start: int, end: int) -> None:
    """
    Add a slice, extending the previous one when the same process keeps the
    CPU without a gap.
    """
    if timeline and timeline[-1].pid == pid and timeline[-1].end_time == start:
        timeline[-1].end_time = end
        return
    timeline.append(ScheduledSlice(pid=pid, start_time=start, end_time=end))


def _build_result(
    title: str,
    key: str,
    states: List[BurstState],
    timeline: List[ScheduledSlice],
    quantum: Optional[int] = None,
) -> ScheduleResult:
    metrics: List[ProcessMetrics] = []
    for state in states:
        p = state.process
        turnaround_time = state.completion_time - p.arrival_time
        metrics.append(
            ProcessMetrics(
                pid=p.pid,
                arrival_time=p.arrival_time,
                burst_time=p.burst_time,
                start_time=state.start_time,
                completion_time=state.completion_time,
                # Time spent eligible but not running.
                waiting_time=turnaround_time - p.burst_time,
                turnaround_time=turnaround_time,
                response_time=state.start_time - p.arrival_time,
                priority=p.priority,
            )
        )

    result = ScheduleResult(algorithm=title, key=key, quantum=quantum, processes=metrics, timeline=timeline)
    compute_system_metrics(result)
    return result


def schedule_fcfs(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    First-Come First-Serve (non-preemptive) scheduling.

    Processes run in arrival order; equal arrivals keep their input order.
    """
    states = _working_copy(processes)

    time = 0
    timeline: List[ScheduledSlice] = []

    for state in states:
        p = state.process
        if time < p.arrival_time:
            time = p.arrival_time

        state.start_time = time
        time += state.remaining
        state.remaining = 0
        state.completion_time = time

        timeline.append(ScheduledSlice(pid=p.pid, start_time=state.start_time, end_time=time))
        logger.debug("fcfs: process %s ran %s-%s", p.pid, state.start_time, time)

    return _build_result("First-come, first-serve", "fcfs", states, timeline)


def schedule_sjf(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Shortest Job First (non-preemptive).

    At each decision point, among processes that have arrived and are not yet
    completed, choose the one with the smallest full burst time. Ties go to
    the earliest in arrival order. The chosen process runs to completion.
    """
    states = _working_copy(processes)

    time = 0
    timeline: List[ScheduledSlice] = []
    completed = 0

    while completed < len(states):
        ready = [s for s in states if s.process.arrival_time <= time and not s.done]

        if not ready:
            # Idle unit.
            time += 1
            continue

        # min() keeps the first of equal keys.
        current = min(ready, key=lambda s: s.process.burst_time)

        current.start_time = time
        time += current.remaining
        current.remaining = 0
        current.completion_time = time
        completed += 1

        timeline.append(ScheduledSlice(pid=current.pid, start_time=current.start_time, end_time=time))
        logger.debug("sjf: process %s ran %s-%s", current.pid, current.start_time, time)

    return _build_result("Shortest-job-first", "sjf", states, timeline)


def schedule_priority(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    The "Priority" discipline: preemptive shortest remaining time.

    Every time unit the arrived, unfinished process with the least remaining
    burst gets the CPU (ties: earliest in arrival order). The ``priority``
    field is carried through to the report but never used for selection.
    """
    states = _working_copy(processes)

    time = 0
    timeline: List[ScheduledSlice] = []
    completed = 0

    while completed < len(states):
        ready = [s for s in states if s.process.arrival_time <= time and not s.done]

        if not ready:
            time += 1
            continue

        current = min(ready, key=lambda s: s.remaining)

        if current.start_time is None:
            current.start_time = time
            logger.debug("priority: process %s first dispatched at %s", current.pid, time)

        _append_slice(timeline, current.pid, time, time + 1)
        current.remaining -= 1
        time += 1

        if current.done:
            current.completion_time = time
            completed += 1
            logger.debug("priority: process %s completed at %s", current.pid, time)

    return _build_result("Priority", "priority", states, timeline)


def schedule_rr(processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Round Robin scheduling, one time unit per turn unless told otherwise.

    Processes join the tail of the ready queue when their arrival time is
    reached. Arrivals during a turn are queued ahead of the process whose
    turn just ended.
    """
    if quantum is None:
        quantum = DEFAULT_QUANTUM
    if quantum <= 0:
        raise ValueError(f"Round Robin requires a positive quantum, got {quantum}")

    states = _working_copy(processes)
    pending: Deque[BurstState] = deque(states)
    ready: Deque[BurstState] = deque()

    def admit_arrivals(current_time: int) -> None:
        while pending and pending[0].process.arrival_time <= current_time:
            ready.append(pending.popleft())

    time = 0
    timeline: List[ScheduledSlice] = []
    completed = 0

    admit_arrivals(time)

    while completed < len(states):
        if not ready:
            time += 1
            admit_arrivals(time)
            continue

        current = ready.popleft()

        if current.start_time is None:
            current.start_time = time

        run_time = min(quantum, current.remaining)
        _append_slice(timeline, current.pid, time, time + run_time)
        time += run_time
        current.remaining -= run_time

        admit_arrivals(time)

        if current.done:
            current.completion_time = time
            completed += 1
            logger.debug("rr: process %s completed at %s", current.pid, time)
        else:
            ready.append(current)

    return _build_result("Round-robin", "rr", states, timeline, quantum=quantum)


# Insertion order is the order reports are produced in.
ALGORITHMS = {
    "fcfs": schedule_fcfs,
    "sjf": schedule_sjf,
    "priority": schedule_priority,
    "rr": schedule_rr,
}

DEFAULT_ORDER = list(ALGORITHMS)


def run_algorithm(name: str, processes: List[Process], quantum: Optional[int] = None) -> ScheduleResult:
    """
    Dispatch to the requested algorithm. Quantum only affects round-robin.
    """
    name = name.lower()
    if name not in ALGORITHMS:
        raise ValueError(f"Unknown algorithm '{name}' (choose from {', '.join(ALGORITHMS)})")

    func = ALGORITHMS[name]
    logger.info("Running %s on %d processes", name, len(processes))
    return func(processes, quantum=quantum)


def run_all(
    processes: List[Process],
    names: Optional[Iterable[str]] = None,
    quantum: Optional[int] = None,
) -> Dict[str, ScheduleResult]:
    """
    Run several algorithms on the same input. Each run builds its own
    working state, so no run sees another's progress.
    """
    names = DEFAULT_ORDER if names is None else list(names)
    return {name.lower(): run_algorithm(name, processes, quantum=quantum) for name in names}
