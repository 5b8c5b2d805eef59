from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Dict, Iterable
import json
import csv

from .core import (
    GanttInterval,
    Owner,
    ProcessRecord,
    SchedulingInvariantError,
    Workspace,
)


class GanttRecorder:
    """Append-only log of execution and idle intervals.

    Adjacent entries with the same owner that touch in time are merged, so the
    trace never shows the same owner twice in a row.
    """

    def __init__(self) -> None:
        self._intervals: List[GanttInterval] = []

    def record(self, owner: Owner, start: int, end: int) -> None:
        if end <= start:
            raise ValueError(f"cannot record empty or negative interval [{start}, {end})")
        last = self._intervals[-1] if self._intervals else None
        if last is not None and start < last.end:
            raise ValueError(f"interval [{start}, {end}) starts before previous end {last.end}")
        if last is not None and last.owner == owner and last.end == start:
            self._intervals[-1] = replace(last, end=end)
            return
        self._intervals.append(GanttInterval(owner=owner, start=start, end=end))

    @property
    def intervals(self) -> List[GanttInterval]:
        return list(self._intervals)

    def __len__(self) -> int:
        return len(self._intervals)

    def busy_time_by_owner(self) -> Dict[int, int]:
        busy: Dict[int, int] = {}
        for seg in self._intervals:
            if seg.is_idle:
                continue
            busy[seg.owner] = busy.get(seg.owner, 0) + seg.duration
        return busy

    def _rows(self) -> List[Dict[str, object]]:
        return [
            {"owner": str(seg.owner), "start": seg.start, "end": seg.end}
            for seg in self._intervals
        ]

    def export_json(self, path: str) -> None:
        with open(path, "w", encoding="utf-8") as f:
            json.dump({"timeline": self._rows()}, f, indent=2)

    def export_csv(self, path: str) -> None:
        with open(path, "w", newline="", encoding="utf-8") as f:
            writer = csv.DictWriter(f, fieldnames=["owner", "start", "end"])
            writer.writeheader()
            for row in self._rows():
                writer.writerow(row)


@dataclass(frozen=True)
class MetricsSummary:
    avg_waiting_time: float
    avg_turnaround_time: float


def calculate_metrics(workspace: Workspace) -> MetricsSummary:
    """Average waiting and turnaround time over a fully completed workspace.

    Raises ZeroDivisionError for an empty workspace; callers are expected to
    refuse empty input before getting here.
    """
    total_wt = 0
    total_tat = 0
    for state in workspace:
        if not state.completed:
            raise ValueError(f"P{state.pid} has not completed")
        turnaround = state.turnaround_time
        waiting = state.waiting_time
        if waiting < 0:
            raise SchedulingInvariantError(f"P{state.pid} has negative waiting time {waiting}")
        total_wt += waiting
        total_tat += turnaround

    n = len(workspace)
    return MetricsSummary(avg_waiting_time=total_wt / n, avg_turnaround_time=total_tat / n)


def compute_waiting_times(workspace: Workspace) -> Dict[int, int]:
    return {s.pid: s.waiting_time for s in workspace if s.completed}


def compute_turnaround_times(workspace: Workspace) -> Dict[int, int]:
    return {s.pid: s.turnaround_time for s in workspace if s.completed}


def compute_throughput(workspace: Workspace, total_time: int) -> float:
    if total_time <= 0:
        return 0.0
    return workspace.completed_count() / total_time


def compute_cpu_utilization(intervals: Iterable[GanttInterval]) -> float:
    """Busy share of the traced span, as a percentage."""
    intervals = list(intervals)
    if not intervals:
        return 0.0
    span = intervals[-1].end - intervals[0].start
    busy = sum(seg.duration for seg in intervals if not seg.is_idle)
    return busy / span * 100


def sort_by_arrival(processes: Iterable[ProcessRecord]) -> List[ProcessRecord]:
    return sorted(processes, key=lambda p: p.arrival_time)


def sort_by_burst(processes: Iterable[ProcessRecord]) -> List[ProcessRecord]:
    return sorted(processes, key=lambda p: p.burst_time)


def sort_by_priority(processes: Iterable[ProcessRecord]) -> List[ProcessRecord]:
    """Lower number means more urgent, so it sorts first."""
    return sorted(processes, key=lambda p: p.priority)

