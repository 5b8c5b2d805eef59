"""
Core data structures for the CPU scheduling simulator.
Includes the immutable process records, per-run simulation state,
the workspace that owns it, and Gantt intervals.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Iterator, List, Optional, Union


class SchedulingInvariantError(RuntimeError):
    """A scheduling policy broke one of its own guarantees."""


class NoProcessesError(ValueError):
    """Raised when a simulation is requested without any processes."""


class Idle(Enum):
    """Owner marker for intervals where the CPU had nothing to run."""
    IDLE = "IDLE"

    def __str__(self) -> str:
        return self.value


IDLE = Idle.IDLE

Owner = Union[int, Idle]


@dataclass(frozen=True)
class ProcessRecord:
    """A process as loaded from input. Never mutated by a simulation."""
    pid: int
    arrival_time: int
    burst_time: int
    priority: int = 0

    def __post_init__(self):
        if self.pid <= 0:
            raise ValueError(f"pid must be positive, got {self.pid}")
        if self.arrival_time < 0:
            raise ValueError(f"arrival_time cannot be negative, got {self.arrival_time}")
        if self.burst_time <= 0:
            raise ValueError(f"burst_time must be strictly positive, got {self.burst_time}")


@dataclass
class SimState:
    """Mutable bookkeeping for one process during one simulation run."""
    process: ProcessRecord
    remaining_time: Optional[int] = None
    started: bool = False
    completed: bool = False
    completion_time: Optional[int] = None

    def __post_init__(self):
        self.remaining_time = self.process.burst_time if self.remaining_time is None else self.remaining_time

    @property
    def pid(self) -> int:
        return self.process.pid

    @property
    def arrival_time(self) -> int:
        return self.process.arrival_time

    @property
    def burst_time(self) -> int:
        return self.process.burst_time

    @property
    def priority(self) -> int:
        return self.process.priority

    @property
    def turnaround_time(self) -> Optional[int]:
        if self.completion_time is None:
            return None
        return self.completion_time - self.arrival_time

    @property
    def waiting_time(self) -> Optional[int]:
        turnaround = self.turnaround_time
        if turnaround is None:
            return None
        return turnaround - self.burst_time

    def is_ready(self, now: int) -> bool:
        """Arrived, unfinished and still holding work at time `now`."""
        return not self.completed and self.arrival_time <= now and self.remaining_time > 0

    def run_for(self, delta: int) -> None:
        """Consume `delta` units of CPU time."""
        if delta <= 0 or delta > self.remaining_time:
            raise SchedulingInvariantError(
                f"P{self.pid}: cannot run {delta} with {self.remaining_time} remaining"
            )
        self.started = True
        self.remaining_time -= delta

    def complete(self, now: int) -> None:
        """Latch completion at time `now`."""
        if self.completed or self.remaining_time != 0:
            raise SchedulingInvariantError(f"P{self.pid}: invalid completion at t={now}")
        self.completed = True
        self.completion_time = now


class Workspace:
    """Per-run working copy of a process set.

    A workspace is created fresh for every simulation and owned by exactly one
    scheduler invocation, so runs never see each other's side effects.
    """

    def __init__(self, states: List[SimState]):
        self._states = states

    @classmethod
    def from_processes(cls, processes: Iterable[ProcessRecord]) -> "Workspace":
        return cls([SimState(process=p) for p in processes])

    def __len__(self) -> int:
        return len(self._states)

    def __iter__(self) -> Iterator[SimState]:
        return iter(self._states)

    def __getitem__(self, index: int) -> SimState:
        return self._states[index]

    @property
    def states(self) -> List[SimState]:
        return list(self._states)

    def ready(self, now: int) -> List[SimState]:
        """States eligible to run at `now`, in workspace order."""
        return [s for s in self._states if s.is_ready(now)]

    def next_arrival_after(self, now: int) -> Optional[int]:
        """Earliest arrival strictly after `now` among unfinished processes."""
        future = [s.arrival_time for s in self._states if not s.completed and s.arrival_time > now]
        if not future:
            return None
        return min(future)

    def completed_count(self) -> int:
        return sum(1 for s in self._states if s.completed)

    def all_completed(self) -> bool:
        return self.completed_count() == len(self._states)

    def by_pid(self, pid: int) -> SimState:
        for state in self._states:
            if state.pid == pid:
                return state
        raise KeyError(pid)


@dataclass(frozen=True)
class GanttInterval:
    """One contiguous block of the Gantt trace."""
    owner: Owner
    start: int
    end: int

    def __post_init__(self):
        if self.end <= self.start:
            raise ValueError(f"interval must have end > start, got [{self.start}, {self.end})")

    @property
    def duration(self) -> int:
        return self.end - self.start

    @property
    def is_idle(self) -> bool:
        return self.owner is IDLE

    @property
    def label(self) -> str:
        return "IDLE" if self.is_idle else f"P{self.owner}"
