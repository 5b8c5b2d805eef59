"""
Scheduling policies: Round Robin, Modified FCFS with aging, and SJF.
"""

from abc import ABC, abstractmethod
from collections import deque
from dataclasses import dataclass
from typing import Deque, List, Optional, Set
import logging

from .core import IDLE, SchedulingInvariantError, SimState, Workspace
from .utils import GanttRecorder


logger = logging.getLogger(__name__)


class BaseScheduler(ABC):
    """Abstract base class for all schedulers.

    A scheduler drives one run: it owns the workspace and recorder handed to
    `run` until it returns, starting the simulated clock at 0.
    """

    name: str = "base"

    def __init__(self):
        self.current_time: int = 0

    def run(self, workspace: Workspace, recorder: GanttRecorder) -> int:
        """Simulate until every process completes. Returns the final time."""
        self.current_time = 0
        self._run(workspace, recorder)
        if not workspace.all_completed():
            raise SchedulingInvariantError(f"{self.name} finished with unfinished processes")
        logger.info("%s finished %d processes at t=%d", self.name, len(workspace), self.current_time)
        return self.current_time

    @abstractmethod
    def _run(self, workspace: Workspace, recorder: GanttRecorder) -> None:
        pass

    def idle_until_next_arrival(self, workspace: Workspace, recorder: GanttRecorder) -> None:
        """Jump the clock to the next arrival, recording the gap as idle."""
        next_arrival = workspace.next_arrival_after(self.current_time)
        if next_arrival is None:
            raise SchedulingInvariantError(
                f"{self.name}: nothing ready at t={self.current_time} and no future arrivals, "
                f"{len(workspace) - workspace.completed_count()} processes unfinished"
            )
        logger.debug("%s: idle %d -> %d", self.name, self.current_time, next_arrival)
        recorder.record(IDLE, self.current_time, next_arrival)
        self.current_time = next_arrival


class NonPreemptiveScheduler(BaseScheduler):
    """Picks one ready process per decision point and runs its whole burst."""

    def _run(self, workspace: Workspace, recorder: GanttRecorder) -> None:
        while not workspace.all_completed():
            chosen = self.select(workspace.ready(self.current_time))
            if chosen is None:
                self.idle_until_next_arrival(workspace, recorder)
                continue

            start = self.current_time
            end = start + chosen.remaining_time
            logger.debug("%s: t=%d run P%d until %d", self.name, start, chosen.pid, end)
            chosen.run_for(chosen.remaining_time)
            recorder.record(chosen.pid, start, end)
            self.current_time = end
            chosen.complete(end)

    @abstractmethod
    def select(self, ready: List[SimState]) -> Optional[SimState]:
        """Choose among ready states, or return None if there are none."""
        pass


class SJFScheduler(NonPreemptiveScheduler):
    """Shortest Job First: smallest burst wins, earliest arrival breaks ties."""

    name = "SJF"

    def select(self, ready: List[SimState]) -> Optional[SimState]:
        best: Optional[SimState] = None
        for state in ready:
            if best is None or (state.burst_time, state.arrival_time) < (best.burst_time, best.arrival_time):
                best = state
        return best


@dataclass(frozen=True)
class AgingWeights:
    """Weights of the Modified FCFS score."""
    aging: float = 2.0
    burst: float = 0.5
    priority: float = 3.0
    tolerance: float = 0.001

    def __post_init__(self):
        if self.tolerance < 0:
            raise ValueError("tolerance cannot be negative")


class ModifiedFCFSScheduler(NonPreemptiveScheduler):
    """FCFS with aging.

    Each ready process is scored as
        wait * aging - burst * burst_weight - priority * priority_weight
    where wait is the time spent since arrival. The highest score runs to
    completion. Scores within `tolerance` of each other count as equal, and
    then the earlier arrival wins.
    """

    name = "Modified FCFS"

    def __init__(self, weights: Optional[AgingWeights] = None):
        super().__init__()
        self.weights = weights or AgingWeights()

    def score(self, state: SimState) -> float:
        w = self.weights
        wait = self.current_time - state.arrival_time
        return wait * w.aging - state.burst_time * w.burst - state.priority * w.priority

    def select(self, ready: List[SimState]) -> Optional[SimState]:
        best: Optional[SimState] = None
        best_score = 0.0
        for state in ready:
            score = self.score(state)
            if best is None or score > best_score + self.weights.tolerance:
                best, best_score = state, score
            elif abs(score - best_score) <= self.weights.tolerance and state.arrival_time < best.arrival_time:
                best, best_score = state, score
        if best is not None:
            logger.debug("%s: t=%d picked P%d (score %.3f)", self.name, self.current_time, best.pid, best_score)
        return best


class RoundRobinScheduler(BaseScheduler):
    """Round Robin scheduler implementation."""

    name = "Round Robin"

    def __init__(self, time_quantum: int = 2):
        super().__init__()
        if time_quantum <= 0:
            logger.warning("time quantum %s is not positive, using 1", time_quantum)
            time_quantum = 1
        self.time_quantum = time_quantum
        self._queue: Deque[int] = deque()
        self._queued: Set[int] = set()

    def _enqueue(self, index: int) -> None:
        if index not in self._queued:
            self._queue.append(index)
            self._queued.add(index)

    def _admit(self, workspace: Workspace, after: Optional[int], until: int) -> None:
        """Queue processes arriving in (after, until], earliest arrival first."""
        arrived = []
        for index, state in enumerate(workspace):
            if state.completed or state.remaining_time <= 0:
                continue
            if after is not None and state.arrival_time <= after:
                continue
            if state.arrival_time <= until:
                arrived.append(index)
        # workspace order only breaks ties between equal arrivals
        for index in sorted(arrived, key=lambda i: (workspace[i].arrival_time, i)):
            self._enqueue(index)

    def _run(self, workspace: Workspace, recorder: GanttRecorder) -> None:
        self._queue.clear()
        self._queued.clear()

        while not workspace.all_completed():
            self._admit(workspace, None, self.current_time)
            if not self._queue:
                self.idle_until_next_arrival(workspace, recorder)
                continue

            index = self._queue.popleft()
            self._queued.discard(index)
            state = workspace[index]

            start = self.current_time
            run_for = min(state.remaining_time, self.time_quantum)
            state.run_for(run_for)
            recorder.record(state.pid, start, start + run_for)
            self.current_time = start + run_for
            logger.debug("%s: P%d ran [%d, %d), %d left", self.name, state.pid, start, self.current_time, state.remaining_time)

            # arrivals during the slice go ahead of the preempted process
            self._admit(workspace, start, self.current_time)

            if state.remaining_time == 0:
                state.complete(self.current_time)
            else:
                self._enqueue(index)
