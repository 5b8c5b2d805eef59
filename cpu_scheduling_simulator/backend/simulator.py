from __future__ import annotations

from typing import List, Optional, Dict, Sequence
from dataclasses import dataclass
import logging

from .core import GanttInterval, NoProcessesError, ProcessRecord, Workspace
from .schedulers import (
    AgingWeights,
    BaseScheduler,
    ModifiedFCFSScheduler,
    RoundRobinScheduler,
    SJFScheduler,
)
from .utils import (
    GanttRecorder,
    calculate_metrics,
    compute_cpu_utilization,
    compute_throughput,
    compute_turnaround_times,
    compute_waiting_times,
)


logger = logging.getLogger(__name__)


@dataclass
class SimulationResult:
    policy: str
    workspace: Workspace
    recorder: GanttRecorder
    total_time: int
    waiting_times: Dict[int, int]
    turnaround_times: Dict[int, int]
    avg_waiting_time: float
    avg_turnaround_time: float
    throughput: float
    cpu_utilization: float
    time_quantum: Optional[int] = None

    @property
    def gantt(self) -> List[GanttInterval]:
        return self.recorder.intervals


class Scheduler:
    RR = "RR"         # preemptive, time sliced
    MFCFS = "MFCFS"   # non-preemptive FCFS with aging
    SJF = "SJF"       # non-preemptive

    ALL = (RR, MFCFS, SJF)

    LABELS = {
        RR: "Round Robin",
        MFCFS: "Modified FCFS with Aging",
        SJF: "Shortest Job First",
    }


def make_scheduler(policy: str, time_quantum: int = 2, weights: Optional[AgingWeights] = None) -> BaseScheduler:
    if policy == Scheduler.RR:
        return RoundRobinScheduler(time_quantum=time_quantum)
    if policy == Scheduler.MFCFS:
        return ModifiedFCFSScheduler(weights=weights)
    if policy == Scheduler.SJF:
        return SJFScheduler()
    raise ValueError(f"unknown policy {policy!r}, expected one of {', '.join(Scheduler.ALL)}")


def simulate(
    processes: Optional[Sequence[ProcessRecord]],
    policy: str = Scheduler.RR,
    time_quantum: int = 2,
    weights: Optional[AgingWeights] = None,
) -> SimulationResult:
    """Run one policy over a fresh copy of `processes`.

    The process records are never modified, so the same list can be passed
    to any number of runs.
    """
    if not processes:
        raise NoProcessesError("no processes to schedule")
    pids = [p.pid for p in processes]
    if len(set(pids)) != len(pids):
        repeated = sorted({pid for pid in pids if pids.count(pid) > 1})
        raise ValueError(f"duplicate pid(s) {repeated}, each process needs its own pid")

    scheduler = make_scheduler(policy, time_quantum=time_quantum, weights=weights)
    workspace = Workspace.from_processes(processes)
    recorder = GanttRecorder()

    total_time = scheduler.run(workspace, recorder)
    summary = calculate_metrics(workspace)
    gantt = recorder.intervals

    logger.info(
        "%s: avg waiting %.2f, avg turnaround %.2f over %d processes",
        Scheduler.LABELS[policy], summary.avg_waiting_time, summary.avg_turnaround_time, len(workspace),
    )

    return SimulationResult(
        policy=policy,
        workspace=workspace,
        recorder=recorder,
        total_time=total_time,
        waiting_times=compute_waiting_times(workspace),
        turnaround_times=compute_turnaround_times(workspace),
        avg_waiting_time=summary.avg_waiting_time,
        avg_turnaround_time=summary.avg_turnaround_time,
        throughput=compute_throughput(workspace, total_time),
        cpu_utilization=compute_cpu_utilization(gantt),
        time_quantum=scheduler.time_quantum if isinstance(scheduler, RoundRobinScheduler) else None,
    )
