from __future__ import annotations

from typing import List, Optional
from dataclasses import dataclass, field
import logging

from .core import NoProcessesError, ProcessRecord
from .loader import MAX_PROCESSES, read_processes_from_file
from .schedulers import AgingWeights
from .simulator import simulate, Scheduler, SimulationResult
from .utils import sort_by_arrival


logger = logging.getLogger(__name__)


@dataclass
class KernelConfig:
    time_quantum: int = 2
    weights: AgingWeights = field(default_factory=AgingWeights)
    max_processes: int = MAX_PROCESSES

    def __post_init__(self):
        if self.max_processes <= 0:
            raise ValueError("max_processes must be strictly positive")


class OSKernel:
    """Holds the loaded process set and runs policies against it.

    Every run works on its own copy of the loaded records, so policies can be
    run in any order or repeatedly with identical results.
    """

    def __init__(self, config: KernelConfig | None = None, processes: Optional[List[ProcessRecord]] = None):
        self.config = config or KernelConfig()
        self.processes: List[ProcessRecord] = sort_by_arrival(processes or [])
        self.source: Optional[str] = None

    def load(self, path: str) -> Optional[int]:
        """Replace the loaded set with the contents of `path`.

        Returns the number of processes loaded, or None if the file could not
        be read. Either way the previous set is discarded.
        """
        procs = read_processes_from_file(path, max_processes=self.config.max_processes)
        self.source = path
        if procs is None:
            self.processes = []
            return None
        self.processes = sort_by_arrival(procs)
        return len(self.processes)

    @property
    def has_processes(self) -> bool:
        return bool(self.processes)

    def run(self, policy: str) -> SimulationResult:
        if not self.processes:
            raise NoProcessesError("no processes loaded")
        return simulate(
            self.processes,
            policy=policy,
            time_quantum=self.config.time_quantum,
            weights=self.config.weights,
        )

    def run_all(self) -> List[SimulationResult]:
        if not self.processes:
            raise NoProcessesError("no processes loaded")
        logger.info("running %s on %d processes", ", ".join(Scheduler.ALL), len(self.processes))
        return [self.run(policy) for policy in Scheduler.ALL]
