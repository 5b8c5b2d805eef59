"""
Simulation backend: data model, scheduling policies, loader and renderers.
"""

from .core import IDLE, ProcessRecord, SimState, Workspace, GanttInterval, NoProcessesError, SchedulingInvariantError
from .simulator import simulate, Scheduler, SimulationResult

__all__ = [
    'IDLE',
    'ProcessRecord',
    'SimState',
    'Workspace',
    'GanttInterval',
    'NoProcessesError',
    'SchedulingInvariantError',
    'simulate',
    'Scheduler',
    'SimulationResult',
]
