"""
CPU scheduling simulator.
Replays a known set of processes through Round Robin, Modified FCFS with
aging, and SJF, producing Gantt traces and waiting/turnaround metrics.
"""

__version__ = "0.1.0"
