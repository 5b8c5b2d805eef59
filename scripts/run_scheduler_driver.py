from __future__ import annotations
import os, sys
SCRIPT_DIR = os.path.dirname(os.path.abspath(__file__))
PROJECT_ROOT = os.path.abspath(os.path.join(SCRIPT_DIR, os.pardir))
if PROJECT_ROOT not in sys.path:
    sys.path.insert(0, PROJECT_ROOT)

from cpu_scheduling_simulator.backend.core import ProcessRecord
from cpu_scheduling_simulator.backend.simulator import simulate, Scheduler


def make_processes():
    # P6 arrives after everything else has drained, leaving the CPU idle
    return [
        ProcessRecord(pid=1, arrival_time=0, burst_time=8, priority=2),
        ProcessRecord(pid=2, arrival_time=1, burst_time=4, priority=1),
        ProcessRecord(pid=3, arrival_time=2, burst_time=9, priority=3),
        ProcessRecord(pid=4, arrival_time=3, burst_time=5, priority=0),
        ProcessRecord(pid=5, arrival_time=4, burst_time=2, priority=4),
        ProcessRecord(pid=6, arrival_time=35, burst_time=3, priority=1),
    ]


def run():
    procs = make_processes()
    for policy in Scheduler.ALL:
        result = simulate(procs, policy=policy, time_quantum=3)
        print(f'--- {Scheduler.LABELS[policy]} ---')
        for seg in result.gantt:
            print(f'{seg.start:>3} - {seg.end:>3} : {seg.label}')
        for state in result.workspace:
            print(f'PID {state.pid}: waiting={state.waiting_time}, turnaround={state.turnaround_time}, completion={state.completion_time}')
        print(f'avg waiting: {result.avg_waiting_time:.2f}')
        print(f'avg turnaround: {result.avg_turnaround_time:.2f}')
        print()

if __name__ == '__main__':
    run()
