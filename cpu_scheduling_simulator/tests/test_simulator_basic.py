import pytest

from cpu_scheduling_simulator.backend.core import IDLE, NoProcessesError, ProcessRecord
from cpu_scheduling_simulator.backend.schedulers import AgingWeights
from cpu_scheduling_simulator.backend.simulator import simulate, Scheduler


MIXED = [
    ProcessRecord(1, 0, 5, 2),
    ProcessRecord(2, 1, 3, 1),
    ProcessRecord(3, 2, 8, 0),
    ProcessRecord(4, 3, 6, 3),
    ProcessRecord(5, 30, 2, 0),
    ProcessRecord(6, 31, 4, 1),
    ProcessRecord(7, 31, 1, 4),
]

RUNS = [
    (Scheduler.SJF, 2),
    (Scheduler.MFCFS, 2),
    (Scheduler.RR, 1),
    (Scheduler.RR, 2),
    (Scheduler.RR, 3),
    (Scheduler.RR, 10),
]


@pytest.fixture(params=RUNS, ids=lambda r: f"{r[0]}-q{r[1]}")
def mixed_result(request):
    policy, quantum = request.param
    return simulate(MIXED, policy=policy, time_quantum=quantum)


def test_trace_is_contiguous_and_coalesced(mixed_result):
    gantt = mixed_result.gantt
    assert gantt[0].start == 0
    for prev, cur in zip(gantt, gantt[1:]):
        assert prev.end == cur.start
        assert prev.owner != cur.owner


def test_trace_conserves_time(mixed_result):
    gantt = mixed_result.gantt
    last_completion = max(s.completion_time for s in mixed_result.workspace)
    assert sum(seg.duration for seg in gantt) == last_completion - gantt[0].start
    assert gantt[-1].end == last_completion == mixed_result.total_time

    busy = mixed_result.recorder.busy_time_by_owner()
    assert busy == {p.pid: p.burst_time for p in MIXED}


def test_every_process_completes(mixed_result):
    for state in mixed_result.workspace:
        assert state.completed
        assert state.remaining_time == 0
        assert state.completion_time >= state.arrival_time + state.burst_time
        assert state.waiting_time >= 0


def test_idle_gap_is_recorded(mixed_result):
    idle = [seg for seg in mixed_result.gantt if seg.owner is IDLE]
    assert [(seg.start, seg.end) for seg in idle] == [(22, 30)]


def test_runs_are_deterministic_and_independent():
    for policy in Scheduler.ALL:
        a = simulate(MIXED, policy=policy, time_quantum=2)
        b = simulate(MIXED, policy=policy, time_quantum=2)
        assert a.gantt == b.gantt
        assert [s.completion_time for s in a.workspace] == [s.completion_time for s in b.workspace]
        assert a.workspace is not b.workspace
    assert MIXED[0] == ProcessRecord(1, 0, 5, 2)


def test_sjf_example_metrics():
    result = simulate([ProcessRecord(1, 0, 5), ProcessRecord(2, 1, 3), ProcessRecord(3, 2, 8)], policy=Scheduler.SJF)
    assert result.waiting_times == {1: 0, 2: 4, 3: 6}
    assert result.turnaround_times == {1: 5, 2: 7, 3: 14}
    assert round(result.avg_waiting_time, 2) == 3.33
    assert result.total_time == 16
    assert result.cpu_utilization == pytest.approx(100.0)
    assert result.time_quantum is None


def test_round_robin_example():
    result = simulate([ProcessRecord(1, 0, 4), ProcessRecord(2, 1, 3)], policy=Scheduler.RR, time_quantum=2)
    assert [(seg.owner, seg.start, seg.end) for seg in result.gantt] == [(1, 0, 2), (2, 2, 4), (1, 4, 6), (2, 6, 7)]
    assert {s.pid: s.completion_time for s in result.workspace} == {1: 6, 2: 7}
    assert result.time_quantum == 2


def test_round_robin_reports_recovered_quantum():
    result = simulate([ProcessRecord(1, 0, 2)], policy=Scheduler.RR, time_quantum=0)
    assert result.time_quantum == 1


def test_weights_reach_modified_fcfs():
    processes = [ProcessRecord(1, 0, 10), ProcessRecord(2, 1, 8), ProcessRecord(3, 2, 1)]
    default = simulate(processes, policy=Scheduler.MFCFS)
    flat = simulate(processes, policy=Scheduler.MFCFS, weights=AgingWeights(burst=0.0))
    assert [seg.owner for seg in default.gantt] == [1, 3, 2]
    assert [seg.owner for seg in flat.gantt] == [1, 2, 3]


@pytest.mark.parametrize("processes", [[], None])
def test_refuses_empty_process_set(processes):
    with pytest.raises(NoProcessesError):
        simulate(processes, policy=Scheduler.SJF)


def test_unknown_policy():
    with pytest.raises(ValueError, match="unknown policy"):
        simulate([ProcessRecord(1, 0, 1)], policy="LOTTERY")


def test_refuses_duplicate_pids():
    with pytest.raises(ValueError, match="duplicate pid"):
        simulate([ProcessRecord(1, 0, 2), ProcessRecord(2, 1, 1), ProcessRecord(1, 3, 1)])
