import pytest

from cpu_scheduling_simulator.backend.manual_terminal import ManualTerminal, main
from cpu_scheduling_simulator.backend.os_kernel import OSKernel


def scripted(*answers):
    """input() replacement that replays answers, then raises EOFError."""
    it = iter(answers)

    def _input(prompt=""):
        try:
            return next(it)
        except StopIteration:
            raise EOFError
    return _input


@pytest.fixture
def process_file(write_process_file):
    return write_process_file(["1,0,5,0", "2,1,3,0", "3,2,8,0"])


def test_menu_session(process_file, capsys):
    terminal = ManualTerminal(OSKernel(), input_fn=scripted(process_file, "3", "5", "9", "0"))
    assert terminal.prompt() == 0

    out = capsys.readouterr().out
    assert "Successfully loaded 3 processes" in out
    assert "SHORTEST JOB FIRST" in out
    assert "GANTT CHART" in out
    assert "Average Waiting Time: 3.33" in out
    assert "LOADED PROCESSES" in out
    assert "Invalid choice" in out
    assert "Goodbye" in out
    assert [r.policy for r in terminal.last_results] == ["SJF"]


def test_run_all_prints_comparison(process_file, capsys):
    terminal = ManualTerminal(OSKernel(), input_fn=scripted("4", "0"))
    terminal.prompt(process_file)

    out = capsys.readouterr().out
    assert "RUNNING ALL ALGORITHMS" in out
    assert "ROUND ROBIN" in out
    assert "MODIFIED FCFS WITH AGING" in out
    assert "COMPARISON" in out
    assert len(terminal.last_results) == 3


def test_empty_file_warns_and_refuses(write_process_file, capsys):
    path = write_process_file(["not,a,process"])
    terminal = ManualTerminal(OSKernel(), input_fn=scripted("1", "4", "0"))
    terminal.prompt(path)

    out = capsys.readouterr().out
    assert "contains no valid process data" in out
    assert out.count("No processes loaded") == 2
    assert "GANTT CHART" not in out
    assert terminal.last_results == []


def test_reload_from_new_file(tmp_path, process_file, write_process_file, capsys):
    other = write_process_file(["9,0,1"], name="other.txt")
    terminal = ManualTerminal(OSKernel(), input_fn=scripted("6", str(tmp_path / "missing.txt"), "6", other, "0"))
    terminal.prompt(process_file)

    out = capsys.readouterr().out
    assert "Could not open file" in out
    assert [p.pid for p in terminal.kernel.processes] == [9]


def test_eof_exits_cleanly(process_file):
    terminal = ManualTerminal(OSKernel(), input_fn=scripted())
    assert terminal.prompt(process_file) == 0


def test_main_uses_quantum_flag(process_file, monkeypatch, capsys):
    monkeypatch.setattr("builtins.input", scripted("1", "0"))
    assert main([process_file, "--quantum", "3"]) == 0
    assert "quantum=3" in capsys.readouterr().out
