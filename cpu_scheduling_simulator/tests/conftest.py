import os
import sys

import matplotlib
import pytest

# plots are written to files in tests, never shown
matplotlib.use("Agg")


def pytest_sessionstart(session):
    # Ensure repository root is on sys.path so 'cpu_scheduling_simulator' can be imported
    here = os.path.dirname(os.path.abspath(__file__))
    project_root = os.path.abspath(os.path.join(here, os.pardir, os.pardir))
    if project_root not in sys.path:
        sys.path.insert(0, project_root)


@pytest.fixture
def write_process_file(tmp_path):
    """Write lines to a process file and return its path."""
    def _write(lines, name="processes.txt"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)
    return _write
