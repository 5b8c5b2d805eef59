from __future__ import annotations

from typing import List, Optional, Dict, Sequence
import os
import matplotlib.pyplot as plt
import pandas as pd

from .core import GanttInterval, ProcessRecord, Workspace
from .simulator import Scheduler, SimulationResult
from .utils import calculate_metrics


RESULT_COLUMNS = ["PID", "Arrival", "Burst", "Priority", "Completion", "Turnaround", "Waiting"]


def ensure_dir(path: str) -> None:
    directory = os.path.dirname(path)
    if directory:
        os.makedirs(directory, exist_ok=True)


def _block_width(seg: GanttInterval) -> int:
    return max(4, seg.duration * 2)


def render_gantt_chart(intervals: Sequence[GanttInterval]) -> str:
    """ASCII timeline, one block per interval, two columns per time unit."""
    if not intervals:
        return "No Gantt chart data to display."

    widths = [_block_width(seg) for seg in intervals]
    border = " " + "".join("-" * w + " " for w in widths)

    labels = "|"
    for seg, w in zip(intervals, widths):
        if seg.is_idle:
            labels += f"{'IDLE':>{w}}|"
        else:
            labels += f" P{seg.owner:<{w - 2}}|"

    markers = str(intervals[0].start)
    for seg, w in zip(intervals, widths):
        markers += f"{seg.end:>{w + 1}}"

    return "\n".join(["===== GANTT CHART =====", "", border, labels, border, markers])


def _boxed(headers: List[str], widths: List[int], rows: List[List[object]]) -> List[str]:
    rule = "+" + "+".join("-" * (w + 2) for w in widths) + "+"
    head = "|" + "|".join(f" {h:>{w}} " for h, w in zip(headers, widths)) + "|"
    lines = [rule, head, rule]
    for row in rows:
        lines.append("|" + "|".join(f" {v:>{w}} " for v, w in zip(row, widths)) + "|")
    lines.append(rule)
    return lines


def render_results_table(workspace: Workspace) -> str:
    """Per-process results followed by the averages."""
    rows = [
        [s.pid, s.arrival_time, s.burst_time, s.priority, s.completion_time, s.turnaround_time, s.waiting_time]
        for s in workspace
    ]
    lines = _boxed(RESULT_COLUMNS, [3, 8, 5, 8, 10, 10, 8], rows)
    summary = calculate_metrics(workspace)
    lines.append("")
    lines.append(f"Average Waiting Time: {summary.avg_waiting_time:.2f}")
    lines.append(f"Average Turnaround Time: {summary.avg_turnaround_time:.2f}")
    return "\n".join(lines)


def render_process_table(processes: Sequence[ProcessRecord]) -> str:
    if not processes:
        return "No processes loaded."
    rows = [[p.pid, p.arrival_time, p.burst_time, p.priority] for p in processes]
    lines = ["===== LOADED PROCESSES ====="]
    lines += _boxed(RESULT_COLUMNS[:4], [3, 8, 5, 8], rows)
    lines.append(f"Total: {len(processes)} processes")
    return "\n".join(lines)


def results_frame(workspace: Workspace) -> pd.DataFrame:
    rows = [
        [s.pid, s.arrival_time, s.burst_time, s.priority, s.completion_time, s.turnaround_time, s.waiting_time]
        for s in workspace
    ]
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def comparison_frame(results: Sequence[SimulationResult]) -> pd.DataFrame:
    """One row per policy, for side by side comparison after a run-all."""
    df = pd.DataFrame(
        [
            {
                "policy": Scheduler.LABELS.get(r.policy, r.policy),
                "avg_waiting": r.avg_waiting_time,
                "avg_turnaround": r.avg_turnaround_time,
                "throughput": r.throughput,
                "cpu_utilization": r.cpu_utilization,
                "total_time": r.total_time,
            }
            for r in results
        ]
    )
    return df.set_index("policy")


def plot_gantt(result: SimulationResult, out_path: Optional[str] = None) -> None:
    pids = [s.pid for s in result.workspace]
    rows = ["IDLE"] + [f"P{pid}" for pid in pids]
    fig, ax = plt.subplots(figsize=(12, 2 + 0.3 * len(rows)))

    y_positions: Dict[str, int] = {label: i for i, label in enumerate(rows)}
    cmap = plt.get_cmap("tab20")
    pid_to_color = {pid: cmap(i % 20) for i, pid in enumerate(pids)}

    for seg in result.gantt:
        if seg.is_idle:
            ax.barh(y_positions["IDLE"], seg.duration, left=seg.start, color="#dddddd", hatch="//", edgecolor="#777777")
        else:
            ax.barh(y_positions[seg.label], seg.duration, left=seg.start, color=pid_to_color[seg.owner], edgecolor="black", alpha=0.9)

    ax.set_yticks(list(y_positions.values()))
    ax.set_yticklabels(rows)
    ax.invert_yaxis()
    ax.set_xlabel("Time")
    ax.set_title(f"Gantt Chart: {Scheduler.LABELS.get(result.policy, result.policy)}")
    ax.grid(True, axis="x", linestyle=":", alpha=0.5)
    fig.tight_layout()

    if out_path:
        ensure_dir(out_path)
        fig.savefig(out_path, dpi=150)
        plt.close(fig)
    else:
        plt.show()
