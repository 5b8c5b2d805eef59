from __future__ import annotations

import argparse
import logging
import os
from typing import List, Optional

from cpu_scheduling_simulator.backend.os_kernel import OSKernel, KernelConfig
from cpu_scheduling_simulator.backend.schedulers import AgingWeights
from cpu_scheduling_simulator.backend.simulator import Scheduler
from cpu_scheduling_simulator.backend.visualizer import (
    comparison_frame,
    plot_gantt,
    render_gantt_chart,
    render_results_table,
    results_frame,
)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="CPU Scheduling Simulator")
    p.add_argument("--file", required=True, help="Process file, one 'pid,arrival,burst[,priority]' per line")
    p.add_argument("--policy", choices=[*Scheduler.ALL, "ALL"], default="ALL")
    p.add_argument("--quantum", type=int, default=2, help="Round Robin time quantum")
    p.add_argument("--aging-weight", type=float, default=2.0)
    p.add_argument("--burst-weight", type=float, default=0.5)
    p.add_argument("--priority-weight", type=float, default=3.0)
    p.add_argument("--plot", type=str, default=None, help="Save a Gantt plot (one file per policy)")
    p.add_argument("--csv", type=str, default=None, help="Save per-process results as CSV (one file per policy)")
    p.add_argument("--trace-json", type=str, default=None, help="Save the Gantt trace as JSON (one file per policy)")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def per_policy_path(path: str, policy: str, many: bool) -> str:
    if not many:
        return path
    base, ext = os.path.splitext(path)
    return f"{base}_{policy.lower()}{ext}"


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")

    weights = AgingWeights(aging=args.aging_weight, burst=args.burst_weight, priority=args.priority_weight)
    kernel = OSKernel(KernelConfig(time_quantum=args.quantum, weights=weights))
    count = kernel.load(args.file)
    if not count:
        print(f"No processes to schedule in '{args.file}'")
        return 1

    if args.policy == "ALL":
        results = kernel.run_all()
    else:
        results = [kernel.run(args.policy)]
    many = len(results) > 1

    for result in results:
        print(f"\n===== {Scheduler.LABELS[result.policy].upper()} =====\n")
        print(render_gantt_chart(result.gantt))
        print()
        print(render_results_table(result.workspace))

        if args.plot:
            out = per_policy_path(args.plot, result.policy, many)
            plot_gantt(result, out)
            print(f"Saved plot to {out}")
        if args.csv:
            out = per_policy_path(args.csv, result.policy, many)
            results_frame(result.workspace).to_csv(out, index=False)
            print(f"Saved results to {out}")
        if args.trace_json:
            out = per_policy_path(args.trace_json, result.policy, many)
            result.recorder.export_json(out)
            print(f"Saved trace to {out}")

    if many:
        print("\n===== COMPARISON =====")
        print(comparison_frame(results).to_string(float_format=lambda v: f"{v:.2f}"))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
