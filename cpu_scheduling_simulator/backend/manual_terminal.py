from __future__ import annotations

import argparse
import logging
from typing import Callable, List, Optional
from colorama import Fore, Style, init as colorama_init

from .core import NoProcessesError
from .os_kernel import OSKernel, KernelConfig
from .simulator import Scheduler, SimulationResult
from .visualizer import comparison_frame, render_gantt_chart, render_process_table, render_results_table


MENU_POLICIES = {
    "1": Scheduler.RR,
    "2": Scheduler.MFCFS,
    "3": Scheduler.SJF,
}


class ManualTerminal:
    def __init__(self, kernel: Optional[OSKernel] = None, input_fn: Optional[Callable[[str], str]] = None) -> None:
        colorama_init(autoreset=True)
        self.kernel = kernel or OSKernel()
        self.input_fn = input_fn or input
        self.last_results: List[SimulationResult] = []

    def prompt(self, path: Optional[str] = None) -> int:
        """Run the menu loop until the user exits. Returns the exit code."""
        self._banner()
        try:
            if path is None:
                path = self.input_fn("\nEnter input filename: ").strip()
            self._load(path)
            while True:
                self._menu()
                choice = self.input_fn("Enter your choice: ").strip()
                if not self.handle_choice(choice):
                    break
        except (EOFError, KeyboardInterrupt):
            print()
        print(Fore.CYAN + "\nExiting program. Goodbye!")
        return 0

    def handle_choice(self, choice: str) -> bool:
        """Act on one menu choice. Returns False when the user asked to exit."""
        if choice in MENU_POLICIES:
            self._run(MENU_POLICIES[choice])
        elif choice == "4":
            self._run_all()
        elif choice == "5":
            print(render_process_table(self.kernel.processes))
        elif choice == "6":
            path = self.input_fn("\nEnter input filename: ").strip()
            self._load(path)
        elif choice == "0":
            return False
        else:
            print(Fore.YELLOW + "\nInvalid choice. Please try again.")
        return True

    def _banner(self) -> None:
        print("=" * 40)
        print(Style.BRIGHT + "     CPU SCHEDULING ALGORITHMS")
        print("=" * 40)

    def _menu(self) -> None:
        print()
        print("=" * 40)
        print(f"[1] Preemptive: {Scheduler.LABELS[Scheduler.RR]} (quantum={self.kernel.config.time_quantum})")
        print(f"[2] Non-preemptive: {Scheduler.LABELS[Scheduler.MFCFS]}")
        print(f"[3] Non-preemptive: {Scheduler.LABELS[Scheduler.SJF]}")
        print("[4] Run All Algorithms")
        print("[5] Display Loaded Processes")
        print("[6] Reload Processes from File")
        print("[0] Exit")
        print("=" * 40)

    def _load(self, path: str) -> None:
        count = self.kernel.load(path)
        if count is None:
            print(Fore.RED + f"\nError: Could not open file '{path}'")
        elif count == 0:
            print(Fore.YELLOW + f"\nWarning: File '{path}' contains no valid process data.")
        else:
            print(Fore.GREEN + f"\nSuccessfully loaded {count} processes from '{path}'")

    def _show(self, result: SimulationResult) -> None:
        print(Style.BRIGHT + f"\n===== {Scheduler.LABELS[result.policy].upper()} =====\n")
        print(render_gantt_chart(result.gantt))
        print()
        print(render_results_table(result.workspace))

    def _run(self, policy: str) -> None:
        try:
            result = self.kernel.run(policy)
        except NoProcessesError:
            print(Fore.YELLOW + "\nError: No processes loaded. Please load processes from file first.")
            return
        self.last_results = [result]
        self._show(result)

    def _run_all(self) -> None:
        try:
            results = self.kernel.run_all()
        except NoProcessesError:
            print(Fore.YELLOW + "\nError: No processes loaded. Please load processes from file first.")
            return
        print(Style.BRIGHT + "\n============ RUNNING ALL ALGORITHMS ============")
        for result in results:
            self._show(result)
            print("\n" + "-" * 48)
        self.last_results = results
        print(Style.BRIGHT + "\n===== COMPARISON =====")
        print(comparison_frame(results).to_string(float_format=lambda v: f"{v:.2f}"))


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Interactive CPU scheduling simulator")
    p.add_argument("file", nargs="?", default=None, help="Process file to load (prompted for if omitted)")
    p.add_argument("--quantum", type=int, default=2, help="Round Robin time quantum")
    p.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return p.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=args.log_level, format="%(levelname)s %(name)s: %(message)s")
    kernel = OSKernel(KernelConfig(time_quantum=args.quantum))
    return ManualTerminal(kernel).prompt(args.file)


if __name__ == "__main__":
    raise SystemExit(main())
