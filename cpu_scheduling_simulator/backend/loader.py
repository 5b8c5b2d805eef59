"""
Reads process definitions from a text file.

One process per line: ``pid,arrival_time,burst_time[,priority]``.
Priority defaults to 0. Header lines, comments and anything else that does
not start with three integer fields are skipped.
"""

from __future__ import annotations

from typing import List, Optional, Set
import logging

from .core import ProcessRecord


logger = logging.getLogger(__name__)

MAX_PROCESSES = 100


def parse_line(line: str) -> Optional[List[int]]:
    """Leading integer fields of a line, or None if there are fewer than three."""
    values: List[int] = []
    for field in line.split(",")[:4]:
        try:
            values.append(int(field.strip()))
        except ValueError:
            break
    if len(values) < 3:
        return None
    return values


def read_processes_from_file(path: str, max_processes: int = MAX_PROCESSES) -> Optional[List[ProcessRecord]]:
    """Load up to `max_processes` records in file order.

    Returns None if the file cannot be read, and an empty list if it was read
    but held no valid records.
    """
    try:
        with open(path, encoding="utf-8") as f:
            lines = f.readlines()
    except (OSError, UnicodeDecodeError) as e:
        logger.error("could not open %r: %s", path, e)
        return None

    procs: List[ProcessRecord] = []
    seen: Set[int] = set()
    for lineno, raw in enumerate(lines, start=1):
        if len(procs) >= max_processes:
            logger.warning("%s: stopped at %d processes, remaining lines ignored", path, max_processes)
            break
        line = raw.strip()
        if not line or line.startswith("#"):
            continue
        values = parse_line(line)
        if values is None:
            logger.debug("%s:%d: skipping malformed line %r", path, lineno, line)
            continue
        pid, arrival, burst = values[:3]
        priority = values[3] if len(values) > 3 else 0
        if pid in seen:
            logger.warning("%s:%d: duplicate pid %d skipped", path, lineno, pid)
            continue
        try:
            proc = ProcessRecord(pid=pid, arrival_time=arrival, burst_time=burst, priority=priority)
        except ValueError as e:
            logger.warning("%s:%d: %s", path, lineno, e)
            continue
        seen.add(pid)
        procs.append(proc)

    logger.info("loaded %d processes from %s", len(procs), path)
    return procs
