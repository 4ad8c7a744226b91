from __future__ import annotations

import csv
import json
import logging
from pathlib import Path
from typing import List, Sequence

from .models import Process

logger = logging.getLogger(__name__)


class WorkloadError(ValueError):
    """Raised when a workload file cannot be read or holds a malformed record."""


def load_workload(path: str | Path) -> List[Process]:
    """
    Load a workload from a CSV or JSON file into a list of Process objects.

    CSV files carry no header; each row is ``id,burst,arrival[,priority]``.
    JSON files hold a list of objects with ``pid``, ``burst_time``,
    ``arrival_time`` and an optional ``priority``.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".json":
        loader = _load_json
    elif suffix in {".csv", ".txt", ""}:
        loader = _load_csv
    else:
        raise WorkloadError(f"Unsupported workload format: {suffix} (use .csv or .json)")

    try:
        processes = loader(path)
    except OSError as exc:
        raise WorkloadError(f"Cannot read workload file {path}: {exc}") from exc
    except UnicodeDecodeError as exc:
        raise WorkloadError(f"Cannot decode workload file {path}: {exc}") from exc

    logger.info("Loaded %d processes from %s", len(processes), path)
    return processes


def _load_json(path: Path) -> List[Process]:
    with path.open("r", encoding="utf-8") as f:
        try:
            raw = json.load(f)
        except json.JSONDecodeError as exc:
            raise WorkloadError(f"Invalid JSON in {path}: {exc}") from exc

    if not isinstance(raw, list):
        raise WorkloadError("JSON workload must be a list of process objects")

    return [_process_from_mapping(entry) for entry in raw]


def _load_csv(path: Path) -> List[Process]:
    processes: List[Process] = []
    with path.open("r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f)
        for line_no, row in enumerate(reader, start=1):
            if not any(field.strip() for field in row):
                continue
            processes.append(_process_from_row(row, line_no))
    return processes


def _parse_int(value, field: str, where: str) -> int:
    try:
        return int(str(value).strip())
    except ValueError as exc:
        raise WorkloadError(f"{where}: {field} must be an integer, got {value!r}") from exc


def _process_from_row(row: Sequence[str], line_no: int) -> Process:
    where = f"line {line_no}"
    if len(row) not in (3, 4):
        raise WorkloadError(f"{where}: expected id,burst,arrival[,priority], got {len(row)} fields")

    pid = _parse_int(row[0], "id", where)
    burst_time = _parse_int(row[1], "burst", where)
    arrival_time = _parse_int(row[2], "arrival", where)
    priority = None
    if len(row) == 4 and row[3].strip():
        priority = _parse_int(row[3], "priority", where)

    return Process(pid=pid, arrival_time=arrival_time, burst_time=burst_time, priority=priority)


def _process_from_mapping(mapping) -> Process:
    try:
        where = f"process {mapping['pid']!r}"
        pid = _parse_int(mapping["pid"], "pid", where)
        arrival_time = _parse_int(mapping["arrival_time"], "arrival_time", where)
        burst_time = _parse_int(mapping["burst_time"], "burst_time", where)
    except (KeyError, TypeError) as exc:
        raise WorkloadError(f"Invalid process entry: {mapping!r}") from exc

    priority_val = mapping.get("priority")
    priority = _parse_int(priority_val, "priority", where) if priority_val not in (None, "") else None

    return Process(
        pid=pid,
        arrival_time=arrival_time,
        burst_time=burst_time,
        priority=priority,
    )
