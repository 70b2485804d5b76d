"""
Input/Output operations for the placement simulation.

This module handles reading the process workload (whitespace-separated
triples or CSV) and rendering event snapshots and the final summary as
line-oriented text.
"""

import csv
from typing import Dict, Iterable, List, TextIO
from .models import Process, Snapshot


def _make_process(pid: int, arrival: int, size: int, service: int) -> Process:
    if arrival < 0:
        raise ValueError(f"Process {pid}: arrival time must be non-negative, got {arrival}")
    if size < 1:
        raise ValueError(f"Process {pid}: size must be positive, got {size}")
    if service < 1:
        raise ValueError(f"Process {pid}: service time must be positive, got {service}")
    return Process(pid=pid, arrival=arrival, size=size, service=service)


def read_workload(stream: TextIO, n: int) -> List[Process]:
    """
    Read exactly `n` processes from a text stream.

    Each process is three integers: arrival time, size and service time,
    separated by any whitespace. Process ids are assigned 0..n-1 in input
    order. Anything after the n-th triple is ignored.

    Args:
        stream: Text stream to read from (typically stdin)
        n: Number of processes expected

    Returns:
        List[Process]: Processes in pid order

    Raises:
        ValueError: If the input is short or holds an invalid value
    """
    tokens = _tokens(stream)
    processes = []

    for pid in range(n):
        values = []
        for _ in range(3):
            token = next(tokens, None)
            if token is None:
                raise ValueError(f"Expected {n} processes, input ended at process {pid}")
            try:
                values.append(int(token))
            except ValueError:
                raise ValueError(f"Invalid integer {token!r} for process {pid}")
        processes.append(_make_process(pid, *values))

    return processes


def _tokens(stream: TextIO) -> Iterable[str]:
    for line in stream:
        yield from line.split()


def read_processes_csv(path: str) -> List[Process]:
    """
    Read process data from a CSV file.

    Expected CSV format with header: arrival,size,service
    Process ids are assigned 0..N-1 in file order.

    Args:
        path: Path to the CSV file

    Returns:
        List[Process]: List of Process objects in pid order
    """
    processes = []

    try:
        with open(path, 'r', newline='', encoding='utf-8') as csvfile:
            reader = csv.DictReader(csvfile)

            for pid, row in enumerate(reader):
                process = _make_process(
                    pid,
                    int(row['arrival']),
                    int(row['size']),
                    int(row['service'])
                )
                processes.append(process)

    except FileNotFoundError:
        raise FileNotFoundError(f"CSV file not found: {path}")
    except KeyError as e:
        raise ValueError(f"Missing required column in CSV: {e}")
    except (TypeError, ValueError) as e:
        raise ValueError(f"Invalid data in CSV file: {e}")

    return processes


def format_snapshot(snapshot: Snapshot) -> str:
    """
    Render an event snapshot in the event-log text format.

    Args:
        snapshot: Snapshot emitted by the simulator

    Returns:
        str: Three lines (time/event, memory, waiting) and a blank line
    """
    header = f"Time: {snapshot.time} {snapshot.event.value}"
    if snapshot.pid is not None:
        header += f":P{snapshot.pid}"

    memory = "".join(
        f"->[{'H' if pid is None else f'P{pid}'},{start},{size}]"
        for pid, start, size in snapshot.segments
    )
    waiting = "".join(
        f"(P{pid},{arrival},{size},{remaining}) "
        for pid, arrival, size, remaining in snapshot.waiting
    )

    lines = [
        header,
        f"  Memory [PID,start,size]: {memory}",
        f"  Waiting (PID,arrival,size,t): {waiting}",
        "",
    ]
    return "\n".join(lines)


def format_summary(summary: Dict) -> str:
    """
    Render the final totals of a simulation run.

    Args:
        summary: Dictionary returned by MemorySimulator.finalizar()

    Returns:
        str: Summary block
    """
    lines = [
        f"Using the {summary['algorithm']} algorithm",
        f"\tTotal unserviced time is {summary['unserviced']}",
        f"\tTotal service required is {summary['required_service']}",
        f"\tPercent unserviced is {summary['percent_unserviced']}%",
    ]
    return "\n".join(lines)
