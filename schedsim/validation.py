from __future__ import annotations

from typing import Optional, Sequence

from .errors import InvalidInputError, InvalidQuantumError
from .models import IDLE, Process


def _is_int(value) -> bool:
    # bool is an int subclass but never a sensible time or priority.
    return isinstance(value, int) and not isinstance(value, bool)


def validate_processes(processes: Sequence[Process]) -> None:
    """
    Reject process lists the engine cannot simulate.

    Raises InvalidInputError on the first problem found; nothing is
    simulated for an invalid list.
    """
    if not processes:
        raise InvalidInputError("No processes to run")

    seen: set[str] = set()
    for p in processes:
        if not p.pid:
            raise InvalidInputError("Process ID must not be empty")
        if p.pid == IDLE:
            raise InvalidInputError(f"Process ID '{IDLE}' is reserved for idle time")
        if p.pid in seen:
            raise InvalidInputError(f"Process ID must be unique: '{p.pid}'")
        seen.add(p.pid)

        for name in ("arrival_time", "burst_time", "priority"):
            if not _is_int(getattr(p, name)):
                raise InvalidInputError(f"{p.pid}: {name} must be an integer")

        if p.arrival_time < 0:
            raise InvalidInputError(f"{p.pid}: arrival time must be >= 0")
        if p.burst_time < 1:
            raise InvalidInputError(f"{p.pid}: burst time must be > 0")
        if p.priority < 0:
            raise InvalidInputError(f"{p.pid}: priority must be >= 0")


def validate_quantum(quantum: Optional[int]) -> int:
    if quantum is None or not _is_int(quantum) or quantum <= 0:
        raise InvalidQuantumError(
            f"Round Robin requires a positive integer quantum, got {quantum!r} (use --quantum)"
        )
    return quantum
