from __future__ import annotations

import logging
from typing import Iterator, List

from .models import LogEntry

logger = logging.getLogger(__name__)


class EventLog:
    """
    Append-only, ordered record of what the scheduler did and when.

    Entries are also forwarded to the module logger at DEBUG level so a
    configured handler can follow a run as it happens.
    """

    def __init__(self) -> None:
        self._entries: List[LogEntry] = []

    def emit(self, time: int, message: str) -> None:
        self._entries.append(LogEntry(time=time, message=message))
        logger.debug("[t=%d] %s", time, message)

    @property
    def entries(self) -> List[LogEntry]:
        return list(self._entries)

    def __iter__(self) -> Iterator[LogEntry]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)
