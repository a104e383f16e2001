from __future__ import annotations

from typing import Iterable, List

from .models import IDLE, TimelineBlock


def merge_blocks(blocks: Iterable[TimelineBlock]) -> List[TimelineBlock]:
    """
    Merge consecutive blocks that belong to the same occupant.

    Single pass, returns new block objects and leaves the input untouched.
    Merging an already merged timeline returns an equal timeline.
    """
    merged: List[TimelineBlock] = []
    for block in blocks:
        if merged and merged[-1].pid == block.pid:
            merged[-1].end_time = block.end_time
        else:
            merged.append(TimelineBlock(pid=block.pid, start_time=block.start_time, end_time=block.end_time))
    return merged


class TimelineBuilder:
    """
    Collects raw execution and idle intervals while an algorithm runs.
    """

    def __init__(self) -> None:
        self._blocks: List[TimelineBlock] = []

    def run(self, pid: str, start_time: int, end_time: int) -> None:
        if end_time > start_time:
            self._blocks.append(TimelineBlock(pid=pid, start_time=start_time, end_time=end_time))

    def idle(self, start_time: int, end_time: int) -> None:
        self.run(IDLE, start_time, end_time)

    @property
    def raw(self) -> List[TimelineBlock]:
        return list(self._blocks)

    def build(self) -> List[TimelineBlock]:
        return merge_blocks(self._blocks)
