from schedsim.models import IDLE, TimelineBlock
from schedsim.timeline import TimelineBuilder, merge_blocks


def _blocks(*spans):
    return [TimelineBlock(pid, start, end) for pid, start, end in spans]


def _spans(blocks):
    return [(b.pid, b.start_time, b.end_time) for b in blocks]


def test_merge_adjacent_same_occupant():
    raw = _blocks(("P1", 0, 1), ("P1", 1, 2), ("P2", 2, 3), ("P1", 3, 4), ("P1", 4, 6))
    merged = merge_blocks(raw)
    assert _spans(merged) == [("P1", 0, 2), ("P2", 2, 3), ("P1", 3, 6)]
    assert merged[-1].duration == 3


def test_merge_is_idempotent_and_leaves_input_alone():
    raw = _blocks((IDLE, 0, 1), (IDLE, 1, 3), ("A", 3, 4), ("A", 4, 5))
    once = merge_blocks(raw)
    twice = merge_blocks(once)
    assert twice == once
    assert _spans(raw)[0] == (IDLE, 0, 1)
    assert len(raw) == 4


def test_merge_empty():
    assert merge_blocks([]) == []


def test_builder_skips_empty_intervals():
    builder = TimelineBuilder()
    builder.idle(0, 0)
    builder.run("P1", 0, 2)
    builder.run("P1", 2, 3)
    builder.idle(3, 5)
    assert len(builder.raw) == 3
    built = builder.build()
    assert _spans(built) == [("P1", 0, 3), (IDLE, 3, 5)]
    assert built[1].is_idle
