from pathlib import Path

import pytest

from schedsim.errors import WorkloadFormatError
from schedsim.workload_io import load_workload
from schedsim.models import Process


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":"A","arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":"B","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[0].priority == 1
    assert procs[1].priority == 0
    assert procs[1].arrival_time == 1


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time,priority\nA,0,3,1\nB,1,2,\n")
    procs = load_workload(p)
    assert procs[0].pid == "A"
    assert procs[1].priority == 0


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.txt"
    p.write_text("A 0 3")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


@pytest.mark.parametrize(
    "text",
    [
        '{"pid": "A"}',
        '[{"pid": "A", "arrival_time": 0}]',
        '[{"pid": "A", "arrival_time": "soon", "burst_time": 2}]',
        "[1, 2]",
        "not json",
        '[{"pid": "A", "arrival_time": 0.9, "burst_time": 2.7}]',
        '[{"pid": "A", "arrival_time": 0, "burst_time": true}]',
        '[{"pid": "A", "arrival_time": 0, "burst_time": 2, "priority": 1.5}]',
    ],
)
def test_bad_json(tmp_path: Path, text):
    p = tmp_path / "w.json"
    p.write_text(text)
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


def test_json_whole_number_floats_accepted(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid": "A", "arrival_time": 1.0, "burst_time": 3}]')
    assert load_workload(p) == [Process("A", arrival_time=1, burst_time=3, priority=0)]


def test_csv_fraction_rejected(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("pid,arrival_time,burst_time\nA,0,2.7\n")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)


@pytest.mark.parametrize("suffix", [".json", ".csv"])
def test_non_utf8_file(tmp_path: Path, suffix):
    p = tmp_path / f"w{suffix}"
    p.write_bytes(b"\xff\xfe[]")
    with pytest.raises(WorkloadFormatError):
        load_workload(p)
