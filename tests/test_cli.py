import json
from pathlib import Path

import pytest

from schedsim.cli import build_parser, main


@pytest.fixture
def workload(tmp_path: Path) -> Path:
    p = tmp_path / "w.json"
    p.write_text(
        json.dumps(
            [
                {"pid": "P1", "arrival_time": 0, "burst_time": 5, "priority": 2},
                {"pid": "P2", "arrival_time": 1, "burst_time": 3, "priority": 1},
                {"pid": "P3", "arrival_time": 2, "burst_time": 8, "priority": 3},
            ]
        )
    )
    return p


def test_list(capsys):
    assert main(["list"]) == 0
    out = capsys.readouterr().out
    assert "srtf" in out
    assert "rr" in out


def test_run_rr_with_log(workload, capsys):
    assert main(["run", "-a", "rr", "-q", "2", "-w", str(workload), "--log", "--plain"]) == 0
    out = capsys.readouterr().out
    assert "Round Robin" in out
    assert "Quantum: 2" in out
    assert "Event log" in out
    assert "Context switches" in out


def test_run_rr_without_quantum_fails(workload, capsys):
    assert main(["run", "-a", "rr", "-w", str(workload)]) == 2
    assert "quantum" in capsys.readouterr().out


def test_run_missing_workload(tmp_path, capsys):
    assert main(["run", "-a", "fcfs", "-w", str(tmp_path / "missing.json")]) == 2
    assert "Error" in capsys.readouterr().out


def test_compare(workload, capsys):
    assert main(["compare", "-w", str(workload), "-a", "fcfs", "rr", "srtf"]) == 0
    out = capsys.readouterr().out
    assert "FCFS" in out
    assert "SRTF" in out


def test_parser_defaults():
    args = build_parser().parse_args(["compare", "-w", "x.json"])
    assert args.quantum == 2
    assert "priority_preemptive" in args.algorithms


@pytest.mark.parametrize("suffix", [".json", ".csv"])
def test_run_non_utf8_workload(tmp_path, capsys, suffix):
    p = tmp_path / f"w{suffix}"
    p.write_bytes(b"\xff\xfe[]")
    assert main(["run", "-a", "fcfs", "-w", str(p)]) == 2
    assert "Error" in capsys.readouterr().out
