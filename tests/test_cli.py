from pathlib import Path

import pytest

from schedsim.cli import main


@pytest.fixture
def workload(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.setenv("COLUMNS", "200")
    p = tmp_path / "procs.csv"
    p.write_text("1,5,0,2\n2,3,1,1\n3,1,2,3\n")
    return p


def test_run_plain_prints_every_algorithm(workload, capsys):
    assert main(["run", str(workload), "--plain"]) == 0
    out = capsys.readouterr().out
    for title in ("First-come, first-serve", "Shortest-job-first", "Priority", "Round-robin"):
        assert title in out
    assert out.count("Gantt schedule") == 4


def test_run_selected_algorithm(workload, capsys):
    assert main(["run", str(workload), "-a", "rr"]) == 0
    out = capsys.readouterr().out
    assert "Round-robin" in out
    assert "Shortest-job-first" not in out


def test_run_with_step_playback(workload, capsys):
    assert main(["run", str(workload), "-a", "fcfs", "--step", "--step-delay", "0"]) == 0
    out = capsys.readouterr().out
    assert "t= 0: 1" in out
    assert "t= 8: 3" in out


def test_compare(workload, capsys):
    assert main(["compare", str(workload)]) == 0
    out = capsys.readouterr().out
    assert "Algorithm comparison" in out
    assert "Round-robin" in out


def test_missing_workload_fails(tmp_path: Path):
    assert main(["run", str(tmp_path / "missing.csv")]) == 1


def test_malformed_workload_fails(tmp_path: Path):
    p = tmp_path / "bad.csv"
    p.write_text("1,x,0\n")
    assert main(["run", str(p)]) == 1


def test_zero_burst_fails(tmp_path: Path):
    p = tmp_path / "zero.csv"
    p.write_text("1,0,0\n")
    assert main(["run", str(p)]) == 1


def test_wrong_invocation_exits_non_zero():
    with pytest.raises(SystemExit) as excinfo:
        main(["run"])
    assert excinfo.value.code != 0
