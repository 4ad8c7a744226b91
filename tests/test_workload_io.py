from pathlib import Path

import pytest

from schedsim.models import Process
from schedsim.workload_io import WorkloadError, load_workload


def test_load_csv(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("1,5,0,2\n2, 3, 1\n\n3,1,2,\n")
    procs = load_workload(p)
    assert procs == [
        Process(pid=1, arrival_time=0, burst_time=5, priority=2),
        Process(pid=2, arrival_time=1, burst_time=3, priority=None),
        Process(pid=3, arrival_time=2, burst_time=1, priority=None),
    ]


def test_load_json(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid":1,"arrival_time":0,"burst_time":3,"priority":1},'
                 '{"pid":"2","arrival_time":1,"burst_time":2}]')
    procs = load_workload(p)
    assert isinstance(procs[0], Process)
    assert procs[0].priority == 1
    assert procs[1].pid == 2
    assert procs[1].priority is None


@pytest.mark.parametrize(
    "content",
    [
        "1,five,0\n",
        "1,5\n",
        "1,5,0,2,9\n",
        "1,5,0.5\n",
    ],
)
def test_malformed_csv_rows(tmp_path: Path, content):
    p = tmp_path / "w.csv"
    p.write_text(content)
    with pytest.raises(WorkloadError):
        load_workload(p)


def test_malformed_csv_reports_line(tmp_path: Path):
    p = tmp_path / "w.csv"
    p.write_text("1,5,0\n2,x,1\n")
    with pytest.raises(WorkloadError, match="line 2"):
        load_workload(p)


def test_json_must_be_list(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('{"pid": 1}')
    with pytest.raises(WorkloadError):
        load_workload(p)


def test_json_missing_field(tmp_path: Path):
    p = tmp_path / "w.json"
    p.write_text('[{"pid": 1, "burst_time": 2}]')
    with pytest.raises(WorkloadError):
        load_workload(p)


def test_missing_file(tmp_path: Path):
    with pytest.raises(WorkloadError):
        load_workload(tmp_path / "nope.csv")


def test_unsupported_suffix(tmp_path: Path):
    p = tmp_path / "w.yaml"
    p.write_text("")
    with pytest.raises(ValueError):
        load_workload(p)


@pytest.mark.parametrize("name", ["w.csv", "w.json"])
def test_undecodable_file(tmp_path: Path, name):
    p = tmp_path / name
    p.write_bytes(b"1,5,0\n\xff\xfe,2,1\n")
    with pytest.raises(WorkloadError, match="Cannot decode"):
        load_workload(p)
