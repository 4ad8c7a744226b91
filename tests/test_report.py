from schedsim.algorithms import schedule_fcfs, schedule_rr
from schedsim.gantt import build_rich_gantt, render_gantt
from schedsim.models import Process, ScheduledSlice
from schedsim.report import render_report, render_title


def test_render_gantt_plain():
    slices = [ScheduledSlice(1, 0, 5), ScheduledSlice(2, 5, 8)]
    assert render_gantt(slices) == "Gantt schedule\n|   1   |   2   |\n0\t5\t8"


def test_render_gantt_empty():
    assert "(no execution)" in render_gantt([])


def test_rich_gantt_time_marks():
    _, marks = build_rich_gantt([ScheduledSlice(1, 0, 2), ScheduledSlice(2, 3, 4)])
    assert marks.split() == ["0", "2", "3", "4"]
    assert marks.index("2") == 6
    assert marks.index("3") == 9


def test_render_title():
    assert render_title("Priority").splitlines() == ["-" * 16, "     Priority", "-" * 16]


def test_render_report_contents():
    res = schedule_fcfs([Process(1, 0, 5, priority=3), Process(2, 1, 3)])
    text = render_report(res)
    assert "First-come, first-serve" in text
    assert "Gantt schedule" in text
    for header in ("ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"):
        assert header in text
    assert "2.00" in text
    assert "6.00" in text
    assert "0.25/t" in text


def test_render_report_for_round_robin_lists_every_slice():
    res = schedule_rr([Process(1, 0, 4), Process(2, 0, 2)])
    lines = render_report(res).splitlines()
    gantt_row = lines[lines.index("Gantt schedule") + 1]
    assert gantt_row.count("|") == len(res.timeline) + 1


def test_rich_gantt_widens_units_for_large_times():
    _, marks = build_rich_gantt([ScheduledSlice(1, 0, 999), ScheduledSlice(2, 999, 1000), ScheduledSlice(3, 1000, 1002)])
    # Five columns per unit once marks reach four digits.
    assert marks.split() == ["0", "999", "1000", "1002"]
    assert marks.index("999") == 999 * 5
    assert marks.index("1000") == 1000 * 5
    assert marks.index("1002") == 1002 * 5


def test_render_report_keeps_long_gantt_rows_unwrapped():
    res = schedule_rr([Process(1, 0, 10), Process(2, 0, 10)])
    assert len(res.timeline) == 20
    lines = render_report(res).splitlines()
    start = lines.index("Gantt schedule")
    header, times = lines[start + 1], lines[start + 2]
    assert header.count("|") == 21
    assert times.split("\t") == [str(t) for t in range(21)]
    assert lines[start + 3] == ""
