"""Statistics counters, the text report and the exporters."""
import csv
import json

import pytest

from vmsim.data.stats_export import (
    Exporter,
    Statistics,
    export_chart_json,
    export_chart_pdf,
    format_memory_image,
    format_report,
    write_report,
)


def test_rates_with_no_addresses_are_zero():
    s = Statistics()
    assert s.total_addresses == 0
    assert s.tlb_hit_rate == 0.0
    assert s.page_fault_rate == 0.0
    assert "page-fault rate: 0.0" in format_report(s, [])


def test_record_counts_stages():
    s = Statistics(track_history=True)
    for stage in ["fault", "tlb", "page_table", "tlb"]:
        s.record(stage)
    assert s.total_addresses == 4
    assert s.tlb_hits == 2
    assert s.tlb_misses == 2
    assert s.page_table_hits == 1
    assert s.page_faults == 1
    assert s.tlb_hit_rate == pytest.approx(0.5)
    assert s.page_fault_rate == pytest.approx(0.25)
    assert s.tlb_hit_rate_history == [0.0, 0.5, pytest.approx(1 / 3), 0.5]


def test_history_off_by_default():
    # Input: 1000 translations recorded without history tracking.
    # Expected: counters advance, rate histories stay empty.
    s = Statistics()
    for _ in range(1000):
        s.record("tlb")
    assert s.tlb_hits == 1000
    assert s.tlb_hit_rate_history == []
    assert s.page_fault_rate_history == []


def test_address_counted_before_stage():
    s = Statistics()
    s.count_address()
    assert s.total_addresses == 1
    assert s.page_faults == 0
    assert s.page_fault_rate == 0.0
    s.record_stage("fault")
    assert s.total_addresses == 1
    assert s.page_faults == 1


def test_record_unknown_stage():
    with pytest.raises(ValueError):
        Statistics().record("cache")


def test_reset():
    s = Statistics()
    s.record("fault")
    s.reset()
    assert s.as_dict()['total_addresses'] == 0
    assert s.tlb_hit_rate_history == []


def test_memory_image_rows_of_sixteen():
    # Input: 20 frames, frames 0..3 own pages 10..13, the rest never loaded.
    # Expected: two rows; first has 16 cells, second 4; empty frames print -1.
    snapshot = [10, 11, 12, 13] + [None] * 16
    rows = format_memory_image(snapshot)
    assert rows[0] == "Frame 0 ~ Frame 15: 10 11 12 13" + " -1" * 12
    assert rows[1] == "Frame 16 ~ Frame 31: -1 -1 -1 -1"


def test_report_layout(tmp_path):
    s = Statistics()
    for stage in ["fault", "fault", "tlb", "page_table"]:
        s.record(stage)
    path = write_report(str(tmp_path / "stat.txt"), s, [4, 7])
    text = (tmp_path / "stat.txt").read_text()
    assert path.endswith("stat.txt")
    assert text == (
        "page-fault rate: 0.5\n"
        "\n"
        "TLB hit rate: 0.2\n"
        "\n"
        "Memory image:\n"
        "Frame 0 ~ Frame 15: 4 7\n"
    )


def test_export_json_and_csv(tmp_path):
    s = Statistics(track_history=True)
    s.record("fault")
    s.record("tlb")
    jpath = export_chart_json(s.tlb_hit_rate_history, s.as_dict(), str(tmp_path / "chart.json"),
                              fault_rate_history=s.page_fault_rate_history)
    data = json.loads((tmp_path / "chart.json").read_text())
    assert jpath.endswith("chart.json")
    assert data['hit_rate_history'] == [0.0, 0.5]
    assert data['fault_rate_history'] == [1.0, 0.5]
    assert data['stats']['page_faults'] == 1

    Exporter.export_stats_csv(str(tmp_path / "stats.csv"), s)
    with open(tmp_path / "stats.csv", newline='') as f:
        rows = list(csv.reader(f))
    assert rows[0][0] == 'total_addresses'
    assert rows[1][0] == '2'


def test_export_pdf(tmp_path):
    pytest.importorskip("matplotlib")
    s = Statistics(track_history=True)
    for stage in ["fault", "tlb", "tlb", "page_table"]:
        s.record(stage)
    out = export_chart_pdf(s.tlb_hit_rate_history, str(tmp_path / "chart.pdf"),
                           fault_rate_history=s.page_fault_rate_history)
    assert (tmp_path / "chart.pdf").read_bytes().startswith(b"%PDF")
    assert out.endswith("chart.pdf")
