"""Statistics and exporters.

`Statistics` is fed one stage per translation by the Translator. The
exporters turn it, plus a frame occupancy snapshot, into the text report,
JSON/CSV dumps and a matplotlib chart.
"""
import csv
import json
from typing import Dict, List, Optional, Sequence

FRAMES_PER_ROW = 16

STAGE_TLB = "tlb"
STAGE_PAGE_TABLE = "page_table"
STAGE_FAULT = "fault"


class Statistics:
    """Translation counters.

    The rate histories grow by one entry per translation, so they are only
    kept when `track_history` is set (the chart exporters need them).
    """

    def __init__(self, track_history: bool = False):
        self.track_history = track_history
        self.reset()

    def reset(self):
        # counters start from zero
        self.total_addresses = 0
        self.tlb_hits = 0
        self.page_table_hits = 0
        self.page_faults = 0
        self.tlb_hit_rate_history: List[float] = []
        self.page_fault_rate_history: List[float] = []

    def count_address(self):
        """Count an address as soon as its translation starts."""
        self.total_addresses += 1

    def record_stage(self, stage: str):
        """Count the stage that resolved the current address."""
        if stage == STAGE_TLB:
            self.tlb_hits += 1
        elif stage == STAGE_PAGE_TABLE:
            self.page_table_hits += 1
        elif stage == STAGE_FAULT:
            self.page_faults += 1
        else:
            raise ValueError(f"unknown translation stage {stage!r}")
        if self.track_history:
            self.tlb_hit_rate_history.append(self.tlb_hit_rate)
            self.page_fault_rate_history.append(self.page_fault_rate)

    def record(self, stage: str):
        """Count one whole translation resolved at `stage`."""
        self.count_address()
        self.record_stage(stage)

    @property
    def tlb_misses(self):
        return self.total_addresses - self.tlb_hits

    # zero translations report 0.0 instead of dividing by zero
    @property
    def tlb_hit_rate(self):
        return (self.tlb_hits / self.total_addresses) if self.total_addresses else 0.0

    @property
    def page_fault_rate(self):
        return (self.page_faults / self.total_addresses) if self.total_addresses else 0.0

    def as_dict(self) -> Dict[str, float]:
        return {
            'total_addresses': self.total_addresses,
            'tlb_hits': self.tlb_hits,
            'tlb_misses': self.tlb_misses,
            'page_table_hits': self.page_table_hits,
            'page_faults': self.page_faults,
            'tlb_hit_rate': self.tlb_hit_rate,
            'page_fault_rate': self.page_fault_rate,
        }


def format_memory_image(snapshot: Sequence[Optional[int]]) -> List[str]:
    """Rows of 16 frames: 'Frame 0 ~ Frame 15: 3 7 -1 ...'."""
    rows = []
    total = len(snapshot)
    for start in range(0, total, FRAMES_PER_ROW):
        owners = snapshot[start:start + FRAMES_PER_ROW]
        cells = ''.join(f" {-1 if p is None else p}" for p in owners)
        rows.append(f"Frame {start} ~ Frame {start + FRAMES_PER_ROW - 1}:{cells}")
    return rows


def format_report(stats: Statistics, snapshot: Sequence[Optional[int]]) -> str:
    lines = [
        f"page-fault rate: {stats.page_fault_rate:.1f}",
        "",
        f"TLB hit rate: {stats.tlb_hit_rate:.1f}",
        "",
        "Memory image:",
    ]
    lines.extend(format_memory_image(snapshot))
    return "\n".join(lines) + "\n"


def write_report(path: str, stats: Statistics, snapshot: Sequence[Optional[int]]) -> str:
    with open(path, 'w', encoding='utf-8') as fh:
        fh.write(format_report(stats, snapshot))
    return path


def export_chart_json(hit_rate_history: List[float], stats: Dict[str, float], fpath: str,
                      fault_rate_history: Optional[List[float]] = None) -> str:
    """Export rate history and stats to a JSON file. Returns the saved path."""
    data = {
        'hit_rate_history': list(hit_rate_history),
        'stats': stats,
    }
    if fault_rate_history is not None:
        data['fault_rate_history'] = list(fault_rate_history)
    with open(fpath, 'w', encoding='utf-8') as fh:
        json.dump(data, fh, indent=2)
    return fpath


def export_chart_pdf(hit_rate_history: List[float], fpath: str,
                     fault_rate_history: Optional[List[float]] = None) -> str:
    """Render the TLB hit-rate (and optionally page-fault-rate) history to a PDF.

    The format follows the file extension, so '.png' works too.
    """
    # Use matplotlib without a display
    import matplotlib
    matplotlib.use('Agg')
    import matplotlib.pyplot as plt

    data = list(hit_rate_history) or [0]
    fig, ax = plt.subplots(figsize=(6, 2))
    ax.plot(range(len(data)), data, color='#FFA500', linewidth=2, label='TLB hit rate')
    ax.fill_between(range(len(data)), data, color='#FFA500', alpha=0.1)
    if fault_rate_history:
        faults = list(fault_rate_history)
        ax.plot(range(len(faults)), faults, color='#6FA8DC', linewidth=1, label='page-fault rate')
        ax.legend(loc='upper right', fontsize='small')
    ax.set_ylim(0, 1)
    ax.set_xlabel('Translation')
    ax.set_ylabel('Rate')
    ax.grid(False)
    fig.tight_layout()
    fig.savefig(fpath, dpi=150)
    plt.close(fig)
    return fpath


class Exporter:
    @staticmethod
    def export_stats_csv(path: str, stats: Statistics):
        row = stats.as_dict()
        with open(path, 'w', newline='') as f:
            writer = csv.writer(f)
            writer.writerow(list(row.keys()))
            writer.writerow(list(row.values()))
        return path
