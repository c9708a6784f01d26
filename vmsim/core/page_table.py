"""Single-level page table covering the whole logical page space."""
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class PageTableEntry:
    valid: bool = False
    frame_number: int = -1


class PageTable:
    def __init__(self, num_entries: int):
        self.num_entries = num_entries
        self.table: List[PageTableEntry] = [PageTableEntry() for _ in range(num_entries)]

    def _entry(self, page_number: int) -> PageTableEntry:
        if page_number < 0 or page_number >= self.num_entries:
            raise IndexError(f"page {page_number} out of range [0, {self.num_entries - 1}]")
        return self.table[page_number]

    def lookup(self, page_number: int) -> Optional[int]:
        entry = self._entry(page_number)
        return entry.frame_number if entry.valid else None

    def install(self, page_number: int, frame_number: int) -> None:
        entry = self._entry(page_number)
        entry.valid = True
        entry.frame_number = frame_number

    def invalidate(self, page_number: int) -> None:
        # only called for pages evicted by the replacement policy
        self._entry(page_number).valid = False

    def valid_pages(self) -> List[int]:
        return [p for p, e in enumerate(self.table) if e.valid]

    def reset(self):
        for e in self.table:
            e.valid = False
            e.frame_number = -1
