"""Translation lookaside buffer.

A small fully-associative cache of page -> frame mappings.
Behavior:
- lookup scans the valid entries; at most one can match a page number.
- upsert refreshes an existing entry, otherwise fills a free slot,
  otherwise overwrites the entry with the smallest `order` (FIFO).
- fixup_on_victim repurposes the slot of a page that lost its frame for the
  page that took the frame, instead of invalidating it.

`order` is a counter bumped on every insert/refresh, so it gives a strict
total order and FIFO selection never sees a tie.
"""

from dataclasses import dataclass, replace
from typing import List, Optional

from vmsim.core.config import TLB_SIZE


@dataclass
class TLBEntry:
    """One TLB slot.

    Fields:
    - page_number / frame_number: the cached mapping (-1 when unused)
    - valid: whether the slot currently holds a mapping
    - order: insertion/refresh stamp used for FIFO eviction
    """

    page_number: int = -1
    frame_number: int = -1
    valid: bool = False
    order: int = -1


class TranslationCache:
    def __init__(self, size: int = TLB_SIZE):
        if size < 1:
            raise ValueError("TLB size must be >= 1")
        self.size = size
        self.entries: List[TLBEntry] = [TLBEntry() for _ in range(size)]
        self._counter = 0

    def _next_order(self) -> int:
        order = self._counter
        self._counter += 1
        return order

    def _find(self, page_number: int) -> Optional[TLBEntry]:
        for entry in self.entries:
            if entry.valid and entry.page_number == page_number:
                return entry
        return None

    def _fill(self, entry: TLBEntry, page_number: int, frame_number: int) -> None:
        entry.page_number = page_number
        entry.frame_number = frame_number
        entry.valid = True
        entry.order = self._next_order()

    def lookup(self, page_number: int) -> Optional[int]:
        """Return the cached frame for `page_number`, or None on a miss."""
        entry = self._find(page_number)
        return entry.frame_number if entry is not None else None

    def upsert(self, page_number: int, frame_number: int) -> Optional[TLBEntry]:
        """Insert or refresh a mapping.

        Returns a copy of the entry that was evicted to make room, or None.
        """
        entry = self._find(page_number)
        if entry is not None:
            # frame may have changed after a replacement
            self._fill(entry, page_number, frame_number)
            return None

        for entry in self.entries:
            if not entry.valid:
                self._fill(entry, page_number, frame_number)
                return None

        victim = min(self.entries, key=lambda e: e.order)
        evicted = replace(victim)
        self._fill(victim, page_number, frame_number)
        return evicted

    def fixup_on_victim(self, old_page: int, new_page: int, new_frame: int) -> bool:
        """Hand the slot of an evicted page over to the page that replaced it.

        Returns True when `old_page` was cached and its slot was rewritten.
        """
        entry = self._find(old_page)
        if entry is None:
            return False
        self._fill(entry, new_page, new_frame)
        return True

    def valid_entries(self) -> List[TLBEntry]:
        """Copies of the valid entries, oldest first."""
        return sorted((replace(e) for e in self.entries if e.valid), key=lambda e: e.order)

    def __len__(self):
        return sum(1 for e in self.entries if e.valid)

    def __contains__(self, page_number):
        return self._find(page_number) is not None

    def reset(self):
        for e in self.entries:
            e.page_number = -1
            e.frame_number = -1
            e.valid = False
            e.order = -1
        self._counter = 0
