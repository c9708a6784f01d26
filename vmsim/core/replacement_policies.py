"""Page replacement for a full frame pool.

FIFOReplacement picks the frame that was loaded longest ago (smallest
`load_order`) and moves the faulting page into it. It is only consulted
once `FramePool.allocate_free()` has run dry.

API (methods):
- select_victim(frames): index of the frame to reuse
- replace(page_number, frames, page_table, tlb, store): evict, reload and
  remap; returns a Replacement describing what happened
"""
import logging
from dataclasses import dataclass
from typing import Optional

from vmsim.core.backing_store import BackingStore
from vmsim.core.frames import FramePool
from vmsim.core.page_table import PageTable
from vmsim.core.tlb import TranslationCache

logger = logging.getLogger(__name__)


@dataclass
class Replacement:
    frame_number: int
    evicted_page: Optional[int]
    tlb_fixed_up: bool = False


class FIFOReplacement:
    """First-In-First-Out by frame load order."""

    def select_victim(self, frames: FramePool) -> int:
        # load_order is strictly increasing so there are no ties
        return min(range(len(frames)), key=lambda i: frames[i].load_order)

    def replace(
        self,
        page_number: int,
        frames: FramePool,
        page_table: PageTable,
        tlb: TranslationCache,
        store: BackingStore,
    ) -> Replacement:
        victim_index = self.select_victim(frames)
        evicted_page = frames[victim_index].owner_page_number

        data = store.read_page(page_number)
        frames.load_into(victim_index, page_number, data)

        if evicted_page is not None:
            page_table.invalidate(evicted_page)
        page_table.install(page_number, victim_index)

        fixed = False
        if evicted_page is not None:
            fixed = tlb.fixup_on_victim(evicted_page, page_number, victim_index)

        logger.info("[Replace Page] Frame %d: Page %s -> Page %d", victim_index, evicted_page, page_number)
        return Replacement(victim_index, evicted_page, fixed)


__all__ = ["FIFOReplacement", "Replacement"]
