"""Address translation pipeline.

Translator owns every piece of simulated state (TLB, page table, frame
pool, backing store handle and counters) so independent instances never
share anything. Each call resolves at exactly one stage:

1. TLB hit
2. page table hit, then the mapping is pushed into the TLB
3. page fault: a free frame (or a FIFO victim) is loaded from the backing
   store, the page table is updated and the mapping pushed into the TLB

The whole call runs under one lock so the TLB and page table never
disagree halfway through a translation.
"""
import logging
import threading
from dataclasses import dataclass
from typing import List, Optional, Tuple

from vmsim.core.address import AddressSplitter
from vmsim.core.backing_store import BackingStore
from vmsim.core.config import SimulationConfig, TLB_SIZE
from vmsim.core.errors import AllocationError
from vmsim.core.frames import FramePool
from vmsim.core.page_table import PageTable
from vmsim.core.replacement_policies import FIFOReplacement
from vmsim.core.tlb import TranslationCache
from vmsim.data.stats_export import STAGE_FAULT, STAGE_PAGE_TABLE, STAGE_TLB, Statistics

logger = logging.getLogger(__name__)

_STAGE_LABELS = {
    STAGE_TLB: "TLB",
    STAGE_PAGE_TABLE: "Page Table",
    STAGE_FAULT: "Page Fault",
}


@dataclass
class TranslationResult:
    logical_address: int
    stage: str
    page_number: int
    offset: int
    frame_number: int
    physical_address: int
    value: int
    evicted_page: Optional[int] = None

    @property
    def page_fault(self) -> bool:
        return self.stage == STAGE_FAULT


class Translator:
    def __init__(self, frame_bits: int, total_frames: int, backing_store_path: str, tlb_size: int = TLB_SIZE,
                 track_history: bool = False):
        self.frame_bits = frame_bits
        self.splitter = AddressSplitter(offset_bits=frame_bits)
        self.offset_bits = self.splitter.offset_bits
        self.page_bits = self.splitter.page_bits
        self.frame_size = 1 << frame_bits
        self.page_table_size = 1 << self.page_bits
        self.total_frames = total_frames

        try:
            self.tlb = TranslationCache(tlb_size)
            self.page_table = PageTable(self.page_table_size)
        except MemoryError as exc:
            raise AllocationError(
                f"Unable to allocate a {tlb_size}-entry TLB and a {self.page_table_size}-entry page table"
            ) from exc
        self.frames = FramePool(total_frames, self.frame_size)
        self.policy = FIFOReplacement()
        self.stats = Statistics(track_history=track_history)
        self._lock = threading.Lock()
        # opened last: nothing else can fail once the file is held
        self.store = BackingStore(backing_store_path, self.frame_size, num_pages=self.page_table_size)
        logger.debug(
            "translator ready: %d-byte frames, %d frames, %d pages, page bits %d, offset bits %d",
            self.frame_size, self.total_frames, self.page_table_size, self.page_bits, self.offset_bits,
        )

    @classmethod
    def from_config(cls, config: SimulationConfig) -> "Translator":
        config.validate()
        return cls(config.frame_bits, config.total_frames, config.backing_store, tlb_size=config.tlb_size,
                   track_history=config.track_history)

    # counters, exposed by name
    @property
    def tlb_hits(self) -> int:
        return self.stats.tlb_hits

    @property
    def page_faults(self) -> int:
        return self.stats.page_faults

    @property
    def total_addresses(self) -> int:
        return self.stats.total_addresses

    def _load_page(self, page_number: int) -> Tuple[int, Optional[int]]:
        """Bring `page_number` into memory. Returns (frame, evicted page)."""
        frame_number = self.frames.allocate_free()
        if frame_number is None:
            replacement = self.policy.replace(page_number, self.frames, self.page_table, self.tlb, self.store)
            return replacement.frame_number, replacement.evicted_page

        data = self.store.read_page(page_number)
        self.frames.load_into(frame_number, page_number, data)
        self.page_table.install(page_number, frame_number)
        logger.info("[Load Page] Page %d -> Frame %d", page_number, frame_number)
        return frame_number, None

    def resolve(self, address: int) -> TranslationResult:
        """Translate `address` and report which stage resolved it."""
        with self._lock:
            self.stats.count_address()
            page_number, offset = self.splitter.split(address)
            evicted = None

            frame_number = self.tlb.lookup(page_number)
            if frame_number is not None:
                stage = STAGE_TLB
                self.stats.record_stage(stage)
            else:
                frame_number = self.page_table.lookup(page_number)
                if frame_number is not None:
                    stage = STAGE_PAGE_TABLE
                    self.stats.record_stage(stage)
                else:
                    # counted before the load, which may fail fatally
                    stage = STAGE_FAULT
                    self.stats.record_stage(stage)
                    frame_number, evicted = self._load_page(page_number)
                self.tlb.upsert(page_number, frame_number)

            physical_address = self.splitter.join(frame_number, offset)
            value = self.frames.read_byte(frame_number, offset)

        logger.debug(
            "[%s] (%d) %d -> (%d) %d: %d",
            _STAGE_LABELS[stage], address, page_number, physical_address, frame_number, value,
        )
        return TranslationResult(address, stage, page_number, offset, frame_number, physical_address, value, evicted)

    def translate(self, address: int) -> Tuple[int, int]:
        """Return (physical_address, byte) for a logical address."""
        result = self.resolve(address)
        return result.physical_address, result.value

    def frame_snapshot(self) -> List[Optional[int]]:
        return self.frames.snapshot()

    def close(self):
        self.store.close()
        self.frames.release()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
