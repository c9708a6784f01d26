"""FIFO replacement: victim selection and the remapping it performs."""
from conftest import expected_byte
from vmsim.core.backing_store import BackingStore
from vmsim.core.frames import FramePool
from vmsim.core.page_table import PageTable
from vmsim.core.replacement_policies import FIFOReplacement
from vmsim.core.tlb import TranslationCache


def _full_pool(pages, frame_size=16):
    # 16-byte frames leave 12 page bits
    pool = FramePool(total_frames=len(pages), frame_size=frame_size)
    pt = PageTable(1 << 12)
    for page in pages:
        frame = pool.allocate_free()
        pool.load_into(frame, page, bytes(frame_size))
        pt.install(page, frame)
    return pool, pt


def test_select_victim_is_oldest_load():
    pool, _ = _full_pool([10, 11, 12])
    policy = FIFOReplacement()
    assert policy.select_victim(pool) == 0
    # reload frame 0: frame 1 becomes oldest
    pool.load_into(0, 13, bytes(16))
    assert policy.select_victim(pool) == 1


def test_replace_remaps_page_table_and_tlb(store_path):
    # Input: 3 frames holding pages 10, 11, 12; TLB caches page 10; fault on page 20.
    # Expected: frame 0 now holds page 20, page 10 invalid, TLB slot of 10 now maps 20 -> 0.
    pool, pt = _full_pool([10, 11, 12])
    tlb = TranslationCache()
    tlb.upsert(10, 0)
    tlb.upsert(11, 1)
    with BackingStore(store_path, frame_size=16) as store:
        result = FIFOReplacement().replace(20, pool, pt, tlb, store)

    assert result.frame_number == 0
    assert result.evicted_page == 10
    assert result.tlb_fixed_up is True
    assert pool.snapshot() == [20, 11, 12]
    assert pool.read_byte(0, 5) == expected_byte(20, 5, 16)
    assert pt.lookup(10) is None
    assert pt.lookup(20) == 0
    assert tlb.lookup(10) is None
    assert tlb.lookup(20) == 0
    assert tlb.lookup(11) == 1


def test_replace_without_tlb_entry(store_path):
    pool, pt = _full_pool([1, 2])
    tlb = TranslationCache()
    with BackingStore(store_path, frame_size=16) as store:
        result = FIFOReplacement().replace(3, pool, pt, tlb, store)
    assert result.tlb_fixed_up is False
    assert len(tlb) == 0
    assert pt.lookup(3) == 0


def test_successive_replacements_cycle_through_frames(store_path):
    pool, pt = _full_pool([0, 1, 2])
    tlb = TranslationCache()
    policy = FIFOReplacement()
    with BackingStore(store_path, frame_size=16) as store:
        victims = [policy.replace(page, pool, pt, tlb, store).frame_number for page in (3, 4, 5, 6)]
    assert victims == [0, 1, 2, 0]
    assert pool.snapshot() == [6, 4, 5]
