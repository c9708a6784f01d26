"""MemorySimulator steps an address sequence through a Translator.
Feeds addresses one at a time and reports what each translation did.
"""
from typing import Callable, List, Optional

from .translator import Translator


class MemorySimulator:
    def __init__(self, translator: Translator):
        self.translator = translator
        self.sequence: List[int] = []
        self.index = 0

    @property
    def stats(self):
        return self.translator.stats

    def load_sequence(self, addresses: List[int]):
        self.sequence = list(addresses)
        self.index = 0

    def has_next(self) -> bool:
        return self.index < len(self.sequence)

    def step(self) -> Optional[dict]:
        if not self.has_next():
            return None
        address = self.sequence[self.index]
        self.index += 1

        result = self.translator.resolve(address)
        stats = self.stats
        return {
            'address': address,
            'stage': result.stage,
            'page_number': result.page_number,
            'offset': result.offset,
            'frame_number': result.frame_number,
            'physical_address': result.physical_address,
            'value': result.value,
            'evicted_page': result.evicted_page,
            'stats': {
                'total_addresses': stats.total_addresses,
                'tlb_hits': stats.tlb_hits,
                'page_faults': stats.page_faults,
                'tlb_hit_rate': stats.tlb_hit_rate,
                'page_fault_rate': stats.page_fault_rate,
            },
        }

    def run_all(self, callback: Optional[Callable[[dict], None]] = None):
        while self.has_next():
            info = self.step()
            if callback:
                callback(info)
