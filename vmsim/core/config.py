"""Simulation configuration.

`frame_bits` is log2 of the frame size; the page size equals the frame
size so `offset_bits == frame_bits` and the remaining high bits of the
16-bit logical address select the page.
"""
from dataclasses import dataclass
from typing import Optional

from vmsim.core.address import ADDRESS_BITS, LOGICAL_ADDRESS_SPACE_SIZE
from vmsim.core.errors import ConfigurationError

TLB_SIZE = 16
DEFAULT_BACKING_STORE = "backingstore.bin"
DEFAULT_ADDRESSES = "addresses.txt"
DEFAULT_STATS = "stat.txt"


def is_power_of_two(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0


@dataclass
class SimulationConfig:
    frame_bits: int = 8
    total_frames: int = 256
    backing_store: str = DEFAULT_BACKING_STORE
    addresses: str = DEFAULT_ADDRESSES
    stats_path: str = DEFAULT_STATS
    tlb_size: int = TLB_SIZE
    # keep per-translation rate histories for the chart exporters
    track_history: bool = False

    @property
    def offset_bits(self) -> int:
        return self.frame_bits

    @property
    def page_bits(self) -> int:
        return ADDRESS_BITS - self.offset_bits

    @property
    def frame_size(self) -> int:
        return 1 << self.frame_bits

    @property
    def page_table_size(self) -> int:
        return 1 << self.page_bits

    @property
    def physical_memory_size(self) -> int:
        return self.frame_size * self.total_frames

    def validate(self) -> "SimulationConfig":
        """Reject size combinations the core cannot simulate.

        Returns self so calls can be chained.
        """
        if not isinstance(self.frame_bits, int) or not 0 <= self.frame_bits <= ADDRESS_BITS:
            raise ConfigurationError(f"frame bits must be an integer in [0, {ADDRESS_BITS}], got {self.frame_bits!r}")
        if not isinstance(self.total_frames, int) or self.total_frames < 1:
            raise ConfigurationError(f"total frames must be a positive integer, got {self.total_frames!r}")
        if self.tlb_size < 1:
            raise ConfigurationError(f"TLB size must be >= 1, got {self.tlb_size}")
        size = self.physical_memory_size
        if not is_power_of_two(size):
            raise ConfigurationError(f"Total physical memory size must be power of 2 (got {size} bytes)")
        if size > LOGICAL_ADDRESS_SPACE_SIZE:
            raise ConfigurationError(
                f"Physical memory size must not exceed logical space size ({LOGICAL_ADDRESS_SPACE_SIZE} bytes), got {size}"
            )
        return self

    @classmethod
    def from_args(cls, args, frame_bits: Optional[int] = None, total_frames: Optional[int] = None):
        """Build a config from an argparse namespace.

        Explicit `frame_bits` / `total_frames` win over the namespace (the
        CLI passes them after prompting).
        """
        return cls(
            frame_bits=frame_bits if frame_bits is not None else args.frame_bits,
            total_frames=total_frames if total_frames is not None else args.frames,
            backing_store=args.backing_store,
            addresses=args.addresses,
            stats_path=args.stats,
            track_history=bool(getattr(args, "chart_json", None) or getattr(args, "chart_pdf", None)),
        )
