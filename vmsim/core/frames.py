"""Physical memory model.

A fixed array of frames, each holding one page's bytes. Frames are handed
out in index order by a bump cursor; once every frame has been used the
pool never reports a free frame again and the replacement policy takes
over.

Parameters:
- FramePool(total_frames, frame_size)
- allocate_free() -> next unused frame index or None
- load_into(frame, page, data) -> copies a page in, stamps a load order
- read_byte(frame, offset) -> byte value
- snapshot() -> owning page per frame (None if never loaded)
"""
from dataclasses import dataclass
from typing import List, Optional

from vmsim.core.errors import AllocationError


@dataclass
class Frame:
    buffer: bytearray
    owner_page_number: Optional[int] = None
    # -1 until the frame is first loaded
    load_order: int = -1


class FramePool:
    def __init__(self, total_frames: int, frame_size: int):
        if total_frames < 1:
            raise ValueError("total_frames must be >= 1")
        self.total_frames = int(total_frames)
        self.frame_size = int(frame_size)
        try:
            self.frames: List[Frame] = [Frame(bytearray(self.frame_size)) for _ in range(self.total_frames)]
        except MemoryError as exc:
            raise AllocationError(
                f"Unable to allocate {self.total_frames} frames of {self.frame_size} bytes"
            ) from exc
        self.next_frame = 0
        self._load_counter = 0

    def _check_index(self, frame_number: int) -> Frame:
        if not isinstance(frame_number, int):
            raise TypeError(f"frame number must be int, got {type(frame_number).__name__}")
        if frame_number < 0 or frame_number >= self.total_frames:
            raise IndexError(f"frame {frame_number} out of range [0, {self.total_frames - 1}]")
        return self.frames[frame_number]

    @property
    def exhausted(self) -> bool:
        return self.next_frame >= self.total_frames

    def allocate_free(self) -> Optional[int]:
        if self.exhausted:
            return None
        frame_number = self.next_frame
        self.next_frame += 1
        return frame_number

    def load_into(self, frame_number: int, page_number: int, data: bytes) -> None:
        frame = self._check_index(frame_number)
        if len(data) != self.frame_size:
            raise ValueError(f"expected {self.frame_size} bytes for page {page_number}, got {len(data)}")
        frame.buffer[:] = data
        frame.owner_page_number = page_number
        frame.load_order = self._load_counter
        self._load_counter += 1

    def read_byte(self, frame_number: int, offset: int) -> int:
        frame = self._check_index(frame_number)
        return frame.buffer[offset]

    def __getitem__(self, frame_number: int) -> Frame:
        return self._check_index(frame_number)

    def __len__(self):
        return self.total_frames

    def snapshot(self) -> List[Optional[int]]:
        return [f.owner_page_number for f in self.frames]

    def release(self):
        """Drop the frame buffers. The pool is unusable afterwards."""
        self.frames = []
        self.total_frames = 0
        self.next_frame = 0
