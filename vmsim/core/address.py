"""Logical address decomposition.

A logical address is 16 bits wide:
  page_number = address >> offset_bits
  offset      = address & (frame_size - 1)
and a physical address is the frame number concatenated with the offset.
"""

ADDRESS_BITS = 16
LOGICAL_ADDRESS_SPACE_SIZE = 1 << ADDRESS_BITS


class AddressSplitter:
    def __init__(self, offset_bits: int):
        self.offset_bits = offset_bits
        self.page_bits = ADDRESS_BITS - offset_bits
        # precompute masks
        self._offset_mask = (1 << self.offset_bits) - 1
        self._page_mask = (1 << self.page_bits) - 1

    def split(self, address: int):
        """Return (page_number, offset) for a logical address."""
        address = int(address) & (LOGICAL_ADDRESS_SPACE_SIZE - 1)
        page_number = (address >> self.offset_bits) & self._page_mask
        offset = address & self._offset_mask
        return page_number, offset

    def join(self, frame_number: int, offset: int) -> int:
        return (frame_number << self.offset_bits) | (offset & self._offset_mask)
