"""Read-only secondary storage.

The file is treated as a sequence of `frame_size`-byte blocks, block `p`
holding the contents of page `p`. A seek failure or short read is fatal:
the store is assumed complete and immutable for the whole run.
"""
import logging
import os

from vmsim.core.errors import BackingStoreError

logger = logging.getLogger(__name__)


class BackingStore:
    def __init__(self, path: str, frame_size: int, num_pages: int = None):
        self.path = path
        self.frame_size = frame_size
        self.num_pages = num_pages
        try:
            self._file = open(path, "rb")
        except OSError as exc:
            raise BackingStoreError(f"cannot load {path}: {exc.strerror or exc}", path=path) from exc
        self.reads = 0
        logger.debug("opened backing store %s (%d-byte blocks)", path, frame_size)

    @property
    def closed(self) -> bool:
        return self._file is None or self._file.closed

    def read_page(self, page_number: int) -> bytes:
        """Read the `frame_size` bytes holding `page_number`."""
        if self.closed:
            raise BackingStoreError("backing store is closed", path=self.path, page_number=page_number)
        if self.num_pages is not None and not 0 <= page_number < self.num_pages:
            raise BackingStoreError(
                f"Unable to locate page {page_number}", path=self.path, page_number=page_number
            )
        try:
            self._file.seek(page_number * self.frame_size, os.SEEK_SET)
        except (OSError, ValueError) as exc:
            raise BackingStoreError(
                f"Unable to locate page {page_number}", path=self.path, page_number=page_number
            ) from exc
        data = self._file.read(self.frame_size)
        if len(data) != self.frame_size:
            raise BackingStoreError(
                f"Unable to load page {page_number}: read {len(data)} of {self.frame_size} bytes",
                path=self.path,
                page_number=page_number,
            )
        self.reads += 1
        return data

    def close(self):
        if self._file is not None:
            self._file.close()
            self._file = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
