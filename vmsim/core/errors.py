"""Exceptions raised by the simulator.

Every failure here ends the run; nothing is retried. The CLI turns a
`VMSimError` into a message on stderr and a non-zero exit status.
"""


class VMSimError(Exception):
    """Base class for simulator errors."""


class ConfigurationError(VMSimError, ValueError):
    """Invalid frame size / frame count combination."""


class AllocationError(VMSimError, MemoryError):
    """Simulator structures could not be allocated."""


class BackingStoreError(VMSimError, OSError):
    """The backing store could not be opened, or a page read came up short."""

    def __init__(self, message: str, path: str = None, page_number: int = None):
        super().__init__(message)
        self.path = path
        self.page_number = page_number


__all__ = ["VMSimError", "ConfigurationError", "AllocationError", "BackingStoreError"]
