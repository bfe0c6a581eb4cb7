"""Exception classes for printbuf.

Write primitives never raise for capacity or allocation reasons; these
exceptions exist for opt-in checks and for rejecting bad configuration.
"""

from __future__ import annotations


class PrintbufError(Exception):
    """Base exception for all printbuf errors.

    Subclass this for specific error categories.
    """

    pass


class AllocationError(PrintbufError):
    """A buffer could not grow to hold everything written to it.

    Only raised by ``Printbuf.check()``; the buffer itself keeps going in
    truncated mode.
    """

    def __init__(self, attempted: int, capacity: int) -> None:
        """Initialize allocation error.

        Args:
            attempted: Logical length that was written
            capacity: Capacity the buffer ended up with
        """
        self.attempted = attempted
        self.capacity = capacity
        super().__init__(
            f"allocation failed: {attempted} bytes written, capacity {capacity}"
        )


class ConfigError(PrintbufError):
    """Invalid buffer configuration (tabstops, limits, unit settings)."""

    pass
