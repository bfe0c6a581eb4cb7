"""Allocator collaborator for heap-managed buffers.

A Printbuf never allocates on its own: it decides how big it wants to be
and asks an Allocator to resize its storage. Allocators report failure by
returning None, never by raising; the buffer turns that into its sticky
allocation_failed flag and keeps writing in truncated mode.
"""

from __future__ import annotations

from typing import Protocol

from printbuf.utils.logger import get_logger

logger = get_logger(__name__)


class Allocator(Protocol):
    """Protocol for storage allocators used by heap-managed buffers.

    Thread Safety:
        Implementations may be shared between buffers; any state they keep
        must be safe for that.

    """

    def resize(self, storage: bytearray, new_size: int, *, atomic: bool) -> bytearray | None:
        """Resize storage to exactly new_size bytes.

        Args:
            storage: Current storage (may be resized in place)
            new_size: Requested size in bytes, larger than len(storage)
            atomic: The buffer is inside an atomic section and wants an
                allocation that fails rather than waits

        Returns:
            Storage of length new_size with the old contents preserved,
            or None if the allocation could not be satisfied.
        """
        ...


class HeapAllocator:
    """Allocator backed by ``bytearray`` growth.

    Args:
        atomic_limit: Largest size handed out while the requesting buffer
            is in an atomic section (None = no separate limit)

    """

    __slots__ = ("atomic_limit",)

    def __init__(self, atomic_limit: int | None = None) -> None:
        self.atomic_limit = atomic_limit

    def resize(self, storage: bytearray, new_size: int, *, atomic: bool) -> bytearray | None:
        if atomic and self.atomic_limit is not None and new_size > self.atomic_limit:
            logger.debug(
                "atomic allocation of %d bytes refused (limit %d)",
                new_size,
                self.atomic_limit,
            )
            return None
        try:
            try:
                storage.extend(bytes(new_size - len(storage)))
            except BufferError:
                # Exported views pin the old storage; move like realloc would.
                moved = bytearray(new_size)
                moved[: len(storage)] = storage
                storage = moved
        except MemoryError:
            logger.debug("allocation of %d bytes failed", new_size)
            return None
        return storage


DEFAULT_ALLOCATOR = HeapAllocator()
