"""Buffer core: storage, write cursor, growth and truncation.

A buffer is either heap-managed (starts empty, grows on demand through an
Allocator, released with ``release()``) or externally-backed (writes into a
fixed caller-supplied region, never grows, never released).

The write cursor ``position`` is the logical length of everything written,
and is never clamped to ``capacity``. Writes past the end are dropped
physically but still counted, so a caller can detect truncation with
``overflowed()`` and re-render into something larger.

Thread Safety:
    None. A buffer belongs to one producer; callers sharing one must
    serialize access themselves.

"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from typing import NamedTuple, Self

from printbuf.allocator import DEFAULT_ALLOCATOR, Allocator
from printbuf.config import PrintbufConfig, get_printbuf_config
from printbuf.errors import AllocationError
from printbuf.profiling import get_render_accumulator
from printbuf.units import OutputUnits, UnitSystem
from printbuf.utils.logger import get_logger

logger = get_logger(__name__)


class Extent(NamedTuple):
    """Bytes physically held vs. logical length attempted."""

    written: int
    attempted: int

    @property
    def truncated(self) -> bool:
        return self.attempted > self.written


class BufferCore:
    """Storage, cursor and growth policy shared by every Printbuf.

    Args:
        config: Defaults for tabstops, units and growth ceiling
            (the current context's config if None)
        allocator: Allocator for heap growth (a HeapAllocator if None)
        storage: Writable region to use as fixed, externally-backed storage

    """

    __slots__ = (
        "_allocation_failure",
        "_allocator",
        "_atomic",
        "_heap_allocated",
        "_indent",
        "_last_field",
        "_last_newline",
        "_max_capacity",
        "_pos",
        "_size",
        "_storage",
        "_tabstop",
        "_tabstops",
        "si_units",
        "units_mode",
    )

    def __init__(
        self,
        *,
        config: PrintbufConfig | None = None,
        allocator: Allocator | None = None,
        storage: bytearray | memoryview | None = None,
    ) -> None:
        if config is None:
            config = get_printbuf_config()

        self._allocator: Allocator = allocator or DEFAULT_ALLOCATOR
        self._max_capacity = config.max_capacity
        self._pos = 0
        self._last_newline = 0
        self._last_field = 0
        self._indent = 0
        self._atomic = 0
        self._allocation_failure = False
        self._tabstop = 0
        self._tabstops: tuple[int, ...] = config.tabstops
        self.si_units: UnitSystem = config.si_units
        self.units_mode: OutputUnits = config.units

        if storage is None:
            self._heap_allocated = True
            self._storage: bytearray | memoryview = bytearray()
            self._size = 0
            if config.initial_capacity and not self._grow(config.initial_capacity):
                self._fail()
        else:
            view = memoryview(storage)
            if view.readonly:
                raise TypeError("external storage must be writable")
            if view.format != "B" or view.ndim != 1:
                view = view.cast("B")
            self._heap_allocated = False
            self._storage = view
            self._size = len(view)
            if self._size:
                view[0] = 0

    # =========================================================================
    # Queries
    # =========================================================================

    @property
    def capacity(self) -> int:
        return self._size

    @property
    def position(self) -> int:
        """Logical length written so far (may exceed capacity)."""
        return self._pos

    @property
    def owns_storage(self) -> bool:
        return self._heap_allocated

    @property
    def allocation_failed(self) -> bool:
        """Sticky: set when a growth failed, cleared only by reset()."""
        return self._allocation_failure

    @property
    def atomic_depth(self) -> int:
        return self._atomic

    @property
    def max_capacity(self) -> int:
        return self._max_capacity

    @property
    def extent(self) -> Extent:
        return Extent(self.written(), self._pos)

    def remaining_size(self) -> int:
        """Space left including the terminator slot."""
        return self._size - self._pos if self._pos < self._size else 0

    def remaining(self) -> int:
        """Characters that can still be written, excluding the terminator."""
        return self._size - self._pos - 1 if self._pos < self._size else 0

    def written(self) -> int:
        return min(self._pos, self._size)

    def overflowed(self) -> bool:
        """True if output was truncated."""
        return self._pos >= self._size

    def check(self) -> None:
        """Raise AllocationError if a growth has failed since the last reset."""
        if self._allocation_failure:
            raise AllocationError(self._pos, self._size)

    # =========================================================================
    # Growth
    # =========================================================================

    def make_room(self, extra: int) -> bool:
        """Ensure room for extra more bytes plus the terminator.

        Grows geometrically: doubles the capacity, or jumps straight to the
        required size if that is larger, never past max_capacity.
        Externally-backed buffers never grow and always succeed.

        Returns:
            False if the buffer needed to grow and could not.
        """
        if not self._heap_allocated:
            return True

        needed = self._pos + extra + 1
        if needed <= self._size:
            return True

        new_size = min(max(self._size * 2, needed), self._max_capacity)
        if new_size > self._size and not self._grow(new_size):
            self._fail()
            return False

        if needed > self._size:
            logger.debug(
                "growth to %d bytes exceeds max_capacity %d",
                needed,
                self._max_capacity,
            )
            self._fail()
            return False
        return True

    def _grow(self, new_size: int) -> bool:
        old_size = self._size
        storage = self._allocator.resize(self._storage, new_size, atomic=self._atomic > 0)
        if storage is None or len(storage) < new_size:
            return False

        self._storage = storage
        self._size = len(storage)
        logger.debug("grew buffer %d -> %d bytes", old_size, self._size)

        acc = get_render_accumulator()
        if acc is not None:
            acc.record_growth(old_size, self._size)
        return True

    def _fail(self) -> None:
        self._allocation_failure = True
        acc = get_render_accumulator()
        if acc is not None:
            acc.record_failure()

    def nul_terminate(self) -> None:
        """Reserve the terminator slot, growing if needed, and write it."""
        self.make_room(0)
        self._terminate()

    def _terminate(self) -> None:
        # Write primitives have already called make_room() for this write.
        if self._pos < self._size:
            self._storage[self._pos] = 0
        elif self._size:
            self._storage[self._size - 1] = 0

    # =========================================================================
    # Allocation mode
    # =========================================================================

    def atomic_inc(self) -> None:
        """Mark as entering an atomic section."""
        self._atomic += 1

    def atomic_dec(self) -> None:
        """Mark as leaving an atomic section."""
        if not self._atomic:
            logger.warning("atomic_dec() without matching atomic_inc()")
            return
        self._atomic -= 1

    @contextmanager
    def atomic(self) -> Iterator[None]:
        """Allocate in atomic mode for the duration of the block."""
        self.atomic_inc()
        try:
            yield
        finally:
            self.atomic_dec()

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def reset(self) -> None:
        """Re-use the buffer without freeing and re-initializing it.

        Keeps storage, capacity, indent level and unit/tabstop settings.
        """
        self._pos = 0
        self._last_newline = 0
        self._last_field = 0
        self._tabstop = 0
        self._allocation_failure = False
        if self._size:
            self._storage[0] = 0

    def release(self) -> None:
        """Free heap storage. Safe to call more than once; no-op for
        externally-backed buffers.
        """
        if not self._heap_allocated:
            return
        self._storage = bytearray()
        self._size = 0
        self._pos = 0
        self._last_newline = 0
        self._last_field = 0
        self._tabstop = 0

    def __enter__(self) -> Self:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.release()

    # =========================================================================
    # Output
    # =========================================================================

    def _text_end(self) -> int:
        return min(self._pos, self._size - 1) if self._size else 0

    def getvalue(self) -> bytes:
        """Contents up to (not including) the terminator."""
        return bytes(self._storage[: self._text_end()])

    def view(self) -> memoryview:
        """Read-only view of the contents, valid until the next write or release."""
        return memoryview(self._storage)[: self._text_end()].toreadonly()

    def __str__(self) -> str:
        return self.getvalue().decode("utf-8", "replace")

    def __repr__(self) -> str:
        kind = "heap" if self._heap_allocated else "external"
        return f"<{type(self).__name__} {kind} pos={self._pos} size={self._size}>"
