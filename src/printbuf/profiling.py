"""Opt-in allocation accounting for printbuf.

This module provides accumulated metrics while rendering:
- Number of times heap buffers grew
- Bytes requested by those growths
- Allocation failures
- Peak capacity reached

Zero overhead when disabled (get_render_accumulator() returns None), and
only the growth path ever looks it up.

Example:
    from printbuf import render_to_str
    from printbuf.profiling import profiled_render

    with profiled_render() as metrics:
        text = render_to_str(obj.to_text)

    print(metrics.summary())
    # {"total_ms": 0.4, "growths": 3, "bytes_allocated": 448, ...}

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar, Token
from dataclasses import dataclass, field
from time import perf_counter
from typing import Any


@dataclass
class RenderAccumulator:
    """Accumulated allocation metrics for buffers used in a profiled block.

    Attributes:
        start_time: Profiling start timestamp.
        growths: Successful storage resizes.
        bytes_allocated: Sum of the growth deltas, in bytes.
        allocation_failures: Growths that could not be satisfied.
        peak_capacity: Largest capacity any buffer reached.

    """

    start_time: float = field(default_factory=perf_counter)
    growths: int = 0
    bytes_allocated: int = 0
    allocation_failures: int = 0
    peak_capacity: int = 0

    def record_growth(self, old_size: int, new_size: int) -> None:
        """Record a successful resize from old_size to new_size bytes."""
        self.growths += 1
        self.bytes_allocated += new_size - old_size
        if new_size > self.peak_capacity:
            self.peak_capacity = new_size

    def record_failure(self) -> None:
        """Record an allocation that could not be satisfied."""
        self.allocation_failures += 1

    @property
    def total_duration_ms(self) -> float:
        """Total profiling duration in milliseconds."""
        return (perf_counter() - self.start_time) * 1000

    def summary(self) -> dict[str, Any]:
        """Get summary of allocation metrics.

        Returns:
            Dict with total_ms, growths, bytes_allocated,
            allocation_failures and peak_capacity.

        """
        return {
            "total_ms": round(self.total_duration_ms, 2),
            "growths": self.growths,
            "bytes_allocated": self.bytes_allocated,
            "allocation_failures": self.allocation_failures,
            "peak_capacity": self.peak_capacity,
        }


_accumulator: ContextVar[RenderAccumulator | None] = ContextVar(
    "render_accumulator",
    default=None,
)


def get_render_accumulator() -> RenderAccumulator | None:
    """Get current accumulator (None if profiling disabled)."""
    return _accumulator.get()


@contextmanager
def profiled_render() -> Iterator[RenderAccumulator]:
    """Context manager for profiled rendering.

    Creates a RenderAccumulator and makes it available via
    get_render_accumulator() for the duration of the with block.

    Yields:
        RenderAccumulator that will be populated as buffers grow.

    """
    acc = RenderAccumulator()
    token: Token[RenderAccumulator | None] = _accumulator.set(acc)
    try:
        yield acc
    finally:
        _accumulator.reset(token)
