"""
printbuf — Simple strings for printing to, with optional heap allocation

Build text incrementally without pre-sizing a buffer and without bailing
out when memory runs short: output that does not fit is counted but
dropped, and the buffer keeps going on a best-effort basis.

Quick Start:
    >>> from printbuf import Printbuf
    >>> with Printbuf() as buf:
    ...     buf.append_string("size:")
    ...     buf.human_readable(1 << 20)
    ...     str(buf)
    'size:1.0 MiB'

Tabstops and indent:
    >>> buf = Printbuf()
    >>> buf.set_tabstops(12)
    >>> buf.append_string("free").tab_rjust()
    >>> buf.indent_push(2)
    >>> buf.emit_newline().append_string("nested")

Fixed storage (no allocation at all):
    >>> region = bytearray(16)
    >>> buf = Printbuf.external(region)
    >>> buf.append_string("more than sixteen bytes")
    >>> buf.overflowed()
    True

Installation:
    pip install printbuf
"""

from printbuf.allocator import Allocator, HeapAllocator
from printbuf.config import (
    PrintbufConfig,
    get_printbuf_config,
    printbuf_config_context,
    reset_printbuf_config,
    set_printbuf_config,
)
from printbuf.core import Extent
from printbuf.errors import AllocationError, ConfigError, PrintbufError
from printbuf.printbuf import Printbuf, render_to_str, to_text_str
from printbuf.profiling import RenderAccumulator, get_render_accumulator, profiled_render
from printbuf.protocols import ToText
from printbuf.units import OutputUnits, UnitSystem, format_human_readable

__version__ = "0.1.0"

__all__ = [  # noqa: RUF022 — grouped by category for maintainability
    # Version
    "__version__",
    # Core API
    "Printbuf",
    "Extent",
    "render_to_str",
    "to_text_str",
    "ToText",
    # Units
    "OutputUnits",
    "UnitSystem",
    "format_human_readable",
    # Allocation
    "Allocator",
    "HeapAllocator",
    # Configuration (ContextVar-based)
    "PrintbufConfig",
    "get_printbuf_config",
    "set_printbuf_config",
    "reset_printbuf_config",
    "printbuf_config_context",
    # Profiling
    "RenderAccumulator",
    "get_render_accumulator",
    "profiled_render",
    # Errors
    "PrintbufError",
    "AllocationError",
    "ConfigError",
]
