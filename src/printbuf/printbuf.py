"""The public Printbuf class and the rendering bridge.

Basic example:
    >>> with Printbuf() as buf:
    ...     buf.append_string("foo=")
    ...     foo.to_text(buf)
    ...     print(buf)

Or, writing into a fixed region:
    >>> region = bytearray(64)
    >>> buf = Printbuf.external(region)

Memory allocation failures are not raised: on failure the buffer keeps what
it has and prints on a best-effort basis. Code that wants an error may call
``check()`` or look at ``allocation_failed``.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from printbuf.allocator import Allocator
from printbuf.config import PrintbufConfig
from printbuf.core import BufferCore
from printbuf.layout import LayoutMixin
from printbuf.options import OptionsMixin
from printbuf.primitives import WriteMixin
from printbuf.protocols import ToText
from printbuf.units import OutputUnits, UnitsMixin


class Printbuf(
    LayoutMixin,
    UnitsMixin,
    OptionsMixin,
    WriteMixin,
    BufferCore,
):
    """Growable or fixed text buffer with indent, tabstops and unit formatting.

    ``Printbuf()`` is heap-managed: it starts empty, grows on demand and
    should be released with ``release()`` or by using it as a context
    manager. ``Printbuf.external(region)`` writes into region and never grows.

    Thread Safety:
        None. One buffer per producer.

    """

    __slots__ = ()

    @classmethod
    def external(
        cls,
        region: bytearray | memoryview,
        *,
        config: PrintbufConfig | None = None,
    ) -> Printbuf:
        """Create a buffer that writes into region and never grows.

        Raises:
            TypeError: region is not a writable buffer
        """
        return cls(config=config, storage=region)

    @property
    def human_readable_units(self) -> bool:
        return self.units_mode is OutputUnits.HUMAN_READABLE

    @human_readable_units.setter
    def human_readable_units(self, enabled: bool) -> None:
        if enabled:
            self.units_mode = OutputUnits.HUMAN_READABLE
        elif self.units_mode is OutputUnits.HUMAN_READABLE:
            self.units_mode = OutputUnits.RAW


def render_to_str(
    render: Callable[[Printbuf], Any],
    *,
    config: PrintbufConfig | None = None,
    allocator: Allocator | None = None,
) -> str:
    """Render into a fresh heap buffer and return the text.

    The buffer is released on every exit path, including when render raises.
    """
    with Printbuf(config=config, allocator=allocator) as buf:
        render(buf)
        return str(buf)


def to_text_str(obj: ToText, *, config: PrintbufConfig | None = None) -> str:
    """Render a pretty-printable object to a string."""
    return render_to_str(obj.to_text, config=config)
