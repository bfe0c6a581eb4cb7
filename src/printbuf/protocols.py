"""Protocols for printbuf.

Defines the contract for objects that know how to pretty-print themselves
into a buffer.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from printbuf.printbuf import Printbuf


@runtime_checkable
class ToText(Protocol):
    """Protocol for pretty-printable objects.

    Implementations write to ``out`` with the append/layout primitives and
    must not keep a reference to it after returning.

    """

    def to_text(self, out: Printbuf) -> None:
        """Write a human-readable description of self to out."""
        ...
