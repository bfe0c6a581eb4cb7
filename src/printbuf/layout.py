"""Indentation and tabstop alignment.

To aid in writing multi-line pretty printers spread across multiple
functions, buffers track the current indent level; ``emit_newline()``
re-applies it at the start of every line.

Tabstops are columns counted from the start of the line. ``tab()`` pads
with spaces up to the next tabstop. ``tab_rjust()`` also advances to the
next tabstop, but does it by shifting the text written since the previous
tabstop to the right, right-justifying it.

Indent and tabstops only stay correct when lines are ended with
``emit_newline()`` (or ``append_string_indented()``), never a raw "\\n".
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from printbuf.config import validate_tabstops
from printbuf.utils.logger import get_logger

logger = get_logger(__name__)


class LayoutMixin:
    """Mixin providing line, indent and tabstop tracking."""

    # These will be set by the Printbuf class
    _storage: bytearray | memoryview
    _pos: int
    _size: int
    _last_newline: int
    _last_field: int
    _indent: int
    _tabstop: int
    _tabstops: tuple[int, ...]

    @property
    def last_newline_offset(self) -> int:
        return self._last_newline

    @property
    def last_field_offset(self) -> int:
        return self._last_field

    @property
    def indent_level(self) -> int:
        return self._indent

    @property
    def linelen(self) -> int:
        """Current column: bytes written since the last newline."""
        return self._pos - self._last_newline

    # =========================================================================
    # Newlines and indent
    # =========================================================================

    def emit_newline(self):
        """End the line and indent the next one to the current level."""
        self.make_room(1 + self._indent)

        self._append_char_reserved(0x0A)
        self._last_newline = self._pos

        self._append_chars_reserved(0x20, self._indent)
        self._terminate()

        self._last_field = self._pos
        self._tabstop = 0
        return self

    def indent_push(self, spaces: int) -> None:
        """Increase the indent level; takes effect at the next newline."""
        self._indent += max(spaces, 0)

    def indent_pop(self, spaces: int) -> None:
        """Decrease the indent level, saturating at zero."""
        if spaces > self._indent:
            logger.warning(
                "indent_pop(%d) below zero (indent level %d)", spaces, self._indent
            )
            spaces = self._indent
        self._indent -= max(spaces, 0)

    @contextmanager
    def indent(self, spaces: int) -> Iterator[None]:
        """Indent lines started inside the block by spaces."""
        self.indent_push(spaces)
        try:
            yield
        finally:
            self.indent_pop(spaces)

    def append_string_indented(self, s: str):
        """Append s, routing control characters through the layout helpers.

        "\\n" becomes emit_newline(), "\\t" tab() and "\\r" tab_rjust().
        """
        start = 0
        for i, ch in enumerate(s):
            if ch not in "\n\t\r":
                continue
            if i > start:
                self.append_string(s[start:i])
            if ch == "\n":
                self.emit_newline()
            elif ch == "\t":
                self.tab()
            else:
                self.tab_rjust()
            start = i + 1
        if start < len(s):
            self.append_string(s[start:])
        return self

    # =========================================================================
    # Tabstops
    # =========================================================================

    @property
    def tabstops(self) -> tuple[int, ...]:
        return self._tabstops

    @property
    def tabstop_count(self) -> int:
        return len(self._tabstops)

    def set_tabstops(self, *columns: int) -> None:
        """Replace the tabstops (at most 4 columns, each 0..255).

        Raises:
            ConfigError: invalid columns
        """
        self._tabstops = validate_tabstops(tuple(columns))

    def tabstops_reset(self) -> None:
        self._tabstops = ()
        self._tabstop = 0

    def _next_tabstop(self) -> int:
        if self._tabstop < len(self._tabstops):
            return self._tabstops[self._tabstop]
        logger.warning(
            "tab %d past the %d configured tabstops", self._tabstop + 1, len(self._tabstops)
        )
        return 0

    def tab(self):
        """Pad with spaces up to the next tabstop."""
        spaces = max(self._next_tabstop() - self.linelen, 0)
        self.append_char_repeated(" ", spaces)

        self._last_field = self._pos
        self._tabstop += 1
        return self

    def tab_rjust(self):
        """Right-justify the text since the previous tabstop against the next one.

        If the line is already at or past the tabstop nothing moves.
        """
        target = self._next_tabstop()
        if self.linelen < target:
            field = self._last_field
            move = self._pos - field
            shift = target - self.linelen

            self.make_room(shift)

            if field + shift < self._size:
                count = min(move, self._size - 1 - field - shift)
                if count > 0:
                    self._storage[field + shift : field + shift + count] = bytes(
                        self._storage[field : field + count]
                    )

            if field < self._size:
                count = min(shift, self._size - field)
                self._storage[field : field + count] = b" " * count

            self._pos += shift
            self._terminate()

        self._last_field = self._pos
        self._tabstop += 1
        return self
