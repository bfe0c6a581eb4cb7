"""Raw write primitives.

Every primitive reserves room, copies at most ``remaining()`` bytes,
advances the cursor by the full logical length and leaves the buffer
NUL-terminated. None of them ever touch storage outside ``[0, capacity)``.

Characters may be given as ``str`` (UTF-8 encoded) or as an ``int`` byte
value.
"""

from __future__ import annotations

from printbuf.units import to_s64, to_u64

HEX_LOWER = b"0123456789abcdef"
HEX_UPPER = b"0123456789ABCDEF"

ENCODING = "utf-8"


def _char_bytes(c: str | int) -> bytes:
    if isinstance(c, int):
        return bytes((c,))
    return c.encode(ENCODING, "replace")


class WriteMixin:
    """Mixin providing the append primitives on top of BufferCore."""

    # These will be set by the Printbuf class
    _storage: bytearray | memoryview
    _pos: int
    _size: int

    # =========================================================================
    # Reserved variants: no make_room(), no terminator
    # =========================================================================

    def _append_char_reserved(self, byte: int) -> None:
        if self.remaining():
            self._storage[self._pos] = byte
        self._pos += 1

    def _append_chars_reserved(self, byte: int, n: int) -> None:
        count = min(n, self.remaining())
        if count > 0:
            self._storage[self._pos : self._pos + count] = bytes((byte,)) * count
        self._pos += n

    # =========================================================================
    # Public primitives
    # =========================================================================

    def append_char_repeated(self, c: str | int, n: int):
        """Append character c, n times.

        Returns:
            self for method chaining
        """
        if n <= 0:
            return self
        data = _char_bytes(c)
        if len(data) != 1:
            return self.append_bytes(data * n)

        self.make_room(n)
        self._append_chars_reserved(data[0], n)
        self._terminate()
        return self

    def append_char(self, c: str | int):
        """Append a single character."""
        data = _char_bytes(c)
        if len(data) != 1:
            return self.append_bytes(data)

        self.make_room(1)
        self._append_char_reserved(data[0])
        self._terminate()
        return self

    def append_bytes(self, data: bytes | bytearray | memoryview):
        """Append raw bytes, truncating silently if out of room."""
        src = memoryview(data).cast("B")
        n = len(src)
        self.make_room(n)

        count = min(n, self.remaining())
        if count:
            self._storage[self._pos : self._pos + count] = src[:count]
        self._pos += n
        self._terminate()
        return self

    def append_string(self, s: str):
        """Append a string (UTF-8 encoded)."""
        return self.append_bytes(s.encode(ENCODING, "replace"))

    def append_hex_byte(self, byte: int, upper_case: bool = False):
        """Append byte as two hex digits."""
        digits = HEX_UPPER if upper_case else HEX_LOWER
        self.make_room(2)
        self._append_char_reserved(digits[byte >> 4 & 0xF])
        self._append_char_reserved(digits[byte & 0xF])
        self._terminate()
        return self

    def append_hex(self, data: bytes | bytearray | memoryview, upper_case: bool = False):
        """Append every byte of data as a hex pair, with one room check."""
        digits = HEX_UPPER if upper_case else HEX_LOWER
        src = memoryview(data).cast("B")
        self.make_room(2 * len(src))
        for byte in src:
            self._append_char_reserved(digits[byte >> 4])
            self._append_char_reserved(digits[byte & 0xF])
        self._terminate()
        return self

    def append_int(self, value: int, signed: bool = False):
        """Append value in decimal, as s64 if signed else u64."""
        value = to_s64(value) if signed else to_u64(value)
        return self.append_bytes(b"%d" % value)
