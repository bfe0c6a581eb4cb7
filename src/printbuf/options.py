"""Helpers for printing enumerated options and flag sets."""

from __future__ import annotations

from collections.abc import Sequence

from printbuf.units import to_u64


class OptionsMixin:
    """Mixin for listing named options on top of the write primitives."""

    def append_string_option(self, choices: Sequence[str], selected: int):
        """Append every choice followed by a space, bracketing the selected one.

        Example:
            >>> buf.append_string_option(["none", "crc32c", "xxhash"], 1)
            >>> str(buf)
            'none [crc32c] xxhash '
        """
        for i, choice in enumerate(choices):
            if i == selected:
                self.append_char("[")
                self.append_string(choice)
                self.append_string("] ")
            else:
                self.append_string(choice)
                self.append_char(" ")
        return self

    def append_bitflags(self, names: Sequence[str], flags: int):
        """Append the names of the set bits in flags, lowest first, comma separated.

        Stops at the first set bit that has no name.
        """
        flags = to_u64(flags)
        first = True
        while flags:
            bit = (flags & -flags).bit_length() - 1
            if bit >= len(names):
                break
            if not first:
                self.append_char(",")
            first = False
            self.append_string(names[bit])
            flags ^= 1 << bit
        return self
