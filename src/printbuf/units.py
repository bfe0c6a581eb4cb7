"""Numeric unit formatting for printbuf.

Renders 64-bit integers either raw, as a byte count, or scaled to a
human-readable magnitude using binary (1024) or SI (1000) powers.

Example:
    >>> from printbuf.units import UnitSystem, format_human_readable
    >>> format_human_readable(1 << 20)
    '1.0 MiB'
    >>> format_human_readable(1500, UnitSystem.DECIMAL)
    '1.5 kB'
"""

from __future__ import annotations

from enum import Enum

U64_MASK = (1 << 64) - 1
S64_SIGN = 1 << 63

BINARY_SUFFIXES = ("", "KiB", "MiB", "GiB", "TiB", "PiB", "EiB")
DECIMAL_SUFFIXES = ("", "kB", "MB", "GB", "TB", "PB", "EB")

class UnitSystem(Enum):
    """Scale base used by human-readable output."""

    BINARY = "binary"  # powers of 2^10
    DECIMAL = "decimal"  # powers of 10^3 (SI)

    @property
    def base(self) -> int:
        return 1024 if self is UnitSystem.BINARY else 1000

    @property
    def suffixes(self) -> tuple[str, ...]:
        return BINARY_SUFFIXES if self is UnitSystem.BINARY else DECIMAL_SUFFIXES


class OutputUnits(Enum):
    """How ``Printbuf.units()`` renders a number.

    RAW is the value as stored (e.g. a superblock field), BYTES is the
    value followed by " bytes", HUMAN_READABLE scales it.
    """

    RAW = "raw"
    BYTES = "bytes"
    HUMAN_READABLE = "human_readable"


def to_u64(value: int) -> int:
    """Wrap an integer to the unsigned 64-bit range."""
    return value & U64_MASK


def to_s64(value: int) -> int:
    """Wrap an integer to the signed 64-bit range (two's complement)."""
    value &= U64_MASK
    return value - (1 << 64) if value & S64_SIGN else value


def scale(magnitude: int, system: UnitSystem) -> tuple[int, int, int]:
    """Scale a non-negative magnitude down by the unit system's base.

    Args:
        magnitude: Non-negative integer to scale
        system: Binary or decimal powers

    Returns:
        (integer part, tenths digit, power index). The tenths digit is
        truncated, not rounded, and is 0 when power index is 0.
    """
    base = system.base
    top = len(system.suffixes) - 1
    power = 0
    remainder = 0
    while magnitude >= base and power < top:
        magnitude, remainder = divmod(magnitude, base)
        power += 1
    return magnitude, remainder * 10 // base, power


def format_human_readable(
    value: int,
    system: UnitSystem = UnitSystem.BINARY,
    signed: bool = False,
) -> str:
    """Format an integer as a human-readable magnitude.

    Args:
        value: Integer, interpreted as s64 when signed else u64
        system: Binary or decimal powers
        signed: Treat value as signed

    Returns:
        "512", "1.0 MiB", "-1.5 kB", ...
    """
    sign = ""
    if signed:
        value = to_s64(value)
        if value < 0:
            sign = "-"
            value = -value
    else:
        value = to_u64(value)

    whole, tenths, power = scale(value, system)
    if not power:
        return f"{sign}{whole}"
    return f"{sign}{whole}.{tenths} {system.suffixes[power]}"


class UnitsMixin:
    """Mixin providing the numeric renderers on top of the write primitives."""

    # These will be set by the Printbuf class
    si_units: UnitSystem
    units_mode: OutputUnits

    def human_readable(self, value: int, signed: bool = False):
        """Append value scaled to a human-readable magnitude.

        Args:
            value: Integer, interpreted as s64 when signed else u64
            signed: Treat value as signed

        Returns:
            self for method chaining
        """
        self.append_string(format_human_readable(value, self.si_units, signed))
        return self

    def units(self, value: int, signed: bool = False):
        """Append value according to the buffer's output units setting."""
        mode = self.units_mode
        if mode is OutputUnits.HUMAN_READABLE:
            return self.human_readable(value, signed)
        self.append_int(value, signed)
        if mode is OutputUnits.BYTES:
            self.append_string(" bytes")
        return self
