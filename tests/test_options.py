"""Tests for option and bitflag listing helpers."""

from printbuf import Printbuf

CSUM_TYPES = ["none", "crc32c", "crc64", "xxhash"]
FLAGS = ["rw", "degraded", "verbose"]


class TestStringOption:
    def test_selected_is_bracketed(self) -> None:
        buf = Printbuf()
        buf.append_string_option(CSUM_TYPES, 1)
        assert str(buf) == "none [crc32c] crc64 xxhash "

    def test_first_selected(self) -> None:
        buf = Printbuf()
        buf.append_string_option(["a", "b"], 0)
        assert str(buf) == "[a] b "

    def test_selection_out_of_range(self) -> None:
        buf = Printbuf()
        buf.append_string_option(["a", "b"], 5)
        assert str(buf) == "a b "


class TestBitflags:
    def test_no_flags(self) -> None:
        buf = Printbuf()
        buf.append_bitflags(FLAGS, 0)
        assert str(buf) == ""

    def test_lowest_bit_first(self) -> None:
        buf = Printbuf()
        buf.append_bitflags(FLAGS, 0b101)
        assert str(buf) == "rw,verbose"

    def test_single_flag(self) -> None:
        buf = Printbuf()
        buf.append_bitflags(FLAGS, 0b010)
        assert str(buf) == "degraded"

    def test_stops_at_unnamed_bit(self) -> None:
        buf = Printbuf()
        buf.append_bitflags(FLAGS, 0b1000 | 0b0001 | (1 << 40))
        assert str(buf) == "rw"
