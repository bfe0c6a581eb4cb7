"""Tests for the Printbuf class surface and the rendering bridge."""

from dataclasses import dataclass

import pytest

from printbuf import (
    Printbuf,
    PrintbufConfig,
    ToText,
    UnitSystem,
    render_to_str,
    to_text_str,
)


@dataclass
class Device:
    """A pretty-printable object the way callers write them."""

    name: str
    size: int
    flags: int

    def to_text(self, out: Printbuf) -> None:
        out.append_string("name:").tab().append_string(self.name)
        out.emit_newline()
        out.append_string("size:").tab().human_readable(self.size).tab_rjust()
        out.emit_newline()
        out.append_string("flags:").tab()
        out.append_bitflags(["rw", "degraded"], self.flags)


class TestRenderToStr:
    def test_renders_and_returns_text(self) -> None:
        text = render_to_str(lambda buf: buf.append_string("hello"))
        assert text == "hello"

    def test_config_is_applied(self) -> None:
        config = PrintbufConfig(si_units=UnitSystem.DECIMAL)
        text = render_to_str(lambda buf: buf.human_readable(2000), config=config)
        assert text == "2.0 kB"

    def test_exception_propagates_from_render(self) -> None:
        def render(buf: Printbuf) -> None:
            buf.append_string("partial")
            raise KeyError("missing")

        with pytest.raises(KeyError):
            render_to_str(render)


class TestToText:
    def test_protocol_is_runtime_checkable(self) -> None:
        assert isinstance(Device("sda", 0, 0), ToText)
        assert not isinstance("plain", ToText)

    def test_to_text_str(self) -> None:
        device = Device("sda", 1 << 30, 0b01)
        config = PrintbufConfig(tabstops=(8, 16))
        text = to_text_str(device, config=config)
        assert text.splitlines() == [
            "name:   sda",
            "size:   " + " " * 1 + "1.0 GiB",
            "flags:  rw",
        ]


class TestExternal:
    def test_external_uses_region(self) -> None:
        region = bytearray(32)
        buf = Printbuf.external(region)
        buf.append_string("in place")
        assert bytes(region[:9]) == b"in place\0"
        assert buf.owns_storage is False

    def test_external_with_config(self) -> None:
        buf = Printbuf.external(bytearray(32), config=PrintbufConfig(tabstops=(4,)))
        buf.append_string("a").tab().append_string("b")
        assert str(buf) == "a   b"
