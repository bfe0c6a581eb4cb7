"""Aligned, indented report in a handful of lines — no pre-sized buffer."""

from printbuf import Printbuf, PrintbufConfig

config = PrintbufConfig(tabstops=(12, 24))

with Printbuf(config=config) as buf:
    buf.append_string("devices:")
    with buf.indent(2):
        for name, size in [("sda", 512 << 30), ("nvme0n1", 2 << 40)]:
            buf.emit_newline()
            buf.append_string(name).tab()
            buf.human_readable(size).tab_rjust()
    print(buf)
