"""ANSI cursor movement and position queries."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from termsurvey.terminal import Coord

_DSR_PATTERN = re.compile(rb"\x1b\[(\d+);(\d+)R$")


@dataclass
class Cursor:
    """Moves the cursor of the terminal behind ``stdout``; reads replies from ``stdin``."""

    stdin: Any = None
    stdout: Any = None

    def _write(self, text: str) -> None:
        self.stdout.write(text)
        flush = getattr(self.stdout, "flush", None)
        if flush is not None:
            flush()

    def up(self, n: int) -> None:
        self._write(f"\x1b[{n}A")

    def down(self, n: int) -> None:
        self._write(f"\x1b[{n}B")

    def forward(self, n: int) -> None:
        self._write(f"\x1b[{n}C")

    def back(self, n: int) -> None:
        self._write(f"\x1b[{n}D")

    def next_line(self, n: int) -> None:
        """Move to the beginning of the next line."""
        self.down(1)
        self.horizontal_absolute(0)

    def previous_line(self, n: int) -> None:
        """Move to the beginning of the previous line."""
        self.up(1)
        self.horizontal_absolute(0)

    def horizontal_absolute(self, x: int) -> None:
        self._write(f"\x1b[{x}G")

    def show(self) -> None:
        self._write("\x1b[?25h")

    def hide(self) -> None:
        self._write("\x1b[?25l")

    def move(self, x: int, y: int) -> None:
        self._write(f"\x1b[{x};{y}f")

    def save(self) -> None:
        self._write("\x1b7")

    def restore(self) -> None:
        self._write("\x1b8")

    def move_next_line(self, cur: Coord, terminal_size: Coord) -> None:
        """Go to the next line, scrolling first when already on the last row."""
        if cur.y == terminal_size.y:
            self._write("\n")
        self.next_line(1)

    def _read_byte(self) -> bytes:
        data = self.stdin.read(1)
        if not data:
            raise EOFError("end of input while waiting for cursor position")
        if isinstance(data, str):
            data = data.encode("utf-8")
        return data

    def location(self, buf: bytearray | None) -> Coord:
        """Ask the terminal where the cursor is.

        Input that arrives before the terminal's reply is appended to ``buf``
        so it is not lost.
        """
        self._write("\x1b[6n")
        while True:
            text = bytearray()
            while True:
                byte = self._read_byte()
                text += byte
                if byte == b"R":
                    break
            match = _DSR_PATTERN.search(bytes(text))
            if match is None:
                if buf is not None:
                    buf.extend(text)
                continue
            if buf is not None:
                buf.extend(text[: match.start()])
            row, col = int(match.group(1)), int(match.group(2))
            return Coord(col, row)

    def size(self, buf: bytearray | None) -> Coord:
        """Return the terminal's width and height by probing its bottom-right corner."""
        self.hide()
        try:
            self.save()
            try:
                self.move(999, 999)
                return self.location(buf)
            finally:
                self.restore()
        finally:
            self.show()