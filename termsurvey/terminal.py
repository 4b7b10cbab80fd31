"""Terminal primitives: key codes, line erasing, coordinates and standard streams."""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from enum import IntEnum
from typing import IO, Any

KEY_ARROW_LEFT = "\x02"
KEY_ARROW_RIGHT = "\x06"
KEY_ARROW_UP = "\x10"
KEY_ARROW_DOWN = "\x0e"
KEY_SPACE = " "
KEY_ENTER = "\r"
KEY_BACKSPACE = "\b"
KEY_DELETE = "\x7f"
KEY_INTERRUPT = "\x03"
KEY_END_TRANSMISSION = "\x04"
KEY_ESCAPE = "\x1b"
KEY_DELETE_WORD = "\x17"  # Ctrl+W
KEY_DELETE_LINE = "\x18"  # Ctrl+X
SPECIAL_KEY_HOME = "\x01"
SPECIAL_KEY_END = "\x11"
SPECIAL_KEY_DELETE = "\x12"
IGNORE_KEY = "\x00"
KEY_TAB = "\t"

# Columns reported by the terminal start counting at one.
COORDINATE_SYSTEM_BEGIN = 1


class EraseLineMode(IntEnum):
    """Which part of the current line an erase affects."""

    END = 0
    START = 1
    ALL = 2


class InterruptError(Exception):
    """Raised when the user interrupts a prompt (Ctrl+C)."""

    def __init__(self, message: str = "interrupt") -> None:
        super().__init__(message)


def _emit(out: IO[Any], text: str) -> None:
    out.write(text)
    flush = getattr(out, "flush", None)
    if flush is not None:
        flush()


def sound_bell(out: IO[Any]) -> None:
    """Ring the terminal bell."""
    _emit(out, "\a")


def erase_line(out: IO[Any], mode: EraseLineMode) -> None:
    """Erase part of the line the cursor is on."""
    _emit(out, f"\x1b[{int(mode)}K")


@dataclass
class Coord:
    """A cursor position or terminal size: column ``x`` and row ``y``."""

    x: int
    y: int

    def is_at_line_end(self, size: Coord) -> bool:
        return self.x == size.x

    def is_at_line_begin(self) -> bool:
        return self.x == COORDINATE_SYSTEM_BEGIN


@dataclass
class Stdio:
    """The input, output and error streams a prompt talks to."""

    stdin: Any = field(default_factory=lambda: sys.stdin)
    stdout: Any = field(default_factory=lambda: sys.stdout)
    stderr: Any = field(default_factory=lambda: sys.stderr)