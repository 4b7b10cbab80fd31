"""Reading keystrokes and edited lines from a terminal."""

from __future__ import annotations

import unicodedata
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from typing import Any

from termsurvey.cursor import Cursor
from termsurvey.terminal import (
    IGNORE_KEY,
    KEY_ARROW_DOWN,
    KEY_ARROW_LEFT,
    KEY_ARROW_RIGHT,
    KEY_ARROW_UP,
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_END_TRANSMISSION,
    KEY_ESCAPE,
    KEY_INTERRUPT,
    SPECIAL_KEY_DELETE,
    SPECIAL_KEY_END,
    SPECIAL_KEY_HOME,
    EraseLineMode,
    InterruptError,
    Stdio,
    erase_line,
    sound_bell,
)

try:
    import termios
except ImportError:  # pragma: no cover - platforms without termios
    termios = None  # type: ignore[assignment]

_NORMAL_KEYPAD = "["
_APPLICATION_KEYPAD = "O"

_ESCAPE_KEYS = {
    "A": KEY_ARROW_UP,
    "B": KEY_ARROW_DOWN,
    "C": KEY_ARROW_RIGHT,
    "D": KEY_ARROW_LEFT,
    "F": SPECIAL_KEY_END,
    "H": SPECIAL_KEY_HOME,
}

# East Asian width classes that take two terminal cells.
_WIDE_CLASSES = frozenset({"W", "F"})

_TERM_ERRORS: tuple[type[BaseException], ...] = (OSError, ValueError, AttributeError)
if termios is not None:
    _TERM_ERRORS += (termios.error,)

OnRune = Callable[[str, str], "tuple[str, bool]"]


def rune_width(char: str) -> int:
    """Return how many terminal cells ``char`` occupies (2 for wide East Asian)."""
    width_class = unicodedata.east_asian_width(char)
    if width_class in _WIDE_CLASSES:
        return 2
    return 1


class _InputSource:
    """Bytes from the terminal: pushed-back input first, then read-ahead, then the stream."""

    def __init__(self, stream: Any) -> None:
        self._stream = getattr(stream, "buffer", stream)
        self.buffer = bytearray()
        self._pending = bytearray()

    @staticmethod
    def _as_bytes(data: Any) -> bytes:
        if isinstance(data, str):
            return data.encode("utf-8")
        return bytes(data or b"")

    def _fill(self) -> bool:
        read1 = getattr(self._stream, "read1", None)
        data = self._as_bytes(read1(4096) if read1 is not None else self._stream.read(1))
        self._pending.extend(data)
        return bool(data)

    def has_buffered(self) -> bool:
        return bool(self.buffer or self._pending)

    def next_byte(self) -> int:
        if self.buffer:
            return self.buffer.pop(0)
        if not self._pending and not self._fill():
            raise EOFError("end of terminal input")
        return self._pending.pop(0)

    def peek(self) -> int | None:
        if self.buffer:
            return self.buffer[0]
        if not self._pending and not self._fill():
            return None
        return self._pending[0]

    def read(self, n: int = 1) -> bytes:
        """Read one byte for a cursor query, bypassing pushed-back input."""
        if self._pending:
            return bytes([self._pending.pop(0)])
        return self._as_bytes(self._stream.read(1))


class RuneReader:
    """Reads single keys and whole edited lines from ``stdio``."""

    def __init__(self, stdio: Stdio) -> None:
        self.stdio = stdio
        self._source = _InputSource(stdio.stdin)
        self._saved_term: list[Any] | None = None

    @property
    def buffer(self) -> bytearray:
        """Input that arrived ahead of a cursor-position reply; read before new input."""
        return self._source.buffer

    # terminal modes -------------------------------------------------------

    def set_term_mode(self) -> None:
        """Turn off echo, canonical input and signal keys on the input terminal."""
        if termios is None:
            raise OSError("terminal modes are not supported on this platform")
        fd = self.stdio.stdin.fileno()
        saved = termios.tcgetattr(fd)
        new_state = termios.tcgetattr(fd)
        new_state[3] &= ~(termios.ECHO | termios.ECHONL | termios.ICANON | termios.ISIG)
        new_state[6][termios.VMIN] = 1
        new_state[6][termios.VTIME] = 0
        termios.tcsetattr(fd, termios.TCSANOW, new_state)
        self._saved_term = saved

    def restore_term_mode(self) -> None:
        """Put back the terminal mode saved by :meth:`set_term_mode`."""
        if termios is None or self._saved_term is None:
            return
        termios.tcsetattr(self.stdio.stdin.fileno(), termios.TCSANOW, self._saved_term)

    @contextmanager
    def raw_mode(self) -> Iterator[RuneReader]:
        """Read keys unechoed for the duration of the block, when the input is a terminal."""
        try:
            self.set_term_mode()
            changed = True
        except _TERM_ERRORS:
            changed = False
        try:
            yield self
        finally:
            if changed:
                try:
                    self.restore_term_mode()
                except _TERM_ERRORS:
                    pass

    # keys -----------------------------------------------------------------

    def _read_char(self) -> str:
        first = self._source.next_byte()
        if first < 0x80:
            return chr(first)
        if 0xC0 <= first < 0xE0:
            length = 2
        elif 0xE0 <= first < 0xF0:
            length = 3
        elif 0xF0 <= first < 0xF8:
            length = 4
        else:
            return "\ufffd"
        data = bytearray([first])
        for _ in range(length - 1):
            nxt = self._source.peek()
            if nxt is None or not 0x80 <= nxt < 0xC0:
                return "\ufffd"
            data.append(self._source.next_byte())
        return bytes(data).decode("utf-8", errors="replace")[0]

    def _discard(self) -> None:
        try:
            self._source.next_byte()
        except EOFError:
            pass

    def read_rune(self) -> str:
        """Read one key, turning escape sequences into the key codes of :mod:`terminal`."""
        char = self._read_char()
        if char != KEY_ESCAPE:
            return char
        if not self._source.has_buffered():
            return KEY_ESCAPE

        char = self._read_char()
        if char not in (_NORMAL_KEYPAD, _APPLICATION_KEYPAD):
            raise ValueError(
                f"unexpected escape sequence from terminal: {KEY_ESCAPE + char!r}"
            )
        keypad = char

        char = self._read_char()
        if char in _ESCAPE_KEYS:
            return _ESCAPE_KEYS[char]
        if char == "3" and keypad == _NORMAL_KEYPAD:
            self._discard()
            return SPECIAL_KEY_DELETE
        self._discard()
        return IGNORE_KEY

    # lines ----------------------------------------------------------------

    def _write(self, text: str) -> None:
        out = self.stdio.stdout
        out.write(text)
        flush = getattr(out, "flush", None)
        if flush is not None:
            flush()

    def _print_char(self, char: str, mask: str | None) -> None:
        self._write(mask if mask else char)

    def read_line(self, mask: str | None = "", on_rune: OnRune | None = None) -> str:
        """Read an edited line; ``mask`` replaces each echoed character when set."""
        return self.read_line_with_default(mask, "", on_rune)

    def read_line_with_default(
        self,
        mask: str | None = "",
        default: str = "",
        on_rune: OnRune | None = None,
    ) -> str:
        """Read an edited line that starts out holding ``default``.

        ``on_rune(key, line)`` sees every key first and returns ``(line, stop)``;
        when ``stop`` is true its line is returned at once.
        """
        out = self.stdio.stdout
        line: list[str] = []
        index = 0

        cursor = Cursor(stdin=self._source, stdout=out)
        size = cursor.size(self.buffer)
        current = cursor.location(self.buffer)

        def increment() -> None:
            if current.is_at_line_end(size):
                current.x = 1
                current.y += 1
            else:
                current.x += 1

        def decrement() -> None:
            if current.is_at_line_begin():
                current.x = size.x
                current.y -= 1
            else:
                current.x -= 1

        if default:
            index = len(default)
            self._write(default)
            line = list(default)
            for _ in default:
                increment()

        while True:
            r = self.read_rune()

            if on_rune is not None:
                new_line, stop = on_rune(r, "".join(line))
                if stop:
                    return new_line

            if r in ("\r", "\n", KEY_END_TRANSMISSION):
                while index > 0:
                    if current.is_at_line_begin():
                        erase_line(out, EraseLineMode.END)
                        cursor.previous_line(1)
                        cursor.forward(size.x)
                    else:
                        cursor.back(1)
                    decrement()
                    index -= 1
                cursor.move_next_line(current, size)
                return "".join(line)

            if r == KEY_INTERRUPT:
                self._write("\r\n")
                raise InterruptError()

            if r in (KEY_BACKSPACE, KEY_DELETE):
                if index > 0 and line:
                    if index == len(line):
                        cells = rune_width(line[-1])
                        line.pop()
                        if current.x == 1:
                            cursor.previous_line(1)
                            cursor.forward(size.x)
                        else:
                            cursor.back(cells)
                        erase_line(out, EraseLineMode.END)
                    else:
                        cells = rune_width(line[index - 1])
                        del line[index - 1]
                        cursor.save()
                        cursor.back(cells)
                        for char in line[index - 1 :]:
                            erase_line(out, EraseLineMode.END)
                            self._print_char(char, mask)
                        if current.y < size.y:
                            cursor.next_line(1)
                            erase_line(out, EraseLineMode.END)
                        cursor.restore()
                        if current.is_at_line_begin():
                            cursor.previous_line(1)
                            cursor.forward(size.x)
                        else:
                            cursor.back(cells)
                    index -= 1
                    decrement()
                else:
                    sound_bell(out)
                continue

            if r == KEY_ARROW_LEFT:
                if index > 0:
                    if current.is_at_line_begin():
                        cursor.previous_line(1)
                        cursor.forward(size.x)
                    else:
                        cursor.back(rune_width(line[index - 1]))
                    index -= 1
                    decrement()
                else:
                    sound_bell(out)
                continue

            if r == KEY_ARROW_RIGHT:
                if index < len(line):
                    if current.is_at_line_end(size):
                        cursor.next_line(1)
                    else:
                        cursor.forward(rune_width(line[index]))
                    index += 1
                    increment()
                else:
                    sound_bell(out)
                continue

            if r == SPECIAL_KEY_HOME:
                while index > 0:
                    if current.is_at_line_begin():
                        cursor.previous_line(1)
                        cursor.forward(size.x)
                        current.y -= 1
                        current.x = size.x
                    else:
                        width = rune_width(line[index - 1])
                        cursor.back(width)
                        current.x -= width
                    index -= 1
                continue

            if r == SPECIAL_KEY_END:
                while index != len(line):
                    if current.is_at_line_end(size):
                        cursor.next_line(1)
                        current.y += 1
                        current.x = 1
                    else:
                        width = rune_width(line[index])
                        cursor.forward(width)
                        current.x += width
                    index += 1
                continue

            if r == SPECIAL_KEY_DELETE:
                if index != len(line):
                    cursor.save()
                    del line[index]
                    for char in line[index:]:
                        erase_line(out, EraseLineMode.END)
                        self._print_char(char, mask)
                    if current.y < size.y:
                        cursor.next_line(1)
                        erase_line(out, EraseLineMode.END)
                    cursor.restore()
                    if not line or index == len(line):
                        erase_line(out, EraseLineMode.END)
                continue

            if unicodedata.category(r) == "Cc" or r == IGNORE_KEY:
                continue

            if index == len(line):
                line.append(r)
                index += 1
                increment()
                self._print_char(r, mask)
            else:
                line.insert(index, r)
                cursor.save()
                erase_line(out, EraseLineMode.END)
                for char in line[index:]:
                    erase_line(out, EraseLineMode.END)
                    self._print_char(char, mask)
                    increment()
                if current.is_at_line_end(size) and current.y == size.y:
                    self._write("\n")
                    cursor.restore()
                    cursor.previous_line(1)
                else:
                    cursor.restore()
                current = cursor.location(self.buffer)
                if current.is_at_line_end(size):
                    cursor.next_line(1)
                else:
                    cursor.forward(rune_width(r))
                index += 1
                increment()