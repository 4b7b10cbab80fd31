"""Drawing prompts on the terminal and erasing what was drawn before."""

from __future__ import annotations

import os
import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from termsurvey.config import Icon, PromptConfig
from termsurvey.cursor import Cursor
from termsurvey.paging import OptionAnswer, compute_cursor_offset
from termsurvey.runereader import RuneReader
from termsurvey.terminal import EraseLineMode, Stdio, erase_line

__all__ = ["Renderer", "colorize", "strip_ansi", "format_error"]

_COLORS = {
    "black": 0,
    "red": 1,
    "green": 2,
    "yellow": 3,
    "blue": 4,
    "magenta": 5,
    "cyan": 6,
    "white": 7,
    "default": 9,
}
_ATTRIBUTES = {"b": "1", "d": "2", "u": "4", "B": "5", "i": "7", "s": "9"}
_ANSI_PATTERN = re.compile(r"\x1b(?:\[[0-9;?]*[A-Za-z]|[78])")

# Assumed width when the output is not a terminal whose size can be read.
_FALLBACK_WIDTH = 10000


def _color_code(name: str, attrs: str, base: int, bright: int) -> str | None:
    number = _COLORS.get(name)
    if number is None:
        return None
    if "h" in attrs and number != 9:
        return str(bright + number)
    return str(base + number)


def colorize(style: str, enabled: bool = True) -> str:
    """Return the ANSI sequence for a style such as ``"green+hb"`` or ``"red:white"``.

    The part before ``+`` names the colour, the letters after it add attributes
    (``b`` bold, ``h`` bright, ``u`` underline, ...); an optional ``:`` part
    gives the background. ``"reset"`` clears all styling.
    """
    if not enabled or not style:
        return ""
    if style == "reset":
        return "\x1b[0m"
    fg_part, _, bg_part = style.partition(":")
    fg, _, fg_attrs = fg_part.partition("+")
    codes = [_ATTRIBUTES[attr] for attr in fg_attrs if attr in _ATTRIBUTES]
    fg_code = _color_code(fg, fg_attrs, 30, 90)
    if fg_code is not None:
        codes.append(fg_code)
    if bg_part:
        bg, _, bg_attrs = bg_part.partition("+")
        bg_code = _color_code(bg, bg_attrs, 40, 100)
        if bg_code is not None:
            codes.append(bg_code)
    if not codes:
        return ""
    return "\x1b[" + ";".join(codes) + "m"


def strip_ansi(text: str) -> str:
    """Remove colour and cursor escape sequences from ``text``."""
    return _ANSI_PATTERN.sub("", text)


def format_error(icon: Icon, error: Any, color: bool = True) -> str:
    """The line shown when an answer fails validation."""
    return (
        f"{colorize(icon.format, color)}{icon.text} "
        f"Sorry, your reply was invalid: {error}{colorize('reset', color)}\n"
    )


@dataclass
class Renderer:
    """Writes prompt text and remembers how much was written so it can be erased."""

    stdio: Stdio = field(default_factory=Stdio)
    color: bool = True
    _rendered_errors: str = field(default="", init=False, repr=False, compare=False)
    _rendered_text: str = field(default="", init=False, repr=False, compare=False)

    def _write(self, text: str) -> None:
        out = self.stdio.stdout
        out.write(text)
        flush = getattr(out, "flush", None)
        if flush is not None:
            flush()

    def with_stdio(self, stdio: Stdio) -> None:
        """Talk to ``stdio`` from now on."""
        self.stdio = stdio

    def new_rune_reader(self) -> RuneReader:
        return RuneReader(self.stdio)

    def new_cursor(self) -> Cursor:
        return Cursor(stdin=self.stdio.stdin, stdout=self.stdio.stdout)

    def error(self, config: PromptConfig, invalid: Any) -> None:
        """Erase the prompt and any earlier error, then show ``invalid``."""
        self.reset_prompt(self.count_lines(self._rendered_errors))
        self._rendered_errors = ""
        self.reset_prompt(self.count_lines(self._rendered_text))
        self._rendered_text = ""

        message = format_error(config.icons.error, invalid, self.color)
        self._write(message)
        self._rendered_errors += strip_ansi(message)

    def offset_cursor(self, offset: int) -> None:
        """Move the cursor up ``offset`` lines."""
        cursor = self.new_cursor()
        for _ in range(offset):
            cursor.previous_line(1)

    def render(self, text: str) -> None:
        """Replace what was rendered last with ``text``."""
        self.reset_prompt(self.count_lines(self._rendered_text))
        self._rendered_text = ""
        self._write(text)
        self.append_rendered_text(strip_ansi(text))

    def render_with_cursor_offset(
        self,
        text: str,
        render_option: Callable[[int, OptionAnswer], str],
        opts: Sequence[OptionAnswer],
        idx: int,
    ) -> None:
        """Render ``text`` and leave the cursor on the selected option's line."""
        cursor = self.new_cursor()
        cursor.restore()
        self.render(text)
        cursor.save()

        def plain_option(index: int, option: OptionAnswer) -> str:
            return strip_ansi(render_option(index, option))

        offset = compute_cursor_offset(plain_option, opts, idx, self.term_width_safe())
        self.offset_cursor(offset)

    def append_rendered_text(self, text: str) -> None:
        """Record ``text`` as printed, so the next render erases it too."""
        self._rendered_text += text

    def reset_prompt(self, lines: int) -> None:
        """Erase the current line and the ``lines`` lines above it."""
        out = self.stdio.stdout
        cursor = self.new_cursor()
        cursor.horizontal_absolute(0)
        erase_line(out, EraseLineMode.ALL)
        for _ in range(lines):
            cursor.previous_line(1)
            erase_line(out, EraseLineMode.ALL)

    def term_width(self) -> int:
        """The width of the output terminal; raises ``OSError`` when it has none."""
        return os.get_terminal_size(self.stdio.stdout.fileno()).columns

    def term_width_safe(self) -> int:
        """The terminal width, or a very wide one when it cannot be read."""
        try:
            width = self.term_width()
        except (OSError, ValueError, AttributeError):
            return _FALLBACK_WIDTH
        return width or _FALLBACK_WIDTH

    def count_lines(self, text: str) -> int:
        """Count the newlines in ``text`` plus the extra lines that wrapping adds."""
        width = self.term_width_safe()
        count = 0
        curr = 0
        while curr < len(text):
            delim = text.find("\n", curr)
            if delim != -1:
                count += 1
            else:
                delim = len(text)
            line_width = delim - curr
            if line_width > width:
                count += line_width // width
                if line_width % width == 0:
                    # exactly filling the last line does not wrap onto a new one
                    count -= 1
            curr = delim + 1
        return count