"""Option answers, pagination of option lists and cursor offsets for wrapped options."""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass

__all__ = ["OptionAnswer", "option_answer_list", "paginate", "compute_cursor_offset"]


@dataclass(frozen=True)
class OptionAnswer:
    """An option the user picked: its text and its position in the full option list."""

    value: str
    index: int


def option_answer_list(values: Iterable[str]) -> list[OptionAnswer]:
    """Wrap plain option strings, numbering them from zero."""
    return [OptionAnswer(value, index) for index, value in enumerate(values)]


def paginate(
    page_size: int, choices: Sequence[OptionAnswer], sel: int
) -> tuple[list[OptionAnswer], int]:
    """Return the page of ``choices`` around ``sel`` and the selection's index on that page."""
    total = len(choices)
    half = page_size // 2

    if total < page_size:
        # not enough options to fill a page
        start, end, cursor = 0, total, sel
    elif sel < half:
        # within the first half page
        start, end, cursor = 0, page_size, sel
    elif total - sel - 1 < half:
        # within the last half page
        start, end = total - page_size, total
        cursor = sel - start
    else:
        # somewhere in the middle
        above = half
        below = page_size - above
        cursor = half
        start, end = sel - above, sel + below

    return list(choices[start:end]), cursor


def compute_cursor_offset(
    render_option: Callable[[int, OptionAnswer], str],
    opts: Sequence[OptionAnswer],
    idx: int,
    term_width: int,
) -> int:
    """Count the terminal lines from the selected option to the end of the list.

    ``render_option(index, option)`` gives the text printed for one option; options
    wider than ``term_width`` count once for every extra line they wrap onto.
    """
    offset = len(opts) - idx
    for position, option in enumerate(opts):
        if position < idx:
            continue
        width = len(render_option(position, option))
        if width > term_width:
            split_count = width // term_width
            if width % term_width == 0:
                split_count -= 1
            offset += split_count
    return offset