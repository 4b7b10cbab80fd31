"""A prompt that lets the user pick one option with the arrow keys, with filtering."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from termsurvey.config import Filter, PromptConfig
from termsurvey.paging import OptionAnswer, option_answer_list, paginate
from termsurvey.renderer import Renderer, colorize
from termsurvey.terminal import (
    KEY_ARROW_DOWN,
    KEY_ARROW_UP,
    KEY_BACKSPACE,
    KEY_DELETE,
    KEY_DELETE_LINE,
    KEY_DELETE_WORD,
    KEY_END_TRANSMISSION,
    KEY_ENTER,
    KEY_ESCAPE,
    KEY_INTERRUPT,
    KEY_SPACE,
    KEY_TAB,
    InterruptError,
)

__all__ = ["Select"]

Description = Callable[[str, int], str]


@dataclass(kw_only=True)
class Select(Renderer):
    """Presents ``options`` and returns the chosen one as an :class:`OptionAnswer`.

    ``default`` is either an option's text or its index. Typing filters the
    list; ``filter`` overrides the filter from the prompt configuration.
    """

    message: str = ""
    options: list[str] = field(default_factory=list)
    default: Any = None
    help: str = ""
    page_size: int = 0
    vim_mode: bool = False
    filter_message: str = ""
    filter: Filter | None = None
    description: Description | None = None
    _filter: str = field(default="", init=False, repr=False, compare=False)
    _selected_index: int = field(default=0, init=False, repr=False, compare=False)
    _use_default: bool = field(default=False, init=False, repr=False, compare=False)
    _showing_help: bool = field(default=False, init=False, repr=False, compare=False)

    # rendering ------------------------------------------------------------

    def _style(self, style: str) -> str:
        return colorize(style, self.color)

    def _describe(self, opt: OptionAnswer) -> str:
        if self.description is None:
            return ""
        return self.description(opt.value, opt.index)

    def render_option(
        self, config: PromptConfig, index: int, opt: OptionAnswer, selected_index: int
    ) -> str:
        """The line printed for the option at ``index`` on the current page."""
        if index == selected_index:
            focus = config.icons.select_focus
            prefix = f"{self._style(focus.format)}{focus.text} "
        else:
            prefix = f"{self._style('default')}  "
        desc = self._describe(opt)
        suffix = f" - {self._style('cyan')}{desc}" if desc else ""
        return f"{prefix}{opt.value}{suffix}{self._style('reset')}\n"

    def render_text(
        self,
        config: PromptConfig,
        entries: Sequence[OptionAnswer],
        selected_index: int,
        show_help: bool = False,
        answer: str = "",
        show_answer: bool = False,
    ) -> str:
        """The whole prompt: the question and either the answer or the page of options."""
        icons = config.icons
        parts = []
        if show_help:
            parts.append(
                f"{self._style(icons.help.format)}{icons.help.text} {self.help}"
                f"{self._style('reset')}\n"
            )
        parts.append(
            f"{self._style(icons.question.format)}{icons.question.text} {self._style('reset')}"
        )
        parts.append(
            f"{self._style('default+hb')}{self.message}{self.filter_message}"
            f"{self._style('reset')}"
        )
        if show_answer:
            parts.append(f"{self._style('cyan')} {answer}{self._style('reset')}\n")
        else:
            hint = (
                f", {config.help_input} for more help"
                if self.help and not show_help
                else ""
            )
            parts.append(
                f"  {self._style('cyan')}[Use arrows to move, type to filter{hint}]"
                f"{self._style('reset')}\n"
            )
            parts.extend(
                self.render_option(config, ix, opt, selected_index)
                for ix, opt in enumerate(entries)
            )
        return "".join(parts)

    def _page_size(self, config: PromptConfig) -> int:
        return self.page_size or config.page_size

    def _draw(self, config: PromptConfig, opts: list[OptionAnswer], idx: int) -> None:
        text = self.render_text(config, opts, idx, self._showing_help)

        def render_option(index: int, opt: OptionAnswer) -> str:
            return self.render_option(config, index, opt, idx)

        self.render_with_cursor_offset(text, render_option, opts, idx)

    # interaction ----------------------------------------------------------

    def on_change(self, key: str, config: PromptConfig) -> bool:
        """Handle one key press; return True once the user has made a choice."""
        options = self.filter_options(config)
        old_filter = self._filter

        if key in (KEY_ENTER, "\n"):
            return bool(options) and self._selected_index < len(options)
        if (key == KEY_ARROW_UP or (self.vim_mode and key == "k")) and options:
            self._use_default = False
            if self._selected_index == 0:
                self._selected_index = len(options) - 1
            else:
                self._selected_index -= 1
        elif (
            key in (KEY_TAB, KEY_ARROW_DOWN) or (self.vim_mode and key == "j")
        ) and options:
            self._use_default = False
            if self._selected_index == len(options) - 1:
                self._selected_index = 0
            else:
                self._selected_index += 1
        elif key == config.help_input and self.help:
            self._showing_help = True
        elif key == KEY_ESCAPE:
            self.vim_mode = not self.vim_mode
        elif key in (KEY_DELETE_WORD, KEY_DELETE_LINE):
            self._filter = ""
        elif key in (KEY_DELETE, KEY_BACKSPACE):
            if self._filter:
                self._filter = self._filter[:-1]
        elif key >= KEY_SPACE:
            self._filter += key
            self.vim_mode = False
            self._use_default = False

        self.filter_message = f" {self._filter}" if self._filter else ""
        if old_filter != self._filter:
            options = self.filter_options(config)
            if options and len(options) <= self._selected_index:
                self._selected_index = len(options) - 1

        opts, idx = paginate(self._page_size(config), options, self._selected_index)
        self._draw(config, opts, idx)
        return False

    def filter_options(self, config: PromptConfig) -> list[OptionAnswer]:
        """The options that pass the current filter text."""
        if not self._filter:
            return option_answer_list(self.options)
        keep = self.filter if self.filter is not None else config.filter
        return [
            OptionAnswer(opt, index)
            for index, opt in enumerate(self.options)
            if keep(self._filter, opt, index)
        ]

    def _answer(self, config: PromptConfig) -> OptionAnswer:
        options = self.filter_options(config)
        self._filter = ""
        self.filter_message = ""

        val = ""
        if self._use_default or self._selected_index >= len(options):
            if self.default is not None:
                if isinstance(self.default, str):
                    val = self.default
                elif isinstance(self.default, int) and not isinstance(self.default, bool):
                    val = self.options[self.default]
                else:
                    raise TypeError("default value of select must be an int or string")
            elif options:
                val = options[0].value
        else:
            val = options[self._selected_index].value

        index = -1
        for position, option in enumerate(self.options):
            if option == val:
                index = position
        return OptionAnswer(val, index)

    def prompt(self, config: PromptConfig) -> OptionAnswer:
        """Ask the user to pick an option and return it."""
        if not self.options:
            raise ValueError("please provide options to select from")

        sel = 0
        if self.default != "":
            sel = next(
                (i for i, opt in enumerate(self.options) if opt == self.default), 0
            )
        self._selected_index = sel

        opts, idx = paginate(
            self._page_size(config), option_answer_list(self.options), sel
        )

        cursor = self.new_cursor()
        cursor.save()
        cursor.hide()
        try:
            self._draw(config, opts, idx)
            self._use_default = True
            reader = self.new_rune_reader()
            with reader.raw_mode():
                while True:
                    key = reader.read_rune()
                    if key == KEY_INTERRUPT:
                        raise InterruptError()
                    if key == KEY_END_TRANSMISSION:
                        break
                    if self.on_change(key, config):
                        break
            return self._answer(config)
        finally:
            cursor.restore()
            cursor.show()

    def cleanup(self, config: PromptConfig, val: OptionAnswer) -> None:
        """Redraw the prompt showing the chosen option."""
        self.new_cursor().restore()
        self.render(self.render_text(config, [], 0, answer=val.value, show_answer=True))