"""Prompt configuration, icons and the options that ``ask`` accepts."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from termsurvey.terminal import Stdio

__all__ = [
    "Icon",
    "IconSet",
    "PromptConfig",
    "AskOptions",
    "default_filter",
    "default_ask_options",
    "default_prompt_config",
    "default_icons",
    "with_stdio",
    "with_filter",
    "with_keep_filter",
    "with_validator",
    "with_page_size",
    "with_help_input",
    "with_icons",
    "with_show_cursor",
]

Filter = Callable[[str, str, int], bool]
Validator = Callable[[Any], None]
AskOpt = Callable[["AskOptions"], None]


@dataclass
class Icon:
    """The text of an icon and the colour format it is printed with."""

    text: str = ""
    format: str = ""


@dataclass
class IconSet:
    """The icons prompts use."""

    help_input: Icon = field(default_factory=Icon)
    error: Icon = field(default_factory=lambda: Icon("X", "red"))
    help: Icon = field(default_factory=lambda: Icon("?", "cyan"))
    question: Icon = field(default_factory=lambda: Icon("?", "green+hb"))
    marked_option: Icon = field(default_factory=lambda: Icon("[x]", "green"))
    unmarked_option: Icon = field(default_factory=lambda: Icon("[ ]", "default+hb"))
    select_focus: Icon = field(default_factory=lambda: Icon(">", "cyan+b"))


def default_filter(filter: str, value: str, index: int) -> bool:
    """Keep an option when it contains the filter text, ignoring case."""
    return filter.lower() in value.lower()


@dataclass
class PromptConfig:
    """Settings shared by every prompt of one ``ask``."""

    page_size: int = 7
    icons: IconSet = field(default_factory=IconSet)
    help_input: str = "?"
    suggest_input: str = "tab"
    filter: Filter = default_filter
    keep_filter: bool = False
    show_cursor: bool = False


@dataclass
class AskOptions:
    """Streams, extra validators and prompt settings for one ``ask``."""

    stdio: Stdio = field(default_factory=Stdio)
    validators: list[Validator] = field(default_factory=list)
    prompt_config: PromptConfig = field(default_factory=PromptConfig)


def default_ask_options() -> AskOptions:
    """Options using the process's standard streams and the stock settings."""
    return AskOptions()


def default_prompt_config() -> PromptConfig:
    """A fresh copy of the stock prompt settings."""
    return default_ask_options().prompt_config


def default_icons() -> IconSet:
    """A fresh copy of the stock icons."""
    return default_prompt_config().icons


def with_stdio(stdin: Any, stdout: Any, stderr: Any) -> AskOpt:
    """Use the given input, output and error streams instead of the process's own."""

    def apply(options: AskOptions) -> None:
        options.stdio = Stdio(stdin=stdin, stdout=stdout, stderr=stderr)

    return apply


def with_filter(filter: Filter) -> AskOpt:
    """Use ``filter`` as the default option filter."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.filter = filter

    return apply


def with_keep_filter(keep_filter: bool) -> AskOpt:
    """Keep the filter text after a selection is made."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.keep_filter = keep_filter

    return apply


def with_validator(validator: Validator) -> AskOpt:
    """Add a validator that every answer must pass."""

    def apply(options: AskOptions) -> None:
        options.validators.append(validator)

    return apply


def with_page_size(page_size: int) -> AskOpt:
    """Set the default number of options shown at once."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.page_size = page_size

    return apply


def with_help_input(char: str) -> AskOpt:
    """Set the key that asks a prompt for its help text."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.help_input = str(char)

    return apply


def with_icons(set_icons: Callable[[IconSet], None]) -> AskOpt:
    """Let ``set_icons`` change the icon set in place."""

    def apply(options: AskOptions) -> None:
        set_icons(options.prompt_config.icons)

    return apply


def with_show_cursor(show_cursor: bool) -> AskOpt:
    """Choose whether the cursor stays visible while prompting."""

    def apply(options: AskOptions) -> None:
        options.prompt_config.show_cursor = show_cursor

    return apply