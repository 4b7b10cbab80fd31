"""Transformers that turn an answer into another representation."""

from __future__ import annotations

from collections.abc import Callable
from typing import Any

from termsurvey.validate import is_zero

__all__ = ["transform_string", "to_lower", "title", "compose_transformers"]

Transformer = Callable[[Any], Any]


def transform_string(f: Callable[[str], str]) -> Transformer:
    """Build a transformer that applies ``f`` to string answers.

    Empty answers and answers that are not strings give ``""``.
    """

    def transform(ans: Any) -> Any:
        if is_zero(ans) or not isinstance(ans, str):
            return ""
        return f(ans)

    return transform


def _is_separator(char: str) -> bool:
    if char.isascii():
        return not (char.isalnum() or char == "_")
    if char.isalpha() or char.isdigit():
        return False
    return char.isspace()


def _title_words(text: str) -> str:
    result = []
    previous = " "
    for char in text:
        if _is_separator(previous):
            titled = char.title()
            result.append(titled if len(titled) == 1 else char)
        else:
            result.append(char)
        previous = char
    return "".join(result)


def to_lower(ans: Any) -> Any:
    """Lower-case a string answer."""
    return transform_string(str.lower)(ans)


def title(ans: Any) -> Any:
    """Capitalise the first letter of every word of a string answer."""
    return transform_string(_title_words)(ans)


def compose_transformers(*args: Transformer) -> Transformer:
    """Chain transformers, each receiving the previous one's result."""

    def transform(ans: Any) -> Any:
        for transformer in args:
            ans = transformer(ans)
        return ans

    return transform