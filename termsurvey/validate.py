"""Validators for answers; a failing validator raises :class:`ValidationError`."""

from __future__ import annotations

import dataclasses
from collections.abc import Callable
from typing import Any

from termsurvey.paging import OptionAnswer

__all__ = [
    "ValidationError",
    "is_zero",
    "required",
    "max_length",
    "min_length",
    "max_items",
    "min_items",
    "compose_validators",
]

Validator = Callable[[Any], None]


class ValidationError(ValueError):
    """An answer was rejected by a validator."""


def is_zero(value: Any) -> bool:
    """Tell whether ``value`` is the empty or zero value of its type."""
    if value is None:
        return True
    if isinstance(value, (bool, int, float, complex)):
        return value == 0
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return all(is_zero(getattr(value, f.name)) for f in dataclasses.fields(value))
    if hasattr(value, "__len__"):
        return len(value) == 0
    try:
        return bool(value == type(value)())
    except TypeError:
        return False


def required(val: Any) -> None:
    """Reject empty answers; ``False`` is a valid answer."""
    if is_zero(val) and not isinstance(val, bool):
        raise ValidationError("Value is required")


def _length_error(val: Any) -> ValidationError:
    return ValidationError(
        f"cannot enforce length on response of type {type(val).__name__}"
    )


def max_length(length: int) -> Validator:
    """Require a string of at most ``length`` characters."""

    def validate(val: Any) -> None:
        if not isinstance(val, str):
            raise _length_error(val)
        if len(val) > length:
            raise ValidationError(f"value is too long. Max length is {length}")

    return validate


def min_length(length: int) -> Validator:
    """Require a string of at least ``length`` characters."""

    def validate(val: Any) -> None:
        if not isinstance(val, str):
            raise _length_error(val)
        if len(val) < length:
            raise ValidationError(f"value is too short. Min length is {length}")

    return validate


def _answer_list(val: Any) -> list[OptionAnswer]:
    if isinstance(val, list) and all(isinstance(item, OptionAnswer) for item in val):
        return val
    raise ValidationError(
        "cannot impose the length on something other than a list of answers"
    )


def max_items(number_items: int) -> Validator:
    """Require a list of at most ``number_items`` option answers."""

    def validate(val: Any) -> None:
        if len(_answer_list(val)) > number_items:
            raise ValidationError(f"value is too long. Max items is {number_items}")

    return validate


def min_items(number_items: int) -> Validator:
    """Require a list of at least ``number_items`` option answers."""

    def validate(val: Any) -> None:
        if len(_answer_list(val)) < number_items:
            raise ValidationError(f"value is too short. Min items is {number_items}")

    return validate


def compose_validators(*args: Validator) -> Validator:
    """Run validators in order; the first failure is raised."""

    def validate(val: Any) -> None:
        for validator in args:
            validator(val)

    return validate