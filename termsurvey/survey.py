"""Asking a series of questions, validating and transforming the answers."""

from __future__ import annotations

from collections.abc import Callable, MutableMapping, Sequence
from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

from termsurvey.config import AskOptions, PromptConfig, default_ask_options

__all__ = ["Prompt", "Question", "ask", "ask_one"]

Validator = Callable[[Any], None]
Transformer = Callable[[Any], Any]
AskOpt = Callable[[AskOptions], None]


@runtime_checkable
class Prompt(Protocol):
    """Something that can ask the user for an answer.

    A prompt may also define ``with_stdio(stdio)`` to receive the streams of
    the ask, and ``prompt_again(config, invalid, error)`` to ask again after an
    invalid answer.
    """

    def prompt(self, config: PromptConfig) -> Any:
        """Ask the user and return the answer."""

    def cleanup(self, config: PromptConfig, val: Any) -> None:
        """Redraw the prompt showing the accepted answer."""

    def error(self, config: PromptConfig, invalid: Any) -> None:
        """Show why the last answer was rejected."""


@dataclass
class Question:
    """One question: where its answer goes, how it is asked and checked."""

    name: str
    prompt: Prompt
    validate: Validator | None = None
    transform: Transformer | None = None


def _write_answer(response: Any, name: str, ans: Any) -> None:
    if isinstance(response, MutableMapping):
        response[name] = ans
        return
    if hasattr(response, name):
        setattr(response, name, ans)
        return
    attributes = list(getattr(response, "__dataclass_fields__", {})) + list(
        getattr(response, "__dict__", {})
    )
    for attribute in attributes:
        if attribute.lower() == name.lower():
            setattr(response, attribute, ans)
            return
    raise AttributeError(f"could not find field matching {name}")


def ask(questions: Sequence[Question], response: Any, *args: AskOpt | None) -> Any:
    """Ask every question in turn and store each answer in ``response``.

    ``response`` is a mapping, which receives each answer under its question's
    name, or an object whose attribute of that name (matched case-insensitively)
    is set. An answer that a validator rejects with ``ValueError`` is shown to
    the user and asked for again. Returns ``response``.
    """
    options = default_ask_options()
    for opt in args:
        if opt is not None:
            opt(options)

    if response is None:
        raise ValueError("cannot call ask() with a None reference to record the answers")

    config = options.prompt_config

    def validate(question: Question, val: Any) -> None:
        if question.validate is not None:
            question.validate(val)
        for validator in options.validators:
            validator(val)

    for question in questions:
        prompt = question.prompt
        with_stdio = getattr(prompt, "with_stdio", None)
        if callable(with_stdio):
            with_stdio(options.stdio)

        ans: Any = None
        validation_error: ValueError | None = None
        while True:
            if validation_error is not None:
                prompt.error(config, validation_error)
            prompt_again = getattr(prompt, "prompt_again", None)
            if validation_error is not None and callable(prompt_again):
                ans = prompt_again(config, ans, validation_error)
            else:
                ans = prompt.prompt(config)
            try:
                validate(question, ans)
            except ValueError as exc:
                validation_error = exc
            else:
                break

        if question.transform is not None:
            transformed = question.transform(ans)
            if transformed is not None:
                ans = transformed

        prompt.cleanup(config, ans)
        _write_answer(response, question.name, ans)

    return response


def ask_one(prompt: Prompt, *args: AskOpt | None) -> Any:
    """Ask a single prompt and return its validated answer."""
    answers: dict[str, Any] = {}
    ask([Question(name="", prompt=prompt)], answers, *args)
    return answers[""]