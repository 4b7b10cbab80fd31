import io
from dataclasses import dataclass

import pytest

from termsurvey.config import with_page_size, with_stdio, with_validator
from termsurvey.survey import Question, ask, ask_one
from termsurvey.transform import to_lower
from termsurvey.validate import ValidationError, max_length, min_length, required


class MockPrompt:
    def __init__(self, answers):
        self.answers = list(answers)
        self.index = 0
        self.cleanups = 0
        self.printed_errors = []
        self.configs = []

    def prompt(self, config):
        self.configs.append(config)
        if self.index >= len(self.answers):
            raise RuntimeError("no more answers")
        val = self.answers[self.index]
        self.index += 1
        return val

    def cleanup(self, config, val):
        self.cleanups += 1

    def error(self, config, invalid):
        self.printed_errors.append(invalid)


class AgainPrompt(MockPrompt):
    def __init__(self, answers):
        super().__init__(answers)
        self.again_calls = []

    def prompt_again(self, config, invalid, err):
        self.again_calls.append((invalid, str(err)))
        return self.prompt(config)


class StdioPrompt(MockPrompt):
    def __init__(self, answers):
        super().__init__(answers)
        self.stdio = None

    def with_stdio(self, stdio):
        self.stdio = stdio


def reject_uppercase(v):
    if v.lower() != v:
        raise ValidationError("value contains uppercase characters")


def test_ask_validation():
    @dataclass
    class Result:
        TLDN: str = ""

    p = MockPrompt(["", "company", "COM", "com"])
    res = Result()
    ask(
        [Question(name="TLDN", prompt=p, validate=reject_uppercase)],
        res,
        with_validator(min_length(1)),
        with_validator(max_length(5)),
    )
    assert res.TLDN == "com"
    assert p.cleanups == 1
    assert [str(e) for e in p.printed_errors] == [
        "value is too short. Min length is 1",
        "value is too long. Max length is 5",
        "value contains uppercase characters",
    ]


def test_ask_raises_if_target_is_none():
    with pytest.raises(ValueError):
        ask([], None)


def test_ask_with_required():
    p = MockPrompt(["", "Johnny Appleseed"])
    answers = {}
    ask([Question(name="name", prompt=p, validate=required)], answers)
    assert answers == {"name": "Johnny Appleseed"}
    assert [str(e) for e in p.printed_errors] == ["Value is required"]


def test_ask_with_transformer():
    answers = {}
    ask(
        [Question(name="name", prompt=MockPrompt(["Johnny Appleseed"]), transform=to_lower)],
        answers,
    )
    assert answers == {"name": "johnny appleseed"}


def test_transform_returning_none_keeps_answer():
    answers = {}
    ask(
        [Question(name="n", prompt=MockPrompt(["Keep"]), transform=lambda a: None)],
        answers,
    )
    assert answers == {"n": "Keep"}


def test_ask_several_questions_in_order():
    answers = ask(
        [
            Question(name="color", prompt=MockPrompt(["red"])),
            Question(name="color2", prompt=MockPrompt(["blue"])),
        ],
        {},
    )
    assert answers == {"color": "red", "color2": "blue"}


def test_ask_matches_attribute_case_insensitively():
    class Answers:
        def __init__(self):
            self.Color = ""

    result = Answers()
    ask([Question(name="color", prompt=MockPrompt(["green"]))], result)
    assert result.Color == "green"


def test_ask_missing_field():
    class Answers:
        def __init__(self):
            self.name = ""

    with pytest.raises(AttributeError, match="could not find field matching color"):
        ask([Question(name="color", prompt=MockPrompt(["green"]))], Answers())


def test_prompt_error_propagates():
    p = MockPrompt(["x"])
    with pytest.raises(RuntimeError, match="no more answers"):
        ask([Question(name="a", prompt=p, validate=min_length(5))], {})
    assert p.cleanups == 0


def test_prompt_again_receives_invalid_answer():
    p = AgainPrompt(["", "ok"])
    answers = ask([Question(name="a", prompt=p, validate=required)], {})
    assert answers == {"a": "ok"}
    assert p.again_calls == [("", "Value is required")]


def test_ask_passes_stdio_to_prompt():
    stdin, stdout, stderr = io.StringIO(), io.StringIO(), io.StringIO()
    p = StdioPrompt(["v"])
    ask([Question(name="a", prompt=p)], {}, with_stdio(stdin, stdout, stderr))
    assert p.stdio.stdin is stdin
    assert p.stdio.stdout is stdout
    assert p.stdio.stderr is stderr


def test_ask_options_reach_prompt_config_and_none_is_skipped():
    p = MockPrompt(["v"])
    ask([Question(name="a", prompt=p)], {}, None, with_page_size(3))
    assert p.configs[0].page_size == 3


def test_ask_one_returns_answer():
    p = MockPrompt(["", "answer"])
    assert ask_one(p, with_validator(required)) == "answer"
    assert p.cleanups == 1
    assert len(p.printed_errors) == 1


def test_ask_one_propagates_validator_free_answer():
    assert ask_one(MockPrompt([False]), with_validator(required)) is False