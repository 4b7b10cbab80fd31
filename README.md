# termsurvey

Interactive prompts for terminal programs. Ask a series of questions,
let the user pick from a filterable list with the arrow keys, validate
what they answered and transform it before it is stored.

Runs on POSIX terminals and needs only the standard library.

## Installing

```
pip install termsurvey
```

## Picking from a list

`Select` (in `termsurvey.select`) shows a list of options. The user moves
with the arrow keys or Tab (or `j`/`k` in vim mode, toggled with Escape),
types to filter the list, and presses Enter to choose. The answer is an
`OptionAnswer` (from `termsurvey.paging`) holding the chosen `value` and
its `index` in the full list of options.

```python
from termsurvey.select import Select
from termsurvey.survey import ask_one

prompt = Select(message="Choose a color:", options=["red", "blue", "green"])
answer = ask_one(prompt)
print(answer.value, answer.index)
```

A `default` may be given as one of the option strings or as an index.
The number of options shown at once comes from the prompt's `page_size`,
or from the prompt configuration (seven by default). Filtering is
case-insensitive by default; a prompt's own `filter` function replaces
the configured one. An optional `description(value, index)` function adds
a short description after each option.

## Asking several questions

```python
from termsurvey.select import Select
from termsurvey.survey import Question, ask
from termsurvey.validate import required

questions = [
    Question(
        name="color",
        prompt=Select(message="Choose a color:", options=["red", "blue", "green"]),
        validate=required,
    ),
]

answers = {}
ask(questions, answers)
```

`ask` stores each answer in a mapping under the question's name, or sets
the attribute of that name (matched case-insensitively) on an object.
When a validator rejects an answer by raising `ValueError`, the prompt
shows the reason and asks again. A question's `transform` is applied to
the accepted answer before it is stored.

Any object with `prompt(config)`, `cleanup(config, val)` and
`error(config, invalid)` methods can be used as a prompt; see the
`Prompt` protocol in `termsurvey.survey`.

## Validators

From `termsurvey.validate`:

- `required` – rejects empty values (but accepts `False`)
- `min_length(n)`, `max_length(n)` – string length in characters
- `min_items(n)`, `max_items(n)` – number of chosen options in a list of `OptionAnswer`
- `compose_validators(...)` – runs several in turn, stopping at the first failure

Failures are raised as `ValidationError`, a subclass of `ValueError`.

## Transformers

From `termsurvey.transform`: `to_lower`, `title`, `transform_string(f)`
to wrap any string function, and `compose_transformers(...)` to chain
them. Empty and non-string answers give `""`, which `ask` treats as
leaving the answer as it was only when the result is `None`; so use
these on string answers.

## Options

`termsurvey.config` provides options passed as extra arguments to `ask`
and `ask_one`:

- `with_stdio(stdin, stdout, stderr)`
- `with_page_size(n)`
- `with_filter(func)` and `with_keep_filter(flag)`
- `with_validator(func)` – applied to every question
- `with_help_input(char)`
- `with_icons(func)` – receives the `IconSet` to adjust
- `with_show_cursor(flag)`

```python
from termsurvey.config import with_page_size, with_validator
from termsurvey.validate import required

ask(questions, answers, with_page_size(10), with_validator(required))
```

Pressing Ctrl+C during a prompt raises `InterruptError` from
`termsurvey.terminal`.

## Lower-level pieces

- `termsurvey.renderer.Renderer` draws prompt text and erases what it drew
  before, counting wrapped lines against the terminal width.
- `termsurvey.runereader.RuneReader` reads single keys (turning arrow and
  Home/End/Delete escape sequences into key codes) and edited lines, with
  an optional mask character for hidden input.
- `termsurvey.cursor.Cursor` writes ANSI cursor movements and asks the
  terminal for the cursor position and size.

## What it does not do

`Select` is the only ready-made prompt. There are no text input, yes/no,
password, multi-select or editor prompts, although `RuneReader.read_line`
can serve as the basis of one. Windows consoles are not handled: raw key
input relies on `termios`.

## Running the tests

```
pip install -e ".[test]"
pytest
```