import fcntl
import io
import os
import struct
import termios

import pytest

from termsurvey.config import Icon, default_icons, default_prompt_config
from termsurvey.paging import option_answer_list
from termsurvey.renderer import Renderer, colorize, format_error, strip_ansi
from termsurvey.terminal import Stdio

TERM_WIDTH = 72
RESET_LINE = "\x1b[0G\x1b[2K"
UP_ERASE = "\x1b[1A\x1b[0G\x1b[2K"


@pytest.fixture
def tty():
    master, slave = os.openpty()
    fcntl.ioctl(slave, termios.TIOCSWINSZ, struct.pack("HHHH", 30, TERM_WIDTH, 0, 0))
    with os.fdopen(slave, "w") as out:
        yield out
    os.close(master)


def string_renderer(color=False):
    out = io.StringIO()
    return Renderer(stdio=Stdio(stdin=io.StringIO(), stdout=out, stderr=out), color=color), out


@pytest.mark.parametrize(
    "text, wants",
    [
        ("", 0),
        ("hello", 0),
        ("hello\n", 1),
        ("hello\nbeautiful\nworld\n", 3),
        ("A" * TERM_WIDTH + "\n", 1),
        ("A" * (TERM_WIDTH + 1) + "\n", 2),
        ("A" * (TERM_WIDTH * 2) + "\n", 2),
        ("A" * (TERM_WIDTH * 2 + 1) + "\n", 3),
    ],
)
def test_count_lines(tty, text, wants):
    renderer = Renderer(stdio=Stdio(stdin=tty, stdout=tty, stderr=tty))
    assert renderer.count_lines(text) == wants


def test_term_width_of_tty(tty):
    renderer = Renderer(stdio=Stdio(stdin=tty, stdout=tty, stderr=tty))
    assert renderer.term_width() == TERM_WIDTH
    assert renderer.term_width_safe() == TERM_WIDTH


def test_term_width_without_terminal():
    renderer, _ = string_renderer()
    with pytest.raises(OSError):
        renderer.term_width()
    assert renderer.term_width_safe() == 10000


def test_validation_error_template():
    icon = default_icons().error
    actual = format_error(icon, ValueError("Football is not a valid month"), color=False)
    assert actual == f"{icon.text} Sorry, your reply was invalid: Football is not a valid month\n"


def test_validation_error_template_with_color():
    actual = format_error(Icon("X", "red"), "bad", color=True)
    assert actual == "\x1b[31mX Sorry, your reply was invalid: bad\x1b[0m\n"


@pytest.mark.parametrize(
    "style, expected",
    [
        ("red", "\x1b[31m"),
        ("cyan+b", "\x1b[1;36m"),
        ("green+hb", "\x1b[1;92m"),
        ("default+hb", "\x1b[1;39m"),
        ("reset", "\x1b[0m"),
        ("red:white", "\x1b[31;47m"),
        ("", ""),
    ],
)
def test_colorize(style, expected):
    assert colorize(style, True) == expected


def test_colorize_disabled():
    assert colorize("red", False) == ""


def test_strip_ansi():
    text = colorize("green+hb") + "hi" + colorize("reset") + "\x1b7\x1b[2K"
    assert strip_ansi(text) == "hi"


def test_render_erases_previous_text():
    renderer, out = string_renderer()
    renderer.render("a\nb\n")
    assert out.getvalue() == RESET_LINE + "a\nb\n"
    out.seek(0)
    out.truncate()
    renderer.render("c")
    assert out.getvalue() == RESET_LINE + UP_ERASE * 2 + "c"


def test_render_counts_plain_text_only():
    renderer, out = string_renderer()
    renderer.render(colorize("red") + "x\n" + colorize("reset"))
    out.seek(0)
    out.truncate()
    renderer.render("y")
    assert out.getvalue() == RESET_LINE + UP_ERASE + "y"


def test_append_rendered_text_is_erased_next_time():
    renderer, out = string_renderer()
    renderer.append_rendered_text("x\n")
    renderer.render("y")
    assert out.getvalue() == RESET_LINE + UP_ERASE + "y"


def test_error_output_and_cleanup():
    renderer, out = string_renderer()
    config = default_prompt_config()
    renderer.error(config, ValueError("bad"))
    message = "X Sorry, your reply was invalid: bad\n"
    assert out.getvalue() == RESET_LINE * 2 + message
    out.seek(0)
    out.truncate()
    renderer.error(config, ValueError("worse"))
    assert out.getvalue() == (
        RESET_LINE + UP_ERASE + RESET_LINE + "X Sorry, your reply was invalid: worse\n"
    )


def test_offset_cursor():
    renderer, out = string_renderer()
    renderer.offset_cursor(2)
    assert out.getvalue() == "\x1b[1A\x1b[0G" * 2


def test_render_with_cursor_offset():
    renderer, out = string_renderer()
    opts = option_answer_list(["one", "two", "three"])
    renderer.render_with_cursor_offset(
        "question\n", lambda i, o: f"  {o.value}\n", opts, 1
    )
    assert out.getvalue() == (
        "\x1b8" + RESET_LINE + "question\n" + "\x1b7" + "\x1b[1A\x1b[0G" * 2
    )


def test_with_stdio_switches_output():
    renderer, first = string_renderer()
    second = io.StringIO()
    renderer.with_stdio(Stdio(stdin=io.StringIO(), stdout=second, stderr=second))
    renderer.render("z")
    assert first.getvalue() == ""
    assert second.getvalue().endswith("z")