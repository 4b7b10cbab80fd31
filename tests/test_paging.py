import pytest

from termsurvey.paging import (
    OptionAnswer,
    compute_cursor_offset,
    option_answer_list,
    paginate,
)


def test_option_answer_list_numbers_values():
    assert option_answer_list(["a", "b"]) == [OptionAnswer("a", 0), OptionAnswer("b", 1)]


def test_option_answer_list_empty():
    assert option_answer_list([]) == []


def test_pagination_too_few():
    choices = option_answer_list(["choice1", "choice2", "choice3"])
    page, idx = paginate(4, choices, 3)
    assert page == choices
    assert idx == 3


def test_pagination_first_half():
    choices = option_answer_list(
        ["choice1", "choice2", "choice3", "choice4", "choice5", "choice6"]
    )
    page, idx = paginate(4, choices, 2)
    assert page == choices[0:4]
    assert idx == 2


def test_pagination_middle():
    choices = option_answer_list(
        ["choice0", "choice1", "choice2", "choice3", "choice4", "choice5"]
    )
    page, idx = paginate(2, choices, 3)
    assert page == choices[2:4]
    assert idx == 1


def test_pagination_last_half():
    choices = option_answer_list(
        ["choice0", "choice1", "choice2", "choice3", "choice4", "choice5"]
    )
    page, idx = paginate(3, choices, 5)
    assert page == choices[3:6]
    assert idx == 2


@pytest.mark.parametrize("sel", range(10))
def test_pagination_page_contains_selection(sel):
    choices = option_answer_list([f"c{i}" for i in range(10)])
    page, idx = paginate(4, choices, sel)
    assert len(page) == 4
    assert page[idx] == choices[sel]


def _select_option_renderer(selected):
    def render(ix, opt):
        prefix = "> " if ix == selected else "  "
        return prefix + opt.value + "\n"

    return render


@pytest.mark.parametrize(
    "values, ix, term_width, want",
    [
        ([], 0, 100, 0),
        (["one"], 0, 100, 1),
        (["one", "two"], 0, 100, 2),
        (["one", "two", "three", "four", "five"], 0, 100, 5),
        (["one", "two", "three", "four", "five"], 2, 100, 3),
        (["one", "two", "three", "four", "five"], 4, 100, 1),
        (
            [
                "wide one wide one wide one",
                "two",
                "three",
                "wide four wide four wide four",
                "five",
                "six",
            ],
            0,
            20,
            8,
        ),
        (
            [
                "wide one wide one wide one",
                "two",
                "three",
                "01234567890123456",
                "five",
                "six",
            ],
            0,
            20,
            7,
        ),
        (
            [
                "wide one wide one wide one",
                "wide two wide two wide two",
                "three",
                "four",
                "five",
                "six",
            ],
            2,
            20,
            4,
        ),
    ],
)
def test_compute_cursor_offset_select(values, ix, term_width, want):
    opts = option_answer_list(values)
    got = compute_cursor_offset(_select_option_renderer(ix), opts, ix, term_width)
    assert got == want