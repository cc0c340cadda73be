import random
from datetime import date, timedelta

import pytest

from todour.settings import PrioOnClose
from todour.todoline import (
    TodoLine,
    due_dates,
    due_in,
    format_line,
    get_url,
    is_checked,
    parse_line,
    pretty_print,
    relative_date,
    sort_key,
    threshold_dates,
)

MONDAY = date(2024, 1, 15)


@pytest.mark.parametrize(
    "shortform, expected",
    [
        ("+0d", "2024-01-15"),
        ("+1d", "2024-01-16"),
        ("+1w", "2024-01-22"),
        ("+5d", "2024-01-20"),
        ("+2w", "2024-01-29"),
        ("+1m", "2024-02-15"),
        ("+1y", "2025-01-15"),
        ("today", "today"),
        ("+invalid", "+invalid"),
    ],
)
def test_relative_date(shortform, expected):
    assert relative_date(shortform, MONDAY) == expected


def test_relative_business_day_stays_in_month():
    result = relative_date("+1b", MONDAY)
    assert result.startswith("2024-01-")
    assert date.fromisoformat(result).isoweekday() in range(1, 6)


def test_relative_business_days_skip_weekend():
    assert relative_date("+5b", MONDAY) == "2024-01-22"


def test_relative_business_days_custom_set():
    assert relative_date("+1b", MONDAY, business_days=[6, 7]) == "2024-01-20"


def test_relative_month_clamps_to_month_end():
    assert relative_date("+1m", date(2024, 1, 31)) == "2024-02-29"
    assert relative_date("+1y", date(2024, 2, 29)) == "2025-02-28"


def test_relative_procrastination_in_range():
    rng = random.Random(3)
    for _ in range(20):
        result = date.fromisoformat(relative_date("+4p", MONDAY, rng=rng))
        assert MONDAY + timedelta(days=1) <= result <= MONDAY + timedelta(days=4)


def test_relative_procrastination_zero_rejected():
    with pytest.raises(ValueError):
        relative_date("+0p", MONDAY)


def test_parse_unchecked_line():
    todo = parse_line("(A) 2024-01-16 Call mom")
    assert todo == TodoLine(False, "(A) ", "2024-01-16 ", "", "Call mom")


def test_parse_checked_line():
    todo = parse_line("x (A) 2024-01-15 2024-01-10 Call mom")
    assert todo.checked
    assert todo.priority == "(A) "
    assert todo.closed_date == "2024-01-15 "
    assert todo.created_date == "2024-01-10 "
    assert todo.text == "Call mom"


@pytest.mark.parametrize(
    "line",
    ["Buy milk", "(A) 2024-01-16 Call mom", "2024-01-15 Buy milk", "(Z) Invalid priority", "(A Invalid parenthesis"],
)
def test_open_lines_round_trip(line):
    assert format_line(parse_line(line)) == line


@pytest.mark.parametrize(
    "how, expected",
    [
        (PrioOnClose.REMOVE, "x 2024-01-15 2024-01-10 Call mom"),
        (PrioOnClose.MOVE, "x 2024-01-15 2024-01-10 (A)  Call mom"),
        (PrioOnClose.TAG, "x 2024-01-15 2024-01-10 pri:A Call mom"),
    ],
)
def test_format_closed_priority(how, expected):
    todo = parse_line("x (A) 2024-01-15 2024-01-10 Call mom")
    assert format_line(todo, how) == expected


def test_format_closed_without_created_copies_closed_date():
    todo = parse_line("x 2024-01-15 Call mom")
    assert format_line(todo) == "x 2024-01-15 2024-01-15 Call mom"
    assert todo.created_date == ""


def test_pretty_print():
    line = "(A) 2024-01-15 Buy milk +shopping @store"
    pretty = pretty_print(line)
    assert pretty == "(A) Buy milk +shopping @store"
    assert "2024-01-15" in pretty_print(line, for_edit=True)
    assert "2024-01-15" in pretty_print(line, show_dates=True)


def test_pretty_print_completed_hides_mark():
    assert pretty_print("x 2024-01-15 Call mom") == "Call mom"


@pytest.mark.parametrize(
    "row, expected",
    [("x 2024-01-15 Call mom", True), ("Buy milk", False), ("xylophone", False), ("x", False)],
)
def test_is_checked(row, expected):
    assert is_checked(row) is expected


def test_get_url():
    assert get_url("Check website http://example.com for updates") == "http://example.com"
    assert get_url("This line has no URL") == ""


def test_due_in():
    today = date(2024, 3, 10)
    tomorrow = (today + timedelta(days=1)).isoformat()
    next_week = (today + timedelta(days=7)).isoformat()
    assert due_in(f"Task due tomorrow due:{tomorrow}", today) == 1
    assert due_in(f"Task due next week due:{next_week}", today) == 7
    assert due_in("No due date", today) is None


def test_due_in_invalid_date_counts_as_today():
    assert due_in("bad due:2024-13-45", MONDAY) == 0


def test_threshold_and_due_dates():
    line = "a t:2024-01-01 b due:2024-03-03 t:2024-02-02 t:+3d"
    assert threshold_dates(line) == ["2024-01-01", "2024-02-02"]
    assert due_dates(line) == ["2024-03-03"]


def test_sort_key_ignores_marks_and_case():
    assert sort_key("B TASK") == sort_key("b task")
    assert sort_key("x 2024-01-01 C task") == sort_key("c task")
    assert sort_key("(A) a task") < sort_key("b task") < sort_key("x 2024-01-01 C task")
    rows = ["b task", "x 2024-01-01 C task", "(A) a task"]
    assert sorted(rows, key=sort_key) == ["(A) a task", "b task", "x 2024-01-01 C task"]