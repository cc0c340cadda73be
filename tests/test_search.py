from datetime import date

from todour.search import (
    apply_context_lock,
    build_filter,
    filter_rows,
    is_newer_version,
    update_check_due,
    window_title,
)

ROWS = ["Buy milk +shopping", "Call mom @phone", "Buy bread +shopping"]


def test_single_word_case_insensitive():
    assert filter_rows(ROWS, "MILK") == ["Buy milk +shopping"]


def test_all_words_required():
    assert filter_rows(ROWS, "buy +shopping") == ["Buy milk +shopping", "Buy bread +shopping"]
    assert filter_rows(ROWS, "buy mom") == []


def test_negation():
    assert filter_rows(ROWS, "buy !milk") == ["Buy bread +shopping"]


def test_custom_negation_char():
    assert filter_rows(ROWS, "buy -milk", "-") == ["Buy bread +shopping"]
    assert filter_rows(ROWS, "buy !milk", "-") == []


def test_empty_search_keeps_everything():
    assert filter_rows(ROWS, "") == ROWS


def test_leading_space_ends_filter():
    assert filter_rows(ROWS, " milk") == ROWS


def test_special_characters_are_escaped():
    pattern = build_filter("a.b")
    assert pattern.search("a.b") is not None
    assert pattern.search("axb") is None


def test_context_lock_adds_missing_contexts():
    assert apply_context_lock("Buy milk", "@home !@work") == "Buy milk @home"


def test_context_lock_skips_present_contexts():
    assert apply_context_lock("Buy milk @HOME", "@home") == "Buy milk @HOME"


def test_window_title():
    assert window_title("Todour-1.0", 3, 5) == "Todour-1.0 (3/5)"


def test_update_check_due():
    assert update_check_due("2024-01-01", date(2024, 1, 9)) is True
    assert update_check_due("2024-01-01", date(2024, 1, 8)) is False


def test_update_check_not_due_without_date():
    assert update_check_due("", date(2024, 1, 9)) is False
    assert update_check_due("not a date", date(2024, 1, 9)) is False


def test_is_newer_version():
    assert is_newer_version("2.21", "2.20") is True
    assert is_newer_version("2.20", "2.20") is False
    assert is_newer_version("garbage", "2.20") is False