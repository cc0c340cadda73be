"""Search filtering, context lock, title text and update checks of the main window."""

from __future__ import annotations

import re
from datetime import date, timedelta
from typing import Iterable

from todour.settings import DEFAULT_SEARCH_NOT_CHAR

UPDATE_INTERVAL_DAYS = 7


def build_filter(text: str, not_char: str = DEFAULT_SEARCH_NOT_CHAR) -> re.Pattern[str]:
    """Turn 'a b !c' into a case-insensitive pattern requiring a and b and forbidding c.

    Words are read up to the first empty one; a word that is only the
    negation character ends the list as well.
    """
    negate = not_char[:1]
    pattern = "(?=^.*$)"
    for word in re.split(r"\s+", text):
        start = "(?=^.*"
        if word and negate and word[0] == negate:
            start = "(?!^.*"
            word = word[1:]
        if not word:
            break
        pattern += start + re.escape(word) + ".*$)"
    return re.compile(pattern, re.IGNORECASE)


def filter_rows(
    rows: Iterable[str], text: str, not_char: str = DEFAULT_SEARCH_NOT_CHAR
) -> list[str]:
    """The rows that the search text lets through, in their order."""
    pattern = build_filter(text, not_char)
    return [row for row in rows if pattern.search(row)]


def apply_context_lock(text: str, search: str) -> str:
    """Append to text every search word it lacks, except negated ('!') ones."""
    result = text
    for context in re.split(r"\s", search):
        if context.startswith("!"):
            continue
        if context.lower() not in result.lower():
            result += " " + context
    return result


def window_title(base: str, visible: int, total: int) -> str:
    """The window title showing how many rows are visible out of all."""
    return f"{base} ({visible}/{total})"


def update_check_due(last_check: str, today: date | None = None) -> bool:
    """True when more than a week has passed since the last update check.

    An empty or unreadable last check date never makes a check due.
    """
    if not last_check:
        return False
    try:
        last = date.fromisoformat(last_check)
    except ValueError:
        return False
    next_check = last + timedelta(days=UPDATE_INTERVAL_DAYS)
    return ((next_check - (today or date.today())).days) < 0


def _to_float(value: str | float) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def is_newer_version(latest: str | float, current: str | float) -> bool:
    """True when the published version number is above the running one."""
    return _to_float(latest) > _to_float(current)