"""Parsing, formatting and inspection of single todo.txt lines."""

from __future__ import annotations

import calendar
import random
import re
from dataclasses import dataclass
from datetime import date
from typing import Iterable

from todour.settings import DEFAULT_BUSINESS_DAYS, PrioOnClose

TODO_LINE_RE = re.compile(
    r"(x\s+)?(\([A-Z]\)\s+)?(\d\d\d\d-\d\d-\d\d\s+)?(\d\d\d\d-\d\d-\d\d\s+)?(.*)"
)
PROJECT_RE = re.compile(r"\s(\+[^\s]+)")
CONTEXT_RE = re.compile(r"\s(@[^\s]+)")
THRESHOLD_DATE_RE = re.compile(r"t:(\d\d\d\d-\d\d-\d\d)")
THRESHOLD_PROJECT_RE = re.compile(r"t:(\+[^\s]+)")
THRESHOLD_CONTEXT_RE = re.compile(r"t:(@[^\s]+)")
DUE_DATE_RE = re.compile(r"due:(\d\d\d\d-\d\d-\d\d)")
URL_RE = re.compile(r"[a-zA-Z0-9_]+://([-a-zA-Z0-9@:%_+.~#?&/=(){}\\]*)")
RELATIVE_DATE_RE = re.compile(r"\+(\d+)([dwmypb])")

DATE_FORMAT = "%Y-%m-%d"


@dataclass
class TodoLine:
    """The parts of a todo.txt line.

    priority and the dates keep the whitespace that followed them in the
    line, so that formatting the parts again gives back the same text.
    """

    checked: bool = False
    priority: str = ""
    created_date: str = ""
    closed_date: str = ""
    text: str = ""


def parse_line(line: str) -> TodoLine:
    """Split a line into completion mark, priority, dates and text."""
    match = TODO_LINE_RE.match(line)
    if match is None:
        return TodoLine()
    done, priority, first_date, second_date, text = (g or "" for g in match.groups())
    checked = bool(done)
    if checked:
        return TodoLine(True, priority, second_date, first_date, text)
    # An open task has no closed date; a second date, if any, is dropped.
    return TodoLine(False, priority, first_date, "", text)


def format_line(todo: TodoLine, prio_on_close: PrioOnClose | int = PrioOnClose.REMOVE) -> str:
    """Build the line text for todo, placing a completed task's priority per prio_on_close."""
    created = todo.created_date
    if todo.checked and not created:
        created = todo.closed_date

    parts = ["x " if todo.checked else todo.priority, todo.closed_date, created]
    if todo.checked and todo.priority:
        how = PrioOnClose(prio_on_close)
        if how is PrioOnClose.MOVE:
            parts.append(todo.priority + " ")
        elif how is PrioOnClose.TAG and len(todo.priority) > 2:
            parts.append(f"pri:{todo.priority[1]} ")
    parts.append(todo.text)
    return "".join(parts)


def pretty_print(row: str, for_edit: bool = False, show_dates: bool = False) -> str:
    """Text of a line for display: priority and text, with dates when editing or asked for."""
    todo = parse_line(row)
    text = todo.priority
    if for_edit or show_dates:
        text += todo.closed_date + todo.created_date
    text += todo.text
    return text.strip()


def is_checked(row: str) -> bool:
    """True when the line is marked as completed."""
    return row.startswith("x ")


def get_url(line: str) -> str:
    """The first URL in the line, or an empty string."""
    match = URL_RE.search(line)
    return match.group(0) if match else ""


def _add_months(base: date, months: int) -> date:
    total = base.month - 1 + months
    year, month = base.year + total // 12, total % 12 + 1
    day = min(base.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def relative_date(
    shortform: str,
    base: date | None = None,
    business_days: Iterable[int] | None = None,
    rng: random.Random | None = None,
) -> str:
    """Resolve a shorthand such as '+3d' against base into a YYYY-MM-DD date.

    Units: d days, w weeks, m months, y years, b business days and p a
    random number of days from 1 to the amount. A string without a
    shorthand is returned unchanged.
    """
    match = RELATIVE_DATE_RE.search(shortform)
    if match is None:
        return shortform
    day = base if base is not None else date.today()
    amount, unit = int(match.group(1)), match.group(2)

    if unit == "d":
        day = date.fromordinal(day.toordinal() + amount)
    elif unit == "w":
        day = date.fromordinal(day.toordinal() + amount * 7)
    elif unit == "m":
        day = _add_months(day, amount)
    elif unit == "y":
        day = _add_months(day, amount * 12)
    elif unit == "p":
        if amount <= 0:
            raise ValueError("a procrastination shorthand needs a positive amount")
        day = date.fromordinal(day.toordinal() + (rng or random).randrange(amount) + 1)
    else:
        days = {int(d) for d in business_days or ()} or set(DEFAULT_BUSINESS_DAYS)
        if amount and not days & set(range(1, 8)):
            raise ValueError("no valid business days to count")
        counted = 0
        while counted < amount:
            day = date.fromordinal(day.toordinal() + 1)
            if day.isoweekday() in days:
                counted += 1
    return day.strftime(DATE_FORMAT)


def _parse_date(text: str) -> date | None:
    try:
        return date.fromisoformat(text)
    except ValueError:
        return None


def due_in(text: str, today: date | None = None) -> int | None:
    """Days from today until the line's due: date, or None without one.

    A due date that is not a real date counts as due today.
    """
    match = DUE_DATE_RE.search(text)
    if match is None:
        return None
    due = _parse_date(match.group(1))
    if due is None:
        return 0
    return (due - (today or date.today())).days


def threshold_dates(text: str) -> list[str]:
    """Every t:YYYY-MM-DD date in the line, in order."""
    return THRESHOLD_DATE_RE.findall(text)


def due_dates(text: str) -> list[str]:
    """Every due:YYYY-MM-DD date in the line, in order."""
    return DUE_DATE_RE.findall(text)


def sort_key(row: str) -> str:
    """Key for alphabetical ordering, ignoring completion marks and dates."""
    return pretty_print(row).lower()