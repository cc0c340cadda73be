"""A row-oriented view of a todo.txt directory, with display text, fonts and colours."""

from __future__ import annotations

from dataclasses import dataclass

from todour import todoline
from todour.settings import (
    DEFAULT_ACTIVE_COLOR,
    DEFAULT_DUE_LATE_COLOR,
    DEFAULT_DUE_WARNING,
    DEFAULT_DUE_WARNING_COLOR,
    DEFAULT_INACTIVE_COLOR,
    DEFAULT_SHOW_DATES,
    KEY_ACTIVE_COLOR,
    KEY_ACTIVE_FONT,
    KEY_DUE_LATE_COLOR,
    KEY_DUE_WARNING,
    KEY_DUE_WARNING_COLOR,
    KEY_INACTIVE_COLOR,
    KEY_INACTIVE_FONT,
    KEY_SHOW_DATES,
    Settings,
)
from todour.todofile import TodoTxt


@dataclass(frozen=True)
class FontStyle:
    """How a row's text is drawn.

    description is the stored font description for active or inactive rows,
    empty when none has been chosen.
    """

    description: str = ""
    strike_out: bool = False
    underline: bool = False


class TodoTableModel:
    """The lines of a todo list in display order, addressed by row number."""

    def __init__(self, todo: TodoTxt, settings: Settings | None = None) -> None:
        self.todo = todo
        self.settings = settings if settings is not None else todo.settings
        self._rows: list[str] | None = None
        self.todo.parse()

    # -- reading -----------------------------------------------------------

    def rows(self) -> list[str]:
        """The raw lines, in the order they are shown."""
        if self._rows is None:
            self._rows = self.todo.get_all()
        return list(self._rows)

    def count(self) -> int:
        return len(self.rows())

    def _raw(self, row: int) -> str:
        rows = self.rows()
        if not 0 <= row < len(rows):
            raise IndexError(f"row {row} is out of range (0..{len(rows) - 1})")
        return rows[row]

    def display_text(self, row: int) -> str:
        """Text shown for the row; dates only when the settings ask for them."""
        show_dates = bool(self.settings.get(KEY_SHOW_DATES, DEFAULT_SHOW_DATES))
        return todoline.pretty_print(self._raw(row), False, show_dates)

    def edit_text(self, row: int) -> str:
        """Text offered for editing the row, dates included."""
        return todoline.pretty_print(self._raw(row), True)

    def is_checked(self, row: int) -> bool:
        return todoline.is_checked(self._raw(row))

    def font(self, row: int) -> FontStyle:
        """Font for the row: struck out when done, underlined when it holds a URL."""
        raw = self._raw(row)
        key = KEY_INACTIVE_FONT if self.todo.is_inactive(raw) else KEY_ACTIVE_FONT
        return FontStyle(
            description=str(self.settings.get(key, "") or ""),
            strike_out=todoline.is_checked(raw),
            underline=bool(todoline.get_url(raw)),
        )

    def _color(self, key: str, default: int) -> int:
        return int(self.settings.get(key, default))

    def foreground(self, row: int) -> int:
        """ARGB colour of the row's text, from due state, inactivity or the default."""
        raw = self._raw(row)
        due = self.todo.due_in(raw)
        active = not raw.startswith("x ")
        if active and due is not None:
            if due <= 0:
                return self._color(KEY_DUE_LATE_COLOR, DEFAULT_DUE_LATE_COLOR)
            if due <= int(self.settings.get(KEY_DUE_WARNING, DEFAULT_DUE_WARNING)):
                return self._color(KEY_DUE_WARNING_COLOR, DEFAULT_DUE_WARNING_COLOR)
        if self.todo.is_inactive(raw):
            return self._color(KEY_INACTIVE_COLOR, DEFAULT_INACTIVE_COLOR)
        return self._color(KEY_ACTIVE_COLOR, DEFAULT_ACTIVE_COLOR)

    def url(self, row: int) -> str:
        return todoline.get_url(self._raw(row))

    def find(self, raw: str) -> list[int]:
        """Row numbers whose raw line equals raw exactly."""
        return [index for index, line in enumerate(self.rows()) if line == raw]

    def todo_file(self) -> str:
        return self.todo.todo_file_path()

    # -- changing ----------------------------------------------------------

    def _changed(self) -> None:
        self._rows = None

    def set_checked(self, row: int, checked: bool) -> None:
        """Mark the row as done or not done."""
        raw = self._raw(row)
        self.todo.update(raw, bool(checked), raw)
        self._changed()

    def set_text(self, row: int, text: str) -> None:
        """Replace the row's text, keeping its completion state."""
        raw = self._raw(row)
        self.todo.update(raw, raw.startswith("x"), text)
        self._changed()

    def add(self, text: str) -> None:
        """Add a new line; newlines become spaces so it stays one line."""
        self.todo.update("", False, text.replace("\n", " "))
        self._changed()

    def remove(self, text: str) -> None:
        self.todo.remove(text)
        self._changed()

    def archive(self) -> None:
        self.todo.archive()
        self._changed()

    def refresh(self) -> None:
        self.todo.refresh()
        self._changed()

    # -- undo --------------------------------------------------------------

    def undo(self) -> bool:
        """Step back one change and reread the files; False when nothing to undo."""
        if not self.todo.undo():
            return False
        self.refresh()
        return True

    def redo(self) -> bool:
        """Step forward one change and reread the files; False when nothing to redo."""
        if not self.todo.redo():
            return False
        self.refresh()
        return True

    def undo_possible(self) -> bool:
        return self.todo.undo_possible()

    def redo_possible(self) -> bool:
        return self.todo.redo_possible()