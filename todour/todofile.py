"""A todo.txt directory: reading, sorting, editing and undoing changes to its files."""

from __future__ import annotations

import logging
import os
import re
import shutil
import tempfile
import uuid
from datetime import date
from pathlib import Path
from typing import Iterable

from todour import todoline
from todour.settings import (
    DEFAULT_DEFAULT_THRESHOLD,
    DEFAULT_PRIO_ON_CLOSE,
    DEFAULT_REMOVE_DOUBLETS,
    DEFAULT_SHOW_ALL,
    DEFAULT_UUID,
    KEY_DATES,
    KEY_DEFAULT_THRESHOLD,
    KEY_DELETED_FILE,
    KEY_DIRECTORY,
    KEY_DUE,
    KEY_DUE_AS_THRESHOLD,
    KEY_INACTIVE,
    KEY_PRIO_ON_CLOSE,
    KEY_REMOVE_DOUBLETS,
    KEY_SEPARATE_INACTIVES,
    KEY_SHOW_ALL,
    KEY_SORT_ALPHA,
    KEY_THRESHOLD,
    KEY_THRESHOLD_INACTIVE,
    KEY_THRESHOLD_LABELS,
    KEY_UUID,
    PrioOnClose,
    Settings,
)

log = logging.getLogger(__name__)

TODO_FILENAME = "todo.txt"
DONE_FILENAME = "done.txt"
DELETED_FILENAME = "deleted.txt"

THRESHOLD_SHORTHAND_RE = re.compile(r"(t:\+\d+[dwmypb])")
DUE_SHORTHAND_RE = re.compile(r"(due:\+\d+[dwmypb])")
RECURRENCE_RE = re.compile(r"(rec:\+?\d+[dwmybp])")


class TodoTxt:
    """The todo.txt, done.txt and deleted.txt files of one directory.

    Every change to the files is preceded by a snapshot of them, so that
    changes can be undone and redone.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        directory: str | os.PathLike[str] | None = None,
    ) -> None:
        self.settings = settings if settings is not None else Settings()
        self._directory = ""
        if directory:
            self.set_directory(directory)
        self._todo: list[str] = []
        self._active_projects: set[str] = set()
        self._active_contexts: set[str] = set()
        self._undo_buffer: list[str] = []
        self._undo_pointer = 0
        self._tempdir: tempfile.TemporaryDirectory[str] | None
        try:
            self._tempdir = tempfile.TemporaryDirectory(prefix="todour-undo-")
        except OSError as exc:
            log.warning("could not create undo directory: %s", exc)
            self._tempdir = None

    # -- paths -------------------------------------------------------------

    def set_directory(self, directory: str | os.PathLike[str]) -> None:
        """Use directory instead of the one in the settings."""
        self._directory = os.fspath(directory)

    def _path_for(self, name: str) -> str:
        folder = self._directory or str(self.settings.get(KEY_DIRECTORY, "") or "")
        if not folder.endswith(("/", "\\")):
            folder += "/"
        return folder + name

    def todo_file_path(self) -> str:
        return self._path_for(TODO_FILENAME)

    def done_file_path(self) -> str:
        return self._path_for(DONE_FILENAME)

    def deleted_file_path(self) -> str:
        return self._path_for(DELETED_FILENAME)

    # -- settings helpers --------------------------------------------------

    def _flag(self, key: str, default: bool = False) -> bool:
        return bool(self.settings.get(key, default))

    def _prio_on_close(self) -> PrioOnClose:
        return PrioOnClose(int(self.settings.get(KEY_PRIO_ON_CLOSE, DEFAULT_PRIO_ON_CLOSE)))

    def _inactive_setting(self) -> str:
        return str(self.settings.get(KEY_INACTIVE, "") or "")

    # -- reading -----------------------------------------------------------

    def parse(self) -> None:
        """Read the files again, snapshotting them first if they changed."""
        self._save_to_undo()
        self._active_projects.clear()
        self._active_contexts.clear()
        lines: list[str] = []
        self._slurp_into(self.todo_file_path(), lines)
        if self._flag(KEY_SHOW_ALL, DEFAULT_SHOW_ALL):
            self._slurp_into(self.done_file_path(), lines)
        self._todo = lines

        if self._flag(KEY_THRESHOLD_LABELS):
            for line in lines:
                if line.startswith("x "):
                    continue
                self._active_projects.update(todoline.PROJECT_RE.findall(line))
                self._active_contexts.update(todoline.CONTEXT_RE.findall(line))

    def refresh(self) -> None:
        """Read the files again."""
        self.parse()

    def slurp(self, filename: str | os.PathLike[str]) -> list[str]:
        """The lines of a file; an unreadable file gives no lines."""
        lines: list[str] = []
        self._slurp_into(filename, lines)
        return lines

    def _slurp_into(self, filename: str | os.PathLike[str], content: list[str]) -> None:
        remove_doublets = self._flag(KEY_REMOVE_DOUBLETS, DEFAULT_REMOVE_DOUBLETS)
        try:
            with open(filename, encoding="utf-8") as handle:
                for raw in handle:
                    line = raw.rstrip("\n")
                    if remove_doublets and line in content:
                        continue
                    content.append(line)
        except OSError:
            return

    # -- views -------------------------------------------------------------

    def get_active(self) -> list[str]:
        """Lines read by the last parse that are neither empty nor completed."""
        return [line for line in self._todo if line and not line.startswith("x")]

    def get_all(self) -> list[str]:
        """Lines to show, in order: priorities, open, inactive, completed."""
        setting = self._inactive_setting()
        inactives = setting.split(";") if ";" in setting else []
        separate = self._flag(KEY_SEPARATE_INACTIVES)
        threshold_inactive = self._flag(KEY_THRESHOLD_INACTIVE)

        prio: set[str] = set()
        open_lines: list[str] = []
        inactive: list[str] = []
        done: list[str] = []
        for line in self._todo:
            if not line:
                continue
            inact = any(marker in line for marker in inactives)
            if self.threshold_hide(line):
                if not threshold_inactive:
                    continue
                inact = True

            has_priority = len(line) > 2 and line[0] == "(" and line[2] == ")"
            if not (inact and separate) and has_priority:
                prio.add(line)
            elif line[0] == "x":
                done.append(line)
            elif inact:
                inactive.append(line)
            else:
                open_lines.append(line)

        if self._flag(KEY_SORT_ALPHA):
            for group in (open_lines, inactive, done):
                group.sort(key=todoline.sort_key)

        return [*sorted(prio), *open_lines, *inactive, *done]

    def is_inactive(self, text: str) -> bool:
        """True for lines holding an inactive marker or held back by a threshold."""
        setting = self._inactive_setting()
        if not setting:
            return False
        if any(marker in text for marker in setting.split(";")):
            return True
        if self._flag(KEY_THRESHOLD_INACTIVE):
            return self.threshold_hide(text)
        return False

    def threshold_hide(self, text: str) -> bool:
        """True when a threshold says the line should not be shown yet."""
        today = self.today()
        if self._flag(KEY_THRESHOLD):
            if any(td > today for td in todoline.threshold_dates(text)):
                return True
        if self._flag(KEY_DUE_AS_THRESHOLD):
            if any(td > today for td in todoline.due_dates(text)):
                return True
        if self._flag(KEY_THRESHOLD_LABELS):
            if any(p in self._active_projects for p in todoline.THRESHOLD_PROJECT_RE.findall(text)):
                return True
            if any(c in self._active_contexts for c in todoline.THRESHOLD_CONTEXT_RE.findall(text)):
                return True
        return False

    def due_in(self, text: str) -> int | None:
        """Days until the line is due, or None when due dates are off or absent."""
        if not self._flag(KEY_DUE):
            return None
        return todoline.due_in(text)

    def today(self) -> str:
        return date.today().strftime(todoline.DATE_FORMAT)

    def relative_date(self, shortform: str, base: date | None = None) -> str:
        """Resolve a date shorthand, counting business days as the settings say."""
        return todoline.relative_date(shortform, base, self.settings.business_days())

    # -- writing -----------------------------------------------------------

    def write(self, filename: str | os.PathLike[str], content: Iterable[str]) -> None:
        """Replace a file with the given lines, snapshotting the files first."""
        self._undo_pointer = 0
        self._save_to_undo()
        with open(filename, "w", encoding="utf-8") as handle:
            handle.write("".join(f"{line}\n" for line in content))

    def _shift_date(self, rec_add: str, old: str, strict: bool) -> str:
        base = None
        if strict:
            try:
                base = date.fromisoformat(old)
            except ValueError:
                base = None
        return self.relative_date(rec_add, base)

    def _complete(self, line: str) -> tuple[str, str]:
        """The completed form of line and the follow-up task its recurrence asks for."""
        todo = todoline.parse_line(line)
        todo.checked = True
        todo.closed_date = self.today() + " " if self._flag(KEY_DATES) else ""

        additional = ""
        match = RECURRENCE_RE.search(todo.text)
        if match:
            rec_add = match.group(1)[4:]
            strict = rec_add.startswith("+")
            if not strict:
                rec_add = "+" + rec_add
            additional = todo.priority + todo.text
            if not todoline.THRESHOLD_DATE_RE.search(todo.text) and not todoline.DUE_DATE_RE.search(
                todo.text
            ):
                default_threshold = str(
                    self.settings.get(KEY_DEFAULT_THRESHOLD, DEFAULT_DEFAULT_THRESHOLD)
                )
                additional += " " + default_threshold + self.today()

            for old_t in todoline.threshold_dates(additional):
                new_date = self._shift_date(rec_add, old_t, strict)
                additional = additional.replace("t:" + old_t, "t:" + new_date)
            due = todoline.DUE_DATE_RE.search(additional)
            if due:
                old_due = due.group(1)
                new_date = self._shift_date(rec_add, old_due, strict)
                additional = additional.replace("due:" + old_due, "due:" + new_date)

        return todoline.format_line(todo, self._prio_on_close()), additional

    def update(self, row: str, checked: bool, new_row: str) -> None:
        """Change row in todo.txt.

        An empty row adds new_row; an empty new_row removes row. Otherwise
        row is checked, unchecked or replaced by new_row. Completing a
        recurring task adds its next occurrence.
        """
        todo_file = self.todo_file_path()
        data = self.slurp(todo_file)
        additional = ""

        if self._flag(KEY_THRESHOLD):
            match = THRESHOLD_SHORTHAND_RE.search(new_row)
            if match:
                short = match.group(1)
                new_row = new_row.replace(short, "t:" + self.relative_date(short[2:]))
        if self._flag(KEY_DUE):
            match = DUE_SHORTHAND_RE.search(new_row)
            if match:
                short = match.group(1)
                new_row = new_row.replace(short, "due:" + self.relative_date(short[4:]))

        prio_on_close = self._prio_on_close()
        if not row:
            todo = todoline.parse_line(new_row)
            if self._flag(KEY_DATES):
                todo.created_date = self.today() + " "
            data.append(todoline.format_line(todo, prio_on_close))
        elif row in data:
            index = data.index(row)
            current = data[index]
            if not new_row:
                del data[index]
            elif checked and not current.startswith("x "):
                data[index], additional = self._complete(current)
            elif not checked and current.startswith("x "):
                todo = todoline.parse_line(current)
                todo.checked = False
                todo.closed_date = ""
                data[index] = todoline.format_line(todo, prio_on_close)
            else:
                todo = todoline.parse_line(row)
                replacement = todoline.parse_line(new_row)
                todo.priority = replacement.priority
                todo.text = replacement.text
                todo.created_date = replacement.created_date
                todo.closed_date = replacement.closed_date
                data[index] = todoline.format_line(todo, prio_on_close)

        self.write(todo_file, data)
        if additional:
            self.update("", False, additional)
        self.parse()

    def remove(self, line: str) -> None:
        """Remove line, keeping it in deleted.txt when the settings ask for that."""
        if self._flag(KEY_DELETED_FILE):
            deleted_file = self.deleted_file_path()
            deleted = self.slurp(deleted_file)
            deleted.append(line)
            self.write(deleted_file, deleted)
        self.update(line, False, "")

    def archive(self) -> None:
        """Move completed lines from todo.txt to done.txt."""
        todo_file = self.todo_file_path()
        done_file = self.done_file_path()
        remaining: list[str] = []
        done = self.slurp(done_file)
        for line in self.slurp(todo_file):
            (done if line.startswith("x") else remaining).append(line)
        self.write(todo_file, remaining)
        self.write(done_file, done)
        self.parse()

    # -- undo --------------------------------------------------------------

    def _undo_dir(self) -> Path:
        if self._tempdir is not None:
            return Path(self._tempdir.name)
        ident = str(self.settings.get(KEY_UUID, DEFAULT_UUID))
        base = str(self.settings.get(KEY_DIRECTORY, "") or "")
        folder = Path(base + ".todour_undo_" + ident)
        folder.mkdir(parents=True, exist_ok=True)
        return folder

    def _snapshot_files(self) -> tuple[tuple[str, str], ...]:
        return (
            (TODO_FILENAME, self.todo_file_path()),
            (DONE_FILENAME, self.done_file_path()),
            (DELETED_FILENAME, self.deleted_file_path()),
        )

    def _needs_undo(self) -> bool:
        if not self._undo_buffer:
            return True
        current = self.slurp(self.todo_file_path())
        last = self.slurp(self._undo_buffer[-1] + TODO_FILENAME)
        return current != last

    def _save_to_undo(self) -> None:
        if self._undo_pointer or not self._needs_undo():
            return
        prefix = str(self._undo_dir() / f"{uuid.uuid4()}_")
        for name, source in self._snapshot_files():
            if os.path.isfile(source):
                shutil.copyfile(source, prefix + name)
        self._undo_buffer.append(prefix)
        log.debug("added %s to undo buffer (%d entries)", prefix, len(self._undo_buffer))

    def _restore_files(self, prefix: str) -> None:
        for name, target in self._snapshot_files():
            backup = prefix + name
            if os.path.isfile(backup):
                Path(target).unlink(missing_ok=True)
                shutil.copyfile(backup, target)

    def undo(self) -> bool:
        """Step back one snapshot; False when there is none."""
        if not self.undo_possible():
            return False
        self._undo_pointer += 1
        self._restore_files(self._undo_buffer[-1 - self._undo_pointer])
        return True

    def redo(self) -> bool:
        """Step forward one snapshot; False when there is none."""
        if not self.redo_possible():
            return False
        self._undo_pointer -= 1
        self._restore_files(self._undo_buffer[-1 - self._undo_pointer])
        return True

    def undo_possible(self) -> bool:
        return len(self._undo_buffer) > self._undo_pointer + 1

    def redo_possible(self) -> bool:
        return self._undo_pointer > 0

    # -- lifetime ----------------------------------------------------------

    def close(self) -> None:
        """Remove the undo snapshots."""
        if self._tempdir is not None:
            self._tempdir.cleanup()
            self._tempdir = None
            self._undo_buffer.clear()
            self._undo_pointer = 0

    def __enter__(self) -> TodoTxt:
        return self

    def __exit__(self, *args: object) -> None:
        self.close()