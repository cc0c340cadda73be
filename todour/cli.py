"""Command-line front end: list, search, add, edit, complete and archive todo.txt lines."""

from __future__ import annotations

import argparse
import os
import shlex
import sys
import uuid
from typing import Iterable, Sequence, TextIO

from todour.search import apply_context_lock, build_filter, window_title
from todour.settings import (
    APPLICATION_NAME,
    DEFAULT_CONTEXT_LOCK,
    DEFAULT_SEARCH_NOT_CHAR,
    DEFAULT_SEARCH_STRING,
    KEY_CONTEXT_LOCK,
    KEY_DIRECTORY,
    KEY_SEARCH_NOT_CHAR,
    KEY_SEARCH_STRING,
    KEY_UUID,
    Settings,
    default_settings_path,
)
from todour.tablemodel import TodoTableModel
from todour.todofile import TodoTxt

QUIT_WORDS = frozenset({"quit", "exit"})


def _add_commands(sub: argparse._SubParsersAction, shell: bool = False) -> None:
    listing = sub.add_parser("list", help="show the todo list, optionally filtered")
    listing.add_argument("search", nargs="*", help="words to match; prefix a word with ! to exclude it")

    add = sub.add_parser("add", help="add a new todo line")
    add.add_argument("text", nargs="+", help="text of the new line")
    add.add_argument(
        "--lock",
        metavar="SEARCH",
        default=None,
        help="append the words of SEARCH that the text lacks",
    )

    done = sub.add_parser("done", help="mark a row as completed")
    done.add_argument("row", type=int, help="row number as shown by list")

    undone = sub.add_parser("undone", help="mark a row as not completed")
    undone.add_argument("row", type=int, help="row number as shown by list")

    edit = sub.add_parser("edit", help="replace the text of a row")
    edit.add_argument("row", type=int, help="row number as shown by list")
    edit.add_argument("text", nargs="+", help="new text")

    remove = sub.add_parser("remove", help="delete a row")
    remove.add_argument("row", type=int, help="row number as shown by list")

    sub.add_parser("archive", help="move completed lines to done.txt")
    sub.add_parser("refresh", help="read the files again")

    if shell:
        sub.add_parser("undo", help="undo the last change")
        sub.add_parser("redo", help="redo the last undone change")
    else:
        sub.add_parser("shell", help="read commands from standard input, with undo and redo")


def build_parser() -> argparse.ArgumentParser:
    """The parser for the command line."""
    parser = argparse.ArgumentParser(prog="todour", description="Manage a todo.txt list.")
    parser.add_argument("--settings", metavar="FILE", default=None, help="settings file to use")
    parser.add_argument(
        "-portable",
        "--portable",
        dest="portable",
        action="store_true",
        help="keep the settings file in the working directory",
    )
    parser.add_argument(
        "--directory", metavar="DIR", default=None, help="directory holding todo.txt"
    )
    sub = parser.add_subparsers(dest="command")
    _add_commands(sub)
    return parser


def _command_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="", add_help=False)
    sub = parser.add_subparsers(dest="command", required=True)
    _add_commands(sub, shell=True)
    return parser


def _print_rows(model: TodoTableModel, settings: Settings, search: str, out: TextIO) -> None:
    not_char = str(settings.get(KEY_SEARCH_NOT_CHAR, DEFAULT_SEARCH_NOT_CHAR) or DEFAULT_SEARCH_NOT_CHAR)
    pattern = build_filter(search, not_char)
    total = model.count()
    visible = 0
    for row in range(total):
        text = model.display_text(row)
        if not pattern.search(text):
            continue
        visible += 1
        mark = "x" if model.is_checked(row) else " "
        print(f"{row + 1:>3} [{mark}] {text}", file=out)
    print(window_title(APPLICATION_NAME, visible, total), file=out)


def _lock_search(args: argparse.Namespace, settings: Settings) -> str | None:
    if args.lock is not None:
        return args.lock
    if settings.get(KEY_CONTEXT_LOCK, DEFAULT_CONTEXT_LOCK):
        return str(settings.get(KEY_SEARCH_STRING, DEFAULT_SEARCH_STRING) or "")
    return None


def _execute(model: TodoTableModel, settings: Settings, args: argparse.Namespace, out: TextIO) -> None:
    command = args.command or "list"
    if command == "list":
        search = " ".join(getattr(args, "search", []) or [])
        settings.set(KEY_SEARCH_STRING, search)
        _print_rows(model, settings, search, out)
    elif command == "add":
        text = " ".join(args.text)
        search = _lock_search(args, settings)
        if search is not None:
            text = apply_context_lock(text, search)
        model.add(text)
    elif command == "done":
        model.set_checked(args.row - 1, True)
    elif command == "undone":
        model.set_checked(args.row - 1, False)
    elif command == "edit":
        model.set_text(args.row - 1, " ".join(args.text))
    elif command == "remove":
        rows = model.rows()
        index = args.row - 1
        if not 0 <= index < len(rows):
            raise IndexError(f"row {args.row} does not exist")
        model.remove(rows[index])
    elif command == "archive":
        model.archive()
    elif command == "refresh":
        model.refresh()
    elif command == "undo":
        if not model.undo():
            print("nothing to undo", file=out)
    elif command == "redo":
        if not model.redo():
            print("nothing to redo", file=out)
    else:
        raise ValueError(f"unknown command {command!r}")


def _shell(model: TodoTableModel, settings: Settings, lines: Iterable[str], out: TextIO) -> int:
    parser = _command_parser()
    status = 0
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        try:
            words = shlex.split(line)
        except ValueError as exc:
            print(f"error: {exc}", file=sys.stderr)
            status = 1
            continue
        if words[0] in QUIT_WORDS:
            break
        try:
            args = parser.parse_args(words)
        except SystemExit:
            status = 1
            continue
        try:
            _execute(model, settings, args, out)
        except IndexError as exc:
            print(f"error: {exc}", file=sys.stderr)
            status = 1
    return status


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command line; returns the exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)

    settings = Settings(args.settings or default_settings_path(args.portable))
    if KEY_UUID not in settings:
        settings.set(KEY_UUID, str(uuid.uuid4()))

    directory = args.directory or str(settings.get(KEY_DIRECTORY, "") or "")
    if not directory:
        parser.error("no todo directory given or configured")
    if not os.path.isdir(directory):
        parser.error(f"{directory} is not a directory")

    out = sys.stdout
    with TodoTxt(settings, args.directory) as todo:
        model = TodoTableModel(todo, settings)
        if args.command == "shell":
            return _shell(model, settings, sys.stdin, out)
        try:
            _execute(model, settings, args, out)
        except IndexError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())