# todour

A manager for todo.txt style task lists. It reads and writes `todo.txt`,
`done.txt` and, if you turn it on, `deleted.txt` in a directory you choose.
It understands:

- priorities such as `(A)`, completion marks `x `, creation and completion dates;
- `+project` and `@context` labels;
- thresholds `t:YYYY-MM-DD` and threshold labels `t:+project` / `t:@context`,
  which hide a task until its date arrives or while the named project or
  context still has open tasks (settings `threshold` and `threshold_labels`);
- due dates `due:YYYY-MM-DD`, with a warning colour as the date approaches
  (setting `due`);
- relative dates in new or edited lines: `t:+3d`, `due:+2w`, `+1m`, `+1y`,
  business days `+5b` and the random "procrastinate" form `+4p`, resolved
  when the `threshold` or `due` setting is on;
- recurring tasks with `rec:+1w` (counted from the old date) or `rec:1w`
  (counted from today), which add the next occurrence when a task is completed;
- inactive markers (by default `LATER:` and `WAIT:`), optionally sorted into
  their own section;
- undo and redo of every change to the files.

## Installation

```
pip install todour
```

## Command line

```
todour --help
```

Options:

- `--directory DIR` – the directory holding `todo.txt` (otherwise the one in
  the settings is used; one of the two is required);
- `--settings FILE` – the settings file to use;
- `--portable` (or `-portable`) – keep the settings file, `Todour.json`, in the
  working directory instead of your user configuration directory.

Commands (row numbers are those printed by `list`, starting at 1):

```
todour --directory ~/todo list [WORD ...]   # show rows; a word starting with ! excludes
todour --directory ~/todo add Call the dentist +health due:+3d
todour --directory ~/todo add Buy milk --lock "@store"
todour --directory ~/todo done 2
todour --directory ~/todo undone 2
todour --directory ~/todo edit 3 New text for the row
todour --directory ~/todo remove 4
todour --directory ~/todo archive
todour --directory ~/todo refresh
todour --directory ~/todo shell
```

`list` prints each visible row with a `[x]` mark for completed ones, then a
line such as `Todour (3/5)` giving visible and total rows. The search words
are remembered; when the `context_lock` setting is on, `add` appends the
remembered search words that the new text lacks (`--lock` does the same with
the words given).

`shell` reads commands from standard input, one per line, with the same
commands as above plus `undo` and `redo`; `quit` or `exit` ends it and lines
starting with `#` are skipped. Undo snapshots live only as long as one run,
so `undo` and `redo` are available in the shell only.

## Library use

```python
from todour.settings import Settings
from todour.todofile import TodoTxt

settings = Settings("todour-settings.json")
with TodoTxt(settings, "/path/to/my/todo/") as todo:
    todo.update("", False, "Call the dentist +health due:2030-01-15")
    for line in todo.get_all():
        print(line)
    todo.undo()
```

- `todour.settings` – `Settings`, a key/value store kept as a JSON file (in
  memory only without a path), the setting names and defaults, `PrioOnClose`
  and `default_settings_path`.
- `todour.todoline` – line helpers: `parse_line`, `format_line`,
  `pretty_print`, `is_checked`, `get_url`, `relative_date`, `due_in`,
  `threshold_dates`, `due_dates`, `sort_key`.
- `todour.todofile` – `TodoTxt`: reading, ordering (`get_all`), `update`,
  `remove`, `archive`, `undo` and `redo`.
- `todour.tablemodel` – `TodoTableModel`, a row-numbered view with display
  text, `FontStyle` and ARGB colours for each row.
- `todour.search` – `build_filter` and `filter_rows` for search text,
  `apply_context_lock`, `window_title`, `update_check_due` and
  `is_newer_version`.
- `todour.preferences` – `Preferences`, `load_preferences` and
  `save_preferences`; this is how to store the todo directory and the other
  options in a settings file, since the command line has no command for it.

## What it does not do

There is no graphical window, tray icon or global hotkey, and the files are
not watched for outside changes: run `refresh` (or `list`, which reads them
anew) instead. `update_check_due` and `is_newer_version` only compare dates
and version numbers; the package never contacts a server to look for updates.

## Running the tests

```
pip install "todour[test]"
pytest
```