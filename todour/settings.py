"""Persistent application settings, their names and their default values."""

from __future__ import annotations

import json
import os
import sys
import tempfile
from enum import IntEnum
from pathlib import Path
from typing import Any, Iterable

ORGANIZATION_NAME = "Nerdur"
APPLICATION_NAME = "Todour"
SETTINGS_FILENAME = "Todour.json"

# Names of settings
KEY_DUE = "due"
KEY_DUE_WARNING = "due_warning"
KEY_DUE_WARNING_COLOR = "due_warning_color"
KEY_DUE_LATE_COLOR = "due_late_color"
KEY_TRAY_ENABLED = "tray_enabled"
KEY_HOTKEY = "hotkey"
KEY_SHOW_ALL = "show_all"
KEY_HOTKEY_ENABLE = "hotkey_enable"
KEY_SHOW_DATES = "show_dates"
KEY_DELETED_FILE = "deleted_file"
KEY_SEARCH_STRING = "search_string"
KEY_THRESHOLD = "threshold"
KEY_THRESHOLD_LABELS = "threshold_labels"
KEY_THRESHOLD_INACTIVE = "threshold_inactive"
KEY_AUTOREFRESH = "autorefresh"
KEY_GEOMETRY = "geometry"
KEY_SETTINGS_GEOMETRY = "settings_geometry"
KEY_SAVESTATE = "savestate"
KEY_MAXIMIZED = "maximized"
KEY_LIVE_SEARCH = "liveSearch"
KEY_SORT_ALPHA = "sort_alpha"
KEY_DIRECTORY = "directory"
KEY_INACTIVE = "inactive"
KEY_SEPARATE_INACTIVES = "separateinactive"
KEY_ACTIVE_COLOR = "activecolor"
KEY_INACTIVE_COLOR = "inactivecolor"
KEY_ACTIVE_FONT = "activefont"
KEY_INACTIVE_FONT = "inactivefont"
KEY_DATES = "dates"
KEY_CONTEXT_LOCK = "context_lock"
KEY_CHECK_UPDATES = "check_updates"
KEY_LAST_UPDATE_CHECK = "last_update_check"
KEY_PRIO_ON_CLOSE = "prio_on_close"
KEY_FONT_SIZE = "font_size"
KEY_REMOVE_DOUBLETS = "remove_doublets"
KEY_UUID = "uuid"
KEY_STAY_ON_TOP = "stay_on_top"
KEY_SEARCH_NOT_CHAR = "search_not_char"
KEY_DEFAULT_THRESHOLD = "default_threshold"
KEY_BUSINESS_DAYS = "business_days"
KEY_DUE_AS_THRESHOLD = "due_as_threshold"

# Default values
DEFAULT_HOTKEY = "Ctrl+Alt+t"
DEFAULT_HOTKEY_ENABLE = False
DEFAULT_SHOW_DATES = False
DEFAULT_DELETED_FILE = False
DEFAULT_SEARCH_STRING = ""
DEFAULT_THRESHOLD = False
DEFAULT_THRESHOLD_LABELS = False
DEFAULT_THRESHOLD_INACTIVE = False
DEFAULT_AUTOREFRESH = True
DEFAULT_LIVE_SEARCH = True
DEFAULT_DIRECTORY = ""
DEFAULT_INACTIVE = "LATER:;WAIT:"
DEFAULT_SEPARATE_INACTIVES = False
DEFAULT_ACTIVE_COLOR = 0xFF000000
DEFAULT_INACTIVE_COLOR = 0xFF555555
DEFAULT_DATES = False
DEFAULT_CONTEXT_LOCK = False
DEFAULT_TRAY_ENABLED = False
DEFAULT_SHOW_ALL = False
DEFAULT_DUE = False
DEFAULT_DUE_WARNING = 3
DEFAULT_DUE_WARNING_COLOR = 0xFFFFA500
DEFAULT_DUE_LATE_COLOR = 0xFFFF0000
DEFAULT_CHECK_UPDATES = True
DEFAULT_PRIO_ON_CLOSE = 0
DEFAULT_REMOVE_DOUBLETS = False
DEFAULT_UUID = "0000-0000-0000-0000"
DEFAULT_STAY_ON_TOP = False
DEFAULT_SEARCH_NOT_CHAR = "!"
DEFAULT_DEFAULT_THRESHOLD = "due:"
DEFAULT_BUSINESS_DAYS_FIRST = 1
DEFAULT_BUSINESS_DAYS_LAST = 5
DEFAULT_DUE_AS_THRESHOLD = False

DEFAULT_BUSINESS_DAYS = tuple(range(DEFAULT_BUSINESS_DAYS_FIRST, DEFAULT_BUSINESS_DAYS_LAST + 1))


class PrioOnClose(IntEnum):
    """What happens to a priority when its task is completed."""

    REMOVE = 0
    MOVE = 1
    TAG = 2


class Settings:
    """A key/value store kept as a JSON file.

    With a path, every change is written to disk at once; without one the
    settings live in memory only.
    """

    def __init__(self, path: str | os.PathLike[str] | None = None) -> None:
        self.path = Path(path) if path is not None else None
        self._values: dict[str, Any] = {}
        if self.path is not None and self.path.exists():
            self._values = self._load(self.path)

    @staticmethod
    def _load(path: Path) -> dict[str, Any]:
        try:
            data = json.loads(path.read_text(encoding="utf-8") or "{}")
        except json.JSONDecodeError as exc:
            raise ValueError(f"settings file {path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ValueError(f"settings file {path} does not hold an object")
        return data

    def get(self, key: str, default: Any = None) -> Any:
        """Return the stored value for key, or default when it is not set."""
        return self._values.get(key, default)

    def set(self, key: str, value: Any) -> None:
        """Store value under key."""
        self._values[key] = value
        self.save()

    def __contains__(self, key: object) -> bool:
        return key in self._values

    def clear(self) -> None:
        """Forget every stored value."""
        self._values.clear()
        self.save()

    def save(self) -> None:
        """Write the settings to their file, if they have one."""
        if self.path is None:
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(dir=self.path.parent, prefix=".settings-", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as handle:
                json.dump(self._values, handle, indent=2, sort_keys=True)
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def business_days(self) -> list[int]:
        """Weekdays (1=Monday .. 7=Sunday) that count as business days."""
        stored = self.get(KEY_BUSINESS_DAYS) or []
        days = sorted({int(day) for day in stored if 1 <= int(day) <= 7})
        return days or list(DEFAULT_BUSINESS_DAYS)

    def set_business_days(self, days: Iterable[int]) -> None:
        """Store the business days; each must be a weekday number from 1 to 7."""
        chosen = sorted({int(day) for day in days})
        bad = [day for day in chosen if not 1 <= day <= 7]
        if bad:
            raise ValueError(f"business days must be between 1 and 7, got {bad}")
        self.set(KEY_BUSINESS_DAYS, chosen)


def default_settings_path(portable: bool = False) -> Path:
    """Where the settings file lives: the working directory when portable."""
    if portable:
        return Path.cwd() / SETTINGS_FILENAME
    if os.name == "nt":
        base = Path(os.environ.get("APPDATA") or Path.home() / "AppData" / "Roaming")
    elif sys.platform == "darwin":
        base = Path.home() / "Library" / "Preferences"
    else:
        base = Path(os.environ.get("XDG_CONFIG_HOME") or Path.home() / ".config")
    return base / ORGANIZATION_NAME / SETTINGS_FILENAME