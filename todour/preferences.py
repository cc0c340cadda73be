"""The user-editable preferences, loaded from and saved to the settings store."""

from __future__ import annotations

from dataclasses import dataclass, field

from todour.settings import (
    DEFAULT_ACTIVE_COLOR,
    DEFAULT_AUTOREFRESH,
    DEFAULT_BUSINESS_DAYS,
    DEFAULT_CHECK_UPDATES,
    DEFAULT_DATES,
    DEFAULT_DEFAULT_THRESHOLD,
    DEFAULT_DELETED_FILE,
    DEFAULT_DIRECTORY,
    DEFAULT_DUE,
    DEFAULT_DUE_AS_THRESHOLD,
    DEFAULT_DUE_LATE_COLOR,
    DEFAULT_DUE_WARNING,
    DEFAULT_DUE_WARNING_COLOR,
    DEFAULT_HOTKEY_ENABLE,
    DEFAULT_INACTIVE,
    DEFAULT_INACTIVE_COLOR,
    DEFAULT_LIVE_SEARCH,
    DEFAULT_PRIO_ON_CLOSE,
    DEFAULT_REMOVE_DOUBLETS,
    DEFAULT_SEARCH_NOT_CHAR,
    DEFAULT_SEPARATE_INACTIVES,
    DEFAULT_SHOW_DATES,
    DEFAULT_THRESHOLD,
    DEFAULT_THRESHOLD_INACTIVE,
    DEFAULT_THRESHOLD_LABELS,
    DEFAULT_TRAY_ENABLED,
    KEY_ACTIVE_COLOR,
    KEY_ACTIVE_FONT,
    KEY_AUTOREFRESH,
    KEY_CHECK_UPDATES,
    KEY_DATES,
    KEY_DEFAULT_THRESHOLD,
    KEY_DELETED_FILE,
    KEY_DIRECTORY,
    KEY_DUE,
    KEY_DUE_AS_THRESHOLD,
    KEY_DUE_LATE_COLOR,
    KEY_DUE_WARNING,
    KEY_DUE_WARNING_COLOR,
    KEY_FONT_SIZE,
    KEY_HOTKEY_ENABLE,
    KEY_INACTIVE,
    KEY_INACTIVE_COLOR,
    KEY_INACTIVE_FONT,
    KEY_LIVE_SEARCH,
    KEY_PRIO_ON_CLOSE,
    KEY_REMOVE_DOUBLETS,
    KEY_SEARCH_NOT_CHAR,
    KEY_SEPARATE_INACTIVES,
    KEY_SHOW_DATES,
    KEY_THRESHOLD,
    KEY_THRESHOLD_INACTIVE,
    KEY_THRESHOLD_LABELS,
    KEY_TRAY_ENABLED,
    PrioOnClose,
    Settings,
)


@dataclass
class Preferences:
    """Every option the preferences form lets the user change."""

    directory: str = DEFAULT_DIRECTORY
    inactive: str = DEFAULT_INACTIVE
    autorefresh: bool = DEFAULT_AUTOREFRESH
    separate_inactives: bool = DEFAULT_SEPARATE_INACTIVES
    deleted_file: bool = DEFAULT_DELETED_FILE
    threshold: bool = DEFAULT_THRESHOLD
    threshold_labels: bool = DEFAULT_THRESHOLD_LABELS
    threshold_inactive: bool = DEFAULT_THRESHOLD_INACTIVE
    due_as_threshold: bool = DEFAULT_DUE_AS_THRESHOLD
    dates: bool = DEFAULT_DATES
    show_dates: bool = DEFAULT_SHOW_DATES
    live_search: bool = DEFAULT_LIVE_SEARCH
    hotkey_enable: bool = DEFAULT_HOTKEY_ENABLE
    tray_enabled: bool = DEFAULT_TRAY_ENABLED
    check_updates: bool = DEFAULT_CHECK_UPDATES
    due: bool = DEFAULT_DUE
    due_warning: int = DEFAULT_DUE_WARNING
    prio_on_close: PrioOnClose = PrioOnClose(DEFAULT_PRIO_ON_CLOSE)
    font_size: int = 0
    remove_doublets: bool = DEFAULT_REMOVE_DOUBLETS
    search_not_char: str = DEFAULT_SEARCH_NOT_CHAR
    default_threshold: str = DEFAULT_DEFAULT_THRESHOLD
    business_days: list[int] = field(default_factory=lambda: list(DEFAULT_BUSINESS_DAYS))
    active_color: int = DEFAULT_ACTIVE_COLOR
    inactive_color: int = DEFAULT_INACTIVE_COLOR
    active_font: str = ""
    inactive_font: str = ""
    due_warning_color: int = DEFAULT_DUE_WARNING_COLOR
    due_late_color: int = DEFAULT_DUE_LATE_COLOR


def normalize_directory(path: str) -> str:
    """The directory with a trailing '/' added when it lacks one."""
    return path if path.endswith("/") else path + "/"


_BOOL_FIELDS = {
    "autorefresh": (KEY_AUTOREFRESH, DEFAULT_AUTOREFRESH),
    "separate_inactives": (KEY_SEPARATE_INACTIVES, DEFAULT_SEPARATE_INACTIVES),
    "deleted_file": (KEY_DELETED_FILE, DEFAULT_DELETED_FILE),
    "threshold": (KEY_THRESHOLD, DEFAULT_THRESHOLD),
    "threshold_labels": (KEY_THRESHOLD_LABELS, DEFAULT_THRESHOLD_LABELS),
    "threshold_inactive": (KEY_THRESHOLD_INACTIVE, DEFAULT_THRESHOLD_INACTIVE),
    "due_as_threshold": (KEY_DUE_AS_THRESHOLD, DEFAULT_DUE_AS_THRESHOLD),
    "dates": (KEY_DATES, DEFAULT_DATES),
    "show_dates": (KEY_SHOW_DATES, DEFAULT_SHOW_DATES),
    "live_search": (KEY_LIVE_SEARCH, DEFAULT_LIVE_SEARCH),
    "hotkey_enable": (KEY_HOTKEY_ENABLE, DEFAULT_HOTKEY_ENABLE),
    "tray_enabled": (KEY_TRAY_ENABLED, DEFAULT_TRAY_ENABLED),
    "check_updates": (KEY_CHECK_UPDATES, DEFAULT_CHECK_UPDATES),
    "due": (KEY_DUE, DEFAULT_DUE),
    "remove_doublets": (KEY_REMOVE_DOUBLETS, DEFAULT_REMOVE_DOUBLETS),
}

_INT_FIELDS = {
    "due_warning": (KEY_DUE_WARNING, DEFAULT_DUE_WARNING),
    "font_size": (KEY_FONT_SIZE, 0),
    "active_color": (KEY_ACTIVE_COLOR, DEFAULT_ACTIVE_COLOR),
    "inactive_color": (KEY_INACTIVE_COLOR, DEFAULT_INACTIVE_COLOR),
    "due_warning_color": (KEY_DUE_WARNING_COLOR, DEFAULT_DUE_WARNING_COLOR),
    "due_late_color": (KEY_DUE_LATE_COLOR, DEFAULT_DUE_LATE_COLOR),
}

_STR_FIELDS = {
    "directory": (KEY_DIRECTORY, DEFAULT_DIRECTORY),
    "inactive": (KEY_INACTIVE, DEFAULT_INACTIVE),
    "default_threshold": (KEY_DEFAULT_THRESHOLD, DEFAULT_DEFAULT_THRESHOLD),
    "active_font": (KEY_ACTIVE_FONT, ""),
    "inactive_font": (KEY_INACTIVE_FONT, ""),
}


def load_preferences(settings: Settings) -> Preferences:
    """Read the preferences from settings, using defaults for what is not stored."""
    values: dict[str, object] = {}
    for name, (key, default) in _BOOL_FIELDS.items():
        values[name] = bool(settings.get(key, default))
    for name, (key, default) in _INT_FIELDS.items():
        values[name] = int(settings.get(key, default))
    for name, (key, default) in _STR_FIELDS.items():
        stored = settings.get(key, default)
        values[name] = default if stored is None else str(stored)
    values["prio_on_close"] = PrioOnClose(int(settings.get(KEY_PRIO_ON_CLOSE, DEFAULT_PRIO_ON_CLOSE)))
    not_char = str(settings.get(KEY_SEARCH_NOT_CHAR, DEFAULT_SEARCH_NOT_CHAR) or "")
    values["search_not_char"] = not_char[:1] or DEFAULT_SEARCH_NOT_CHAR
    values["business_days"] = settings.business_days()
    return Preferences(**values)  # type: ignore[arg-type]


def save_preferences(prefs: Preferences, settings: Settings) -> None:
    """Store prefs in settings.

    The directory gets a trailing '/'; an empty negation character leaves
    the stored one as it was.
    """
    settings.set(KEY_DIRECTORY, normalize_directory(prefs.directory))
    settings.set(KEY_INACTIVE, prefs.inactive)
    for name, (key, _default) in _BOOL_FIELDS.items():
        settings.set(key, bool(getattr(prefs, name)))
    for name, (key, _default) in _INT_FIELDS.items():
        settings.set(key, int(getattr(prefs, name)))
    settings.set(KEY_DEFAULT_THRESHOLD, prefs.default_threshold)
    settings.set(KEY_ACTIVE_FONT, prefs.active_font)
    settings.set(KEY_INACTIVE_FONT, prefs.inactive_font)
    settings.set(KEY_PRIO_ON_CLOSE, int(PrioOnClose(prefs.prio_on_close)))
    if prefs.search_not_char:
        settings.set(KEY_SEARCH_NOT_CHAR, prefs.search_not_char[0])
    settings.set_business_days(prefs.business_days)