"""
This is a helper file shared by the note model and the GUI.
"""

from __future__ import annotations

import json
import logging
import os
import sys
from datetime import datetime, timedelta
from pathlib import Path
from typing import Callable


def _default_data_location() -> Path:
    """
    Get the platform-specific folder where NoteFlow stores its data.

    :return: path to the Application Data folder.
    """
    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.path.expanduser("~")
        return Path(base) / "NoteFlow"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "NoteFlow"
    return Path.home() / ".local" / "share" / "NoteFlow"


DATA_LOCATION: Path = _default_data_location()  #: Location where application data is stored.
DB_NAME: str = "noteflow.db"  #: File name of the SQLite database.
SETTINGS_FILE: str = "conf.json"  #: File name of the settings file.

#: Default application settings
SETTINGS_DEFAULTS: dict = {
    'log_level': 'info',
    'database': '',
    'theme': 'auto'
}

#: Shown when a note is saved without a title.
EMPTY_TITLE_MESSAGE: str = 'Note title cannot be empty.'


def settings_folder() -> Path:
    """
    Get the location of the Application Data folder for NoteFlow.

    :return: path to the Application Data folder.
    """
    folder = DATA_LOCATION
    folder.mkdir(parents=True, exist_ok=True)
    return folder


def db_folder(settings: dict | None = None) -> Path:
    """
    Get the location of the SQLite database file. The ``database`` setting, if given, overrides the default location.

    :param settings: the loaded application settings.

    :return: path to the SQLite database file.
    """
    if settings and settings.get('database'):
        return Path(settings['database'])
    return settings_folder() / DB_NAME


def log_folder() -> Path:
    """
    Get the location of the ``logs`` folder within NoteFlow's Application Data folder.

    :return: path to the ``logs`` folder.
    """
    folder = DATA_LOCATION / 'logs/'
    folder.mkdir(parents=True, exist_ok=True)
    return folder


def bootstrap_settings() -> None:
    """
    Create configuration file if it doesn't exist.
    """
    conf_file = settings_folder() / SETTINGS_FILE
    if not os.path.exists(conf_file):
        with open(conf_file, 'w') as fp:
            json.dump(SETTINGS_DEFAULTS, fp, indent=2)


def load_settings() -> dict:
    """
    Load settings from the configuration file. Values missing from the file fall back to ``SETTINGS_DEFAULTS``.

    :return: the application settings.
    """
    settings = dict(SETTINGS_DEFAULTS)
    conf_file = settings_folder() / SETTINGS_FILE
    if not os.path.exists(conf_file):
        return settings
    try:
        with open(conf_file) as fp:
            stored = json.load(fp)
    except (OSError, ValueError) as e:
        logging.critical('Your configuration file at {0} is invalid, using defaults: {1}'.format(conf_file, e))
        return settings
    if isinstance(stored, dict):
        settings.update(stored)
    return settings


def validate_title(title: str | None) -> tuple[bool, str]:
    """
    Checks that a note title is present once surrounding whitespace is removed.

    :param title: the title entered by the user.

    :returns:

        -success (:py:class:`bool`) - true if the title can be saved.

        -data (:py:class:`str`) - the trimmed title, or a user-visible error message.

    """
    trimmed = (title or '').strip()
    if not trimmed:
        return False, EMPTY_TITLE_MESSAGE
    return True, trimmed


class DateUtil:
    """
    Utility class for converting between ``datetime`` objects and the epoch milliseconds stored in SQLite.
    """

    DISPLAY_DATETIME = "%d %b %Y, %H:%M"

    @staticmethod
    def now() -> datetime:
        """
        Get the current local time, truncated to millisecond precision so it survives a round-trip through SQLite.

        :return: the current time.
        """
        now = datetime.now()
        return now.replace(microsecond=now.microsecond - now.microsecond % 1000)

    @staticmethod
    def to_epoch_ms(obj: datetime) -> int:
        """
        Convert a naive local ``datetime`` to milliseconds since the epoch.

        :param obj: the date/time to convert.

        :return: milliseconds since the epoch.
        """
        seconds = int(obj.replace(microsecond=0).timestamp())
        return seconds * 1000 + obj.microsecond // 1000

    @staticmethod
    def from_epoch_ms(value: int) -> datetime:
        """
        Convert milliseconds since the epoch to a naive local ``datetime``.

        :param value: milliseconds since the epoch.

        :return: the corresponding local date/time.
        """
        seconds, millis = divmod(int(value), 1000)
        return datetime.fromtimestamp(seconds) + timedelta(milliseconds=millis)

    @staticmethod
    def display(obj: datetime) -> str:
        """
        Format a date/time for display in the note list.

        :param obj: the date/time to format.

        :return: the formatted date, e.g. ``24 May 2024, 09:54``.
        """
        return obj.strftime(DateUtil.DISPLAY_DATETIME)


class FunctionHandler(logging.Handler):
    def __init__(self, func: Callable):
        logging.Handler.__init__(self)
        self.func = func

    def emit(self, record):
        msg = self.format(record)
        self.func(msg)
