"""
Contains classes which are run in a separate thread.
"""

from __future__ import annotations

import logging
import sys
import threading
import time
from datetime import datetime
from typing import Callable

from PyQt6.QtCore import QThread, pyqtSignal

from noteflow import helpers


# noinspection PyUnresolvedReferences
class LoggingThread(QThread):
    """
    Used to collect logs.
    """

    #: Log messages are emitted to this signal.
    log_signal = pyqtSignal(str)
    #: When set, causes this thread to stop.
    stop_logging = threading.Event()
    #: Maps setting values to logging levels.
    LOG_LEVELS = {
        'debug': logging.DEBUG,
        'info': logging.INFO,
        'warning': logging.WARNING,
        'critical': logging.CRITICAL
    }

    def __init__(self, logging_level: str, log_stdout: bool = False, log_file: bool = True, log_gui: bool = True):
        """
        Initialises the logging thread.

        :param logging_level: the logging level which can be `debug`, `info`, `warning` or `critical`.
        :param log_stdout: if True, logs are sent to standard out.
        :param log_file: if True, logs are sent to file.
        :param log_gui: if True, logs are sent to a function which handles displaying logs in the GUI.
        """
        super().__init__()
        self.logging_level: str = logging_level
        self.log_stdout: bool = log_stdout
        self.log_file: bool = log_file
        self.log_gui: bool = log_gui
        self.logger: logging.Logger = logging.getLogger()
        self.setup_logging()

    def setup_logging(self) -> None:
        """
        Sets up the logging system as configured in the constructor.
        """
        log_file = datetime.now().strftime("NoteFlow_%Y%m%d-%H%M%S") + '.log'
        log_level = LoggingThread.LOG_LEVELS.get(self.logging_level, logging.INFO)
        log_format = '%(asctime)s %(levelname)s: %(message)s'

        logging.basicConfig(
            level=log_level,
            format=log_format,
        )
        self.logger.setLevel(log_level)
        if self.log_file:
            file_handler = logging.FileHandler(helpers.log_folder() / log_file)
            file_handler.setFormatter(logging.Formatter(log_format))
            self.logger.addHandler(file_handler)
        if self.log_stdout:
            self.logger.addHandler(logging.StreamHandler(sys.stdout))
        if self.log_gui:
            func_handler = helpers.FunctionHandler(lambda msg: self.log_signal.emit(msg))
            func_handler.setFormatter(logging.Formatter(log_format))
            self.logger.addHandler(func_handler)

    def set_logging_level(self, logging_level: str) -> None:
        """
        Changes the logging level.

        :param logging_level: the desired logging level.
        """
        self.logging_level = logging_level
        self.logger.setLevel(LoggingThread.LOG_LEVELS.get(logging_level, logging.INFO))

    def run(self) -> None:
        """
        Keeps the logging thread running until it is stopped.
        """
        while not self.stop_logging.is_set():
            time.sleep(1)


# noinspection PyUnresolvedReferences
class NoteTask(QThread):
    """
    Runs a single note operation (reload, create, edit or remove) away from the GUI thread, so that the window stays
    responsive while SQLite is busy.
    """

    #: Emitted with the operation's result when it finishes.
    result_signal = pyqtSignal(bool, str)
    #: Error messages are sent to this signal.
    error_signal = pyqtSignal(str)

    def __init__(self, description: str, operation: Callable[[], tuple[bool, str]]):
        """
        Initialises the task.

        :param description: what the task does, e.g. 'Creating note'. Used in log messages.
        :param operation: a function returning a ``(success, message)`` tuple, such as a bound ``NoteListState``
            method wrapped in a lambda.
        """
        super().__init__()
        self.description: str = description
        self.operation: Callable[[], tuple[bool, str]] = operation

    def run(self) -> None:
        """
        Runs the operation and reports the result.
        """
        logging.debug('{}...'.format(self.description))
        try:
            success, data = self.operation()
        except LookupError as e:
            success, data = False, '{0} failed: {1}'.format(self.description, e)
            logging.critical(data)
        if not success:
            self.error_signal.emit(data)
        self.result_signal.emit(success, data)
