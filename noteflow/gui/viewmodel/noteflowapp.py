"""
Contains the main view controller for the main window of the app.
"""

from __future__ import annotations

import logging
from typing import Callable

import darkdetect
from PyQt6.QtCore import Qt, pyqtSignal
from PyQt6.QtWidgets import QDialog, QMainWindow, QMessageBox, QTableWidgetItem

from noteflow.gui.viewmodel import threadedtasks
from noteflow.gui.viewmodel.mainwindow import MainWindow
from noteflow.gui.viewmodel.noteeditor import NoteEditor
from noteflow.notes.model.note import Note
from noteflow.notes.model.notelist import NoteListState, Subscription

LIGHT_STYLE = """
QMainWindow, QDialog { background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
    stop:0 #8B4513, stop:0.33 #A0522D, stop:0.66 #CD853F, stop:1 #D2B48C); }
QLabel { color: white; }
QLabel#lbl_heading { font-size: 20px; font-weight: bold; }
QLabel#lbl_empty_title { font-size: 18px; font-weight: bold; }
QLineEdit, QPlainTextEdit, QTableWidget, QTextEdit { background: #FFF8F0; color: #4E342E; border-radius: 8px; }
QPushButton { background: #6D4C41; color: white; border-radius: 8px; padding: 6px 14px; }
QPushButton#btn_note_new { background: #5D4037; font-weight: bold; }
QPushButton#btn_note_delete { background: #C62828; }
"""

DARK_STYLE = """
QMainWindow, QDialog { background: qlineargradient(x1:0, y1:0, x2:1, y2:1,
    stop:0 #3E2723, stop:0.5 #4E342E, stop:1 #5D4037); }
QLabel { color: #EFEBE9; }
QLabel#lbl_heading { font-size: 20px; font-weight: bold; }
QLabel#lbl_empty_title { font-size: 18px; font-weight: bold; }
QLineEdit, QPlainTextEdit, QTableWidget, QTextEdit { background: #2B1D19; color: #EFEBE9; border-radius: 8px; }
QPushButton { background: #8D6E63; color: white; border-radius: 8px; padding: 6px 14px; }
QPushButton#btn_note_new { background: #A1887F; font-weight: bold; }
QPushButton#btn_note_delete { background: #B71C1C; }
"""


class NoteFlowApp(QMainWindow):
    """
    View controller for the main window. Renders ``NoteListState`` and routes user actions to it. Operations touching
    the database run one at a time on a :py:class:`threadedtasks.NoteTask`.
    """

    #: Forwards state-change events from whichever thread raised them to the GUI thread.
    state_signal = pyqtSignal(str)

    def __init__(self, state: NoteListState, settings: dict):
        """
        Initialise the window and load notes.

        :param state: the note list to display.
        :param settings: the application settings, as loaded by :py:func:`helpers.load_settings`.
        """
        super().__init__()
        self.settings: dict = settings
        self.state: NoteListState = state
        self.note_worker: threadedtasks.NoteTask | None = None
        self.ui: MainWindow = MainWindow()

        self.logging_worker = threadedtasks.LoggingThread(self.settings['log_level'], log_stdout=True)
        self.logging_worker.log_signal.connect(self.display_log)
        self.logging_worker.start()

        self.state_signal.connect(self.handle_state_change)
        self.subscription: Subscription = self.state.subscribe(lambda event, state: self.state_signal.emit(event))

        self.bootstrap_ui()
        self.ui.show()
        self.run_task('Loading notes', self.state.reload)

    # GENERAL DECLARATIONS ---------------------------------------------------------------------------------------------

    @staticmethod
    def _show_message(title: str, message: str, message_type: str = 'info') -> None:
        """
        Show an informational or error message.

        :param title: window title for the message dialog.
        :param message: message to show.
        :param message_type: the type of message. Either 'info' or 'error'.
        """
        msg = QMessageBox()
        msg.setIcon(QMessageBox.Icon.Critical if message_type == 'error' else QMessageBox.Icon.Information)
        msg.setWindowTitle(title)
        msg.setText(message)
        msg.setStandardButtons(QMessageBox.StandardButton.Ok)
        msg.exec()

    @staticmethod
    def _ask_question(title: str, message: str) -> int:
        """
        Show a question dialog.

        :param title: the window title for the dialog.
        :param message: message to show.
        """
        ask = QMessageBox()
        ask.setIcon(QMessageBox.Icon.Warning)
        ask.setText(message)
        ask.setWindowTitle(title)
        ask.setStandardButtons(QMessageBox.StandardButton.Yes | QMessageBox.StandardButton.No)
        ask.activateWindow()
        action = ask.exec()
        return action

    def style_sheet(self) -> str:
        """
        Get the style sheet for the configured theme. The ``auto`` theme follows the system's dark mode setting.

        :return: the Qt style sheet.
        """
        theme = self.settings.get('theme', 'auto')
        if theme == 'auto':
            theme = 'dark' if darkdetect.isDark() else 'light'
        return DARK_STYLE if theme == 'dark' else LIGHT_STYLE

    def bootstrap_ui(self) -> None:
        """
        Connect actions and apply the theme.
        """
        self.ui.setStyleSheet(self.style_sheet())
        self.ui.actionNew_Note.triggered.connect(self.handle_note_new)
        self.ui.actionRefresh.triggered.connect(lambda: self.run_task('Loading notes', self.state.reload))
        self.ui.actionToggle_Log.toggled.connect(self.ui.txt_log_display.setVisible)
        self.ui.actionQuit_NoteFlow.triggered.connect(self.ui.close)
        self.ui.closed_signal.connect(self.quit_gracefully)
        self.ui.txt_search.textChanged.connect(self.handle_search)
        self.ui.btn_note_new.clicked.connect(self.handle_note_new)
        self.ui.btn_note_edit.clicked.connect(self.handle_note_edit)
        self.ui.btn_note_delete.clicked.connect(self.handle_note_delete)
        self.ui.tbl_notes.cellDoubleClicked.connect(lambda row, col: self.handle_note_edit())
        self.ui.tbl_notes.itemSelectionChanged.connect(self.update_buttons)
        self.update_buttons()

    # NOTE LIST --------------------------------------------------------------------------------------------------------

    def handle_state_change(self, event: str) -> None:
        """
        Re-renders the window after the note list changes.

        :param event: one of the ``NoteListState.EVENT_*`` constants.
        """
        if event == NoteListState.EVENT_LOADING:
            self.update_status("Loading notes...")
            return
        if event == NoteListState.EVENT_LOAD_FAILED:
            self.update_status("Could not load notes.")
        else:
            self.update_status("{} notes.".format(len(self.state.all_notes)))
        self.display_notes_table()

    def display_notes_table(self) -> None:
        """
        Fill the notes table with the visible notes, or show the empty state if there are none.
        """
        notes = self.state.visible_notes
        if not notes:
            if self.state.query:
                self.ui.lbl_empty_title.setText("No matching notes")
                self.ui.lbl_empty_hint.setText("Try a different keyword")
            else:
                self.ui.lbl_empty_title.setText("No notes yet")
                self.ui.lbl_empty_hint.setText("Click New Note to create your first note")
            self.ui.stk_notes.setCurrentIndex(1)
        else:
            self.ui.stk_notes.setCurrentIndex(0)

        self.ui.tbl_notes.clearContents()
        self.ui.tbl_notes.setRowCount(len(notes))
        for row, note in enumerate(notes):
            title = QTableWidgetItem(note.title)
            title.setData(Qt.ItemDataRole.UserRole, note.id)
            self.ui.tbl_notes.setItem(row, 0, title)
            self.ui.tbl_notes.setItem(row, 1, QTableWidgetItem(note.preview()))
            self.ui.tbl_notes.setItem(row, 2, QTableWidgetItem(note.display_date()))
        self.ui.tbl_notes.resizeRowsToContents()
        self.update_buttons()

    def selected_note(self) -> Note | None:
        """
        Get the note selected in the notes table.

        :return: the selected note, or None if nothing is selected.
        """
        row = self.ui.tbl_notes.currentRow()
        if row < 0 or not self.ui.tbl_notes.selectedItems():
            return None
        item = self.ui.tbl_notes.item(row, 0)
        if item is None:
            return None
        return self.state.get(item.data(Qt.ItemDataRole.UserRole))

    def is_busy(self) -> bool:
        return self.note_worker is not None and self.note_worker.isRunning()

    def update_buttons(self) -> None:
        busy = self.is_busy()
        has_selection = self.selected_note() is not None
        self.ui.actionNew_Note.setEnabled(not busy)
        self.ui.actionRefresh.setEnabled(not busy)
        self.ui.btn_note_new.setEnabled(not busy)
        self.ui.btn_note_edit.setEnabled(not busy and has_selection)
        self.ui.btn_note_delete.setEnabled(not busy and has_selection)

    def handle_search(self, text: str) -> None:
        if text == '':
            self.state.clear_filter()
        else:
            self.state.filter(text)

    def handle_note_new(self) -> None:
        """
        Shows the editor for a new note and stores it when saved.
        """
        if self.is_busy():
            return
        editor = NoteEditor(parent=self.ui)
        if editor.exec() != QDialog.DialogCode.Accepted.value:
            return
        title, content = editor.title(), editor.content()
        self.run_task('Creating note', lambda: self.state.create(title, content))

    def handle_note_edit(self) -> None:
        """
        Shows the editor for the selected note and stores the changes when saved.
        """
        if self.is_busy():
            return
        note = self.selected_note()
        if note is None:
            return
        editor = NoteEditor(note, parent=self.ui)
        if editor.exec() != QDialog.DialogCode.Accepted.value:
            return
        title, content = editor.title(), editor.content()
        self.run_task('Updating note', lambda: self.state.edit(note.id, title, content))

    def handle_note_delete(self) -> None:
        """
        Deletes the selected note once the user confirms.
        """
        if self.is_busy():
            return
        note = self.selected_note()
        if note is None:
            return
        action = NoteFlowApp._ask_question("Delete Note", "Are you sure you want to delete this note?")
        if QMessageBox.StandardButton(action) != QMessageBox.StandardButton.Yes:
            return
        self.run_task('Deleting note', lambda: self.state.remove(note.id))

    # Thread Handling---------------------------------------------------------------------------------------------------
    def run_task(self, description: str, operation: Callable[[], tuple[bool, str]]) -> None:
        """
        Runs a note operation in a worker thread. Ignored if another operation is still running.

        :param description: what the operation does, shown in the status bar.
        :param operation: the operation to run.
        """
        if self.is_busy():
            logging.debug('Ignoring "{}" while another operation is running.'.format(description))
            self._show_message("NoteFlow", "{} was not done because another operation is still running. "
                                           "Please try again.".format(description))
            return
        self.update_status('{}...'.format(description))
        self.note_worker = threadedtasks.NoteTask(description, operation)
        self.note_worker.error_signal.connect(self.display_error)
        self.note_worker.finished.connect(self.update_buttons)
        self.note_worker.start()
        self.update_buttons()

    def update_status(self, status: str = "Ready.") -> None:
        """
        Updates the status bar.

        :param status: the status to set.
        """
        self.ui.statusBar().showMessage(status)

    def display_log(self, message: str) -> None:
        """
        Displays a log message.

        :param message: the message to display.
        """
        self.ui.txt_log_display.append(message)
        self.ui.txt_log_display.verticalScrollBar().setValue(self.ui.txt_log_display.verticalScrollBar().maximum())

    def display_error(self, message: str) -> None:
        """
        Displays an error message coming from a note operation.

        :param message: the message to display.
        """
        self._show_message("NoteFlow Error", message, 'error')

    def quit_gracefully(self) -> None:
        """
        Called when the main window closes. Stops listening to the note list, waits for any running note operation
        and stops the logging thread. The application quits once the window is gone; the entry point then closes the
        database.
        """
        self.subscription.cancel()
        if self.note_worker:
            self.note_worker.wait()
        if self.logging_worker:
            threadedtasks.LoggingThread.stop_logging.set()
            self.logging_worker.quit()
            self.logging_worker.wait()
