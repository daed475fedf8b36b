"""
Main application entry point. Loads settings, opens the note store and displays the main window.
"""
import sys

from PyQt6.QtWidgets import QApplication

from noteflow import helpers
from noteflow.gui.viewmodel.noteflowapp import NoteFlowApp
from noteflow.notes.model.notelist import NoteListState
from noteflow.notes.model.notestore import NoteStore


def main():
    helpers.bootstrap_settings()
    settings = helpers.load_settings()
    store = NoteStore(helpers.db_folder(settings))

    app = QApplication(sys.argv)
    app.setApplicationName("NoteFlow")
    nf = NoteFlowApp(NoteListState(store), settings)
    exit_code = app.exec()
    store.close()
    sys.exit(exit_code)


if __name__ == "__main__":
    main()
